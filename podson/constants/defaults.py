"""Default values for query settings.

All default values used when a setting is not given on the command line
or through the environment.
"""

from typing import Final

from podson.constants.enums import OutputFormat

# ============================================================================
# Query defaults
# ============================================================================

WORKERS_DEFAULT: Final = 20
PAGE_SIZE_DEFAULT: Final = 500
INCLUDE_DAEMONSETS_DEFAULT: Final = False
READ_CACHE_HINT_DEFAULT: Final = False

# ============================================================================
# Strategy policy
# ============================================================================

# Below this share of matched nodes, querying node by node beats a full scan.
BY_NODE_RATIO_THRESHOLD: Final = 0.25

# ============================================================================
# Transport rate budget (multipliers applied to the worker count)
# ============================================================================

QPS_PER_WORKER: Final = 3
BURST_PER_QPS: Final = 3

# ============================================================================
# Output defaults
# ============================================================================

OUTPUT_FORMAT_DEFAULT: Final = OutputFormat.TABLE

__all__ = [
    "BURST_PER_QPS",
    "BY_NODE_RATIO_THRESHOLD",
    "INCLUDE_DAEMONSETS_DEFAULT",
    "OUTPUT_FORMAT_DEFAULT",
    "PAGE_SIZE_DEFAULT",
    "QPS_PER_WORKER",
    "READ_CACHE_HINT_DEFAULT",
    "WORKERS_DEFAULT",
]
