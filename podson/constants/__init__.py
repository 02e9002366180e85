"""Constants module for podson.

Centralized constants organized by domain:
- enums.py: All Enum class definitions
- values.py: Kubernetes API paths, kinds and names
- timeouts.py: Timeout values
- limits.py: Validation ranges
- defaults.py: Default values for settings and the strategy policy
"""

from podson.constants.defaults import (
    BY_NODE_RATIO_THRESHOLD,
    PAGE_SIZE_DEFAULT,
    WORKERS_DEFAULT,
)
from podson.constants.enums import OutputFormat, QueryStrategy, SelectorOperator
from podson.constants.limits import MAX_WORKERS
from podson.constants.timeouts import CLUSTER_REQUEST_TIMEOUT
from podson.constants.values import APP_NAME, DAEMONSET_OWNER_KIND

__all__ = [
    # Application
    "APP_NAME",
    # Policy
    "BY_NODE_RATIO_THRESHOLD",
    # Timeouts
    "CLUSTER_REQUEST_TIMEOUT",
    "DAEMONSET_OWNER_KIND",
    # Limits
    "MAX_WORKERS",
    "PAGE_SIZE_DEFAULT",
    "WORKERS_DEFAULT",
    # Enums
    "OutputFormat",
    "QueryStrategy",
    "SelectorOperator",
]
