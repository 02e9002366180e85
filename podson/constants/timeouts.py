"""Timeout constants.

All timeout values for cluster API requests and the kubectl process.
"""

from typing import Final

# ============================================================================
# API/Cluster timeouts (string format for kubectl)
# ============================================================================

CLUSTER_REQUEST_TIMEOUT: Final = "30s"

# Process-level command timeout floor (seconds). The effective process timeout
# is always greater than the request timeout passed to kubectl.
KUBECTL_COMMAND_TIMEOUT: Final = 45

__all__ = [
    "CLUSTER_REQUEST_TIMEOUT",
    "KUBECTL_COMMAND_TIMEOUT",
]
