"""Scalar constants for the Kubernetes API surface used by podson."""

from typing import Final

# ============================================================================
# Application
# ============================================================================

APP_NAME: Final = "kubectl pods-on"
ENV_PREFIX: Final = "PODSON_"

# ============================================================================
# Kubernetes API
# ============================================================================

KUBECTL_BINARY: Final = "kubectl"
NODES_API_PATH: Final = "/api/v1/nodes"
PODS_API_PATH: Final = "/api/v1/pods"
NODE_NAME_FIELD: Final = "spec.nodeName"

# resourceVersion=0 lets the API server answer from its watch cache.
READ_CACHE_RESOURCE_VERSION: Final = "0"

POD_KIND: Final = "Pod"
DAEMONSET_OWNER_KIND: Final = "DaemonSet"

__all__ = [
    "APP_NAME",
    "DAEMONSET_OWNER_KIND",
    "ENV_PREFIX",
    "KUBECTL_BINARY",
    "NODES_API_PATH",
    "NODE_NAME_FIELD",
    "PODS_API_PATH",
    "POD_KIND",
    "READ_CACHE_RESOURCE_VERSION",
]
