"""Result post-processing: DaemonSet filtering and deterministic ordering."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from podson.constants.values import DAEMONSET_OWNER_KIND
from podson.models.core.pod_info import PodInfo
from podson.models.query.result_set import PodResultSet

logger = logging.getLogger(__name__)


def filter_daemonset_pods(pods: Iterable[PodInfo]) -> list[PodInfo]:
    """Return the pods not owned by a DaemonSet."""
    pods = list(pods)
    kept = [pod for pod in pods if not pod.is_owned_by(DAEMONSET_OWNER_KIND)]
    logger.debug("filtered out %d DaemonSet pods out of %d", len(pods) - len(kept), len(pods))
    return kept


def pod_sort_key(pod: PodInfo) -> tuple[str, str, str]:
    """Order by node name, then namespace, then pod name."""
    return pod.node_name, pod.namespace, pod.name


def sort_pods(pods: Iterable[PodInfo]) -> list[PodInfo]:
    """Return the pods in (node, namespace, name) order."""
    return sorted(pods, key=pod_sort_key)


def postprocess(result: PodResultSet, include_daemonsets: bool = False) -> PodResultSet:
    """Filter and order a result set for output."""
    pods = result.pods if include_daemonsets else filter_daemonset_pods(result.pods)
    return PodResultSet(pods=sort_pods(pods), resource_version=result.resource_version)
