"""Data models for podson."""

from podson.models.core.node_info import NodeInfo
from podson.models.core.pod_info import OwnerReference, PodInfo, PodRow
from podson.models.query.result_set import (
    PodListPage,
    PodResultSet,
    QueryPlan,
    newer_resource_version,
)
from podson.models.state.app_settings import QuerySettings

__all__ = [
    "NodeInfo",
    "OwnerReference",
    "PodInfo",
    "PodListPage",
    "PodResultSet",
    "PodRow",
    "QueryPlan",
    "QuerySettings",
    "newer_resource_version",
]
