"""Query plan and result models."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from podson.constants.enums import QueryStrategy
from podson.models.core.pod_info import PodInfo


def newer_resource_version(current: str | None, candidate: str) -> str:
    """Advance a snapshot token without ever moving it backwards.

    The first token observed is adopted as is. Later tokens replace it only
    when they order after it lexicographically.
    """
    if current is None:
        return candidate
    return candidate if candidate > current else current


class PodListPage(BaseModel):
    """One page of a pod listing.

    ``items`` holds pod payloads before decoding: either already-parsed
    objects (dicts) or encoded JSON documents (str/bytes).
    """

    items: list[Any] = Field(default_factory=list)
    continue_token: str = ""
    resource_version: str = ""


class QueryPlan(BaseModel):
    """Strategy and target nodes chosen for one invocation."""

    model_config = ConfigDict(frozen=True)

    strategy: QueryStrategy
    node_names: frozenset[str] = frozenset()
    total_nodes: int = 0
    overridden: bool = False

    @property
    def ratio(self) -> float | None:
        """Matched share of the cluster, when the cluster size is known."""
        if self.total_nodes <= 0:
            return None
        return len(self.node_names) / self.total_nodes


class PodResultSet(BaseModel):
    """Pods acquired by one invocation plus the freshest snapshot token seen.

    For the by-node strategy ``resource_version`` is the maximum across
    independently read nodes. It indicates freshness, not a consistent
    cluster-wide snapshot.
    """

    pods: list[PodInfo] = Field(default_factory=list)
    resource_version: str = ""

    def __len__(self) -> int:
        return len(self.pods)
