"""Pod models."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class OwnerReference(BaseModel):
    """One entry of a pod's metadata.ownerReferences."""

    model_config = ConfigDict(frozen=True)

    kind: str = ""
    name: str = ""
    uid: str = ""


class PodInfo(BaseModel):
    """A pod placed on a node.

    Identity is (namespace, name). ``resource_version`` is kept for snapshot
    bookkeeping only. ``raw`` holds the pod object as served by the API so
    structured output formats can emit it unchanged.
    """

    namespace: str
    name: str
    node_name: str = ""
    owner_references: list[OwnerReference] = Field(default_factory=list)
    resource_version: str = ""
    phase: str = "Unknown"
    pod_ip: str = ""
    creation_timestamp: datetime | None = None
    raw: dict[str, Any] = Field(default_factory=dict, repr=False)

    @property
    def key(self) -> tuple[str, str]:
        """Business identity of the pod."""
        return self.namespace, self.name

    def is_owned_by(self, kind: str) -> bool:
        """Return True when any owner reference has the given kind."""
        return any(owner.kind == kind for owner in self.owner_references)


class PodRow(BaseModel):
    """One rendered row; always carries node and namespace."""

    node: str
    namespace: str
    name: str
    status: str
    age: str
    ip: str = ""
