"""Shared fixtures: an in-memory cluster API serving nodes and paginated pods."""

from __future__ import annotations

import asyncio
from collections.abc import Mapping
from typing import Any

import pytest

from podson.errors import TransportError


def make_node(name: str, **labels: str) -> dict[str, Any]:
    """Build a minimal Node object."""
    return {"metadata": {"name": name, "labels": dict(labels)}}


def make_pod(
    name: str,
    node: str,
    namespace: str = "default",
    owners: list[dict[str, str]] | None = None,
    resource_version: str = "1",
    phase: str = "Running",
) -> dict[str, Any]:
    """Build a minimal Pod object as served inside a PodList."""
    return {
        "metadata": {
            "name": name,
            "namespace": namespace,
            "resourceVersion": resource_version,
            "creationTimestamp": "2024-01-01T00:00:00Z",
            "ownerReferences": owners or [],
        },
        "spec": {"nodeName": node},
        "status": {"phase": phase, "podIP": "10.0.0.1"},
    }


class FakeCluster:
    """Serves /api/v1/nodes and /api/v1/pods like the API server.

    Pod listings honor ``fieldSelector=spec.nodeName=...``, ``limit`` and
    ``continue``. Every request is recorded in ``calls``.
    """

    def __init__(
        self,
        nodes: list[dict[str, Any]] | None = None,
        pods: list[dict[str, Any]] | None = None,
        resource_version: str = "100",
        node_resource_versions: Mapping[str, str] | None = None,
        failing_nodes: set[str] | None = None,
        delays: Mapping[str, float] | None = None,
    ) -> None:
        self.nodes = nodes or []
        self.pods = pods or []
        self.resource_version = resource_version
        self.node_resource_versions = dict(node_resource_versions or {})
        self.failing_nodes = failing_nodes or set()
        self.delays = dict(delays or {})
        self.calls: list[tuple[str, dict[str, Any]]] = []
        self.in_flight = 0
        self.max_in_flight = 0
        self.completed_nodes: list[str] = []

    @staticmethod
    def _node_from_params(params: Mapping[str, Any]) -> str | None:
        selector = params.get("fieldSelector")
        if not selector:
            return None
        return str(selector).split("=", 1)[1]

    async def get_raw(self, path: str, params: Mapping[str, Any]) -> dict[str, Any]:
        self.calls.append((path, dict(params)))
        if path == "/api/v1/nodes":
            return {
                "kind": "NodeList",
                "metadata": {"resourceVersion": self.resource_version},
                "items": self.nodes,
            }

        node = self._node_from_params(params)
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(self.delays.get(node or "", 0))
            if node in self.failing_nodes:
                raise TransportError("the server is currently unable to handle the request")
        finally:
            self.in_flight -= 1

        pods = [
            pod for pod in self.pods if node is None or pod["spec"]["nodeName"] == node
        ]
        limit = int(params.get("limit", len(pods) or 1))
        offset = int(params.get("continue") or 0)
        page = pods[offset : offset + limit]
        next_offset = offset + limit
        if node is not None:
            self.completed_nodes.append(node)
        return {
            "kind": "PodList",
            "metadata": {
                "resourceVersion": self.node_resource_versions.get(node or "", self.resource_version),
                "continue": str(next_offset) if next_offset < len(pods) else "",
            },
            "items": page,
        }

    def pod_calls(self) -> list[dict[str, Any]]:
        return [params for path, params in self.calls if path == "/api/v1/pods"]

    def node_calls(self) -> list[dict[str, Any]]:
        return [params for path, params in self.calls if path == "/api/v1/nodes"]


@pytest.fixture
def ten_node_cluster() -> FakeCluster:
    """Ten nodes, h1 and h2 labeled tier=web, two pods per node."""
    nodes = [
        make_node(f"h{i}", tier="web" if i in (1, 2) else "batch")
        for i in range(1, 11)
    ]
    pods = []
    for i in range(1, 11):
        pods.append(make_pod(f"app-{i}", f"h{i}", namespace="prod"))
        pods.append(
            make_pod(
                f"agent-{i}",
                f"h{i}",
                namespace="kube-system",
                owners=[{"kind": "DaemonSet", "name": "agent", "uid": "ds-uid"}],
            )
        )
    return FakeCluster(nodes=nodes, pods=pods)


@pytest.fixture
def cluster_factory() -> type[FakeCluster]:
    """The FakeCluster class, for tests that build their own cluster."""
    return FakeCluster


@pytest.fixture
def pod_factory():
    """The make_pod builder."""
    return make_pod


@pytest.fixture
def node_factory():
    """The make_node builder."""
    return make_node
