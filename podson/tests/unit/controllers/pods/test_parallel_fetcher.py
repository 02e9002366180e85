"""Tests for the parallel (by node) pod fetcher."""

from __future__ import annotations

import asyncio
import itertools

import pytest

from podson.controllers.pods.fetchers.parallel_fetcher import ParallelPodFetcher
from podson.controllers.pods.fetchers.pod_fetcher import PodFetcher
from podson.controllers.pods.postprocess import sort_pods
from podson.errors import TransportError


def _fetcher(cluster, page_size: int = 500) -> ParallelPodFetcher:
    return ParallelPodFetcher(PodFetcher(cluster.get_raw, page_size=page_size))


class TestParallelPodFetcher:
    """Tests for ParallelPodFetcher class."""

    @pytest.mark.asyncio
    async def test_each_node_queried_once(self, ten_node_cluster) -> None:
        result = await _fetcher(ten_node_cluster).fetch_pods_on_nodes(["h1", "h2"], workers=4)

        queried = sorted(call["fieldSelector"] for call in ten_node_cluster.pod_calls())
        assert queried == ["spec.nodeName=h1", "spec.nodeName=h2"]
        assert {pod.node_name for pod in result.pods} == {"h1", "h2"}
        assert len(result.pods) == 4

    @pytest.mark.asyncio
    async def test_duplicate_node_names_queried_once(self, ten_node_cluster) -> None:
        await _fetcher(ten_node_cluster).fetch_pods_on_nodes(["h1", "h1"], workers=4)
        assert len(ten_node_cluster.pod_calls()) == 1

    @pytest.mark.asyncio
    async def test_empty_node_list(self, ten_node_cluster) -> None:
        result = await _fetcher(ten_node_cluster).fetch_pods_on_nodes([], workers=4)
        assert result.pods == []
        assert ten_node_cluster.pod_calls() == []

    @pytest.mark.asyncio
    async def test_paginates_per_node(self, cluster_factory, pod_factory) -> None:
        pods = [pod_factory(f"p{i}", "h1") for i in range(5)]
        cluster = cluster_factory(pods=pods)

        result = await _fetcher(cluster, page_size=2).fetch_pods_on_nodes(["h1"], workers=2)

        assert len(result.pods) == 5
        assert len(cluster.pod_calls()) == 3

    @pytest.mark.asyncio
    async def test_concurrency_is_bounded(self, cluster_factory, pod_factory) -> None:
        nodes = [f"n{i}" for i in range(12)]
        pods = [pod_factory(f"p-{node}", node) for node in nodes]
        cluster = cluster_factory(pods=pods, delays={node: 0.01 for node in nodes})

        result = await _fetcher(cluster).fetch_pods_on_nodes(nodes, workers=3)

        assert len(result.pods) == 12
        assert cluster.max_in_flight <= 3
        assert cluster.max_in_flight >= 2

    @pytest.mark.asyncio
    @pytest.mark.parametrize("delays", list(itertools.permutations([0.0, 0.01, 0.02])))
    async def test_merge_is_order_independent(self, cluster_factory, pod_factory, delays) -> None:
        """Whatever order nodes finish in, the same pods come back."""
        nodes = ["h1", "h2", "h3"]
        pods = [
            pod_factory(f"{ns}-{node}", node, namespace=ns)
            for node in nodes
            for ns in ("a", "b")
        ]
        cluster = cluster_factory(pods=pods, delays=dict(zip(nodes, delays)))

        result = await _fetcher(cluster).fetch_pods_on_nodes(nodes, workers=3)

        assert {pod.key for pod in result.pods} == {
            (pod["metadata"]["namespace"], pod["metadata"]["name"]) for pod in pods
        }
        ordered = [(pod.node_name, pod.namespace, pod.name) for pod in sort_pods(result.pods)]
        assert ordered == sorted(ordered)
        assert ordered[0] == ("h1", "a", "a-h1")

    @pytest.mark.asyncio
    async def test_snapshot_token_is_maximum(self, cluster_factory, pod_factory) -> None:
        cluster = cluster_factory(
            pods=[pod_factory("a", "h1"), pod_factory("b", "h2"), pod_factory("c", "h3")],
            node_resource_versions={"h1": "5", "h2": "7", "h3": "6"},
        )
        result = await _fetcher(cluster).fetch_pods_on_nodes(["h1", "h2", "h3"], workers=2)
        assert result.resource_version == "7"

    @pytest.mark.asyncio
    async def test_failure_discards_results_and_cancels_peers(
        self, cluster_factory, pod_factory
    ) -> None:
        """One failing node fails the whole query, even after others appended."""
        nodes = ["h1", "h2", "h3", "h4"]
        cluster = cluster_factory(
            pods=[pod_factory(f"p-{node}", node) for node in nodes],
            failing_nodes={"h2"},
            delays={"h1": 0.0, "h2": 0.02, "h3": 0.5, "h4": 0.5},
        )

        with pytest.raises(TransportError) as exc_info:
            await _fetcher(cluster).fetch_pods_on_nodes(nodes, workers=3)

        assert exc_info.value.node == "h2"
        assert "failed to list pods on node 'h2'" in str(exc_info.value)
        assert "h1" in cluster.completed_nodes
        # h3 and h4 were still in flight when h2 failed.
        assert "h3" not in cluster.completed_nodes
        assert "h4" not in cluster.completed_nodes
        await asyncio.sleep(0)
        assert cluster.in_flight == 0
