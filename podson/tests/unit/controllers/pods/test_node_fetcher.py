"""Tests for node fetcher."""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest

from podson.controllers.pods.fetchers.node_fetcher import NodeFetcher
from podson.controllers.pods.parsers import SelectorParser
from podson.errors import DecodeError, TransportError


class TestNodeFetcher:
    """Tests for NodeFetcher class."""

    @pytest.fixture
    def parser(self) -> SelectorParser:
        return SelectorParser()

    def test_fetcher_init(self) -> None:
        """Test NodeFetcher stores the callable."""
        get_raw = AsyncMock()
        fetcher = NodeFetcher(get_raw)
        assert fetcher._get_raw is get_raw

    @pytest.mark.asyncio
    async def test_resolve_matches_any_selector(self, ten_node_cluster, parser) -> None:
        """Selectors are OR-ed; the total node count is reported."""
        fetcher = NodeFetcher(ten_node_cluster.get_raw)
        selectors = [parser.parse("tier=web"), parser.parse("tier=nope")]

        matched, total = await fetcher.resolve_node_names(selectors)

        assert matched == {"h1", "h2"}
        assert total == 10
        assert len(ten_node_cluster.node_calls()) == 1

    @pytest.mark.asyncio
    async def test_resolve_overlapping_selectors_collapse(self, ten_node_cluster, parser) -> None:
        fetcher = NodeFetcher(ten_node_cluster.get_raw)
        matched, _ = await fetcher.resolve_node_names(
            [parser.parse("tier=web"), parser.parse("tier in (web, batch)")]
        )
        assert len(matched) == 10

    @pytest.mark.asyncio
    async def test_resolve_empty_cluster(self, cluster_factory, parser) -> None:
        fetcher = NodeFetcher(cluster_factory().get_raw)
        matched, total = await fetcher.resolve_node_names([parser.parse("tier=web")])
        assert matched == set()
        assert total == 0

    @pytest.mark.asyncio
    async def test_resolve_transport_failure_is_fatal(self, parser) -> None:
        get_raw = AsyncMock(side_effect=TransportError("connection refused"))
        fetcher = NodeFetcher(get_raw)

        with pytest.raises(TransportError, match="failed to list nodes in the cluster: connection refused"):
            await fetcher.resolve_node_names([parser.parse("tier=web")])

    @pytest.mark.asyncio
    async def test_resolve_bad_node_item(self, parser) -> None:
        get_raw = AsyncMock(return_value={"items": [{"metadata": {}}]})
        fetcher = NodeFetcher(get_raw)

        with pytest.raises(DecodeError, match="failed to parse node list"):
            await fetcher.resolve_node_names([parser.parse("tier=web")])
