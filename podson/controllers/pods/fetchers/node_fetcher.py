"""Node fetcher - resolves node selectors into node names."""

from __future__ import annotations

import logging
import time
from collections.abc import Sequence
from typing import Any

from podson.constants.values import NODES_API_PATH
from podson.controllers.pods.parsers import LabelSelector, NodeParser
from podson.errors import DecodeError, TransportError

logger = logging.getLogger(__name__)


class NodeFetcher:
    """Lists nodes once and matches them against label selectors."""

    def __init__(self, get_raw_func: Any, parser: NodeParser | None = None) -> None:
        """Initialize with the raw API GET function.

        Args:
            get_raw_func: Async function taking (path, params) and returning a decoded JSON object
            parser: Node parser, a default one is created when omitted
        """
        self._get_raw = get_raw_func
        self._parser = parser or NodeParser()

    async def resolve_node_names(
        self, selectors: Sequence[LabelSelector]
    ) -> tuple[set[str], int]:
        """Return the names of nodes matching any selector, and the total node count.

        A node matches when at least one selector matches its labels. Listing
        failures are fatal; there is no partial resolution.
        """
        start = time.monotonic()
        try:
            data = await self._get_raw(NODES_API_PATH, {})
        except TransportError as exc:
            raise exc.with_context("failed to list nodes in the cluster") from exc
        try:
            nodes = self._parser.parse_node_list(data)
        except DecodeError as exc:
            raise exc.with_context("failed to parse node list") from exc
        logger.debug(
            "list nodes took %.0fms (%d nodes)", (time.monotonic() - start) * 1000, len(nodes)
        )

        matched: set[str] = set()
        for node in nodes:
            for selector in selectors:
                if selector.matches(node.labels):
                    matched.add(node.name)
                    break
        logger.debug("%d of %d nodes matched %d selectors", len(matched), len(nodes), len(selectors))
        return matched, len(nodes)
