"""Pod fetcher - lists pods page by page, following continuation tokens."""

from __future__ import annotations

import logging
import time
from typing import Any

from podson.constants.defaults import PAGE_SIZE_DEFAULT
from podson.constants.values import NODE_NAME_FIELD, PODS_API_PATH, READ_CACHE_RESOURCE_VERSION
from podson.controllers.pods.parsers import PodParser
from podson.errors import DecodeError, TransportError, UnexpectedTypeError
from podson.models.query.result_set import PodListPage, PodResultSet, newer_resource_version

logger = logging.getLogger(__name__)


class PodFetcher:
    """Fetches pods from the cluster, optionally restricted to one node."""

    _LIST_KINDS = ("PodList", "List", "Table")

    def __init__(
        self,
        get_raw_func: Any,
        page_size: int = PAGE_SIZE_DEFAULT,
        read_cache_hint: bool = False,
        parser: PodParser | None = None,
    ) -> None:
        """Initialize with the raw API GET function.

        Args:
            get_raw_func: Async function taking (path, params) and returning a decoded JSON object
            page_size: Number of pods requested per page
            read_cache_hint: Let the API server answer the first page from its watch cache
            parser: Pod parser, a default one is created when omitted
        """
        self._get_raw = get_raw_func
        self.page_size = page_size
        self.read_cache_hint = read_cache_hint
        self._parser = parser or PodParser()

    def _build_params(
        self, node_name: str | None, continue_token: str
    ) -> dict[str, str]:
        """Build list query parameters for one page."""
        params: dict[str, str] = {"limit": str(self.page_size)}
        if node_name:
            params["fieldSelector"] = f"{NODE_NAME_FIELD}={node_name}"
        if continue_token:
            params["continue"] = continue_token
        elif self.read_cache_hint:
            # Only the first request carries the hint; continuations keep the
            # server-side cursor of that first read.
            params["resourceVersion"] = READ_CACHE_RESOURCE_VERSION
        return params

    @classmethod
    def _parse_page(cls, data: dict[str, Any], page: int) -> PodListPage:
        """Extract items and list metadata from a PodList or Table response."""
        kind = data.get("kind")
        if kind is not None and kind not in cls._LIST_KINDS:
            raise UnexpectedTypeError(
                f"unexpected list kind {kind!r} in page {page} (expected PodList)", page=page
            )
        metadata = data.get("metadata") or {}
        if not isinstance(metadata, dict):
            raise DecodeError(f"failed to decode page {page}: metadata is not an object", page=page)
        items = data.get("rows") if kind == "Table" else data.get("items")
        if items is None:
            items = []
        if not isinstance(items, list):
            raise DecodeError(f"failed to decode page {page}: items is not a list", page=page)
        return PodListPage(
            items=items,
            continue_token=metadata.get("continue") or "",
            resource_version=metadata.get("resourceVersion") or "",
        )

    async def fetch_pods(self, node_name: str | None = None) -> PodResultSet:
        """Fetch every pod in the cluster, or on one node, across all pages.

        Pages are requested strictly one after another. The snapshot token of
        the result is the first page's token, advanced only by later tokens
        that order after it. Any failure aborts the whole listing.
        """
        scope = f"failed to list pods on node {node_name!r}" if node_name else "failed to list pods"
        pods = []
        resource_version: str | None = None
        continue_token = ""
        page = 0
        start = time.monotonic()

        while True:
            page += 1
            params = self._build_params(node_name, continue_token)
            try:
                data = await self._get_raw(PODS_API_PATH, params)
                envelope = self._parse_page(data, page)
                page_pods = self._parser.parse_items(envelope.items)
            except (TransportError, DecodeError, UnexpectedTypeError) as exc:
                raise exc.with_context(f"{scope} (page {page})", node=node_name, page=page) from exc

            pods.extend(page_pods)
            resource_version = newer_resource_version(resource_version, envelope.resource_version)
            logger.debug(
                "listed page %d of pods%s (%d pods, continue=%s)",
                page,
                f" on node {node_name}" if node_name else "",
                len(page_pods),
                bool(envelope.continue_token),
            )
            if not envelope.continue_token:
                break
            continue_token = envelope.continue_token

        logger.info(
            "listed pods%s, took %.0fms (found %d pods in %d pages)",
            f" on node {node_name}" if node_name else "",
            (time.monotonic() - start) * 1000,
            len(pods),
            page,
        )
        return PodResultSet(pods=pods, resource_version=resource_version or "")
