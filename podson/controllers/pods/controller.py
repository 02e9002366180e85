"""Pods-on controller.

This module is the query engine: it resolves node selectors, picks a
query strategy, acquires the pods running on the target nodes and hands
back a filtered, deterministically ordered result.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

from podson.constants.enums import QueryStrategy
from podson.controllers.base import BaseController, GetRawFunc
from podson.controllers.pods.fetchers import NodeFetcher, ParallelPodFetcher, PodFetcher
from podson.controllers.pods.parsers import LabelSelector
from podson.controllers.pods.postprocess import postprocess
from podson.controllers.pods.strategy import choose_strategy
from podson.models.query.result_set import PodResultSet, QueryPlan
from podson.models.state.app_settings import QuerySettings
from podson.utils.kubectl import KubectlRunner

logger = logging.getLogger(__name__)


class PodsOnController(BaseController):
    """Finds the pods running on a set of nodes.

    Delegates to specialized fetchers:
    - NodeFetcher: selector resolution against the node list
    - PodFetcher: paginated pod listing (cluster-wide or for one node)
    - ParallelPodFetcher: bounded scatter-gather of per-node listings
    """

    def __init__(
        self,
        settings: QuerySettings | None = None,
        get_raw_func: GetRawFunc | None = None,
    ) -> None:
        """Initialize the controller.

        Args:
            settings: Query settings, defaults when omitted.
            get_raw_func: Raw API GET function. A kubectl runner whose rate
                budget follows ``settings.workers`` is used when omitted.
        """
        self.settings = settings or QuerySettings()
        if get_raw_func is None:
            get_raw_func = KubectlRunner.from_settings(self.settings).get_raw
        super().__init__(get_raw_func)

        self._node_fetcher = NodeFetcher(self._get_raw)
        self._pod_fetcher = PodFetcher(
            self._get_raw,
            page_size=self.settings.page_size,
            read_cache_hint=self.settings.read_cache_hint,
        )
        self._parallel_fetcher = ParallelPodFetcher(self._pod_fetcher)

    async def plan(
        self,
        node_names: Iterable[str] = (),
        selectors: Sequence[LabelSelector] = (),
    ) -> QueryPlan:
        """Resolve the target nodes and choose how to query them."""
        targets = set(node_names)
        total_nodes = 0
        if selectors:
            logger.debug("resolving node selectors: %s", ", ".join(str(s) for s in selectors))
            matched, total_nodes = await self._node_fetcher.resolve_node_names(selectors)
            targets |= matched
        logger.debug("total nodes to query: %d", len(targets))

        if self.settings.strategy is not None:
            strategy = self.settings.strategy
            logger.info("using query strategy %r (override)", strategy.value)
            return QueryPlan(
                strategy=strategy,
                node_names=frozenset(targets),
                total_nodes=total_nodes,
                overridden=True,
            )

        strategy = choose_strategy(total_nodes, len(targets))
        logger.info(
            "based on nodes matched to selectors (%d/%d), using query strategy: %r",
            len(targets),
            total_nodes,
            strategy.value,
        )
        return QueryPlan(strategy=strategy, node_names=frozenset(targets), total_nodes=total_nodes)

    async def fetch_pods_by_querying_all_pods(self, node_names: Iterable[str]) -> PodResultSet:
        """List every pod in the cluster and keep those on the given nodes."""
        wanted = set(node_names)
        result = await self._pod_fetcher.fetch_pods()
        pods = [pod for pod in result.pods if pod.node_name in wanted]
        logger.info("matched %d pods on %d nodes", len(pods), len(wanted))
        return PodResultSet(pods=pods, resource_version=result.resource_version)

    async def fetch_pods_by_node(self, node_names: Iterable[str]) -> PodResultSet:
        """List pods node by node in parallel."""
        logger.info(
            "querying list of pods on each node in parallel (workers: %d)", self.settings.workers
        )
        return await self._parallel_fetcher.fetch_pods_on_nodes(node_names, self.settings.workers)

    async def acquire(self, plan: QueryPlan) -> PodResultSet:
        """Acquire the pods on the plan's nodes with the plan's strategy."""
        if not plan.node_names:
            logger.warning("no nodes matched the given names or selectors")
            return PodResultSet()
        if plan.strategy == QueryStrategy.ALL_PODS:
            return await self.fetch_pods_by_querying_all_pods(plan.node_names)
        return await self.fetch_pods_by_node(plan.node_names)

    async def query(
        self,
        node_names: Iterable[str] = (),
        selectors: Sequence[LabelSelector] = (),
    ) -> PodResultSet:
        """Find the pods running on the named and selected nodes.

        Any failure aborts the query; no partial result is returned.
        """
        plan = await self.plan(node_names, selectors)
        result = await self.acquire(plan)
        logger.info("query matched %d pods", len(result.pods))
        return postprocess(result, include_daemonsets=self.settings.include_daemonsets)
