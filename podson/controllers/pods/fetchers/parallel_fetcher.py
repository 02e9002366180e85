"""Parallel pod fetcher - lists pods node by node with a bounded worker pool."""

from __future__ import annotations

import asyncio
import logging
from collections import deque
from collections.abc import Iterable

from podson.controllers.pods.fetchers.pod_fetcher import PodFetcher
from podson.models.core.pod_info import PodInfo
from podson.models.query.result_set import PodResultSet, newer_resource_version

logger = logging.getLogger(__name__)


class ParallelPodFetcher:
    """Scatter-gather over per-node pod listings.

    A fixed number of workers pull node names from a shared queue and run one
    complete paginated listing per node. Each node's pods are appended to a
    shared accumulator under a lock. Pods of different nodes are disjoint, so
    the merge needs no deduplication.
    """

    def __init__(self, pod_fetcher: PodFetcher) -> None:
        self._pod_fetcher = pod_fetcher

    async def fetch_pods_on_nodes(
        self, node_names: Iterable[str], workers: int
    ) -> PodResultSet:
        """Fetch pods on every node with at most ``workers`` listings in flight.

        The first failing node cancels every other worker, and its error is
        raised. Pods gathered so far are discarded.
        """
        pending = deque(sorted(set(node_names)))
        if not pending:
            return PodResultSet()

        lock = asyncio.Lock()
        pods: list[PodInfo] = []
        resource_version: str | None = None
        completed = 0
        total = len(pending)

        async def _worker(worker_id: int) -> None:
            nonlocal resource_version, completed
            while pending:
                node_name = pending.popleft()
                result = await self._pod_fetcher.fetch_pods(node_name=node_name)
                async with lock:
                    pods.extend(result.pods)
                    resource_version = newer_resource_version(
                        resource_version, result.resource_version
                    )
                    completed += 1
                logger.debug(
                    "worker %d finished node %s (%d pods, %d/%d nodes)",
                    worker_id,
                    node_name,
                    len(result.pods),
                    completed,
                    total,
                )

        pool_size = max(1, min(workers, total))
        tasks = [asyncio.create_task(_worker(worker_id)) for worker_id in range(pool_size)]
        try:
            for future in asyncio.as_completed(tasks):
                await future
        except BaseException:
            pending.clear()
            raise
        finally:
            for task in tasks:
                if not task.done():
                    task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)

        return PodResultSet(pods=pods, resource_version=resource_version or "")
