"""Fetchers for the pods controller."""

from podson.controllers.pods.fetchers.node_fetcher import NodeFetcher
from podson.controllers.pods.fetchers.parallel_fetcher import ParallelPodFetcher
from podson.controllers.pods.fetchers.pod_fetcher import PodFetcher

__all__ = ["NodeFetcher", "ParallelPodFetcher", "PodFetcher"]
