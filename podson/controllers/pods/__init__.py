"""Pods domain: selector resolution, strategy choice and pod acquisition."""

from podson.controllers.pods.controller import PodsOnController
from podson.controllers.pods.fetchers import NodeFetcher, ParallelPodFetcher, PodFetcher
from podson.controllers.pods.parsers import NodeParser, PodParser, SelectorParser

__all__ = [
    "NodeFetcher",
    "NodeParser",
    "ParallelPodFetcher",
    "PodFetcher",
    "PodParser",
    "PodsOnController",
    "SelectorParser",
]
