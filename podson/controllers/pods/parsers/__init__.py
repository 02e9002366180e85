"""Parsers for the pods controller."""

from podson.controllers.pods.parsers.node_parser import NodeParser
from podson.controllers.pods.parsers.pod_parser import (
    PodParser,
    PodPayload,
    RawPayload,
    TypedPayload,
)
from podson.controllers.pods.parsers.selector_parser import (
    LabelRequirement,
    LabelSelector,
    SelectorParser,
    is_node_name,
    split_node_args,
)

__all__ = [
    "LabelRequirement",
    "LabelSelector",
    "NodeParser",
    "PodParser",
    "PodPayload",
    "RawPayload",
    "SelectorParser",
    "TypedPayload",
    "is_node_name",
    "split_node_args",
]
