"""Node parser - parses node list responses into NodeInfo objects."""

from __future__ import annotations

from typing import Any

from podson.errors import DecodeError
from podson.models.core.node_info import NodeInfo


class NodeParser:
    """Parses node data into structured formats."""

    def parse_node_info(self, node: dict[str, Any], index: int = 0) -> NodeInfo:
        """Parse a single node into NodeInfo.

        Args:
            node: Raw node dictionary from API
            index: Position of the node in the list, used in error messages

        Returns:
            NodeInfo object.
        """
        if not isinstance(node, dict):
            raise DecodeError(f"failed to decode node in row {index}: not an object", index=index)
        metadata = node.get("metadata") or {}
        name = metadata.get("name")
        if not isinstance(name, str) or not name:
            raise DecodeError(f"failed to decode node in row {index}: missing metadata.name", index=index)
        labels = metadata.get("labels") or {}
        if not isinstance(labels, dict):
            raise DecodeError(f"failed to decode node {name!r}: labels is not a mapping", index=index)
        return NodeInfo(name=name, labels={str(k): str(v) for k, v in labels.items()})

    def parse_node_list(self, data: dict[str, Any]) -> list[NodeInfo]:
        """Parse a NodeList response."""
        items = data.get("items") or []
        return [self.parse_node_info(item, index) for index, item in enumerate(items)]
