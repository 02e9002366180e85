"""Enum definitions for podson.

This module consolidates the closed value sets used by the query engine
and the CLI.
"""

from __future__ import annotations

from enum import Enum

from podson.errors import UnknownStrategyError

# =============================================================================
# Query Enums
# =============================================================================


class QueryStrategy(Enum):
    """How the pods running on the target nodes are acquired."""

    BY_NODE = "by-node"
    ALL_PODS = "all-pods"

    @classmethod
    def parse(cls, value: str | QueryStrategy) -> QueryStrategy:
        """Resolve an override string into a strategy.

        Raises:
            UnknownStrategyError: The value names neither strategy.
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            choices = ", ".join(member.value for member in cls)
            raise UnknownStrategyError(
                f"unknown pod query strategy: {value!r} (expected one of: {choices})"
            ) from None


# =============================================================================
# Output Enums
# =============================================================================


class OutputFormat(Enum):
    """Output formats understood by the printer."""

    TABLE = "table"
    WIDE = "wide"
    JSON = "json"
    YAML = "yaml"
    NAME = "name"


# =============================================================================
# Selector Enums
# =============================================================================


class SelectorOperator(Enum):
    """Label requirement operators."""

    EQUALS = "="
    DOUBLE_EQUALS = "=="
    NOT_EQUALS = "!="
    IN = "in"
    NOT_IN = "notin"
    EXISTS = "exists"
    DOES_NOT_EXIST = "!"
    GREATER_THAN = "gt"
    LESS_THAN = "lt"
