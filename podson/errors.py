"""Error taxonomy.

Each kind of failure has its own type so callers can tell a bad argument
from an unreachable cluster. Every error is fatal for the invocation:
nothing in the engine retries or degrades to a partial answer.
"""

from __future__ import annotations

from typing import Any


class PodsOnError(Exception):
    """Base class for all podson exceptions.

    Optional context attributes record where the failure happened:
    ``node`` is the node whose pods were being listed, ``page`` the 1-based
    page number of a paginated listing and ``index`` the item position
    within that page.
    """

    def __init__(
        self,
        message: str,
        *,
        node: str | None = None,
        page: int | None = None,
        index: int | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.node = node
        self.page = page
        self.index = index

    def with_context(self, prefix: str, **context: Any) -> PodsOnError:
        """Return a copy of this error annotated with ``prefix`` and context.

        Context values already set on this error are kept unless overridden.
        """
        merged = {"node": self.node, "page": self.page, "index": self.index}
        merged.update({key: value for key, value in context.items() if value is not None})
        return type(self)(f"{prefix}: {self.message}", **merged)


class PredicateSyntaxError(PodsOnError):
    """Raised when a node selector string is malformed."""


class TransportError(PodsOnError):
    """Raised when listing nodes or pods from the cluster fails."""


class DecodeError(PodsOnError):
    """Raised when a pod payload cannot be parsed."""


class UnexpectedTypeError(PodsOnError):
    """Raised when a payload decodes to something other than a Pod."""


class UnknownStrategyError(PodsOnError):
    """Raised when a strategy override names no known strategy."""


class ConfigError(PodsOnError):
    """Raised when query settings fail validation."""


class UnsupportedOutputError(PodsOnError):
    """Raised when the requested output format cannot be rendered."""
