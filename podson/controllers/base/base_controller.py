"""Base controller for podson.

Controllers own one invocation's worth of cluster reads. They talk to the
cluster only through an async ``get_raw(path, params)`` function so the
transport can be swapped out in tests.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable, Mapping
from typing import Any

logger = logging.getLogger(__name__)

GetRawFunc = Callable[[str, Mapping[str, Any]], Awaitable[dict[str, Any]]]


class BaseController(ABC):
    """Base controller class.

    Subclasses implement :meth:`query` to produce their result for one
    invocation.
    """

    def __init__(self, get_raw_func: GetRawFunc) -> None:
        """Initialize the controller.

        Args:
            get_raw_func: Async function performing a raw API GET
        """
        self._get_raw = get_raw_func

    @abstractmethod
    async def query(self, *args: Any, **kwargs: Any) -> Any:
        """Run the controller's query.

        Returns:
            The query result
        """
        ...
