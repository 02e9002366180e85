"""Token bucket rate limiting for cluster API requests.

Requests refill at ``qps`` tokens per second up to ``burst`` tokens. A
caller that finds the bucket empty sleeps until the next token is due
instead of being rejected.
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Callable

logger = logging.getLogger(__name__)


class TokenBucketRateLimiter:
    """Async token bucket shared by every request of one invocation."""

    def __init__(
        self,
        qps: float,
        burst: int,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if qps <= 0:
            raise ValueError("qps must be positive")
        self.qps = qps
        self.burst = max(1, burst)
        self._clock = clock
        self._tokens = float(self.burst)
        self._last_refill = clock()
        self._lock = asyncio.Lock()

    def _refill(self) -> None:
        now = self._clock()
        elapsed = now - self._last_refill
        if elapsed > 0:
            self._tokens = min(float(self.burst), self._tokens + elapsed * self.qps)
            self._last_refill = now

    def try_acquire(self) -> bool:
        """Take a token if one is available right now."""
        self._refill()
        if self._tokens >= 1.0:
            self._tokens -= 1.0
            return True
        return False

    async def acquire(self) -> None:
        """Wait until a token is available and take it."""
        async with self._lock:
            while not self.try_acquire():
                delay = (1.0 - self._tokens) / self.qps
                logger.debug("Rate limit reached, waiting %.3fs", delay)
                await asyncio.sleep(delay)
