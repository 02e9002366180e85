"""kubectl transport.

All cluster API traffic goes through ``kubectl get --raw`` so credential and
kubeconfig handling stay with kubectl. Every request is subject to the
invocation's rate budget and in-flight ceiling.
"""

from __future__ import annotations

import asyncio
import json
import logging
import math
import time
from collections.abc import Mapping
from contextlib import suppress
from typing import Any
from urllib.parse import urlencode

from podson.constants.defaults import BURST_PER_QPS, QPS_PER_WORKER, WORKERS_DEFAULT
from podson.constants.timeouts import CLUSTER_REQUEST_TIMEOUT, KUBECTL_COMMAND_TIMEOUT
from podson.constants.values import KUBECTL_BINARY
from podson.errors import TransportError
from podson.models.state.app_settings import QuerySettings
from podson.utils.rate_limiter import TokenBucketRateLimiter

logger = logging.getLogger(__name__)


def build_api_url(path: str, params: Mapping[str, Any] | None = None) -> str:
    """Join an API path and its query parameters, skipping empty values."""
    query = {
        key: str(value)
        for key, value in (params or {}).items()
        if value is not None and value != ""
    }
    if not query:
        return path
    return f"{path}?{urlencode(query)}"


class KubectlRunner:
    """Runs raw API GETs through kubectl."""

    def __init__(
        self,
        context: str | None = None,
        kubeconfig: str | None = None,
        request_timeout: str = CLUSTER_REQUEST_TIMEOUT,
        max_in_flight: int = WORKERS_DEFAULT,
        rate_limiter: TokenBucketRateLimiter | None = None,
        binary: str = KUBECTL_BINARY,
    ) -> None:
        """Initialize the runner.

        Args:
            context: Optional kubeconfig context name.
            kubeconfig: Optional kubeconfig file path.
            request_timeout: kubectl --request-timeout value.
            max_in_flight: Ceiling on concurrently running kubectl processes.
            rate_limiter: Request rate budget. Derived from max_in_flight when omitted.
            binary: kubectl executable.
        """
        self.context = context
        self.kubeconfig = kubeconfig
        self.request_timeout = request_timeout
        self.binary = binary
        self.max_in_flight = max(1, max_in_flight)
        if rate_limiter is None:
            qps = float(self.max_in_flight * QPS_PER_WORKER)
            rate_limiter = TokenBucketRateLimiter(qps=qps, burst=int(qps) * BURST_PER_QPS)
        self._rate_limiter = rate_limiter
        self._semaphore = asyncio.Semaphore(self.max_in_flight)

    @classmethod
    def from_settings(cls, settings: QuerySettings) -> KubectlRunner:
        """Create a runner whose rate budget follows the worker count."""
        return cls(
            context=settings.context,
            kubeconfig=settings.kubeconfig,
            request_timeout=settings.request_timeout,
            max_in_flight=settings.workers,
            rate_limiter=TokenBucketRateLimiter(qps=settings.qps, burst=settings.burst),
        )

    @staticmethod
    def _request_timeout_seconds(request_timeout: str) -> int | None:
        """Parse a kubectl --request-timeout value into whole seconds."""
        value = request_timeout.strip().lower()
        if value.endswith("s"):
            value = value[:-1]
        if not value:
            return None
        with suppress(ValueError):
            seconds = float(value)
            if seconds > 0:
                return max(1, math.ceil(seconds))
        return None

    def _command_timeout(self) -> int:
        """Process timeout, always longer than the API request timeout."""
        request_seconds = self._request_timeout_seconds(self.request_timeout)
        if request_seconds is None:
            return KUBECTL_COMMAND_TIMEOUT
        return max(KUBECTL_COMMAND_TIMEOUT, request_seconds + 10)

    def _build_command(self, url: str) -> list[str]:
        cmd = [self.binary]
        if self.kubeconfig:
            cmd.extend(["--kubeconfig", self.kubeconfig])
        if self.context:
            cmd.extend(["--context", self.context])
        cmd.extend(["get", "--raw", url, f"--request-timeout={self.request_timeout}"])
        return cmd

    @staticmethod
    async def _reap(process: asyncio.subprocess.Process) -> None:
        """Kill the child and drain its pipes so its transport is closed."""
        with suppress(ProcessLookupError):
            process.kill()
        await process.communicate()

    async def _run(self, cmd: list[str]) -> str:
        timeout = self._command_timeout()
        try:
            process = await asyncio.create_subprocess_exec(
                *cmd,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as exc:
            raise TransportError(f"failed to run {self.binary}: {exc}") from exc

        try:
            stdout, stderr = await asyncio.wait_for(process.communicate(), timeout=timeout)
        except asyncio.TimeoutError:
            await self._reap(process)
            raise TransportError(f"{self.binary} timed out after {timeout}s") from None
        except asyncio.CancelledError:
            await asyncio.shield(self._reap(process))
            raise

        if process.returncode != 0:
            message = stderr.decode(errors="replace").strip()
            raise TransportError(message or f"{self.binary} exited with code {process.returncode}")
        return stdout.decode()

    async def get_raw(self, path: str, params: Mapping[str, Any] | None = None) -> dict[str, Any]:
        """GET an API path and return the decoded JSON object."""
        url = build_api_url(path, params)
        async with self._semaphore:
            await self._rate_limiter.acquire()
            start = time.monotonic()
            output = await self._run(self._build_command(url))
        logger.debug("GET %s took %.0fms", url, (time.monotonic() - start) * 1000)

        try:
            data = json.loads(output)
        except json.JSONDecodeError as exc:
            raise TransportError(f"failed to decode response from {path}: {exc}") from exc
        if not isinstance(data, dict):
            raise TransportError(
                f"unexpected response from {path}: expected a JSON object, got {type(data).__name__}"
            )
        return data
