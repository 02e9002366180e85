"""Query settings model."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from podson.constants.defaults import (
    BURST_PER_QPS,
    INCLUDE_DAEMONSETS_DEFAULT,
    OUTPUT_FORMAT_DEFAULT,
    PAGE_SIZE_DEFAULT,
    QPS_PER_WORKER,
    READ_CACHE_HINT_DEFAULT,
    WORKERS_DEFAULT,
)
from podson.constants.enums import OutputFormat, QueryStrategy
from podson.constants.limits import MAX_WORKERS, PAGE_SIZE_MAX, PAGE_SIZE_MIN, WORKERS_MIN
from podson.constants.timeouts import CLUSTER_REQUEST_TIMEOUT
from podson.errors import ConfigError


class QuerySettings(BaseModel):
    """Settings for one invocation with validation."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    # Cluster access (forwarded to kubectl)
    context: str | None = None
    kubeconfig: str | None = None
    request_timeout: str = CLUSTER_REQUEST_TIMEOUT

    # Acquisition
    workers: int = Field(default=WORKERS_DEFAULT, ge=WORKERS_MIN, le=MAX_WORKERS)
    strategy: QueryStrategy | None = None
    page_size: int = Field(default=PAGE_SIZE_DEFAULT, ge=PAGE_SIZE_MIN, le=PAGE_SIZE_MAX)
    read_cache_hint: bool = READ_CACHE_HINT_DEFAULT

    # Post-processing and output
    include_daemonsets: bool = INCLUDE_DAEMONSETS_DEFAULT
    output: OutputFormat = OUTPUT_FORMAT_DEFAULT
    no_headers: bool = False

    @field_validator("strategy", mode="before")
    @classmethod
    def _parse_strategy(cls, value: Any) -> QueryStrategy | None:
        if value is None or value == "":
            return None
        return QueryStrategy.parse(value)

    @field_validator("output", mode="before")
    @classmethod
    def _parse_output(cls, value: Any) -> Any:
        if value is None or value == "":
            return OUTPUT_FORMAT_DEFAULT
        return value

    @field_validator("request_timeout")
    @classmethod
    def _check_request_timeout(cls, value: str) -> str:
        text = value.strip().lower()
        number = text[:-1] if text.endswith("s") else text
        try:
            seconds = float(number)
        except ValueError:
            raise ValueError(f"invalid request timeout {value!r}") from None
        if seconds <= 0:
            raise ValueError("request timeout must be positive")
        return text if text.endswith("s") else f"{text}s"

    @property
    def qps(self) -> float:
        """Request rate budget for the transport."""
        return float(self.workers * QPS_PER_WORKER)

    @property
    def burst(self) -> int:
        """Burst size for the transport rate budget."""
        return int(self.qps) * BURST_PER_QPS

    @classmethod
    def build(cls, **values: Any) -> QuerySettings:
        """Validate settings, raising ConfigError instead of ValidationError."""
        try:
            return cls(**values)
        except ValidationError as exc:
            problems = "; ".join(
                f"{'.'.join(str(part) for part in error['loc']) or 'settings'}: {error['msg']}"
                for error in exc.errors()
            )
            raise ConfigError(f"invalid settings: {problems}") from exc
