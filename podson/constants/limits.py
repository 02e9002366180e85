"""Limit and validation range constants."""

from typing import Final

# ============================================================================
# Validation limits
# ============================================================================

WORKERS_MIN: Final = 1
MAX_WORKERS: Final = 256
PAGE_SIZE_MIN: Final = 1
PAGE_SIZE_MAX: Final = 10_000

__all__ = [
    "MAX_WORKERS",
    "PAGE_SIZE_MAX",
    "PAGE_SIZE_MIN",
    "WORKERS_MIN",
]
