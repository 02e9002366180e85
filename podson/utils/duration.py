"""Human readable durations in the style of kubectl's AGE column."""

from __future__ import annotations

from datetime import datetime, timezone

_MINUTE = 60
_HOUR = 60 * _MINUTE
_DAY = 24 * _HOUR
_YEAR = 365 * _DAY


def human_duration(seconds: float) -> str:
    """Format a duration the way kubectl does.

    Examples:
    - 45 -> "45s"
    - 150 -> "2m30s"
    - 3700 -> "61m"
    - 90000 -> "25h"
    - 400000 -> "4d15h"
    """
    if seconds < -1:
        return "<invalid>"
    if seconds < 0:
        return "0s"
    seconds = int(seconds)
    if seconds < 2 * _MINUTE:
        return f"{seconds}s"

    minutes = seconds // _MINUTE
    if minutes < 10:
        remainder = seconds % _MINUTE
        return f"{minutes}m" if remainder == 0 else f"{minutes}m{remainder}s"
    if minutes < 3 * 60:
        return f"{minutes}m"

    hours = seconds // _HOUR
    if hours < 8:
        remainder = minutes % 60
        return f"{hours}h" if remainder == 0 else f"{hours}h{remainder}m"
    if hours < 48:
        return f"{hours}h"
    if hours < 24 * 8:
        remainder = hours % 24
        days = hours // 24
        return f"{days}d" if remainder == 0 else f"{days}d{remainder}h"
    if hours < 24 * 365 * 2:
        return f"{hours // 24}d"
    if hours < 24 * 365 * 8:
        years = seconds // _YEAR
        remainder = (hours // 24) % 365
        return f"{years}y" if remainder == 0 else f"{years}y{remainder}d"
    return f"{seconds // _YEAR}y"


def age(timestamp: datetime | None, now: datetime | None = None) -> str:
    """Return the age of a timestamp, or "<unknown>" when it is missing."""
    if timestamp is None:
        return "<unknown>"
    now = now or datetime.now(timezone.utc)
    return human_duration((now - timestamp).total_seconds())
