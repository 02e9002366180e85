"""Utility functions and classes for podson."""

from podson.utils.duration import age, human_duration
from podson.utils.kubectl import KubectlRunner, build_api_url
from podson.utils.printer import PodPrinter
from podson.utils.rate_limiter import TokenBucketRateLimiter

__all__ = [
    # Transport
    "KubectlRunner",
    "TokenBucketRateLimiter",
    "build_api_url",
    # Output
    "PodPrinter",
    "age",
    "human_duration",
]
