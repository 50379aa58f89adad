"""
Client-side plumbing: invocation settings and request throttling
"""  # noqa: D200, D212, D415

from .configuration import RateLimitConfig, RetryPolicy
from .rate_limiter import RateLimiter

__all__ = [
    "RateLimitConfig",
    "RateLimiter",
    "RetryPolicy",
]
