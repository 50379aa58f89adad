"""
Client configuration for model invocation and retries
"""  # noqa: D200, D212, D415

from dataclasses import dataclass

from ..constants import RATE_LIMIT_MIN_INTERVAL, RETRY_DELAY  # noqa: TID252


@dataclass(frozen=True)
class RateLimitConfig:
    """Minimum spacing between consecutive requests"""  # noqa: D415

    min_interval_seconds: float = RATE_LIMIT_MIN_INTERVAL

    def __post_init__(self) -> None:  # noqa: D105
        if self.min_interval_seconds < 0:
            raise ValueError("min_interval_seconds must be >= 0")


@dataclass(frozen=True)
class RetryPolicy:
    """How many times to re-ask the model when its output does not parse.

    ``max_attempts`` counts invocations, so 1 means no retries.
    """

    max_attempts: int = 1
    delay_seconds: float = RETRY_DELAY
    retry_on_schema_mismatch: bool = True

    def __post_init__(self) -> None:  # noqa: D105
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be >= 1")
        if self.delay_seconds < 0:
            raise ValueError("delay_seconds must be >= 0")
