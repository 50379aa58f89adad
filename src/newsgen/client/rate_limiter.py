"""Request rate limiting shared by concurrent callers"""  # noqa: D415

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager
import logging
import time

from ..constants import T_RATE_LIMIT
from ..telemetry import TelemetryContext, TelemetryContextProtocol
from .configuration import RateLimitConfig

log = logging.getLogger(__name__)


class RateLimiter:
    """Enforces a minimum interval between requests from any caller.

    The time of the last request is the only mutable state and is guarded
    by an ``asyncio.Lock``: callers queue on the lock, so each one waits for
    the interval measured from the request before it.
    """

    def __init__(  # noqa: D107
        self,
        config: RateLimitConfig | None = None,
        *,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        telemetry: TelemetryContextProtocol | None = None,
    ):
        self.config = config or RateLimitConfig()
        self._clock = clock
        self._sleep = sleep
        self._telemetry = telemetry or TelemetryContext()
        self._lock = asyncio.Lock()
        self._last_request: float | None = None

    @property
    def min_interval(self) -> float:  # noqa: D102
        return self.config.min_interval_seconds

    async def acquire(self) -> float:
        """Wait until a request may be made and claim the slot.

        Returns:
            The number of seconds spent waiting.
        """
        async with self._lock:
            waited = 0.0
            if self._last_request is not None and self.min_interval > 0:
                elapsed = self._clock() - self._last_request
                if elapsed < self.min_interval:
                    waited = self.min_interval - elapsed
                    log.debug("Rate limit reached. Waiting %.2f seconds...", waited)
                    self._telemetry.gauge(f"{T_RATE_LIMIT}.wait_seconds", waited)
                    await self._sleep(waited)
            self._last_request = self._clock()
            return waited

    @asynccontextmanager
    async def request_context(self) -> AsyncIterator[None]:
        """Async context manager for rate-limited requests"""  # noqa: D415
        await self.acquire()
        yield
