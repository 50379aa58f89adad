import asyncio

import pytest

from newsgen.client import RateLimitConfig, RateLimiter

pytestmark = pytest.mark.unit


class FakeClock:
    """Manual clock whose sleep advances time instantly."""

    def __init__(self, start: float = 100.0):
        self.now = start
        self.sleeps: list[float] = []

    def __call__(self) -> float:
        return self.now

    async def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds
        # Yield so other waiters get a chance to run
        await asyncio.sleep(0)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


def _limiter(clock: FakeClock, interval: float = 1.2, **kwargs) -> RateLimiter:
    return RateLimiter(
        RateLimitConfig(min_interval_seconds=interval),
        clock=clock,
        sleep=clock.sleep,
        **kwargs,
    )


@pytest.mark.asyncio
async def test_first_request_does_not_wait(clock):
    limiter = _limiter(clock)
    assert await limiter.acquire() == 0.0
    assert clock.sleeps == []


@pytest.mark.asyncio
async def test_waits_for_remaining_interval(clock):
    limiter = _limiter(clock)
    await limiter.acquire()
    clock.now += 0.5

    waited = await limiter.acquire()

    assert waited == pytest.approx(0.7)
    assert clock.sleeps == [pytest.approx(0.7)]


@pytest.mark.asyncio
async def test_no_wait_after_interval_elapsed(clock):
    limiter = _limiter(clock)
    await limiter.acquire()
    clock.now += 5

    assert await limiter.acquire() == 0.0


@pytest.mark.asyncio
async def test_concurrent_callers_are_serialized(clock):
    limiter = _limiter(clock)
    acquired_at: list[float] = []

    async def request() -> None:
        await limiter.acquire()
        acquired_at.append(clock())

    await asyncio.gather(*(request() for _ in range(4)))

    assert acquired_at == pytest.approx([100.0, 101.2, 102.4, 103.6])
    gaps = [b - a for a, b in zip(acquired_at, acquired_at[1:], strict=False)]
    assert all(gap >= 1.2 - 1e-9 for gap in gaps)


@pytest.mark.asyncio
async def test_zero_interval_never_sleeps(clock):
    limiter = _limiter(clock, interval=0)
    for _ in range(3):
        await limiter.acquire()
    assert clock.sleeps == []


@pytest.mark.asyncio
async def test_request_context_acquires(clock):
    limiter = _limiter(clock)
    async with limiter.request_context():
        pass
    async with limiter.request_context():
        pass
    assert clock.sleeps == [pytest.approx(1.2)]


@pytest.mark.asyncio
async def test_wait_is_recorded_as_gauge(clock, telemetry, telemetry_reporter):
    limiter = _limiter(clock, telemetry=telemetry)
    await limiter.acquire()
    await limiter.acquire()

    recorded = telemetry_reporter.metrics["rate_limit.wait_seconds"]
    assert [value for value, _ in recorded] == [pytest.approx(1.2)]
    assert recorded[0][1]["metric_type"] == "gauge"


def test_default_interval():
    assert RateLimiter().min_interval == 1.2


def test_negative_interval_is_rejected():
    with pytest.raises(ValueError):
        RateLimitConfig(min_interval_seconds=-1)
