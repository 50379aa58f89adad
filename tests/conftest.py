"""
Global test configuration: markers, environment isolation and fakes.
"""

from collections.abc import Callable, Iterable
from contextlib import suppress
import os

import pytest

from newsgen.telemetry import SimpleReporter, TelemetryContext


# --- Environment Isolation (Autouse) ---
@pytest.fixture(autouse=True)
def block_dotenv(request, monkeypatch):
    """Prevent python-dotenv from loading project .env files during tests.

    Tests should only see environment that they explicitly set.

    Opt-in escape hatch: mark a test with @pytest.mark.allow_dotenv
    to permit .env loading for that specific test.
    """
    if request.node.get_closest_marker("allow_dotenv"):
        return
    with suppress(Exception):
        monkeypatch.setattr(
            "newsgen.config.load_dotenv", lambda *_args, **_kwargs: False
        )


@pytest.fixture(autouse=True)
def isolate_newsgen_env(request, monkeypatch):
    """Ensure a clean NEWSGEN_* environment for each test.

    Escape hatch: @pytest.mark.allow_env_pollution keeps the current env.
    """
    if request.node.get_closest_marker("allow_env_pollution"):
        return

    for key in list(os.environ.keys()):
        if key.startswith("NEWSGEN_"):
            monkeypatch.delenv(key, raising=False)
    # Avoid DEBUG toggles affecting telemetry
    monkeypatch.delenv("DEBUG", raising=False)


# --- Fakes ---
class ScriptedInvoker:
    """Invoker that replays a fixed script of replies or exceptions."""

    def __init__(self, replies: Iterable[str | BaseException]):
        self._replies = list(replies)
        self.calls: list[tuple[str, str]] = []

    async def invoke(self, model_id: str, prompt: str) -> str:
        self.calls.append((model_id, prompt))
        index = min(len(self.calls), len(self._replies)) - 1
        reply = self._replies[index]
        if isinstance(reply, BaseException):
            raise reply
        return reply


@pytest.fixture
def scripted_invoker() -> Callable[..., ScriptedInvoker]:
    """Factory for invokers that replay replies; the last one repeats."""

    def _make(*replies: str | BaseException) -> ScriptedInvoker:
        return ScriptedInvoker(replies)

    return _make


@pytest.fixture
def telemetry_reporter(monkeypatch) -> SimpleReporter:
    """Enable telemetry for the test and return an in-memory reporter."""
    monkeypatch.setattr("newsgen.telemetry._TELEMETRY_ENABLED", True)
    return SimpleReporter()


@pytest.fixture
def telemetry(telemetry_reporter):
    """An enabled telemetry context bound to ``telemetry_reporter``."""
    return TelemetryContext(telemetry_reporter)


def pytest_configure(config):
    """Configure custom markers for test organization."""
    markers = [
        "unit: Fast, isolated unit tests",
        "contract: Behavioural contracts of public interfaces",
        "allow_dotenv: Permit .env loading for this test",
        "allow_env_pollution: Keep the real NEWSGEN_* environment",
    ]
    for marker in markers:
        config.addinivalue_line("markers", marker)
