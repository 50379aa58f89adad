#!/usr/bin/env python3
"""Minimal custom telemetry reporter example for newsgen.
Shows how to print timing and metric events as they happen.
"""

import os

os.environ["NEWSGEN_TELEMETRY"] = "1"

import asyncio
from typing import Any

from newsgen import (
    RetryPolicy,
    StructuredGenerator,
    TelemetryContext,
    TelemetryReporter,
)


class PrintReporter(TelemetryReporter):
    """A minimal telemetry reporter that prints events to the console."""

    def record_timing(self, scope: str, duration: float, **metadata: Any) -> None:
        """Prints timing-related events with indentation based on call depth."""
        indent = "  " * metadata.get("depth", 0)
        print(f"[TIMING] {indent}{scope}: duration={duration:.4f}s (metadata: {metadata})")

    def record_metric(self, scope: str, value: Any, **metadata: Any) -> None:
        """Prints a generic metric event."""
        print(f"[METRIC] {scope}: {value} (metadata: {metadata})")


class FlakyInvoker:
    """Offline stand-in for a model: rambles once, then answers."""

    def __init__(self) -> None:
        self.calls = 0

    async def invoke(self, model_id: str, prompt: str) -> str:
        self.calls += 1
        if self.calls == 1:
            return "Let me think about that..."
        return "Sure! ```json\n[3, 5, 8]\n```"


async def main():
    generator = StructuredGenerator(
        FlakyInvoker(),
        provider="openrouter",
        retry_policy=RetryPolicy(max_attempts=2),
        telemetry=TelemetryContext(PrintReporter()),
    )

    numbers = await generator.generate_content("Give me three numbers", list[int])
    print(f"\nResult: {numbers}")


if __name__ == "__main__":
    asyncio.run(main())
