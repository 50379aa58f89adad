"""Structured generation with parse-driven retries.

``StructuredGenerator`` wraps one pass of invoke → parse and decides, from
the kind of failure, whether to ask the model again:

- Invoking: call the model (after the optional rate limiter). Transport
  failures, including empty replies, end the call immediately.
- Parsing: run the response parser on the reply.
- Success: the validated value is returned.
- RetryPending: a retry-eligible ``ParsingError`` with attempts left; wait
  the configured delay and invoke again.
- Failed: the last error is raised with the attempt count attached.

Attempts are tracked with an immutable ``RetryAttempt``, so the budget
check is a property of the value rather than of a mutable counter.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, replace
import logging
from typing import Any, overload

from .client.configuration import RetryPolicy
from .client.rate_limiter import RateLimiter
from .constants import T_ATTEMPT, T_GENERATE
from .exceptions import (
    NewsGenError,
    ParsingError,
    ParsingErrorKind,
    TransportError,
)
from .providers.base import ModelInvoker
from .response.parser import ResponseParser
from .response.schema import resolve_schema
from .selection import ModelInvocationConfig, Provider, select_model
from .telemetry import TelemetryContext, TelemetryContextProtocol

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class Prompt[T]:
    """A prompt paired with the schema its answer must satisfy."""

    query: str
    response_schema: Any


@dataclass(frozen=True)
class RetryAttempt:
    """Position in the retry budget of one ``generate_content`` call."""

    number: int
    max_attempts: int
    last_error: NewsGenError | None = None

    @property
    def has_remaining(self) -> bool:
        """True while another invocation fits in the budget."""
        return self.number < self.max_attempts

    def next(self, error: NewsGenError) -> RetryAttempt:
        """Return the following attempt, remembering ``error``."""
        return replace(self, number=self.number + 1, last_error=error)


class StructuredGenerator:
    """Provider adapter that returns schema-validated model output."""

    def __init__(
        self,
        invoker: ModelInvoker,
        *,
        provider: Provider | str,
        retry_policy: RetryPolicy | None = None,
        default_config: ModelInvocationConfig | None = None,
        rate_limiter: RateLimiter | None = None,
        parser: ResponseParser | None = None,
        telemetry: TelemetryContextProtocol | None = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        """Wire the generator to an invoker and its policies.

        Args:
            invoker: Transport used to reach the model.
            provider: Provider whose model table ``select_model`` uses.
            retry_policy: Attempt budget and delay; defaults to one attempt.
            default_config: Capability/budget used when a call passes none.
            rate_limiter: Shared limiter acquired before every invocation.
            parser: Response parser; a default instance is used otherwise.
            telemetry: Telemetry context for segments and counters.
            sleep: Awaitable used for the retry delay.
        """
        self.invoker = invoker
        self.provider = Provider(provider)
        self.retry_policy = retry_policy or RetryPolicy()
        self.default_config = default_config or ModelInvocationConfig()
        self.rate_limiter = rate_limiter
        self._parser = parser or ResponseParser()
        self._telemetry = telemetry or TelemetryContext()
        self._sleep = sleep

    @overload
    async def generate_content[T](
        self,
        prompt: Prompt[T],
        schema: None = None,
        config: ModelInvocationConfig | None = None,
    ) -> T: ...
    @overload
    async def generate_content[T](
        self,
        prompt: str,
        schema: type[T],
        config: ModelInvocationConfig | None = None,
    ) -> T: ...
    @overload
    async def generate_content(
        self,
        prompt: str,
        schema: Any,
        config: ModelInvocationConfig | None = None,
    ) -> Any: ...

    async def generate_content(
        self,
        prompt: Prompt[Any] | str,
        schema: Any = None,
        config: ModelInvocationConfig | None = None,
    ) -> Any:
        """Generate content and validate it against a schema.

        Args:
            prompt: A ``Prompt`` or the query text.
            schema: Required when ``prompt`` is a plain string.
            config: Capability and budget for model selection.

        Returns:
            The parsed and validated response.

        Raises:
            TransportError: The model could not be reached or replied with
                nothing. Never retried.
            ParsingError: The reply could not be parsed, on the last
                attempt or for a non-retryable kind.
        """
        query, target = self._unpack(prompt, schema)
        model_id = select_model(self.provider, config or self.default_config)

        with self._telemetry(T_GENERATE, model=model_id):
            attempt = RetryAttempt(number=1, max_attempts=self.retry_policy.max_attempts)
            # Unsupported shapes fail here, before any model is invoked
            try:
                resolved = resolve_schema(target)
            except ParsingError as error:
                self._fail(error, replace(attempt, number=0), model_id)
                raise
            while True:
                with self._telemetry(T_ATTEMPT, model=model_id, attempt=attempt.number):
                    text = await self._invoke(model_id, query, attempt)
                    try:
                        value = self._parser.parse(text, resolved)
                    except ParsingError as error:
                        if not self._should_retry(attempt, error):
                            self._fail(error, attempt, model_id)
                            raise
                        failed_attempt, retry_error = attempt, error
                    else:
                        log.info(
                            "Generated content with %s in %d attempt(s)",
                            model_id,
                            attempt.number,
                            extra={"model": model_id, "attempt": attempt.number},
                        )
                        return value

                self._log_retry(retry_error, failed_attempt, model_id)
                if self.retry_policy.delay_seconds > 0:
                    await self._sleep(self.retry_policy.delay_seconds)
                attempt = failed_attempt.next(retry_error)

    # --- Internal helpers ---

    def _unpack(self, prompt: Prompt[Any] | str, schema: Any) -> tuple[str, Any]:
        if isinstance(prompt, Prompt):
            query, target = prompt.query, prompt.response_schema
        else:
            if schema is None:
                raise TypeError("schema is required when prompt is a string")
            query, target = prompt, schema
        return query, target

    async def _invoke(self, model_id: str, query: str, attempt: RetryAttempt) -> str:
        try:
            if self.rate_limiter is not None:
                await self.rate_limiter.acquire()
            return await self.invoker.invoke(model_id, query)
        except TransportError as error:
            self._fail(error, attempt, model_id)
            raise
        except Exception as e:
            error = TransportError(f"Model invocation failed for {model_id}: {e}")
            self._fail(error, attempt, model_id)
            raise error from e

    def _should_retry(self, attempt: RetryAttempt, error: ParsingError) -> bool:
        if not attempt.has_remaining:
            return False
        if error.kind is ParsingErrorKind.UNSUPPORTED_SHAPE:
            return False
        if error.kind is ParsingErrorKind.SCHEMA_VALIDATION_FAILED:
            return self.retry_policy.retry_on_schema_mismatch
        return True

    def _log_retry(self, error: ParsingError, attempt: RetryAttempt, model_id: str) -> None:
        log.warning(
            "Retrying content generation with %s (attempt %d/%d): %s",
            model_id,
            attempt.number,
            attempt.max_attempts,
            error,
            extra={
                "model": model_id,
                "attempt": attempt.number,
                "max_attempts": attempt.max_attempts,
                "error_kind": error.kind.value,
            },
        )
        self._telemetry.count("retries", model=model_id, kind=error.kind.value)

    def _fail(self, error: NewsGenError, attempt: RetryAttempt, model_id: str) -> None:
        error.attempts = attempt.number
        if isinstance(error, ParsingError):
            message = "Failed to generate content with %s after %d attempt(s): %s"
        else:
            message = "Model invocation with %s failed on attempt %d: %s"
        log.error(
            message,
            model_id,
            attempt.number,
            error,
            extra={
                "model": model_id,
                "attempt": attempt.number,
                "max_attempts": attempt.max_attempts,
            },
        )
        self._telemetry.count("errors", model=model_id, error=type(error).__name__)
