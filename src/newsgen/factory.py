"""Wiring of settings into a ready-to-use ``StructuredGenerator``"""  # noqa: D415

import logging

from .client.configuration import RateLimitConfig, RetryPolicy
from .client.rate_limiter import RateLimiter
from .config import NewsGenSettings, get_ambient_settings, load_settings
from .constants import GEMINI_MAX_ATTEMPTS, OPENROUTER_MAX_ATTEMPTS
from .exceptions import MissingKeyError
from .generator import StructuredGenerator
from .providers.base import ModelInvoker
from .providers.gemini import GeminiInvoker
from .providers.openrouter import OpenRouterInvoker
from .selection import ModelInvocationConfig, Provider
from .telemetry import TelemetryContext, TelemetryContextProtocol

log = logging.getLogger(__name__)

_DEFAULT_MAX_ATTEMPTS = {
    Provider.GEMINI: GEMINI_MAX_ATTEMPTS,
    Provider.OPENROUTER: OPENROUTER_MAX_ATTEMPTS,
}


def build_generator(
    settings: NewsGenSettings | None = None,
    *,
    invoker: ModelInvoker | None = None,
    telemetry: TelemetryContextProtocol | None = None,
) -> StructuredGenerator:
    """Create a generator for the configured provider.

    Settings resolve from the argument, then the ambient ``settings_scope``,
    then the environment.

    Args:
        settings: Explicit settings.
        invoker: Pre-built invoker; skips API key checks when given.
        telemetry: Telemetry context shared by the generator and limiter.

    Raises:
        MissingKeyError: No API key for the selected provider.
        ConfigurationError: Settings from the environment are invalid.
    """
    settings = settings or get_ambient_settings() or load_settings()
    telemetry = telemetry or TelemetryContext()

    if invoker is None:
        invoker = _build_invoker(settings)

    retry_policy = RetryPolicy(
        max_attempts=settings.max_attempts or _DEFAULT_MAX_ATTEMPTS[settings.provider],
        delay_seconds=settings.retry_delay_seconds,
        retry_on_schema_mismatch=settings.retry_on_schema_mismatch,
    )

    rate_limiter = None
    if settings.min_request_interval_seconds > 0:
        rate_limiter = RateLimiter(
            RateLimitConfig(min_interval_seconds=settings.min_request_interval_seconds),
            telemetry=telemetry,
        )

    log.debug(
        "Building %s generator (max_attempts=%d, rate_limited=%s)",
        settings.provider.value,
        retry_policy.max_attempts,
        rate_limiter is not None,
    )
    return StructuredGenerator(
        invoker,
        provider=settings.provider,
        retry_policy=retry_policy,
        default_config=ModelInvocationConfig(
            capability=settings.capability, budget=settings.budget
        ),
        rate_limiter=rate_limiter,
        telemetry=telemetry,
    )


def _build_invoker(settings: NewsGenSettings) -> ModelInvoker:
    api_key = settings.api_key_for()
    if not api_key:
        env_var = f"NEWSGEN_{settings.provider.value.upper()}_API_KEY"
        raise MissingKeyError(
            f"No API key for provider '{settings.provider.value}'. Set {env_var}."
        )
    if settings.provider is Provider.GEMINI:
        return GeminiInvoker(api_key)
    return OpenRouterInvoker(
        api_key,
        base_url=settings.openrouter_base_url,
        app_title=settings.app_title,
        timeout=settings.request_timeout_seconds,
    )
