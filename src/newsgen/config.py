"""Settings for the structured generation pipeline.

Values come from ``NEWSGEN_*`` environment variables (optionally seeded
from a ``.env`` file) and keyword overrides, validated by pydantic-settings.
"""

from collections.abc import Generator
from contextlib import contextmanager
import contextvars
import logging
from pathlib import Path
from typing import Any

from dotenv import load_dotenv
from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .constants import NETWORK_TIMEOUT, OPENROUTER_APP_TITLE, OPENROUTER_BASE_URL
from .exceptions import ConfigurationError
from .selection import Budget, Capability, Provider

log = logging.getLogger(__name__)


class NewsGenSettings(BaseSettings):
    """Pydantic settings schema for newsgen.

    Reads environment variables with the ``NEWSGEN_`` prefix. Unknown
    variables are ignored.
    """

    model_config = SettingsConfigDict(
        env_prefix="NEWSGEN_",
        env_file=None,  # .env files are loaded explicitly by load_settings
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )

    # --- Provider ---

    provider: Provider = Field(
        default=Provider.OPENROUTER,
        description="Model provider to invoke",
    )
    gemini_api_key: str | None = Field(default=None, description="Google Gemini API key")
    openrouter_api_key: str | None = Field(default=None, description="OpenRouter API key")
    openrouter_base_url: str = Field(default=OPENROUTER_BASE_URL, min_length=1)
    app_title: str = Field(
        default=OPENROUTER_APP_TITLE,
        description="Application title sent to OpenRouter as X-Title",
    )

    # --- Model selection ---

    budget: Budget = Budget.FREE
    capability: Capability = Capability.BASIC

    # --- Retries and pacing ---

    max_attempts: int | None = Field(
        default=None,
        ge=1,
        description="Invocations per call; None uses the provider default",
    )
    retry_delay_seconds: float = Field(default=0.0, ge=0)
    retry_on_schema_mismatch: bool = True
    min_request_interval_seconds: float = Field(
        default=0.0,
        ge=0,
        description="Minimum spacing between requests; 0 disables rate limiting",
    )
    request_timeout_seconds: float = Field(default=NETWORK_TIMEOUT, gt=0)

    @field_validator("provider", "budget", "capability", mode="before")
    @classmethod
    def lowercase_choice(cls, v: Any) -> Any:
        """Accept enum values in any case (``GEMINI``, ``Paid``)."""
        return v.strip().lower() if isinstance(v, str) else v

    def api_key_for(self, provider: Provider | None = None) -> str | None:
        """Return the API key configured for ``provider`` (default: current)."""
        match provider or self.provider:
            case Provider.GEMINI:
                return self.gemini_api_key
            case Provider.OPENROUTER:
                return self.openrouter_api_key
        return None


def load_settings(env_file: str | Path | None = None, **overrides: Any) -> NewsGenSettings:
    """Build validated settings from the environment and overrides.

    Args:
        env_file: Optional ``.env`` file loaded first. Variables already in
            the environment are not overridden.
        **overrides: Field values that take precedence over the environment.

    Returns:
        The validated settings.

    Raises:
        ConfigurationError: If the env file is missing or a value is invalid.
    """
    if env_file is not None:
        env_path = Path(env_file)
        if not env_path.exists():
            raise ConfigurationError(f"Environment file not found: {env_path}")
        load_dotenv(env_path, override=False)
        log.debug("Loaded environment file %s", env_path)

    try:
        return NewsGenSettings(**overrides)
    except ValidationError as e:
        fields = ", ".join(
            ".".join(str(part) for part in err["loc"]) for err in e.errors()
        )
        raise ConfigurationError(f"Invalid newsgen settings ({fields}): {e}") from e


# Context variable for ambient settings set by settings_scope()
_ambient_settings: contextvars.ContextVar[NewsGenSettings] = contextvars.ContextVar(
    "newsgen_settings"
)


def get_ambient_settings() -> NewsGenSettings | None:
    """Return the settings installed by the innermost ``settings_scope``."""
    try:
        return _ambient_settings.get()
    except LookupError:
        return None


@contextmanager
def settings_scope(settings: NewsGenSettings) -> Generator[None]:
    """Temporarily make ``settings`` the ambient settings.

    Async-safe: each task sees its own scope. Only affects calls that
    resolve settings inside the scope, such as ``build_generator()``.

    Example:
        with settings_scope(load_settings(provider="gemini")):
            generator = build_generator()
    """
    token = _ambient_settings.set(settings)
    try:
        yield
    finally:
        _ambient_settings.reset(token)
