"""Structured content generation for the news pipeline."""

import importlib.metadata
import logging

from newsgen.client import RateLimitConfig, RateLimiter, RetryPolicy
from newsgen.config import (
    NewsGenSettings,
    get_ambient_settings,
    load_settings,
    settings_scope,
)
from newsgen.exceptions import (
    ConfigurationError,
    EmptyResponseError,
    MissingKeyError,
    NewsGenError,
    ParsingError,
    ParsingErrorKind,
    TransportError,
)
from newsgen.factory import build_generator
from newsgen.generator import Prompt, RetryAttempt, StructuredGenerator
from newsgen.providers import GeminiInvoker, ModelInvoker, OpenRouterInvoker
from newsgen.response import (
    ExpectedShape,
    ResponseParser,
    ResponseSchema,
    parse_response,
)
from newsgen.selection import (
    Budget,
    Capability,
    ModelInvocationConfig,
    Provider,
    select_model,
)
from newsgen.telemetry import SimpleReporter, TelemetryContext, TelemetryReporter

# Version handling
try:
    __version__ = importlib.metadata.version("newsgen")
except importlib.metadata.PackageNotFoundError:
    __version__ = "development"

# Library logging stays silent unless the application configures handlers
logging.getLogger(__name__).addHandler(logging.NullHandler())

# Public API
__all__ = [  # noqa: RUF022
    # Generation
    "StructuredGenerator",
    "Prompt",
    "RetryAttempt",
    "build_generator",
    # Parsing
    "ResponseParser",
    "ResponseSchema",
    "ExpectedShape",
    "parse_response",
    # Model selection
    "Provider",
    "Capability",
    "Budget",
    "ModelInvocationConfig",
    "select_model",
    # Invokers
    "ModelInvoker",
    "GeminiInvoker",
    "OpenRouterInvoker",
    # Client policies
    "RetryPolicy",
    "RateLimitConfig",
    "RateLimiter",
    # Configuration
    "NewsGenSettings",
    "load_settings",
    "settings_scope",
    "get_ambient_settings",
    # Telemetry (extension points)
    "TelemetryContext",
    "TelemetryReporter",
    "SimpleReporter",
    # Exceptions
    "NewsGenError",
    "TransportError",
    "EmptyResponseError",
    "ParsingError",
    "ParsingErrorKind",
    "MissingKeyError",
    "ConfigurationError",
]
