"""Exceptions raised by the structured generation pipeline"""  # noqa: D415

from __future__ import annotations

from enum import Enum


class NewsGenError(Exception):
    """Base exception for newsgen errors"""  # noqa: D415

    # Invocations made before the error surfaced, when known
    attempts: int | None = None


class MissingKeyError(NewsGenError):
    """Raised when required API key or configuration key is missing"""  # noqa: D415


class ConfigurationError(NewsGenError):
    """Raised when settings fail validation"""  # noqa: D415


class TransportError(NewsGenError):
    """Raised when a model invocation fails below the parsing layer.

    Never retried by the generator: a network or provider failure is not
    something re-asking the model for a better answer can fix.
    """

    def __init__(self, message: str, *, status_code: int | None = None) -> None:  # noqa: D107
        super().__init__(message)
        self.status_code = status_code


class EmptyResponseError(TransportError):
    """Raised when a model returns no text at all"""  # noqa: D415


class ParsingErrorKind(str, Enum):
    """Why a model response could not be turned into a validated value."""

    NO_CANDIDATE_FOUND = "no_candidate_found"
    MALFORMED_JSON = "malformed_json"
    SCHEMA_VALIDATION_FAILED = "schema_validation_failed"
    UNSUPPORTED_SHAPE = "unsupported_shape"


class ParsingError(NewsGenError):
    """Raised when model text cannot be parsed into the expected schema.

    Attributes:
        kind: The failure category.
        text: The original, unmodified model text.
        cause: The underlying exception, if any.
        attempts: Number of invocations made before giving up. Set by the
            generator when retries are exhausted.
    """

    def __init__(
        self,
        kind: ParsingErrorKind,
        message: str,
        *,
        text: str | None = None,
        cause: BaseException | None = None,
    ) -> None:
        """Create a parsing error with its diagnostic context."""
        super().__init__(message)
        self.kind = kind
        self.text = text
        self.cause = cause

    def __str__(self) -> str:  # noqa: D105
        base = super().__str__()
        if self.cause is not None:
            return f"{base} ({self.kind.value}): {self.cause}"
        return f"{base} ({self.kind.value})"
