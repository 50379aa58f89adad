"""Response parser: noisy model text in, validated value out.

The single entry point for turning a model reply into typed data:

1. normalize the text (fences, whitespace)
2. resolve the schema's root shape
3. extract the JSON value of that shape
4. unescape string leaves
5. validate with pydantic

Every failure surfaces as a ``ParsingError`` tagged with its kind; the
original text is always attached for diagnostics. Parsing is pure and holds
no state between calls.
"""

from __future__ import annotations

import logging
from typing import Any, overload

from pydantic import ValidationError

from ..exceptions import ParsingError, ParsingErrorKind
from .extraction import extract_value
from .normalization import normalize_text, unescape_strings
from .schema import resolve_schema
from .types import ResponseSchema

log = logging.getLogger(__name__)


class ResponseParser:
    """Parses model output against a schema."""

    @overload
    def parse[T](self, text: str, schema: type[T]) -> T: ...
    @overload
    def parse[T](self, text: str, schema: ResponseSchema[T]) -> T: ...
    @overload
    def parse(self, text: str, schema: Any) -> Any: ...

    def parse(self, text: str, schema: Any) -> Any:
        """Parse ``text`` into a value that satisfies ``schema``.

        Args:
            text: Raw model output.
            schema: A type annotation (pydantic model, ``list[...]``,
                ``str``...) or a resolved ``ResponseSchema``.

        Returns:
            The validated value.

        Raises:
            ParsingError: If no value of the expected shape can be found,
                decoded, or validated.
        """
        normalized = normalize_text(text)
        resolved = resolve_schema(schema, text=text)

        try:
            extracted = extract_value(normalized, resolved.shape)
        except ParsingError as e:
            # Report the caller's text, not the normalized copy
            e.text = text
            raise

        cleaned = unescape_strings(extracted)

        try:
            value = resolved.validate(cleaned)
        except ValidationError as e:
            raise ParsingError(
                ParsingErrorKind.SCHEMA_VALIDATION_FAILED,
                "Failed to validate response against schema",
                text=text,
                cause=e,
            ) from e

        log.debug(
            "Parsed %s response (%d chars)", resolved.shape.value, len(text)
        )
        return value


_DEFAULT_PARSER = ResponseParser()


def parse_response(text: str, schema: Any) -> Any:
    """Module-level shortcut for ``ResponseParser().parse``."""
    return _DEFAULT_PARSER.parse(text, schema)
