"""
Shape-directed JSON extraction from normalized model text

Arrays and objects are located with a first-opening / last-closing bracket
scan, which tolerates prose around the payload ("Here is the array: [...]
hope this helps"). Two independent values of the same shape in one text
will be sliced together and fail to decode; that is a known limitation of
the heuristic.
"""

import json
import logging
import math
from typing import Any

from ..exceptions import ParsingError, ParsingErrorKind
from .types import ExpectedShape

log = logging.getLogger(__name__)

_BRACKETS = {
    ExpectedShape.ARRAY: ("[", "]"),
    ExpectedShape.OBJECT: ("{", "}"),
}


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Non-standard JSON constant: {name}")


def _loads(text: str) -> Any:
    # NaN, Infinity and -Infinity are not JSON
    return json.loads(text, parse_constant=_reject_constant)


def extract_value(text: str, shape: ExpectedShape) -> Any:
    """Locate and decode the JSON value of ``shape`` in ``text``.

    Raises:
        ParsingError: ``NO_CANDIDATE_FOUND`` when no opening bracket exists,
            ``MALFORMED_JSON`` when the candidate does not decode, and
            ``UNSUPPORTED_SHAPE`` for anything outside ``ExpectedShape``.
    """
    match shape:
        case ExpectedShape.ARRAY | ExpectedShape.OBJECT:
            return _extract_container(text, shape)
        case (
            ExpectedShape.STRING
            | ExpectedShape.NUMBER
            | ExpectedShape.BOOLEAN
            | ExpectedShape.NULL
        ):
            return _extract_primitive(text, shape)
        case _:
            raise ParsingError(
                ParsingErrorKind.UNSUPPORTED_SHAPE,
                f"Unsupported shape: {shape!r}",
                text=text,
            )


def _extract_container(text: str, shape: ExpectedShape) -> Any:
    opening, closing = _BRACKETS[shape]
    start = text.find(opening)
    if start == -1:
        raise ParsingError(
            ParsingErrorKind.NO_CANDIDATE_FOUND,
            f"No {shape.value} found in response",
            text=text,
        )

    end = text.rfind(closing)
    # A truncated value (no closing bracket after the opening one) is decoded
    # as-is so it reports as malformed rather than missing
    candidate = text[start : end + 1] if end > start else text[start:]
    try:
        return _loads(candidate)
    except (ValueError, RecursionError) as e:
        # ValueError covers JSONDecodeError and oversized integer literals
        raise ParsingError(
            ParsingErrorKind.MALFORMED_JSON,
            f"Failed to parse {shape.value} JSON",
            text=text,
            cause=e,
        ) from e


def _extract_primitive(text: str, shape: ExpectedShape) -> Any:
    trimmed = text.strip()
    try:
        value = _loads(trimmed)
    except (ValueError, RecursionError):
        log.debug("Primitive response is not JSON; using raw text")
        value = trimmed
    return coerce_primitive(value, shape)


def coerce_primitive(value: Any, shape: ExpectedShape) -> Any:
    """Coerce a decoded (or raw) value to the requested primitive shape.

    Values that cannot be coerced to a number are returned unchanged so
    that schema validation reports the mismatch.
    """
    match shape:
        case ExpectedShape.STRING:
            return value if isinstance(value, str) else json.dumps(value)
        case ExpectedShape.NUMBER:
            return _to_number(value)
        case ExpectedShape.BOOLEAN:
            return bool(value)
        case ExpectedShape.NULL:
            return None
        case _:
            raise ParsingError(
                ParsingErrorKind.UNSUPPORTED_SHAPE,
                f"Not a primitive shape: {shape!r}",
            )


def _to_number(value: Any) -> Any:
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int | float):
        return value
    if value is None:
        return 0
    if isinstance(value, str):
        candidate = value.strip()
        if not candidate:
            return 0
        try:
            return int(candidate)
        except ValueError:
            pass
        try:
            number = float(candidate)
        except ValueError:
            return value
        # "nan" and "inf" spellings stay text
        return number if math.isfinite(number) else value
    return value
