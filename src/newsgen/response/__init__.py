"""
Response processing: normalization, extraction and validation of model output
"""

from .extraction import coerce_primitive, extract_value
from .normalization import normalize_text, unescape_strings, unescape_text
from .parser import ResponseParser, parse_response
from .schema import resolve_schema, shape_of
from .types import ExpectedShape, ResponseSchema

__all__ = [
    # Central interface
    "ResponseParser",
    "parse_response",
    # Schema contract
    "ExpectedShape",
    "ResponseSchema",
    "resolve_schema",
    "shape_of",
    # Individual stages
    "normalize_text",
    "extract_value",
    "coerce_primitive",
    "unescape_strings",
    "unescape_text",
]
