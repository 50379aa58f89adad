"""
Text and string-value normalization for model output
"""

import re
from typing import Any

# Optional language tag must sit alone on the opening fence line
_FENCE_RE = re.compile(r"```(?:[\w+.-]+[ \t]*(?=\r?\n))?(.*?)```", re.DOTALL)
_NEWLINES_RE = re.compile(r"\r\n|\r|\n")
_WHITESPACE_RE = re.compile(r"\s+")
# A high+low surrogate pair is matched before a single escape
_UNICODE_ESCAPE_RE = re.compile(
    r"\\u(d[89ab][0-9a-f]{2})\\u(d[c-f][0-9a-f]{2})|\\u([0-9a-f]{4})",
    re.IGNORECASE,
)

# Backslash must come after the sequences that start with one
_ESCAPES = (
    ('\\"', '"'),
    ("\\n", "\n"),
    ("\\r", "\r"),
    ("\\t", "\t"),
    ("\\\\", "\\"),
)


def normalize_text(text: str) -> str:
    """Strip markdown fences and collapse whitespace onto one line.

    When the text holds a fenced code block, only the first block's content
    is kept. Newlines inside JSON string values are flattened too.
    """
    match = _FENCE_RE.search(text)
    if match:
        text = match.group(1)

    text = _NEWLINES_RE.sub(" ", text)
    return _WHITESPACE_RE.sub(" ", text).strip()


def unescape_text(value: str) -> str:
    """Turn literal escape sequences in an already-decoded string into characters."""
    for escaped, replacement in _ESCAPES:
        value = value.replace(escaped, replacement)
    return _UNICODE_ESCAPE_RE.sub(_decode_unicode_escape, value)


def _decode_unicode_escape(match: re.Match[str]) -> str:
    high, low, single = match.groups()
    if single is None:
        code = 0x10000 + ((int(high, 16) - 0xD800) << 10) + (int(low, 16) - 0xDC00)
        return chr(code)
    code = int(single, 16)
    # An unpaired surrogate cannot be encoded; keep the escape text
    if 0xD800 <= code <= 0xDFFF:
        return match.group(0)
    return chr(code)


def unescape_strings(value: Any) -> Any:
    """Recursively unescape every string leaf of a decoded JSON value.

    Object keys are left as-is. Not idempotent: a string that still holds
    escape sequences after one pass loses another layer on the next.
    """
    if isinstance(value, str):
        return unescape_text(value)
    if isinstance(value, list):
        return [unescape_strings(item) for item in value]
    if isinstance(value, dict):
        return {key: unescape_strings(item) for key, item in value.items()}
    return value
