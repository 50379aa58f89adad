"""
Response processing types

Defines the closed set of root shapes the extractor knows how to find in
model output, and the schema wrapper that pins a shape to a validator.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from pydantic import BaseModel, TypeAdapter


class ExpectedShape(Enum):
    """Top-level JSON kind a schema expects at its root."""

    ARRAY = "array"
    OBJECT = "object"
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    NULL = "null"

    @property
    def is_primitive(self) -> bool:
        """True for string, number, boolean and null roots."""
        return self not in (ExpectedShape.ARRAY, ExpectedShape.OBJECT)


@dataclass(frozen=True)
class ResponseSchema[T]:
    """A validation target with its root shape resolved once.

    Build instances with ``ResponseSchema.of(annotation)``; see
    ``newsgen.response.schema``.
    """

    annotation: Any
    shape: ExpectedShape
    adapter: TypeAdapter[T] = field(repr=False, compare=False)

    @property
    def strict(self) -> bool:
        """Primitive roots validate strictly; coercion already happened.

        Models keep their own validation, even with a primitive root.
        """
        if isinstance(self.annotation, type) and issubclass(self.annotation, BaseModel):
            return False
        return self.shape.is_primitive

    def validate(self, value: Any) -> T:
        """Validate an untyped value, raising ``pydantic.ValidationError``."""
        return self.adapter.validate_python(value, strict=self.strict)

    @classmethod
    def of(cls, annotation: Any, *, text: str | None = None) -> ResponseSchema[Any]:
        """Resolve ``annotation`` into a schema.

        Raises:
            ParsingError: With kind ``UNSUPPORTED_SHAPE`` when the root of
                ``annotation`` is not an array, object or primitive.
        """
        from .schema import resolve_schema

        return resolve_schema(annotation, text=text)
