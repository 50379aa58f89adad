"""
Schema resolution for structured responses

Maps a Python type annotation to the root shape the extractor should look
for. Validation itself is delegated to pydantic.
"""

from __future__ import annotations

import collections.abc
import dataclasses
import types
import typing
from typing import Annotated, Any

from pydantic import BaseModel, RootModel, TypeAdapter
from pydantic.errors import PydanticSchemaGenerationError

from ..exceptions import ParsingError, ParsingErrorKind
from .types import ExpectedShape, ResponseSchema

_ARRAY_ORIGINS = (
    list,
    tuple,
    set,
    frozenset,
    collections.abc.Sequence,
    collections.abc.MutableSequence,
    collections.abc.Set,
)
_OBJECT_ORIGINS = (dict, collections.abc.Mapping, collections.abc.MutableMapping)


def shape_of(annotation: Any) -> ExpectedShape | None:
    """Return the root shape of ``annotation``, or None if unsupported.

    Unions (including ``Optional``) and ``Literal`` are unsupported: the
    extractor needs exactly one root shape per parse.
    """
    origin = typing.get_origin(annotation)

    if origin is Annotated:
        return shape_of(typing.get_args(annotation)[0])

    if annotation is None or annotation is types.NoneType:
        return ExpectedShape.NULL
    if annotation is bool:
        return ExpectedShape.BOOLEAN
    if annotation in (int, float):
        return ExpectedShape.NUMBER
    if annotation is str:
        return ExpectedShape.STRING

    if origin is not None:
        if origin in _ARRAY_ORIGINS:
            return ExpectedShape.ARRAY
        if origin in _OBJECT_ORIGINS:
            return ExpectedShape.OBJECT
        return None

    if isinstance(annotation, type):
        # A root model has the shape of its single root field
        if issubclass(annotation, RootModel):
            return shape_of(annotation.model_fields["root"].annotation)
        if issubclass(annotation, BaseModel) or typing.is_typeddict(annotation):
            return ExpectedShape.OBJECT
        if dataclasses.is_dataclass(annotation):
            return ExpectedShape.OBJECT
        if annotation in (list, tuple, set, frozenset):
            return ExpectedShape.ARRAY
        if annotation is dict:
            return ExpectedShape.OBJECT

    return None


def resolve_schema(annotation: Any, *, text: str | None = None) -> ResponseSchema[Any]:
    """Build a ``ResponseSchema`` for ``annotation``.

    An existing ``ResponseSchema`` is returned unchanged.
    """
    if isinstance(annotation, ResponseSchema):
        return annotation

    shape = shape_of(annotation)
    if shape is None:
        raise ParsingError(
            ParsingErrorKind.UNSUPPORTED_SHAPE,
            f"Unsupported schema type: {annotation!r}",
            text=text,
        )

    try:
        adapter: TypeAdapter[Any] = TypeAdapter(annotation)
    except PydanticSchemaGenerationError as e:
        raise ParsingError(
            ParsingErrorKind.UNSUPPORTED_SHAPE,
            f"Schema cannot be validated: {annotation!r}",
            text=text,
            cause=e,
        ) from e

    return ResponseSchema(annotation=annotation, shape=shape, adapter=adapter)
