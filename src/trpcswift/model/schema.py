# Copyright 2026 TRPCSwift Contributors
# SPDX-License-Identifier: Apache-2.0

"""Schema node representations describing procedure inputs and outputs."""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Literal

from pydantic import BaseModel
from pydantic import Field as _Field

# ###############
# Public Interface
# ###############


class PrimitiveKind(Enum):
    """Primitive kinds supported by the schema language."""

    STRING = "string"
    INT = "int"
    DOUBLE = "double"
    BOOL = "bool"
    DATE = "date"
    NULL = "null"


class PrimitiveSchema(BaseModel):
    """A primitive value."""

    kind: Literal["primitive"] = "primitive"
    type: PrimitiveKind
    description: str | None = None


class ArraySchema(BaseModel):
    """An ordered sequence of elements of one type."""

    kind: Literal["array"] = "array"
    of: SchemaNode
    description: str | None = None


class OptionalSchema(BaseModel):
    """A value that may be absent."""

    kind: Literal["optional"] = "optional"
    of: SchemaNode
    description: str | None = None


class ObjectSchema(BaseModel):
    """A structure with an ordered set of named fields.

    ``name`` is the declared identifier used for the generated model; when
    omitted the generator derives one from the enclosing procedure and field
    path.
    """

    kind: Literal["object"] = "object"
    fields: dict[str, SchemaNode] = _Field(default_factory=dict)
    name: str | None = None
    description: str | None = None


class DictionarySchema(BaseModel):
    """A mapping from keys to values of one type.

    Only string keys can be represented in generated code.
    """

    kind: Literal["dictionary"] = "dictionary"
    key: SchemaNode = _Field(default_factory=lambda: PrimitiveSchema(type=PrimitiveKind.STRING))
    value: SchemaNode
    description: str | None = None


class EnumSchema(BaseModel):
    """A closed set of string or integer values."""

    kind: Literal["enum"] = "enum"
    values: list[str | int] = _Field(default_factory=list)
    name: str | None = None
    description: str | None = None


class LiteralSchema(BaseModel):
    """A single constant value."""

    kind: Literal["literal"] = "literal"
    value: str | bool | int | float
    description: str | None = None


class UnionSchema(BaseModel):
    """A value matching one of several variants, tried in declaration order."""

    kind: Literal["union"] = "union"
    variants: list[SchemaNode] = _Field(default_factory=list)
    name: str | None = None
    description: str | None = None


class RefSchema(BaseModel):
    """A reference to a named entry of the document's definitions."""

    kind: Literal["ref"] = "ref"
    ref: str
    description: str | None = None


# A schema node: one of the primitive, container, named, or reference kinds.
# The `kind` discriminator keeps the set of kinds closed.
SchemaNode = Annotated[
    PrimitiveSchema
    | ArraySchema
    | OptionalSchema
    | ObjectSchema
    | DictionarySchema
    | EnumSchema
    | LiteralSchema
    | UnionSchema
    | RefSchema,
    _Field(discriminator="kind"),
]


def primitive(kind: PrimitiveKind | str) -> PrimitiveSchema:
    """Return a primitive schema node for *kind*."""
    return PrimitiveSchema(type=PrimitiveKind(kind))


# Resolve forward references for models that use SchemaNode.
ArraySchema.model_rebuild()
OptionalSchema.model_rebuild()
ObjectSchema.model_rebuild()
DictionarySchema.model_rebuild()
UnionSchema.model_rebuild()
