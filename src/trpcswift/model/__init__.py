# Copyright 2026 TRPCSwift Contributors
# SPDX-License-Identifier: Apache-2.0

"""Input model for the generator (schema nodes, procedures, routers)."""

from trpcswift.model.router import (
    ProcedureDef,
    ProcedureKind,
    RouterChild,
    RouterDocument,
    RouterNode,
)
from trpcswift.model.schema import (
    ArraySchema,
    DictionarySchema,
    EnumSchema,
    LiteralSchema,
    ObjectSchema,
    OptionalSchema,
    PrimitiveKind,
    PrimitiveSchema,
    RefSchema,
    SchemaNode,
    UnionSchema,
    primitive,
)

__all__ = [
    # Schema nodes
    "PrimitiveKind",
    "PrimitiveSchema",
    "ArraySchema",
    "OptionalSchema",
    "ObjectSchema",
    "DictionarySchema",
    "EnumSchema",
    "LiteralSchema",
    "UnionSchema",
    "RefSchema",
    "SchemaNode",
    "primitive",
    # Routers
    "ProcedureKind",
    "ProcedureDef",
    "RouterNode",
    "RouterChild",
    "RouterDocument",
]
