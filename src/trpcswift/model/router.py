# Copyright 2026 TRPCSwift Contributors
# SPDX-License-Identifier: Apache-2.0

"""Procedures, routers and the top-level router document."""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Literal

from pydantic import BaseModel
from pydantic import Field as _Field

from trpcswift.model.schema import SchemaNode

# ###############
# Public Interface
# ###############


class ProcedureKind(Enum):
    """The request kind of a procedure."""

    QUERY = "query"
    MUTATION = "mutation"
    SUBSCRIPTION = "subscription"


class ProcedureDef(BaseModel):
    """A remotely callable procedure.

    A missing ``input`` or ``output`` means the procedure carries no payload
    in that direction.
    """

    kind: Literal["query", "mutation", "subscription"]
    input: SchemaNode | None = None
    output: SchemaNode | None = None
    description: str | None = None

    @property
    def procedure_kind(self) -> ProcedureKind:
        """Return the request kind as a :class:`ProcedureKind`."""
        return ProcedureKind(self.kind)


class RouterNode(BaseModel):
    """A named group of procedures and nested routers.

    Children keep their declaration order, which is also the order of the
    generated code.
    """

    kind: Literal["router"] = "router"
    children: dict[str, RouterChild] = _Field(default_factory=dict)
    description: str | None = None

    def routers(self) -> list[tuple[str, RouterNode]]:
        """Return the nested routers in declaration order."""
        return [(key, child) for key, child in self.children.items() if isinstance(child, RouterNode)]

    def procedures(self) -> list[tuple[str, ProcedureDef]]:
        """Return the procedures in declaration order."""
        return [(key, child) for key, child in self.children.items() if isinstance(child, ProcedureDef)]


# A router child: either a nested router or a procedure.
RouterChild = Annotated[RouterNode | ProcedureDef, _Field(discriminator="kind")]


class RouterDocument(BaseModel):
    """A complete API description: the root router plus shared definitions."""

    definitions: dict[str, SchemaNode] = _Field(default_factory=dict)
    router: RouterNode = _Field(default_factory=RouterNode)


# Resolve forward references in self-referential models.
RouterNode.model_rebuild()
RouterDocument.model_rebuild()
