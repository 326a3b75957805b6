# Copyright 2026 TRPCSwift Contributors
# SPDX-License-Identifier: Apache-2.0

"""Generation flags and the context threaded through the router walk."""

from __future__ import annotations

from dataclasses import dataclass, field, replace

from trpcswift.generator.registry import ModelRegistry
from trpcswift.model.schema import SchemaNode

# ###############
# Public Interface
# ###############


@dataclass(frozen=True)
class GeneratorFlags:
    """Options controlling the generated client.

    Attributes:
        create_type_aliases: Emit a top-level ``typealias`` for every
            generated model.
        public_access: Mark generated declarations ``public``.
        indent: Width of one indentation unit in the output.
    """

    create_type_aliases: bool = False
    public_access: bool = False
    indent: int = 4


@dataclass(frozen=True)
class GenerationContext:
    """State owned by one branch of the router walk.

    A child router receives a context derived with :meth:`child`, never the
    parent's instance, so names introduced in one subtree do not leak into
    its siblings. Only ``registry`` is shared by the whole run.

    Attributes:
        registry: Models registered so far in this generation run.
        flags: Generation options.
        definitions: Named schemas addressable by ``ref`` nodes.
        route_depth: Nesting depth of the current router (0 for the root).
        route_path: Keys of the routers from the root to the current one.
        visible_model_names: Names already declared in the enclosing scopes.
    """

    registry: ModelRegistry
    flags: GeneratorFlags = field(default_factory=GeneratorFlags)
    definitions: dict[str, SchemaNode] = field(default_factory=dict)
    route_depth: int = 0
    route_path: tuple[str, ...] = ()
    visible_model_names: frozenset[str] = frozenset()

    def child(self, key: str, declared_names: set[str] | frozenset[str] = frozenset()) -> GenerationContext:
        """Return the context for the child router *key*.

        Args:
            key: The child router's key in the current router.
            declared_names: Type names declared by the child's scope.
        """
        return replace(
            self,
            route_depth=self.route_depth + 1,
            route_path=(*self.route_path, key),
            visible_model_names=self.visible_model_names | declared_names,
        )

    def with_names(self, declared_names: set[str] | frozenset[str]) -> GenerationContext:
        """Return a copy of this context with *declared_names* made visible."""
        return replace(self, visible_model_names=self.visible_model_names | declared_names)

    @property
    def access(self) -> str:
        """The access modifier prefix for public declarations."""
        return "public " if self.flags.public_access else ""
