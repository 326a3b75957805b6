# Copyright 2026 TRPCSwift Contributors
# SPDX-License-Identifier: Apache-2.0

"""Registry of the named models emitted during one generation run.

Models are keyed by a structural fingerprint of the schema they were derived
from, so two structurally identical schemas share one definition. A model is
registered (and its name reserved) before its fields are resolved; while in
that state it is "in progress" and a second encounter of the same fingerprint
is a reference cycle, answered with the reserved name instead of recursing.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from trpcswift.generator.errors import GenerationError, NameCollisionError
from trpcswift.model.schema import (
    ArraySchema,
    DictionarySchema,
    EnumSchema,
    LiteralSchema,
    ObjectSchema,
    OptionalSchema,
    PrimitiveSchema,
    RefSchema,
    SchemaNode,
    UnionSchema,
)

logger = logging.getLogger(__name__)

# ###############
# Public Interface
# ###############

MAX_NAME_ATTEMPTS = 1000


@dataclass
class ModelEntry:
    """One registered model.

    Attributes:
        assigned_name: The unique Swift type name of the model.
        fingerprint: Structural fingerprint of the originating schema.
        definition_source: Rendered Swift declaration, ``None`` while the
            registration is still in progress.
        recursive: True when the model refers back to itself.
    """

    assigned_name: str
    fingerprint: str
    definition_source: str | None = None
    recursive: bool = False

    @property
    def in_progress(self) -> bool:
        """Return True while the definition has not been rendered yet."""
        return self.definition_source is None


@dataclass(frozen=True)
class ModelDeclaration:
    """A model name paired with whether it needs a forward declaration.

    Swift resolves declarations regardless of order, so the generator itself
    never emits forward declarations; the flag is exposed for targets that do.
    """

    name: str
    is_forward_declarable: bool


class ModelRegistry:
    """Ordered store of the models of one generation run.

    Args:
        reserved_names: Names no model may be assigned (template types,
            the root class name, ...).
    """

    def __init__(self, reserved_names: Iterable[str] = ()) -> None:
        self._entries: dict[str, ModelEntry] = {}
        self._names: set[str] = set()
        self._reserved: set[str] = set(reserved_names)

    def __len__(self) -> int:
        return len(self._entries)

    def lookup(self, fingerprint: str) -> str | None:
        """Return the name assigned to *fingerprint*, or None if unregistered."""
        entry = self._entries.get(fingerprint)
        return entry.assigned_name if entry is not None else None

    def is_in_progress(self, fingerprint: str) -> bool:
        """Return True if *fingerprint* is registered but not yet defined."""
        entry = self._entries.get(fingerprint)
        return entry is not None and entry.in_progress

    def register(
        self,
        fingerprint: str,
        desired_name: str,
        visible_names: Iterable[str] = (),
    ) -> str:
        """Register *fingerprint* and return its assigned name.

        Repeated calls with the same fingerprint return the first assigned
        name. A new registration takes *desired_name* if it is free, else the
        first free ``desired_name`` + ``2``, ``3``, ...

        Args:
            fingerprint: Structural fingerprint of the schema.
            desired_name: Preferred Swift type name.
            visible_names: Additional names visible at the current scope.

        Raises:
            NameCollisionError: If no free name is found within
                :data:`MAX_NAME_ATTEMPTS` attempts.
        """
        existing = self._entries.get(fingerprint)
        if existing is not None:
            return existing.assigned_name

        taken = self._names | self._reserved | set(visible_names)
        name = desired_name
        attempt = 1
        while name in taken:
            attempt += 1
            if attempt > MAX_NAME_ATTEMPTS:
                raise NameCollisionError(f"Cannot find a unique name for model '{desired_name}'")
            name = f"{desired_name}{attempt}"
        if name != desired_name:
            logger.debug("Model name '%s' is taken, using '%s'", desired_name, name)

        self._entries[fingerprint] = ModelEntry(assigned_name=name, fingerprint=fingerprint)
        self._names.add(name)
        logger.debug("Registered model '%s'", name)
        return name

    def define(self, fingerprint: str, source: str) -> None:
        """Store the rendered declaration of a registered model."""
        entry = self._entries.get(fingerprint)
        if entry is None:
            raise GenerationError(f"Cannot define unregistered model with fingerprint {fingerprint}")
        if entry.definition_source is None:
            entry.definition_source = source

    def mark_recursive(self, fingerprint: str) -> None:
        """Flag the model registered for *fingerprint* as self-referential."""
        entry = self._entries.get(fingerprint)
        if entry is not None:
            entry.recursive = True

    def is_recursive(self, fingerprint: str) -> bool:
        """Return True if the model registered for *fingerprint* is self-referential."""
        entry = self._entries.get(fingerprint)
        return entry is not None and entry.recursive

    @property
    def names(self) -> list[str]:
        """Assigned model names in discovery order."""
        return [entry.assigned_name for entry in self._entries.values()]

    def entries(self) -> list[ModelEntry]:
        """Registered models in discovery order."""
        return list(self._entries.values())

    def declarations(self) -> list[ModelDeclaration]:
        """Return (name, is_forward_declarable) pairs in discovery order."""
        return [ModelDeclaration(e.assigned_name, e.recursive) for e in self._entries.values()]

    def render(self) -> str:
        """Return all model declarations as one block, in discovery order.

        Raises:
            GenerationError: If a registered model was never defined.
        """
        blocks: list[str] = []
        for entry in self._entries.values():
            if entry.definition_source is None:
                raise GenerationError(f"Model '{entry.assigned_name}' was registered but never defined")
            blocks.append(entry.definition_source)
        return "\n".join(blocks)


def schema_fingerprint(schema: SchemaNode) -> str:
    """Return the structural fingerprint of *schema*.

    Object fields are compared regardless of order; union variants and enum
    values are order-sensitive. Names and descriptions are ignored, and
    references contribute their target's identifier only.
    """
    return json.dumps(_canonical(schema), separators=(",", ":"))


# ################
# Implementation
# ################


def _canonical(schema: SchemaNode) -> Any:
    """Return a JSON-serializable canonical form of *schema*."""
    if isinstance(schema, PrimitiveSchema):
        return ["primitive", schema.type.value]
    if isinstance(schema, ArraySchema):
        return ["array", _canonical(schema.of)]
    if isinstance(schema, OptionalSchema):
        inner = schema.of
        while isinstance(inner, OptionalSchema):
            inner = inner.of
        return ["optional", _canonical(inner)]
    if isinstance(schema, ObjectSchema):
        return ["object", sorted([name, _canonical(field)] for name, field in schema.fields.items())]
    if isinstance(schema, DictionarySchema):
        return ["dictionary", _canonical(schema.key), _canonical(schema.value)]
    if isinstance(schema, EnumSchema):
        return ["enum", [[type(v).__name__, v] for v in schema.values]]
    if isinstance(schema, LiteralSchema):
        return ["literal", type(schema.value).__name__, schema.value]
    if isinstance(schema, UnionSchema):
        return ["union", [_canonical(v) for v in schema.variants]]
    if isinstance(schema, RefSchema):
        return ["ref", schema.ref]
    return ["unknown", type(schema).__name__]
