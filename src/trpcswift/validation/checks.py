# Copyright 2026 TRPCSwift Contributors
# SPDX-License-Identifier: Apache-2.0

"""Pre-flight checks for router documents.

These checks report every problem of a document at once, before generation
starts. Generation itself stops at the first error it meets.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from trpcswift.generator.router import member_collisions
from trpcswift.model.router import ProcedureDef, RouterDocument, RouterNode
from trpcswift.model.schema import (
    ArraySchema,
    DictionarySchema,
    EnumSchema,
    ObjectSchema,
    OptionalSchema,
    PrimitiveKind,
    PrimitiveSchema,
    RefSchema,
    SchemaNode,
    UnionSchema,
)

# ###############
# Public Interface
# ###############


@dataclass(frozen=True)
class ValidationWarning:
    """A non-fatal issue: the client can be generated but may be incomplete.

    Attributes:
        message: Human-readable description of the warning.
    """

    message: str


@dataclass(frozen=True)
class ValidationError:
    """A fatal issue: generation would fail.

    Attributes:
        message: Human-readable description of the error.
    """

    message: str


@dataclass
class ValidationResult:
    """Result of running the checks.

    Attributes:
        warnings: Non-fatal issues found during validation.
        errors: Fatal issues found during validation.
    """

    warnings: list[ValidationWarning] = field(default_factory=list)
    errors: list[ValidationError] = field(default_factory=list)

    @property
    def has_errors(self) -> bool:
        """Return True if any fatal validation errors were found."""
        return len(self.errors) > 0


def validate(document: RouterDocument) -> ValidationResult:
    """Run all checks on *document*.

    Checks performed:

    1. **Member collisions** (error): children of one router whose keys map
       to the same Swift identifier or route class, or that shadow the
       generated ``url``/``middlewares``/``clientData`` members.
    2. **Schema checks** (error): references to unknown definitions,
       dictionary keys other than ``string``, empty enums, enums mixing
       string and integer values, and unions without variants.
    3. **Unused definitions** (warning): definitions not reachable from any
       procedure.
    4. **Empty routers** (warning): nested routers without children.

    Args:
        document: The router document to check.

    Returns:
        A :class:`ValidationResult`; an empty result means the document is
        ready for generation.
    """
    warnings: list[ValidationWarning] = []
    errors: list[ValidationError] = []

    errors.extend(_check_members(document.router, ()))

    used: set[str] = set()
    for path, procedure in _walk_procedures(document.router, ()):
        for direction in ("input", "output"):
            schema = getattr(procedure, direction)
            if schema is not None:
                errors.extend(_check_schema(schema, f"{path}.{direction}", document, used))

    # Definitions reached only through other definitions count as used.
    pending = list(used)
    while pending:
        name = pending.pop()
        before = set(used)
        errors.extend(_check_schema(document.definitions[name], f"definitions.{name}", document, used))
        pending.extend(used - before)

    for name in document.definitions:
        if name not in used:
            warnings.append(ValidationWarning(message=f"Definition '{name}' is never referenced."))
            errors.extend(_check_schema(document.definitions[name], f"definitions.{name}", document, set()))

    warnings.extend(_check_empty_routers(document.router, ()))

    return ValidationResult(warnings=warnings, errors=errors)


# ################
# Implementation
# ################


def _label(path: tuple[str, ...]) -> str:
    return ".".join(path) if path else "<root>"


def _walk_procedures(router: RouterNode, path: tuple[str, ...]) -> list[tuple[str, ProcedureDef]]:
    """Return (dotted path, procedure) pairs in declaration order."""
    result: list[tuple[str, ProcedureDef]] = []
    for key, child in router.children.items():
        if isinstance(child, ProcedureDef):
            result.append((".".join((*path, key)), child))
        else:
            result.extend(_walk_procedures(child, (*path, key)))
    return result


def _check_members(router: RouterNode, path: tuple[str, ...]) -> list[ValidationError]:
    errors = [ValidationError(message=f"Router '{_label(path)}': {m}.") for m in member_collisions(router)]
    for key, child in router.routers():
        errors.extend(_check_members(child, (*path, key)))
    return errors


def _check_empty_routers(router: RouterNode, path: tuple[str, ...]) -> list[ValidationWarning]:
    warnings: list[ValidationWarning] = []
    if path and not router.children:
        warnings.append(ValidationWarning(message=f"Router '{_label(path)}' has no procedures."))
    for key, child in router.routers():
        warnings.extend(_check_empty_routers(child, (*path, key)))
    return warnings


def _check_schema(schema: SchemaNode, path: str, document: RouterDocument, used: set[str]) -> list[ValidationError]:
    """Return errors for *schema*, recording referenced definitions in *used*.

    References are not followed; the caller checks each definition once.
    """
    errors: list[ValidationError] = []
    if isinstance(schema, RefSchema):
        if schema.ref not in document.definitions:
            errors.append(ValidationError(message=f"{path}: unknown definition '{schema.ref}'."))
        else:
            used.add(schema.ref)
    elif isinstance(schema, ArraySchema):
        errors.extend(_check_schema(schema.of, f"{path}[]", document, used))
    elif isinstance(schema, OptionalSchema):
        errors.extend(_check_schema(schema.of, path, document, used))
    elif isinstance(schema, DictionarySchema):
        key = schema.key
        if isinstance(key, RefSchema) and key.ref in document.definitions:
            used.add(key.ref)
            key = document.definitions[key.ref]
        if not (isinstance(key, PrimitiveSchema) and key.type is PrimitiveKind.STRING):
            errors.append(ValidationError(message=f"{path}: dictionary keys must be strings."))
        errors.extend(_check_schema(schema.value, f"{path}.value", document, used))
    elif isinstance(schema, ObjectSchema):
        for name, field_schema in schema.fields.items():
            errors.extend(_check_schema(field_schema, f"{path}.{name}", document, used))
    elif isinstance(schema, EnumSchema):
        if not schema.values:
            errors.append(ValidationError(message=f"{path}: enum has no values."))
        elif not (
            all(isinstance(v, str) for v in schema.values)
            or all(isinstance(v, int) and not isinstance(v, bool) for v in schema.values)
        ):
            errors.append(ValidationError(message=f"{path}: enum values must be all strings or all integers."))
    elif isinstance(schema, UnionSchema):
        if not schema.variants:
            errors.append(ValidationError(message=f"{path}: union has no variants."))
        for index, variant in enumerate(schema.variants):
            errors.extend(_check_schema(variant, f"{path}.option{index + 1}", document, used))
    return errors
