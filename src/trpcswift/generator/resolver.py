# Copyright 2026 TRPCSwift Contributors
# SPDX-License-Identifier: Apache-2.0

"""Resolution of schema nodes into Swift type expressions.

Primitive and container schemas map directly onto Swift spellings. Object,
enum and union schemas are *named*: resolving them registers a model with
the run's :class:`~trpcswift.generator.registry.ModelRegistry` (reusing an
existing one when the structural fingerprint matches) and returns a
reference to it.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, replace

from trpcswift.generator.context import GenerationContext
from trpcswift.generator.errors import (
    NonStringDictionaryKeyError,
    UnresolvableSchemaKindError,
    UnresolvedReferenceError,
)
from trpcswift.generator.naming import (
    doc_comment,
    lower_first,
    process_field_name,
    process_type_name,
    swift_string_literal,
    unescaped,
)
from trpcswift.generator.registry import schema_fingerprint
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
)

# ###############
# Public Interface
# ###############


@dataclass(frozen=True)
class SwiftType:
    """A resolved Swift type expression.

    Attributes:
        spelling: The type without the optional marker (e.g. ``"[String]"``).
        optional: True if the type is wrapped in Swift's ``Optional``.
        label: camelCase word describing the type, used to name union cases.
        is_null: True for the standalone ``null`` type.
    """

    spelling: str
    optional: bool = False
    label: str = "value"
    is_null: bool = False

    def render(self) -> str:
        """Return the Swift spelling, including the optional marker."""
        return f"{self.spelling}?" if self.optional else self.spelling

    def as_optional(self) -> SwiftType:
        """Return this type wrapped in a single optional layer."""
        return self if self.optional else replace(self, optional=True)


# The "no payload" type used for procedures without input or output.
NO_PAYLOAD = SwiftType("TRPCClient.EmptyObject", label="empty")

PRIMITIVE_TYPES: dict[PrimitiveKind, SwiftType] = {
    PrimitiveKind.STRING: SwiftType("String", label="string"),
    PrimitiveKind.INT: SwiftType("Int", label="int"),
    PrimitiveKind.DOUBLE: SwiftType("Double", label="double"),
    PrimitiveKind.BOOL: SwiftType("Bool", label="bool"),
    PrimitiveKind.DATE: SwiftType("Date", label="date"),
    PrimitiveKind.NULL: SwiftType("TRPCClient.EmptyObject", optional=True, label="null", is_null=True),
}

# Types nested in the runtime's internal TRPCClient class.
TEMPLATE_TYPE_PREFIX = "TRPCClient."


def resolve_type(schema: SchemaNode, ctx: GenerationContext, name_hint: str, path: str = "") -> SwiftType:
    """Resolve *schema* to a Swift type, registering any models it needs.

    Args:
        schema: The schema node to resolve.
        ctx: The generation context of the enclosing router.
        name_hint: Model name to use for an unnamed object, enum or union.
        path: Dotted location of *schema*, used in error messages.

    Raises:
        UnresolvableSchemaKindError: If the schema cannot be represented.
        NonStringDictionaryKeyError: If a dictionary key is not a string.
        UnresolvedReferenceError: If a reference names no definition.
        NameCollisionError: If no unique model name can be found.
    """
    return _resolve(schema, ctx, name_hint, path, frozenset())


def member_access(ctx: GenerationContext, *types: SwiftType) -> str:
    """Return the access prefix for a member whose signature mentions *types*.

    Members exposing a type of the internal runtime template stay internal.
    """
    if any(TEMPLATE_TYPE_PREFIX in t.render() for t in types):
        return ""
    return ctx.access


# ################
# Implementation
# ################

_NAMED_KINDS = (ObjectSchema, EnumSchema, UnionSchema)

_Renderer = Callable[[SchemaNode, str, str, GenerationContext, str], str]


@dataclass(frozen=True)
class _Property:
    key: str
    swift_name: str
    type: SwiftType
    description: str | None


def _resolve(
    schema: SchemaNode,
    ctx: GenerationContext,
    name_hint: str,
    path: str,
    expanding: frozenset[str],
) -> SwiftType:
    """Dispatch on the schema kind.

    *expanding* holds the references being expanded since the last named
    model; meeting one of them again without passing a model is a cycle
    Swift cannot express.
    """
    if isinstance(schema, PrimitiveSchema):
        return PRIMITIVE_TYPES[schema.type]
    if isinstance(schema, LiteralSchema):
        return _literal_type(schema)
    if isinstance(schema, OptionalSchema):
        return _resolve(schema.of, ctx, name_hint, path, expanding).as_optional()
    if isinstance(schema, ArraySchema):
        element = _resolve(schema.of, ctx, name_hint, f"{path}[]", expanding)
        return SwiftType(f"[{element.render()}]", label=f"{element.label}Array")
    if isinstance(schema, DictionarySchema):
        _check_dictionary_key(schema.key, ctx, path)
        value = _resolve(schema.value, ctx, f"{name_hint}Value", f"{path}.value", expanding)
        return SwiftType(f"[String: {value.render()}]", label=f"{value.label}Dictionary")
    if isinstance(schema, ObjectSchema):
        return _resolve_named(schema, ctx, name_hint, path, _render_object)
    if isinstance(schema, EnumSchema):
        return _resolve_named(schema, ctx, name_hint, path, _render_enum)
    if isinstance(schema, UnionSchema):
        return _resolve_union(schema, ctx, name_hint, path, expanding)
    if isinstance(schema, RefSchema):
        return _resolve_ref(schema, ctx, path, expanding)
    kind = getattr(schema, "kind", type(schema).__name__)
    raise UnresolvableSchemaKindError(f"Unsupported schema kind '{kind}'", path)


def _literal_type(schema: LiteralSchema) -> SwiftType:
    """Return the primitive type of a literal value."""
    if isinstance(schema.value, bool):
        return PRIMITIVE_TYPES[PrimitiveKind.BOOL]
    if isinstance(schema.value, int):
        return PRIMITIVE_TYPES[PrimitiveKind.INT]
    if isinstance(schema.value, float):
        return PRIMITIVE_TYPES[PrimitiveKind.DOUBLE]
    return PRIMITIVE_TYPES[PrimitiveKind.STRING]


def _follow_ref(schema: RefSchema, ctx: GenerationContext, path: str) -> tuple[str, SchemaNode]:
    """Follow a chain of references to the first non-reference definition."""
    seen: list[str] = []
    current: SchemaNode = schema
    while isinstance(current, RefSchema):
        if current.ref in seen:
            chain = " -> ".join([*seen, current.ref])
            raise UnresolvableSchemaKindError(f"Reference cycle without a concrete type: {chain}", path)
        if current.ref not in ctx.definitions:
            raise UnresolvedReferenceError(f"Unknown definition '{current.ref}'", path)
        seen.append(current.ref)
        current = ctx.definitions[current.ref]
    return seen[-1], current


def _resolve_ref(schema: RefSchema, ctx: GenerationContext, path: str, expanding: frozenset[str]) -> SwiftType:
    ref_name, target = _follow_ref(schema, ctx, path)
    if ref_name in expanding and not isinstance(target, _NAMED_KINDS):
        raise UnresolvableSchemaKindError(
            f"Definition '{ref_name}' refers to itself without passing through an object, enum or union",
            path,
        )
    return _resolve(target, ctx, process_type_name(ref_name), path, expanding | {ref_name})


def _check_dictionary_key(key: SchemaNode, ctx: GenerationContext, path: str) -> None:
    if isinstance(key, RefSchema):
        _, key = _follow_ref(key, ctx, path)
    if not (isinstance(key, PrimitiveSchema) and key.type is PrimitiveKind.STRING):
        raise NonStringDictionaryKeyError(
            f"Dictionary keys must be strings, got '{getattr(key, 'kind', type(key).__name__)}'",
            path,
        )


def _resolve_named(
    schema: ObjectSchema | EnumSchema | UnionSchema,
    ctx: GenerationContext,
    name_hint: str,
    path: str,
    renderer: _Renderer,
) -> SwiftType:
    """Return a reference to the model for *schema*, registering it first if new."""
    registry = ctx.registry
    fingerprint = schema_fingerprint(schema)
    existing = registry.lookup(fingerprint)
    if existing is not None:
        if registry.is_in_progress(fingerprint):
            registry.mark_recursive(fingerprint)
        return _model_type(existing)

    desired = process_type_name(schema.name) if schema.name else name_hint
    name = registry.register(fingerprint, desired, ctx.visible_model_names)
    registry.define(fingerprint, renderer(schema, name, fingerprint, ctx, path))
    return _model_type(name)


def _model_type(name: str) -> SwiftType:
    return SwiftType(name, label=lower_first(name))


def _resolve_union(
    schema: UnionSchema,
    ctx: GenerationContext,
    name_hint: str,
    path: str,
    expanding: frozenset[str],
) -> SwiftType:
    """Resolve a union, folding ``null`` variants into optionality."""
    variants = [v for v in schema.variants if not _is_null(v)]
    nullable = len(variants) != len(schema.variants)

    if not variants:
        if nullable:
            return PRIMITIVE_TYPES[PrimitiveKind.NULL]
        raise UnresolvableSchemaKindError("Union has no variants", path)

    if len(variants) == 1:
        hint = process_type_name(schema.name) if schema.name else name_hint
        resolved = _resolve(variants[0], ctx, hint, path, expanding)
    elif all(isinstance(v, LiteralSchema) and isinstance(v.value, str) for v in variants):
        values: list[str | int] = [
            v.value for v in variants if isinstance(v, LiteralSchema) and isinstance(v.value, str)
        ]
        as_enum = EnumSchema(values=values, name=schema.name, description=schema.description)
        resolved = _resolve_named(as_enum, ctx, name_hint, path, _render_enum)
    else:
        stripped = schema.model_copy(update={"variants": variants})
        resolved = _resolve_named(stripped, ctx, name_hint, path, _render_union)

    return resolved.as_optional() if nullable else resolved


def _is_null(schema: SchemaNode) -> bool:
    return isinstance(schema, PrimitiveSchema) and schema.type is PrimitiveKind.NULL


def _unique(name: str, taken: set[str]) -> str:
    """Return *name*, or *name* with the first free numeric suffix."""
    candidate = name
    index = 1
    while unescaped(candidate) in taken:
        index += 1
        candidate = f"{unescaped(name)}{index}"
    taken.add(unescaped(candidate))
    return candidate


def _render_object(schema: SchemaNode, name: str, fingerprint: str, ctx: GenerationContext, path: str) -> str:
    assert isinstance(schema, ObjectSchema)
    access = ctx.access
    taken: set[str] = set()
    properties: list[_Property] = []
    for key, field_schema in schema.fields.items():
        swift_name = _unique(process_field_name(key), taken)
        field_type = _resolve(field_schema, ctx, name + process_type_name(key), f"{path}.{key}", frozenset())
        properties.append(_Property(key, swift_name, field_type, field_schema.description))

    recursive = ctx.registry.is_recursive(fingerprint)
    keyword = "final class" if recursive else "struct"
    code = doc_comment(schema.description)
    code += f"{access}{keyword} {name}: Codable {{\n"
    for prop in properties:
        code += doc_comment(prop.description)
        code += f"{member_access(ctx, prop.type)}var {prop.swift_name}: {prop.type.render()}\n"

    if any(unescaped(p.swift_name) != p.key for p in properties):
        code += "\nenum CodingKeys: String, CodingKey {\n"
        for prop in properties:
            code += f"case {prop.swift_name} = {swift_string_literal(prop.key)}\n"
        code += "}\n"

    if recursive or ctx.flags.public_access:
        params = ", ".join(
            f"{p.swift_name}: {p.type.render()}" + (" = nil" if p.type.optional else "") for p in properties
        )
        code += f"\n{member_access(ctx, *(p.type for p in properties))}init({params}) {{\n"
        for prop in properties:
            code += f"self.{prop.swift_name} = {prop.swift_name}\n"
        code += "}\n"

    code += "}\n"
    return code


def _render_enum(schema: SchemaNode, name: str, fingerprint: str, ctx: GenerationContext, path: str) -> str:
    assert isinstance(schema, EnumSchema)
    if not schema.values:
        raise UnresolvableSchemaKindError("Enum has no values", path)
    if all(isinstance(v, str) for v in schema.values):
        raw_type = "String"
    elif all(isinstance(v, int) and not isinstance(v, bool) for v in schema.values):
        raw_type = "Int"
    else:
        raise UnresolvableSchemaKindError("Enum values must be all strings or all integers", path)

    taken: set[str] = set()
    code = doc_comment(schema.description)
    code += f"{ctx.access}enum {name}: {raw_type}, Codable, CaseIterable {{\n"
    for value in schema.values:
        if isinstance(value, str):
            case_name = _unique(process_field_name(value) if value else "empty", taken)
            code += f"case {case_name} = {swift_string_literal(value)}\n"
        else:
            base = f"valueMinus{-value}" if value < 0 else f"value{value}"
            code += f"case {_unique(base, taken)} = {value}\n"
    code += "}\n"
    return code


def _render_union(schema: SchemaNode, name: str, fingerprint: str, ctx: GenerationContext, path: str) -> str:
    assert isinstance(schema, UnionSchema)
    access = ctx.access
    cases: list[tuple[str, SwiftType]] = []
    seen_types: set[str] = set()
    taken: set[str] = set()
    for index, variant in enumerate(schema.variants):
        variant_type = _resolve(variant, ctx, f"{name}Option{index + 1}", f"{path}.option{index + 1}", frozenset())
        if variant_type.render() in seen_types:
            continue
        if ctx.flags.public_access and not member_access(ctx, variant_type):
            raise UnresolvableSchemaKindError(
                f"Variant type '{variant_type.render()}' is internal to the runtime and cannot be a case of a "
                "public enum",
                f"{path}.option{index + 1}",
            )
        seen_types.add(variant_type.render())
        cases.append((_unique(process_field_name(variant_type.label), taken), variant_type))

    indirect = "indirect " if ctx.registry.is_recursive(fingerprint) else ""
    code = doc_comment(schema.description)
    code += f"{access}{indirect}enum {name}: Codable {{\n"
    for case_name, case_type in cases:
        code += f"case {case_name}({case_type.render()})\n"

    code += f"\n{access}init(from decoder: Decoder) throws {{\n"
    code += "let container = try decoder.singleValueContainer()\n"
    for index, (case_name, case_type) in enumerate(cases):
        prefix = "if" if index == 0 else "} else if"
        code += f"{prefix} let value = try? container.decode({case_type.render()}.self) {{\n"
        code += f"self = .{case_name}(value)\n"
    code += "} else {\n"
    code += (
        f"throw DecodingError.typeMismatch({name}.self, DecodingError.Context("
        f'codingPath: decoder.codingPath, debugDescription: "Value does not match any variant of {name}."))\n'
    )
    code += "}\n"
    code += "}\n"

    code += f"\n{access}func encode(to encoder: Encoder) throws {{\n"
    code += "var container = encoder.singleValueContainer()\n"
    code += "switch self {\n"
    for case_name, _ in cases:
        code += f"case .{case_name}(let value):\n"
        code += "try container.encode(value)\n"
    code += "}\n"
    code += "}\n"
    code += "}\n"
    return code
