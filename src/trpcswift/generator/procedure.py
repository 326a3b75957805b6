# Copyright 2026 TRPCSwift Contributors
# SPDX-License-Identifier: Apache-2.0

"""Emission of one procedure as a Swift method and its call-site."""

from __future__ import annotations

from trpcswift.generator.context import GenerationContext
from trpcswift.generator.naming import doc_comment, process_field_name, process_type_name, swift_string_literal
from trpcswift.generator.resolver import NO_PAYLOAD, SwiftType, member_access, resolve_type
from trpcswift.model.router import ProcedureDef, ProcedureKind

# ###############
# Public Interface
# ###############

# Transport verbs of the runtime template, keyed by procedure kind.
TRANSPORT_VERBS: dict[ProcedureKind, str] = {
    ProcedureKind.QUERY: "sendQuery",
    ProcedureKind.MUTATION: "sendMutation",
}


def emit_procedure(procedure: ProcedureDef, name: str, ctx: GenerationContext) -> str:
    """Return the Swift method for *procedure*.

    The method is named after the procedure's key and takes a single
    ``input`` parameter unless the procedure has no input. Queries and
    mutations call the matching transport verb with the dotted procedure
    path; subscriptions keep their signature but always throw, since the
    runtime has no streaming transport.

    Args:
        procedure: The procedure to emit.
        name: The procedure's key in its parent router.
        ctx: Context of the parent router.
    """
    procedure_path = ".".join([*ctx.route_path, name])
    type_prefix = "".join(process_type_name(key) for key in (*ctx.route_path, name))

    input_type = _resolve_payload(procedure, "input", ctx, f"{type_prefix}Input", procedure_path)
    output_type = _resolve_payload(procedure, "output", ctx, f"{type_prefix}Output", procedure_path)
    returns_value = procedure.output is not None and not output_type.is_null

    exposed = [input_type] if procedure.input is not None else []
    if returns_value:
        exposed.append(output_type)
    signature = f"{member_access(ctx, *exposed)}func {process_field_name(name)}("
    if procedure.input is not None:
        signature += f"input: {input_type.render()}"
    signature += ") async throws"
    if returns_value:
        signature += f" -> {output_type.render()}"

    code = doc_comment(procedure.description)
    code += signature + " {\n"

    kind = procedure.procedure_kind
    if kind is ProcedureKind.SUBSCRIPTION:
        code += (
            "throw TRPCError(code: .methodNotSupported, "
            'message: "Subscriptions are not supported by the generated client.")\n'
        )
    else:
        argument = "input" if procedure.input is not None else "TRPCClient.EmptyObject()"
        call = (
            f"TRPCClient.shared.{TRANSPORT_VERBS[kind]}("
            f"url: url.appendingPathComponent({swift_string_literal(procedure_path)}), "
            f"middlewares: middlewares, input: {argument})"
        )
        if returns_value:
            code += f"return try await {call}\n"
        else:
            code += f"let _: {output_type.render()} = try await {call}\n"

    code += "}\n"
    return code


# ################
# Implementation
# ################


def _resolve_payload(
    procedure: ProcedureDef,
    direction: str,
    ctx: GenerationContext,
    name_hint: str,
    procedure_path: str,
) -> SwiftType:
    """Resolve the input or output schema, or the no-payload type if absent."""
    schema = procedure.input if direction == "input" else procedure.output
    if schema is None:
        return NO_PAYLOAD
    return resolve_type(schema, ctx, name_hint, f"{procedure_path}.{direction}")
