# Copyright 2026 TRPCSwift Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for procedure method emission."""

from trpcswift.generator.context import GenerationContext, GeneratorFlags
from trpcswift.generator.procedure import emit_procedure
from trpcswift.generator.registry import ModelRegistry
from trpcswift.model.router import ProcedureDef
from trpcswift.model.schema import ObjectSchema, primitive


def _ctx(*route_path: str, public: bool = False) -> GenerationContext:
    return GenerationContext(
        registry=ModelRegistry(),
        flags=GeneratorFlags(public_access=public),
        route_depth=len(route_path),
        route_path=route_path,
    )


def _lines(source: str) -> list[str]:
    return [line.strip() for line in source.splitlines() if line.strip()]


def test_query_with_input_and_output() -> None:
    ctx = _ctx("users")
    procedure = ProcedureDef(
        kind="query",
        input=ObjectSchema(fields={"id": primitive("string")}),
        output=ObjectSchema(fields={"id": primitive("string"), "name": primitive("string")}),
    )
    assert _lines(emit_procedure(procedure, "getUser", ctx)) == [
        "func getUser(input: UsersGetUserInput) async throws -> UsersGetUserOutput {",
        "return try await TRPCClient.shared.sendQuery("
        'url: url.appendingPathComponent("users.getUser"), middlewares: middlewares, input: input)',
        "}",
    ]
    assert ctx.registry.names == ["UsersGetUserInput", "UsersGetUserOutput"]


def test_mutation_uses_mutation_transport() -> None:
    procedure = ProcedureDef(kind="mutation", input=primitive("int"), output=primitive("bool"))
    code = emit_procedure(procedure, "bump", _ctx())
    assert "func bump(input: Int) async throws -> Bool {" in code
    assert 'TRPCClient.shared.sendMutation(url: url.appendingPathComponent("bump")' in code


def test_procedure_without_input_sends_empty_object() -> None:
    code = emit_procedure(ProcedureDef(kind="query", output=primitive("string")), "health", _ctx())
    assert "func health() async throws -> String {" in code
    assert "input: TRPCClient.EmptyObject())" in code


def test_procedure_without_output_discards_response() -> None:
    code = emit_procedure(ProcedureDef(kind="mutation", input=primitive("string")), "delete", _ctx("users"))
    lines = _lines(code)
    assert lines[0] == "func delete(input: String) async throws {"
    assert lines[1].startswith("let _: TRPCClient.EmptyObject = try await TRPCClient.shared.sendMutation(")


def test_null_output_is_not_returned() -> None:
    code = emit_procedure(ProcedureDef(kind="mutation", output=primitive("null")), "reset", _ctx())
    assert "func reset() async throws {" in code
    assert "let _: TRPCClient.EmptyObject? = try await" in code


def test_subscription_keeps_signature_and_throws() -> None:
    procedure = ProcedureDef(kind="subscription", input=primitive("string"), output=primitive("int"))
    lines = _lines(emit_procedure(procedure, "onTick", _ctx("events")))
    assert lines == [
        "func onTick(input: String) async throws -> Int {",
        "throw TRPCError(code: .methodNotSupported, "
        'message: "Subscriptions are not supported by the generated client.")',
        "}",
    ]


def test_keyword_procedure_name_is_escaped() -> None:
    code = emit_procedure(ProcedureDef(kind="query"), "default", _ctx())
    assert code.splitlines()[0] == "func `default`() async throws {"
    assert 'url.appendingPathComponent("default")' in code


def test_description_and_public_access() -> None:
    procedure = ProcedureDef(kind="query", output=primitive("string"), description="Returns the version.")
    lines = _lines(emit_procedure(procedure, "version", _ctx(public=True)))
    assert lines[0] == "/// Returns the version."
    assert lines[1] == "public func version() async throws -> String {"


def test_runtime_payload_types_keep_method_internal() -> None:
    procedure = ProcedureDef(kind="mutation", input=primitive("null"))
    lines = _lines(emit_procedure(procedure, "reset", _ctx(public=True)))
    assert lines[0] == "func reset(input: TRPCClient.EmptyObject?) async throws {"
