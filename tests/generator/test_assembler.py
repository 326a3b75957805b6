# Copyright 2026 TRPCSwift Contributors
# SPDX-License-Identifier: Apache-2.0

"""End-to-end tests for client assembly."""

from pathlib import Path

import pytest

from trpcswift.generator import assembler
from trpcswift.generator.assembler import generate_client, load_template, write_client_file
from trpcswift.generator.context import GeneratorFlags
from trpcswift.generator.errors import MissingTemplateResourceError, UnresolvedReferenceError
from trpcswift.model.router import ProcedureDef, RouterDocument, RouterNode
from trpcswift.model.schema import ArraySchema, ObjectSchema, OptionalSchema, RefSchema, primitive

TEMPLATE = "// runtime\n"


def _get_user_router() -> RouterNode:
    return RouterNode(
        children={
            "getUser": ProcedureDef(
                kind="query",
                input=ObjectSchema(fields={"id": primitive("string")}),
                output=ObjectSchema(fields={"id": primitive("string"), "name": primitive("string")}),
            )
        }
    )


# ###############
# Assembly
# ###############


def test_get_user_client() -> None:
    assert generate_client("API", _get_user_router(), template=TEMPLATE) == (
        "// runtime\n"
        "\n"
        "class API: TRPCClientData {\n"
        "    let url: URL\n"
        "    let middlewares: [TRPCMiddleware]\n"
        "\n"
        "    init(baseUrl: URL, middlewares: [TRPCMiddleware] = []) {\n"
        "        url = baseUrl\n"
        "        self.middlewares = middlewares\n"
        "    }\n"
        "\n"
        "    struct GetUserInput: Codable {\n"
        "        var id: String\n"
        "    }\n"
        "\n"
        "    struct GetUserOutput: Codable {\n"
        "        var id: String\n"
        "        var name: String\n"
        "    }\n"
        "\n"
        "    func getUser(input: GetUserInput) async throws -> GetUserOutput {\n"
        "        return try await TRPCClient.shared.sendQuery("
        'url: url.appendingPathComponent("getUser"), middlewares: middlewares, input: input)\n'
        "    }\n"
        "}\n"
    )


def test_generation_is_deterministic() -> None:
    first = generate_client("API", _get_user_router(), template=TEMPLATE)
    second = generate_client("API", _get_user_router(), template=TEMPLATE)
    assert first == second


def test_identical_shapes_share_one_model() -> None:
    shape = ObjectSchema(fields={"ok": primitive("bool")})
    router = RouterNode(
        children={
            "a": ProcedureDef(kind="mutation", output=shape),
            "b": ProcedureDef(kind="mutation", output=shape.model_copy()),
        }
    )
    code = generate_client("API", router, template=TEMPLATE)
    assert code.count(": Codable {") == 1
    assert "func a() async throws -> AOutput {" in code
    assert "func b() async throws -> AOutput {" in code


def test_recursive_definition_becomes_class() -> None:
    document = RouterDocument(
        definitions={
            "TreeNode": ObjectSchema(
                fields={"label": primitive("string"), "children": ArraySchema(of=RefSchema(ref="TreeNode"))}
            )
        },
        router=RouterNode(children={"root": ProcedureDef(kind="query", output=RefSchema(ref="TreeNode"))}),
    )
    code = generate_client("API", document, template=TEMPLATE)
    assert "    final class TreeNode: Codable {\n" in code
    assert "        var children: [TreeNode]\n" in code
    assert "func root() async throws -> TreeNode {" in code


def test_extra_definitions_are_merged_over_document() -> None:
    document = RouterDocument(
        definitions={"Id": primitive("int")},
        router=RouterNode(children={"get": ProcedureDef(kind="query", input=RefSchema(ref="Id"))}),
    )
    code = generate_client("API", document, definitions={"Id": primitive("string")}, template=TEMPLATE)
    assert "func get(input: String) async throws {" in code


def test_unknown_reference_aborts_generation() -> None:
    router = RouterNode(children={"get": ProcedureDef(kind="query", output=RefSchema(ref="Missing"))})
    with pytest.raises(UnresolvedReferenceError, match="get.output"):
        generate_client("API", router, template=TEMPLATE)


def test_model_names_avoid_root_and_route_classes() -> None:
    router = RouterNode(
        children={
            "users": RouterNode(
                children={
                    "get": ProcedureDef(kind="query", output=ObjectSchema(fields={"id": primitive("int")}, name="API")),
                    "list": ProcedureDef(
                        kind="query", output=ObjectSchema(fields={"n": primitive("int")}, name="UsersRoute")
                    ),
                }
            )
        }
    )
    code = generate_client("API", router, template=TEMPLATE)
    assert "struct API2: Codable {" in code
    assert "struct UsersRoute2: Codable {" in code
    assert "class UsersRoute: TRPCClientData {" in code


def test_model_names_avoid_root_procedure_names() -> None:
    router = RouterNode(
        children={
            "Status": ProcedureDef(kind="query", output=ObjectSchema(fields={"ok": primitive("bool")}, name="Status")),
        }
    )
    code = generate_client("API", router, template=TEMPLATE)
    assert "struct Status: Codable {" not in code
    assert "    struct Status2: Codable {\n" in code
    assert "    func Status() async throws -> Status2 {\n" in code


def test_model_names_avoid_root_router_members() -> None:
    router = RouterNode(
        children={
            "Users": RouterNode(children={"ping": ProcedureDef(kind="query")}),
            "get": ProcedureDef(kind="query", output=ObjectSchema(fields={"id": primitive("int")}, name="Users")),
        }
    )
    code = generate_client("API", router, template=TEMPLATE)
    assert "    lazy var Users = UsersRoute(clientData: self)\n" in code
    assert "struct Users: Codable {" not in code
    assert "    struct Users2: Codable {\n" in code
    assert "    func get() async throws -> Users2 {\n" in code


class TestFlags:
    def test_type_aliases_cover_every_model(self) -> None:
        code = generate_client("API", _get_user_router(), GeneratorFlags(create_type_aliases=True), template=TEMPLATE)
        assert code.endswith(
            "}\n\ntypealias GetUserInput = API.GetUserInput\ntypealias GetUserOutput = API.GetUserOutput\n"
        )

    def test_no_aliases_without_models(self) -> None:
        router = RouterNode(children={"ping": ProcedureDef(kind="query")})
        code = generate_client("API", router, GeneratorFlags(create_type_aliases=True), template=TEMPLATE)
        assert "typealias" not in code

    def test_public_access(self) -> None:
        flags = GeneratorFlags(create_type_aliases=True, public_access=True)
        code = generate_client("API", _get_user_router(), flags, template=TEMPLATE)
        assert "public class API: TRPCClientData {" in code
        assert "    public struct GetUserInput: Codable {\n" in code
        assert "        public init(id: String) {\n" in code
        assert "    public func getUser(input: GetUserInput) async throws -> GetUserOutput {\n" in code
        assert "public typealias GetUserOutput = API.GetUserOutput\n" in code

    def test_indent_width(self) -> None:
        code = generate_client("API", _get_user_router(), GeneratorFlags(indent=2), template=TEMPLATE)
        assert "\n  struct GetUserInput: Codable {\n    var id: String\n" in code

    def test_optional_field_in_public_init_defaults_to_nil(self) -> None:
        router = RouterNode(
            children={
                "save": ProcedureDef(
                    kind="mutation",
                    input=ObjectSchema(fields={"note": OptionalSchema(of=primitive("string"))}),
                )
            }
        )
        code = generate_client("API", router, GeneratorFlags(public_access=True), template=TEMPLATE)
        assert "public init(note: String? = nil) {" in code


# ###############
# Template
# ###############


class TestTemplate:
    def test_packaged_template_declares_runtime(self) -> None:
        template = load_template()
        assert "class TRPCClient {" in template
        assert "protocol TRPCClientData: AnyObject {" in template
        assert "func sendQuery<" in template

    def test_generated_client_starts_with_template(self) -> None:
        code = generate_client("API", _get_user_router())
        assert code.startswith("//\n//  TRPCClient.swift\n")
        assert "struct EmptyObject: Codable {}" in code
        assert code.index("class TRPCClient {") < code.index("class API: TRPCClientData {")

    def test_missing_template_raises(self, monkeypatch: pytest.MonkeyPatch) -> None:
        def missing(package: str) -> None:
            raise ModuleNotFoundError(package)

        monkeypatch.setattr(assembler.resources, "files", missing)
        with pytest.raises(MissingTemplateResourceError):
            generate_client("API", _get_user_router())


# ###############
# Output File
# ###############


class TestWriteClientFile:
    def test_writes_file_and_creates_directories(self, tmp_path: Path) -> None:
        out_file = tmp_path / "Sources" / "API.swift"
        write_client_file("API", _get_user_router(), None, out_file)
        assert out_file.read_text(encoding="utf-8") == generate_client("API", _get_user_router())
        assert [p.name for p in out_file.parent.iterdir()] == ["API.swift"]

    def test_failed_generation_leaves_existing_file(self, tmp_path: Path) -> None:
        out_file = tmp_path / "API.swift"
        out_file.write_text("previous", encoding="utf-8")
        router = RouterNode(children={"get": ProcedureDef(kind="query", output=RefSchema(ref="Missing"))})
        with pytest.raises(UnresolvedReferenceError):
            write_client_file("API", router, GeneratorFlags(), out_file)
        assert out_file.read_text(encoding="utf-8") == "previous"
        assert [p.name for p in tmp_path.iterdir()] == ["API.swift"]
