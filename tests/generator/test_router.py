# Copyright 2026 TRPCSwift Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for router class emission."""

import pytest

from trpcswift.generator.context import GenerationContext, GeneratorFlags
from trpcswift.generator.errors import NameCollisionError
from trpcswift.generator.registry import ModelRegistry
from trpcswift.generator.router import emit_router, member_collisions, route_class_name, route_class_names
from trpcswift.model.router import ProcedureDef, RouterNode
from trpcswift.model.schema import ObjectSchema, primitive


def _ctx(*, public: bool = False) -> GenerationContext:
    return GenerationContext(registry=ModelRegistry(), flags=GeneratorFlags(public_access=public))


def _lines(source: str) -> list[str]:
    return [line.strip() for line in source.splitlines() if line.strip()]


def _nested_router() -> RouterNode:
    return RouterNode(
        children={
            "health": ProcedureDef(kind="query", output=primitive("string")),
            "users": RouterNode(
                children={
                    "get": ProcedureDef(
                        kind="query",
                        input=primitive("string"),
                        output=ObjectSchema(fields={"id": primitive("string")}),
                    ),
                    "admin": RouterNode(children={"ban": ProcedureDef(kind="mutation", input=primitive("string"))}),
                }
            ),
        }
    )


# ###############
# Naming
# ###############


def test_route_class_name() -> None:
    assert route_class_name("users") == "UsersRoute"
    assert route_class_name("user-profiles") == "UserProfilesRoute"


def test_route_class_names_cover_the_whole_tree() -> None:
    assert route_class_names(_nested_router()) == {"UsersRoute", "AdminRoute"}


class TestMemberCollisions:
    def test_distinct_members_do_not_collide(self) -> None:
        assert member_collisions(_nested_router()) == []

    def test_keys_mapping_to_same_identifier_collide(self) -> None:
        router = RouterNode(children={"get-user": ProcedureDef(kind="query"), "getUser": ProcedureDef(kind="query")})
        messages = member_collisions(router)
        assert len(messages) == 1
        assert "'getUser' and 'get-user'" in messages[0]

    def test_transport_member_names_collide(self) -> None:
        messages = member_collisions(RouterNode(children={"url": ProcedureDef(kind="query")}))
        assert messages == ["'url' clashes with the generated member 'url'"]

    def test_route_class_names_collide(self) -> None:
        router = RouterNode(children={"users": RouterNode(), "Users": RouterNode()})
        assert any("UsersRoute" in message for message in member_collisions(router))

    def test_emit_router_raises_on_collision(self) -> None:
        items = RouterNode(children={"a-b": ProcedureDef(kind="query"), "aB": ProcedureDef(kind="query")})
        router = RouterNode(children={"items": items})
        with pytest.raises(NameCollisionError) as exc_info:
            emit_router(router, "API", _ctx())
        assert exc_info.value.path == "items"


# ###############
# Emission
# ###############


class TestEmitRouter:
    def test_root_class_holds_transport_configuration(self) -> None:
        lines = _lines(emit_router(RouterNode(), "API", _ctx()))
        assert lines == [
            "class API: TRPCClientData {",
            "let url: URL",
            "let middlewares: [TRPCMiddleware]",
            "init(baseUrl: URL, middlewares: [TRPCMiddleware] = []) {",
            "url = baseUrl",
            "self.middlewares = middlewares",
            "}",
            "}",
        ]

    def test_nested_routers_become_lazy_route_classes(self) -> None:
        ctx = _ctx()
        lines = _lines(emit_router(_nested_router(), "API", ctx))
        assert "lazy var users = UsersRoute(clientData: self)" in lines
        assert "class UsersRoute: TRPCClientData {" in lines
        assert "lazy var admin = AdminRoute(clientData: self)" in lines
        assert "class AdminRoute: TRPCClientData {" in lines
        assert "init(clientData: TRPCClientData) {" in lines
        assert "clientData.url" in lines
        assert "clientData.middlewares" in lines

    def test_procedures_use_dotted_paths(self) -> None:
        code = emit_router(_nested_router(), "API", _ctx())
        assert 'url.appendingPathComponent("health")' in code
        assert 'url.appendingPathComponent("users.get")' in code
        assert 'url.appendingPathComponent("users.admin.ban")' in code
        assert "func get(input: String) async throws -> UsersGetOutput {" in code

    def test_children_are_emitted_in_declaration_order(self) -> None:
        code = emit_router(_nested_router(), "API", _ctx())
        assert code.index("func health(") < code.index("class UsersRoute") < code.index("func get(")
        assert code.index("func get(") < code.index("class AdminRoute")

    def test_models_are_rendered_inside_the_root_class(self) -> None:
        ctx = _ctx()
        lines = _lines(emit_router(_nested_router(), "API", ctx))
        assert ctx.registry.names == ["UsersGetOutput"]
        assert lines.index("struct UsersGetOutput: Codable {") < lines.index("class UsersRoute: TRPCClientData {")

    def test_public_access(self) -> None:
        lines = _lines(emit_router(_nested_router(), "API", _ctx(public=True)))
        assert "public class API: TRPCClientData {" in lines
        assert "public let url: URL" in lines
        assert "let middlewares: [TRPCMiddleware]" in lines
        assert "public convenience init(baseUrl: URL) {" in lines
        assert "public lazy var users = UsersRoute(clientData: self)" in lines
        assert "public class UsersRoute: TRPCClientData {" in lines
        assert "public var url: URL {" in lines

    def test_router_description_becomes_doc_comment(self) -> None:
        code = emit_router(RouterNode(description="User management."), "API", _ctx())
        assert code.startswith("/// User management.\nclass API: TRPCClientData {\n")
