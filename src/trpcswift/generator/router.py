# Copyright 2026 TRPCSwift Contributors
# SPDX-License-Identifier: Apache-2.0

"""Emission of a router tree as nested Swift classes.

The root router becomes ``class <Name>: TRPCClientData`` holding the base URL
and middlewares. Every nested router becomes a ``<Key>Route`` class declared
inside its parent and exposed through a ``lazy var``; it forwards ``url`` and
``middlewares`` to the parent, so the whole tree shares one transport
configuration.
"""

from __future__ import annotations

import logging

from trpcswift.generator.context import GenerationContext
from trpcswift.generator.errors import NameCollisionError
from trpcswift.generator.naming import doc_comment, process_field_name, process_type_name, unescaped
from trpcswift.generator.procedure import emit_procedure
from trpcswift.model.router import ProcedureDef, RouterNode

logger = logging.getLogger(__name__)

# ###############
# Public Interface
# ###############

# Members every generated router class declares.
TRANSPORT_MEMBERS: frozenset[str] = frozenset({"url", "middlewares", "clientData"})


def route_class_name(key: str) -> str:
    """Return the class name generated for the nested router *key*."""
    return f"{process_type_name(key)}Route"


def route_class_names(router: RouterNode) -> set[str]:
    """Return the class names of all routers nested anywhere under *router*."""
    names: set[str] = set()
    for key, child in router.routers():
        names.add(route_class_name(key))
        names |= route_class_names(child)
    return names


def member_names(router: RouterNode) -> set[str]:
    """Return the unescaped Swift members declared for the children of *router*."""
    return {unescaped(process_field_name(key)) for key in router.children}


def member_collisions(router: RouterNode) -> list[str]:
    """Return messages for children of *router* whose Swift members clash.

    Two children clash when their keys map to the same Swift identifier or
    route class name; a child also clashes with the transport members every
    router class declares.
    """
    messages: list[str] = []
    owners: dict[str, str] = {}
    for key, child in router.children.items():
        identifiers = [unescaped(process_field_name(key))]
        if isinstance(child, RouterNode):
            identifiers.append(route_class_name(key))
        for identifier in identifiers:
            if identifier in TRANSPORT_MEMBERS:
                messages.append(f"'{key}' clashes with the generated member '{identifier}'")
            elif identifier in owners:
                messages.append(f"'{key}' and '{owners[identifier]}' both map to the Swift name '{identifier}'")
            else:
                owners[identifier] = key
    return messages


def emit_router(router: RouterNode, name: str, ctx: GenerationContext) -> str:
    """Return the Swift class for *router* and, recursively, its children.

    Children are emitted in declaration order. At the root, the model block
    of the run's registry is rendered into the class body once the whole
    tree has been walked.

    Args:
        router: The router to emit.
        name: The caller-supplied root name, or the router's key in its parent.
        ctx: Context for this router; ``route_depth`` 0 denotes the root.

    Raises:
        NameCollisionError: If two children map to the same Swift member.
        GenerationError: If any procedure's schemas cannot be resolved.
    """
    location = ".".join(ctx.route_path) or name
    collisions = member_collisions(router)
    if collisions:
        raise NameCollisionError("; ".join(collisions), location)

    access = ctx.access
    is_root = ctx.route_depth == 0
    child_routers = router.routers()
    scope_ctx = ctx.with_names({route_class_name(key) for key, _ in child_routers})

    inner = ""
    for key, child in router.children.items():
        inner += "\n"
        if isinstance(child, ProcedureDef):
            inner += emit_procedure(child, key, scope_ctx)
        else:
            inner += emit_router(child, key, scope_ctx.child(key))

    class_name = process_type_name(name) if is_root else route_class_name(name)
    code = doc_comment(router.description)
    code += f"{access}class {class_name}: TRPCClientData {{\n"
    for key, _ in child_routers:
        code += f"{access}lazy var {process_field_name(key)} = {route_class_name(key)}(clientData: self)\n"
    if child_routers:
        code += "\n"

    if is_root:
        code += _root_transport_members(ctx)
        models = ctx.registry.render()
        if models:
            code += "\n" + models
    else:
        code += _nested_transport_members(ctx)

    code += inner
    code += "}\n"
    logger.debug("Emitted router '%s' with %d child(ren)", class_name, len(router.children))
    return code


# ################
# Implementation
# ################


def _root_transport_members(ctx: GenerationContext) -> str:
    if not ctx.flags.public_access:
        return (
            "let url: URL\n"
            "let middlewares: [TRPCMiddleware]\n"
            "\n"
            "init(baseUrl: URL, middlewares: [TRPCMiddleware] = []) {\n"
            "url = baseUrl\n"
            "self.middlewares = middlewares\n"
            "}\n"
        )
    # The middleware type is internal to the runtime template, so members using
    # it cannot be public.
    return (
        "public let url: URL\n"
        "let middlewares: [TRPCMiddleware]\n"
        "\n"
        "init(baseUrl: URL, middlewares: [TRPCMiddleware]) {\n"
        "url = baseUrl\n"
        "self.middlewares = middlewares\n"
        "}\n"
        "\n"
        "public convenience init(baseUrl: URL) {\n"
        "self.init(baseUrl: baseUrl, middlewares: [])\n"
        "}\n"
    )


def _nested_transport_members(ctx: GenerationContext) -> str:
    return (
        "let clientData: TRPCClientData\n"
        "\n"
        "init(clientData: TRPCClientData) {\n"
        "self.clientData = clientData\n"
        "}\n"
        "\n"
        f"{ctx.access}var url: URL {{\n"
        "clientData.url\n"
        "}\n"
        "\n"
        "var middlewares: [TRPCMiddleware] {\n"
        "clientData.middlewares\n"
        "}\n"
    )
