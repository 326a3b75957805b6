# Copyright 2026 TRPCSwift Contributors
# SPDX-License-Identifier: Apache-2.0

"""Loading of router definition files (YAML or JSON).

A definition file has two top-level keys::

    definitions:
      User:
        kind: object
        fields:
          id: string
          name: string?
    router:
      users:
        get:
          kind: query
          input: {kind: object, fields: {id: string}}
          output: {kind: ref, ref: User}

Two shorthands are expanded before validation: a mapping without ``kind``
inside a router is a nested router, and a bare string schema names a
primitive or, failing that, a definition (a trailing ``?`` makes it
optional).
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from trpcswift.model.router import RouterDocument
from trpcswift.model.schema import PrimitiveKind

# ###############
# Public Interface
# ###############


class DefinitionError(Exception):
    """Raised when a router definition cannot be read or is invalid."""


def load_definition(path: Path) -> RouterDocument:
    """Load and validate a router definition file.

    Args:
        path: Path to a ``.yaml``/``.yml`` or ``.json`` definition file.

    Returns:
        The validated :class:`RouterDocument`.

    Raises:
        DefinitionError: If the file cannot be read, is not valid YAML/JSON,
            or does not describe a valid router document.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise DefinitionError(f"Cannot read definition file '{path}': {exc}") from exc
    return parse_definition(text, source_label=str(path))


def parse_definition(text: str, source_label: str = "<string>") -> RouterDocument:
    """Parse router definition text into a :class:`RouterDocument`.

    Raises:
        DefinitionError: If the text is invalid.
    """
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise DefinitionError(f"Invalid YAML in {source_label}: {exc}") from exc

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise DefinitionError(f"{source_label}: definition must be a mapping")

    unknown = set(data) - {"definitions", "router"}
    if unknown:
        raise DefinitionError(f"{source_label}: unknown top-level key(s): {', '.join(sorted(map(str, unknown)))}")

    normalized: dict[str, Any] = {}
    definitions = data.get("definitions") or {}
    if not isinstance(definitions, dict):
        raise DefinitionError(f"{source_label}: 'definitions' must be a mapping")
    normalized["definitions"] = {str(k): _normalize_schema(v) for k, v in definitions.items()}
    normalized["router"] = _normalize_router(data.get("router") or {})

    try:
        return RouterDocument.model_validate(normalized)
    except ValidationError as exc:
        raise DefinitionError(f"Invalid router definition in {source_label}: {exc}") from exc


# ################
# Implementation
# ################

_PROCEDURE_KINDS = {"query", "mutation", "subscription"}
_PRIMITIVE_NAMES = {kind.value for kind in PrimitiveKind}


def _normalize_router(node: Any) -> Any:
    """Expand router shorthand; anything unrecognized is left for validation."""
    if not isinstance(node, dict):
        return node
    kind = node.get("kind")
    if kind in _PROCEDURE_KINDS:
        return _normalize_procedure(node)
    if kind is None:
        node = {"kind": "router", "children": node}
    if node.get("kind") == "router":
        children = node.get("children") or {}
        if isinstance(children, dict):
            node = {**node, "children": {str(k): _normalize_router(v) for k, v in children.items()}}
    return node


def _normalize_procedure(node: dict[str, Any]) -> dict[str, Any]:
    result = dict(node)
    for key in ("input", "output"):
        if result.get(key) is not None:
            result[key] = _normalize_schema(result[key])
    return result


def _normalize_schema(node: Any) -> Any:
    """Expand string shorthand recursively."""
    if isinstance(node, str):
        name = node.strip()
        if name.endswith("?"):
            return {"kind": "optional", "of": _normalize_schema(name[:-1])}
        if name in _PRIMITIVE_NAMES:
            return {"kind": "primitive", "type": name}
        return {"kind": "ref", "ref": name}
    if not isinstance(node, dict):
        return node

    result = dict(node)
    kind = result.get("kind")
    if kind in ("array", "optional") and "of" in result:
        result["of"] = _normalize_schema(result["of"])
    if kind == "dictionary":
        for key in ("key", "value"):
            if key in result:
                result[key] = _normalize_schema(result[key])
    if isinstance(result.get("fields"), dict):
        result["fields"] = {str(k): _normalize_schema(v) for k, v in result["fields"].items()}
    if isinstance(result.get("variants"), list):
        result["variants"] = [_normalize_schema(v) for v in result["variants"]]
    return result
