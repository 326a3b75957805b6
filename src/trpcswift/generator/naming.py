# Copyright 2026 TRPCSwift Contributors
# SPDX-License-Identifier: Apache-2.0

"""Conversion of schema and router keys into Swift identifiers."""

from __future__ import annotations

import re

# ###############
# Public Interface
# ###############

SWIFT_KEYWORDS: frozenset[str] = frozenset(
    {
        "associatedtype", "class", "deinit", "enum", "extension", "fileprivate", "func", "import", "init",
        "inout", "internal", "let", "open", "operator", "private", "precedencegroup", "protocol", "public",
        "rethrows", "static", "struct", "subscript", "typealias", "var", "break", "case", "catch", "continue",
        "default", "defer", "do", "else", "fallthrough", "for", "guard", "if", "in", "repeat", "return",
        "throw", "switch", "where", "while", "Any", "as", "await", "false", "is", "nil", "self", "Self",
        "super", "throws", "true", "try",
    }
)  # fmt: skip

# Type names declared by the runtime template or used by generated code.
RESERVED_TYPE_NAMES: frozenset[str] = frozenset(
    {
        "DecodableValue", "TRPCErrorCode", "TRPCError", "TRPCRequest", "TRPCResponse", "TRPCMiddleware",
        "TRPCClient", "TRPCClientData", "String", "Int", "Double", "Bool", "Date", "URL", "Data", "Error",
        "Codable", "Decodable", "Encodable", "Decoder", "Encoder", "CodingKey", "CodingKeys", "Optional",
        "Array", "Dictionary", "Never", "Void", "Type", "Protocol",
    }
)  # fmt: skip


def split_words(key: str) -> list[str]:
    """Split *key* on non-identifier characters and lower/upper case boundaries.

    >>> split_words("created_at-utc")
    ['created', 'at', 'utc']
    >>> split_words("getUserByID")
    ['get', 'User', 'By', 'ID']
    """
    words: list[str] = []
    for chunk in _NON_WORD.split(key):
        words.extend(w for w in _WORD_BOUNDARY.findall(chunk) if w)
    return words


def process_type_name(key: str) -> str:
    """Return a PascalCase Swift type name for *key*.

    Keys that are already valid identifiers keep their inner casing, so
    ``"API"`` stays ``"API"`` and ``"getUser"`` becomes ``"GetUser"``.
    """
    if _IDENTIFIER.fullmatch(key):
        name = key[0].upper() + key[1:]
    else:
        name = "".join(w[0].upper() + w[1:] for w in split_words(key))
    if not name:
        name = "Model"
    if name[0].isdigit():
        name = "_" + name
    return name


def process_field_name(key: str) -> str:
    """Return a camelCase Swift identifier for a property, method or case name.

    Keywords are escaped with backticks.
    """
    if _IDENTIFIER.fullmatch(key):
        name = key
    else:
        words = split_words(key)
        if not words:
            name = "value"
        else:
            name = words[0][0].lower() + words[0][1:] + "".join(w[0].upper() + w[1:] for w in words[1:])
    if name[0].isdigit():
        name = "_" + name
    return escape_keyword(name)


def escape_keyword(name: str) -> str:
    """Wrap *name* in backticks when it is a Swift keyword."""
    return f"`{name}`" if name in SWIFT_KEYWORDS else name


def unescaped(name: str) -> str:
    """Strip the backticks added by :func:`escape_keyword`."""
    return name.strip("`")


def lower_first(name: str) -> str:
    """Lower-case the first character of *name*."""
    return name[:1].lower() + name[1:]


def swift_string_literal(value: str) -> str:
    """Return *value* as a double-quoted Swift string literal."""
    escaped = value.replace("\\", "\\\\").replace('"', '\\"').replace("\n", "\\n").replace("\r", "\\r")
    return f'"{escaped}"'


def doc_comment(description: str | None) -> str:
    """Return ``///`` doc comment lines for *description*, or an empty string."""
    if not description:
        return ""
    return "".join(f"/// {line}".rstrip() + "\n" for line in description.strip().splitlines())


# ################
# Implementation
# ################

_IDENTIFIER = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")
_NON_WORD = re.compile(r"[^A-Za-z0-9]+")
_WORD_BOUNDARY = re.compile(r"[A-Z]+(?![a-z])|[A-Z]?[a-z]+|[0-9]+")
