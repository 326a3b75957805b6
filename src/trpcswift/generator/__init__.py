# Copyright 2026 TRPCSwift Contributors
# SPDX-License-Identifier: Apache-2.0

"""Swift client generation: type resolution, model registry, emitters and assembly."""

from trpcswift.generator.assembler import TEMPLATE_NAME, generate_client, load_template, write_client_file
from trpcswift.generator.context import GenerationContext, GeneratorFlags
from trpcswift.generator.errors import (
    GenerationError,
    MissingTemplateResourceError,
    NameCollisionError,
    NonStringDictionaryKeyError,
    UnresolvableSchemaKindError,
    UnresolvedReferenceError,
)
from trpcswift.generator.indent import indent_swift_code
from trpcswift.generator.procedure import emit_procedure
from trpcswift.generator.registry import ModelDeclaration, ModelEntry, ModelRegistry, schema_fingerprint
from trpcswift.generator.resolver import NO_PAYLOAD, SwiftType, resolve_type
from trpcswift.generator.router import emit_router

__all__ = [
    # Assembly
    "generate_client",
    "write_client_file",
    "load_template",
    "TEMPLATE_NAME",
    # Context
    "GeneratorFlags",
    "GenerationContext",
    # Registry
    "ModelRegistry",
    "ModelEntry",
    "ModelDeclaration",
    "schema_fingerprint",
    # Emitters
    "resolve_type",
    "SwiftType",
    "NO_PAYLOAD",
    "emit_procedure",
    "emit_router",
    "indent_swift_code",
    # Errors
    "GenerationError",
    "UnresolvableSchemaKindError",
    "NonStringDictionaryKeyError",
    "NameCollisionError",
    "UnresolvedReferenceError",
    "MissingTemplateResourceError",
]
