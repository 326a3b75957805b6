# Copyright 2026 TRPCSwift Contributors
# SPDX-License-Identifier: Apache-2.0

"""Assembly of the complete Swift client source.

The output is the static runtime template, followed by the generated root
router class and, optionally, one top-level ``typealias`` per model. The
whole text is re-indented before it is returned.
"""

from __future__ import annotations

import logging
import os
import tempfile
from importlib import resources
from pathlib import Path

from trpcswift.generator.context import GenerationContext, GeneratorFlags
from trpcswift.generator.errors import MissingTemplateResourceError
from trpcswift.generator.indent import indent_swift_code
from trpcswift.generator.naming import RESERVED_TYPE_NAMES, process_type_name
from trpcswift.generator.registry import ModelRegistry
from trpcswift.generator.router import emit_router, member_names, route_class_names
from trpcswift.model.router import RouterDocument, RouterNode
from trpcswift.model.schema import SchemaNode

logger = logging.getLogger(__name__)

# ###############
# Public Interface
# ###############

TEMPLATE_NAME = "TRPCClient.swift"


def load_template() -> str:
    """Return the static client runtime template.

    Raises:
        MissingTemplateResourceError: If the template cannot be read.
    """
    try:
        return resources.files("trpcswift.templates").joinpath(TEMPLATE_NAME).read_text(encoding="utf-8")
    except (OSError, ModuleNotFoundError) as exc:
        raise MissingTemplateResourceError(f"Cannot read client template '{TEMPLATE_NAME}': {exc}") from exc


def generate_client(
    name: str,
    router: RouterNode | RouterDocument,
    flags: GeneratorFlags | None = None,
    *,
    definitions: dict[str, SchemaNode] | None = None,
    template: str | None = None,
) -> str:
    """Generate the Swift client source for *router*.

    Every call uses a fresh :class:`ModelRegistry`, so independent calls in
    one process never share models.

    Args:
        name: Name of the generated root class (e.g. ``"API"``).
        router: The root router, or a document bundling the router with its
            definitions.
        flags: Generation options; defaults to :class:`GeneratorFlags`.
        definitions: Named schemas addressable by ``ref`` nodes. Merged over
            the document's own definitions when *router* is a document.
        template: Runtime template text; the packaged template by default.

    Returns:
        The complete, indented Swift source.

    Raises:
        GenerationError: If any part of the tree cannot be generated.
    """
    flags = flags or GeneratorFlags()
    all_definitions: dict[str, SchemaNode] = {}
    if isinstance(router, RouterDocument):
        all_definitions.update(router.definitions)
        router = router.router
    all_definitions.update(definitions or {})

    root_name = process_type_name(name)
    # Models are declared inside the root class, beside its methods and router members.
    reserved = RESERVED_TYPE_NAMES | {root_name} | route_class_names(router) | member_names(router)
    registry = ModelRegistry(reserved_names=reserved)
    ctx = GenerationContext(
        registry=registry,
        flags=flags,
        definitions=all_definitions,
        visible_model_names=frozenset({root_name}),
    )

    source = template if template is not None else load_template()
    if not source.endswith("\n"):
        source += "\n"
    source += "\n" + emit_router(router, name, ctx)

    if flags.create_type_aliases and len(registry):
        source += "\n"
        for model_name in registry.names:
            if flags.public_access:
                source += "public "
            source += f"typealias {model_name} = {root_name}.{model_name}\n"

    logger.info("Generated client '%s' with %d model(s)", root_name, len(registry))
    return indent_swift_code(source, flags.indent)


def write_client_file(
    name: str,
    router: RouterNode | RouterDocument,
    flags: GeneratorFlags | None,
    out_file: Path,
    *,
    definitions: dict[str, SchemaNode] | None = None,
) -> None:
    """Generate the client and write it to *out_file*.

    The file is replaced atomically: if generation or writing fails, an
    existing *out_file* is left untouched and no partial file remains.

    Raises:
        GenerationError: If generation fails.
        OSError: If the file cannot be written.
    """
    generated = generate_client(name, router, flags, definitions=definitions)

    out_file.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(dir=out_file.parent, prefix=f".{out_file.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            handle.write(generated)
        os.replace(tmp_name, out_file)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise
    logger.info("Wrote %s", out_file)
