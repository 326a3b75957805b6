# Copyright 2026 TRPCSwift Contributors
# SPDX-License-Identifier: Apache-2.0

"""Router definition files."""

from trpcswift.definition.loader import DefinitionError, load_definition, parse_definition

__all__ = [
    "DefinitionError",
    "load_definition",
    "parse_definition",
]
