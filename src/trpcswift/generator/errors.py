# Copyright 2026 TRPCSwift Contributors
# SPDX-License-Identifier: Apache-2.0

"""Errors raised while generating a Swift client.

Every generation error is fatal: the run is aborted and no output is written.
"""

from __future__ import annotations

# ###############
# Public Interface
# ###############


class GenerationError(Exception):
    """Base class for all generation errors.

    Attributes:
        path: Dotted location of the offending node (e.g.
            ``"users.get.output.address"``), or an empty string when the error
            is not tied to a node of the router tree.
    """

    def __init__(self, message: str, path: str = "") -> None:
        self.path = path
        super().__init__(f"{path}: {message}" if path else message)


class UnresolvableSchemaKindError(GenerationError):
    """Raised when a schema node cannot be represented in Swift."""


class NonStringDictionaryKeyError(GenerationError):
    """Raised when a dictionary schema uses a key type other than string."""


class NameCollisionError(GenerationError):
    """Raised when no unique name can be found for a model or member."""


class UnresolvedReferenceError(GenerationError):
    """Raised when a reference names no entry of the document's definitions."""


class MissingTemplateResourceError(GenerationError):
    """Raised when the static client runtime template cannot be read."""
