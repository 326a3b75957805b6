# Copyright 2026 TRPCSwift Contributors
# SPDX-License-Identifier: Apache-2.0

"""Sphinx configuration for the trpc-swift documentation."""

project = "trpc-swift"
author = "TRPCSwift Contributors"
release = "0.1.0"

extensions: list[str] = ["sphinx.ext.autodoc"]

html_theme = "alabaster"
