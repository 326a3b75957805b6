# Copyright 2026 TRPCSwift Contributors
# SPDX-License-Identifier: Apache-2.0

"""Data model and YAML parser for the trpc-swift project configuration file."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import yaml

from trpcswift.generator.context import GeneratorFlags

# ###############
# Public Interface
# ###############

CONFIG_FILE_NAME = "trpc-swift.yaml"


class ProjectConfigError(Exception):
    """Raised when a project configuration file is invalid or cannot be loaded."""


@dataclass
class ProjectConfig:
    """The parsed configuration of a client generation project.

    Attributes:
        name: Name of the generated root class.
        definition: Path of the router definition file, relative to the
            configuration file.
        output: Path of the generated Swift file, relative to the
            configuration file.
        create_type_aliases: Emit a top-level alias for every model.
        public_access: Mark generated declarations public.
        indent: Width of one indentation unit.
    """

    name: str
    definition: str
    output: str
    create_type_aliases: bool = False
    public_access: bool = False
    indent: int = 4

    def flags(self) -> GeneratorFlags:
        """Return the generator flags described by this configuration."""
        return GeneratorFlags(
            create_type_aliases=self.create_type_aliases,
            public_access=self.public_access,
            indent=self.indent,
        )


def load_project_config(path: Path) -> ProjectConfig:
    """Load and parse a project configuration file.

    Args:
        path: Path to the ``trpc-swift.yaml`` file.

    Returns:
        A ProjectConfig instance populated from the file.

    Raises:
        ProjectConfigError: If the file cannot be read or the configuration is invalid.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise ProjectConfigError(f"Project config file not found: {path}") from None
    except OSError as exc:
        raise ProjectConfigError(f"Cannot read project config file: {exc}") from exc

    return _parse_project_config(text, source_label=str(path))


def default_config_text(name: str) -> str:
    """Return the content of a starter configuration file."""
    return (
        "# trpc-swift project configuration\n"
        f"name: {name}\n"
        "definition: router.yaml\n"
        f"output: {name}.swift\n"
        "create-type-aliases: false\n"
        "public-access: false\n"
        "indent: 4\n"
    )


# ################
# Implementation
# ################


def _parse_project_config(text: str, source_label: str = "<string>") -> ProjectConfig:
    """Parse project config YAML text into a ProjectConfig.

    Raises:
        ProjectConfigError: If the YAML is invalid or required fields are missing.
    """
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ProjectConfigError(f"Invalid YAML in {source_label}: {exc}") from exc

    if not isinstance(data, dict):
        raise ProjectConfigError(f"{source_label}: project config must be a YAML mapping")

    unknown = set(data) - _KNOWN_KEYS
    if unknown:
        raise ProjectConfigError(f"{source_label}: unknown field(s): {', '.join(sorted(map(str, unknown)))}")

    indent = data.get("indent", 4)
    if not isinstance(indent, int) or isinstance(indent, bool) or indent < 1:
        raise ProjectConfigError(f"{source_label}: 'indent' must be a positive integer")

    return ProjectConfig(
        name=_require_string(data, "name", source_label),
        definition=_require_string(data, "definition", source_label),
        output=_require_string(data, "output", source_label),
        create_type_aliases=_optional_bool(data, "create-type-aliases", source_label),
        public_access=_optional_bool(data, "public-access", source_label),
        indent=indent,
    )


_KNOWN_KEYS = {"name", "definition", "output", "create-type-aliases", "public-access", "indent"}


def _require_string(mapping: dict[str, object], key: str, source_label: str) -> str:
    """Extract a required string field from a mapping, raising ProjectConfigError if missing."""
    if key not in mapping:
        raise ProjectConfigError(f"{source_label}: missing required field '{key}'")
    value = mapping[key]
    if not isinstance(value, str) or not value:
        raise ProjectConfigError(f"{source_label}: '{key}' must be a non-empty string")
    return value


def _optional_bool(mapping: dict[str, object], key: str, source_label: str) -> bool:
    value = mapping.get(key, False)
    if not isinstance(value, bool):
        raise ProjectConfigError(f"{source_label}: '{key}' must be true or false")
    return value
