# Copyright 2026 TRPCSwift Contributors
# SPDX-License-Identifier: Apache-2.0

"""Entry point for the trpc-swift command-line interface."""

import argparse
import logging
import sys
from pathlib import Path

from trpcswift.definition.loader import DefinitionError, load_definition
from trpcswift.generator.assembler import generate_client, write_client_file
from trpcswift.generator.errors import GenerationError
from trpcswift.model.router import RouterDocument
from trpcswift.project.config import (
    CONFIG_FILE_NAME,
    ProjectConfig,
    ProjectConfigError,
    default_config_text,
    load_project_config,
)
from trpcswift.validation.checks import validate

# ###############
# Public Interface
# ###############


def main() -> None:
    """Run the trpc-swift CLI."""
    parser = argparse.ArgumentParser(
        prog="trpc-swift",
        description="trpc-swift - generate Swift clients from tRPC router definitions",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Print debug logging",
    )
    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")

    # init subcommand
    init_parser = subparsers.add_parser(
        "init",
        help="Create a starter project configuration",
        description=f"Create a '{CONFIG_FILE_NAME}' project configuration in a directory.",
    )
    init_parser.add_argument(
        "directory",
        nargs="?",
        default=".",
        help="Directory to create the configuration in (default: current directory)",
    )
    init_parser.add_argument(
        "--name",
        default="API",
        help="Name of the generated client class (default: API)",
    )

    # check subcommand
    check_parser = subparsers.add_parser(
        "check",
        help="Check a router definition for problems",
        description="Validate the router definition and run generation without writing output.",
    )
    check_parser.add_argument(
        "config",
        nargs="?",
        default=".",
        help=f"Project configuration file or its directory (default: ./{CONFIG_FILE_NAME})",
    )

    # generate subcommand
    generate_parser = subparsers.add_parser(
        "generate",
        help="Generate the Swift client",
        description="Validate the router definition and write the generated Swift client.",
    )
    generate_parser.add_argument(
        "config",
        nargs="?",
        default=".",
        help=f"Project configuration file or its directory (default: ./{CONFIG_FILE_NAME})",
    )
    generate_parser.add_argument(
        "--output",
        help="Write the client to this path instead of the configured output",
    )

    args = parser.parse_args()
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    sys.exit(_dispatch(args))


# ################
# Implementation
# ################


def _dispatch(args: argparse.Namespace) -> int:
    """Dispatch to the appropriate subcommand handler."""
    if args.command == "init":
        return _cmd_init(args)
    if args.command == "check":
        return _cmd_check(args)
    if args.command == "generate":
        return _cmd_generate(args)
    return 0


def _cmd_init(args: argparse.Namespace) -> int:
    """Handle the init subcommand."""
    directory = Path(args.directory).resolve()

    if not directory.exists():
        print(f"Error: directory '{directory}' does not exist.", file=sys.stderr)
        return 1

    config_file = directory / CONFIG_FILE_NAME

    if config_file.exists():
        print(
            f"Error: project configuration already exists at '{config_file}'.",
            file=sys.stderr,
        )
        return 1

    config_file.write_text(default_config_text(args.name), encoding="utf-8")
    print(f"Initialized trpc-swift project at '{config_file}'.")
    return 0


def _cmd_check(args: argparse.Namespace) -> int:
    """Handle the check subcommand."""
    loaded = _load_project(args.config)
    if loaded is None:
        return 1
    config, document = loaded

    if not _report_validation(document):
        return 1

    try:
        generate_client(config.name, document, config.flags())
    except GenerationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    print("No issues found.")
    return 0


def _cmd_generate(args: argparse.Namespace) -> int:
    """Handle the generate subcommand."""
    loaded = _load_project(args.config)
    if loaded is None:
        return 1
    config, document = loaded

    if not _report_validation(document):
        return 1

    config_dir = _config_path(args.config).parent
    output = Path(args.output).resolve() if args.output else (config_dir / config.output).resolve()

    try:
        write_client_file(config.name, document, config.flags(), output)
    except GenerationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    except OSError as exc:
        print(f"Error: cannot write '{output}': {exc}", file=sys.stderr)
        return 1

    print(f"Generated Swift client '{config.name}' at '{output}'.")
    return 0


def _config_path(raw: str) -> Path:
    """Resolve the config argument, which may name the file or its directory."""
    path = Path(raw).resolve()
    return path / CONFIG_FILE_NAME if path.is_dir() else path


def _load_project(raw: str) -> tuple[ProjectConfig, RouterDocument] | None:
    """Load the project configuration and its router definition, printing errors."""
    config_path = _config_path(raw)
    if not config_path.exists():
        print(
            f"Error: no project configuration found at '{config_path}'. "
            "Run 'trpc-swift init' to create one.",
            file=sys.stderr,
        )
        return None

    try:
        config = load_project_config(config_path)
    except ProjectConfigError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return None

    try:
        document = load_definition(config_path.parent / config.definition)
    except DefinitionError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return None

    return config, document


def _report_validation(document: RouterDocument) -> bool:
    """Print validation warnings and errors; return False if there are errors."""
    result = validate(document)
    for warning in result.warnings:
        print(f"Warning: {warning.message}")
    for error in result.errors:
        print(f"Error: {error.message}", file=sys.stderr)
    return not result.has_errors
