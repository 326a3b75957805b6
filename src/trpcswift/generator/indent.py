# Copyright 2026 TRPCSwift Contributors
# SPDX-License-Identifier: Apache-2.0

"""Re-indentation of generated Swift source by scope delimiter matching."""

from __future__ import annotations

# ###############
# Public Interface
# ###############

DEFAULT_INDENT = 4


def indent_swift_code(code: str, spaces: int = DEFAULT_INDENT) -> str:
    """Re-indent *code* so every nested scope adds one indentation unit.

    Each line is stripped and re-indented by the number of scope delimiters
    (``{``, ``(``, ``[``) left open by the preceding lines. Closing delimiters
    at the start of a line dedent that line itself. Delimiters inside string
    literals and ``//`` comments are ignored. Blank lines stay empty.

    Args:
        code: Raw Swift source.
        spaces: Width of one indentation unit.

    Returns:
        The re-indented source.
    """
    unit = " " * spaces
    level = 0
    output: list[str] = []
    for raw_line in code.split("\n"):
        line = raw_line.strip()
        if not line:
            output.append("")
            continue
        leading, opened, closed = _count_delimiters(line)
        line_level = max(level - leading, 0)
        output.append(unit * line_level + line)
        level = max(level + opened - closed, 0)
    return "\n".join(output)


# ################
# Implementation
# ################

_OPENERS = "{(["
_CLOSERS = "})]"


def _count_delimiters(line: str) -> tuple[int, int, int]:
    """Return (leading closers, total openers, total closers) for one stripped line."""
    leading = 0
    while leading < len(line) and line[leading] in _CLOSERS:
        leading += 1

    opened = closed = 0
    in_string = False
    index = 0
    while index < len(line):
        char = line[index]
        if in_string:
            if char == "\\":
                index += 1
            elif char == '"':
                in_string = False
        elif char == '"':
            in_string = True
        elif line.startswith("//", index):
            break
        elif char in _OPENERS:
            opened += 1
        elif char in _CLOSERS:
            closed += 1
        index += 1
    return leading, opened, closed
