#!/usr/bin/env python3
# Copyright 2026 TRPCSwift Contributors
# SPDX-License-Identifier: Apache-2.0

"""Run the CI checks locally.

Steps run in order and all of them run even when an earlier one fails, so
one invocation reports every broken check. ``--only``/``--skip`` select
steps by key, e.g. ``tools/ci.py --only lint tests``.
"""

import argparse
import subprocess
import sys
import time
from dataclasses import dataclass
from pathlib import Path

from yachalk import chalk

# ###############
# Public Interface
# ###############


@dataclass(frozen=True)
class Step:
    """One CI step: a short key for selection, a title and the command."""

    key: str
    title: str
    command: list[str]


STEPS: list[Step] = [
    Step("format", "Format check", ["uv", "run", "ruff", "format", "--check", "src/", "tests/"]),
    Step("lint", "Lint", ["uv", "run", "ruff", "check", "src/", "tests/"]),
    Step("tests", "Tests", ["uv", "run", "pytest", "--cov=trpcswift", "--cov-report=term-missing"]),
    # Validates the sample project and runs a full generation without writing output.
    Step("example", "Example project", ["uv", "run", "trpc-swift", "check", "examples/"]),
    Step("build", "Build", ["uv", "build"]),
]


def main() -> int:
    """Run the selected CI steps and print a summary."""
    keys = [step.key for step in STEPS]
    parser = argparse.ArgumentParser(description="Run trpc-swift CI checks locally.")
    parser.add_argument("--only", nargs="+", choices=keys, metavar="STEP", help=f"Run only these steps: {keys}")
    parser.add_argument("--skip", nargs="+", choices=keys, default=[], metavar="STEP", help="Skip these steps")
    args = parser.parse_args()

    selected = [s for s in STEPS if (args.only is None or s.key in args.only) and s.key not in args.skip]
    results = [(step, *_run_step(step)) for step in selected]
    _print_summary(results)
    return 0 if all(passed for _, passed, _ in results) else 1


# ################
# Implementation
# ################

_RULE = "=" * 60


def _run_step(step: Step) -> tuple[bool, float]:
    print(f"\n{chalk.blue(_RULE)}")
    print(chalk.blue(f"{step.title}: {' '.join(step.command)}"))
    print(chalk.blue(_RULE))
    start = time.monotonic()
    proc = subprocess.run(step.command, cwd=Path(__file__).resolve().parent.parent)
    return proc.returncode == 0, time.monotonic() - start


def _print_summary(results: list[tuple[Step, bool, float]]) -> None:
    print(f"\n{chalk.blue(_RULE)}")
    print(chalk.blue("  Summary"))
    print(chalk.blue(_RULE))
    if not results:
        print(chalk.yellow("  No steps selected"))
    for step, passed, elapsed in results:
        paint = chalk.green if passed else chalk.red
        print(paint(f"  {'PASS' if passed else 'FAIL'}  {step.title} ({elapsed:.1f}s)"))
    print()


if __name__ == "__main__":
    sys.exit(main())
