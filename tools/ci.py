#!/usr/bin/env python3
# Copyright 2026 Gherkit Contributors
# SPDX-License-Identifier: Apache-2.0

"""Run the local CI pipeline: format, lint, type check, tests with coverage, and build.

Pass step names (e.g. ``tests lint``) to run a subset.
"""

import subprocess
import sys
import time
from pathlib import Path

from yachalk import chalk

# ###############
# Public Interface
# ###############

STEPS: dict[str, list[str]] = {
    "format": ["uv", "run", "ruff", "format", "--check", "src/", "tests/", "tools/"],
    "lint": ["uv", "run", "ruff", "check", "src/", "tests/", "tools/"],
    "typecheck": ["uv", "run", "ty", "check", "src/"],
    "tests": ["uv", "run", "pytest", "--cov=gherkit", "--cov-report=term-missing"],
    "build": ["uv", "build"],
}


def main(argv: list[str]) -> int:
    """Run the selected CI steps (all by default) and print a summary."""
    unknown = [name for name in argv if name not in STEPS]
    if unknown:
        print(chalk.red(f"Unknown step(s): {', '.join(unknown)}. Choose from: {', '.join(STEPS)}"))
        return 2

    selected = argv or list(STEPS)
    outcomes = [_run_step(name, STEPS[name]) for name in selected]

    print(chalk.blue(f"\n{'-' * 20} summary {'-' * 20}"))
    for name, passed, elapsed in outcomes:
        label = chalk.green("ok  ") if passed else chalk.red("FAIL")
        print(f"  {label} {name:<9} {elapsed:6.1f}s")
    return 0 if all(passed for _, passed, _ in outcomes) else 1


# ################
# Implementation
# ################

_REPO_ROOT = Path(__file__).resolve().parent.parent


def _run_step(name: str, cmd: list[str]) -> tuple[str, bool, float]:
    """Run one step from the repository root and report (name, passed, seconds)."""
    print(chalk.blue(f"\n>>> {name}: {' '.join(cmd)}"))
    start = time.monotonic()
    returncode = subprocess.run(cmd, cwd=_REPO_ROOT).returncode
    return name, returncode == 0, time.monotonic() - start


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
