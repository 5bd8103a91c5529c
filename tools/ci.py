#!/usr/bin/env python3
# Copyright 2026 VCC Contributors
# SPDX-License-Identifier: Apache-2.0

"""Run all CI checks locally: format, lint, type check, tests, a sample compile, and build."""

import subprocess
import sys
import time

from yachalk import chalk

# ###############
# Public Interface
# ###############

STEPS: list[tuple[str, list[str]]] = [
    ("Format check", ["uv", "run", "ruff", "format", "--check", "src/", "tests/"]),
    ("Lint", ["uv", "run", "ruff", "check", "src/", "tests/"]),
    ("Type check", ["uv", "run", "ty", "check", "src/"]),
    ("Tests", ["uv", "run", "pytest", "--cov=vcc", "--cov-report=term-missing"]),
    ("Sample compile", ["uv", "run", "vcc", "compile", "tests/data/positive/add.v", "--c-only"]),
    ("Build", ["uv", "build"]),
]


def main() -> int:
    """Run all CI steps and report results."""
    results: list[tuple[str, bool, float]] = []

    for name, cmd in STEPS:
        sep = chalk.blue("=" * 60)
        print(f"\n{sep}")
        print(chalk.blue(name))
        print(sep)
        start = time.monotonic()
        proc = subprocess.run(cmd, cwd=_repo_root())
        elapsed = time.monotonic() - start
        results.append((name, proc.returncode == 0, elapsed))

    sep = "=" * 60
    print(f"\n{chalk.blue(sep)}")
    print(chalk.blue("  Summary"))
    print(chalk.blue(sep))
    failed = [name for name, passed, _ in results if not passed]
    for name, passed, elapsed in results:
        colour = chalk.green if passed else chalk.red
        status = "PASS" if passed else "FAIL"
        print(colour(f"  {status}  {name} ({elapsed:.1f}s)"))

    print()
    if failed:
        print(chalk.red(f"{len(failed)} of {len(results)} steps failed: {', '.join(failed)}"))
        return 1
    return 0


# ################
# Implementation
# ################


def _repo_root() -> str:
    import pathlib

    return str(pathlib.Path(__file__).parent.parent)


if __name__ == "__main__":
    sys.exit(main())
