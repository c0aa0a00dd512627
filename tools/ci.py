#!/usr/bin/env python3
# Copyright 2026 colrecord Contributors
# SPDX-License-Identifier: Apache-2.0

"""Run the colrecord CI checks locally.

By default every step runs and a summary is printed at the end. Use
``--only`` to pick steps by name and ``--fail-fast`` to stop at the first
failing step.
"""

import argparse
import pathlib
import subprocess
import sys
import time

from yachalk import chalk

# ###############
# Public Interface
# ###############

STEPS: dict[str, list[str]] = {
    "format": ["uv", "run", "ruff", "format", "--check", "src/", "tests/", "tools/"],
    "lint": ["uv", "run", "ruff", "check", "src/", "tests/", "tools/"],
    "types": ["uv", "run", "ty", "check", "src/"],
    "tests": ["uv", "run", "pytest", "--cov=colrecord", "--cov-report=term-missing"],
    "build": ["uv", "build"],
}


def main(argv: list[str] | None = None) -> int:
    """Run the selected CI steps and report results."""
    parser = argparse.ArgumentParser(description="Run colrecord CI checks.")
    parser.add_argument("--only", nargs="+", choices=list(STEPS), help="Run only these steps")
    parser.add_argument("--fail-fast", action="store_true", help="Stop at the first failing step")
    args = parser.parse_args(argv)

    selected = args.only or list(STEPS)
    results: list[tuple[str, bool, float]] = []
    for name in selected:
        passed, elapsed = _run_step(name, STEPS[name])
        results.append((name, passed, elapsed))
        if not passed and args.fail_fast:
            break

    _print_summary(results, skipped=selected[len(results) :])
    return 0 if all(passed for _, passed, _ in results) else 1


# ################
# Implementation
# ################


def _run_step(name: str, cmd: list[str]) -> tuple[bool, float]:
    sep = chalk.blue("=" * 60)
    print(f"\n{sep}")
    print(chalk.blue(name))
    print(sep)
    start = time.monotonic()
    proc = subprocess.run(cmd, cwd=pathlib.Path(__file__).parent.parent)
    return proc.returncode == 0, time.monotonic() - start


def _print_summary(results: list[tuple[str, bool, float]], skipped: list[str]) -> None:
    sep = "=" * 60
    print(f"\n{chalk.blue(sep)}")
    print(chalk.blue("  Summary"))
    print(chalk.blue(sep))
    for name, passed, elapsed in results:
        if passed:
            print(chalk.green(f"  PASS  {name} ({elapsed:.1f}s)"))
        else:
            print(chalk.red(f"  FAIL  {name} ({elapsed:.1f}s)"))
    for name in skipped:
        print(chalk.yellow(f"  SKIP  {name}"))
    print()


if __name__ == "__main__":
    sys.exit(main())
