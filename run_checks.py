#!/usr/bin/env python3
"""
Run black and mypy over the kbpages package and its tests.

    python run_checks.py            # format, then type check
    python run_checks.py --check    # report formatting drift without rewriting files
"""
import argparse
import os
import subprocess
import sys

PROJECT_ROOT = os.path.dirname(os.path.abspath(__file__))
TARGETS = [os.path.join(PROJECT_ROOT, "kbpages"), os.path.join(PROJECT_ROOT, "tests")]


def run_black(check_only=False):
    """Format the codebase (or only check it)"""
    command = ["black", "--line-length", "120"]
    if check_only:
        command.append("--check")
    print(f"Running: {' '.join(command)}")
    return subprocess.run(command + TARGETS, check=False).returncode


def run_mypy():
    """Type check the package; third-party stubs are optional"""
    command = ["mypy", "--ignore-missing-imports", "--follow-imports=silent", TARGETS[0]]
    print(f"Running: {' '.join(command)}")
    return subprocess.run(command, check=False).returncode


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Format and type check kbpages")
    parser.add_argument("--check", action="store_true", help="Do not rewrite files, only report")
    args = parser.parse_args()

    black_result = run_black(check_only=args.check)
    mypy_result = run_mypy()
    sys.exit(black_result or mypy_result)
