#!/usr/bin/env python3
"""Run formatters, linters and the test suite in sequence.

Steps:
1. Black formatting check
2. isort import order check
3. Ruff static checks
4. Pylint analysis
5. pytest

All output is collected and printed together with a final summary.
"""

from pathlib import Path
import subprocess
import sys

PACKAGES = ["app", "core", "infrastructure", "main.py"]


def run_command(cmd: list[str], description: str) -> tuple[bool, str]:
    """Run `cmd` and return (success, combined output)."""
    print(f"\n{'='*60}")
    print(f"Running: {description}")
    print(f"Command: {' '.join(cmd)}")
    print("=" * 60)

    try:
        result = subprocess.run(
            cmd, capture_output=True, text=True, check=False, cwd=Path(__file__).parent
        )
    except OSError as e:
        print(f"FAILED to start: {e}")
        return False, str(e)

    success = result.returncode == 0
    output = result.stdout + result.stderr
    print("OK" if success else "FAILED")
    print(f"\nOutput:\n{output}" if output.strip() else "(no output)")
    return success, output


def main() -> None:
    """Run every check and exit non-zero if any failed."""
    py = sys.executable
    commands = [
        ([py, "-m", "black", ".", "--check"], "Black format check"),
        ([py, "-m", "isort", ".", "--check-only"], "isort import order check"),
        ([py, "-m", "ruff", "check", "."], "Ruff static checks"),
        ([py, "-m", "pylint", *PACKAGES], "Pylint analysis"),
        ([py, "-m", "pytest", "-q"], "pytest"),
    ]

    results = [(desc, *run_command(cmd, desc)) for cmd, desc in commands]

    print(f"\n{'='*60}")
    print("Summary")
    print("=" * 60)
    all_passed = True
    for description, success, _ in results:
        print(f"{description}: {'passed' if success else 'FAILED'}")
        all_passed = all_passed and success

    if not all_passed:
        print("\nFailure details:")
        for description, success, output in results:
            if not success and output.strip():
                print(f"\n--- {description} ---")
                print(output)

    sys.exit(0 if all_passed else 1)


if __name__ == "__main__":
    main()
