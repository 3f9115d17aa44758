"""Shell utilities.

Provides a thin wrapper around subprocess for running build commands,
plus output formatting helpers.
"""

from __future__ import annotations

import subprocess
from pathlib import Path


def run(
    *args: str, check: bool = True, cwd: Path | None = None
) -> subprocess.CompletedProcess[bytes]:
    """Run a command with output streamed directly to the terminal.

    Output is not captured so users can follow Gradle progress live.

    Args:
        *args: Command and arguments (e.g., "./gradlew", ":common:publish").
        check: If True (default), raise on non-zero exit.
        cwd: Working directory for the command.

    Returns:
        CompletedProcess with returncode for checking success.
    """
    return subprocess.run(args, check=check, cwd=cwd)


def step(msg: str) -> None:
    """Print a visually distinct step header.

    Used to separate the phases of a publish run in terminal output.
    """
    rule = "=" * max(28, len(msg))
    print(f"\n{rule}\n{msg}\n{rule}")
