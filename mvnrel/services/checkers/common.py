"""Command runner shared by checkers.

``CommandRunner`` lets tests replace subprocess calls with canned output.
"""

from __future__ import annotations

import subprocess
from pathlib import Path
from typing import Protocol


class CommandRunner(Protocol):
    """Protocol for running probe commands."""

    def run(
        self, args: list[str], *, capture: bool = True, cwd: Path | None = None
    ) -> subprocess.CompletedProcess[str]:
        """Run a command and return the completed process."""
        ...


class DefaultCommandRunner:
    """Default command runner using subprocess.run."""

    def run(
        self, args: list[str], *, capture: bool = True, cwd: Path | None = None
    ) -> subprocess.CompletedProcess[str]:
        return subprocess.run(
            args,
            capture_output=capture,
            text=True,
            check=False,
            cwd=cwd,
        )
