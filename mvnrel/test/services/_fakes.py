"""Scripted git and Maven doubles for release tests."""

from __future__ import annotations

import subprocess
from dataclasses import dataclass, field
from pathlib import Path

from mvnrel.core.result import Err, Ok, Result
from mvnrel.git.repository import Repository
from mvnrel.platform.process import ProcessError
from mvnrel.services.maven import Maven


class ScriptedRepository(Repository):
    """Repository whose git commands are answered from a script.

    Every command is appended to ``log`` as ``git <args>``. Commands listed in
    ``fail`` return the given stderr with exit code 1; ``outputs`` holds
    stdout for successful commands.
    """

    def __init__(
        self,
        path: Path,
        *,
        log: list[str] | None = None,
        fail: dict[str, str] | None = None,
        outputs: dict[str, str] | None = None,
    ) -> None:
        super().__init__(path)
        self.log = log if log is not None else []
        self.fail = fail or {}
        self.outputs = outputs or {}

    def _run(self, args: list[str]) -> Result[str, ProcessError]:
        command = "git " + " ".join(args)
        self.log.append(command)
        if command in self.fail:
            return Err(ProcessError(("git", *args), 1, "", self.fail[command]))
        return Ok(self.outputs.get(command, ""))

    def count(self, command: str) -> int:
        return sum(1 for c in self.log if c == command)


@dataclass(frozen=True, slots=True)
class RecordingMaven(Maven):
    """Maven that records ``versions:set`` calls into a shared log."""

    log: list[str] = field(default_factory=list)
    fail_versions: frozenset[str] = frozenset()

    def set_version(self, version: str) -> Result[None, ProcessError]:
        self.log.append(f"mvn versions:set {version}")
        if version in self.fail_versions:
            return Err(ProcessError(tuple(self.set_version_args(version)), 1, "", ""))
        return Ok(None)


class MockCommandRunner:
    """Command runner answering probes from canned responses."""

    def __init__(self, responses: dict[tuple[str, ...], tuple[int, str, str]] | None = None):
        """Initialize with canned responses.

        Args:
            responses: Dict mapping command tuples to (returncode, stdout, stderr)
        """
        self.responses = responses or {}
        self.calls: list[list[str]] = []

    def run(
        self, args: list[str], *, capture: bool = True, cwd: Path | None = None
    ) -> subprocess.CompletedProcess[str]:
        self.calls.append(args)
        key = tuple(args)
        if key in self.responses:
            rc, stdout, stderr = self.responses[key]
            return subprocess.CompletedProcess(args, rc, stdout, stderr)
        raise FileNotFoundError(f"Command not found: {args[0]}")
