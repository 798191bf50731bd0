"""Git repository abstraction.

Wraps the handful of git commands a release needs. Every method returns a
Result so callers decide whether a failure aborts, rolls back, or asks the
operator to finish by hand.

Usage:
    repo = Repository(Path("."))

    match repo.short_status(ignore_untracked=True):
        case Ok(entries):
            print(f"{len(entries)} changed files")
        case Err(e):
            print(f"Error: {e.message}")
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from mvnrel.core.result import Err, Ok, Result
from mvnrel.platform.process import ProcessError
from mvnrel.platform.process import run as run_process

_GIT_TIMEOUT_SECONDS = 30.0
_GIT_NETWORK_TIMEOUT_SECONDS = 3 * 60.0

__all__ = [
    "GitError",
    "Repository",
    "StatusEntry",
]


@dataclass(frozen=True, slots=True)
class GitError:
    """Error from a git operation.

    Attributes:
        command: The git command that failed (e.g. "push origin master")
        message: Error message
        returncode: Process return code
    """

    command: str
    message: str
    returncode: int = 1


@dataclass(frozen=True, slots=True)
class StatusEntry:
    """A single line of ``git status -s``.

    Attributes:
        xy: Two-character status code (e.g., "M ", " M", "??")
        path: File path
        line: The raw status line, as git printed it
    """

    xy: str
    path: str
    line: str

    @property
    def is_untracked(self) -> bool:
        return self.xy == "??"


class Repository:
    """A git working copy.

    Attributes:
        path: Path to the repository root
    """

    def __init__(self, path: Path) -> None:
        self.path = path

    def short_status(self, *, ignore_untracked: bool = False) -> Result[list[StatusEntry], GitError]:
        """List changed files.

        Runs ``git status -s``, or ``git status -s -uno`` when untracked
        files should not count as changes.
        """
        args = ["status", "-s"]
        if ignore_untracked:
            args.append("-uno")
        result = self._git(args)
        if isinstance(result, Err):
            return result
        return Ok(parse_short_status(result.value))

    def tag_exists(self, tag: str) -> Result[bool, GitError]:
        """Check whether a tag with exactly this name exists."""
        result = self._git(["tag", "-l", tag])
        if isinstance(result, Err):
            return result
        return Ok(any(line.strip() for line in result.value.splitlines()))

    def create_branch(self, branch: str) -> Result[str, GitError]:
        return self._git(["checkout", "-b", branch])

    def checkout(self, ref: str) -> Result[str, GitError]:
        return self._git(["checkout", ref])

    def merge(self, ref: str) -> Result[str, GitError]:
        return self._git(["merge", ref])

    def commit_all(self, message: str) -> Result[str, GitError]:
        """Commit every tracked change (``git commit -a``)."""
        return self._git(["commit", "-a", "-m", message])

    def push(self, remote: str, ref: str) -> Result[str, GitError]:
        return self._git(["push", remote, ref])

    def push_tags(self, remote: str) -> Result[str, GitError]:
        return self._git(["push", remote, "--tags"])

    def tag(self, name: str) -> Result[str, GitError]:
        return self._git(["tag", name])

    def reset_hard(self, ref: str = "HEAD^1") -> Result[str, GitError]:
        """Discard the working tree and move the branch to ``ref``."""
        return self._git(["reset", "--hard", ref])

    def _git(self, args: list[str]) -> Result[str, GitError]:
        result = self._run(args)
        if isinstance(result, Err):
            return Err(_to_git_error(args, result.error))
        return Ok(result.value)

    def _run(self, args: list[str]) -> Result[str, ProcessError]:
        """Run a git command in this repository."""
        command = args[0] if args else ""
        timeout = (
            _GIT_NETWORK_TIMEOUT_SECONDS
            if command in {"fetch", "pull", "push"}
            else _GIT_TIMEOUT_SECONDS
        )
        return run_process(["git", "-C", str(self.path), *args], cwd=self.path, timeout=timeout)


def _to_git_error(args: list[str], error: ProcessError) -> GitError:
    return GitError(
        command=" ".join(args),
        message=error.detail,
        returncode=error.returncode,
    )


def parse_short_status(output: str) -> list[StatusEntry]:
    """Parse ``git status -s`` output, one entry per non-empty line."""
    entries: list[StatusEntry] = []
    for line in output.splitlines():
        if not line.strip():
            continue
        # Format: XY path, or ?? path for untracked files
        if line.startswith("?? "):
            entries.append(StatusEntry(xy="??", path=line[3:], line=line))
            continue
        entries.append(StatusEntry(xy=line[:2], path=line[3:].strip(), line=line))
    return entries
