from __future__ import annotations

from mvnrel.core.result import Err, Ok, Result
from mvnrel.git.repository import Repository
from mvnrel.output.console import ConsoleProtocol, Style
from mvnrel.services.release.errors import ReleaseError


def ensure_clean_tree(
    repo: Repository,
    *,
    ignore_untracked: bool,
    console: ConsoleProtocol,
) -> Result[None, ReleaseError]:
    """Refuse to release from a checkout with uncommitted changes.

    With ``ignore_untracked`` the check uses ``git status -s -uno`` so new,
    never-added files do not block the release.
    """
    status = repo.short_status(ignore_untracked=ignore_untracked)
    if isinstance(status, Err):
        return Err(
            ReleaseError(
                kind="command_failed",
                message="failed to check git status",
                hint=status.error.message,
            )
        )

    entries = status.value
    if entries:
        for entry in entries:
            console.print(entry.line, Style.DIM)
        hint = None
        if not ignore_untracked and all(e.is_untracked for e in entries):
            hint = "Only untracked files were found; pass -i to ignore them."
        return Err(
            ReleaseError(
                kind="dirty_tree",
                message=(
                    "There are uncommitted changes, please commit or stash them "
                    "to continue with the release"
                ),
                hint=hint,
            )
        )

    console.success("Good, no uncommitted changes found")
    return Ok(None)
