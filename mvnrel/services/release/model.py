from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ReleaseOptions:
    """What the operator asked for on the command line.

    ``None`` means "ask interactively"; ``"auto"`` means "use the default".
    """

    release_version: str | None = None
    next_version: str | None = None
    current_version: str | None = None
    ignore_untracked: bool = False
    dry_run: bool = False


@dataclass(frozen=True, slots=True)
class VersionPlan:
    """Resolved versions and the git names derived from them."""

    current: str
    release: str
    next: str
    tag: str
    release_branch: str
