from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

ReleaseErrorKind = Literal[
    "missing_dependency",
    "invalid_config",
    "dirty_tree",
    "invalid_version",
    "tag_exists",
    "command_failed",
    "rolled_back",
    "manual_followup",
]


@dataclass(frozen=True, slots=True)
class ReleaseError:
    """Canonical release error payload.

    ``kind`` says how far the release got: ``command_failed`` means nothing
    was pushed, ``rolled_back`` means the release commit was reset, and
    ``manual_followup`` means shared history already changed and the operator
    has to finish the remaining steps by hand.
    """

    kind: ReleaseErrorKind
    message: str
    hint: str | None = None
