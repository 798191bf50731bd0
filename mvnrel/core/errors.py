"""Exit codes for the release command.

Every release failure, whether a missing tool, a dirty checkout or a failed
git command, exits with ``FAILURE``. ``USAGE_ERROR`` is what Typer/Click use
for unrecognised flags.
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Process exit codes. These values should remain stable."""

    OK = 0
    FAILURE = 1
    USAGE_ERROR = 2
