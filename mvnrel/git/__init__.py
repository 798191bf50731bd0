"""Git operations used by the release workflow.

Usage:
    from mvnrel.git import Repository

    repo = Repository(Path("."))
    exists = repo.tag_exists("v1.0.0")
"""

from mvnrel.git.repository import (
    GitError,
    Repository,
    StatusEntry,
    parse_short_status,
)

__all__ = [
    "GitError",
    "Repository",
    "StatusEntry",
    "parse_short_status",
]
