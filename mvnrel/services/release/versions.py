"""Version string arithmetic.

Pure functions only: nothing here touches git, Maven or the terminal, except
through the ``Prompt`` callable handed to ``resolve_value``.
"""

from __future__ import annotations

import re
from collections.abc import Callable

AUTO = "auto"
SNAPSHOT_SUFFIX = "-SNAPSHOT"

# (N.)*N: only the trailing N is incremented
_INCREMENTABLE_RE = re.compile(r"^((?:[0-9]+\.)*)([0-9]+)$")

Prompt = Callable[[str, str], str]
"""Ask the operator for a value: ``prompt(label, default) -> raw answer``."""


def strip_suffix(version: str, suffix: str = SNAPSHOT_SUFFIX) -> str:
    """Remove every occurrence of the pre-release suffix, ignoring case."""
    return re.sub(re.escape(suffix), "", version, flags=re.IGNORECASE)


def release_default(current: str, suffix: str = SNAPSHOT_SUFFIX) -> str:
    """Suggested release version: the current version without its suffix.

    Unlike ``strip_suffix`` this is case-sensitive, so ``1.0-snapshot`` is
    kept as is and then rejected as equal to the current version.

    >>> release_default("2.0-SNAPSHOT")
    '2.0'
    """
    return current.replace(suffix, "")


def increment_version(version: str) -> str:
    """Increment the last dot-separated number of a version.

    Versions that are not purely numeric (e.g. ``1.0-rc1``) are returned
    unchanged so the operator is asked to type the next version.

    >>> increment_version("1.2.9")
    '1.2.10'
    """
    m = _INCREMENTABLE_RE.match(version)
    if m is None:
        return version
    return f"{m.group(1)}{int(m.group(2)) + 1}"


def normalize_next(version: str, suffix: str = SNAPSHOT_SUFFIX) -> str:
    """Make sure a development version carries exactly one suffix."""
    return f"{strip_suffix(version, suffix)}{suffix}"


def resolve_value(explicit: str | None, default: str, *, prompt: Prompt, label: str) -> str:
    """Pick a version from a flag, the operator, or the computed default.

    - no flag: ask with ``default``; an empty answer accepts it
    - ``auto``: use ``default`` without asking
    - anything else: use it as given
    """
    if not explicit:
        answer = prompt(label, default).strip()
        return answer or default
    if explicit == AUTO:
        return default
    return explicit
