"""Pre-flight checks for the tools a release shells out to."""

from .base import CheckResult, CheckStatus
from .common import CommandRunner, DefaultCommandRunner
from .tools import ToolsChecker

__all__ = [
    "CheckResult",
    "CheckStatus",
    "CommandRunner",
    "DefaultCommandRunner",
    "ToolsChecker",
]
