"""Tools checker.

Validates that the commands a release shells out to are installed:
- git
- Maven (``mvn``, or whatever the ``MVN`` override names)
- xmllint with ``--xpath`` support, when the pom version has to be read
"""

from __future__ import annotations

import shutil
from dataclasses import dataclass, field

from mvnrel.services.checkers.base import CheckResult
from mvnrel.services.checkers.common import CommandRunner, DefaultCommandRunner

_XMLLINT_HINT = "Install libxml2 (e.g. apt install libxml2-utils, brew install libxml2)"


@dataclass(frozen=True, slots=True)
class ToolsChecker:
    """Check that release tools are installed.

    Attributes:
        maven: Maven command line prefix (e.g. ("mvn",) or ("./mvnw", "-B"))
        maven_from_env: True when the command came from the MVN variable
        runner: Command runner for capability probes
    """

    maven: tuple[str, ...] = ("mvn",)
    maven_from_env: bool = False
    runner: CommandRunner = field(default_factory=DefaultCommandRunner)

    def check_all(self, *, need_xmllint: bool) -> list[CheckResult]:
        """Run every check, in the order a release needs the tools."""
        results = [self.check_command("git"), self.check_maven()]
        if need_xmllint:
            results.append(self.check_xmllint())
        return results

    def check_command(self, name: str, *, hint: str | None = None) -> CheckResult:
        """Check a command resolves on PATH."""
        path = shutil.which(name)
        if not path:
            return CheckResult.error(name, f"Missing required command: {name}", hint=hint)
        return CheckResult.success(name, path)

    def check_maven(self) -> CheckResult:
        if not self.maven:
            return CheckResult.error("maven", "Maven command is empty")
        hint = "Check the MVN environment variable" if self.maven_from_env else None
        return self.check_command(self.maven[0], hint=hint)

    def check_xmllint(self) -> CheckResult:
        """Check xmllint exists and advertises the --xpath option."""
        if not shutil.which("xmllint"):
            return CheckResult.error(
                "xmllint",
                "Missing xmllint command, please install it (from libxml2)",
                hint=_XMLLINT_HINT,
            )

        # Without arguments xmllint prints its usage (and exits non-zero)
        try:
            proc = self.runner.run(["xmllint"])
        except OSError as e:
            return CheckResult.error("xmllint", f"xmllint could not be run: {e}")

        usage = f"{proc.stdout or ''}{proc.stderr or ''}"
        if "xpath" not in usage:
            return CheckResult.error(
                "xmllint",
                "xmllint command is missing the --xpath option, please install the libxml2 version",
                hint=_XMLLINT_HINT,
            )
        return CheckResult.success("xmllint", "supports --xpath")
