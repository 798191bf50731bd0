"""Maven collaborators: reading the pom version and ``versions:set``."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from mvnrel.core.result import Err, Ok, Result
from mvnrel.platform.process import ProcessError, run, run_silent
from mvnrel.services.release.errors import ReleaseError

POM_VERSION_XPATH = "/*[local-name() = 'project']/*[local-name() = 'version']/text()"

_XMLLINT_TIMEOUT_SECONDS = 30.0


@dataclass(frozen=True, slots=True)
class Maven:
    """Maven invocations for one project.

    Attributes:
        command: Command prefix (e.g. ("mvn",) or ("./mvnw", "-B"))
        project_dir: Directory holding the root pom
    """

    command: tuple[str, ...]
    project_dir: Path

    def set_version_args(self, version: str) -> list[str]:
        return [
            *self.command,
            "versions:set",
            "-DgenerateBackupPoms=false",
            f"-DnewVersion={version}",
        ]

    def set_version(self, version: str) -> Result[None, ProcessError]:
        """Rewrite the version in every pom of the reactor.

        Maven output streams to the terminal.
        """
        return run_silent(self.set_version_args(version), cwd=self.project_dir)


def read_pom_version(project_dir: Path, pom: str = "pom.xml") -> Result[str, ReleaseError]:
    """Read ``/project/version`` from a pom with xmllint.

    Namespaces are ignored through ``local-name()`` so both plain and
    namespaced poms work.
    """
    result = run(
        ["xmllint", "--xpath", POM_VERSION_XPATH, pom],
        cwd=project_dir,
        timeout=_XMLLINT_TIMEOUT_SECONDS,
    )
    if isinstance(result, Err):
        return Err(
            ReleaseError(
                kind="invalid_version",
                message=f"failed to read the project version from {pom}",
                hint=result.error.detail,
            )
        )

    version = result.value.strip()
    if not version:
        return Err(
            ReleaseError(
                kind="invalid_version",
                message=f"{pom} has no project version",
                hint="Pass the current version with -c VERSION",
            )
        )
    return Ok(version)
