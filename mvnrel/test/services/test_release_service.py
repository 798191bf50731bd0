"""End-to-end tests of ReleaseService with scripted git and Maven."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

import pytest

from mvnrel.core.config import ReleaseConfig
from mvnrel.core.result import Err, Ok, Result
from mvnrel.output.console import MockConsole
from mvnrel.services.checkers.tools import ToolsChecker
from mvnrel.services.release.errors import ReleaseError
from mvnrel.services.release.model import ReleaseOptions
from mvnrel.services.release.service import ReleaseService

from ._fakes import MockCommandRunner, RecordingMaven, ScriptedRepository

_XMLLINT_USAGE = "\t--xpath expr   : evaluate the XPath expression\n"


def _which(name: str) -> str | None:
    return f"/usr/bin/{name}" if name in {"git", "mvn", "xmllint"} else None


def _service(
    tmp_path: Path,
    *,
    pom_version: str = "1.3.0-SNAPSHOT",
    fail: dict[str, str] | None = None,
    outputs: dict[str, str] | None = None,
    answers: list[str] | None = None,
) -> tuple[ReleaseService, ScriptedRepository, list[str], MockConsole, list[str]]:
    log: list[str] = []
    acks: list[str] = []
    pending = list(answers or [])
    console = MockConsole()

    def prompt(label: str, default: str) -> str:
        log.append(f"prompt {label}")
        return pending.pop(0) if pending else ""

    def read_version(project_dir: Path, pom: str) -> Result[str, ReleaseError]:
        log.append(f"read {pom}")
        return Ok(pom_version)

    repo = ScriptedRepository(tmp_path, log=log, fail=fail, outputs=outputs)
    service = ReleaseService(
        project_dir=tmp_path,
        config=ReleaseConfig(),
        console=console,
        prompt=prompt,
        acknowledge=lambda: acks.append("ready"),
        repo=repo,
        maven=RecordingMaven(command=("mvn",), project_dir=tmp_path, log=log),
        checker=ToolsChecker(runner=MockCommandRunner({("xmllint",): (1, "", _XMLLINT_USAGE)})),
        read_version=read_version,
    )
    return service, repo, log, console, acks


@pytest.fixture(autouse=True)
def _tools_on_path():
    with patch("shutil.which", side_effect=_which):
        yield


def test_auto_release(tmp_path: Path) -> None:
    service, repo, log, console, acks = _service(tmp_path)

    result = service.run(ReleaseOptions(release_version="auto", next_version="auto"))

    assert isinstance(result, Ok)
    assert result.value.release == "1.3.0"
    assert result.value.next == "1.3.1-SNAPSHOT"
    assert log[:3] == ["git status -s", "read pom.xml", "git tag -l v1.3.0"]
    assert log[-1] == "git push origin develop"
    assert acks == ["ready"]
    assert "Using maven command: mvn" in console.messages


def test_interactive_release(tmp_path: Path) -> None:
    service, repo, log, console, acks = _service(tmp_path, answers=["1.4.0", ""])

    result = service.run(ReleaseOptions())

    assert isinstance(result, Ok)
    assert result.value.release == "1.4.0"
    assert result.value.next == "1.4.1-SNAPSHOT"
    assert "prompt Version to release" in log
    assert "prompt Next snapshot version" in log


def test_current_override_skips_pom_read(tmp_path: Path) -> None:
    service, repo, log, console, acks = _service(tmp_path)

    result = service.run(
        ReleaseOptions(release_version="auto", next_version="auto", current_version="2.0-SNAPSHOT")
    )

    assert isinstance(result, Ok)
    assert result.value.release == "2.0"
    assert not any(entry.startswith("read ") for entry in log)


def test_dirty_tree_stops_before_versions(tmp_path: Path) -> None:
    service, repo, log, console, acks = _service(
        tmp_path, outputs={"git status -s": " M pom.xml\n"}
    )

    result = service.run(ReleaseOptions(release_version="auto", next_version="auto"))

    assert isinstance(result, Err)
    assert result.error.kind == "dirty_tree"
    assert log == ["git status -s"]


def test_release_equal_to_current_stops_before_git_mutations(tmp_path: Path) -> None:
    service, repo, log, console, acks = _service(tmp_path, pom_version="1.3.0")

    result = service.run(ReleaseOptions(release_version="auto", next_version="auto"))

    assert isinstance(result, Err)
    assert result.error.kind == "invalid_version"
    assert log == ["git status -s", "read pom.xml"]


def test_existing_tag_stops_before_release_branch(tmp_path: Path) -> None:
    service, repo, log, console, acks = _service(
        tmp_path, outputs={"git tag -l v1.3.0": "v1.3.0\n"}
    )

    result = service.run(ReleaseOptions(release_version="auto", next_version="auto"))

    assert isinstance(result, Err)
    assert result.error.kind == "tag_exists"
    assert not any(entry.startswith("git checkout") for entry in log)


def test_push_failure_after_commit_rolls_back(tmp_path: Path) -> None:
    service, repo, log, console, acks = _service(
        tmp_path, fail={"git push origin release/v1.3.0": "Connection refused"}
    )

    result = service.run(ReleaseOptions(release_version="auto", next_version="auto"))

    assert isinstance(result, Err)
    assert result.error.kind == "rolled_back"
    assert repo.count("git reset --hard HEAD^1") == 1
    assert "git checkout develop" not in log
    assert acks == []


def test_missing_maven(tmp_path: Path) -> None:
    service, repo, log, console, acks = _service(tmp_path)

    with patch("shutil.which", side_effect=lambda name: None if name == "mvn" else "/x"):
        result = service.run(ReleaseOptions(release_version="auto", next_version="auto"))

    assert isinstance(result, Err)
    assert result.error.kind == "missing_dependency"
    assert result.error.message == "Missing required command: mvn"
    assert log == []


def test_dry_run(tmp_path: Path) -> None:
    service, repo, log, console, acks = _service(tmp_path)

    result = service.run(
        ReleaseOptions(release_version="auto", next_version="auto", dry_run=True)
    )

    assert isinstance(result, Ok)
    assert log == ["git status -s", "read pom.xml", "git tag -l v1.3.0"]
    assert "> git push origin --tags" in console.messages
    assert acks == []
