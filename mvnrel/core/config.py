"""Typed release configuration.

Defaults describe the classic git-flow layout (``develop``, ``master``,
``release/*`` and remote ``origin``). A project can override them with a
``.mvn-release.toml`` file at its root:

    [release]
    trunk_branch = "main"
    maven = ["./mvnw", "-B"]

The ``MVN`` environment variable takes precedence over the ``maven`` key.
"""

from __future__ import annotations

import shlex
from collections.abc import Mapping
from dataclasses import dataclass, replace
from pathlib import Path

from .result import Err, Ok, Result
from .structured import StrDict, as_str_dict, get_str, get_str_list, get_table

__all__ = [
    "CONFIG_FILE_NAME",
    "MAVEN_ENV_VAR",
    "ConfigError",
    "ReleaseConfig",
    "load_config",
]

CONFIG_FILE_NAME = ".mvn-release.toml"
MAVEN_ENV_VAR = "MVN"


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when config cannot be loaded or parsed."""

    message: str
    path: Path | None = None


@dataclass(frozen=True, slots=True)
class ReleaseConfig:
    """Branch topology and tool settings for a release."""

    develop_branch: str = "develop"
    trunk_branch: str = "master"
    remote: str = "origin"
    release_branch_prefix: str = "release/"
    tag_prefix: str = "v"
    snapshot_suffix: str = "-SNAPSHOT"
    pom: str = "pom.xml"
    maven: tuple[str, ...] = ("mvn",)
    maven_from_env: bool = False

    def tag_for(self, version: str) -> str:
        return f"{self.tag_prefix}{version}"

    def release_branch_for(self, version: str) -> str:
        return f"{self.release_branch_prefix}{self.tag_for(version)}"

    def with_env(self, environ: Mapping[str, str]) -> ReleaseConfig:
        """Apply the ``MVN`` override, if set and non-blank."""
        raw = environ.get(MAVEN_ENV_VAR, "").strip()
        if not raw:
            return self
        return replace(self, maven=tuple(shlex.split(raw)), maven_from_env=True)

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> ReleaseConfig:
        """Create a config from a parsed TOML document."""
        table: StrDict = get_table(data, "release") or {}
        defaults = cls()

        maven = get_str_list(table, "maven")
        if "maven" in table and not maven:
            raise ValueError("release.maven must be a non-empty list of strings")

        return cls(
            develop_branch=get_str(table, "develop_branch") or defaults.develop_branch,
            trunk_branch=get_str(table, "trunk_branch") or defaults.trunk_branch,
            remote=get_str(table, "remote") or defaults.remote,
            release_branch_prefix=get_str(table, "release_branch_prefix")
            or defaults.release_branch_prefix,
            tag_prefix=get_str(table, "tag_prefix") or defaults.tag_prefix,
            snapshot_suffix=get_str(table, "snapshot_suffix") or defaults.snapshot_suffix,
            pom=get_str(table, "pom") or defaults.pom,
            maven=tuple(maven) if maven else defaults.maven,
        )


def _parse_toml(path: Path) -> Result[StrDict, ConfigError]:
    import tomllib

    try:
        data_obj: object = tomllib.loads(path.read_bytes().decode("utf-8"))
    except FileNotFoundError:
        return Err(ConfigError(f"Config file not found: {path}", path=path))
    except PermissionError:
        return Err(ConfigError(f"Permission denied reading: {path}", path=path))
    except tomllib.TOMLDecodeError as e:
        return Err(ConfigError(f"Invalid TOML syntax: {e}", path=path))
    except UnicodeDecodeError as e:
        return Err(ConfigError(f"Error reading config: {e}", path=path))

    data = as_str_dict(data_obj)
    if data is None:
        return Err(ConfigError("Config root must be a TOML table", path=path))
    return Ok(data)


def load_config(project_dir: Path) -> Result[ReleaseConfig, ConfigError]:
    """Load ``.mvn-release.toml`` from a project, or defaults if absent.

    Args:
        project_dir: Root of the Maven project checkout.

    Returns:
        Ok(ReleaseConfig) on success, Err(ConfigError) if the file is invalid.
    """
    path = project_dir / CONFIG_FILE_NAME
    if not path.exists():
        return Ok(ReleaseConfig())

    result = _parse_toml(path)
    if isinstance(result, Err):
        return result

    try:
        return Ok(ReleaseConfig.from_dict(result.value))
    except (KeyError, TypeError, ValueError) as e:
        return Err(ConfigError(f"Invalid config structure: {e}", path=path))
