"""Tests for mvnrel.core.config."""

from __future__ import annotations

from pathlib import Path

from mvnrel.core.config import CONFIG_FILE_NAME, ReleaseConfig, load_config
from mvnrel.core.result import Err, Ok


class TestReleaseConfig:
    def test_defaults(self) -> None:
        config = ReleaseConfig()
        assert config.develop_branch == "develop"
        assert config.trunk_branch == "master"
        assert config.remote == "origin"
        assert config.maven == ("mvn",)

    def test_derived_names(self) -> None:
        config = ReleaseConfig()
        assert config.tag_for("1.3.0") == "v1.3.0"
        assert config.release_branch_for("1.3.0") == "release/v1.3.0"

    def test_from_dict_overrides(self) -> None:
        config = ReleaseConfig.from_dict(
            {"release": {"trunk_branch": "main", "maven": ["./mvnw", "-B"], "tag_prefix": "rel-"}}
        )
        assert config.trunk_branch == "main"
        assert config.maven == ("./mvnw", "-B")
        assert config.tag_for("2.0") == "rel-2.0"
        assert config.develop_branch == "develop"

    def test_env_override_splits_command(self) -> None:
        config = ReleaseConfig().with_env({"MVN": "/opt/maven/bin/mvn -B -q"})
        assert config.maven == ("/opt/maven/bin/mvn", "-B", "-q")
        assert config.maven_from_env is True

    def test_blank_env_override_is_ignored(self) -> None:
        config = ReleaseConfig().with_env({"MVN": "  "})
        assert config.maven == ("mvn",)
        assert config.maven_from_env is False


class TestLoadConfig:
    def test_missing_file_gives_defaults(self, tmp_path: Path) -> None:
        result = load_config(tmp_path)
        assert isinstance(result, Ok)
        assert result.value == ReleaseConfig()

    def test_reads_release_table(self, tmp_path: Path) -> None:
        (tmp_path / CONFIG_FILE_NAME).write_text(
            '[release]\ntrunk_branch = "main"\nremote = "upstream"\n', encoding="utf-8"
        )
        result = load_config(tmp_path)
        assert isinstance(result, Ok)
        assert result.value.trunk_branch == "main"
        assert result.value.remote == "upstream"

    def test_invalid_toml(self, tmp_path: Path) -> None:
        (tmp_path / CONFIG_FILE_NAME).write_text("[release\n", encoding="utf-8")
        result = load_config(tmp_path)
        assert isinstance(result, Err)
        assert "Invalid TOML" in result.error.message

    def test_invalid_maven_list(self, tmp_path: Path) -> None:
        (tmp_path / CONFIG_FILE_NAME).write_text("[release]\nmaven = [1]\n", encoding="utf-8")
        result = load_config(tmp_path)
        assert isinstance(result, Err)
        assert "release.maven" in result.error.message
