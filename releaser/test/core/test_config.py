"""Tests for releaser.core.config module."""

from __future__ import annotations

from pathlib import Path

import pytest

from releaser.core.config import (
    PROJECT_CONFIG_FILE,
    ConfigError,
    GitConfig,
    PomConfig,
    ReleaserConfig,
    load_config,
    load_config_or_default,
    update_config,
)
from releaser.core.result import Err, Ok


class TestDefaults:
    """Test default configuration values."""

    def test_pom(self) -> None:
        config = PomConfig()
        assert config.this_train_bom == "spring-cloud-dependencies/pom.xml"
        assert config.bom_version_pattern == r"^(spring-cloud-.*)\.version$"
        assert config.version_regex.fullmatch("spring-cloud-build.version")

    def test_release_config(self) -> None:
        config = ReleaserConfig()
        assert config.meta_release.release_train_project_name == "spring-cloud-release"
        assert config.git.tag_prefix == "v"
        assert config.git.forced_suffix == ""
        assert config.pipeline.abort_on_failure == ()

    def test_frozen(self) -> None:
        config = GitConfig()
        with pytest.raises(AttributeError):
            config.tag_prefix = "x"  # type: ignore[misc]


class TestFromDict:
    """Test ReleaserConfig.from_dict."""

    def test_empty_dict_gives_defaults(self) -> None:
        assert ReleaserConfig.from_dict({}) == ReleaserConfig()

    def test_full(self) -> None:
        config = ReleaserConfig.from_dict(
            {
                "pom": {"this_train_bom": "bom/pom.xml", "bom_version_pattern": r"^(.*)\.ver$"},
                "meta_release": {"release_train_project_name": "train"},
                "git": {"tag_prefix": "release-", "forced_suffix": "RELEASE"},
                "pipeline": {"abort_on_failure": ["release", "PRE_RELEASE"]},
            }
        )
        assert config.pom.this_train_bom == "bom/pom.xml"
        assert config.pom.bom_version_pattern == r"^(.*)\.ver$"
        assert config.meta_release.release_train_project_name == "train"
        assert config.git == GitConfig(tag_prefix="release-", forced_suffix="RELEASE")
        assert config.pipeline.abort_on_failure == ("RELEASE", "PRE_RELEASE")

    def test_wrong_types_fall_back_to_defaults(self) -> None:
        config = ReleaserConfig.from_dict({"pom": "not a table", "git": {"tag_prefix": 3}})
        assert config == ReleaserConfig()

    def test_missing_keys_come_from_base(self) -> None:
        base = ReleaserConfig.from_dict({"git": {"tag_prefix": "r", "forced_suffix": "RELEASE"}})
        config = ReleaserConfig.from_dict({"pom": {"this_train_bom": "x.xml"}}, base=base)
        assert config.pom.this_train_bom == "x.xml"
        assert config.git.tag_prefix == "r"
        assert config.git.forced_suffix == "RELEASE"

    def test_empty_forced_suffix_overrides_base(self) -> None:
        base = ReleaserConfig.from_dict({"git": {"forced_suffix": "RELEASE"}})
        config = ReleaserConfig.from_dict({"git": {"forced_suffix": ""}}, base=base)
        assert config.git.forced_suffix == ""

    def test_pattern_needs_one_group(self) -> None:
        with pytest.raises(ValueError, match="exactly one group"):
            ReleaserConfig.from_dict({"pom": {"bom_version_pattern": r"^spring-.*\.version$"}})

    def test_pattern_must_compile(self) -> None:
        with pytest.raises(ValueError, match="invalid bom_version_pattern"):
            ReleaserConfig.from_dict({"pom": {"bom_version_pattern": "(unclosed"}})

    def test_unknown_stage(self) -> None:
        with pytest.raises(ValueError, match="unknown pipeline stage"):
            ReleaserConfig.from_dict({"pipeline": {"abort_on_failure": ["DEPLOY"]}})


class TestLoadConfig:
    """Test load_config function."""

    def test_load_valid(self, tmp_path: Path) -> None:
        path = tmp_path / "releaser.toml"
        path.write_text(
            '[git]\ntag_prefix = "r"\n\n[pipeline]\nabort_on_failure = ["RELEASE"]\n'
        )
        result = load_config(path)
        assert isinstance(result, Ok)
        assert result.value.git.tag_prefix == "r"
        assert result.value.pipeline.abort_on_failure == ("RELEASE",)

    def test_missing_file(self, tmp_path: Path) -> None:
        path = tmp_path / "missing.toml"
        result = load_config(path)
        assert isinstance(result, Err)
        assert isinstance(result.error, ConfigError)
        assert "not found" in result.error.message
        assert result.error.path == path

    def test_invalid_toml(self, tmp_path: Path) -> None:
        path = tmp_path / "releaser.toml"
        path.write_text("[git\n")
        result = load_config(path)
        assert isinstance(result, Err)
        assert "Invalid TOML" in result.error.message

    def test_invalid_structure(self, tmp_path: Path) -> None:
        path = tmp_path / "releaser.toml"
        path.write_text('[pom]\nbom_version_pattern = "no-group"\n')
        result = load_config(path)
        assert isinstance(result, Err)
        assert "Invalid config structure" in result.error.message

    def test_load_or_default(self, tmp_path: Path) -> None:
        assert load_config_or_default(tmp_path / "missing.toml") == ReleaserConfig()


class TestUpdateConfig:
    """Test the per-project configuration overlay."""

    def test_without_project_file(self, tmp_path: Path) -> None:
        config = ReleaserConfig()
        result = update_config(config, tmp_path)
        assert isinstance(result, Ok)
        assert result.value is config

    def test_project_file_overrides(self, tmp_path: Path) -> None:
        base = ReleaserConfig.from_dict({"git": {"tag_prefix": "r"}})
        (tmp_path / PROJECT_CONFIG_FILE).write_text(
            '[pom]\nthis_train_bom = "bom/pom.xml"\n'
        )
        result = update_config(base, tmp_path)
        assert isinstance(result, Ok)
        assert result.value.pom.this_train_bom == "bom/pom.xml"
        assert result.value.git.tag_prefix == "r"

    def test_broken_project_file(self, tmp_path: Path) -> None:
        (tmp_path / PROJECT_CONFIG_FILE).write_text("not toml = = =")
        assert isinstance(update_config(ReleaserConfig(), tmp_path), Err)
