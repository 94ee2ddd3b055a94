"""Typed releaser configuration.

The configuration is an explicit value passed to the BOM parser, the version
tag helpers and the task pipeline. It is loaded from a ``releaser.toml`` file:

    [pom]
    this_train_bom = "spring-cloud-dependencies/pom.xml"
    bom_version_pattern = "^(spring-cloud-.*)\\.version$"

    [meta_release]
    release_train_project_name = "spring-cloud-release"

    [git]
    tag_prefix = "v"
    forced_suffix = ""

    [pipeline]
    abort_on_failure = ["RELEASE"]

A project being released may carry its own ``.releaser.toml``; values found
there override the base configuration for that project only.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from pathlib import Path

from .result import Err, Ok, Result
from .structured import StrDict, as_str_dict, get_str, get_str_list, get_table

__all__ = [
    "ConfigError",
    "GitConfig",
    "MetaReleaseConfig",
    "PipelineConfig",
    "PomConfig",
    "ReleaserConfig",
    "PROJECT_CONFIG_FILE",
    "load_config",
    "load_config_or_default",
    "update_config",
]

DEFAULT_THIS_TRAIN_BOM = "spring-cloud-dependencies/pom.xml"
DEFAULT_BOM_VERSION_PATTERN = r"^(spring-cloud-.*)\.version$"
DEFAULT_RELEASE_TRAIN_PROJECT_NAME = "spring-cloud-release"
DEFAULT_TAG_PREFIX = "v"

PROJECT_CONFIG_FILE = ".releaser.toml"

# Kept as names here so the core layer does not import the task layer.
PIPELINE_STAGE_NAMES = ("PRE_RELEASE", "RELEASE", "POST_RELEASE")


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when config cannot be loaded or parsed."""

    message: str
    path: Path | None = None


@dataclass(frozen=True, slots=True)
class PomConfig:
    """Where the train BOM lives and how its version properties are named.

    ``bom_version_pattern`` must have exactly one capturing group: the project
    name.
    """

    this_train_bom: str = DEFAULT_THIS_TRAIN_BOM
    bom_version_pattern: str = DEFAULT_BOM_VERSION_PATTERN

    @property
    def version_regex(self) -> re.Pattern[str]:
        return re.compile(self.bom_version_pattern)


@dataclass(frozen=True, slots=True)
class MetaReleaseConfig:
    release_train_project_name: str = DEFAULT_RELEASE_TRAIN_PROJECT_NAME


@dataclass(frozen=True, slots=True)
class GitConfig:
    """Tag naming. An empty ``forced_suffix`` keeps the version's own suffix."""

    tag_prefix: str = DEFAULT_TAG_PREFIX
    forced_suffix: str = ""


@dataclass(frozen=True, slots=True)
class PipelineConfig:
    """Stages in which a FAILURE result stops the rest of the run."""

    abort_on_failure: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class ReleaserConfig:
    """Main configuration container."""

    pom: PomConfig = field(default_factory=PomConfig)
    meta_release: MetaReleaseConfig = field(default_factory=MetaReleaseConfig)
    git: GitConfig = field(default_factory=GitConfig)
    pipeline: PipelineConfig = field(default_factory=PipelineConfig)

    @classmethod
    def from_dict(
        cls, data: Mapping[str, object], *, base: ReleaserConfig | None = None
    ) -> ReleaserConfig:
        """Create a config from parsed TOML, filling gaps from ``base``.

        Raises:
            ValueError: If the BOM version pattern does not compile or does not
                have exactly one group, or if an unknown stage name is listed.
        """
        base = base or cls()
        pom: StrDict = get_table(data, "pom") or {}
        meta: StrDict = get_table(data, "meta_release") or {}
        git: StrDict = get_table(data, "git") or {}
        pipeline: StrDict = get_table(data, "pipeline") or {}

        pattern = get_str(pom, "bom_version_pattern") or base.pom.bom_version_pattern
        _check_version_pattern(pattern)

        abort = get_str_list(pipeline, "abort_on_failure")
        if abort is not None:
            unknown = [s for s in abort if s.upper() not in PIPELINE_STAGE_NAMES]
            if unknown:
                raise ValueError(
                    f"unknown pipeline stage(s): {', '.join(unknown)} "
                    f"(expected one of {', '.join(PIPELINE_STAGE_NAMES)})"
                )
            abort_stages = tuple(s.upper() for s in abort)
        else:
            abort_stages = base.pipeline.abort_on_failure

        forced_suffix = get_str(git, "forced_suffix")

        return cls(
            pom=PomConfig(
                this_train_bom=get_str(pom, "this_train_bom") or base.pom.this_train_bom,
                bom_version_pattern=pattern,
            ),
            meta_release=MetaReleaseConfig(
                release_train_project_name=get_str(meta, "release_train_project_name")
                or base.meta_release.release_train_project_name,
            ),
            git=GitConfig(
                tag_prefix=get_str(git, "tag_prefix") or base.git.tag_prefix,
                forced_suffix=(
                    forced_suffix if forced_suffix is not None else base.git.forced_suffix
                ),
            ),
            pipeline=replace(base.pipeline, abort_on_failure=abort_stages),
        )


def _check_version_pattern(pattern: str) -> None:
    try:
        compiled = re.compile(pattern)
    except re.error as e:
        raise ValueError(f"invalid bom_version_pattern {pattern!r}: {e}") from e
    if compiled.groups != 1:
        raise ValueError(
            f"bom_version_pattern {pattern!r} must have exactly one group, "
            f"found {compiled.groups}"
        )


def _parse_toml(path: Path) -> Result[StrDict, ConfigError]:
    """Parse a TOML file, handling import and parse errors."""
    import tomllib

    try:
        content = path.read_bytes()
        data_obj: object = tomllib.loads(content.decode("utf-8"))
        data = as_str_dict(data_obj)
        if data is None:
            return Err(ConfigError("Config root must be a TOML table", path=path))
        return Ok(data)
    except FileNotFoundError:
        return Err(ConfigError(f"Config file not found: {path}", path=path))
    except PermissionError:
        return Err(ConfigError(f"Permission denied reading: {path}", path=path))
    except tomllib.TOMLDecodeError as e:
        return Err(ConfigError(f"Invalid TOML syntax: {e}", path=path))
    except UnicodeDecodeError as e:
        return Err(ConfigError(f"Error reading config: {e}", path=path))


def load_config(
    path: Path, *, base: ReleaserConfig | None = None
) -> Result[ReleaserConfig, ConfigError]:
    """Load and parse configuration from a TOML file.

    Args:
        path: Path to the TOML file
        base: Values used for keys the file does not set

    Returns:
        Ok(ReleaserConfig) on success, Err(ConfigError) on failure
    """
    result = _parse_toml(path)
    if isinstance(result, Err):
        return result

    try:
        return Ok(ReleaserConfig.from_dict(result.value, base=base))
    except (KeyError, TypeError, ValueError) as e:
        return Err(ConfigError(f"Invalid config structure: {e}", path=path))


def load_config_or_default(path: Path) -> ReleaserConfig:
    """Load config from file, or return the default config if it can't be read."""
    result = load_config(path)
    if isinstance(result, Ok):
        return result.value
    return ReleaserConfig()


def update_config(
    config: ReleaserConfig, project_root: Path
) -> Result[ReleaserConfig, ConfigError]:
    """Overlay a project's own ``.releaser.toml`` on top of ``config``.

    A project without the file keeps ``config`` unchanged.
    """
    path = project_root / PROJECT_CONFIG_FILE
    if not path.is_file():
        return Ok(config)
    return load_config(path, base=config)
