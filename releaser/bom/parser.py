"""Project versions taken from the release train BOM.

The train's aggregator descriptor declares one property per project, e.g.
``<spring-cloud-build.version>2.0.1-RC1</spring-cloud-build.version>``. Keys
matching the configured pattern become ``Version(group(1), value)``; the
descriptor's own version becomes the version of the release train project.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path

from releaser.core.config import ReleaserConfig
from releaser.output.console import ConsoleProtocol
from releaser.versions import EMPTY_PROJECTS, Projects, Version

from .custom import CustomBomParser
from .descriptor import DescriptorReader, PomDescriptorReader

__all__ = ["BomParser", "VersionsFromBom", "EMPTY_VERSIONS"]


@dataclass(frozen=True, slots=True)
class VersionsFromBom:
    """Versions of every project in a train.

    ``overrides`` win over ``projects`` when both have a version for the same
    project.
    """

    projects: Projects = field(default=EMPTY_PROJECTS)
    train_version: Version | None = None
    overrides: Projects = field(default=EMPTY_PROJECTS)

    @property
    def is_empty(self) -> bool:
        return len(self.projects) == 0 and len(self.overrides) == 0

    def version_for(self, project_name: str) -> Version | None:
        """Effective version of a project, None when the train doesn't list it."""
        return self.overrides.get(project_name) or self.projects.get(project_name)

    def effective_projects(self) -> Projects:
        return self.projects.with_overrides(self.overrides)


EMPTY_VERSIONS = VersionsFromBom()


class BomParser:
    def __init__(
        self,
        config: ReleaserConfig,
        root: Path,
        *,
        reader: DescriptorReader | None = None,
        custom_parsers: Sequence[CustomBomParser] = (),
        console: ConsoleProtocol | None = None,
    ) -> None:
        self._config = config
        self._root = root
        self._reader = reader or PomDescriptorReader()
        self._custom_parsers = tuple(custom_parsers)
        self._console = console

    @property
    def bom_path(self) -> Path:
        return self._root / self._config.pom.this_train_bom

    def versions_from_bom(self) -> VersionsFromBom:
        """Read the BOM; an unreadable BOM gives ``EMPTY_VERSIONS``."""
        descriptor = self._reader.read_descriptor(self.bom_path)
        if descriptor is None:
            if self._console is not None:
                self._console.warning(f"no BOM found at {self.bom_path}, no train versions")
            return EMPTY_VERSIONS

        pattern = self._config.pom.version_regex
        versions: list[Version] = []
        for key, value in descriptor.properties.items():
            m = pattern.fullmatch(key)
            if m is not None:
                versions.append(Version(m.group(1), value))

        train = Version(self._config.meta_release.release_train_project_name, descriptor.version)
        versions.append(train)
        projects = Projects(versions)

        return VersionsFromBom(
            projects=projects,
            train_version=train,
            overrides=self._custom_versions(projects),
        )

    def _custom_versions(self, projects: Projects) -> Projects:
        overlay = EMPTY_PROJECTS
        for parser in self._custom_parsers:
            overlay = overlay.with_overrides(parser.parse(self._root, self._config, projects))
        return overlay
