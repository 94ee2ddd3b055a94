"""The release task contract.

A task is a named unit of release work. The pipeline only relies on the
metadata below (``order`` and ``stage`` drive scheduling; the rest is for
display) and on ``run_task``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Protocol

from releaser.bom.parser import EMPTY_VERSIONS, VersionsFromBom
from releaser.core.config import ReleaserConfig
from releaser.versions import EMPTY_PROJECTS, Projects, Version

from .result import ExecutionResult

__all__ = ["Arguments", "BaseTask", "ReleaserTask", "TaskStage"]


class TaskStage(Enum):
    PRE_RELEASE = 0
    RELEASE = 1
    POST_RELEASE = 2

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True, slots=True)
class Arguments:
    """Shared, read-only inputs of every task in a run.

    ``projects`` is the snapshot of versions being released; ``project`` is
    the project a per-project task works on, None for train-level tasks.
    """

    projects: Projects = field(default=EMPTY_PROJECTS)
    versions_from_bom: VersionsFromBom = field(default=EMPTY_VERSIONS)
    project: Version | None = None
    config: ReleaserConfig = field(default_factory=ReleaserConfig)
    dry_run: bool = False

    @property
    def version_from_bom(self) -> Version | None:
        """Version of the release train itself."""
        return self.versions_from_bom.train_version

    def for_project(self, project: Version) -> Arguments:
        return Arguments(
            projects=self.projects,
            versions_from_bom=self.versions_from_bom,
            project=project,
            config=self.config,
            dry_run=self.dry_run,
        )


class ReleaserTask(Protocol):
    name: str
    short_name: str
    header: str
    description: str
    order: int
    stage: TaskStage

    def run_task(self, args: Arguments) -> ExecutionResult: ...


class BaseTask(ABC):
    """Convenience base: subclasses set the metadata and implement ``run_task``.

    Lower ``order`` runs earlier.
    """

    name: str = ""
    short_name: str = ""
    header: str = ""
    description: str = ""
    order: int = 0
    stage: TaskStage = TaskStage.RELEASE

    @abstractmethod
    def run_task(self, args: Arguments) -> ExecutionResult: ...

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r}, order={self.order}, stage={self.stage})"
