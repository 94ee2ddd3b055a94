"""Tasks built from several independent steps."""

from __future__ import annotations

import concurrent.futures as cf
from abc import abstractmethod
from collections.abc import Callable, Sequence
from typing import Protocol

from releaser.versions import Projects, Version

from .result import ExecutionResult
from .task import Arguments, BaseTask, TaskStage

__all__ = ["CompositeTask", "CreateTemplatesTask", "ForEachProjectTask", "TemplateGenerator"]

Step = Callable[[Arguments], ExecutionResult]


class CompositeTask(BaseTask):
    """Runs every step and merges their results into one.

    A step that raises is recorded as a FAILURE of this task; later steps still
    run.
    """

    def steps(self) -> Sequence[tuple[str, Step]]:
        return ()

    def run_task(self, args: Arguments) -> ExecutionResult:
        result = ExecutionResult.skipped()
        for step_name, step in self.steps():
            try:
                outcome = step(args)
            except Exception as e:
                outcome = ExecutionResult.failure(f"{self.name}:{step_name}", e)
            result = result.merge(outcome)
        return result


class TemplateGenerator(Protocol):
    def create_email(self, train: Version | None, projects: Projects) -> ExecutionResult: ...

    def create_blog(self, train: Version | None, projects: Projects) -> ExecutionResult: ...

    def create_tweet(self, train: Version | None, projects: Projects) -> ExecutionResult: ...

    def create_release_notes(
        self, train: Version | None, projects: Projects
    ) -> ExecutionResult: ...


class CreateTemplatesTask(CompositeTask):
    """Post-release announcement templates for the whole train."""

    ORDER = 70

    name = "createTemplates"
    short_name = "t"
    header = "CREATING TEMPLATES"
    description = "Create email / blog / tweet etc. templates"
    order = ORDER
    stage = TaskStage.POST_RELEASE

    def __init__(self, generator: TemplateGenerator) -> None:
        self._generator = generator

    def steps(self) -> Sequence[tuple[str, Step]]:
        g = self._generator
        return (
            ("email", lambda a: g.create_email(a.version_from_bom, a.projects)),
            ("blog", lambda a: g.create_blog(a.version_from_bom, a.projects)),
            ("tweet", lambda a: g.create_tweet(a.version_from_bom, a.projects)),
            ("releaseNotes", lambda a: g.create_release_notes(a.version_from_bom, a.projects)),
        )


class ForEachProjectTask(BaseTask):
    """Runs ``run_project`` for every project of the run.

    Projects may be handled on up to ``max_workers`` threads; results are
    merged in project order once all of them are done, so the pipeline sees a
    single outcome.
    """

    max_workers: int = 1

    @abstractmethod
    def run_project(self, args: Arguments) -> ExecutionResult: ...

    def _run_one(self, args: Arguments) -> ExecutionResult:
        try:
            return self.run_project(args)
        except Exception as e:
            project = args.project.project_name if args.project else "?"
            return ExecutionResult.failure(f"{self.name}:{project}", e)

    def run_task(self, args: Arguments) -> ExecutionResult:
        per_project = [args.for_project(p) for p in args.projects]
        if self.max_workers <= 1:
            return ExecutionResult.merge_all(self._run_one(a) for a in per_project)
        with cf.ThreadPoolExecutor(max_workers=self.max_workers) as ex:
            futs = [ex.submit(self._run_one, a) for a in per_project]
            return ExecutionResult.merge_all(f.result() for f in futs)
