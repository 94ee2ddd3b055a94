"""Ordered execution of release tasks.

Tasks run stage by stage (PRE_RELEASE, RELEASE, POST_RELEASE), one at a time,
sorted by ``order`` (ties keep registration order). Every task contributes
exactly one result: its own when it ran, SKIPPED when it never started.

A task FAILURE does not stop the run unless the policy says so for that
stage; then the remaining tasks are skipped and the run ends FAILED. A
cancellation request is honoured between tasks only.
"""

from __future__ import annotations

import threading
from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum

from releaser.core.config import ReleaserConfig
from releaser.output.console import ConsoleProtocol, Style

from .result import ExecutionResult, ExecutionStatus
from .task import Arguments, ReleaserTask, TaskStage

__all__ = [
    "PipelinePolicy",
    "PipelineRun",
    "PipelineState",
    "TaskNotFoundError",
    "TaskOutcome",
    "TaskPipeline",
]


class PipelineState(Enum):
    IDLE = "idle"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"


class TaskNotFoundError(KeyError):
    def __init__(self, name: str, known: Iterable[str]) -> None:
        super().__init__(name)
        self.name = name
        self.known = tuple(known)

    def __str__(self) -> str:
        return f"no task named [{self.name}]; available: {', '.join(self.known)}"


@dataclass(frozen=True, slots=True)
class PipelinePolicy:
    """Stages in which a FAILURE aborts the rest of the run.

    The default never aborts: a long batch keeps going and the final report
    lists everything that failed.
    """

    abort_on_failure: frozenset[TaskStage] = frozenset()

    @classmethod
    def from_config(cls, config: ReleaserConfig) -> PipelinePolicy:
        return cls(frozenset(TaskStage[name] for name in config.pipeline.abort_on_failure))

    def aborts(self, stage: TaskStage) -> bool:
        return stage in self.abort_on_failure


@dataclass(frozen=True, slots=True)
class TaskOutcome:
    task_name: str
    stage: TaskStage
    result: ExecutionResult
    ran: bool


def _empty_stage_results() -> dict[TaskStage, ExecutionResult]:
    return {}


@dataclass(frozen=True, slots=True)
class PipelineRun:
    """What happened in one run, in execution order."""

    state: PipelineState
    outcomes: tuple[TaskOutcome, ...] = ()
    stage_results: dict[TaskStage, ExecutionResult] = field(default_factory=_empty_stage_results)
    cancelled: bool = False

    @property
    def result(self) -> ExecutionResult:
        stages = sorted_stages(self.stage_results)
        return ExecutionResult.merge_all(self.stage_results[s] for s in stages)

    @property
    def executed(self) -> tuple[str, ...]:
        return tuple(o.task_name for o in self.outcomes if o.ran)

    @property
    def skipped(self) -> tuple[str, ...]:
        return tuple(o.task_name for o in self.outcomes if not o.ran)


def sorted_stages(stages: Iterable[TaskStage]) -> list[TaskStage]:
    return sorted(stages, key=lambda s: s.value)


class TaskPipeline:
    def __init__(
        self,
        tasks: Iterable[ReleaserTask],
        *,
        console: ConsoleProtocol,
        policy: PipelinePolicy | None = None,
    ) -> None:
        self._tasks: tuple[ReleaserTask, ...] = tuple(tasks)
        self._console = console
        self._policy = policy or PipelinePolicy()
        self._state = PipelineState.IDLE
        self._current_stage: TaskStage | None = None

    @property
    def state(self) -> PipelineState:
        return self._state

    @property
    def current_stage(self) -> TaskStage | None:
        """Stage being executed while RUNNING, None otherwise."""
        return self._current_stage

    @property
    def policy(self) -> PipelinePolicy:
        return self._policy

    def tasks_for(self, stage: TaskStage) -> tuple[ReleaserTask, ...]:
        # sorted() is stable, so equal orders keep registration order
        return tuple(sorted((t for t in self._tasks if t.stage is stage), key=lambda t: t.order))

    def task_by_name(self, name: str) -> ReleaserTask:
        """Find a task by name or short name.

        Raises:
            TaskNotFoundError: If no registered task matches.
        """
        for task in self._tasks:
            if name in (task.name, task.short_name):
                return task
        raise TaskNotFoundError(name, (t.name for t in self._tasks))

    def run_task(self, task: ReleaserTask, args: Arguments) -> ExecutionResult:
        """Run a single task, turning an exception into a FAILURE result."""
        self._console.header(task.header or task.name)
        try:
            result = task.run_task(args)
        except Exception as e:
            result = ExecutionResult.failure(task.name, e)
        self._report(task, result)
        return result

    def _report(self, task: ReleaserTask, result: ExecutionResult) -> None:
        match result.status:
            case ExecutionStatus.SUCCESS:
                self._console.success(task.name)
            case ExecutionStatus.SKIPPED:
                self._console.print(f"{task.name}: skipped", Style.DIM)
            case ExecutionStatus.UNSTABLE:
                self._console.warning(f"{task.name}: unstable")
            case ExecutionStatus.FAILURE:
                self._console.error(f"{task.name}: failed")

    def run(
        self,
        args: Arguments,
        *,
        stages: Iterable[TaskStage] = tuple(TaskStage),
        cancel: threading.Event | None = None,
    ) -> PipelineRun:
        """Run the tasks of ``stages`` and fold their results.

        Each stage runs once, however many times it is listed. If a task lets
        a ``BaseException`` through, the pipeline ends FAILED and the
        exception propagates.
        """
        self._state = PipelineState.RUNNING
        outcomes: list[TaskOutcome] = []
        stage_results: dict[TaskStage, ExecutionResult] = {}
        aborted = False
        cancelled = False

        try:
            for stage in sorted_stages(set(stages)):
                self._current_stage = stage
                stage_result = ExecutionResult.skipped()
                for task in self.tasks_for(stage):
                    if not (aborted or cancelled) and cancel is not None and cancel.is_set():
                        cancelled = True
                        self._console.warning("release cancelled, remaining tasks are skipped")
                    if aborted or cancelled:
                        result = ExecutionResult.skipped()
                        outcomes.append(TaskOutcome(task.name, stage, result, ran=False))
                    else:
                        result = self.run_task(task, args)
                        outcomes.append(TaskOutcome(task.name, stage, result, ran=True))
                        if result.is_failure() and self._policy.aborts(stage):
                            aborted = True
                            self._console.error(
                                f"{task.name} failed in {stage}, remaining tasks are skipped"
                            )
                    stage_result = stage_result.merge(result)
                stage_results[stage] = stage_result
            self._state = PipelineState.FAILED if aborted else PipelineState.COMPLETED
        finally:
            self._current_stage = None
            if self._state is PipelineState.RUNNING:
                self._state = PipelineState.FAILED

        return PipelineRun(
            state=self._state,
            outcomes=tuple(outcomes),
            stage_results=stage_results,
            cancelled=cancelled,
        )
