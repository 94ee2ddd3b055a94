"""Tests for releaser.tasks.pipeline."""

from __future__ import annotations

import threading
from collections.abc import Callable

import pytest

from releaser.core.config import ReleaserConfig
from releaser.output.console import MockConsole
from releaser.tasks import (
    Arguments,
    BaseTask,
    ExecutionResult,
    ExecutionStatus,
    PipelinePolicy,
    PipelineState,
    TaskNotFoundError,
    TaskPipeline,
    TaskStage,
)
from releaser.versions import Projects, Version


class RecordingTask(BaseTask):
    """Task returning a fixed result and recording that it ran."""

    def __init__(
        self,
        name: str,
        log: list[str],
        *,
        order: int = 0,
        stage: TaskStage = TaskStage.RELEASE,
        result: ExecutionResult | None = None,
        action: Callable[[], None] | None = None,
    ) -> None:
        self.name = name
        self.short_name = name[:2]
        self.header = name.upper()
        self.order = order
        self.stage = stage
        self._result = result or ExecutionResult.success()
        self._action = action
        self._log = log

    def run_task(self, args: Arguments) -> ExecutionResult:
        self._log.append(self.name)
        if self._action is not None:
            self._action()
        return self._result


class Boom(BaseTask):
    name = "boom"
    header = "BOOM"

    def run_task(self, args: Arguments) -> ExecutionResult:
        raise RuntimeError("exploded")


@pytest.fixture
def log() -> list[str]:
    return []


@pytest.fixture
def console() -> MockConsole:
    return MockConsole()


@pytest.fixture
def args() -> Arguments:
    return Arguments(projects=Projects.of(Version("spring-cloud-build", "2.0.1")))


class TestOrdering:
    def test_tasks_run_by_stage_then_order(
        self, log: list[str], console: MockConsole, args: Arguments
    ) -> None:
        tasks = [
            RecordingTask("templates", log, order=70, stage=TaskStage.POST_RELEASE),
            RecordingTask("deploy", log, order=20),
            RecordingTask("updatePoms", log, order=10),
            RecordingTask("checkRepo", log, order=50, stage=TaskStage.PRE_RELEASE),
        ]
        run = TaskPipeline(tasks, console=console).run(args)
        assert log == ["checkRepo", "updatePoms", "deploy", "templates"]
        assert run.executed == ("checkRepo", "updatePoms", "deploy", "templates")
        assert run.state is PipelineState.COMPLETED

    def test_equal_order_keeps_registration_order(
        self, log: list[str], console: MockConsole, args: Arguments
    ) -> None:
        tasks = [RecordingTask(n, log, order=5) for n in ["c", "a", "b"]]
        TaskPipeline(tasks, console=console).run(args)
        assert log == ["c", "a", "b"]

    def test_tasks_for(self, log: list[str], console: MockConsole) -> None:
        pipeline = TaskPipeline(
            [
                RecordingTask("b", log, order=2),
                RecordingTask("a", log, order=1),
                RecordingTask("post", log, stage=TaskStage.POST_RELEASE),
            ],
            console=console,
        )
        assert [t.name for t in pipeline.tasks_for(TaskStage.RELEASE)] == ["a", "b"]
        assert pipeline.tasks_for(TaskStage.PRE_RELEASE) == ()

    def test_selected_stages_only(
        self, log: list[str], console: MockConsole, args: Arguments
    ) -> None:
        tasks = [
            RecordingTask("pre", log, stage=TaskStage.PRE_RELEASE),
            RecordingTask("release", log),
        ]
        run = TaskPipeline(tasks, console=console).run(args, stages=[TaskStage.PRE_RELEASE])
        assert log == ["pre"]
        assert set(run.stage_results) == {TaskStage.PRE_RELEASE}

    def test_repeated_stage_runs_once(self, console: MockConsole, args: Arguments) -> None:
        class PushOnce(BaseTask):
            name = "push"
            calls = 0

            def run_task(self, args: Arguments) -> ExecutionResult:
                self.calls += 1
                if self.calls == 1:
                    return ExecutionResult.failure("push", "rejected")
                return ExecutionResult.success()

        task = PushOnce()
        run = TaskPipeline([task], console=console).run(
            args, stages=(TaskStage.RELEASE, TaskStage.RELEASE)
        )
        assert task.calls == 1
        assert run.executed == ("push",)
        assert run.result.is_failure()
        assert [e.cause for e in run.result.failures()] == ["rejected"]

    def test_each_task_is_announced(
        self, log: list[str], console: MockConsole, args: Arguments
    ) -> None:
        TaskPipeline([RecordingTask("deploy", log)], console=console).run(args)
        assert console.find("DEPLOY")
        assert console.find("OK deploy")


class TestResults:
    def test_results_are_merged(
        self, log: list[str], console: MockConsole, args: Arguments
    ) -> None:
        tasks = [
            RecordingTask("a", log, result=ExecutionResult.unstable("a", "docs missing")),
            RecordingTask("b", log),
        ]
        run = TaskPipeline(tasks, console=console).run(args)
        assert run.result.is_unstable()
        assert run.stage_results[TaskStage.RELEASE].is_unstable()
        assert console.has_warning()

    def test_no_tasks_is_skipped(self, console: MockConsole, args: Arguments) -> None:
        run = TaskPipeline([], console=console).run(args)
        assert run.result.is_skipped()
        assert run.state is PipelineState.COMPLETED
        assert run.outcomes == ()

    def test_exception_becomes_failure(
        self, log: list[str], console: MockConsole, args: Arguments
    ) -> None:
        run = TaskPipeline([Boom(), RecordingTask("after", log)], console=console).run(args)
        assert run.result.is_failure()
        (error,) = run.result.failures()
        assert error.task_name == "boom"
        assert error.cause == "exploded"
        assert isinstance(error.exception, RuntimeError)
        assert log == ["after"]
        assert console.has_error()

    def test_run_task_directly(self, console: MockConsole, args: Arguments) -> None:
        result = TaskPipeline([], console=console).run_task(Boom(), args)
        assert result.status is ExecutionStatus.FAILURE


class TestAbortPolicy:
    def test_default_policy_keeps_going(
        self, log: list[str], console: MockConsole, args: Arguments
    ) -> None:
        tasks = [
            RecordingTask("a", log, order=1, result=ExecutionResult.failure("a", "x")),
            RecordingTask("b", log, order=2),
        ]
        run = TaskPipeline(tasks, console=console).run(args)
        assert log == ["a", "b"]
        assert run.state is PipelineState.COMPLETED
        assert run.result.is_failure()

    def test_abort_skips_remaining_tasks(
        self, log: list[str], console: MockConsole, args: Arguments
    ) -> None:
        tasks = [
            RecordingTask("a", log, order=1, result=ExecutionResult.failure("a", "x")),
            RecordingTask("b", log, order=2),
            RecordingTask("c", log, stage=TaskStage.POST_RELEASE),
        ]
        policy = PipelinePolicy(frozenset({TaskStage.RELEASE}))
        pipeline = TaskPipeline(tasks, console=console, policy=policy)
        run = pipeline.run(args)
        assert log == ["a"]
        assert run.executed == ("a",)
        assert run.skipped == ("b", "c")
        assert run.state is PipelineState.FAILED
        assert pipeline.state is PipelineState.FAILED
        assert run.stage_results[TaskStage.POST_RELEASE].is_skipped()

    def test_abort_only_in_configured_stage(
        self, log: list[str], console: MockConsole, args: Arguments
    ) -> None:
        tasks = [
            RecordingTask("a", log, result=ExecutionResult.failure("a", "x")),
            RecordingTask("b", log, stage=TaskStage.POST_RELEASE),
        ]
        policy = PipelinePolicy(frozenset({TaskStage.PRE_RELEASE}))
        run = TaskPipeline(tasks, console=console, policy=policy).run(args)
        assert log == ["a", "b"]
        assert run.state is PipelineState.COMPLETED

    def test_policy_from_config(self) -> None:
        config = ReleaserConfig.from_dict({"pipeline": {"abort_on_failure": ["release"]}})
        policy = PipelinePolicy.from_config(config)
        assert policy.aborts(TaskStage.RELEASE)
        assert not policy.aborts(TaskStage.POST_RELEASE)


class TestCancel:
    def test_cancel_before_run(
        self, log: list[str], console: MockConsole, args: Arguments
    ) -> None:
        cancel = threading.Event()
        cancel.set()
        run = TaskPipeline([RecordingTask("a", log)], console=console).run(args, cancel=cancel)
        assert log == []
        assert run.cancelled
        assert run.skipped == ("a",)
        assert run.state is PipelineState.COMPLETED
        assert run.result.is_skipped()

    def test_cancel_between_tasks(
        self, log: list[str], console: MockConsole, args: Arguments
    ) -> None:
        cancel = threading.Event()
        tasks = [
            RecordingTask("a", log, order=1, action=cancel.set),
            RecordingTask("b", log, order=2),
        ]
        run = TaskPipeline(tasks, console=console).run(args, cancel=cancel)
        assert log == ["a"]
        assert run.executed == ("a",)
        assert run.skipped == ("b",)
        assert run.cancelled
        assert len(console.find("cancelled")) == 1


class TestState:
    def test_state_transitions(self, console: MockConsole, args: Arguments) -> None:
        seen: list[tuple[PipelineState, TaskStage | None]] = []
        pipeline: TaskPipeline

        def record() -> None:
            seen.append((pipeline.state, pipeline.current_stage))

        pipeline = TaskPipeline(
            [RecordingTask("a", [], stage=TaskStage.POST_RELEASE, action=record)],
            console=console,
        )
        assert pipeline.state is PipelineState.IDLE
        pipeline.run(args)
        assert seen == [(PipelineState.RUNNING, TaskStage.POST_RELEASE)]
        assert pipeline.state is PipelineState.COMPLETED
        assert pipeline.current_stage is None

    def test_interrupt_leaves_pipeline_failed(
        self, log: list[str], console: MockConsole, args: Arguments
    ) -> None:
        def interrupt() -> None:
            raise KeyboardInterrupt

        pipeline = TaskPipeline(
            [RecordingTask("a", log, action=interrupt), RecordingTask("b", log, order=1)],
            console=console,
        )
        with pytest.raises(KeyboardInterrupt):
            pipeline.run(args)
        assert log == ["a"]
        assert pipeline.state is PipelineState.FAILED
        assert pipeline.current_stage is None


class TestTaskByName:
    def test_by_name_and_short_name(self, log: list[str], console: MockConsole) -> None:
        task = RecordingTask("deploy", log)
        pipeline = TaskPipeline([task], console=console)
        assert pipeline.task_by_name("deploy") is task
        assert pipeline.task_by_name("de") is task

    def test_unknown(self, log: list[str], console: MockConsole) -> None:
        pipeline = TaskPipeline([RecordingTask("deploy", log)], console=console)
        with pytest.raises(TaskNotFoundError, match="deploy"):
            pipeline.task_by_name("publish")
