"""Final report of a release run."""

from __future__ import annotations

from typing import TYPE_CHECKING

from releaser.core.errors import ErrorCode
from releaser.output.console import Style

if TYPE_CHECKING:
    from releaser.output.console import ConsoleProtocol
    from releaser.tasks.pipeline import PipelineRun
    from releaser.tasks.result import ExecutionResult

__all__ = ["print_run_report", "run_exit_code"]


def print_run_report(run: PipelineRun, console: ConsoleProtocol) -> None:
    """List every failed and unstable entry with its task and cause."""
    result = run.result
    console.header("RELEASE SUMMARY")
    console.print(
        f"{len(run.executed)} task(s) executed, {len(run.skipped)} skipped", Style.DIM
    )
    if run.cancelled:
        console.warning("the run was cancelled")

    for error in result.failures():
        console.error(error.pretty())
    for error in result.unstable_entries():
        console.warning(error.pretty())

    if result.is_failure():
        console.error(f"release finished with status {result.status}")
    elif result.is_unstable():
        console.warning(f"release finished with status {result.status}")
    else:
        console.success(f"release finished with status {result.status}")


def run_exit_code(result: ExecutionResult) -> int:
    if result.is_failure():
        return int(ErrorCode.RELEASE_FAILED)
    if result.is_unstable():
        return int(ErrorCode.RELEASE_UNSTABLE)
    return int(ErrorCode.OK)
