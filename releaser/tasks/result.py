"""Outcome of a release task and how outcomes are combined.

Results are folded with ``merge``: the status with the higher severity wins
(SKIPPED < SUCCESS < UNSTABLE < FAILURE) and error records are concatenated
in the order the tasks ran.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum

__all__ = ["ExecutionStatus", "ExecutionResult", "TaskError"]


class ExecutionStatus(Enum):
    """Task outcome, valued by severity."""

    SKIPPED = 0
    SUCCESS = 1
    UNSTABLE = 2
    FAILURE = 3

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True, slots=True)
class TaskError:
    """Why a task ended UNSTABLE or FAILURE."""

    task_name: str
    cause: str
    status: ExecutionStatus = ExecutionStatus.FAILURE
    exception: BaseException | None = None

    def pretty(self) -> str:
        return f"[{self.task_name}] {self.cause}"


@dataclass(frozen=True, slots=True)
class ExecutionResult:
    status: ExecutionStatus = ExecutionStatus.SUCCESS
    errors: tuple[TaskError, ...] = ()

    @classmethod
    def success(cls) -> ExecutionResult:
        return cls(ExecutionStatus.SUCCESS)

    @classmethod
    def skipped(cls) -> ExecutionResult:
        return cls(ExecutionStatus.SKIPPED)

    @classmethod
    def unstable(cls, task_name: str, cause: str | BaseException) -> ExecutionResult:
        return cls(
            ExecutionStatus.UNSTABLE, (_error(task_name, cause, ExecutionStatus.UNSTABLE),)
        )

    @classmethod
    def failure(cls, task_name: str, cause: str | BaseException) -> ExecutionResult:
        return cls(ExecutionStatus.FAILURE, (_error(task_name, cause, ExecutionStatus.FAILURE),))

    def merge(self, other: ExecutionResult) -> ExecutionResult:
        status = max(self.status, other.status, key=lambda s: s.value)
        return ExecutionResult(status, self.errors + other.errors)

    @classmethod
    def merge_all(cls, results: Iterable[ExecutionResult]) -> ExecutionResult:
        """Fold results in order. Nothing to fold is SKIPPED."""
        merged = cls.skipped()
        for result in results:
            merged = merged.merge(result)
        return merged

    def is_success(self) -> bool:
        return self.status is ExecutionStatus.SUCCESS

    def is_skipped(self) -> bool:
        return self.status is ExecutionStatus.SKIPPED

    def is_unstable(self) -> bool:
        return self.status is ExecutionStatus.UNSTABLE

    def is_failure(self) -> bool:
        return self.status is ExecutionStatus.FAILURE

    def failures(self) -> tuple[TaskError, ...]:
        return tuple(e for e in self.errors if e.status is ExecutionStatus.FAILURE)

    def unstable_entries(self) -> tuple[TaskError, ...]:
        return tuple(e for e in self.errors if e.status is ExecutionStatus.UNSTABLE)


def _error(task_name: str, cause: str | BaseException, status: ExecutionStatus) -> TaskError:
    if isinstance(cause, BaseException):
        message = str(cause) or type(cause).__name__
        return TaskError(task_name, message, status, cause)
    return TaskError(task_name, cause, status)
