"""Release tasks and the pipeline that runs them."""

from .composite import CompositeTask, CreateTemplatesTask, ForEachProjectTask, TemplateGenerator
from .pipeline import (
    PipelinePolicy,
    PipelineRun,
    PipelineState,
    TaskNotFoundError,
    TaskOutcome,
    TaskPipeline,
)
from .result import ExecutionResult, ExecutionStatus, TaskError
from .task import Arguments, BaseTask, ReleaserTask, TaskStage

__all__ = [
    "Arguments",
    "BaseTask",
    "CompositeTask",
    "CreateTemplatesTask",
    "ExecutionResult",
    "ExecutionStatus",
    "ForEachProjectTask",
    "PipelinePolicy",
    "PipelineRun",
    "PipelineState",
    "ReleaserTask",
    "TaskError",
    "TaskNotFoundError",
    "TaskOutcome",
    "TaskPipeline",
    "TaskStage",
    "TemplateGenerator",
]
