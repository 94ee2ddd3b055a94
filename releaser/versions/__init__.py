"""Version model: parsing, classification, comparison and bumping."""

from .errors import InvalidMajorForPatternComputationError, InvalidVersionFormatError
from .projects import EMPTY_PROJECTS, ProjectNotFoundError, Projects
from .stage import Category, Stage
from .train import (
    ReleaseTrain,
    compare_to_release_train,
    is_same_release_train_name,
    release_train_of,
)
from .version import Version

__all__ = [
    "Category",
    "EMPTY_PROJECTS",
    "InvalidMajorForPatternComputationError",
    "InvalidVersionFormatError",
    "ProjectNotFoundError",
    "Projects",
    "ReleaseTrain",
    "Stage",
    "Version",
    "compare_to_release_train",
    "is_same_release_train_name",
    "release_train_of",
]
