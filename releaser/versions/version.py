"""Project version value object.

A ``Version`` pairs a project name with its raw version string. It never
changes after construction; every derived value (stage, next version, tag
names) is computed from the string on demand.

Operations that need the parsed structure raise ``InvalidVersionFormatError``
for strings that are not valid versions instead of guessing a value.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import TypeVar

from .errors import InvalidMajorForPatternComputationError, InvalidVersionFormatError
from .parsing import ParsedVersion, parse_version
from .stage import (
    MILESTONE_PATTERN,
    RC_PATTERN,
    SNAPSHOT_PATTERN,
    SNAPSHOT_SUFFIX,
    Category,
    Stage,
)
from .train import (
    compare_to_release_train,
    compare_trains,
    is_same_release_train_name,
    train_of_parsed,
)

__all__ = ["Version"]

_DEFAULT_SEPARATOR = "-"


_T = TypeVar("_T", int, str, tuple[int, int, int])


def _cmp(a: _T, b: _T) -> int:
    return (a > b) - (a < b)


@dataclass(frozen=True, slots=True)
class Version:
    """A project's version, e.g. ``Version("spring-cloud-build", "2.0.1-RC1")``."""

    project_name: str
    version: str

    @staticmethod
    def is_valid(version: str) -> bool:
        return parse_version(version) is not None

    @property
    def valid(self) -> bool:
        return Version.is_valid(self.version)

    def _parsed(self) -> ParsedVersion:
        parsed = parse_version(self.version)
        if parsed is None:
            raise InvalidVersionFormatError(self.version)
        return parsed

    # -- classification ---------------------------------------------------

    @property
    def stage(self) -> Stage:
        return self._parsed().suffix.stage

    @property
    def category(self) -> Category:
        return self.stage.category

    def is_snapshot(self) -> bool:
        return self.stage is Stage.SNAPSHOT

    def is_milestone(self) -> bool:
        return self.stage is Stage.MILESTONE

    def is_rc(self) -> bool:
        return self.stage is Stage.RELEASE_CANDIDATE

    def is_release(self) -> bool:
        return self.stage is Stage.RELEASE

    def is_service_release(self) -> bool:
        return self.stage is Stage.SERVICE_RELEASE

    def is_release_or_service_release(self) -> bool:
        return self.category is Category.GA

    def major(self) -> str:
        """Major number, or the train name for a named train version."""
        return self._parsed().major

    # -- successors ---------------------------------------------------------

    def bumped_version(self) -> str:
        """Next patch version with the same suffix.

        ``1.0.1-SNAPSHOT`` gives ``1.0.2-SNAPSHOT``; a two segment version bumps
        its minor. Named train versions are returned unchanged.
        """
        p = self._parsed()
        if not p.numeric:
            return self.version
        suffix = f"{p.separator}{p.suffix.text}" if p.suffix.text else ""
        return f"{self._next_numbers(p)}{suffix}"

    def post_release_snapshot_version(self) -> str:
        """Version to continue development with once this one is released.

        GA versions move to the next patch snapshot, pre-releases become the
        snapshot of the same numbers, named trains become ``<train>-SNAPSHOT``.
        """
        p = self._parsed()
        separator = p.separator or _DEFAULT_SEPARATOR
        if not p.numeric:
            return f"{p.major}{separator}{SNAPSHOT_SUFFIX}"
        if p.suffix.stage is Stage.SNAPSHOT:
            return self.version
        if p.suffix.stage.category is Category.GA:
            return f"{self._next_numbers(p)}{separator}{SNAPSHOT_SUFFIX}"
        return f"{self._numbers(p)}{separator}{SNAPSHOT_SUFFIX}"

    @staticmethod
    def _numbers(p: ParsedVersion) -> str:
        if p.patch is None:
            return f"{p.major}.{p.minor}"
        return f"{p.major}.{p.minor}.{p.patch}"

    @staticmethod
    def _next_numbers(p: ParsedVersion) -> str:
        if p.patch is None:
            return f"{p.major}.{(p.minor or 0) + 1}"
        return f"{p.major}.{p.minor}.{p.patch + 1}"

    # -- comparison -----------------------------------------------------------

    def is_same_minor(self, other: Version | str) -> bool:
        """Same MAJOR.MINOR and the same number of numeric segments."""
        that = other if isinstance(other, Version) else Version(self.project_name, other)
        p, q = self._parsed(), that._parsed()
        if not (p.numeric and q.numeric) or p.segments != q.segments:
            return False
        return p.major == q.major and p.minor == q.minor

    def is_same_release_train_name(self, other: Version | str) -> bool:
        return is_same_release_train_name(self, other)

    def compare_to_release_train(self, other: Version | str) -> int:
        return compare_to_release_train(self, other)

    @staticmethod
    def _compare_position(p: ParsedVersion, q: ParsedVersion) -> int:
        if p.numeric and q.numeric:
            return _cmp(p.numbers, q.numbers)
        return compare_trains(train_of_parsed(p), train_of_parsed(q))

    def compare_to(self, other: Version) -> int:
        """Total order over versions.

        Numbers (or release train) first, then stage, then the stage ordinal,
        then segment count and finally the literal suffix, so two versions
        compare equal only when they parse to the same components.
        """
        p, q = self._parsed(), other._parsed()
        return (
            self._compare_position(p, q)
            or _cmp(p.suffix.stage.value, q.suffix.stage.value)
            or _cmp(p.suffix.ordinal, q.suffix.ordinal)
            or _cmp(p.segments, q.segments)
            or _cmp(p.suffix.text, q.suffix.text)
        )

    def __lt__(self, other: Version) -> bool:
        return self.compare_to(other) < 0

    def __le__(self, other: Version) -> bool:
        return self.compare_to(other) <= 0

    def __gt__(self, other: Version) -> bool:
        return self.compare_to(other) > 0

    def __ge__(self, other: Version) -> bool:
        return self.compare_to(other) >= 0

    def is_more_mature(self, other: Version) -> bool:
        """Whether this version is further along than ``other``.

        A GA version (release or service release) beats any pre-release, even a
        numerically higher one or one from a later train. Within a category the
        higher version wins; for the same version the stage rank decides.
        """
        p, q = self._parsed(), other._parsed()
        this_stage, that_stage = p.suffix.stage, q.suffix.stage
        if this_stage.category is not that_stage.category:
            return this_stage.category is Category.GA
        c = self._compare_position(p, q)
        if c != 0:
            return c > 0
        return this_stage.rank > that_stage.rank

    # -- validation patterns and tags -------------------------------------------

    def unacceptable_version_patterns(self) -> tuple[re.Pattern[str], ...]:
        """Patterns other versions in the same release must not match.

        Nothing is forbidden next to a snapshot; milestones and RCs forbid
        snapshots; GA versions forbid snapshots, milestones and RCs.
        """
        stage = self.stage
        if stage is Stage.SNAPSHOT:
            return ()
        if stage.category is Category.PRERELEASE:
            return (SNAPSHOT_PATTERN,)
        return (SNAPSHOT_PATTERN, MILESTONE_PATTERN, RC_PATTERN)

    def release_tag_name(self, tag_prefix: str = "v") -> str:
        """Git tag of this version, empty for versions that are not GA."""
        if not self.is_release_or_service_release():
            return ""
        return f"{tag_prefix}{self.version}"

    def _tag_suffix(self, p: ParsedVersion, forced_suffix: str) -> str:
        suffix = forced_suffix or p.suffix.text
        return f".{suffix}" if suffix else ""

    def compute_previous_patch_tag(self, prefix: str, forced_suffix: str = "") -> str | None:
        """Tag of the previous patch release, None when the patch is 0."""
        p = self._parsed()
        if not p.patch:
            return None
        return f"{prefix}{p.major}.{p.minor}.{p.patch - 1}{self._tag_suffix(p, forced_suffix)}"

    def compute_previous_minor_tag_pattern(
        self, prefix: str, forced_suffix: str = ""
    ) -> re.Pattern[str] | None:
        """Pattern for any patch of the previous minor, None when the minor is 0."""
        p = self._parsed()
        if not p.minor:
            return None
        head = re.escape(f"{prefix}{p.major}.{p.minor - 1}.")
        return re.compile(rf"{head}\d+{re.escape(self._tag_suffix(p, forced_suffix))}")

    def compute_previous_major_tag_pattern(
        self, prefix: str, forced_suffix: str = ""
    ) -> re.Pattern[str]:
        """Pattern for any release of the previous major.

        Raises:
            InvalidMajorForPatternComputationError: If the major is already 0
                or the version is a named train.
        """
        p = self._parsed()
        if not p.numeric or int(p.major) == 0:
            raise InvalidMajorForPatternComputationError(self.version)
        head = re.escape(f"{prefix}{int(p.major) - 1}.")
        dot = re.escape(".")
        return re.compile(rf"{head}\d+{dot}\d+{re.escape(self._tag_suffix(p, forced_suffix))}")

    def __str__(self) -> str:
        return f"{self.project_name}={self.version}"

