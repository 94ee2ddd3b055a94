"""Maturity stages and the version suffix parser.

Every suffix is classified once, here, into a ``Suffix`` (stage + ordinal).
Bumping, maturity comparison and the unacceptable-pattern lists all read the
stage from this parser.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum

__all__ = [
    "Category",
    "Stage",
    "Suffix",
    "parse_suffix",
    "SNAPSHOT_PATTERN",
    "MILESTONE_PATTERN",
    "RC_PATTERN",
]


class Category(Enum):
    PRERELEASE = "prerelease"
    GA = "ga"


class Stage(Enum):
    """Development stage of a version, in global maturity order."""

    SNAPSHOT = 0
    MILESTONE = 1
    RELEASE_CANDIDATE = 2
    RELEASE = 3
    SERVICE_RELEASE = 4

    @property
    def category(self) -> Category:
        if self in (Stage.RELEASE, Stage.SERVICE_RELEASE):
            return Category.GA
        return Category.PRERELEASE

    @property
    def rank(self) -> int:
        """Rank inside the stage's category (0 is least mature)."""
        if self.category is Category.GA:
            return self.value - Stage.RELEASE.value
        return self.value

    def __str__(self) -> str:
        return self.name


_MILESTONE_RE = re.compile(r"M(\d+)")
_RC_RE = re.compile(r"RC(\d+)")
_SR_RE = re.compile(r"SR(\d+)")

SNAPSHOT_SUFFIX = "SNAPSHOT"
RELEASE_SUFFIX = "RELEASE"


@dataclass(frozen=True, slots=True)
class Suffix:
    """Parsed version suffix.

    ``text`` is the literal suffix (empty when the version has none).
    ``ordinal`` is the number after M/RC/SR, or the patch number of a
    suffix-less service release; 0 otherwise.
    """

    stage: Stage
    ordinal: int = 0
    text: str = ""


def parse_suffix(text: str | None, patch: int | None = None) -> Suffix:
    """Classify a version suffix.

    A missing suffix means GA: ``x.y.0`` is a RELEASE and ``x.y.N`` (N > 0) is
    a SERVICE_RELEASE. Unknown literal suffixes are treated as RELEASE.
    """
    if not text:
        if patch:
            return Suffix(Stage.SERVICE_RELEASE, patch, "")
        return Suffix(Stage.RELEASE, 0, "")

    if text.endswith(SNAPSHOT_SUFFIX):
        return Suffix(Stage.SNAPSHOT, 0, text)
    if m := _MILESTONE_RE.fullmatch(text):
        return Suffix(Stage.MILESTONE, int(m.group(1)), text)
    if m := _RC_RE.fullmatch(text):
        return Suffix(Stage.RELEASE_CANDIDATE, int(m.group(1)), text)
    if m := _SR_RE.fullmatch(text):
        return Suffix(Stage.SERVICE_RELEASE, int(m.group(1)), text)
    return Suffix(Stage.RELEASE, 0, text)


# Used with Pattern.search, so they also hit a version inside a longer line
# such as <zipkin.version>1.19.2-M2</zipkin.version>.
SNAPSHOT_PATTERN = re.compile(r"^.*[.-](BUILD-)?SNAPSHOT.*$", re.MULTILINE)
MILESTONE_PATTERN = re.compile(r"^.*[.-]M[0-9]+.*$", re.MULTILINE)
RC_PATTERN = re.compile(r"^.*[.-]RC[0-9]+.*$", re.MULTILINE)
