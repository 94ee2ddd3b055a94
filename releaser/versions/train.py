"""Release train identification and chronological ordering.

A train is either named (``Finchley``, ``Greenwich``) or calendar coded
(``2020.0``). Named trains follow an alphabetical naming convention, so
alphabetical order is chronological order. Every calendar train is newer than
every named train.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, TypeVar

from .parsing import ParsedVersion, parse_version
from .stage import Stage

__all__ = [
    "ReleaseTrain",
    "release_train_of",
    "is_same_release_train_name",
    "compare_to_release_train",
    "compare_trains",
    "train_of_parsed",
]


class Versioned(Protocol):
    @property
    def version(self) -> str: ...


@dataclass(frozen=True, slots=True)
class ReleaseTrain:
    """Train identity plus the position inside the train.

    ``service`` is the SR number for named trains and the patch number for
    calendar trains.
    """

    name: str
    calendar: bool = False
    year: int = 0
    minor: int = 0
    service: int = 0

    @property
    def empty(self) -> bool:
        return not self.name


EMPTY_TRAIN = ReleaseTrain(name="")


def _text(value: Versioned | str) -> str:
    return value if isinstance(value, str) else value.version


def release_train_of(value: Versioned | str) -> ReleaseTrain:
    """Extract the train of a version. Unparsable input gives the empty train."""
    return train_of_parsed(parse_version(_text(value)))


def train_of_parsed(parsed: ParsedVersion | None) -> ReleaseTrain:
    if parsed is None:
        return EMPTY_TRAIN
    if parsed.numeric:
        year, minor, patch = parsed.numbers
        return ReleaseTrain(
            name=f"{year}.{minor}", calendar=True, year=year, minor=minor, service=patch
        )
    service = parsed.suffix.ordinal if parsed.suffix.stage is Stage.SERVICE_RELEASE else 0
    return ReleaseTrain(name=parsed.major, service=service)


_T = TypeVar("_T", int, str)


def _cmp(a: _T, b: _T) -> int:
    return (a > b) - (a < b)


def compare_trains(a: ReleaseTrain, b: ReleaseTrain) -> int:
    if a.empty or b.empty:
        return _cmp(not a.empty, not b.empty)
    if a.calendar != b.calendar:
        return 1 if a.calendar else -1
    if a.calendar:
        c = _cmp(a.year, b.year) or _cmp(a.minor, b.minor)
    else:
        c = _cmp(a.name, b.name)
    return c or _cmp(a.service, b.service)


def is_same_release_train_name(a: Versioned | str, b: Versioned | str) -> bool:
    """True if both versions belong to the same train, whatever their SR/patch."""
    return release_train_of(a).name == release_train_of(b).name


def compare_to_release_train(a: Versioned | str, b: Versioned | str) -> int:
    """Negative, zero or positive as ``a`` is older, the same as or newer than ``b``."""
    return compare_trains(release_train_of(a), release_train_of(b))
