"""Version string grammar.

Two forms are accepted:

- numeric: ``MAJOR.MINOR[.PATCH][SEP SUFFIX]`` (``1.0.1-SNAPSHOT``, ``2020.0.0``,
  ``1.3-RC3``)
- named train: ``TRAINNAME SEP SUFFIX`` (``Finchley-SR1``, ``Dalston.BUILD-SNAPSHOT``)

``SEP`` is ``.`` or ``-``.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from .stage import Suffix, parse_suffix

_SUFFIX = r"[A-Za-z0-9](?:[A-Za-z0-9_.-]*[A-Za-z0-9])?"
_NUMERIC_RE = re.compile(rf"(\d+)\.(\d+)(?:\.(\d+))?(?:([.-])({_SUFFIX}))?")
_NAMED_RE = re.compile(rf"([A-Za-z][A-Za-z0-9_]*)([.-])({_SUFFIX})")


@dataclass(frozen=True, slots=True)
class ParsedVersion:
    """Structured view of a valid version string.

    For a named train ``major`` holds the train name and ``minor``/``patch``
    are None. ``separator`` is the one in front of the suffix, empty when the
    version has no suffix.
    """

    major: str
    minor: int | None
    patch: int | None
    separator: str
    suffix: Suffix

    @property
    def numeric(self) -> bool:
        return self.minor is not None

    @property
    def segments(self) -> int:
        """Number of numeric components (2 or 3), 1 for a named train."""
        if self.minor is None:
            return 1
        return 2 if self.patch is None else 3

    @property
    def numbers(self) -> tuple[int, int, int]:
        return (int(self.major), self.minor or 0, self.patch or 0)


def parse_version(text: str) -> ParsedVersion | None:
    """Parse ``text``, returning None when it is not a valid version."""
    if m := _NUMERIC_RE.fullmatch(text):
        patch = int(m.group(3)) if m.group(3) is not None else None
        return ParsedVersion(
            major=m.group(1),
            minor=int(m.group(2)),
            patch=patch,
            separator=m.group(4) or "",
            suffix=parse_suffix(m.group(5), patch),
        )
    if m := _NAMED_RE.fullmatch(text):
        return ParsedVersion(
            major=m.group(1),
            minor=None,
            patch=None,
            separator=m.group(2),
            suffix=parse_suffix(m.group(3)),
        )
    return None
