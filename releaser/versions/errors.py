"""Errors raised by version operations that need a parsed version."""

from __future__ import annotations

__all__ = ["InvalidVersionFormatError", "InvalidMajorForPatternComputationError"]

EXPECTED_FORMATS = "[1.2.3.A] / [1.2.3-A] or [A.B] / [A-B]"


class InvalidVersionFormatError(ValueError):
    """The version string does not match any accepted format."""

    def __init__(self, version: str) -> None:
        super().__init__(f"Version [{version}] is invalid. Should be of format {EXPECTED_FORMATS}")
        self.version = version


class InvalidMajorForPatternComputationError(ValueError):
    """There is no earlier major version to build a tag pattern for."""

    def __init__(self, version: str) -> None:
        super().__init__(
            f"Version [{version}] has no previous major version to compute a tag pattern for"
        )
        self.version = version
