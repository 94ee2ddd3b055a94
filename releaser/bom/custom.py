"""Custom BOM parsers.

Some trains keep a few project versions outside the BOM properties (a
separate descriptor, a generated file). A ``CustomBomParser`` contributes
those versions as an overlay. Parsers are registered once, when the
``BomParser`` is built.
"""

from __future__ import annotations

from pathlib import Path
from typing import Protocol

from releaser.core.config import ReleaserConfig
from releaser.versions import Projects

__all__ = ["CustomBomParser", "StaticVersionsParser"]


class CustomBomParser(Protocol):
    def parse(self, root: Path, config: ReleaserConfig, known: Projects) -> Projects:
        """Versions that override (or add to) ``known`` for this train."""
        ...


class StaticVersionsParser:
    """Overlay with fixed versions, e.g. pinned from the command line."""

    def __init__(self, versions: Projects) -> None:
        self._versions = versions

    def parse(self, root: Path, config: ReleaserConfig, known: Projects) -> Projects:
        return self._versions
