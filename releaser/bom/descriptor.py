"""Build descriptor reading.

Only what version extraction needs is read: coordinates, the descriptor's own
version and its declared properties. Readers return None for a descriptor that
is missing or cannot be parsed; they never raise for those cases.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol
from xml.etree.ElementTree import Element

import defusedxml
from defusedxml import ElementTree as ET

__all__ = ["BuildDescriptor", "DescriptorReader", "PomDescriptorReader"]


def _empty_properties() -> dict[str, str]:
    return {}


@dataclass(frozen=True, slots=True)
class BuildDescriptor:
    artifact_id: str
    version: str
    group_id: str = ""
    properties: dict[str, str] = field(default_factory=_empty_properties)


class DescriptorReader(Protocol):
    def read_descriptor(self, path: Path) -> BuildDescriptor | None: ...


def _local(tag: str) -> str:
    """Strip the ``{namespace}`` prefix ElementTree puts on tags."""
    return tag.rsplit("}", 1)[-1]


def _child_text(element: Element, name: str) -> str | None:
    for child in element:
        if _local(child.tag) == name:
            return (child.text or "").strip()
    return None


def _child(element: Element, name: str) -> Element | None:
    for child in element:
        if _local(child.tag) == name:
            return child
    return None


class PomDescriptorReader:
    """Reads Maven ``pom.xml`` files.

    ``version`` and ``groupId`` fall back to the ``<parent>`` values when the
    project does not declare its own. Descriptors come from cloned
    repositories, so entity and DTD tricks are refused and read as unparsable.
    """

    def read_descriptor(self, path: Path) -> BuildDescriptor | None:
        try:
            root = ET.parse(path).getroot()
        except (OSError, ET.ParseError, defusedxml.DefusedXmlException):
            return None

        parent = _child(root, "parent")
        version = _child_text(root, "version")
        group_id = _child_text(root, "groupId")
        if parent is not None:
            version = version or _child_text(parent, "version")
            group_id = group_id or _child_text(parent, "groupId")

        properties: dict[str, str] = {}
        props = _child(root, "properties")
        if props is not None:
            for prop in props:
                properties[_local(prop.tag)] = (prop.text or "").strip()

        return BuildDescriptor(
            artifact_id=_child_text(root, "artifactId") or "",
            version=version or "",
            group_id=group_id or "",
            properties=properties,
        )
