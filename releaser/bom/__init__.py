"""Release train BOM reading."""

from .custom import CustomBomParser, StaticVersionsParser
from .descriptor import BuildDescriptor, DescriptorReader, PomDescriptorReader
from .parser import EMPTY_VERSIONS, BomParser, VersionsFromBom

__all__ = [
    "BomParser",
    "BuildDescriptor",
    "CustomBomParser",
    "DescriptorReader",
    "EMPTY_VERSIONS",
    "PomDescriptorReader",
    "StaticVersionsParser",
    "VersionsFromBom",
]
