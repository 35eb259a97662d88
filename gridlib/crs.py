"""Coordinate reference system description."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from gridlib.errors import GridLibError


class CrsType(Enum):
    """Kind of coordinate reference system."""

    UNKNOWN = 0
    PROJECTED = 1
    GEOGRAPHIC = 2

    def __str__(self) -> str:
        return self.name


class CrsLibrary(Enum):
    """Registry that a CRS code belongs to."""

    UNKNOWN = 0
    EPSG = 1

    def __str__(self) -> str:
        return self.name


def parse_crs_type(text: str) -> CrsType:
    """Return the CRS type named *text*; raise GridLibError otherwise."""
    try:
        return CrsType[text]
    except KeyError:
        raise GridLibError(f"Unknown crs type: {text}") from None


def parse_crs_library(text: str) -> CrsLibrary:
    """Return the CRS library named *text*; raise GridLibError otherwise."""
    try:
        return CrsLibrary[text]
    except KeyError:
        raise GridLibError(f"Unknown crs library: {text}") from None


@dataclass
class Crs:
    """A coordinate reference system, identified by code and citation."""

    code: int = 0
    vertical_code: int = 0
    type: CrsType = CrsType.UNKNOWN
    library: CrsLibrary = CrsLibrary.UNKNOWN
    citation: str = ""

    def __bool__(self) -> bool:
        return self.code != 0 or self.vertical_code != 0 or bool(self.citation)