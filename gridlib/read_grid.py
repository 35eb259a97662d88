"""Reading grids from files, streams and buffers of a given or detected type."""

from __future__ import annotations

import os
from enum import Enum

from gridlib.errors import GridLibError
from gridlib.grid import Grid
from gridlib.json_grid import read_json_grid

_DETECT_BYTES = 4096


class GridFileType(Enum):
    """Format of a grid file."""

    UNKNOWN = 0
    DEM = 1
    GEOTIFF = 2
    GRIDLIB_JSON = 3
    AUTO_DETECT = 4

    def __str__(self) -> str:
        return self.name


def detect_file_type(path) -> GridFileType:
    """Return the type of the grid file at *path*, or UNKNOWN."""
    try:
        with open(path, "rb") as file:
            head = file.read(_DETECT_BYTES)
    except OSError as exc:
        raise GridLibError(f"Can not open file: {os.fspath(path)}") from exc
    if head.startswith(b"\xef\xbb\xbf"):
        head = head[3:]
    head = head.lstrip(b" \t\r\n")
    if head[:1] in (b"{", b"["):
        return GridFileType.GRIDLIB_JSON
    return GridFileType.UNKNOWN


def read_grid(source, file_type: GridFileType = GridFileType.AUTO_DETECT) -> Grid:
    """Read a grid from a path, a stream or a bytes buffer.

    The type is detected only for paths; streams and buffers need it given.
    """
    if isinstance(source, (bytes, bytearray, memoryview)):
        if file_type == GridFileType.GRIDLIB_JSON:
            return read_json_grid(source)
        raise GridLibError(f"Unsupported file type: {file_type}")

    if hasattr(source, "read"):
        if file_type == GridFileType.GRIDLIB_JSON:
            return read_json_grid(source)
        raise GridLibError(f"Can not read stream of type {file_type}")

    if file_type == GridFileType.AUTO_DETECT:
        file_type = detect_file_type(source)
    if file_type == GridFileType.GRIDLIB_JSON:
        return read_json_grid(source)
    raise GridLibError(f"Unsupported file type: {os.fspath(source)}")