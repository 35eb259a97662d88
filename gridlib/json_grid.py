"""Reading and writing grids in the library's own JSON format."""

from __future__ import annotations

import json
import os
from typing import Any

import numpy as np

from gridlib.crs import Crs, parse_crs_library, parse_crs_type
from gridlib.errors import GridLibError
from gridlib.grid import Grid, IGrid
from gridlib.grid_builder import GridBuilder
from gridlib.spatial_info import UNKNOWN_ELEVATION, SpatialInfo, SpatialTiePoint
from gridlib.unit import Unit, parse_unit

_UNKNOWN = np.float32(UNKNOWN_ELEVATION)
_VALUES_PER_LINE = 10
_INDENT = "  "
_UINT32_LIMIT = 2**32


# ---------------------------------------------------------------------------
# Writing
# ---------------------------------------------------------------------------

def _vector(values) -> list[float]:
    return [float(v) for v in values]


def _crs_to_json(crs: Crs) -> dict[str, Any]:
    result: dict[str, Any] = {
        "code": crs.code,
        "vertical_code": crs.vertical_code,
        "type": str(crs.type),
        "library": str(crs.library),
    }
    if crs.citation:
        result["citation"] = crs.citation
    return result


def _tie_point_to_json(point: SpatialTiePoint) -> dict[str, Any]:
    return {
        "grid_point": _vector(point.grid_point),
        "location": _vector(point.location),
        "crs": _crs_to_json(point.crs),
    }


def spatial_info_to_json(info: SpatialInfo) -> dict[str, Any]:
    """Return the JSON object describing *info*.

    Empty tie point lists and empty information are left out.
    """
    result: dict[str, Any] = {
        "location": _vector(info.location),
        "column_axis": _vector(info.column_axis),
        "row_axis": _vector(info.row_axis),
        "vertical_axis": _vector(info.vertical_axis),
        "tie_point": _vector(info.tie_point),
    }
    if info.extra_tie_points:
        result["additional_tie_points"] = [
            _tie_point_to_json(p) for p in info.extra_tie_points
        ]
    result["horizontal_unit"] = str(info.horizontal_unit)
    result["vertical_unit"] = str(info.vertical_unit)
    result["crs"] = _crs_to_json(info.crs)
    if info.information:
        result["information"] = {key: value for key, value in info.information}
    return result


def _elevations_to_json(values: np.ndarray) -> list[list[float | None]]:
    return [
        [None if np.float32(v) == _UNKNOWN else float(v) for v in row]
        for row in values
    ]


def grid_to_json(grid: IGrid) -> dict[str, Any]:
    """Return the JSON object describing *grid*; unknown values become null."""
    rows, cols = grid.size()
    return {
        "row_count": int(rows),
        "column_count": int(cols),
        "model": spatial_info_to_json(grid.spatial_info()),
        "elevations": _elevations_to_json(grid.values()),
    }


def _is_container(value) -> bool:
    return isinstance(value, (dict, list))


def _format(value, level: int) -> str:
    inner = _INDENT * (level + 1)
    outer = _INDENT * level
    if isinstance(value, dict):
        if not value:
            return "{}"
        items = [
            f"{inner}{json.dumps(key)}: {_format(item, level + 1)}"
            for key, item in value.items()
        ]
        return "{\n" + ",\n".join(items) + "\n" + outer + "}"
    if isinstance(value, list):
        if not value:
            return "[]"
        if not any(_is_container(v) for v in value):
            scalars = [json.dumps(v) for v in value]
            if len(scalars) <= _VALUES_PER_LINE:
                return "[" + ", ".join(scalars) + "]"
            lines = [
                inner + ", ".join(scalars[i:i + _VALUES_PER_LINE])
                for i in range(0, len(scalars), _VALUES_PER_LINE)
            ]
            return "[\n" + ",\n".join(lines) + "\n" + outer + "]"
        items = [inner + _format(item, level + 1) for item in value]
        return "[\n" + ",\n".join(items) + "\n" + outer + "]"
    return json.dumps(value)


def write_json_grid(grid: IGrid, target) -> None:
    """Write *grid* as formatted JSON to a text stream or a file path."""
    text = _format(grid_to_json(grid), 0) + "\n"
    if hasattr(target, "write"):
        target.write(text)
        return
    try:
        with open(target, "w", encoding="utf-8") as file:
            file.write(text)
    except OSError as exc:
        raise GridLibError(f"Can not create file: {os.fspath(target)}") from exc


# ---------------------------------------------------------------------------
# Reading
# ---------------------------------------------------------------------------

def _unknown_key(key: str) -> GridLibError:
    return GridLibError(f"Unknown key: '{key}'")


def _read_object(value, what: str) -> dict:
    if not isinstance(value, dict):
        raise GridLibError(f"{what} must be an object.")
    return value


def _read_int(value, what: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise GridLibError(f"{what} must be an integer.")
    return value


def _read_count(value, what: str) -> int:
    count = _read_int(value, what)
    if not 0 <= count < _UINT32_LIMIT:
        raise GridLibError(f"{what} is out of range: {count}")
    return count


def _read_float(value, what: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise GridLibError(f"{what} must be a number.")
    return float(value)


def _read_str(value, what: str) -> str:
    if not isinstance(value, str):
        raise GridLibError(f"{what} must be a string.")
    return value


def _read_vector(value, length: int, what: str) -> tuple[float, ...]:
    if not isinstance(value, list):
        raise GridLibError(f"{what} must be an array.")
    if len(value) > length:
        raise GridLibError("vector contains too many values.")
    if len(value) < length:
        raise GridLibError("vector contains too few values.")
    return tuple(_read_float(v, what) for v in value)


def _read_unit(value, what: str) -> Unit:
    return parse_unit(_read_str(value, what))


def _read_crs(value, strict: bool) -> Crs:
    result = Crs()
    for key, item in _read_object(value, "crs").items():
        if key == "code":
            result.code = _read_int(item, key)
        elif key == "vertical_code":
            result.vertical_code = _read_int(item, key)
        elif key == "type":
            result.type = parse_crs_type(_read_str(item, key))
        elif key == "library":
            result.library = parse_crs_library(_read_str(item, key))
        elif key == "citation":
            result.citation = _read_str(item, key)
        elif strict:
            raise _unknown_key(key)
    return result


def _read_dictionary(value) -> list[tuple[str, str]]:
    return [
        (key, _read_str(item, key))
        for key, item in _read_object(value, "information").items()
    ]


def _read_tie_points(value, strict: bool) -> list[SpatialTiePoint]:
    if not isinstance(value, list):
        raise GridLibError("additional_tie_points must be an array.")
    result = []
    for entry in value:
        point = SpatialTiePoint()
        for key, item in _read_object(entry, "tie point").items():
            if key == "grid_point":
                point.grid_point = _read_vector(item, 2, key)
            elif key == "location":
                point.location = _read_vector(item, 3, key)
            elif key == "crs":
                point.crs = _read_crs(item, strict)
            elif strict:
                raise _unknown_key(key)
        result.append(point)
    return result


def _read_model(value, strict: bool) -> SpatialInfo:
    result = SpatialInfo()
    for key, item in _read_object(value, "model").items():
        if key == "location":
            result.location = _read_vector(item, 3, key)
        elif key == "row_axis":
            result.row_axis = _read_vector(item, 3, key)
        elif key == "column_axis":
            result.column_axis = _read_vector(item, 3, key)
        elif key == "vertical_axis":
            result.vertical_axis = _read_vector(item, 3, key)
        elif key == "horizontal_unit":
            result.horizontal_unit = _read_unit(item, key)
        elif key == "vertical_unit":
            result.vertical_unit = _read_unit(item, key)
        elif key == "crs":
            result.crs = _read_crs(item, strict)
        elif key == "information":
            result.information = _read_dictionary(item)
        elif key == "tie_point":
            result.tie_point = _read_vector(item, 2, key)
        elif key == "additional_tie_points":
            result.extra_tie_points = _read_tie_points(item, strict)
        elif strict:
            raise _unknown_key(key)
    return result


def _read_elevations(value) -> list[float]:
    if not isinstance(value, list):
        raise GridLibError("elevations must be an array.")
    result = []
    for row in value:
        if not isinstance(row, list):
            raise GridLibError("elevations must be an array of arrays.")
        result.extend(
            UNKNOWN_ELEVATION if v is None else _read_float(v, "elevation")
            for v in row
        )
    return result


def grid_from_json(data, strict: bool = False) -> Grid:
    """Build a grid from a parsed JSON object.

    With *strict*, unknown keys raise GridLibError; otherwise they are ignored.
    """
    builder = GridBuilder()
    for key, item in _read_object(data, "grid").items():
        if key == "row_count":
            builder.row_count = _read_count(item, key)
        elif key == "column_count":
            builder.col_count = _read_count(item, key)
        elif key == "model":
            builder.model = _read_model(item, strict)
        elif key == "elevations":
            builder.values = _read_elevations(item)
        elif strict:
            raise _unknown_key(key)
    return builder.build()


def _load_text(source) -> str:
    if isinstance(source, (bytes, bytearray, memoryview)):
        content = bytes(source)
    elif hasattr(source, "read"):
        content = source.read()
    else:
        try:
            with open(source, "rb") as file:
                content = file.read()
        except OSError as exc:
            raise GridLibError(f"Can not open file: {os.fspath(source)}") from exc
    if isinstance(content, bytes):
        try:
            return content.decode("utf-8-sig")
        except UnicodeDecodeError as exc:
            raise GridLibError("JSON text is not valid UTF-8.") from exc
    return content


def read_json_grid(source, strict: bool = False) -> Grid:
    """Read a grid from a file path, a stream or a bytes buffer holding JSON."""
    text = _load_text(source)
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise GridLibError(
            f"Invalid JSON [line {exc.lineno}, column {exc.colno}]: {exc.msg}"
        ) from exc
    return grid_from_json(data, strict)