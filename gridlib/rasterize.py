"""Colour gradients for elevations and conversion of grids to RGBA images."""

from __future__ import annotations

import math
from bisect import bisect_right
from enum import Enum, IntEnum
from typing import Callable, Iterator

import numpy as np

from gridlib.errors import GridLibError
from gridlib.grid import IGrid


class IntervalMap:
    """Maps disjoint half-open intervals [start, stop) of floats to values."""

    def __init__(self, default=None) -> None:
        self._intervals: list[tuple[float, float, object]] = []
        self._starts: list[float] = []
        if default is not None:
            self.insert(default)

    def insert(self, value, start=-math.inf, stop=math.inf) -> None:
        """Map [start, stop) to *value*, replacing what was there before.

        An empty or reversed range is ignored.
        """
        start = float(start)
        stop = float(stop)
        if not start < stop:
            return
        kept = []
        for s, e, v in self._intervals:
            if e <= start or s >= stop:
                kept.append((s, e, v))
                continue
            if s < start:
                kept.append((s, start, v))
            if e > stop:
                kept.append((stop, e, v))
        kept.append((start, stop, value))
        kept.sort(key=lambda interval: interval[0])
        self._intervals = kept
        self._starts = [s for s, _, _ in kept]

    def find(self, key):
        """Return the value of the interval containing *key*, or None."""
        key = float(key)
        if math.isnan(key):
            return None
        index = bisect_right(self._starts, key) - 1
        if index < 0:
            return None
        _, stop, value = self._intervals[index]
        return value if key < stop else None

    def __iter__(self) -> Iterator[tuple[float, float, object]]:
        return iter(self._intervals)

    def __len__(self) -> int:
        return len(self._intervals)


class ElevationGradient:
    """Colour function that looks elevations up in an interval map."""

    def __init__(self, color_map: IntervalMap) -> None:
        self.color_map = color_map

    def __call__(self, elevation: float) -> int:
        color = self.color_map.find(elevation)
        return 0 if color is None else color


def _from_rgba(rgba: int) -> tuple[int, int, int, int]:
    return (rgba >> 24) & 0xFF, (rgba >> 16) & 0xFF, (rgba >> 8) & 0xFF, rgba & 0xFF


def _to_rgba(color) -> int:
    c0, c1, c2, c3 = (int(c) & 0xFF for c in color)
    return (c0 << 24) | (c1 << 16) | (c2 << 8) | c3


def _step_height(from_height, to_height, i: int, steps: int) -> float:
    low = np.float32(from_height)
    high = np.float32(to_height)
    return float(low + (high - low) * np.float32(i) / np.float32(steps))


def _add_range(color_map: IntervalMap, from_height: float, to_height: float,
               from_color: int, to_color: int, steps: int) -> None:
    start = _from_rgba(from_color)
    end = _from_rgba(to_color)
    deltas = [e - s for s, e in zip(start, end)]
    for i in range(steps):
        color = [s + int(d * i / (steps - 1)) for s, d in zip(start, deltas)]
        color_map.insert(
            _to_rgba(color),
            _step_height(from_height, to_height, i, steps),
            _step_height(from_height, to_height, i + 1, steps),
        )


def make_map_gradient(sea_level_min, sea_level_max, ground_level_1_max,
                      ground_level_2_max, ground_level_3_max,
                      ground_level_4_max, ground_level_5_max) -> IntervalMap:
    """Return a map-like colour gradient with the given level boundaries."""
    color_map = IntervalMap(0xFFFF8E5A)
    color_map.insert(0xFFFCF2E9, sea_level_max)
    _add_range(color_map, sea_level_min, sea_level_max,
               0xFFFF8E5A, 0xFFFAEAD1, 10)
    _add_range(color_map, sea_level_max, ground_level_1_max,
               0xFF74907C, 0xFFD0E8D7, 10)
    _add_range(color_map, ground_level_1_max, ground_level_2_max,
               0xFFBDE8E5, 0xFF6F888C, 10)
    _add_range(color_map, ground_level_2_max, ground_level_3_max,
               0xFF69848C, 0xFF95B9D1, 10)
    _add_range(color_map, ground_level_3_max, ground_level_4_max,
               0xFF95A9C1, 0xFFE3DCDC, 10)
    _add_range(color_map, ground_level_4_max, ground_level_5_max,
               0xFFECC8A6, 0xFFFCF2E9, 10)

    # Extend the sea a little bit.
    sea_top = float(np.float32(sea_level_max) + np.float32(0.25))
    color_map.insert(0xFFFAEAD1, sea_level_max, sea_top)
    return color_map


def make_default_gradient_2500() -> IntervalMap:
    """Return the default gradient for elevations up to 2500."""
    return make_map_gradient(2500, 0, 500, 1000, 1500, 2000, 2500)


def make_default_gradient_9000() -> IntervalMap:
    """Return the default gradient for elevations up to 9000."""
    return make_map_gradient(2500, 0, 1000, 2000, 3000, 5000, 9000)


class Index2DMode(Enum):
    """How the cells of a 2D array are laid out in the output image.

    ROWS keeps the layout; COLUMNS turns source columns into output rows.
    REVERSED_* reverses each line, *_REVERSED_ORDER reverses the order of
    the lines.
    """

    ROWS = 0
    ROWS_REVERSED_ORDER = 1
    REVERSED_ROWS = 2
    REVERSED_ROWS_REVERSED_ORDER = 3
    COLUMNS = 4
    COLUMNS_REVERSED_ORDER = 5
    REVERSED_COLUMNS = 6
    REVERSED_COLUMNS_REVERSED_ORDER = 7


def _remap(values: np.ndarray, mode: Index2DMode) -> np.ndarray:
    if mode in (Index2DMode.COLUMNS, Index2DMode.COLUMNS_REVERSED_ORDER,
                Index2DMode.REVERSED_COLUMNS,
                Index2DMode.REVERSED_COLUMNS_REVERSED_ORDER):
        values = values.T
    if mode in (Index2DMode.ROWS_REVERSED_ORDER,
                Index2DMode.REVERSED_ROWS_REVERSED_ORDER,
                Index2DMode.COLUMNS_REVERSED_ORDER,
                Index2DMode.REVERSED_COLUMNS_REVERSED_ORDER):
        values = values[::-1, :]
    if mode in (Index2DMode.REVERSED_ROWS,
                Index2DMode.REVERSED_ROWS_REVERSED_ORDER,
                Index2DMode.REVERSED_COLUMNS,
                Index2DMode.REVERSED_COLUMNS_REVERSED_ORDER):
        values = values[:, ::-1]
    return values


def rasterize_rgba(grid, color_func: Callable[[float], int],
                   mode: Index2DMode = Index2DMode.ROWS) -> np.ndarray:
    """Return an RGBA image (rows, columns, 4) of uint8 for a grid or 2D array.

    *color_func* maps a value to a 32-bit colour whose lowest byte becomes
    the first channel.
    """
    values = grid.values() if isinstance(grid, IGrid) else np.asarray(grid)
    if values.ndim != 2:
        raise ValueError("grid values must be two-dimensional")
    remapped = _remap(values, mode)
    rows, cols = remapped.shape
    colors = np.array(
        [[int(color_func(float(v))) & 0xFFFFFFFF for v in row] for row in remapped],
        dtype=np.uint32,
    ).reshape(rows, cols)
    channels = [(colors >> shift) & 0xFF for shift in (0, 8, 16, 24)]
    return np.stack(channels, axis=-1).astype(np.uint8)


class _Direction(IntEnum):
    NORTH = 0
    EAST = 1
    SOUTH = 2
    WEST = 3


def _rotate(direction: _Direction, times: int) -> _Direction:
    return _Direction((int(direction) + times) % 4)


def _get_rotation(src: _Direction, dst: _Direction) -> int:
    return (int(dst) + 4 - int(src)) % 4


def _is_flipped(row_dir: _Direction, col_dir: _Direction) -> bool:
    return (int(row_dir) + 4 - int(col_dir)) % 4 == 1


def _are_orthogonal(a: _Direction, b: _Direction) -> bool:
    return abs(int(a) - int(b)) % 2 == 1


_MODES = {
    (_Direction.NORTH, _Direction.EAST): Index2DMode.COLUMNS_REVERSED_ORDER,
    (_Direction.NORTH, None): Index2DMode.REVERSED_COLUMNS_REVERSED_ORDER,
    (_Direction.EAST, _Direction.NORTH): Index2DMode.ROWS_REVERSED_ORDER,
    (_Direction.EAST, None): Index2DMode.ROWS,
    (_Direction.SOUTH, _Direction.EAST): Index2DMode.COLUMNS,
    (_Direction.SOUTH, None): Index2DMode.REVERSED_COLUMNS,
    (_Direction.WEST, _Direction.NORTH): Index2DMode.REVERSED_ROWS_REVERSED_ORDER,
    (_Direction.WEST, None): Index2DMode.REVERSED_ROWS,
}


def _get_index_2d_mode(src_row_dir: _Direction, src_col_dir: _Direction,
                       dst_row_dir: _Direction, dst_col_dir: _Direction) -> Index2DMode:
    if not _are_orthogonal(src_row_dir, src_col_dir):
        raise GridLibError("Source coordinate axes are non-orthogonal.")
    if not _are_orthogonal(dst_row_dir, dst_col_dir):
        raise GridLibError("Destination coordinate axes are non-orthogonal.")

    rotation = _get_rotation(dst_row_dir, _Direction.EAST)
    if rotation:
        src_row_dir = _rotate(src_row_dir, rotation)
        src_col_dir = _rotate(src_col_dir, rotation)

    if _is_flipped(dst_row_dir, dst_col_dir):
        src_col_dir = _rotate(src_col_dir, 2)

    mode = _MODES.get((src_row_dir, src_col_dir))
    if mode is None:
        mode = _MODES[(src_row_dir, None)]
    return mode


def _ccw_angle(v, w) -> float:
    angle = math.atan2(v[0] * w[1] - v[1] * w[0], v[0] * w[0] + v[1] * w[1])
    if angle < 0:
        angle += 2 * math.pi
    return angle


def _cardinal_direction(vector) -> _Direction:
    angle = _ccw_angle(vector, (-1.0, 1.0))
    quadrant = math.floor(2 * angle / math.pi)
    if quadrant in (0, 1, 2):
        return _Direction(quadrant)
    return _Direction.WEST


def get_index_mode_for_top_left_origin(grid: IGrid) -> Index2DMode:
    """Return the index mode that puts the grid's north-west corner top left."""
    info = grid.spatial_info()
    row_axis = info.row_axis
    col_axis = info.column_axis
    row_dir = _cardinal_direction((float(row_axis[0]), float(row_axis[1])))
    col_dir = _cardinal_direction((float(col_axis[0]), float(col_axis[1])))
    return _get_index_2d_mode(row_dir, col_dir, _Direction.EAST, _Direction.SOUTH)