"""Grids of values, views into them, and functions that work on either."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

import numpy as np

from gridlib.errors import GridLibError
from gridlib.spatial_info import UNKNOWN_ELEVATION, SpatialInfo
from gridlib.transform import PositionTransformer

_MARGIN = 1e-12
_FLOAT_MAX = float(np.finfo(np.float32).max)
_FLOAT_TRUE_MIN = float(np.finfo(np.float32).smallest_subnormal)
_UNLIMITED = 2**63 - 1


@dataclass(eq=False)
class Parallelogram:
    """A parallelogram in model space given by an origin and two edges."""

    origin: np.ndarray
    edge0: np.ndarray
    edge1: np.ndarray


def _read_only(array: np.ndarray) -> np.ndarray:
    view = array.view()
    view.flags.writeable = False
    return view


class IGrid(ABC):
    """Common interface of grids and grid views."""

    @abstractmethod
    def size(self) -> tuple[int, int]:
        """Return (rows, columns)."""

    @abstractmethod
    def tie_point(self) -> tuple[float, float]:
        """Return the grid position that the spatial info's location refers to."""

    @abstractmethod
    def spatial_info(self) -> SpatialInfo:
        """Return the spatial info of the grid."""

    @abstractmethod
    def values(self) -> np.ndarray:
        """Return the grid values as a 2D array."""

    @abstractmethod
    def subgrid(self, index, size=None) -> GridView:
        """Return a view of *size* cells starting at *index*; all the rest if size is None."""


class Grid(IGrid):
    """A 2D array of values with spatial information."""

    def __init__(self, values=None, spatial_info: SpatialInfo | None = None) -> None:
        if values is None:
            array = np.empty((0, 0), dtype=np.float32)
        else:
            array = np.asarray(values, dtype=np.float32)
        if array.ndim != 2:
            raise ValueError("grid values must be two-dimensional")
        self._values = array
        self._spatial_info = spatial_info if spatial_info is not None else SpatialInfo()

    @classmethod
    def with_size(cls, size) -> Grid:
        """Create a grid of *size* (rows, columns) filled with UNKNOWN_ELEVATION."""
        rows, cols = size
        return cls(np.full((rows, cols), UNKNOWN_ELEVATION, dtype=np.float32))

    def clear(self) -> None:
        """Set every value to UNKNOWN_ELEVATION."""
        self._values.fill(UNKNOWN_ELEVATION)

    def empty(self) -> bool:
        """Return True if the grid holds no values."""
        return self._values.size == 0

    def view(self) -> GridView:
        """Return a view of the whole grid."""
        return GridView(self)

    def size(self) -> tuple[int, int]:
        rows, cols = self._values.shape
        return int(rows), int(cols)

    def resize(self, size) -> None:
        """Change the grid's size, keeping the values that still fit."""
        rows, cols = size
        resized = np.zeros((rows, cols), dtype=np.float32)
        keep_rows = min(rows, self._values.shape[0])
        keep_cols = min(cols, self._values.shape[1])
        resized[:keep_rows, :keep_cols] = self._values[:keep_rows, :keep_cols]
        self._values = resized

    def values(self) -> np.ndarray:
        """Return the grid's own, mutable value array."""
        return self._values

    def tie_point(self) -> tuple[float, float]:
        row, col = self._spatial_info.tie_point
        return float(row), float(col)

    def spatial_info(self) -> SpatialInfo:
        return self._spatial_info

    def subgrid(self, index, size=None) -> GridView:
        return GridView(self).subgrid(index, size)

    def release(self) -> np.ndarray:
        """Return the value array and leave the grid empty."""
        values = self._values
        self._values = np.empty((0, 0), dtype=np.float32)
        return values

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, Grid):
            return NotImplemented
        return (
            np.array_equal(self._values, other._values)
            and self._spatial_info == other._spatial_info
        )

    __hash__ = None


class GridView(IGrid):
    """A rectangular window into a Grid."""

    def __init__(self, grid: Grid | None = None, values=None, offset=(0, 0)) -> None:
        self._grid = grid
        if values is None:
            if grid is not None:
                values = grid.values()
            else:
                values = np.empty((0, 0), dtype=np.float32)
        self._values = _read_only(np.asarray(values, dtype=np.float32))
        self._offset = (int(offset[0]), int(offset[1]))

    def _require_grid(self) -> Grid:
        if self._grid is None:
            raise GridLibError("grid is NULL")
        return self._grid

    def size(self) -> tuple[int, int]:
        rows, cols = self._values.shape
        return int(rows), int(cols)

    def grid_offset(self) -> tuple[int, int]:
        """Return the position of this view's first cell in the base grid."""
        return self._offset

    def tie_point(self) -> tuple[float, float]:
        row, col = self._require_grid().tie_point()
        return row + self._offset[0], col + self._offset[1]

    def spatial_info(self) -> SpatialInfo:
        return self._require_grid().spatial_info()

    def values(self) -> np.ndarray:
        """Return a read-only view of the values."""
        return self._values

    def base_grid(self) -> Grid | None:
        """Return the grid this view looks into."""
        return self._grid

    def subgrid(self, index, size=None) -> GridView:
        grid = self._require_grid()
        row, col = (int(i) for i in index)
        n_rows, n_cols = (_UNLIMITED, _UNLIMITED) if size is None else size
        if row < 0 or col < 0 or n_rows < 0 or n_cols < 0:
            raise GridLibError("Negative subgrid index or size.")
        rows, cols = self._values.shape
        if row > rows or col > cols:
            raise GridLibError("Subgrid index is outside the grid.")
        values = self._values[row:row + n_rows, col:col + n_cols]
        offset = (self._offset[0] + row, self._offset[1] + col)
        return GridView(grid, values, offset)


def get_min_max_elevation(grid: IGrid) -> tuple[float, float]:
    """Return the smallest and largest known value, or (0, 0) if none is known."""
    values = grid.values()
    known = values[values != np.float32(UNKNOWN_ELEVATION)]
    if known.size == 0:
        return 0.0, 0.0
    low = min(float(known.min()), _FLOAT_MAX)
    high = max(float(known.max()), _FLOAT_TRUE_MIN)
    if low > high:
        return 0.0, 0.0
    return low, high


def is_elevation_grid(grid: IGrid) -> bool:
    """Return True if the grid's row and column axes lie in the horizontal plane."""
    info = grid.spatial_info()
    return info.row_axis[2] <= _MARGIN and info.column_axis[2] <= _MARGIN


def get_bounds(grid: IGrid) -> Parallelogram:
    """Return the model-space parallelogram covered by the grid."""
    if not is_elevation_grid(grid):
        raise GridLibError("Can not calculate bounding rectangle for non-planar grid.")
    transformer = PositionTransformer.from_grid(grid)
    origin = transformer.grid_to_world((0, 0))
    rows, cols = grid.size()
    info = grid.spatial_info()
    col_vec = float(rows - 1) * info.column_axis
    row_vec = float(cols - 1) * info.row_axis
    return Parallelogram(origin, col_vec, row_vec)