"""Interpolation of grid values at arbitrary grid or model positions."""

from __future__ import annotations

import math

import numpy as np

from gridlib.grid import IGrid
from gridlib.spatial_info import UNKNOWN_ELEVATION
from gridlib.transform import PositionTransformer

_UNKNOWN = np.float32(UNKNOWN_ELEVATION)


def _lerp(a: float, b: float, t: float) -> float:
    return a + t * (b - a)


def _get_cell(values: np.ndarray, grid_pos) -> tuple[int, int] | None:
    rows, cols = values.shape
    row, col = float(grid_pos[0]), float(grid_pos[1])
    if rows < 2 or cols < 2:
        return None
    if row < 0 or rows - 1 < row:
        return None
    if col < 0 or cols - 1 < col:
        return None
    return min(math.floor(row), rows - 2), min(math.floor(col), cols - 2)


def _cell_values(values: np.ndarray, cell: tuple[int, int]) -> tuple[float, ...]:
    r, c = cell
    return (
        values[r, c],
        values[r + 1, c],
        values[r, c + 1],
        values[r + 1, c + 1],
    )


def _is_unknown(value) -> bool:
    return np.float32(value) == _UNKNOWN


def _edge_elevation(corners, grid_pos, cell) -> float | None:
    """Value on a cell edge or corner when the cell has unknown corners."""
    rf, ri = math.modf(float(grid_pos[0]))
    cf, ci = math.modf(float(grid_pos[1]))
    r = int(ri) - cell[0]
    c = int(ci) - cell[1]

    if rf == 0 and cf == 0:
        value = corners[r + c * 2]
        return None if _is_unknown(value) else float(value)

    if rf == 0 and not _is_unknown(corners[r]) and not _is_unknown(corners[2 + r]):
        return _lerp(float(corners[r]), float(corners[2 + r]), cf)

    if (
        cf == 0
        and not _is_unknown(corners[2 * c])
        and not _is_unknown(corners[2 * c + 1])
    ):
        return _lerp(float(corners[2 * c]), float(corners[2 * c + 1]), rf)

    return None


def _bilinear(corners, grid_pos, cell) -> float:
    v00, v10, v01, v11 = (float(v) for v in corners)
    tr = float(grid_pos[0]) - cell[0]
    tc = float(grid_pos[1]) - cell[1]
    low = _lerp(v00, v10, tr)
    high = _lerp(v01, v11, tr)
    return _lerp(low, high, tc)


def _interpolate(grid: IGrid, grid_pos) -> float | None:
    values = grid.values()
    cell = _get_cell(values, grid_pos)
    if cell is None:
        return None
    corners = _cell_values(values, cell)
    if any(_is_unknown(v) for v in corners):
        return _edge_elevation(corners, grid_pos, cell)
    return _bilinear(corners, grid_pos, cell)


class GridInterpolator:
    """Computes interpolated grid values and their model positions."""

    def __init__(self, grid: IGrid) -> None:
        self.grid = grid
        self.transformer = PositionTransformer.from_grid(grid)

    def raw_value_at_grid_pos(self, grid_pos) -> float | None:
        """Return the interpolated raw value at (row, column), or None."""
        return _interpolate(self.grid, grid_pos)

    def raw_value_at_model_pos(self, model_pos) -> float | None:
        """Return the interpolated raw value below/above a model position, or None."""
        return self.raw_value_at_grid_pos(self.transformer.world_to_grid(model_pos))

    def at_grid_pos(self, grid_pos) -> np.ndarray | None:
        """Return the model position of the surface at (row, column), or None."""
        z = self.raw_value_at_grid_pos(grid_pos)
        if z is None:
            return None
        return self.transformer.grid_to_world(
            (float(grid_pos[0]), float(grid_pos[1]), z)
        )

    def at_model_pos(self, model_pos) -> np.ndarray | None:
        """Return the model position of the surface at a model position, or None."""
        pos = self.transformer.world_to_grid(model_pos)
        z = self.raw_value_at_grid_pos(pos)
        if z is None:
            return None
        return self.transformer.grid_to_world((pos[0], pos[1], z))