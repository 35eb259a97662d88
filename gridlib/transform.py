"""Conversion between grid coordinates and model (world) coordinates."""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

from gridlib.errors import GridLibError

if TYPE_CHECKING:
    from gridlib.grid import IGrid


class PositionTransformer:
    """Maps grid positions (row, column, value) to model positions and back."""

    def __init__(self, matrix, tie_point=(0.0, 0.0)) -> None:
        base = np.asarray(matrix, dtype=float)
        if base.shape != (4, 4):
            raise ValueError("matrix must be 4x4")
        tie_row, tie_col = tie_point
        translation = np.identity(4, dtype=float)
        translation[0, 3] = -float(tie_row)
        translation[1, 3] = -float(tie_col)
        self.matrix = base @ translation

    @classmethod
    def from_grid(cls, grid: IGrid) -> PositionTransformer:
        """Create a transformer from a grid's spatial info and tie point."""
        return cls(grid.spatial_info().matrix, grid.tie_point())

    def world_to_grid(self, pos) -> np.ndarray:
        """Return the (row, column) grid position of model position *pos*."""
        point = np.asarray(pos, dtype=float)
        if point.shape != (3,):
            raise ValueError("expected a vector with 3 components")
        try:
            solved = np.linalg.solve(self.matrix, np.append(point, 1.0))
        except np.linalg.LinAlgError as exc:
            raise GridLibError("Grid transformation matrix is singular.") from exc
        return solved[:2]

    def grid_to_world(self, pos) -> np.ndarray:
        """Return the model position of grid position *pos*.

        *pos* is either (row, column) or (row, column, value).
        """
        point = np.asarray(pos, dtype=float)
        if point.shape == (2,):
            point = np.append(point, 0.0)
        elif point.shape != (3,):
            raise ValueError("expected a vector with 2 or 3 components")
        return (self.matrix @ np.append(point, 1.0))[:3]