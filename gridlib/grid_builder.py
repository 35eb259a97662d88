"""Assembles a Grid from values and spatial information read from a file."""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np

from gridlib.errors import GridLibError
from gridlib.grid import Grid
from gridlib.spatial_info import SpatialInfo


@dataclass
class GridBuilder:
    """Collects the parts of a grid and validates them in build()."""

    values: list[float] = field(default_factory=list)
    row_count: int = 0
    col_count: int = 0
    grid_offset: tuple[float, float] = (0.0, 0.0)
    model: SpatialInfo = field(default_factory=SpatialInfo)

    def build(self) -> Grid:
        """Return the grid; the builder's values are handed over to it."""
        if np.linalg.norm(self.model.row_axis) == 0.0:
            raise GridLibError("Grid model has zero length row axis.")
        if np.linalg.norm(self.model.column_axis) == 0.0:
            raise GridLibError("Grid model has zero length col axis.")
        if np.linalg.norm(self.model.vertical_axis) == 0.0:
            raise GridLibError("Grid model has zero length vertical axis.")
        if self.row_count == 0 or self.col_count == 0:
            raise GridLibError("Grid has zero size.")

        values = np.asarray(self.values, dtype=np.float32)
        self.values = []
        shape = (self.row_count, self.col_count)
        if values.size == 0:
            array = np.zeros(shape, dtype=np.float32)
        else:
            try:
                array = values.reshape(shape)
            except ValueError as exc:
                raise GridLibError("Can't create grid") from exc
        return Grid(array, self.model)