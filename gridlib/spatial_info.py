"""Placement of a grid in model space, and related member types."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from enum import Enum

import numpy as np

from gridlib.crs import Crs
from gridlib.unit import Unit

NORTH = 0.0
WEST = 1.5707963267948966
SOUTH = 3.141592653589793
EAST = 4.71238898038469

UNKNOWN_ELEVATION = -1.0e9


class RotationDir(Enum):
    """Direction of rotation."""

    CLOCKWISE = 0
    COUNTERCLOCKWISE = 1


def _same_vector(a, b) -> bool:
    return np.array_equal(np.asarray(a, dtype=float), np.asarray(b, dtype=float))


@dataclass(eq=False)
class SpatialTiePoint:
    """A grid point tied to a location in some CRS."""

    grid_point: tuple[float, float] = (0.0, 0.0)
    location: tuple[float, float, float] = (0.0, 0.0, 0.0)
    crs: Crs = field(default_factory=Crs)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SpatialTiePoint):
            return NotImplemented
        return (
            _same_vector(self.grid_point, other.grid_point)
            and _same_vector(self.location, other.location)
            and self.crs == other.crs
        )


def _identity() -> np.ndarray:
    return np.identity(4, dtype=float)


@dataclass(eq=False)
class SpatialInfo:
    """Transformation matrix, units, CRS and metadata of a grid.

    Column 0 of the matrix is the column axis, column 1 the row axis,
    column 2 the vertical axis and column 3 the location.
    """

    matrix: np.ndarray = field(default_factory=_identity)
    horizontal_unit: Unit = Unit.UNDEFINED
    vertical_unit: Unit = Unit.UNDEFINED
    crs: Crs = field(default_factory=Crs)
    information: list[tuple[str, str]] = field(default_factory=list)
    tie_point: tuple[float, float] = (0.0, 0.0)
    extra_tie_points: list[SpatialTiePoint] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.matrix = np.array(self.matrix, dtype=float)
        if self.matrix.shape != (4, 4):
            raise ValueError("matrix must be 4x4")

    def _column(self, index: int) -> np.ndarray:
        return self.matrix[:3, index].copy()

    def _set_column(self, index: int, vector) -> None:
        values = np.asarray(vector, dtype=float)
        if values.shape != (3,):
            raise ValueError("expected a vector with 3 components")
        self.matrix[:3, index] = values

    @property
    def location(self) -> np.ndarray:
        """Model position of grid point (0, 0)."""
        return self._column(3)

    @location.setter
    def location(self, vector) -> None:
        self._set_column(3, vector)

    @property
    def column_axis(self) -> np.ndarray:
        """Model-space step from one row to the next."""
        return self._column(0)

    @column_axis.setter
    def column_axis(self, vector) -> None:
        self._set_column(0, vector)

    @property
    def row_axis(self) -> np.ndarray:
        """Model-space step from one column to the next."""
        return self._column(1)

    @row_axis.setter
    def row_axis(self, vector) -> None:
        self._set_column(1, vector)

    @property
    def vertical_axis(self) -> np.ndarray:
        """Model-space direction and scale of grid values."""
        return self._column(2)

    @vertical_axis.setter
    def vertical_axis(self, vector) -> None:
        self._set_column(2, vector)

    def copy(self) -> SpatialInfo:
        """Return an independent copy."""
        return SpatialInfo(
            matrix=self.matrix.copy(),
            horizontal_unit=self.horizontal_unit,
            vertical_unit=self.vertical_unit,
            crs=dataclasses.replace(self.crs),
            information=list(self.information),
            tie_point=tuple(self.tie_point),
            extra_tie_points=[
                dataclasses.replace(p, crs=dataclasses.replace(p.crs))
                for p in self.extra_tie_points
            ],
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SpatialInfo):
            return NotImplemented
        return (
            np.array_equal(self.matrix, other.matrix)
            and self.horizontal_unit == other.horizontal_unit
            and self.vertical_unit == other.vertical_unit
            and self.crs == other.crs
            and [tuple(p) for p in self.information]
            == [tuple(p) for p in other.information]
            and _same_vector(self.tie_point, other.tie_point)
            and self.extra_tie_points == other.extra_tie_points
        )