"""Units of measurement used for grid axes."""

from __future__ import annotations

from enum import Enum

from gridlib.errors import GridLibError


class Unit(Enum):
    """Unit of a horizontal or vertical grid axis."""

    UNDEFINED = 0
    METER = 1
    FOOT = 2
    US_SURVEY_FOOT = 3
    DEGREE = 4
    ARC_SECOND = 5

    def __str__(self) -> str:
        return self.name


def try_parse_unit(text: str) -> Unit | None:
    """Return the unit whose name is *text*, or None if there is none."""
    try:
        return Unit[text]
    except KeyError:
        return None


def parse_unit(text: str) -> Unit:
    """Return the unit whose name is *text*; raise GridLibError otherwise."""
    unit = try_parse_unit(text)
    if unit is None:
        raise GridLibError(f"Unknown unit: {text}")
    return unit


_METERS_PER_UNIT = {
    Unit.FOOT: 12 * 0.0254,
    Unit.US_SURVEY_FOOT: 1200.0 / 3937.0,
}


def to_meters(unit: Unit) -> float:
    """Return the length of one *unit* in meters (1 for non-length units)."""
    return _METERS_PER_UNIT.get(unit, 1.0)