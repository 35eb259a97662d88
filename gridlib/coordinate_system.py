"""Lookups from EPSG codes to axis units."""

from __future__ import annotations

from gridlib.unit import Unit

_EPSG_UNITS = {
    9001: Unit.METER,
    9002: Unit.FOOT,
    9003: Unit.US_SURVEY_FOOT,
}

_ETRS89_UTM_ZONES = range(25828, 25839)


def epsg_unit_to_unit(epsg: int) -> Unit:
    """Return the unit for an EPSG unit-of-measure code."""
    return _EPSG_UNITS.get(epsg, Unit.UNDEFINED)


def epsg_crs_to_horizontal_unit(epsg: int) -> Unit:
    """Return the horizontal unit of a known EPSG CRS code."""
    if epsg in _ETRS89_UTM_ZONES:
        return Unit.METER
    if epsg == 4258:
        return Unit.DEGREE
    return Unit.UNDEFINED


def epsg_crs_to_vertical_unit(epsg: int) -> Unit:
    """Return the vertical unit of a known EPSG CRS code."""
    if epsg in (4937, 5941):
        return Unit.METER
    return Unit.UNDEFINED