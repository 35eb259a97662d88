import pytest

from gridlib.coordinate_system import (
    epsg_crs_to_horizontal_unit,
    epsg_crs_to_vertical_unit,
    epsg_unit_to_unit,
)
from gridlib.unit import Unit


@pytest.mark.parametrize(
    "code, unit",
    [
        (9001, Unit.METER),
        (9002, Unit.FOOT),
        (9003, Unit.US_SURVEY_FOOT),
        (9004, Unit.UNDEFINED),
        (0, Unit.UNDEFINED),
    ],
)
def test_epsg_unit_to_unit(code, unit):
    assert epsg_unit_to_unit(code) is unit


@pytest.mark.parametrize("code", [25828, 25833, 25838])
def test_etrs89_zones_are_meters(code):
    assert epsg_crs_to_horizontal_unit(code) is Unit.METER


@pytest.mark.parametrize("code", [25827, 25839, 32632])
def test_outside_zone_range_is_undefined(code):
    assert epsg_crs_to_horizontal_unit(code) is Unit.UNDEFINED


def test_etrs89_geographic_is_degrees():
    assert epsg_crs_to_horizontal_unit(4258) is Unit.DEGREE


@pytest.mark.parametrize(
    "code, unit",
    [(4937, Unit.METER), (5941, Unit.METER), (4258, Unit.UNDEFINED)],
)
def test_vertical_unit(code, unit):
    assert epsg_crs_to_vertical_unit(code) is unit