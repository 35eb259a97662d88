import numpy as np
import pytest

from gridlib.errors import GridLibError
from gridlib.grid import Grid
from gridlib.rasterize import (
    ElevationGradient,
    Index2DMode,
    IntervalMap,
    get_index_mode_for_top_left_origin,
    make_default_gradient_2500,
    make_default_gradient_9000,
    make_map_gradient,
    rasterize_rgba,
)
from gridlib.unit import Unit


def _grid(row_axis, col_axis):
    grid = Grid.with_size((1, 1))
    info = grid.spatial_info()
    info.row_axis = (row_axis[0], row_axis[1], 0.0)
    info.column_axis = (col_axis[0], col_axis[1], 0.0)
    info.horizontal_unit = Unit.METER
    info.vertical_unit = Unit.METER
    return grid


@pytest.mark.parametrize(
    "row_axis, col_axis, expected",
    [
        ((1, 0), (0, -1), Index2DMode.ROWS),
        ((1, 0), (0, 1), Index2DMode.ROWS_REVERSED_ORDER),
        ((-1, 0), (0, -1), Index2DMode.REVERSED_ROWS),
        ((-1, 0), (0, 1), Index2DMode.REVERSED_ROWS_REVERSED_ORDER),
        ((0, -1), (1, 0), Index2DMode.COLUMNS),
        ((0, 1), (1, 0), Index2DMode.COLUMNS_REVERSED_ORDER),
        ((0, -1), (-1, 0), Index2DMode.REVERSED_COLUMNS),
        ((0, 1), (-1, 0), Index2DMode.REVERSED_COLUMNS_REVERSED_ORDER),
        ((1, 0.99), (0.99, -1), Index2DMode.ROWS),
        ((1, 1.01), (1.01, -1), Index2DMode.COLUMNS_REVERSED_ORDER),
    ],
)
def test_get_index_mode_for_top_left_origin(row_axis, col_axis, expected):
    assert get_index_mode_for_top_left_origin(_grid(row_axis, col_axis)) == expected


def test_get_index_mode_rejects_parallel_axes():
    with pytest.raises(GridLibError):
        get_index_mode_for_top_left_origin(_grid((1, 0), (1, 0.1)))


def test_interval_map_default_covers_everything():
    interval_map = IntervalMap(7)
    assert interval_map.find(-1e30) == 7
    assert interval_map.find(0) == 7
    assert interval_map.find(1e30) == 7


def test_interval_map_empty_finds_nothing():
    interval_map = IntervalMap()
    assert interval_map.find(3.0) is None
    assert len(interval_map) == 0


def test_interval_map_insert_splits_existing():
    interval_map = IntervalMap(1)
    interval_map.insert(2, 10, 20)
    assert interval_map.find(9.999) == 1
    assert interval_map.find(10) == 2
    assert interval_map.find(19.999) == 2
    assert interval_map.find(20) == 1
    assert len(interval_map) == 3


def test_interval_map_open_ended_insert():
    interval_map = IntervalMap()
    interval_map.insert(5, 0)
    assert interval_map.find(-0.5) is None
    assert interval_map.find(1e20) == 5


def test_interval_map_reversed_range_is_ignored():
    interval_map = IntervalMap(1)
    interval_map.insert(9, 20, 10)
    assert interval_map.find(15) == 1
    assert len(interval_map) == 1


def test_interval_map_intervals_are_disjoint_and_sorted():
    interval_map = IntervalMap(0)
    interval_map.insert(1, 0, 10)
    interval_map.insert(2, 5, 15)
    interval_map.insert(3, -5, 2)
    intervals = list(interval_map)
    for (s0, e0, _), (s1, _, _) in zip(intervals, intervals[1:]):
        assert s0 < e0 <= s1
    assert interval_map.find(1) == 3
    assert interval_map.find(4) == 1
    assert interval_map.find(12) == 2


def test_elevation_gradient_returns_zero_outside_map():
    gradient = ElevationGradient(IntervalMap())
    assert gradient(100.0) == 0


def test_default_gradient_2500_colors():
    gradient = ElevationGradient(make_default_gradient_2500())
    assert gradient(-100.0) == 0xFFFF8E5A
    assert gradient(0.1) == 0xFFFAEAD1
    assert gradient(0.3) == 0xFF74907C
    assert gradient(2499.0) == 0xFFFCF2E9
    assert gradient(3000.0) == 0xFFFCF2E9


def test_default_gradient_9000_colors():
    gradient = ElevationGradient(make_default_gradient_9000())
    assert gradient(-1.0) == 0xFFFF8E5A
    assert gradient(0.2) == 0xFFFAEAD1
    assert gradient(1000.5) == 0xFFBDE8E5
    assert gradient(10000.0) == 0xFFFCF2E9


def test_map_gradient_sea_range():
    gradient = ElevationGradient(make_map_gradient(-100, 0, 10, 20, 30, 40, 50))
    assert gradient(-200.0) == 0xFFFF8E5A
    assert gradient(-99.0) == 0xFFFF8E5A
    assert gradient(-5.0) == 0xFFFAEAD1
    assert gradient(49.5) == 0xFFFCF2E9


def test_rasterize_rgba_byte_order():
    grid = Grid(np.array([[1.0]], dtype=np.float32))
    image = rasterize_rgba(grid, lambda value: 0x04030201)
    assert image.shape == (1, 1, 4)
    assert image.dtype == np.uint8
    assert image[0, 0].tolist() == [1, 2, 3, 4]


def _red(value):
    return int(value) | 0xFF000000


def test_rasterize_rgba_rows():
    grid = Grid(np.array([[1, 2, 3], [4, 5, 6]], dtype=np.float32))
    image = rasterize_rgba(grid, _red)
    assert image.shape == (2, 3, 4)
    assert image[:, :, 0].tolist() == [[1, 2, 3], [4, 5, 6]]
    assert (image[:, :, 3] == 255).all()


@pytest.mark.parametrize(
    "mode, expected",
    [
        (Index2DMode.ROWS_REVERSED_ORDER, [[4, 5, 6], [1, 2, 3]]),
        (Index2DMode.REVERSED_ROWS, [[3, 2, 1], [6, 5, 4]]),
        (Index2DMode.REVERSED_ROWS_REVERSED_ORDER, [[6, 5, 4], [3, 2, 1]]),
        (Index2DMode.COLUMNS, [[1, 4], [2, 5], [3, 6]]),
        (Index2DMode.COLUMNS_REVERSED_ORDER, [[3, 6], [2, 5], [1, 4]]),
        (Index2DMode.REVERSED_COLUMNS, [[4, 1], [5, 2], [6, 3]]),
        (Index2DMode.REVERSED_COLUMNS_REVERSED_ORDER, [[6, 3], [5, 2], [4, 1]]),
    ],
)
def test_rasterize_rgba_modes(mode, expected):
    values = np.array([[1, 2, 3], [4, 5, 6]], dtype=np.float32)
    image = rasterize_rgba(values, _red, mode)
    assert image[:, :, 0].tolist() == expected


def test_rasterize_rgba_with_gradient():
    grid = Grid(np.array([[-50.0, 3000.0]], dtype=np.float32))
    image = rasterize_rgba(grid, ElevationGradient(make_default_gradient_2500()))
    assert image[0, 0].tolist() == [0x5A, 0x8E, 0xFF, 0xFF]
    assert image[0, 1].tolist() == [0xE9, 0xF2, 0xFC, 0xFF]


def test_rasterize_rgba_empty_grid():
    image = rasterize_rgba(Grid(), _red)
    assert image.shape == (0, 0, 4)