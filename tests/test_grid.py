import numpy as np
import pytest

from gridlib.errors import GridLibError
from gridlib.grid import (
    Grid,
    GridView,
    get_bounds,
    get_min_max_elevation,
    is_elevation_grid,
)
from gridlib.spatial_info import UNKNOWN_ELEVATION
from gridlib.unit import Unit

UNK = UNKNOWN_ELEVATION


def _sample_grid():
    return Grid(np.array([[UNK, -1, 4], [3, 1, -4]], dtype=np.float32))


def _arange_grid():
    return Grid(np.arange(12, dtype=np.float32).reshape(3, 4))


def test_get_min_max_elevation():
    low, high = get_min_max_elevation(_sample_grid())
    assert low == -4
    assert high == 4


def test_get_min_max_elevation_all_unknown():
    grid = Grid.with_size((2, 2))
    assert get_min_max_elevation(grid) == (0.0, 0.0)


def test_get_bounding_rect():
    grid = _sample_grid()
    model = grid.spatial_info()
    model.location = (500000, 6000000, 0)
    model.horizontal_unit = Unit.METER
    model.vertical_unit = Unit.METER
    model.row_axis = (10, 0, 0)
    model.column_axis = (0, -10, 0)
    rect = get_bounds(grid)
    np.testing.assert_array_equal(rect.origin, (500000, 6000000, 0))
    assert np.linalg.norm(rect.edge0) == 10
    assert np.linalg.norm(rect.edge1) == 20


def test_get_bounds_of_non_planar_grid_raises():
    grid = _sample_grid()
    grid.spatial_info().row_axis = (1, 0, 1)
    assert not is_elevation_grid(grid)
    with pytest.raises(GridLibError):
        get_bounds(grid)


def test_default_grid_is_elevation_grid():
    assert is_elevation_grid(_sample_grid())


def test_with_size_fills_unknown():
    grid = Grid.with_size((2, 3))
    assert grid.size() == (2, 3)
    assert np.all(grid.values() == np.float32(UNK))


def test_default_grid_is_empty():
    grid = Grid()
    assert grid.empty()
    assert grid.size() == (0, 0)


def test_clear():
    grid = _arange_grid()
    grid.clear()
    assert grid.size() == (3, 4)
    np.testing.assert_array_equal(
        grid.values(), np.full((3, 4), UNK, dtype=np.float32)
    )


def test_resize_keeps_overlap():
    grid = _arange_grid()
    grid.resize((2, 5))
    assert grid.size() == (2, 5)
    np.testing.assert_array_equal(grid.values()[:, :4], [[0, 1, 2, 3], [4, 5, 6, 7]])


def test_release_empties_grid():
    grid = _arange_grid()
    values = grid.release()
    assert values.shape == (3, 4)
    assert grid.empty()


def test_equality():
    a = _arange_grid()
    b = _arange_grid()
    assert a == b
    b.spatial_info().tie_point = (1, 1)
    assert not a == b
    c = _arange_grid()
    c.values()[0, 0] = 100
    assert a != c


def test_subgrid():
    grid = _arange_grid()
    grid.spatial_info().tie_point = (0.5, 0.5)
    sub = grid.subgrid((1, 1), (2, 2))
    assert sub.size() == (2, 2)
    np.testing.assert_array_equal(sub.values(), [[5, 6], [9, 10]])
    assert sub.grid_offset() == (1, 1)
    assert sub.tie_point() == (1.5, 1.5)
    assert sub.base_grid() is grid
    assert sub.spatial_info() is grid.spatial_info()


def test_nested_subgrid_accumulates_offset():
    grid = _arange_grid()
    inner = grid.subgrid((1, 1), (2, 3)).subgrid((1, 1), (1, 1))
    assert inner.grid_offset() == (2, 2)
    np.testing.assert_array_equal(inner.values(), [[10]])


def test_subgrid_without_size_takes_rest():
    grid = _arange_grid()
    sub = grid.subgrid((1, 2))
    assert sub.size() == (2, 2)
    np.testing.assert_array_equal(sub.values(), [[6, 7], [10, 11]])


def test_subgrid_with_negative_index_raises():
    with pytest.raises(GridLibError):
        _arange_grid().subgrid((-1, 0), (1, 1))


def test_view_covers_whole_grid():
    grid = _arange_grid()
    view = grid.view()
    assert view.size() == grid.size()
    assert view.grid_offset() == (0, 0)
    np.testing.assert_array_equal(view.values(), grid.values())


def test_view_sees_changes_and_is_read_only():
    grid = _arange_grid()
    view = grid.view()
    grid.values()[0, 0] = 42
    assert view.values()[0, 0] == 42
    with pytest.raises(ValueError):
        view.values()[0, 0] = 1


def test_view_without_grid_raises():
    view = GridView()
    assert view.size() == (0, 0)
    with pytest.raises(GridLibError, match="grid is NULL"):
        view.tie_point()
    with pytest.raises(GridLibError):
        view.spatial_info()