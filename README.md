# gridlib

`gridlib` works with regular elevation grids that carry a spatial
reference. A grid is a two-dimensional `numpy` array of `float32` values
plus a `SpatialInfo` that maps grid positions (row, column, value) to
model coordinates through a 4×4 matrix and a tie point, together with
horizontal and vertical units, a coordinate reference system (`Crs`),
free-form information pairs and optional extra tie points.

Cells without a known elevation hold the sentinel
`gridlib.spatial_info.UNKNOWN_ELEVATION` (`-1.0e9`). Min/max search,
interpolation and JSON output treat such cells as missing.

## Installation

```
pip install gridlib
```

The only runtime dependency is `numpy`.

## Modules

- `gridlib.grid` – `Grid` owns its values and spatial info; `GridView` is a
  read-only window into a grid, made with `Grid.view()` or
  `subgrid(index, size=None)`. `Grid.with_size((rows, cols))` creates a grid
  filled with unknown elevations. Also `get_min_max_elevation`,
  `is_elevation_grid` and `get_bounds`, which returns a `Parallelogram`
  (`origin`, `edge0`, `edge1`) in model space.
- `gridlib.spatial_info` – `SpatialInfo` with the properties `location`,
  `column_axis`, `row_axis` and `vertical_axis` (columns of the matrix),
  `SpatialTiePoint`, `RotationDir`, and the direction constants `NORTH`,
  `WEST`, `SOUTH`, `EAST`.
- `gridlib.transform` – `PositionTransformer` converts between grid
  positions and model positions (`grid_to_world`, `world_to_grid`);
  `PositionTransformer.from_grid(grid)` builds one from a grid.
- `gridlib.interpolator` – `GridInterpolator` gives bilinear values at grid
  or model positions (`raw_value_at_grid_pos`, `raw_value_at_model_pos`,
  `at_grid_pos`, `at_model_pos`). Where a cell has an unknown corner it
  falls back to interpolation along a known edge, and returns `None` when
  no value can be found.
- `gridlib.profile` – `make_profile(grid, start, end, segments)` and
  `ProfileMaker` sample the surface along a line, clipped to the grid's
  bounds.
- `gridlib.rasterize` – `rasterize_rgba(grid, color_func, mode)` turns a grid
  or 2D array into an `(rows, columns, 4)` `uint8` array. `ElevationGradient`
  wraps an `IntervalMap` of colours such as `make_default_gradient_2500()`,
  `make_default_gradient_9000()` or `make_map_gradient(...)`.
  `get_index_mode_for_top_left_origin(grid)` returns the `Index2DMode` that
  puts the grid's north-west corner in the top left.
- `gridlib.json_grid` – `write_json_grid(grid, target)` writes formatted JSON
  to a path or text stream; `read_json_grid(source, strict=False)` reads
  from a path, stream or bytes. `grid_to_json`, `spatial_info_to_json` and
  `grid_from_json` work on parsed JSON objects. With `strict=True`, unknown
  keys are errors.
- `gridlib.read_grid` – `read_grid(source, file_type=GridFileType.AUTO_DETECT)`
  and `detect_file_type(path)`.
- `gridlib.grid_builder` – `GridBuilder` validates the axes and size before
  creating a `Grid`.
- `gridlib.unit` – `Unit`, `parse_unit`, `try_parse_unit`, `to_meters`.
- `gridlib.crs` – `Crs`, `CrsType`, `CrsLibrary`, `parse_crs_type`,
  `parse_crs_library`.
- `gridlib.coordinate_system` – `epsg_unit_to_unit`,
  `epsg_crs_to_horizontal_unit`, `epsg_crs_to_vertical_unit`.

Errors are reported by raising `gridlib.errors.GridLibError`.

## Example

```python
import numpy as np

from gridlib.grid import Grid, get_min_max_elevation
from gridlib.interpolator import GridInterpolator
from gridlib.profile import make_profile
from gridlib.json_grid import read_json_grid, write_json_grid

values = np.array([[1, 2, 3],
                   [4, 5, 6],
                   [7, 8, 9]], dtype=np.float32)
grid = Grid(values)

print(get_min_max_elevation(grid))          # (1.0, 9.0)

interpolator = GridInterpolator(grid)
print(interpolator.at_grid_pos((0.5, 0.5)))  # [0.5 0.5 3. ]

# Three points along the anti-diagonal of the grid.
for point in make_profile(grid, (0, 2, 0), (2, 0, 0), 2):
    print(point)

write_json_grid(grid, "terrain.json")
same = read_json_grid("terrain.json", strict=True)
assert same == grid
```

## What it does not do

- Only the package's own JSON format can be read and written. `GridFileType`
  lists `DEM` and `GEOTIFF`, but `read_grid` raises `GridLibError` for them,
  and `detect_file_type` recognises only JSON.
- `rasterize_rgba` produces pixel arrays; saving them as image files is left
  to the caller.
- There is no command-line tool; the package is a library.

## Running the tests

```
pip install -e ".[test]"
pytest
```