"""Elevation profiles along straight lines across a grid."""

from __future__ import annotations

import math

import numpy as np

from gridlib.grid import IGrid, get_bounds
from gridlib.interpolator import GridInterpolator


class _ParallelogramClipper:
    """Clips line segments to a parallelogram, measured in its own plane."""

    def __init__(self, origin, edge0, edge1) -> None:
        self._origin = np.asarray(origin, dtype=float)
        basis = np.column_stack(
            (np.asarray(edge0, dtype=float), np.asarray(edge1, dtype=float))
        )
        gram = basis.T @ basis
        try:
            self._to_plane = np.linalg.solve(gram, basis.T)
        except np.linalg.LinAlgError:
            self._to_plane = np.linalg.pinv(basis)

    def _plane_coords(self, point: np.ndarray) -> np.ndarray:
        return self._to_plane @ (point - self._origin)

    def clip(self, start: np.ndarray, end: np.ndarray):
        """Return the clipped (start, end) or None if nothing is inside."""
        a0 = self._plane_coords(start)
        delta = self._plane_coords(end) - a0
        t0, t1 = 0.0, 1.0
        for base, step in zip(a0, delta):
            if step == 0:
                if base < 0 or base > 1:
                    return None
                continue
            lo = (0.0 - base) / step
            hi = (1.0 - base) / step
            if lo > hi:
                lo, hi = hi, lo
            t0 = max(t0, lo)
            t1 = min(t1, hi)
            if t0 > t1:
                return None
        direction = end - start
        clipped_start = start if t0 == 0.0 else start + t0 * direction
        clipped_end = end if t1 == 1.0 else start + t1 * direction
        return clipped_start, clipped_end


class ProfileMaker:
    """Creates elevation profiles for one grid."""

    def __init__(self, grid: IGrid) -> None:
        self._grid = grid
        self._interpolator = GridInterpolator(grid)
        bounds = get_bounds(grid)
        self._clipper = _ParallelogramClipper(bounds.origin, bounds.edge0, bounds.edge1)

    def _at_clipped_point(self, point: np.ndarray) -> np.ndarray | None:
        # The clipped point lies on the grid boundary; keep rounding errors
        # from pushing it just outside.
        rows, cols = self._grid.size()
        grid_pos = self._interpolator.transformer.world_to_grid(point)
        grid_pos = np.clip(grid_pos, 0.0, [max(rows - 1, 0), max(cols - 1, 0)])
        return self._interpolator.at_grid_pos(grid_pos)

    def make_profile(self, start, end, segments: int) -> list[np.ndarray]:
        """Return the surface points along start..end split into *segments* parts."""
        if segments == 0:
            return []

        start = np.asarray(start, dtype=float)
        end = np.asarray(end, dtype=float)
        line = self._clipper.clip(start, end)
        if line is None:
            return []
        clip_start, clip_end = line

        total_length = float(np.linalg.norm(end - start))

        step0 = 0
        if not np.array_equal(clip_start, start):
            ratio = float(np.linalg.norm(clip_start - start)) / total_length
            step0 = math.ceil(ratio * segments)

        step1 = segments
        if not np.array_equal(clip_end, end):
            ratio = float(np.linalg.norm(clip_end - start)) / total_length
            step1 = math.floor(ratio * segments)

        result = []
        if step0 != 0:
            point = self._at_clipped_point(clip_start)
            if point is not None:
                result.append(point)

        for i in range(step0, step1 + 1):
            pos = start + (end - start) * float(i) / float(segments)
            point = self._interpolator.at_model_pos(pos)
            if point is not None:
                result.append(point)

        if step1 != segments:
            point = self._at_clipped_point(clip_end)
            if point is not None:
                result.append(point)

        return result


def make_profile(grid: IGrid, start, end, segments: int) -> list[np.ndarray]:
    """Return the surface points of *grid* along start..end in *segments* parts."""
    return ProfileMaker(grid).make_profile(start, end, segments)