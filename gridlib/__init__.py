"""Elevation grids with spatial reference: transforms, interpolation, profiles,
rasterization and JSON storage."""

__version__ = "0.8.0"