[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "gridlib"
version = "0.8.0"
description = "Elevation grids with spatial reference: interpolation, profiles, rasterization and JSON storage."
requires-python = ">=3.10"
dependencies = [
    "numpy",
]
keywords = [
    "gis",
    "elevation",
    "grid",
    "terrain",
    "interpolation",
    "profile",
    "raster",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: GIS",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["gridlib"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 88
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
