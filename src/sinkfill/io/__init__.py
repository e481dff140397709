"""I/O modules for loading and saving grids."""

from .grid_file import (
    FALLBACK_MAX_ELEVATION,
    GridIOError,
    GridReadError,
    GridWriteError,
    load_grid,
    save_grid,
    grid_max,
)
from .synthetic import generate_sample_dem

__all__ = [
    "FALLBACK_MAX_ELEVATION",
    "GridIOError",
    "GridReadError",
    "GridWriteError",
    "load_grid",
    "save_grid",
    "grid_max",
    "generate_sample_dem",
]
