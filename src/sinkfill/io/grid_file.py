"""
Grid File Module

Reads and writes elevation grids as NumPy ``.npy`` arrays and provides
the global maximum used to seed the flood.
"""

from __future__ import annotations

import logging
import warnings
from pathlib import Path
from typing import Union

import numpy as np

from ..core.validation import (
    FilePermissionError,
    GridShapeError,
    MaxComputationError,
    validate_elevation_grid,
    validate_output_path,
)

logger = logging.getLogger(__name__)

# Used when the maximum of a grid is undefined (empty grid, NaN present).
FALLBACK_MAX_ELEVATION = 3000.0


class GridIOError(Exception):
    """Base error for grid file access."""


class GridReadError(GridIOError):
    """Input grid is missing, corrupt or not a 2D numeric array."""


class GridWriteError(GridIOError):
    """Filled grid could not be persisted."""


def load_grid(filepath: Union[str, Path]) -> np.ndarray:
    """
    Load a 2D elevation grid from a ``.npy`` file.

    Any real numeric dtype is accepted and returned as float64.

    Args:
        filepath: Path to the ``.npy`` file

    Returns:
        Elevation grid with shape (rows, cols)

    Raises:
        GridReadError: If the file is missing, unreadable or has the wrong layout
    """
    path = Path(filepath)

    if not path.exists():
        raise GridReadError(f"Input grid not found: {path}")

    if path.is_dir():
        raise GridReadError(f"Input grid is a directory: {path}")

    try:
        data = np.load(path, allow_pickle=False)
    except (OSError, ValueError, EOFError) as e:
        raise GridReadError(f"Cannot read {path} as a .npy array: {e}") from e

    if not isinstance(data, np.ndarray):
        # .npz archives load as NpzFile
        data.close()
        raise GridReadError(f"{path} holds an archive, expected a single .npy array")

    try:
        grid = validate_elevation_grid(data, context=f"Grid in {path}")
    except GridShapeError as e:
        raise GridReadError(str(e)) from e

    logger.debug("Loaded %s: shape=%s dtype=%s", path, data.shape, data.dtype)
    return grid


def _compute_max(grid: np.ndarray) -> float:
    if grid.size == 0:
        raise MaxComputationError("Cannot compute maximum of an empty grid")

    value = float(np.max(grid))
    if np.isnan(value):
        raise MaxComputationError("Cannot compute maximum: grid contains NaN values")

    return value


def grid_max(grid: np.ndarray, fallback: float = FALLBACK_MAX_ELEVATION) -> float:
    """
    Global maximum elevation of a grid.

    Falls back to ``fallback`` (with a UserWarning) when the maximum is
    undefined, instead of failing the run.
    """
    try:
        return _compute_max(grid)
    except MaxComputationError as e:
        warnings.warn(
            f"{e}; using fallback maximum {fallback}",
            UserWarning,
            stacklevel=2
        )
        return float(fallback)


def save_grid(grid: np.ndarray, filepath: Union[str, Path]) -> Path:
    """
    Write a 2D grid to ``filepath`` as a float64 ``.npy`` array.

    The file is written to the exact path given; no suffix is appended.

    Returns:
        Path that was written

    Raises:
        GridWriteError: If the path is not writable or the write fails
    """
    data = np.asarray(grid, dtype=np.float64)
    if data.ndim != 2:
        raise GridWriteError(
            f"Expected a 2-dimensional grid, got shape {data.shape}"
        )

    try:
        path = validate_output_path(filepath, "output grid")
    except FilePermissionError as e:
        raise GridWriteError(str(e)) from e

    try:
        with open(path, 'wb') as f:
            np.save(f, data)
    except OSError as e:
        raise GridWriteError(f"Failed to write {path}: {e}") from e

    logger.debug("Wrote %s: shape=%s", path, data.shape)
    return path
