"""
Input Validation Module

Provides validation functions and custom exceptions for the sinkfill package.
All validation functions provide clear, actionable error messages.
"""

from __future__ import annotations

import math
import os
import warnings
from pathlib import Path
from typing import Sequence, Union

import numpy as np

# Above this the pure Python flood loop gets slow enough to warn about.
LARGE_GRID_CELLS = 25_000_000


class ValidationError(ValueError):
    """Base exception for validation errors with user-friendly messages."""
    pass


class ArgumentCountError(ValidationError):
    """Wrong number of positional command line arguments."""
    pass


class EpsilonError(ValidationError):
    """Epsilon is not a usable gradient increment."""
    pass


class GridShapeError(ValidationError):
    """Elevation data is not a two-dimensional numeric grid."""
    pass


class MaxComputationError(ValidationError):
    """Global maximum elevation cannot be determined."""
    pass


class SeedElevationError(ValidationError):
    """Seed elevation for interior cells is below the grid's own elevations."""
    pass


class FilePermissionError(ValidationError):
    """Cannot write to specified path."""
    pass


def validate_argument_count(args: Sequence[str], expected: int = 3) -> Sequence[str]:
    """
    Validate the number of positional arguments.

    Args:
        args: Positional arguments as received from the command line
        expected: Required argument count

    Returns:
        The arguments unchanged

    Raises:
        ArgumentCountError: If the count differs from ``expected``
    """
    if len(args) != expected:
        raise ArgumentCountError(
            f"Expected {expected} arguments, got {len(args)}"
        )
    return args


def parse_epsilon(text: str) -> float:
    """
    Parse an epsilon value given as text (e.g. from the command line).

    Raises:
        EpsilonError: If the text is not a number, or the number is unusable
    """
    try:
        value = float(text)
    except (TypeError, ValueError):
        raise EpsilonError(f"Invalid epsilon value: {text}")

    return validate_epsilon(value, context=f"Invalid epsilon value: {text}")


def validate_epsilon(epsilon: float, context: str = "epsilon") -> float:
    """
    Validate epsilon is a finite, strictly positive number.

    Args:
        epsilon: Minimum elevation increment enforced between cells
        context: Prefix used in error messages

    Returns:
        The validated epsilon as a float

    Raises:
        EpsilonError: If epsilon is None, not a number, not finite or <= 0
    """
    if epsilon is None:
        raise EpsilonError(f"{context} cannot be None")

    if isinstance(epsilon, bool) or not isinstance(epsilon, (int, float, np.floating, np.integer)):
        raise EpsilonError(
            f"{context} must be a number, got {type(epsilon).__name__}"
        )

    if not math.isfinite(epsilon):
        raise EpsilonError(f"{context} (must be finite, got {epsilon})")

    if epsilon <= 0:
        raise EpsilonError(
            f"{context} (must be positive, got {epsilon}). "
            "Typical values are 1e-5 to 0.01 elevation units."
        )

    return float(epsilon)


def validate_seed_elevation(seed: float, elevations: np.ndarray) -> float:
    """
    Validate an explicit seed elevation against the grid it will flood.

    Interior cells start at the seed, so it must not lie below any
    elevation in the grid. NaN cells are ignored.

    Args:
        seed: Value every interior cell starts from
        elevations: The grid being filled

    Returns:
        The validated seed as a float

    Raises:
        SeedElevationError: If the seed is not a number, is NaN, or is
            below the grid maximum
    """
    if isinstance(seed, bool) or not isinstance(seed, (int, float, np.floating, np.integer)):
        raise SeedElevationError(
            f"max_elevation must be a number, got {type(seed).__name__}"
        )

    if math.isnan(seed):
        raise SeedElevationError("max_elevation cannot be NaN")

    valid = elevations[~np.isnan(elevations)]
    if valid.size:
        peak = float(valid.max())
        if seed < peak:
            raise SeedElevationError(
                f"max_elevation {seed} is below the grid maximum {peak}; "
                "cells above the seed would be left under-filled"
            )

    return float(seed)


def validate_elevation_grid(elevations, context: str = "elevation grid") -> np.ndarray:
    """
    Validate elevations form a 2D real-valued grid and return it as float64.

    Raises:
        GridShapeError: If the data is not 2D or not real-valued
    """
    grid = np.asarray(elevations)

    if grid.ndim != 2:
        raise GridShapeError(
            f"{context} must be 2-dimensional (rows, cols), "
            f"got {grid.ndim} dimension(s) with shape {grid.shape}"
        )

    if grid.dtype.kind not in "biuf":
        raise GridShapeError(
            f"{context} must hold real numbers, got dtype {grid.dtype}"
        )

    total_cells = grid.size
    if total_cells > LARGE_GRID_CELLS:
        warnings.warn(
            f"Filling very large grid ({grid.shape[0]}x{grid.shape[1]} = "
            f"{total_cells:,} cells). Expect a long run time.",
            UserWarning,
            stacklevel=2
        )

    return grid.astype(np.float64, copy=False)


def validate_output_path(filepath: Union[str, Path], context: str = "output file") -> Path:
    """
    Validate output path is writable before attempting to write.

    Args:
        filepath: The path to validate
        context: Description of what will be written (used in error messages)

    Returns:
        The validated path as a Path object

    Raises:
        FilePermissionError: If directory doesn't exist or isn't writable
    """
    path = Path(filepath)
    parent = path.parent

    if str(parent) == '.':
        parent = Path.cwd()

    if not parent.exists():
        raise FilePermissionError(
            f"Cannot write {context}: directory '{parent}' does not exist. "
            "Create the directory first or specify a different path."
        )

    if path.is_dir():
        raise FilePermissionError(
            f"Cannot write {context}: '{path}' is a directory."
        )

    if not os.access(parent, os.W_OK):
        raise FilePermissionError(
            f"Cannot write {context}: no write permission for directory '{parent}'."
        )

    if path.exists() and not os.access(path, os.W_OK):
        raise FilePermissionError(
            f"Cannot overwrite {context}: file '{path}' exists but is not writable."
        )

    return path
