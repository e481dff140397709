"""
Synthetic DEM generation for examples and tests.
"""

from __future__ import annotations

from typing import Tuple

import numpy as np
from scipy.ndimage import gaussian_filter


def generate_sample_dem(
    shape: Tuple[int, int] = (50, 50),
    base_elevation: float = 100.0,
    hill_height: float = 10.0,
    noise_scale: float = 2.0,
    smoothing: float = 1.0,
    pit_count: int = 5,
    pit_depth: float = 5.0,
    seed: int = 42,
) -> np.ndarray:
    """
    Generate a synthetic elevation grid containing depressions.

    Creates rolling hills with random noise, smooths them, then carves
    square pits into the interior so there is something to fill.

    Args:
        shape: (rows, cols) of the grid
        base_elevation: Base elevation value
        hill_height: Maximum hill height
        noise_scale: Standard deviation of random noise
        smoothing: Gaussian smoothing sigma in cells (0 disables)
        pit_count: Number of pits carved into the interior
        pit_depth: Depth of each pit below the local surface
        seed: Random seed for reproducibility

    Returns:
        float64 array of shape ``shape``
    """
    rng = np.random.RandomState(seed)

    rows, cols = shape
    yy, xx = np.mgrid[0:rows, 0:cols].astype(np.float64)

    dem = base_elevation + (
        hill_height * np.sin(xx / 20) * np.cos(yy / 25) +
        hill_height * 0.5 * np.sin(xx / 10 + yy / 15) +
        noise_scale * rng.randn(rows, cols)
    )

    if smoothing > 0:
        dem = gaussian_filter(dem, sigma=smoothing)

    # Pits stay one cell clear of the edge
    if rows > 4 and cols > 4:
        for _ in range(pit_count):
            row = rng.randint(2, rows - 2)
            col = rng.randint(2, cols - 2)
            dem[row - 1:row + 2, col - 1:col + 2] -= pit_depth

    return dem.astype(np.float64)
