"""
Shared pytest fixtures and configuration for sinkfill tests.
"""

import numpy as np
import pytest


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "requires_matplotlib: requires matplotlib to be installed"
    )


def pytest_collection_modifyitems(config, items):
    """Auto-skip tests based on missing dependencies."""
    try:
        import matplotlib
        matplotlib_available = True
    except ImportError:
        matplotlib_available = False

    for item in items:
        if "requires_matplotlib" in item.keywords and not matplotlib_available:
            item.add_marker(pytest.mark.skip(reason="matplotlib not installed"))


@pytest.fixture
def ring_grid():
    """3x3 grid: boundary ring at 10.0 around a 2.0 centre."""
    grid = np.full((3, 3), 10.0)
    grid[1, 1] = 2.0
    return grid


@pytest.fixture
def pit_grid():
    """
    5x5 grid with a 3x3 pit at 1.0 inside a 5.0 rim.

    A 100.0 corner makes the seed maximum well above the rim, so the
    pit is filled with an epsilon gradient rather than capped at the max.
    """
    grid = np.full((5, 5), 5.0)
    grid[1:4, 1:4] = 1.0
    grid[0, 0] = 100.0
    return grid


@pytest.fixture
def sample_dem():
    """Small synthetic DEM with carved pits."""
    from sinkfill.io.synthetic import generate_sample_dem

    return generate_sample_dem(shape=(30, 40), pit_count=6, seed=7)


@pytest.fixture
def npy_file(tmp_path, pit_grid):
    """pit_grid saved as a .npy file."""
    path = tmp_path / "dem.npy"
    np.save(path, pit_grid)
    return path


@pytest.fixture
def tmp_output_dir(tmp_path):
    """Temporary directory for test outputs."""
    return tmp_path


@pytest.fixture
def cli_runner():
    """Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
