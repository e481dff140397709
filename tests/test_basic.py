"""
Basic tests for the sinkfill package.

Run with: pytest tests/
"""

import numpy as np
import pytest


class TestPackage:
    """Tests for the public package surface."""

    def test_top_level_exports(self):
        import sinkfill

        for name in sinkfill.__all__:
            assert hasattr(sinkfill, name)

    def test_end_to_end(self, tmp_path):
        """Load, fill and save through the public API."""
        from sinkfill import fill_depressions, load_grid, save_grid
        from sinkfill.io.synthetic import generate_sample_dem

        source = tmp_path / "dem.npy"
        np.save(source, generate_sample_dem(shape=(20, 20), seed=1))

        dem = load_grid(source)
        result = fill_depressions(dem, epsilon=0.01)
        path = save_grid(result.filled, tmp_path / "filled.npy")

        np.testing.assert_array_equal(np.load(path), result.filled)


class TestSyntheticDEM:
    """Tests for synthetic DEM generation."""

    def test_shape_and_dtype(self):
        from sinkfill.io.synthetic import generate_sample_dem

        dem = generate_sample_dem(shape=(30, 45))

        assert dem.shape == (30, 45)
        assert dem.dtype == np.float64

    def test_reproducible(self):
        from sinkfill.io.synthetic import generate_sample_dem

        a = generate_sample_dem(seed=5)
        b = generate_sample_dem(seed=5)
        c = generate_sample_dem(seed=6)

        np.testing.assert_array_equal(a, b)
        assert not np.array_equal(a, c)

    def test_pits_need_filling(self):
        from sinkfill import fill_depressions
        from sinkfill.io.synthetic import generate_sample_dem

        dem = generate_sample_dem(shape=(40, 40), pit_count=8, pit_depth=6.0)
        result = fill_depressions(dem, epsilon=0.01)

        assert result.filled_cells > 0
        assert result.max_fill_depth > 1.0

    def test_pits_skip_tiny_grids(self):
        from sinkfill.io.synthetic import generate_sample_dem

        flat = generate_sample_dem(shape=(4, 4), noise_scale=0.0, hill_height=0.0,
                                   pit_count=3)
        np.testing.assert_allclose(flat, 100.0)


@pytest.mark.requires_matplotlib
class TestVisualization:
    """Tests for fill report plotting."""

    @pytest.fixture(autouse=True)
    def _agg_backend(self):
        import matplotlib
        matplotlib.use("Agg")

    def test_plot_fill(self, pit_grid):
        from sinkfill import fill_depressions
        from sinkfill.utils.visualization import plot_fill

        result = fill_depressions(pit_grid, epsilon=0.5)
        fig = plot_fill(pit_grid, result)

        assert len(fig.axes) >= 3
        assert "Fill Depth (9 cells)" in [ax.get_title() for ax in fig.axes]

    def test_save_report(self, pit_grid, tmp_path):
        from sinkfill import fill_depressions
        from sinkfill.utils.visualization import plot_fill, save_report

        result = fill_depressions(pit_grid, epsilon=0.5)
        path = tmp_path / "report.png"
        save_report(plot_fill(pit_grid, result), str(path))

        assert path.exists()
        assert path.stat().st_size > 0

    def test_plot_grid_on_existing_axes(self, pit_grid):
        import matplotlib.pyplot as plt
        from sinkfill.utils.visualization import plot_grid

        fig, ax = plt.subplots()
        returned = plot_grid(pit_grid, ax=ax, title="DEM")

        assert returned is fig
        assert ax.get_title() == "DEM"
        plt.close(fig)
