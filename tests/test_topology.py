"""
Tests for cell topology: boundary classification and neighbor lookups.
"""

import dataclasses

import numpy as np
import pytest

from sinkfill.core.topology import (
    Cell,
    CellTopology,
    NEIGHBOR_OFFSETS,
    boundary_mask,
    is_boundary,
)


class TestBoundary:
    """Tests for boundary ring detection."""

    def test_mask_matches_predicate(self):
        rows, cols = 5, 7
        mask = boundary_mask((rows, cols))

        for row in range(rows):
            for col in range(cols):
                assert mask[row, col] == is_boundary(row, col, rows, cols)

    def test_ring_count(self):
        assert boundary_mask((5, 7)).sum() == 2 * 5 + 2 * 7 - 4

    def test_small_grids_are_all_boundary(self):
        assert boundary_mask((1, 4)).all()
        assert boundary_mask((2, 2)).all()
        assert boundary_mask((3, 3)).sum() == 8

    def test_empty_shape(self):
        assert boundary_mask((0, 0)).shape == (0, 0)
        assert boundary_mask((0, 3)).size == 0


class TestCellTopology:
    """Tests for the CellTopology view."""

    def test_shape(self, pit_grid):
        topology = CellTopology(pit_grid)
        assert topology.shape == (5, 5)
        assert topology.rows == 5
        assert topology.cols == 5

    def test_elevations_are_read_only_copy(self, pit_grid):
        topology = CellTopology(pit_grid)

        with pytest.raises(ValueError):
            topology.elevations[0, 0] = 1.0

        pit_grid[2, 2] = -1.0
        assert topology.elevations[2, 2] == 1.0

    def test_cell_record(self, pit_grid):
        topology = CellTopology(pit_grid)

        corner = topology.cell(0, 0)
        assert corner == Cell(row=0, col=0, elevation=100.0, is_boundary=True)

        centre = topology.cell(2, 2)
        assert centre.elevation == 1.0
        assert not centre.is_boundary

    def test_cell_is_immutable(self, pit_grid):
        cell = CellTopology(pit_grid).cell(1, 1)
        with pytest.raises(dataclasses.FrozenInstanceError):
            cell.elevation = 50.0

    def test_cell_out_of_range(self, pit_grid):
        topology = CellTopology(pit_grid)
        with pytest.raises(IndexError):
            topology.cell(5, 0)
        with pytest.raises(IndexError):
            topology.cell(0, -1)

    def test_boundary_cells_row_major(self):
        topology = CellTopology(np.zeros((3, 4)))
        coords = [(c.row, c.col) for c in topology.boundary_cells()]

        assert coords == [
            (0, 0), (0, 1), (0, 2), (0, 3),
            (1, 0), (1, 3),
            (2, 0), (2, 1), (2, 2), (2, 3),
        ]
        assert all(c.is_boundary for c in topology.boundary_cells())


class TestNeighbors:
    """Neighbors are Moore offsets limited to ``0 <= next < dim - 1``."""

    def test_offsets_clockwise_from_north_west(self):
        assert len(NEIGHBOR_OFFSETS) == 8
        assert NEIGHBOR_OFFSETS[0] == (-1, -1)
        assert NEIGHBOR_OFFSETS[-1] == (0, -1)
        assert (0, 0) not in NEIGHBOR_OFFSETS

    def test_interior_cell_has_eight(self):
        topology = CellTopology(np.zeros((5, 5)))
        assert list(topology.neighbors(2, 2)) == [
            (1, 1), (1, 2), (1, 3), (2, 3),
            (3, 3), (3, 2), (3, 1), (2, 1),
        ]

    def test_origin_corner(self):
        topology = CellTopology(np.zeros((5, 5)))
        assert list(topology.neighbors(0, 0)) == [(0, 1), (1, 1), (1, 0)]

    def test_last_row_and_column_never_yielded(self):
        topology = CellTopology(np.zeros((5, 5)))
        assert list(topology.neighbors(3, 3)) == [(2, 2), (2, 3), (3, 2)]

        for row in range(5):
            for col in range(5):
                for n_row, n_col in topology.neighbors(row, col):
                    assert n_row < 4
                    assert n_col < 4

    def test_excluded_targets_are_boundary(self):
        """Everything the window drops lies on the boundary ring."""
        topology = CellTopology(np.zeros((6, 4)))
        rows, cols = topology.shape

        for row in range(rows):
            for col in range(cols):
                window = set(topology.neighbors(row, col))
                for d_row, d_col in NEIGHBOR_OFFSETS:
                    r, c = row + d_row, col + d_col
                    if 0 <= r < rows and 0 <= c < cols and (r, c) not in window:
                        assert topology.boundary[r, c]
