"""
Cell Topology Module

Boundary classification and neighborhood lookups for a rectangular
elevation grid.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Tuple

import numpy as np

# Moore neighborhood, clockwise from north-west: NW, N, NE, E, SE, S, SW, W
NEIGHBOR_OFFSETS: Tuple[Tuple[int, int], ...] = (
    (-1, -1), (-1, 0), (-1, 1), (0, 1),
    (1, 1), (1, 0), (1, -1), (0, -1),
)


@dataclass(frozen=True)
class Cell:
    """A grid coordinate with its true elevation and boundary flag."""
    row: int
    col: int
    elevation: float
    is_boundary: bool


def is_boundary(row: int, col: int, rows: int, cols: int) -> bool:
    """True if (row, col) lies on the outer ring of a rows x cols grid."""
    return row == 0 or col == 0 or row == rows - 1 or col == cols - 1


def boundary_mask(shape: Tuple[int, int]) -> np.ndarray:
    """Boolean array marking the outer ring of a grid with the given shape."""
    rows, cols = shape
    mask = np.zeros((rows, cols), dtype=bool)
    if rows and cols:
        mask[0, :] = True
        mask[-1, :] = True
        mask[:, 0] = True
        mask[:, -1] = True
    return mask


class CellTopology:
    """
    Read-only view of an elevation grid in terms of cells.

    Elevations are copied once and frozen; cells are looked up by
    coordinate rather than stored individually.

    Attributes:
        elevations: Read-only float64 array of true elevations [rows, cols]
        boundary: Boolean array, True on the outer ring
    """

    def __init__(self, elevations: np.ndarray):
        grid = np.array(elevations, dtype=np.float64)
        grid.flags.writeable = False
        self.elevations = grid
        self.boundary = boundary_mask(grid.shape)
        self.boundary.flags.writeable = False

    @property
    def shape(self) -> Tuple[int, int]:
        """Grid dimensions (rows, cols)."""
        return self.elevations.shape

    @property
    def rows(self) -> int:
        return self.elevations.shape[0]

    @property
    def cols(self) -> int:
        return self.elevations.shape[1]

    def cell(self, row: int, col: int) -> Cell:
        """Cell record at (row, col)."""
        if not (0 <= row < self.rows and 0 <= col < self.cols):
            raise IndexError(
                f"Cell ({row}, {col}) outside grid of shape {self.shape}"
            )
        return Cell(
            row=row,
            col=col,
            elevation=float(self.elevations[row, col]),
            is_boundary=bool(self.boundary[row, col]),
        )

    def boundary_cells(self) -> Iterator[Cell]:
        """Boundary cells in row-major order."""
        for row, col in zip(*np.nonzero(self.boundary)):
            yield self.cell(int(row), int(col))

    def neighbors(self, row: int, col: int) -> Iterator[Tuple[int, int]]:
        """
        Neighbor coordinates eligible for relaxation from (row, col).

        Only coordinates with ``0 <= r < rows - 1`` and ``0 <= c < cols - 1``
        are yielded, so the last row and last column are never targets.
        Those cells are all boundary cells, which are resolved at seeding.
        """
        row_limit = self.rows - 1
        col_limit = self.cols - 1
        for d_row, d_col in NEIGHBOR_OFFSETS:
            next_row = row + d_row
            next_col = col + d_col
            if 0 <= next_row < row_limit and 0 <= next_col < col_limit:
                yield next_row, next_col
