"""
DEM Sink Filling Tool

A Python library for removing depressions from digital elevation
models with the Planchon-Darboux priority-flood algorithm, so that
every cell drains to the grid edge.
"""

__version__ = "0.1.0"

from .core.topology import Cell, CellTopology
from .core.engine import PriorityFloodEngine, FillResult, FillStats, fill_depressions
from .io.grid_file import load_grid, save_grid, grid_max

__all__ = [
    "Cell",
    "CellTopology",
    "PriorityFloodEngine",
    "FillResult",
    "FillStats",
    "fill_depressions",
    "load_grid",
    "save_grid",
    "grid_max",
]
