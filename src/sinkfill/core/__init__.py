"""Core data structures and algorithms."""

from .topology import Cell, CellTopology
from .engine import PriorityFloodEngine, FillResult, FillStats, fill_depressions

__all__ = [
    "Cell",
    "CellTopology",
    "PriorityFloodEngine",
    "FillResult",
    "FillStats",
    "fill_depressions",
]
