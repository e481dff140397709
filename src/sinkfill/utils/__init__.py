"""Utility modules."""

from .visualization import plot_grid, plot_fill, save_report

__all__ = ["plot_grid", "plot_fill", "save_report"]
