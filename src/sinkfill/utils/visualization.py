"""
Visualization Utilities

Plotting functions for original, filled and fill-depth grids.
"""

from __future__ import annotations

from typing import Optional, Tuple, TYPE_CHECKING
import numpy as np

try:
    import matplotlib.pyplot as plt
    from matplotlib.colors import LinearSegmentedColormap
    HAS_MATPLOTLIB = True
except ImportError:
    HAS_MATPLOTLIB = False

if TYPE_CHECKING:
    from ..core.engine import FillResult


def require_matplotlib():
    if not HAS_MATPLOTLIB:
        raise ImportError("matplotlib is required. Install with: pip install matplotlib")


# White where nothing was filled, deepening blue with fill depth
FILL_DEPTH_COLORS = [
    (0.0, (0.97, 0.97, 0.97)),
    (0.3, (0.6, 0.8, 1.0)),
    (1.0, (0.1, 0.2, 0.7)),
]


def get_fill_depth_cmap():
    """Get the fill-depth colormap."""
    require_matplotlib()
    return LinearSegmentedColormap.from_list("fill_depth", FILL_DEPTH_COLORS)


def plot_grid(
    grid: np.ndarray,
    ax: Optional['plt.Axes'] = None,
    title: str = "Elevation",
    cmap: str = "terrain",
    label: str = "Elevation",
    vmin: Optional[float] = None,
    vmax: Optional[float] = None,
    figsize: Tuple[int, int] = (8, 6),
) -> 'plt.Figure':
    """
    Plot a 2D grid as a heatmap with a colorbar.

    Row 0 is drawn at the top, matching array order.
    """
    require_matplotlib()

    if ax is None:
        fig, ax = plt.subplots(figsize=figsize)
    else:
        fig = ax.figure

    im = ax.imshow(grid, origin='upper', cmap=cmap, vmin=vmin, vmax=vmax)
    plt.colorbar(im, ax=ax, label=label)

    ax.set_title(title)
    ax.set_xlabel('Column')
    ax.set_ylabel('Row')

    return fig


def plot_fill(
    elevations: np.ndarray,
    result: 'FillResult',
    figsize: Tuple[int, int] = (16, 5),
) -> 'plt.Figure':
    """
    Three-panel report: original DEM, filled DEM and fill depth.

    The two elevation panels share one color scale.
    """
    require_matplotlib()

    fig, axes = plt.subplots(1, 3, figsize=figsize)

    filled = result.filled
    depth = filled - elevations

    if elevations.size:
        vmin = float(np.nanmin(elevations))
        vmax = float(np.nanmax(filled))
    else:
        vmin = vmax = None

    plot_grid(elevations, ax=axes[0], title="Original DEM", vmin=vmin, vmax=vmax)
    plot_grid(filled, ax=axes[1], title="Filled DEM", vmin=vmin, vmax=vmax)
    plot_grid(
        depth,
        ax=axes[2],
        title=f"Fill Depth ({result.filled_cells:,} cells)",
        cmap=get_fill_depth_cmap(),
        label="Depth",
        vmin=0.0,
    )

    fig.suptitle(f"Sink fill, epsilon={result.epsilon:g}", fontsize=14)
    fig.tight_layout()

    return fig


def save_report(
    figure: 'plt.Figure',
    filepath: str,
    dpi: int = 150,
) -> None:
    """Save report figure to file."""
    require_matplotlib()
    try:
        figure.savefig(filepath, dpi=dpi, bbox_inches='tight')
    finally:
        plt.close(figure)
