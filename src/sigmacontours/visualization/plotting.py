"""
Visualization utilities for confidence contour plotting.
"""

from typing import Optional, TYPE_CHECKING

import numpy as np
import matplotlib.pyplot as plt

from ..core.grid import Grid
from ..surfaces.levels import SurfaceType

if TYPE_CHECKING:
    from ..contours.confidence import ConfidenceContours


def best_fit_point(grid: Grid, surface_type: SurfaceType) -> np.ndarray:
    """Bin center of the minimum chi2 or maximum p-value."""
    if surface_type is SurfaceType.CHI2:
        flat_index = np.argmin(grid.content)
    else:
        flat_index = np.argmax(grid.content)
    ix, iy = np.unravel_index(flat_index, grid.shape)
    return np.array([grid.x_axis.centers[ix], grid.y_axis.centers[iy]])


def plot_confidence_contours(
    grid: Grid,
    contours: "ConfidenceContours",
    surface_type: SurfaceType,
    ax: Optional[plt.Axes] = None,
    show_surface: bool = True,
    show_best_fit: bool = True,
    dashed: bool = False,
    xlabel: str = 'x',
    ylabel: str = 'y',
    title: Optional[str] = None
) -> plt.Axes:
    """
    Visualize a scan together with its sigma contours.

    Parameters
    ----------
    grid : Grid
        The scanned surface.
    contours : ConfidenceContours
        Contours computed from ``grid``, with styles set.
    surface_type : SurfaceType
        Kind of surface, used for the color bar label and best fit marker.
    ax : plt.Axes, optional
        Matplotlib axes to plot on. Creates new figure if None.
    show_surface : bool
        Whether to draw the surface as a color map underneath.
    show_best_fit : bool
        Whether to mark the best fit bin.
    dashed : bool
        Draw dashed outlines only instead of filled regions.
    xlabel, ylabel : str
        Axis labels.
    title : str, optional
        Plot title. Defaults to the grid name.

    Returns
    -------
    plt.Axes
        The matplotlib axes object.
    """
    if ax is None:
        fig, ax = plt.subplots(1, 1, figsize=(8, 8))

    if show_surface:
        mesh = ax.pcolormesh(
            grid.x_axis.edges, grid.y_axis.edges, grid.content.T,
            cmap='Greys' if surface_type is SurfaceType.CHI2 else 'Greys_r',
            alpha=0.4, zorder=0
        )
        colorbar = ax.figure.colorbar(mesh, ax=ax)
        colorbar.set_label('$\\chi^2$' if surface_type is SurfaceType.CHI2 else 'p-value')

    if dashed:
        contours.draw_dashed_line(ax)
    else:
        contours.draw(ax)

    if show_best_fit:
        best = best_fit_point(grid, surface_type)
        ax.scatter([best[0]], [best[1]], c='black', s=120, marker='*', zorder=5, label='Best fit')

    ax.set_xlim(grid.x_axis.lo, grid.x_axis.hi)
    ax.set_ylim(grid.y_axis.lo, grid.y_axis.hi)
    ax.set_xlabel(xlabel)
    ax.set_ylabel(ylabel)
    ax.set_title(title if title is not None else grid.name)
    if ax.get_legend_handles_labels()[0]:
        ax.legend(loc='upper right')

    return ax
