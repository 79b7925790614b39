"""
Contour Module

A ``Contour`` holds the closed rings traced at one confidence level, the
sigma value assigned to them and the style they are drawn with. Rings
nested inside other rings of the same level are holes of the region.
"""

from typing import List, Optional, Sequence

import numpy as np
import matplotlib.pyplot as plt
from matplotlib.patches import PathPatch
from matplotlib.path import Path
from shapely.geometry import MultiPolygon

from ..core.geometry import (
    close_ring,
    contains,
    ensure_ccw,
    is_closed,
    rings_to_geometry,
)
from ..core.grid import Grid
from ..surfaces.levels import N_SIGMA_LEVELS
from ..visualization.style import ContourStyle


def _polygon_path(geometry: MultiPolygon) -> Path:
    """Compound path of a multipolygon, holes wound opposite to shells."""
    vertices = []
    codes = []
    for poly in geometry.geoms:
        shell = ensure_ccw(np.asarray(poly.exterior.coords))
        holes = [ensure_ccw(np.asarray(h.coords))[::-1] for h in poly.interiors]
        for ring in [shell] + holes:
            ring = close_ring(ring)
            vertices.append(ring)
            ring_codes = np.full(len(ring), Path.LINETO, dtype=Path.code_type)
            ring_codes[0] = Path.MOVETO
            ring_codes[-1] = Path.CLOSEPOLY
            codes.append(ring_codes)
    return Path(np.concatenate(vertices), np.concatenate(codes))


class Contour:
    """
    Confidence region of one sigma level.

    Parameters
    ----------
    rings : sequence of np.ndarray
        Rings of shape (M, 2) traced at the level. Open rings are closed.
    sigma : int, optional
        Confidence level in units of standard deviations (1..5).
    style : ContourStyle, optional
        Drawing style. Defaults to a black outline without fill.
    """

    def __init__(
        self,
        rings: Sequence[np.ndarray],
        sigma: Optional[int] = None,
        style: Optional[ContourStyle] = None
    ):
        rings = [close_ring(np.array(r, dtype=np.float64)) for r in rings if len(r)]
        if not rings:
            raise ValueError("A contour needs at least one ring")

        for ring in rings:
            if ring.ndim != 2 or ring.shape[1] != 2:
                raise ValueError(f"Expected rings of shape (M, 2), got {ring.shape}")

        self._rings = rings
        self._geometry = None
        self._sigma = None
        if sigma is not None:
            self.set_sigma(sigma)
        self.style = style or ContourStyle()

    def __repr__(self) -> str:
        return f"Contour(sigma={self._sigma}, rings={len(self._rings)}, area={self.area:.4g})"

    @property
    def sigma(self) -> Optional[int]:
        return self._sigma

    def set_sigma(self, sigma: int) -> None:
        if not 1 <= sigma <= N_SIGMA_LEVELS:
            raise ValueError(f"sigma must be in [1, {N_SIGMA_LEVELS}], got {sigma}")
        self._sigma = int(sigma)

    @property
    def rings(self) -> List[np.ndarray]:
        return [ring.copy() for ring in self._rings]

    @property
    def geometry(self) -> MultiPolygon:
        """Region enclosed by the rings, holes resolved by nesting."""
        if self._geometry is None:
            self._geometry = rings_to_geometry(self._rings)
        return self._geometry

    @property
    def area(self) -> float:
        return float(self.geometry.area)

    @property
    def is_closed(self) -> bool:
        return all(is_closed(ring) for ring in self._rings)

    def contains(self, points: np.ndarray) -> np.ndarray:
        """Boolean mask of the points lying inside or on the region."""
        return contains(self.geometry, points)

    def set_style(
        self,
        line_color: str,
        line_style: str,
        line_width: float,
        fill_color: Optional[str],
        fill_style: str
    ) -> None:
        self.style = ContourStyle(line_color, line_style, line_width, fill_color, fill_style)

    def magnetic_boundaries(self, grid: Grid, magnetic_range: float = 1.0) -> None:
        """
        Snap ring points onto the edges of the scanned range.

        Boundary padding lets a region that reaches the scan edge close up to
        one bin outside the scanned range. Points closer than
        ``magnetic_range`` bin widths to an edge, or beyond it, are moved onto
        the edge so the drawn region ends at the scan boundary.

        Parameters
        ----------
        grid : Grid
            The original, unpadded grid.
        magnetic_range : float
            Capture distance in units of bin width.
        """
        grid.validate()
        x_axis, y_axis = grid.x_axis, grid.y_axis
        dx = magnetic_range * x_axis.bin_width
        dy = magnetic_range * y_axis.bin_width

        snapped = []
        for ring in self._rings:
            ring = ring.copy()
            x = ring[:, 0]
            y = ring[:, 1]
            x[x < x_axis.lo + dx] = x_axis.lo
            x[x > x_axis.hi - dx] = x_axis.hi
            y[y < y_axis.lo + dy] = y_axis.lo
            y[y > y_axis.hi - dy] = y_axis.hi
            snapped.append(ring)

        self._rings = snapped
        self._geometry = None

    def draw(self, ax: Optional[plt.Axes] = None) -> plt.Axes:
        """
        Draw the filled region and its outline.

        Parameters
        ----------
        ax : plt.Axes, optional
            Matplotlib axes to draw on. Uses the current axes if None.

        Returns
        -------
        plt.Axes
            The matplotlib axes object.
        """
        if ax is None:
            ax = plt.gca()

        style = self.style
        if style.fill_color is not None and not self.geometry.is_empty:
            patch = PathPatch(
                _polygon_path(self.geometry),
                facecolor=style.fill_color,
                edgecolor='none',
                hatch=style.fill_style or None,
                zorder=1
            )
            ax.add_patch(patch)

        return self.draw_line(ax)

    def draw_line(self, ax: Optional[plt.Axes] = None) -> plt.Axes:
        """Draw the outline of every ring, without fill."""
        if ax is None:
            ax = plt.gca()

        style = self.style
        label = f"{self._sigma}$\\sigma$" if self._sigma is not None else None
        for ring in self._rings:
            ax.plot(
                ring[:, 0], ring[:, 1],
                color=style.line_color,
                linestyle=style.line_style,
                linewidth=style.line_width,
                label=label,
                zorder=2
            )
            # One legend entry per contour
            label = None

        return ax
