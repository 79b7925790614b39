"""
Confidence Contours Module

Computes the 1..5 sigma confidence regions of a two-dimensional chi2 or
p-value scan and draws them:
1. Turns a chi2 valley into a hill (p-values are hills already)
2. Pads the surface with one ring of minimum-valued bins
3. Traces the five sigma levels in a single pass
4. Labels the traced ring sets with their sigma values
5. Optionally snaps contour points onto the scan boundary
"""

from dataclasses import dataclass
import logging
from typing import Iterator, List, Optional, Sequence

import matplotlib.pyplot as plt

from ..core.grid import Grid, add_boundary_bins
from ..surfaces.levels import CHI2_OFFSET, N_SIGMA_LEVELS, SurfaceType
from ..surfaces.transform import prepare_surface
from ..visualization.style import ContourStyle, build_styles
from .assign import assign_sigmas
from .contour import Contour
from .tracer import extract_ring_sets

logger = logging.getLogger(__name__)


@dataclass
class ContourOptions:
    """
    Settings of a contour computation.

    Attributes
    ----------
    debug : bool
        Report each computation at INFO level.
    use_2d_levels : bool
        Use delta chi2 thresholds for two degrees of freedom.
    magnetic : bool
        Snap contour points near the scan boundary onto it.
    n_sigma_contours : int
        Number of sigma contours drawn, starting at 1 sigma.
    offset : float
        Content of the best fit bin after the valley-to-hill transformation.
    packed_levels : bool
        Label contours with the packed-order convention of tracers that
        compact their output, instead of by level index.
    """
    debug: bool = False
    use_2d_levels: bool = False
    magnetic: bool = False
    n_sigma_contours: int = 2
    offset: float = CHI2_OFFSET
    packed_levels: bool = False

    def __post_init__(self):
        if not 1 <= self.n_sigma_contours <= N_SIGMA_LEVELS:
            raise ValueError(
                f"n_sigma_contours must be in [1, {N_SIGMA_LEVELS}], got {self.n_sigma_contours}"
            )
        if not self.offset > 0:
            raise ValueError(f"offset must be positive, got {self.offset}")


class ConfidenceContours:
    """
    Sigma contours of one scan, ready to be drawn.

    Parameters
    ----------
    options : ContourOptions, optional
        Computation and drawing settings.
    """

    def __init__(self, options: Optional[ContourOptions] = None):
        self.options = options or ContourOptions()
        self._contours: List[Contour] = []
        self._styles: List[ContourStyle] = []

    def __len__(self) -> int:
        return len(self._contours)

    def __iter__(self) -> Iterator[Contour]:
        return iter(self._contours)

    def __getitem__(self, index: int) -> Contour:
        return self._contours[index]

    @property
    def contours(self) -> List[Contour]:
        return list(self._contours)

    @property
    def styles(self) -> List[ContourStyle]:
        return list(self._styles)

    def contour_for_sigma(self, sigma: int) -> Contour:
        for contour in self._contours:
            if contour.sigma == sigma:
                return contour
        raise KeyError(f"No {sigma} sigma contour was computed")

    def compute_contours(self, grid: Grid, surface_type: SurfaceType) -> List[Contour]:
        """
        Compute the raw sigma contours of a chi2 or p-value surface.

        Any contours from a previous call are discarded first.

        Parameters
        ----------
        grid : Grid
            The scan. Not modified.
        surface_type : SurfaceType
            Whether the grid holds chi2 or p-values.

        Returns
        -------
        list of Contour
            Tightest level first. Empty if no level crosses the surface.
        """
        self._contours = []

        if not isinstance(surface_type, SurfaceType):
            raise ValueError(f"Unknown surface type: {surface_type!r}")

        grid.validate()

        if self.options.debug:
            logger.info(
                "Making contours of grid '%s', type %s", grid.name, surface_type.value
            )

        hill = prepare_surface(grid, surface_type, offset=self.options.offset)
        padded = add_boundary_bins(hill)

        ring_sets = extract_ring_sets(
            padded,
            surface_type,
            use_2d_levels=self.options.use_2d_levels,
            offset=self.options.offset,
            packed=self.options.packed_levels
        )
        contours = assign_sigmas(ring_sets, packed=self.options.packed_levels)

        if self.options.magnetic:
            for contour in sorted(contours, key=lambda c: c.sigma, reverse=True):
                contour.magnetic_boundaries(grid)

        if self.options.debug:
            logger.info(
                "Found %d contours with sigma %s",
                len(contours), [c.sigma for c in contours]
            )

        self._contours = contours
        return self.contours

    def set_style(
        self,
        line_colors: Sequence,
        line_styles: Sequence,
        fill_colors: Sequence,
        fill_styles: Sequence
    ) -> None:
        """
        Set the contour styles, one entry per sigma level.

        Missing entries for the requested number of contours repeat the last
        given style. Every level is drawn with line width 2.
        """
        self._styles = build_styles(
            line_colors,
            line_styles,
            fill_colors,
            fill_styles,
            n_contours=self.options.n_sigma_contours
        )

    def _drawable(self) -> List[int]:
        n = self.options.n_sigma_contours
        if not self._contours:
            return []
        if n > len(self._contours):
            raise IndexError(
                f"Requested {n} sigma contours but only {len(self._contours)} were computed"
            )
        if len(self._styles) < n:
            raise RuntimeError("set_style() must be called before drawing contours")
        return list(range(n - 1, -1, -1))

    def draw(self, ax: Optional[plt.Axes] = None) -> plt.Axes:
        """
        Draw the filled contours, widest first.

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

        for i in self._drawable():
            self._contours[i].style = self._styles[i]
            self._contours[i].draw(ax)

        return ax

    def draw_dashed_line(self, ax: Optional[plt.Axes] = None) -> plt.Axes:
        """Draw the contour outlines as dashed lines, without fill."""
        if ax is None:
            ax = plt.gca()

        for i in self._drawable():
            self._contours[i].style = self._styles[i].outline_only('dashed')
            self._contours[i].draw_line(ax)

        return ax
