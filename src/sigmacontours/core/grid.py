"""
Binned 2D scalar fields.

Contains:
- Axis: uniform binning of one parameter
- Grid: bin contents over an x/y axis pair
- add_boundary_bins: padding with one ring of minimum-valued bins
"""

from dataclasses import dataclass, field
from typing import Callable, Optional, Tuple

import numpy as np


@dataclass(frozen=True)
class Axis:
    """
    Uniform binning of one scan parameter.

    Attributes
    ----------
    n_bins : int
        Number of bins (>= 1).
    lo : float
        Lower edge of the first bin.
    hi : float
        Upper edge of the last bin.
    """
    n_bins: int
    lo: float
    hi: float

    @property
    def bin_width(self) -> float:
        return (self.hi - self.lo) / self.n_bins

    @property
    def edges(self) -> np.ndarray:
        return np.linspace(self.lo, self.hi, self.n_bins + 1)

    @property
    def centers(self) -> np.ndarray:
        return self.lo + (np.arange(self.n_bins) + 0.5) * self.bin_width

    def validate(self, name: str = "axis") -> None:
        if int(self.n_bins) != self.n_bins or self.n_bins < 1:
            raise ValueError(f"{name} needs at least 1 bin, got {self.n_bins}")
        if not np.isfinite(self.lo) or not np.isfinite(self.hi):
            raise ValueError(f"{name} range must be finite, got [{self.lo}, {self.hi}]")
        if not self.bin_width > 0:
            raise ValueError(
                f"{name} bin width must be positive, got {self.bin_width} "
                f"for range [{self.lo}, {self.hi}]"
            )

    def extended(self, n: int = 1) -> "Axis":
        """Axis with ``n`` extra bins of the same width on each side."""
        width = self.bin_width
        return Axis(self.n_bins + 2 * n, self.lo - n * width, self.hi + n * width)


@dataclass
class Grid:
    """
    Rectangular 2D histogram of a test statistic.

    Attributes
    ----------
    x_axis : Axis
        Binning of the first scan parameter.
    y_axis : Axis
        Binning of the second scan parameter.
    content : np.ndarray
        Bin contents of shape (nx, ny), indexed ``[ix, iy]``.
    name : str
        Free-form label used in log messages.
    """
    x_axis: Axis
    y_axis: Axis
    content: np.ndarray
    name: str = field(default="grid")

    def __post_init__(self):
        self.content = np.asarray(self.content, dtype=np.float64)

    @classmethod
    def from_function(
        cls,
        func: Callable[[np.ndarray, np.ndarray], np.ndarray],
        x_range: Tuple[float, float],
        y_range: Tuple[float, float],
        nx: int,
        ny: int,
        name: Optional[str] = None
    ) -> "Grid":
        """
        Sample ``func(x, y)`` at the bin centers of a new grid.

        ``func`` receives two broadcast arrays of shape (nx, ny) and must
        return an array of the same shape.
        """
        x_axis = Axis(nx, float(x_range[0]), float(x_range[1]))
        y_axis = Axis(ny, float(y_range[0]), float(y_range[1]))
        x_axis.validate("x axis")
        y_axis.validate("y axis")
        xx, yy = np.meshgrid(x_axis.centers, y_axis.centers, indexing='ij')
        content = np.asarray(func(xx, yy), dtype=np.float64)
        return cls(x_axis, y_axis, content, name=name or getattr(func, '__name__', 'grid'))

    @property
    def shape(self) -> Tuple[int, int]:
        return self.x_axis.n_bins, self.y_axis.n_bins

    def minimum(self) -> float:
        return float(np.min(self.content))

    def maximum(self) -> float:
        return float(np.max(self.content))

    def copy(self, name: Optional[str] = None) -> "Grid":
        return Grid(self.x_axis, self.y_axis, self.content.copy(), name=name or self.name)

    def validate(self) -> None:
        """
        Check the grid before any contour work is done on it.

        Raises
        ------
        ValueError
            If an axis has no bins or a non-positive bin width, if the
            content shape does not match the axes, or if any bin content
            is not finite.
        """
        self.x_axis.validate("x axis")
        self.y_axis.validate("y axis")
        if self.content.shape != self.shape:
            raise ValueError(
                f"Expected content of shape {self.shape}, got {self.content.shape}"
            )
        if not np.all(np.isfinite(self.content)):
            raise ValueError(f"Grid '{self.name}' contains non-finite bin contents")


def add_boundary_bins(grid: Grid) -> Grid:
    """
    Surround a grid with one ring of bins holding its minimum value.

    A level-set tracer only produces closed curves for regions that do not
    reach the edge of the data. With a ring of minimum-valued bins around
    the scan, every upper level set is enclosed, so all traced curves close
    even when the confidence region touches the scan boundary.

    Parameters
    ----------
    grid : Grid
        Source grid. Not modified.

    Returns
    -------
    Grid
        New grid of shape (nx + 2, ny + 2) whose axes extend one bin width
        past the source on each side. Interior bins equal the source bins
        shifted by one index.
    """
    grid.validate()
    boundary = grid.minimum()
    nx, ny = grid.shape

    content = np.full((nx + 2, ny + 2), boundary, dtype=np.float64)
    content[1:-1, 1:-1] = grid.content

    return Grid(
        grid.x_axis.extended(1),
        grid.y_axis.extended(1),
        content,
        name=f"{grid.name}_boundaries"
    )
