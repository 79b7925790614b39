"""
Surface preparation before level-set tracing.
"""

from ..core.grid import Grid
from .levels import CHI2_OFFSET, SurfaceType


def transform_chi2_valley_to_hill(grid: Grid, offset: float = CHI2_OFFSET) -> Grid:
    """
    Turn a chi2 valley into a hill.

    Every bin content ``v`` becomes ``offset + chi2min - v``: the best fit
    point becomes the global maximum with content ``offset`` and the sigma
    regions become upper level sets.

    Parameters
    ----------
    grid : Grid
        Chi2 surface. Not modified.
    offset : float
        Content of the best fit bin after the transformation.

    Returns
    -------
    Grid
        Transformed copy of the grid.
    """
    chi2min = grid.minimum()
    hill = grid.copy(name=f"{grid.name}_hill")
    hill.content = offset + chi2min - grid.content
    return hill


def prepare_surface(grid: Grid, surface_type: SurfaceType, offset: float = CHI2_OFFSET) -> Grid:
    """
    Bring a surface into hill shape.

    P-value surfaces are already hill shaped and are returned as a copy.
    """
    if surface_type is SurfaceType.CHI2:
        return transform_chi2_valley_to_hill(grid, offset)
    if surface_type is SurfaceType.PVALUE:
        return grid.copy()
    raise ValueError(f"Unknown surface type: {surface_type!r}")
