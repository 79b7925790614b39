"""
sigmacontours - N-sigma confidence contours from 2D test-statistic scans.

This package extracts the 1..5 sigma confidence regions of a chi2 or
p-value surface scanned over two parameters:
- Chi2 valleys are turned into hills so sigma regions are upper level sets
- The surface is padded with minimum-valued bins so every contour closes
- The five sigma levels are traced in one pass with matplotlib
- Traced ring sets are labelled with their sigma values

Main Classes
------------
Grid : Binned 2D scan of a test statistic
ConfidenceContours : Computes and draws the sigma contours of a grid
ContourOptions : Settings of a contour computation
Contour : Region of one sigma level

Example
-------
>>> import numpy as np
>>> from sigmacontours import Grid, ConfidenceContours, ContourOptions, SurfaceType

>>> grid = Grid.from_function(lambda x, y: x**2 + y**2, (-6, 6), (-6, 6), 60, 60)
>>> cc = ConfidenceContours(ContourOptions(n_sigma_contours=3))
>>> contours = cc.compute_contours(grid, SurfaceType.CHI2)
>>> [c.sigma for c in contours]
[1, 2, 3, 4, 5]
"""

from .core.grid import Axis, Grid, add_boundary_bins
from .core.geometry import contains, polygon_area
from .surfaces.levels import (
    N_SIGMA_LEVELS,
    CHI2_OFFSET,
    SurfaceType,
    sigma_thresholds,
    contour_levels,
)
from .surfaces.transform import transform_chi2_valley_to_hill
from .contours.tracer import non_interactive, trace_levels, pack_ring_sets, extract_ring_sets
from .contours.contour import Contour
from .contours.assign import assign_sigmas
from .contours.confidence import ContourOptions, ConfidenceContours
from .visualization.style import ContourStyle, build_styles
from .visualization.plotting import plot_confidence_contours
from .logging_config import setup_logging

__all__ = [
    # Grid
    'Axis',
    'Grid',
    'add_boundary_bins',
    # Geometry
    'contains',
    'polygon_area',
    # Surfaces
    'N_SIGMA_LEVELS',
    'CHI2_OFFSET',
    'SurfaceType',
    'sigma_thresholds',
    'contour_levels',
    'transform_chi2_valley_to_hill',
    # Contours
    'non_interactive',
    'trace_levels',
    'pack_ring_sets',
    'extract_ring_sets',
    'Contour',
    'assign_sigmas',
    'ContourOptions',
    'ConfidenceContours',
    # Visualization
    'ContourStyle',
    'build_styles',
    'plot_confidence_contours',
    # Logging
    'setup_logging',
]
