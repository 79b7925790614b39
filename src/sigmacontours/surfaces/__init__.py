"""
Test-statistic surfaces and their confidence levels.
"""

from .levels import (
    N_SIGMA_LEVELS,
    CHI2_OFFSET,
    SurfaceType,
    sigma_thresholds,
    contour_levels,
    sigma_for_level_index,
    sigma_to_pvalue,
    delta_chi2_for_sigma,
)
from .transform import transform_chi2_valley_to_hill, prepare_surface

__all__ = [
    'N_SIGMA_LEVELS',
    'CHI2_OFFSET',
    'SurfaceType',
    'sigma_thresholds',
    'contour_levels',
    'sigma_for_level_index',
    'sigma_to_pvalue',
    'delta_chi2_for_sigma',
    'transform_chi2_valley_to_hill',
    'prepare_surface',
]
