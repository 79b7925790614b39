"""
Confidence level thresholds.

Sigma levels are traced as upper level sets of a "hill" surface. Tracer
level index ``i`` belongs to sigma ``N_SIGMA_LEVELS - i``, so the levels
handed to the tracer are ascending: the loosest (5 sigma) level comes first.
"""

from enum import Enum
from typing import Dict

import numpy as np
from scipy.stats import chi2, norm


N_SIGMA_LEVELS = 5

# Shift applied when turning a chi2 valley into a hill
CHI2_OFFSET = 30.0

# Delta chi2 per sigma, one parameter of interest
CHI2_DELTA_1D: Dict[int, float] = {1: 1.0, 2: 4.0, 3: 9.0, 4: 16.0, 5: 25.0}

# Delta chi2 per sigma, two parameters of interest
CHI2_DELTA_2D: Dict[int, float] = {1: 2.30, 2: 6.18, 3: 11.83, 4: 19.34, 5: 28.76}

# Two-sided tail probability per sigma
PVALUE_THRESHOLDS: Dict[int, float] = {1: 0.3173, 2: 4.55e-2, 3: 2.7e-3, 4: 6.3e-5, 5: 5.7e-7}


class SurfaceType(Enum):
    """Kind of test statistic held by a grid."""
    CHI2 = "chi2"
    PVALUE = "p-value"


def sigma_thresholds(
    surface_type: SurfaceType,
    use_2d_levels: bool = False
) -> Dict[int, float]:
    """
    Threshold per sigma level in the units of the untransformed surface.

    Parameters
    ----------
    surface_type : SurfaceType
        Kind of test statistic.
    use_2d_levels : bool
        For chi2 surfaces, use the two-degrees-of-freedom delta chi2 values
        instead of the one-dimensional ones. Ignored for p-values.

    Returns
    -------
    dict
        Mapping sigma (1..5) to delta chi2 or p-value.
    """
    if surface_type is SurfaceType.CHI2:
        return dict(CHI2_DELTA_2D if use_2d_levels else CHI2_DELTA_1D)
    if surface_type is SurfaceType.PVALUE:
        return dict(PVALUE_THRESHOLDS)
    raise ValueError(f"Unknown surface type: {surface_type!r}")


def contour_levels(
    surface_type: SurfaceType,
    use_2d_levels: bool = False,
    offset: float = CHI2_OFFSET
) -> np.ndarray:
    """
    Tracer levels for the five sigma contours, ascending.

    For chi2 surfaces the levels live on the transformed hill, i.e. they are
    ``offset - delta_chi2``. P-value thresholds are used as they are.

    Returns
    -------
    np.ndarray
        Array of shape (5,); element ``i`` is the level of sigma ``5 - i``.
    """
    thresholds = sigma_thresholds(surface_type, use_2d_levels)
    sigmas = range(N_SIGMA_LEVELS, 0, -1)
    if surface_type is SurfaceType.CHI2:
        levels = [offset - thresholds[s] for s in sigmas]
    else:
        levels = [thresholds[s] for s in sigmas]
    return np.asarray(levels, dtype=np.float64)


def sigma_for_level_index(index: int) -> int:
    """Sigma value of tracer level ``index``."""
    if not 0 <= index < N_SIGMA_LEVELS:
        raise ValueError(f"Level index must be in [0, {N_SIGMA_LEVELS}), got {index}")
    return N_SIGMA_LEVELS - index


def sigma_to_pvalue(sigma: float) -> float:
    """Two-sided Gaussian tail probability of a deviation of ``sigma``."""
    return float(2.0 * norm.sf(sigma))


def delta_chi2_for_sigma(sigma: float, ndof: int = 1) -> float:
    """
    Delta chi2 enclosing the same probability as ``sigma`` standard deviations.

    The threshold tables are rounded versions of this for ``ndof`` 1 and 2.
    """
    if ndof < 1:
        raise ValueError(f"ndof must be at least 1, got {ndof}")
    return float(chi2.isf(sigma_to_pvalue(sigma), ndof))
