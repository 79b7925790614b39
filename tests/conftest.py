"""
Shared fixtures: synthetic chi2 and p-value scans.
"""

import matplotlib
matplotlib.use("Agg")

import numpy as np
import pytest
import matplotlib.pyplot as plt

from sigmacontours import Grid


@pytest.fixture(autouse=True)
def close_figures():
    yield
    plt.close('all')


@pytest.fixture
def chi2_bowl():
    """Circular chi2 minimum at the origin; the 5 sigma region fits inside."""
    return Grid.from_function(
        lambda x, y: x**2 + y**2, (-6.0, 6.0), (-6.0, 6.0), 60, 60, name="bowl"
    )


@pytest.fixture
def chi2_edge_bowl():
    """Circular chi2 minimum sitting on the right edge of the scan."""
    return Grid.from_function(
        lambda x, y: (x - 6.0)**2 + y**2, (0.0, 6.0), (-6.0, 6.0), 30, 60, name="edge_bowl"
    )


@pytest.fixture
def chi2_small_bowl():
    """Scan too small to reach the 4 and 5 sigma levels."""
    return Grid.from_function(
        lambda x, y: x**2 + y**2, (-2.5, 2.5), (-2.5, 2.5), 50, 50, name="small_bowl"
    )


@pytest.fixture
def pvalue_gaussian():
    """P-value of a two-dimensional Gaussian, 1 at the origin."""
    return Grid.from_function(
        lambda x, y: np.exp(-(x**2 + y**2) / 2.0), (-7.0, 7.0), (-7.0, 7.0), 70, 70, name="pvalue"
    )


@pytest.fixture
def pvalue_weak():
    """P-value surface peaking at 0.01 and never dropping to 2.7e-3."""
    return Grid.from_function(
        lambda x, y: 0.005 + 0.005 * np.exp(-(x**2 + y**2) / 2.0),
        (-5.0, 5.0), (-5.0, 5.0), 50, 50, name="pvalue_weak"
    )


@pytest.fixture
def square_ring():
    return np.array([[0, 0], [1, 0], [1, 1], [0, 1], [0, 0]], dtype=float)
