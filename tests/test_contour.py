"""
Unit tests for the Contour class.
"""

import numpy as np
import pytest
import matplotlib.pyplot as plt

from sigmacontours.contours.contour import Contour
from sigmacontours.core.grid import Axis, Grid
from sigmacontours.visualization.style import ContourStyle


def _square(x0, y0, size):
    return np.array([
        [x0, y0], [x0 + size, y0], [x0 + size, y0 + size], [x0, y0 + size], [x0, y0]
    ], dtype=float)


class TestContourConstruction:

    def test_needs_rings(self):
        with pytest.raises(ValueError, match="at least one ring"):
            Contour([])

    def test_bad_ring_shape(self):
        with pytest.raises(ValueError, match="shape"):
            Contour([np.zeros((4, 3))])

    def test_open_rings_closed(self):
        contour = Contour([_square(0, 0, 1)[:-1]])
        assert contour.is_closed

    def test_sigma_range(self, square_ring):
        contour = Contour([square_ring], sigma=3)
        assert contour.sigma == 3
        with pytest.raises(ValueError, match="sigma"):
            contour.set_sigma(6)
        with pytest.raises(ValueError, match="sigma"):
            Contour([square_ring], sigma=0)

    def test_rings_are_copies(self, square_ring):
        contour = Contour([square_ring])
        contour.rings[0][0, 0] = 99.0
        assert contour.rings[0][0, 0] == 0.0


class TestContourGeometry:

    def test_area_with_hole(self):
        contour = Contour([_square(0, 0, 4), _square(1, 1, 2)])
        assert contour.area == pytest.approx(12.0)

    def test_contains(self):
        contour = Contour([_square(0, 0, 4), _square(1, 1, 2)])
        mask = contour.contains(np.array([[0.5, 0.5], [2.0, 2.0], [9.0, 9.0]]))
        np.testing.assert_array_equal(mask, [True, False, False])


class TestMagneticBoundaries:
    """Tests for Contour.magnetic_boundaries()."""

    @pytest.fixture
    def grid(self):
        return Grid(Axis(10, 0.0, 10.0), Axis(10, 0.0, 10.0), np.zeros((10, 10)))

    def test_points_near_edge_snap(self, grid):
        """Points within one bin width of an edge move onto it."""
        ring = np.array([[0.6, 2.0], [5.0, 2.0], [5.0, 9.5], [0.6, 9.5], [0.6, 2.0]])
        contour = Contour([ring])
        contour.magnetic_boundaries(grid)
        snapped = contour.rings[0]
        np.testing.assert_allclose(snapped[:, 0], [0.0, 5.0, 5.0, 0.0, 0.0])
        np.testing.assert_allclose(snapped[:, 1], [2.0, 2.0, 10.0, 10.0, 2.0])

    def test_points_outside_clamped(self, grid):
        """Points beyond the scan range end up on its edge."""
        ring = np.array([[-0.5, 3.0], [4.0, 3.0], [4.0, 10.4], [-0.5, 10.4], [-0.5, 3.0]])
        contour = Contour([ring])
        contour.magnetic_boundaries(grid)
        snapped = contour.rings[0]
        assert snapped[:, 0].min() == 0.0
        assert snapped[:, 1].max() == 10.0

    def test_interior_points_unchanged(self, grid):
        ring = _square(3, 3, 2)
        contour = Contour([ring])
        contour.magnetic_boundaries(grid)
        np.testing.assert_array_equal(contour.rings[0], ring)

    def test_magnetic_range(self, grid):
        ring = _square(1.5, 1.5, 7)
        contour = Contour([ring])
        contour.magnetic_boundaries(grid, magnetic_range=2.0)
        np.testing.assert_array_equal(contour.rings[0], _square(0, 0, 10))

    def test_geometry_refreshed(self, grid):
        contour = Contour([_square(0.5, 0.5, 9)])
        assert contour.area == pytest.approx(81.0)
        contour.magnetic_boundaries(grid)
        assert contour.area == pytest.approx(100.0)


class TestContourDrawing:

    def test_draw_fill_and_outline(self, square_ring):
        contour = Contour([square_ring], sigma=1)
        contour.set_style('red', 'solid', 2.0, 'pink', '')
        fig, ax = plt.subplots()
        contour.draw(ax)
        assert len(ax.patches) == 1
        assert len(ax.lines) == 1
        assert ax.lines[0].get_linewidth() == 2.0
        assert ax.lines[0].get_label() == "1$\\sigma$"

    def test_draw_without_fill(self, square_ring):
        contour = Contour([square_ring], style=ContourStyle(fill_color=None))
        fig, ax = plt.subplots()
        contour.draw(ax)
        assert len(ax.patches) == 0
        assert len(ax.lines) == 1

    def test_draw_line_only(self):
        contour = Contour([_square(0, 0, 4), _square(1, 1, 2)], sigma=2)
        contour.style = ContourStyle('blue', 'dashed', 1.0, 'cyan', '//')
        fig, ax = plt.subplots()
        contour.draw_line(ax)
        assert len(ax.patches) == 0
        assert len(ax.lines) == 2
        # Only the first ring carries the legend label
        assert ax.lines[1].get_label().startswith('_')

    def test_hatched_fill(self, square_ring):
        contour = Contour([square_ring], style=ContourStyle(fill_color='grey', fill_style='//'))
        fig, ax = plt.subplots()
        contour.draw(ax)
        assert ax.patches[0].get_hatch() == '//'


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
