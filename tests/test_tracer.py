"""
Tests for level-set tracing, the non-interactive guard and ring set packing.
"""

import logging

import numpy as np
import pytest
import matplotlib
import matplotlib.pyplot as plt

from sigmacontours.core.geometry import is_closed, polygon_area
from sigmacontours.core.grid import Grid, add_boundary_bins
from sigmacontours.contours.tracer import (
    non_interactive,
    trace_levels,
    pack_ring_sets,
    extract_ring_sets,
)
from sigmacontours.surfaces import SurfaceType, transform_chi2_valley_to_hill


@pytest.fixture
def restore_interactive():
    was_interactive = matplotlib.is_interactive()
    yield
    matplotlib.interactive(was_interactive)


class TestNonInteractive:
    """Tests for the non_interactive() guard."""

    @pytest.mark.parametrize("initial", [True, False])
    def test_restores_mode(self, restore_interactive, initial):
        matplotlib.interactive(initial)
        with non_interactive():
            assert not matplotlib.is_interactive()
        assert matplotlib.is_interactive() == initial

    def test_restores_mode_on_error(self, restore_interactive):
        """The previous mode comes back when the body raises."""
        matplotlib.interactive(True)
        with pytest.raises(RuntimeError):
            with non_interactive():
                raise RuntimeError("tracing failed")
        assert matplotlib.is_interactive()

    def test_reentrant(self, restore_interactive):
        matplotlib.interactive(True)
        with non_interactive():
            with non_interactive():
                assert not matplotlib.is_interactive()
            assert not matplotlib.is_interactive()
        assert matplotlib.is_interactive()


class TestTraceLevels:
    """Tests for trace_levels()."""

    def test_circle_level(self, chi2_bowl):
        """Level 30 - 4 of the hill is the circle of radius 2."""
        hill = add_boundary_bins(transform_chi2_valley_to_hill(chi2_bowl))
        chi2min = chi2_bowl.minimum()
        ring_sets = trace_levels(hill, [30.0 + chi2min - 4.0])
        assert len(ring_sets) == 1
        assert len(ring_sets[0]) == 1
        ring = ring_sets[0][0]
        assert is_closed(ring)
        radii = np.linalg.norm(ring, axis=1)
        np.testing.assert_allclose(radii, 2.0, atol=0.05)

    def test_output_aligned_with_levels(self, chi2_small_bowl):
        """Levels that miss the surface keep their slot, empty."""
        hill = add_boundary_bins(transform_chi2_valley_to_hill(chi2_small_bowl))
        ring_sets = trace_levels(hill, [-100.0, 5.0, 26.0, 29.0, 1000.0])
        assert [len(rings) for rings in ring_sets] == [0, 0, 1, 1, 0]

    def test_no_level_in_range(self, pvalue_weak):
        """Nothing is traced when every level misses the surface."""
        ring_sets = trace_levels(add_boundary_bins(pvalue_weak), [1e-3, 0.5])
        assert ring_sets == [[], []]

    def test_no_figure_leaks(self, chi2_bowl):
        before = plt.get_fignums()
        trace_levels(add_boundary_bins(transform_chi2_valley_to_hill(chi2_bowl)), [20.0, 25.0])
        assert plt.get_fignums() == before

    def test_interactive_mode_restored(self, chi2_bowl, restore_interactive):
        matplotlib.interactive(True)
        trace_levels(add_boundary_bins(transform_chi2_valley_to_hill(chi2_bowl)), [20.0])
        assert matplotlib.is_interactive()

    def test_levels_must_increase(self, chi2_bowl):
        with pytest.raises(ValueError, match="strictly increasing"):
            trace_levels(chi2_bowl, [5.0, 5.0])

    def test_levels_must_be_given(self, chi2_bowl):
        with pytest.raises(ValueError, match="non-empty"):
            trace_levels(chi2_bowl, [])

    def test_two_peaks_give_two_rings(self):
        """Disjoint regions of one level come back as separate rings."""
        grid = Grid.from_function(
            lambda x, y: np.exp(-((x - 3)**2 + y**2)) + np.exp(-((x + 3)**2 + y**2)),
            (-6, 6), (-3, 3), 60, 30
        )
        ring_sets = trace_levels(add_boundary_bins(grid), [0.5])
        assert len(ring_sets[0]) == 2
        assert all(is_closed(ring) for ring in ring_sets[0])


class TestPackRingSets:
    """Tests for pack_ring_sets()."""

    def test_filled_sets_move_front(self, square_ring):
        ring_sets = [[], [], [square_ring], [square_ring, square_ring], [square_ring]]
        packed = pack_ring_sets(ring_sets)
        assert [len(rings) for rings in packed] == [1, 2, 1, 0, 0]

    def test_already_packed_unchanged(self, square_ring):
        ring_sets = [[square_ring], [square_ring], [], [], []]
        assert [len(r) for r in pack_ring_sets(ring_sets)] == [1, 1, 0, 0, 0]

    def test_gap_warns(self, square_ring, caplog):
        ring_sets = [[square_ring], [], [square_ring], [], []]
        with caplog.at_level(logging.WARNING, logger="sigmacontours"):
            pack_ring_sets(ring_sets)
        assert "empty levels in between" in caplog.text


class TestExtractRingSets:
    """Tests for extract_ring_sets()."""

    def test_five_levels_of_bowl(self, chi2_bowl):
        hill = add_boundary_bins(transform_chi2_valley_to_hill(chi2_bowl))
        ring_sets = extract_ring_sets(hill, SurfaceType.CHI2)
        assert len(ring_sets) == 5
        assert all(len(rings) == 1 for rings in ring_sets)
        # Level index 0 is the widest (5 sigma) ring
        areas = [polygon_area(rings[0]) for rings in ring_sets]
        assert areas == sorted(areas, reverse=True)

    def test_missing_loose_levels(self, chi2_small_bowl):
        hill = add_boundary_bins(transform_chi2_valley_to_hill(chi2_small_bowl))
        aligned = extract_ring_sets(hill, SurfaceType.CHI2)
        packed = extract_ring_sets(hill, SurfaceType.CHI2, packed=True)
        assert [len(r) for r in aligned] == [0, 0, 1, 1, 1]
        assert [len(r) for r in packed] == [1, 1, 1, 0, 0]


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
