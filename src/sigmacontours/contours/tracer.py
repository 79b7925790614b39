"""
Level-Set Tracing Module

Traces the sigma levels of a padded hill surface with matplotlib's contour
machinery and returns one ring set per requested level.

matplotlib needs a figure to compute contour geometry, so tracing runs in a
throw-away figure while interactive mode is switched off. The interactive
flag is process-wide state; ``non_interactive`` serializes access to it and
always restores the previous value.
"""

from contextlib import contextmanager
import logging
import threading
from typing import List, Sequence

import numpy as np
import matplotlib
import matplotlib.pyplot as plt

from ..core.geometry import is_closed
from ..core.grid import Grid
from ..surfaces.levels import CHI2_OFFSET, SurfaceType, contour_levels

logger = logging.getLogger(__name__)

# A ring set holds the closed rings of one level, each of shape (M, 2)
RingSet = List[np.ndarray]

_interactive_lock = threading.RLock()


@contextmanager
def non_interactive():
    """
    Context manager that disables matplotlib's interactive mode.

    The previous mode is restored on exit, also when the body raises.
    """
    with _interactive_lock:
        was_interactive = matplotlib.is_interactive()
        matplotlib.interactive(False)
        try:
            yield
        finally:
            matplotlib.interactive(was_interactive)


def trace_levels(grid: Grid, levels: Sequence[float]) -> List[RingSet]:
    """
    Trace the closed level curves of a grid.

    The grid is contoured once, on its bin centers. Levels that do not lie
    strictly between the grid minimum and maximum cannot be crossed and are
    not passed to the tracer.

    Parameters
    ----------
    grid : Grid
        Hill-shaped surface, normally padded with ``add_boundary_bins``.
    levels : sequence of float
        Strictly increasing contour levels.

    Returns
    -------
    list of RingSet
        ``result[i]`` holds the closed rings traced at ``levels[i]``;
        an empty list if the level does not cross the surface.
    """
    grid.validate()
    levels = np.asarray(levels, dtype=np.float64)

    if levels.ndim != 1 or len(levels) == 0:
        raise ValueError(f"Expected a non-empty 1D sequence of levels, got shape {levels.shape}")

    if np.any(np.diff(levels) <= 0):
        raise ValueError(f"Levels must be strictly increasing, got {levels.tolist()}")

    ring_sets: List[RingSet] = [[] for _ in levels]

    # matplotlib swaps in a dummy level when none is in range
    inside = (levels > grid.minimum()) & (levels < grid.maximum())
    if not np.any(inside):
        logger.debug("No level of %s crosses grid '%s'", levels.tolist(), grid.name)
        return ring_sets

    with non_interactive():
        fig, ax = plt.subplots()
        try:
            contour_set = ax.contour(
                grid.x_axis.centers,
                grid.y_axis.centers,
                grid.content.T,
                levels=levels[inside]
            )
            allsegs = [list(segs) for segs in contour_set.allsegs]
        finally:
            plt.close(fig)

    for index, segs in zip(np.flatnonzero(inside), allsegs):
        for seg in segs:
            seg = np.asarray(seg, dtype=np.float64)
            if not is_closed(seg):
                logger.warning(
                    "Dropping open contour line with %d vertices at level %g of grid '%s'",
                    len(seg), levels[index], grid.name
                )
                continue
            ring_sets[index].append(seg)

    return ring_sets


def pack_ring_sets(ring_sets: Sequence[RingSet]) -> List[RingSet]:
    """
    Reorder ring sets the way packing contour tracers report them.

    Non-empty ring sets move to the lowest indices, keeping their relative
    order; empty sets trail. Which level a packed set belongs to can then
    only be recovered from the number of trailing empty sets.
    """
    counts = [len(rings) for rings in ring_sets]
    nonzero = np.flatnonzero(counts)
    if len(nonzero) and nonzero[-1] - nonzero[0] + 1 != len(nonzero):
        logger.warning("Packing ring sets with empty levels in between: %s", counts)

    filled = [list(rings) for rings in ring_sets if len(rings)]
    empty = [[] for rings in ring_sets if not len(rings)]
    return filled + empty


def extract_ring_sets(
    padded_grid: Grid,
    surface_type: SurfaceType,
    use_2d_levels: bool = False,
    offset: float = CHI2_OFFSET,
    packed: bool = False
) -> List[RingSet]:
    """
    Trace the five sigma levels of a prepared surface.

    Parameters
    ----------
    padded_grid : Grid
        Hill-shaped, padded surface.
    surface_type : SurfaceType
        Selects the threshold table.
    use_2d_levels : bool
        Use two-dimensional delta chi2 thresholds for chi2 surfaces.
    offset : float
        Offset used by the valley-to-hill transformation.
    packed : bool
        Return the ring sets in packed order (see ``pack_ring_sets``)
        instead of aligned with the level index.

    Returns
    -------
    list of RingSet
        Five ring sets. Aligned element ``i`` belongs to sigma ``5 - i``.
    """
    levels = contour_levels(surface_type, use_2d_levels=use_2d_levels, offset=offset)
    ring_sets = trace_levels(padded_grid, levels)

    logger.debug(
        "Traced %s rings per level on '%s'",
        [len(rings) for rings in ring_sets], padded_grid.name
    )

    if packed:
        return pack_ring_sets(ring_sets)
    return ring_sets
