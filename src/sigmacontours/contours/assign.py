"""
Sigma assignment of traced ring sets.
"""

import logging
from typing import List, Sequence

from ..surfaces.levels import N_SIGMA_LEVELS, sigma_for_level_index
from .contour import Contour
from .tracer import RingSet

logger = logging.getLogger(__name__)


def count_trailing_empty(ring_sets: Sequence[RingSet]) -> int:
    """Number of empty ring sets at the end of the list."""
    n_empty = 0
    for rings in reversed(ring_sets):
        if len(rings):
            break
        n_empty += 1
    return n_empty


def assign_sigmas(ring_sets: Sequence[RingSet], packed: bool = False) -> List[Contour]:
    """
    Turn the ring sets of the five sigma levels into contours.

    Ring sets are visited from the last index down to the first; each
    non-empty set becomes a ``Contour``. The first contour of the result is
    therefore the tightest level present.

    Parameters
    ----------
    ring_sets : sequence of RingSet
        Exactly five ring sets as returned by ``extract_ring_sets``.
    packed : bool
        If True, the ring sets are in packed order: filled sets first, empty
        sets trailing. Sigma is then ``5 - n_empty - ic`` with ``n_empty``
        the number of trailing empty sets. This is only correct when the
        missing levels are contiguous at the loose end. If False, ring set
        ``ic`` belongs to sigma ``5 - ic``.

    Returns
    -------
    list of Contour
        Contours in visiting order; empty if no level was traced.
    """
    if len(ring_sets) != N_SIGMA_LEVELS:
        raise ValueError(f"Expected {N_SIGMA_LEVELS} ring sets, got {len(ring_sets)}")

    n_empty = count_trailing_empty(ring_sets) if packed else 0

    if packed:
        filled = [bool(len(rings)) for rings in ring_sets]
        n_filled = sum(filled)
        if any(not f for f in filled[:n_filled]):
            logger.warning(
                "Empty ring set between traced levels (%s); packed sigma labels are unreliable",
                [len(rings) for rings in ring_sets]
            )

    contours = []
    for ic in range(N_SIGMA_LEVELS - 1, -1, -1):
        if len(ring_sets[ic]):
            contours.append(Contour(ring_sets[ic], sigma=sigma_for_level_index(ic + n_empty)))

    return contours
