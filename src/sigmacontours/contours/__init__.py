"""
Contour extraction and sigma assignment.
"""

from .tracer import RingSet, non_interactive, trace_levels, pack_ring_sets, extract_ring_sets
from .contour import Contour
from .assign import count_trailing_empty, assign_sigmas
from .confidence import ContourOptions, ConfidenceContours

__all__ = [
    'RingSet',
    'non_interactive',
    'trace_levels',
    'pack_ring_sets',
    'extract_ring_sets',
    'Contour',
    'count_trailing_empty',
    'assign_sigmas',
    'ContourOptions',
    'ConfidenceContours',
]
