"""
Core grid and geometry operations.
"""

from .grid import Axis, Grid, add_boundary_bins
from .geometry import (
    EPS,
    is_closed,
    close_ring,
    open_ring,
    signed_area,
    polygon_area,
    ensure_ccw,
    rings_to_geometry,
    geometry_to_rings,
    contains,
)

__all__ = [
    'Axis',
    'Grid',
    'add_boundary_bins',
    'EPS',
    'is_closed',
    'close_ring',
    'open_ring',
    'signed_area',
    'polygon_area',
    'ensure_ccw',
    'rings_to_geometry',
    'geometry_to_rings',
    'contains',
]
