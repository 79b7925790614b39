"""
Core geometry operations for contour rings.

Contains utility functions for:
- Ring closure checks and normalisation
- Polygon area and vertex ordering (CCW)
- Assembling nested rings into Shapely polygons with holes
- Point-in-region testing
"""

from typing import List, Sequence, Union

import numpy as np
from shapely.geometry import MultiPolygon, Point, Polygon
from shapely.geometry.base import BaseGeometry


# Numerical tolerance for floating point comparisons
EPS = 1e-10


def is_closed(ring: np.ndarray, tol: float = 1e-9) -> bool:
    """
    Check whether a traced line ends where it starts.

    Parameters
    ----------
    ring : np.ndarray
        Line vertices of shape (M, 2).
    tol : float
        Absolute tolerance on the endpoint distance.

    Returns
    -------
    bool
        True if the line has at least 4 vertices and its first and last
        vertices coincide.
    """
    ring = np.asarray(ring)
    if ring.ndim != 2 or len(ring) < 4:
        return False
    return bool(np.allclose(ring[0], ring[-1], rtol=0.0, atol=tol))


def close_ring(ring: np.ndarray) -> np.ndarray:
    """Return the ring with its first vertex repeated at the end."""
    ring = np.asarray(ring, dtype=np.float64)
    if len(ring) and not np.allclose(ring[0], ring[-1], rtol=0.0, atol=EPS):
        ring = np.vstack([ring, ring[:1]])
    return ring


def open_ring(ring: np.ndarray) -> np.ndarray:
    """Return the ring without the closing duplicate vertex."""
    ring = np.asarray(ring, dtype=np.float64)
    if len(ring) > 1 and np.allclose(ring[0], ring[-1], rtol=0.0, atol=EPS):
        ring = ring[:-1]
    return ring


def signed_area(poly: np.ndarray) -> float:
    """Shoelace area, positive for counter-clockwise vertex order."""
    poly = open_ring(poly)
    if len(poly) < 3:
        return 0.0
    x = poly[:, 0]
    y = poly[:, 1]
    return float(0.5 * np.sum(x * np.roll(y, -1) - np.roll(x, -1) * y))


def polygon_area(poly: np.ndarray) -> float:
    """
    Compute the area of a polygon using the shoelace formula.

    Parameters
    ----------
    poly : np.ndarray
        Polygon vertices of shape (M, 2), closed or open.

    Returns
    -------
    float
        Area of the polygon.
    """
    return abs(signed_area(poly))


def ensure_ccw(poly: np.ndarray) -> np.ndarray:
    """
    Ensure polygon vertices are in counter-clockwise order.

    Parameters
    ----------
    poly : np.ndarray
        Polygon vertices of shape (M, 2).

    Returns
    -------
    np.ndarray
        Polygon vertices in CCW order.
    """
    if signed_area(poly) < 0:
        # Clockwise, reverse to make CCW
        return poly[::-1].copy()
    return poly


def rings_to_geometry(rings: Sequence[np.ndarray]) -> MultiPolygon:
    """
    Assemble the rings of one level set into polygons with holes.

    A ring enclosed by an odd number of other rings bounds a hole of the
    smallest ring enclosing it; a ring enclosed by an even number of rings
    is an outer shell.

    Parameters
    ----------
    rings : sequence of np.ndarray
        Closed or open rings of shape (M, 2). Rings with fewer than three
        distinct vertices are ignored.

    Returns
    -------
    MultiPolygon
        One polygon per outer shell. Empty if no usable ring was given.
    """
    shells = []
    for ring in rings:
        ring = open_ring(ring)
        if len(ring) < 3:
            continue
        poly = Polygon(ring)
        if not poly.is_valid:
            # Self-touching rings from saddle points
            poly = poly.buffer(0)
            if isinstance(poly, MultiPolygon):
                poly = max(poly.geoms, key=lambda g: g.area)
        if poly.is_empty or poly.area <= EPS:
            continue
        shells.append(poly)

    # Largest first, so every enclosing ring precedes the rings it encloses
    shells.sort(key=lambda p: p.area, reverse=True)

    depth = []
    parent = []
    for i, poly in enumerate(shells):
        probe = poly.representative_point()
        enclosing = [j for j in range(i) if shells[j].contains(probe)]
        depth.append(len(enclosing))
        # Smallest enclosing ring is the last one found
        parent.append(enclosing[-1] if enclosing else None)

    holes: List[List[np.ndarray]] = [[] for _ in shells]
    for i, poly in enumerate(shells):
        if depth[i] % 2 == 1:
            holes[parent[i]].append(np.asarray(poly.exterior.coords))

    polygons = []
    for i, poly in enumerate(shells):
        if depth[i] % 2 == 0:
            polygons.append(Polygon(poly.exterior.coords, holes[i]))

    return MultiPolygon(polygons)


def geometry_to_rings(geom: BaseGeometry) -> List[np.ndarray]:
    """
    Convert a Shapely polygon or multipolygon to a list of closed rings.

    Exterior rings come first for each polygon, followed by its holes.
    """
    if geom.is_empty:
        return []
    if isinstance(geom, Polygon):
        polys = [geom]
    else:
        polys = list(geom.geoms)

    rings = []
    for poly in polys:
        rings.append(np.asarray(poly.exterior.coords))
        rings.extend(np.asarray(interior.coords) for interior in poly.interiors)
    return rings


def contains(region: Union[np.ndarray, BaseGeometry], points: np.ndarray) -> np.ndarray:
    """
    Test if points are inside or on the boundary of a region.

    Parameters
    ----------
    region : np.ndarray or shapely geometry
        Polygon vertices of shape (M, 2), or an already assembled
        (multi)polygon.
    points : np.ndarray
        Points to test of shape (N, 2) or (2,).

    Returns
    -------
    np.ndarray
        Boolean array of shape (N,) indicating containment.
    """
    points = np.atleast_2d(points)
    n_points = len(points)

    if isinstance(region, BaseGeometry):
        shape = region
    else:
        region = open_ring(region)
        if len(region) < 3:
            return np.zeros(n_points, dtype=bool)
        shape = Polygon(region)
        if not shape.is_valid:
            shape = shape.buffer(0)

    if shape.is_empty:
        return np.zeros(n_points, dtype=bool)

    inside = np.zeros(n_points, dtype=bool)
    for i, pt in enumerate(points):
        shapely_point = Point(pt)
        # contains() checks interior, touches() checks boundary
        inside[i] = shape.contains(shapely_point) or shape.touches(shapely_point)

    return inside
