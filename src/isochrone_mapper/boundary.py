"""
Boundary extraction from reachable points.

``convex_hull`` is Andrew's monotone chain over points sorted by
(latitude, longitude), with turns measured in the (longitude, latitude)
plane. Collinear points are dropped, so the hull keeps only strict turns and
comes out counter-clockwise in that plane.

For dense inputs the hull's long edges get a few great-circle points inserted
between their endpoints (``smooth_edges``). Insertions never move or remove a
hull vertex.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from isochrone_mapper.geometry import bearing_degrees, cross_product, distance_meters, offset_by
from isochrone_mapper.schemas import Coordinate

logger = logging.getLogger(__name__)

SMOOTHING_MIN_POINTS = 50
SMOOTHING_MIN_EDGE_METERS = 2000.0
SMOOTHING_MAX_INSERTIONS = 3


def _half_hull(points: Sequence[Coordinate]) -> list[Coordinate]:
    chain: list[Coordinate] = []
    for p in points:
        while len(chain) >= 2 and cross_product(chain[-2], chain[-1], p) <= 0:
            chain.pop()
        chain.append(p)
    return chain


def convex_hull(points: Sequence[Coordinate]) -> list[Coordinate]:
    """
    Convex hull of a point set.

    Three or fewer points are returned unchanged (as a new list).

    Returns:
        Hull vertices in order, without repeating the first vertex.
    """
    if len(points) <= 3:
        return list(points)

    ordered = sorted(points)
    lower = _half_hull(ordered)
    upper = _half_hull(list(reversed(ordered)))
    return lower[:-1] + upper[:-1]


def smooth_edges(
    hull: Sequence[Coordinate],
    *,
    min_edge_meters: float = SMOOTHING_MIN_EDGE_METERS,
    max_insertions: int = SMOOTHING_MAX_INSERTIONS,
) -> list[Coordinate]:
    """
    Insert intermediate points along long hull edges.

    Each edge (wrapping from the last vertex back to the first) longer than
    ``min_edge_meters`` gets ``min(max_insertions, length // min_edge_meters)``
    points evenly spaced by arc length along the edge's initial bearing.
    """
    smoothed: list[Coordinate] = []
    count = len(hull)
    for index, start in enumerate(hull):
        end = hull[(index + 1) % count]
        smoothed.append(start)

        length = distance_meters(start, end)
        if length <= min_edge_meters:
            continue

        insertions = min(max_insertions, int(length // min_edge_meters))
        bearing = bearing_degrees(start, end)
        for k in range(1, insertions + 1):
            smoothed.append(offset_by(start, length * k / (insertions + 1), bearing))
    return smoothed


class BoundaryBuilder:
    """Turns reachable points into an ordered boundary polygon."""

    def __init__(
        self,
        *,
        smoothing_min_points: int = SMOOTHING_MIN_POINTS,
        min_edge_meters: float = SMOOTHING_MIN_EDGE_METERS,
        max_insertions: int = SMOOTHING_MAX_INSERTIONS,
    ) -> None:
        self.smoothing_min_points = smoothing_min_points
        self.min_edge_meters = min_edge_meters
        self.max_insertions = max_insertions

    def build(self, points: Sequence[Coordinate]) -> list[Coordinate]:
        """Build the boundary. The caller guarantees ``len(points) >= 3``."""
        if len(points) <= 3:
            return list(points)

        hull = convex_hull(points)
        if len(points) <= self.smoothing_min_points or len(hull) < 3:
            return hull

        boundary = smooth_edges(
            hull, min_edge_meters=self.min_edge_meters, max_insertions=self.max_insertions
        )
        logger.debug(
            "Hull of %d points has %d vertices, %d after smoothing",
            len(points),
            len(hull),
            len(boundary),
        )
        return boundary
