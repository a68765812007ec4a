"""
Candidate destination sampling around an origin.

The search radius assumes a generous reference speed (50 km/h) so the true
boundary falls inside the sampled area. Two strategies are concatenated
without de-duplication:

1. Multi-resolution grid: three jittered square lattices with different
   density / extent pairs. Jitter breaks lattice alignment in the hull.
2. Radial rings: evenly spaced bearings on concentric rings.

Point counts range from a few hundred to a few thousand; the query engine
chunks them for the oracle.
"""

from __future__ import annotations

import logging
import math
import random

from isochrone_mapper.geometry import distance_meters, offset_by
from isochrone_mapper.schemas import CandidatePoint, Coordinate, SampleStrategy

logger = logging.getLogger(__name__)

REFERENCE_SPEED_KMH = 50.0
MIN_GRID_DENSITY = 8
MAX_GRID_DENSITY = 20
JITTER_FRACTION = 0.1  # of one grid cell, each axis
MAX_EXTENT_MULTIPLIER = 1.2
RING_COUNT = 6
SAMPLES_PER_RING = 16


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def search_radius_km(
    budget_minutes: int, reference_speed_kmh: float = REFERENCE_SPEED_KMH
) -> float:
    """Nominal search radius for a travel-time budget."""
    return budget_minutes / 60 * reference_speed_kmh


def base_grid_density(radius_km: float) -> int:
    """Grid half-width in cells: grows with the radius, capped at ``MAX_GRID_DENSITY``."""
    return min(MIN_GRID_DENSITY + math.floor(radius_km / 10), MAX_GRID_DENSITY)


def grid_passes(density: int) -> list[tuple[int, float]]:
    """(density, extent multiplier) for each grid pass."""
    return [
        (density, 1.0),
        (_round_half_up(1.5 * density), 0.7),
        (_round_half_up(0.7 * density), MAX_EXTENT_MULTIPLIER),
    ]


class PointSampler:
    """Produces the candidate set for an origin and budget.

    Pass a seeded ``random.Random`` for reproducible jitter.
    """

    def __init__(
        self,
        rng: random.Random | None = None,
        *,
        reference_speed_kmh: float = REFERENCE_SPEED_KMH,
        ring_count: int = RING_COUNT,
        samples_per_ring: int = SAMPLES_PER_RING,
    ) -> None:
        self.rng = rng or random.Random()
        self.reference_speed_kmh = reference_speed_kmh
        self.ring_count = ring_count
        self.samples_per_ring = samples_per_ring

    def sample(self, origin: Coordinate, budget_minutes: int) -> list[CandidatePoint]:
        """Return grid candidates followed by ring candidates, in generation order."""
        radius_km = search_radius_km(budget_minutes, self.reference_speed_kmh)
        candidates = self._grid(origin, radius_km) + self._rings(origin, radius_km)
        logger.debug(
            "Generated %d candidates around (%.5f, %.5f), radius %.1f km",
            len(candidates),
            origin.latitude,
            origin.longitude,
            radius_km,
        )
        return candidates

    def _grid(self, origin: Coordinate, radius_km: float) -> list[CandidatePoint]:
        radius_m = radius_km * 1000
        lat_range = offset_by(origin, radius_m, 0).latitude - origin.latitude
        lng_range = offset_by(origin, radius_m, 90).longitude - origin.longitude
        max_distance_m = radius_m * MAX_EXTENT_MULTIPLIER

        points: list[CandidatePoint] = []
        for level, (density, multiplier) in enumerate(grid_passes(base_grid_density(radius_km))):
            lat_step = lat_range * multiplier / density
            lng_step = lng_range * multiplier / density
            for i in range(-density, density + 1):
                for j in range(-density, density + 1):
                    lat = origin.latitude + lat_step * i
                    lng = origin.longitude + lng_step * j
                    lat += self.rng.uniform(-JITTER_FRACTION, JITTER_FRACTION) * lat_step
                    lng += self.rng.uniform(-JITTER_FRACTION, JITTER_FRACTION) * lng_step
                    point = Coordinate(lat, lng)
                    # Lattice corners lie outside the sampled disc.
                    if distance_meters(origin, point) > max_distance_m:
                        continue
                    points.append(CandidatePoint(point, SampleStrategy.GRID, level))
        return points

    def _rings(self, origin: Coordinate, radius_km: float) -> list[CandidatePoint]:
        radius_m = radius_km * 1000
        step = 360 / self.samples_per_ring
        points: list[CandidatePoint] = []
        for ring in range(1, self.ring_count + 1):
            ring_radius = ring / self.ring_count * radius_m
            for k in range(self.samples_per_ring):
                point = offset_by(origin, ring_radius, k * step)
                points.append(CandidatePoint(point, SampleStrategy.RING, ring))
        return points
