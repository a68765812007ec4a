"""GeoJSON export for computed isochrones.

GeoJSON wants ``[longitude, latitude]`` pairs and a closed ring (first
position repeated at the end).
"""

from __future__ import annotations

from typing import Any

from isochrone_mapper.schemas import Coordinate, Isochrone


def _position(c: Coordinate) -> list[float]:
    return [c.longitude, c.latitude]


def boundary_ring(boundary: list[Coordinate]) -> list[list[float]]:
    """Closed GeoJSON linear ring for a boundary polygon."""
    ring = [_position(c) for c in boundary]
    if ring and ring[0] != ring[-1]:
        ring.append(ring[0])
    return ring


def isochrone_to_dict(isochrone: Isochrone) -> dict[str, Any]:
    """Plain-dict form of an isochrone (JSON-serializable)."""
    return {
        "origin": {"lat": isochrone.origin.latitude, "lng": isochrone.origin.longitude},
        "mode": isochrone.mode.value,
        "budget_minutes": isochrone.budget_minutes,
        "boundary": [{"lat": c.latitude, "lng": c.longitude} for c in isochrone.boundary],
        "candidate_count": isochrone.candidate_count,
        "reachable_count": isochrone.reachable_count,
        "failed_count": isochrone.failed_count,
        "warnings": list(isochrone.warnings),
    }


def boundary_to_geojson(isochrone: Isochrone) -> dict[str, Any]:
    """GeoJSON ``Feature`` with the boundary polygon and run diagnostics."""
    return {
        "type": "Feature",
        "geometry": {
            "type": "Polygon",
            "coordinates": [boundary_ring(isochrone.boundary)],
        },
        "properties": {
            "origin": _position(isochrone.origin),
            "mode": isochrone.mode.value,
            "budget_minutes": isochrone.budget_minutes,
            "candidate_count": isochrone.candidate_count,
            "reachable_count": isochrone.reachable_count,
            "failed_count": isochrone.failed_count,
            "warnings": list(isochrone.warnings),
        },
    }
