"""
Spherical coordinate arithmetic.

Pure functions on ``Coordinate``: destination point from distance and
bearing, great-circle distance, and initial bearing. The Earth is modelled
as a sphere of radius 6 378 137 m, matching the web-map geometry library the
boundary is eventually drawn with.

Inputs must be valid coordinates (latitude in [-90, 90], longitude in
[-180, 180]); nothing here validates them.
"""

from __future__ import annotations

import math

from isochrone_mapper.schemas import Coordinate

EARTH_RADIUS_METERS = 6_378_137.0


def _normalize_longitude(lng: float) -> float:
    """Wrap a longitude into [-180, 180)."""
    return (lng + 540.0) % 360.0 - 180.0


def offset_by(origin: Coordinate, distance_meters: float, bearing_degrees: float) -> Coordinate:
    """
    Great-circle destination point.

    Args:
        origin: Starting coordinate.
        distance_meters: Distance to travel along the great circle.
        bearing_degrees: Initial bearing, clockwise from north.

    Returns:
        The coordinate reached.
    """
    angular = distance_meters / EARTH_RADIUS_METERS
    bearing = math.radians(bearing_degrees)
    lat1 = math.radians(origin.latitude)
    lng1 = math.radians(origin.longitude)

    sin_lat2 = math.sin(lat1) * math.cos(angular) + math.cos(lat1) * math.sin(angular) * math.cos(
        bearing
    )
    lat2 = math.asin(max(-1.0, min(1.0, sin_lat2)))
    lng2 = lng1 + math.atan2(
        math.sin(bearing) * math.sin(angular) * math.cos(lat1),
        math.cos(angular) - math.sin(lat1) * sin_lat2,
    )
    return Coordinate(math.degrees(lat2), _normalize_longitude(math.degrees(lng2)))


def distance_meters(a: Coordinate, b: Coordinate) -> float:
    """Great-circle distance between two coordinates (haversine)."""
    lat1 = math.radians(a.latitude)
    lat2 = math.radians(b.latitude)
    delta_lat = lat2 - lat1
    delta_lng = math.radians(b.longitude - a.longitude)

    h = (
        math.sin(delta_lat / 2) ** 2
        + math.cos(lat1) * math.cos(lat2) * math.sin(delta_lng / 2) ** 2
    )
    return 2 * EARTH_RADIUS_METERS * math.atan2(math.sqrt(h), math.sqrt(max(0.0, 1 - h)))


def bearing_degrees(a: Coordinate, b: Coordinate) -> float:
    """Initial bearing from ``a`` to ``b`` in [0, 360)."""
    lat1 = math.radians(a.latitude)
    lat2 = math.radians(b.latitude)
    delta_lng = math.radians(b.longitude - a.longitude)

    y = math.sin(delta_lng) * math.cos(lat2)
    x = math.cos(lat1) * math.sin(lat2) - math.sin(lat1) * math.cos(lat2) * math.cos(delta_lng)
    bearing = math.degrees(math.atan2(y, x)) % 360.0
    # tiny negative angles round up to exactly 360.0
    return 0.0 if bearing >= 360.0 else bearing


def cross_product(p1: Coordinate, p2: Coordinate, p3: Coordinate) -> float:
    """Turn test for p1 -> p2 -> p3 in the (longitude, latitude) plane.

    Positive for a left (counter-clockwise) turn, zero when collinear.
    """
    return (p2.longitude - p1.longitude) * (p3.latitude - p1.latitude) - (
        p2.latitude - p1.latitude
    ) * (p3.longitude - p1.longitude)
