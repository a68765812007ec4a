"""Tests for spherical coordinate arithmetic."""

from __future__ import annotations

import math

import pytest

from isochrone_mapper.geometry import (
    EARTH_RADIUS_METERS,
    bearing_degrees,
    cross_product,
    distance_meters,
    offset_by,
)
from isochrone_mapper.schemas import Coordinate

ORIGIN = Coordinate(0.0, 0.0)
SAN_FRANCISCO = Coordinate(37.7749, -122.4194)

# One degree of arc on the model sphere
METERS_PER_DEGREE = math.pi * EARTH_RADIUS_METERS / 180


class TestDistanceMeters:
    """Great-circle distance."""

    def test_zero_for_same_point(self) -> None:
        assert distance_meters(SAN_FRANCISCO, SAN_FRANCISCO) == 0.0

    def test_one_degree_of_latitude(self) -> None:
        result = distance_meters(ORIGIN, Coordinate(1.0, 0.0))
        assert result == pytest.approx(METERS_PER_DEGREE, rel=1e-9)

    def test_one_degree_of_longitude_on_equator(self) -> None:
        result = distance_meters(ORIGIN, Coordinate(0.0, 1.0))
        assert result == pytest.approx(METERS_PER_DEGREE, rel=1e-9)

    def test_symmetric(self) -> None:
        other = Coordinate(37.8044, -122.2712)
        assert distance_meters(SAN_FRANCISCO, other) == pytest.approx(
            distance_meters(other, SAN_FRANCISCO)
        )

    def test_known_city_pair(self) -> None:
        """San Francisco to Oakland is roughly 13 km."""
        oakland = Coordinate(37.8044, -122.2712)
        assert 12_000 < distance_meters(SAN_FRANCISCO, oakland) < 14_000


class TestBearingDegrees:
    """Initial bearing."""

    @pytest.mark.parametrize(
        ("target", "expected"),
        [
            (Coordinate(1.0, 0.0), 0.0),
            (Coordinate(0.0, 1.0), 90.0),
            (Coordinate(-1.0, 0.0), 180.0),
            (Coordinate(0.0, -1.0), 270.0),
        ],
    )
    def test_cardinal_directions(self, target: Coordinate, expected: float) -> None:
        assert bearing_degrees(ORIGIN, target) == pytest.approx(expected, abs=1e-9)

    def test_range_is_half_open(self) -> None:
        for lng in (-1.0, -0.001, 0.001, 1.0):
            for lat in (-1.0, 0.0, 1.0):
                result = bearing_degrees(ORIGIN, Coordinate(lat, lng))
                assert 0.0 <= result < 360.0


class TestOffsetBy:
    """Destination point from distance and bearing."""

    def test_zero_distance_returns_origin(self) -> None:
        result = offset_by(SAN_FRANCISCO, 0.0, 123.0)
        assert result.latitude == pytest.approx(SAN_FRANCISCO.latitude)
        assert result.longitude == pytest.approx(SAN_FRANCISCO.longitude)

    def test_north_moves_latitude_only(self) -> None:
        result = offset_by(ORIGIN, 1000.0, 0.0)
        assert result.latitude == pytest.approx(1000.0 / METERS_PER_DEGREE)
        assert result.longitude == pytest.approx(0.0, abs=1e-12)

    def test_distance_round_trip(self) -> None:
        for bearing in (0.0, 45.0, 137.0, 250.0, 359.0):
            target = offset_by(SAN_FRANCISCO, 5_000.0, bearing)
            assert distance_meters(SAN_FRANCISCO, target) == pytest.approx(5_000.0, rel=1e-9)

    def test_bearing_round_trip(self) -> None:
        target = offset_by(SAN_FRANCISCO, 20_000.0, 37.0)
        assert bearing_degrees(SAN_FRANCISCO, target) == pytest.approx(37.0, abs=1e-6)

    def test_wraps_across_antimeridian(self) -> None:
        result = offset_by(Coordinate(0.0, 179.99), 5_000.0, 90.0)
        assert -180.0 <= result.longitude < -179.9


class TestCrossProduct:
    """Turn direction in the (longitude, latitude) plane."""

    def test_left_turn_is_positive(self) -> None:
        # east, then north
        p1, p2, p3 = Coordinate(0, 0), Coordinate(0, 1), Coordinate(1, 1)
        assert cross_product(p1, p2, p3) > 0

    def test_right_turn_is_negative(self) -> None:
        # east, then south
        p1, p2, p3 = Coordinate(0, 0), Coordinate(0, 1), Coordinate(-1, 1)
        assert cross_product(p1, p2, p3) < 0

    def test_collinear_is_zero(self) -> None:
        p1, p2, p3 = Coordinate(0, 0), Coordinate(1, 1), Coordinate(2, 2)
        assert cross_product(p1, p2, p3) == 0


class TestCoordinate:
    """Coordinate value semantics."""

    def test_orders_by_latitude_then_longitude(self) -> None:
        points = [Coordinate(1, 0), Coordinate(0, 2), Coordinate(0, 1)]
        assert sorted(points) == [Coordinate(0, 1), Coordinate(0, 2), Coordinate(1, 0)]

    def test_is_hashable_and_immutable(self) -> None:
        c = Coordinate(1.5, 2.5)
        assert {c, Coordinate(1.5, 2.5)} == {c}
        with pytest.raises(AttributeError):
            c.latitude = 3.0  # type: ignore[misc]

    def test_as_lat_lng(self) -> None:
        assert Coordinate(37.5, -122.25).as_lat_lng() == "37.5,-122.25"
