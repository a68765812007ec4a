"""
Tests for the isochrone Prefect flow.

Google collaborators are patched at the flow module; the engine itself runs
for real against an in-memory oracle.
"""

from __future__ import annotations

from collections.abc import Sequence
from unittest.mock import Mock, patch

import pytest
import requests

from isochrone_mapper.config import Settings
from isochrone_mapper.exceptions import AddressNotFoundError
from isochrone_mapper.flows import isochrone as iso_flow
from isochrone_mapper.geometry import distance_meters
from isochrone_mapper.schemas import Coordinate, ElementStatus, OracleElement, TravelMode

ORIGIN = Coordinate(45.5152, -122.6784)


class RadiusOracle:
    """Everything within 1.5 km is 5 minutes away; the rest is an hour away."""

    def __init__(self) -> None:
        self.modes: set[TravelMode] = set()

    async def batch_duration(
        self,
        origin: Coordinate,
        destinations: Sequence[Coordinate],
        mode: TravelMode,
        want_traffic_aware: bool,
    ) -> list[OracleElement]:
        self.modes.add(mode)
        return [
            OracleElement(ElementStatus.OK, 300.0 if distance_meters(origin, d) <= 1500 else 3600.0)
            for d in destinations
        ]


@pytest.fixture
def settings() -> Settings:
    return Settings(google_maps_api_key="test-key", random_seed=3, wave_delay_seconds=0)


class TestRetryCondition:
    """Only transport failures are retried."""

    @pytest.mark.parametrize(
        ("error", "expected"),
        [
            (requests.ConnectionError("reset"), True),
            (requests.HTTPError("503"), True),
            (AddressNotFoundError("Address not found"), False),
            (ValueError("bad"), False),
        ],
    )
    def test_retry_decision(self, error: Exception, expected: bool) -> None:
        state = Mock()
        state.result.side_effect = error
        assert iso_flow._retry_on_http_error(None, None, state) is expected

    def test_successful_state_not_retried(self) -> None:
        state = Mock()
        state.result.return_value = ORIGIN
        assert iso_flow._retry_on_http_error(None, None, state) is False


class TestGeocodeOrigin:
    """Geocoding task."""

    def test_uses_configured_key(self, settings: Settings) -> None:
        with (
            patch("isochrone_mapper.flows.isochrone.get_settings", return_value=settings),
            patch("isochrone_mapper.flows.isochrone.GoogleGeocoder") as mock_geocoder,
        ):
            mock_geocoder.return_value.resolve.return_value = ORIGIN
            result = iso_flow.geocode_origin.fn("Pioneer Square, Portland")

        assert result == ORIGIN
        mock_geocoder.assert_called_once_with("test-key")
        mock_geocoder.return_value.resolve.assert_called_once_with("Pioneer Square, Portland")


class TestComputeIsochroneTask:
    """Engine task."""

    def test_runs_engine_with_settings(self, settings: Settings) -> None:
        oracle = RadiusOracle()
        with (
            patch("isochrone_mapper.flows.isochrone.get_settings", return_value=settings),
            patch(
                "isochrone_mapper.flows.isochrone.DistanceMatrixOracle", return_value=oracle
            ) as mock_oracle_cls,
        ):
            iso = iso_flow.compute_isochrone_task.fn(ORIGIN, TravelMode.BICYCLING, 20)

        mock_oracle_cls.assert_called_once_with("test-key", timeout_seconds=10.0)
        assert oracle.modes == {TravelMode.BICYCLING}
        assert iso.reachable_count >= 3
        assert all(distance_meters(ORIGIN, v) <= 1501 for v in iso.boundary)


class TestIsochroneFlow:
    """The full flow."""

    def test_returns_geojson_feature(self, settings: Settings) -> None:
        with (
            patch("isochrone_mapper.flows.isochrone.get_settings", return_value=settings),
            patch("isochrone_mapper.flows.isochrone.GoogleGeocoder") as mock_geocoder,
            patch(
                "isochrone_mapper.flows.isochrone.DistanceMatrixOracle", return_value=RadiusOracle()
            ),
        ):
            mock_geocoder.return_value.resolve.return_value = ORIGIN
            feature = iso_flow.isochrone_flow("Pioneer Square, Portland", 20, "walking")

        assert feature["type"] == "Feature"
        ring = feature["geometry"]["coordinates"][0]
        assert len(ring) >= 4
        assert ring[0] == ring[-1]
        assert feature["properties"]["mode"] == "WALKING"
        assert feature["properties"]["budget_minutes"] == 20
        assert feature["properties"]["origin"] == [ORIGIN.longitude, ORIGIN.latitude]

    def test_address_not_found_propagates(self, settings: Settings) -> None:
        with (
            patch("isochrone_mapper.flows.isochrone.get_settings", return_value=settings),
            patch("isochrone_mapper.flows.isochrone.GoogleGeocoder") as mock_geocoder,
            patch("isochrone_mapper.flows.isochrone.DistanceMatrixOracle") as mock_oracle_cls,
            pytest.raises(AddressNotFoundError),
        ):
            mock_geocoder.return_value.resolve.side_effect = AddressNotFoundError(
                "Address not found: 'nowhere'"
            )
            iso_flow.isochrone_flow("nowhere", 20, "walking")

        mock_oracle_cls.assert_not_called()
