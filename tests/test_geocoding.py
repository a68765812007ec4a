"""Tests for the Google geocoder."""

from __future__ import annotations

from unittest.mock import Mock

import pytest
import requests

from isochrone_mapper.datasources.google_maps import GEOCODING_API, GoogleGeocoder
from isochrone_mapper.exceptions import AddressNotFoundError
from isochrone_mapper.protocols import GeocodingService
from isochrone_mapper.schemas import Coordinate


def _session(payload: dict) -> Mock:
    mock_response = Mock()
    mock_response.json.return_value = payload
    mock_response.raise_for_status = Mock()
    session = Mock()
    session.get.return_value = mock_response
    return session


class TestGoogleGeocoder:
    """Address resolution."""

    def test_satisfies_protocol(self) -> None:
        assert isinstance(GoogleGeocoder("key", session=Mock()), GeocodingService)

    def test_resolves_first_result(self) -> None:
        session = _session(
            {
                "status": "OK",
                "results": [
                    {"geometry": {"location": {"lat": 37.7937, "lng": -122.3965}}},
                    {"geometry": {"location": {"lat": 0.0, "lng": 0.0}}},
                ],
            }
        )
        result = GoogleGeocoder("test-key", session=session).resolve("1 Market St")

        assert result == Coordinate(37.7937, -122.3965)
        session.get.assert_called_once()
        args, kwargs = session.get.call_args
        assert args == (GEOCODING_API,)
        assert kwargs["params"] == {"address": "1 Market St", "key": "test-key"}

    def test_zero_results(self) -> None:
        session = _session({"status": "ZERO_RESULTS", "results": []})
        with pytest.raises(AddressNotFoundError, match="Address not found"):
            GoogleGeocoder("key", session=session).resolve("nowhere at all")

    def test_ok_without_results(self) -> None:
        session = _session({"status": "OK", "results": []})
        with pytest.raises(AddressNotFoundError):
            GoogleGeocoder("key", session=session).resolve("nowhere")

    def test_denied_key_is_not_found(self) -> None:
        session = _session({"status": "REQUEST_DENIED", "error_message": "bad key"})
        with pytest.raises(AddressNotFoundError, match="REQUEST_DENIED"):
            GoogleGeocoder("key", session=session).resolve("1 Market St")

    def test_http_error_propagates(self) -> None:
        session = Mock()
        session.get.return_value.raise_for_status.side_effect = requests.HTTPError("503")
        with pytest.raises(requests.HTTPError):
            GoogleGeocoder("key", session=session).resolve("1 Market St")
