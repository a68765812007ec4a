"""Address resolution via the Google Geocoding API."""

from __future__ import annotations

from typing import Any

import requests

from isochrone_mapper.datasources.google_maps.client import GEOCODING_API
from isochrone_mapper.exceptions import AddressNotFoundError
from isochrone_mapper.schemas import Coordinate
from isochrone_mapper.services.http import session as default_session


class GoogleGeocoder:
    """Resolves address text to the first matching coordinate."""

    def __init__(self, api_key: str, session: requests.Session | None = None) -> None:
        self.api_key = api_key
        self.session = session or default_session

    def resolve(self, address: str) -> Coordinate:
        """
        Geocode an address.

        Raises:
            AddressNotFoundError: The API returned no match (any non-OK status).
            requests.HTTPError: The request itself failed.
        """
        resp = self.session.get(GEOCODING_API, params={"address": address, "key": self.api_key})
        resp.raise_for_status()
        data: dict[str, Any] = resp.json()

        status = data.get("status")
        results = data.get("results") or []
        if status != "OK" or not results:
            msg = f"Address not found: {address!r} (status {status})"
            raise AddressNotFoundError(msg)

        location = results[0]["geometry"]["location"]
        return Coordinate(float(location["lat"]), float(location["lng"]))
