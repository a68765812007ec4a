"""Travel durations from the Google Distance Matrix API.

One request per chunk: a single origin, up to 25 destinations. The client
never retries; a failed request surfaces as ``ChunkQueryError`` and the query
engine decides what to do with it.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from datetime import UTC, datetime
from typing import Any

import httpx

from isochrone_mapper.datasources.google_maps.client import (
    DISTANCE_MATRIX_API,
    FATAL_STATUSES,
    MAX_DESTINATIONS_PER_REQUEST,
    TRAFFIC_MODEL,
    api_mode,
)
from isochrone_mapper.exceptions import ChunkQueryError, OracleUnreachableError
from isochrone_mapper.schemas import Coordinate, ElementStatus, OracleElement, TravelMode

DEFAULT_TIMEOUT_SECONDS = 10.0


def _value(element: dict[str, Any], key: str) -> float | None:
    field = element.get(key)
    if not isinstance(field, dict) or field.get("value") is None:
        return None
    return float(field["value"])


def parse_elements(payload: dict[str, Any]) -> list[OracleElement]:
    """Convert the first row of a Distance Matrix response to oracle elements."""
    rows = payload.get("rows") or []
    if not rows:
        return []
    elements: list[OracleElement] = []
    for element in rows[0].get("elements", []):
        if element.get("status") != "OK":
            elements.append(OracleElement(ElementStatus.ERROR))
            continue
        elements.append(
            OracleElement(
                ElementStatus.OK,
                duration_seconds=_value(element, "duration"),
                traffic_duration_seconds=_value(element, "duration_in_traffic"),
            )
        )
    return elements


class DistanceMatrixOracle:
    """Async ``TravelTimeOracle`` backed by the Google Distance Matrix API."""

    def __init__(
        self,
        api_key: str,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
        client_factory: Callable[[], httpx.AsyncClient] | None = None,
    ) -> None:
        self._api_key = api_key
        self._timeout_seconds = timeout_seconds
        self._client_factory = client_factory

    def _params(
        self,
        origin: Coordinate,
        destinations: Sequence[Coordinate],
        mode: TravelMode,
        want_traffic_aware: bool,
    ) -> dict[str, Any]:
        params: dict[str, Any] = {
            "origins": origin.as_lat_lng(),
            "destinations": "|".join(d.as_lat_lng() for d in destinations),
            "mode": api_mode(mode),
            "units": "metric",
            "key": self._api_key,
        }
        if want_traffic_aware:
            params["departure_time"] = int(datetime.now(UTC).timestamp())
            params["traffic_model"] = TRAFFIC_MODEL
        return params

    async def batch_duration(
        self,
        origin: Coordinate,
        destinations: Sequence[Coordinate],
        mode: TravelMode,
        want_traffic_aware: bool,
    ) -> list[OracleElement]:
        if len(destinations) > MAX_DESTINATIONS_PER_REQUEST:
            msg = (
                f"At most {MAX_DESTINATIONS_PER_REQUEST} destinations per request, "
                f"got {len(destinations)}"
            )
            raise ValueError(msg)
        if not destinations:
            return []

        params = self._params(origin, destinations, mode, want_traffic_aware)
        try:
            factory = self._client_factory or (
                lambda: httpx.AsyncClient(timeout=self._timeout_seconds)
            )
            async with factory() as client:
                response = await client.get(DISTANCE_MATRIX_API, params=params)
                response.raise_for_status()
        except httpx.TimeoutException as exc:
            raise ChunkQueryError("Distance Matrix request timed out") from exc
        except httpx.HTTPStatusError as exc:
            msg = f"Distance Matrix returned HTTP {exc.response.status_code}"
            raise ChunkQueryError(msg) from exc
        except httpx.HTTPError as exc:
            raise ChunkQueryError(f"Distance Matrix request failed: {exc}") from exc

        try:
            payload: dict[str, Any] = response.json()
            status = payload.get("status")
        except (ValueError, AttributeError) as exc:
            raise ChunkQueryError("Distance Matrix returned a malformed response") from exc

        if isinstance(status, str) and status in FATAL_STATUSES:
            detail = payload.get("error_message", "request denied")
            raise OracleUnreachableError(f"Distance Matrix API failed: {status} ({detail})")
        if status != "OK":
            raise ChunkQueryError(f"Distance Matrix API failed: {status}")

        try:
            return parse_elements(payload)
        except (ValueError, KeyError, TypeError, AttributeError) as exc:
            raise ChunkQueryError(f"Distance Matrix rows could not be parsed: {exc}") from exc
