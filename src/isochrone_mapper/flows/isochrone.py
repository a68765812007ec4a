"""
Prefect flow: address -> origin -> isochrone -> GeoJSON.

Geocoding is a retryable task; the isochrone computation is not (a failed
run is re-run from scratch by the caller).

Run locally:
    python -m isochrone_mapper.flows.isochrone "1 Market St, San Francisco" 15 walking
"""

from __future__ import annotations

import sys
from typing import Any

import requests
from prefect import flow, task
from prefect.utilities.asyncutils import run_coro_as_sync

from isochrone_mapper.config import get_settings
from isochrone_mapper.datasources.google_maps import DistanceMatrixOracle, GoogleGeocoder
from isochrone_mapper.isochrone import IsochroneEngine
from isochrone_mapper.schemas import Coordinate, Isochrone, TravelMode
from isochrone_mapper.serialization import boundary_to_geojson


def _retry_on_http_error(_task: Any, _task_run: Any, state: Any) -> bool:
    """Retry transport failures only; a missing address stays missing."""
    try:
        state.result()
    except requests.RequestException:
        return True
    except Exception:  # noqa: BLE001
        return False
    return False


@task(
    name="geocode-origin",
    retries=2,
    retry_delay_seconds=5,
    retry_condition_fn=_retry_on_http_error,
)
def geocode_origin(address: str) -> Coordinate:
    """Resolve the origin address with the Google Geocoding API."""
    settings = get_settings()
    return GoogleGeocoder(settings.google_maps_api_key).resolve(address)


@task(name="compute-isochrone")
def compute_isochrone_task(origin: Coordinate, mode: TravelMode, budget_minutes: int) -> Isochrone:
    """Run the engine against the Distance Matrix oracle."""
    settings = get_settings()
    oracle = DistanceMatrixOracle(
        settings.google_maps_api_key, timeout_seconds=settings.oracle_timeout_seconds
    )
    engine = IsochroneEngine.from_settings(oracle, settings)
    return run_coro_as_sync(engine.compute(origin, mode, budget_minutes))


@flow(name="compute-isochrone", log_prints=True)
def isochrone_flow(address: str, budget_minutes: int = 30, mode: str = "DRIVING") -> dict[str, Any]:
    """
    Compute the isochrone for an address.

    Returns:
        GeoJSON ``Feature`` with the boundary polygon.
    """
    travel_mode = TravelMode.parse(mode)
    print(f"Starting isochrone calculation for: {address}, {budget_minutes} minutes, {travel_mode}")

    origin = geocode_origin(address)
    print(f"Resolved origin to ({origin.latitude:.5f}, {origin.longitude:.5f})")

    isochrone = compute_isochrone_task(origin, travel_mode, budget_minutes)
    print(
        f"Found {isochrone.reachable_count} reachable points out of "
        f"{isochrone.candidate_count} total points; boundary has {len(isochrone.boundary)} vertices"
    )
    for warning in isochrone.warnings:
        print(f"Warning: {warning}")

    return boundary_to_geojson(isochrone)


if __name__ == "__main__":
    args = sys.argv[1:]
    if not args:
        print("usage: python -m isochrone_mapper.flows.isochrone ADDRESS [MINUTES] [MODE]")
        sys.exit(2)
    result = isochrone_flow(args[0], *(int(a) if a.isdigit() else a for a in args[1:3]))
    print(f"Flow complete: {len(result['geometry']['coordinates'][0])} ring positions")
