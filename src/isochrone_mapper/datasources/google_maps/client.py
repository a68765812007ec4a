"""Google Maps Platform endpoints and shared constants.

API docs:
  - Distance Matrix: https://developers.google.com/maps/documentation/distance-matrix
  - Geocoding: https://developers.google.com/maps/documentation/geocoding

Both APIs require a key (``ISOCHRONE_GOOGLE_MAPS_API_KEY``).
"""

from __future__ import annotations

from isochrone_mapper.schemas import TravelMode

MAPS_API_BASE = "https://maps.googleapis.com/maps/api"
DISTANCE_MATRIX_API = f"{MAPS_API_BASE}/distancematrix/json"
GEOCODING_API = f"{MAPS_API_BASE}/geocode/json"

# Distance Matrix accepts at most 25 origins or 25 destinations per request
MAX_DESTINATIONS_PER_REQUEST = 25

TRAFFIC_MODEL = "best_guess"

# Top-level statuses that mean no request with this key can succeed
FATAL_STATUSES = frozenset({"REQUEST_DENIED"})


def api_mode(mode: TravelMode) -> str:
    """Google's lowercase ``mode`` parameter for a travel mode."""
    return mode.value.lower()
