"""Google Maps Platform data source.

Concrete collaborators for the engine's capability interfaces.

Public API:
  - distance_matrix: DistanceMatrixOracle (async ``TravelTimeOracle``)
  - geocoding: GoogleGeocoder (``GeocodingService``)
  - client: API URLs, batch limits
"""

from isochrone_mapper.datasources.google_maps.client import (
    DISTANCE_MATRIX_API,
    GEOCODING_API,
    MAX_DESTINATIONS_PER_REQUEST,
)
from isochrone_mapper.datasources.google_maps.distance_matrix import (
    DistanceMatrixOracle,
    parse_elements,
)
from isochrone_mapper.datasources.google_maps.geocoding import GoogleGeocoder

__all__ = [
    "DISTANCE_MATRIX_API",
    "GEOCODING_API",
    "MAX_DESTINATIONS_PER_REQUEST",
    "DistanceMatrixOracle",
    "GoogleGeocoder",
    "parse_elements",
]
