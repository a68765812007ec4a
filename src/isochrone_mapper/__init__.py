"""Isochrone Mapper - the area reachable from a point within a travel-time budget.

Architecture::

    geometry.py      Spherical arithmetic (offset, distance, bearing)
    sampling.py      Candidate destinations around the origin (grid + rings)
    reachability.py  Chunked, wave-limited oracle queries -> per-point outcomes
    boundary.py      Convex hull + long-edge smoothing
    isochrone.py     Orchestration: sample -> query -> filter -> bound
    datasources/     Google Maps oracle and geocoder
    flows/           Prefect orchestration (geocode, compute, export)
    services/        Shared HTTP session

Data flow: address -> geocoder -> origin -> sampler -> oracle -> hull -> GeoJSON

The engine itself takes an already-resolved origin and an injected oracle;
it renders nothing and caches nothing.
"""

__version__ = "0.1.0"

from isochrone_mapper.config import Settings, get_settings
from isochrone_mapper.isochrone import IsochroneEngine, compute_isochrone
from isochrone_mapper.schemas import Coordinate, Isochrone, TravelMode

__all__ = [
    "Coordinate",
    "Isochrone",
    "IsochroneEngine",
    "Settings",
    "TravelMode",
    "__version__",
    "compute_isochrone",
    "get_settings",
]
