"""
Prefect flows.

Flows:
- isochrone: geocode an address, compute its isochrone, return GeoJSON

Usage (local):
    python -m isochrone_mapper.flows.isochrone "Ferry Building, San Francisco" 20 walking

Usage (Prefect):
    prefect server start  # Optional, for dashboard
    python -m isochrone_mapper.flows.isochrone ...
"""
