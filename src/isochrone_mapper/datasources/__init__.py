"""External service integrations.

Each subdirectory is one provider:

    datasources/{name}/
    ├── __init__.py       # Public API re-exports
    ├── client.py         # API URLs, limits, shared constants
    └── {feature}.py      # One module per endpoint/capability

Adding a provider
-----------------
1. Implement the capability interfaces from ``isochrone_mapper.protocols``:
   ``TravelTimeOracle.batch_duration`` (async, one batch per call) and/or
   ``GeocodingService.resolve``.

2. Map provider failures onto the exception taxonomy:
   - batch-level failure  -> ``ChunkQueryError`` (absorbed by the engine)
   - unusable credentials -> ``OracleUnreachableError`` (fatal)
   - no geocoding match   -> ``AddressNotFoundError``

3. Re-export the public API in ``__init__.py`` with ``__all__``.

4. Add tests in ``tests/test_{name}.py``; use ``httpx.MockTransport`` for
   async clients.
"""
