"""Capability interfaces supplied by the caller.

The engine never looks these up from ambient state; concrete Google Maps
implementations live in ``datasources/google_maps``.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol, runtime_checkable

from isochrone_mapper.schemas import Coordinate, OracleElement, TravelMode


@runtime_checkable
class GeocodingService(Protocol):
    """Resolve free-form address text to a coordinate.

    Raises ``AddressNotFoundError`` when nothing matches.
    """

    def resolve(self, address: str) -> Coordinate: ...


@runtime_checkable
class TravelTimeOracle(Protocol):
    """
    Batch travel durations from one origin.

    Returns one ``OracleElement`` per destination, in the same order.
    Batches hold at most 25 destinations.
    Raises ``ChunkQueryError`` when this batch failed and
    ``OracleUnreachableError`` when no batch can succeed.
    """

    async def batch_duration(
        self,
        origin: Coordinate,
        destinations: Sequence[Coordinate],
        mode: TravelMode,
        want_traffic_aware: bool,
    ) -> list[OracleElement]: ...
