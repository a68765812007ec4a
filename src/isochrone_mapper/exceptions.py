"""Error taxonomy for isochrone computation.

Everything the engine raises derives from ``IsochroneError`` so callers can
catch one type. ``ChunkQueryError`` is the only non-fatal member: the query
engine absorbs it and downgrades the affected candidates to ``FAILED``.
"""

from __future__ import annotations


class IsochroneError(Exception):
    """Base exception for isochrone computation."""


class AddressNotFoundError(IsochroneError):
    """Raised when the geocoder cannot resolve an address to a coordinate."""


class OracleError(IsochroneError):
    """Base class for travel-time oracle failures."""


class OracleUnreachableError(OracleError):
    """Raised when the travel-time oracle cannot be used at all."""


class ChunkQueryError(OracleError):
    """Raised by an oracle when a single batch query failed."""


class InsufficientReachablePointsError(IsochroneError):
    """Raised when too few reachable points remain to form a polygon."""

    def __init__(self, reachable_count: int, message: str | None = None) -> None:
        self.reachable_count = reachable_count
        super().__init__(
            message
            or (
                f"Not enough reachable points to create an isochrone ({reachable_count} found). "
                "Try increasing the travel time or changing the travel mode."
            )
        )
