"""
Domain models for isochrone mapper.

Small immutable value types (coordinates, oracle answers, per-candidate
outcomes) are plain dataclasses; request validation at the public boundary
uses Pydantic.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum

from pydantic import BaseModel, Field, field_validator

# =============================================================================
# Coordinates and candidates
# =============================================================================


@dataclass(frozen=True, order=True)
class Coordinate:
    """A point on Earth in degrees. Orders lexicographically by (latitude, longitude)."""

    latitude: float
    longitude: float

    def as_lat_lng(self) -> str:
        """Return ``"lat,lng"`` as expected by Google Maps query parameters."""
        return f"{self.latitude},{self.longitude}"


class SampleStrategy(StrEnum):
    """Which sampling strategy produced a candidate point."""

    GRID = "grid"
    RING = "ring"


@dataclass(frozen=True)
class CandidatePoint:
    """A destination to test for reachability.

    ``strategy`` and ``level`` (grid pass or ring index) are diagnostic only.
    """

    coordinate: Coordinate
    strategy: SampleStrategy
    level: int


# =============================================================================
# Travel modes and oracle answers
# =============================================================================


class TravelMode(StrEnum):
    """Supported travel modes."""

    DRIVING = "DRIVING"
    WALKING = "WALKING"
    BICYCLING = "BICYCLING"
    TRANSIT = "TRANSIT"

    @classmethod
    def parse(cls, value: str) -> TravelMode:
        """Case-insensitive lookup (``"walking"`` -> ``TravelMode.WALKING``)."""
        return cls(value.strip().upper())

    @property
    def wants_traffic(self) -> bool:
        """Whether queries in this mode should ask for traffic-aware durations."""
        return self is TravelMode.DRIVING


class ElementStatus(StrEnum):
    """Per-destination status reported by the travel-time oracle."""

    OK = "OK"
    ERROR = "ERROR"


@dataclass(frozen=True)
class OracleElement:
    """One oracle answer, index-aligned with the destinations of a batch."""

    status: ElementStatus
    duration_seconds: float | None = None
    traffic_duration_seconds: float | None = None

    @property
    def effective_duration(self) -> float | None:
        """Traffic-aware duration when present, else the static duration."""
        if self.traffic_duration_seconds is not None:
            return self.traffic_duration_seconds
        return self.duration_seconds


# =============================================================================
# Classification
# =============================================================================


class OutcomeStatus(StrEnum):
    """Classification of a single candidate."""

    REACHABLE = "reachable"
    UNREACHABLE = "unreachable"
    FAILED = "failed"


@dataclass(frozen=True)
class QueryOutcome:
    """Classification of one candidate point.

    ``FAILED`` counts as unreachable for boundary purposes but is kept apart
    so callers can report how much of the sample was lost to oracle errors.
    """

    status: OutcomeStatus
    duration_seconds: float | None = None

    @classmethod
    def reachable(cls, duration_seconds: float) -> QueryOutcome:
        return cls(OutcomeStatus.REACHABLE, duration_seconds)

    @classmethod
    def unreachable(cls, duration_seconds: float | None = None) -> QueryOutcome:
        return cls(OutcomeStatus.UNREACHABLE, duration_seconds)

    @classmethod
    def failed(cls) -> QueryOutcome:
        return cls(OutcomeStatus.FAILED)

    @property
    def is_reachable(self) -> bool:
        return self.status is OutcomeStatus.REACHABLE


@dataclass(frozen=True)
class OutcomeCounts:
    """Diagnostic tallies over a classification."""

    reachable: int = 0
    unreachable: int = 0
    failed: int = 0

    @property
    def total(self) -> int:
        return self.reachable + self.unreachable + self.failed


# =============================================================================
# Results
# =============================================================================


@dataclass
class Isochrone:
    """A computed isochrone: the boundary polygon plus run diagnostics."""

    origin: Coordinate
    mode: TravelMode
    budget_minutes: int
    boundary: list[Coordinate]
    candidate_count: int = 0
    reachable_count: int = 0
    failed_count: int = 0
    warnings: list[str] = field(default_factory=list)


MIN_BUDGET_MINUTES = 1
MAX_BUDGET_MINUTES = 120


class IsochroneRequest(BaseModel):
    """Validated input for a single isochrone computation."""

    model_config = {"frozen": True}

    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)
    mode: TravelMode = TravelMode.DRIVING
    budget_minutes: int = Field(
        ..., ge=MIN_BUDGET_MINUTES, le=MAX_BUDGET_MINUTES, description="Travel-time budget"
    )

    @field_validator("mode", mode="before")
    @classmethod
    def _normalise_mode(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip().upper()
        return value

    @property
    def origin(self) -> Coordinate:
        return Coordinate(self.latitude, self.longitude)
