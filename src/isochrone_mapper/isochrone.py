"""
Isochrone computation: sample -> query -> filter -> bound.

``IsochroneEngine.compute`` walks a linear sequence of stages::

    START -> SAMPLED -> QUERIED -> FILTERED -> BOUNDED -> DONE

Any failure ends the run (``FAILED``) and propagates to the caller; no stage
is retried. Every object created during a run is local to that call, so
concurrent computations share nothing but the injected collaborators.

Example::

    from isochrone_mapper import compute_isochrone
    from isochrone_mapper.schemas import Coordinate, TravelMode

    iso = await compute_isochrone(Coordinate(37.77, -122.42), TravelMode.WALKING, 15, oracle)
"""

from __future__ import annotations

import logging
import random
from enum import StrEnum
from typing import TYPE_CHECKING

from isochrone_mapper.boundary import BoundaryBuilder
from isochrone_mapper.exceptions import InsufficientReachablePointsError, IsochroneError
from isochrone_mapper.reachability import QueryConfig, ReachabilityQueryEngine, summarize_outcomes
from isochrone_mapper.sampling import PointSampler
from isochrone_mapper.schemas import Coordinate, Isochrone, IsochroneRequest, TravelMode

if TYPE_CHECKING:
    from isochrone_mapper.config import Settings
    from isochrone_mapper.protocols import TravelTimeOracle

logger = logging.getLogger(__name__)

MIN_BOUNDARY_POINTS = 3


class Stage(StrEnum):
    """Progress of a single computation."""

    START = "start"
    SAMPLED = "sampled"
    QUERIED = "queried"
    FILTERED = "filtered"
    BOUNDED = "bounded"
    DONE = "done"
    FAILED = "failed"


class IsochroneEngine:
    """Composes sampling, reachability queries and boundary extraction."""

    def __init__(
        self,
        oracle: TravelTimeOracle,
        *,
        sampler: PointSampler | None = None,
        query_engine: ReachabilityQueryEngine | None = None,
        boundary_builder: BoundaryBuilder | None = None,
    ) -> None:
        self.oracle = oracle
        self.sampler = sampler or PointSampler()
        self.query_engine = query_engine or ReachabilityQueryEngine()
        self.boundary_builder = boundary_builder or BoundaryBuilder()

    @classmethod
    def from_settings(cls, oracle: TravelTimeOracle, settings: Settings) -> IsochroneEngine:
        """Build an engine with batching and seeding taken from settings."""
        config = QueryConfig(
            chunk_size=settings.chunk_size,
            max_concurrent_chunks=settings.max_concurrent_chunks,
            wave_delay_seconds=settings.wave_delay_seconds,
        )
        return cls(
            oracle,
            sampler=PointSampler(random.Random(settings.random_seed)),
            query_engine=ReachabilityQueryEngine(config),
        )

    async def compute(
        self,
        origin: Coordinate,
        mode: TravelMode | str,
        budget_minutes: int,
    ) -> Isochrone:
        """
        Compute the isochrone for one origin, mode and budget.

        Args:
            origin: Resolved origin coordinate.
            mode: Travel mode (enum or case-insensitive name).
            budget_minutes: Travel-time budget, 1-120 minutes.

        Returns:
            The boundary polygon with run diagnostics.

        Raises:
            pydantic.ValidationError: Invalid origin, mode or budget.
            OracleUnreachableError: The travel-time oracle could not be used.
            InsufficientReachablePointsError: Fewer than three reachable
                points, or all of them collinear.
        """
        request = IsochroneRequest(
            latitude=origin.latitude,
            longitude=origin.longitude,
            mode=mode,
            budget_minutes=budget_minutes,
        )
        stage = Stage.START
        logger.info(
            "Starting isochrone calculation for (%.5f, %.5f), %d minutes, %s",
            origin.latitude,
            origin.longitude,
            request.budget_minutes,
            request.mode,
        )

        try:
            candidates = self.sampler.sample(request.origin, request.budget_minutes)
            stage = self._advance(stage, Stage.SAMPLED)

            outcomes = await self.query_engine.classify(
                request.origin, candidates, request.mode, request.budget_minutes, self.oracle
            )
            stage = self._advance(stage, Stage.QUERIED)

            reachable = [
                c.coordinate for c, o in zip(candidates, outcomes, strict=True) if o.is_reachable
            ]
            if len(reachable) < MIN_BOUNDARY_POINTS:
                raise InsufficientReachablePointsError(len(reachable))
            stage = self._advance(stage, Stage.FILTERED)

            boundary = self.boundary_builder.build(reachable)
            if len(boundary) < MIN_BOUNDARY_POINTS:
                raise InsufficientReachablePointsError(
                    len(reachable),
                    f"The {len(reachable)} reachable points are collinear; "
                    "no polygon can be formed.",
                )
            stage = self._advance(stage, Stage.BOUNDED)
        except IsochroneError as exc:
            logger.warning("Isochrone calculation failed after stage %s: %s", stage, exc)
            self._advance(stage, Stage.FAILED)
            raise

        counts = summarize_outcomes(outcomes)
        warnings: list[str] = []
        if counts.failed:
            warnings.append(f"{counts.failed} of {counts.total} points could not be queried")

        self._advance(stage, Stage.DONE)
        return Isochrone(
            origin=request.origin,
            mode=request.mode,
            budget_minutes=request.budget_minutes,
            boundary=boundary,
            candidate_count=len(candidates),
            reachable_count=len(reachable),
            failed_count=counts.failed,
            warnings=warnings,
        )

    @staticmethod
    def _advance(current: Stage, new: Stage) -> Stage:
        logger.debug("Stage %s -> %s", current, new)
        return new


async def compute_isochrone(
    origin: Coordinate,
    mode: TravelMode | str,
    budget_minutes: int,
    oracle: TravelTimeOracle,
    *,
    sampler: PointSampler | None = None,
    query_engine: ReachabilityQueryEngine | None = None,
    boundary_builder: BoundaryBuilder | None = None,
) -> Isochrone:
    """Single-call API: build a one-off engine and compute."""
    engine = IsochroneEngine(
        oracle,
        sampler=sampler,
        query_engine=query_engine,
        boundary_builder=boundary_builder,
    )
    return await engine.compute(origin, mode, budget_minutes)
