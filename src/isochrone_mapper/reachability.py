"""
Batched, rate-limited reachability classification.

Candidates are split into fixed-size chunks (the oracle's batch ceiling).
Chunks go out in waves of at most ``max_concurrent_chunks`` concurrent
requests, with a fixed pause between waves to bound the burst rate.

A failed chunk is not retried and does not abort the run: its candidates are
marked ``FAILED`` and the remaining chunks continue. Only
``OracleUnreachableError`` (or every chunk failing) is fatal.

Each chunk result carries its start index and is scattered into an
index-aligned array once its wave completes, so the output order matches the
input order whatever order the requests finish in.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass
from typing import TypeVar

from isochrone_mapper.exceptions import OracleUnreachableError
from isochrone_mapper.protocols import TravelTimeOracle
from isochrone_mapper.schemas import (
    CandidatePoint,
    Coordinate,
    ElementStatus,
    OracleElement,
    OutcomeCounts,
    OutcomeStatus,
    QueryOutcome,
    TravelMode,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

MAX_CHUNK_SIZE = 25  # oracle batch ceiling
DEFAULT_MAX_CONCURRENT_CHUNKS = 3
DEFAULT_WAVE_DELAY_SECONDS = 0.2


@dataclass(frozen=True)
class QueryConfig:
    """Batching and rate-limit settings for oracle queries."""

    chunk_size: int = MAX_CHUNK_SIZE
    max_concurrent_chunks: int = DEFAULT_MAX_CONCURRENT_CHUNKS
    wave_delay_seconds: float = DEFAULT_WAVE_DELAY_SECONDS

    def __post_init__(self) -> None:
        if not 1 <= self.chunk_size <= MAX_CHUNK_SIZE:
            msg = f"chunk_size must be between 1 and {MAX_CHUNK_SIZE}, got {self.chunk_size}"
            raise ValueError(msg)
        if self.max_concurrent_chunks < 1:
            msg = f"max_concurrent_chunks must be at least 1, got {self.max_concurrent_chunks}"
            raise ValueError(msg)
        if self.wave_delay_seconds < 0:
            msg = f"wave_delay_seconds must not be negative, got {self.wave_delay_seconds}"
            raise ValueError(msg)


@dataclass(frozen=True)
class _ChunkResult:
    start: int
    outcomes: list[QueryOutcome]
    failed: bool = False


def chunked(items: Sequence[T], size: int) -> list[tuple[int, list[T]]]:
    """Split ``items`` into ``(start_index, chunk)`` pairs of at most ``size`` items."""
    return [(start, list(items[start : start + size])) for start in range(0, len(items), size)]


def classify_element(element: OracleElement, budget_seconds: float) -> QueryOutcome:
    """Classify one oracle answer against the travel-time budget."""
    if element.status is not ElementStatus.OK:
        return QueryOutcome.unreachable()
    duration = element.effective_duration
    if duration is None:
        return QueryOutcome.unreachable()
    if duration <= budget_seconds:
        return QueryOutcome.reachable(duration)
    return QueryOutcome.unreachable(duration)


def summarize_outcomes(outcomes: Sequence[QueryOutcome]) -> OutcomeCounts:
    """Count reachable / unreachable / failed outcomes."""
    statuses = [o.status for o in outcomes]
    return OutcomeCounts(
        reachable=statuses.count(OutcomeStatus.REACHABLE),
        unreachable=statuses.count(OutcomeStatus.UNREACHABLE),
        failed=statuses.count(OutcomeStatus.FAILED),
    )


class ReachabilityQueryEngine:
    """Classifies candidate points as reachable or not via a travel-time oracle."""

    def __init__(
        self,
        config: QueryConfig | None = None,
        *,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self.config = config or QueryConfig()
        self._sleep = sleep

    async def classify(
        self,
        origin: Coordinate,
        candidates: Sequence[CandidatePoint],
        mode: TravelMode,
        budget_minutes: int,
        oracle: TravelTimeOracle,
    ) -> list[QueryOutcome]:
        """
        Classify every candidate, index-aligned with ``candidates``.

        Raises:
            OracleUnreachableError: The oracle reported it cannot be used, or
                every chunk failed.
        """
        destinations = [c.coordinate for c in candidates]
        chunks = chunked(destinations, self.config.chunk_size)
        per_wave = self.config.max_concurrent_chunks
        waves = [chunks[i : i + per_wave] for i in range(0, len(chunks), per_wave)]
        budget_seconds = budget_minutes * 60

        results: list[QueryOutcome | None] = [None] * len(destinations)
        failed_chunks = 0
        processed = 0

        for wave_number, wave in enumerate(waves, start=1):
            wave_results = await self._run_wave(wave, origin, mode, budget_seconds, oracle)
            for chunk_result in wave_results:
                start = chunk_result.start
                results[start : start + len(chunk_result.outcomes)] = chunk_result.outcomes
                if chunk_result.failed:
                    failed_chunks += 1
            processed += len(wave)
            logger.debug("Processed chunk %d/%d", processed, len(chunks))

            if wave_number < len(waves):
                await self._sleep(self.config.wave_delay_seconds)

        if chunks and failed_chunks == len(chunks):
            msg = f"All {len(chunks)} travel-time queries failed"
            raise OracleUnreachableError(msg)

        outcomes = [o if o is not None else QueryOutcome.failed() for o in results]
        counts = summarize_outcomes(outcomes)
        logger.info(
            "Found %d reachable points out of %d total (%d failed)",
            counts.reachable,
            counts.total,
            counts.failed,
        )
        return outcomes

    async def _run_wave(
        self,
        wave: list[tuple[int, list[Coordinate]]],
        origin: Coordinate,
        mode: TravelMode,
        budget_seconds: float,
        oracle: TravelTimeOracle,
    ) -> list[_ChunkResult]:
        tasks = [
            asyncio.create_task(
                self._query_chunk(start, chunk, origin, mode, budget_seconds, oracle)
            )
            for start, chunk in wave
        ]
        try:
            return list(await asyncio.gather(*tasks))
        except BaseException:
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise

    async def _query_chunk(
        self,
        start: int,
        chunk: list[Coordinate],
        origin: Coordinate,
        mode: TravelMode,
        budget_seconds: float,
        oracle: TravelTimeOracle,
    ) -> _ChunkResult:
        try:
            elements = await oracle.batch_duration(origin, chunk, mode, mode.wants_traffic)
        except OracleUnreachableError:
            raise
        except Exception as exc:  # noqa: BLE001
            logger.warning("Chunk at index %d (%d points) failed: %s", start, len(chunk), exc)
            return _ChunkResult(start, [QueryOutcome.failed()] * len(chunk), failed=True)

        if len(elements) != len(chunk):
            logger.warning(
                "Chunk at index %d returned %d elements for %d destinations",
                start,
                len(elements),
                len(chunk),
            )
            return _ChunkResult(start, [QueryOutcome.failed()] * len(chunk), failed=True)

        return _ChunkResult(start, [classify_element(e, budget_seconds) for e in elements])
