"""Generation-tagged elevation queries."""

import asyncio
import logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Protocol

from map_probe.elevation.schemas import Coordinate
from map_probe.exceptions import ElevationQueryError, ProbeDisposedError

logger = logging.getLogger(__name__)

GENERIC_FAILURE_MESSAGE = "Failed to fetch elevation data."


class ElevationLookup(Protocol):
    """Anything that can resolve a coordinate to an elevation."""

    async def get_elevation(self, coordinate: Coordinate) -> float: ...


class QueryStatus(str, Enum):
    """Lifecycle of an issued elevation query."""

    PENDING = "pending"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass(slots=True)
class ElevationQuery:
    """One issued lookup and, once settled, its outcome."""

    coordinate: Coordinate
    generation: int
    status: QueryStatus = QueryStatus.PENDING
    elevation: float | None = None
    error: str | None = None


class ElevationQueryRunner:
    """Issue lookups as tasks, each tagged with a strictly increasing generation.

    Settled queries are handed to ``on_settled`` in completion order, which
    may differ from issue order; the receiver compares generations to decide
    whether an outcome is still current. Closing the runner stops new
    generations from being issued and suppresses late completions, while the
    lookups already in flight are left to finish on their own.
    """

    def __init__(
        self,
        lookup: ElevationLookup,
        on_settled: Callable[[ElevationQuery], None],
    ) -> None:
        self._lookup = lookup
        self._on_settled = on_settled
        self._generation = 0
        self._closed = False
        self._tasks: set[asyncio.Task[None]] = set()

    @property
    def latest_generation(self) -> int:
        """Generation of the most recently issued query, 0 if none."""
        return self._generation

    @property
    def in_flight(self) -> int:
        """Number of lookups that have not finished yet."""
        return len(self._tasks)

    @property
    def closed(self) -> bool:
        """True once the runner refuses new queries."""
        return self._closed

    def issue(self, coordinate: Coordinate) -> ElevationQuery:
        """Start a lookup for ``coordinate`` under a new generation.

        Raises:
            ProbeDisposedError: If the runner has been closed.
        """
        if self._closed:
            raise ProbeDisposedError("Cannot issue elevation queries after close")

        self._generation += 1
        query = ElevationQuery(coordinate=coordinate, generation=self._generation)
        task = asyncio.get_running_loop().create_task(self._run(query))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        logger.debug(
            "Elevation query issued",
            extra={
                "generation": query.generation,
                "latitude": coordinate.latitude,
                "longitude": coordinate.longitude,
            },
        )
        return query

    async def _run(self, query: ElevationQuery) -> None:
        try:
            elevation = await self._lookup.get_elevation(query.coordinate)
        except ElevationQueryError as exc:
            query.status = QueryStatus.FAILED
            query.error = str(exc) or GENERIC_FAILURE_MESSAGE
        except Exception:
            logger.exception(
                "Unexpected error during elevation lookup",
                extra={"generation": query.generation},
            )
            query.status = QueryStatus.FAILED
            query.error = GENERIC_FAILURE_MESSAGE
        else:
            query.status = QueryStatus.SUCCEEDED
            query.elevation = elevation

        if self._closed:
            logger.debug(
                "Discarding elevation result after close",
                extra={"generation": query.generation},
            )
            return
        self._on_settled(query)

    def close(self) -> None:
        """Refuse new queries and suppress completions of in-flight ones."""
        self._closed = True

    async def drain(self) -> None:
        """Wait until every in-flight lookup has finished."""
        while self._tasks:
            await asyncio.gather(*self._tasks, return_exceptions=True)

    async def aclose(self) -> None:
        """Close the runner, then wait for in-flight lookups."""
        self.close()
        await self.drain()
