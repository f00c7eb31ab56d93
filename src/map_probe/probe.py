"""Event-to-query coordinator behind the map's coordinate and elevation readout."""

import asyncio
import logging
from collections.abc import Callable
from types import TracebackType

from map_probe.config import Settings
from map_probe.debounce import DebounceScheduler
from map_probe.elevation.query import (
    GENERIC_FAILURE_MESSAGE,
    ElevationLookup,
    ElevationQuery,
    ElevationQueryRunner,
    QueryStatus,
)
from map_probe.elevation.schemas import Coordinate
from map_probe.exceptions import InvalidCoordinateError, ProbeDisposedError
from map_probe.readout import format_readout
from map_probe.state import (
    BoundingBoxDerived,
    ElevationFailed,
    ElevationSucceeded,
    OverlayToggled,
    PointerMoved,
    ProbeEvent,
    ProbeState,
    reduce,
)
from map_probe.viewport.schemas import BoundingBox
from map_probe.viewport.service import ViewportSource, derive_bounding_box

logger = logging.getLogger(__name__)

VIEWPORT_KEY = "viewport"
ELEVATION_KEY = "elevation"

StateListener = Callable[[ProbeState], None]


def _loop_running() -> bool:
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        return False
    return True


class MapProbe:
    """Turn viewport and pointer events into bounding box and elevation state.

    Pointer positions are displayed at full event rate while elevation
    lookups are debounced; viewport moves are debounced before the bounding
    box is re-read. Every handler runs on the event loop thread and never
    raises: failures end up in ``state.elevation_error`` or in the log.

    Use as ``async with MapProbe(...) as probe`` or call ``mount()`` and
    ``aclose()`` explicitly.
    """

    def __init__(
        self,
        viewport: ViewportSource,
        lookup: ElevationLookup,
        settings: Settings,
        *,
        scheduler: DebounceScheduler | None = None,
    ) -> None:
        self._viewport = viewport
        self._settings = settings
        self._scheduler = scheduler or DebounceScheduler()
        self._queries = ElevationQueryRunner(lookup, self._on_query_settled)
        self._listeners: list[StateListener] = []
        self._state: ProbeState | None = None
        self._disposed = False

    @property
    def state(self) -> ProbeState | None:
        """Current snapshot, None before ``mount()``."""
        return self._state

    @property
    def mounted(self) -> bool:
        """True between ``mount()`` and ``dispose()``."""
        return self._state is not None and not self._disposed

    @property
    def disposed(self) -> bool:
        """True once ``dispose()`` has run."""
        return self._disposed

    @property
    def latest_generation(self) -> int:
        """Generation of the most recently issued elevation query."""
        return self._queries.latest_generation

    def readout(self) -> list[str] | None:
        """Coordinate and elevation lines for the current state."""
        if self._state is None:
            return None
        return format_readout(self._state, self._settings.elevation_unit)

    def overlay_button_label(self) -> str:
        """Caption for the overlay toggle button, e.g. ``Hide Airports``."""
        overlay = self._state.overlay if self._state else ProbeState().overlay
        return overlay.action_label(self._settings.overlay_name)

    def mount(self) -> ProbeState:
        """Create the initial state and read the first bounding box right away.

        Raises:
            ProbeDisposedError: If the probe has already been disposed.
        """
        if self._disposed:
            raise ProbeDisposedError("Cannot mount a disposed probe")
        if self._state is not None:
            logger.warning("Probe already mounted")
            return self._state

        self._state = ProbeState()
        self._dispatch(BoundingBoxDerived(derive_bounding_box(self._viewport)))
        logger.info("Probe mounted", extra={"bbox": str(self._state.bbox)})
        return self._state

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """Call ``listener`` with the new state after every change.

        Returns:
            A callable that removes the listener.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def on_viewport_changed(self, bounds: BoundingBox | None = None) -> None:
        """Handle a pan or zoom of the map.

        The extent is re-read from the viewport when the debounce expires, so
        ``bounds`` only serves as a log hint.
        """
        if not self.mounted:
            logger.debug("Ignoring viewport change on inactive probe")
            return
        if not _loop_running():
            logger.warning("Dropping viewport change outside a running event loop")
            return
        logger.debug("Viewport changed", extra={"bbox": str(bounds) if bounds else None})
        self._scheduler.schedule(
            VIEWPORT_KEY, self._settings.viewport_debounce_ms, self._refresh_bounding_box
        )

    def on_pointer_moved(self, latitude: float, longitude: float) -> None:
        """Show the pointer position now and look up its elevation once it settles."""
        if not self.mounted:
            logger.debug("Ignoring pointer move on inactive probe")
            return
        try:
            coordinate = Coordinate.from_pointer(latitude, longitude)
        except InvalidCoordinateError as exc:
            logger.warning("Dropping pointer event", extra={"error": str(exc)})
            return
        if not _loop_running():
            logger.warning("Dropping pointer event outside a running event loop")
            return

        self._dispatch(PointerMoved(coordinate))
        self._scheduler.schedule(
            ELEVATION_KEY,
            self._settings.elevation_debounce_ms,
            self._issue_elevation_query,
            coordinate,
        )

    def toggle_overlay(self) -> None:
        """Flip overlay visibility."""
        if not self.mounted:
            logger.debug("Ignoring overlay toggle on inactive probe")
            return
        self._dispatch(OverlayToggled())

    def dispose(self) -> None:
        """Cancel pending timers and stop every further state change.

        Lookups already in flight are allowed to finish but their results are
        dropped. Safe to call more than once.
        """
        if self._disposed:
            return
        self._disposed = True
        self._scheduler.cancel(VIEWPORT_KEY)
        self._scheduler.cancel(ELEVATION_KEY)
        self._queries.close()
        self._listeners.clear()
        logger.info("Probe disposed", extra={"in_flight": self._queries.in_flight})

    async def drain(self) -> None:
        """Wait for all in-flight elevation lookups to settle."""
        await self._queries.drain()

    async def aclose(self) -> None:
        """Dispose, then wait for in-flight lookups to finish."""
        self.dispose()
        await self._queries.drain()

    async def __aenter__(self) -> "MapProbe":
        self.mount()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    def _refresh_bounding_box(self) -> None:
        if not self.mounted:
            return
        self._dispatch(BoundingBoxDerived(derive_bounding_box(self._viewport)))

    def _issue_elevation_query(self, coordinate: Coordinate) -> None:
        if not self.mounted:
            return
        self._queries.issue(coordinate)

    def _on_query_settled(self, query: ElevationQuery) -> None:
        if not self.mounted:
            return
        if query.status is QueryStatus.SUCCEEDED and query.elevation is not None:
            event: ProbeEvent = ElevationSucceeded(query.generation, query.elevation)
        else:
            event = ElevationFailed(query.generation, query.error or GENERIC_FAILURE_MESSAGE)
        if not self._dispatch(event):
            logger.debug(
                "Discarding stale elevation result",
                extra={"generation": query.generation},
            )

    def _dispatch(self, event: ProbeEvent) -> bool:
        if self._state is None:
            return False
        new_state = reduce(self._state, event)
        if new_state is self._state:
            return False
        self._state = new_state
        for listener in list(self._listeners):
            try:
                listener(new_state)
            except Exception:
                logger.exception("State listener failed")
        return True
