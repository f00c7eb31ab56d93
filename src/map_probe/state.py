"""Display state of the probe and the pure function that advances it."""

from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict

from map_probe.elevation.schemas import Coordinate
from map_probe.overlay import Overlay
from map_probe.viewport.schemas import BoundingBox


class ProbeState(BaseModel):
    """Snapshot handed to the render target after every change.

    ``elevation`` and ``elevation_error`` are never both set.
    ``elevation_generation`` is the generation of the lookup whose outcome is
    currently displayed, 0 before any lookup has settled.
    """

    model_config = ConfigDict(frozen=True)

    last_pointer: Coordinate | None = None
    elevation: float | None = None
    elevation_error: str | None = None
    bbox: BoundingBox | None = None
    overlay: Overlay = Overlay.SHOWN
    elevation_generation: int = 0

    @property
    def show_overlay(self) -> bool:
        """True when the overlay layer should be rendered."""
        return self.overlay.visible


@dataclass(frozen=True, slots=True)
class PointerMoved:
    """The pointer moved to ``coordinate``."""

    coordinate: Coordinate


@dataclass(frozen=True, slots=True)
class BoundingBoxDerived:
    """A fresh bounding box was read from the viewport."""

    bbox: BoundingBox


@dataclass(frozen=True, slots=True)
class ElevationSucceeded:
    """The lookup with ``generation`` returned an elevation."""

    generation: int
    elevation: float


@dataclass(frozen=True, slots=True)
class ElevationFailed:
    """The lookup with ``generation`` failed with ``message``."""

    generation: int
    message: str


@dataclass(frozen=True, slots=True)
class OverlayToggled:
    """The user flipped overlay visibility."""


ProbeEvent = (
    PointerMoved | BoundingBoxDerived | ElevationSucceeded | ElevationFailed | OverlayToggled
)


def reduce(state: ProbeState, event: ProbeEvent) -> ProbeState:
    """Return the state that follows ``state`` after ``event``.

    Elevation outcomes are applied only when their generation is newer than
    the one on display, so a response that arrives after a more recently
    issued one is dropped. In that case ``state`` itself is returned.

    Raises:
        TypeError: If ``event`` is not a known probe event.
    """
    if isinstance(event, PointerMoved):
        return state.model_copy(update={"last_pointer": event.coordinate})

    if isinstance(event, BoundingBoxDerived):
        return state.model_copy(update={"bbox": event.bbox})

    if isinstance(event, ElevationSucceeded):
        if event.generation <= state.elevation_generation:
            return state
        return state.model_copy(
            update={
                "elevation": event.elevation,
                "elevation_error": None,
                "elevation_generation": event.generation,
            }
        )

    if isinstance(event, ElevationFailed):
        if event.generation <= state.elevation_generation:
            return state
        return state.model_copy(
            update={
                "elevation": None,
                "elevation_error": event.message,
                "elevation_generation": event.generation,
            }
        )

    if isinstance(event, OverlayToggled):
        return state.model_copy(update={"overlay": state.overlay.toggled()})

    raise TypeError(f"Unknown probe event: {event!r}")
