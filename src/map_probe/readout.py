"""Text shown next to the cursor: coordinate plus elevation or error."""

from map_probe.elevation.schemas import Coordinate
from map_probe.state import ProbeState

LOADING_TEXT = "Loading..."


def format_coordinate(coordinate: Coordinate) -> str:
    """Coordinate line with five decimals per axis."""
    return f"Latitude: {coordinate.latitude:.5f}, Longitude: {coordinate.longitude:.5f}"


def format_elevation(state: ProbeState, unit: str = "feet") -> str:
    """Elevation line of the readout.

    The error message wins when the last settled lookup failed; before any
    lookup has settled the line reads ``Elevation: Loading...``.
    """
    if state.elevation_error:
        return state.elevation_error
    if state.elevation is None:
        return f"Elevation: {LOADING_TEXT}"
    return f"Elevation: {state.elevation:.2f} {unit}"


def format_readout(state: ProbeState, unit: str = "feet") -> list[str] | None:
    """Both readout lines, or None while the pointer has not entered the map."""
    if state.last_pointer is None:
        return None
    return [format_coordinate(state.last_pointer), format_elevation(state, unit)]
