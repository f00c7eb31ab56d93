"""Read bounding boxes from a live map viewport."""

from typing import Protocol

from map_probe.viewport.schemas import BoundingBox


class ViewportSource(Protocol):
    """Synchronous read access to the map widget's current extent."""

    def get_bounds(self) -> BoundingBox: ...


class StaticViewport:
    """A viewport whose extent is set explicitly.

    Useful for headless drivers and tests: whoever moves the map assigns
    ``bounds`` and then reports the move to the probe.
    """

    def __init__(self, bounds: BoundingBox) -> None:
        self.bounds = bounds

    def get_bounds(self) -> BoundingBox:
        """The extent last assigned to ``bounds``."""
        return self.bounds


def derive_bounding_box(viewport: ViewportSource) -> BoundingBox:
    """Read the viewport's extent at call time.

    Args:
        viewport: Source of the current extent.

    Returns:
        A fresh BoundingBox with all four edges taken from the same read.
    """
    bounds = viewport.get_bounds()
    return BoundingBox(
        west=bounds.west,
        south=bounds.south,
        east=bounds.east,
        north=bounds.north,
    )
