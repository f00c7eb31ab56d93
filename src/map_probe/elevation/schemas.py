"""Pydantic schemas for coordinates and elevation backend responses."""

import math

from pydantic import BaseModel, ConfigDict, Field

from map_probe.exceptions import InvalidCoordinateError


class Coordinate(BaseModel):
    """A geographic point in decimal degrees."""

    model_config = ConfigDict(frozen=True)

    latitude: float = Field(ge=-90, le=90, allow_inf_nan=False)
    longitude: float = Field(ge=-180, le=180, allow_inf_nan=False)

    @classmethod
    def from_pointer(cls, latitude: float, longitude: float) -> "Coordinate":
        """Build a coordinate from a raw pointer event.

        Longitudes past the antimeridian are wrapped back into [-180, 180].

        Args:
            latitude: Latitude reported by the map widget.
            longitude: Longitude reported by the map widget, possibly unwrapped.

        Returns:
            A validated Coordinate.

        Raises:
            InvalidCoordinateError: If a value is not finite or the latitude
                is out of range.
        """
        try:
            latitude = float(latitude)
            longitude = float(longitude)
        except (TypeError, ValueError) as exc:
            raise InvalidCoordinateError(
                f"Invalid pointer position: ({latitude!r}, {longitude!r})"
            ) from exc

        if not (math.isfinite(latitude) and math.isfinite(longitude)):
            raise InvalidCoordinateError(
                f"Invalid pointer position: ({latitude}, {longitude}). Values must be finite."
            )
        if not (-90 <= latitude <= 90):
            raise InvalidCoordinateError(
                f"Invalid latitude: {latitude}. Must be between -90 and 90."
            )
        if not (-180 <= longitude <= 180):
            longitude = (longitude + 180.0) % 360.0 - 180.0

        return cls(latitude=latitude, longitude=longitude)


class ElevationResponse(BaseModel):
    """Success body returned by the elevation backend."""

    elevation: float = Field(strict=True, allow_inf_nan=False)
