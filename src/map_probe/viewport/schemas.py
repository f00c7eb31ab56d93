"""Pydantic schemas for viewport extents."""

from pydantic import BaseModel, ConfigDict, Field


class BoundingBox(BaseModel):
    """Visible map extent in decimal degrees.

    ``west`` may be greater than ``east`` when the view straddles the
    antimeridian, and widgets that allow panning past it can report values
    outside [-180, 180]; neither is rejected.
    """

    model_config = ConfigDict(frozen=True)

    west: float = Field(allow_inf_nan=False)
    south: float = Field(allow_inf_nan=False)
    east: float = Field(allow_inf_nan=False)
    north: float = Field(allow_inf_nan=False)

    def to_query_param(self) -> str:
        """Render as ``west,south,east,north`` for WMS/WMTS style requests."""
        return f"{self.west},{self.south},{self.east},{self.north}"

    def __str__(self) -> str:
        return self.to_query_param()
