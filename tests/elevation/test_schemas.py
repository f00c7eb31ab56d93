"""Tests for coordinate and elevation response schemas."""

import math

import pytest
from pydantic import ValidationError

from map_probe.elevation.schemas import Coordinate, ElevationResponse
from map_probe.exceptions import InvalidCoordinateError


class TestCoordinate:
    def test_valid_coordinate(self) -> None:
        coordinate = Coordinate(latitude=51.5, longitude=-0.1)

        assert coordinate.latitude == 51.5
        assert coordinate.longitude == -0.1

    def test_accepts_boundaries(self) -> None:
        Coordinate(latitude=90.0, longitude=180.0)
        Coordinate(latitude=-90.0, longitude=-180.0)

    def test_rejects_latitude_out_of_range(self) -> None:
        with pytest.raises(ValidationError):
            Coordinate(latitude=91.0, longitude=0.0)

    def test_rejects_longitude_out_of_range(self) -> None:
        with pytest.raises(ValidationError):
            Coordinate(latitude=0.0, longitude=-181.0)

    def test_is_hashable_and_immutable(self) -> None:
        coordinate = Coordinate(latitude=10.0, longitude=20.0)

        assert {coordinate: 1}[Coordinate(latitude=10.0, longitude=20.0)] == 1
        with pytest.raises(ValidationError):
            coordinate.latitude = 11.0  # type: ignore[misc]


class TestFromPointer:
    def test_passes_through_valid_position(self) -> None:
        coordinate = Coordinate.from_pointer(10.1, 20.1)

        assert coordinate == Coordinate(latitude=10.1, longitude=20.1)

    def test_wraps_longitude_east_of_antimeridian(self) -> None:
        coordinate = Coordinate.from_pointer(10.0, 190.0)

        assert coordinate.longitude == pytest.approx(-170.0)

    def test_wraps_longitude_west_of_antimeridian(self) -> None:
        coordinate = Coordinate.from_pointer(10.0, -200.0)

        assert coordinate.longitude == pytest.approx(160.0)

    def test_rejects_latitude_out_of_range(self) -> None:
        with pytest.raises(InvalidCoordinateError, match="Invalid latitude"):
            Coordinate.from_pointer(91.0, 0.0)

    def test_rejects_nan(self) -> None:
        with pytest.raises(InvalidCoordinateError, match="finite"):
            Coordinate.from_pointer(math.nan, 0.0)

    def test_rejects_non_numeric(self) -> None:
        with pytest.raises(InvalidCoordinateError, match="Invalid pointer position"):
            Coordinate.from_pointer("north", 0.0)  # type: ignore[arg-type]

    def test_error_carries_code(self) -> None:
        with pytest.raises(InvalidCoordinateError) as excinfo:
            Coordinate.from_pointer(-95.0, 0.0)

        assert excinfo.value.code == "INVALID_COORDINATE"


class TestElevationResponse:
    def test_parses_float(self) -> None:
        assert ElevationResponse.model_validate_json(b'{"elevation": 50.5}').elevation == 50.5

    def test_coerces_integer(self) -> None:
        assert ElevationResponse.model_validate_json(b'{"elevation": 50}').elevation == 50.0

    def test_ignores_extra_keys(self) -> None:
        response = ElevationResponse.model_validate_json(b'{"elevation": -430.0, "unit": "feet"}')

        assert response.elevation == -430.0

    def test_rejects_missing_elevation(self) -> None:
        with pytest.raises(ValidationError):
            ElevationResponse.model_validate_json(b'{"height": 12}')

    def test_rejects_null_elevation(self) -> None:
        with pytest.raises(ValidationError):
            ElevationResponse.model_validate_json(b'{"elevation": null}')

    @pytest.mark.parametrize("body", [b'{"elevation": true}', b'{"elevation": "123"}'])
    def test_rejects_non_numeric_elevation(self, body: bytes) -> None:
        with pytest.raises(ValidationError):
            ElevationResponse.model_validate_json(body)
