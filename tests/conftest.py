"""Shared test fixtures."""

import pytest
from helpers import FakeBackend, GatedLookup, RecordingLookup

from map_probe.config import Settings
from map_probe.viewport.schemas import BoundingBox
from map_probe.viewport.service import StaticViewport

BACKEND_URL = "http://elevation.test/elevation/v1/elevation"
WORLD = BoundingBox(west=-180.0, south=-90.0, east=180.0, north=90.0)


@pytest.fixture
def settings() -> Settings:
    """Settings with short debounce delays and an in-process backend URL."""
    return Settings(
        elevation_endpoint=BACKEND_URL,
        elevation_token="test-token",
        viewport_debounce_ms=20,
        elevation_debounce_ms=40,
        request_timeout_seconds=2.0,
        cache_max_size=100,
    )


@pytest.fixture
def viewport() -> StaticViewport:
    return StaticViewport(WORLD)


@pytest.fixture
def backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture
def recording_lookup() -> RecordingLookup:
    return RecordingLookup()


@pytest.fixture
def gated_lookup() -> GatedLookup:
    return GatedLookup()
