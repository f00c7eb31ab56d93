"""Probe session entry point."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from map_probe.config import Settings
from map_probe.elevation.client import ElevationClient
from map_probe.elevation.query import ElevationLookup
from map_probe.probe import MapProbe
from map_probe.viewport.service import ViewportSource

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def probe_session(
    viewport: ViewportSource,
    settings: Settings | None = None,
    lookup: ElevationLookup | None = None,
) -> AsyncIterator[MapProbe]:
    """Run a mounted probe for the lifetime of the ``async with`` block.

    Builds an ElevationClient from the settings unless a lookup is injected,
    mounts the probe on entry, and on every exit path disposes the probe,
    waits for in-flight lookups and closes the client it created.
    """
    settings = settings or Settings.from_env()
    client: ElevationClient | None = None
    if lookup is None:
        client = ElevationClient(settings)
        lookup = client

    probe = MapProbe(viewport, lookup, settings)
    try:
        probe.mount()
        logger.info(
            "Probe session started",
            extra={"elevation_endpoint": settings.elevation_endpoint},
        )
        yield probe
    finally:
        await probe.aclose()
        if client is not None:
            await client.aclose()
        logger.info("Probe session closed")
