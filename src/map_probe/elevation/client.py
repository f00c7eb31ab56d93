"""HTTP client for the remote elevation backend."""

import logging
from types import TracebackType

import httpx
from cachetools import LRUCache
from pydantic import ValidationError

from map_probe.config import Settings
from map_probe.elevation.schemas import Coordinate, ElevationResponse
from map_probe.exceptions import (
    ElevationBackendError,
    ElevationQueryError,
    ElevationResponseError,
)

logger = logging.getLogger(__name__)


class ElevationClient:
    """Look up ground elevation for single coordinates over HTTP.

    Each lookup is one ``GET <endpoint>?latitude=..&longitude=..&unit=..``
    carrying the configured bearer credential. Failures are never retried;
    successful answers are kept in an LRU cache so revisiting a position does
    not hit the network again.
    """

    def __init__(
        self,
        settings: Settings,
        *,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._settings = settings
        self._owns_http_client = http_client is None
        self._http_client = http_client or httpx.AsyncClient(
            timeout=httpx.Timeout(settings.request_timeout_seconds),
            verify=settings.verify_tls,
        )
        self._cache: LRUCache[tuple[float, float], float] | None = None
        if settings.cache_max_size > 0:
            self._cache = LRUCache(maxsize=settings.cache_max_size)

    def build_params(self, coordinate: Coordinate) -> dict[str, str | float]:
        """Query parameters for a lookup at ``coordinate``."""
        return {
            "latitude": coordinate.latitude,
            "longitude": coordinate.longitude,
            "unit": self._settings.elevation_unit,
        }

    def build_headers(self) -> dict[str, str]:
        """Request headers, including the bearer credential when one is set."""
        if not self._settings.elevation_token:
            return {}
        return {"Authorization": f"Bearer {self._settings.elevation_token}"}

    async def get_elevation(self, coordinate: Coordinate) -> float:
        """Fetch the elevation at a coordinate.

        Args:
            coordinate: Point to look up.

        Returns:
            Elevation in the configured unit (feet by default).

        Raises:
            ElevationBackendError: If the backend answers with a non-2xx status.
            ElevationResponseError: If the body is not ``{"elevation": <float>}``.
            ElevationQueryError: If the request fails or times out.
        """
        cache_key = (coordinate.latitude, coordinate.longitude)
        if self._cache is not None and cache_key in self._cache:
            return self._cache[cache_key]

        try:
            response = await self._http_client.get(
                self._settings.elevation_endpoint,
                params=self.build_params(coordinate),
                headers=self.build_headers(),
            )
        except httpx.TimeoutException as exc:
            logger.error(
                "Elevation request timed out",
                extra={"latitude": coordinate.latitude, "longitude": coordinate.longitude},
            )
            raise ElevationQueryError("Elevation request timed out") from exc
        except httpx.HTTPError as exc:
            logger.error(
                "Elevation request failed",
                extra={
                    "latitude": coordinate.latitude,
                    "longitude": coordinate.longitude,
                    "error": str(exc),
                },
            )
            raise ElevationQueryError(f"Elevation request failed: {exc}") from exc

        if not response.is_success:
            logger.error(
                "Elevation backend returned an error status",
                extra={"status_code": response.status_code},
            )
            raise ElevationBackendError(response.status_code)

        try:
            payload = ElevationResponse.model_validate_json(response.content)
        except ValidationError as exc:
            logger.error("Malformed elevation response", extra={"error": str(exc)})
            raise ElevationResponseError("Elevation backend returned a malformed body") from exc

        if self._cache is not None:
            self._cache[cache_key] = payload.elevation
        return payload.elevation

    async def aclose(self) -> None:
        """Close the underlying HTTP client if this instance created it."""
        if self._owns_http_client:
            await self._http_client.aclose()

    async def __aenter__(self) -> "ElevationClient":
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        await self.aclose()
