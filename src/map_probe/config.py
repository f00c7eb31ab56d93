"""Probe configuration loaded from environment variables."""

import os
from dataclasses import dataclass

_TRUTHY = {"1", "true", "yes", "on"}


@dataclass(frozen=True, slots=True)
class Settings:
    """Probe settings populated from environment variables."""

    elevation_endpoint: str = "https://127.0.0.1:51100/elevation/v1/elevation"
    elevation_token: str = ""
    elevation_unit: str = "feet"
    viewport_debounce_ms: int = 250
    elevation_debounce_ms: int = 500
    request_timeout_seconds: float = 10.0
    cache_max_size: int = 1024
    verify_tls: bool = True
    overlay_name: str = "Airports"

    @classmethod
    def from_env(cls) -> "Settings":
        """Create settings from environment variables.

        Returns:
            A frozen Settings instance with values from the environment.
        """
        return cls(
            elevation_endpoint=os.getenv(
                "ELEVATION_ENDPOINT", "https://127.0.0.1:51100/elevation/v1/elevation"
            ),
            elevation_token=os.getenv("ELEVATION_TOKEN", ""),
            elevation_unit=os.getenv("ELEVATION_UNIT", "feet"),
            viewport_debounce_ms=int(os.getenv("VIEWPORT_DEBOUNCE_MS", "250")),
            elevation_debounce_ms=int(os.getenv("ELEVATION_DEBOUNCE_MS", "500")),
            request_timeout_seconds=float(os.getenv("REQUEST_TIMEOUT_SECONDS", "10.0")),
            cache_max_size=int(os.getenv("CACHE_MAX_SIZE", "1024")),
            verify_tls=os.getenv("VERIFY_TLS", "true").strip().lower() in _TRUTHY,
            overlay_name=os.getenv("OVERLAY_NAME", "Airports"),
        )
