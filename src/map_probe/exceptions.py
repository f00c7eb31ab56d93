"""Custom exception hierarchy for the probe."""


class AppError(Exception):
    """Base exception for the probe."""

    def __init__(self, message: str, *, code: str | None = None) -> None:
        super().__init__(message)
        self.code = code


class InvalidCoordinateError(AppError):
    """Raised when a pointer coordinate is malformed or out of range."""

    def __init__(self, message: str) -> None:
        super().__init__(message, code="INVALID_COORDINATE")


class ElevationQueryError(AppError):
    """Raised when an elevation lookup cannot be completed."""

    def __init__(self, message: str, *, code: str = "ELEVATION_QUERY_FAILED") -> None:
        super().__init__(message, code=code)


class ElevationBackendError(ElevationQueryError):
    """Raised when the elevation backend answers with a non-2xx status."""

    def __init__(self, status_code: int) -> None:
        super().__init__(
            f"Elevation backend returned HTTP {status_code}",
            code="ELEVATION_BACKEND_ERROR",
        )
        self.status_code = status_code


class ElevationResponseError(ElevationQueryError):
    """Raised when the elevation backend returns an unreadable body."""

    def __init__(self, message: str) -> None:
        super().__init__(message, code="ELEVATION_RESPONSE_INVALID")


class ProbeDisposedError(AppError):
    """Raised when a disposed probe is asked to start new work."""

    def __init__(self, message: str = "Probe has been disposed") -> None:
        super().__init__(message, code="PROBE_DISPOSED")
