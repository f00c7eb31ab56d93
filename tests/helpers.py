"""Test doubles for the elevation backend and lookups."""

import asyncio
from typing import Any

import httpx
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, Response

from map_probe.elevation.schemas import Coordinate

BACKEND_PATH = "/elevation/v1/elevation"


class FakeBackend:
    """Elevation backend served in-process by FastAPI."""

    def __init__(self) -> None:
        self.status_code = 200
        self.body: Any = {"elevation": 123.4}
        self.requests: list[dict[str, Any]] = []
        self.app = FastAPI()
        self.app.add_api_route(BACKEND_PATH, self._elevation, methods=["GET"])

    async def _elevation(self, request: Request) -> Response:
        self.requests.append(
            {
                "params": dict(request.query_params),
                "authorization": request.headers.get("authorization"),
            }
        )
        if isinstance(self.body, bytes):
            return Response(self.body, status_code=self.status_code, media_type="text/html")
        return JSONResponse(self.body, status_code=self.status_code)

    def http_client(self) -> httpx.AsyncClient:
        """An AsyncClient routed to this app. Create it inside the running loop."""
        return httpx.AsyncClient(transport=httpx.ASGITransport(app=self.app))


class RecordingLookup:
    """Lookup that answers immediately with a fixed elevation."""

    def __init__(self, elevation: float = 100.0) -> None:
        self.elevation = elevation
        self.calls: list[Coordinate] = []

    async def get_elevation(self, coordinate: Coordinate) -> float:
        self.calls.append(coordinate)
        return self.elevation


class GatedLookup:
    """Lookup whose responses are released by the test, in any order."""

    def __init__(self) -> None:
        self.calls: list[Coordinate] = []
        self._gates: dict[Coordinate, asyncio.Future[float]] = {}

    def _gate(self, coordinate: Coordinate) -> "asyncio.Future[float]":
        if coordinate not in self._gates:
            self._gates[coordinate] = asyncio.get_running_loop().create_future()
        return self._gates[coordinate]

    async def get_elevation(self, coordinate: Coordinate) -> float:
        self.calls.append(coordinate)
        return await self._gate(coordinate)

    def resolve(self, coordinate: Coordinate, elevation: float) -> None:
        self._gate(coordinate).set_result(elevation)

    def fail(self, coordinate: Coordinate, exc: BaseException) -> None:
        self._gate(coordinate).set_exception(exc)
