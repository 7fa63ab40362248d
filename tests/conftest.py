"""Shared test fixtures for the client test suite."""

from __future__ import annotations

import os
from typing import Any

import httpx
import pytest
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, PlainTextResponse, Response

from laro_client.config.settings import ClientSettings
from laro_client.integration.api_client import ApiClient

BASE_URL = "http://testserver/api"


# ---------------------------------------------------------------------------
# Keep the developer's LARO_* environment out of the tests
# ---------------------------------------------------------------------------

@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in list(os.environ):
        if key.startswith("LARO_"):
            monkeypatch.delenv(key)


# ---------------------------------------------------------------------------
# Settings fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def settings() -> ClientSettings:
    """Production-mode settings with no backoff delay."""
    return ClientSettings(
        api_url=BASE_URL,
        environment="production",
        retry_max_retries=2,
        retry_base_delay_seconds=0,
    )


@pytest.fixture
def dev_settings() -> ClientSettings:
    """Development-mode settings with no simulated latency."""
    return ClientSettings(
        api_url=BASE_URL,
        environment="development",
        mock_latency_ms=0,
        retry_base_delay_seconds=0,
    )


# ---------------------------------------------------------------------------
# Stub backend
# ---------------------------------------------------------------------------

def _envelope(data: Any, message: str = "Success") -> dict[str, Any]:
    return {"data": data, "success": True, "message": message}


def create_stub_backend() -> FastAPI:
    """Minimal backend speaking the envelope protocol.

    ``app.state.calls`` records ``(method, path)`` for every request received.
    """
    app = FastAPI()
    app.state.calls = []

    @app.middleware("http")
    async def record_calls(request: Request, call_next):
        request.app.state.calls.append((request.method, request.url.path))
        return await call_next(request)

    @app.get("/api/teams")
    async def list_teams() -> dict:
        return _envelope(
            {
                "data": [{"id": "team-live", "name": "Live Team"}],
                "pagination": {"page": 1, "limit": 10, "total": 1, "totalPages": 1},
            }
        )

    @app.get("/api/courts")
    async def list_courts() -> JSONResponse:
        return JSONResponse(
            status_code=500,
            content={"data": None, "success": False, "message": "db down"},
        )

    @app.get("/api/games")
    async def list_games() -> Response:
        return Response(status_code=502)

    @app.post("/api/teams/{team_id}/join")
    async def join_team(team_id: str, request: Request) -> dict:
        return _envelope(
            {"teamId": team_id, "authorization": request.headers.get("authorization")},
            message="Join request sent",
        )

    @app.get("/api/echo")
    async def echo_get(request: Request) -> dict:
        return _envelope(
            {"query": dict(request.query_params), "headers": dict(request.headers)}
        )

    @app.post("/api/echo")
    async def echo_post(request: Request) -> dict:
        raw = await request.body()
        return _envelope(
            {
                "body": raw.decode("utf-8", errors="replace"),
                "headers": dict(request.headers),
            }
        )

    @app.delete("/api/empty")
    async def empty() -> Response:
        return Response(status_code=204)

    @app.get("/api/not-json")
    async def not_json() -> PlainTextResponse:
        return PlainTextResponse("<html>oops</html>")

    @app.get("/api/not-envelope")
    async def not_envelope() -> list:
        return [1, 2, 3]

    @app.get("/api/conflict")
    async def conflict() -> JSONResponse:
        return JSONResponse(
            status_code=409,
            content={
                "success": False,
                "message": "Username taken",
                "code": "USERNAME_TAKEN",
                "details": {"field": "username"},
            },
        )

    @app.post("/api/auth/login")
    async def login() -> dict:
        return _envelope(
            {
                "user": {"id": "user1", "username": "CourtKing23", "email": "ck@example.com"},
                "tokens": {"accessToken": "access-1", "refreshToken": "refresh-1", "expiresIn": 900},
            }
        )

    @app.post("/api/auth/refresh")
    async def refresh(request: Request) -> JSONResponse:
        body = await request.json()
        if body.get("refreshToken") != "refresh-1":
            return JSONResponse(status_code=401, content={"success": False, "message": "Invalid refresh token"})
        return JSONResponse(content=_envelope({"accessToken": "access-2", "expiresIn": 900}))

    @app.post("/api/auth/logout")
    async def logout() -> JSONResponse:
        return JSONResponse(status_code=503, content={"success": False, "message": "unavailable"})

    @app.get("/api/auth/me")
    async def me(request: Request) -> JSONResponse:
        if request.headers.get("authorization") != "Bearer access-1":
            return JSONResponse(status_code=401, content={"success": False, "message": "Unauthorized"})
        return JSONResponse(
            content=_envelope({"id": "user1", "username": "CourtKing23", "email": "ck@example.com"})
        )

    return app


@pytest.fixture
def stub_backend() -> FastAPI:
    return create_stub_backend()


@pytest.fixture
def client(settings: ClientSettings, stub_backend: FastAPI) -> ApiClient:
    """Production-mode client wired to the stub backend."""
    return ApiClient(settings, transport=httpx.ASGITransport(app=stub_backend))


# ---------------------------------------------------------------------------
# Recording transport
# ---------------------------------------------------------------------------

class RecordingTransport(httpx.MockTransport):
    """MockTransport that keeps every request it handled.

    ``responses`` is consumed in order; the last one repeats.
    """

    def __init__(self, *responses: httpx.Response) -> None:
        self.requests: list[httpx.Request] = []
        self._responses = list(responses) or [
            httpx.Response(200, json=_envelope({}))
        ]
        super().__init__(self._handle)

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        index = min(len(self.requests), len(self._responses)) - 1
        template = self._responses[index]
        return httpx.Response(
            template.status_code, headers=template.headers, content=template.content
        )


@pytest.fixture
def make_transport():
    """Factory for RecordingTransport instances."""
    return RecordingTransport
