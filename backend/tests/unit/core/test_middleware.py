"""
Unit Tests for HTTP middleware and app-level error rendering
"""
import logging

import pytest
from fastapi import FastAPI
from httpx import AsyncClient, ASGITransport

from alumni.core.logging_config import logger
from alumni.core.middleware import RequestLoggingMiddleware, RequestSizeLimitMiddleware, should_skip_logging


def make_app(max_size: int = 10) -> FastAPI:
    app = FastAPI()
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestSizeLimitMiddleware, max_size=max_size)

    @app.post("/echo")
    async def echo(payload: dict):
        return payload

    return app


class TestRequestLogging:

    @pytest.mark.asyncio
    async def test_generates_request_id(self):
        async with AsyncClient(transport=ASGITransport(app=make_app(1024)), base_url="http://test") as ac:
            response = await ac.post("/echo", json={"a": 1})

        assert response.status_code == 200
        assert len(response.headers["X-Request-ID"]) == 8
        assert response.headers["X-Response-Time"].endswith("ms")

    @pytest.mark.asyncio
    async def test_propagates_incoming_request_id(self):
        async with AsyncClient(transport=ASGITransport(app=make_app(1024)), base_url="http://test") as ac:
            response = await ac.post("/echo", json={}, headers={"X-Request-ID": "abc12345"})

        assert response.headers["X-Request-ID"] == "abc12345"

    @pytest.mark.asyncio
    async def test_completed_request_logged_with_status(self, monkeypatch):
        calls = []
        monkeypatch.setattr(logger, "log_request", lambda *args, **kwargs: calls.append(args))

        async with AsyncClient(transport=ASGITransport(app=make_app(1024)), base_url="http://test") as ac:
            await ac.post("/echo", json={"a": 1})
            await ac.get("/missing")

        assert [(c[0], c[1], c[2]) for c in calls] == [("POST", "/echo", 200), ("GET", "/missing", 404)]

    @pytest.mark.parametrize("status_code, level", [
        (200, logging.INFO),
        (404, logging.WARNING),
        (503, logging.ERROR),
    ])
    def test_log_request_level_follows_status(self, monkeypatch, status_code, level):
        seen = []
        monkeypatch.setattr(logger, "log", lambda lvl, msg, *args, **kwargs: seen.append(lvl))

        logger.log_request("GET", "/api/events", status_code, 12.5)

        assert seen == [level]

    def test_health_paths_skip_logging(self):
        assert should_skip_logging("/health")
        assert not should_skip_logging("/api/events")


class TestRequestSizeLimit:

    @pytest.mark.asyncio
    async def test_oversized_body_rejected(self):
        async with AsyncClient(transport=ASGITransport(app=make_app(max_size=10)), base_url="http://test") as ac:
            response = await ac.post("/echo", json={"caption": "x" * 100})

        assert response.status_code == 413
        assert "too large" in response.json()["msg"]

    @pytest.mark.asyncio
    async def test_small_body_passes(self):
        async with AsyncClient(transport=ASGITransport(app=make_app(max_size=1024)), base_url="http://test") as ac:
            response = await ac.post("/echo", json={"caption": "x"})

        assert response.status_code == 200


class TestApplication:

    @pytest.mark.asyncio
    async def test_health(self, client: AsyncClient):
        response = await client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    @pytest.mark.asyncio
    async def test_unknown_route_uses_msg_body(self, client: AsyncClient):
        response = await client.get("/api/nowhere")

        assert response.status_code == 404
        assert response.json() == {"msg": "Not Found"}

    @pytest.mark.asyncio
    async def test_malformed_json_is_bad_request(self, client: AsyncClient, auth_headers):
        response = await client.post(
            "/api/events",
            headers={**auth_headers, "Content-Type": "application/json"},
            content=b"{not json",
        )

        assert response.status_code == 400
        assert "msg" in response.json()
