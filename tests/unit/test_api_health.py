"""Tests for the health route, CORS and app-level error handling."""

from __future__ import annotations

from fastapi import APIRouter
from fastapi.testclient import TestClient

from config.settings import Settings
from src.api.main import create_app
from src.core.exceptions import PersistenceError


class TestHealthEndpoint:
    def test_health_returns_ok(self, client: TestClient) -> None:
        response = client.get("/")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "OK"
        assert "LinkIQ" in data["message"]

    def test_health_timestamp(self, client: TestClient) -> None:
        data = client.get("/").json()
        assert "timestamp" in data
        assert data["timestamp"].startswith("20")


class TestCors:
    def test_allowed_origin(self, client: TestClient) -> None:
        response = client.options(
            "/api/auth/login",
            headers={
                "Origin": "https://linkiq.tech",
                "Access-Control-Request-Method": "POST",
            },
        )
        assert response.headers["access-control-allow-origin"] == "https://linkiq.tech"
        assert response.headers["access-control-allow-credentials"] == "true"

    def test_foreign_origin_not_echoed(self, client: TestClient) -> None:
        response = client.get("/", headers={"Origin": "https://evil.example"})
        assert "access-control-allow-origin" not in response.headers


class TestErrorHandlers:
    def test_persistence_error_is_generic_500(self, settings: Settings) -> None:
        app = create_app(settings)
        router = APIRouter()

        @router.get("/boom")
        async def boom() -> None:
            raise PersistenceError("Erro ao criar conta")

        app.include_router(router)
        with TestClient(app) as client:
            response = client.get("/boom")
        assert response.status_code == 500
        assert response.json() == {"message": "Erro ao criar conta"}

    def test_unhandled_error_is_500(self, settings: Settings) -> None:
        app = create_app(settings)
        router = APIRouter()

        @router.get("/crash")
        async def crash() -> None:
            raise RuntimeError("kaboom")

        app.include_router(router)
        with TestClient(app, raise_server_exceptions=False) as client:
            response = client.get("/crash")
        assert response.status_code == 500
        assert response.json() == {"message": "Erro interno do servidor"}
        assert "kaboom" not in response.text
