"""Tests for main.py application startup and configuration."""

from __future__ import annotations

import asyncio

import pytest
from fastapi import FastAPI

import main
from main import app, lifespan


class TestMainApplication:
    """Test main application functionality."""

    def test_app_creation(self):
        assert isinstance(app, FastAPI)
        assert app.title == "Storefront API"

    def test_app_middleware(self):
        """CORS and slowapi middleware are configured."""
        names = [str(middleware.cls) for middleware in app.user_middleware]

        assert any("CORSMiddleware" in name for name in names)
        assert any("SlowAPIMiddleware" in name for name in names)

    def test_app_routes(self):
        route_paths = {route.path for route in app.routes}

        for path in (
            "/health",
            "/api/v1/verify-code",
            "/api/v1/track-order",
            "/api/v1/checkout",
            "/api/v1/orders",
            "/api/v1/orders/{order_id}",
            "/api/v1/admin/codes",
            "/api/v1/admin/codes/{code_id}",
            "/api/v1/admin/orders",
            "/api/v1/admin/orders/{order_id}/status",
        ):
            assert path in route_paths, f"Route {path} not found"

    def test_health_endpoint(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}

    def test_cors_preflight_allows_configured_origin(self, client):
        response = client.options(
            "/api/v1/track-order",
            headers={
                "Origin": "http://localhost:5173",
                "Access-Control-Request-Method": "POST",
            },
        )

        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] == "http://localhost:5173"


class TestLifespan:
    def test_lifespan_verifies_and_migrates(self, verify_connection_tracker):
        async def _run() -> None:
            async with lifespan(app):
                pass

        asyncio.run(_run())

        assert verify_connection_tracker == {"calls": 1, "migrations": 1}

    def test_lifespan_propagates_migration_failure(self, monkeypatch):
        def _fail() -> None:
            raise RuntimeError("migration failed")

        monkeypatch.setattr(main, "run_migrations", _fail)

        async def _run() -> None:
            async with lifespan(app):
                pass

        with pytest.raises(RuntimeError, match="migration failed"):
            asyncio.run(_run())
