"""Tests for the assembled FastAPI application."""

from __future__ import annotations

from fastapi.testclient import TestClient


def test_health_reports_chat_store():
    from api.main import app

    with TestClient(app) as client:
        response = client.get("/health")

    data = response.json()
    assert response.status_code == 200
    assert data["status"] == "healthy"
    assert "active_sessions" in data["chat"]


def test_client_config():
    from api.main import app
    from api.settings import get_settings

    with TestClient(app) as client:
        data = client.get("/api/config").json()

    settings = get_settings()
    assert data["typing_delay_seconds"] == settings.typing_delay_seconds
    assert data["redirect_delay_seconds"] == settings.redirect_delay_seconds
    assert data["auth_mode"] in ("bypass", "production")


def test_routers_mounted():
    from api.main import app

    paths = {getattr(route, "path", None) for route in app.routes} | set(app.openapi()["paths"])

    assert "/api/chat/sessions" in paths
    assert "/api/chat/sessions/{session_id}/messages" in paths
    assert "/api/camps" in paths
    assert "/api/donors/search" in paths
    assert "/api/watchlist" in paths
