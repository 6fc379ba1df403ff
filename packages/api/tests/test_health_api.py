"""Tests for health and readiness endpoints."""

from __future__ import annotations

from htw_shared.exceptions import BackendError


def test_health(client):
    """GET /health returns ok with the API version."""
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok", "version": "0.1.0"}


def test_ready(client):
    """GET /ready returns ready when the store answers."""
    response = client.get("/ready")
    assert response.status_code == 200
    assert response.json()["status"] == "ready"


def test_ready_unavailable(make_client, failing_store):
    """GET /ready returns 503 when the store read fails."""
    client = make_client(failing_store(BackendError(detail="connection refused")))
    response = client.get("/ready")
    assert response.status_code == 503
    assert response.json() == {"status": "unavailable", "detail": "connection refused"}
