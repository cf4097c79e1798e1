"""Tests for the health check endpoints."""

from datetime import datetime

import pytest
from fastapi.testclient import TestClient


@pytest.mark.unit
def test_health_check(client: TestClient) -> None:
    """Test the health check endpoint returns 200."""
    response = client.get("/healthz")
    assert response.status_code == 200


@pytest.mark.unit
def test_health_check_response_schema(client: TestClient) -> None:
    """Test the health check endpoint response has correct schema."""
    data = client.get("/healthz").json()

    assert data["ok"] is True
    assert data["message"] == "ok"
    assert isinstance(data["version"], str)
    assert data["environment"] == "test"
    # Should not raise
    datetime.fromisoformat(data["time"])


@pytest.mark.unit
def test_root_reports_running(client: TestClient) -> None:
    response = client.get("/")
    assert response.status_code == 200
    assert response.json() == {"ok": True, "message": "API is running"}


@pytest.mark.unit
def test_unknown_route_uses_error_envelope(client: TestClient) -> None:
    response = client.get("/api/does-not-exist")
    assert response.status_code == 404
    assert response.json()["ok"] is False
    assert response.json()["message"]
