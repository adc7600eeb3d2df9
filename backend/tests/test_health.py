"""Tests for health endpoints and the error envelope"""
from fastapi.testclient import TestClient


def test_health(client: TestClient):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_readiness(client: TestClient):
    response = client.get("/health/ready")
    assert response.status_code == 200
    assert response.json()["checks"]["database"] is True


def test_liveness(client: TestClient):
    assert client.get("/health/live").json()["status"] == "alive"


def test_validation_error_envelope(client: TestClient):
    response = client.post("/api/v1/users/register", json={"username": "x"})
    assert response.status_code == 422

    data = response.json()
    assert data["success"] is False
    assert data["error"] == "invalid_argument"
    assert data["details"]


def test_unknown_route_envelope(client: TestClient):
    response = client.get("/api/v1/nothing-here")
    assert response.status_code == 404
    assert response.json()["success"] is False
    assert response.json()["error"] == "not_found"


def test_wrong_method_envelope(client: TestClient):
    response = client.get("/api/v1/users/login")
    assert response.status_code == 405
    assert response.json()["error"] == "method_not_allowed"
    assert "POST" in response.headers["allow"]
