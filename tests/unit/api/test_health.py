"""Tests for health check endpoints."""


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_ready(client):
    response = client.get("/ready")
    assert response.status_code == 200
    assert response.json() == {"status": "ready"}


def test_request_id_header(client):
    response = client.get("/api/v1/jobs", headers={"x-request-id": "trace-1"})
    assert response.headers["x-request-id"] == "trace-1"
