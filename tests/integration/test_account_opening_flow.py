"""
Integration tests for the account opening flow.

Tests the full start / pause / resume / get flow through the API with
the real database. Requires PostgreSQL to be running (via docker-compose).
"""

import logging

import pytest
from fastapi.testclient import TestClient
from psycopg_pool import ConnectionPool

from src.api.main import app

pytestmark = pytest.mark.integration

BASE_URL = "/v1/api/customers"

START_BODY = {
    "name": "John Doe",
    "address": {"streetName": "Street 1", "houseNumber": "2", "postalCode": "9499 CV", "city": "City"},
    "dateOfBirth": "1990-05-20",
}

RESUME_BODY = {
    **START_BODY,
    "name": "John Updated",
    "startingBalance": 100.00,
    "monthlySalary": 1000.00,
    "accountType": "CURRENT",
    "idDocument": "12345678",
    "email": "john.doe@example.com",
    "interestedInOtherProducts": True,
}


@pytest.fixture
def client(pool: ConnectionPool, clean_database: None) -> TestClient:
    """Create test client with real database connection."""
    # Override the app's pool with our test pool
    app.state.pool = pool
    return TestClient(app)


class TestAccountOpeningFlow:
    """Integration tests for the registration lifecycle."""

    def test_start_pause_resume_get(self, client: TestClient, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.INFO):
            started = client.post(f"{BASE_URL}/start", json=START_BODY)
        assert started.status_code == 201
        request_id = started.json()["requestId"]
        assert f"Created account registration {request_id}" in caplog.text

        paused = client.put(f"{BASE_URL}/{request_id}/pause")
        assert paused.status_code == 202
        assert paused.json()["status"] == "PAUSED"
        assert paused.json()["pausedAt"] is not None

        resumed = client.put(f"{BASE_URL}/{request_id}/resume", json=RESUME_BODY)
        assert resumed.status_code == 202
        assert resumed.json()["status"] == "SUBMITTED"
        assert resumed.json()["name"] == "John Doe"
        assert resumed.json()["accountType"] == "CURRENT"

        fetched = client.get(f"{BASE_URL}/{request_id}")
        assert fetched.status_code == 200
        assert fetched.json() == resumed.json()

    def test_pause_after_submit_is_forbidden(self, client: TestClient) -> None:
        request_id = client.post(f"{BASE_URL}/start", json=START_BODY).json()["requestId"]
        client.put(f"{BASE_URL}/{request_id}/pause")
        client.put(f"{BASE_URL}/{request_id}/resume", json=RESUME_BODY)

        response = client.put(f"{BASE_URL}/{request_id}/pause")

        assert response.status_code == 403

    def test_resume_without_pause_is_rejected(self, client: TestClient) -> None:
        request_id = client.post(f"{BASE_URL}/start", json=START_BODY).json()["requestId"]

        response = client.put(f"{BASE_URL}/{request_id}/resume", json=RESUME_BODY)

        assert response.status_code == 400
        assert "not in paused status" in response.text
        assert client.get(f"{BASE_URL}/{request_id}").json()["status"] == "IN_PROGRESS"

    def test_unknown_request_returns_404(self, client: TestClient) -> None:
        assert client.put(f"{BASE_URL}/non-existent-id/pause").status_code == 404
        assert client.get(f"{BASE_URL}/non-existent-id").status_code == 404

    def test_health(self, client: TestClient) -> None:
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}
