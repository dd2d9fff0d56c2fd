"""Tests for health check endpoints.

Verifies health check functionality including basic, detailed, readiness, and liveness checks.
"""

from unittest.mock import MagicMock, patch

import pytest
from fastapi.testclient import TestClient

from dealer_reports.database import get_db
from dealer_reports.health import check_database, check_tracker
from dealer_reports.main import app


@pytest.fixture
def client(session_factory):
    """FastAPI test client backed by the in-memory test database."""
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


class TestBasicHealthCheck:
    """Test basic health check endpoint."""

    def test_health_endpoint_returns_correct_structure(self, client):
        """Basic health reports service name and version."""
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "healthy", "service": "dealer-reports", "version": "1.0.0"}


class TestDetailedHealthCheck:
    """Test detailed health check with dependency checks."""

    def test_detailed_health_has_checks(self, client):
        """Detailed health runs the database and tracker checks."""
        response = client.get("/health/detailed")
        data = response.json()

        assert response.status_code == 200
        assert data["status"] == "healthy"
        assert set(data["checks"]) == {"database", "tracker"}
        assert "Database connected" in data["checks"]["database"]["message"]

    def test_uninitialized_tracker_is_healthy(self, client):
        """An empty tracker is reported as healthy."""
        data = client.get("/health/detailed").json()

        assert data["checks"]["tracker"]["healthy"] is True
        assert data["checks"]["tracker"]["message"] == "Tracker not initialized"

    @patch("dealer_reports.health.check_database")
    def test_degraded_when_database_check_fails(self, mock_check, client):
        """A failing database check degrades overall status."""
        mock_check.return_value = {"healthy": False, "message": "Database error: down"}

        data = client.get("/health/detailed").json()

        assert data["status"] == "degraded"


class TestReadiness:
    """Test Kubernetes readiness endpoint."""

    def test_readiness_returns_200_when_ready(self, client):
        """Ready when the database answers."""
        response = client.get("/health/ready")
        assert response.status_code == 200
        assert response.json()["ready"] is True

    @patch("dealer_reports.health.Session.execute")
    def test_readiness_returns_503_when_db_down(self, mock_execute, client):
        """Not ready when the database query fails."""
        mock_execute.side_effect = Exception("Database connection failed")

        response = client.get("/health/ready")

        assert response.status_code == 503


class TestLiveness:
    """Test Kubernetes liveness endpoint."""

    def test_liveness_returns_alive(self, client):
        """Liveness does not depend on the database."""
        response = client.get("/health/live")
        assert response.status_code == 200
        assert response.json()["alive"] is True


class TestHealthCheckFunctions:
    """Test individual health check functions."""

    def test_check_database_success(self, db):
        """A working session passes the database check."""
        result = check_database(db)
        assert result["healthy"] is True

    def test_check_database_failure(self):
        """A query error is reported, not raised."""
        mock_session = MagicMock()
        mock_session.execute.side_effect = Exception("Connection lost")

        result = check_database(mock_session)

        assert result["healthy"] is False
        assert "Database error" in result["message"]

    def test_check_tracker_reports_monthly_cursor(self, db, report_service):
        """The tracker check reports the monthly cursor."""
        report_service.tracker.update_last_monthly_report_date(2025, 6)
        db.commit()

        result = check_tracker(db)

        assert result == {"healthy": True, "message": "Last monthly report 2025-06"}

    def test_check_tracker_failure(self):
        """A tracker read error is reported, not raised."""
        mock_session = MagicMock()
        mock_session.get.side_effect = Exception("no such table")

        result = check_tracker(mock_session)

        assert result["healthy"] is False
        assert "Tracker error" in result["message"]
