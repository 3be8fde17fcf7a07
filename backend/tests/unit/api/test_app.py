"""Tests for the FastAPI application wiring.

Health endpoints, correlation IDs, CORS and route registration.
"""

import pytest
from fastapi.testclient import TestClient
from mangum import Mangum

from rentals.models import ErrorCode
from rentals_api.exceptions import ERROR_CODE_TO_HTTP_STATUS, get_http_status_for_error
from rentals_api.main import app, handler
from rentals_api.middleware.correlation import CORRELATION_ID_HEADER


@pytest.fixture
def app_client() -> TestClient:
    """Client without the manager override (no DynamoDB access needed)."""
    return TestClient(app)


class TestHealthCheck:
    def test_ping_returns_ok(self, app_client: TestClient) -> None:
        response = app_client.get("/api/ping")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ok"
        assert data["service"] == "rentals-api"
        assert "timestamp" in data

    def test_health_endpoint_returns_healthy(self, app_client: TestClient) -> None:
        response = app_client.get("/api/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"


class TestCorrelationId:
    def test_echoes_given_id(self, app_client: TestClient) -> None:
        response = app_client.get("/api/ping", headers={CORRELATION_ID_HEADER: "req-42"})
        assert response.headers[CORRELATION_ID_HEADER] == "req-42"

    def test_generates_id_when_missing(self, app_client: TestClient) -> None:
        first = app_client.get("/api/ping").headers[CORRELATION_ID_HEADER]
        second = app_client.get("/api/ping").headers[CORRELATION_ID_HEADER]
        assert first
        assert first != second

    def test_error_responses_carry_id(self, app_client: TestClient) -> None:
        response = app_client.get(
            "/api/units/apt-sunny-beach-12/booking-periods",
            headers={CORRELATION_ID_HEADER: "req-err"},
        )
        assert response.status_code == 401
        assert response.headers[CORRELATION_ID_HEADER] == "req-err"


class TestCorsConfiguration:
    def test_preflight_allows_local_frontend(self, app_client: TestClient) -> None:
        response = app_client.options(
            "/api/ping",
            headers={
                "Origin": "http://localhost:3000",
                "Access-Control-Request-Method": "GET",
            },
        )
        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] == "http://localhost:3000"


class TestErrorStatusMapping:
    def test_every_code_mapped(self) -> None:
        assert set(ERROR_CODE_TO_HTTP_STATUS) == set(ErrorCode)

    @pytest.mark.parametrize(
        ("code", "status"),
        [
            (ErrorCode.OVERLAPPING_BOOKING, 409),
            (ErrorCode.CALENDAR_CONFLICT, 409),
            (ErrorCode.RECORD_NOT_FOUND, 404),
            (ErrorCode.DEPOSIT_EXCEEDS_TOTAL, 400),
            (ErrorCode.AUTH_REQUIRED, 401),
            (ErrorCode.NOT_UNIT_OWNER, 403),
        ],
    )
    def test_status_for_code(self, code: ErrorCode, status: int) -> None:
        assert get_http_status_for_error(code) == status


class TestRoutesRegistered:
    def test_expected_routes(self) -> None:
        paths = set(app.openapi()["paths"])
        assert {
            "/api/ping",
            "/api/health",
            "/api/units/{unit_id}/calendar/{month}",
            "/api/units/{unit_id}/price-quote",
            "/api/units/{unit_id}/booking-periods",
            "/api/units/{unit_id}/booking-periods/summary",
            "/api/units/{unit_id}/booking-periods/survey-links",
            "/api/units/{unit_id}/booking-periods/{period_id}",
        } <= paths

    def test_lambda_handler(self) -> None:
        assert isinstance(handler, Mangum)
