"""Tests for API middleware."""

from fastapi.testclient import TestClient

from agromarket.catalog.persistence import InMemoryPersistence
from agromarket.main import create_app


class TestRequestIdMiddleware:
    """Tests for request ID correlation middleware."""

    def test_generates_request_id_if_not_provided(self, client: TestClient) -> None:
        """Should generate request ID if not in request headers."""
        response = client.get("/health")
        assert response.status_code == 200
        # UUID format
        assert len(response.headers["X-Request-ID"]) == 36

    def test_uses_provided_request_id(self, client: TestClient) -> None:
        """Should use request ID from request headers."""
        response = client.get("/health", headers={"X-Request-ID": "custom-request-id-12345"})
        assert response.headers["X-Request-ID"] == "custom-request-id-12345"

    def test_request_id_in_error_body(self, client: TestClient) -> None:
        """Error envelopes carry the request ID."""
        response = client.get("/products/missing", headers={"X-Request-ID": "req-404"})
        assert response.json()["request_id"] == "req-404"


class TestErrorHandlerMiddleware:
    """Tests for the unhandled exception middleware."""

    def test_unhandled_exception_returns_500(self, settings) -> None:
        """Unexpected errors become the internal error envelope."""
        app = create_app(settings, persistence=InMemoryPersistence())

        @app.get("/boom")
        async def boom() -> None:
            raise RuntimeError("boom")

        with TestClient(app, raise_server_exceptions=False) as client:
            response = client.get("/boom")

        assert response.status_code == 500
        data = response.json()
        assert data["error_code"] == "INTERNAL_ERROR"
        assert data["message"] == "An internal error occurred"
