"""
Tests for the HTTP middleware stack.
"""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from wildcard.api.middleware.error_handler import ErrorHandlerMiddleware
from wildcard.api.middleware.request_logging import RequestLoggingMiddleware


@pytest.fixture
def exploding_app() -> FastAPI:
    app = FastAPI()
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(ErrorHandlerMiddleware)

    @app.get("/boom")
    async def boom():
        raise RuntimeError("secret detail")

    @app.get("/ok")
    async def ok():
        return {"ok": True}

    return app


class TestErrorHandlerMiddleware:
    def test_unhandled_exception_becomes_generic_500(self, exploding_app):
        client = TestClient(exploding_app, raise_server_exceptions=False)

        response = client.get("/boom")

        assert response.status_code == 500
        body = response.json()
        assert body["success"] is False
        assert body["message"] == "Internal server error"

    def test_no_details_in_default_environment(self, exploding_app, monkeypatch):
        monkeypatch.delenv("ENVIRONMENT")
        from wildcard.core.config.settings import Settings

        # Unset ENVIRONMENT means development mode
        monkeypatch.setattr(
            "wildcard.core.config.settings.environment",
            Settings().environment,
        )
        client = TestClient(exploding_app, raise_server_exceptions=False)

        response = client.get("/boom")

        assert response.status_code == 500
        assert response.json() == {"success": False, "message": "Internal server error"}
        assert "secret detail" not in response.text
        assert "Traceback" not in response.text

    def test_passes_normal_responses_through(self, exploding_app):
        client = TestClient(exploding_app)

        response = client.get("/ok")

        assert response.status_code == 200
        assert response.json() == {"ok": True}
