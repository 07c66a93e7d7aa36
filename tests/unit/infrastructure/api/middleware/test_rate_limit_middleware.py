"""Unit tests for rate limit middleware.

These tests verify limiter selection by path, the 429 envelope and the
rate limit headers on a minimal app.
"""

from unittest.mock import MagicMock, patch

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from nutrilens.infrastructure.api.middleware.rate_limit_middleware import (
    RateLimitMiddleware,
    rate_limit_storage,
)

SETTINGS = "nutrilens.infrastructure.api.middleware.rate_limit_middleware.get_settings"


def create_test_app() -> FastAPI:
    """Create a test FastAPI app with rate limit middleware."""
    app = FastAPI()
    app.add_middleware(RateLimitMiddleware)

    @app.post("/v1/auth/login")
    async def login():
        return {"message": "login"}

    @app.get("/v1/other")
    async def other():
        return {"message": "other"}

    @app.get("/health")
    async def health():
        return {"status": "ok"}

    return app


@pytest.fixture
def mock_settings():
    settings = MagicMock()
    settings.rate_limit_enabled = True
    settings.api_prefix = "/v1"
    settings.rate_limit_max = 3
    settings.rate_limit_window_seconds = 60
    settings.auth_rate_limit_max = 2
    settings.auth_rate_limit_window_seconds = 60
    return settings


@pytest.fixture(autouse=True)
def clean_storage():
    rate_limit_storage.reset()
    yield
    rate_limit_storage.reset()


def test_rate_limit_headers_present(mock_settings):
    with patch(SETTINGS, return_value=mock_settings):
        client = TestClient(create_test_app())
        response = client.get("/v1/other")

    assert response.status_code == 200
    assert response.headers["X-RateLimit-Limit"] == "3"
    assert response.headers["X-RateLimit-Remaining"] == "2"
    assert "X-RateLimit-Reset" in response.headers


def test_auth_limit_exceeded(mock_settings):
    with patch(SETTINGS, return_value=mock_settings):
        client = TestClient(create_test_app())
        assert client.post("/v1/auth/login").status_code == 200
        assert client.post("/v1/auth/login").status_code == 200
        response = client.post("/v1/auth/login")

    assert response.status_code == 429
    body = response.json()
    assert body["success"] is False
    assert body["error"] == "RATE_LIMITED"
    assert body["message"] == "Too many authentication attempts, please try again later."
    assert response.headers["Retry-After"] == "30"


def test_auth_limit_does_not_consume_general_bucket(mock_settings):
    with patch(SETTINGS, return_value=mock_settings):
        client = TestClient(create_test_app())
        client.post("/v1/auth/login")
        client.post("/v1/auth/login")
        response = client.get("/v1/other")

    assert response.status_code == 200
    assert response.headers["X-RateLimit-Remaining"] == "2"


def test_paths_outside_prefix_not_limited(mock_settings):
    mock_settings.rate_limit_max = 1
    with patch(SETTINGS, return_value=mock_settings):
        client = TestClient(create_test_app())
        responses = [client.get("/health") for _ in range(3)]

    assert all(r.status_code == 200 for r in responses)
    assert "X-RateLimit-Limit" not in responses[0].headers


def test_disabled(mock_settings):
    mock_settings.rate_limit_enabled = False
    mock_settings.auth_rate_limit_max = 1
    with patch(SETTINGS, return_value=mock_settings):
        client = TestClient(create_test_app())
        responses = [client.post("/v1/auth/login") for _ in range(3)]

    assert all(r.status_code == 200 for r in responses)
