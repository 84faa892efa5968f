"""
Tests for request throttling.

The suite runs with the limiter disabled; these tests switch it on.
"""

import pytest

from shared.security.rate_limit import limiter


@pytest.fixture
def rate_limited(monkeypatch):
    """Enable the limiter with empty counters."""
    monkeypatch.setattr(limiter, "enabled", True)
    limiter.reset()
    yield limiter
    limiter.reset()


class TestDefaultLimit:
    """60 requests per minute per client on every route."""

    def test_61st_request_rejected(self, client, rate_limited, seed_menu_item):
        for _ in range(60):
            assert client.get("/api/menu").status_code == 200

        response = client.get("/api/menu")
        assert response.status_code == 429
        assert response.json()["message"] == "Too many requests"
        assert int(response.headers["Retry-After"]) > 0

    def test_health_is_exempt(self, client, rate_limited):
        for _ in range(65):
            assert client.get("/api/health").status_code == 200


class TestLoginLimit:
    """Login has its own stricter budget."""

    def test_sixth_login_attempt_rejected(self, client, rate_limited, seed_admin_user):
        for _ in range(5):
            response = client.post(
                "/api/admin/login", json={"username": "admin", "password": "wrongpass"}
            )
            assert response.status_code == 401

        response = client.post(
            "/api/admin/login", json={"username": "admin", "password": "testpass123"}
        )
        assert response.status_code == 429

    def test_disabled_limiter_never_throttles(self, client, seed_admin_user):
        for _ in range(8):
            response = client.post(
                "/api/admin/login", json={"username": "admin", "password": "wrongpass"}
            )
            assert response.status_code == 401
