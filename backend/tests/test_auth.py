"""
Tests for authentication endpoints.
"""

from unittest.mock import patch

import bcrypt
import pytest
import redis

from menu_api.models import User
from menu_api.repositories import UserRepository
from menu_api.services.domain import AuthService
from shared.security.auth import sign_jwt, verify_jwt
from shared.security.password import hash_password, needs_rehash, verify_password
from shared.utils.exceptions import AuthenticationError, ValidationError

from conftest import ADMIN_PASSWORD


def _register(client, **overrides):
    body = {
        "name": "Ada Obi",
        "username": "ada",
        "email": "ada@example.com",
        "password": "supersecret1",
    }
    body.update(overrides)
    return client.post("/api/admin/register", json=body)


def _login(client, username="admin", password=ADMIN_PASSWORD):
    return client.post("/api/admin/login", json={"username": username, "password": password})


def _bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


class TestPasswordHashing:
    """Test password hashing utilities."""

    def test_hash_password_returns_bcrypt_hash(self):
        """Hash should return bcrypt format."""
        hashed = hash_password("mypassword")
        assert hashed.startswith("$2b$")
        assert hashed != "mypassword"

    def test_hash_is_salted(self):
        """Same password hashes differently each time."""
        assert hash_password("mypassword") != hash_password("mypassword")

    def test_verify_password_correct(self):
        """Correct password should verify."""
        hashed = hash_password("mypassword")
        assert verify_password("mypassword", hashed) is True

    def test_verify_password_incorrect(self):
        """Incorrect password should not verify."""
        hashed = hash_password("mypassword")
        assert verify_password("wrongpassword", hashed) is False

    def test_plain_text_never_matches(self):
        """A stored value that is not a bcrypt hash is rejected."""
        assert verify_password("plaintext", "plaintext") is False

    def test_password_beyond_bcrypt_limit_never_matches(self):
        """Input over 72 bytes is a mismatch, not an error."""
        hashed = hash_password("mypassword")
        assert verify_password("x" * 100, hashed) is False
        assert verify_password("\u00e9" * 40, hashed) is False

    def test_needs_rehash_other_cost(self):
        """Hashes made with another cost factor need rehashing."""
        other = bcrypt.hashpw(b"mypassword", bcrypt.gensalt(rounds=5)).decode()
        assert needs_rehash(other) is True

    def test_needs_rehash_current(self):
        """Current hashes don't need rehashing."""
        assert needs_rehash(hash_password("mypassword")) is False


class TestRegister:
    """POST /api/admin/register"""

    def test_register_returns_token(self, client):
        """Registration creates the principal and returns a usable token."""
        response = _register(client)
        assert response.status_code == 201
        data = response.json()
        assert data["token_type"] == "Bearer"
        assert data["expires_in"] == 3600
        assert data["user"]["username"] == "ada"
        assert "password" not in data["user"]

        me = client.get("/api/admin/user", headers=_bearer(data["token"]))
        assert me.status_code == 200
        assert me.json()["email"] == "ada@example.com"

    def test_register_stores_hash_not_password(self, client, db_session):
        """The plain password is never persisted."""
        _register(client)
        user = db_session.query(User).filter_by(username="ada").one()
        assert user.password != "supersecret1"
        assert verify_password("supersecret1", user.password)

    def test_register_lowercases_email(self, client):
        response = _register(client, email="Ada@Example.COM")
        assert response.status_code == 201
        assert response.json()["user"]["email"] == "ada@example.com"

    def test_duplicate_email_conflicts(self, client, db_session):
        """Second registration with the same email fails; the first is untouched."""
        first = _register(client)
        assert first.status_code == 201

        second = _register(client, username="other", name="Someone Else")
        assert second.status_code == 409
        body = second.json()
        assert "email" in body["message"]
        assert body["error"] == {"email": ["The email has already been taken."]}

        users = db_session.query(User).all()
        assert len(users) == 1
        assert users[0].username == "ada"
        assert users[0].name == "Ada Obi"

    def test_duplicate_email_ignores_case(self, client):
        _register(client)
        response = _register(client, username="other", email="ADA@example.com")
        assert response.status_code == 409

    def test_duplicate_username_conflicts(self, client):
        _register(client)
        response = _register(client, email="another@example.com")
        assert response.status_code == 409
        assert response.json()["error"] == {"username": ["The username has already been taken."]}

    def test_short_password_rejected(self, client):
        """Passwords shorter than 8 characters are rejected."""
        response = _register(client, password="short")
        assert response.status_code == 422
        assert "password" in response.json()["error"]

    def test_missing_field_rejected(self, client):
        response = client.post(
            "/api/admin/register",
            json={"name": "Ada", "username": "ada", "password": "supersecret1"},
        )
        assert response.status_code == 422
        body = response.json()
        assert body["message"] == "The given data was invalid."
        assert "email" in body["error"]

    def test_confirmation_mismatch_rejected(self, client):
        response = _register(client, password_confirmation="different1")
        assert response.status_code == 422

    def test_password_over_72_bytes_rejected(self, client, db_session):
        response = _register(client, password="x" * 100)
        assert response.status_code == 422
        assert "password" in response.json()["error"]
        assert db_session.query(User).count() == 0

    def test_multibyte_password_limit_counts_bytes(self, client):
        """40 two-byte characters are 80 bytes: too long. 36 are exactly 72."""
        assert _register(client, password="\u00e9" * 40).status_code == 422
        assert _register(client, password="\u00e9" * 36).status_code == 201

    def test_unique_constraint_race_conflicts(self, client, seed_admin_user):
        """A duplicate that slips past the lookups still answers 409."""
        with patch.object(UserRepository, "username_taken", return_value=False):
            response = _register(client, username="admin")

        assert response.status_code == 409
        assert _login(client).status_code == 200

    def test_service_rejects_password_over_72_bytes(self, db_session):
        with pytest.raises(ValidationError):
            AuthService(db_session).register(
                name="Ada", username="ada", email="ada@example.com", password="y" * 100
            )


class TestLogin:
    """POST /api/admin/login"""

    def test_login_success(self, client, seed_admin_user):
        """Valid credentials should return a token."""
        response = _login(client)
        assert response.status_code == 200
        data = response.json()
        assert data["token"]
        assert data["token_type"] == "Bearer"
        assert data["user"]["username"] == "admin"
        assert data["user"]["last_login_at"] is not None

    def test_unknown_user_and_wrong_password_are_indistinguishable(self, client, seed_admin_user):
        """Both failure modes answer the same 401 body."""
        unknown = _login(client, username="baduser", password="whatever")
        wrong = _login(client, username="admin", password="wrongpass")

        assert unknown.status_code == wrong.status_code == 401
        assert unknown.json() == wrong.json()
        assert unknown.json()["message"] == "Invalid credentials"

    def test_over_long_password_is_invalid_credentials(self, client, seed_admin_user):
        """A password bcrypt cannot take answers 401 like any other wrong password."""
        unknown = _login(client, username="nobody", password="y" * 100)
        known = _login(client, username="admin", password="y" * 100)

        assert unknown.status_code == known.status_code == 401
        assert unknown.json() == known.json() == {"message": "Invalid credentials"}

    def test_login_rehashes_outdated_hash(self, client, db_session, seed_admin_user):
        """An old-cost hash is upgraded on successful login."""
        seed_admin_user.password = bcrypt.hashpw(
            ADMIN_PASSWORD.encode(), bcrypt.gensalt(rounds=5)
        ).decode()
        db_session.commit()

        assert _login(client).status_code == 200
        db_session.refresh(seed_admin_user)
        assert needs_rehash(seed_admin_user.password) is False


class TestTokenVerification:
    """Bearer token handling on protected routes."""

    def test_user_requires_token(self, client):
        response = client.get("/api/admin/user")
        assert response.status_code == 401
        assert response.headers["WWW-Authenticate"] == "Bearer"

    def test_user_with_token(self, client, auth_headers):
        response = client.get("/api/admin/user", headers=auth_headers)
        assert response.status_code == 200
        assert response.json()["username"] == "admin"

    def test_malformed_header_rejected(self, client, seed_admin_user):
        response = client.get("/api/admin/user", headers={"Authorization": "Token abc"})
        assert response.status_code == 401

    def test_garbage_token_rejected(self, client, seed_admin_user):
        response = client.get("/api/admin/user", headers=_bearer("not.a.jwt"))
        assert response.status_code == 401
        assert response.json() == {"message": "Invalid or expired token"}

    def test_expired_token_rejected(self, client, seed_admin_user):
        """Tokens past their expiry fail verification."""
        token = sign_jwt(
            {"sub": str(seed_admin_user.id), "username": "admin", "role": "admin"},
            ttl_seconds=-10,
        )
        response = client.get("/api/admin/user", headers=_bearer(token))
        assert response.status_code == 401

    def test_token_for_deleted_user_rejected(self, client, db_session, auth_headers, seed_admin_user):
        """A valid signature is not enough once the principal is gone."""
        db_session.delete(seed_admin_user)
        db_session.commit()

        response = client.get("/api/admin/user", headers=auth_headers)
        assert response.status_code == 401

    def test_verify_accepts_fresh_token(self, seed_admin_user):
        token = sign_jwt({"sub": str(seed_admin_user.id), "role": "admin"})
        claims = verify_jwt(token)
        assert claims["sub"] == str(seed_admin_user.id)
        assert claims["type"] == "access"

    def test_verify_rejects_expired_token(self):
        token = sign_jwt({"sub": "1", "role": "admin"}, ttl_seconds=-10)
        with pytest.raises(AuthenticationError):
            verify_jwt(token)

    def test_redis_down_fails_closed(self, client, auth_headers):
        """When the blacklist cannot be consulted, the request is refused."""
        with patch(
            "shared.security.token_blacklist.get_redis_client",
            side_effect=redis.ConnectionError("Redis connection failed"),
        ):
            response = client.get("/api/admin/user", headers=auth_headers)
        assert response.status_code == 503


class TestLogout:
    """POST /api/admin/logout"""

    def test_logout_revokes_token(self, client, auth_headers):
        response = client.post("/api/admin/logout", headers=auth_headers)
        assert response.status_code == 200
        assert response.json()["message"] == "Successfully logged out"

        response = client.get("/api/admin/user", headers=auth_headers)
        assert response.status_code == 401

    def test_logout_only_revokes_presented_token(self, client, auth_headers):
        """Other sessions of the same user keep working."""
        other = _login(client).json()["token"]

        client.post("/api/admin/logout", headers=auth_headers)

        assert client.get("/api/admin/user", headers=_bearer(other)).status_code == 200

    def test_logout_requires_token(self, client):
        assert client.post("/api/admin/logout").status_code == 401


class TestResetPassword:
    """POST /api/admin/reset-password"""

    def test_reset_own_password(self, client, auth_headers):
        """New password works, old password and old tokens stop working."""
        response = client.post(
            "/api/admin/reset-password",
            headers=auth_headers,
            json={
                "username": "admin",
                "current_password": ADMIN_PASSWORD,
                "password": "brand-new-pass",
                "password_confirmation": "brand-new-pass",
            },
        )
        assert response.status_code == 200

        assert client.get("/api/admin/user", headers=auth_headers).status_code == 401
        assert _login(client).status_code == 401
        assert _login(client, password="brand-new-pass").status_code == 200

    def test_new_password_over_72_bytes_rejected(self, client, auth_headers):
        response = client.post(
            "/api/admin/reset-password",
            headers=auth_headers,
            json={
                "username": "admin",
                "current_password": ADMIN_PASSWORD,
                "password": "z" * 100,
            },
        )
        assert response.status_code == 422
        assert "password" in response.json()["error"]
        assert _login(client).status_code == 200

    def test_token_issued_after_reset_is_valid(self, client, auth_headers):
        client.post(
            "/api/admin/reset-password",
            headers=auth_headers,
            json={
                "username": "admin",
                "current_password": ADMIN_PASSWORD,
                "password": "brand-new-pass",
            },
        )
        token = _login(client, password="brand-new-pass").json()["token"]
        assert client.get("/api/admin/user", headers=_bearer(token)).status_code == 200

    def test_wrong_current_password(self, client, auth_headers):
        response = client.post(
            "/api/admin/reset-password",
            headers=auth_headers,
            json={
                "username": "admin",
                "current_password": "not-my-password",
                "password": "brand-new-pass",
            },
        )
        assert response.status_code == 422
        assert "current_password" in response.json()["error"]

    def test_unknown_username(self, client, auth_headers):
        response = client.post(
            "/api/admin/reset-password",
            headers=auth_headers,
            json={
                "username": "ghost",
                "current_password": ADMIN_PASSWORD,
                "password": "brand-new-pass",
            },
        )
        assert response.status_code == 404

    def test_admin_resets_other_account(self, client, auth_headers):
        """Admins may reset another account; that account's tokens are revoked."""
        victim_token = _register(client).json()["token"]

        response = client.post(
            "/api/admin/reset-password",
            headers=auth_headers,
            json={
                "username": "ada",
                "current_password": ADMIN_PASSWORD,
                "password": "reset-by-admin",
            },
        )
        assert response.status_code == 200
        assert client.get("/api/admin/user", headers=_bearer(victim_token)).status_code == 401
        assert _login(client, username="ada", password="reset-by-admin").status_code == 200

    def test_non_admin_cannot_reset_others(self, client, db_session, seed_admin_user):
        viewer = User(
            name="Viewer",
            username="viewer",
            email="viewer@test.com",
            password=hash_password("viewerpass1"),
            role="viewer",
        )
        db_session.add(viewer)
        db_session.commit()
        token = _login(client, username="viewer", password="viewerpass1").json()["token"]

        response = client.post(
            "/api/admin/reset-password",
            headers=_bearer(token),
            json={
                "username": "admin",
                "current_password": "viewerpass1",
                "password": "hijacked-pass",
            },
        )
        assert response.status_code == 403
        assert _login(client).status_code == 200

    def test_requires_token(self, client, seed_admin_user):
        response = client.post(
            "/api/admin/reset-password",
            json={
                "username": "admin",
                "current_password": ADMIN_PASSWORD,
                "password": "brand-new-pass",
            },
        )
        assert response.status_code == 401
