"""
Auth Service: registration, login, token verification, logout, password reset.

Login failures are indistinguishable to the caller ("Invalid credentials")
whether the username is unknown or the password is wrong; the reason is
only logged. Token failures are likewise a uniform 401.
"""

from __future__ import annotations

from datetime import datetime, timezone
from functools import lru_cache
from typing import Any

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from menu_api.models import User
from menu_api.repositories import UserRepository
from shared.config.constants import Limits, Roles
from shared.config.logging import auth_logger as logger, mask_email, mask_jti
from shared.config.settings import settings
from shared.infrastructure.db import safe_commit
from shared.security.auth import sign_jwt, verify_jwt
from shared.security.password import hash_password, needs_rehash, verify_password
from shared.security.token_blacklist import blacklist_token, revoke_all_user_tokens
from shared.utils.validators import password_too_long
from shared.utils.exceptions import (
    AuthenticationError,
    DuplicateEntityError,
    ForbiddenError,
    NotFoundError,
    ValidationError,
)

INVALID_CREDENTIALS = "Invalid credentials"


@lru_cache
def _dummy_hash() -> str:
    # Compared against when the username is unknown, so both failure paths cost one bcrypt check
    return hash_password("not-a-real-password")


class AuthService:

    def __init__(self, db: Session):
        self._db = db
        self._users = UserRepository(db)

    @property
    def token_ttl_seconds(self) -> int:
        return settings.jwt_access_token_expire_minutes * 60

    # =========================================================================
    # Registration / Login
    # =========================================================================

    def register(
        self,
        name: str,
        username: str,
        email: str,
        password: str,
        role: str = Roles.ADMIN,
    ) -> tuple[str, User]:
        """
        Create a principal and issue its first token.

        Raises:
            ValidationError: Password shorter than the minimum or longer than bcrypt accepts.
            DuplicateEntityError: Username or email already registered (409).
        """
        if len(password) < Limits.PASSWORD_MIN_LENGTH:
            raise ValidationError("The password must be at least 8 characters.", field="password")
        if password_too_long(password):
            raise ValidationError(
                f"The password may not be greater than {Limits.PASSWORD_MAX_BYTES} bytes.",
                field="password",
            )

        if self._users.username_taken(username):
            raise DuplicateEntityError("User", "username", username)
        if self._users.email_taken(email):
            raise DuplicateEntityError("User", "email", mask_email(email))

        user = User(
            name=name,
            username=username,
            email=email.lower(),
            password=hash_password(password),
            role=role,
        )
        try:
            self._users.save(user)
            safe_commit(self._db)
        except IntegrityError:
            self._db.rollback()
            # Concurrent registration won the unique constraint
            raise DuplicateEntityError("User", "username or email")
        self._db.refresh(user)

        logger.info("USER_REGISTERED", user_id=user.id, email=mask_email(user.email), role=role)
        return self.issue_token(user), user

    def login(self, username: str, password: str) -> tuple[str, User]:
        """
        Raises:
            AuthenticationError: Unknown username or wrong password, same message for both.
        """
        user = self._users.find_by_username(username)

        if user is None:
            verify_password(password, _dummy_hash())
            raise AuthenticationError(INVALID_CREDENTIALS, reason="unknown_user")

        if not verify_password(password, user.password):
            raise AuthenticationError(INVALID_CREDENTIALS, reason="bad_password", user_id=user.id)

        if needs_rehash(user.password):
            user.password = hash_password(password)

        user.last_login_at = datetime.now(timezone.utc)
        safe_commit(self._db)
        self._db.refresh(user)

        logger.info("LOGIN_SUCCESS", user_id=user.id, role=user.role)
        return self.issue_token(user), user

    def issue_token(self, user: User) -> str:
        return sign_jwt({"sub": str(user.id), "username": user.username, "role": user.role})

    # =========================================================================
    # Token Verification / Logout
    # =========================================================================

    def verify(self, token: str) -> User:
        """
        Resolve a bearer token to its principal.

        Raises:
            AuthenticationError: Bad/expired/revoked token or deleted principal.
        """
        claims = verify_jwt(token)
        return self.user_from_claims(claims)

    def user_from_claims(self, claims: dict[str, Any]) -> User:
        user = self._users.find_by_id(int(claims["sub"]))
        if user is None:
            raise AuthenticationError(reason="unknown_principal", user_id=claims["sub"])
        return user

    def logout(self, claims: dict[str, Any]) -> None:
        """Revoke the presented token until it would have expired."""
        expires_at = datetime.fromtimestamp(claims["exp"], tz=timezone.utc)
        blacklist_token(claims["jti"], expires_at)
        logger.info("LOGOUT", user_id=claims["sub"], jti=mask_jti(claims["jti"]))

    # =========================================================================
    # Password Reset
    # =========================================================================

    def reset_password(
        self,
        caller: User,
        username: str,
        current_password: str,
        new_password: str,
    ) -> User:
        """
        Set a new password for ``username``.

        The caller must confirm their own current password. Only admins may
        reset someone else's password. Every token issued to the target
        before the reset stops working.

        Raises:
            ValidationError: Wrong current password or new password too short.
            ForbiddenError: Non-admin resetting another account.
            NotFoundError: Unknown username.
        """
        if not verify_password(current_password, caller.password):
            raise ValidationError(
                "The current password is incorrect.", field="current_password", user_id=caller.id
            )

        if username != caller.username and caller.role != Roles.ADMIN:
            raise ForbiddenError("reset another user's password", user_id=caller.id)

        target = self._users.find_by_username(username)
        if target is None:
            raise NotFoundError("User", username=username)

        if len(new_password) < Limits.PASSWORD_MIN_LENGTH:
            raise ValidationError("The password must be at least 8 characters.", field="password")
        if password_too_long(new_password):
            raise ValidationError(
                f"The password may not be greater than {Limits.PASSWORD_MAX_BYTES} bytes.",
                field="password",
            )

        target.password = hash_password(new_password)
        safe_commit(self._db)
        revoke_all_user_tokens(target.id)

        logger.info("PASSWORD_RESET", user_id=target.id, by_user_id=caller.id)
        return target
