"""
Password hashing utilities using bcrypt directly.
"""

import bcrypt

from shared.config.constants import Limits
from shared.config.logging import get_logger

logger = get_logger(__name__)

BCRYPT_ROUNDS = 12
BCRYPT_PREFIXES = ("$2a$", "$2b$", "$2y$")


def hash_password(password: str) -> str:
    """
    Hash a password using bcrypt.

    Example:
        hashed = hash_password("dashboard-secret")
        # Returns something like: $2b$12$...
    """
    salt = bcrypt.gensalt(rounds=BCRYPT_ROUNDS)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Verify a password against its hash.

    Anything that is not a bcrypt hash ($2a$, $2b$, $2y$) never matches, and
    neither does a password longer than bcrypt accepts.
    """
    if not hashed_password or not hashed_password.startswith(BCRYPT_PREFIXES):
        logger.warning("Stored password is not a bcrypt hash")
        return False

    password_bytes = plain_password.encode("utf-8")
    if len(password_bytes) > Limits.PASSWORD_MAX_BYTES:
        return False

    return bcrypt.checkpw(password_bytes, hashed_password.encode("utf-8"))


def needs_rehash(hashed_password: str) -> bool:
    """True if the hash was produced with a different cost factor."""
    if not hashed_password.startswith(BCRYPT_PREFIXES):
        return True

    # "$2b$12$..." -> cost is the second field
    try:
        rounds = int(hashed_password.split("$")[2])
    except (IndexError, ValueError):
        return True
    return rounds != BCRYPT_ROUNDS
