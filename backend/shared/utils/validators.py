"""
Shared validators for menu input.

Used by the pydantic schemas in shared.utils; each function raises
ValueError so pydantic reports it as a field error (422).
"""

import re
from collections.abc import Iterable
from urllib.parse import urlparse

from shared.config.constants import MENU_TAGS, Limits

# Hosts that must never appear in image URLs (SSRF prevention)
BLOCKED_HOSTS = [
    "localhost",
    "127.0.0.1",
    "0.0.0.0",
    "10.",
    "192.168.",
    "169.254.",  # Link-local, cloud metadata
    "[::1]",
    "metadata.google",
]

BLOCKED_SCHEMES = {"javascript", "data", "file", "ftp", "mailto", "tel"}

_CONTROL_CHARS = re.compile(r"[\x00-\x1f\x7f-\x9f]")


def validate_image_url(url: str | None) -> str | None:
    """
    Validate an image URL.

    Accepts absolute http(s) URLs and site-relative paths ("/images/menu/jollof.jpg").
    Empty values become None.

    Raises:
        ValueError: If the URL is malformed, too long, or points at an internal host.
    """
    if url is None:
        return None

    url = url.strip()
    if not url:
        return None

    if len(url) > Limits.URL_MAX_LENGTH:
        raise ValueError(f"URL too long (maximum {Limits.URL_MAX_LENGTH} characters)")

    if url.startswith("/") and not url.startswith("//"):
        return url

    parsed = urlparse(url)
    scheme = parsed.scheme.lower()
    if scheme in BLOCKED_SCHEMES:
        raise ValueError(f"URL scheme not allowed: {scheme}")
    if scheme not in ("http", "https"):
        raise ValueError("Only HTTP/HTTPS URLs or site-relative paths are allowed")

    host = parsed.netloc.lower()
    if not host:
        raise ValueError("URL has no host")

    for blocked in BLOCKED_HOSTS:
        if host.startswith(blocked) or blocked in host.split(":")[0]:
            raise ValueError("Internal URLs are not allowed")

    return url


def clean_name(value: str) -> str:
    """Strip whitespace and control characters; reject empty names."""
    value = _CONTROL_CHARS.sub("", value).strip()
    if not value:
        raise ValueError("Name must not be empty")
    return value


def normalize_tags(tags: Iterable[str] | None) -> list[str]:
    """
    Check tags against the fixed vocabulary.

    Matching is case-insensitive and returns the canonical spelling.
    Duplicates are dropped, first occurrence wins.
    """
    if not tags:
        return []

    canonical = {tag.lower(): tag for tag in MENU_TAGS}
    result: list[str] = []
    for tag in tags:
        key = tag.strip().lower()
        if key not in canonical:
            raise ValueError(f"Unknown tag '{tag}'. Allowed: {', '.join(MENU_TAGS)}")
        if canonical[key] not in result:
            result.append(canonical[key])
    return result


def password_too_long(password: str) -> bool:
    """bcrypt limits the UTF-8 encoding, not the character count."""
    return len(password.encode("utf-8")) > Limits.PASSWORD_MAX_BYTES


def validate_password_bytes(password: str) -> str:
    if password_too_long(password):
        raise ValueError(f"The password may not be greater than {Limits.PASSWORD_MAX_BYTES} bytes.")
    return password
