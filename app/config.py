"""Configuration classes for the Flask application."""

from __future__ import annotations

import os
import secrets


def _load_secret() -> str:
    """Return the Flask secret key for the current process."""

    secret = os.environ.get("OMNICONVERT_SECRET")
    if secret:
        return secret
    # Generate an unpredictable per-process key for local development.
    return secrets.token_urlsafe(64)


class BaseConfig:
    SECRET_KEY = _load_secret()
    MAX_CONTENT_LENGTH = 2 * 1024 * 1024  # 2 MiB
    LOG_LEVEL = os.environ.get("OMNICONVERT_LOG_LEVEL", "INFO")
    RESPONSE_HEADERS = {
        "X-Content-Type-Options": "nosniff",
        "X-Frame-Options": "DENY",
        "Content-Security-Policy": "default-src 'none'; frame-ancestors 'none'",
        "Referrer-Policy": "no-referrer",
        "Cache-Control": "no-store",
    }


class TestingConfig(BaseConfig):
    TESTING = True
    LOG_LEVEL = "WARNING"


__all__ = ["BaseConfig", "TestingConfig"]
