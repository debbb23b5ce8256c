"""Logging helpers with request correlation."""

from __future__ import annotations

import logging
import time
import uuid
from typing import Any

from flask import Flask, g, request

DEFAULT_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
ROOT_LOGGER = "omniconvert"


def get_logger(name: str = ROOT_LOGGER) -> logging.Logger:
    """Return ``name``'s logger; only the ``omniconvert`` root carries a handler."""

    root = logging.getLogger(ROOT_LOGGER)
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(DEFAULT_FORMAT))
        root.addHandler(handler)
        root.setLevel(logging.INFO)
    return logging.getLogger(name)


def set_level(level: str | int) -> None:
    """Apply ``level`` to the application root logger."""

    if isinstance(level, str):
        resolved = logging.getLevelName(level.upper())
        if not isinstance(resolved, int):
            resolved = logging.INFO
    else:
        resolved = level
    get_logger().setLevel(resolved)


def _request_context() -> dict[str, Any]:
    return {
        "request_id": getattr(g, "request_id", "-"),
        "path": request.path,
        "method": request.method,
    }


def install_request_logging(app: Flask) -> None:
    logger = get_logger()

    @app.before_request
    def _begin_request() -> None:  # pragma: no cover - flask hooks
        g.request_id = request.headers.get("X-Request-ID") or uuid.uuid4().hex
        g.request_started = time.perf_counter()

    @app.after_request
    def _after_request(response):  # pragma: no cover - flask hooks
        duration_ms = 0.0
        if hasattr(g, "request_started"):
            duration_ms = (time.perf_counter() - g.request_started) * 1000
        logger.info(
            "%s %s -> %s in %.2f ms",
            request.method,
            request.path,
            response.status_code,
            duration_ms,
            extra={**_request_context(), "status": response.status_code},
        )
        response.headers.setdefault("X-Request-ID", getattr(g, "request_id", ""))
        return response

    @app.teardown_request
    def _teardown_request(exc):  # pragma: no cover - flask hooks
        if exc is not None:
            logger.exception("request error", extra=_request_context())


__all__ = ["get_logger", "install_request_logging", "set_level"]
