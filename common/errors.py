"""Error types shared by the converter APIs.

Every error renders as ``{"code", "message", "details"}`` inside the failure
envelope built by :func:`common.responses.fail`. Codes are namespaced by the
plugin that raises them (``unit.*``, ``data.*``, ``catalog.*``).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Sequence


@dataclass(slots=True)
class AppError(Exception):
    """Base application error with a JSON friendly payload."""

    message: str
    code: str = "error"
    status_code: int = 400
    details: Mapping[str, Any] | Sequence[Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        # pydantic reports a list of field errors; everything else is a mapping.
        if isinstance(self.details, Mapping):
            details: Any = dict(self.details)
        elif self.details:
            details = list(self.details)
        else:
            details = {}
        return {"code": self.code, "message": self.message, "details": details}


@dataclass(slots=True)
class ValidationAppError(AppError):
    """Malformed request body or unreadable number."""

    code: str = "validation_error"
    status_code: int = 400


@dataclass(slots=True)
class NotFoundAppError(AppError):
    """Unknown category, unit or converter id."""

    code: str = "not_found"
    status_code: int = 404


@dataclass(slots=True)
class PayloadTooLargeAppError(AppError):
    code: str = "payload_too_large"
    status_code: int = 413


@dataclass(slots=True)
class UnprocessableAppError(AppError):
    """Well-formed input that has no result: a reciprocal at zero, unparsable JSON."""

    code: str = "unprocessable"
    status_code: int = 422


@dataclass(slots=True)
class InternalAppError(AppError):
    code: str = "internal_error"
    status_code: int = 500


__all__ = [
    "AppError",
    "InternalAppError",
    "NotFoundAppError",
    "PayloadTooLargeAppError",
    "UnprocessableAppError",
    "ValidationAppError",
]
