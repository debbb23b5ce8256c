"""Validation primitives for plugin APIs."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, TypeVar

import pydantic
from pydantic import BaseModel


class ValidationError(ValueError):
    """Raised when validation fails."""

    def __init__(self, message: str, *, details: Any | None = None):
        super().__init__(message)
        self.details = details


class SchemaModel(BaseModel):
    """Strict base model for request/response validation."""

    model_config = pydantic.ConfigDict(extra="forbid", str_strip_whitespace=True)


TModel = TypeVar("TModel", bound=SchemaModel)


def parse_model(model: type[TModel], payload: Mapping[str, Any] | None) -> TModel:
    payload = payload or {}
    try:
        return model.model_validate(payload)
    except pydantic.ValidationError as exc:  # pragma: no cover - exercised in tests
        raise ValidationError("Invalid request payload", details=exc.errors()) from exc


@dataclass(slots=True)
class TextLimit:
    max_chars: int

    def allows(self, text: str) -> bool:
        return len(text) <= self.max_chars


def enforce_text_limit(text: str, limit: TextLimit, *, field: str = "input") -> None:
    if not limit.allows(text):
        raise ValidationError(
            f"Field '{field}' exceeds {limit.max_chars} characters",
            details={"field": field, "max_chars": limit.max_chars, "length": len(text)},
        )


__all__ = [
    "ValidationError",
    "SchemaModel",
    "parse_model",
    "TextLimit",
    "enforce_text_limit",
]
