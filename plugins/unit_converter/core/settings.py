"""Configuration helpers for the unit converter."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping

DEFAULT_CATEGORY = "length"


@dataclass(frozen=True)
class UnitConverterSettings:
    default_category: str
    max_value_chars: int


def load_settings(raw: Mapping[str, object] | None) -> UnitConverterSettings:
    raw = raw or {}
    default_category = str(raw.get("default_category") or DEFAULT_CATEGORY).strip()
    try:
        max_value_chars = int(float(raw.get("max_value_chars", 64)))
    except (TypeError, ValueError):
        max_value_chars = 64
    return UnitConverterSettings(
        default_category=default_category or DEFAULT_CATEGORY,
        max_value_chars=max(1, max_value_chars),
    )


__all__ = ["DEFAULT_CATEGORY", "UnitConverterSettings", "load_settings"]
