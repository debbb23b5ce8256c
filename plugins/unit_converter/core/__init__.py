"""Facade for the unit converter core utilities."""

from __future__ import annotations

from functools import lru_cache
from typing import Dict, List, Optional

from .catalog import CATEGORIES, build_registry
from .engine import (
    ConversionError,
    ConversionErrorKind,
    ConversionOutcome,
    convert_text,
    parse_number,
)
from .engine import convert as convert_units
from .formatting import format_number
from .laws import IDENTITY, Affine, ConversionLaw, Linear, Logarithmic, Reciprocal
from .registry import Category, Registry, RegistryError, Unit
from .session import ConversionSession, Side
from .settings import UnitConverterSettings, load_settings


@lru_cache(maxsize=1)
def get_registry() -> Registry:
    """Return the process wide, immutable category registry."""

    return build_registry()


def list_categories() -> List[Dict[str, object]]:
    """Return ``{id, name, description, unit_count}`` for every category."""

    return get_registry().list_categories()


def get_category(category_id: str) -> Optional[Category]:
    return get_registry().find_category(category_id)


def search_categories(query: str) -> List[Category]:
    return list(get_registry().search(query))


def convert(
    category_id: str, from_unit_id: str, to_unit_id: str, value: float
) -> ConversionOutcome:
    """Convert ``value`` inside the category identified by ``category_id``."""

    category = get_category(category_id)
    if category is None:
        return ConversionError(
            ConversionErrorKind.NOT_FOUND, f"No category '{category_id}'."
        )
    return convert_units(category, from_unit_id, to_unit_id, value)


def open_session(category_id: str) -> ConversionSession | ConversionError:
    category = get_category(category_id)
    if category is None:
        return ConversionError(
            ConversionErrorKind.NOT_FOUND, f"No category '{category_id}'."
        )
    return ConversionSession(category)


__all__ = [
    "Affine",
    "CATEGORIES",
    "Category",
    "ConversionError",
    "ConversionErrorKind",
    "ConversionLaw",
    "ConversionOutcome",
    "ConversionSession",
    "IDENTITY",
    "Linear",
    "Logarithmic",
    "Reciprocal",
    "Registry",
    "RegistryError",
    "Side",
    "Unit",
    "UnitConverterSettings",
    "convert",
    "convert_text",
    "convert_units",
    "format_number",
    "get_category",
    "get_registry",
    "list_categories",
    "load_settings",
    "open_session",
    "parse_number",
    "search_categories",
]
