"""Merged catalog of unit categories and data converters.

Both families share one id namespace, so an id names exactly one converter
no matter which plugin provides it.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from typing import Dict, Iterator, List, Optional

from flask import Blueprint, Response, request

from common.errors import NotFoundAppError
from common.responses import fail, ok
from plugins.data_converter.core import DATA_CONVERTERS
from plugins.unit_converter.core import get_registry

UNIT = "unit"
DATA = "data"


class CatalogError(ValueError):
    """Raised when two converters claim the same id."""


@dataclass(frozen=True)
class CatalogEntry:
    id: str
    name: str
    description: str
    type: str
    unit_count: Optional[int] = None

    def to_dict(self) -> Dict[str, object]:
        payload: Dict[str, object] = {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "type": self.type,
        }
        if self.unit_count is not None:
            payload["unit_count"] = self.unit_count
        return payload


class Catalog:
    def __init__(self, entries: List[CatalogEntry]) -> None:
        index: Dict[str, CatalogEntry] = {}
        for entry in entries:
            if entry.id in index:
                raise CatalogError(
                    f"Converter id '{entry.id}' is used by both a {index[entry.id].type}"
                    f" and a {entry.type} converter."
                )
            index[entry.id] = entry
        self._entries = tuple(entries)
        self._index = index

    def __iter__(self) -> Iterator[CatalogEntry]:
        return iter(self._entries)

    def find(self, entry_id: str) -> Optional[CatalogEntry]:
        return self._index.get(entry_id)

    def search(self, query: str) -> Iterator[CatalogEntry]:
        """Yield entries whose name or description contains ``query``."""

        needle = (query or "").strip().lower()
        for entry in self._entries:
            if needle in entry.name.lower() or needle in entry.description.lower():
                yield entry


def build_catalog() -> Catalog:
    entries = [
        CatalogEntry(
            id=category.id,
            name=category.name,
            description=category.description,
            type=UNIT,
            unit_count=len(category.units),
        )
        for category in get_registry()
    ]
    entries.extend(
        CatalogEntry(
            id=converter.id,
            name=converter.name,
            description=converter.description,
            type=DATA,
        )
        for converter in DATA_CONVERTERS
    )
    return Catalog(entries)


@lru_cache(maxsize=1)
def get_catalog() -> Catalog:
    return build_catalog()


catalog_bp = Blueprint("catalog_api", __name__, url_prefix="/api/catalog")


@catalog_bp.get("")
def catalog_listing() -> Response:
    query = request.args.get("q", "")
    entries = [entry.to_dict() for entry in get_catalog().search(query)]
    return ok({"converters": entries}, meta={"query": query} if query else None)


@catalog_bp.get("/<entry_id>")
def catalog_entry(entry_id: str) -> Response:
    entry = get_catalog().find(entry_id)
    if entry is None:
        return fail(
            NotFoundAppError(message=f"No converter '{entry_id}'.", code="catalog.not_found")
        )
    return ok(entry.to_dict())


__all__ = [
    "Catalog",
    "CatalogEntry",
    "CatalogError",
    "build_catalog",
    "catalog_bp",
    "get_catalog",
]
