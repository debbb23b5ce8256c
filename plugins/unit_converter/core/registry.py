"""Static data model for unit categories and the registry that indexes them."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, Iterator, List, Optional

from common.logging import get_logger

from .laws import ConversionLaw

logger = get_logger("omniconvert.unit_converter")


class RegistryError(ValueError):
    """Raised when category definitions violate the registry contract."""


@dataclass(frozen=True)
class Unit:
    """A measurement unit and the law tying it to its category's base quantity."""

    id: str
    name: str
    law: ConversionLaw

    def to_base(self, value: float) -> float:
        return self.law.to_base(value)

    def from_base(self, value: float) -> float:
        return self.law.from_base(value)

    def to_dict(self) -> Dict[str, object]:
        return {"id": self.id, "name": self.name, "law": self.law.describe()}


@dataclass(frozen=True)
class Category:
    """A group of mutually convertible units sharing one implicit base quantity."""

    id: str
    name: str
    description: str
    units: tuple[Unit, ...]
    default_from_unit_id: Optional[str] = None
    default_to_unit_id: Optional[str] = None
    _index: Dict[str, Unit] = field(
        init=False, repr=False, compare=False, default_factory=dict
    )

    def __post_init__(self) -> None:
        object.__setattr__(self, "units", tuple(self.units))
        if len(self.units) < 2:
            raise RegistryError(
                f"Category '{self.id}' needs at least two units, got {len(self.units)}."
            )
        index: Dict[str, Unit] = {}
        for unit in self.units:
            if unit.id in index:
                raise RegistryError(
                    f"Duplicate unit id '{unit.id}' in category '{self.id}'."
                )
            index[unit.id] = unit
        self._index.update(index)

    def find_unit(self, unit_id: str) -> Optional[Unit]:
        return self._index.get(unit_id)

    @property
    def unit_ids(self) -> List[str]:
        return [unit.id for unit in self.units]

    @property
    def base_unit(self) -> Optional[Unit]:
        """Return the first unit whose law is the identity, if any."""

        for unit in self.units:
            if unit.law.is_identity:
                return unit
        return None

    def default_pair(self) -> tuple[Unit, Unit]:
        """Return the default ``(from, to)`` units.

        Defaults that do not name a unit of this category fall back to the
        first and second units respectively.
        """

        source = self._resolve_default(self.default_from_unit_id, 0, "from")
        target = self._resolve_default(self.default_to_unit_id, 1, "to")
        return source, target

    def _resolve_default(self, unit_id: Optional[str], position: int, side: str) -> Unit:
        if unit_id is None:
            return self.units[position]
        unit = self.find_unit(unit_id)
        if unit is None:
            logger.warning(
                "Category %s: default %s unit '%s' is unknown, using '%s'",
                self.id,
                side,
                unit_id,
                self.units[position].id,
            )
            return self.units[position]
        return unit

    def summary(self) -> Dict[str, object]:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "unit_count": len(self.units),
        }

    def to_dict(self) -> Dict[str, object]:
        source, target = self.default_pair()
        payload = self.summary()
        payload["units"] = [unit.to_dict() for unit in self.units]
        payload["default_from_unit"] = source.id
        payload["default_to_unit"] = target.id
        return payload


class Registry:
    """Ordered, immutable collection of categories with id based lookup."""

    def __init__(self, categories: Iterable[Category]) -> None:
        ordered: List[Category] = []
        index: Dict[str, Category] = {}
        for category in categories:
            if category.id in index:
                raise RegistryError(f"Duplicate category id '{category.id}'.")
            index[category.id] = category
            ordered.append(category)
        self._categories: tuple[Category, ...] = tuple(ordered)
        self._index = index
        logger.debug("Unit registry built with %d categories", len(ordered))

    def __iter__(self) -> Iterator[Category]:
        return iter(self._categories)

    def __len__(self) -> int:
        return len(self._categories)

    def __contains__(self, category_id: object) -> bool:
        return category_id in self._index

    @property
    def ids(self) -> List[str]:
        return [category.id for category in self._categories]

    def find_category(self, category_id: str) -> Optional[Category]:
        return self._index.get(category_id)

    def search(self, query: str, *, include_description: bool = False) -> Iterator[Category]:
        """Yield categories whose name contains ``query`` (case-insensitive).

        Results keep registry order. Each call returns a fresh generator, so a
        search can be restarted simply by calling it again.
        """

        needle = (query or "").strip().lower()
        for category in self._categories:
            if needle in category.name.lower():
                yield category
            elif include_description and needle in category.description.lower():
                yield category

    def list_categories(self) -> List[Dict[str, object]]:
        return [category.summary() for category in self._categories]


__all__ = ["Category", "Registry", "RegistryError", "Unit"]
