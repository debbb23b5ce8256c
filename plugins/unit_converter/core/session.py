"""Two-field conversion session keeping a pair of linked inputs consistent."""

from __future__ import annotations

from enum import Enum
from typing import Dict, Optional

from common.logging import get_logger

from .engine import ConversionError, ConversionErrorKind, convert_text
from .registry import Category

logger = get_logger("omniconvert.unit_converter")

INITIAL_VALUE_TEXT = "1"


class Side(str, Enum):
    FROM = "from"
    TO = "to"

    @property
    def other(self) -> "Side":
        return Side.TO if self is Side.FROM else Side.FROM


class ConversionSession:
    """Live state of one converter panel.

    The field named by :attr:`last_edited` is authoritative and always holds
    the user's raw text; the other field is derived from it after every
    transition. Nothing here raises for bad user input: unparseable or
    non-finite values simply clear the derived field.
    """

    def __init__(self, category: Category) -> None:
        source, target = category.default_pair()
        self.category = category
        self._units: Dict[Side, str] = {Side.FROM: source.id, Side.TO: target.id}
        self._texts: Dict[Side, str] = {Side.FROM: INITIAL_VALUE_TEXT, Side.TO: ""}
        self._last_edited = Side.FROM
        self._settle()

    @classmethod
    def restore(
        cls,
        category: Category,
        *,
        from_unit_id: Optional[str] = None,
        to_unit_id: Optional[str] = None,
        from_value_text: str = INITIAL_VALUE_TEXT,
        to_value_text: str = "",
        last_edited: Side | str = Side.FROM,
    ) -> "ConversionSession":
        """Rebuild a session from a client snapshot and settle it.

        Unknown unit ids keep the category defaults. Only the authoritative
        text is trusted; the derived side is recomputed.
        """

        session = cls(category)
        side = Side(last_edited)
        for unit_side, unit_id in ((Side.FROM, from_unit_id), (Side.TO, to_unit_id)):
            if unit_id is not None and category.find_unit(unit_id) is not None:
                session._units[unit_side] = unit_id
        session._texts[Side.FROM] = from_value_text
        session._texts[Side.TO] = to_value_text
        session._last_edited = side
        session._settle()
        return session

    # ---- Read accessors --------------------------------------------------
    @property
    def from_unit_id(self) -> str:
        return self._units[Side.FROM]

    @property
    def to_unit_id(self) -> str:
        return self._units[Side.TO]

    @property
    def from_value_text(self) -> str:
        return self._texts[Side.FROM]

    @property
    def to_value_text(self) -> str:
        return self._texts[Side.TO]

    @property
    def last_edited(self) -> Side:
        return self._last_edited

    # ---- Transitions -----------------------------------------------------
    def edit_from(self, text: str) -> None:
        self._edit(Side.FROM, text)

    def edit_to(self, text: str) -> None:
        self._edit(Side.TO, text)

    def change_from_unit(self, unit_id: str) -> Optional[ConversionError]:
        return self._change_unit(Side.FROM, unit_id)

    def change_to_unit(self, unit_id: str) -> Optional[ConversionError]:
        return self._change_unit(Side.TO, unit_id)

    def swap(self) -> None:
        """Exchange the units, carrying the authoritative text with its unit."""

        authority = self._last_edited
        self._units[Side.FROM], self._units[Side.TO] = (
            self._units[Side.TO],
            self._units[Side.FROM],
        )
        self._texts[authority.other] = self._texts[authority]
        self._last_edited = authority.other
        self._settle()

    def snapshot(self) -> Dict[str, str]:
        return {
            "category": self.category.id,
            "from_unit": self.from_unit_id,
            "to_unit": self.to_unit_id,
            "from_value": self.from_value_text,
            "to_value": self.to_value_text,
            "last_edited": self._last_edited.value,
        }

    # ---- Internal utilities ----------------------------------------------
    def _edit(self, side: Side, text: str) -> None:
        self._texts[side] = text if isinstance(text, str) else ""
        self._last_edited = side
        self._settle()

    def _change_unit(self, side: Side, unit_id: str) -> Optional[ConversionError]:
        if self.category.find_unit(unit_id) is None:
            logger.info(
                "Ignoring unknown %s unit '%s' for category %s",
                side.value,
                unit_id,
                self.category.id,
            )
            return ConversionError(
                ConversionErrorKind.NOT_FOUND,
                f"No unit '{unit_id}' in category '{self.category.id}'.",
            )
        self._units[side] = unit_id
        self._settle()
        return None

    def _settle(self) -> None:
        source = self._last_edited
        target = source.other
        self._texts[target] = convert_text(
            self.category, self._units[source], self._units[target], self._texts[source]
        )


__all__ = ["ConversionSession", "INITIAL_VALUE_TEXT", "Side"]
