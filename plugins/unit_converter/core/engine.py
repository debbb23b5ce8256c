"""Stateless conversion between two units of one category."""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Union

from .formatting import format_number
from .registry import Category


class ConversionErrorKind(str, Enum):
    NOT_FOUND = "not_found"
    INVALID_NUMBER = "invalid_number"
    NON_FINITE_RESULT = "non_finite_result"


@dataclass(frozen=True)
class ConversionError:
    """Expected failure of a conversion, returned rather than raised."""

    kind: ConversionErrorKind
    message: str

    def to_dict(self) -> Dict[str, str]:
        return {"kind": self.kind.value, "message": self.message}


ConversionOutcome = Union[float, ConversionError]

# Leading numeric prefix, read the way a browser reads a number input.
_NUMBER_PATTERN = re.compile(r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


def parse_number(text: str) -> ConversionOutcome:
    """Parse user supplied ``text`` into a finite float.

    Text after a valid numeric prefix is ignored so partially typed input such
    as ``"12."`` or ``"3e"`` still yields a number.
    """

    if not isinstance(text, str):
        return ConversionError(ConversionErrorKind.INVALID_NUMBER, "Value must be text.")
    match = _NUMBER_PATTERN.match(text)
    if match is None:
        return ConversionError(
            ConversionErrorKind.INVALID_NUMBER, f"'{text}' is not a number."
        )
    value = float(match.group(1))
    if not math.isfinite(value):
        return ConversionError(
            ConversionErrorKind.INVALID_NUMBER, "Value must be a finite number."
        )
    return value


def convert(
    category: Category, from_unit_id: str, to_unit_id: str, value: float
) -> ConversionOutcome:
    """Convert ``value`` from one unit of ``category`` to another.

    The value is normalised to the category's base quantity and denormalised
    into the target unit. Unknown units, non-finite input and laws that blow up
    (division by zero, logarithm of a non-positive value, overflow) come back
    as :class:`ConversionError` values.
    """

    source = category.find_unit(from_unit_id)
    if source is None:
        return ConversionError(
            ConversionErrorKind.NOT_FOUND,
            f"No unit '{from_unit_id}' in category '{category.id}'.",
        )
    target = category.find_unit(to_unit_id)
    if target is None:
        return ConversionError(
            ConversionErrorKind.NOT_FOUND,
            f"No unit '{to_unit_id}' in category '{category.id}'.",
        )
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return ConversionError(
            ConversionErrorKind.INVALID_NUMBER, "Value must be a real number."
        )
    try:
        number = float(value)
    except OverflowError:
        # Integers past the float range.
        return ConversionError(
            ConversionErrorKind.INVALID_NUMBER, "Value is too large to convert."
        )
    if not math.isfinite(number):
        return ConversionError(
            ConversionErrorKind.INVALID_NUMBER, "Value must be a finite number."
        )
    try:
        result = target.from_base(source.to_base(number))
    except (ArithmeticError, ValueError):
        return _non_finite(source.id, target.id, number)
    if not math.isfinite(result):
        return _non_finite(source.id, target.id, number)
    return result


def _non_finite(from_unit_id: str, to_unit_id: str, value: float) -> ConversionError:
    return ConversionError(
        ConversionErrorKind.NON_FINITE_RESULT,
        f"Converting {value} {from_unit_id} to {to_unit_id} has no finite result.",
    )


def convert_text(category: Category, from_unit_id: str, to_unit_id: str, text: str) -> str:
    """Parse, convert and format ``text``; any failure yields an empty string."""

    parsed = parse_number(text)
    if isinstance(parsed, ConversionError):
        return ""
    result = convert(category, from_unit_id, to_unit_id, parsed)
    if isinstance(result, ConversionError):
        return ""
    return format_number(result)


__all__ = [
    "ConversionError",
    "ConversionErrorKind",
    "ConversionOutcome",
    "convert",
    "convert_text",
    "parse_number",
]
