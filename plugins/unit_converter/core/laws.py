"""Conversion laws linking a unit to its category's base quantity.

Every unit converts through exactly one law. The set of laws is closed so the
engine and the tests can reason about each kind generically instead of
treating units as opaque callables.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Dict, Union


@dataclass(frozen=True)
class Linear:
    """Pure scaling: ``base = value * factor / divisor``.

    Keeping ``divisor`` separate lets exact ratios such as ``1 / 1000`` be
    written without introducing a rounded reciprocal.
    """

    factor: float
    divisor: float = 1.0

    kind = "linear"

    def to_base(self, value: float) -> float:
        return value * self.factor / self.divisor

    def from_base(self, value: float) -> float:
        return value * self.divisor / self.factor

    @property
    def is_identity(self) -> bool:
        return self.factor == self.divisor

    def describe(self) -> Dict[str, object]:
        return {"kind": self.kind, "factor": self.factor, "divisor": self.divisor}


@dataclass(frozen=True)
class Affine:
    """Shift then scale: ``base = (value + offset) * factor / divisor``."""

    offset: float
    factor: float = 1.0
    divisor: float = 1.0

    kind = "affine"

    def to_base(self, value: float) -> float:
        return (value + self.offset) * self.factor / self.divisor

    def from_base(self, value: float) -> float:
        return value * self.divisor / self.factor - self.offset

    @property
    def is_identity(self) -> bool:
        return self.offset == 0 and self.factor == self.divisor

    def describe(self) -> Dict[str, object]:
        return {
            "kind": self.kind,
            "offset": self.offset,
            "factor": self.factor,
            "divisor": self.divisor,
        }


@dataclass(frozen=True)
class Reciprocal:
    """Inverse proportionality: ``base = numerator / value``.

    The law is its own inverse. A zero input raises :class:`ZeroDivisionError`.
    """

    numerator: float

    kind = "reciprocal"

    def to_base(self, value: float) -> float:
        return self.numerator / value

    def from_base(self, value: float) -> float:
        return self.numerator / value

    @property
    def is_identity(self) -> bool:
        return False

    def describe(self) -> Dict[str, object]:
        return {"kind": self.kind, "numerator": self.numerator}


@dataclass(frozen=True)
class Logarithmic:
    """Level on a decibel-like scale: ``base = multiplier * log10(value / reference)``.

    Only defined for positive inputs; ``math.log10`` raises :class:`ValueError`
    otherwise and large levels overflow on the way back.
    """

    reference: float
    multiplier: float = 10.0

    kind = "logarithmic"

    def to_base(self, value: float) -> float:
        return self.multiplier * math.log10(value / self.reference)

    def from_base(self, value: float) -> float:
        return self.reference * 10.0 ** (value / self.multiplier)

    @property
    def is_identity(self) -> bool:
        return False

    def describe(self) -> Dict[str, object]:
        return {
            "kind": self.kind,
            "reference": self.reference,
            "multiplier": self.multiplier,
        }


ConversionLaw = Union[Linear, Affine, Reciprocal, Logarithmic]

IDENTITY = Linear(1.0)

LAW_KINDS: tuple[str, ...] = (
    Linear.kind,
    Affine.kind,
    Reciprocal.kind,
    Logarithmic.kind,
)


__all__ = [
    "Affine",
    "ConversionLaw",
    "IDENTITY",
    "LAW_KINDS",
    "Linear",
    "Logarithmic",
    "Reciprocal",
]
