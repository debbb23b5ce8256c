"""Display formatting for converted values."""

from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Decimal, localcontext

SIGNIFICANT_DIGITS = 8
EXPONENTIAL_THRESHOLD = 1e-6
EXPONENTIAL_DIGITS = 4
# Integral magnitudes from here on render in exponent form, as Number#toString does.
EXPONENT_FORM_THRESHOLD = 1e21
# Past this magnitude a float only carries its shortest repr digits.
EXACT_INTEGER_LIMIT = 2.0 ** 53


def _exponential(value: float, digits: int) -> str:
    # Python pads the exponent ("e-07"); the UI expects the compact "e-7".
    mantissa, exponent = f"{value:.{digits}e}".split("e")
    return f"{mantissa}e{int(exponent):+d}"


def _fixed(value: float, digits: int) -> str:
    # Ties round away from zero on the exact binary value, like toFixed.
    with localcontext() as ctx:
        ctx.prec = 40
        rounded = Decimal(value).quantize(Decimal(1).scaleb(-digits), rounding=ROUND_HALF_UP)
    return f"{rounded:f}"


def _integer_digits(value: float) -> int:
    return len(str(int(abs(value))))


def format_number(value: float) -> str:
    """Render ``value`` for display in a numeric field.

    * non-finite values render as an empty string,
    * magnitudes below ``1e-6`` use exponential notation with four fractional
      digits (``1.2340e-7``),
    * fractional values use fixed point with ``8 - integer digits`` decimals,
      never fewer than zero,
    * integral values render without a trailing ``.0``; from ``1e21`` up they
      use the shortest exponent form (``1e+21``).
    """

    if not math.isfinite(value):
        return ""
    magnitude = abs(value)
    if 0 < magnitude < EXPONENTIAL_THRESHOLD:
        return _exponential(value, EXPONENTIAL_DIGITS)
    if magnitude >= EXPONENT_FORM_THRESHOLD:
        return repr(float(value))
    if value % 1 != 0:
        precision = min(max(SIGNIFICANT_DIGITS - _integer_digits(value), 0), SIGNIFICANT_DIGITS)
        return _fixed(value, precision)
    if magnitude >= EXACT_INTEGER_LIMIT:
        return f"{Decimal(repr(float(value))):f}"
    return str(int(value))


__all__ = ["format_number"]
