"""
Score Precision Helpers
=======================

Full-precision arithmetic and presentation rounding for MRI figures.

All intermediate arithmetic is carried out on Decimal values built from
the shortest repr of their float inputs, so 0.15 is exactly 0.15. Values
are rounded half-up exactly once, when they are placed into a result.

Author: MRI Team
Version: 1.0.0
"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Optional, Union

from mri.config import settings


Number = Union[Decimal, float, int]

ZERO = Decimal("0")
ONE = Decimal("1")
HUNDRED = Decimal("100")
MAX_SCORE = Decimal("4")


def to_decimal(value: Number) -> Decimal:
    """Convert a number to Decimal without binary float artefacts."""
    if isinstance(value, Decimal):
        return value
    if isinstance(value, int):
        return Decimal(value)
    return Decimal(repr(float(value)))


def round_half_up(value: Number, places: Optional[int] = None) -> float:
    """
    Round to a fixed number of decimals, halves away from zero.

    Args:
        value: Value to round
        places: Fractional digits (defaults to settings.score_decimal_places)

    Returns:
        Rounded float, e.g. round_half_up(55.65) == 55.7
    """
    if places is None:
        places = settings.score_decimal_places
    quantum = Decimal(1).scaleb(-places)
    return float(to_decimal(value).quantize(quantum, rounding=ROUND_HALF_UP))


def mean(values: Iterable[Number]) -> Decimal:
    """Arithmetic mean at full precision; 0 for an empty input."""
    items = [to_decimal(v) for v in values]
    if not items:
        return ZERO
    return sum(items, ZERO) / Decimal(len(items))


def to_percentage(fraction: Number) -> Decimal:
    """Scale a 0-1 fraction to 0-100 without rounding."""
    return to_decimal(fraction) * HUNDRED
