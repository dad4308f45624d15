"""Numeric helpers for keeping dashboard values inside their display ranges."""

from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Optional


def clamp(value: float, lower: float, upper: float) -> float:
    """
    Constrain a value to the closed range [lower, upper].

    Args:
        value: The value to constrain
        lower: Smallest allowed value
        upper: Largest allowed value

    Returns:
        The value, or the nearest bound if it falls outside the range
    """
    return max(lower, min(upper, value))


def clamp_floor(value: float, floor: float) -> float:
    """Constrain a value so it never drops below floor."""
    return max(floor, value)


def finite_or(value: Any, default: float = 0.0) -> float:
    """
    Coerce a value to a finite float.

    None, non-numeric values, NaN and infinities all map to default.
    """
    number: Optional[float]
    try:
        number = float(value)
    except (TypeError, ValueError):
        return default
    if not math.isfinite(number):
        return default
    return number


def round_half_up(value: float, places: int) -> float:
    """
    Round to a number of decimal places, sending exact ties away from zero.

    Works on the float's exact binary value, so 92.25 becomes 92.3 while
    a value stored just below a tie rounds down.
    """
    step = Decimal(1).scaleb(-places)
    return float(Decimal(value).quantize(step, rounding=ROUND_HALF_UP))
