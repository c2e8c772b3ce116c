"""
Rounding and comparison helpers for reported figures
"""
import math
from typing import Optional


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positives (2.5 -> 3)"""
    return int(math.floor(value + 0.5))


def round_to(value: float, digits: int = 1) -> float:
    """Round half up to ``digits`` decimals"""
    factor = 10 ** digits
    return math.floor(value * factor + 0.5) / factor


def percentage_change(current: float, previous: float, empty_base: Optional[int] = None) -> int:
    """
    Whole percentage change from ``previous`` to ``current``.

    Args:
        current: value for the current period
        previous: value for the comparison period
        empty_base: result when ``previous`` is 0; None means 100 when
            ``current`` is positive and 0 otherwise

    Returns:
        rounded percentage
    """
    if previous > 0:
        return round_half_up((current - previous) / previous * 100)
    if empty_base is not None:
        return empty_base
    return 100 if current > 0 else 0
