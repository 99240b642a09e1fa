"""Numeric helpers shared by the engine components."""

import math


def round_half_up(value: float, places: int) -> float:
    """
    Round to a number of decimal places, ties toward +infinity.

    Works on the binary value, so 1.005 rounds to 1.0 and -0.00005 to 0.0
    at four places.
    """
    scale = 10 ** places
    return math.floor(value * scale + 0.5) / scale


def clamp(value: float, low: float, high: float) -> float:
    """Bound a value to [low, high]."""
    return min(high, max(low, value))
