"""Rounding primitive shared by the normalizer and the validator."""

import math


def round_half_away_from_zero(value: float, decimals: int = 0) -> float:
    """Round to `decimals` places, halves away from zero.

    Computed as floor(|value| * 10^d + 0.5) / 10^d with the sign restored.
    Never returns -0.0.

    Args:
        value: Number to round
        decimals: Number of decimal places (>= 0)

    Returns:
        Rounded value as float
    """
    factor = 10**decimals
    scaled = abs(value) * factor
    rounded = math.floor(scaled + 0.5) / factor
    return math.copysign(rounded, value) if rounded else 0.0
