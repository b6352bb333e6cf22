"""
Rounding policy for displayed results.

Function and logarithm results, and the named constants, are rounded to
DISPLAY_PRECISION decimal places. Arithmetic, negation and factorial results
keep full double precision.
"""

from __future__ import annotations

import math

DISPLAY_PRECISION = 2

# Doubles carry about 15 significant decimal digits
MAX_PRECISION = 15

# From here on a double has no fractional part left to round
_INTEGRAL_LIMIT = 2.0**52


def round_half_away(value: float, places: int = DISPLAY_PRECISION) -> float:
    """Round to ``places`` decimals, ties away from zero (0.125 -> 0.13, -0.125 -> -0.13).

    Values too large to carry digits at that scale are returned unchanged.
    """
    if not 0 <= places <= MAX_PRECISION:
        raise ValueError(f"places must be between 0 and {MAX_PRECISION}, got {places}")
    if not math.isfinite(value):
        return value
    scaled = abs(value) * 10.0**places
    if not math.isfinite(scaled) or scaled >= _INTEGRAL_LIMIT:
        return value
    return math.copysign(math.floor(scaled + 0.5) / 10.0**places, value)
