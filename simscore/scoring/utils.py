"""
Decimal Utilities
simscore/scoring/utils.py

Precision-safe math shared by the scorers: half-up rounding, clamping,
weighted means, population variance and the normal CDF used for percentiles.
"""

import math
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, List, Optional, Sequence


def to_decimal(value: float, places: int = 4) -> Decimal:
    """Convert float to Decimal with explicit precision."""
    return Decimal(str(value)).quantize(
        Decimal(10) ** -places, rounding=ROUND_HALF_UP
    )


def round_half_up(value) -> int:
    """Round to the nearest integer, halves away from zero (2.5 -> 3)."""
    return int(Decimal(str(value)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def clamp(value, min_val=0, max_val=100):
    """Clamp value to range [min_val, max_val]. Works for float and Decimal."""
    return max(min_val, min(max_val, value))


def weighted_mean(values: List[Decimal], weights: List[Decimal]) -> Decimal:
    """
    Calculate weighted mean.

    Formula: Σ(value_i × weight_i) / Σ(weight_i)
    Returns Decimal("0") if all weights are zero.
    """
    if len(values) != len(weights):
        raise ValueError("values and weights must have same length")

    total_weight = sum(weights)
    if total_weight == 0:
        return Decimal("0")

    numerator = sum(v * w for v, w in zip(values, weights))
    return (numerator / total_weight).quantize(Decimal("0.0001"), rounding=ROUND_HALF_UP)


def mean(values: Sequence[float]) -> Optional[float]:
    """Arithmetic mean, or None for an empty sequence."""
    if not values:
        return None
    return sum(values) / len(values)


def mean_or_default(values: Iterable[Optional[float]], default: float) -> float:
    """Mean where missing (None) values count as ``default``."""
    filled = [default if v is None else v for v in values]
    return mean(filled) if filled else default


def population_variance(values: Sequence[float]) -> float:
    """
    Population variance.

    Formula: Σ(x_i − x̄)² / n
    """
    if not values:
        return 0.0
    avg = sum(values) / len(values)
    return sum((v - avg) ** 2 for v in values) / len(values)


# Abramowitz & Stegun 7.1.26, |error| <= 1.5e-7
_AS_P = 0.3275911
_AS_A = (0.254829592, -0.284496736, 1.421413741, -1.453152027, 1.061405429)


def erf(x: float) -> float:
    """Closed-form erf approximation (Abramowitz & Stegun 7.1.26)."""
    sign = 1.0 if x >= 0 else -1.0
    x = abs(x)
    t = 1.0 / (1.0 + _AS_P * x)
    a1, a2, a3, a4, a5 = _AS_A
    poly = ((((a5 * t + a4) * t + a3) * t + a2) * t + a1) * t
    return sign * (1.0 - poly * math.exp(-x * x))


def normal_cdf(z: float) -> float:
    """
    Standard normal CDF.

    Formula: Φ(z) = ½ × (1 + erf(z / √2))
    """
    return 0.5 * (1.0 + erf(z / math.sqrt(2.0)))
