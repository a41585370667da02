"""Guarded rate arithmetic shared by the aggregators."""

from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable


def clamp_rate(value: float) -> float:
    return min(max(value, 0.0), 100.0)


def percentage(numerator: float, denominator: float) -> float:
    """Return ``numerator / denominator * 100`` rounded to one decimal.

    A non-positive denominator yields 0.0 rather than NaN or infinity.
    """
    if denominator <= 0:
        return 0.0
    return clamp_rate(round(numerator / denominator * 100, 1))


def round_half_up(value: float, digits: int = 0) -> float:
    """Round halves away from zero."""
    quantum = Decimal(1).scaleb(-digits)
    return float(Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def mean(values: Iterable[float], *, digits: int = 1) -> float:
    items = list(values)
    if not items:
        return 0.0
    return round(math.fsum(items) / len(items), digits)


def safe_ratio(numerator: float, denominator: float, *, digits: int = 2) -> float:
    if denominator <= 0:
        return 0.0
    return round(numerator / denominator, digits)


def spread(rates: Iterable[float]) -> float:
    """Max minus min over the given rates; 0.0 for fewer than two values."""
    items = list(rates)
    if len(items) < 2:
        return 0.0
    return round(max(items) - min(items), 1)
