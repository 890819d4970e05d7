"""Numeric primitives for consensus building: median, mean, sample std-dev.

Empty inputs never raise. They return 0 so a criterion nobody scored still
produces a well-formed (zero) consensus.
"""

from __future__ import annotations

import statistics
from collections.abc import Sequence


def median(values: Sequence[float]) -> float:
    """Middle value, or the mean of the two middle values. Empty -> 0."""
    if not values:
        return 0
    return statistics.median(values)


def mean(values: Sequence[float]) -> float:
    if not values:
        return 0
    return statistics.fmean(values)


def stddev(values: Sequence[float]) -> float:
    """Sample standard deviation (n - 1 denominator). n <= 1 -> 0."""
    try:
        return statistics.stdev(values)
    except statistics.StatisticsError:
        return 0.0
