"""Outlier detection and small numeric helpers.

Outliers are detected with modified Z-scores as described by Iglewicz and
Hoaglin (1993), "How to Detect and Handle Outliers".
"""

from __future__ import annotations

import math
import statistics
import sys
from collections.abc import Sequence

# 1.4826 turns the MAD into an estimator of the standard deviation; the
# second factor is the number of standard deviations.
OUTLIER_THRESHOLD = 1.4826 * 10.0


def modified_zscores(xs: Sequence[float]) -> list[float]:
    """Return (x_i - median) / MAD for every sample point."""
    if not xs:
        raise ValueError("cannot compute Z-scores of an empty sample")
    x_median = statistics.median(xs)
    mad = statistics.median([abs(x - x_median) for x in xs])
    if not mad > 0.0:
        mad = sys.float_info.epsilon
    return [(x - x_median) / mad for x in xs]


def num_outliers(xs: Sequence[float]) -> int:
    """Count the points whose modified Z-score exceeds OUTLIER_THRESHOLD."""
    if not xs:
        return 0
    return sum(1 for score in modified_zscores(xs) if abs(score) > OUTLIER_THRESHOLD)


def _check(vals: Sequence[float]) -> None:
    if not vals:
        raise ValueError("empty sequence")
    if any(math.isnan(v) for v in vals):
        raise ValueError("sequence contains NaN")


def maximum(vals: Sequence[float]) -> float:
    """Largest value of a non-empty sequence without NaNs."""
    _check(vals)
    return max(vals)


def minimum(vals: Sequence[float]) -> float:
    """Smallest value of a non-empty sequence without NaNs."""
    _check(vals)
    return min(vals)