"""Linear trend detection over a parameter's sample history."""

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime
from enum import Enum

import numpy as np

from src.utils.config import MIN_TREND_POINTS, STABLE_SLOPE_THRESHOLD


class TrendDirection(str, Enum):
    """Direction of a fitted trend."""

    INCREASING = "increasing"
    DECREASING = "decreasing"
    STABLE = "stable"
    INSUFFICIENT_DATA = "insufficient_data"


@dataclass(frozen=True)
class TrendPoint:
    """One dated value of a parameter."""

    date: datetime
    value: float


@dataclass(frozen=True)
class TrendResult:
    """Least-squares fit of value against sample sequence."""

    direction: TrendDirection
    slope: float
    intercept: float
    r_squared: float
    confidence: float
    sample_count: int = 0


def calculate_trend(points: Iterable[TrendPoint]) -> TrendResult:
    """Fit an ordinary least-squares line to a parameter's history.

    Points are ordered by date and regressed against their 0-based position
    rather than the raw timestamp, so the slope is "change per sample".

    Args:
        points: Dated values (any order)

    Returns:
        TrendResult; INSUFFICIENT_DATA with zero slope for fewer than two points
    """
    ordered = sorted(points, key=lambda p: p.date)
    n = len(ordered)

    if n < MIN_TREND_POINTS:
        return TrendResult(
            direction=TrendDirection.INSUFFICIENT_DATA,
            slope=0.0,
            intercept=0.0,
            r_squared=0.0,
            confidence=0.0,
            sample_count=n,
        )

    x = np.arange(n, dtype=float)
    y = np.array([p.value for p in ordered], dtype=float)

    sum_x = x.sum()
    sum_y = y.sum()
    sum_xy = (x * y).sum()
    sum_xx = (x * x).sum()

    slope = (n * sum_xy - sum_x * sum_y) / (n * sum_xx - sum_x * sum_x)
    intercept = (sum_y - slope * sum_x) / n

    predicted = slope * x + intercept
    ss_res = float(((y - predicted) ** 2).sum())
    ss_tot = float(((y - y.mean()) ** 2).sum())
    # A constant series is fitted exactly by a flat line
    r_squared = 1.0 - ss_res / ss_tot if ss_tot > 0 else 1.0

    if abs(slope) <= STABLE_SLOPE_THRESHOLD:
        direction = TrendDirection.STABLE
    elif slope > 0:
        direction = TrendDirection.INCREASING
    else:
        direction = TrendDirection.DECREASING

    return TrendResult(
        direction=direction,
        slope=float(slope),
        intercept=float(intercept),
        r_squared=r_squared,
        confidence=max(0.0, r_squared),
        sample_count=n,
    )
