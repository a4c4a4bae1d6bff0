"""Tests for trend analysis."""

from datetime import datetime, timedelta

import pytest

from src.analysis.trends import TrendDirection, TrendPoint, calculate_trend

BASE = datetime(2024, 1, 1)


def _points(values: list[float]) -> list[TrendPoint]:
    return [TrendPoint(date=BASE + timedelta(days=i), value=v) for i, v in enumerate(values)]


class TestCalculateTrend:
    """Tests for calculate_trend."""

    def test_perfect_linear_increase(self) -> None:
        """Values 10, 20, 30 fit slope 10, intercept 10, R² 1."""
        result = calculate_trend(_points([10.0, 20.0, 30.0]))
        assert result.slope == pytest.approx(10.0)
        assert result.intercept == pytest.approx(10.0)
        assert result.r_squared == pytest.approx(1.0)
        assert result.confidence == pytest.approx(1.0)
        assert result.direction == TrendDirection.INCREASING
        assert result.sample_count == 3

    def test_single_point_insufficient(self) -> None:
        """One point is not enough for a trend."""
        result = calculate_trend(_points([7.0]))
        assert result.direction == TrendDirection.INSUFFICIENT_DATA
        assert result.slope == 0.0
        assert result.confidence == 0.0

    def test_empty_insufficient(self) -> None:
        """No points is not enough for a trend."""
        assert calculate_trend([]).direction == TrendDirection.INSUFFICIENT_DATA

    def test_decreasing(self) -> None:
        """A falling series is decreasing."""
        result = calculate_trend(_points([9.0, 7.0, 5.0, 3.0]))
        assert result.slope == pytest.approx(-2.0)
        assert result.direction == TrendDirection.DECREASING

    def test_small_slope_is_stable(self) -> None:
        """A slope of at most 0.1 per sample is stable."""
        result = calculate_trend(_points([7.0, 7.05, 7.1]))
        assert result.slope == pytest.approx(0.05)
        assert result.direction == TrendDirection.STABLE

    def test_constant_series(self) -> None:
        """A constant series is stable with an exact fit."""
        result = calculate_trend(_points([5.0, 5.0, 5.0]))
        assert result.slope == 0.0
        assert result.r_squared == 1.0
        assert result.direction == TrendDirection.STABLE

    def test_sorted_by_date_first(self) -> None:
        """Points are ordered by date before fitting."""
        points = [
            TrendPoint(date=BASE + timedelta(days=2), value=30.0),
            TrendPoint(date=BASE, value=10.0),
            TrendPoint(date=BASE + timedelta(days=1), value=20.0),
        ]
        result = calculate_trend(points)
        assert result.slope == pytest.approx(10.0)
        assert result.direction == TrendDirection.INCREASING

    def test_noisy_series_confidence(self) -> None:
        """A noisy series has confidence below 1."""
        result = calculate_trend(_points([1.0, 5.0, 2.0, 6.0, 3.0]))
        assert 0.0 <= result.confidence < 1.0
        assert result.confidence == pytest.approx(max(0.0, result.r_squared))
