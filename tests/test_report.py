"""Tests for batch report views."""

from dataclasses import replace
from datetime import datetime

import pytest

from src.analysis.orchestrator import BatchAnalysis, analyze_batch
from src.ingestion.normalizer import CleanedSample, Location
from src.reporting.report import (
    format_batch_summary,
    location_summary,
    parameter_statistics,
    samples_to_dataframe,
    summary_table,
)


@pytest.fixture
def batch(safe_sample: CleanedSample, critical_sample: CleanedSample) -> BatchAnalysis:
    """Three samples over two locations."""
    second_well_1 = replace(safe_sample, parameters={**safe_sample.parameters, "pH": 7.6})
    return analyze_batch([safe_sample, second_well_1, critical_sample])


class TestSamplesToDataframe:
    """Tests for samples_to_dataframe."""

    def test_one_row_per_sample(self, batch: BatchAnalysis) -> None:
        """Each sample becomes one row with indices and parameter values."""
        df = samples_to_dataframe(batch)
        assert len(df) == 3
        assert list(df["overall_status"]) == ["safe", "safe", "critical"]
        assert df.loc[2, "arsenic"] == pytest.approx(0.05)
        assert df.loc[0, "location"] == "Well 1"

    def test_empty_batch_has_columns(self) -> None:
        """An empty batch still yields the standard columns."""
        df = samples_to_dataframe(analyze_batch([]))
        assert df.empty
        assert "hmpi" in df.columns


class TestParameterStatistics:
    """Tests for parameter_statistics."""

    def test_describes_each_parameter(self, batch: BatchAnalysis) -> None:
        """Statistics are grouped by parameter."""
        stats = parameter_statistics(batch)
        assert stats.loc["pH", "count"] == 3
        assert stats.loc["pH", "min"] == pytest.approx(7.2)
        assert stats.loc["pH", "max"] == pytest.approx(7.6)
        assert stats.loc["pH", "median"] == pytest.approx(7.4)
        assert stats.loc["nitrate", "std"] == pytest.approx(0.0)


class TestLocationSummary:
    """Tests for location_summary."""

    def test_groups_by_location(self, batch: BatchAnalysis) -> None:
        """Samples are aggregated per site."""
        summary = location_summary(batch)
        assert summary.loc["Well 1", "total_samples"] == 2
        assert summary.loc["Well 1", "safe_percentage"] == pytest.approx(100.0)
        assert summary.loc["Well 2", "safe_samples"] == 0


class TestTextReport:
    """Tests for summary_table and format_batch_summary."""

    def test_summary_table(self, batch: BatchAnalysis) -> None:
        """Summary rows carry the batch counts."""
        table = summary_table(batch)
        values = dict(zip(table["Metric"], table["Value"]))
        assert values["Total Samples"] == 3
        assert values["Critical Samples"] == 1

    def test_format_mentions_recommendations(self, batch: BatchAnalysis) -> None:
        """The text report lists numbered recommendations and trends."""
        text = format_batch_summary(batch, title="Monthly Report")
        assert text.startswith("Monthly Report")
        assert "1. Immediate action required" in text
        assert "Trends:" in text

    def test_format_without_recommendations(self) -> None:
        """A clean batch says no recommendations were made."""
        sample = CleanedSample(
            sample_date=datetime(2024, 1, 1),
            location=Location(),
            parameters={"pH": 7.4},
        )
        text = format_batch_summary(analyze_batch([sample]))
        assert "Recommendations: none" in text
