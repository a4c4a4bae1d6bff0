"""Report views for batch analyses."""

from src.reporting.report import (
    format_batch_summary,
    location_summary,
    parameter_statistics,
    samples_to_dataframe,
    summary_table,
)

__all__ = [
    "samples_to_dataframe",
    "parameter_statistics",
    "location_summary",
    "summary_table",
    "format_batch_summary",
]
