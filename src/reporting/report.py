"""Tabular and text views of a batch analysis."""

from datetime import datetime

import pandas as pd

from src.analysis.classifier import ComplianceStatus
from src.analysis.orchestrator import BatchAnalysis

SAMPLE_COLUMNS = [
    "sample_date",
    "location",
    "latitude",
    "longitude",
    "hmpi",
    "wqi",
    "overall_status",
    "risk_level",
    "confidence",
]


def samples_to_dataframe(batch: BatchAnalysis) -> pd.DataFrame:
    """Convert per-sample results to a DataFrame.

    Args:
        batch: BatchAnalysis to flatten

    Returns:
        One row per sample with index values, status and parameter values
    """
    rows = []
    for r in batch.per_sample:
        row = {
            "sample_date": r.sample_date,
            "location": r.location.name,
            "latitude": r.location.coordinates.latitude,
            "longitude": r.location.coordinates.longitude,
            "hmpi": r.hmpi.value,
            "wqi": r.wqi.value,
            "overall_status": r.overall_status.value,
            "risk_level": r.risk_level.value,
            "confidence": r.confidence,
        }
        row.update(r.values())
        rows.append(row)

    return pd.DataFrame(rows, columns=None if rows else SAMPLE_COLUMNS)


def parameter_statistics(batch: BatchAnalysis) -> pd.DataFrame:
    """Describe the distribution of every parameter across the batch.

    Returns:
        DataFrame indexed by parameter with count, mean, median, min, max, std
    """
    long = pd.DataFrame(
        [
            {"parameter": name, "value": value}
            for r in batch.per_sample
            for name, value in r.values().items()
        ],
        columns=["parameter", "value"],
    )
    if long.empty:
        return pd.DataFrame(columns=["count", "mean", "median", "min", "max", "std"])

    # Population standard deviation, matching the exported reports
    return long.groupby("parameter")["value"].agg(
        count="count",
        mean="mean",
        median="median",
        min="min",
        max="max",
        std=lambda s: s.std(ddof=0),
    )


def location_summary(batch: BatchAnalysis) -> pd.DataFrame:
    """Aggregate sample results per location.

    Returns:
        DataFrame with sample counts, safe share and average indices per site
    """
    df = samples_to_dataframe(batch)
    if df.empty:
        return pd.DataFrame(
            columns=["total_samples", "safe_samples", "safe_percentage", "avg_hmpi", "avg_wqi"]
        )

    df["is_safe"] = df["overall_status"] == ComplianceStatus.SAFE.value
    grouped = df.groupby("location").agg(
        latitude=("latitude", "first"),
        longitude=("longitude", "first"),
        total_samples=("overall_status", "size"),
        safe_samples=("is_safe", "sum"),
        avg_hmpi=("hmpi", "mean"),
        avg_wqi=("wqi", "mean"),
    )
    grouped["safe_percentage"] = grouped["safe_samples"] / grouped["total_samples"] * 100
    return grouped


def summary_table(batch: BatchAnalysis) -> pd.DataFrame:
    """Metric/value rows for a summary sheet."""
    s = batch.summary
    rows = [
        ("Total Samples", s.total_samples),
        ("Safe Samples", s.safe_samples),
        ("Unsafe Samples", s.unsafe_samples),
        ("Critical Samples", s.critical_samples),
        ("Average HMPI", round(s.avg_hmpi, 2)),
        ("Average WQI", round(s.avg_wqi, 2)),
        ("Safe Percentage", f"{s.safe_percentage:.1f}%"),
        ("Data Completeness", f"{batch.data_quality.completeness:.1f}%"),
        ("Data Quality", batch.data_quality.quality),
    ]
    return pd.DataFrame(rows, columns=["Metric", "Value"])


def format_batch_summary(batch: BatchAnalysis, title: str = "Water Quality Analysis") -> str:
    """Format a batch analysis as a human-readable text report.

    Args:
        batch: BatchAnalysis to format
        title: Report heading

    Returns:
        Formatted multi-line string
    """
    s = batch.summary
    dq = batch.data_quality
    lines = [
        title,
        f"Generated: {datetime.now():%Y-%m-%d %H:%M}",
        "",
        f"Samples: {s.total_samples} "
        f"(safe {s.safe_samples}, unsafe {s.unsafe_samples}, critical {s.critical_samples})",
        f"Safe Percentage: {s.safe_percentage:.1f}%",
        f"Average HMPI: {s.avg_hmpi:.2f}",
        f"Average WQI: {s.avg_wqi:.1f}",
        f"Data Quality: {dq.quality} ({dq.completeness:.0f}% complete, {dq.reliability} reliability)",
    ]

    if batch.key_findings:
        lines.append("")
        lines.append("Key Findings:")
        lines.extend(f"  - {finding}" for finding in batch.key_findings)

    if batch.trends:
        lines.append("")
        lines.append("Trends:")
        for parameter, trend in batch.trends.items():
            lines.append(
                f"  {parameter}: {trend.direction.value} "
                f"(slope {trend.slope:.3g}, confidence {trend.confidence:.2f})"
            )

    lines.append("")
    if batch.recommendations:
        lines.append("Recommendations:")
        lines.extend(f"  {i}. {rec}" for i, rec in enumerate(batch.recommendations, start=1))
    else:
        lines.append("Recommendations: none - all samples within limits")

    return "\n".join(lines)
