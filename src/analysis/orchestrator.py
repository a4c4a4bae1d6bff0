"""Batch analysis: per-sample results, trends, recommendations, data quality."""

import time
from collections.abc import Iterable, Mapping, Sequence
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from types import MappingProxyType

from src.analysis.aggregator import SampleAnalysis, analyze_sample
from src.analysis.classifier import ComplianceStatus
from src.analysis.trends import TrendDirection, TrendPoint, TrendResult, calculate_trend
from src.ingestion.normalizer import CleanedSample
from src.standards.registry import StandardsRegistry, load_default_registry
from src.utils.config import (
    DATA_QUALITY_TIERS,
    HMPI_UNSAFE_THRESHOLD,
    KEY_TREND_PARAMETERS,
    RELIABILITY_TIERS,
    UNSAFE_SHARE_FOR_MONITORING,
)
from src.utils.logging_config import get_logger, log_analysis

logger = get_logger(__name__)


class AnalysisError(Exception):
    """Base exception for analysis failures."""

    pass


class BatchAnalysisError(AnalysisError):
    """Raised when any stage of a batch analysis fails.

    The message is the originating error's message; the original exception
    is chained as ``__cause__``.
    """

    def __init__(self, message: str, sample_count: int | None = None) -> None:
        super().__init__(message)
        self.sample_count = sample_count


@dataclass(frozen=True)
class BatchSummary:
    """Aggregate counts and averages over a batch."""

    total_samples: int
    safe_samples: int
    unsafe_samples: int
    critical_samples: int
    safe_percentage: float
    avg_hmpi: float
    avg_wqi: float


@dataclass(frozen=True)
class DataQuality:
    """How completely the batch covers the regulated parameters."""

    quality: str  # poor, fair, good, excellent
    completeness: float  # 0-100
    reliability: str  # low, medium, high


@dataclass(frozen=True)
class BatchAnalysis:
    """Terminal artifact handed to reporting and dashboard callers.

    Stored read-only like SampleAnalysis.
    """

    summary: BatchSummary
    per_sample: tuple[SampleAnalysis, ...]
    trends: Mapping[str, TrendResult]
    recommendations: tuple[str, ...]
    data_quality: DataQuality
    key_findings: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "per_sample", tuple(self.per_sample))
        object.__setattr__(self, "trends", MappingProxyType(dict(self.trends)))
        object.__setattr__(self, "recommendations", tuple(self.recommendations))
        object.__setattr__(self, "key_findings", tuple(self.key_findings))


def _tier(value: float, tiers: list[tuple[float, str]], top: str) -> str:
    for upper, label in tiers:
        if value < upper:
            return label
    return top


def assess_data_quality(
    samples: Sequence[CleanedSample],
    registry: StandardsRegistry,
) -> DataQuality:
    """Grade how many regulated parameters the batch actually reports.

    Completeness is the share of (sample, standard parameter) slots filled.

    Args:
        samples: Cleaned samples
        registry: Standards registry defining the possible parameters

    Returns:
        DataQuality with tier labels
    """
    if not samples or len(registry) == 0:
        return DataQuality(quality="poor", completeness=0.0, reliability="low")

    filled = sum(
        1
        for sample in samples
        for name, value in sample.parameters.items()
        if name in registry and value is not None
    )
    completeness = filled / (len(samples) * len(registry)) * 100

    return DataQuality(
        quality=_tier(completeness, DATA_QUALITY_TIERS, "excellent"),
        completeness=completeness,
        reliability=_tier(completeness, RELIABILITY_TIERS, "high"),
    )


def summarize_samples(results: Sequence[SampleAnalysis]) -> BatchSummary:
    """Count sample statuses and average the indices."""
    total = len(results)
    if total == 0:
        return BatchSummary(0, 0, 0, 0, 0.0, 0.0, 0.0)

    safe = sum(1 for r in results if r.overall_status == ComplianceStatus.SAFE)
    unsafe = sum(1 for r in results if r.overall_status == ComplianceStatus.UNSAFE)
    critical = sum(1 for r in results if r.overall_status == ComplianceStatus.CRITICAL)

    return BatchSummary(
        total_samples=total,
        safe_samples=safe,
        unsafe_samples=unsafe,
        critical_samples=critical,
        safe_percentage=safe / total * 100,
        avg_hmpi=sum(r.hmpi.value for r in results) / total,
        avg_wqi=sum(r.wqi.value for r in results) / total,
    )


def calculate_parameter_trends(
    results: Sequence[SampleAnalysis],
    parameters: Iterable[str] = KEY_TREND_PARAMETERS,
) -> dict[str, TrendResult]:
    """Fit a trend for each key parameter that appears in the batch."""
    trends: dict[str, TrendResult] = {}
    for parameter in parameters:
        points = [
            TrendPoint(date=r.sample_date, value=r.parameters[parameter].value)
            for r in results
            if parameter in r.parameters
        ]
        if points:
            trends[parameter] = calculate_trend(points)
    return trends


def generate_overall_recommendations(results: Sequence[SampleAnalysis]) -> list[str]:
    """Batch-level recommendations driven by the worst samples."""
    recommendations: list[str] = []

    critical = sum(1 for r in results if r.overall_status == ComplianceStatus.CRITICAL)
    unsafe = sum(1 for r in results if r.overall_status == ComplianceStatus.UNSAFE)

    if critical > 0:
        recommendations.append(
            "Immediate action required - critical water quality issues detected"
        )
    if unsafe > len(results) * UNSAFE_SHARE_FOR_MONITORING:
        recommendations.append("Regular monitoring and treatment recommended")
    if any(r.hmpi.value > HMPI_UNSAFE_THRESHOLD for r in results):
        recommendations.append("Heavy metal treatment system implementation advised")

    return recommendations


def generate_batch_findings(
    summary: BatchSummary,
    trends: dict[str, TrendResult],
) -> list[str]:
    """Summarise the batch in a few sentences."""
    if summary.total_samples == 0:
        return ["No samples were analysed"]

    findings = [
        f"{summary.safe_samples} of {summary.total_samples} samples "
        f"({summary.safe_percentage:.1f}%) meet water quality standards"
    ]
    if summary.critical_samples:
        findings.append(f"{summary.critical_samples} samples show critical contamination")
    if summary.unsafe_samples:
        findings.append(f"{summary.unsafe_samples} samples exceed safe limits")
    findings.append(
        f"Average HMPI is {summary.avg_hmpi:.2f} and average WQI is {summary.avg_wqi:.1f}"
    )
    for parameter, trend in trends.items():
        if trend.direction in (TrendDirection.INCREASING, TrendDirection.DECREASING):
            findings.append(
                f"{parameter} is {trend.direction.value} "
                f"({trend.slope:+.3g} per sample, R² {trend.r_squared:.2f})"
            )
    return findings


def _analyze_all(
    samples: Sequence[CleanedSample],
    registry: StandardsRegistry,
    max_workers: int | None,
) -> list[SampleAnalysis]:
    if max_workers and max_workers > 1 and len(samples) > 1:
        with ThreadPoolExecutor(max_workers=max_workers) as pool:
            # map preserves input order and re-raises the first failure
            return list(pool.map(lambda s: analyze_sample(s, registry), samples))
    return [analyze_sample(s, registry) for s in samples]


def analyze_batch(
    samples: Iterable[CleanedSample],
    registry: StandardsRegistry | None = None,
    max_workers: int | None = None,
) -> BatchAnalysis:
    """Analyse a batch of cleaned samples.

    Args:
        samples: Normalised samples
        registry: Standards registry (default registry if omitted)
        max_workers: Fan per-sample analysis out over this many threads

    Returns:
        BatchAnalysis covering every sample

    Raises:
        BatchAnalysisError: If reading the samples or any stage fails; no
            partial result is returned
    """
    if registry is None:
        registry = load_default_registry()
    start = time.perf_counter()
    sample_list: list[CleanedSample] | None = None

    try:
        sample_list = list(samples)
        results = _analyze_all(sample_list, registry, max_workers)
        summary = summarize_samples(results)
        trends = calculate_parameter_trends(results)
        batch = BatchAnalysis(
            summary=summary,
            per_sample=results,
            trends=trends,
            recommendations=generate_overall_recommendations(results),
            data_quality=assess_data_quality(sample_list, registry),
            key_findings=generate_batch_findings(summary, trends),
        )
    except Exception as e:
        # None when the samples iterable itself failed
        sample_count = len(sample_list) if sample_list is not None else None
        log_analysis(
            logger,
            "comprehensive",
            "failed",
            (time.perf_counter() - start) * 1000,
            sample_count=sample_count,
            error=str(e),
        )
        raise BatchAnalysisError(str(e), sample_count=sample_count) from e

    log_analysis(
        logger,
        "comprehensive",
        "completed",
        (time.perf_counter() - start) * 1000,
        sample_count=summary.total_samples,
        safe_count=summary.safe_samples,
        unsafe_count=summary.unsafe_samples,
        critical_count=summary.critical_samples,
    )
    return batch
