"""Overall status of a single water sample."""

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime
from types import MappingProxyType

from src.analysis.classifier import (
    ComplianceStatus,
    ParameterClassification,
    RiskLevel,
    classify_reading,
    count_by_status,
)
from src.analysis.indices import IndexResult, calculate_hmpi, calculate_wqi
from src.analysis.narrative import generate_key_findings, generate_recommendations
from src.ingestion.normalizer import CleanedSample, Location, to_readings
from src.standards.registry import StandardsRegistry, load_default_registry

# More than this many unsafe parameters makes a sample high risk
UNSAFE_PARAMETER_LIMIT = 2


@dataclass(frozen=True)
class SampleAnalysis:
    """Complete analysis of one sample.

    Collections are stored read-only: classifications as a mapping proxy,
    findings and recommendations as tuples.
    """

    sample_date: datetime
    location: Location
    parameters: Mapping[str, ParameterClassification]
    hmpi: IndexResult
    wqi: IndexResult
    overall_status: ComplianceStatus
    risk_level: RiskLevel
    confidence: float
    key_findings: tuple[str, ...] = ()
    recommendations: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "parameters", MappingProxyType(dict(self.parameters)))
        object.__setattr__(self, "key_findings", tuple(self.key_findings))
        object.__setattr__(self, "recommendations", tuple(self.recommendations))

    def values(self) -> dict[str, float]:
        """Parameter values keyed by name."""
        return {name: c.value for name, c in self.parameters.items()}


def determine_overall_status(
    classifications: Mapping[str, ParameterClassification],
    hmpi: IndexResult,
) -> tuple[ComplianceStatus, RiskLevel]:
    """Fold parameter classifications and the HMPI into one status.

    Args:
        classifications: Per-parameter classifications
        hmpi: Heavy Metal Pollution Index result

    Returns:
        Tuple of (overall status, risk level)
    """
    counts = count_by_status(classifications)

    if counts["critical"] > 0 or hmpi.status == ComplianceStatus.CRITICAL:
        return ComplianceStatus.CRITICAL, RiskLevel.CRITICAL
    if counts["unsafe"] > UNSAFE_PARAMETER_LIMIT or hmpi.status == ComplianceStatus.UNSAFE:
        return ComplianceStatus.UNSAFE, RiskLevel.HIGH
    if counts["unsafe"] > 0:
        return ComplianceStatus.UNSAFE, RiskLevel.MEDIUM
    return ComplianceStatus.SAFE, RiskLevel.LOW


def analyze_sample(
    sample: CleanedSample,
    registry: StandardsRegistry | None = None,
) -> SampleAnalysis:
    """Classify, index and summarise one cleaned sample.

    This is also the entry point for recomputing a single record, e.g.
    after it was edited.

    Args:
        sample: Normalised sample
        registry: Standards registry (default registry if omitted)

    Returns:
        SampleAnalysis
    """
    if registry is None:
        registry = load_default_registry()

    classifications = {
        name: classify_reading(reading)
        for name, reading in to_readings(sample, registry).items()
    }
    hmpi = calculate_hmpi(sample.parameters, registry)
    wqi = calculate_wqi(sample.parameters, registry)
    overall_status, risk_level = determine_overall_status(classifications, hmpi)

    return SampleAnalysis(
        sample_date=sample.sample_date,
        location=sample.location,
        parameters=classifications,
        hmpi=hmpi,
        wqi=wqi,
        overall_status=overall_status,
        risk_level=risk_level,
        confidence=min(hmpi.confidence, wqi.confidence),
        key_findings=generate_key_findings(classifications, hmpi, wqi, overall_status),
        recommendations=generate_recommendations(classifications, hmpi, overall_status),
    )
