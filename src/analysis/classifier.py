"""Compliance classification of individual parameter readings."""

import math
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum

from src.ingestion.normalizer import ParameterReading
from src.standards.registry import ParameterStandard, StandardsRegistry
from src.utils.config import (
    CRITICAL_MULTIPLIER,
    DO_WARNING_MARGIN,
    PH_WARNING_MARGIN,
    WARNING_FRACTION,
)


class ComplianceStatus(str, Enum):
    """Compliance of a reading (or a whole sample) with its standard."""

    SAFE = "safe"
    UNSAFE = "unsafe"
    CRITICAL = "critical"
    UNKNOWN = "unknown"


class RiskLevel(str, Enum):
    """Qualitative severity attached to a compliance status."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class ParameterClassification:
    """Classification of one reading against its standard."""

    reading: ParameterReading
    status: ComplianceStatus
    risk_level: RiskLevel
    deviation: float  # signed distance past the limit; pH: distance to nearer bound

    @property
    def parameter(self) -> str:
        return self.reading.parameter

    @property
    def value(self) -> float:
        return self.reading.value

    @property
    def unit(self) -> str:
        return self.reading.unit

    @property
    def is_exceeded(self) -> bool:
        return self.status in (ComplianceStatus.UNSAFE, ComplianceStatus.CRITICAL)


def _classify_two_sided(value: float, standard: ParameterStandard) -> tuple[ComplianceStatus, RiskLevel, float]:
    low, high = standard.min, standard.max
    deviation = min(abs(value - low), abs(value - high))

    if value < low or value > high:
        return ComplianceStatus.UNSAFE, RiskLevel.HIGH, deviation
    if value < low + PH_WARNING_MARGIN or value > high - PH_WARNING_MARGIN:
        return ComplianceStatus.UNSAFE, RiskLevel.MEDIUM, deviation
    return ComplianceStatus.SAFE, RiskLevel.LOW, deviation


def _classify_min_bounded(value: float, standard: ParameterStandard) -> tuple[ComplianceStatus, RiskLevel, float]:
    minimum = standard.min
    deviation = value - minimum

    if value < minimum:
        return ComplianceStatus.CRITICAL, RiskLevel.CRITICAL, deviation
    if value < minimum + DO_WARNING_MARGIN:
        return ComplianceStatus.UNSAFE, RiskLevel.HIGH, deviation
    return ComplianceStatus.SAFE, RiskLevel.LOW, deviation


def _classify_max_bounded(value: float, standard: ParameterStandard) -> tuple[ComplianceStatus, RiskLevel, float]:
    maximum = standard.max
    deviation = value - maximum

    if value > maximum * CRITICAL_MULTIPLIER:
        return ComplianceStatus.CRITICAL, RiskLevel.CRITICAL, deviation
    if value > maximum:
        return ComplianceStatus.UNSAFE, RiskLevel.HIGH, deviation
    if value > maximum * WARNING_FRACTION:
        return ComplianceStatus.UNSAFE, RiskLevel.MEDIUM, deviation
    return ComplianceStatus.SAFE, RiskLevel.LOW, deviation


def classify_reading(reading: ParameterReading) -> ParameterClassification:
    """Classify a reading that already carries its standard.

    Args:
        reading: Reading with value in the standard's canonical unit

    Returns:
        ParameterClassification (UNKNOWN when no standard or value is NaN)
    """
    standard = reading.standard
    if standard is None or reading.value is None or math.isnan(reading.value):
        return ParameterClassification(
            reading=reading,
            status=ComplianceStatus.UNKNOWN,
            risk_level=RiskLevel.UNKNOWN,
            deviation=0.0,
        )

    # pH is the two-sided case; dissolved oxygen the min-only one
    if standard.is_two_sided:
        status, risk, deviation = _classify_two_sided(reading.value, standard)
    elif standard.max is None:
        status, risk, deviation = _classify_min_bounded(reading.value, standard)
    else:
        status, risk, deviation = _classify_max_bounded(reading.value, standard)

    return ParameterClassification(
        reading=reading,
        status=status,
        risk_level=risk,
        deviation=deviation,
    )


def classify_parameter(
    parameter: str,
    value: float | None,
    registry: StandardsRegistry,
) -> ParameterClassification:
    """Classify one parameter value against the registry.

    Args:
        parameter: Canonical parameter name
        value: Measured value in canonical units (None if missing)
        registry: Standards registry

    Returns:
        ParameterClassification; never raises for unknown names
    """
    standard = registry.get(parameter)
    reading = ParameterReading(
        parameter=parameter,
        value=math.nan if value is None else float(value),
        unit=standard.unit if standard else "unknown",
        standard=standard,
    )
    return classify_reading(reading)


def classify_parameters(
    values: Mapping[str, float | None],
    registry: StandardsRegistry,
) -> dict[str, ParameterClassification]:
    """Classify every parameter of a sample."""
    return {name: classify_parameter(name, value, registry) for name, value in values.items()}


def count_by_status(
    classifications: Mapping[str, ParameterClassification],
) -> dict[str, int]:
    """Summarise classifications by status.

    Returns:
        Counts keyed by status value, plus "total"
    """
    summary = {status.value: 0 for status in ComplianceStatus}
    for c in classifications.values():
        summary[c.status.value] += 1
    summary["total"] = len(classifications)
    return summary
