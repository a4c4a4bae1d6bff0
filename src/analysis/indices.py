"""Composite pollution indices: HMPI and WQI."""

import math
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum

from src.analysis.classifier import ComplianceStatus
from src.standards.registry import ParameterStandard, StandardsRegistry
from src.utils.config import (
    HEAVY_METALS,
    HMPI_CRITICAL_THRESHOLD,
    HMPI_UNSAFE_THRESHOLD,
    PH_RATING_PENALTY,
    WQI_PARAMETERS,
    WQI_STATUS_THRESHOLDS,
)


class WQIStatus(str, Enum):
    """Water Quality Index rating bands."""

    EXCELLENT = "excellent"
    GOOD = "good"
    FAIR = "fair"
    POOR = "poor"
    VERY_POOR = "very_poor"


@dataclass(frozen=True)
class IndexResult:
    """Value, status and confidence of one composite index."""

    value: float
    status: ComplianceStatus | WQIStatus
    confidence: float  # share of the index's parameters that were present
    parameters_used: int = 0


def _usable(value: float | None) -> bool:
    return value is not None and not math.isnan(value)


def calculate_hmpi(
    values: Mapping[str, float | None],
    registry: StandardsRegistry,
) -> IndexResult:
    """Calculate the Heavy Metal Pollution Index.

    The index is the mean measured/permissible ratio over the heavy metals
    present in the sample.

    Args:
        values: Parameter values in canonical units (mg/L for metals)
        registry: Standards registry

    Returns:
        IndexResult; value 0, SAFE and confidence 0 when no metal is present
    """
    total = 0.0
    valid_metals = 0

    for metal in HEAVY_METALS:
        value = values.get(metal)
        standard = registry.get(metal)
        if _usable(value) and standard is not None and standard.max:
            total += value / standard.max
            valid_metals += 1

    if valid_metals == 0:
        return IndexResult(value=0.0, status=ComplianceStatus.SAFE, confidence=0.0)

    hmpi = total / valid_metals

    if hmpi > HMPI_CRITICAL_THRESHOLD:
        status = ComplianceStatus.CRITICAL
    elif hmpi > HMPI_UNSAFE_THRESHOLD:
        status = ComplianceStatus.UNSAFE
    else:
        status = ComplianceStatus.SAFE

    return IndexResult(
        value=hmpi,
        status=status,
        confidence=min(1.0, valid_metals / len(HEAVY_METALS)),
        parameters_used=valid_metals,
    )


def quality_rating(parameter: str, value: float, standard: ParameterStandard) -> float:
    """Rate one parameter on a 0-100 scale (100 = fully compliant).

    Args:
        parameter: Canonical parameter name
        value: Measured value
        standard: The parameter's standard

    Returns:
        Quality rating between 0 and 100
    """
    if standard.is_two_sided:
        if standard.min <= value <= standard.max:
            return 100.0
        deviation = min(abs(value - standard.min), abs(value - standard.max))
        return max(0.0, 100.0 - deviation * PH_RATING_PENALTY)

    if standard.max is None:
        # Higher is better (dissolved oxygen)
        return min(100.0, (value / standard.min) * 100.0)

    if value <= 0:
        return 100.0
    return min(100.0, (standard.max / value) * 100.0)


def _wqi_status(wqi: float) -> WQIStatus:
    for upper, status in WQI_STATUS_THRESHOLDS:
        if wqi < upper:
            return WQIStatus(status)
    return WQIStatus.EXCELLENT


def calculate_wqi(
    values: Mapping[str, float | None],
    registry: StandardsRegistry,
) -> IndexResult:
    """Calculate the Water Quality Index.

    Args:
        values: Parameter values in canonical units
        registry: Standards registry

    Returns:
        IndexResult; value 0, VERY_POOR and confidence 0 when no rated
        parameter is present
    """
    total = 0.0
    valid_params = 0

    for parameter in WQI_PARAMETERS:
        value = values.get(parameter)
        standard = registry.get(parameter)
        if _usable(value) and standard is not None:
            total += quality_rating(parameter, value, standard)
            valid_params += 1

    if valid_params == 0:
        return IndexResult(value=0.0, status=WQIStatus.VERY_POOR, confidence=0.0)

    wqi = total / valid_params

    return IndexResult(
        value=wqi,
        status=_wqi_status(wqi),
        confidence=min(1.0, valid_params / len(WQI_PARAMETERS)),
        parameters_used=valid_params,
    )
