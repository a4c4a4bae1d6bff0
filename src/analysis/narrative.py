"""Templated key findings and recommendations for a sample."""

from collections.abc import Mapping

from src.analysis.classifier import ComplianceStatus, ParameterClassification
from src.analysis.indices import IndexResult
from src.utils.config import HMPI_CRITICAL_THRESHOLD, HMPI_UNSAFE_THRESHOLD

MICROBIOLOGICAL_PARAMETERS = frozenset({"totalColiforms", "fecalColiforms", "eColi"})

PARAMETER_TREATMENTS: dict[str, str] = {
    "pH": "Adjust pH using appropriate treatment chemicals",
    "turbidity": "Implement filtration or sedimentation treatment",
    "dissolvedOxygen": "Improve aeration or reduce organic pollution",
}
DISINFECTION = "Implement disinfection treatment (chlorination, UV, etc.)"


def _dedupe(items: list[str]) -> list[str]:
    return list(dict.fromkeys(items))


def generate_key_findings(
    parameters: Mapping[str, ParameterClassification],
    hmpi: IndexResult,
    wqi: IndexResult,
    overall_status: ComplianceStatus,
) -> list[str]:
    """Describe the notable results of one sample in plain sentences."""
    findings: list[str] = []

    if overall_status == ComplianceStatus.CRITICAL:
        findings.append("Water quality is critical and poses immediate health risks")
    elif overall_status == ComplianceStatus.UNSAFE:
        findings.append("Water quality is unsafe and requires immediate attention")
    else:
        findings.append("Water quality is within acceptable limits")

    if hmpi.value > HMPI_CRITICAL_THRESHOLD:
        findings.append(f"Heavy metal pollution is critical (HMPI: {hmpi.value:.2f})")
    elif hmpi.value > HMPI_UNSAFE_THRESHOLD:
        findings.append(f"Heavy metal pollution is elevated (HMPI: {hmpi.value:.2f})")

    # A WQI of zero with no confidence means nothing was rated
    if wqi.confidence > 0:
        if wqi.value < 50:
            findings.append(f"Water quality index is poor (WQI: {wqi.value:.1f})")
        elif wqi.value < 70:
            findings.append(f"Water quality index is fair (WQI: {wqi.value:.1f})")

    for name, c in parameters.items():
        if c.status == ComplianceStatus.CRITICAL:
            findings.append(f"{name} levels are critically high ({c.value:g} {c.unit})")
        elif c.status == ComplianceStatus.UNSAFE:
            findings.append(f"{name} levels exceed safe limits ({c.value:g} {c.unit})")

    return findings


def generate_recommendations(
    parameters: Mapping[str, ParameterClassification],
    hmpi: IndexResult,
    overall_status: ComplianceStatus,
) -> list[str]:
    """Suggest treatment actions for one sample, without duplicates."""
    recommendations: list[str] = []

    if overall_status == ComplianceStatus.CRITICAL:
        recommendations.append("Immediate water treatment required before consumption")
        recommendations.append("Contact local water authority for emergency response")
    elif overall_status == ComplianceStatus.UNSAFE:
        recommendations.append("Water treatment recommended before consumption")
        recommendations.append("Regular monitoring and testing advised")

    if hmpi.value > HMPI_UNSAFE_THRESHOLD:
        recommendations.append("Implement heavy metal removal treatment")
        recommendations.append("Investigate source of heavy metal contamination")

    for name, c in parameters.items():
        if not c.is_exceeded:
            continue
        if name in MICROBIOLOGICAL_PARAMETERS:
            recommendations.append(DISINFECTION)
        else:
            recommendations.append(
                PARAMETER_TREATMENTS.get(name, f"Investigate and treat {name} contamination")
            )

    return _dedupe(recommendations)
