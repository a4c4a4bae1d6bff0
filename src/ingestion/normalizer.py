"""Field mapping and unit normalisation for raw water sample records.

Raw records come from spreadsheet or CSV parsing and use whatever column
headers the lab chose ("TDS", "Pb (ug/L)", "Dissolved Oxygen"...). This
module maps them onto canonical parameter names and canonical units. It is
the only stage that tolerates malformed input: unparsable or negative values
are dropped, unparsable dates fall back to the current time, and a record
with no usable measurements is rejected by returning ``None``.
"""

import math
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

import pandas as pd

from src.standards.registry import ParameterStandard, StandardsRegistry
from src.utils.config import (
    DATE_FIELDS,
    DEFAULT_LOCATION_NAME,
    HEAVY_METALS,
    LATITUDE_FIELDS,
    LOCATION_NAME_FIELDS,
    LONGITUDE_FIELDS,
    MICRO_UNIT_HINTS,
    MICROGRAMS_PER_MILLIGRAM,
    REGION_FIELDS,
    UNIT_COLUMN_SUFFIXES,
)
from src.utils.logging_config import get_logger

logger = get_logger(__name__)

RawValue = str | int | float | None
RawRecord = Mapping[str, RawValue]

# Normalised header -> canonical parameter name
PARAMETER_ALIASES: dict[str, str] = {
    # Physical parameters
    "ph": "pH",
    "temperature": "temperature",
    "temp": "temperature",
    "turbidity": "turbidity",
    "total dissolved solids": "totalDissolvedSolids",
    "totaldissolvedsolids": "totalDissolvedSolids",
    "tds": "totalDissolvedSolids",
    "electrical conductivity": "electricalConductivity",
    "electricalconductivity": "electricalConductivity",
    "conductivity": "electricalConductivity",
    "ec": "electricalConductivity",
    # Chemical parameters
    "dissolved oxygen": "dissolvedOxygen",
    "dissolvedoxygen": "dissolvedOxygen",
    "do": "dissolvedOxygen",
    "biochemical oxygen demand": "biochemicalOxygenDemand",
    "biochemicaloxygendemand": "biochemicalOxygenDemand",
    "bod": "biochemicalOxygenDemand",
    "chemical oxygen demand": "chemicalOxygenDemand",
    "chemicaloxygendemand": "chemicalOxygenDemand",
    "cod": "chemicalOxygenDemand",
    "total alkalinity": "totalAlkalinity",
    "totalalkalinity": "totalAlkalinity",
    "alkalinity": "totalAlkalinity",
    "total hardness": "totalHardness",
    "totalhardness": "totalHardness",
    "hardness": "totalHardness",
    # Heavy metals
    "arsenic": "arsenic",
    "as": "arsenic",
    "lead": "lead",
    "pb": "lead",
    "mercury": "mercury",
    "hg": "mercury",
    "cadmium": "cadmium",
    "cd": "cadmium",
    "chromium": "chromium",
    "cr": "chromium",
    "nickel": "nickel",
    "ni": "nickel",
    "copper": "copper",
    "cu": "copper",
    "zinc": "zinc",
    "zn": "zinc",
    "iron": "iron",
    "fe": "iron",
    "manganese": "manganese",
    "mn": "manganese",
    # Nutrients
    "nitrate": "nitrate",
    "no3": "nitrate",
    "nitrite": "nitrite",
    "no2": "nitrite",
    "phosphate": "phosphate",
    "po4": "phosphate",
    "ammonia": "ammonia",
    "nh3": "ammonia",
    # Microbiological
    "total coliforms": "totalColiforms",
    "totalcoliforms": "totalColiforms",
    "fecal coliforms": "fecalColiforms",
    "fecalcoliforms": "fecalColiforms",
    "e.coli": "eColi",
    "e coli": "eColi",
    "ecoli": "eColi",
}

_METADATA_FIELDS = frozenset(
    DATE_FIELDS + LOCATION_NAME_FIELDS + LATITUDE_FIELDS + LONGITUDE_FIELDS + REGION_FIELDS
)
_HEAVY_METAL_SET = frozenset(HEAVY_METALS)


@dataclass(frozen=True)
class Coordinates:
    """Geographic position of a sampling site."""

    latitude: float | None = None
    longitude: float | None = None


@dataclass(frozen=True)
class Location:
    """Where a sample was taken."""

    name: str = DEFAULT_LOCATION_NAME
    coordinates: Coordinates = field(default_factory=Coordinates)
    region: str | None = None
    state: str | None = None
    country: str | None = None


@dataclass(frozen=True)
class CleanedSample:
    """A record after field mapping and unit normalisation.

    Parameter values are non-negative and expressed in canonical units.
    """

    sample_date: datetime
    location: Location
    parameters: dict[str, float]


@dataclass(frozen=True)
class ParameterReading:
    """One measured parameter with its standard (None when unregulated)."""

    parameter: str
    value: float
    unit: str
    standard: ParameterStandard | None


def normalize_header(key: str) -> str:
    """Strip a parenthesised unit suffix and lower-case a column header."""
    if not key:
        return ""
    return str(key).split("(")[0].strip().lower()


def resolve_parameter(key: str) -> str:
    """Map a raw column header to its canonical parameter name.

    Falls back to the lower-cased header when no alias matches.
    """
    normalized = normalize_header(key)
    if normalized in PARAMETER_ALIASES:
        return PARAMETER_ALIASES[normalized]
    raw = str(key).strip().lower()
    return PARAMETER_ALIASES.get(raw, raw)


def hints_micro_units(text: str) -> bool:
    """Check whether a header or unit label refers to micrograms."""
    lower = str(text).lower()
    return any(hint in lower for hint in MICRO_UNIT_HINTS)


def parse_value(raw: Any) -> float | None:
    """Parse a raw cell into a non-negative finite float.

    Returns:
        The parsed value, or None when the cell is empty, not numeric,
        not finite, or negative
    """
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, str):
        raw = raw.strip()
        if not raw:
            return None
    try:
        value = float(raw)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(value) or value < 0:
        return None
    return value


def parse_date(raw: Any) -> datetime | None:
    """Parse a raw date cell, returning None when it is not a valid date."""
    if raw is None or (isinstance(raw, str) and not raw.strip()):
        return None
    try:
        parsed = pd.to_datetime(raw, errors="coerce")
    except (TypeError, ValueError, OverflowError):
        return None
    if parsed is None or pd.isna(parsed):
        return None
    # Offsets are folded into naive UTC so samples stay mutually comparable
    if parsed.tzinfo is not None:
        parsed = parsed.tz_convert(None)
    return parsed.to_pydatetime()


def _unit_column_target(header: str) -> str | None:
    """Return the parameter a unit column annotates, or None."""
    for suffix in UNIT_COLUMN_SUFFIXES:
        if header.endswith(suffix):
            base = header[: -len(suffix)].strip()
            if base:
                return resolve_parameter(base)
    return None


def _first_present(fields: dict[str, Any], names: Iterable[str]) -> Any:
    for name in names:
        value = fields.get(name)
        if value is not None and str(value).strip() != "":
            return value
    return None


def _optional_text(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _parse_coordinate(raw: Any) -> float | None:
    if raw is None or isinstance(raw, bool):
        return None
    try:
        value = float(str(raw).strip())
    except ValueError:
        return None
    return value if math.isfinite(value) else None


def extract_sample_date(fields: dict[str, Any]) -> datetime:
    """Return the first parseable date field, or the current time."""
    for name in DATE_FIELDS:
        parsed = parse_date(fields.get(name))
        if parsed is not None:
            return parsed
    return datetime.now()


def extract_location(fields: dict[str, Any]) -> Location:
    """Build a Location from conventional site and coordinate fields."""
    name = _first_present(fields, LOCATION_NAME_FIELDS)
    return Location(
        name=str(name).strip() if name is not None else DEFAULT_LOCATION_NAME,
        coordinates=Coordinates(
            latitude=_parse_coordinate(_first_present(fields, LATITUDE_FIELDS)),
            longitude=_parse_coordinate(_first_present(fields, LONGITUDE_FIELDS)),
        ),
        region=_optional_text(fields.get("region")),
        state=_optional_text(fields.get("state")),
        country=_optional_text(fields.get("country")),
    )


def normalize_record(raw: RawRecord) -> CleanedSample | None:
    """Map one raw record onto canonical parameters and units.

    Args:
        raw: Mapping of column header to raw cell value

    Returns:
        CleanedSample, or None when no parameter survived normalisation
    """
    metadata: dict[str, Any] = {}
    unit_overrides: dict[str, str] = {}
    measurements: list[tuple[str, Any]] = []

    for key, value in (raw or {}).items():
        header = normalize_header(key)
        if header in _METADATA_FIELDS:
            metadata.setdefault(header, value)
            continue
        target = _unit_column_target(header)
        if target is not None:
            if value is not None and str(value).strip():
                unit_overrides[target] = str(value).strip()
            continue
        measurements.append((key, value))

    parameters: dict[str, float] = {}
    for key, raw_value in measurements:
        parameter = resolve_parameter(key)
        value = parse_value(raw_value)
        if value is None:
            logger.debug("Dropping unparsable field", field=key, value=raw_value)
            continue

        if parameter in _HEAVY_METAL_SET:
            unit = unit_overrides.get(parameter)
            micro = hints_micro_units(unit) if unit is not None else hints_micro_units(key)
            if micro:
                value = value / MICROGRAMS_PER_MILLIGRAM

        parameters[parameter] = value

    if not parameters:
        return None

    return CleanedSample(
        sample_date=extract_sample_date(metadata),
        location=extract_location(metadata),
        parameters=parameters,
    )


def normalize_records(
    records: Iterable[RawRecord],
) -> tuple[list[CleanedSample], list[int]]:
    """Normalise a batch of raw records.

    Args:
        records: Raw records in input order

    Returns:
        Tuple of (cleaned samples, indices of rejected records)
    """
    samples: list[CleanedSample] = []
    rejected: list[int] = []

    for index, record in enumerate(records):
        sample = normalize_record(record)
        if sample is None:
            rejected.append(index)
        else:
            samples.append(sample)

    if rejected:
        logger.info(
            "Rejected records without usable parameters",
            rejected_count=len(rejected),
            accepted_count=len(samples),
        )

    return samples, rejected


def to_readings(
    sample: CleanedSample,
    registry: StandardsRegistry,
) -> dict[str, ParameterReading]:
    """Attach standards and units to a cleaned sample's values."""
    readings: dict[str, ParameterReading] = {}
    for parameter, value in sample.parameters.items():
        standard = registry.get(parameter)
        readings[parameter] = ParameterReading(
            parameter=parameter,
            value=value,
            unit=standard.unit if standard else "unknown",
            standard=standard,
        )
    return readings
