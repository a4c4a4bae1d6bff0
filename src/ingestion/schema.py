"""Pydantic models for validating cleaned sample records."""

import math
from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, Field, ValidationError, field_validator

from src.ingestion.normalizer import CleanedSample, Coordinates, Location
from src.utils.config import DEFAULT_LOCATION_NAME


class ValidationSeverity(str, Enum):
    """Severity levels for validation results."""

    OK = "ok"
    WARNING = "warning"
    CRITICAL = "critical"


class ValidationResult(BaseModel):
    """Result of a validation check."""

    valid: bool
    severity: ValidationSeverity
    message: str
    field: str | None = None


class CoordinatesModel(BaseModel):
    """Latitude/longitude pair; either side may be missing."""

    latitude: float | None = Field(default=None, ge=-90, le=90)
    longitude: float | None = Field(default=None, ge=-180, le=180)


class LocationModel(BaseModel):
    """Sampling site description."""

    name: str = Field(default=DEFAULT_LOCATION_NAME)
    coordinates: CoordinatesModel = Field(default_factory=CoordinatesModel)
    region: str | None = None
    state: str | None = None
    country: str | None = None


class SampleRecordModel(BaseModel):
    """A cleaned sample as submitted for (re)analysis."""

    sample_date: datetime = Field(..., alias="sampleDate")
    location: LocationModel = Field(default_factory=LocationModel)
    parameters: dict[str, float] = Field(..., min_length=1)

    model_config = {"populate_by_name": True, "extra": "ignore"}

    @field_validator("sample_date")
    @classmethod
    def fold_to_naive_utc(cls, v: datetime) -> datetime:
        """Store offset-aware dates as naive UTC, like normalised records."""
        if v.tzinfo is not None:
            v = v.astimezone(timezone.utc).replace(tzinfo=None)
        return v

    @field_validator("parameters")
    @classmethod
    def validate_parameter_values(cls, v: dict[str, float]) -> dict[str, float]:
        """Ensure every parameter value is finite and non-negative."""
        for name, value in v.items():
            if not math.isfinite(value) or value < 0:
                raise ValueError(f"Invalid value for parameter {name}: {value}")
        return v

    def to_sample(self) -> CleanedSample:
        """Convert to the engine's CleanedSample type."""
        loc = self.location
        return CleanedSample(
            sample_date=self.sample_date,
            location=Location(
                name=loc.name,
                coordinates=Coordinates(
                    latitude=loc.coordinates.latitude,
                    longitude=loc.coordinates.longitude,
                ),
                region=loc.region,
                state=loc.state,
                country=loc.country,
            ),
            parameters=dict(self.parameters),
        )


def validate_sample_record(data: dict) -> tuple[bool, list[ValidationResult]]:
    """Validate a cleaned sample record against the schema.

    Args:
        data: Sample dict with sampleDate, location and parameters

    Returns:
        Tuple of (is_valid, list of validation results)
    """
    try:
        SampleRecordModel.model_validate(data)
    except ValidationError as e:
        results = [
            ValidationResult(
                valid=False,
                severity=ValidationSeverity.CRITICAL,
                message=error["msg"],
                field=".".join(str(part) for part in error["loc"]) or None,
            )
            for error in e.errors()
        ]
        return False, results

    return True, [
        ValidationResult(
            valid=True,
            severity=ValidationSeverity.OK,
            message="Sample record validation passed",
        )
    ]


def parse_sample_record(data: dict) -> CleanedSample:
    """Validate a sample record and convert it to a CleanedSample.

    Raises:
        pydantic.ValidationError: If the record does not match the schema
    """
    return SampleRecordModel.model_validate(data).to_sample()
