"""Record ingestion: field mapping, unit normalisation and validation."""

from src.ingestion.loader import (
    RecordLoadError,
    dataframe_to_records,
    load_records,
    load_samples,
)
from src.ingestion.normalizer import (
    PARAMETER_ALIASES,
    CleanedSample,
    Coordinates,
    Location,
    ParameterReading,
    RawRecord,
    hints_micro_units,
    normalize_header,
    normalize_record,
    normalize_records,
    parse_value,
    resolve_parameter,
    to_readings,
)
from src.ingestion.sample_data import generate_sample_data
from src.ingestion.schema import (
    SampleRecordModel,
    ValidationResult,
    ValidationSeverity,
    parse_sample_record,
    validate_sample_record,
)

__all__ = [
    # Normalisation
    "RawRecord",
    "CleanedSample",
    "Coordinates",
    "Location",
    "ParameterReading",
    "PARAMETER_ALIASES",
    "normalize_header",
    "resolve_parameter",
    "hints_micro_units",
    "parse_value",
    "normalize_record",
    "normalize_records",
    "to_readings",
    # Schema validation
    "SampleRecordModel",
    "ValidationResult",
    "ValidationSeverity",
    "validate_sample_record",
    "parse_sample_record",
    # File loading
    "RecordLoadError",
    "dataframe_to_records",
    "load_records",
    "load_samples",
    # Synthetic data
    "generate_sample_data",
]
