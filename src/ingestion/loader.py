"""Read CSV and Excel sample sheets into raw records."""

from pathlib import Path
from typing import IO

import pandas as pd
import xlrd
from xlrd.compdoc import CompDocError

from src.ingestion.normalizer import CleanedSample, RawRecord, normalize_records
from src.utils.config import SUPPORTED_FILE_TYPES
from src.utils.logging_config import get_logger

logger = get_logger(__name__)


class RecordLoadError(Exception):
    """Raised when a sample file cannot be turned into records."""

    def __init__(self, message: str, path: str | None = None) -> None:
        super().__init__(message)
        self.path = path


def _file_type(path: str | Path, file_type: str | None) -> str:
    kind = (file_type or Path(path).suffix.lstrip(".")).lower()
    if kind not in SUPPORTED_FILE_TYPES:
        raise RecordLoadError(f"Unsupported file type: {kind or 'unknown'}", path=str(path))
    return kind


def dataframe_to_records(df: pd.DataFrame) -> list[RawRecord]:
    """Convert a sheet to raw records with trimmed headers and values.

    Empty cells become None.
    """
    df = df.rename(columns=lambda c: str(c).strip())
    records: list[RawRecord] = []
    for row in df.to_dict(orient="records"):
        record: dict = {}
        for key, value in row.items():
            if isinstance(value, str):
                value = value.strip() or None
            elif value is not None and pd.isna(value):
                value = None
            record[key] = value
        records.append(record)
    return records


def load_records(
    source: str | Path | IO,
    file_type: str | None = None,
) -> list[RawRecord]:
    """Read a CSV or Excel file into raw records.

    Args:
        source: File path or file-like object
        file_type: csv, xlsx or xls (default: taken from the path suffix)

    Returns:
        One raw record per data row

    Raises:
        RecordLoadError: If the type is unsupported or the file cannot be read
    """
    name = getattr(source, "name", source)
    kind = _file_type(str(name), file_type)

    try:
        if kind == "csv":
            df = pd.read_csv(source, dtype=str, keep_default_na=False)
        else:
            df = pd.read_excel(source, sheet_name=0)
    except (
        OSError,
        ValueError,
        ImportError,
        pd.errors.ParserError,
        xlrd.XLRDError,
        CompDocError,
    ) as e:
        # ImportError covers a missing Excel engine
        logger.error("Sample file read failed", path=str(name), error=str(e))
        raise RecordLoadError(f"Failed to read {kind} file: {e}", path=str(name)) from e

    records = dataframe_to_records(df)
    logger.info("Sample file read", path=str(name), file_type=kind, row_count=len(records))
    return records


def load_samples(
    source: str | Path | IO,
    file_type: str | None = None,
) -> tuple[list[CleanedSample], list[int]]:
    """Read and normalise a sample file.

    Returns:
        Tuple of (cleaned samples, indices of rejected rows)

    Raises:
        RecordLoadError: If no row contains a usable measurement
    """
    records = load_records(source, file_type)
    samples, rejected = normalize_records(records)
    if not samples:
        raise RecordLoadError(
            "No valid data found in file",
            path=str(getattr(source, "name", source)),
        )
    return samples, rejected
