"""Shared pytest fixtures for water quality analysis tests."""

from datetime import datetime, timedelta

import pytest

from src.ingestion.normalizer import CleanedSample, Location
from src.standards.registry import StandardsRegistry, load_default_registry
from src.utils.config import HEAVY_METALS


@pytest.fixture
def registry() -> StandardsRegistry:
    """Default standards registry."""
    return load_default_registry()


@pytest.fixture
def safe_parameters() -> dict[str, float]:
    """Parameter values comfortably inside every limit."""
    return {
        "pH": 7.4,
        "dissolvedOxygen": 8.0,
        "turbidity": 1.0,
        "totalDissolvedSolids": 250.0,
        "nitrate": 10.0,
        "arsenic": 0.002,
        "lead": 0.002,
    }


@pytest.fixture
def safe_sample(safe_parameters: dict[str, float]) -> CleanedSample:
    """A sample with every parameter within limits."""
    return CleanedSample(
        sample_date=datetime(2024, 1, 1),
        location=Location(name="Well 1"),
        parameters=safe_parameters,
    )


@pytest.fixture
def critical_sample() -> CleanedSample:
    """A sample with arsenic above twice its limit."""
    return CleanedSample(
        sample_date=datetime(2024, 1, 2),
        location=Location(name="Well 2"),
        parameters={
            "pH": 7.2,
            "dissolvedOxygen": 7.5,
            "turbidity": 1.0,
            "arsenic": 0.05,
        },
    )


@pytest.fixture
def metals_at_limit(registry: StandardsRegistry) -> dict[str, float]:
    """All ten heavy metals at exactly their permissible maximum."""
    return {metal: registry[metal].max for metal in HEAVY_METALS}


@pytest.fixture
def daily_samples() -> list[CleanedSample]:
    """Five daily samples with steadily rising turbidity."""
    base = datetime(2024, 3, 1)
    return [
        CleanedSample(
            sample_date=base + timedelta(days=i),
            location=Location(name="River Intake"),
            parameters={"pH": 7.5, "turbidity": 1.0 + i, "dissolvedOxygen": 8.0},
        )
        for i in range(5)
    ]


@pytest.fixture
def raw_records() -> list[dict]:
    """Raw spreadsheet rows with aliases, unit hints and junk values."""
    return [
        {
            "Date": "2024-01-05",
            "Site": "Lake North",
            "Lat": "28.61",
            "Lng": "77.20",
            "pH": "7.1",
            "TDS (mg/L)": "320",
            "Pb (µg/L)": "15",
            "DO": "6.2",
        },
        {
            "date": "not a date",
            "location": "Lake South",
            "ph": "n/a",
            "turbidity": "-3",
        },
        {
            "sample_date": "2024-01-07",
            "station": "Lake East",
            "Arsenic": "0.004",
            "Nitrate": "12.5",
            "E.Coli": "0",
        },
    ]
