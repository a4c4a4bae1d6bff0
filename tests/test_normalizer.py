"""Tests for field mapping and unit normalisation."""

from datetime import datetime

import pytest

from src.ingestion.normalizer import (
    Location,
    hints_micro_units,
    normalize_header,
    normalize_record,
    normalize_records,
    parse_value,
    resolve_parameter,
    to_readings,
)
from src.standards.registry import StandardsRegistry
from src.utils.config import HEAVY_METALS


class TestHeaderMapping:
    """Tests for header normalisation and alias lookup."""

    def test_strips_unit_suffix(self) -> None:
        """Parenthesised units are removed and the header lower-cased."""
        assert normalize_header("Lead (µg/L)") == "lead"
        assert normalize_header("  TDS (mg/L) ") == "tds"

    @pytest.mark.parametrize(
        ("header", "expected"),
        [
            ("tds", "totalDissolvedSolids"),
            ("As", "arsenic"),
            ("E.Coli", "eColi"),
            ("Dissolved Oxygen (mg/L)", "dissolvedOxygen"),
            ("NO3", "nitrate"),
            ("dissolvedOxygen", "dissolvedOxygen"),
        ],
    )
    def test_aliases(self, header: str, expected: str) -> None:
        """Common aliases map to canonical names."""
        assert resolve_parameter(header) == expected

    def test_unknown_header_falls_back_to_lowercase(self) -> None:
        """Unknown headers keep their lower-cased text."""
        assert resolve_parameter("Fluoride") == "fluoride"

    def test_micro_hints(self) -> None:
        """µg, ug and micro all mark micrograms."""
        assert hints_micro_units("Arsenic (µg/L)")
        assert hints_micro_units("lead ug/l")
        assert hints_micro_units("Mercury micrograms")
        assert not hints_micro_units("Arsenic (mg/L)")


class TestParseValue:
    """Tests for parse_value."""

    def test_numeric_strings(self) -> None:
        """Numeric strings are parsed, whitespace ignored."""
        assert parse_value(" 7.25 ") == 7.25
        assert parse_value(3) == 3.0

    @pytest.mark.parametrize("raw", ["", "n/a", None, "-1", -0.5, "nan", "inf"])
    def test_rejects_unusable_values(self, raw: object) -> None:
        """Empty, non-numeric, negative and non-finite values are dropped."""
        assert parse_value(raw) is None

    def test_zero_is_valid(self) -> None:
        """Zero is a legitimate measurement."""
        assert parse_value("0") == 0.0

    def test_unit_suffix_in_cell_is_dropped(self) -> None:
        """Cells carrying a unit after the number are not numeric."""
        assert parse_value("7.0 mg/L") is None


class TestNormalizeRecord:
    """Tests for normalize_record."""

    @pytest.mark.parametrize("metal", HEAVY_METALS)
    def test_micro_unit_header_divides_by_1000(self, metal: str) -> None:
        """Heavy metals with µg/L headers are converted to mg/L."""
        sample = normalize_record({f"{metal} (µg/L)": "250"})
        assert sample is not None
        assert sample.parameters[metal] == pytest.approx(0.25)

    def test_micro_hint_ignored_for_non_metals(self) -> None:
        """Only heavy metals are rescaled."""
        sample = normalize_record({"Nitrate (ug/L)": "20"})
        assert sample is not None
        assert sample.parameters["nitrate"] == 20.0

    def test_unit_column_micrograms(self) -> None:
        """An explicit unit column in µg/L triggers conversion."""
        sample = normalize_record({"arsenic": "20", "arsenic unit": "µg/L"})
        assert sample is not None
        assert sample.parameters["arsenic"] == pytest.approx(0.02)
        assert "arsenic unit" not in sample.parameters

    def test_unit_column_milligrams_left_as_is(self) -> None:
        """A mg/L unit column overrides a micro-unit header hint."""
        sample = normalize_record({"Lead (ug/L)": "0.03", "lead_unit": "mg/L"})
        assert sample is not None
        assert sample.parameters["lead"] == pytest.approx(0.03)

    def test_drops_invalid_fields(self) -> None:
        """Unparsable and negative values are omitted."""
        sample = normalize_record({"pH": "7.0", "turbidity": "-2", "tds": "abc"})
        assert sample is not None
        assert sample.parameters == {"pH": 7.0}

    def test_unknown_parameter_kept_under_raw_name(self) -> None:
        """Unrecognised numeric columns keep their lower-cased header."""
        sample = normalize_record({"pH": "7.0", "Fluoride": "0.8"})
        assert sample is not None
        assert sample.parameters["fluoride"] == 0.8

    def test_rejects_record_without_parameters(self) -> None:
        """A record with no usable measurement normalises to None."""
        assert normalize_record({"date": "2024-01-01", "site": "A", "ph": ""}) is None
        assert normalize_record({}) is None

    def test_first_parseable_date_wins(self) -> None:
        """Date comes from the first of date/sample_date/timestamp that parses."""
        sample = normalize_record({
            "date": "garbage",
            "sample_date": "2024-02-10",
            "timestamp": "2023-01-01",
            "pH": "7",
        })
        assert sample is not None
        assert sample.sample_date == datetime(2024, 2, 10)

    def test_date_defaults_to_now(self) -> None:
        """Without a parseable date the current time is used."""
        before = datetime.now()
        sample = normalize_record({"date": "soon", "pH": "7"})
        assert sample is not None
        assert sample.sample_date >= before

    def test_location_extraction(self) -> None:
        """Location fields are read from conventional aliases."""
        sample = normalize_record({
            "station": "Gauge 4",
            "lat": "12.5",
            "lon": "not-a-number",
            "region": "North",
            "country": "India",
            "pH": "7.2",
        })
        assert sample is not None
        loc = sample.location
        assert loc.name == "Gauge 4"
        assert loc.coordinates.latitude == 12.5
        assert loc.coordinates.longitude is None
        assert loc.region == "North"
        assert loc.state is None
        assert loc.country == "India"

    def test_location_defaults(self) -> None:
        """Missing location falls back to Unknown."""
        sample = normalize_record({"pH": "7.2"})
        assert sample is not None
        assert sample.location == Location()
        assert sample.location.name == "Unknown"

    def test_metadata_not_treated_as_parameters(self) -> None:
        """Coordinates and dates never become parameters."""
        sample = normalize_record({"latitude": "10", "longitude": "20", "pH": "7"})
        assert sample is not None
        assert set(sample.parameters) == {"pH"}


class TestNormalizeRecords:
    """Tests for batch normalisation."""

    def test_reports_rejected_indices(self, raw_records: list[dict]) -> None:
        """Rejected rows are reported by position."""
        samples, rejected = normalize_records(raw_records)
        assert len(samples) == 2
        assert rejected == [1]

    def test_mixed_headers(self, raw_records: list[dict]) -> None:
        """Aliases, unit hints and metadata are applied per row."""
        samples, _ = normalize_records(raw_records)
        first, second = samples
        assert first.parameters == pytest.approx({
            "pH": 7.1,
            "totalDissolvedSolids": 320.0,
            "lead": 0.015,
            "dissolvedOxygen": 6.2,
        })
        assert first.location.name == "Lake North"
        assert first.location.coordinates.latitude == 28.61
        assert second.parameters["eColi"] == 0.0
        assert second.sample_date == datetime(2024, 1, 7)


class TestToReadings:
    """Tests for to_readings."""

    def test_attaches_standards(self, registry: StandardsRegistry) -> None:
        """Readings carry their standard and canonical unit."""
        sample = normalize_record({"As (ug/L)": "5", "fluoride": "1"})
        assert sample is not None
        readings = to_readings(sample, registry)
        assert readings["arsenic"].standard is registry["arsenic"]
        assert readings["arsenic"].unit == "mg/L"
        assert readings["fluoride"].standard is None
        assert readings["fluoride"].unit == "unknown"
