"""Configuration constants for the water quality analysis engine."""

# Heavy metals used by the HMPI, in reporting order
HEAVY_METALS: tuple[str, ...] = (
    "arsenic",
    "lead",
    "mercury",
    "cadmium",
    "chromium",
    "nickel",
    "copper",
    "zinc",
    "iron",
    "manganese",
)

# Parameters rated by the WQI
WQI_PARAMETERS: tuple[str, ...] = (
    "pH",
    "dissolvedOxygen",
    "turbidity",
    "totalDissolvedSolids",
    "nitrate",
)

# Parameters tracked for trends across a batch
KEY_TREND_PARAMETERS: tuple[str, ...] = (
    "pH",
    "dissolvedOxygen",
    "turbidity",
    "arsenic",
    "lead",
)

# Parameter classification factors
PH_WARNING_MARGIN = 0.5        # pH units inside either bound
DO_WARNING_MARGIN = 1.0        # mg/L above the dissolved oxygen minimum
WARNING_FRACTION = 0.8         # share of max that starts the warning band
CRITICAL_MULTIPLIER = 2.0      # multiple of max that is critical

# HMPI status thresholds (mean measured/standard ratio)
HMPI_UNSAFE_THRESHOLD = 1.0
HMPI_CRITICAL_THRESHOLD = 2.0

# WQI rating and status boundaries (0-100 scale)
PH_RATING_PENALTY = 20.0       # rating points lost per pH unit outside bounds
WQI_STATUS_THRESHOLDS: list[tuple[float, str]] = [
    (25.0, "very_poor"),
    (50.0, "poor"),
    (70.0, "fair"),
    (90.0, "good"),
]

# Trend analysis
STABLE_SLOPE_THRESHOLD = 0.1
MIN_TREND_POINTS = 2

# Batch data quality tiers (completeness percent)
DATA_QUALITY_TIERS: list[tuple[float, str]] = [
    (50.0, "poor"),
    (70.0, "fair"),
    (90.0, "good"),
]
RELIABILITY_TIERS: list[tuple[float, str]] = [
    (50.0, "low"),
    (70.0, "medium"),
]

# Share of unsafe samples that triggers a batch monitoring recommendation
UNSAFE_SHARE_FOR_MONITORING = 0.3

# Header fragments that mark a heavy metal column as micrograms per litre
MICRO_UNIT_HINTS: tuple[str, ...] = ("µg", "μg", "ug", "micro")
MICROGRAMS_PER_MILLIGRAM = 1000.0

# Raw record fields that carry sample metadata rather than measurements
DATE_FIELDS: tuple[str, ...] = ("date", "sample_date", "timestamp")
LOCATION_NAME_FIELDS: tuple[str, ...] = ("location", "site", "station")
LATITUDE_FIELDS: tuple[str, ...] = ("latitude", "lat")
LONGITUDE_FIELDS: tuple[str, ...] = ("longitude", "lng", "lon")
REGION_FIELDS: tuple[str, ...] = ("region", "state", "country")
UNIT_COLUMN_SUFFIXES: tuple[str, ...] = (" unit", "_unit", " units", "_units")

DEFAULT_LOCATION_NAME = "Unknown"

# Supported input file types
SUPPORTED_FILE_TYPES = ["csv", "xlsx", "xls"]
