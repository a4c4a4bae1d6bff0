"""Utility modules for configuration and logging."""

from src.utils.config import (
    HEAVY_METALS,
    KEY_TREND_PARAMETERS,
    WQI_PARAMETERS,
)
from src.utils.logging_config import configure_logging, get_logger, log_analysis

__all__ = [
    "HEAVY_METALS",
    "WQI_PARAMETERS",
    "KEY_TREND_PARAMETERS",
    "configure_logging",
    "get_logger",
    "log_analysis",
]
