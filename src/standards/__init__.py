"""Regulatory standards registry."""

from src.standards.registry import (
    DEFAULT_STANDARDS,
    ParameterStandard,
    StandardsRegistry,
    load_default_registry,
)

__all__ = [
    "ParameterStandard",
    "StandardsRegistry",
    "DEFAULT_STANDARDS",
    "load_default_registry",
]
