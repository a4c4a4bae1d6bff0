"""Regulatory standards for water quality parameters (WHO/EPA guidelines)."""

from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from functools import lru_cache
from types import MappingProxyType

from src.utils.config import HEAVY_METALS


@dataclass(frozen=True)
class ParameterStandard:
    """Permissible bound(s) and canonical unit for one parameter."""

    name: str
    unit: str
    min: float | None = None
    max: float | None = None

    def __post_init__(self) -> None:
        if self.min is None and self.max is None:
            raise ValueError(f"Standard for {self.name} needs a min or max bound")

    @property
    def is_two_sided(self) -> bool:
        return self.min is not None and self.max is not None

    @property
    def limit(self) -> float:
        """The bound a reading is compared against (max when present)."""
        return self.max if self.max is not None else self.min  # type: ignore[return-value]


DEFAULT_STANDARDS: tuple[ParameterStandard, ...] = (
    # Physical
    ParameterStandard("pH", "pH units", min=6.5, max=8.5),
    ParameterStandard("temperature", "°C", max=30.0),
    ParameterStandard("turbidity", "NTU", max=5.0),
    ParameterStandard("totalDissolvedSolids", "mg/L", max=500.0),
    ParameterStandard("electricalConductivity", "μS/cm", max=1000.0),
    # Chemical
    ParameterStandard("dissolvedOxygen", "mg/L", min=5.0),
    ParameterStandard("biochemicalOxygenDemand", "mg/L", max=3.0),
    ParameterStandard("chemicalOxygenDemand", "mg/L", max=10.0),
    ParameterStandard("totalAlkalinity", "mg/L", max=200.0),
    ParameterStandard("totalHardness", "mg/L", max=300.0),
    # Heavy metals
    ParameterStandard("arsenic", "mg/L", max=0.01),
    ParameterStandard("lead", "mg/L", max=0.01),
    ParameterStandard("mercury", "mg/L", max=0.001),
    ParameterStandard("cadmium", "mg/L", max=0.003),
    ParameterStandard("chromium", "mg/L", max=0.05),
    ParameterStandard("nickel", "mg/L", max=0.02),
    ParameterStandard("copper", "mg/L", max=1.0),
    ParameterStandard("zinc", "mg/L", max=3.0),
    ParameterStandard("iron", "mg/L", max=0.3),
    ParameterStandard("manganese", "mg/L", max=0.1),
    # Nutrients
    ParameterStandard("nitrate", "mg/L", max=45.0),
    ParameterStandard("nitrite", "mg/L", max=3.0),
    ParameterStandard("phosphate", "mg/L", max=0.1),
    ParameterStandard("ammonia", "mg/L", max=0.5),
    # Microbiological
    ParameterStandard("totalColiforms", "MPN/100mL", max=0.0),
    ParameterStandard("fecalColiforms", "MPN/100mL", max=0.0),
    ParameterStandard("eColi", "MPN/100mL", max=0.0),
)


class StandardsRegistry(Mapping[str, ParameterStandard]):
    """Read-only lookup from canonical parameter name to its standard.

    The registry is built once and shared by reference; it has no mutation
    API. Looking up an unknown parameter with ``get`` returns ``None``.
    """

    def __init__(self, standards: tuple[ParameterStandard, ...] | list[ParameterStandard]) -> None:
        table: dict[str, ParameterStandard] = {}
        for standard in standards:
            if standard.name in table:
                raise ValueError(f"Duplicate standard for {standard.name}")
            table[standard.name] = standard
        self._standards = MappingProxyType(table)

    def __getitem__(self, name: str) -> ParameterStandard:
        return self._standards[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._standards)

    def __len__(self) -> int:
        return len(self._standards)

    def __repr__(self) -> str:
        return f"StandardsRegistry({len(self)} parameters)"

    def heavy_metals(self) -> list[ParameterStandard]:
        """Return the heavy metal standards present, in HMPI order."""
        return [self._standards[m] for m in HEAVY_METALS if m in self._standards]

    def to_table(self) -> list[dict]:
        """Export permissible limits for display.

        Returns:
            One dict per parameter with name, unit, min and max
        """
        return [
            {"parameter": s.name, "unit": s.unit, "min": s.min, "max": s.max}
            for s in self._standards.values()
        ]


@lru_cache(maxsize=1)
def load_default_registry() -> StandardsRegistry:
    """Build the default registry once per process."""
    return StandardsRegistry(DEFAULT_STANDARDS)
