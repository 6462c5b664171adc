"""
Tabulated saturation data for refrigerant blends the solver does not know.

Tables ship as CSV files in `refrig_props.data` (temperature in °C, liquid and
vapor saturation pressures in psig) and are converted to Kelvin / Pascal
absolute once, at load time.

Author: RefrigProps Project
Date: 2026-10-17
"""

import logging
from dataclasses import dataclass
from functools import lru_cache
from importlib import resources
from typing import Dict, Iterable, Iterator, Optional, Tuple

import numpy as np

from refrig_props.core.units import (
    PressureUnit,
    TemperatureUnit,
    pressure_to_pascal_absolute,
    temperature_to_kelvin,
)


logger = logging.getLogger(__name__)

DATA_PACKAGE = "refrig_props.data"


def normalize_fluid_key(name: str) -> str:
    """Registry key for a refrigerant name ('R448a' and 'R448A' are the same fluid)."""
    return name.strip().upper()


@dataclass(frozen=True)
class SaturationPoint:
    """
    One row of a saturation table.

    Attributes:
        temperature_k: Saturation temperature [K]
        liquid_pressure_pa: Bubble-point pressure [Pa absolute]
        vapor_pressure_pa: Dew-point pressure [Pa absolute]
    """
    temperature_k: float
    liquid_pressure_pa: float
    vapor_pressure_pa: float


class CustomRefrigerantTable:
    """
    Immutable saturation curve of one refrigerant blend.

    Points are kept sorted by temperature. Column arrays are read-only.
    """

    def __init__(self, name: str, points: Iterable[SaturationPoint]):
        self.name = normalize_fluid_key(name)
        self.points: Tuple[SaturationPoint, ...] = tuple(
            sorted(points, key=lambda p: p.temperature_k)
        )
        if not self.points:
            raise ValueError(f"Saturation table {self.name} has no points")

        self.temperatures_k = self._column("temperature_k")
        self.liquid_pressures_pa = self._column("liquid_pressure_pa")
        self.vapor_pressures_pa = self._column("vapor_pressure_pa")

    def _column(self, attr: str) -> np.ndarray:
        values = np.array([getattr(p, attr) for p in self.points], dtype=float)
        values.flags.writeable = False
        return values

    def pressures_pa(self, liquid: bool) -> np.ndarray:
        return self.liquid_pressures_pa if liquid else self.vapor_pressures_pa

    def __len__(self) -> int:
        return len(self.points)

    def __repr__(self) -> str:
        return (
            f"CustomRefrigerantTable({self.name}): {len(self)} points, "
            f"T=[{self.temperatures_k[0]:.2f}, {self.temperatures_k[-1]:.2f}] K"
        )


def interpolate_linear(x: float, xs: np.ndarray, ys: np.ndarray) -> float:
    """
    Piecewise-linear interpolation with linear extrapolation at both ends.

    Below the first sample the slope of the first two samples is used, above
    the last sample the slope of the last two. A single sample is returned
    as-is for any query.

    Args:
        x: Query value of the independent variable
        xs: Independent variable samples
        ys: Dependent variable samples (same length as xs)

    Returns:
        Interpolated or extrapolated dependent value

    Raises:
        ValueError: If the samples are empty or of different lengths
    """
    xs = np.asarray(xs, dtype=float)
    ys = np.asarray(ys, dtype=float)
    if xs.size == 0 or xs.size != ys.size:
        raise ValueError(
            f"Interpolation needs matching non-empty samples, got {xs.size} and {ys.size}"
        )

    order = np.argsort(xs, kind="stable")
    xs = xs[order]
    ys = ys[order]
    n = xs.size

    if n == 1:
        return float(ys[0])

    if x < xs[0]:
        i = 0
    elif x > xs[-1]:
        i = n - 2
    else:
        i = int(np.searchsorted(xs, x, side="right")) - 1
        if xs[i] == x:
            return float(ys[i])
        i = min(i, n - 2)

    slope = (ys[i + 1] - ys[i]) / (xs[i + 1] - xs[i])
    return float(ys[i] + slope * (x - xs[i]))


def load_table_csv(name: str, source) -> CustomRefrigerantTable:
    """
    Parse a saturation table in °C / psig columns.

    Args:
        name: Refrigerant name of the table
        source: Path or open text stream with `temperature_c,liquid_psig,vapor_psig` rows

    Returns:
        Table converted to Kelvin / Pascal absolute
    """
    rows = np.loadtxt(source, delimiter=",", comments="#", ndmin=2)
    points = [
        SaturationPoint(
            temperature_k=temperature_to_kelvin(float(t_c), TemperatureUnit.C),
            liquid_pressure_pa=pressure_to_pascal_absolute(float(p_liq), PressureUnit.PSIG),
            vapor_pressure_pa=pressure_to_pascal_absolute(float(p_vap), PressureUnit.PSIG),
        )
        for t_c, p_liq, p_vap in rows
    ]
    return CustomRefrigerantTable(name, points)


class CustomTableRegistry:
    """Read-only mapping of normalized refrigerant name to saturation table."""

    def __init__(self, tables: Iterable[CustomRefrigerantTable] = ()):
        self._tables: Dict[str, CustomRefrigerantTable] = {t.name: t for t in tables}

    def get(self, refrigerant: Optional[str]) -> Optional[CustomRefrigerantTable]:
        if not isinstance(refrigerant, str):
            return None
        return self._tables.get(normalize_fluid_key(refrigerant))

    def __contains__(self, refrigerant: object) -> bool:
        return isinstance(refrigerant, str) and self.get(refrigerant) is not None

    def __iter__(self) -> Iterator[str]:
        return iter(self._tables)

    def __len__(self) -> int:
        return len(self._tables)


@lru_cache(maxsize=None)
def load_custom_tables() -> CustomTableRegistry:
    """
    Load every packaged saturation table once per process.

    Returns:
        Registry keyed by refrigerant name derived from each CSV file name
    """
    tables = []
    for entry in sorted(resources.files(DATA_PACKAGE).iterdir(), key=lambda e: e.name):
        if not entry.name.endswith(".csv"):
            continue
        name = entry.name[: -len(".csv")]
        with entry.open("r", encoding="utf-8") as fh:
            table = load_table_csv(name, fh)
        logger.debug("Loaded saturation table %r", table)
        tables.append(table)
    return CustomTableRegistry(tables)
