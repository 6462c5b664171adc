"""
Unit conversions between caller units and SI canonical values.

Temperatures are normalized to Kelvin and pressures to Pascal absolute. Gauge
pressure units (no suffix or 'g' suffix) are offset by standard atmospheric
pressure; 'a'-suffixed units are absolute.

Author: RefrigProps Project
Date: 2026-10-17
"""

from enum import Enum
from typing import Dict, Union

from refrig_props.core.errors import UnsupportedUnitError


ATMOSPHERIC_PRESSURE_PA = 101325.0
KELVIN_OFFSET = 273.15
RANKINE_OFFSET = 459.67
FAHRENHEIT_PER_KELVIN = 1.8


class TemperatureUnit(Enum):
    """Supported temperature scales."""
    K = "K"
    C = "C"
    F = "F"


class PressureUnit(Enum):
    """Supported pressure units (gauge and absolute variants)."""
    PA = "Pa"
    PAA = "Paa"
    PAG = "Pag"
    KPA = "kPa"
    KPAA = "kPaa"
    KPAG = "kPag"
    BAR = "bar"
    BARA = "bara"
    BARG = "barg"
    PSI = "psi"
    PSIA = "psia"
    PSIG = "psig"


# Pa per unit
_PRESSURE_SCALE: Dict[PressureUnit, float] = {
    PressureUnit.PA: 1.0,
    PressureUnit.PAA: 1.0,
    PressureUnit.PAG: 1.0,
    PressureUnit.KPA: 1000.0,
    PressureUnit.KPAA: 1000.0,
    PressureUnit.KPAG: 1000.0,
    PressureUnit.BAR: 100000.0,
    PressureUnit.BARA: 100000.0,
    PressureUnit.BARG: 100000.0,
    PressureUnit.PSI: 6894.76,
    PressureUnit.PSIA: 6894.76,
    PressureUnit.PSIG: 6894.76,
}

_GAUGE_UNITS = frozenset({
    PressureUnit.PA, PressureUnit.PAG,
    PressureUnit.KPA, PressureUnit.KPAG,
    PressureUnit.BAR, PressureUnit.BARG,
    PressureUnit.PSI, PressureUnit.PSIG,
})

_TEMPERATURE_LOOKUP = {unit.value.upper(): unit for unit in TemperatureUnit}
_PRESSURE_LOOKUP = {unit.value.upper(): unit for unit in PressureUnit}

TemperatureUnitLike = Union[TemperatureUnit, str]
PressureUnitLike = Union[PressureUnit, str]


def parse_temperature_unit(unit: TemperatureUnitLike) -> TemperatureUnit:
    """
    Resolve a temperature unit symbol (case-insensitive) to its enum member.

    Raises:
        UnsupportedUnitError: If the symbol is not K, C or F
    """
    if isinstance(unit, TemperatureUnit):
        return unit
    if isinstance(unit, str):
        member = _TEMPERATURE_LOOKUP.get(unit.strip().upper())
        if member is not None:
            return member
    raise UnsupportedUnitError(f"Unsupported temperature unit: {unit!r}")


def parse_pressure_unit(unit: PressureUnitLike) -> PressureUnit:
    """
    Resolve a pressure unit symbol (case-insensitive) to its enum member.

    Raises:
        UnsupportedUnitError: If the symbol is not a known pressure unit
    """
    if isinstance(unit, PressureUnit):
        return unit
    if isinstance(unit, str):
        member = _PRESSURE_LOOKUP.get(unit.strip().upper())
        if member is not None:
            return member
    raise UnsupportedUnitError(f"Unsupported pressure unit: {unit!r}")


def is_gauge(unit: PressureUnitLike) -> bool:
    return parse_pressure_unit(unit) in _GAUGE_UNITS


# ========== Temperature ==========

def temperature_to_kelvin(value: float, unit: TemperatureUnitLike) -> float:
    """
    Convert a temperature point to Kelvin.

    Args:
        value: Temperature in `unit`
        unit: K, C or F

    Returns:
        Temperature [K]
    """
    unit = parse_temperature_unit(unit)
    if unit is TemperatureUnit.K:
        return value
    if unit is TemperatureUnit.C:
        return value + KELVIN_OFFSET
    return (value + RANKINE_OFFSET) * 5 / 9


def temperature_from_kelvin(value: float, unit: TemperatureUnitLike) -> float:
    """
    Convert a temperature point from Kelvin.

    Args:
        value: Temperature [K]
        unit: K, C or F

    Returns:
        Temperature in `unit`
    """
    unit = parse_temperature_unit(unit)
    if unit is TemperatureUnit.K:
        return value
    if unit is TemperatureUnit.C:
        return value - KELVIN_OFFSET
    return value * 9 / 5 - RANKINE_OFFSET


def delta_temperature_from_kelvin(value: float, unit: TemperatureUnitLike) -> float:
    """
    Convert a temperature difference from Kelvin.

    A difference carries no offset: 10 K is 10 °C and 18 °F.

    Args:
        value: Temperature difference [K]
        unit: K, C or F

    Returns:
        Temperature difference in `unit`
    """
    unit = parse_temperature_unit(unit)
    if unit is TemperatureUnit.F:
        return value * FAHRENHEIT_PER_KELVIN
    return value


# ========== Pressure ==========

def pressure_to_pascal_absolute(value: float, unit: PressureUnitLike) -> float:
    """
    Convert a pressure to Pascal absolute.

    Args:
        value: Pressure in `unit`
        unit: Pressure unit symbol, gauge or absolute

    Returns:
        Absolute pressure [Pa]
    """
    unit = parse_pressure_unit(unit)
    pressure_pa = value * _PRESSURE_SCALE[unit]
    if unit in _GAUGE_UNITS:
        pressure_pa += ATMOSPHERIC_PRESSURE_PA
    return pressure_pa


def pressure_from_pascal_absolute(value: float, unit: PressureUnitLike) -> float:
    """
    Convert a Pascal absolute pressure to `unit`.

    Args:
        value: Absolute pressure [Pa]
        unit: Pressure unit symbol, gauge or absolute

    Returns:
        Pressure in `unit`
    """
    unit = parse_pressure_unit(unit)
    if unit in _GAUGE_UNITS:
        value = value - ATMOSPHERIC_PRESSURE_PA
    return value / _PRESSURE_SCALE[unit]
