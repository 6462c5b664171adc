"""Core components for refrigerant property calculations"""

from refrig_props.core.props_service import PropsService, get_props_service
from refrig_props.core.results import CalculationResult, Error, Success
from refrig_props.core.saturation import Branch, SaturationResolver
from refrig_props.core.solver import EOSSolver
from refrig_props.core.tables import CustomRefrigerantTable, SaturationPoint, load_custom_tables
from refrig_props.core.thermo_state import ThermoState
from refrig_props.core.units import PressureUnit, TemperatureUnit

__all__ = [
    "PropsService",
    "get_props_service",
    "CalculationResult",
    "Error",
    "Success",
    "Branch",
    "SaturationResolver",
    "EOSSolver",
    "CustomRefrigerantTable",
    "SaturationPoint",
    "load_custom_tables",
    "ThermoState",
    "PressureUnit",
    "TemperatureUnit",
]
