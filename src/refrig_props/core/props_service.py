"""
PropsService - refrigerant property calculations in caller units

Orchestrates configuration, unit conversion and saturation lookups. Every
public operation returns a CalculationResult; failures come back as Error
values and are never raised to the caller.

Author: RefrigProps Project
Date: 2026-10-17
"""

import functools
import logging
import math
import threading
from typing import Any, Callable, Optional, Union

from refrig_props.core.config_state import ConfigState
from refrig_props.core.errors import PhysicallyInfiniteResultError, UnsupportedOperationError
from refrig_props.core.results import CalculationResult, Error, Success
from refrig_props.core.saturation import Branch, SaturationResolver
from refrig_props.core.solver import EOSSolver, PropsFunction
from refrig_props.core.tables import CustomTableRegistry, load_custom_tables
from refrig_props.core.thermo_state import PROPERTY_UNITS, ThermoState
from refrig_props.core.units import (
    delta_temperature_from_kelvin,
    pressure_from_pascal_absolute,
    pressure_to_pascal_absolute,
    temperature_from_kelvin,
    temperature_to_kelvin,
)


INFINITY_NOTE = (
    "If the pressures are in an expected range for this refrigerant, check that "
    "the refrigerant name is recognized by CoolProp. \"R507\" for example is not "
    "supported, it needs to be \"R507A\"."
)


def _returns_result(operation: Callable[..., CalculationResult]) -> Callable[..., CalculationResult]:
    """Convert any exception raised by `operation` into an Error result."""

    @functools.wraps(operation)
    def wrapper(self: "PropsService", *args: Any, **kwargs: Any) -> CalculationResult:
        try:
            return operation(self, *args, **kwargs)
        except Exception as e:
            self.logger.warning(f"{operation.__name__} failed: {e}")
            return Error(message=str(e), note=getattr(e, "note", None))

    return wrapper


def _parse_branch(branch: Union[Branch, str]) -> Branch:
    if isinstance(branch, Branch):
        return branch
    try:
        return Branch[str(branch).strip().upper()]
    except KeyError:
        raise ValueError(f"Unknown saturation branch {branch!r}. Must be liquid or vapor") from None


class PropsService:
    """
    Service for refrigerant saturation and bulk property calculations.

    Each instance owns its configuration. Use get_props_service() for the
    process-wide default instance.
    """

    def __init__(self, solver: Optional[EOSSolver] = None,
                 tables: Optional[CustomTableRegistry] = None):
        """
        Args:
            solver: EOS solver (default: CoolProp loaded on first use)
            tables: Custom saturation tables (default: packaged tables)
        """
        self.logger = logging.getLogger(__name__)
        self.solver = solver if solver is not None else EOSSolver()
        self.tables = tables if tables is not None else load_custom_tables()
        self.config = ConfigState(self.tables, ready_hook=self.solver.wait_ready)
        self.resolver = SaturationResolver(self.solver, self.tables)

    # ========== Configuration ==========

    @_returns_result
    def init(self, refrigerant: Optional[str] = None, temp_unit: Optional[str] = None,
             pressure_unit: Optional[str] = None) -> CalculationResult:
        """
        Set the default refrigerant and units.

        The first call requires a refrigerant and waits for the solver
        runtime. Later calls update only the supplied fields.
        """
        first = not self.config.initialized
        snap = self.config.init(refrigerant, temp_unit, pressure_unit)
        return Success(
            refrigerant=snap.refrigerant,
            units=snap.units(),
            message="Initialized successfully" if first else "Default settings updated",
        )

    @_returns_result
    def set_config(self, refrigerant: Optional[str] = None, temp_unit: Optional[str] = None,
                   pressure_unit: Optional[str] = None) -> CalculationResult:
        """Same as init(), returning the resulting configuration."""
        result = self.init(refrigerant, temp_unit, pressure_unit)
        if not result.ok:
            return result
        return Success(
            values={"config": self.config.as_dict()},
            refrigerant=result.refrigerant,
            units=result.units,
            message="Config updated successfully",
        )

    @_returns_result
    def get_config(self) -> CalculationResult:
        snap = self.config.snapshot()
        return Success(values=self.config.as_dict(), refrigerant=snap.refrigerant,
                       units=snap.units())

    # ========== Superheat / subcooling ==========

    def _saturation_delta(self, label: str, branch: Branch, temperature: float,
                          pressure: float, refrigerant: Optional[str],
                          temp_unit: Optional[str], pressure_unit: Optional[str]) -> Success:
        snap = self.config.ensure_initialized(refrigerant, temp_unit, pressure_unit)
        T = temperature_to_kelvin(temperature, snap.temp_unit)
        P = pressure_to_pascal_absolute(pressure, snap.pressure_unit)

        T_sat = self.resolver.resolve_saturation_temperature(
            P, snap.refrigerant, branch, snap.using_custom_table
        )
        if math.isinf(T_sat):
            raise PhysicallyInfiniteResultError(
                f"{label.capitalize()} is infinity", note=INFINITY_NOTE
            )

        # Superheat sits above the dew point, subcooling below the bubble point
        raw = T - T_sat if branch is Branch.VAPOR else T_sat - T
        delta = max(raw, 0.0)

        return Success(
            values={
                label: delta_temperature_from_kelvin(delta, snap.temp_unit),
                "saturation_temperature": temperature_from_kelvin(T_sat, snap.temp_unit),
            },
            refrigerant=snap.refrigerant,
            units=snap.units(),
        )

    @_returns_result
    def calculate_superheat(self, temperature: float, pressure: float,
                            refrigerant: Optional[str] = None,
                            temp_unit: Optional[str] = None,
                            pressure_unit: Optional[str] = None) -> CalculationResult:
        """
        Superheat of vapor above its dew point at the given pressure.

        Args:
            temperature: Measured temperature [temp_unit]
            pressure: Measured pressure [pressure_unit]
            refrigerant: Refrigerant name (default: configured refrigerant)
            temp_unit: K, C or F (default: configured unit)
            pressure_unit: Pressure unit symbol (default: configured unit)

        Returns:
            Success with 'superheat' (difference, never negative) and
            'saturation_temperature', or Error
        """
        return self._saturation_delta("superheat", Branch.VAPOR, temperature, pressure,
                                      refrigerant, temp_unit, pressure_unit)

    @_returns_result
    def calculate_subcooling(self, temperature: float, pressure: float,
                             refrigerant: Optional[str] = None,
                             temp_unit: Optional[str] = None,
                             pressure_unit: Optional[str] = None) -> CalculationResult:
        """
        Subcooling of liquid below its bubble point at the given pressure.

        Returns:
            Success with 'subcooling' (difference, never negative) and
            'saturation_temperature', or Error
        """
        return self._saturation_delta("subcooling", Branch.LIQUID, temperature, pressure,
                                      refrigerant, temp_unit, pressure_unit)

    # ========== Saturation lookups ==========

    @_returns_result
    def get_saturation_temperature(self, pressure: float,
                                   refrigerant: Optional[str] = None,
                                   temp_unit: Optional[str] = None,
                                   pressure_unit: Optional[str] = None,
                                   branch: Union[Branch, str] = Branch.LIQUID) -> CalculationResult:
        """
        Saturation temperature at a pressure, unclamped.

        Returns:
            Success with 'temperature' in temp_unit, or Error
        """
        branch = _parse_branch(branch)
        snap = self.config.ensure_initialized(refrigerant, temp_unit, pressure_unit)
        P = pressure_to_pascal_absolute(pressure, snap.pressure_unit)
        T_sat = self.resolver.resolve_saturation_temperature(
            P, snap.refrigerant, branch, snap.using_custom_table
        )
        return Success(
            values={"temperature": temperature_from_kelvin(T_sat, snap.temp_unit)},
            refrigerant=snap.refrigerant,
            units=snap.units(),
        )

    @_returns_result
    def get_saturation_pressure(self, temperature: float,
                                refrigerant: Optional[str] = None,
                                temp_unit: Optional[str] = None,
                                pressure_unit: Optional[str] = None,
                                branch: Union[Branch, str] = Branch.LIQUID) -> CalculationResult:
        """
        Saturation pressure at a temperature, unclamped.

        Returns:
            Success with 'pressure' in pressure_unit, or Error
        """
        branch = _parse_branch(branch)
        snap = self.config.ensure_initialized(refrigerant, temp_unit, pressure_unit)
        T = temperature_to_kelvin(temperature, snap.temp_unit)
        P_sat = self.resolver.resolve_saturation_pressure(
            T, snap.refrigerant, branch, snap.using_custom_table
        )
        return Success(
            values={"pressure": pressure_from_pascal_absolute(P_sat, snap.pressure_unit)},
            refrigerant=snap.refrigerant,
            units=snap.units(),
        )

    # ========== Bulk properties ==========

    @_returns_result
    def get_properties(self, temperature: float, pressure: float,
                       refrigerant: Optional[str] = None,
                       temp_unit: Optional[str] = None,
                       pressure_unit: Optional[str] = None) -> CalculationResult:
        """
        Bulk properties at (temperature, pressure), computed by the solver.

        Returns:
            Success with a 'properties' dictionary, or Error for custom-table
            refrigerants
        """
        snap = self.config.ensure_initialized(refrigerant, temp_unit, pressure_unit)
        if snap.using_custom_table:
            raise UnsupportedOperationError(
                "Custom refrigerants are not supported for getProperties"
            )
        T = temperature_to_kelvin(temperature, snap.temp_unit)
        P = pressure_to_pascal_absolute(pressure, snap.pressure_unit)

        state = ThermoState(snap.refrigerant, self.solver)
        state.update_from_PT(P, T)
        self.logger.debug(repr(state))

        properties = {
            "temperature": temperature_from_kelvin(T, snap.temp_unit),
            "pressure": pressure_from_pascal_absolute(P, snap.pressure_unit),
        }
        properties.update(state.to_dict())
        units = snap.units()
        units.update(PROPERTY_UNITS)
        return Success(values={"properties": properties}, refrigerant=snap.refrigerant,
                       units=units)

    # ========== Direct solver access ==========

    @property
    def props_si(self) -> PropsFunction:
        """
        The solver's solve() function, once the runtime is ready.

        Raises:
            InitializationTimeoutError: If the runtime never becomes ready
        """
        self.solver.wait_ready()
        return self.solver.solve


_default_service: Optional[PropsService] = None
_default_lock = threading.Lock()


def get_props_service() -> PropsService:
    """
    Get the process-wide default PropsService, creating it on first use.

    Returns:
        Default PropsService instance
    """
    global _default_service
    with _default_lock:
        if _default_service is None:
            _default_service = PropsService()
        return _default_service
