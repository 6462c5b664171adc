"""
SaturationResolver - saturation temperature / pressure lookups

Dispatches between linear interpolation over a custom saturation table and
delegation to the EOS solver.

Author: RefrigProps Project
Date: 2026-10-17
"""

from enum import Enum

from refrig_props.core.errors import UnsupportedOperationError
from refrig_props.core.solver import PRESSURE, QUALITY, TEMPERATURE, EOSSolver
from refrig_props.core.tables import (
    CustomRefrigerantTable,
    CustomTableRegistry,
    interpolate_linear,
)


class Branch(Enum):
    """Saturation curve branch, valued by vapor quality."""
    LIQUID = 0  # bubble point
    VAPOR = 1   # dew point

    @property
    def quality(self) -> float:
        return float(self.value)


class SaturationResolver:
    """Resolves saturation temperature or pressure for one branch."""

    def __init__(self, solver: EOSSolver, tables: CustomTableRegistry):
        self.solver = solver
        self.tables = tables

    def _table(self, refrigerant: str) -> CustomRefrigerantTable:
        table = self.tables.get(refrigerant)
        if table is None:
            raise UnsupportedOperationError(
                f"No saturation table available for refrigerant {refrigerant!r}"
            )
        return table

    def resolve_saturation_temperature(self, pressure_pa: float, refrigerant: str,
                                       branch: Branch, use_custom_table: bool) -> float:
        """
        Saturation temperature at a pressure.

        Args:
            pressure_pa: Absolute pressure [Pa]
            refrigerant: Refrigerant name
            branch: LIQUID (bubble point) or VAPOR (dew point)
            use_custom_table: Interpolate the custom table instead of calling the solver

        Returns:
            Saturation temperature [K]
        """
        if use_custom_table:
            table = self._table(refrigerant)
            return interpolate_linear(
                pressure_pa,
                table.pressures_pa(liquid=branch is Branch.LIQUID),
                table.temperatures_k,
            )
        return self.solver.solve(TEMPERATURE, PRESSURE, pressure_pa,
                                 QUALITY, branch.quality, refrigerant)

    def resolve_saturation_pressure(self, temperature_k: float, refrigerant: str,
                                    branch: Branch, use_custom_table: bool) -> float:
        """
        Saturation pressure at a temperature.

        Args:
            temperature_k: Temperature [K]
            refrigerant: Refrigerant name
            branch: LIQUID (bubble point) or VAPOR (dew point)
            use_custom_table: Interpolate the custom table instead of calling the solver

        Returns:
            Saturation pressure [Pa absolute]
        """
        if use_custom_table:
            table = self._table(refrigerant)
            return interpolate_linear(
                temperature_k,
                table.temperatures_k,
                table.pressures_pa(liquid=branch is Branch.LIQUID),
            )
        return self.solver.solve(PRESSURE, TEMPERATURE, temperature_k,
                                 QUALITY, branch.quality, refrigerant)
