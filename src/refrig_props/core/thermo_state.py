"""
ThermoState - Thermodynamic state representation

Bulk properties of a refrigerant at a given pressure and temperature,
computed exclusively through the EOS solver.

Author: RefrigProps Project
Date: 2026-10-17
"""

from typing import Any, Dict, Optional

from refrig_props.core.solver import (
    CONDUCTIVITY,
    DENSITY,
    ENTHALPY,
    ENTROPY,
    PRESSURE,
    QUALITY,
    SPECIFIC_HEAT,
    TEMPERATURE,
    VISCOSITY,
    EOSSolver,
)


# Unit labels of the bulk properties, in SI
PROPERTY_UNITS = {
    "density": "kg/m³",
    "enthalpy": "J/kg",
    "entropy": "J/kg/K",
    "quality": "dimensionless",
    "conductivity": "W/m/K",
    "viscosity": "Pa·s",
    "specific_heat": "J/kg/K",
}


class ThermoState:
    """
    Thermodynamic state of a refrigerant at (P, T).

    Attributes:
        fluid (str): Solver fluid name
        P (float): Pressure [Pa absolute]
        T (float): Temperature [K]
        rho (float): Density [kg/m³]
        h (float): Specific enthalpy [J/kg]
        s (float): Specific entropy [J/kg/K]
        x (float): Vapor quality [-] as reported by the solver
        k (float): Thermal conductivity [W/m/K]
        mu (float): Dynamic viscosity [Pa·s]
        cp (float): Specific heat [J/kg/K]
    """

    def __init__(self, fluid: str, solver: EOSSolver):
        self.fluid: str = fluid
        self.P: Optional[float] = None
        self.T: Optional[float] = None
        self.rho: Optional[float] = None
        self.h: Optional[float] = None
        self.s: Optional[float] = None
        self.x: Optional[float] = None
        self.k: Optional[float] = None
        self.mu: Optional[float] = None
        self.cp: Optional[float] = None
        self._solver = solver

    def _validate_pressure(self, P: float) -> None:
        if P <= 0:
            raise ValueError(f"Pressure must be positive, got P={P:.2e} Pa")

    def _validate_temperature(self, T: float) -> None:
        if T <= 0:
            raise ValueError(f"Temperature must be positive, got T={T:.2f} K")

    def _prop(self, output: str, P: float, T: float) -> float:
        return self._solver.solve(output, TEMPERATURE, T, PRESSURE, P, self.fluid)

    def update_from_PT(self, P: float, T: float) -> None:
        """
        Update state from pressure and temperature.

        Args:
            P: Pressure [Pa absolute]
            T: Temperature [K]

        Raises:
            ValueError: If pressure or temperature is non-positive
        """
        self._validate_pressure(P)
        self._validate_temperature(T)

        self.rho = self._prop(DENSITY, P, T)
        self.h = self._prop(ENTHALPY, P, T)
        self.s = self._prop(ENTROPY, P, T)
        self.x = self._prop(QUALITY, P, T)
        self.k = self._prop(CONDUCTIVITY, P, T)
        self.mu = self._prop(VISCOSITY, P, T)
        self.cp = self._prop(SPECIFIC_HEAT, P, T)
        self.P = P
        self.T = T

    def to_dict(self) -> Dict[str, Any]:
        """
        Bulk properties keyed by the names listed in PROPERTY_UNITS.

        Returns:
            Dictionary of property values (SI)
        """
        return {
            "density": self.rho,
            "enthalpy": self.h,
            "entropy": self.s,
            "quality": self.x,
            "conductivity": self.k,
            "viscosity": self.mu,
            "specific_heat": self.cp,
        }

    def is_initialized(self) -> bool:
        return self.P is not None and self.T is not None

    def __repr__(self) -> str:
        if not self.is_initialized():
            return f"ThermoState({self.fluid}): empty"
        return (
            f"ThermoState({self.fluid}): "
            f"P={self.P:.2e} Pa, T={self.T:.2f} K, "
            f"h={self.h:.2e} J/kg, s={self.s:.2e} J/kg/K, "
            f"x={self.x:.4f}, rho={self.rho:.2f} kg/m³"
        )
