"""
refrig_props - Refrigerant saturation and property calculations

Superheat, subcooling, saturation temperature / pressure and bulk properties
of refrigerants in caller-chosen units, using CoolProp for standard fluids
and tabulated saturation curves for blends CoolProp does not cover.

Author: RefrigProps Project
Date: 2026-10-17
"""

__version__ = "0.1.0"

from refrig_props.core.props_service import PropsService, get_props_service
from refrig_props.core.results import CalculationResult, Error, Success
from refrig_props.core.saturation import Branch

__all__ = [
    "PropsService",
    "get_props_service",
    "CalculationResult",
    "Error",
    "Success",
    "Branch",
]
