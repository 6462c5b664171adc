"""
Error taxonomy for refrigerant property calculations.

Internal helpers raise these exceptions; PropertyService converts every one of
them into an Error result at its public boundary.

Author: RefrigProps Project
Date: 2026-10-17
"""

from typing import Optional


class RefrigPropsError(Exception):
    """Base class for all refrig_props errors."""


class UnsupportedUnitError(RefrigPropsError, ValueError):
    """Temperature or pressure unit symbol is not recognized."""


class InvalidUnitError(UnsupportedUnitError):
    """
    A configuration field carries a unit outside its closed enumeration.

    Attributes:
        field: Name of the offending configuration field
    """

    def __init__(self, field: str, message: str):
        super().__init__(message)
        self.field = field


class MissingRefrigerantError(RefrigPropsError, ValueError):
    """No refrigerant is available at first initialization."""


class InvalidRefrigerantTypeError(RefrigPropsError, TypeError):
    """Refrigerant identity is not a string."""


class InitializationTimeoutError(RefrigPropsError, TimeoutError):
    """Solver runtime never signalled readiness within the timeout."""


class SolverUnavailableError(RefrigPropsError, RuntimeError):
    """Solver runtime failed to load or was used before it was ready."""


class UnsupportedOperationError(RefrigPropsError):
    """Operation is not available for the configured refrigerant."""


class PhysicallyInfiniteResultError(RefrigPropsError):
    """
    Solver returned infinity for a saturation point.

    This is how an unrecognized fluid name surfaces from the solver.

    Attributes:
        note: Remediation hint for the caller
    """

    def __init__(self, message: str, note: Optional[str] = None):
        super().__init__(message)
        self.note = note
