"""
ConfigState - default refrigerant and units with lazy initialization

Holds the defaults every calculation falls back to. Fields supplied to a
calculation are validated and written back into the defaults, so a per-call
override stays in effect for later calls.

Author: RefrigProps Project
Date: 2026-10-17
"""

import logging
import threading
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

from refrig_props.core.errors import (
    InvalidRefrigerantTypeError,
    InvalidUnitError,
    MissingRefrigerantError,
    UnsupportedUnitError,
)
from refrig_props.core.tables import CustomTableRegistry
from refrig_props.core.units import (
    PressureUnit,
    TemperatureUnit,
    parse_pressure_unit,
    parse_temperature_unit,
)


logger = logging.getLogger(__name__)

_TEMP_UNIT_CHOICES = ", ".join(u.value for u in TemperatureUnit)
_PRESSURE_UNIT_CHOICES = ", ".join(u.value for u in PressureUnit)


def _supplied(value: Any) -> bool:
    return value is not None and value != ""


@dataclass(frozen=True)
class ConfigSnapshot:
    """Effective settings of one calculation."""
    refrigerant: Optional[str]
    temp_unit: TemperatureUnit
    pressure_unit: PressureUnit
    using_custom_table: bool

    def units(self) -> Dict[str, str]:
        return {
            "temperature": self.temp_unit.value,
            "pressure": self.pressure_unit.value,
        }


class ConfigState:
    """
    Mutable default configuration.

    All reads and writes hold an internal lock; the first initialization
    calls `ready_hook` (the solver readiness wait) while holding it, so
    concurrent first calls share one initialization.
    """

    def __init__(self, tables: CustomTableRegistry,
                 ready_hook: Optional[Callable[[], None]] = None):
        """
        Args:
            tables: Registry deciding custom-table membership
            ready_hook: Called once, before the state is first marked initialized
        """
        self.tables = tables
        self._ready_hook = ready_hook
        self._lock = threading.RLock()

        self.default_refrigerant: Optional[str] = None
        self.default_temp_unit = TemperatureUnit.K
        self.default_pressure_unit = PressureUnit.PA
        self.initialized = False
        self.using_custom_table = False

    # ========== Validation ==========

    @staticmethod
    def _validate_refrigerant(refrigerant: Any) -> str:
        if not isinstance(refrigerant, str):
            raise InvalidRefrigerantTypeError(
                f"Invalid refrigerant type: expected str, got {type(refrigerant).__name__}"
            )
        return refrigerant

    @staticmethod
    def _validate_temp_unit(unit: Any) -> TemperatureUnit:
        try:
            return parse_temperature_unit(unit)
        except UnsupportedUnitError as e:
            raise InvalidUnitError(
                "temp_unit", f"Invalid temperature unit {unit!r}. Must be {_TEMP_UNIT_CHOICES}"
            ) from e

    @staticmethod
    def _validate_pressure_unit(unit: Any) -> PressureUnit:
        try:
            return parse_pressure_unit(unit)
        except UnsupportedUnitError as e:
            raise InvalidUnitError(
                "pressure_unit", f"Invalid pressure unit {unit!r}. Must be {_PRESSURE_UNIT_CHOICES}"
            ) from e

    # ========== Mutation ==========

    def _set_refrigerant(self, refrigerant: str) -> None:
        if refrigerant != self.default_refrigerant:
            logger.debug(f"Default refrigerant: {self.default_refrigerant} -> {refrigerant}")
        self.default_refrigerant = refrigerant
        self.using_custom_table = refrigerant in self.tables

    def _mark_initialized(self) -> None:
        if self._ready_hook is not None:
            self._ready_hook()
        self.initialized = True
        logger.debug("Configuration initialized")

    def init(self, refrigerant: Optional[str] = None,
             temp_unit: Optional[Any] = None,
             pressure_unit: Optional[Any] = None) -> ConfigSnapshot:
        """
        Initialize defaults, or update them once initialized.

        The first call requires a refrigerant and validates every supplied
        field before committing anything. Later calls apply each supplied
        field in turn and leave the others unchanged.

        Returns:
            Snapshot of the configuration after the update

        Raises:
            MissingRefrigerantError: First call without a refrigerant
            InvalidRefrigerantTypeError: Refrigerant is not a string
            InvalidUnitError: A unit field is outside its enumeration
        """
        with self._lock:
            if self.initialized:
                if _supplied(refrigerant):
                    self._set_refrigerant(self._validate_refrigerant(refrigerant))
                if _supplied(temp_unit):
                    self.default_temp_unit = self._validate_temp_unit(temp_unit)
                if _supplied(pressure_unit):
                    self.default_pressure_unit = self._validate_pressure_unit(pressure_unit)
                return self.snapshot()

            if not _supplied(refrigerant):
                raise MissingRefrigerantError(
                    "Refrigerant must be specified during initialization"
                )
            refrigerant = self._validate_refrigerant(refrigerant)
            t_unit = self._validate_temp_unit(temp_unit) if _supplied(temp_unit) else None
            p_unit = self._validate_pressure_unit(pressure_unit) if _supplied(pressure_unit) else None

            self._mark_initialized()
            self._set_refrigerant(refrigerant)
            if t_unit is not None:
                self.default_temp_unit = t_unit
            if p_unit is not None:
                self.default_pressure_unit = p_unit
            return self.snapshot()

    def ensure_initialized(self, refrigerant: Optional[str] = None,
                           temp_unit: Optional[Any] = None,
                           pressure_unit: Optional[Any] = None) -> ConfigSnapshot:
        """
        Initialize on first use and persist any supplied fields.

        Returns:
            Snapshot the calculation must run against

        Raises:
            MissingRefrigerantError: No refrigerant supplied and none defaulted
            InvalidRefrigerantTypeError: Refrigerant is not a string
            InvalidUnitError: A unit field is outside its enumeration
        """
        with self._lock:
            if not self.initialized and not _supplied(refrigerant) \
                    and self.default_refrigerant is None:
                raise MissingRefrigerantError(
                    "Refrigerant must be specified either during initialization "
                    "or in the method call"
                )

            new_refrigerant = self._validate_refrigerant(refrigerant) if _supplied(refrigerant) else None
            t_unit = self._validate_temp_unit(temp_unit) if _supplied(temp_unit) else None
            p_unit = self._validate_pressure_unit(pressure_unit) if _supplied(pressure_unit) else None

            if not self.initialized:
                self._mark_initialized()

            if new_refrigerant is not None:
                self._set_refrigerant(new_refrigerant)
            if t_unit is not None:
                self.default_temp_unit = t_unit
            if p_unit is not None:
                self.default_pressure_unit = p_unit
            return self.snapshot()

    # ========== Reading ==========

    def snapshot(self) -> ConfigSnapshot:
        with self._lock:
            return ConfigSnapshot(
                refrigerant=self.default_refrigerant,
                temp_unit=self.default_temp_unit,
                pressure_unit=self.default_pressure_unit,
                using_custom_table=self.using_custom_table,
            )

    def as_dict(self) -> Dict[str, Optional[str]]:
        snap = self.snapshot()
        return {
            "refrigerant": snap.refrigerant,
            "temp_unit": snap.temp_unit.value,
            "pressure_unit": snap.pressure_unit.value,
        }
