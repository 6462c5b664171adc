"""
CalculationResult - tagged result values returned by every public operation.

Author: RefrigProps Project
Date: 2026-10-17
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Union


@dataclass(frozen=True)
class Success:
    """
    Successful calculation.

    Attributes:
        values: Computed quantities keyed by name (e.g. 'superheat')
        refrigerant: Refrigerant the calculation ran for
        units: Unit symbols of the returned quantities
        message: Optional human-readable status
    """
    values: Dict[str, Any] = field(default_factory=dict)
    refrigerant: Optional[str] = None
    units: Dict[str, str] = field(default_factory=dict)
    message: Optional[str] = None

    type = "success"
    ok = True

    def __getitem__(self, key: str) -> Any:
        return self.values[key]

    def get(self, key: str, default: Any = None) -> Any:
        return self.values.get(key, default)

    def to_dict(self) -> Dict[str, Any]:
        """Flatten into the plain dictionary shape used by callers."""
        data: Dict[str, Any] = {"type": self.type}
        if self.message is not None:
            data["message"] = self.message
        data.update(self.values)
        if self.refrigerant is not None:
            data["refrigerant"] = self.refrigerant
        if self.units:
            data["units"] = dict(self.units)
        return data


@dataclass(frozen=True)
class Error:
    """
    Failed calculation.

    Attributes:
        message: What went wrong
        note: Optional remediation hint
    """
    message: str
    note: Optional[str] = None

    type = "error"
    ok = False

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"type": self.type, "message": self.message}
        if self.note is not None:
            data["note"] = self.note
        return data


CalculationResult = Union[Success, Error]
