# src/dcsim_core/components/exceptions.py
"""
Defines the custom, diagnosable exceptions for the components subsystem.
"""
from dataclasses import dataclass
from typing import Any

from ..data_structures import ComponentType
from ..errors import DiagnosableError, format_diagnostic_report


@dataclass()
class ComponentValueError(DiagnosableError, ValueError):
    """
    Raised when an editor-supplied component value cannot be turned into a
    number in the unit implied by the component type.
    """
    raw_value: Any
    component_type: ComponentType
    details: str

    def __str__(self):
        return f"Invalid value {self.raw_value!r} for {self.component_type}: {self.details}"

    def get_diagnostic_report(self) -> str:
        return format_diagnostic_report(
            error_type="Invalid Component Value",
            details=self.details,
            suggestion="Enter a plain number, a number with an engineering suffix (e.g. '4.7k'), or a value with a compatible unit (e.g. '10 ohm', '2.2 uF').",
            context={'user_input': str(self.raw_value)}
        )
