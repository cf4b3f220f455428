# src/dcsim_core/simulation/exceptions.py
"""
Defines custom, diagnosable exceptions specific to the solve phase.

These are internal signals. The public entry points in `execution.py` catch them
and encode the failure in the returned `DCSimulationResult`; they never reach the
editor as raised exceptions.
"""
from dataclasses import dataclass
from typing import Optional

import numpy as np

from ..errors import DiagnosableError, format_diagnostic_report


@dataclass()
class SingularMatrixError(DiagnosableError, np.linalg.LinAlgError):
    """
    Raised when Gaussian elimination meets a pivot below the tolerance.

    It is catchable both as a `DiagnosableError` and as a standard `LinAlgError`.
    """
    details: str
    pivot_column: Optional[int] = None
    matrix_size: Optional[int] = None

    def __str__(self):
        column_str = f" at column {self.pivot_column}" if self.pivot_column is not None else ""
        return f"Singular matrix detected{column_str}: {self.details}"

    def get_diagnostic_report(self) -> str:
        """Generates the diagnostic report for a singular matrix error."""
        return format_diagnostic_report(
            error_type="Singular Matrix Encountered",
            details=self.details,
            suggestion="The circuit may be unsolvable. Look for a component or group of components with no path to the grounded source, or for power sources shorted together with conflicting voltages.",
            context={'matrix_size': f"{self.matrix_size} x {self.matrix_size}" if self.matrix_size else None}
        )
