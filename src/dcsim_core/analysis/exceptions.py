# src/dcsim_core/analysis/exceptions.py
"""
Defines custom, diagnosable exceptions for the analysis services.
"""
from dataclasses import dataclass
from ..errors import Diagnosable, format_diagnostic_report


@dataclass()
class TopologyAnalysisError(ValueError, Diagnosable):
    """Custom exception for unexpected failures while partitioning terminals into nodes."""
    details: str

    def __str__(self):
        return self.details

    def get_diagnostic_report(self) -> str:
        return format_diagnostic_report(
            error_type="Topological Analysis Error",
            details=self.details,
            suggestion="This indicates malformed component or connection objects (e.g., a wire endpoint that is not a ConnectionPoint) or an internal error.",
            context={}
        )
