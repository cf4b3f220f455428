# src/dcsim_core/parser/exceptions.py
"""
Defines custom, diagnosable exceptions for snapshot loading and schema validation.

`ParsingError` covers unreadable sources and invalid YAML/JSON syntax;
`SchemaValidationError` covers documents that load but do not have the structure
of a circuit snapshot.
"""
from dataclasses import dataclass
from typing import Dict, Any

from ..errors import DiagnosableError, format_diagnostic_report


class BaseParsingError(DiagnosableError):
    """
    A local, concrete base class for all snapshot parsing and schema validation errors.
    """
    def get_diagnostic_report(self) -> str:
        return format_diagnostic_report(
            error_type="Generic Parsing Error",
            details=str(self),
            suggestion="Please check the format and content of the circuit snapshot.",
            context={}
        )


@dataclass(frozen=True)
class ParsingError(BaseParsingError):
    """
    Raised when the snapshot source cannot be read or is not valid YAML/JSON.
    """
    details: str
    source: str

    def __str__(self):
        return f"Parsing error in '{self.source}': {self.details}"

    def get_diagnostic_report(self) -> str:
        return format_diagnostic_report(
            error_type="Snapshot Parsing or File Error",
            details=self.details,
            suggestion="Ensure the source exists, is readable, and contains a valid YAML or JSON mapping.",
            context={'source': self.source}
        )


@dataclass(frozen=True)
class SchemaValidationError(BaseParsingError):
    """
    Raised when the loaded document does not conform to the snapshot schema (e.g.,
    a missing component id, an unknown component type, or a malformed wire endpoint).
    """
    errors: Dict[str, Any]
    source: str

    def __str__(self):
        error_lines = [f"  - In field '{k}': {v}" for k, v in sorted(self.errors.items())]
        return (
            f"Snapshot schema validation failed for '{self.source}':\n"
            + "\n".join(error_lines)
        )

    def get_diagnostic_report(self) -> str:
        error_list_str = "\n".join(f"  - Field '{k}': {v}" for k, v in sorted(self.errors.items()))
        details = (
            "The structure of the snapshot does not conform to the required schema.\n"
            f"See details for {len(self.errors)} issue(s) below:\n\n{error_list_str}"
        )
        return format_diagnostic_report(
            error_type="Snapshot Schema Validation Error",
            details=details,
            suggestion="Correct the specified fields. Every component needs an 'id' and a 'type'; every connection needs an 'id' and 'start'/'end' points with 'componentId' and 'terminalIndex'.",
            context={'source': self.source}
        )
