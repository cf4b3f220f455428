# src/dcsim_core/errors.py
import logging
from abc import abstractmethod
from typing import Any, Dict, Protocol, runtime_checkable

logger = logging.getLogger(__name__)

# --- User-Facing Exception Hierarchy ---

class DcsimError(Exception):
    """Base class for all custom, user-facing errors in DCSim Core."""
    pass

class FrameworkLogicError(DcsimError):
    """
    Raised when an internal contract of the solver pipeline is violated. This
    always indicates a bug in DCSim Core itself, never a problem with the circuit.
    """
    pass


# --- Diagnostic Protocol & Base Exception ---

@runtime_checkable
class Diagnosable(Protocol):
    """
    A protocol for exceptions that can generate their own rich diagnostic report.
    """
    def get_diagnostic_report(self) -> str:
        """Generates a complete, user-friendly, multi-line report string."""
        ...

class DiagnosableError(Exception, Diagnosable):
    """
    A common, concrete base class for all internal exceptions that are diagnosable.

    It is a plain `Exception`, so it can be caught in `except` clauses. Every
    subclass overrides `get_diagnostic_report` to explain itself to a user.
    """
    @abstractmethod
    def get_diagnostic_report(self) -> str:
        """
        Abstract method to generate the diagnostic report.
        Subclasses MUST implement this.
        """
        raise NotImplementedError


# --- Stateless Formatting Utility ---

# Context keys shown in the report header, in display order.
_CONTEXT_LABELS = (
    ("component_id", "Component"),
    ("connection_id", "Connection"),
    ("source", "Source"),
    ("user_input", "User Input"),
    ("matrix_size", "Matrix Size"),
)
_BANNER_WIDTH = 72


def _indented(text: str) -> list:
    return [f"  {line}" for line in text.splitlines()]


def format_diagnostic_report(
    error_type: str,
    details: str,
    suggestion: str,
    context: Dict[str, Any]
) -> str:
    """
    Builds the multi-line report every diagnosable error returns, so that all
    user-facing diagnostics share one layout.

    Args:
        error_type: The high-level category of the error (e.g., "Singular Matrix").
        details: A detailed, potentially multi-line description of the problem.
        suggestion: Actionable advice for the user to resolve the issue. May be empty.
        context: Extra facts for the header. Only the keys in `_CONTEXT_LABELS`
                 with a truthy value are shown.

    Returns:
        The report, ready for display.
    """
    lines = ["", " DCSim Core: Diagnostic Report ".center(_BANNER_WIDTH, "="), f"{'Error Type:':<16}{error_type}"]
    for key, label in _CONTEXT_LABELS:
        value = context.get(key)
        if not value:
            continue
        shown = f"'{value}'" if key == "user_input" else value
        lines.append(f"{label + ':':<16}{shown}")

    lines.append("")
    lines.append("Details:")
    lines.extend(_indented(details))

    if suggestion:
        lines.append("")
        lines.append("Suggestion:")
        lines.extend(_indented(suggestion))

    lines.append("=" * _BANNER_WIDTH)
    return "\n".join(lines)
