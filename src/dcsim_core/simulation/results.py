# src/dcsim_core/simulation/results.py
"""
Defines the formal, type-safe data contracts for DC simulation results.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Mapping, Tuple

from ..validation.issues import ValidationIssue


class SimulationStatus(Enum):
    """How a solve ended. Only SINGULAR and EMPTY_CIRCUIT produce an empty mapping."""
    SOLVED = "SOLVED"
    EMPTY_CIRCUIT = "EMPTY_CIRCUIT"
    NO_DRIVE = "NO_DRIVE"
    UNDRIVEN = "UNDRIVEN"
    SINGULAR = "SINGULAR"

    def __str__(self):
        return self.value


@dataclass(frozen=True)
class ComponentReading:
    """Steady-state magnitudes of the voltage across and the current through one component."""
    voltage: float
    current: float

    def as_dict(self) -> Dict[str, float]:
        return {"voltage": self.voltage, "current": self.current}


ZERO_READING = ComponentReading(voltage=0.0, current=0.0)


@dataclass(frozen=True)
class DCSimulationResult:
    """
    The result of one DC solve.

    Attributes:
        status: How the solve ended.
        readings: Component id -> reading. Either empty (SINGULAR, EMPTY_CIRCUIT) or
                  keyed by exactly the set of input component ids.
        issues: Non-fatal findings about the snapshot (dangling wires, shorts, ...).
    """
    status: SimulationStatus
    readings: Mapping[str, ComponentReading]
    issues: Tuple[ValidationIssue, ...] = field(default_factory=tuple)

    @property
    def succeeded(self) -> bool:
        return bool(self.readings)

    def as_dict(self) -> Dict[str, Dict[str, float]]:
        """The plain `{id: {"voltage": v, "current": i}}` mapping handed to the editor."""
        return {comp_id: reading.as_dict() for comp_id, reading in self.readings.items()}

    def issues_at_level(self, level) -> List[ValidationIssue]:
        return [issue for issue in self.issues if issue.level == level]
