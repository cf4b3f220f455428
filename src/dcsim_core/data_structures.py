# src/dcsim_core/data_structures.py
from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Iterator, Optional, Tuple, TYPE_CHECKING

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from .simulation.results import ComponentReading


class ComponentType(Enum):
    """
    The closed set of component kinds the schematic editor can place. The enum
    values are the tags used in serialized snapshots.
    """
    RESISTOR = "RESISTOR"
    CAPACITOR = "CAPACITOR"
    INDUCTOR = "INDUCTOR"
    POWER_SOURCE = "POWER_SOURCE"
    OSCILLOSCOPE = "OSCILLOSCOPE"

    def __str__(self):
        return self.value


@dataclass(frozen=True)
class Component:
    """
    A two-terminal schematic component as handed over by the editor.

    `value` is the resistance, capacitance, inductance or source voltage, in the
    unit implied by `type` (see `units.VALUE_UNITS`). `voltage` and `current` are
    the readings from the last simulation and stay `None` until one has run.
    Terminal 0 is the reference (negative) side, terminal 1 the positive side.
    """
    id: str
    type: ComponentType
    value: float = 0.0
    voltage: Optional[float] = None
    current: Optional[float] = None

    @property
    def is_simulated(self) -> bool:
        return self.voltage is not None and self.current is not None

    def with_reading(self, reading: ComponentReading) -> Component:
        """Returns a copy carrying the given simulation reading."""
        return replace(self, voltage=reading.voltage, current=reading.current)

    def cleared(self) -> Component:
        """Returns a copy with the simulation reading discarded."""
        return replace(self, voltage=None, current=None)


@dataclass(frozen=True)
class ConnectionPoint:
    """Identifies one terminal: (component id, terminal index 0 or 1)."""
    component_id: str
    terminal_index: int


@dataclass(frozen=True)
class Connection:
    """
    An undirected, zero-resistance wire between two terminals. Wires define
    electrical equivalence only; they never carry a current unknown of their own.
    """
    id: str
    start: ConnectionPoint
    end: ConnectionPoint

    def endpoints(self) -> Iterator[ConnectionPoint]:
        yield self.start
        yield self.end


@dataclass(frozen=True)
class CircuitSnapshot:
    """
    An immutable snapshot of the editor state that the solver consumes: the
    ordered component list and the wire list.
    """
    components: Tuple[Component, ...] = field(default_factory=tuple)
    connections: Tuple[Connection, ...] = field(default_factory=tuple)

    def __post_init__(self):
        # Accept any iterable but always store tuples so the snapshot stays hashable.
        object.__setattr__(self, "components", tuple(self.components))
        object.__setattr__(self, "connections", tuple(self.connections))

    @property
    def component_ids(self) -> Tuple[str, ...]:
        return tuple(comp.id for comp in self.components)
