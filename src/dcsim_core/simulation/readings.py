# src/dcsim_core/simulation/readings.py
import logging
from typing import Dict, Sequence

import numpy as np

from ..components.base_enums import DCBehaviorType
from ..data_structures import Component
from ..errors import FrameworkLogicError
from .mna import MnaSystem
from .results import ComponentReading, ZERO_READING

logger = logging.getLogger(__name__)


def zero_readings(components: Sequence[Component]) -> Dict[str, ComponentReading]:
    """Reports every component at 0 V / 0 A (the undriven-network outcome)."""
    return {comp.id: ZERO_READING for comp in components}


def node_voltages(system: MnaSystem, solution: np.ndarray) -> np.ndarray:
    """Per-node voltage table; the ground node is fixed at 0 V."""
    voltages = np.zeros(system.node_count, dtype=np.float64)
    for node_id, matrix_idx in system.node_index_map.items():
        voltages[node_id] = solution[matrix_idx]
    return voltages


def map_readings(
    components: Sequence[Component], system: MnaSystem, solution: np.ndarray
) -> Dict[str, ComponentReading]:
    """
    Converts the solved unknown vector into one reading per component.

    Voltage is always |V(terminal 1) - V(terminal 0)|. Current is the magnitude of the
    branch-current unknown for shorts and sources, V / R for ordinary resistors, and
    0 for open circuits. Components whose terminals did not resolve read 0 / 0.
    """
    voltages = node_voltages(system, solution)
    readings: Dict[str, ComponentReading] = {}

    for position, comp in enumerate(components):
        nodes = system.component_nodes[position]
        if nodes is None:
            readings[comp.id] = ZERO_READING
            continue

        voltage = abs(float(voltages[nodes[1]] - voltages[nodes[0]]))
        behavior_type, _ = system.behaviors[position]

        if behavior_type in (DCBehaviorType.SHORT_CIRCUIT, DCBehaviorType.VOLTAGE_SOURCE):
            current = abs(float(solution[system.current_index_map[position]]))
        elif behavior_type is DCBehaviorType.ADMITTANCE:
            current = voltage / comp.value
        elif behavior_type is DCBehaviorType.OPEN_CIRCUIT:
            current = 0.0
        else:
            raise FrameworkLogicError(f"Unhandled DC behavior {behavior_type!r} for component '{comp.id}'.")

        readings[comp.id] = ComponentReading(voltage=voltage, current=current)

    logger.debug(f"Mapped readings for {len(readings)} component(s).")
    return readings
