# src/dcsim_core/simulation/execution.py
"""
Provides the primary public API functions for running a DC solve.

This module is a thin facade over the pipeline:

    TopologyAnalyzer -> select_ground -> MnaAssembler -> solve_linear_system -> map_readings

Every entry point is a pure function of the snapshot it receives. It keeps no
state between calls and never raises for a well-formed snapshot: the outcome of
the solve (including failure) is encoded in the returned result.
"""
import logging
from typing import Dict, Optional, Sequence, Tuple

from ..analysis import TopologyAnalyzer, select_ground
from ..data_structures import CircuitSnapshot, Component, Connection
from ..validation import SnapshotValidator
from .config import DEFAULT_SOLVER_CONFIG, SolverConfig
from .exceptions import SingularMatrixError
from .mna import MnaAssembler
from .readings import map_readings, zero_readings
from .results import DCSimulationResult, SimulationStatus
from .solver import solve_linear_system

logger = logging.getLogger(__name__)


def run_dc_analysis(
    components: Sequence[Component],
    connections: Sequence[Connection],
    config: Optional[SolverConfig] = None,
) -> DCSimulationResult:
    """
    Solves the DC steady state of a schematic snapshot.

    Args:
        components: The ordered component list. The first power source in this
                    order fixes the ground node.
        connections: The wires between component terminals.
        config: Optional numerical thresholds. Defaults to `DEFAULT_SOLVER_CONFIG`.

    Returns:
        A `DCSimulationResult`. Its readings are empty for an empty snapshot or a
        singular system, and otherwise hold exactly one entry per component id.
    """
    effective_config = config if config is not None else DEFAULT_SOLVER_CONFIG
    components = tuple(components)
    connections = tuple(connections)

    issues = tuple(SnapshotValidator(components, connections, effective_config.short_threshold).validate())

    if not components:
        logger.debug("Snapshot has no components; nothing to simulate.")
        return DCSimulationResult(status=SimulationStatus.EMPTY_CIRCUIT, readings={}, issues=issues)

    topology = TopologyAnalyzer(components, connections).analyze()

    ground = select_ground(components, topology)
    if ground is None:
        logger.debug("No power source found; reporting every component at 0 V / 0 A.")
        return DCSimulationResult(status=SimulationStatus.NO_DRIVE, readings=zero_readings(components), issues=issues)

    assembler = MnaAssembler(components, topology, ground.node, effective_config)
    if assembler.size == 0:
        logger.debug("MNA system has no unknowns; reporting every component at 0 V / 0 A.")
        return DCSimulationResult(status=SimulationStatus.UNDRIVEN, readings=zero_readings(components), issues=issues)

    system = assembler.assemble()
    try:
        solution = solve_linear_system(system.matrix, system.rhs, effective_config.pivot_tolerance)
    except SingularMatrixError as e:
        logger.error(f"Simulation failed, circuit may be unsolvable: {e}")
        logger.debug(e.get_diagnostic_report())
        return DCSimulationResult(status=SimulationStatus.SINGULAR, readings={}, issues=issues)

    readings = map_readings(components, system, solution)
    logger.debug(f"DC analysis solved {system.size} unknown(s) for {len(components)} component(s).")
    return DCSimulationResult(status=SimulationStatus.SOLVED, readings=readings, issues=issues)


def run_simulation(
    components: Sequence[Component],
    connections: Sequence[Connection],
    config: Optional[SolverConfig] = None,
) -> Dict[str, Dict[str, float]]:
    """
    The editor-facing entry point: returns `{component id: {"voltage", "current"}}`,
    or an empty mapping when the solve failed.
    """
    return run_dc_analysis(components, connections, config).as_dict()


def simulate_snapshot(snapshot: CircuitSnapshot, config: Optional[SolverConfig] = None) -> DCSimulationResult:
    """Runs `run_dc_analysis` on a `CircuitSnapshot`."""
    return run_dc_analysis(snapshot.components, snapshot.connections, config)


def apply_results(components: Sequence[Component], result: DCSimulationResult) -> Tuple[Component, ...]:
    """
    Writes the readings of a result back onto the components.

    On a failed solve the components are returned unchanged, so the editor keeps
    showing its previous readings.
    """
    if not result.succeeded:
        logger.warning(f"Simulation did not succeed (status {result.status}); leaving components unchanged.")
        return tuple(components)
    return tuple(
        comp.with_reading(result.readings[comp.id]) if comp.id in result.readings else comp
        for comp in components
    )
