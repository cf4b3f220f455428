# src/dcsim_core/simulation/__init__.py
from .exceptions import SingularMatrixError
from .config import SolverConfig, ConfigError, DEFAULT_SOLVER_CONFIG
from .mna import MnaAssembler, MnaSystem
from .solver import solve_linear_system
from .readings import map_readings, zero_readings, node_voltages
from .results import ComponentReading, DCSimulationResult, SimulationStatus, ZERO_READING
from .execution import run_dc_analysis, run_simulation, simulate_snapshot, apply_results

__all__ = [
    # Exceptions
    "SingularMatrixError",
    "ConfigError",
    # Configuration
    "SolverConfig",
    "DEFAULT_SOLVER_CONFIG",
    # Core Classes
    "MnaAssembler",
    "MnaSystem",
    "solve_linear_system",
    "map_readings",
    "zero_readings",
    "node_voltages",
    # Results
    "ComponentReading",
    "DCSimulationResult",
    "SimulationStatus",
    "ZERO_READING",
    # Entry Points
    "run_dc_analysis",
    "run_simulation",
    "simulate_snapshot",
    "apply_results",
]
