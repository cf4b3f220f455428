# src/dcsim_core/__init__.py
import logging
from .log_config import setup_logging

setup_logging()
logger = logging.getLogger(__name__)
logger.debug("DCSim Core package initialized.")

from .data_structures import Component, ComponentType, Connection, ConnectionPoint, CircuitSnapshot
from .units import ureg, Quantity, parse_component_value, format_component_value, format_reading
from .components import DCBehaviorType, ComponentValueError, register_dc_behavior, get_dc_behavior
from .analysis import TopologyAnalyzer, TopologyAnalysisResults, select_ground, TopologyAnalysisError
from .simulation import (
    run_dc_analysis, run_simulation, simulate_snapshot, apply_results,
    ComponentReading, DCSimulationResult, SimulationStatus, SolverConfig,
    MnaAssembler, solve_linear_system, SingularMatrixError,
)
from .validation import SnapshotValidator, ValidationIssue, ValidationIssueLevel, SnapshotIssueCode
from .parser import SnapshotParser, ParsingError, SchemaValidationError
from .errors import DcsimError, FrameworkLogicError, DiagnosableError

__all__ = [
    # Data Structures
    "Component", "ComponentType", "Connection", "ConnectionPoint", "CircuitSnapshot",
    # Units
    "ureg", "Quantity", "parse_component_value", "format_component_value", "format_reading",
    # Component DC Models
    "DCBehaviorType", "ComponentValueError", "register_dc_behavior", "get_dc_behavior",
    # Analysis
    "TopologyAnalyzer", "TopologyAnalysisResults", "select_ground", "TopologyAnalysisError",
    # Simulation
    "run_dc_analysis", "run_simulation", "simulate_snapshot", "apply_results",
    "ComponentReading", "DCSimulationResult", "SimulationStatus", "SolverConfig",
    "MnaAssembler", "solve_linear_system", "SingularMatrixError",
    # Validation
    "SnapshotValidator", "ValidationIssue", "ValidationIssueLevel", "SnapshotIssueCode",
    # Parser
    "SnapshotParser", "ParsingError", "SchemaValidationError",
    # Errors
    "DcsimError", "FrameworkLogicError", "DiagnosableError",
]
