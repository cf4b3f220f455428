# src/dcsim_core/analysis/__init__.py
"""
Defines the public interface for the analysis services package: the terminal
partitioning, the ground selection and their formal result contracts.
"""
from .results import TopologyAnalysisResults, GroundSelection
from .topology import TopologyAnalyzer
from .ground import select_ground
from .exceptions import TopologyAnalysisError

__all__ = [
    # Formal Result Contracts
    "TopologyAnalysisResults",
    "GroundSelection",
    # Analysis Services
    "TopologyAnalyzer",
    "select_ground",
    # Exceptions
    "TopologyAnalysisError",
]
