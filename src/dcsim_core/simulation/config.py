# src/dcsim_core/simulation/config.py
import logging
from dataclasses import dataclass

from ..constants import PIVOT_TOLERANCE, SHORT_RESISTANCE_THRESHOLD_OHMS

logger = logging.getLogger(__name__)


class ConfigError(ValueError):
    """Custom exception for invalid solver configuration values."""
    pass


@dataclass(frozen=True)
class SolverConfig:
    """
    Numerical thresholds used by one solve.

    Attributes:
        short_threshold: Resistances below this (in ohms) are modeled as ideal shorts.
        pivot_tolerance: Pivots smaller than this in magnitude mark the system singular.
    """
    short_threshold: float = SHORT_RESISTANCE_THRESHOLD_OHMS
    pivot_tolerance: float = PIVOT_TOLERANCE

    def __post_init__(self):
        if not self.pivot_tolerance > 0:
            raise ConfigError(f"pivot_tolerance must be positive, got {self.pivot_tolerance!r}.")
        if not self.short_threshold > 0:
            raise ConfigError(f"short_threshold must be positive, got {self.short_threshold!r}.")


DEFAULT_SOLVER_CONFIG = SolverConfig()
