# src/dcsim_core/validation/__init__.py
import logging
logger = logging.getLogger(__name__)

from .issues import ValidationIssue, ValidationIssueLevel
from .issue_codes import SnapshotIssueCode
from .snapshot_validator import SnapshotValidator

__all__ = [
    "ValidationIssue",
    "ValidationIssueLevel",
    "SnapshotIssueCode",
    "SnapshotValidator",
]
