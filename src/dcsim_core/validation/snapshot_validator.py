# src/dcsim_core/validation/snapshot_validator.py
import logging
from collections import Counter
from typing import List, Sequence

from ..constants import SHORT_RESISTANCE_THRESHOLD_OHMS, TERMINAL_INDICES
from ..data_structures import Component, ComponentType, Connection
from .issues import ValidationIssue, ValidationIssueLevel
from .issue_codes import SnapshotIssueCode

logger = logging.getLogger(__name__)


class SnapshotValidator:
    """
    Inspects a circuit snapshot for inconsistencies the editor may have produced.

    None of the findings stop a solve. The validator reports how the solver is going
    to interpret the snapshot: which wires reference nothing, which components are
    modeled as ideal shorts or opens, and so on.
    """

    def __init__(
        self,
        components: Sequence[Component],
        connections: Sequence[Connection],
        short_threshold: float = SHORT_RESISTANCE_THRESHOLD_OHMS,
    ):
        self.components = tuple(components)
        self.connections = tuple(connections)
        self.short_threshold = short_threshold
        self.issues: List[ValidationIssue] = []

    def validate(self) -> List[ValidationIssue]:
        """
        Runs every check and returns all issues found (warnings and info messages).
        """
        self.issues = []
        self._check_component_ids()
        self._check_component_values()
        self._check_connections()

        if self.issues:
            warnings = sum(1 for i in self.issues if i.level == ValidationIssueLevel.WARNING)
            infos = sum(1 for i in self.issues if i.level == ValidationIssueLevel.INFO)
            logger.debug(f"Snapshot validation found {warnings} warnings, {infos} info messages.")
        return self.issues

    def _add_issue(self, level: ValidationIssueLevel, code_enum: SnapshotIssueCode, **kwargs):
        """A helper to create and add a ValidationIssue with full context."""
        message = code_enum.format_message(**kwargs)
        issue = ValidationIssue(
            level=level, code=code_enum.code, message=message,
            component_id=kwargs.get('component_id'), connection_id=kwargs.get('connection_id'),
            details=kwargs,
        )
        if level == ValidationIssueLevel.WARNING:
            logger.warning(str(issue))
        self.issues.append(issue)

    def _check_component_ids(self):
        counts = Counter(comp.id for comp in self.components)
        for comp_id, count in counts.items():
            if count > 1:
                self._add_issue(ValidationIssueLevel.WARNING, SnapshotIssueCode.COMP_DUPLICATE_ID,
                                component_id=comp_id, count=count)

    def _check_component_values(self):
        for comp in self.components:
            if comp.type in (ComponentType.RESISTOR, ComponentType.POWER_SOURCE) and comp.value < 0:
                self._add_issue(ValidationIssueLevel.WARNING, SnapshotIssueCode.COMP_NEGATIVE_VALUE,
                                component_id=comp.id, component_type=str(comp.type), value=comp.value)

            if comp.type is ComponentType.RESISTOR and comp.value < self.short_threshold:
                self._add_issue(ValidationIssueLevel.INFO, SnapshotIssueCode.DC_INFO_SHORT_R0,
                                component_id=comp.id, value_str=f"{comp.value:g} ohm")
            elif comp.type is ComponentType.INDUCTOR:
                self._add_issue(ValidationIssueLevel.INFO, SnapshotIssueCode.DC_INFO_SHORT_L, component_id=comp.id)
            elif comp.type is ComponentType.CAPACITOR:
                self._add_issue(ValidationIssueLevel.INFO, SnapshotIssueCode.DC_INFO_OPEN_C, component_id=comp.id)
            elif comp.type is ComponentType.OSCILLOSCOPE:
                self._add_issue(ValidationIssueLevel.INFO, SnapshotIssueCode.DC_INFO_PROBE, component_id=comp.id)

    def _check_connections(self):
        known_ids = {comp.id for comp in self.components}
        for conn in self.connections:
            for point in conn.endpoints():
                if point.component_id not in known_ids:
                    self._add_issue(ValidationIssueLevel.WARNING, SnapshotIssueCode.CONN_DANGLING_COMPONENT,
                                    connection_id=conn.id, component_id=point.component_id,
                                    terminal_index=point.terminal_index)
                elif point.terminal_index not in TERMINAL_INDICES:
                    self._add_issue(ValidationIssueLevel.WARNING, SnapshotIssueCode.CONN_BAD_TERMINAL,
                                    connection_id=conn.id, component_id=point.component_id,
                                    terminal_index=point.terminal_index)
            if conn.start == conn.end:
                self._add_issue(ValidationIssueLevel.INFO, SnapshotIssueCode.CONN_SELF_LOOP,
                                connection_id=conn.id, component_id=conn.start.component_id,
                                terminal_index=conn.start.terminal_index)
