# src/dcsim_core/simulation/mna.py

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

import numpy as np

from ..analysis.results import TopologyAnalysisResults
from ..components.base_enums import DCBehaviorType
from ..components.elements import DcBehavior, get_dc_behavior
from ..constants import TERMINAL_NEGATIVE, TERMINAL_POSITIVE
from ..data_structures import Component
from ..errors import FrameworkLogicError
from .config import DEFAULT_SOLVER_CONFIG, SolverConfig

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MnaSystem:
    """
    A fully stamped DC Modified Nodal Analysis system and the index bookkeeping
    needed to read its solution back.

    Unknown layout: indices [0, V) are the non-ground node voltages in increasing
    node-id order; indices [V, V + C) are the branch currents of the
    current-variable components in input order.
    """
    matrix: np.ndarray
    rhs: np.ndarray
    ground_node: int
    node_count: int
    node_index_map: Dict[int, int]
    current_index_map: Dict[int, int]
    behaviors: Tuple[DcBehavior, ...]
    component_nodes: Tuple[Optional[Tuple[int, int]], ...]

    @property
    def size(self) -> int:
        return self.matrix.shape[0]

    @property
    def voltage_var_count(self) -> int:
        return len(self.node_index_map)

    @property
    def current_var_count(self) -> int:
        return len(self.current_index_map)


class MnaAssembler:
    """
    Constructs the DC Modified Nodal Analysis system for a snapshot.

    It is responsible for:
    1.  Evaluating the DC model of every component.
    2.  Assigning a matrix index to each non-ground node and to each
        current-variable component (power sources, inductors, near-zero resistors).
    3.  Stamping every component into the dense coefficient matrix and the
        right-hand-side vector. Stamping only accumulates, so the order is irrelevant.
    """
    def __init__(
        self,
        components: Sequence[Component],
        topology: TopologyAnalysisResults,
        ground_node: int,
        config: SolverConfig = DEFAULT_SOLVER_CONFIG,
    ):
        self.components = tuple(components)
        self.topology = topology
        self.ground_node = ground_node
        self.config = config

        self.behaviors: Tuple[DcBehavior, ...] = tuple(
            get_dc_behavior(comp, short_threshold=config.short_threshold) for comp in self.components
        )
        self.component_nodes: Tuple[Optional[Tuple[int, int]], ...] = self._resolve_component_nodes()
        self.node_index_map: Dict[int, int] = self._assign_node_indices()
        self.current_index_map: Dict[int, int] = self._assign_current_indices()

        logger.debug(
            f"MNA Assembler initialized: {topology.node_count} nodes, ground node {ground_node}, "
            f"{len(self.node_index_map)} voltage and {len(self.current_index_map)} current unknowns."
        )

    @property
    def size(self) -> int:
        return len(self.node_index_map) + len(self.current_index_map)

    def _resolve_component_nodes(self) -> Tuple[Optional[Tuple[int, int]], ...]:
        resolved: List[Optional[Tuple[int, int]]] = []
        for position, comp in enumerate(self.components):
            n_neg = self.topology.node_of(position, TERMINAL_NEGATIVE)
            n_pos = self.topology.node_of(position, TERMINAL_POSITIVE)
            if n_neg is None or n_pos is None:
                logger.warning(f"Terminals of component '{comp.id}' could not be resolved to nodes; it will not be stamped.")
                resolved.append(None)
            else:
                resolved.append((n_neg, n_pos))
        return tuple(resolved)

    def _assign_node_indices(self) -> Dict[int, int]:
        """Maps every non-ground node id to a row/column index. (STATELESS)"""
        node_index_map: Dict[int, int] = {}
        for node_id in range(self.topology.node_count):
            if node_id != self.ground_node:
                node_index_map[node_id] = len(node_index_map)
        return node_index_map

    def _assign_current_indices(self) -> Dict[int, int]:
        """Maps each current-variable component position to its branch-current index."""
        offset = len(self.node_index_map)
        current_index_map: Dict[int, int] = {}
        for position, (behavior_type, _) in enumerate(self.behaviors):
            if behavior_type.needs_current_variable and self.component_nodes[position] is not None:
                current_index_map[position] = offset + len(current_index_map)
        return current_index_map

    def assemble(self) -> MnaSystem:
        """
        Stamps all components and returns the immutable MnaSystem. The matrix may be
        0 x 0, in which case there is nothing to solve.
        """
        size = self.size
        matrix = np.zeros((size, size), dtype=np.float64)
        rhs = np.zeros(size, dtype=np.float64)

        for position, comp in enumerate(self.components):
            nodes = self.component_nodes[position]
            if nodes is None:
                continue
            behavior_type, payload = self.behaviors[position]

            if behavior_type is DCBehaviorType.ADMITTANCE:
                self._stamp_conductance(matrix, nodes, payload)
            elif behavior_type is DCBehaviorType.SHORT_CIRCUIT:
                self._stamp_voltage_constraint(matrix, rhs, nodes, self.current_index_map[position], 0.0)
            elif behavior_type is DCBehaviorType.VOLTAGE_SOURCE:
                self._stamp_voltage_constraint(matrix, rhs, nodes, self.current_index_map[position], payload)
            elif behavior_type is DCBehaviorType.OPEN_CIRCUIT:
                continue
            else:
                raise FrameworkLogicError(f"Unhandled DC behavior {behavior_type!r} for component '{comp.id}'.")

        return MnaSystem(
            matrix=matrix,
            rhs=rhs,
            ground_node=self.ground_node,
            node_count=self.topology.node_count,
            node_index_map=dict(self.node_index_map),
            current_index_map=dict(self.current_index_map),
            behaviors=self.behaviors,
            component_nodes=self.component_nodes,
        )

    def _stamp_conductance(self, matrix: np.ndarray, nodes: Tuple[int, int], conductance: float) -> None:
        """Standard nodal-admittance stamp; terms on the ground row/column are omitted."""
        idx_neg = self.node_index_map.get(nodes[0])
        idx_pos = self.node_index_map.get(nodes[1])
        if idx_neg is not None:
            matrix[idx_neg, idx_neg] += conductance
        if idx_pos is not None:
            matrix[idx_pos, idx_pos] += conductance
        if idx_neg is not None and idx_pos is not None:
            matrix[idx_neg, idx_pos] -= conductance
            matrix[idx_pos, idx_neg] -= conductance

    def _stamp_voltage_constraint(
        self, matrix: np.ndarray, rhs: np.ndarray, nodes: Tuple[int, int], current_idx: int, voltage: float
    ) -> None:
        """Couples a branch current to its nodes and enforces V(pos) - V(neg) = voltage."""
        idx_neg = self.node_index_map.get(nodes[0])
        idx_pos = self.node_index_map.get(nodes[1])
        if idx_pos is not None:
            matrix[idx_pos, current_idx] += 1.0
            matrix[current_idx, idx_pos] += 1.0
        if idx_neg is not None:
            matrix[idx_neg, current_idx] -= 1.0
            matrix[current_idx, idx_neg] -= 1.0
        rhs[current_idx] = voltage
