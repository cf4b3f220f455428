# src/dcsim_core/analysis/topology.py

"""
Partitions component terminals into electrical nodes.
"""

import logging
from typing import Dict, List, Sequence, Tuple, FrozenSet

import networkx as nx

from ..constants import TERMINAL_INDICES
from ..data_structures import Component, Connection, ConnectionPoint
from .exceptions import TopologyAnalysisError
from .results import TopologyAnalysisResults

logger = logging.getLogger(__name__)


class TopologyAnalyzer:
    """
    Builds the terminal connectivity graph of a schematic snapshot and splits it into
    electrical nodes. This is a stateless service: every call to `analyze` works
    only on the snapshot given to the constructor.
    """
    def __init__(self, components: Sequence[Component], connections: Sequence[Connection]):
        """
        Initializes the TopologyAnalyzer service.

        Args:
            components: The ordered component list of the snapshot.
            connections: The wires of the snapshot.
        """
        self.components: Tuple[Component, ...] = tuple(components)
        self.connections: Tuple[Connection, ...] = tuple(connections)
        logger.debug(
            f"TopologyAnalyzer initialized with {len(self.components)} components "
            f"and {len(self.connections)} connections."
        )

    def analyze(self) -> TopologyAnalysisResults:
        """
        Performs the full partition. This step cannot fail for well-formed inputs: an
        empty or fully disconnected snapshot simply yields singleton nodes.

        Returns:
            The formal, immutable TopologyAnalysisResults for this snapshot.
        """
        try:
            component_terminal_ids = self._assign_terminal_ids()
            terminal_graph, dangling_points = self._build_terminal_graph(component_terminal_ids)
            nodes, terminal_to_node = self._partition_nodes(terminal_graph, component_terminal_ids)
        except (AttributeError, TypeError) as e:
            raise TopologyAnalysisError(
                details=f"An unexpected error occurred during topology analysis: {e}"
            ) from e

        logger.debug(
            f"Topology analysis found {len(nodes)} electrical node(s) "
            f"({len(dangling_points)} dangling wire endpoint(s))."
        )
        return TopologyAnalysisResults(
            nodes=nodes,
            terminal_to_node=terminal_to_node,
            component_terminal_ids=component_terminal_ids,
            dangling_points=dangling_points,
        )

    # --- Stateless Helper Methods ---

    def _assign_terminal_ids(self) -> Tuple[Tuple[int, int], ...]:
        """
        Gives each component position its two terminal ids (2*i, 2*i + 1). A repeated
        component id shares the terminals of its first occurrence, since wires can
        only address components by id.
        """
        first_position: Dict[str, int] = {}
        terminal_ids: List[Tuple[int, int]] = []
        for position, comp in enumerate(self.components):
            owner = first_position.setdefault(comp.id, position)
            terminal_ids.append((2 * owner, 2 * owner + 1))
        return tuple(terminal_ids)

    def _build_terminal_graph(
        self, component_terminal_ids: Tuple[Tuple[int, int], ...]
    ) -> Tuple[nx.Graph, Tuple[ConnectionPoint, ...]]:
        """Adds one undirected edge per wire between the two endpoint terminals. (STATELESS)"""
        terminal_graph = nx.Graph()
        for ids in component_terminal_ids:
            terminal_graph.add_nodes_from(ids)

        id_lookup: Dict[Tuple[str, int], int] = {}
        for comp, ids in zip(self.components, component_terminal_ids):
            for terminal_index in TERMINAL_INDICES:
                id_lookup.setdefault((comp.id, terminal_index), ids[terminal_index])

        # Endpoints naming no real terminal still act as junctions between wires.
        next_dangling_id = 2 * len(self.components)
        dangling_points: List[ConnectionPoint] = []
        for conn in self.connections:
            endpoint_ids = []
            for point in conn.endpoints():
                key = (point.component_id, point.terminal_index)
                if key not in id_lookup:
                    id_lookup[key] = next_dangling_id
                    next_dangling_id += 1
                    dangling_points.append(point)
                    logger.debug(f"Wire '{conn.id}' references unknown terminal {key}.")
                endpoint_ids.append(id_lookup[key])
            terminal_graph.add_edge(*endpoint_ids)
        return terminal_graph, tuple(dangling_points)

    def _partition_nodes(
        self, terminal_graph: nx.Graph, component_terminal_ids: Tuple[Tuple[int, int], ...]
    ) -> Tuple[Tuple[FrozenSet[int], ...], Dict[int, int]]:
        """
        Walks the component terminals in input order and collects the connected
        component of every terminal not seen yet. (STATELESS)
        """
        nodes: List[FrozenSet[int]] = []
        terminal_to_node: Dict[int, int] = {}
        for ids in component_terminal_ids:
            for terminal_id in ids:
                if terminal_id in terminal_to_node:
                    continue
                members = frozenset(nx.node_connected_component(terminal_graph, terminal_id))
                node_id = len(nodes)
                nodes.append(members)
                for member in members:
                    terminal_to_node[member] = node_id
        return tuple(nodes), terminal_to_node
