# src/dcsim_core/analysis/results.py
"""
Defines the formal, type-safe data contracts for the results of the analysis services.

The results are immutable, frozen dataclasses so that a partition computed for one
solve cannot be modified by a later pipeline stage.
"""
from dataclasses import dataclass
from typing import Dict, FrozenSet, Optional, Tuple

from ..data_structures import ConnectionPoint


@dataclass(frozen=True)
class TopologyAnalysisResults:
    """
    The partition of all component terminals into electrical nodes.

    Terminals are identified by small integers: the terminal `t` of the component at
    position `i` in the input list is `2 * i + t`. Wire endpoints that do not name a
    real terminal (an unknown component id or a terminal index outside {0, 1}) receive
    ids from `2 * len(components)` upwards and are listed in `dangling_points`.

    Node ids are assigned in order of first appearance while walking the component
    list, terminal 0 before terminal 1.
    """
    nodes: Tuple[FrozenSet[int], ...]
    terminal_to_node: Dict[int, int]
    component_terminal_ids: Tuple[Tuple[int, int], ...]
    dangling_points: Tuple[ConnectionPoint, ...]

    @property
    def node_count(self) -> int:
        return len(self.nodes)

    def node_of(self, component_position: int, terminal_index: int) -> Optional[int]:
        """Returns the node of a component terminal, or None if it cannot be resolved."""
        try:
            terminal_id = self.component_terminal_ids[component_position][terminal_index]
        except IndexError:
            return None
        return self.terminal_to_node.get(terminal_id)


@dataclass(frozen=True)
class GroundSelection:
    """
    The reference node chosen for a solve. `source_id` names the power source whose
    negative terminal fixed the ground.
    """
    node: int
    source_id: str
