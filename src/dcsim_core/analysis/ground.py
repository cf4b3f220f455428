# src/dcsim_core/analysis/ground.py
import logging
from typing import Optional, Sequence

from ..constants import TERMINAL_NEGATIVE
from ..data_structures import Component, ComponentType
from .results import GroundSelection, TopologyAnalysisResults

logger = logging.getLogger(__name__)


def select_ground(
    components: Sequence[Component], topology: TopologyAnalysisResults
) -> Optional[GroundSelection]:
    """
    Picks the reference node of the nodal system.

    The ground is the node holding the negative terminal of the first power source
    in input order. Returns None when the snapshot has no power source, which means
    the network is undriven and every reading is zero.
    """
    for position, comp in enumerate(components):
        if comp.type is not ComponentType.POWER_SOURCE:
            continue
        node = topology.node_of(position, TERMINAL_NEGATIVE)
        if node is None:
            logger.warning(f"Negative terminal of source '{comp.id}' has no node; falling back to node 0.")
            node = 0
        logger.debug(f"Ground fixed at node {node} by power source '{comp.id}'.")
        return GroundSelection(node=node, source_id=comp.id)

    logger.debug("No power source in snapshot; network is passive.")
    return None
