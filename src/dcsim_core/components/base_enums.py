# src/dcsim_core/components/base_enums.py
from enum import Enum, auto


class DCBehaviorType(Enum):
    """
    Defines the different ways a component can behave in DC steady state, which is
    queried by the MNA formulator and the result mapper.
    """
    ADMITTANCE = auto()      # Ordinary conductance stamped into the node-voltage block.
    SHORT_CIRCUIT = auto()   # Ideal short: 0 V constraint with its own branch-current unknown.
    VOLTAGE_SOURCE = auto()  # Ideal source: fixed voltage constraint with a branch-current unknown.
    OPEN_CIRCUIT = auto()    # Never stamped (e.g., a capacitor at DC or a probe).

    @property
    def needs_current_variable(self) -> bool:
        return self in (DCBehaviorType.SHORT_CIRCUIT, DCBehaviorType.VOLTAGE_SOURCE)
