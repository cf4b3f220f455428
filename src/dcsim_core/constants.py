# --- src/dcsim_core/constants.py ---
import logging

logger = logging.getLogger(__name__)

# --- Numerical Constants for the DC Solver ---

#: Resistances below this value are modeled as ideal shorts (a 0 V constraint with
#: its own branch-current unknown) instead of a 1/R conductance stamp.
#: Value: 1e-9 ohm.
SHORT_RESISTANCE_THRESHOLD_OHMS: float = 1.0e-9

#: Smallest pivot magnitude accepted by the Gaussian elimination. Anything below
#: this after partial pivoting marks the MNA system as singular.
PIVOT_TOLERANCE: float = 1.0e-9

#: The two terminal indices every component exposes. Terminal 0 is the reference
#: (negative) side, terminal 1 the positive side.
TERMINAL_NEGATIVE: int = 0
TERMINAL_POSITIVE: int = 1
TERMINAL_INDICES = (TERMINAL_NEGATIVE, TERMINAL_POSITIVE)

logger.debug("Defined core constants: SHORT_RESISTANCE_THRESHOLD_OHMS, PIVOT_TOLERANCE")
