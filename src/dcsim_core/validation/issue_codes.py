# src/dcsim_core/validation/issue_codes.py
import logging
from enum import Enum

logger = logging.getLogger(__name__)


class SnapshotIssueCode(Enum):
    """
    Registry of snapshot issue codes and their message templates.
    Each enum member's value is a tuple: (code_str, message_template_str).
    """

    # --- Connection Issues (CONN_...) ---
    CONN_DANGLING_COMPONENT = ("CONN_DANGLING_COMPONENT", "Connection '{connection_id}' references unknown component '{component_id}' (terminal {terminal_index}); the endpoint only joins other wires.")
    CONN_BAD_TERMINAL = ("CONN_BAD_TERMINAL", "Connection '{connection_id}' references terminal {terminal_index} of component '{component_id}', but only terminals 0 and 1 exist.")
    CONN_SELF_LOOP = ("CONN_SELF_LOOP", "Connection '{connection_id}' joins terminal {terminal_index} of component '{component_id}' to itself.")

    # --- Component Issues (COMP_...) ---
    COMP_DUPLICATE_ID = ("COMP_DUPLICATE_ID", "Component id '{component_id}' appears {count} times; its entries share terminals and the last one's reading is reported.")
    COMP_NEGATIVE_VALUE = ("COMP_NEGATIVE_VALUE", "Component '{component_id}' ({component_type}) has negative value {value}.")

    # --- Ideal DC Path Identification Info (DC_INFO_...) ---
    DC_INFO_SHORT_R0 = ("DC_INFO_SHORT_R0", "Component '{component_id}' (Resistor) with value {value_str} will be treated as an ideal DC short.")
    DC_INFO_SHORT_L = ("DC_INFO_SHORT_L", "Component '{component_id}' (Inductor) will be treated as an ideal DC short.")
    DC_INFO_OPEN_C = ("DC_INFO_OPEN_C", "Component '{component_id}' (Capacitor) will be treated as an ideal DC open.")
    DC_INFO_PROBE = ("DC_INFO_PROBE", "Component '{component_id}' (Oscilloscope) is an open-circuit probe; it reports the voltage across its terminals and draws no current.")

    @property
    def code(self) -> str:
        return self.value[0]

    @property
    def template(self) -> str:
        return self.value[1]

    def format_message(self, **kwargs) -> str:
        """Formats the message template with provided keyword arguments."""
        try:
            return self.template.format(**kwargs)
        except KeyError as e:
            logger.error(f"Missing key {e} for formatting message template of {self.name} (code: {self.code}): '{self.template}'. Provided args: {kwargs}")
            return f"Error formatting message for {self.code}: Missing key {e}. Template: '{self.template}' Args: {kwargs}"
