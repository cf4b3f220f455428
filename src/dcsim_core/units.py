# --- src/dcsim_core/units.py ---
import logging
import math
import re
from numbers import Real
from typing import Dict, Optional, Union

import pint

from .components.exceptions import ComponentValueError
from .data_structures import ComponentType

logger = logging.getLogger(__name__)
ureg = pint.UnitRegistry()
Quantity = ureg.Quantity
logger.debug("Pint Unit Registry initialized.")

# Units the editor stores each component's scalar `value` in.
VALUE_UNITS: Dict[ComponentType, Optional[str]] = {
    ComponentType.RESISTOR: "ohm",
    ComponentType.CAPACITOR: "microfarad",
    ComponentType.INDUCTOR: "millihenry",
    ComponentType.POWER_SOURCE: "volt",
    ComponentType.OSCILLOSCOPE: None,
}

# Coherent SI units used for bare engineering suffixes ("4.7k", "2.2u") and display.
BASE_UNITS: Dict[ComponentType, Optional[str]] = {
    ComponentType.RESISTOR: "ohm",
    ComponentType.CAPACITOR: "farad",
    ComponentType.INDUCTOR: "henry",
    ComponentType.POWER_SOURCE: "volt",
    ComponentType.OSCILLOSCOPE: None,
}

ENGINEERING_SUFFIXES: Dict[str, float] = {
    "p": 1e-12,
    "n": 1e-9,
    "u": 1e-6,
    "µ": 1e-6,
    "m": 1e-3,
    "k": 1e3,
    "M": 1e6,
    "G": 1e9,
}

_SUFFIXED_NUMBER_REGEX = re.compile(r"^\s*([-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?)\s*([pnuµmkMG])\s*$")


def parse_component_value(raw: Union[str, Real], component_type: ComponentType) -> float:
    """
    Converts an editor-supplied value into a float in the unit implied by the
    component type (see VALUE_UNITS).

    Numbers are taken to already be in that unit. Strings may be a plain number,
    a number with an engineering suffix relative to the SI base unit ("4.7k",
    "2.2u"), or a full pint expression ("10 ohm", "2.2 uF", "1 kV").

    Raises:
        ComponentValueError: If the text cannot be parsed, has the wrong dimension,
                             or is not a finite number.
    """
    value = _parse_value(raw, component_type)
    if not math.isfinite(value):
        raise ComponentValueError(
            raw_value=raw, component_type=component_type, details=f"Value must be finite, got {value!r}."
        )
    return value


def _parse_value(raw: Union[str, Real], component_type: ComponentType) -> float:
    if isinstance(raw, bool):
        raise ComponentValueError(raw_value=raw, component_type=component_type, details="Booleans are not component values.")
    if isinstance(raw, Real):
        try:
            return float(raw)
        except OverflowError as e:
            raise ComponentValueError(raw_value=raw, component_type=component_type, details=str(e)) from e
    if not isinstance(raw, str):
        raise ComponentValueError(
            raw_value=raw, component_type=component_type,
            details=f"Expected a number or a string, got '{type(raw).__name__}'."
        )

    value_unit = VALUE_UNITS[component_type]
    base_unit = BASE_UNITS[component_type]
    text = raw.strip()
    if not text:
        raise ComponentValueError(raw_value=raw, component_type=component_type, details="Value is empty.")

    try:
        return float(text)
    except ValueError:
        pass

    match = _SUFFIXED_NUMBER_REGEX.match(text)
    if match:
        magnitude = float(match.group(1)) * ENGINEERING_SUFFIXES[match.group(2)]
        if base_unit is None:
            return magnitude
        return float(Quantity(magnitude, base_unit).to(value_unit).magnitude)

    if value_unit is None:
        raise ComponentValueError(
            raw_value=raw, component_type=component_type,
            details="This component type carries no physical unit; only plain numbers are accepted."
        )

    try:
        qty = Quantity(text)
    except Exception as e:
        # pint evaluates the text as an expression; malformed input can fail in many ways.
        raise ComponentValueError(
            raw_value=raw, component_type=component_type, details=f"Could not parse value: {e}"
        ) from e

    if not isinstance(qty, Quantity) or qty.dimensionless:
        # Quantity("12") may come back as a bare number or a dimensionless quantity.
        return float(getattr(qty, "magnitude", qty))
    try:
        return float(qty.to(value_unit).magnitude)
    except pint.DimensionalityError as e:
        raise ComponentValueError(
            raw_value=raw, component_type=component_type,
            details=f"Value has dimension {qty.dimensionality}, which is not compatible with '{value_unit}'."
        ) from e


def _compact(qty: Quantity) -> Quantity:
    if qty.magnitude == 0 or not math.isfinite(qty.magnitude):
        return qty
    return qty.to_compact()


def format_component_value(value: float, component_type: ComponentType) -> str:
    """Renders a component value for an editor label, e.g. '1.00 kΩ'."""
    value_unit = VALUE_UNITS[component_type]
    if value_unit is None:
        return ""
    qty = _compact(Quantity(value, value_unit).to(BASE_UNITS[component_type]))
    return f"{qty.magnitude:.2f} {qty.units:~P}"


def format_reading(voltage: float, current: float) -> str:
    """Renders a simulated (voltage, current) pair, e.g. '2.000 V, 200.000 mA'."""
    v_qty = _compact(Quantity(voltage, "volt"))
    i_qty = _compact(Quantity(current, "ampere"))
    return f"{v_qty.magnitude:.3f} {v_qty.units:~P}, {i_qty.magnitude:.3f} {i_qty.units:~P}"
