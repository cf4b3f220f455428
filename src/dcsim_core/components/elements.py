# src/dcsim_core/components/elements.py
"""
DC steady-state models for every component type the editor can place.

Each model is a small function registered against its `ComponentType`. It maps a
component to a `(DCBehaviorType, payload)` pair, where the payload is the
conductance in siemens for ADMITTANCE, the source voltage for VOLTAGE_SOURCE,
and `None` otherwise. The registry is checked for completeness when this module
is imported, so a new `ComponentType` member without a model fails loudly.
"""

import logging
from typing import Callable, Dict, Optional, Tuple

from ..constants import SHORT_RESISTANCE_THRESHOLD_OHMS
from ..data_structures import Component, ComponentType
from ..errors import FrameworkLogicError
from .base_enums import DCBehaviorType

logger = logging.getLogger(__name__)

DcBehavior = Tuple[DCBehaviorType, Optional[float]]
DcBehaviorModel = Callable[..., DcBehavior]

DC_BEHAVIOR_REGISTRY: Dict[ComponentType, DcBehaviorModel] = {}


def register_dc_behavior(component_type: ComponentType):
    """
    A decorator to register the DC model of a component type, making it available
    to the MNA formulator and the result mapper.
    """
    def decorator(func: DcBehaviorModel) -> DcBehaviorModel:
        if not isinstance(component_type, ComponentType):
            raise TypeError(f"DC models must be registered against a ComponentType, got {component_type!r}.")
        if not callable(func):
            raise TypeError(f"DC model for '{component_type}' must be callable.")
        if component_type in DC_BEHAVIOR_REGISTRY:
            logger.warning(f"DC model for component type '{component_type}' is being redefined/overwritten.")
        DC_BEHAVIOR_REGISTRY[component_type] = func
        logger.debug(f"Registered DC model '{func.__name__}' for component type '{component_type}'.")
        return func
    return decorator


@register_dc_behavior(ComponentType.RESISTOR)
def resistor_dc_behavior(component: Component, short_threshold: float = SHORT_RESISTANCE_THRESHOLD_OHMS) -> DcBehavior:
    # Anything below the threshold, including negative values, is an ideal short.
    if component.value < short_threshold:
        return DCBehaviorType.SHORT_CIRCUIT, None
    return DCBehaviorType.ADMITTANCE, 1.0 / component.value


@register_dc_behavior(ComponentType.CAPACITOR)
def capacitor_dc_behavior(component: Component, short_threshold: float = SHORT_RESISTANCE_THRESHOLD_OHMS) -> DcBehavior:
    return DCBehaviorType.OPEN_CIRCUIT, None


@register_dc_behavior(ComponentType.INDUCTOR)
def inductor_dc_behavior(component: Component, short_threshold: float = SHORT_RESISTANCE_THRESHOLD_OHMS) -> DcBehavior:
    return DCBehaviorType.SHORT_CIRCUIT, None


@register_dc_behavior(ComponentType.POWER_SOURCE)
def power_source_dc_behavior(component: Component, short_threshold: float = SHORT_RESISTANCE_THRESHOLD_OHMS) -> DcBehavior:
    return DCBehaviorType.VOLTAGE_SOURCE, float(component.value)


@register_dc_behavior(ComponentType.OSCILLOSCOPE)
def oscilloscope_dc_behavior(component: Component, short_threshold: float = SHORT_RESISTANCE_THRESHOLD_OHMS) -> DcBehavior:
    return DCBehaviorType.OPEN_CIRCUIT, None


def verify_registry_complete() -> None:
    """Raises FrameworkLogicError if any ComponentType has no registered DC model."""
    missing = [ct.value for ct in ComponentType if ct not in DC_BEHAVIOR_REGISTRY]
    if missing:
        raise FrameworkLogicError(f"No DC model registered for component type(s): {missing}")


def get_dc_behavior(component: Component, short_threshold: float = SHORT_RESISTANCE_THRESHOLD_OHMS) -> DcBehavior:
    """Looks up and evaluates the registered DC model for a component."""
    try:
        model = DC_BEHAVIOR_REGISTRY[component.type]
    except KeyError:
        raise FrameworkLogicError(
            f"Component '{component.id}' has type {component.type!r}, which has no registered DC model."
        ) from None
    return model(component, short_threshold=short_threshold)


verify_registry_complete()
