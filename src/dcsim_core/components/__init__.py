# src/dcsim_core/components/__init__.py
import logging
logger = logging.getLogger(__name__)

from .base_enums import DCBehaviorType
from .exceptions import ComponentValueError
from .elements import (
    DC_BEHAVIOR_REGISTRY, register_dc_behavior, get_dc_behavior, verify_registry_complete
)

logger.debug(f"Available DC models: {[str(ct) for ct in DC_BEHAVIOR_REGISTRY]}")

__all__ = [
    "DCBehaviorType",
    "ComponentValueError",
    "DC_BEHAVIOR_REGISTRY",
    "register_dc_behavior",
    "get_dc_behavior",
    "verify_registry_complete",
]
