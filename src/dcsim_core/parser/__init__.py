# src/dcsim_core/parser/__init__.py
from .parser import SnapshotParser
from .exceptions import ParsingError, SchemaValidationError

__all__ = [
    "SnapshotParser",
    "ParsingError",
    "SchemaValidationError",
]
