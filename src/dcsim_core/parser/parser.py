# src/dcsim_core/parser/parser.py
import logging
from pathlib import Path
from typing import Any, Dict, List, Mapping, Union

import cerberus
import yaml

from ..components.exceptions import ComponentValueError
from ..data_structures import CircuitSnapshot, Component, ComponentType, Connection, ConnectionPoint
from ..units import parse_component_value
from .exceptions import ParsingError, SchemaValidationError

logger = logging.getLogger(__name__)

SnapshotSource = Union[str, Path, Mapping[str, Any]]


class SnapshotValidatorSchema(cerberus.Validator):
    """Custom Cerberus validator adding a uniqueness rule for lists of records."""
    def __init__(self, *args, **kwargs):
        super(SnapshotValidatorSchema, self).__init__(*args, **kwargs)
        self.rules['unique_elements_by_key'] = {'schema': {'type': 'string'}}

    def _validate_unique_elements_by_key(self, key_for_uniqueness: str, field: str, value: List[Dict]):
        """
        Validates that all dictionaries in a list have a unique value for a given key.
        The rule's arguments are validated against this schema:
        {'type': 'string'}
        """
        if not isinstance(value, list):
            return

        seen_keys = set()
        duplicates = []
        for item in value:
            if not isinstance(item, dict):
                continue
            item_key = item.get(key_for_uniqueness)
            if item_key is not None:
                if item_key in seen_keys:
                    duplicates.append(item_key)
                else:
                    seen_keys.add(item_key)

        if duplicates:
            unique_duplicates = sorted(set(map(str, duplicates)))
            self._error(field, f"Duplicate values found for key '{key_for_uniqueness}': {unique_duplicates}")


class SnapshotParser:
    """
    Loads an editor snapshot (components + wires) from YAML/JSON text, a file, or an
    already-decoded mapping, and turns it into an immutable CircuitSnapshot.

    The document layout follows the editor's own JSON:

        components:
          - {id: V1, type: POWER_SOURCE, value: 10}
          - {id: R1, type: RESISTOR, value: "4.7k"}
        connections:
          - id: w1
            start: {componentId: V1, terminalIndex: 1}
            end: {componentId: R1, terminalIndex: 0}
    """
    _id_rule = {"type": "string", "required": True, "empty": False}

    _point_schema = {
        "type": "dict", "required": True, "schema": {
            "componentId": _id_rule,
            "terminalIndex": {"type": "integer", "required": True},
        },
    }

    _schema = {
        "components": {
            "type": "list", "required": True, "unique_elements_by_key": "id",
            "schema": {"type": "dict", "schema": {
                "id": _id_rule,
                "type": {"type": "string", "required": True, "allowed": [ct.value for ct in ComponentType]},
                "value": {"type": ["number", "string"], "required": False, "default": 0},
                "voltage": {"type": "number", "required": False, "nullable": True},
                "current": {"type": "number", "required": False, "nullable": True},
                "position": {"type": "dict", "required": False},
            }},
        },
        "connections": {
            "type": "list", "required": False, "default": [], "unique_elements_by_key": "id",
            "schema": {"type": "dict", "schema": {
                "id": _id_rule,
                "start": _point_schema,
                "end": _point_schema,
            }},
        },
    }

    def __init__(self):
        self._validator = SnapshotValidatorSchema(self._schema)
        self._validator.allow_unknown = False
        logger.debug("SnapshotParser initialized with strict structural validation rules.")

    def parse(self, source: SnapshotSource) -> CircuitSnapshot:
        """
        Parses a snapshot.

        Args:
            source: YAML/JSON text, a `Path` to a file containing it, or a mapping.

        Raises:
            ParsingError: If the source cannot be read or decoded.
            SchemaValidationError: If the document does not match the snapshot schema
                                   or a component value cannot be interpreted.
        """
        source_label = self._describe(source)
        document = self._load(source, source_label)

        if not self._validator.validate(document):
            raise SchemaValidationError(errors=self._validator.errors, source=source_label)
        validated = self._validator.document

        components = []
        value_errors: Dict[str, Any] = {}
        for index, raw in enumerate(validated["components"]):
            comp_type = ComponentType(raw["type"])
            try:
                value = parse_component_value(raw["value"], comp_type)
            except ComponentValueError as e:
                value_errors[f"components.{index}.value"] = str(e)
                continue
            components.append(Component(
                id=raw["id"], type=comp_type, value=value,
                voltage=raw.get("voltage"), current=raw.get("current"),
            ))
        if value_errors:
            raise SchemaValidationError(errors=value_errors, source=source_label)

        connections = [
            Connection(
                id=raw["id"],
                start=ConnectionPoint(raw["start"]["componentId"], raw["start"]["terminalIndex"]),
                end=ConnectionPoint(raw["end"]["componentId"], raw["end"]["terminalIndex"]),
            )
            for raw in validated["connections"]
        ]

        logger.info(f"Parsed snapshot from {source_label}: {len(components)} components, {len(connections)} connections.")
        return CircuitSnapshot(components=tuple(components), connections=tuple(connections))

    @staticmethod
    def _describe(source: SnapshotSource) -> str:
        if isinstance(source, Path):
            return str(source)
        if isinstance(source, str):
            return "<text>"
        return "<mapping>"

    def _load(self, source: SnapshotSource, source_label: str) -> Dict[str, Any]:
        """Loads the raw document and performs basic sanity checks."""
        if isinstance(source, Mapping):
            return dict(source)

        if isinstance(source, Path):
            if not source.is_file():
                raise ParsingError(details=f"Snapshot file not found at path: {source}", source=source_label)
            try:
                text = source.read_text(encoding="utf-8")
            except (PermissionError, UnicodeDecodeError) as e:
                raise ParsingError(details=f"Could not read file: {e}", source=source_label) from e
        elif isinstance(source, str):
            text = source
        else:
            raise ParsingError(details=f"Unsupported snapshot source type '{type(source).__name__}'.", source=source_label)

        try:
            content = yaml.safe_load(text)
        except yaml.YAMLError as e:
            raise ParsingError(details=f"Invalid YAML/JSON syntax: {e}", source=source_label) from e
        if content is None:
            raise ParsingError(details="The snapshot is empty or contains no valid content.", source=source_label)
        if not isinstance(content, dict):
            raise ParsingError(details="The root of the snapshot must be a mapping.", source=source_label)
        return content
