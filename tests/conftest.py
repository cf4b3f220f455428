# tests/conftest.py
import pytest

from dcsim_core import Component, ComponentType, Connection, ConnectionPoint


def make_components(components_def: list) -> list:
    """
    components_def: e.g., [("V1", "POWER_SOURCE", 10.0), ("R1", "RESISTOR", 10.0)]
    """
    return [Component(id=comp_id, type=ComponentType[type_str], value=value)
            for comp_id, type_str, value in components_def]


def make_connections(wires_def: list) -> list:
    """
    wires_def: e.g., [(("V1", 1), ("R1", 0)), (("R1", 1), ("V1", 0))]
    Connection ids are generated as w0, w1, ...
    """
    return [
        Connection(id=f"w{i}", start=ConnectionPoint(*start), end=ConnectionPoint(*end))
        for i, (start, end) in enumerate(wires_def)
    ]


def create_circuit(components_def: list, wires_def: list = None):
    """Returns (components, connections) ready to be handed to the solver."""
    return make_components(components_def), make_connections(wires_def or [])


@pytest.fixture
def series_loop():
    """
    10 V source driving 10 ohm and 40 ohm in a closed ring:
    V1(+) -> R1 -> R2 -> V1(-)
    """
    return create_circuit(
        [("V1", "POWER_SOURCE", 10.0), ("R1", "RESISTOR", 10.0), ("R2", "RESISTOR", 40.0)],
        [(("V1", 1), ("R1", 0)), (("R1", 1), ("R2", 0)), (("R2", 1), ("V1", 0))],
    )


@pytest.fixture
def voltage_divider_with_probe():
    """
    12 V across two 1k resistors in series, with an oscilloscope across the lower one.
    """
    return create_circuit(
        [("V1", "POWER_SOURCE", 12.0), ("Rtop", "RESISTOR", 1000.0),
         ("Rbot", "RESISTOR", 1000.0), ("O1", "OSCILLOSCOPE", 0.0)],
        [(("V1", 1), ("Rtop", 1)), (("Rtop", 0), ("Rbot", 1)), (("Rbot", 0), ("V1", 0)),
         (("O1", 1), ("Rbot", 1)), (("O1", 0), ("Rbot", 0))],
    )
