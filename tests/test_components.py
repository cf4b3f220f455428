# tests/test_components.py
import logging

import pytest

from dcsim_core.components import (
    DCBehaviorType, DC_BEHAVIOR_REGISTRY, register_dc_behavior, get_dc_behavior,
    verify_registry_complete,
)
from dcsim_core.components.elements import resistor_dc_behavior
from dcsim_core.constants import SHORT_RESISTANCE_THRESHOLD_OHMS
from dcsim_core.data_structures import Component, ComponentType, Connection, ConnectionPoint
from dcsim_core.simulation import ComponentReading
from dcsim_core.errors import FrameworkLogicError


@pytest.fixture
def restore_registry():
    saved = dict(DC_BEHAVIOR_REGISTRY)
    yield
    DC_BEHAVIOR_REGISTRY.clear()
    DC_BEHAVIOR_REGISTRY.update(saved)


class TestDcModels:

    def test_every_component_type_has_a_model(self):
        assert set(DC_BEHAVIOR_REGISTRY) == set(ComponentType)
        verify_registry_complete()

    def test_resistor_is_an_admittance(self):
        behavior, conductance = get_dc_behavior(Component("R1", ComponentType.RESISTOR, 50.0))
        assert behavior is DCBehaviorType.ADMITTANCE
        assert conductance == pytest.approx(0.02)

    @pytest.mark.parametrize("value", [0.0, 1e-12, -5.0])
    def test_tiny_or_negative_resistor_is_a_short(self, value):
        behavior, payload = get_dc_behavior(Component("R1", ComponentType.RESISTOR, value))
        assert behavior is DCBehaviorType.SHORT_CIRCUIT
        assert payload is None

    def test_resistor_at_threshold_is_an_admittance(self):
        behavior, conductance = get_dc_behavior(
            Component("R1", ComponentType.RESISTOR, SHORT_RESISTANCE_THRESHOLD_OHMS)
        )
        assert behavior is DCBehaviorType.ADMITTANCE
        assert conductance == pytest.approx(1.0 / SHORT_RESISTANCE_THRESHOLD_OHMS)

    def test_short_threshold_is_configurable(self):
        resistor = Component("R1", ComponentType.RESISTOR, 0.5)
        assert get_dc_behavior(resistor, short_threshold=1.0)[0] is DCBehaviorType.SHORT_CIRCUIT
        assert resistor_dc_behavior(resistor, short_threshold=0.1)[0] is DCBehaviorType.ADMITTANCE

    @pytest.mark.parametrize("comp_type, expected", [
        (ComponentType.CAPACITOR, DCBehaviorType.OPEN_CIRCUIT),
        (ComponentType.OSCILLOSCOPE, DCBehaviorType.OPEN_CIRCUIT),
        (ComponentType.INDUCTOR, DCBehaviorType.SHORT_CIRCUIT),
    ])
    def test_reactive_and_probe_models(self, comp_type, expected):
        behavior, payload = get_dc_behavior(Component("X1", comp_type, 10.0))
        assert behavior is expected
        assert payload is None

    def test_power_source_carries_its_voltage(self):
        behavior, voltage = get_dc_behavior(Component("V1", ComponentType.POWER_SOURCE, -3))
        assert behavior is DCBehaviorType.VOLTAGE_SOURCE
        assert voltage == -3.0
        assert isinstance(voltage, float)

    def test_current_variable_needs(self):
        assert DCBehaviorType.SHORT_CIRCUIT.needs_current_variable
        assert DCBehaviorType.VOLTAGE_SOURCE.needs_current_variable
        assert not DCBehaviorType.ADMITTANCE.needs_current_variable
        assert not DCBehaviorType.OPEN_CIRCUIT.needs_current_variable


class TestRegistry:

    def test_overwrite_logs_warning(self, restore_registry, caplog):
        with caplog.at_level(logging.WARNING):
            @register_dc_behavior(ComponentType.CAPACITOR)
            def leaky_capacitor(component, short_threshold=SHORT_RESISTANCE_THRESHOLD_OHMS):
                return DCBehaviorType.ADMITTANCE, 1e-12

        assert "redefined/overwritten" in caplog.text
        assert get_dc_behavior(Component("C1", ComponentType.CAPACITOR, 1.0)) == (DCBehaviorType.ADMITTANCE, 1e-12)

    def test_register_requires_component_type(self, restore_registry):
        with pytest.raises(TypeError, match="ComponentType"):
            @register_dc_behavior("RESISTOR")
            def bogus(component, short_threshold=0.0):
                return DCBehaviorType.OPEN_CIRCUIT, None

    def test_incomplete_registry_is_detected(self, restore_registry):
        del DC_BEHAVIOR_REGISTRY[ComponentType.OSCILLOSCOPE]
        with pytest.raises(FrameworkLogicError, match="OSCILLOSCOPE"):
            verify_registry_complete()
        with pytest.raises(FrameworkLogicError, match="O1"):
            get_dc_behavior(Component("O1", ComponentType.OSCILLOSCOPE))


class TestDataStructures:

    def test_component_type_str(self):
        assert str(ComponentType.POWER_SOURCE) == "POWER_SOURCE"
        assert ComponentType("RESISTOR") is ComponentType.RESISTOR

    def test_with_reading_returns_a_new_component(self):
        original = Component("R1", ComponentType.RESISTOR, 10.0)
        updated = original.with_reading(ComponentReading(voltage=2.0, current=0.2))

        assert not original.is_simulated
        assert updated.is_simulated
        assert (updated.voltage, updated.current) == (2.0, 0.2)
        assert updated.value == original.value

    def test_connection_endpoints(self):
        wire = Connection("w1", ConnectionPoint("V1", 1), ConnectionPoint("R1", 0))
        assert list(wire.endpoints()) == [ConnectionPoint("V1", 1), ConnectionPoint("R1", 0)]
