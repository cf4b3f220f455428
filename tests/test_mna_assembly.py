# tests/test_mna_assembly.py
import logging

import pytest
import numpy as np

from dcsim_core import TopologyAnalyzer, select_ground, MnaAssembler, SolverConfig
from dcsim_core import run_dc_analysis, SimulationStatus, solve_linear_system
from dcsim_core.analysis import TopologyAnalysisResults
from dcsim_core.simulation import map_readings, ZERO_READING
from dcsim_core.simulation.mna import MnaSystem
from tests.conftest import create_circuit


def assemble(components, connections, config=None) -> MnaSystem:
    topo = TopologyAnalyzer(components, connections).analyze()
    ground = select_ground(components, topo)
    if config is None:
        return MnaAssembler(components, topo, ground.node).assemble()
    return MnaAssembler(components, topo, ground.node, config).assemble()


class TestMnaAssembly:

    def test_series_loop_matrix(self, series_loop):
        system = assemble(*series_loop)

        # Nodes: 0 (ground: V1-, R2.t1), 1 (V1+, R1.t0), 2 (R1.t1, R2.t0); one source current.
        assert system.size == 3
        assert system.voltage_var_count == 2
        assert system.current_var_count == 1
        assert system.node_index_map == {1: 0, 2: 1}
        assert system.current_index_map == {0: 2}

        expected = np.array([
            [0.1, -0.1, 1.0],
            [-0.1, 0.1 + 0.025, 0.0],
            [1.0, 0.0, 0.0],
        ])
        np.testing.assert_allclose(system.matrix, expected)
        np.testing.assert_allclose(system.rhs, [0.0, 0.0, 10.0])

    def test_capacitor_and_probe_are_never_stamped(self):
        components, connections = create_circuit(
            [("V1", "POWER_SOURCE", 5.0), ("C1", "CAPACITOR", 10.0), ("O1", "OSCILLOSCOPE", 0.0)],
            [(("V1", 1), ("C1", 1)), (("C1", 0), ("V1", 0)),
             (("O1", 1), ("C1", 1)), (("O1", 0), ("C1", 0))],
        )
        system = assemble(components, connections)

        assert system.size == 2
        np.testing.assert_allclose(system.matrix, [[0.0, 1.0], [1.0, 0.0]])
        np.testing.assert_allclose(system.rhs, [0.0, 5.0])

    def test_inductor_and_tiny_resistor_get_zero_volt_constraints(self):
        components, connections = create_circuit(
            [("V1", "POWER_SOURCE", 1.0), ("L1", "INDUCTOR", 3.0), ("Rs", "RESISTOR", 1e-12)],
            [(("V1", 1), ("L1", 1)), (("L1", 0), ("Rs", 1)), (("Rs", 0), ("V1", 0))],
        )
        system = assemble(components, connections)

        assert system.current_var_count == 3
        assert system.current_index_map == {0: 2, 1: 3, 2: 4}
        np.testing.assert_allclose(system.rhs, [0.0, 0.0, 1.0, 0.0, 0.0])
        # L1: terminal 1 on node 1 (index 0), terminal 0 on node 2 (index 1).
        assert system.matrix[0, 3] == 1.0 and system.matrix[3, 0] == 1.0
        assert system.matrix[1, 3] == -1.0 and system.matrix[3, 1] == -1.0

    def test_short_threshold_is_configurable(self):
        components, connections = create_circuit(
            [("V1", "POWER_SOURCE", 1.0), ("R1", "RESISTOR", 0.5)],
            [(("V1", 1), ("R1", 1)), (("R1", 0), ("V1", 0))],
        )
        default_system = assemble(components, connections)
        strict_system = assemble(components, connections, SolverConfig(short_threshold=1.0))

        assert default_system.current_var_count == 1
        assert strict_system.current_var_count == 2

    def test_resistor_to_ground_only_touches_its_diagonal(self):
        components, connections = create_circuit(
            [("V1", "POWER_SOURCE", 2.0), ("R1", "RESISTOR", 4.0)],
            [(("V1", 1), ("R1", 1)), (("R1", 0), ("V1", 0))],
        )
        system = assemble(components, connections)
        np.testing.assert_allclose(system.matrix, [[0.25, 1.0], [1.0, 0.0]])

    def test_stamping_is_order_independent(self, series_loop):
        components, connections = series_loop
        forward = assemble(components, connections)
        # Keep V1 first so the ground and node numbering stay the same.
        reordered = [components[0], components[2], components[1]]
        backward = assemble(reordered, connections)

        np.testing.assert_allclose(np.sort(forward.matrix, axis=None), np.sort(backward.matrix, axis=None))
        np.testing.assert_allclose(forward.rhs, backward.rhs)


@pytest.fixture
def loop_with_unresolved_short():
    """
    V1 (10 V) across R1 (10 ohm), plus a zero-ohm R2 whose terminal 1 has no node.
    Terminal ids: V1 (0, 1), R1 (2, 3), R2 (4, 5); id 5 is missing from the partition.
    """
    components, _ = create_circuit(
        [("V1", "POWER_SOURCE", 10.0), ("R1", "RESISTOR", 10.0), ("R2", "RESISTOR", 0.0)]
    )
    topology = TopologyAnalysisResults(
        nodes=(frozenset({0, 3}), frozenset({1, 2, 4})),
        terminal_to_node={0: 0, 3: 0, 1: 1, 2: 1, 4: 1},
        component_terminal_ids=((0, 1), (2, 3), (4, 5)),
        dangling_points=(),
    )
    return components, topology


class TestUnresolvedTerminals:

    def test_unresolved_component_is_not_stamped(self, loop_with_unresolved_short, caplog):
        components, topology = loop_with_unresolved_short
        with caplog.at_level(logging.WARNING):
            assembler = MnaAssembler(components, topology, ground_node=0)
        system = assembler.assemble()

        assert "'R2' could not be resolved" in caplog.text
        assert system.component_nodes[2] is None
        # Only the source gets a branch current; the unresolved short gets none.
        assert system.current_index_map == {0: 1}
        np.testing.assert_allclose(system.matrix, [[0.1, 1.0], [1.0, 0.0]])
        np.testing.assert_allclose(system.rhs, [0.0, 10.0])

    def test_unresolved_component_reads_zero(self, loop_with_unresolved_short):
        components, topology = loop_with_unresolved_short
        system = MnaAssembler(components, topology, ground_node=0).assemble()
        readings = map_readings(components, system, solve_linear_system(system.matrix, system.rhs))

        assert readings["R2"] == ZERO_READING
        np.testing.assert_allclose([readings["R1"].voltage, readings["R1"].current], [10.0, 1.0])
        np.testing.assert_allclose([readings["V1"].voltage, readings["V1"].current], [10.0, 1.0])

    def test_facade_reports_unresolved_component_at_zero(self, loop_with_unresolved_short, monkeypatch):
        components, topology = loop_with_unresolved_short
        monkeypatch.setattr(TopologyAnalyzer, "analyze", lambda self: topology)

        result = run_dc_analysis(components, [])
        assert result.status is SimulationStatus.SOLVED
        assert result.readings["R2"] == ZERO_READING
        np.testing.assert_allclose(result.readings["R1"].current, 1.0)


class TestEmptySystem:
    """
    A snapshot always resolves a power source's terminals, so the analyzer never
    yields a zero-unknown system on its own. These build the topology by hand.
    """

    @pytest.fixture
    def source_without_positive_terminal(self):
        components, _ = create_circuit([("V1", "POWER_SOURCE", 5.0)])
        topology = TopologyAnalysisResults(
            nodes=(frozenset({0}),),
            terminal_to_node={0: 0},
            component_terminal_ids=((0,),),
            dangling_points=(),
        )
        return components, topology

    def test_assembler_has_no_unknowns(self, source_without_positive_terminal):
        components, topology = source_without_positive_terminal
        assembler = MnaAssembler(components, topology, ground_node=0)

        assert assembler.size == 0
        system = assembler.assemble()
        assert system.matrix.shape == (0, 0)
        assert system.rhs.shape == (0,)

    def test_facade_reports_undriven(self, source_without_positive_terminal, monkeypatch):
        components, topology = source_without_positive_terminal
        monkeypatch.setattr(TopologyAnalyzer, "analyze", lambda self: topology)

        result = run_dc_analysis(components, [])
        assert result.status is SimulationStatus.UNDRIVEN
        assert result.as_dict() == {"V1": {"voltage": 0.0, "current": 0.0}}
