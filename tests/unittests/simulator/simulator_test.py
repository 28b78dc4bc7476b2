# Copyright 2023, QC Design GmbH and the chpsim contributors
# SPDX-License-Identifier: Apache-2.0
"""Unit-tests for running circuits."""
from pathlib import Path

import numpy as np
import pytest as pt
import yaml  # type: ignore

import chpsim
from chpsim.circuit import Circuit, CircuitBuilder, Measure
from chpsim.gates import CNot, Hadamard
from chpsim.measurement import Determinacy, Measurement
from chpsim.simulator import CircuitSimulator, Measurements, run
from chpsim.state import QuantumState
from chpsim.tableau import Tableau


def yaml_circuit_to_pytest_params(
    yaml_path: str, circuit_suite_key: str
) -> list[tuple]:
    """Parse the sample circuits into pytest params.

    Args:
        yaml_path: path relative to this file.
        circuit_suite_key: top-level key of the suite in the ``yaml`` file.

    Returns:
        params_list : parameter list that is passed onto pytest.mark.parametrize
    """
    with open(Path(__file__).parent / yaml_path) as f:
        circuit_suite: dict[str, dict[str, str]] = yaml.load(f, yaml.SafeLoader)[
            circuit_suite_key
        ]
    return [tuple(params.values()) for params in circuit_suite.values()]


SAMPLES = yaml_circuit_to_pytest_params(
    "sample_circuits/sample_circuits.yaml", "deterministic-circuits"
)


class TestMeasurements:
    """Lazy execution of instructions with :func:`run`."""

    def test_nothing_runs_before_next(self):
        state = QuantumState(2)
        outcomes = run(state, Circuit.from_str("H 0\nCX 0 1\nM 0 1"))
        assert isinstance(outcomes, Measurements)
        assert state.tableau == Tableau(2)
        first = next(outcomes)
        assert first.is_random
        # the second gate was applied, but not the second measurement
        sign = "-" if first.bit else "+"
        assert str(state).endswith(f"---\n{sign}ZI\n+ZZ")
        second = next(outcomes)
        assert second == Measurement(first.bit, Determinacy.FIXED)
        with pt.raises(StopIteration):
            next(outcomes)

    def test_trailing_gates_are_applied(self):
        state = QuantumState(1)
        assert list(run(state, [Hadamard(0)])) == []
        assert str(state) == "+Z\n--\n+X"

    def test_plain_instruction_lists(self, stable_rgen, monkeypatch):
        monkeypatch.setattr(chpsim, "rng", stable_rgen)
        instructions = [Hadamard(0), CNot(0, 1), CNot(1, 2), Measure(2), Measure(0)]
        bits = [m.bit for m in QuantumState(3).run(instructions)]
        assert len(bits) == 2 and bits[0] == bits[1]

    def test_iterator_protocol(self):
        outcomes = run(QuantumState(1), Circuit.from_str("M 0"))
        assert iter(outcomes) is outcomes


class TestCircuitSimulator:
    """Group testing of basic :class:`CircuitSimulator` functionality."""

    @pt.mark.parametrize("input_circuit, exp_result", SAMPLES)
    def test_run_circuit(self, input_circuit: str, exp_result: str, stable_rgen):
        """Run some simple circuits and compare with the expected outputs."""
        chpsim.rng = stable_rgen
        sim = CircuitSimulator(Circuit.from_str(input_circuit))
        sim.run()
        assert "".join(map(str, sim.process_results())) == exp_result
        assert all(not m.is_random for m in sim.meas_results)

    @pt.mark.parametrize("input_circuit, exp_result", SAMPLES)
    def test_lazy_run_agrees(self, input_circuit: str, exp_result: str):
        circ = Circuit.from_str(input_circuit)
        bits = [m.bit for m in run(QuantumState(circ.number_of_qubits), circ)]
        assert "".join(map(str, bits)) == exp_result

    def test_builder_is_accepted(self):
        circ = Circuit()
        c = CircuitBuilder(circ)
        c.H(0)
        c.H(0)
        c.M(0)
        sim = CircuitSimulator(c)
        assert sim.circ is circ

    def test_invalid_circuit(self):
        with pt.raises(TypeError):
            CircuitSimulator("H 0")  # type: ignore

    def test_qubits(self):
        circ = Circuit.from_str("CX 0 2")
        assert CircuitSimulator(circ).n_qubits == 3
        assert CircuitSimulator(circ, 5).n_qubits == 5
        with pt.raises(ValueError):
            CircuitSimulator(circ, 2)

    def test_stepping(self):
        sim = CircuitSimulator(Circuit.from_str("H 0\nH 0\nM 0"))
        steps = iter(sim)
        next(steps)
        assert sim.state.tableau != Tableau(1)
        next(steps)
        assert sim.meas_results == []
        next(steps)
        assert sim.meas_results == [Measurement(0, Determinacy.FIXED)]
        with pt.raises(StopIteration):
            next(steps)

    def test_reset_and_rerun(self):
        sim = CircuitSimulator(Circuit.from_str("H 0\nS 0 0\nH 0\nM 0"))
        sim.run()
        assert sim.process_results().tolist() == [1]
        # without a reset, X is applied a second time
        sim.run(after_reset=False)
        assert sim.process_results().tolist() == [1, 0]
        sim.reset()
        assert sim.meas_results == []
        assert sim.state.tableau == Tableau(1)

    def test_process_results(self, stable_rgen):
        chpsim.rng = stable_rgen
        sim = CircuitSimulator(Circuit.from_str("H 0 1\nM 0 1\nM 0 1"))
        sim.run()
        res = sim.process_results()
        assert res.dtype == np.uint8
        assert res.shape == (4,)
        assert np.array_equal(res[:2], res[2:])
