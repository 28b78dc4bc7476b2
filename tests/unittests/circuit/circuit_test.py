# Copyright 2023, QC Design GmbH and the chpsim contributors
# SPDX-License-Identifier: Apache-2.0
"""Unit-tests for circuits and their text format."""
import pytest as pt

from chpsim.circuit import Circuit, CircuitBuilder, Measure, instruction_to_str
from chpsim.gates import CNot, Hadamard, Phase


class TestCircuit:
    """Group tests for :class:`Circuit`."""

    @pt.mark.parametrize(
        "circuit_str, instructions",
        [
            ("H 0", [Hadamard(0)]),
            ("h 0 2", [Hadamard(0), Hadamard(2)]),
            ("S 1\nP 1", [Phase(1), Phase(1)]),
            ("CX 0 1\nCNOT 1 0\nc 2 3", [CNot(0, 1), CNot(1, 0), CNot(2, 3)]),
            ("CX 0 1 2 3", [CNot(0, 1), CNot(2, 3)]),
            ("M 0 1", [Measure(0), Measure(1)]),
            ("# comment only\n\n  H 3  # trailing comment\n", [Hadamard(3)]),
            ("", []),
        ],
    )
    def test_from_str(self, circuit_str: str, instructions: list):
        assert Circuit.from_str(circuit_str).instructions == instructions

    def test_str_round_trip(self):
        circ = Circuit.from_str("h 0\np 1\ncnot 0 1\nm 1 0")
        assert str(circ) == "H 0\nS 1\nCX 0 1\nM 1\nM 0"
        assert Circuit.from_str(str(circ)).instructions == circ.instructions

    @pt.mark.parametrize(
        "circuit_str, n_qubits, n_measured",
        [
            ("", 0, 0),
            ("H 0", 1, 0),
            ("CX 4 1\nM 1 1", 5, 2),
            ("M 0\nH 2\nM 0", 3, 2),
        ],
    )
    def test_counts(self, circuit_str: str, n_qubits: int, n_measured: int):
        circ = Circuit.from_str(circuit_str)
        assert circ.number_of_qubits == circ.n_q == n_qubits
        assert circ.number_measured_qubits == n_measured

    def test_iteration(self):
        circ = Circuit.from_str("H 0\nM 0")
        assert len(circ) == 2
        assert list(circ) == [Hadamard(0), Measure(0)]

    def test_allowed_gates(self):
        assert Circuit().allowed_gates == {"H", "S", "P", "CX", "CNOT", "C", "M"}

    @pt.mark.parametrize(
        "name, args, error",
        [
            ("X", (0,), ValueError),
            ("RZ", (0, 1), ValueError),
            ("H", ("a",), TypeError),
            ("H", (-1,), ValueError),
            ("CX", (0, 1, 2), ValueError),
            ("CX", (1, 1), ValueError),
        ],
    )
    def test_append_errors(self, name: str, args: tuple, error: type):
        with pt.raises(error):
            Circuit().append(name, *args)

    def test_unknown_gate_in_string(self):
        with pt.raises(ValueError, match="'T'"):
            Circuit.from_str("H 0\nT 0")

    def test_append_from_str(self):
        circ = Circuit.from_str("H 0")
        circ.append_from_str("CX 0 1\n\nM 1")
        assert circ.instructions == [Hadamard(0), CNot(0, 1), Measure(1)]


def test_instruction_to_str():
    assert instruction_to_str(Phase(2)) == "S 2"
    assert instruction_to_str(Measure(0)) == "M 0"
    with pt.raises(TypeError):
        instruction_to_str("H 0")  # type: ignore


def test_measure_qubits():
    assert Measure(3).qubits == (3,)


def test_circuit_builder():
    circ = Circuit()
    c = CircuitBuilder(circ)
    c.H(0, 1)
    c.S(1)
    c.CX(1, 2)
    c.M(2)
    assert c.circ is circ
    assert str(circ) == "H 0\nH 1\nS 1\nCX 1 2\nM 2"
