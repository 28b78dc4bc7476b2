# Copyright 2023, QC Design GmbH and the chpsim contributors
# SPDX-License-Identifier: Apache-2.0
"""Unit-tests for the Clifford gates."""
import dataclasses

import numpy as np
import pytest as pt

from chpsim import gates
from chpsim.gates import (
    CNot,
    Hadamard,
    Phase,
    apply_gate,
    check_qubits,
    cnot,
    hadamard,
    phase,
)
from chpsim.tableau import Tableau, address, row_to_string


def single_stabiliser(op: str) -> Tableau:
    """Tableau whose first stabiliser row is the Pauli string ``op``."""
    t = Tableau(len(op) - 1)
    row = t.number_of_qubits
    t.x[row] = 0
    t.z[row] = 0
    t.r[row] = 2 if op[0] == "-" else 0
    for q, letter in enumerate(op[1:]):
        word, mask = address(q)
        if letter in "XY":
            t.x[row, word] |= mask
        if letter in "ZY":
            t.z[row, word] |= mask
    return t


@pt.mark.parametrize(
    "before, after",
    [("+X", "+Z"), ("+Z", "+X"), ("+Y", "-Y"), ("-Y", "+Y"), ("-X", "-Z")],
)
def test_hadamard_transforms(before: str, after: str):
    t = hadamard(single_stabiliser(before), 0)
    assert row_to_string(t, 1) == after


@pt.mark.parametrize(
    "before, after",
    [("+X", "+Y"), ("+Y", "-X"), ("+Z", "+Z"), ("-X", "-Y"), ("-Y", "+X")],
)
def test_phase_transforms(before: str, after: str):
    t = phase(single_stabiliser(before), 0)
    assert row_to_string(t, 1) == after


@pt.mark.parametrize(
    "before, after",
    [
        ("+XI", "+XX"),
        ("+IX", "+IX"),
        ("+ZI", "+ZI"),
        ("+IZ", "+ZZ"),
        ("+YI", "+YX"),
        ("+IY", "+ZY"),
        ("+XX", "+XI"),
        ("+YY", "-XZ"),
        ("+XZ", "-YY"),
        ("-ZZ", "-IZ"),
    ],
)
def test_cnot_transforms(before: str, after: str):
    """The first qubit is the control, the second one the target."""
    t = cnot(single_stabiliser(before), 0, 1)
    assert row_to_string(t, 2) == after


def test_cnot_reversed_direction():
    t = cnot(single_stabiliser("+IX"), 1, 0)
    assert row_to_string(t, 2) == "+XX"


def test_gates_across_words():
    """Gates on qubits in different words behave like gates in the same word."""
    t = Tableau(40)
    hadamard(t, 3)
    cnot(t, 3, 37)
    assert t.x_bit(40 + 3, 3) and t.x_bit(40 + 3, 37)
    assert t.z_bit(40 + 37, 3) and t.z_bit(40 + 37, 37)
    phase(t, 37)
    assert t.z_bit(40 + 3, 37)


class TestIdentities:
    """Products of gates that are equal to the identity."""

    def test_hadamard_is_involution(self, random_tableau, stable_rgen):
        t = random_tableau(5, 40, stable_rgen)
        other = t.copy()
        for q in range(5):
            hadamard(other, [q, q])
        assert t == other

    def test_phase_has_order_four(self, random_tableau, stable_rgen):
        t = random_tableau(5, 40, stable_rgen)
        other = t.copy()
        phase(other, [2, 2])
        assert t != other
        phase(other, [2, 2])
        assert t == other

    def test_cnot_is_involution(self, random_tableau, stable_rgen):
        t = random_tableau(5, 40, stable_rgen)
        other = t.copy()
        cnot(other, [0, 0], [4, 4])
        assert t == other

    def test_hadamard_phase_conjugation(self, random_tableau, stable_rgen):
        """H S S H is the X gate, which squares to the identity."""
        t = random_tableau(3, 30, stable_rgen)
        other = t.copy()
        for _ in range(2):
            hadamard(other, 1)
            phase(other, [1, 1])
            hadamard(other, 1)
        assert t == other


def test_sequences_of_targets():
    t = Tableau(3)
    hadamard(t, [0, 1])
    cnot(t, [0, 1], [1, 2])
    other = Tableau(3)
    hadamard(other, 0)
    hadamard(other, 1)
    cnot(other, 0, 1)
    cnot(other, 1, 2)
    assert t == other


def test_numpy_integers_are_accepted():
    t = hadamard(Tableau(2), np.int64(1))
    assert row_to_string(t, 3) == "+IX"


def test_gates_return_the_tableau():
    t = Tableau(2)
    assert hadamard(t, 0) is t
    assert phase(t, 0) is t
    assert cnot(t, 0, 1) is t


def test_scratch_row_is_untouched():
    t = Tableau(2)
    t.rowcopy(t.scratch, 2)
    hadamard(t, 0)
    phase(t, 0)
    cnot(t, 0, 1)
    assert row_to_string(t, t.scratch) == "+ZI"


@pt.mark.parametrize(
    "qubits, error",
    [
        (2, IndexError),
        (-1, IndexError),
        ([0, 5], IndexError),
        (1.5, TypeError),
        (True, TypeError),
        ("0", TypeError),
        ([0, None], TypeError),
    ],
)
def test_invalid_qubits(qubits, error):
    t = Tableau(2)
    with pt.raises(error):
        hadamard(t, qubits)
    with pt.raises(error):
        phase(t, qubits)
    # nothing was applied
    assert t == Tableau(2)


def test_check_qubits():
    assert check_qubits(Tableau(3), [np.int32(2), 0]) == [2, 0]
    assert check_qubits(Tableau(3), 1) == [1]


@pt.mark.parametrize(
    "controls, targets",
    [(0, 0), ([0, 1], [1]), ([0, 1], [1, 1])],
)
def test_invalid_cnot(controls, targets):
    t = Tableau(2)
    with pt.raises(ValueError):
        cnot(t, controls, targets)
    assert t == Tableau(2)


def test_aliases():
    assert gates.h is hadamard
    assert gates.s is phase
    assert gates.cx is cnot


class TestDescriptors:
    """Gate descriptors and :func:`apply_gate`."""

    @pt.mark.parametrize(
        "gate, qubits",
        [(Hadamard(1), (1,)), (Phase(0), (0,)), (CNot(2, 0), (2, 0))],
    )
    def test_qubits(self, gate: gates.Gate, qubits: tuple[int, ...]):
        assert gate.qubits == qubits

    def test_frozen(self):
        with pt.raises(dataclasses.FrozenInstanceError):
            Hadamard(0).target = 1  # type: ignore

    def test_apply_matches_functions(self, random_tableau, stable_rgen):
        t = random_tableau(3, 20, stable_rgen)
        other = t.copy()
        for gate in [Hadamard(0), Phase(1), CNot(2, 0)]:
            apply_gate(t, gate)
        hadamard(other, 0)
        phase(other, 1)
        cnot(other, 2, 0)
        assert t == other

    def test_apply_method(self):
        t = Tableau(2)
        Hadamard(0).apply(t)
        CNot(0, 1).apply(t)
        Phase(1).apply(t)
        assert row_to_string(t, 2) == "+XY"

    def test_unknown_gate(self):
        with pt.raises(TypeError):
            apply_gate(Tableau(1), "H")  # type: ignore
