# Copyright 2023, QC Design GmbH and the chpsim contributors
# SPDX-License-Identifier: Apache-2.0
import numpy as np
import pytest as pt

from chpsim.gates import cnot, hadamard, phase
from chpsim.tableau import Tableau


@pt.fixture(scope="module")
def stable_rgen():
    return np.random.default_rng(seed=123123456)


def random_clifford_tableau(
    n_qubits: int, n_gates: int, rgen: np.random.Generator
) -> Tableau:
    """Apply ``n_gates`` random H, S and CNOT gates to the zero-state."""
    tableau = Tableau(n_qubits)
    for _ in range(n_gates):
        gate = rgen.integers(0, 3) if n_qubits > 1 else rgen.integers(0, 2)
        match gate:
            case 0:
                hadamard(tableau, int(rgen.integers(0, n_qubits)))
            case 1:
                phase(tableau, int(rgen.integers(0, n_qubits)))
            case 2:
                control, target = rgen.choice(n_qubits, size=2, replace=False)
                cnot(tableau, int(control), int(target))
    return tableau


@pt.fixture
def random_tableau():
    """Factory of tableaux reached by random Clifford circuits."""
    return random_clifford_tableau
