# Copyright 2023, QC Design GmbH and the chpsim contributors
# SPDX-License-Identifier: Apache-2.0
"""Quantum state object bundling the tableau with the operations acting on it."""
from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import TYPE_CHECKING, Optional

import numpy as np

from chpsim import gates, ket
from chpsim.measurement import Measurement, measure
from chpsim.tableau import Tableau

if TYPE_CHECKING:
    from chpsim.circuit import Instruction
    from chpsim.simulator import Measurements


class QuantumState:
    """Quantum state represented by stabilizer and destabilizer generators (tableau).

    The description comprises the full tableau of the state including phases,
    destabilizers and stabilizers as introduced in :cite:`aaronson_improved_2004`.

    >>> state = QuantumState(2)
    >>> state.hadamard(0)
    >>> state.cnot(0, 1)
    >>> print(state)
    +ZI
    +IX
    ---
    +XX
    +ZZ
    >>> state.reduce()
    1
    >>> state.ket()
    [('+', '00'), ('+', '11')]

    .. automethod:: __init__
    """

    def __init__(self, qubits: int):
        """Initialize a new state in the computational 0-state.

        Args:
            qubits: Total number of qubits in the state.
        """
        #: Full tableau of the state including phases, destabilizer and stabiliser
        #: generators in the binary picture
        self.tableau = Tableau(qubits)

    def __array__(self, dtype=None, copy=None) -> np.ndarray:
        """Support direct casting of this object into a numpy array.

        The result is the dense binary form given by :meth:`.Tableau.to_dense`.
        """
        dense = self.tableau.to_dense()
        return dense if dtype is None else dense.astype(dtype)

    def __str__(self) -> str:  # noqa: D105
        return str(self.tableau)

    @property
    def number_of_qubits(self) -> int:
        """Number of qubits in the state."""
        return self.tableau.number_of_qubits

    @property
    def n_q(self) -> int:
        """Alias for number of qubits.

        See Also:
            :attr:`number_of_qubits`
        """
        return self.tableau.number_of_qubits

    def hadamard(self, qubits: int | Sequence[int]):
        """Perform the Hadamard gate on this state.

        Args:
            qubits: qubits onto which to apply the gate.
        """
        gates.hadamard(self.tableau, qubits)

    def phase(self, qubits: int | Sequence[int]):
        """Perform the phase (S) gate on this state.

        Args:
            qubits: qubits onto which to apply the gate.
        """
        gates.phase(self.tableau, qubits)

    def cnot(
        self, control_qubits: int | Sequence[int], target_qubits: int | Sequence[int]
    ):
        """Perform the CNOT gate on this state.

        Args:
            control_qubits: the control qubits.
            target_qubits: the target qubits.
        """
        gates.cnot(self.tableau, control_qubits, target_qubits)

    #: Alias for :meth:`cnot`.
    cx = cnot

    def apply(self, gate: gates.Gate):
        """Apply a gate descriptor such as :class:`.gates.Hadamard`."""
        gates.apply_gate(self.tableau, gate)

    def measure(
        self,
        qubit: int,
        *,
        forced_outcome: Optional[int] = None,
        rng: Optional[np.random.Generator] = None,
    ) -> Measurement:
        """Measure ``qubit`` in the computational basis.

        See :func:`.measurement.measure` for the meaning of the keyword arguments.
        """
        return measure(self.tableau, qubit, forced_outcome=forced_outcome, rng=rng)

    def reduce(self) -> int:
        """Reduce the stabilizers, returning the rank :math:`g` (see :func:`.reduce`)."""
        return ket.reduce(self.tableau)

    def ket(self) -> list[tuple[str, str]]:
        """Basis states with nonzero amplitude, as ``(sign, bitstring)`` pairs."""
        return ket.basis_states(self.tableau)

    def ket_str(self) -> str:
        """Return the state in bra-ket notation (see :func:`.ket.ket`)."""
        return ket.ket(self.tableau)

    def run(self, instructions: Iterable[Instruction]) -> Measurements:
        """Lazily run ``instructions`` on this state.

        See :class:`.simulator.Measurements`.
        """
        from chpsim.simulator import Measurements

        return Measurements(self, instructions)
