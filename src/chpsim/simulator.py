# Copyright 2023, QC Design GmbH and the chpsim contributors
# SPDX-License-Identifier: Apache-2.0
"""Running sequences of instructions on a :class:`~chpsim.state.QuantumState`.

Instructions can be run lazily, one measurement at a time, with :func:`run`:

>>> from chpsim.circuit import Circuit
>>> from chpsim.state import QuantumState
>>> circ = Circuit.from_str("H 0\\nCX 0 1\\nM 0 1")
>>> outcomes = run(QuantumState(2), circ)
>>> first = next(outcomes)
>>> second = next(outcomes)
>>> first.is_random, second.is_random, first.bit == second.bit
(True, False, True)

or step-by-step, with all measurement results collected, by
:class:`CircuitSimulator`.
"""
from __future__ import annotations

import typing as t
from collections.abc import Iterable, Iterator

import numpy as np

from chpsim import gates
from chpsim.circuit import Circuit, CircuitBuilder, Instruction, Measure
from chpsim.measurement import Measurement
from chpsim.state import QuantumState


class Measurements(Iterator[Measurement]):
    """Lazy sequence of the measurement outcomes of a list of instructions.

    Gates are only applied when the next outcome is requested: each call to
    :func:`next` applies all gates up to the next measurement instruction, performs
    the measurement and returns its outcome. The instructions are consumed in the
    process, so this iterator can't be restarted.

    .. automethod:: __init__
    """

    def __init__(self, state: QuantumState, instructions: Iterable[Instruction]):
        """Prepare to run ``instructions`` on ``state``.

        Args:
            state: the state that is modified by the instructions.
            instructions: gates from :mod:`chpsim.gates` and :class:`.Measure`
                instructions. Nothing is applied until the first outcome is
                requested.
        """
        self.state = state
        self._instructions = iter(instructions)

    def __iter__(self) -> Measurements:  # noqa: D105
        return self

    def __next__(self) -> Measurement:
        """Apply instructions up to and including the next measurement."""
        for instruction in self._instructions:
            match instruction:
                case Measure(target=target):
                    return self.state.measure(target)
                case _:
                    gates.apply_gate(self.state.tableau, instruction)
        raise StopIteration


def run(state: QuantumState, instructions: Iterable[Instruction]) -> Measurements:
    """Lazily run ``instructions`` on ``state``, yielding measurement outcomes."""
    return Measurements(state, instructions)


class CircuitSimulator:
    """Simulation of a whole circuit, collecting all measurement results.

    >>> from chpsim.circuit import Circuit
    >>> sim = CircuitSimulator(Circuit.from_str("H 0\\nH 0\\nM 0"))
    >>> sim.run()
    >>> sim.process_results()
    array([0], dtype=uint8)

    .. automethod:: __init__
    """

    def __init__(self, circ: Circuit | CircuitBuilder, qubits: t.Optional[int] = None):
        """Create a new simulator.

        Args:
            circ: The circuit (or the builder containing it) to be simulated.
            qubits: Number of qubits of the simulated state. If ``None`` (default),
                :attr:`.Circuit.number_of_qubits` is used.

        Raises:
            TypeError: if ``circ`` is neither a circuit nor a builder.
            ValueError: if ``qubits`` is too small for the circuit.
        """
        if isinstance(circ, CircuitBuilder):
            self.circ = circ.circ
        elif isinstance(circ, Circuit):
            self.circ = circ
        else:
            raise TypeError(
                "Only a Circuit or a CircuitBuilder can be used in a simulator"
            )
        if qubits is None:
            qubits = self.circ.number_of_qubits
        elif qubits < self.circ.number_of_qubits:
            raise ValueError(
                f"The circuit needs {self.circ.number_of_qubits} qubits, but only "
                f"{qubits} were requested"
            )
        self._qubits = qubits
        #: State object
        self.state: QuantumState = QuantumState(qubits)
        #: Measurement results collected while running the circuit
        self.meas_results: list[Measurement] = []

        self._instruction_pointer: int = -1
        """Index pointing to the last executed instruction.

        Used internally to make the class usable as an iterator.
        """

    def __iter__(self):
        """Iterate through instructions one-by-one.

        .. important:: Each time a new iterator is made, the instruction
            pointer is reset, **but not the internal state**.
        """
        self._instruction_pointer = -1
        return self

    def __next__(self):
        """Step to the next instruction in the circuit sequence.

        Notes:
            Each iteration step returns **nothing**, but rather updates the
            internal :attr:`state` of the simulator and, if applicable, the
            :attr:`meas_results` attribute.
        """
        self._instruction_pointer += 1
        if self._instruction_pointer < len(self.circ.instructions):
            instruction = self.circ.instructions[self._instruction_pointer]
            match instruction:
                case Measure(target=target):
                    self.meas_results.append(self.state.measure(target))
                case _:
                    self.state.apply(instruction)
            return None
        raise StopIteration

    @property
    def n_qubits(self) -> int:
        """Number of qubits that this simulator handles."""
        return self.state.number_of_qubits

    def run(self, *, after_reset=True):
        """Run all instructions of the circuit.

        Args:
            after_reset: start from a fresh zero-state (default) instead of the
                current state.
        """
        if after_reset:
            self.reset()

        for _ in self:
            # Go through all instructions
            pass

    def process_results(self) -> np.ndarray:
        """Return the measured bits, in the order they were measured."""
        return np.array([m.bit for m in self.meas_results], dtype="u1")

    def reset(self):
        """Reset the internal state of the simulator and its outputs."""
        self.state = QuantumState(self._qubits)
        self.meas_results = []
