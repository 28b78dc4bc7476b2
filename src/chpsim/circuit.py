# Copyright 2023, QC Design GmbH and the chpsim contributors
# SPDX-License-Identifier: Apache-2.0
r"""Representation of stabilizer circuits.

A circuit is an ordered list of instructions, each one being either a gate from
:mod:`chpsim.gates` or a :class:`Measure` instruction. Circuits can be built
with :class:`Circuit` itself, with the wrapper class :class:`CircuitBuilder`, or
parsed from a string containing one gate per line. The following gates are
understood (names are case-insensitive):

========= ================ ==================================================
Name      Arguments        Meaning
========= ================ ==================================================
``H``     ``q1 q2 ...``    Hadamard on each qubit
``S``     ``q1 q2 ...``    Phase gate on each qubit (``P`` is an alias)
``CX``    ``c1 t1 c2 ...`` CNOT on each control/target pair (``CNOT``, ``C``)
``M``     ``q1 q2 ...``    Measurement of each qubit in the Z basis
========= ================ ==================================================

Everything after a ``#`` is ignored, and so are empty lines.

>>> circ = Circuit.from_str('''
... H 0
... CX 0 1  # Bell pair
... M 0 1
... ''')
>>> print(circ)
H 0
CX 0 1
M 0
M 1
>>> circ.number_of_qubits, circ.number_measured_qubits
(2, 2)
"""
from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any

from chpsim.gates import CNot, Gate, Hadamard, Phase


@dataclass(frozen=True)
class Measure:
    """Measurement of a single qubit in the computational basis."""

    target: int

    @property
    def qubits(self) -> tuple[int, ...]:  # noqa: D102
        return (self.target,)


Instruction = Gate | Measure

_ALIASES = {"P": "S", "CNOT": "CX", "C": "CX"}


def instruction_to_str(instruction: Instruction) -> str:
    """Convert one instruction into its textual form.

    >>> instruction_to_str(CNot(3, 1))
    'CX 3 1'
    """
    match instruction:
        case Hadamard(target=target):
            return f"H {target}"
        case Phase(target=target):
            return f"S {target}"
        case CNot(control=control, target=target):
            return f"CX {control} {target}"
        case Measure(target=target):
            return f"M {target}"
        case _:
            raise TypeError(f"Unknown instruction {instruction!r}")


class Circuit:
    """A stabilizer circuit.

    Qubits that the circuit acts on are identified by integers ``0, 1, ...``. The
    number of qubits is not fixed and you can use :attr:`number_of_qubits` to
    determine how many qubits are necessary to run the circuit.

    In order to build circuits step-by-step, :class:`CircuitBuilder` can be useful.

    .. automethod:: __init__
    """

    def __init__(self):
        """Create a new circuit which does not contain any instruction."""
        self.instructions: list[Instruction] = []
        """Sequence of instructions."""

    def __str__(self) -> str:
        """Convert circuit description to string."""
        return "\n".join(map(instruction_to_str, self.instructions))

    def __iter__(self) -> Iterator[Instruction]:  # noqa: D105
        return iter(self.instructions)

    def __len__(self) -> int:  # noqa: D105
        return len(self.instructions)

    @property
    def allowed_gates(self) -> set[str]:
        """All gate names understood by :meth:`append`, aliases included."""
        return {"H", "S", "CX", "M"}.union(_ALIASES)

    @property
    def number_measured_qubits(self) -> int:
        """Total number of measurements in the circuit.

        Note:
            If a qubit is measured multiple times, it is counted multiple
            times.
        """
        return sum(isinstance(i, Measure) for i in self.instructions)

    @property
    def number_of_qubits(self) -> int:
        """Get minimal number of qubits necessary to simulate the circuit.

        This function checks the highest qubit index used. It does not check whether
        all the qubits between 0 and the highest index are actually used. An empty
        circuit needs no qubits at all.
        """
        return max((max(i.qubits) + 1 for i in self.instructions), default=0)

    @property
    def n_q(self) -> int:
        """Alias of :attr:`number_of_qubits`."""
        return self.number_of_qubits

    @classmethod
    def from_str(cls, s: str) -> Circuit:
        """Create circuit from string.

        >>> circ = Circuit.from_str('''
        ... h 0
        ... c 0 1
        ... ''')
        >>> circ.append("M", 0, 1)
        >>> print(circ)
        H 0
        CX 0 1
        M 0
        M 1
        """
        c = cls()
        c.append_from_str(s)
        return c

    def append_from_str(self, s: str):
        r"""Append instructions to current sequence.

        >>> circ = Circuit.from_str("H 0 1")
        >>> circ.append_from_str("S 2\nM 1")
        >>> print(circ)
        H 0
        H 1
        S 2
        M 1

        Args:
            s: String which contains gates to be appended.
        """
        for line in s.strip().split("\n"):
            line = line.split("#", 1)[0].strip()
            if line:
                self.append(*line.split())

    def append(self, name: str, *args: Any):
        """Append one gate (or measurement) to the circuit.

        Gates acting on a single qubit accept any number of qubits and add one
        instruction per qubit, ``CX`` accepts pairs of control and target qubits.

        >>> circ = Circuit()
        >>> circ.append("CX", 0, 1, 2, 3)
        >>> print(circ)
        CX 0 1
        CX 2 3

        Args:
            name: Name of the gate
            *args: Qubit indices

        Raises:
            ValueError: for unknown gate names, negative indices, or an odd number
                of ``CX`` arguments.
            TypeError: if any of the qubit indices is not an integer.
        """
        gate = str(name).upper()
        gate = _ALIASES.get(gate, gate)
        if gate not in self.allowed_gates:
            raise ValueError(f"Do not know how to handle gate {name!r}")
        try:
            qubits = tuple(map(int, args))
        except ValueError as e:
            raise TypeError("Qubit indices must be integers") from e
        if any(q < 0 for q in qubits):
            raise ValueError("Qubit indices can't be negative")

        match gate:
            case "H":
                self.instructions.extend(Hadamard(q) for q in qubits)
            case "S":
                self.instructions.extend(Phase(q) for q in qubits)
            case "M":
                self.instructions.extend(Measure(q) for q in qubits)
            case "CX":
                if len(qubits) % 2:
                    raise ValueError("CX needs pairs of control and target qubits")
                for control, target in zip(qubits[::2], qubits[1::2]):
                    if control == target:
                        raise ValueError("Control and target of CX must differ")
                    self.instructions.append(CNot(control, target))


class CircuitBuilder:
    """Helper class to build circuits programatically.

    >>> circ = Circuit()
    >>> c = CircuitBuilder(circ)
    >>> c.H(0)
    >>> c.CX(0, 1)
    >>> c.M(0, 1)
    >>> print(circ)
    H 0
    CX 0 1
    M 0
    M 1

    .. automethod:: __init__
    """

    #: Circuit to which gates are added
    circ: Circuit

    def __init__(self, circ: Circuit):
        """Create a new circuit builder.

        Args:
            circ: Gates are added to this circuit object.
        """
        self.circ = circ

    def H(self, *args):
        """Append Hadamard gate."""
        return self.circ.append("H", *args)

    def S(self, *args):
        """Append phase gate."""
        return self.circ.append("S", *args)

    def CX(self, *args):
        """Append controlled-X gate."""
        return self.circ.append("CX", *args)

    def M(self, *args):
        """Append measurement gate."""
        return self.circ.append("M", *args)
