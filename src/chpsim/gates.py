# Copyright 2023, QC Design GmbH and the chpsim contributors
# SPDX-License-Identifier: Apache-2.0
r"""Clifford gates acting on a :class:`~chpsim.tableau.Tableau`.

Each gate is available in two forms:

* as a function, e.g. :func:`hadamard`, which modifies the given tableau in
  place and also returns it for convenience;
* as a small immutable descriptor, e.g. :class:`Hadamard`, which can be stored in
  a list of instructions and later applied with :func:`apply_gate` (or its own
  ``apply`` method).

All gates update the :math:`2n` generator rows, but never the scratch row.

>>> from chpsim.tableau import Tableau, pprint_state
>>> t = Tableau(2)
>>> t = hadamard(t, 0)
>>> t = cnot(t, 0, 1)
>>> pprint_state(t)
Stabilisers:
+XX
+ZZ

Notes:
    Qubit indices are checked **before** touching the tableau. An index outside
    ``[0, n)`` raises an :class:`IndexError`, a non-integer index raises a
    :class:`TypeError` and a CNOT acting twice on the same qubit raises a
    :class:`ValueError`.
"""
from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

import numpy as np

from chpsim.tableau import Tableau, address


def _as_targets(qubits: int | Sequence[int]) -> list[int]:
    if isinstance(qubits, (int, np.integer)) and not isinstance(qubits, bool):
        return [int(qubits)]
    try:
        targets = list(qubits)  # type: ignore
    except TypeError as e:
        raise TypeError("Qubit indices must be integers") from e
    for q in targets:
        if isinstance(q, bool) or not isinstance(q, (int, np.integer)):
            raise TypeError("Qubit indices must be integers")
    return [int(q) for q in targets]


def check_qubits(tableau: Tableau, qubits: int | Sequence[int]) -> list[int]:
    """Validate qubit indices against the size of ``tableau``.

    Args:
        tableau: the tableau the indices refer to.
        qubits: one or more qubit indices.

    Returns:
        the indices as a list of Python integers.

    Raises:
        TypeError: if any index is not an integer.
        IndexError: if any index is outside ``[0, n)``.
    """
    targets = _as_targets(qubits)
    n = tableau.number_of_qubits
    for q in targets:
        if not 0 <= q < n:
            raise IndexError(
                f"Qubit index {q} is out of range for a state with {n} qubits"
            )
    return targets


def hadamard(tableau: Tableau, targets: int | Sequence[int]) -> Tableau:
    r"""Perform the Hadamard gate on the given target qubit(s).

    H transforms stabilizers according to :math:`Z \mapsto X`,
    :math:`X \mapsto Z` and :math:`Y \mapsto -Y`.

    Args:
        tableau: the state to modify.
        targets: 0-based target qubit index/indices.
    """
    targets = check_qubits(tableau, targets)
    rows = slice(0, 2 * tableau.number_of_qubits)
    r = tableau.r[rows]

    for target in targets:
        word, mask = address(target)
        x = tableau.x[rows, word]
        z = tableau.z[rows, word]
        # r = r + 2 where both x_target and z_target are set
        both = (x & z & mask) != 0
        r[both] = (r[both] + 2) % 4
        # swap x_target and z_target
        old_x = x.copy()
        x ^= (x ^ z) & mask
        z ^= (z ^ old_x) & mask
    return tableau


def phase(tableau: Tableau, targets: int | Sequence[int]) -> Tableau:
    r"""Perform the phase gate (S) on the given target qubit(s).

    Phase transforms stabilizers according to :math:`X \mapsto Y`,
    :math:`Y \mapsto -X` and :math:`Z \mapsto Z`.

    Args:
        tableau: the state to modify.
        targets: 0-based target qubit index/indices.
    """
    targets = check_qubits(tableau, targets)
    rows = slice(0, 2 * tableau.number_of_qubits)
    r = tableau.r[rows]

    for target in targets:
        word, mask = address(target)
        x = tableau.x[rows, word]
        z = tableau.z[rows, word]
        both = (x & z & mask) != 0
        r[both] = (r[both] + 2) % 4
        # z_target = z_target ^ x_target
        z ^= x & mask
    return tableau


def cnot(
    tableau: Tableau,
    control_qubits: int | Sequence[int],
    target_qubits: int | Sequence[int],
) -> Tableau:
    r"""Perform a CNOT gate on ``target`` qubit based on ``control`` qubit.

    CNOT transforms stabilizers according to
    :math:`X \otimes I \mapsto X \otimes X`,
    :math:`I \otimes X \mapsto I \otimes X`,
    :math:`Z \otimes I \mapsto Z \otimes I` and
    :math:`I \otimes Z \mapsto Z \otimes Z`.

    The first qubit argument is always the control. When sequences are given, the
    gates are applied pair-wise, in order.

    Args:
        tableau: the state to modify.
        control_qubits: 0-based control qubit index/indices.
        target_qubits: 0-based target qubit index/indices.

    Raises:
        ValueError: if control and target sequences have different lengths, or a
            control is equal to its target.
    """
    controls = check_qubits(tableau, control_qubits)
    targets = check_qubits(tableau, target_qubits)

    if len(targets) != len(controls):
        raise ValueError("Target and control must have the same number of qubits")
    for control, target in zip(controls, targets):
        if control == target:
            raise ValueError(f"Control and target must differ, got {control} twice")

    rows = slice(0, 2 * tableau.number_of_qubits)
    r = tableau.r[rows]

    for control, target in zip(controls, targets):
        cw, cm = address(control)
        tw, tm = address(target)
        x_c = (tableau.x[rows, cw] & cm) != 0
        z_c = (tableau.z[rows, cw] & cm) != 0
        x_t = (tableau.x[rows, tw] & tm) != 0
        z_t = (tableau.z[rows, tw] & tm) != 0
        # both conditions are evaluated on the bits before the update
        flip = (x_c & z_t & x_t & z_c) | (x_c & z_t & ~x_t & ~z_c)
        r[flip] = (r[flip] + 2) % 4
        # x_target = x_target ^ x_control
        tableau.x[rows, tw] ^= x_c * tm
        # z_control = z_control ^ z_target
        tableau.z[rows, cw] ^= z_t * cm
    return tableau


#: Alias for :func:`hadamard`.
h = hadamard
#: Alias for :func:`phase`.
s = phase
#: Alias for :func:`cnot`.
cx = cnot


@dataclass(frozen=True)
class Hadamard:
    """Hadamard gate on a single qubit."""

    target: int

    @property
    def qubits(self) -> tuple[int, ...]:  # noqa: D102
        return (self.target,)

    def apply(self, tableau: Tableau) -> Tableau:  # noqa: D102
        return hadamard(tableau, self.target)


@dataclass(frozen=True)
class Phase:
    """Phase (S) gate on a single qubit."""

    target: int

    @property
    def qubits(self) -> tuple[int, ...]:  # noqa: D102
        return (self.target,)

    def apply(self, tableau: Tableau) -> Tableau:  # noqa: D102
        return phase(tableau, self.target)


@dataclass(frozen=True)
class CNot:
    """Controlled-NOT gate. The X bit of ``control`` propagates to ``target``."""

    control: int
    target: int

    @property
    def qubits(self) -> tuple[int, ...]:  # noqa: D102
        return (self.control, self.target)

    def apply(self, tableau: Tableau) -> Tableau:  # noqa: D102
        return cnot(tableau, self.control, self.target)


Gate = Hadamard | Phase | CNot


def apply_gate(tableau: Tableau, gate: Gate) -> Tableau:
    """Apply a gate descriptor to ``tableau``.

    >>> from chpsim.tableau import Tableau, row_to_string
    >>> t = apply_gate(Tableau(1), Hadamard(0))
    >>> row_to_string(t, 1)
    '+X'

    Raises:
        TypeError: if ``gate`` is not one of the supported gates.
    """
    match gate:
        case Hadamard(target=target):
            return hadamard(tableau, target)
        case Phase(target=target):
            return phase(tableau, target)
        case CNot(control=control, target=target):
            return cnot(tableau, control, target)
        case _:
            raise TypeError(f"Unknown gate {gate!r}")
