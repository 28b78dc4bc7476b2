# Copyright 2023, QC Design GmbH and the chpsim contributors
# SPDX-License-Identifier: Apache-2.0
r"""Single-qubit measurements in the computational basis.

A measurement of :math:`Z_a` either has an outcome that is fully determined by the
state, or an outcome that is uniformly random. In the latter case the state
collapses, and the tableau is rewritten so that :math:`\pm Z_a` becomes one of
its stabilizers. See :cite:`aaronson_improved_2004`, p. 5.

>>> from chpsim.gates import hadamard
>>> from chpsim.tableau import Tableau
>>> t = Tableau(1)
>>> measure(t, 0)
Measurement(bit=0, determinacy=<Determinacy.FIXED: 'fixed'>)
>>> m = measure(hadamard(t, 0), 0, forced_outcome=1)
>>> m.bit, m.is_random
(1, True)
"""
from __future__ import annotations

import enum
import warnings
from dataclasses import dataclass
from typing import Optional

import numpy as np

import chpsim
from chpsim.gates import check_qubits
from chpsim.tableau import Tableau, address


class Determinacy(enum.Enum):
    """Whether a measurement outcome was fixed by the state or drawn at random."""

    FIXED = "fixed"
    RANDOM = "random"


@dataclass(frozen=True)
class Measurement:
    """Outcome of a single-qubit measurement."""

    bit: int
    """The measured bit, ``0`` for the :math:`+1` eigenvalue, ``1`` otherwise."""
    determinacy: Determinacy
    """Whether :attr:`bit` was random or determined by the state."""

    def __int__(self) -> int:  # noqa: D105
        return self.bit

    @property
    def is_zero(self) -> bool:  # noqa: D102
        return self.bit == 0

    @property
    def is_one(self) -> bool:  # noqa: D102
        return self.bit == 1

    @property
    def is_random(self) -> bool:  # noqa: D102
        return self.determinacy is Determinacy.RANDOM


def measure(
    tableau: Tableau,
    target: int,
    *,
    forced_outcome: Optional[int] = None,
    rng: Optional[np.random.Generator] = None,
) -> Measurement:
    """Measure the ``target`` qubit in the Z basis, modifying ``tableau`` in place.

    Args:
        tableau: the state to measure.
        target: 0-based index of the qubit to measure.

    Keyword Args:
        forced_outcome: if a measurement is such that its outcome would be chosen at
            random, use the provided outcome instead.

            .. warning:: This is ignored (with a warning) when the outcome is
                determined by the state.
        rng: where to draw the random bit from. If ``None`` (default),
            :data:`chpsim.rng` is used.

    Returns:
        the measured bit and whether it was random or not.

    Raises:
        ValueError: if ``forced_outcome`` is neither ``None``, ``0`` nor ``1``.
        IndexError: if ``target`` is not a valid qubit index.
    """
    (target,) = check_qubits(tableau, target)
    if forced_outcome is not None and forced_outcome not in (0, 1):
        raise ValueError(
            f"Measurement outcome can only be 0 or 1, but {forced_outcome} was given."
        )

    n = tableau.number_of_qubits
    word, mask = address(target)

    # Outcome is random if at least one stabilizer does not commute with Z_target
    (anticommuting,) = np.nonzero(tableau.x[n : 2 * n, word] & mask)
    if anticommuting.size:
        p = int(anticommuting[0])
        # Xbar_p := Zbar_p, then Zbar_p := (-1)^outcome Z_target
        tableau.rowcopy(p, p + n)
        tableau.rowset(p + n, target + n)
        if forced_outcome is not None:
            outcome = forced_outcome
        else:
            if rng is None:
                rng = chpsim.rng
            outcome = int(rng.integers(0, 2))
        tableau.r[p + n] = 2 * outcome

        # update all other generators that don't commute with Z_target
        (others,) = np.nonzero(tableau.x[: 2 * n, word] & mask)
        for i in others:
            if i != p:
                tableau.rowmult(int(i), p)
        return Measurement(int(tableau.r[p + n] != 0), Determinacy.RANDOM)

    if forced_outcome is not None:
        warnings.warn(
            f"The outcome of measuring qubit {target} is determined by the state, "
            "ignoring the forced outcome",
            stacklevel=2,
        )

    # Outcome is deterministic, we now check the destabilisers instead: Z_target is
    # the product of the stabilisers paired with the anticommuting destabilisers
    (anticommuting,) = np.nonzero(tableau.x[:n, word] & mask)
    scratch = tableau.scratch
    first = int(anticommuting[0])
    tableau.rowcopy(scratch, first + n)
    for i in anticommuting[1:]:
        tableau.rowmult(scratch, int(i) + n)
    return Measurement(int(tableau.r[scratch] != 0), Determinacy.FIXED)
