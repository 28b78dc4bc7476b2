# Copyright 2023, QC Design GmbH and the chpsim contributors
# SPDX-License-Identifier: Apache-2.0
r"""Write a stabilizer state in bra-ket notation.

A stabilizer state is an equal-weight superposition of :math:`2^g` computational
basis states, up to a phase of :math:`\pm 1` or :math:`\pm i` on each of them. To
list them, the stabilizers are first brought into row-echelon form by
:func:`reduce`, which returns :math:`g`. The scratch row is then initialised to
one basis state with nonzero amplitude by :func:`seed`, and the remaining ones
are visited by multiplying in the :math:`g` stabilizers having an X component,
in Gray-code order. See :cite:`aaronson_improved_2004`, section VI.

>>> from chpsim.gates import cnot, hadamard, phase
>>> from chpsim.tableau import Tableau
>>> t = cnot(hadamard(Tableau(2), 0), 0, 1)
>>> print(ket(phase(t, 1)))
 +|00>
+i|11>
"""
from __future__ import annotations

import warnings
from collections.abc import Iterator

import numpy as np

from chpsim.tableau import Tableau, address

#: Above this rank, :func:`ket` warns that the output has :math:`2^g` lines.
KET_WARNING_RANK = 16

#: Sign prefix for each power of :math:`i`.
SIGNS = ("+", "+i", "-", "-i")


def _eliminate(tableau: Tableau, bits: np.ndarray, pivot: int) -> int:
    """Run one pass of Gaussian elimination over the stabilizers.

    Args:
        tableau: the state to reduce.
        bits: either :attr:`Tableau.x` or :attr:`Tableau.z`.
        pivot: index of the first stabilizer row that has not been reduced yet.

    Returns:
        the index of the first stabilizer row left unreduced after this pass.
    """
    n = tableau.number_of_qubits
    for j in range(n):
        word, mask = address(j)
        # find a generator containing X (or Z) in the j-th column
        (candidates,) = np.nonzero(bits[pivot : 2 * n, word] & mask)
        if not candidates.size:
            continue
        k = pivot + int(candidates[0])
        tableau.rowswap(pivot, k)
        tableau.rowswap(pivot - n, k - n)
        for k2 in range(pivot + 1, 2 * n):
            if bits[k2, word] & mask:
                # Gaussian elimination step, mirrored on the destabilizers so
                # that stabilizer i is still paired with destabilizer i
                tableau.rowmult(k2, pivot)
                tableau.rowmult(pivot - n, k2 - n)
        pivot += 1
    return pivot


def reduce(tableau: Tableau) -> int:
    """Bring the stabilizers of ``tableau`` into row-echelon form.

    The stabilizers with an X component come first, each one with its leading X bit
    in a different column; the remaining ones only contain Z operators and are
    reduced the same way. Destabilizers are transformed alongside, so the tableau
    still describes the same state. Reducing an already reduced tableau changes
    none of its generators.

    Returns:
        the number :math:`g` of stabilizers with an X component. The state has
        :math:`2^g` nonzero amplitudes in the computational basis.
    """
    n = tableau.number_of_qubits
    pivot = _eliminate(tableau, tableau.x, n)
    g = pivot - n
    _eliminate(tableau, tableau.z, pivot)
    return g


def seed(tableau: Tableau, g: int):
    """Set the scratch row to a basis state with nonzero amplitude.

    The last ``n - g`` stabilizers of a reduced tableau only contain Z operators,
    and fix the parity of the qubits they act on. Going from the last one up, the
    lowest qubit of each is flipped whenever its parity would come out wrong.

    Args:
        tableau: a tableau already reduced by :func:`reduce`.
        g: the value returned by :func:`reduce`.
    """
    n = tableau.number_of_qubits
    scratch = tableau.scratch
    tableau.x[scratch] = 0
    tableau.z[scratch] = 0
    tableau.r[scratch] = 0

    for i in range(2 * n - 1, n + g - 1, -1):
        _, zs = tableau.row_bits(i)
        xs, _ = tableau.row_bits(scratch)
        (support,) = np.nonzero(zs)
        f = (int(tableau.r[i]) + 2 * int(np.sum(zs & xs))) % 4
        if f == 2:
            # make the seed consistent with the i-th equation
            word, mask = address(int(support[0]))
            tableau.x[scratch, word] ^= mask


def basis_state(tableau: Tableau) -> tuple[str, str]:
    """Read the basis state stored in the scratch row.

    Returns:
        the sign prefix (one of ``+``, ``+i``, ``-``, ``-i``) and the bitstring, with
        qubit 0 as the left-most character.
    """
    xs, zs = tableau.row_bits(tableau.scratch)
    # every Y operator contributes a factor i
    e = (int(tableau.r[tableau.scratch]) + int(np.sum(xs & zs))) % 4
    return SIGNS[e], "".join(map(str, xs))


def iter_basis_states(tableau: Tableau) -> Iterator[tuple[str, str]]:
    """Iterate over the basis states with nonzero amplitude.

    The tableau is reduced first, and the scratch row is overwritten while
    iterating.

    Yields:
        pairs of sign prefix and bitstring, see :func:`basis_state`.
    """
    n = tableau.number_of_qubits
    g = reduce(tableau)
    seed(tableau, g)
    yield basis_state(tableau)

    for t in range((1 << g) - 1):
        t2 = t ^ (t + 1)
        for i in range(g):
            if t2 & (1 << i):
                tableau.rowmult(tableau.scratch, n + i)
        yield basis_state(tableau)


def basis_states(tableau: Tableau) -> list[tuple[str, str]]:
    """Return all basis states with nonzero amplitude.

    Examples:
        >>> basis_states(Tableau(2))
        [('+', '00')]
        >>> basis_states(Tableau(0))
        [('+', '')]
    """
    return list(iter_basis_states(tableau))


def ket(tableau: Tableau) -> str:
    """Format the state in bra-ket notation, one basis state per line.

    >>> print(ket(Tableau(3)))
     +|000>
    """
    g = reduce(tableau)
    if g > KET_WARNING_RANK:
        warnings.warn(
            f"The state has 2^{g} nonzero basis states, formatting it will take a "
            "while",
            stacklevel=2,
        )
    lines = [f"{sign:>2}|{bits}>" for sign, bits in iter_basis_states(tableau)]
    return "\n".join(lines)
