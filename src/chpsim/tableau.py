# Copyright 2023, QC Design GmbH and the chpsim contributors
# SPDX-License-Identifier: Apache-2.0
"""Bit-packed stabilizer tableau and the row operations acting on it.

This module implements the data structure at the heart of the package, and it's
independent of anything else in the package itself.

Notes:
    A state of :math:`n` qubits is stored as :math:`2n+1` rows. Each row is a Pauli
    operator acting on all :math:`n` qubits together with a phase. Rows
    ``0..n-1`` are the *destabilizers*, rows ``n..2n-1`` the *stabilizers* and
    the last row, ``2n``, is scratch space used by :meth:`Tableau.rowswap`,
    by the measurement routine and by the basis enumeration in :mod:`chpsim.ket`.
    See :cite:`aaronson_improved_2004`, p. 4.

    The X- and Z-parts of the operators are kept in two separate bit-matrices,
    :attr:`Tableau.x` and :attr:`Tableau.z`. Every row is packed into
    ``(n >> 5) + 1`` words of 32 bits, so that the bit of qubit ``j`` is found in
    word ``j >> 5`` under the mask ``POWERS[j & 31]``. The pair of bits
    ``(x, z)`` for a qubit encodes ``I`` (0, 0), ``X`` (1, 0), ``Y`` (1, 1) and
    ``Z`` (0, 1).

    The phases are kept in :attr:`Tableau.r` as the exponent of :math:`i`, so
    ``0`` means :math:`+1`, ``1`` means :math:`+i`, ``2`` means :math:`-1` and
    ``3`` means :math:`-i`. Generator rows only ever hold ``0`` or ``2``.

    Like everything that wraps a numpy array, :attr:`Tableau.x`, :attr:`Tableau.z`
    and :attr:`Tableau.r` are **not** copied when assigned to other variables.
    If you want to compare a tableau before and after some operation, use
    :meth:`Tableau.copy` first:

    >>> t = Tableau(3)
    >>> ref = t.copy()
    >>> t.rowmult(3, 4)
    >>> t == ref
    False
"""
from __future__ import annotations

from typing import Any

import numpy as np

#: Powers of two, ``POWERS[i] == 2**i``, used to address single bits in a word.
POWERS = np.array([1 << i for i in range(32)], dtype=np.uint32)
POWERS.setflags(write=False)

_SHIFTS = np.arange(32, dtype=np.uint32)

#: Pauli letter for each ``x + 2 * z`` value.
PAULI_LETTERS = "IXZY"


def address(position: int) -> tuple[int, np.uint32]:
    """Return the word index and the bit mask of a qubit inside a packed row.

    >>> word, mask = address(33)
    >>> word, int(mask)
    (1, 2)
    """
    return position >> 5, POWERS[position & 31]


def unpack_bits(words: np.ndarray, number_of_qubits: int) -> np.ndarray:
    """Unpack a row of 32-bit words into one ``0``/``1`` entry per qubit.

    Args:
        words: the packed row.
        number_of_qubits: how many bits to return, starting from qubit 0.

    Returns:
        a 1D array of ``int8``.
    """
    bits = (words[:, np.newaxis] >> _SHIFTS) & 1
    return bits.astype(np.int8).ravel()[:number_of_qubits]


def _g(x1: np.ndarray, z1: np.ndarray, x2: np.ndarray, z2: np.ndarray) -> np.ndarray:
    """Help calculate the phase of the operator when multiplying pauli operators.

    This is effectively the exponent (1, 0, or -1) of the :math:`i` factor resulting
    from the product of the single-qubit operators ``(x1, z1)`` and ``(x2, z2)``, in
    this order, computed for all qubits at once.

    See the definition of ``rowsum(h, i)`` in :cite:`aaronson_improved_2004`.

    Args:
        x1: x bits of operator 1
        z1: z bits of operator 1
        x2: x bits of operator 2
        z2: z bits of operator 2

    Returns:
        exponent of i for each qubit
    """
    # this casting is necessary, otherwise unsigned numpy types will loop back
    x1, z1, x2, z2 = (np.asarray(b, dtype=np.int8) for b in (x1, z1, x2, z2))
    return np.where(
        (x1 & z1).astype(bool),
        z2 - x2,  # Y: YZ = iX, YX = -iZ
        np.where(
            x1.astype(bool),
            z2 * (2 * x2 - 1),  # X: XY = iZ, XZ = -iY
            np.where(z1.astype(bool), x2 * (1 - 2 * z2), 0),  # Z: ZX = iY, ZY = -iX
        ),
    )


class Tableau:
    """Stabilizer and destabilizer generators of a state, packed into bits.

    The tableau is always created in the computational zero-state: destabilizer
    ``i`` is :math:`X_i` and stabilizer ``i`` is :math:`Z_i`.

    >>> print(Tableau(2))
    +XI
    +IX
    ---
    +ZI
    +IZ

    .. automethod:: __init__
    """

    def __init__(self, number_of_qubits: int):
        """Create the tableau of the zero-state.

        Args:
            number_of_qubits: total number of qubits, can be ``0``.

        Raises:
            TypeError: if ``number_of_qubits`` is not an integer.
            ValueError: if ``number_of_qubits`` is negative.
        """
        if isinstance(number_of_qubits, bool) or not isinstance(
            number_of_qubits, (int, np.integer)
        ):
            raise TypeError("The number of qubits must be an integer")
        if number_of_qubits < 0:
            raise ValueError("The number of qubits can't be negative")

        n = int(number_of_qubits)
        self._n = n
        self._words = (n >> 5) + 1

        #: X-part of all rows, shape ``(2n+1, (n >> 5) + 1)``.
        self.x = np.zeros((2 * n + 1, self._words), dtype=np.uint32)
        #: Z-part of all rows, shape ``(2n+1, (n >> 5) + 1)``.
        self.z = np.zeros((2 * n + 1, self._words), dtype=np.uint32)
        #: Phase of all rows as exponent of :math:`i`.
        self.r = np.zeros(2 * n + 1, dtype=np.uint8)

        for i in range(n):
            word, mask = address(i)
            self.x[i, word] = mask
            self.z[i + n, word] = mask

    @property
    def number_of_qubits(self) -> int:
        """Number of qubits described by this tableau."""
        return self._n

    @property
    def n(self) -> int:
        """Alias of :attr:`number_of_qubits`."""
        return self._n

    @property
    def words(self) -> int:
        """Number of 32-bit words used for each row."""
        return self._words

    @property
    def scratch(self) -> int:
        """Index of the scratch row."""
        return 2 * self._n

    def __eq__(self, other: Any) -> bool:
        """Compare the generators (and their phases) of two tableaux.

        The scratch row does not take part in the comparison.
        """
        if not isinstance(other, Tableau):
            return NotImplemented
        if self._n != other._n:
            return False
        rows = slice(0, 2 * self._n)
        return bool(
            np.array_equal(self.x[rows], other.x[rows])
            and np.array_equal(self.z[rows], other.z[rows])
            and np.array_equal(self.r[rows], other.r[rows])
        )

    def __repr__(self) -> str:  # noqa: D105
        return f"<Tableau of {self._n} qubits>"

    def __str__(self) -> str:  # noqa: D105
        d, s = tableau_to_strings(self)
        # you can't use new-lines in f-strings parameters, so this is necessary
        new_line = "\n"
        return f"{new_line.join(d)}\n{'-' * (self._n + 1)}\n{new_line.join(s)}"

    def copy(self) -> Tableau:
        """Return an independent copy of this tableau."""
        other = Tableau.__new__(Tableau)
        other._n = self._n
        other._words = self._words
        other.x = self.x.copy()
        other.z = self.z.copy()
        other.r = self.r.copy()
        return other

    def x_bit(self, row: int, qubit: int) -> bool:
        """Whether row ``row`` has its X bit set on ``qubit``."""
        word, mask = address(qubit)
        return bool(self.x[row, word] & mask)

    def z_bit(self, row: int, qubit: int) -> bool:
        """Whether row ``row`` has its Z bit set on ``qubit``."""
        word, mask = address(qubit)
        return bool(self.z[row, word] & mask)

    def x_column(self, qubit: int) -> np.ndarray:
        """X bits of all rows (scratch included) on ``qubit``, as booleans."""
        word, mask = address(qubit)
        return (self.x[:, word] & mask) != 0

    def z_column(self, qubit: int) -> np.ndarray:
        """Z bits of all rows (scratch included) on ``qubit``, as booleans."""
        word, mask = address(qubit)
        return (self.z[:, word] & mask) != 0

    def row_bits(self, row: int) -> tuple[np.ndarray, np.ndarray]:
        """Unpacked X and Z bits of a row, one entry per qubit."""
        return (
            unpack_bits(self.x[row], self._n),
            unpack_bits(self.z[row], self._n),
        )

    def to_dense(self) -> np.ndarray:
        """Return the generators as a binary ``(2n, 2n+1)`` matrix.

        Each row is laid out as ``[x_0 .. x_{n-1} | z_0 .. z_{n-1} | sign]``, where
        the sign bit is ``1`` for a phase of :math:`-1`. The scratch row is not part
        of the output.

        >>> Tableau(1).to_dense()
        array([[1, 0, 0],
               [0, 1, 0]], dtype=uint8)
        """
        n = self._n
        dense = np.zeros((2 * n, 2 * n + 1), dtype=np.uint8)
        for i in range(2 * n):
            xs, zs = self.row_bits(i)
            dense[i, :n] = xs
            dense[i, n : 2 * n] = zs
        dense[:, -1] = self.r[: 2 * n] // 2
        return dense

    def rowcopy(self, i: int, k: int):
        """Set row ``i`` equal to row ``k``."""
        self.x[i] = self.x[k]
        self.z[i] = self.z[k]
        self.r[i] = self.r[k]

    def rowswap(self, i: int, k: int):
        """Swap rows ``i`` and ``k``, using the scratch row as temporary storage."""
        scratch = self.scratch
        self.rowcopy(scratch, k)
        self.rowcopy(k, i)
        self.rowcopy(i, scratch)

    def rowset(self, i: int, b: int):
        """Set row ``i`` equal to the ``b``-th observable.

        The observable is :math:`X_b` for ``b < n`` and :math:`Z_{b-n}` otherwise, in
        both cases with a :math:`+1` phase.
        """
        self.x[i] = 0
        self.z[i] = 0
        self.r[i] = 0
        if b < self._n:
            word, mask = address(b)
            self.x[i, word] = mask
        else:
            word, mask = address(b - self._n)
            self.z[i, word] = mask

    def clifford(self, i: int, k: int) -> int:
        """Return the phase exponent (0..3) of the product of row ``k`` into row ``i``.

        The single-qubit products contribute :math:`+1` for ``XY``, ``YZ`` and
        ``ZX``, and :math:`-1` for ``XZ``, ``YX`` and ``ZY``, where the operator of
        row ``k`` is the left factor. The phases of the two rows are added on top.
        """
        xi, zi = self.row_bits(i)
        xk, zk = self.row_bits(k)
        exponent = int(np.sum(_g(xk, zk, xi, zi)))
        return (exponent + int(self.r[i]) + int(self.r[k])) % 4

    def rowmult(self, i: int, k: int):
        """Left-multiply row ``i`` by row ``k``, keeping track of the phase."""
        self.r[i] = self.clifford(i, k)
        self.x[i] ^= self.x[k]
        self.z[i] ^= self.z[k]


def row_to_string(tableau: Tableau, i: int) -> str:
    """Convert one row of the tableau to a Pauli string such as ``"-XIZY"``.

    >>> t = Tableau(3)
    >>> row_to_string(t, 4)
    '+IZI'
    """
    xs, zs = tableau.row_bits(i)
    sign = "-" if tableau.r[i] == 2 else "+"
    return sign + "".join(PAULI_LETTERS[p] for p in (xs + 2 * zs))


def tableau_to_strings(tableau: Tableau) -> tuple[list[str], list[str]]:
    """Convert a tableau to a series of Pauli strings.

    Returns:
        a tuple of two lists. Each list contains the destabilisers and stabilisers,
        respectively, as strings.

    Examples:
        >>> d, s = tableau_to_strings(Tableau(2))
        >>> print(d)
        ['+XI', '+IX']
        >>> print(s)
        ['+ZI', '+IZ']
    """
    n = tableau.number_of_qubits
    operators = [row_to_string(tableau, i) for i in range(2 * n)]
    return operators[:n], operators[n:]


def pprint_state(tableau: Tableau, show_destabilisers: bool = False, **kwargs):
    """Pretty-print the generators of a tableau.

    Args:
        tableau: the tableau to print.
        show_destabilisers: include destabilisers in the output.
        kwargs: passed over to :func:`print`.

    Examples:
        >>> pprint_state(Tableau(2), show_destabilisers=True)
        Destabilisers:
        +XI
        +IX
        Stabilisers:
        +ZI
        +IZ
    """
    d, s = tableau_to_strings(tableau)
    destabilisers = "\n".join(d)
    stabilisers = "\n".join(s)
    if show_destabilisers:
        print(f"Destabilisers:\n{destabilisers}\nStabilisers:\n{stabilisers}", **kwargs)
    else:
        print(f"Stabilisers:\n{stabilisers}", **kwargs)
