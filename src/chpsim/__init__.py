# Copyright 2023, QC Design GmbH and the chpsim contributors
# SPDX-License-Identifier: Apache-2.0
"""Polynomial-time simulation of stabilizer circuits.

``chpsim`` simulates circuits made of Hadamard, Phase and CNOT gates followed by
single-qubit measurements in the computational basis. Instead of keeping track of
:math:`2^n` amplitudes, a state of :math:`n` qubits is described by :math:`2n`
Pauli operators (its destabilizer and stabilizer generators), following
:cite:`aaronson_improved_2004`.

The bit-packed tableau and the row operations everything else is built upon live
in :mod:`chpsim.tableau`. The gates are in :mod:`chpsim.gates`, measurements in
:mod:`chpsim.measurement` and the routines needed to write a state in bra-ket
notation in :mod:`chpsim.ket`. Most users will only need
:class:`~chpsim.state.QuantumState`:

>>> from chpsim import QuantumState
>>> state = QuantumState(2)
>>> state.hadamard(0)
>>> state.cnot(0, 1)
>>> print(state.ket_str())
 +|00>
 +|11>

Sequences of instructions can be described with :mod:`chpsim.circuit` and run
lazily with :mod:`chpsim.simulator`, while :mod:`chpsim.frontend` allows running
whole simulations from a configuration file.
"""

import sys

import numpy as np

from chpsim.state import QuantumState  # noqa: F401

__version__ = "0.1.0"

#: Random number generator (specifically :func:`numpy.random.default_rng`)
#:
#: This is the source of the random bit drawn by every measurement whose outcome
#: is not determined by the state. To use your own, or to make your simulations
#: deterministic (by using a fixed seed), you can replace this module variable
#: **before** calling any other function or class in the package.
rng = np.random.default_rng()

# Avoid surprises
assert sys.version_info >= (3, 10), "Please upgrade Python to at least 3.10"
