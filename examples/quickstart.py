# %% Import necessary objects and functions   # noqa: D100
import numpy as np

import chpsim
from chpsim import QuantumState
from chpsim.circuit import Circuit
from chpsim.simulator import CircuitSimulator
from chpsim.tableau import pprint_state

# %% Set fixed RNG seed, so we always get the same results
chpsim.rng = np.random.default_rng(seed=1234567890)

# %% Prepare a GHZ state on three qubits
state = QuantumState(3)
state.hadamard(0)
state.cnot([0, 1], [1, 2])

# %% The state is described by its stabilizers (and destabilizers)
pprint_state(state.tableau, show_destabilisers=True)

# %% which can also be written in bra-ket notation
print(state.ket_str())

# %% Measuring one qubit of a GHZ state gives a random result, after which all
# other outcomes are fixed
for qubit in (1, 0, 2):
    m = state.measure(qubit)
    print(f"qubit {qubit}: {m.bit} ({m.determinacy.value})")

# %% Circuits can be written as text and run lazily, one measurement at a time
circuit = Circuit.from_str(
    """
    H 0
    CX 0 1
    S 1
    M 0 1
    """
)
for m in QuantumState(circuit.number_of_qubits).run(circuit):
    print(m)

# %% or sampled many times with a simulator
sim = CircuitSimulator(circuit)
samples = []
for _ in range(10):
    sim.run()
    samples.append(sim.process_results())
print(np.array(samples))
