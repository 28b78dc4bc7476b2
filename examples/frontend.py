# %% Run a whole simulation from a configuration file   # noqa: D100
from pprint import pprint

import numpy as np

from chpsim.frontend import SimulationConfig

# %%
conf = SimulationConfig.load_toml("examples/bell.toml")
pprint(conf)

# %% Every shot starts from the zero-state
results = conf.run(progress=True)
print("fraction of 11 outcomes:", np.mean(results.all(axis=1)))
print("outcomes always agree:", bool(np.all(results[:, 0] == results[:, 1])))

# %% The configuration can be changed and saved again
conf.general_conf.update(shots=10)
conf.circuit_conf.update(qubits=4)
conf.build()
print(conf.run())
conf.dump_json("bell.json")
