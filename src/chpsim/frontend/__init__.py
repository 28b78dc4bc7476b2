# Copyright 2023, QC Design GmbH and the chpsim contributors
# SPDX-License-Identifier: Apache-2.0
"""Front-end configuration processing for running simulations.

A simulation is described by a circuit (given inline or as a path to a file
in the format of :mod:`chpsim.circuit`) and some general settings, and can be
loaded from a ``toml`` file:

.. code-block:: toml

    [general]
    seed = 1234
    shots = 100

    [circuit]
    circuit = \"\"\"
    H 0
    CX 0 1
    M 0 1
    \"\"\"

or from the equivalent ``json`` file or :class:`dict`:

>>> conf = SimulationConfig.from_dict(
...     {"general": {"seed": 1234, "shots": 4}, "circuit": {"circuit": "H 0\\nM 0"}}
... )
>>> conf.build()
>>> conf.run().shape
(4, 1)
"""
from __future__ import annotations

import json
from dataclasses import asdict, dataclass, field
from pathlib import Path
from pprint import pformat
from typing import Any, Optional, cast

import numpy as np
import toml  # type: ignore
from jsonschema import validate
from tqdm import tqdm

import chpsim
from chpsim.circuit import Circuit
from chpsim.frontend import schemas
from chpsim.simulator import CircuitSimulator


def _validate_config(config_dict: dict) -> bool:
    """Validate the simulation config using the schema.

    Args:
        config_dict : dictionary of the simulation configuration

    Returns:
        ``True`` if validated, else raises an Error. The errors raised are according to
        :func:`~jsonschema.validate`.
    """
    schema_dict = schemas.get_config_schema()
    validate(config_dict, schema_dict)
    # validate will throw a detailed error message, if not assume to pass
    return True


@dataclass(kw_only=True)
class GeneralConfig:
    """Generic configuration of a simulation.

    Raises:
        ValueError: if ``shots`` is not a positive integer.

    Examples:
        >>> print(GeneralConfig(seed=42))
        GeneralConfig(seed=42, shots=1)
    """

    seed: Optional[int] = field(default=None)
    """The seed of :data:`chpsim.rng`. If ``None``, the generator is left as is."""

    shots: int = field(default=1)
    """How many times the circuit is run. Defaults to 1."""

    def __post_init__(self):  # noqa: D105
        if not (isinstance(self.shots, int) and self.shots > 0):
            raise ValueError(f"general.shots = {self.shots} must be a positive integer")

    def __str__(self):  # noqa: D105
        return pformat(self)

    @classmethod
    def from_dict(cls, config_dict: dict) -> GeneralConfig:
        """Instantiate :class:`GeneralConfig` object from config dictionary."""
        config_dict.setdefault("shots", 1)
        return cls(
            seed=cast(Optional[int], config_dict.get("seed")),
            shots=cast(int, config_dict.get("shots")),
        )

    def as_dict(self) -> dict[str, int]:
        """Return class attributes as dictionary, omitting unset ones."""
        return {k: v for k, v in asdict(self).items() if v is not None}

    def update(self, **kwargs):
        """Update class attributes with given ``**kwargs``.

        Args:
            kwargs: Any class attribute.

        Returns:
            None, update in-place.
        """
        for key, value in kwargs.items():
            if hasattr(self, key):
                setattr(self, key, value)


@dataclass(kw_only=True)
class CircuitConfig:
    """Class to store the configurations for a circuit.

    Exactly one of :attr:`circuit` and :attr:`circuit_path` must be given.

    Raises:
        ValueError: if both or none of the circuit sources are given, or if
            ``qubits`` is negative.
        FileNotFoundError: if ``circuit_path`` does not point to a file.

    Examples:
        >>> conf = CircuitConfig(circuit="H 0")
        >>> print(conf)
        CircuitConfig(circuit='H 0', circuit_path=None, qubits=None)
    """

    circuit: Optional[str] = field(default=None)
    """The circuit itself, in the format of :meth:`.Circuit.from_str`."""

    circuit_path: Optional[str] = field(default=None)
    """The path to a file containing the circuit."""

    qubits: Optional[int] = field(default=None)
    """Number of qubits to simulate.

    Defaults to ``None``, meaning as many as the circuit needs.
    """

    def __post_init__(self) -> None:  # noqa: D105
        if (self.circuit is None) == (self.circuit_path is None):
            raise ValueError("Exactly one of circuit and circuit_path must be given")
        if self.circuit_path is not None and not Path(self.circuit_path).is_file():
            raise FileNotFoundError(
                f"The given circuit file {self.circuit_path!r} is inaccessible!"
            )
        if self.qubits is not None and self.qubits < 0:
            raise ValueError(f"circuit.qubits = {self.qubits} can't be negative")

    def __str__(self):  # noqa: D105
        return pformat(self)

    @classmethod
    def from_dict(cls, config_dict: dict) -> CircuitConfig:
        """Instantiate :class:`CircuitConfig` object from config dictionary.

        Args:
            config_dict : dictionary containing circuit configurations

        Returns:
            A :class:`CircuitConfig` object.
        """
        return cls(
            circuit=config_dict.get("circuit"),
            circuit_path=config_dict.get("circuit_path"),
            qubits=config_dict.get("qubits"),
        )

    def as_dict(self) -> dict[str, str | int]:
        """Return class attributes as dictionary, omitting unset ones."""
        return {k: v for k, v in asdict(self).items() if v is not None}

    def update(self, **kwargs):
        """Update class attributes with given ``**kwargs``.

        Args:
            kwargs: Any class attribute.

        Returns:
            None, update in-place.
        """
        for key, value in kwargs.items():
            if hasattr(self, key):
                setattr(self, key, value)

    def instantiate(self) -> Circuit:
        """Parse the configured circuit.

        Returns:
            A :class:`.Circuit` object.
        """
        if self.circuit_path is not None:
            with open(self.circuit_path, "r") as f:
                return Circuit.from_str(f.read())
        return Circuit.from_str(cast(str, self.circuit))


@dataclass(kw_only=True)
class SimulationConfig:
    """Class to handle running a simulation using a configuration file."""

    circuit_conf: CircuitConfig
    """Configuration of the circuit to simulate.

    No default value. This is required from the user.
    """

    general_conf: GeneralConfig = field(default_factory=lambda: GeneralConfig())
    """Generic configurations of the simulation."""

    _circuit: Circuit | None = None
    _simulator: CircuitSimulator | None = None

    @property
    def circuit(self) -> Circuit:
        """The built :class:`.Circuit` object of the simulation."""
        if self._circuit is None:
            raise AttributeError("Circuit not built yet, call build() first")
        return self._circuit

    @property
    def simulator(self) -> CircuitSimulator:
        """The built :class:`.CircuitSimulator` object of the simulation."""
        if self._simulator is None:
            raise AttributeError("Simulator not built yet, call build() first")
        return self._simulator

    def update_rng(self):
        """Replace :data:`chpsim.rng` with a seeded generator, if a seed is set."""
        if self.general_conf.seed is not None:
            chpsim.rng = np.random.default_rng(seed=self.general_conf.seed)

    @classmethod
    def load_toml(cls, toml_path: str) -> SimulationConfig:
        """Instantiate a :class:`SimulationConfig` object from a ``toml`` file.

        For the schema, see :func:`~chpsim.frontend.schemas.get_config_schema`.

        Args:
            toml_path : The path to the ``toml`` config file
        """
        config_dict: dict[str, Any] = toml.load(toml_path)
        _validate_config(config_dict)
        return cls.from_dict(config_dict)

    @classmethod
    def load_json(cls, json_path: str) -> SimulationConfig:
        """Instantiate :class:`SimulationConfig` from a ``json`` file.

        For the schema, see :func:`~chpsim.frontend.schemas.get_config_schema`.

        Args:
            json_path :The path to the ``json`` config file.
        """
        with open(json_path) as f:
            config_dict = json.load(f)
        _validate_config(config_dict)
        return cls.from_dict(config_dict)

    @classmethod
    def from_dict(cls, config_dict: dict) -> SimulationConfig:
        """Instantiate a :class:`SimulationConfig` from a :class:`dict`.

        Args:
            config_dict : The configuration dictionary of the simulation.

        .. code-block:: python

            {
                'general': {'seed': 1234, 'shots': 100},
                'circuit': {'circuit_path': 'path/to/circuit.txt', 'qubits': 5},
            }
        """
        config_dict.setdefault("general", {})
        config_dict.setdefault("circuit", {})
        return cls(
            general_conf=GeneralConfig.from_dict(
                cast(dict, config_dict.get("general"))
            ),
            circuit_conf=CircuitConfig.from_dict(
                cast(dict, config_dict.get("circuit"))
            ),
        )

    def as_dict(self) -> dict[str, Any]:
        """Return all configurations as dictionary."""
        return {
            "general": self.general_conf.as_dict(),
            "circuit": self.circuit_conf.as_dict(),
        }

    def update(self, **kwargs):
        """Update class attributes with given ``**kwargs``.

        Useful to update multiple attributes at once with a :class:`dict`.

        Args:
            kwargs: Any class attribute.

        Returns:
            None, updates in-place.
        """
        for key, value in kwargs.items():
            if hasattr(self, key):
                setattr(self, key, value)

    def validate(self) -> bool:
        """Validate the current state of configurations."""
        return _validate_config(self.as_dict())

    def __str__(self):
        """Return a slightly better string representation of this object."""
        return pformat(self, compact=False)

    def build(self) -> None:
        """Seed the random number generator and build circuit and simulator."""
        self.update_rng()
        self._circuit = self.circuit_conf.instantiate()
        self._simulator = CircuitSimulator(self._circuit, self.circuit_conf.qubits)

    def dump_toml(self, toml_path: str) -> None:
        """Save the config as a ``toml`` file at the given path."""
        with open(toml_path, "w") as file:
            toml.dump(self.as_dict(), file)

    def dump_json(self, json_path: str):
        """Save the config as a ``json`` file at the given path."""
        with open(json_path, "w") as file:
            json.dump(self.as_dict(), file)

    def run(self, progress: bool = False) -> np.ndarray:
        """Run the circuit :attr:`GeneralConfig.shots` times.

        Args:
            progress: show a progress bar.

        Returns:
            an array of shape ``(shots, measurements)`` with all measured bits.
        """
        if self._simulator is None:
            self.build()
        sim = self.simulator
        shots = self.general_conf.shots
        results = np.zeros((shots, sim.circ.number_measured_qubits), dtype="u1")
        for i in tqdm(range(shots), disable=not progress):
            sim.run()
            results[i] = sim.process_results()
        return results
