"""Errors raised while building or simulating a circuit."""

from __future__ import annotations


class SimulationError(Exception):
    """Base class for all tiny-qsim errors."""


class MalformedOperatorError(SimulationError, ValueError):
    """Operator is not square or its size does not match 2^(number of targets)."""


class DuplicateTargetError(SimulationError, ValueError):
    """The same qubit appears twice in one gate's target list."""

    def __init__(self, qubit: int, targets) -> None:
        super().__init__(f"Duplicate qubit {qubit} in targets {list(targets)}")
        self.qubit = qubit


class NotUnitaryError(SimulationError, ValueError):
    """Operator is singular or U @ U^dagger is not the identity."""


class QubitIndexOutOfRangeError(SimulationError, IndexError):
    """A qubit index lies outside the circuit's register."""

    def __init__(self, qubit: int, n_qubits: int | None = None) -> None:
        if n_qubits is None:
            message = f"Qubit index {qubit} must be non-negative"
        else:
            message = f"Qubit {qubit} out of range for {n_qubits}-qubit circuit"
        super().__init__(message)
        self.qubit = qubit
        self.n_qubits = n_qubits


class InvalidInitialIndexError(SimulationError, IndexError):
    """Requested basis index is outside [0, 2^n)."""

    def __init__(self, index: int, dim: int) -> None:
        super().__init__(f"Basis index {index} out of range [0, {dim})")
        self.index = index
        self.dim = dim


class EmptyCircuitError(SimulationError, ValueError):
    """Circuit has no qubits to simulate."""


class UnknownGateError(SimulationError, KeyError):
    """No catalogue gate has the requested name."""

    def __init__(self, name: str, available) -> None:
        super().__init__(f"Unknown gate: '{name}'. Available: {list(available)}")
        self.name = name

    def __str__(self) -> str:
        return self.args[0]
