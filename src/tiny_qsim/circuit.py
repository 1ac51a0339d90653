"""
Quantum circuit representation and state-vector evolution.

Provides a builder-style API for appending validated gates and a dense
evolution engine that applies them in order to the all-zero basis state.

Example
-------
>>> from tiny_qsim import Circuit
>>> qc = Circuit(2)
>>> qc.h(0).cx(0, 1)
>>> result = qc.run()
>>> sorted(result)
['00', '01', '10', '11']
>>> round(abs(result["11"]) ** 2, 3)
0.5
"""

from __future__ import annotations

from operator import index as _as_index
from typing import Iterator, Sequence

import numpy as np
from numpy import ndarray

from tiny_qsim.embedding import expand
from tiny_qsim.exceptions import (
    EmptyCircuitError,
    InvalidInitialIndexError,
    QubitIndexOutOfRangeError,
)
from tiny_qsim.gate import Gate
from tiny_qsim.logging import get_logger

logger = get_logger(__name__)


def basis_label(index: int, n_qubits: int) -> str:
    """Fixed-width binary label of a basis index; qubit 0 is the rightmost bit."""
    return format(index, f"0{n_qubits}b")


class Circuit:
    """
    Ordered sequence of gates over a fixed number of qubits.

    Parameters
    ----------
    n_qubits : int
        Number of quantum bits (non-negative).

    Example
    -------
    >>> qc = Circuit(3)
    >>> qc.h(0).x(1).h(1).cnx([0, 1], 2)
    Circuit(qubits=3, gates=4)
    """

    def __init__(self, n_qubits: int) -> None:
        n_qubits = _as_index(n_qubits)
        if n_qubits < 0:
            raise ValueError(f"Qubit count must be non-negative, got {n_qubits}")
        self.n_qubits = n_qubits
        self._gates: list[Gate] = []

    # -- Properties ---------------------------------------------------------

    @property
    def gates(self) -> list[Gate]:
        """Gates in execution order."""
        return list(self._gates)

    @property
    def dim(self) -> int:
        """Dimension of the state space, 2^n."""
        return 2 ** self.n_qubits

    # -- Internal helpers ---------------------------------------------------

    def _validate_qubits(self, qubits: Sequence[int]) -> None:
        for q in qubits:
            if not 0 <= q < self.n_qubits:
                raise QubitIndexOutOfRangeError(q, self.n_qubits)

    def _append(self, gate: Gate) -> Circuit:
        self._gates.append(gate)
        logger.debug("Appended %r at position %d", gate, len(self._gates) - 1)
        return self

    # -- Gates --------------------------------------------------------------

    def add_gate(self, gate: Gate) -> Circuit:
        """Append an already constructed gate after checking its targets."""
        self._validate_qubits(gate.targets)
        return self._append(gate)

    def h(self, qubit: int) -> Circuit:
        """Hadamard gate."""
        self._validate_qubits((qubit,))
        return self._append(Gate.h(qubit))

    def x(self, qubit: int) -> Circuit:
        """Pauli-X (NOT) gate."""
        self._validate_qubits((qubit,))
        return self._append(Gate.x(qubit))

    def y(self, qubit: int) -> Circuit:
        """Pauli-Y gate."""
        self._validate_qubits((qubit,))
        return self._append(Gate.y(qubit))

    def z(self, qubit: int) -> Circuit:
        """Pauli-Z gate."""
        self._validate_qubits((qubit,))
        return self._append(Gate.z(qubit))

    def s(self, qubit: int) -> Circuit:
        """S (phase) gate."""
        self._validate_qubits((qubit,))
        return self._append(Gate.s(qubit))

    def t(self, qubit: int) -> Circuit:
        """T gate."""
        self._validate_qubits((qubit,))
        return self._append(Gate.t(qubit))

    def swap(self, qubit1: int, qubit2: int) -> Circuit:
        """SWAP gate."""
        self._validate_qubits((qubit1, qubit2))
        return self._append(Gate.swap(qubit1, qubit2))

    def cx(self, control: int, target: int) -> Circuit:
        """CNOT (controlled-X) gate."""
        self._validate_qubits((control, target))
        return self._append(Gate.cx(control, target))

    def cnot(self, control: int, target: int) -> Circuit:
        """Alias for cx."""
        return self.cx(control, target)

    def cnx(self, controls: Sequence[int], target: int) -> Circuit:
        """X on ``target`` controlled by every qubit in ``controls``."""
        controls = tuple(controls)
        self._validate_qubits(controls + (target,))
        return self._append(Gate.cnx(controls, target))

    def gate(
        self, name: str, qubits: Sequence[int], params: Sequence[float] = ()
    ) -> Circuit:
        """
        Append a catalogue gate by name.

        Example
        -------
        >>> Circuit(2).gate("ry", [1], [0.5]).gate("swap", [0, 1])
        Circuit(qubits=2, gates=2)
        """
        qubits = tuple(qubits)
        self._validate_qubits(qubits)
        return self._append(Gate.from_name(name, qubits, tuple(params)))

    def controlled(self, gate: Gate, controls: Sequence[int]) -> Circuit:
        """Append ``gate`` conditioned on all ``controls`` being 1."""
        controls = tuple(controls)
        self._validate_qubits(tuple(gate.targets) + controls)
        return self._append(gate.controlled(controls))

    # -- Execution ----------------------------------------------------------

    def initial_state(self, index: int = 0) -> ndarray:
        """
        Basis state vector with amplitude 1 at ``index``.

        Raises
        ------
        InvalidInitialIndexError
            If ``index`` is outside ``[0, 2^n)``.
        """
        index = _as_index(index)
        dim = self.dim
        if not 0 <= index < dim:
            raise InvalidInitialIndexError(index, dim)
        state = np.zeros(dim, dtype=np.complex128)
        state[index] = 1.0
        return state

    def evolve(self, initial_index: int = 0) -> Iterator[tuple[Gate, ndarray]]:
        """
        Apply the gates one by one, yielding ``(gate, state)`` after each.

        Gates are applied in append order. The circuit itself is not modified.

        The register and the initial index are checked when ``evolve`` is
        called, before the iterator is returned. A gate targeting a qubit
        outside the register raises when that step is reached.

        Raises
        ------
        EmptyCircuitError
            If the circuit has no qubits.
        InvalidInitialIndexError
            If ``initial_index`` is outside ``[0, 2^n)``.
        QubitIndexOutOfRangeError
            If a gate targets a qubit outside the register.
        """
        return self._steps(self._prepare(initial_index))

    def statevector(self, initial_index: int = 0) -> ndarray:
        """Final state vector after all gates."""
        state = self._prepare(initial_index)
        for _, state in self._steps(state):
            pass
        return state

    def _prepare(self, initial_index: int) -> ndarray:
        if self.n_qubits == 0:
            raise EmptyCircuitError("Cannot simulate a circuit with 0 qubits")
        return self.initial_state(initial_index)

    def _steps(self, state: ndarray) -> Iterator[tuple[Gate, ndarray]]:
        for step, gate in enumerate(self._gates):
            state = expand(gate, self.n_qubits) @ state
            logger.debug("Step %d: applied %r", step, gate)
            yield gate, state

    def run(self) -> dict[str, complex]:
        """
        Simulate the circuit from ``|0...0⟩``.

        Returns
        -------
        dict[str, complex]
            One entry per basis label (2^n in total), mapping the
            fixed-width binary label to its final amplitude.
        """
        logger.debug("Running %r", self)
        state = self.statevector()
        return {
            basis_label(i, self.n_qubits): complex(amp) for i, amp in enumerate(state)
        }

    # -- Utility ------------------------------------------------------------

    def __len__(self) -> int:
        """Return number of gates."""
        return len(self._gates)

    def __iter__(self) -> Iterator[Gate]:
        return iter(list(self._gates))

    def __repr__(self) -> str:
        return f"Circuit(qubits={self.n_qubits}, gates={len(self._gates)})"
