"""
Embedding of a gate's small operator into the full register.

A gate on targets ``(t_0, ..., t_{k-1})`` carries a 2^k x 2^k operator whose
index bit ``i`` is the state of qubit ``t_i``. Expanding it to an n-qubit
register gives a 2^n x 2^n operator that acts as the gate on the targets and
as the identity on every other qubit. No Kronecker products are formed: each
entry is read directly from the small operator after remapping bits.

The result is dense, so memory and work grow as 4^n per gate.
"""

from __future__ import annotations

from operator import index as _as_index
from typing import TYPE_CHECKING, Iterable, Iterator

import numpy as np
from numpy import ndarray

from tiny_qsim.config import DENSE_WARNING_QUBITS
from tiny_qsim.exceptions import DuplicateTargetError, QubitIndexOutOfRangeError
from tiny_qsim.logging import get_logger

if TYPE_CHECKING:
    from tiny_qsim.gate import Gate

logger = get_logger(__name__)


class TargetIndex:
    """
    Bidirectional map between global qubit indices and target positions.

    Position ``i`` in the target list is bit ``i`` of the gate's small
    operator index.

    Parameters
    ----------
    targets : iterable of int
        Ordered, distinct, non-negative qubit indices.

    Raises
    ------
    QubitIndexOutOfRangeError
        If a target is negative.
    DuplicateTargetError
        If a target appears more than once.
    """

    __slots__ = ("_qubits", "_positions")

    def __init__(self, targets: Iterable[int]) -> None:
        qubits = tuple(_as_index(q) for q in targets)
        positions: dict[int, int] = {}
        for pos, q in enumerate(qubits):
            if q < 0:
                raise QubitIndexOutOfRangeError(q)
            if q in positions:
                raise DuplicateTargetError(q, qubits)
            positions[q] = pos
        self._qubits = qubits
        self._positions = positions

    @property
    def qubits(self) -> tuple[int, ...]:
        """Global qubit indices in target order."""
        return self._qubits

    @property
    def mask(self) -> int:
        """Bit mask with one bit set per target qubit."""
        m = 0
        for q in self._qubits:
            m |= 1 << q
        return m

    def position(self, qubit: int) -> int:
        """Position of a global qubit in the target list."""
        try:
            return self._positions[qubit]
        except KeyError:
            raise KeyError(f"Qubit {qubit} is not a target of {self._qubits}") from None

    def compress(self, basis_index):
        """
        Gather target bits of a full-register basis index into a small index.

        Works on a Python int or an integer ndarray of indices.
        """
        small = basis_index * 0
        for pos, q in enumerate(self._qubits):
            small |= ((basis_index >> q) & 1) << pos
        return small

    def __contains__(self, qubit: object) -> bool:
        return qubit in self._positions

    def __len__(self) -> int:
        return len(self._qubits)

    def __iter__(self) -> Iterator[int]:
        return iter(self._qubits)

    def __repr__(self) -> str:
        return f"TargetIndex({list(self._qubits)})"


def expand(gate: Gate, n_qubits: int) -> ndarray:
    """
    Expand a gate to the full ``2^n x 2^n`` operator of an n-qubit register.

    Entry ``(row, col)`` is zero unless row and col agree on every non-target
    qubit. Otherwise it is ``gate.operator[small_row, small_col]`` where the
    small indices collect the target bits in target-list order.

    Parameters
    ----------
    gate : Gate
        Validated gate.
    n_qubits : int
        Register size. Every target must be below it.

    Returns
    -------
    ndarray
        Dense complex128 operator. Unitary because ``gate.operator`` is.

    Raises
    ------
    QubitIndexOutOfRangeError
        If a target lies outside ``[0, n_qubits)``.
    """
    index = gate.index
    for q in index:
        if q >= n_qubits:
            raise QubitIndexOutOfRangeError(q, n_qubits)

    if n_qubits > DENSE_WARNING_QUBITS:
        logger.warning(
            "Expanding gate on %d qubits to a dense %d x %d operator",
            n_qubits, 2**n_qubits, 2**n_qubits,
        )

    dim = 1 << n_qubits
    basis = np.arange(dim, dtype=np.int64)
    rest_mask = (dim - 1) & ~index.mask

    # Transitions that touch a non-target qubit stay zero.
    rest = basis & rest_mask
    allowed = rest[:, None] == rest[None, :]

    small = index.compress(basis)
    full = gate.operator[small[:, None], small[None, :]]
    return np.where(allowed, full, 0).astype(np.complex128)
