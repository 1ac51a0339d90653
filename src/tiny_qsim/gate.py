"""
Validated, immutable quantum gates.

A :class:`Gate` pairs a 2^k x 2^k unitary with an ordered list of k target
qubits. Validation happens once, at construction; afterwards the gate cannot
change.

Example
-------
>>> from tiny_qsim import Gate
>>> bell_cx = Gate.cx(0, 1)
>>> bell_cx.targets
(1, 0)
>>> Gate.h(0).controlled([2]).targets
(0, 2)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from operator import index as _as_index
from typing import Sequence

import numpy as np
from numpy import ndarray

from tiny_qsim import gates as g
from tiny_qsim.embedding import TargetIndex, expand
from tiny_qsim.exceptions import MalformedOperatorError, NotUnitaryError
from tiny_qsim.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True, eq=False)
class Gate:
    """
    Unitary operator acting on an ordered tuple of target qubits.

    Parameters
    ----------
    operator : array_like
        Square complex matrix of dimension ``2 ** len(targets)``. Bit ``i`` of
        its row/column index is the state of ``targets[i]``.
    targets : sequence of int
        Distinct, non-negative qubit indices.

    Raises
    ------
    MalformedOperatorError
        Matrix is not square or its dimension is not ``2 ** len(targets)``.
    QubitIndexOutOfRangeError
        A target is negative.
    DuplicateTargetError
        A target is repeated.
    NotUnitaryError
        Matrix is singular or not unitary within tolerance.
    """

    operator: ndarray
    targets: tuple[int, ...]
    index: TargetIndex = field(init=False, repr=False)

    def __post_init__(self) -> None:
        targets = tuple(_as_index(q) for q in self.targets)
        try:
            m = np.array(self.operator, dtype=np.complex128)
        except (TypeError, ValueError) as exc:
            raise MalformedOperatorError(f"Operator is not a complex matrix: {exc}") from exc

        if m.ndim != 2 or m.shape[0] != m.shape[1]:
            raise MalformedOperatorError(f"Operator must be a square matrix, got shape {m.shape}")
        expected = 2 ** len(targets)
        if m.shape[0] != expected:
            raise MalformedOperatorError(
                f"Operator dimension {m.shape[0]} does not match 2^{len(targets)} = {expected} "
                f"for targets {list(targets)}"
            )

        index = TargetIndex(targets)

        if not g.is_unitary(m):
            raise NotUnitaryError(f"Operator on targets {list(targets)} is not unitary")

        m.flags.writeable = False
        object.__setattr__(self, "operator", m)
        object.__setattr__(self, "targets", index.qubits)
        object.__setattr__(self, "index", index)
        logger.debug("Constructed %d-qubit gate on %s", len(targets), list(targets))

    # -- Properties ---------------------------------------------------------

    @property
    def n_qubits(self) -> int:
        """Number of qubits the gate acts on."""
        return len(self.targets)

    @property
    def dim(self) -> int:
        return self.operator.shape[0]

    # -- Standard gates -----------------------------------------------------

    @classmethod
    def from_name(
        cls, name: str, targets: Sequence[int], params: tuple[float, ...] = ()
    ) -> Gate:
        """
        Build a gate from the catalogue in :mod:`tiny_qsim.gates`.

        Raises
        ------
        UnknownGateError
            If ``name`` is not in the catalogue.
        MalformedOperatorError
            If the number of targets differs from the catalogue entry's.
        ValueError
            If the number of parameters is wrong.
        """
        spec = g.lookup(name)
        targets = tuple(targets)
        if len(targets) != spec.n_qubits:
            raise MalformedOperatorError(
                f"Gate '{spec.name}' acts on {spec.n_qubits} qubit(s), "
                f"got {len(targets)} target(s) {list(targets)}"
            )
        return cls(spec.matrix(tuple(params)), targets)

    @classmethod
    def h(cls, target: int) -> Gate:
        """Hadamard gate."""
        return cls(g.H, (target,))

    @classmethod
    def x(cls, target: int) -> Gate:
        """Pauli-X (NOT) gate."""
        return cls(g.X, (target,))

    @classmethod
    def y(cls, target: int) -> Gate:
        """Pauli-Y gate."""
        return cls(g.Y, (target,))

    @classmethod
    def z(cls, target: int) -> Gate:
        """Pauli-Z gate."""
        return cls(g.Z, (target,))

    @classmethod
    def s(cls, target: int) -> Gate:
        return cls(g.S, (target,))

    @classmethod
    def t(cls, target: int) -> Gate:
        return cls(g.T, (target,))

    @classmethod
    def swap(cls, qubit1: int, qubit2: int) -> Gate:
        """SWAP gate."""
        return cls(g.SWAP, (qubit1, qubit2))

    @classmethod
    def cx(cls, control: int, target: int) -> Gate:
        """CNOT: X on ``target`` when ``control`` is 1."""
        return cls.cnx((control,), target)

    @classmethod
    def cnx(cls, controls: Sequence[int], target: int) -> Gate:
        """Multi-controlled X: flips ``target`` when every control is 1."""
        return cls.x(target).controlled(controls)

    # -- Transformations ----------------------------------------------------

    def controlled(self, controls: Sequence[int]) -> Gate:
        """
        Return a new gate that applies this one only when all ``controls`` are 1.

        The enlarged target list is this gate's targets followed by
        ``controls``, so the controls occupy the high-order bits of the new
        operator's index. The operator is the identity except for the trailing
        2^k x 2^k block (all control bits set), which holds this gate's
        operator.

        Raises
        ------
        DuplicateTargetError
            If a control is already a target or is repeated.
        """
        controls = tuple(_as_index(q) for q in controls)
        index = TargetIndex(self.targets + controls)
        control_bits = 0
        for q in controls:
            control_bits |= 1 << index.position(q)

        size = 1 << len(index)
        basis = np.arange(size)
        # Indices with every control bit set, ascending: the trailing block.
        block = basis[(basis & control_bits) == control_bits]
        m = np.eye(size, dtype=np.complex128)
        m[np.ix_(block, block)] = self.operator
        return Gate(m, index.qubits)

    def expand(self, n_qubits: int) -> ndarray:
        """Full ``2^n x 2^n`` operator on an n-qubit register. See :func:`expand`."""
        return expand(self, n_qubits)

    def __repr__(self) -> str:
        return f"Gate(qubits={self.n_qubits}, targets={list(self.targets)})"
