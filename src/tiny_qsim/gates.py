"""
Named gate catalogue and the unitarity checks.

Operators are numpy ``complex128`` arrays. Bit ``i`` of a catalogue matrix's
index is the state of the gate's ``i``-th target. Each entry is a
:class:`GateSpec` recording how many qubits and parameters it takes, so
:meth:`Gate.from_name` and :meth:`Circuit.gate` can reject a wrong arity
before any matrix is built.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

import numpy as np
from numpy import ndarray

from tiny_qsim.config import get_tolerances
from tiny_qsim.exceptions import UnknownGateError

Matrix = ndarray


def _frozen(rows) -> Matrix:
    m = np.array(rows, dtype=np.complex128)
    m.flags.writeable = False
    return m


# ---------------------------------------------------------------------------
# Fixed operators
# ---------------------------------------------------------------------------

I = _frozen(np.eye(2))
X = _frozen([[0, 1], [1, 0]])
Y = _frozen([[0, -1j], [1j, 0]])
Z = _frozen([[1, 0], [0, -1]])
H = _frozen(np.array([[1, 1], [1, -1]]) / np.sqrt(2.0))
S = _frozen(np.diag([1, 1j]))
T = _frozen(np.diag([1, np.exp(1j * np.pi / 4)]))

# First target is the low-order bit; exchanging the two bits is symmetric.
SWAP = _frozen(np.eye(4)[[0, 2, 1, 3]])


# ---------------------------------------------------------------------------
# Parameterized operators
# ---------------------------------------------------------------------------

def _axis_rotation(pauli: Matrix, theta: float) -> Matrix:
    """exp(-i theta/2 P) = cos(theta/2) I - i sin(theta/2) P for a Pauli P."""
    return np.cos(theta / 2) * I - 1j * np.sin(theta / 2) * pauli


def Rx(theta: float) -> Matrix:
    """Rotation around the X axis."""
    return _axis_rotation(X, theta)


def Ry(theta: float) -> Matrix:
    """Rotation around the Y axis."""
    return _axis_rotation(Y, theta)


def Rz(theta: float) -> Matrix:
    """Rotation around the Z axis."""
    return _axis_rotation(Z, theta)


def P(lam: float) -> Matrix:
    """Phase shift of |1⟩ by exp(i*lam)."""
    return np.diag([1, np.exp(1j * lam)]).astype(np.complex128)


# ---------------------------------------------------------------------------
# Catalogue
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class GateSpec:
    """
    Catalogue entry.

    Attributes
    ----------
    name : str
        Lower-case lookup key.
    n_qubits : int
        Number of targets the operator acts on.
    n_params : int
        Number of real parameters ``build`` takes.
    build : callable
        Returns the operator for the given parameters.
    """

    name: str
    n_qubits: int
    n_params: int
    build: Callable[..., Matrix]

    def matrix(self, params: tuple[float, ...] = ()) -> Matrix:
        """Operator for ``params``; raises ValueError on a wrong parameter count."""
        if len(params) != self.n_params:
            raise ValueError(
                f"Gate '{self.name}' takes {self.n_params} parameter(s), got {len(params)}"
            )
        return self.build(*params)


def _fixed(name: str, m: Matrix) -> GateSpec:
    return GateSpec(name, int(np.log2(m.shape[0])), 0, lambda: m)


GATE_REGISTRY: dict[str, GateSpec] = {
    spec.name: spec
    for spec in (
        _fixed("i", I),
        _fixed("x", X),
        _fixed("y", Y),
        _fixed("z", Z),
        _fixed("h", H),
        _fixed("s", S),
        _fixed("t", T),
        _fixed("swap", SWAP),
        GateSpec("rx", 1, 1, Rx),
        GateSpec("ry", 1, 1, Ry),
        GateSpec("rz", 1, 1, Rz),
        GateSpec("p", 1, 1, P),
    )
}


def lookup(name: str) -> GateSpec:
    """
    Catalogue entry for ``name`` (case-insensitive).

    Raises
    ------
    UnknownGateError
        If no gate has that name.
    """
    try:
        return GATE_REGISTRY[name.lower()]
    except KeyError:
        raise UnknownGateError(name, sorted(GATE_REGISTRY)) from None


# ---------------------------------------------------------------------------
# Unitarity checks
# ---------------------------------------------------------------------------

def _is_square(m: ndarray) -> bool:
    return m.ndim == 2 and m.shape[0] == m.shape[1]


def is_identity(m, tol: float | None = None) -> bool:
    """
    Check that ``m`` is the identity within ``tol``.

    Every diagonal entry must satisfy ``|m_ii - 1| < tol`` and every
    off-diagonal entry ``|m_ij| < tol``. Non-square input is never the
    identity.
    """
    if tol is None:
        tol = get_tolerances().identity
    m = np.asarray(m)
    if not _is_square(m):
        return False
    deviation = np.abs(m - np.eye(m.shape[0], dtype=m.dtype))
    return bool(np.all(deviation < tol))


def is_unitary(m, det_tol: float | None = None, tol: float | None = None) -> bool:
    """
    Check that ``m`` is unitary.

    Two stages: reject when ``|det(m)| < det_tol`` (singular matrices can
    never be unitary), then require ``m @ m^dagger`` to pass
    :func:`is_identity` with ``tol``.

    Parameters
    ----------
    m : array_like
        Candidate operator.
    det_tol : float, optional
        Determinant magnitude floor. Defaults to the configured value (1e-10).
    tol : float, optional
        Identity tolerance. Defaults to the configured value (1e-5).
    """
    if det_tol is None:
        det_tol = get_tolerances().determinant
    m = np.asarray(m, dtype=np.complex128)
    if not _is_square(m) or m.shape[0] == 0:
        return False
    if abs(np.linalg.det(m)) < det_tol:
        return False
    return is_identity(m @ m.conj().T, tol=tol)
