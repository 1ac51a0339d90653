"""
Numeric tolerances used by the unitarity checks.

Defaults can be changed through the environment before import
(``TINY_QSIM_IDENTITY_TOL``, ``TINY_QSIM_DETERMINANT_TOL``), globally with
:func:`set_tolerances`, or for the duration of a block with
:func:`tolerance_context`.
"""

from __future__ import annotations

import os
from contextlib import contextmanager
from dataclasses import dataclass, replace
from typing import Iterator

_IDENTITY_ENV_VAR = "TINY_QSIM_IDENTITY_TOL"
_DETERMINANT_ENV_VAR = "TINY_QSIM_DETERMINANT_TOL"

DEFAULT_IDENTITY_TOL = 1e-5
DEFAULT_DETERMINANT_TOL = 1e-10

# Above this qubit count the dense 2^n x 2^n expansion gets expensive.
DENSE_WARNING_QUBITS = 12


@dataclass(frozen=True)
class Tolerances:
    """
    Tolerances for the identity and determinant checks.

    Attributes
    ----------
    identity : float
        Maximum deviation of any entry of ``U @ U^dagger`` from the identity.
    determinant : float
        Minimum magnitude of ``det(U)``; anything smaller is treated as
        singular.
    """

    identity: float = DEFAULT_IDENTITY_TOL
    determinant: float = DEFAULT_DETERMINANT_TOL

    def __post_init__(self) -> None:
        if self.identity <= 0:
            raise ValueError(f"identity tolerance must be positive, got {self.identity}")
        if self.determinant <= 0:
            raise ValueError(
                f"determinant tolerance must be positive, got {self.determinant}"
            )


def _from_env(var: str, default: float) -> float:
    raw = os.getenv(var)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"{var} must be a float, got {raw!r}") from None


_tolerances = Tolerances(
    identity=_from_env(_IDENTITY_ENV_VAR, DEFAULT_IDENTITY_TOL),
    determinant=_from_env(_DETERMINANT_ENV_VAR, DEFAULT_DETERMINANT_TOL),
)


def get_tolerances() -> Tolerances:
    """Return the tolerances currently in effect."""
    return _tolerances


def set_tolerances(
    identity: float | None = None, determinant: float | None = None
) -> Tolerances:
    """
    Globally replace one or both tolerances.

    Parameters
    ----------
    identity : float, optional
        New identity tolerance. Unchanged if None.
    determinant : float, optional
        New determinant tolerance. Unchanged if None.

    Returns
    -------
    Tolerances
        The previous tolerances, so callers can restore them.
    """
    global _tolerances
    previous = _tolerances
    changes = {}
    if identity is not None:
        changes["identity"] = identity
    if determinant is not None:
        changes["determinant"] = determinant
    _tolerances = replace(previous, **changes)
    return previous


def reset_tolerances() -> None:
    """Restore the built-in default tolerances."""
    global _tolerances
    _tolerances = Tolerances()


@contextmanager
def tolerance_context(
    identity: float | None = None, determinant: float | None = None
) -> Iterator[Tolerances]:
    """
    Temporarily override tolerances.

    Example
    -------
    >>> with tolerance_context(identity=1e-12):
    ...     Gate(matrix, [0])  # checked against the tighter bound
    """
    global _tolerances
    previous = set_tolerances(identity=identity, determinant=determinant)
    try:
        yield _tolerances
    finally:
        _tolerances = previous
