"""
tiny-qsim: a small dense state-vector quantum circuit simulator.

Every gate is a validated unitary on an ordered list of target qubits. During
a run each gate is embedded into the full 2^n x 2^n operator and applied to
the state in append order.

Quick Start:
    >>> from tiny_qsim import Circuit
    >>> result = Circuit(2).h(0).cx(0, 1).run()
    >>> result["00"], result["11"]  # both ~0.7071
"""
__version__ = "0.1.0"

from .circuit import Circuit, basis_label
from .config import Tolerances, get_tolerances, set_tolerances, tolerance_context
from .display import display_result, format_amplitude, format_result
from .embedding import TargetIndex, expand
from .exceptions import (
    DuplicateTargetError,
    EmptyCircuitError,
    InvalidInitialIndexError,
    MalformedOperatorError,
    NotUnitaryError,
    QubitIndexOutOfRangeError,
    SimulationError,
    UnknownGateError,
)
from .gate import Gate
from .gates import is_identity, is_unitary
from . import gates

__all__ = [
    # Core
    'Circuit',
    'Gate',
    'TargetIndex',
    'expand',
    'basis_label',
    'gates',
    'is_identity',
    'is_unitary',
    # Configuration
    'Tolerances',
    'get_tolerances',
    'set_tolerances',
    'tolerance_context',
    # Display
    'display_result',
    'format_amplitude',
    'format_result',
    # Errors
    'SimulationError',
    'MalformedOperatorError',
    'DuplicateTargetError',
    'NotUnitaryError',
    'QubitIndexOutOfRangeError',
    'InvalidInitialIndexError',
    'EmptyCircuitError',
    'UnknownGateError',
]
