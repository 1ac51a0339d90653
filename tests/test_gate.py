"""Tests for Gate construction and controlled extension."""

import dataclasses

import numpy as np
import pytest

from tiny_qsim import gates as g
from tiny_qsim.exceptions import (
    DuplicateTargetError,
    MalformedOperatorError,
    NotUnitaryError,
    QubitIndexOutOfRangeError,
    SimulationError,
    UnknownGateError,
)
from tiny_qsim.gate import Gate


# ---------------------------------------------------------------------------
# Construction contract
# ---------------------------------------------------------------------------

def test_h_construction():
    gate = Gate.h(0)
    assert gate.targets == (0,)
    assert gate.n_qubits == 1
    assert gate.operator.shape == (2, 2)
    assert g.is_unitary(gate.operator)


def test_x_construction():
    gate = Gate.x(3)
    assert gate.targets == (3,)
    np.testing.assert_allclose(gate.operator, [[0, 1], [1, 0]], atol=1e-12)


def test_generic_construction_from_lists():
    gate = Gate([[0, 1], [1, 0]], [2])
    assert gate.targets == (2,)
    assert gate.operator.dtype == np.complex128


def test_three_by_three_is_malformed():
    with pytest.raises(MalformedOperatorError):
        Gate(np.eye(3), [0])


def test_non_square_is_malformed():
    with pytest.raises(MalformedOperatorError):
        Gate(np.ones((2, 4)), [0, 1])


def test_vector_is_malformed():
    with pytest.raises(MalformedOperatorError):
        Gate(np.ones(2), [0])


def test_ragged_input_is_malformed():
    with pytest.raises(MalformedOperatorError):
        Gate([[1, 0], [0]], [0])


def test_dimension_must_match_target_count():
    with pytest.raises(MalformedOperatorError):
        Gate(np.eye(4), [0])
    with pytest.raises(MalformedOperatorError):
        Gate(g.H, [0, 1])


def test_duplicate_targets():
    with pytest.raises(DuplicateTargetError) as excinfo:
        Gate(np.eye(4), [0, 0])
    assert excinfo.value.qubit == 0


def test_negative_target():
    with pytest.raises(QubitIndexOutOfRangeError):
        Gate.h(-1)


def test_non_integer_target():
    with pytest.raises(TypeError):
        Gate.h(0.5)


def test_singular_is_not_unitary():
    with pytest.raises(NotUnitaryError):
        Gate(np.ones((2, 2)), [0])


def test_non_unitary():
    with pytest.raises(NotUnitaryError):
        Gate(np.diag([1, 2]), [0])


def test_errors_share_base_class():
    with pytest.raises(SimulationError):
        Gate(np.eye(3), [0])
    with pytest.raises(ValueError):
        Gate(np.eye(4), [1, 1])


def test_zero_target_gate_is_a_global_phase():
    gate = Gate([[1j]], [])
    assert gate.n_qubits == 0


# ---------------------------------------------------------------------------
# Immutability
# ---------------------------------------------------------------------------

def test_operator_is_copied():
    m = np.array(g.X)
    gate = Gate(m, [0])
    m[0, 0] = 7
    assert gate.operator[0, 0] == 0


def test_operator_is_read_only():
    gate = Gate.h(0)
    with pytest.raises(ValueError):
        gate.operator[0, 0] = 0


def test_attributes_are_frozen():
    gate = Gate.h(0)
    with pytest.raises(dataclasses.FrozenInstanceError):
        gate.targets = (1,)


@pytest.mark.parametrize(
    "gate",
    [Gate.h(0), Gate.x(1), Gate.y(0), Gate.z(2), Gate.s(0), Gate.t(0),
     Gate.swap(0, 1), Gate.cx(0, 1), Gate.cnx([0, 1], 2),
     Gate.from_name("rx", [0], (0.3,))],
)
def test_stored_operator_is_unitary(gate):
    m = gate.operator
    product = m @ m.conj().T
    assert np.all(np.abs(product - np.eye(gate.dim)) < 1e-5)
    assert abs(np.linalg.det(m)) >= 1e-10


# ---------------------------------------------------------------------------
# Controlled extension
# ---------------------------------------------------------------------------

def test_cx_target_order():
    """Original target first, then the control."""
    gate = Gate.cx(0, 1)
    assert gate.targets == (1, 0)
    assert gate.index.position(0) == 1
    assert gate.index.position(1) == 0


def test_cx_matrix_is_block_identity_then_x():
    gate = Gate.cx(0, 1)
    expected = np.eye(4, dtype=np.complex128)
    expected[2:, 2:] = g.X
    np.testing.assert_allclose(gate.operator, expected, atol=1e-12)


def test_cnx_is_toffoli():
    gate = Gate.cnx([0, 1], 2)
    assert gate.targets == (2, 0, 1)
    expected = np.eye(8, dtype=np.complex128)
    expected[6:, 6:] = g.X
    np.testing.assert_allclose(gate.operator, expected, atol=1e-12)


def test_controlled_hadamard():
    gate = Gate.h(0).controlled([1])
    assert gate.targets == (0, 1)
    np.testing.assert_allclose(gate.operator[:2, :2], np.eye(2), atol=1e-12)
    np.testing.assert_allclose(gate.operator[2:, 2:], g.H, atol=1e-12)
    np.testing.assert_allclose(gate.operator[:2, 2:], 0, atol=1e-12)


def test_controlled_two_qubit_gate():
    gate = Gate.swap(0, 1).controlled([2])
    assert gate.targets == (0, 1, 2)
    np.testing.assert_allclose(gate.operator[4:, 4:], g.SWAP, atol=1e-12)


def test_controlled_leaves_original_untouched():
    base = Gate.x(0)
    base.controlled([1])
    assert base.targets == (0,)
    assert base.operator.shape == (2, 2)


def test_controlled_with_no_controls_is_same_operator():
    gate = Gate.h(0).controlled([])
    np.testing.assert_allclose(gate.operator, g.H, atol=1e-12)


def test_controlled_duplicate_with_target():
    with pytest.raises(DuplicateTargetError):
        Gate.x(0).controlled([0])


def test_controlled_duplicate_controls():
    with pytest.raises(DuplicateTargetError):
        Gate.cnx([1, 1], 0)


def test_repr():
    assert repr(Gate.cx(0, 1)) == "Gate(qubits=2, targets=[1, 0])"


def test_controlled_block_sits_on_control_bits():
    gate = Gate.h(5).controlled([2, 7])
    assert gate.targets == (5, 2, 7)
    np.testing.assert_allclose(gate.operator[6:, 6:], g.H, atol=1e-12)
    np.testing.assert_allclose(gate.operator[:6, :6], np.eye(6), atol=1e-12)


# ---------------------------------------------------------------------------
# Catalogue construction
# ---------------------------------------------------------------------------

def test_from_name_rotation():
    gate = Gate.from_name("ry", [3], (np.pi / 3,))
    assert gate.targets == (3,)
    np.testing.assert_allclose(gate.operator, g.Ry(np.pi / 3), atol=1e-12)


def test_from_name_wrong_target_count():
    with pytest.raises(MalformedOperatorError, match="acts on 2 qubit"):
        Gate.from_name("swap", [0])
    with pytest.raises(MalformedOperatorError, match="acts on 1 qubit"):
        Gate.from_name("h", [0, 1])


def test_from_name_unknown():
    with pytest.raises(UnknownGateError) as exc_info:
        Gate.from_name("sqrt_swap", [0, 1])
    assert isinstance(exc_info.value, SimulationError)
    assert "swap" in str(exc_info.value)


def test_from_name_wrong_param_count():
    with pytest.raises(ValueError, match="takes 1 parameter"):
        Gate.from_name("rz", [0])
