"""Tests for target indexing and gate embedding."""

import numpy as np
import pytest

from tiny_qsim import gates as g
from tiny_qsim.embedding import TargetIndex, expand
from tiny_qsim.exceptions import DuplicateTargetError, QubitIndexOutOfRangeError
from tiny_qsim.gate import Gate


def _kron(*factors):
    """Kronecker product with the first factor as the highest qubit."""
    out = np.eye(1, dtype=np.complex128)
    for f in factors:
        out = np.kron(out, f)
    return out


# ---------------------------------------------------------------------------
# TargetIndex
# ---------------------------------------------------------------------------

def test_target_index_both_directions():
    index = TargetIndex([3, 0, 5])
    assert index.position(3) == 0
    assert index.position(5) == 2
    assert index.qubits[1] == 0
    assert [index.qubits[index.position(q)] for q in index] == [3, 0, 5]


def test_target_index_membership():
    index = TargetIndex([2, 4])
    assert 2 in index
    assert 3 not in index
    assert len(index) == 2
    with pytest.raises(KeyError):
        index.position(3)


def test_target_index_mask():
    assert TargetIndex([0, 2]).mask == 0b101
    assert TargetIndex([]).mask == 0


def test_target_index_compress():
    index = TargetIndex([2, 0])
    # bit 2 of 0b100 -> small bit 0, bit 0 -> small bit 1
    assert index.compress(0b100) == 0b01
    assert index.compress(0b001) == 0b10
    assert index.compress(0b111) == 0b11
    assert index.compress(0b010) == 0
    np.testing.assert_array_equal(
        index.compress(np.arange(8)), [0, 2, 0, 2, 1, 3, 1, 3]
    )


def test_target_index_rejects_duplicates():
    with pytest.raises(DuplicateTargetError):
        TargetIndex([1, 2, 1])


def test_target_index_rejects_negative():
    with pytest.raises(QubitIndexOutOfRangeError):
        TargetIndex([0, -2])


# ---------------------------------------------------------------------------
# expand
# ---------------------------------------------------------------------------

def test_single_qubit_in_single_qubit_register():
    np.testing.assert_allclose(expand(Gate.h(0), 1), g.H, atol=1e-12)


def test_h_on_qubit_0_of_two():
    """Qubit 0 is the low-order bit, so H_0 = I ⊗ H."""
    big = expand(Gate.h(0), 2)
    np.testing.assert_allclose(big, _kron(g.I, g.H), atol=1e-12)


def test_h_on_qubit_1_of_two():
    big = expand(Gate.h(1), 2)
    np.testing.assert_allclose(big, _kron(g.H, g.I), atol=1e-12)


def test_x_on_middle_qubit():
    big = Gate.x(1).expand(3)
    np.testing.assert_allclose(big, _kron(g.I, g.X, g.I), atol=1e-12)


def test_cx_matches_permutation():
    """CX with control 0, target 1 maps |q1 q0⟩: 01 -> 11 and 11 -> 01."""
    big = expand(Gate.cx(0, 1), 2)
    expected = np.zeros((4, 4), dtype=np.complex128)
    for col, row in {0: 0, 1: 3, 2: 2, 3: 1}.items():
        expected[row, col] = 1
    np.testing.assert_allclose(big, expected, atol=1e-12)


def test_reversed_cx_matches_permutation():
    big = expand(Gate.cx(1, 0), 2)
    expected = np.zeros((4, 4), dtype=np.complex128)
    for col, row in {0: 0, 1: 1, 2: 3, 3: 2}.items():
        expected[row, col] = 1
    np.testing.assert_allclose(big, expected, atol=1e-12)


def test_target_order_matters():
    """The same operator on (0, 1) and (1, 0) embeds differently."""
    m = np.eye(4, dtype=np.complex128)
    m[2:, 2:] = g.X
    a = expand(Gate(m, [0, 1]), 2)
    b = expand(Gate(m, [1, 0]), 2)
    assert not np.allclose(a, b)


def test_swap_embedding():
    big = expand(Gate.swap(0, 2), 3)
    for col in range(8):
        b0, b2 = col & 1, (col >> 2) & 1
        row = (col & 0b010) | (b0 << 2) | b2
        assert abs(big[row, col] - 1) < 1e-12


def test_untouched_qubits_never_change():
    big = expand(Gate.h(1), 3)
    rows, cols = np.nonzero(np.abs(big) > 1e-12)
    mask = 0b101
    assert np.all((rows & mask) == (cols & mask))


def test_out_of_range_target():
    with pytest.raises(QubitIndexOutOfRangeError):
        expand(Gate.h(2), 2)


@pytest.mark.parametrize(
    "gate",
    [Gate.h(0), Gate.x(2), Gate.cx(0, 2), Gate.cx(2, 1),
     Gate.cnx([0, 2], 1), Gate.h(1).controlled([0]),
     Gate.from_name("ry", [1], (1.1,))],
)
@pytest.mark.parametrize("n_qubits", [3, 4])
def test_embedded_gate_is_unitary(gate, n_qubits):
    big = expand(gate, n_qubits)
    assert big.shape == (2**n_qubits, 2**n_qubits)
    assert g.is_unitary(big)


def test_large_register_logs_warning(caplog, monkeypatch):
    from tiny_qsim import embedding

    monkeypatch.setattr(embedding, "DENSE_WARNING_QUBITS", 2)
    monkeypatch.setattr(embedding.logger, "propagate", True)
    with caplog.at_level("WARNING", logger=embedding.logger.name):
        expand(Gate.h(0), 3)
    assert "dense" in caplog.text
