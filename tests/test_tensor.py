"""Tests for the dense Tensor engine."""

import jax
import jax.numpy as jnp
import numpy as np
import pytest

from qdirac.core.errors import ShapeError
from qdirac.core.tensor import Tensor, kron_all


def random_complex(rng: np.random.RandomState, shape: tuple[int, int]) -> np.ndarray:
    return rng.randn(*shape) + 1j * rng.randn(*shape)


class TestConstruction:
    def test_shape_and_data(self):
        t = Tensor([1, 2, 3, 4, 5, 6], (2, 3))
        assert t.shape == (2, 3)
        assert t.rows == 2
        assert t.cols == 3
        assert t.dtype == jnp.complex128
        np.testing.assert_allclose(np.asarray(t.data), [1, 2, 3, 4, 5, 6])

    def test_row_major_indexing(self):
        t = Tensor([1, 2, 3, 4, 5, 6], (2, 3))
        assert t[0, 2] == 3
        assert t[1, 0] == 4
        assert isinstance(t[1, 1], complex)

    def test_wrong_length_raises(self):
        with pytest.raises(ShapeError, match="values given"):
            Tensor([1, 2, 3], (2, 2))

    def test_from_array(self):
        t = Tensor.from_array(np.arange(6).reshape(3, 2))
        assert t.shape == (3, 2)
        assert t[2, 1] == 5

    def test_from_array_rejects_vectors(self):
        with pytest.raises(ShapeError, match="2-D"):
            Tensor.from_array(np.arange(3))

    def test_eye(self):
        np.testing.assert_array_equal(np.asarray(Tensor.eye(3).todense()), np.eye(3))

    def test_item(self):
        assert Tensor([2 + 3j], (1, 1)).item() == 2 + 3j

    def test_item_not_scalar(self, ket0):
        with pytest.raises(ShapeError, match="not a scalar"):
            ket0.item()


class TestUnary:
    def test_norm(self):
        t = Tensor([3, 4j], (2, 1))
        assert t.norm_sqr() == pytest.approx(25.0)
        assert t.norm() == pytest.approx(5.0)

    def test_unit(self):
        t = Tensor([3, 4j], (2, 1)).unit()
        assert t.norm() == pytest.approx(1.0)
        assert t[1, 0] == pytest.approx(0.8j)

    def test_unit_of_zero_is_not_finite(self):
        t = Tensor([0, 0], (2, 1)).unit()
        assert not np.isfinite(np.asarray(t.data)).any()

    def test_dag_vector(self):
        ket = Tensor([1j, 2], (2, 1))
        bra = ket.dag()
        assert bra.shape == (1, 2)
        np.testing.assert_allclose(np.asarray(bra.data), [-1j, 2])

    def test_dag_matrix(self, rng):
        data = random_complex(rng, (2, 3))
        t = Tensor.from_array(data)
        np.testing.assert_allclose(np.asarray(t.dag().todense()), data.conj().T)

    def test_dag_involution(self, sigma_y):
        assert (sigma_y.dag().dag() - sigma_y).norm() == 0.0

    def test_proj(self, ket1):
        p = ket1.proj()
        np.testing.assert_allclose(np.asarray(p.todense()), [[0, 0], [0, 1]])

    def test_neg(self, ket0):
        np.testing.assert_allclose(np.asarray((-ket0).data), [-1, 0])


class TestKronecker:
    def test_index_interleaving(self, rng):
        a_data = random_complex(rng, (2, 3))
        b_data = random_complex(rng, (3, 2))
        out = Tensor.from_array(a_data).prod(Tensor.from_array(b_data))
        assert out.shape == (6, 6)
        r, s = b_data.shape
        for j in range(2):
            for i in range(3):
                for l in range(r):
                    for k in range(s):
                        assert out[j * r + l, i * s + k] == pytest.approx(
                            a_data[j, i] * b_data[l, k]
                        )

    def test_register_order(self, ket0, ket1):
        # |1> x |0> is basis state 2 of a two-qubit register
        np.testing.assert_allclose(np.asarray(ket1.prod(ket0).data), [0, 0, 1, 0])

    def test_associative(self, ket0, ket1):
        left = ket1.prod(ket0).prod(ket1)
        right = ket1.prod(ket0.prod(ket1))
        assert (left - right).norm() == 0.0

    def test_kron_all(self, ket0, ket1):
        out = kron_all([ket1, ket0, ket1])
        assert out.shape == (8, 1)
        assert out[5, 0] == 1

    def test_kron_all_empty(self):
        with pytest.raises(ValueError):
            kron_all([])


class TestExpand:
    def test_middle(self, sigma_x):
        eye = Tensor.eye(2)
        expected = kron_all([eye, sigma_x, eye])
        assert (sigma_x.expand(3, 1) - expected).norm() == 0.0

    def test_first_position_uses_operator(self, sigma_x):
        eye = Tensor.eye(2)
        expected = kron_all([sigma_x, eye, eye])
        assert (sigma_x.expand(3, 0) - expected).norm() == 0.0

    def test_single_qubit(self, sigma_x):
        assert (sigma_x.expand(1, 0) - sigma_x).norm() == 0.0


class TestElementwise:
    def test_add_sub(self, ket0, ket1):
        np.testing.assert_allclose(np.asarray((ket0 + ket1).data), [1, 1])
        np.testing.assert_allclose(np.asarray((ket0 - ket1).data), [1, -1])

    def test_add_shape_mismatch(self, ket0):
        with pytest.raises(ShapeError) as excinfo:
            ket0 + ket0.dag()
        assert excinfo.value.operation == "add"

    def test_sub_shape_mismatch(self, ket0, sigma_x):
        with pytest.raises(ShapeError, match="sub"):
            ket0 - sigma_x

    def test_add_rejects_numbers(self, ket0):
        with pytest.raises(TypeError):
            ket0 + 1


class TestScalarOps:
    def test_mul_by_number(self, ket0):
        np.testing.assert_allclose(np.asarray((ket0 * 3).data), [3, 0])
        np.testing.assert_allclose(np.asarray((2j * ket0).data), [2j, 0])

    def test_div_by_number(self, ket0):
        np.testing.assert_allclose(np.asarray((ket0 / 4).data), [0.25, 0])

    def test_div_by_scalar_tensor(self, ket1):
        out = ket1 / Tensor([2j], (1, 1))
        np.testing.assert_allclose(np.asarray(out.data), [0, -0.5j])

    def test_div_by_non_scalar(self, ket0):
        with pytest.raises(ShapeError, match="div"):
            ket0 / ket0


class TestMatmul:
    def test_against_numpy(self, rng):
        a = random_complex(rng, (2, 3))
        b = random_complex(rng, (3, 4))
        out = Tensor.from_array(a) * Tensor.from_array(b)
        assert out.shape == (2, 4)
        np.testing.assert_allclose(np.asarray(out.todense()), a @ b)

    def test_outer(self, ket0):
        out = ket0 * ket0.dag()
        np.testing.assert_allclose(np.asarray(out.todense()), [[1, 0], [0, 0]])

    def test_scalar_on_either_side(self, ket1):
        three = Tensor([3], (1, 1))
        np.testing.assert_allclose(np.asarray((three * ket1).data), [0, 3])
        np.testing.assert_allclose(np.asarray((ket1 * three).data), [0, 3])
        assert (ket1 * three).shape == (2, 1)

    def test_incompatible(self, ket0):
        with pytest.raises(ShapeError) as excinfo:
            ket0 * ket0
        assert excinfo.value.operation == "mul"


class TestDot:
    def test_no_conjugation(self):
        a = Tensor([1j, 0], (2, 1))
        assert a.dot(a) == pytest.approx(-1)

    def test_orientation_ignored(self):
        a = Tensor([1, 2j], (2, 1))
        b = Tensor([3, 4], (1, 2))
        assert a.dot(b) == pytest.approx(3 + 8j)

    def test_stops_at_shorter_operand(self):
        a = Tensor([1, 2, 3], (3, 1))
        b = Tensor([1, 1], (2, 1))
        assert a.dot(b) == pytest.approx(3)


class TestDisplay:
    def test_ket(self, ket0):
        assert str(ket0) == "1+0i\n0+0i"

    def test_matrix(self):
        t = Tensor([0.5, complex(0, -2), 1 + 1j, -3], (2, 2))
        assert str(t) == "0.5+0i, 0-2i\n1+1i, -3+0i"

    def test_repr(self, ket0):
        assert repr(ket0) == "Tensor(shape=(2, 1), dtype=complex128)"


class TestPytree:
    def test_leaves(self, sigma_x):
        leaves = jax.tree_util.tree_leaves(sigma_x)
        assert len(leaves) == 1
        assert leaves[0].shape == (2, 2)

    def test_jit(self, sigma_x, ket0):
        apply = jax.jit(lambda op, ket: op * ket * 2.0)
        out = apply(sigma_x, ket0)
        assert isinstance(out, Tensor)
        np.testing.assert_allclose(np.asarray(out.data), [0, 2])
