"""Dense complex matrix engine.

A :class:`Tensor` is a rank-2 complex128 JAX array: kets are ``(n, 1)``
columns, bras are ``(1, n)`` rows and scalars are ``(1, 1)``. Every
operation returns a new Tensor; nothing is mutated in place.

Shape rules follow the notation rather than numpy broadcasting:

- ``+`` / ``-`` need identical shapes.
- ``*`` is a matrix product, except that a ``(1, 1)`` operand on either side
  scales the other operand.
- ``/`` only accepts a ``(1, 1)`` divisor.

Any violation raises :class:`~qdirac.core.errors.ShapeError` immediately.

Tensor is registered as a JAX pytree node, so it passes through
``jax.jit`` / ``jax.vmap`` with its array as the single leaf.
"""

from __future__ import annotations

from collections.abc import Iterable
from functools import reduce
from numbers import Number
from typing import Any

import jax
import jax.numpy as jnp
import numpy as np

from qdirac.core.errors import ShapeError

Shape = tuple[int, int]

_DTYPE = jnp.complex128


def _format_real(value: float) -> str:
    if np.isnan(value):
        return "NaN"
    return np.format_float_positional(value, trim="-")


def _format_complex(value: complex) -> str:
    """Render ``value`` as ``re+imi`` / ``re-|im|i``."""
    re, im = value.real, value.imag
    if im < 0 or (im == 0 and np.signbit(im)):
        return f"{_format_real(re)}-{_format_real(-im)}i"
    return f"{_format_real(re)}+{_format_real(im)}i"


@jax.tree_util.register_pytree_node_class
class Tensor:
    """Immutable dense complex matrix.

    Args:
        data:  Values in row-major order (any array-like of length
               ``rows * cols``).
        shape: ``(rows, cols)``.

    Raises:
        ShapeError: If the number of values does not match *shape*.

    Example:
        >>> ket = Tensor([1, 0], (2, 1))
        >>> (ket * ket.dag()).shape
        (2, 2)
    """

    def __init__(self, data: Any, shape: Shape) -> None:
        rows, cols = int(shape[0]), int(shape[1])
        flat = jnp.asarray(data, dtype=_DTYPE).ravel()
        if flat.size != rows * cols:
            raise ShapeError(
                "new", f"{flat.size} values given for shape {(rows, cols)}"
            )
        self._data = flat.reshape(rows, cols)

    @classmethod
    def from_array(cls, array: Any) -> Tensor:
        """Wrap an existing 2-D array."""
        array = jnp.asarray(array, dtype=_DTYPE)
        if array.ndim != 2:
            raise ShapeError(
                "from_array", f"expected a 2-D array, got {array.ndim} dims"
            )
        return cls(array, array.shape)

    @classmethod
    def eye(cls, n: int) -> Tensor:
        """Identity of shape ``(n, n)``."""
        return cls.from_array(jnp.eye(n, dtype=_DTYPE))

    # --- Pytree interface ---

    def tree_flatten(self) -> tuple[tuple[jax.Array], None]:
        return (self._data,), None

    @classmethod
    def tree_unflatten(cls, aux: None, children: tuple[jax.Array]) -> Tensor:
        tensor = object.__new__(cls)
        tensor._data = children[0]
        return tensor

    # --- Accessors ---

    @property
    def shape(self) -> Shape:
        rows, cols = self._data.shape
        return int(rows), int(cols)

    @property
    def rows(self) -> int:
        return self.shape[0]

    @property
    def cols(self) -> int:
        return self.shape[1]

    @property
    def dtype(self) -> Any:
        return self._data.dtype

    @property
    def data(self) -> jax.Array:
        """Values flattened in row-major order."""
        return self._data.ravel()

    def todense(self) -> jax.Array:
        return self._data

    def __getitem__(self, index: tuple[int, int]) -> complex:
        row, col = index
        return complex(self._data[row, col])

    def item(self) -> complex:
        """Return the single entry of a ``(1, 1)`` tensor.

        Raises:
            ShapeError: If the tensor is not a scalar.
        """
        if self.shape != (1, 1):
            raise ShapeError(
                "item", f"tensor of shape {self.shape} is not a scalar"
            )
        return complex(self._data[0, 0])

    # --- Unary operations ---

    def norm_sqr(self) -> float:
        """Sum of squared magnitudes of all entries."""
        return float(jnp.sum(self._data.real**2 + self._data.imag**2))

    def norm(self) -> float:
        return self.norm_sqr() ** 0.5

    def unit(self) -> Tensor:
        """Scale to unit norm. A zero tensor yields non-finite entries."""
        return self / self.norm()

    def dag(self) -> Tensor:
        """Conjugate transpose."""
        return Tensor.from_array(jnp.conj(self._data).T)

    def proj(self) -> Tensor:
        """Projector ``self * self.dag()``."""
        return self * self.dag()

    def __neg__(self) -> Tensor:
        return self.scale(-1.0)

    # --- Products ---

    def prod(self, rhs: Tensor) -> Tensor:
        """Kronecker product.

        For shapes ``(p, q)`` and ``(r, s)`` the result has shape
        ``(p*r, q*s)`` with ``out[j*r + l, i*s + k] = self[j, i] * rhs[l, k]``,
        so ``|1> x |0>`` equals ``|10>``.
        """
        return Tensor.from_array(jnp.kron(self._data, rhs._data))

    def expand(self, n: int, i: int) -> Tensor:
        """Embed a single-qubit operator at position *i* of an *n*-qubit
        register, with 2x2 identities everywhere else."""
        eye = Tensor.eye(2)
        product = self if i == 0 else eye
        for k in range(1, n):
            product = product.prod(self if k == i else eye)
        return product

    def dot(self, rhs: Tensor) -> complex:
        """Unconjugated dot product ``sum(self.data[k] * rhs.data[k])``.

        Entries are paired positionally; pairing stops at the shorter
        operand.
        """
        n = min(self._data.size, rhs._data.size)
        return complex(jnp.sum(self.data[:n] * rhs.data[:n]))

    def scale(self, value: Number) -> Tensor:
        return Tensor.from_array(self._data * value)

    def matmul(self, rhs: Tensor) -> Tensor:
        """Matrix product, where a ``(1, 1)`` operand scales the other one.

        Raises:
            ShapeError: If neither operand is a scalar and the inner
                dimensions differ.
        """
        if self.cols != rhs.rows and self.shape != (1, 1) and rhs.shape != (1, 1):
            raise ShapeError(
                "mul", f"cannot multiply {self.shape} by {rhs.shape}"
            )
        if self.shape == (1, 1):
            return rhs.scale(self.item())
        if rhs.shape == (1, 1):
            return self.scale(rhs.item())
        return Tensor.from_array(
            jnp.matmul(self._data, rhs._data, precision=jax.lax.Precision.HIGHEST)
        )

    # --- Binary operators ---

    def _check_same_shape(self, operation: str, rhs: Tensor) -> None:
        if self.shape != rhs.shape:
            raise ShapeError(
                operation, f"shape {self.shape} does not match {rhs.shape}"
            )

    def __add__(self, rhs: Tensor) -> Tensor:
        if not isinstance(rhs, Tensor):
            return NotImplemented
        self._check_same_shape("add", rhs)
        return Tensor.from_array(self._data + rhs._data)

    def __sub__(self, rhs: Tensor) -> Tensor:
        if not isinstance(rhs, Tensor):
            return NotImplemented
        self._check_same_shape("sub", rhs)
        return Tensor.from_array(self._data - rhs._data)

    def __mul__(self, rhs: Tensor | Number) -> Tensor:
        if isinstance(rhs, Tensor):
            return self.matmul(rhs)
        if isinstance(rhs, Number):
            return self.scale(rhs)
        return NotImplemented

    def __rmul__(self, lhs: Number) -> Tensor:
        if isinstance(lhs, Number):
            return self.scale(lhs)
        return NotImplemented

    def __truediv__(self, rhs: Tensor | Number) -> Tensor:
        if isinstance(rhs, Tensor):
            if rhs.shape != (1, 1):
                raise ShapeError(
                    "div", f"divisor of shape {rhs.shape} is not a scalar"
                )
            rhs = rhs.item()
        elif not isinstance(rhs, Number):
            return NotImplemented
        return Tensor.from_array(self._data / rhs)

    # --- Display ---

    def __str__(self) -> str:
        values = np.asarray(self._data)
        return "\n".join(
            ", ".join(_format_complex(complex(v)) for v in row) for row in values
        )

    def __repr__(self) -> str:
        return f"Tensor(shape={self.shape}, dtype={self.dtype})"


def kron_all(tensors: Iterable[Tensor]) -> Tensor:
    """Kronecker product of a non-empty sequence, reduced left to right.

    Raises:
        ValueError: If *tensors* is empty.
    """
    tensors = list(tensors)
    if not tensors:
        raise ValueError("kron_all requires at least one tensor")
    return reduce(Tensor.prod, tensors)
