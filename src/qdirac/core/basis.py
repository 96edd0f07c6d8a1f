"""Decoding of single-qubit basis labels into kets."""

from __future__ import annotations

from qdirac.core.errors import BasisError
from qdirac.core.tensor import Tensor, kron_all

BASIS_LABELS = "01+-"


def as_tensor(label: str) -> Tensor:
    """Return the 2-element ket for one basis label.

    ``'0' -> [1, 0]``, ``'1' -> [0, 1]``, ``'+' -> unit([1, 1])`` and
    ``'-' -> unit([1, -i])``.

    Raises:
        BasisError: For any other character.
    """
    if label == "0":
        return Tensor([1.0, 0.0], (2, 1))
    if label == "1":
        return Tensor([0.0, 1.0], (2, 1))
    if label == "+":
        return Tensor([1.0, 1.0], (2, 1)).unit()
    if label == "-":
        return Tensor([1.0, -1j], (2, 1)).unit()
    raise BasisError(
        "decode",
        f"cannot decode {label!r} into a qubit state: only (0, 1, +, -) supported",
    )


def tensor_basis(labels: str) -> Tensor:
    """Kronecker product of the kets for each label, left to right.

    ``tensor_basis("10")`` equals ``as_tensor("1").prod(as_tensor("0"))``.
    """
    if not labels:
        raise BasisError("decode", "empty basis string")
    return kron_all(as_tensor(label) for label in labels)
