"""Core tensor engine, basis decoding and error types."""

from qdirac.core.basis import BASIS_LABELS, as_tensor, tensor_basis
from qdirac.core.errors import (
    BasisError,
    DiracError,
    DiracSyntaxError,
    EvaluationError,
    LiteralError,
    NestingError,
    ShapeError,
    TensorError,
)
from qdirac.core.tensor import Shape, Tensor, kron_all

__all__ = [
    "Tensor",
    "Shape",
    "kron_all",
    "BASIS_LABELS",
    "as_tensor",
    "tensor_basis",
    "DiracError",
    "DiracSyntaxError",
    "TensorError",
    "ShapeError",
    "BasisError",
    "LiteralError",
    "NestingError",
    "EvaluationError",
]
