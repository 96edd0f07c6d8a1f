"""qdirac: Dirac notation for qubit register states, evaluated with JAX.

A notation string is parsed into an expression tree and reduced to a dense
complex matrix (:class:`Tensor`).

.. note::
    Importing ``qdirac`` enables JAX 64-bit mode (``jax_enable_x64``).
    All tensors are ``complex128``.

Quick start::

    from qdirac import dirac

    bell = dirac("(|00> + |11>) / 1.4142135623730951")
    print(bell)               # 4 rows, one value each
    print(dirac("<0|+>"))     # about 0.7071+0i
    rho = bell.proj()         # 4x4 density matrix

Operators: ``x`` Kronecker product, ``.`` dot product, ``*`` and ``/``
scale or matrix-multiply, ``+`` and ``-``, a trailing ``'`` for the dagger,
``|expr|`` for the norm. Terms written next to each other are multiplied.
"""

import jax

jax.config.update("jax_enable_x64", True)

from qdirac.codegen import from_tensor_data, to_source, to_tensor_data
from qdirac.core.basis import as_tensor, tensor_basis
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
from qdirac.core.tensor import Tensor, kron_all
from qdirac.notation.expression import Expression, compute
from qdirac.notation.parser import dirac, parse

__version__ = "0.1.0"

__all__ = [
    # Version
    "__version__",
    # Tensors
    "Tensor",
    "kron_all",
    "as_tensor",
    "tensor_basis",
    # Notation
    "Expression",
    "parse",
    "compute",
    "dirac",
    # Code generation
    "to_tensor_data",
    "from_tensor_data",
    "to_source",
    # Errors
    "DiracError",
    "DiracSyntaxError",
    "TensorError",
    "ShapeError",
    "BasisError",
    "LiteralError",
    "NestingError",
    "EvaluationError",
]
