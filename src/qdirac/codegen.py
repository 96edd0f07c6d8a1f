"""Tensor data transfer format for code generators.

A tensor is exchanged as ``((rows, cols), ((re, im), ...))`` with the
values in row-major order. :func:`to_source` renders that structure as a
literal expression a generator can paste into emitted code; the optional
suffix lets the consumer append its own conversion call.
"""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np

from qdirac.core.tensor import Shape, Tensor

TensorData = tuple[Shape, tuple[tuple[float, float], ...]]


def to_tensor_data(tensor: Tensor) -> TensorData:
    """Flatten *tensor* into shape plus ``(re, im)`` pairs."""
    values = np.asarray(tensor.data)
    pairs = tuple((float(v.real), float(v.imag)) for v in values)
    return tensor.shape, pairs


def from_tensor_data(data: tuple[Shape, Sequence[tuple[float, float]]]) -> Tensor:
    """Rebuild a tensor from :func:`to_tensor_data` output."""
    shape, pairs = data
    values = [complex(re, im) for re, im in pairs]
    return Tensor(values, shape)


def to_source(tensor: Tensor, suffix: str = "") -> str:
    """Render *tensor* as a literal of its transfer format.

    Floats use ``repr`` so the literal reproduces the exact values.

    Example:
        >>> to_source(Tensor([1, 0], (2, 1)))
        '((2, 1), ((1.0, 0.0), (0.0, 0.0)))'
    """
    (rows, cols), pairs = to_tensor_data(tensor)
    values = ", ".join(f"({re!r}, {im!r})" for re, im in pairs)
    return f"(({rows}, {cols}), ({values}{',' if len(pairs) == 1 else ''})){suffix}"
