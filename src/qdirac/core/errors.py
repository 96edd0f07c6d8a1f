"""Exception hierarchy for notation parsing and tensor evaluation.

Two tiers:

- :class:`DiracSyntaxError` is recoverable. The input simply is not valid
  notation and the caller decides how to present it.
- :class:`TensorError` and its subclasses are fatal. They signal a
  condition the grammar assumes but cannot rule out (shape mismatches,
  unknown basis labels, malformed numeric literals). Evaluation of the
  current input stops immediately and no partial tensor is produced.
"""

from __future__ import annotations


class DiracError(Exception):
    """Base class for every error raised by qdirac."""


class DiracSyntaxError(DiracError, ValueError):
    """The input could not be parsed as Dirac notation.

    Attributes:
        source:    The full input string.
        position:  Offset of the failure in *source*.
        remainder: Unconsumed input starting at *position*.
        expected:  Human readable description of what the parser wanted.
    """

    def __init__(self, source: str, position: int, expected: str) -> None:
        self.source = source
        self.position = position
        self.remainder = source[position:]
        self.expected = expected
        where = repr(self.remainder) if self.remainder else "end of input"
        super().__init__(f"expected {expected} at {where}")


class TensorError(DiracError, ValueError):
    """Fatal failure inside the tensor engine or basis decoder.

    Attributes:
        operation: Name of the operation being attempted.
    """

    def __init__(self, operation: str, message: str) -> None:
        self.operation = operation
        super().__init__(f"{operation}: {message}")


class ShapeError(TensorError):
    """Operand shapes are incompatible for the requested operation."""


class BasisError(TensorError):
    """A basis label outside ``{0, 1, +, -}`` was decoded."""


class LiteralError(TensorError):
    """A numeric literal matched the lexical class but does not convert."""


class NestingError(DiracError, ValueError):
    """The input nests deeper than the interpreter stack allows.

    Raised instead of :class:`RecursionError` by :func:`~qdirac.parse` and
    :func:`~qdirac.dirac`. No tensor is produced.
    """

    def __init__(self, source: str) -> None:
        self.source = source
        super().__init__(f"`{source[:40]}...` nests too deeply to evaluate")


class EvaluationError(DiracError):
    """A fatal :class:`TensorError` raised while evaluating *source*.

    The wrapped error is available as ``__cause__`` and :attr:`error`.
    """

    def __init__(self, source: str, error: TensorError) -> None:
        self.source = source
        self.error = error
        self.operation = error.operation
        super().__init__(f"cannot evaluate `{source}`: {error}")
