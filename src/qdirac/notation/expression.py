"""Expression tree produced by the notation parser.

Each node is a frozen dataclass that owns its children. Evaluation is a
strict post-order walk: :meth:`Expression.compute` evaluates the children
first and combines their tensors with the matching engine operation.
"""

from __future__ import annotations

from dataclasses import dataclass

from qdirac.core.tensor import Tensor


@dataclass(frozen=True)
class Expression:
    """Base node."""

    def compute(self) -> Tensor:
        raise NotImplementedError


# ---------- leaves ----------


@dataclass(frozen=True)
class Scalar(Expression):
    value: complex

    def compute(self) -> Tensor:
        return Tensor([self.value], (1, 1))


@dataclass(frozen=True)
class Bra(Expression):
    """A bra, stored as the ket it is the dagger of."""

    ket: Tensor

    def compute(self) -> Tensor:
        return self.ket.dag()


@dataclass(frozen=True)
class Ket(Expression):
    ket: Tensor

    def compute(self) -> Tensor:
        return self.ket


@dataclass(frozen=True)
class Outer(Expression):
    """``|ket><bra|`` written directly, without an operator in between."""

    ket: Tensor
    bra: Tensor

    def compute(self) -> Tensor:
        return self.ket * self.bra.dag()


# ---------- unary ----------


@dataclass(frozen=True)
class AdditiveInverse(Expression):
    operand: Expression

    def compute(self) -> Tensor:
        return self.operand.compute() * -1.0


@dataclass(frozen=True)
class Dagger(Expression):
    operand: Expression

    def compute(self) -> Tensor:
        return self.operand.compute().dag()


@dataclass(frozen=True)
class Parenthesized(Expression):
    operand: Expression

    def compute(self) -> Tensor:
        return self.operand.compute()


@dataclass(frozen=True)
class Norm(Expression):
    operand: Expression

    def compute(self) -> Tensor:
        return Tensor([self.operand.compute().norm()], (1, 1))


# ---------- binary ----------


@dataclass(frozen=True)
class BinaryOperation(Expression):
    lhs: Expression
    rhs: Expression

    def compute(self) -> Tensor:
        return self.apply(self.lhs.compute(), self.rhs.compute())

    def apply(self, lhs: Tensor, rhs: Tensor) -> Tensor:
        raise NotImplementedError


@dataclass(frozen=True)
class Mul(BinaryOperation):
    def apply(self, lhs: Tensor, rhs: Tensor) -> Tensor:
        return lhs * rhs


@dataclass(frozen=True)
class Div(BinaryOperation):
    def apply(self, lhs: Tensor, rhs: Tensor) -> Tensor:
        return lhs / rhs


@dataclass(frozen=True)
class Add(BinaryOperation):
    def apply(self, lhs: Tensor, rhs: Tensor) -> Tensor:
        return lhs + rhs


@dataclass(frozen=True)
class Sub(BinaryOperation):
    def apply(self, lhs: Tensor, rhs: Tensor) -> Tensor:
        return lhs - rhs


@dataclass(frozen=True)
class Kronecker(BinaryOperation):
    def apply(self, lhs: Tensor, rhs: Tensor) -> Tensor:
        return lhs.prod(rhs)


@dataclass(frozen=True)
class Inner(BinaryOperation):
    """Unconjugated dot product of the two operands, as a ``(1, 1)`` tensor.

    ``<a|b>`` parses to ``Inner(Bra(a), Ket(b))``, so the bra side is
    conjugated by its own dagger, not by this node.
    """

    def apply(self, lhs: Tensor, rhs: Tensor) -> Tensor:
        return Tensor([lhs.dot(rhs)], (1, 1))


def compute(expression: Expression) -> Tensor:
    """Reduce *expression* to a single tensor."""
    return expression.compute()
