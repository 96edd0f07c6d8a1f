"""Notation parser and expression tree."""

from qdirac.notation.expression import (
    Add,
    AdditiveInverse,
    BinaryOperation,
    Bra,
    Dagger,
    Div,
    Expression,
    Inner,
    Ket,
    Kronecker,
    Mul,
    Norm,
    Outer,
    Parenthesized,
    Scalar,
    Sub,
    compute,
)
from qdirac.notation.parser import dirac, parse

__all__ = [
    "Expression",
    "Scalar",
    "Bra",
    "Ket",
    "Outer",
    "AdditiveInverse",
    "Dagger",
    "Parenthesized",
    "Norm",
    "BinaryOperation",
    "Mul",
    "Div",
    "Add",
    "Sub",
    "Kronecker",
    "Inner",
    "compute",
    "parse",
    "dirac",
]
