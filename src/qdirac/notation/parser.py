"""Recursive-descent parser for Dirac notation.

Grammar, from tightest to loosest binding::

    atom           := number | ket bra | "<" basis "|" basis ">" | bra | ket
                    | "(" additive ")" | "|" additive "|"
    dagger         := atom "'"?
    inverse        := "-"? dagger
    multiplicative := inverse (("*" | "/" | "x" | ".") inverse | dagger)*
    additive       := multiplicative (("+" | "-") multiplicative)*

``x`` is the Kronecker product, ``.`` the dot product, and two terms written
next to each other are multiplied. Both binary levels fold to the left.
Whitespace may surround any atom and any basis string; the whole input must
be consumed.

Example::

    >>> dirac("|0><0| + |1><1|").shape
    (2, 2)
    >>> dirac("<0|0>").item()
    (1+0j)
"""

from __future__ import annotations

import logging

from qdirac.core.basis import BASIS_LABELS, tensor_basis
from qdirac.core.errors import (
    DiracSyntaxError,
    EvaluationError,
    LiteralError,
    NestingError,
    TensorError,
)
from qdirac.core.tensor import Tensor
from qdirac.notation.expression import (
    Add,
    AdditiveInverse,
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
)

logger = logging.getLogger(__name__)

_WHITESPACE = frozenset(" \t\r\n")
_BASIS_CHARS = frozenset(BASIS_LABELS)
_NUMBER_CHARS = frozenset("0123456789.i")

_MULTIPLICATIVE_OPS: dict[str, type[Expression]] = {
    "*": Mul,
    "/": Div,
    "x": Kronecker,
    ".": Inner,
}
_ADDITIVE_OPS: dict[str, type[Expression]] = {"+": Add, "-": Sub}


def _to_complex(literal: str) -> complex:
    """Convert a number token; a trailing ``i`` makes it imaginary.

    Raises:
        LiteralError: If the token does not convert (``"1.2.3"``, ``"ii"``).
    """
    try:
        if literal.endswith("i"):
            return complex(0.0, float(literal[:-1]) if len(literal) > 1 else 1.0)
        return complex(float(literal), 0.0)
    except ValueError as err:
        raise LiteralError("number", f"cannot convert {literal!r}") from err


class _Parser:
    """Single-use parser over one source string.

    Every rule takes a start offset and returns ``(node, next_offset)``, or
    raises :class:`DiracSyntaxError`. Alternatives backtrack by restarting
    from the same offset. The failure that reached furthest into the input
    is kept for the final report.
    """

    def __init__(self, source: str) -> None:
        self.source = source
        self._furthest: DiracSyntaxError | None = None

    def parse(self) -> Expression:
        try:
            expression, pos = self._additive(0)
        except DiracSyntaxError:
            raise self._furthest from None
        if pos != len(self.source):
            self._fail(pos, "end of input")
            raise self._furthest
        return expression

    # ---------- primitives ----------

    def _fail(self, pos: int, expected: str) -> DiracSyntaxError:
        error = DiracSyntaxError(self.source, pos, expected)
        if self._furthest is None or pos >= self._furthest.position:
            self._furthest = error
        return error

    def _skip_ws(self, pos: int) -> int:
        while pos < len(self.source) and self.source[pos] in _WHITESPACE:
            pos += 1
        return pos

    def _peek(self, pos: int) -> str:
        return self.source[pos] if pos < len(self.source) else ""

    def _char(self, pos: int, char: str) -> int:
        if self._peek(pos) != char:
            raise self._fail(pos, repr(char))
        return pos + 1

    def _take_while1(
        self, pos: int, chars: frozenset[str], expected: str
    ) -> tuple[str, int]:
        end = pos
        while end < len(self.source) and self.source[end] in chars:
            end += 1
        if end == pos:
            raise self._fail(pos, expected)
        return self.source[pos:end], end

    # ---------- atoms ----------

    def _basis(self, pos: int) -> tuple[str, int]:
        labels, pos = self._take_while1(
            self._skip_ws(pos), _BASIS_CHARS, "basis labels (0, 1, +, -)"
        )
        return labels, self._skip_ws(pos)

    def _number(self, pos: int) -> tuple[Expression, int]:
        literal, pos = self._take_while1(pos, _NUMBER_CHARS, "number")
        return Scalar(_to_complex(literal)), pos

    def _ket(self, pos: int) -> tuple[Ket, int]:
        pos = self._char(pos, "|")
        labels, pos = self._basis(pos)
        pos = self._char(pos, ">")
        return Ket(tensor_basis(labels)), pos

    def _bra(self, pos: int) -> tuple[Bra, int]:
        pos = self._char(pos, "<")
        labels, pos = self._basis(pos)
        pos = self._char(pos, "|")
        return Bra(tensor_basis(labels)), pos

    def _outer(self, pos: int) -> tuple[Expression, int]:
        ket, pos = self._ket(pos)
        bra, pos = self._bra(pos)
        return Outer(ket.ket, bra.ket), pos

    def _inner(self, pos: int) -> tuple[Expression, int]:
        pos = self._char(pos, "<")
        bra_labels, pos = self._basis(pos)
        pos = self._char(pos, "|")
        ket_labels, pos = self._basis(pos)
        pos = self._char(pos, ">")
        return (
            Inner(Bra(tensor_basis(bra_labels)), Ket(tensor_basis(ket_labels))),
            pos,
        )

    def _parenthesized(self, pos: int) -> tuple[Expression, int]:
        pos = self._char(pos, "(")
        expression, pos = self._additive(pos)
        pos = self._char(pos, ")")
        return Parenthesized(expression), pos

    def _norm(self, pos: int) -> tuple[Expression, int]:
        pos = self._char(pos, "|")
        expression, pos = self._additive(pos)
        pos = self._char(pos, "|")
        return Norm(expression), pos

    def _atom(self, pos: int) -> tuple[Expression, int]:
        start = self._skip_ws(pos)
        # Order matters: a ket followed by a bra is an outer product, and
        # "<a|b>" must be tried before the plain bra "<a|".
        alternatives = (
            self._number,
            self._outer,
            self._inner,
            self._bra,
            self._ket,
            self._parenthesized,
            self._norm,
        )
        for alternative in alternatives:
            try:
                expression, end = alternative(start)
            except DiracSyntaxError:
                continue
            return expression, self._skip_ws(end)
        raise self._fail(start, "expression")

    # ---------- operators ----------

    def _dagger(self, pos: int) -> tuple[Expression, int]:
        expression, pos = self._atom(self._skip_ws(pos))
        if self._peek(pos) == "'":
            expression, pos = Dagger(expression), pos + 1
        return expression, self._skip_ws(pos)

    def _inverse(self, pos: int) -> tuple[Expression, int]:
        pos = self._skip_ws(pos)
        if self._peek(pos) == "-":
            expression, pos = self._dagger(pos + 1)
            return AdditiveInverse(expression), pos
        return self._dagger(pos)

    def _multiplicative_step(
        self, pos: int
    ) -> tuple[type[Expression], Expression, int]:
        op = self._peek(pos)
        if op in _MULTIPLICATIVE_OPS:
            try:
                rhs, end = self._inverse(pos + 1)
                return _MULTIPLICATIVE_OPS[op], rhs, end
            except DiracSyntaxError:
                pass
        # Juxtaposition: no operator, plain multiplication.
        rhs, end = self._dagger(pos)
        return Mul, rhs, end

    def _multiplicative(self, pos: int) -> tuple[Expression, int]:
        acc, pos = self._inverse(pos)
        while True:
            try:
                node_type, rhs, pos = self._multiplicative_step(pos)
            except DiracSyntaxError:
                return acc, pos
            acc = node_type(acc, rhs)

    def _additive(self, pos: int) -> tuple[Expression, int]:
        acc, pos = self._multiplicative(pos)
        while (op := self._peek(pos)) in _ADDITIVE_OPS:
            try:
                rhs, end = self._multiplicative(pos + 1)
            except DiracSyntaxError:
                break
            acc, pos = _ADDITIVE_OPS[op](acc, rhs), end
        return acc, pos


def parse(source: str) -> Expression:
    """Parse *source* into an expression tree.

    Raises:
        DiracSyntaxError: If *source* is not valid notation or has trailing
            text.
        LiteralError: If a number token cannot be converted.
        NestingError: If *source* nests too deeply to parse.
    """
    try:
        expression = _Parser(source).parse()
    except RecursionError as err:
        raise NestingError(source) from err
    logger.debug("parsed %r into %r", source, expression)
    return expression


def dirac(source: str) -> Tensor:
    """Parse and evaluate *source* in one step.

    Args:
        source: Dirac notation, e.g. ``"|0> x |1> + |1> x |0>"``.

    Returns:
        The evaluated tensor.

    Raises:
        DiracSyntaxError: If *source* is not valid notation (recoverable).
        EvaluationError: If evaluation hits a fatal tensor error; the
            underlying :class:`TensorError` is chained as ``__cause__``.
        NestingError: If *source* nests too deeply to parse or evaluate.
    """
    try:
        tensor = parse(source).compute()
    except TensorError as err:
        raise EvaluationError(source, err) from err
    except RecursionError as err:
        raise NestingError(source) from err
    logger.debug("evaluated %r to shape %s", source, tensor.shape)
    return tensor
