# coding: utf-8
"""
AST classes for typed boolean/arithmetic expressions.

Expressions are immutable trees of three node types:

- ``Variable(name, kind)`` with kind Bool, Integer or Real,
- ``Literal(value)`` holding a Python bool, int or float,
- ``Operation(op, children)`` applying an ``OperatorKind``.

The usual Python operators build trees::

    >>> x, y = Ints("x y")
    >>> print(x + y >= 2)
    x + y >= 2
    >>> p = Bool("p")
    >>> print(~p | (x > 0))
    ~p | x > 0

``==`` compares trees structurally (as in SymPy); equality atoms are
built with ``Eq``.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable, Tuple


class VarKind(Enum):
    """Declared type of a variable."""
    BOOL = "Bool"
    INTEGER = "Integer"
    REAL = "Real"


class OperatorKind(Enum):
    """Closed set of operators the translator knows about."""
    NOT = "!"
    AND = "&"
    OR = "|"
    GE = ">="
    LE = "<="
    GT = ">"
    LT = "<"
    EQ = "=="
    ADD = "+"
    SUB = "-"
    MUL = "*"
    POW = "**"
    DIV = "/"


# binding strength used for printing only
_PRECEDENCE = {
    OperatorKind.OR: 1,
    OperatorKind.AND: 2,
    OperatorKind.NOT: 7,
    OperatorKind.GE: 4,
    OperatorKind.LE: 4,
    OperatorKind.GT: 4,
    OperatorKind.LT: 4,
    OperatorKind.EQ: 4,
    OperatorKind.ADD: 5,
    OperatorKind.SUB: 5,
    OperatorKind.MUL: 6,
    OperatorKind.DIV: 6,
    OperatorKind.POW: 8,
}
_ATOM_PRECEDENCE = 10
_NEG_PRECEDENCE = 7

_LITERAL_TYPES = (bool, int, float)


class Expression:
    """Base class for all expression nodes."""

    def __invert__(self):
        return Operation(OperatorKind.NOT, (self,))

    def __and__(self, other):
        return _binary(OperatorKind.AND, self, other)

    def __rand__(self, other):
        return _binary(OperatorKind.AND, other, self)

    def __or__(self, other):
        return _binary(OperatorKind.OR, self, other)

    def __ror__(self, other):
        return _binary(OperatorKind.OR, other, self)

    def __ge__(self, other):
        return _binary(OperatorKind.GE, self, other)

    def __le__(self, other):
        return _binary(OperatorKind.LE, self, other)

    def __gt__(self, other):
        return _binary(OperatorKind.GT, self, other)

    def __lt__(self, other):
        return _binary(OperatorKind.LT, self, other)

    def __add__(self, other):
        return _binary(OperatorKind.ADD, self, other)

    def __radd__(self, other):
        return _binary(OperatorKind.ADD, other, self)

    def __sub__(self, other):
        return _binary(OperatorKind.SUB, self, other)

    def __rsub__(self, other):
        return _binary(OperatorKind.SUB, other, self)

    def __mul__(self, other):
        return _binary(OperatorKind.MUL, self, other)

    def __rmul__(self, other):
        return _binary(OperatorKind.MUL, other, self)

    def __truediv__(self, other):
        return _binary(OperatorKind.DIV, self, other)

    def __rtruediv__(self, other):
        return _binary(OperatorKind.DIV, other, self)

    def __pow__(self, other):
        return _binary(OperatorKind.POW, self, other)

    def __rpow__(self, other):
        return _binary(OperatorKind.POW, other, self)

    def __neg__(self):
        return Operation(OperatorKind.SUB, (self,))

    def _precedence(self) -> int:
        return _ATOM_PRECEDENCE


@dataclass(frozen=True)
class Variable(Expression):
    """A named, typed variable."""

    name: str
    kind: VarKind

    def __post_init__(self) -> None:
        if not isinstance(self.name, str) or not self.name:
            raise ValueError(f"Variable name must be a non-empty string, got {self.name!r}")
        if not isinstance(self.kind, VarKind):
            # accept the printed spelling, e.g. "Integer"
            object.__setattr__(self, "kind", VarKind(self.kind))

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True, eq=False)
class Literal(Expression):
    """A constant bool, int or float."""

    value: Any

    def __post_init__(self) -> None:
        if not isinstance(self.value, _LITERAL_TYPES):
            raise TypeError(
                f"Literal value must be bool, int or float, got {type(self.value).__name__}")
        if isinstance(self.value, float) and not math.isfinite(self.value):
            raise ValueError(f"Literal value must be finite, got {self.value}")

    # True == 1 == 1.0 in Python; literals of different types are distinct here
    def __eq__(self, other):
        if not isinstance(other, Literal):
            return NotImplemented
        return type(self.value) is type(other.value) and self.value == other.value

    def __hash__(self):
        return hash((Literal, type(self.value), self.value))

    def __str__(self) -> str:
        if isinstance(self.value, bool):
            return "true" if self.value else "false"
        return str(self.value)

    def _precedence(self) -> int:
        if not isinstance(self.value, bool) and self.value < 0:
            return _NEG_PRECEDENCE
        return _ATOM_PRECEDENCE


@dataclass(frozen=True)
class Operation(Expression):
    """An operator applied to an ordered sequence of children.

    The operator is normally an ``OperatorKind``; anything else is kept
    as given so that the translator can report it.
    """

    op: Any
    children: Tuple[Any, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "children", tuple(_coerce(c) for c in self.children))

    @property
    def arity(self) -> int:
        return len(self.children)

    def __bool__(self):
        raise TypeError(f"cannot determine truth value of {self}; use the query functions")

    def _precedence(self) -> int:
        if self.op is OperatorKind.SUB and self.arity == 1:
            return _NEG_PRECEDENCE
        return _PRECEDENCE.get(self.op, _ATOM_PRECEDENCE)

    def __str__(self) -> str:
        op = self.op
        if not isinstance(op, OperatorKind):
            args = ", ".join(str(c) for c in self.children)
            return f"{getattr(op, '__name__', op)}({args})"
        prec = self._precedence()
        if self.arity == 1 and op in (OperatorKind.NOT, OperatorKind.SUB):
            prefix = "~" if op is OperatorKind.NOT else "-"
            return prefix + _wrap(self.children[0], prec, strict=True)
        if self.arity == 1:
            return f"{op.name}({self.children[0]})"
        # ** is right associative, everything else groups to the left
        parts = []
        for i, child in enumerate(self.children):
            if op is OperatorKind.POW:
                strict = i == 0
            else:
                strict = i > 0 and op in (OperatorKind.SUB, OperatorKind.DIV)
            parts.append(_wrap(child, prec, strict))
        sep = f" {op.value} " if op is not OperatorKind.POW else op.value
        return sep.join(parts)


def _wrap(child: Any, prec: int, strict: bool) -> str:
    text = str(child)
    child_prec = child._precedence() if isinstance(child, Expression) else _ATOM_PRECEDENCE
    if child_prec < prec or (strict and child_prec == prec):
        return f"({text})"
    return text


def _coerce(value: Any) -> Any:
    """Wrap plain Python constants as literals; leave other objects alone."""
    if isinstance(value, Expression):
        return value
    if isinstance(value, _LITERAL_TYPES):
        return Literal(value)
    return value


def as_expr(value: Any) -> Expression:
    """Return ``value`` as an Expression, wrapping Python bool/int/float."""
    value = _coerce(value)
    if not isinstance(value, Expression):
        raise TypeError(f"cannot convert {type(value).__name__} to an expression")
    return value


def _binary(op: OperatorKind, left: Any, right: Any):
    if not isinstance(left, (Expression,) + _LITERAL_TYPES):
        return NotImplemented
    if not isinstance(right, (Expression,) + _LITERAL_TYPES):
        return NotImplemented
    return Operation(op, (left, right))


###############################################################################
# Builders
###############################################################################


def Bool(name: str) -> Variable:  # pylint: disable=invalid-name
    """Boolean variable."""
    return Variable(name, VarKind.BOOL)


def Int(name: str) -> Variable:  # pylint: disable=invalid-name
    """Integer variable."""
    return Variable(name, VarKind.INTEGER)


def Real(name: str) -> Variable:  # pylint: disable=invalid-name
    """Real variable."""
    return Variable(name, VarKind.REAL)


def _names(names: str):
    return [n for n in names.replace(",", " ").split(" ") if n]


def Bools(names: str):  # pylint: disable=invalid-name
    """Several boolean variables, e.g. ``p, q = Bools("p q")``."""
    return [Bool(n) for n in _names(names)]


def Ints(names: str):  # pylint: disable=invalid-name
    """Several integer variables."""
    return [Int(n) for n in _names(names)]


def Reals(names: str):  # pylint: disable=invalid-name
    """Several real variables."""
    return [Real(n) for n in _names(names)]


def Not(arg: Any) -> Operation:  # pylint: disable=invalid-name
    """Logical negation."""
    return Operation(OperatorKind.NOT, (as_expr(arg),))


def And(*args: Any) -> Operation:  # pylint: disable=invalid-name
    """N-ary conjunction (at least one argument)."""
    return Operation(OperatorKind.AND, tuple(as_expr(a) for a in _flat(args)))


def Or(*args: Any) -> Operation:  # pylint: disable=invalid-name
    """N-ary disjunction (at least one argument)."""
    return Operation(OperatorKind.OR, tuple(as_expr(a) for a in _flat(args)))


def Eq(left: Any, right: Any) -> Operation:  # pylint: disable=invalid-name
    """Equality atom ``left == right``."""
    return Operation(OperatorKind.EQ, (as_expr(left), as_expr(right)))


def Sum(*args: Any) -> Operation:  # pylint: disable=invalid-name
    """N-ary addition."""
    return Operation(OperatorKind.ADD, tuple(as_expr(a) for a in _flat(args)))


def Product(*args: Any) -> Operation:  # pylint: disable=invalid-name
    """N-ary multiplication."""
    return Operation(OperatorKind.MUL, tuple(as_expr(a) for a in _flat(args)))


def _flat(args: Tuple[Any, ...]) -> Iterable[Any]:
    # And([a, b]) and And(a, b) are the same call, as in z3py
    if len(args) == 1 and isinstance(args[0], (list, tuple)):
        return args[0]
    return args


def is_bool_literal(value: Any) -> bool:
    """True for Python bools and boolean Literal nodes."""
    if isinstance(value, Literal):
        value = value.value
    return isinstance(value, bool)


def free_variables(expr: Any) -> set:
    """Set of Variable nodes occurring in ``expr``."""
    if isinstance(expr, Variable):
        return {expr}
    if isinstance(expr, Operation):
        result = set()
        for child in expr.children:
            result |= free_variables(child)
        return result
    return set()
