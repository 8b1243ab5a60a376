# coding: utf-8
"""
SymPy front end.

Converts SymPy expressions into symsmt expression trees so that
constraint stores can be built and queried with SymPy objects directly::

    >>> import sympy as sp
    >>> x, y = sp.symbols("x y", integer=True)
    >>> cs = SympyConstraints([x >= 1, y >= 1])
    >>> cs.isprovable(x + y >= 2)
    True
    >>> cs.resolve(x > 5)
    x > 5

Symbols are typed from an optional ``kinds`` mapping (keyed by symbol or
name). Without an entry, integer symbols become Integer variables, symbols
used as formulas become Bool variables and everything else is Real.
"""
from __future__ import annotations

import logging
from typing import Any, List, Mapping, Optional, Sequence, Union

import sympy as sp

from symsmt.config import SolverConfig
from symsmt.expr.ast import (
    And,
    Eq,
    Expression,
    Literal,
    Not,
    Operation,
    OperatorKind,
    Or,
    Variable,
    VarKind,
)
from symsmt.smt.constraints import ConstraintStore
from symsmt.smt.queries import issatisfiable, isprovable, resolve
from symsmt.unsat_core.unsat_core import unsat_core
from symsmt.utils.exceptions import UnsupportedOperatorError

logger = logging.getLogger(__name__)

KindMap = Mapping[Union[str, sp.Symbol], Union[VarKind, str]]

_RELATIONS = {
    ">": OperatorKind.GT,
    ">=": OperatorKind.GE,
    "<": OperatorKind.LT,
    "<=": OperatorKind.LE,
    "==": OperatorKind.EQ,
}


def from_sympy(expr: Any, kinds: Optional[KindMap] = None) -> Expression:
    """
    Convert a SymPy expression to an expression tree.

    Parameters
    ----------
    expr : sp.Basic
        A SymPy formula or term. Python bools and numbers are accepted too.
    kinds : mapping, optional
        Explicit variable kinds, keyed by Symbol or by name.

    Returns
    -------
    Expression
        The equivalent expression tree.

    Raises
    ------
    UnsupportedOperatorError
        For SymPy heads without a counterpart (functions, Xor, infinity, ...).
    """
    return _convert(sp.sympify(expr), kinds or {}, boolean=True)


def _convert(expr: sp.Basic, kinds: KindMap, boolean: bool) -> Expression:
    if expr is sp.true:
        return Literal(True)
    if expr is sp.false:
        return Literal(False)
    if expr.is_Symbol:
        return Variable(expr.name, _kind_of(expr, kinds, boolean))
    if expr.is_Integer:
        return Literal(int(expr))
    if expr.is_Rational:
        # exact p/q on the real sort; Integer / Integer would be z3's div
        return Operation(OperatorKind.DIV,
                         (Literal(float(expr.p)), Literal(float(expr.q))))
    if expr.is_Float:
        return Literal(float(expr))
    if expr.is_Relational:
        if expr.rel_op == "!=":
            return Not(Eq(_term(expr.lhs, kinds), _term(expr.rhs, kinds)))
        op = _RELATIONS.get(expr.rel_op)
        if op is None:
            raise UnsupportedOperatorError(type(expr).__name__, len(expr.args), expr)
        return Operation(op, (_term(expr.lhs, kinds), _term(expr.rhs, kinds)))
    if expr.is_Add:
        return Operation(OperatorKind.ADD, [_term(a, kinds) for a in expr.args])
    if expr.is_Mul:
        return Operation(OperatorKind.MUL, [_term(a, kinds) for a in expr.args])
    if expr.is_Pow:
        base = _term(expr.base, kinds)
        if expr.exp.is_Integer and expr.exp < 0:
            return Operation(OperatorKind.DIV,
                             (Literal(1.0), base ** int(-expr.exp)))
        return Operation(OperatorKind.POW, (base, _term(expr.exp, kinds)))
    if isinstance(expr, sp.And):
        return And([_formula(a, kinds) for a in expr.args])
    if isinstance(expr, sp.Or):
        return Or([_formula(a, kinds) for a in expr.args])
    if isinstance(expr, sp.Not):
        return Not(_formula(expr.args[0], kinds))
    if isinstance(expr, sp.Implies):
        return Or(Not(_formula(expr.args[0], kinds)), _formula(expr.args[1], kinds))
    raise UnsupportedOperatorError(type(expr).__name__, len(expr.args), expr)


def _term(expr: sp.Basic, kinds: KindMap) -> Expression:
    return _convert(expr, kinds, boolean=False)


def _formula(expr: sp.Basic, kinds: KindMap) -> Expression:
    return _convert(expr, kinds, boolean=True)


def _kind_of(symbol: sp.Symbol, kinds: KindMap, boolean: bool) -> VarKind:
    kind = kinds.get(symbol, kinds.get(symbol.name))
    if kind is not None:
        return VarKind(kind) if not isinstance(kind, VarKind) else kind
    if symbol.is_integer:
        return VarKind.INTEGER
    if boolean:
        return VarKind.BOOL
    return VarKind.REAL


class SympyConstraints:
    """A ConstraintStore that takes and returns SymPy expressions."""

    def __init__(self, constraints: Sequence[Any], kinds: Optional[KindMap] = None,
                 config: Optional[SolverConfig] = None):
        self.kinds = dict(kinds or {})
        self.originals = tuple(constraints)
        self.store = ConstraintStore(
            [from_sympy(c, self.kinds) for c in self.originals], config)
        logger.debug("Converted %d SymPy constraints", len(self.originals))

    def convert(self, expr: Any) -> Expression:
        return from_sympy(expr, self.kinds)

    def issatisfiable(self, expr: Any) -> Optional[bool]:
        return issatisfiable(self.convert(expr), self.store)

    def isprovable(self, expr: Any) -> bool:
        return isprovable(self.convert(expr), self.store)

    def resolve(self, expr: Any) -> Any:
        """True/False when decided, otherwise ``expr`` itself."""
        result = resolve(self.convert(expr), self.store)
        if isinstance(result, bool):
            return result
        return expr

    def unsat_core(self) -> List[int]:
        return unsat_core(self.store)

    def core_constraints(self) -> List[Any]:
        """The SymPy constraints named by ``unsat_core``."""
        return [self.originals[i - 1] for i in self.unsat_core()]

    def __len__(self) -> int:
        return len(self.originals)

    def __str__(self) -> str:
        return str(self.store)
