# coding: utf-8
"""
Lowering expression trees into z3 terms.

Children are lowered first (post-order), then the operator is looked up
in a dispatch table keyed by OperatorKind. Every operator comes with an
arity check; an operator or arity outside the table is an error, never a
guess. Operand sorts are checked too: arithmetic and comparisons take
numbers, the connectives take booleans, and equality takes two of a kind.
Int and Real operands mix freely.

Division is z3's ``div`` on the integer sort (and ``/`` on reals); its
behaviour at zero is whatever z3 decides, as in SMT-LIB.
"""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Callable, Dict, List, Tuple

import z3

from symsmt.expr.ast import Literal, Operation, OperatorKind, Variable
from symsmt.utils.exceptions import (
    TranslationError,
    TranslationEscapeError,
    UnsupportedOperatorError,
)

if TYPE_CHECKING:
    from symsmt.smt.context import ProofContext

logger = logging.getLogger(__name__)

ArityCheck = Callable[[int], bool]
Builder = Callable[[List[z3.ExprRef]], z3.ExprRef]


def _exactly(n: int) -> ArityCheck:
    return lambda k: k == n


def _at_least(n: int) -> ArityCheck:
    return lambda k: k >= n


def _sub(args: List[z3.ExprRef]) -> z3.ExprRef:
    if len(args) == 1:
        return -args[0]
    return args[0] - args[1]


_DISPATCH: Dict[OperatorKind, Tuple[ArityCheck, Builder]] = {
    OperatorKind.NOT: (_exactly(1), lambda a: z3.Not(a[0])),
    OperatorKind.AND: (_at_least(1), lambda a: z3.And(*a)),
    OperatorKind.OR: (_at_least(1), lambda a: z3.Or(*a)),
    OperatorKind.GE: (_exactly(2), lambda a: a[0] >= a[1]),
    OperatorKind.LE: (_exactly(2), lambda a: a[0] <= a[1]),
    OperatorKind.GT: (_exactly(2), lambda a: a[0] > a[1]),
    OperatorKind.LT: (_exactly(2), lambda a: a[0] < a[1]),
    OperatorKind.EQ: (_exactly(2), lambda a: a[0] == a[1]),
    OperatorKind.ADD: (_at_least(1), lambda a: z3.Sum(*a)),
    OperatorKind.SUB: (lambda k: k in (1, 2), _sub),
    OperatorKind.MUL: (_at_least(1), lambda a: z3.Product(*a)),
    OperatorKind.POW: (_exactly(2), lambda a: a[0] ** a[1]),
    OperatorKind.DIV: (_exactly(2), lambda a: a[0] / a[1]),
}

_BOOLEAN_OPS = (OperatorKind.NOT, OperatorKind.AND, OperatorKind.OR)


def lower(expr: Any, ctx: ProofContext) -> z3.ExprRef:
    """
    Convert an expression tree to a z3 expression.

    Args:
        expr: An Expression, or a plain Python bool/int/float
        ctx: The proof context that owns the resulting term

    Returns:
        A z3 expression equivalent to ``expr``.

    Raises:
        UnsupportedOperatorError: unknown operator or wrong arity
        VariableKindConflictError: a name is used with two kinds
        TranslationEscapeError: some node could not be converted
        TranslationError: z3 rejected the term (e.g. a sort mismatch)
    """
    term = _lower(expr, ctx)
    if not isinstance(term, z3.ExprRef):
        raise TranslationEscapeError(term, _kind_of(term))
    return term


def _lower(expr: Any, ctx: ProofContext) -> Any:
    if isinstance(expr, Variable):
        return ctx.declare(expr.name, expr.kind)
    if isinstance(expr, Literal):
        return _lower_constant(expr.value, ctx)
    if isinstance(expr, (bool, int, float)):
        return _lower_constant(expr, ctx)
    if isinstance(expr, Operation):
        return _lower_operation(expr, ctx)
    # not ours; the caller reports it as an escaped node
    return expr


def _lower_constant(value: Any, ctx: ProofContext) -> z3.ExprRef:
    # bool is a subclass of int and has to be checked first
    if isinstance(value, bool):
        return ctx.bool_val(value)
    if isinstance(value, int):
        return ctx.int_val(value)
    return ctx.real_val(value)


def _lower_operation(expr: Operation, ctx: ProofContext) -> z3.ExprRef:
    args = [_lower(child, ctx) for child in expr.children]
    for child, arg in zip(expr.children, args):
        if not isinstance(arg, z3.ExprRef):
            raise TranslationEscapeError(child, _kind_of(child))

    entry = _DISPATCH.get(expr.op) if isinstance(expr.op, OperatorKind) else None
    if entry is None:
        raise UnsupportedOperatorError(expr.op, expr.arity, expr)
    arity_ok, build = entry
    if not arity_ok(expr.arity):
        raise UnsupportedOperatorError(expr.op, expr.arity, expr)
    _check_sorts(expr, args)

    try:
        return build(args)
    except (z3.Z3Exception, TypeError) as err:
        logger.debug("z3 rejected %s with arguments %s", expr, args)
        raise TranslationError(f"z3 rejected {expr}: {err}", expr) from err


def _check_sorts(expr: Operation, args: List[z3.ExprRef]) -> None:
    # z3py would coerce a Bool operand of arithmetic into If(b, 1, 0)
    if expr.op in _BOOLEAN_OPS:
        ok = all(z3.is_bool(a) for a in args)
    elif expr.op is OperatorKind.EQ:
        ok = all(z3.is_bool(a) for a in args) or all(z3.is_arith(a) for a in args)
    else:
        ok = all(z3.is_arith(a) for a in args)
    if not ok:
        sorts = ", ".join(str(a.sort()) for a in args)
        raise TranslationError(
            f"sort mismatch in {expr}: {expr.op.name} applied to ({sorts})", expr)


def _kind_of(node: Any) -> str:
    if isinstance(node, Variable):
        return node.kind.value
    return type(node).__name__
