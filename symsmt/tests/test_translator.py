"""Tests for lowering expression trees into z3 terms"""

import pytest
import z3

from symsmt.config import SolverConfig
from symsmt.expr import And, Bool, Eq, Int, Literal, Not, Operation, OperatorKind, Or, Real
from symsmt.smt.context import ProofContext
from symsmt.translator import lower
from symsmt.utils.exceptions import (
    TranslationError,
    TranslationEscapeError,
    UnsupportedOperatorError,
    VariableKindConflictError,
)


@pytest.fixture
def ctx():
    return ProofContext()


def _valid(term):
    s = z3.Solver(ctx=term.ctx)
    s.add(z3.Not(term))
    return s.check() == z3.unsat


def test_variables_are_interned(ctx):
    a = lower(Int("x"), ctx)
    b = lower(Int("x") + 0, ctx).arg(0)
    assert a.eq(b)
    assert ctx.symbols == {"x": Int("x").kind}


def test_variable_sorts(ctx):
    assert lower(Bool("p"), ctx).sort() == z3.BoolSort(ctx.ctx)
    assert lower(Int("n"), ctx).sort() == z3.IntSort(ctx.ctx)
    # Real variables share the integer sort by default
    assert lower(Real("x"), ctx).sort() == z3.IntSort(ctx.ctx)


def test_real_sort_when_enabled():
    ctx = ProofContext(SolverConfig(reals_as_ints=False))
    assert lower(Real("x"), ctx).sort() == z3.RealSort(ctx.ctx)


def test_kind_conflict(ctx):
    lower(Int("x") > 0, ctx)
    with pytest.raises(VariableKindConflictError) as info:
        lower(Bool("x"), ctx)
    assert info.value.name == "x"


def test_literals(ctx):
    assert z3.is_true(lower(Literal(True), ctx))
    assert z3.is_false(lower(False, ctx))
    assert lower(Literal(7), ctx).as_long() == 7
    half = lower(Literal(0.5), ctx)
    assert z3.is_rational_value(half)
    assert half.as_fraction() == 0.5


def test_every_operator_lowers(ctx):
    x, y = Int("x"), Int("y")
    p, q = Bool("p"), Bool("q")
    exprs = [
        ~p, p & q, p | q, x >= y, x <= y, x > y, x < y, Eq(x, y),
        x + y, x - y, -x, x * y, x ** 2, x / y,
    ]
    for e in exprs:
        assert isinstance(lower(e, ctx), z3.ExprRef), str(e)


def test_arithmetic_semantics(ctx):
    x = Int("x")
    assert _valid(lower(Eq(x + x, 2 * x), ctx))
    assert _valid(lower(Eq(x - x, 0), ctx))
    assert _valid(lower(Eq(Literal(7) / 2, 3), ctx))
    assert _valid(lower(Or(x >= 0, x < 0), ctx))
    assert _valid(lower(Not(And(x > 0, x < 0)), ctx))


def test_nary_and_or(ctx):
    p, q, r = Bool("p"), Bool("q"), Bool("r")
    term = lower(And(p, q, r), ctx)
    assert term.num_args() == 3


def test_unsupported_operator(ctx):
    with pytest.raises(UnsupportedOperatorError) as info:
        lower(Operation("max", (Int("x"), Int("y"))), ctx)
    assert info.value.op == "max"
    assert info.value.arity == 2


def test_wrong_arity(ctx):
    with pytest.raises(UnsupportedOperatorError) as info:
        lower(Operation(OperatorKind.NOT, (Bool("p"), Bool("q"))), ctx)
    assert info.value.op is OperatorKind.NOT
    assert info.value.arity == 2
    with pytest.raises(UnsupportedOperatorError):
        lower(Operation(OperatorKind.GE, (Int("x"),)), ctx)


def test_escaped_child(ctx):
    with pytest.raises(TranslationEscapeError) as info:
        lower(Operation(OperatorKind.ADD, (Int("x"), "y")), ctx)
    assert info.value.subterm == "y"
    assert info.value.kind == "str"


def test_escaped_root(ctx):
    with pytest.raises(TranslationEscapeError):
        lower(object(), ctx)


def test_sort_mismatch_is_translation_error(ctx):
    with pytest.raises(TranslationError):
        lower(Not(Int("x")), ctx)


@pytest.mark.parametrize("expr", [
    Bool("p") + Int("x") > 0,
    Bool("p") > Int("x"),
    Eq(Bool("p"), 1),
    Bool("p") * 3 >= 2,
    -Bool("p") < 0,
    Bool("p") ** 2 >= 0,
    And(Bool("p"), Int("x")),
    Or(Int("x") > 0, Real("y")),
    Literal(True) + 1 > 0,
])
def test_bool_and_number_do_not_mix(ctx, expr):
    with pytest.raises(TranslationError) as info:
        lower(expr, ctx)
    assert "sort mismatch" in str(info.value)
    assert info.value.subterm is not None


def test_int_and_real_mix(ctx):
    x = Int("x")
    assert z3.is_bool(lower(x + Literal(0.5) > 1, ctx))
    assert z3.is_bool(lower(Eq(Bool("p"), Literal(False)), ctx))


def test_mixed_sorts_rejected_by_queries():
    from symsmt.smt import ConstraintStore, isprovable

    p = Bool("p")
    cs = ConstraintStore([p])
    with pytest.raises(TranslationError):
        isprovable(p * 3 >= 2, cs)
    with pytest.raises(TranslationError):
        ConstraintStore([p + 1 > 0])


def test_unsupported_operator_is_translation_error():
    assert issubclass(UnsupportedOperatorError, TranslationError)
    assert issubclass(TranslationEscapeError, TranslationError)
