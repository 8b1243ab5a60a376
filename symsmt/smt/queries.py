# coding: utf-8
"""
Satisfiability, provability and resolution queries against a store.

All three queries go through ``ConstraintStore.speculative_check`` and so
never change the background constraints.

A contradictory background makes every query expression unsatisfiable,
including its negation. Since ``isprovable(e)`` asks for ``e`` to be
satisfiable first, nothing is provable from such a store, and ``resolve``
returns every expression unchanged. Classical logic would call everything
vacuously provable here; callers that need to tell the two situations
apart should look at ``store.check_background()``.
"""
from __future__ import annotations

import logging
from typing import Any, Optional, Union

from symsmt.expr.ast import Expression, Not, as_expr, is_bool_literal
from symsmt.smt.constraints import ConstraintStore
from symsmt.utils.types import SolverResult

logger = logging.getLogger(__name__)


def negate(expr: Any) -> Expression:
    """Logical negation of ``expr``, wrapping Python bools as literals."""
    return Not(expr)


def check_satisfiability(expr: Any, store: ConstraintStore) -> SolverResult:
    """Three-valued satisfiability of ``expr`` together with the background.

    Boolean literals are answered without a scoped query: ``false`` is
    unsatisfiable outright, and ``true`` is exactly as satisfiable as the
    background itself.
    """
    if is_bool_literal(expr):
        if not as_expr(expr).value:
            return SolverResult.UNSAT
        return store.check_background()
    return store.speculative_check(expr)


def issatisfiable(expr: Any, store: ConstraintStore) -> Optional[bool]:
    """
    Can ``expr`` be true under the background constraints?

    Returns:
        True if satisfiable, False if unsatisfiable, None if z3 could not
        decide (timeout, incomplete theory, ...).
    """
    return check_satisfiability(expr, store).to_bool()


def isprovable(expr: Any, store: ConstraintStore) -> bool:
    """
    Does the background entail ``expr``?

    ``expr`` has to be satisfiable and its negation unsatisfiable. An
    undecided check on either side makes the answer False.
    """
    if check_satisfiability(expr, store) is not SolverResult.SAT:
        return False
    provable = check_satisfiability(negate(expr), store) is SolverResult.UNSAT
    logger.debug("isprovable(%s) = %s", expr, provable)
    return provable


def resolve(expr: Any, store: ConstraintStore) -> Union[bool, Any]:
    """
    Simplify ``expr`` to a constant when the background decides it.

    Returns:
        True if ``expr`` is provable, False if its negation is provable,
        otherwise ``expr`` itself (the same object that was passed in).
    """
    if isprovable(expr, store):
        return True
    if isprovable(negate(expr), store):
        return False
    return expr
