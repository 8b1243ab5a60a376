# coding: utf-8
"""
Proof context: one z3 context, one solver and the variables declared in them.

Variables are interned by name. Asking for a name that is already known
returns the very same z3 constant; asking for it with a different kind
raises VariableKindConflictError instead of silently shadowing it.
"""
from __future__ import annotations

import logging
from contextlib import contextmanager
from fractions import Fraction
from typing import Dict, Iterator, List, Optional, Tuple

import z3

from symsmt.config import SolverConfig
from symsmt.expr.ast import VarKind
from symsmt.utils.exceptions import VariableKindConflictError
from symsmt.utils.types import SolverResult

logger = logging.getLogger(__name__)


def get_id(term: z3.AstRef) -> int:
    """Get unique integer identifier for a Z3 AST."""
    return z3.Z3_get_ast_id(term.ctx.ref(), term.as_ast())


class ProofContext:
    """Owns a z3 context and the solver built in it.

    Terms created through this object belong to ``self.ctx`` and must not
    be mixed with terms of another ProofContext.
    """

    def __init__(self, config: Optional[SolverConfig] = None):
        self.config = config or SolverConfig()
        self.ctx = z3.Context()
        if self.config.logic:
            self.solver = z3.SolverFor(self.config.logic, ctx=self.ctx)
        else:
            self.solver = z3.Solver(ctx=self.ctx)
        if self.config.timeout_ms is not None:
            self.solver.set("timeout", self.config.timeout_ms)
        if self.config.minimize_core:
            self.solver.set("core.minimize", True)
        self._symbols: Dict[str, Tuple[VarKind, z3.ExprRef]] = {}

    # ------------------------------------------------------------------ #
    # Term factory
    # ------------------------------------------------------------------ #

    def declare(self, name: str, kind: VarKind) -> z3.ExprRef:
        """Return the z3 constant for ``name``, creating it on first use."""
        known = self._symbols.get(name)
        if known is not None:
            declared, term = known
            if declared is not kind:
                raise VariableKindConflictError(name, declared, kind)
            return term

        if kind is VarKind.BOOL:
            term = z3.Bool(name, self.ctx)
        elif kind is VarKind.INTEGER or self.config.reals_as_ints:
            # Real shares the integer sort unless reals_as_ints is off
            term = z3.Int(name, self.ctx)
        else:
            term = z3.Real(name, self.ctx)
        self._symbols[name] = (kind, term)
        return term

    @property
    def symbols(self) -> Dict[str, VarKind]:
        """Declared variable names and their kinds."""
        return {name: kind for name, (kind, _) in self._symbols.items()}

    def bool_val(self, value: bool) -> z3.BoolRef:
        return z3.BoolVal(value, self.ctx)

    def int_val(self, value: int) -> z3.IntNumRef:
        return z3.IntVal(value, self.ctx)

    def real_val(self, value: float) -> z3.RatNumRef:
        # exact binary value of the float, not its shortest decimal repr
        frac = Fraction(value)
        return z3.RealVal(f"{frac.numerator}/{frac.denominator}", self.ctx)

    def fresh_label(self, index: int) -> z3.BoolRef:
        """A tracking literal for the index-th background constraint.

        Fresh constants cannot clash with user variables of the same name.
        """
        return z3.FreshBool(f"{self.config.label_prefix}_{index}", self.ctx)

    # ------------------------------------------------------------------ #
    # Solver protocol
    # ------------------------------------------------------------------ #

    @contextmanager
    def scope(self) -> Iterator[z3.Solver]:
        """push on entry, pop on exit, also when the body raises."""
        self.solver.push()
        try:
            yield self.solver
        finally:
            self.solver.pop()

    def check(self) -> SolverResult:
        """Check the currently asserted formulas."""
        result = SolverResult.from_z3(self.solver.check())
        if result is SolverResult.UNKNOWN:
            logger.warning("z3 returned unknown: %s", self.solver.reason_unknown())
        return result

    def unsat_core(self) -> List[z3.BoolRef]:
        """Tracking literals of the last unsat check."""
        return list(self.solver.unsat_core())
