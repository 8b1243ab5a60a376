# coding: utf-8
"""
Background constraint sets over a z3 proof context.

A ConstraintStore lowers a fixed list of boolean expressions once, asserts
each of them under its own tracking literal and then only answers queries
against them. Every query runs inside a push/pop scope, so the asserted
background is the same after the query as before it.

Stores are not meant to be shared between threads. Each store serialises
its own solver access with a lock; callers wanting parallel queries should
``fork()`` one store per thread instead.
"""
from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

import z3

from symsmt.config import SolverConfig
from symsmt.smt.context import ProofContext, get_id
from symsmt.translator.expr2z3 import lower
from symsmt.utils.exceptions import TranslationError
from symsmt.utils.types import SolverResult

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BackgroundConstraint:
    """One asserted constraint: the input expression, its term and label."""

    index: int  # 1-based position in the input sequence
    expr: Any
    term: z3.BoolRef
    label: z3.BoolRef


class ConstraintStore:
    """A collection of boolean constraints with an associated z3 solver.

    Args:
        constraints: Boolean expressions, asserted in the given order
        config: Solver configuration (logic, timeout, ...)

    Example:
        >>> from symsmt.expr import Reals
        >>> x, y = Reals("x y")
        >>> cs = ConstraintStore([x > 0, y > 0, x + y < 10])
        >>> len(cs)
        3
    """

    def __init__(self, constraints: Iterable[Any] = (),
                 config: Optional[SolverConfig] = None):
        self.config = config or SolverConfig()
        self.context = ProofContext(self.config)
        self.lock = threading.RLock()
        self._constraints: Tuple[Any, ...] = tuple(constraints)
        self._background: List[BackgroundConstraint] = []
        self._label_index: Dict[int, int] = {}

        for i, expr in enumerate(self._constraints, start=1):
            label = self.context.fresh_label(i)
            term = self._lower_boolean(expr)
            self.context.solver.assert_and_track(term, label)
            self._background.append(BackgroundConstraint(i, expr, term, label))
            self._label_index[get_id(label)] = i

        logger.debug("Asserted %d background constraints (logic=%s, timeout=%s)",
                     len(self._background), self.config.logic, self.config.timeout_ms)

    # ------------------------------------------------------------------ #
    # Background
    # ------------------------------------------------------------------ #

    @property
    def constraints(self) -> Tuple[Any, ...]:
        """The input expressions, in order."""
        return self._constraints

    @property
    def background(self) -> Tuple[BackgroundConstraint, ...]:
        return tuple(self._background)

    @property
    def labels(self) -> List[z3.BoolRef]:
        return [bc.label for bc in self._background]

    def __len__(self) -> int:
        return len(self._constraints)

    def select(self, indices: Iterable[int]) -> List[Any]:
        """The constraints at the given 1-based indices."""
        result = []
        for i in indices:
            if not 1 <= i <= len(self._constraints):
                raise IndexError(f"constraint index {i} out of range 1..{len(self)}")
            result.append(self._constraints[i - 1])
        return result

    def index_of_label(self, label: z3.AstRef) -> Optional[int]:
        """1-based index of the constraint tracked by ``label``, if any."""
        return self._label_index.get(get_id(label))

    def fork(self) -> "ConstraintStore":
        """An independent store over the same background constraints."""
        return ConstraintStore(self._constraints, self.config)

    # ------------------------------------------------------------------ #
    # Checks
    # ------------------------------------------------------------------ #

    def speculative_check(self, expr: Any) -> SolverResult:
        """Check background + ``expr`` without changing the background."""
        with self.lock:
            term = self._lower_boolean(expr)
            with self.context.scope() as solver:
                solver.add(term)
                if self.config.trace_queries:
                    logger.debug("Query:\n%s", solver.sexpr())
                result = self.context.check()
        logger.debug("speculative check of %s: %s", expr, result.name)
        return result

    def check_background(self) -> SolverResult:
        """Check the background constraints alone."""
        with self.lock:
            return self.context.check()

    def _lower_boolean(self, expr: Any) -> z3.BoolRef:
        term = lower(expr, self.context)
        if not z3.is_bool(term):
            raise TranslationError(
                f"{expr} has sort {term.sort()}, expected a boolean", expr)
        return term

    def __str__(self) -> str:
        lines = ["Constraints:"]
        for i, expr in enumerate(self._constraints, start=1):
            suffix = " ∧" if i != len(self._constraints) else ""
            lines.append(f"  {expr}{suffix}")
        return "\n".join(lines)

    def __repr__(self) -> str:
        return f"ConstraintStore({list(self._constraints)!r})"


# short alias
Constraints = ConstraintStore


def constraint_store(constraints: Sequence[Any], **kwargs) -> ConstraintStore:
    """Build a store, passing keyword arguments on to SolverConfig."""
    return ConstraintStore(constraints, SolverConfig(**kwargs))
