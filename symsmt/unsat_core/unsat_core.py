"""Unsat core extraction for contradictory constraint stores."""

from __future__ import annotations

import logging
from typing import Any, List

from symsmt.smt.constraints import ConstraintStore
from symsmt.utils.exceptions import PreconditionError
from symsmt.utils.types import SolverResult

logger = logging.getLogger(__name__)


class UnsatCoreResult:
    """Indices (1-based) of a conflicting subset of the background."""
    def __init__(self, indices: List[int], is_minimal: bool = False):
        self.indices = sorted(indices)
        self.is_minimal = is_minimal

    def __iter__(self):
        return iter(self.indices)

    def __len__(self) -> int:
        return len(self.indices)

    def __str__(self) -> str:
        minimal_str = "minimal" if self.is_minimal else "not necessarily minimal"
        return f"Core ({minimal_str}): {self.indices}"


def compute_unsat_core(store: ConstraintStore) -> UnsatCoreResult:
    """
    Ask z3 which background constraints are in conflict.

    The background must be unsatisfiable on its own. z3 may return any
    unsatisfiable subset of the tracked constraints; it is not required to
    be minimal, even with ``minimize_core`` switched on.

    Raises:
        PreconditionError: the background is satisfiable or undecided
    """
    with store.lock:
        result = store.check_background()
        if result is not SolverResult.UNSAT:
            what = "a satisfiable" if result is SolverResult.SAT else "an undecided"
            raise PreconditionError(
                f"core requested on {what} constraint set", result)

        indices = []
        for label in store.context.unsat_core():
            index = store.index_of_label(label)
            if index is None:
                # z3 only reports literals passed to assert_and_track
                logger.warning("Ignoring unknown core literal %s", label)
                continue
            indices.append(index)

    logger.debug("unsat core: %s", sorted(indices))
    return UnsatCoreResult(indices)


def unsat_core(store: ConstraintStore) -> List[int]:
    """Sorted 1-based indices of constraints that are jointly unsatisfiable.

    >>> from symsmt.expr import Ints
    >>> (x,) = Ints("x")
    >>> unsat_core(ConstraintStore([x >= 10, x <= 5]))
    [1, 2]
    """
    return compute_unsat_core(store).indices


def unsat_core_constraints(store: ConstraintStore) -> List[Any]:
    """The background expressions named by ``unsat_core``."""
    return store.select(unsat_core(store))
