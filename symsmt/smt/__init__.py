"""
Constraint stores and the queries answered against them.

- `context`: z3 context, solver and variable interning
- `constraints`: background constraint sets with tracked assertions
- `queries`: issatisfiable / isprovable / resolve
"""

from .context import ProofContext, get_id
from .constraints import BackgroundConstraint, ConstraintStore, Constraints, constraint_store
from .queries import check_satisfiability, issatisfiable, isprovable, resolve, negate

__all__ = [
    "ProofContext",
    "get_id",
    "BackgroundConstraint",
    "ConstraintStore",
    "Constraints",
    "constraint_store",
    "check_satisfiability",
    "issatisfiable",
    "isprovable",
    "resolve",
    "negate",
]
