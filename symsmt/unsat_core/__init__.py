"""Unsat core extraction.

Maps the tracking literals of a contradictory ConstraintStore back to the
1-based positions of the constraints they label.
"""

from symsmt.unsat_core.unsat_core import (
    UnsatCoreResult,
    compute_unsat_core,
    unsat_core,
    unsat_core_constraints,
)

__all__ = ["UnsatCoreResult", "compute_unsat_core", "unsat_core", "unsat_core_constraints"]
