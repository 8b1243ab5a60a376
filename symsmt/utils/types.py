# coding: utf-8
"""Common result types."""

from enum import Enum

import z3


class SolverResult(Enum):
    """Three-valued outcome of a satisfiability check.

    UNKNOWN is a genuine answer of the solver (e.g. a timeout or an
    incomplete theory) and must never be read as UNSAT.
    """

    SAT = 0
    UNSAT = 1
    UNKNOWN = 2

    @classmethod
    def from_z3(cls, res: z3.CheckSatResult) -> "SolverResult":
        """Convert a z3 check-sat answer."""
        if res == z3.sat:
            return cls.SAT
        if res == z3.unsat:
            return cls.UNSAT
        return cls.UNKNOWN

    def to_bool(self):
        """SAT -> True, UNSAT -> False, UNKNOWN -> None."""
        if self is SolverResult.SAT:
            return True
        if self is SolverResult.UNSAT:
            return False
        return None
