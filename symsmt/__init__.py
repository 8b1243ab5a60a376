"""
symsmt: satisfiability and provability queries over symbolic expressions.

Expressions are built with the classes in ``symsmt.expr`` (or converted
from SymPy), lowered into z3 terms and checked against a fixed set of
background constraints::

    >>> from symsmt import Constraints, Ints, isprovable
    >>> x, y = Ints("x y")
    >>> cs = Constraints([x >= 1, y >= 1])
    >>> isprovable(x + y >= 2, cs)
    True
"""
import os

from .config import SolverConfig
from .expr import (
    And,
    Bool,
    Bools,
    Eq,
    Expression,
    Int,
    Ints,
    Literal,
    Not,
    Operation,
    OperatorKind,
    Or,
    Product,
    Real,
    Reals,
    Sum,
    Variable,
    VarKind,
)
from .smt import (
    ConstraintStore,
    Constraints,
    check_satisfiability,
    issatisfiable,
    isprovable,
    resolve,
)
from .unsat_core import unsat_core, unsat_core_constraints
from .utils import (
    PreconditionError,
    SolverResult,
    SymSMTException,
    TranslationError,
    TranslationEscapeError,
    UnsupportedOperatorError,
    VariableKindConflictError,
)

# Debug flag - can be set via environment variable SYMSMT_DEBUG
SYMSMT_DEBUG = os.environ.get("SYMSMT_DEBUG", "False").lower() in ("true", "1", "yes")

__version__ = "0.1.0"

__all__ = [
    "SolverConfig",
    "And", "Bool", "Bools", "Eq", "Expression", "Int", "Ints", "Literal", "Not",
    "Operation", "OperatorKind", "Or", "Product", "Real", "Reals", "Sum",
    "Variable", "VarKind",
    "ConstraintStore", "Constraints", "check_satisfiability", "issatisfiable",
    "isprovable", "resolve",
    "unsat_core", "unsat_core_constraints",
    "PreconditionError", "SolverResult", "SymSMTException", "TranslationError",
    "TranslationEscapeError", "UnsupportedOperatorError", "VariableKindConflictError",
    "SYMSMT_DEBUG",
]
