"""Shared helpers: the exception hierarchy and result types."""

from .types import SolverResult
from .exceptions import (
    SymSMTException,
    TranslationError,
    UnsupportedOperatorError,
    VariableKindConflictError,
    TranslationEscapeError,
    PreconditionError,
)

__all__ = [
    "SolverResult",
    "SymSMTException",
    "TranslationError",
    "UnsupportedOperatorError",
    "VariableKindConflictError",
    "TranslationEscapeError",
    "PreconditionError",
]
