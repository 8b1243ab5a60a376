# coding: utf-8
"""
Public subclasses of different Exceptions
"""
from typing import Any, Optional


class SymSMTException(Exception):
    """Base class for symsmt exceptions"""

    pass


class TranslationError(SymSMTException):
    """An expression could not be lowered into a solver term."""

    def __init__(self, message: str, subterm: Any = None):
        super().__init__(message)
        self.subterm = subterm


class UnsupportedOperatorError(TranslationError):
    """The translator met an operator (or an arity of it) it does not implement."""

    def __init__(self, op: Any, arity: int, subterm: Any = None):
        name = getattr(op, "name", op)
        super().__init__(
            f"unsupported operator {name} with {arity} argument(s)", subterm)
        self.op = op
        self.arity = arity


class VariableKindConflictError(TranslationError):
    """The same variable name was requested with two different kinds."""

    def __init__(self, name: str, declared: Any, requested: Any):
        super().__init__(
            f"variable '{name}' is declared as {_kind_name(declared)} "
            f"but was requested as {_kind_name(requested)}")
        self.name = name
        self.kinds = (declared, requested)


class TranslationEscapeError(TranslationError):
    """An un-lowered node reached a term construction step.

    This indicates an internal invariant violation rather than bad input
    that the caller could recover from.
    """

    def __init__(self, subterm: Any, kind: Optional[str] = None):
        kind = kind if kind is not None else type(subterm).__name__
        super().__init__(
            f"{subterm!r} of kind {kind} was not converted into a z3 expression",
            subterm)
        self.kind = kind


class PreconditionError(SymSMTException):
    """An operation was requested in a state where it is not defined."""

    def __init__(self, message: str, result: Any = None):
        super().__init__(message)
        self.result = result


def _kind_name(kind: Any) -> str:
    return getattr(kind, "value", str(kind))
