"""Expression trees consumed by the translator."""

from .ast import (
    VarKind,
    OperatorKind,
    Expression,
    Variable,
    Literal,
    Operation,
    as_expr,
    is_bool_literal,
    free_variables,
    Bool,
    Int,
    Real,
    Bools,
    Ints,
    Reals,
    Not,
    And,
    Or,
    Eq,
    Sum,
    Product,
)

__all__ = [
    "VarKind",
    "OperatorKind",
    "Expression",
    "Variable",
    "Literal",
    "Operation",
    "as_expr",
    "is_bool_literal",
    "free_variables",
    "Bool",
    "Int",
    "Real",
    "Bools",
    "Ints",
    "Reals",
    "Not",
    "And",
    "Or",
    "Eq",
    "Sum",
    "Product",
]
