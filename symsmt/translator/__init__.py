"""
Translators from expression trees to solver terms.

- `expr2z3`: expression trees to z3 terms
"""

from .expr2z3 import lower

__all__ = ["lower"]
