"""Front ends that build expression trees from other symbolic libraries."""

from .sympy_frontend import SympyConstraints, from_sympy

__all__ = ["SympyConstraints", "from_sympy"]
