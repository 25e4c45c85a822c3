"""
Calculus package.

Tree-to-tree transforms built on the parser's AST: differentiation,
simplification, substitution and Taylor expansion.
"""

from .derivative import DerivativeVisitor, derivative, general_power_derivative, is_constant
from .simplify import SimplifyVisitor, negate, normalize_signs, simplify
from .substitute import Substitution, SubstitutionVisitor, substitute
from .taylor import taylor

__all__ = [
    "DerivativeVisitor",
    "derivative",
    "general_power_derivative",
    "is_constant",
    "SimplifyVisitor",
    "negate",
    "normalize_signs",
    "simplify",
    "Substitution",
    "SubstitutionVisitor",
    "substitute",
    "taylor",
]
