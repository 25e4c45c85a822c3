"""
exproc - symbolic expression processor.

Parses infix arithmetic into expression trees and operates on them:
numeric evaluation, differentiation, simplification, substitution and
Taylor expansion, with infix and TeX printers.

    >>> from exproc import parse, derivative, simplify, print_infix
    >>> print_infix(simplify(derivative(parse("x^3"), "x")))
    '3 * x ^ 2'
"""

from .calculus import (
    Substitution,
    derivative,
    is_constant,
    simplify,
    substitute,
    taylor,
)
from .core.errors import (
    ExprocError,
    ParseError,
    ParseErrorKind,
    UnknownVariableError,
    VariableNameTooLongError,
)
from .parser import (
    ASTNode,
    BinaryOp,
    BinaryOperator,
    Constant,
    Context,
    EvalResult,
    UnaryOp,
    UnaryOperator,
    Variable,
    copy,
    evaluate,
    free_variables,
    parse,
    print_infix,
    print_tex,
    same,
)

__version__ = "0.1.0"

__all__ = [
    "ASTNode",
    "BinaryOp",
    "BinaryOperator",
    "Constant",
    "Context",
    "EvalResult",
    "ExprocError",
    "ParseError",
    "ParseErrorKind",
    "Substitution",
    "UnaryOp",
    "UnaryOperator",
    "UnknownVariableError",
    "Variable",
    "VariableNameTooLongError",
    "copy",
    "derivative",
    "evaluate",
    "free_variables",
    "is_constant",
    "parse",
    "print_infix",
    "print_tex",
    "same",
    "simplify",
    "substitute",
    "taylor",
]
