"""
Expression parser package.

This package provides arithmetic expression parsing for exproc.
It includes tokenization, AST construction, operator tables and the
visitors that evaluate and print trees.
"""

from .ast import (
    EPSILON,
    MAX_VARIABLE_NAME_LENGTH,
    ASTNode,
    BinaryOp,
    Constant,
    UnaryOp,
    Variable,
    copy,
    double_is_same,
    same,
)
from .context import Associativity, Context, OperatorConfig
from .operators import BinaryOperator, UnaryOperator, apply_binary, apply_unary, priority
from .parser import ParseError, ParseErrorKind, Parser, parse
from .tokenizer import Token, TokenType, Tokenizer
from .visitors import (
    EvalResult,
    EvalVisitor,
    StringVisitor,
    TeXVisitor,
    VariablesVisitor,
    evaluate,
    free_variables,
    print_infix,
    print_tex,
)

__all__ = [
    "EPSILON",
    "MAX_VARIABLE_NAME_LENGTH",
    "ASTNode",
    "BinaryOp",
    "Constant",
    "UnaryOp",
    "Variable",
    "copy",
    "double_is_same",
    "same",
    "Associativity",
    "Context",
    "OperatorConfig",
    "BinaryOperator",
    "UnaryOperator",
    "apply_binary",
    "apply_unary",
    "priority",
    "ParseError",
    "ParseErrorKind",
    "Parser",
    "parse",
    "Token",
    "TokenType",
    "Tokenizer",
    "EvalResult",
    "EvalVisitor",
    "StringVisitor",
    "TeXVisitor",
    "VariablesVisitor",
    "evaluate",
    "free_variables",
    "print_infix",
    "print_tex",
]
