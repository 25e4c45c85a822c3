"""
Shared pytest fixtures and utilities for testing exproc trees.

This module provides:
- Fixtures for the default parsing context and numeric sample grids
- A converter from exproc trees to SymPy expressions for cross-checks
- A numeric evaluation helper that fails loudly on unbound variables
"""

import numpy as np
import pytest
import sympy

from exproc.parser import (
    ASTNode,
    BinaryOp,
    BinaryOperator,
    Constant,
    Context,
    UnaryOp,
    UnaryOperator,
    Variable,
    evaluate,
)


_SYMPY_BINARY = {
    BinaryOperator.ADD: lambda a, b: a + b,
    BinaryOperator.SUB: lambda a, b: a - b,
    BinaryOperator.MUL: lambda a, b: a * b,
    BinaryOperator.DIV: lambda a, b: a / b,
    BinaryOperator.POW: lambda a, b: a**b,
}

_SYMPY_UNARY = {
    UnaryOperator.NEG: lambda a: -a,
    UnaryOperator.LN: sympy.log,
    UnaryOperator.SIN: sympy.sin,
    UnaryOperator.COS: sympy.cos,
    UnaryOperator.TAN: sympy.tan,
    UnaryOperator.COT: sympy.cot,
    UnaryOperator.ASIN: sympy.asin,
    UnaryOperator.ACOS: sympy.acos,
    UnaryOperator.ATAN: sympy.atan,
    UnaryOperator.ACOT: sympy.acot,
}


def to_sympy(node: ASTNode) -> sympy.Expr:
    """Convert an exproc tree to the equivalent SymPy expression."""
    if isinstance(node, Constant):
        return sympy.Float(node.value)
    if isinstance(node, Variable):
        return sympy.Symbol(node.name)
    if isinstance(node, BinaryOp):
        return _SYMPY_BINARY[node.op](to_sympy(node.lhs), to_sympy(node.rhs))
    if isinstance(node, UnaryOp):
        return _SYMPY_UNARY[node.op](to_sympy(node.operand))
    raise TypeError(f"Not an expression node: {node!r}")


def value_at(node: ASTNode, **bindings: float) -> float:
    """Evaluate a tree, raising if a variable is unbound."""
    return evaluate(node, bindings).unwrap()


@pytest.fixture
def context():
    """Fresh default parsing context."""
    return Context.default()


@pytest.fixture
def sample_points():
    """Points inside the domain of every supported function (0 < x < 1)."""
    return np.linspace(0.15, 0.85, 8)


@pytest.fixture
def wide_points():
    """Symmetric grid around zero for polynomial checks."""
    return np.linspace(-2.0, 2.0, 9)


@pytest.fixture
def sympy_converter():
    """Converter from exproc trees to SymPy expressions."""
    return to_sympy


@pytest.fixture
def evaluate_at():
    """Helper evaluating a tree under keyword bindings."""
    return value_at
