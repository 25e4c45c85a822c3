"""
Operator tables.

Pure lookups from operator tags to display tokens, numeric semantics and
binary priorities. Numeric application follows IEEE double arithmetic:
domain problems produce ``inf``/``nan`` instead of raising.
"""

from enum import Enum

import numpy as np


class BinaryOperator(Enum):
    """Binary operators; the value is the display token."""

    ADD = "+"
    SUB = "-"
    MUL = "*"
    DIV = "/"
    POW = "^"


class UnaryOperator(Enum):
    """Unary operators; the value is the display token."""

    NEG = "-"
    LN = "ln"
    SIN = "sin"
    COS = "cos"
    TAN = "tan"
    COT = "cot"
    ASIN = "arcsin"
    ACOS = "arccos"
    ATAN = "arctan"
    ACOT = "arccot"


BINARY_PRIORITY: dict[BinaryOperator, int] = {
    BinaryOperator.ADD: 1,
    BinaryOperator.SUB: 1,
    BinaryOperator.MUL: 2,
    BinaryOperator.DIV: 2,
    BinaryOperator.POW: 3,
}


def priority(op: BinaryOperator) -> int:
    """Priority of a binary operator (higher binds tighter)."""
    return BINARY_PRIORITY[op]


def display(op: BinaryOperator | UnaryOperator) -> str:
    """Display token of an operator."""
    return op.value


def _acot(x: np.float64) -> np.float64:
    return np.arctan(-x) + np.pi / 2


_BINARY_FUNCTIONS = {
    BinaryOperator.ADD: np.add,
    BinaryOperator.SUB: np.subtract,
    BinaryOperator.MUL: np.multiply,
    BinaryOperator.DIV: np.divide,
    BinaryOperator.POW: np.power,
}

_UNARY_FUNCTIONS = {
    UnaryOperator.NEG: np.negative,
    UnaryOperator.LN: np.log,
    UnaryOperator.SIN: np.sin,
    UnaryOperator.COS: np.cos,
    UnaryOperator.TAN: np.tan,
    UnaryOperator.COT: lambda x: 1.0 / np.tan(x),
    UnaryOperator.ASIN: np.arcsin,
    UnaryOperator.ACOS: np.arccos,
    UnaryOperator.ATAN: np.arctan,
    UnaryOperator.ACOT: _acot,
}


def apply_binary(op: BinaryOperator, lhs: float, rhs: float) -> float:
    """
    Apply a binary operator to two numbers.

    Args:
        op: Operator to apply
        lhs: Left operand
        rhs: Right operand

    Returns:
        The result as a Python float (possibly inf or nan)
    """
    with np.errstate(all="ignore"):
        return float(_BINARY_FUNCTIONS[op](np.float64(lhs), np.float64(rhs)))


def apply_unary(op: UnaryOperator, operand: float) -> float:
    """
    Apply a unary operator to a number.

    Args:
        op: Operator to apply
        operand: Operand value

    Returns:
        The result as a Python float (possibly inf or nan)
    """
    with np.errstate(all="ignore"):
        return float(_UNARY_FUNCTIONS[op](np.float64(operand)))
