"""
Taylor series expansion.

    f(a) + sum_{k=1..n} f^(k)(a) / k! * (x - a)^k

The k-th derivative comes from differentiating the (k-1)-th one, so each
step works on the previous step's tree. Unsimplified derivative trees grow
quickly with k (expression swell); by default every intermediate derivative
is simplified before the next step. Set ``TAYLOR_SIMPLIFY_STEPS`` to false
(or pass ``simplify_steps=False``) to differentiate the raw trees instead:
the resulting series has the same value but large orders get expensive.
"""

from __future__ import annotations

import math
from typing import Optional

from ..core.config import settings
from ..core.logging import get_logger
from ..parser.ast import ASTNode, BinaryOp, Constant, UnaryOp, Variable
from ..parser.operators import BinaryOperator
from .derivative import derivative
from .simplify import simplify
from .substitute import Substitution, substitute

logger = get_logger(__name__)


def _node_count(node: ASTNode) -> int:
    if isinstance(node, BinaryOp):
        return 1 + _node_count(node.lhs) + _node_count(node.rhs)
    if isinstance(node, UnaryOp):
        return 1 + _node_count(node.operand)
    return 1


def taylor(
    node: ASTNode,
    var: str,
    point: ASTNode,
    order: int,
    simplify_steps: Optional[bool] = None,
) -> ASTNode:
    """
    Build the truncated Taylor polynomial of a tree.

    Args:
        node: Function to expand
        var: Expansion variable
        point: Expansion point (any tree; borrowed, copied where used)
        order: Highest power of (var - point) to keep
        simplify_steps: Simplify derivatives between steps
            (defaults to settings.TAYLOR_SIMPLIFY_STEPS)

    Returns:
        Simplified polynomial tree

    Raises:
        ValueError: If order is negative
    """
    if order < 0:
        raise ValueError(f"Taylor order must be non-negative, got {order}")

    if simplify_steps is None:
        simplify_steps = settings.TAYLOR_SIMPLIFY_STEPS

    at_point = [Substitution(var, point)]

    series = substitute(node, at_point)
    current = node.copy()

    for k in range(1, order + 1):
        current = derivative(current, var)
        if simplify_steps:
            current = simplify(current)

        logger.debug(
            "Taylor step %d: derivative has %d nodes", k, _node_count(current)
        )

        coefficient = BinaryOp(
            BinaryOperator.DIV,
            substitute(current, at_point),
            Constant(float(math.factorial(k))),
        )
        power = BinaryOp(
            BinaryOperator.POW,
            BinaryOp(BinaryOperator.SUB, Variable(var), point.copy()),
            Constant(float(k)),
        )
        series = BinaryOp(
            BinaryOperator.ADD,
            series,
            BinaryOp(BinaryOperator.MUL, coefficient, power),
        )

    return simplify(series)
