"""
Algebraic simplification.

Trees are simplified bottom-up in three passes per node:

1. Constant folding through the operator tables.
2. Sign normalization (``normalize_signs``): peel one ``-`` off each side
   where the operator allows it, and collapse ``-(-a)``.
3. Identity and absorbing element rules per operator, e.g. ``0 + r → r``,
   ``a * a → a ^ 2``, ``l ^ 1 → l``.

Constants are compared with ``double_is_same`` so the rules fire on values
that are equal up to rounding.
"""

from __future__ import annotations

from typing import Callable

from ..parser.ast import ASTNode, BinaryOp, Constant, UnaryOp, Variable, double_is_same, same
from ..parser.operators import BinaryOperator, UnaryOperator, apply_binary, apply_unary


def _is_value(node: ASTNode, value: float) -> bool:
    return isinstance(node, Constant) and double_is_same(node.value, value)


def _is_negation(node: ASTNode) -> bool:
    return isinstance(node, UnaryOp) and node.op is UnaryOperator.NEG


def normalize_signs(
    op: BinaryOperator, lhs: ASTNode, rhs: ASTNode
) -> tuple[BinaryOperator, ASTNode, ASTNode]:
    """
    Peel negations off the operands of a binary operator.

    -a * -b → a * b
    -a / -b → a / b
    a + (-b) → a - b
    a - (-b) → a + b

    Args:
        op: Binary operator
        lhs: Simplified left operand
        rhs: Simplified right operand

    Returns:
        The (operator, lhs, rhs) triple to build the node from
    """
    if op in (BinaryOperator.MUL, BinaryOperator.DIV):
        if _is_negation(lhs) and _is_negation(rhs):
            return op, lhs.operand, rhs.operand

    elif op is BinaryOperator.ADD and _is_negation(rhs):
        return BinaryOperator.SUB, lhs, rhs.operand

    elif op is BinaryOperator.SUB and _is_negation(rhs):
        return BinaryOperator.ADD, lhs, rhs.operand

    return op, lhs, rhs


def negate(operand: ASTNode) -> ASTNode:
    """-a, collapsing -(-a) to a."""
    if _is_negation(operand):
        return operand.operand
    return UnaryOp(UnaryOperator.NEG, operand)


# Identity and absorbing element rules; operands are already simplified


def simplify_add(lhs: ASTNode, rhs: ASTNode) -> ASTNode:
    if _is_value(lhs, 0.0):
        return rhs
    if _is_value(rhs, 0.0):
        return lhs
    if same(lhs, rhs):
        return simplify_mul(Constant(2.0), lhs)
    return BinaryOp(BinaryOperator.ADD, lhs, rhs)


def simplify_sub(lhs: ASTNode, rhs: ASTNode) -> ASTNode:
    if _is_value(lhs, 0.0):
        return negate(rhs)
    if _is_value(rhs, 0.0):
        return lhs
    if same(lhs, rhs):
        return Constant(0.0)
    return BinaryOp(BinaryOperator.SUB, lhs, rhs)


def simplify_mul(lhs: ASTNode, rhs: ASTNode) -> ASTNode:
    if _is_value(lhs, 1.0):
        return rhs
    if _is_value(rhs, 1.0):
        return lhs
    if _is_value(lhs, 0.0) or _is_value(rhs, 0.0):
        return Constant(0.0)
    if same(lhs, rhs):
        return BinaryOp(BinaryOperator.POW, lhs, Constant(2.0))
    return BinaryOp(BinaryOperator.MUL, lhs, rhs)


def simplify_div(lhs: ASTNode, rhs: ASTNode) -> ASTNode:
    if _is_value(lhs, 0.0):
        return Constant(0.0)
    if _is_value(rhs, 1.0):
        return lhs
    if same(lhs, rhs):
        return Constant(1.0)
    return BinaryOp(BinaryOperator.DIV, lhs, rhs)


def simplify_pow(lhs: ASTNode, rhs: ASTNode) -> ASTNode:
    if _is_value(lhs, 1.0):
        return Constant(1.0)
    if _is_value(rhs, 0.0):
        return Constant(1.0)
    if _is_value(rhs, 1.0):
        return lhs
    return BinaryOp(BinaryOperator.POW, lhs, rhs)


_BINARY_RULES: dict[BinaryOperator, Callable[[ASTNode, ASTNode], ASTNode]] = {
    BinaryOperator.ADD: simplify_add,
    BinaryOperator.SUB: simplify_sub,
    BinaryOperator.MUL: simplify_mul,
    BinaryOperator.DIV: simplify_div,
    BinaryOperator.POW: simplify_pow,
}


class SimplifyVisitor:
    """Rebuild a tree bottom-up, applying the simplification passes."""

    def visit_constant(self, node: Constant) -> ASTNode:
        return Constant(node.value)

    def visit_variable(self, node: Variable) -> ASTNode:
        return Variable(node.name)

    def visit_binary_op(self, node: BinaryOp) -> ASTNode:
        lhs = node.lhs.accept(self)
        rhs = node.rhs.accept(self)

        if isinstance(lhs, Constant) and isinstance(rhs, Constant):
            return Constant(apply_binary(node.op, lhs.value, rhs.value))

        op, lhs, rhs = normalize_signs(node.op, lhs, rhs)
        return _BINARY_RULES[op](lhs, rhs)

    def visit_unary_op(self, node: UnaryOp) -> ASTNode:
        operand = node.operand.accept(self)

        if isinstance(operand, Constant):
            return Constant(apply_unary(node.op, operand.value))

        if node.op is UnaryOperator.NEG:
            return negate(operand)
        return UnaryOp(node.op, operand)


def simplify(node: ASTNode) -> ASTNode:
    """
    Simplify a tree.

    Never fails; returns a fresh tree even when no rule applies.
    """
    return node.accept(SimplifyVisitor())
