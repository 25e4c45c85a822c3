"""
Symbolic differentiation.

The derivative of a tree is built rule by rule from fresh nodes; the input
tree is only read. Results are raw (``0 * x`` terms and the like are left
in place) and are meant to be passed through ``simplify``.
"""

from __future__ import annotations

from typing import Optional

from ..parser.ast import ASTNode, BinaryOp, Constant, UnaryOp, Variable, double_is_same
from ..parser.operators import BinaryOperator, UnaryOperator


# Builders used by the rewrite rules below


def _const(value: float) -> Constant:
    return Constant(value)


def _add(lhs: ASTNode, rhs: ASTNode) -> BinaryOp:
    return BinaryOp(BinaryOperator.ADD, lhs, rhs)


def _sub(lhs: ASTNode, rhs: ASTNode) -> BinaryOp:
    return BinaryOp(BinaryOperator.SUB, lhs, rhs)


def _mul(lhs: ASTNode, rhs: ASTNode) -> BinaryOp:
    return BinaryOp(BinaryOperator.MUL, lhs, rhs)


def _div(lhs: ASTNode, rhs: ASTNode) -> BinaryOp:
    return BinaryOp(BinaryOperator.DIV, lhs, rhs)


def _pow(lhs: ASTNode, rhs: ASTNode) -> BinaryOp:
    return BinaryOp(BinaryOperator.POW, lhs, rhs)


def _neg(operand: ASTNode) -> UnaryOp:
    return UnaryOp(UnaryOperator.NEG, operand)


def _square(node: ASTNode) -> BinaryOp:
    return _pow(node.copy(), _const(2.0))


def is_constant(node: ASTNode, var: str) -> bool:
    """
    Check whether a tree does not depend on ``var``.

    Purely structural: any variable other than ``var`` counts as constant.
    """
    if isinstance(node, Variable):
        return node.name != var
    if isinstance(node, Constant):
        return True
    if isinstance(node, BinaryOp):
        return is_constant(node.lhs, var) and is_constant(node.rhs, var)
    if isinstance(node, UnaryOp):
        return is_constant(node.operand, var)
    raise TypeError(f"Not an expression node: {node!r}")


def general_power_derivative(base: ASTNode, exponent: ASTNode, var: str) -> ASTNode:
    """
    Derivative of ``base ^ exponent`` when both sides depend on ``var``.

    d(l^r) = l^r * (r' * ln(l) + (l' / l) * r)
    """
    d_base = derivative(base, var)
    d_exponent = derivative(exponent, var)

    return _mul(
        _pow(base.copy(), exponent.copy()),
        _add(
            _mul(d_exponent, UnaryOp(UnaryOperator.LN, base.copy())),
            _mul(_div(d_base, base.copy()), exponent.copy()),
        ),
    )


# f, df -> derivative of op(f)
_UNARY_RULES = {
    UnaryOperator.NEG: lambda f, df: _neg(df),
    UnaryOperator.LN: lambda f, df: _div(df, f.copy()),
    UnaryOperator.SIN: lambda f, df: _mul(df, UnaryOp(UnaryOperator.COS, f.copy())),
    UnaryOperator.COS: lambda f, df: _mul(_neg(df), UnaryOp(UnaryOperator.SIN, f.copy())),
    UnaryOperator.TAN: lambda f, df: _div(df, _square(UnaryOp(UnaryOperator.COS, f))),
    UnaryOperator.COT: lambda f, df: _div(_neg(df), _square(UnaryOp(UnaryOperator.SIN, f))),
    UnaryOperator.ASIN: lambda f, df: _div(df, _pow(_sub(_const(1.0), _square(f)), _const(0.5))),
    UnaryOperator.ACOS: lambda f, df: _div(_neg(df), _pow(_sub(_const(1.0), _square(f)), _const(0.5))),
    UnaryOperator.ATAN: lambda f, df: _div(df, _add(_const(1.0), _square(f))),
    UnaryOperator.ACOT: lambda f, df: _div(_neg(df), _add(_const(1.0), _square(f))),
}


class DerivativeVisitor:
    """
    Build the derivative of a tree with respect to one variable.

    Args:
        var: Name of the variable to differentiate by
    """

    def __init__(self, var: str):
        self.var = var
        self._binary_rules = {
            BinaryOperator.ADD: self._sum,
            BinaryOperator.SUB: self._difference,
            BinaryOperator.MUL: self._product,
            BinaryOperator.DIV: self._quotient,
            BinaryOperator.POW: self._power,
        }

    def visit_constant(self, node: Constant) -> ASTNode:
        return _const(0.0)

    def visit_variable(self, node: Variable) -> ASTNode:
        return _const(1.0 if node.name == self.var else 0.0)

    def visit_binary_op(self, node: BinaryOp) -> ASTNode:
        return self._binary_rules[node.op](node.lhs, node.rhs)

    def visit_unary_op(self, node: UnaryOp) -> ASTNode:
        return _UNARY_RULES[node.op](node.operand, node.operand.accept(self))

    def _sum(self, lhs: ASTNode, rhs: ASTNode) -> ASTNode:
        return _add(lhs.accept(self), rhs.accept(self))

    def _difference(self, lhs: ASTNode, rhs: ASTNode) -> ASTNode:
        return _sub(lhs.accept(self), rhs.accept(self))

    def _product(self, lhs: ASTNode, rhs: ASTNode) -> ASTNode:
        # l * r' + r * l'; zero terms are left for the simplifier
        return _add(
            _mul(lhs.copy(), rhs.accept(self)),
            _mul(rhs.copy(), lhs.accept(self)),
        )

    def _quotient(self, lhs: ASTNode, rhs: ASTNode) -> ASTNode:
        return _div(
            _sub(
                _mul(lhs.accept(self), rhs.copy()),
                _mul(rhs.accept(self), lhs.copy()),
            ),
            _mul(rhs.copy(), rhs.copy()),
        )

    def _power(self, base: ASTNode, exponent: ASTNode) -> ASTNode:
        if isinstance(exponent, Constant):
            # l^0 is constant; stops 0 * l^-1 (nan at l = 0) in repeated raw derivatives
            if double_is_same(exponent.value, 0.0):
                return _const(0.0)
            return _mul(
                _mul(_const(exponent.value), _pow(base.copy(), _const(exponent.value - 1.0))),
                base.accept(self),
            )

        if is_constant(exponent, self.var):
            # r * l^(r - 1) * l'; avoids ln(l) for negative bases
            return _mul(
                _mul(exponent.copy(), _pow(base.copy(), _sub(exponent.copy(), _const(1.0)))),
                base.accept(self),
            )

        if is_constant(base, self.var):
            return _mul(
                _pow(base.copy(), exponent.copy()),
                _mul(exponent.accept(self), UnaryOp(UnaryOperator.LN, base.copy())),
            )

        return general_power_derivative(base, exponent, self.var)


def derivative(node: Optional[ASTNode], var: str) -> Optional[ASTNode]:
    """
    Differentiate a tree.

    Args:
        node: Tree to differentiate; ``None`` yields ``None``
        var: Variable name to differentiate by

    Returns:
        Fresh, unsimplified derivative tree
    """
    if node is None:
        return None
    return node.accept(DerivativeVisitor(var))
