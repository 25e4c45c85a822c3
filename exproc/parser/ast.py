"""
Abstract Syntax Tree (AST) node definitions for arithmetic expressions.

This module defines the four node kinds every exproc tree is built from:
variables, numeric constants, binary operators and unary operators. Nodes
are never mutated once built; every transform returns a fresh tree. It
follows the Visitor pattern so evaluation, printing and the calculus
transforms live outside the node classes.
"""

from abc import ABC, abstractmethod
from typing import Any, Protocol

from ..core.errors import VariableNameTooLongError
from .operators import BinaryOperator, UnaryOperator

#: Tolerance under which two constants count as the same number
EPSILON = 1e-7

#: Longest accepted variable name
MAX_VARIABLE_NAME_LENGTH = 15


def double_is_same(lhs: float, rhs: float) -> bool:
    """Epsilon comparison used by structural equality and the simplifier."""
    return abs(lhs - rhs) < EPSILON


class ASTVisitor(Protocol):
    """
    Visitor protocol for traversing AST nodes.

    Implementations provide evaluation, string rendering, TeX rendering,
    differentiation, simplification and substitution.
    """

    def visit_variable(self, node: "Variable") -> Any:
        ...

    def visit_constant(self, node: "Constant") -> Any:
        ...

    def visit_binary_op(self, node: "BinaryOp") -> Any:
        ...

    def visit_unary_op(self, node: "UnaryOp") -> Any:
        ...


class ASTNode(ABC):
    """
    Base class for all AST nodes.

    Uses the Visitor pattern to allow multiple operations (eval, string, TeX)
    without modifying node classes. Equality is structural (see ``same``).
    """

    @abstractmethod
    def accept(self, visitor: ASTVisitor) -> Any:
        """Accept a visitor for traversal."""
        pass

    @abstractmethod
    def copy(self) -> "ASTNode":
        """Return a deep copy of this tree."""
        pass

    @abstractmethod
    def __repr__(self) -> str:
        """Return string representation for debugging."""
        pass

    def __str__(self) -> str:
        from .visitors import print_infix

        return print_infix(self)


# Leaf Nodes (terminals)


class Constant(ASTNode):
    """
    Represents a numeric literal.

    Examples: 42, 3.14, 1e-10
    """

    def __init__(self, value: float | int):
        self.value = float(value)

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_constant(self)

    def copy(self) -> "Constant":
        return Constant(self.value)

    def __repr__(self) -> str:
        return f"Constant({self.value})"

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Constant) and double_is_same(self.value, other.value)


class Variable(ASTNode):
    """
    Represents a variable.

    Examples: x, y, theta, x_1

    Raises:
        VariableNameTooLongError: If name is longer than MAX_VARIABLE_NAME_LENGTH
    """

    def __init__(self, name: str):
        if len(name) > MAX_VARIABLE_NAME_LENGTH:
            raise VariableNameTooLongError(name, MAX_VARIABLE_NAME_LENGTH)
        self.name = name

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_variable(self)

    def copy(self) -> "Variable":
        return Variable(self.name)

    def __repr__(self) -> str:
        return f"Variable('{self.name}')"

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Variable) and self.name == other.name


# Composite Nodes (operators)


class BinaryOp(ASTNode):
    """
    Represents a binary operation.

    Examples: 2 + 3, x * y, a ^ b
    """

    def __init__(self, op: BinaryOperator, lhs: ASTNode, rhs: ASTNode):
        self.op = op
        self.lhs = lhs
        self.rhs = rhs

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_binary_op(self)

    def copy(self) -> "BinaryOp":
        return BinaryOp(self.op, self.lhs.copy(), self.rhs.copy())

    def __repr__(self) -> str:
        return f"BinaryOp({self.op.name}, {self.lhs!r}, {self.rhs!r})"

    def __eq__(self, other: object) -> bool:
        return (
            isinstance(other, BinaryOp)
            and self.op is other.op
            and self.lhs == other.lhs
            and self.rhs == other.rhs
        )


class UnaryOp(ASTNode):
    """
    Represents a unary operation.

    Examples: -x, sin(x), ln(x + 1)
    """

    def __init__(self, op: UnaryOperator, operand: ASTNode):
        self.op = op
        self.operand = operand

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_unary_op(self)

    def copy(self) -> "UnaryOp":
        return UnaryOp(self.op, self.operand.copy())

    def __repr__(self) -> str:
        return f"UnaryOp({self.op.name}, {self.operand!r})"

    def __eq__(self, other: object) -> bool:
        return (
            isinstance(other, UnaryOp)
            and self.op is other.op
            and self.operand == other.operand
        )


def copy(node: ASTNode) -> ASTNode:
    """Deep copy of a tree."""
    return node.copy()


def same(lhs: ASTNode, rhs: ASTNode) -> bool:
    """Structural equality with epsilon comparison of constants."""
    return lhs == rhs
