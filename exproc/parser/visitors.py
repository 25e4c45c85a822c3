"""
AST Visitor implementations for various operations.

Visitors implement the Visitor pattern to traverse and operate on AST nodes:
- StringVisitor: Convert AST to round-trippable infix text
- TeXVisitor: Convert AST to LaTeX representation
- EvalVisitor: Evaluate AST to a numeric EvalResult
- VariablesVisitor: Collect the free variables of a tree
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Mapping
from typing import Union

from pydantic import BaseModel, ConfigDict

from ..core.config import settings
from ..core.errors import UnknownVariableError
from .ast import ASTNode, BinaryOp, Constant, UnaryOp, Variable
from .context import Associativity, Context
from .operators import BinaryOperator, UnaryOperator, apply_binary, apply_unary

Bindings = Union[Mapping[str, float], Iterable[tuple[str, float]]]


def _format_number(value: float) -> str:
    """
    Integral values without a decimal point, others as shortest repr.

    Non-finite values have no literal; they print as the bracketed quotient
    that evaluates to them.
    """
    if math.isnan(value):
        return "(0 / 0)"
    if math.isinf(value):
        return "(1 / 0)" if value > 0 else "(-1 / 0)"
    if value.is_integer() and abs(value) < 1e16:
        return str(int(value))
    return repr(value)


class StringVisitor:
    """
    Convert AST to infix text that parses back to an equal tree.

    Examples:
    - BinaryOp(ADD, Constant(2), Constant(3)) → "2 + 3"
    - UnaryOp(SIN, Variable('x')) → "sin(x)"
    - BinaryOp(SUB, Variable('a'), BinaryOp(SUB, ...)) → "a - (b - c)"
    """

    def __init__(self, context: Context | None = None):
        self.context = context or Context.default()

    def visit_constant(self, node: Constant) -> str:
        return _format_number(node.value)

    def visit_variable(self, node: Variable) -> str:
        return node.name

    def visit_binary_op(self, node: BinaryOp) -> str:
        left_str = node.lhs.accept(self)
        right_str = node.rhs.accept(self)

        # Add parentheses if needed based on precedence
        left_prec = self._get_precedence(node.lhs)
        right_prec = self._get_precedence(node.rhs)
        op_prec = self.context.get_operator_precedence(node.op.value)
        assoc = self.context.get_operator_associativity(node.op.value)

        if left_prec > 0 and (
            left_prec < op_prec or (left_prec == op_prec and assoc == Associativity.RIGHT)
        ):
            left_str = f"({left_str})"

        if right_prec > 0 and (
            right_prec < op_prec or (right_prec == op_prec and assoc == Associativity.LEFT)
        ):
            right_str = f"({right_str})"

        return f"{left_str} {node.op.value} {right_str}"

    def visit_unary_op(self, node: UnaryOp) -> str:
        operand_str = node.operand.accept(self)

        if node.op is not UnaryOperator.NEG:
            return f"{node.op.value}({operand_str})"

        # '-' binds tighter than every binary operator
        if isinstance(node.operand, (BinaryOp, UnaryOp)):
            operand_str = f"({operand_str})"

        return f"-{operand_str}"

    def _get_precedence(self, node: ASTNode) -> int:
        """Get precedence of a node for parenthesization."""
        if isinstance(node, BinaryOp):
            return self.context.get_operator_precedence(node.op.value)
        return 0


class TeXVisitor:
    """
    Convert AST to LaTeX representation.

    Examples:
    - BinaryOp(MUL, Constant(2), Variable('x')) → "2 \\cdot x"
    - BinaryOp(DIV, Variable('x'), Constant(2)) → "\\frac{x}{2}"
    - BinaryOp(POW, Variable('x'), Constant(2)) → "{x}^{2}"
    """

    GREEK = {
        "alpha": r"\alpha",
        "beta": r"\beta",
        "gamma": r"\gamma",
        "delta": r"\delta",
        "epsilon": r"\epsilon",
        "theta": r"\theta",
        "lambda": r"\lambda",
        "mu": r"\mu",
        "pi": r"\pi",
        "sigma": r"\sigma",
        "phi": r"\phi",
        "omega": r"\omega",
        "Gamma": r"\Gamma",
        "Delta": r"\Delta",
        "Theta": r"\Theta",
        "Lambda": r"\Lambda",
        "Pi": r"\Pi",
        "Sigma": r"\Sigma",
        "Phi": r"\Phi",
        "Omega": r"\Omega",
    }

    FUNCTIONS = {
        UnaryOperator.LN: r"\ln",
        UnaryOperator.SIN: r"\sin",
        UnaryOperator.COS: r"\cos",
        UnaryOperator.TAN: r"\tan",
        UnaryOperator.COT: r"\cot",
        UnaryOperator.ASIN: r"\arcsin",
        UnaryOperator.ACOS: r"\arccos",
        UnaryOperator.ATAN: r"\arctan",
        UnaryOperator.ACOT: r"\operatorname{arccot}",
    }

    def __init__(self, context: Context | None = None, precision: int | None = None):
        self.context = context or Context.default()
        self.precision = precision if precision is not None else settings.TEX_PRECISION

    def visit_constant(self, node: Constant) -> str:
        value = node.value
        if math.isinf(value):
            return r"\infty" if value > 0 else r"-\infty"
        if math.isnan(value):
            return r"\mathrm{NaN}"
        if value.is_integer() and abs(value) < 1e16:
            return str(int(value))

        text = f"{value:.{self.precision}g}"
        mantissa, sep, exponent = text.partition("e")
        if not sep:
            return text
        # 1e-07 -> 1 \cdot 10^{-7}
        return f"{mantissa} \\cdot 10^{{{int(exponent)}}}"

    def visit_variable(self, node: Variable) -> str:
        if node.name in self.GREEK:
            return self.GREEK[node.name]

        # Multi-character variables
        if len(node.name) > 1:
            name = node.name.replace("_", r"\_")
            return f"\\mathrm{{{name}}}"

        return node.name

    def visit_binary_op(self, node: BinaryOp) -> str:
        left_str = node.lhs.accept(self)
        right_str = node.rhs.accept(self)

        if node.op is BinaryOperator.DIV:
            return f"\\frac{{{left_str}}}{{{right_str}}}"

        if node.op is BinaryOperator.POW:
            if (
                isinstance(node.lhs, (BinaryOp, UnaryOp))
                or self._is_negative_constant(node.lhs)
                or r"\cdot" in left_str
            ):
                left_str = f"\\left({left_str}\\right)"
            return f"{{{left_str}}}^{{{right_str}}}"

        op_prec = self.context.get_operator_precedence(node.op.value)
        left_prec = self._get_precedence(node.lhs)
        right_prec = self._get_precedence(node.rhs)

        if left_prec > 0 and left_prec < op_prec:
            left_str = f"\\left({left_str}\\right)"

        if (right_prec > 0 and right_prec <= op_prec) or self._is_negative(node.rhs):
            right_str = f"\\left({right_str}\\right)"

        op_tex = r"\cdot" if node.op is BinaryOperator.MUL else node.op.value
        return f"{left_str} {op_tex} {right_str}"

    def visit_unary_op(self, node: UnaryOp) -> str:
        operand_str = node.operand.accept(self)

        if node.op is UnaryOperator.NEG:
            if self._get_precedence(node.operand) == 1 or self._is_negative(node.operand):
                operand_str = f"\\left({operand_str}\\right)"
            return f"-{operand_str}"

        return f"{self.FUNCTIONS[node.op]}\\left({operand_str}\\right)"

    def _is_negative(self, node: ASTNode) -> bool:
        return self._is_negative_constant(node) or (
            isinstance(node, UnaryOp) and node.op is UnaryOperator.NEG
        )

    @staticmethod
    def _is_negative_constant(node: ASTNode) -> bool:
        return isinstance(node, Constant) and node.value < 0

    def _get_precedence(self, node: ASTNode) -> int:
        """Get precedence of a node for parenthesization (fractions are atomic)."""
        if isinstance(node, BinaryOp) and node.op is not BinaryOperator.DIV:
            return self.context.get_operator_precedence(node.op.value)
        return 0


class EvalResult(BaseModel):
    """
    Outcome of evaluating a tree.

    Either ``value`` holds the number, or ``unknown_variable`` names the
    first variable (depth-first, left to right) that had no binding.
    """

    model_config = ConfigDict(frozen=True)

    value: float | None = None
    unknown_variable: str | None = None

    @classmethod
    def success(cls, value: float) -> EvalResult:
        return cls(value=value)

    @classmethod
    def failure(cls, name: str) -> EvalResult:
        return cls(unknown_variable=name)

    @property
    def ok(self) -> bool:
        return self.unknown_variable is None

    def unwrap(self) -> float:
        """
        Return the value or raise.

        Raises:
            UnknownVariableError: If evaluation failed
        """
        if self.unknown_variable is not None:
            raise UnknownVariableError(self.unknown_variable)
        return self.value


class EvalVisitor:
    """
    Evaluate AST to an EvalResult.

    Variable lookup is a linear scan over the bindings; the first pair with a
    matching name wins.

    Args:
        bindings: (name, value) pairs or a name → value mapping
    """

    def __init__(self, bindings: Bindings | None = None):
        if bindings is None:
            bindings = ()
        if isinstance(bindings, Mapping):
            bindings = bindings.items()
        self.bindings: list[tuple[str, float]] = [(name, float(value)) for name, value in bindings]

    def visit_constant(self, node: Constant) -> EvalResult:
        return EvalResult.success(node.value)

    def visit_variable(self, node: Variable) -> EvalResult:
        for name, value in self.bindings:
            if name == node.name:
                return EvalResult.success(value)
        return EvalResult.failure(node.name)

    def visit_binary_op(self, node: BinaryOp) -> EvalResult:
        left = node.lhs.accept(self)
        if not left.ok:
            return left

        right = node.rhs.accept(self)
        if not right.ok:
            return right

        return EvalResult.success(apply_binary(node.op, left.value, right.value))

    def visit_unary_op(self, node: UnaryOp) -> EvalResult:
        operand = node.operand.accept(self)
        if not operand.ok:
            return operand

        return EvalResult.success(apply_unary(node.op, operand.value))


class VariablesVisitor:
    """Collect distinct variable names in first-appearance order."""

    def __init__(self):
        self.names: list[str] = []

    def visit_constant(self, node: Constant) -> None:
        pass

    def visit_variable(self, node: Variable) -> None:
        if node.name not in self.names:
            self.names.append(node.name)

    def visit_binary_op(self, node: BinaryOp) -> None:
        node.lhs.accept(self)
        node.rhs.accept(self)

    def visit_unary_op(self, node: UnaryOp) -> None:
        node.operand.accept(self)


def print_infix(node: ASTNode, context: Context | None = None) -> str:
    """Render a tree as infix text with minimal brackets."""
    return node.accept(StringVisitor(context))


def print_tex(node: ASTNode, context: Context | None = None) -> str:
    """Render a tree as a LaTeX math fragment."""
    return node.accept(TeXVisitor(context))


def evaluate(node: ASTNode, bindings: Bindings | None = None) -> EvalResult:
    """
    Evaluate a tree numerically.

    Args:
        node: Tree to evaluate
        bindings: (name, value) pairs or a name → value mapping

    Returns:
        EvalResult holding the value or the first unknown variable
    """
    return node.accept(EvalVisitor(bindings))


def free_variables(node: ASTNode) -> list[str]:
    """Distinct variable names of a tree, depth-first left to right."""
    visitor = VariablesVisitor()
    node.accept(visitor)
    return visitor.names
