"""Tests for symbolic differentiation."""

import math

import pytest
import sympy

from exproc.calculus import derivative, is_constant, simplify
from exproc.parser import (
    BinaryOp,
    BinaryOperator,
    Constant,
    UnaryOp,
    UnaryOperator,
    Variable,
    copy,
    parse,
)


DIFFERENTIABLE = [
    "x ^ 3 - 2 * x + 1",
    "sin(x ^ 2)",
    "x * cos(x)",
    "ln(x) / x",
    "x ^ x",
    "2 ^ x",
    "tan(x)",
    "cot(x)",
    "arcsin(x)",
    "arccos(x)",
    "arctan(x ^ 2)",
    "arccot(x)",
    "(1 + x) / (1 - x)",
    "sin(x) ^ 2 + cos(x) ^ 2",
    "-x ^ 2",
    "ln(sin(x) + 2) * x ^ 0.5",
]


class TestBasicRules:
    """Test leaf and structural rules."""

    def test_none_gives_none(self):
        """Test that a missing tree has no derivative."""
        assert derivative(None, "x") is None

    def test_constant(self):
        """Test d/dx of a number."""
        assert derivative(parse("5"), "x") == Constant(0)

    def test_variables(self):
        """Test d/dx of x and of another variable."""
        assert derivative(parse("x"), "x") == Constant(1)
        assert derivative(parse("y"), "x") == Constant(0)

    def test_raw_sum(self):
        """Test that results are left unsimplified."""
        assert derivative(parse("x + y"), "x") == BinaryOp(
            BinaryOperator.ADD, Constant(1), Constant(0)
        )

    def test_tan_rule_shape(self):
        """Test the tangent rule's tree."""
        x = Variable("x")
        assert derivative(parse("tan(x)"), "x") == BinaryOp(
            BinaryOperator.DIV,
            Constant(1),
            BinaryOp(BinaryOperator.POW, UnaryOp(UnaryOperator.COS, x), Constant(2)),
        )

    def test_input_is_not_modified(self):
        """Test that differentiation only reads its input."""
        tree = parse("sin(x ^ 2) * x")
        before = copy(tree)
        derivative(tree, "x")
        assert tree == before

    def test_numeric_exponent_is_folded(self):
        """Test that x^3 differentiates to 3 * x^2 without an r - 1 node."""
        x = Variable("x")
        assert derivative(parse("x ^ 3"), "x") == BinaryOp(
            BinaryOperator.MUL,
            BinaryOp(
                BinaryOperator.MUL,
                Constant(3),
                BinaryOp(BinaryOperator.POW, x, Constant(2)),
            ),
            Constant(1),
        )

    def test_zero_exponent(self):
        """Test that x^0 has derivative 0."""
        assert derivative(parse("x ^ 0"), "x") == Constant(0)

    def test_repeated_raw_derivatives_of_square(self, evaluate_at):
        """Test that the third raw derivative of x^2 is 0 at x = 0."""
        d = parse("x ^ 2")
        for _ in range(3):
            d = derivative(d, "x")
        assert evaluate_at(d, x=0.0) == 0.0

    def test_symbolic_exponent_keeps_subtraction(self):
        """Test that a non-numeric constant exponent keeps r - 1."""
        x, n = Variable("x"), Variable("n")
        assert derivative(parse("x ^ n"), "x") == BinaryOp(
            BinaryOperator.MUL,
            BinaryOp(
                BinaryOperator.MUL,
                n,
                BinaryOp(BinaryOperator.POW, x, BinaryOp(BinaryOperator.SUB, n, Constant(1))),
            ),
            Constant(1),
        )

    @pytest.mark.parametrize("op", list(BinaryOperator))
    def test_every_binary_operator_has_a_rule(self, op, evaluate_at):
        """Test that each binary operator differentiates to a finite value."""
        tree = BinaryOp(op, Variable("x"), Constant(2))
        assert math.isfinite(evaluate_at(derivative(tree, "x"), x=1.5))


class TestSimplifiedDerivatives:
    """Test derivatives after simplification."""

    def test_power_rule(self):
        """Test d/dx x^3 = 3 * x^2."""
        assert simplify(derivative(parse("x^3"), "x")) == parse("3 * x ^ 2")

    def test_product_with_other_variable(self):
        """Test d/dx (x * y) = y."""
        assert simplify(derivative(parse("x * y"), "x")) == Variable("y")

    def test_sin_of_square_at_one(self, evaluate_at):
        """Test d/dx sin(x^2) at 1 equals 2 cos(1)."""
        d = simplify(derivative(parse("sin(x^2)"), "x"))
        assert evaluate_at(d, x=1.0) == pytest.approx(2 * math.cos(1.0), abs=1e-6)

    def test_constant_base(self, evaluate_at):
        """Test d/dx 2^x = 2^x ln 2."""
        d = derivative(parse("2^x"), "x")
        assert evaluate_at(d, x=1.0) == pytest.approx(2 * math.log(2))

    def test_variable_base_and_exponent(self, evaluate_at):
        """Test d/dx x^x = x^x (ln x + 1)."""
        d = derivative(parse("x^x"), "x")
        assert evaluate_at(d, x=2.0) == pytest.approx(4 * (math.log(2) + 1))

    def test_power_rule_with_negative_base(self, evaluate_at):
        """Test that constant exponents never take ln of the base."""
        d = derivative(parse("x^3"), "x")
        assert evaluate_at(d, x=-2.0) == pytest.approx(12.0)


class TestIsConstant:
    """Test dependency detection."""

    def test_other_variables_are_constant(self):
        """Test trees that do not mention the variable."""
        assert is_constant(parse("y * 2 + sin(z)"), "x")

    def test_dependent_tree(self):
        """Test trees that mention the variable."""
        assert not is_constant(parse("y * ln(x)"), "x")


class TestNumericAgreement:
    """Cross-check derivatives numerically and against SymPy."""

    @pytest.mark.parametrize("text", DIFFERENTIABLE)
    def test_central_differences(self, text, sample_points, evaluate_at):
        """Test agreement with central finite differences."""
        tree = parse(text)
        d = simplify(derivative(tree, "x"))
        h = 1e-6

        for p in sample_points:
            p = float(p)
            numeric = (evaluate_at(tree, x=p + h) - evaluate_at(tree, x=p - h)) / (2 * h)
            assert evaluate_at(d, x=p) == pytest.approx(numeric, rel=1e-4, abs=1e-6)

    @pytest.mark.parametrize("text", DIFFERENTIABLE)
    def test_matches_sympy(self, text, sample_points, evaluate_at, sympy_converter):
        """Test agreement with SymPy's derivative."""
        tree = parse(text)
        d = simplify(derivative(tree, "x"))

        x = sympy.Symbol("x")
        expected = sympy.diff(sympy_converter(tree), x)

        for p in sample_points:
            p = float(p)
            assert evaluate_at(d, x=p) == pytest.approx(
                float(expected.evalf(subs={x: p})), rel=1e-9, abs=1e-12
            )
