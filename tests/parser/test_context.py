"""Tests for parsing contexts."""

import pytest

from exproc.parser import (
    Associativity,
    BinaryOp,
    BinaryOperator,
    Constant,
    Context,
    UnaryOp,
    UnaryOperator,
    Variable,
    parse,
    print_infix,
)


@pytest.fixture
def write_context(tmp_path):
    """Write YAML text to a file and load it as a context."""
    def _write(text: str) -> Context:
        path = tmp_path / "context.yaml"
        path.write_text(text, encoding="utf-8")
        return Context.from_yaml(path)
    return _write


class TestDefaultContext:
    """Test the built-in context."""

    def test_precedence(self, context):
        """Test the operator priority ladder."""
        assert context.get_operator_precedence("+") == 1
        assert context.get_operator_precedence("-") == 1
        assert context.get_operator_precedence("*") == 2
        assert context.get_operator_precedence("/") == 2
        assert context.get_operator_precedence("^") == 3

    def test_unknown_operator_precedence(self, context):
        """Test that unknown symbols have precedence 0."""
        assert context.get_operator_precedence("%") == 0

    def test_all_left_associative(self, context):
        """Test that every default operator is left-associative."""
        for symbol in "+-*/^":
            assert context.get_operator_associativity(symbol) is Associativity.LEFT

    def test_functions(self, context):
        """Test prefix function lookup."""
        assert context.is_function("sin")
        assert context.is_function("acot")
        assert not context.is_function("x")
        assert context.get_function("arctan") is UnaryOperator.ATAN
        assert context.get_binary_operator("^") is BinaryOperator.POW

    def test_defaults_are_independent(self):
        """Test that changing one default context leaves others untouched."""
        first = Context.default()
        first.functions["sine"] = UnaryOperator.SIN
        assert not Context.default().is_function("sine")


class TestYamlContext:
    """Test loading contexts from YAML."""

    def test_empty_file_gives_default(self, write_context):
        """Test that an empty file yields the default context."""
        context = write_context("")
        assert context.name == "Default"
        assert context.get_operator_precedence("^") == 3

    def test_name_and_extra_function(self, write_context):
        """Test a renamed context with an additional function spelling."""
        context = write_context(
            "name: Verbose\n"
            "functions:\n"
            "  - name: sine\n"
            "    operator: SIN\n"
        )
        assert context.name == "Verbose"
        assert parse("sine(x)", context) == UnaryOp(UnaryOperator.SIN, Variable("x"))
        assert print_infix(parse("sine(x)", context), context) == "sin(x)"

    def test_operator_names_are_case_insensitive(self, write_context):
        """Test that lowercase operator names are accepted."""
        context = write_context("functions:\n  - name: log\n    operator: ln\n")
        assert context.get_function("log") is UnaryOperator.LN

    def test_right_associative_power(self, write_context):
        """Test overriding the associativity of ^."""
        context = write_context('operators:\n  - symbol: "^"\n    associativity: right\n')
        two, three = Constant(2), Constant(3)

        assert parse("2^3^2", context) == BinaryOp(
            BinaryOperator.POW, two, BinaryOp(BinaryOperator.POW, three, two)
        )

    def test_precedence_override(self, write_context):
        """Test that + can be made to bind tighter than *."""
        context = write_context('operators:\n  - symbol: "+"\n    precedence: 3\n')
        x, y, z = Variable("x"), Variable("y"), Variable("z")

        assert parse("x * y + z", context) == BinaryOp(
            BinaryOperator.MUL, x, BinaryOp(BinaryOperator.ADD, y, z)
        )

    @pytest.mark.parametrize(
        "text,message",
        [
            ('operators:\n  - symbol: "%"\n    precedence: 2\n', "Unknown binary operator"),
            ("functions:\n  - name: f\n    operator: FOO\n", "Unknown unary operator"),
            ("functions:\n  - name: minus\n    operator: NEG\n", "cannot be renamed"),
        ],
    )
    def test_invalid_entries(self, write_context, text, message):
        """Test that bad entries raise ValueError."""
        with pytest.raises(ValueError, match=message):
            write_context(text)

    def test_missing_file(self, tmp_path):
        """Test that a missing file raises OSError."""
        with pytest.raises(OSError):
            Context.from_yaml(tmp_path / "missing.yaml")
