"""
Context system for expression parsing and printing.

A context defines the syntactic environment shared by the tokenizer, the
parser and the printers:
- Binary operator precedence and associativity
- Prefix function names and the unary operator each one denotes

Contexts are plain data; the default one can be extended from a YAML file.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any

import yaml

from .operators import BINARY_PRIORITY, BinaryOperator, UnaryOperator


class Associativity(Enum):
    """Operator associativity."""

    LEFT = "left"
    RIGHT = "right"


@dataclass
class OperatorConfig:
    """Configuration for a binary operator."""

    symbol: str
    operator: BinaryOperator
    precedence: int
    associativity: Associativity = Associativity.LEFT


#: Prefix function spellings understood by the default context
DEFAULT_FUNCTIONS: dict[str, UnaryOperator] = {
    "ln": UnaryOperator.LN,
    "sin": UnaryOperator.SIN,
    "cos": UnaryOperator.COS,
    "tan": UnaryOperator.TAN,
    "cot": UnaryOperator.COT,
    "arcsin": UnaryOperator.ASIN,
    "arccos": UnaryOperator.ACOS,
    "arctan": UnaryOperator.ATAN,
    "arccot": UnaryOperator.ACOT,
    "asin": UnaryOperator.ASIN,
    "acos": UnaryOperator.ACOS,
    "atan": UnaryOperator.ATAN,
    "acot": UnaryOperator.ACOT,
}


@dataclass
class Context:
    """
    Syntactic environment for parsing and printing.

    Attributes:
        name: Context name (e.g., "Default")
        operators: Binary operator configurations keyed by symbol
        functions: Prefix function names mapped to unary operators
    """

    name: str
    operators: dict[str, OperatorConfig] = field(default_factory=dict)
    functions: dict[str, UnaryOperator] = field(default_factory=dict)

    @classmethod
    def default(cls) -> Context:
        """
        Create the standard context.

        Every binary operator is left-associative, ``^`` included, so
        ``2^3^2`` reads as ``(2^3)^2``.
        """
        context = cls(name="Default")

        for op, precedence in BINARY_PRIORITY.items():
            context.operators[op.value] = OperatorConfig(
                symbol=op.value,
                operator=op,
                precedence=precedence,
                associativity=Associativity.LEFT,
            )

        context.functions = dict(DEFAULT_FUNCTIONS)
        return context

    @classmethod
    def from_yaml(cls, path: str | Path) -> Context:
        """
        Load a context from a YAML file.

        The file starts from the default context; listed operators and
        functions override or extend it.

        Example file::

            name: Verbose
            operators:
              - symbol: "^"
                precedence: 3
                associativity: left
            functions:
              - name: sine
                operator: SIN

        Args:
            path: Path to YAML configuration file

        Returns:
            Context instance

        Raises:
            ValueError: If an operator symbol or unary operator name is unknown
        """
        with open(path, "r", encoding="utf-8") as f:
            data: dict[str, Any] = yaml.safe_load(f) or {}

        context = cls.default()
        context.name = data.get("name", context.name)

        for op_data in data.get("operators", []):
            symbol = op_data["symbol"]
            if symbol not in context.operators:
                raise ValueError(f"Unknown binary operator: {symbol}")
            context.operators[symbol] = OperatorConfig(
                symbol=symbol,
                operator=context.operators[symbol].operator,
                precedence=op_data.get("precedence", context.operators[symbol].precedence),
                associativity=Associativity(op_data.get("associativity", "left")),
            )

        for func_data in data.get("functions", []):
            name = func_data["name"]
            operator_name = func_data["operator"]
            try:
                operator = UnaryOperator[operator_name.upper()]
            except KeyError:
                raise ValueError(f"Unknown unary operator: {operator_name}") from None
            if operator is UnaryOperator.NEG:
                raise ValueError("Negation is spelled '-' and cannot be renamed")
            context.functions[name] = operator

        return context

    def get_operator_precedence(self, op: str) -> int:
        """
        Get the precedence of a binary operator.

        Args:
            op: Operator symbol

        Returns:
            Precedence value (higher = binds tighter), 0 if unknown
        """
        if op in self.operators:
            return self.operators[op].precedence
        return 0

    def get_operator_associativity(self, op: str) -> Associativity:
        """Get the associativity of a binary operator."""
        if op in self.operators:
            return self.operators[op].associativity
        return Associativity.LEFT

    def get_binary_operator(self, op: str) -> BinaryOperator:
        """Get the operator tag for a symbol."""
        return self.operators[op].operator

    def is_function(self, name: str) -> bool:
        """Check if name is a prefix function in this context."""
        return name in self.functions

    def get_function(self, name: str) -> UnaryOperator:
        """Get the unary operator a prefix function name denotes."""
        return self.functions[name]
