"""
Tokenizer for arithmetic expressions.

This module provides regex-based tokenization. It handles numbers,
identifiers (variables and prefix function names), the six punctuation
tokens ``+ - * / ^ ( )`` and end of input. Whitespace is skipped.
"""

import re
from dataclasses import dataclass
from enum import Enum, auto
from typing import TYPE_CHECKING

from ..core.errors import ParseError, ParseErrorKind

if TYPE_CHECKING:
    from .context import Context


class TokenType(Enum):
    """Token types for arithmetic expressions."""

    # Literals
    NUMBER = auto()
    VARIABLE = auto()
    FUNCTION = auto()  # Prefix function name known to the context

    # Operators
    PLUS = auto()
    MINUS = auto()
    MULTIPLY = auto()
    DIVIDE = auto()
    POWER = auto()

    # Parentheses
    LPAREN = auto()
    RPAREN = auto()

    # Special
    EOF = auto()
    UNKNOWN = auto()


@dataclass
class Token:
    """
    Represents a single token in the expression.

    Attributes:
        type: The token type
        value: The string value of the token
        pos: Position in the source string (for error reporting)
    """

    type: TokenType
    value: str
    pos: int

    def __repr__(self) -> str:
        return f"Token({self.type.name}, '{self.value}', pos={self.pos})"


class Tokenizer:
    """
    Tokenizes arithmetic expressions using regex patterns.

    Identifiers the context knows as prefix functions (sin, ln, arctan, ...)
    become FUNCTION tokens; every other identifier is a VARIABLE.
    """

    # Regex patterns for token matching (order matters)
    PATTERNS = {
        # Numbers: integer, float, scientific notation
        "NUMBER": r"\d+\.?\d*(?:[eE][+-]?\d+)?|\.\d+(?:[eE][+-]?\d+)?",
        # Identifiers: letter or underscore followed by letters/digits/underscores
        "VARIABLE": r"[a-zA-Z_][a-zA-Z0-9_]*",
        "POWER": r"\^",
        "PLUS": r"\+",
        "MINUS": r"-",
        "MULTIPLY": r"\*",
        "DIVIDE": r"/",
        "LPAREN": r"\(",
        "RPAREN": r"\)",
        # Whitespace (to skip)
        "WHITESPACE": r"\s+",
    }

    def __init__(self, context: "Context | None" = None):
        """
        Initialize tokenizer with optional context.

        Args:
            context: Context defining prefix function names
        """
        self.context = context
        self._compile_patterns()

    def _compile_patterns(self) -> None:
        """Compile regex patterns for faster matching."""
        pattern_parts = [f"(?P<{name}>{pattern})" for name, pattern in self.PATTERNS.items()]
        self.combined_pattern = re.compile("|".join(pattern_parts))

    def tokenize(self, expression: str) -> list[Token]:
        """
        Tokenize an arithmetic expression.

        Args:
            expression: The expression to tokenize

        Returns:
            List of tokens ending with an EOF token

        Raises:
            ParseError: If expression contains a character that starts no token
        """
        tokens: list[Token] = []
        pos = 0

        while pos < len(expression):
            match = self.combined_pattern.match(expression, pos)

            if not match:
                raise ParseError(
                    ParseErrorKind.UNKNOWN_TOKEN,
                    Token(TokenType.UNKNOWN, expression[pos], pos),
                )

            kind = match.lastgroup
            value = match.group()
            token_pos = pos
            pos = match.end()

            if kind == "WHITESPACE":
                continue

            if kind == "VARIABLE" and self.context is not None and self.context.is_function(value):
                token_type = TokenType.FUNCTION
            else:
                token_type = TokenType[kind]

            tokens.append(Token(token_type, value, token_pos))

        tokens.append(Token(TokenType.EOF, "", len(expression)))
        return tokens
