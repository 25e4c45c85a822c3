"""
Library exceptions.

Every error raised on purpose by exproc derives from ``ExprocError`` and
carries a human-readable message plus a ``details`` dict suitable for
structured logging.
"""

from enum import Enum
from typing import TYPE_CHECKING, Any, Dict, Optional

if TYPE_CHECKING:
    from ..parser.tokenizer import Token


class ExprocError(Exception):
    """Base exception for exproc errors"""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class ParseErrorKind(Enum):
    """Syntax error classes reported by the parser."""

    UNKNOWN_TOKEN = "unknown token"
    NO_CLOSING_BRACKET = "no closing bracket"
    TOO_LONG_VARIABLE_NAME = "too long variable name"
    UNEXPECTED_END = "unexpected end of input"
    ATOM_EXPECTED = "number, identifier or bracket expected"
    NO_END = "no end"


class ParseError(ExprocError):
    """Raised when text cannot be parsed into an expression."""

    def __init__(self, kind: ParseErrorKind, token: "Token", message: Optional[str] = None):
        self.kind = kind
        self.token = token
        self.position = token.pos
        self.span = (token.pos, token.pos + len(token.value))
        text = message or kind.value.capitalize()
        super().__init__(
            f"{text} at position {token.pos}: '{token.value}'",
            details={"kind": kind.name, "position": token.pos, "token": token.value},
        )


class VariableNameTooLongError(ExprocError):
    """Raised when a variable name exceeds the maximum length"""

    def __init__(self, name: str, limit: int):
        self.name = name
        self.limit = limit
        super().__init__(
            f"Variable name '{name}' is longer than {limit} characters",
            details={"name": name, "limit": limit},
        )


class UnknownVariableError(ExprocError):
    """Raised when evaluation meets a variable with no binding"""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unknown variable: {name}", details={"variable": name})
