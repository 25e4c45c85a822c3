"""Tests for the exception hierarchy."""

from exproc.core.errors import (
    ExprocError,
    ParseError,
    ParseErrorKind,
    UnknownVariableError,
    VariableNameTooLongError,
)
from exproc.parser import Token, TokenType


class TestErrors:
    """Test messages and details of library errors."""

    def test_base_error(self):
        """Test message and default details."""
        error = ExprocError("boom")
        assert str(error) == "boom"
        assert error.details == {}

    def test_parse_error(self):
        """Test the fields derived from the offending token."""
        error = ParseError(ParseErrorKind.NO_END, Token(TokenType.NUMBER, "23", 4))

        assert error.kind is ParseErrorKind.NO_END
        assert error.position == 4
        assert error.span == (4, 6)
        assert error.message == "No end at position 4: '23'"
        assert error.details == {"kind": "NO_END", "position": 4, "token": "23"}

    def test_parse_error_custom_message(self):
        """Test overriding the kind's default text."""
        token = Token(TokenType.VARIABLE, "v", 0)
        error = ParseError(ParseErrorKind.TOO_LONG_VARIABLE_NAME, token, "Name too long")
        assert error.message.startswith("Name too long at position 0")

    def test_variable_errors(self):
        """Test variable related errors."""
        assert VariableNameTooLongError("abc", 2).details == {"name": "abc", "limit": 2}
        assert str(UnknownVariableError("y")) == "Unknown variable: y"
        assert isinstance(UnknownVariableError("y"), ExprocError)
