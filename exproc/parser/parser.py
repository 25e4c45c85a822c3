"""
Recursive descent parser for arithmetic expressions.

This parser uses operator precedence climbing to build an Abstract Syntax
Tree from a token stream. Grammar, lowest to highest precedence:

    Sum      := Product (('+'|'-') Product)*
    Product  := Power (('*'|'/') Power)*
    Power    := Unary ('^' Unary)*
    Unary    := PrefixOp Unary | Atom
    Atom     := Number | Ident | '(' Sum ')'

Every binary level is left-associative, ``^`` included.
"""

from ..core.errors import ParseError, ParseErrorKind
from ..core.logging import get_logger
from .ast import (
    MAX_VARIABLE_NAME_LENGTH,
    ASTNode,
    BinaryOp,
    Constant,
    UnaryOp,
    Variable,
)
from .context import Associativity, Context
from .operators import UnaryOperator
from .tokenizer import Token, TokenType, Tokenizer

logger = get_logger(__name__)

__all__ = ["ParseError", "ParseErrorKind", "Parser", "parse"]

_BINARY_TOKENS = frozenset(
    {
        TokenType.PLUS,
        TokenType.MINUS,
        TokenType.MULTIPLY,
        TokenType.DIVIDE,
        TokenType.POWER,
    }
)


class Parser:
    """
    Recursive descent parser with operator precedence climbing.

    The parser builds an AST from a token stream, respecting:
    - Operator precedence (defined in context)
    - Operator associativity (left for every default operator)
    - Prefix operators: '-' and the context's function names
    """

    def __init__(self, context: Context | None = None):
        """
        Initialize parser with optional context.

        Args:
            context: Parsing context (defaults to Context.default())
        """
        self.context = context or Context.default()
        self.tokens: list[Token] = []
        self.pos = 0
        self.depth = 0

    def parse(self, expression: str) -> ASTNode:
        """
        Parse an expression string to an AST.

        Args:
            expression: The arithmetic expression

        Returns:
            Root AST node

        Raises:
            ParseError: If expression is invalid; no partial tree is kept
        """
        try:
            self.tokens = Tokenizer(self.context).tokenize(expression)
            self.pos = 0
            self.depth = 0

            ast = self.parse_expression(1)

            # Ensure we consumed all tokens (except EOF)
            if self.current().type != TokenType.EOF:
                raise ParseError(ParseErrorKind.NO_END, self.current())
        except ParseError as exc:
            logger.debug("Failed to parse %r: %s", expression, exc.message)
            raise

        return ast

    def current(self) -> Token:
        """Get current token without consuming it."""
        return self.tokens[self.pos]

    def advance(self) -> Token:
        """Consume and return current token."""
        token = self.current()
        if self.pos < len(self.tokens) - 1:
            self.pos += 1
        return token

    def parse_expression(self, min_precedence: int = 1) -> ASTNode:
        """
        Parse an expression using operator precedence climbing.

        Args:
            min_precedence: Minimum precedence to consider

        Returns:
            AST node
        """
        left = self.parse_prefix()

        while True:
            token = self.current()

            if token.type not in _BINARY_TOKENS:
                break

            precedence = self.context.get_operator_precedence(token.value)

            # Stop if precedence is too low
            if precedence < min_precedence:
                break

            op_token = self.advance()

            assoc = self.context.get_operator_associativity(op_token.value)
            next_min_prec = precedence + (1 if assoc == Associativity.LEFT else 0)

            right = self.parse_expression(next_min_prec)

            left = BinaryOp(self.context.get_binary_operator(op_token.value), left, right)

        return left

    def parse_prefix(self) -> ASTNode:
        """
        Parse a prefix expression (negation, named functions, atoms).

        Returns:
            AST node
        """
        token = self.current()

        if token.type == TokenType.MINUS:
            self.advance()
            return UnaryOp(UnaryOperator.NEG, self.parse_prefix())

        if token.type == TokenType.FUNCTION:
            self.advance()
            return UnaryOp(self.context.get_function(token.value), self.parse_prefix())

        return self.parse_atom()

    def parse_atom(self) -> ASTNode:
        """
        Parse an atomic expression (number, variable, parentheses).

        Returns:
            AST node
        """
        token = self.current()

        if token.type == TokenType.NUMBER:
            self.advance()
            return Constant(float(token.value))

        if token.type == TokenType.VARIABLE:
            if len(token.value) > MAX_VARIABLE_NAME_LENGTH:
                raise ParseError(
                    ParseErrorKind.TOO_LONG_VARIABLE_NAME,
                    token,
                    f"Variable name longer than {MAX_VARIABLE_NAME_LENGTH} characters",
                )
            self.advance()
            return Variable(token.value)

        if token.type == TokenType.LPAREN:
            return self.parse_parenthesized()

        if token.type == TokenType.EOF:
            # Running out of input inside a bracket means the bracket never closed
            kind = ParseErrorKind.NO_CLOSING_BRACKET if self.depth > 0 else ParseErrorKind.UNEXPECTED_END
            raise ParseError(kind, token)

        raise ParseError(ParseErrorKind.ATOM_EXPECTED, token)

    def parse_parenthesized(self) -> ASTNode:
        """
        Parse parenthesized expression: (expr).

        Returns:
            The inner AST node
        """
        self.advance()  # Consume (
        self.depth += 1

        inner = self.parse_expression(1)

        if self.current().type != TokenType.RPAREN:
            raise ParseError(ParseErrorKind.NO_CLOSING_BRACKET, self.current())

        self.advance()  # Consume )
        self.depth -= 1
        return inner


def parse(expression: str, context: Context | None = None) -> ASTNode:
    """
    Parse text into an expression tree.

    Args:
        expression: Infix arithmetic expression, e.g. "sin(x^2) / (1 + x)"
        context: Parsing context (defaults to Context.default())

    Returns:
        Root AST node

    Raises:
        ParseError: With ``kind`` describing the syntax error
    """
    return Parser(context).parse(expression)
