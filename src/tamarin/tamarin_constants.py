"""
Shared constant tables for the Tamarin front end.

Everything here is built once at import time and exposed through read-only
mappings, so lexer and parser instances can share it without locking.

Exports:
    - TokenKind: enumeration of every token kind the lexer can produce.
    - KEYWORDS: keyword spelling -> keyword token kind.
    - SINGLE_CHAR_TOKENS: one-byte operators/delimiters -> token kind.
    - TWO_CHAR_TOKENS: (first byte, second byte) -> token kind.
    - Precedence: binding-power ranks used by the Pratt parser.
    - PRECEDENCES: token kind -> binding power for infix positions.
"""

from enum import Enum, IntEnum
from types import MappingProxyType
from typing import Mapping


class TokenKind(Enum):
    """Kinds of lexical tokens.

    The value of each member is its display form, which is what appears in
    diagnostics (e.g. ``expected next token to be =, got INT instead``).
    """

    ILLEGAL = "ILLEGAL"
    EOF = "EOF"

    # Identifiers + literals
    IDENT = "IDENT"
    INT = "INT"

    # Operators
    ASSIGN = "="
    PLUS = "+"
    MINUS = "-"
    BANG = "!"
    ASTERISK = "*"
    SLASH = "/"
    LT = "<"
    GT = ">"
    EQ = "=="
    NOT_EQ = "!="

    # Delimiters
    COMMA = ","
    SEMICOLON = ";"
    LPAREN = "("
    RPAREN = ")"
    LBRACE = "{"
    RBRACE = "}"

    # Keywords
    FUNCTION = "FUNCTION"
    LET = "LET"
    TRUE = "TRUE"
    FALSE = "FALSE"
    IF = "IF"
    ELSE = "ELSE"
    RETURN = "RETURN"

    def __str__(self) -> str:
        return self.value


KEYWORDS: Mapping[str, TokenKind] = MappingProxyType(
    {
        "fn": TokenKind.FUNCTION,
        "let": TokenKind.LET,
        "true": TokenKind.TRUE,
        "false": TokenKind.FALSE,
        "if": TokenKind.IF,
        "else": TokenKind.ELSE,
        "return": TokenKind.RETURN,
    }
)

SINGLE_CHAR_TOKENS: Mapping[str, TokenKind] = MappingProxyType(
    {
        "=": TokenKind.ASSIGN,
        "+": TokenKind.PLUS,
        "-": TokenKind.MINUS,
        "!": TokenKind.BANG,
        "*": TokenKind.ASTERISK,
        "/": TokenKind.SLASH,
        "<": TokenKind.LT,
        ">": TokenKind.GT,
        ",": TokenKind.COMMA,
        ";": TokenKind.SEMICOLON,
        "(": TokenKind.LPAREN,
        ")": TokenKind.RPAREN,
        "{": TokenKind.LBRACE,
        "}": TokenKind.RBRACE,
    }
)

# Every two-byte token is decided with a single byte of lookahead.
TWO_CHAR_TOKENS: Mapping[tuple[str, str], TokenKind] = MappingProxyType(
    {
        ("=", "="): TokenKind.EQ,
        ("!", "="): TokenKind.NOT_EQ,
    }
)


class Precedence(IntEnum):
    """Binding-power ranks, weakest first."""

    LOWEST = 1
    EQUALS = 2  # == !=
    LESSGREATER = 3  # < >
    SUM = 4  # + -
    PRODUCT = 5  # * /
    PREFIX = 6  # -x !x
    CALL = 7  # f(x)


PRECEDENCES: Mapping[TokenKind, Precedence] = MappingProxyType(
    {
        TokenKind.EQ: Precedence.EQUALS,
        TokenKind.NOT_EQ: Precedence.EQUALS,
        TokenKind.LT: Precedence.LESSGREATER,
        TokenKind.GT: Precedence.LESSGREATER,
        TokenKind.PLUS: Precedence.SUM,
        TokenKind.MINUS: Precedence.SUM,
        TokenKind.SLASH: Precedence.PRODUCT,
        TokenKind.ASTERISK: Precedence.PRODUCT,
        TokenKind.LPAREN: Precedence.CALL,
    }
)

INT64_MAX = 2**63 - 1

__all__ = [
    "INT64_MAX",
    "KEYWORDS",
    "PRECEDENCES",
    "Precedence",
    "SINGLE_CHAR_TOKENS",
    "TWO_CHAR_TOKENS",
    "TokenKind",
]
