"""
Lexical analyzer for the Tamarin programming language.

This module provides core components for converting raw source code into token streams:

Classes:
    CharacterStream: Byte cursor over the source with line/column tracking.
    Token: Represents a single token with kind, literal text, and source location.
    Lexer: Pulls tokens from a CharacterStream one at a time.

Features:
    - Skips whitespace (space, tab, newline, carriage return)
    - Resolves two-byte operators (`==`, `!=`) with exactly one byte of lookahead
    - Recognizes:
        * Identifiers (ASCII letters and `_`) and keywords
        * Integer literals (ASCII digits; kept as text)
        * Operators and delimiters
    - Any other byte becomes an ILLEGAL token carrying that single byte

The lexer never raises on bad input; unknown bytes surface as ILLEGAL tokens
and it is up to the parser to report them.

Example:
    >>> lexer = Lexer(CharacterStream("let x = 5;"))
    >>> lexer.next_token()
    Token(LET, let)

Exports:
    - CharacterStream
    - Token
    - Lexer
    - tokenize
"""

import logging
from dataclasses import dataclass
from typing import Callable

from tamarin.tamarin_constants import (
    KEYWORDS,
    SINGLE_CHAR_TOKENS,
    TWO_CHAR_TOKENS,
    TokenKind,
)

logger = logging.getLogger(__name__)

WHITESPACE = " \t\n\r"


def is_letter(ch: str) -> bool:
    return "a" <= ch <= "z" or "A" <= ch <= "Z" or ch == "_"


def is_digit(ch: str) -> bool:
    return "0" <= ch <= "9"


class CharacterStream:
    """
    A byte-oriented cursor over a source buffer with line and column tracking.

    Text sources are encoded as UTF-8 and every byte is then treated as one
    character, so a multi-byte sequence is seen as several single bytes rather
    than decoded. The buffer is never modified after construction.

    Attributes:
        source (str): The input buffer, one character per source byte.
        position (int): Offset of the byte under examination.
        read_position (int): Offset of the next byte to read.
        ch (str): The byte under examination, or "" past the end of input.
        line (int): Line of the byte under examination (1-indexed).
        column (int): Column of the byte under examination (1-indexed).
    """

    def __init__(self, source: str | bytes) -> None:
        data = source.encode("utf-8") if isinstance(source, str) else bytes(source)
        self.source = data.decode("latin-1")
        self.position = 0
        self.read_position = 0
        self.ch = ""
        self.line = 1
        self.column = 0
        self.read_char()

    def read_char(self) -> None:
        """Advances the cursor by one byte."""
        if self.ch == "\n":
            self.line += 1
            self.column = 1
        elif self.read_position <= len(self.source):
            self.column += 1

        if self.read_position >= len(self.source):
            self.ch = ""
            self.position = len(self.source)
            self.read_position = len(self.source) + 1
        else:
            self.ch = self.source[self.read_position]
            self.position = self.read_position
            self.read_position += 1

    def peek_char(self) -> str:
        """Returns the byte after the current one without advancing, or ""."""
        if self.read_position >= len(self.source):
            return ""
        return self.source[self.read_position]

    def end_of_file(self) -> bool:
        """Returns True once the cursor has moved past the last byte."""
        return self.position >= len(self.source)


@dataclass(frozen=True)
class Token:
    """Represents a single lexical token in the Tamarin language.

    Attributes:
        kind (TokenKind): The token's kind.
        literal (str): The exact source text matched.
        line (int): The 1-based line number where the token starts.
        col (int): The 1-based column number where the token starts.
    """

    kind: TokenKind
    literal: str
    line: int = 0
    col: int = 0

    def __repr__(self) -> str:
        return f"Token({self.kind.name}, {self.literal})"


class Lexer:
    """Lexical analyzer for the Tamarin language.

    Tokens are produced on demand by `next_token`; once the buffer is exhausted
    every further call returns an EOF token.

    Attributes:
        stream (CharacterStream): The source stream to tokenize.
    """

    def __init__(self, stream: CharacterStream) -> None:
        self.stream = stream

    def skip_whitespace(self) -> None:
        """Advances the stream past spaces, tabs, carriage returns and newlines."""
        while not self.stream.end_of_file() and self.stream.ch in WHITESPACE:
            self.stream.read_char()

    def read_while(self, predicate: Callable[[str], bool]) -> str:
        """Consumes characters for as long as they satisfy a predicate.

        Args:
            predicate (Callable[[str], bool]): Test applied to the current character.

        Returns:
            str: The consumed run, which may be empty.
        """
        start = self.stream.position
        while not self.stream.end_of_file() and predicate(self.stream.ch):
            self.stream.read_char()
        return self.stream.source[start : self.stream.position]

    def next_token(self) -> Token:
        """Consumes and returns the next Token from the stream.

        Returns:
            Token: The next token, or an EOF token once input is exhausted.
        """
        self.skip_whitespace()

        stream = self.stream
        line, col = stream.line, stream.column

        if stream.end_of_file():
            return Token(TokenKind.EOF, "", line, col)

        ch = stream.ch

        # 1. Two-byte operator, decided by one byte of lookahead
        pair = (ch, stream.peek_char())
        if pair in TWO_CHAR_TOKENS:
            stream.read_char()
            stream.read_char()
            return Token(TWO_CHAR_TOKENS[pair], ch + pair[1], line, col)

        # 2. Single-byte operator or delimiter
        if ch in SINGLE_CHAR_TOKENS:
            stream.read_char()
            return Token(SINGLE_CHAR_TOKENS[ch], ch, line, col)

        # 3. Identifier or keyword
        if is_letter(ch):
            ident = self.read_while(is_letter)
            return Token(KEYWORDS.get(ident, TokenKind.IDENT), ident, line, col)

        # 4. Integer
        if is_digit(ch):
            return Token(TokenKind.INT, self.read_while(is_digit), line, col)

        # 5. Unknown byte
        logger.debug("illegal byte %r at %d:%d", ch, line, col)
        stream.read_char()
        return Token(TokenKind.ILLEGAL, ch, line, col)


def tokenize(source: str | bytes) -> list[Token]:
    """Lexes `source` completely, returning every token including the final EOF."""
    lexer = Lexer(CharacterStream(source))
    tokens = []
    while True:
        tok = lexer.next_token()
        tokens.append(tok)
        if tok.kind is TokenKind.EOF:
            break
    return tokens


__all__ = ["CharacterStream", "Lexer", "Token", "tokenize"]
