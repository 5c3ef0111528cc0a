"""
Diagnostics for the Tamarin parser.

Parsing never stops at the first problem. Each problem becomes a structured
`Diagnostic` appended to the session's `ErrorCollector`, and callers decide
what to do with the collected list once parsing ends.

Classes:
    - DiagnosticKind: Category of a parse diagnostic.
    - Diagnostic: One problem, with the offending token and rendered message.
    - ErrorCollector: Append-only, ordered list of diagnostics.
    - ParserReuseError: Raised when a parser is asked to parse twice.
"""

from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum

from tamarin.tamarin_constants import TokenKind
from tamarin.tamarin_lexer import Token


class DiagnosticKind(Enum):
    MISSING_PREFIX = "missing-prefix"
    UNEXPECTED_TOKEN = "unexpected-token"
    INVALID_INTEGER = "invalid-integer"


@dataclass(frozen=True)
class Diagnostic:
    """A single parse problem.

    Attributes:
        kind (DiagnosticKind): What went wrong.
        token (Token): The token the parser was looking at when it went wrong.
            For UNEXPECTED_TOKEN this is the token actually found.
        expected (TokenKind | None): The kind that was required, for
            UNEXPECTED_TOKEN only.
    """

    kind: DiagnosticKind
    token: Token
    expected: TokenKind | None = None

    @property
    def line(self) -> int:
        return self.token.line

    @property
    def col(self) -> int:
        return self.token.col

    @property
    def message(self) -> str:
        if self.kind is DiagnosticKind.MISSING_PREFIX:
            return f"no prefix parse function for {self.token.kind} found"
        if self.kind is DiagnosticKind.UNEXPECTED_TOKEN:
            return (
                f"expected next token to be {self.expected}, "
                f"got {self.token.kind} instead"
            )
        return f'could not parse "{self.token.literal}" as integer'

    def location(self) -> str:
        return f"{self.line}:{self.col}"

    def __str__(self) -> str:
        return self.message


class ErrorCollector:
    """Ordered record of the diagnostics raised during one parse.

    Entries are only ever appended; iteration order is the order in which the
    parser reported them.
    """

    def __init__(self) -> None:
        self._diagnostics: list[Diagnostic] = []

    def add(self, diagnostic: Diagnostic) -> None:
        self._diagnostics.append(diagnostic)

    @property
    def diagnostics(self) -> tuple[Diagnostic, ...]:
        return tuple(self._diagnostics)

    def messages(self) -> list[str]:
        return [d.message for d in self._diagnostics]

    def __iter__(self) -> Iterator[Diagnostic]:
        return iter(tuple(self._diagnostics))

    def __len__(self) -> int:
        return len(self._diagnostics)

    def __bool__(self) -> bool:
        return bool(self._diagnostics)


class ParserReuseError(RuntimeError):
    """Raised when `Parser.parse_program` is called more than once."""


__all__ = [
    "Diagnostic",
    "DiagnosticKind",
    "ErrorCollector",
    "ParserReuseError",
]
