from tamarin.tamarin_constants import TokenKind
from tamarin.tamarin_errors import Diagnostic, DiagnosticKind, ErrorCollector
from tamarin.tamarin_lexer import Token


def test_missing_prefix_message() -> None:
    diag = Diagnostic(DiagnosticKind.MISSING_PREFIX, Token(TokenKind.RPAREN, ")"))
    assert diag.message == "no prefix parse function for ) found"


def test_unexpected_token_message() -> None:
    diag = Diagnostic(
        DiagnosticKind.UNEXPECTED_TOKEN,
        Token(TokenKind.INT, "5", 1, 7),
        TokenKind.ASSIGN,
    )
    assert diag.message == "expected next token to be =, got INT instead"
    assert str(diag) == diag.message
    assert diag.location() == "1:7"


def test_invalid_integer_message() -> None:
    diag = Diagnostic(DiagnosticKind.INVALID_INTEGER, Token(TokenKind.INT, "99"))
    assert diag.message == 'could not parse "99" as integer'


def test_keyword_kinds_render_by_name() -> None:
    diag = Diagnostic(
        DiagnosticKind.UNEXPECTED_TOKEN, Token(TokenKind.FUNCTION, "fn"), TokenKind.IDENT
    )
    assert diag.message == "expected next token to be IDENT, got FUNCTION instead"


def test_collector_preserves_order() -> None:
    errors = ErrorCollector()
    assert not errors
    first = Diagnostic(DiagnosticKind.MISSING_PREFIX, Token(TokenKind.RBRACE, "}"))
    second = Diagnostic(DiagnosticKind.INVALID_INTEGER, Token(TokenKind.INT, "1"))
    errors.add(first)
    errors.add(second)
    assert errors
    assert len(errors) == 2
    assert list(errors) == [first, second]
    assert errors.diagnostics == (first, second)
    assert errors.messages() == [first.message, second.message]


def test_collector_snapshot_is_not_live() -> None:
    errors = ErrorCollector()
    snapshot = errors.diagnostics
    errors.add(Diagnostic(DiagnosticKind.MISSING_PREFIX, Token(TokenKind.EOF, "")))
    assert snapshot == ()
