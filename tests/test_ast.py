import dataclasses

import pytest

from tamarin.tamarin_ast import (
    BlockStatement,
    Boolean,
    CallExpression,
    ExpressionStatement,
    FunctionLiteral,
    Identifier,
    IfExpression,
    InfixExpression,
    IntegerLiteral,
    LetStatement,
    PrefixExpression,
    Program,
    ReturnStatement,
)
from tamarin.tamarin_constants import TokenKind
from tamarin.tamarin_lexer import Token


def ident(name: str) -> Identifier:
    return Identifier(Token(TokenKind.IDENT, name), name)


def integer(value: int) -> IntegerLiteral:
    return IntegerLiteral(Token(TokenKind.INT, str(value)), value)


def test_let_statement_string() -> None:
    program = Program(
        (
            LetStatement(
                Token(TokenKind.LET, "let"), ident("myVar"), ident("anotherVar")
            ),
        )
    )
    assert str(program) == "let myVar = anotherVar;"


def test_return_statement_string() -> None:
    ret = Token(TokenKind.RETURN, "return")
    assert str(ReturnStatement(ret, integer(5))) == "return 5;"
    assert str(ReturnStatement(ret)) == "return;"


def test_prefix_and_infix_are_parenthesized() -> None:
    minus = Token(TokenKind.MINUS, "-")
    neg = PrefixExpression(minus, "-", ident("a"))
    star = Token(TokenKind.ASTERISK, "*")
    assert str(InfixExpression(star, neg, "*", ident("b"))) == "((-a) * b)"


def test_missing_child_renders_empty() -> None:
    plus = Token(TokenKind.PLUS, "+")
    assert str(InfixExpression(plus, ident("a"), "+", None)) == "(a + )"
    assert str(InfixExpression(plus, None, "+", ident("b"))) == "( + b)"
    assert str(ExpressionStatement(Token(TokenKind.IDENT, "x"), None)) == ""


def test_if_expression_string() -> None:
    lbrace = Token(TokenKind.LBRACE, "{")
    lt = Token(TokenKind.LT, "<")
    node = IfExpression(
        Token(TokenKind.IF, "if"),
        InfixExpression(lt, ident("x"), "<", ident("y")),
        BlockStatement(lbrace, (ExpressionStatement(ident("x").token, ident("x")),)),
        BlockStatement(lbrace, (ExpressionStatement(ident("y").token, ident("y")),)),
    )
    assert str(node) == "if(x < y) xelse y"


def test_function_and_call_string() -> None:
    plus = Token(TokenKind.PLUS, "+")
    body = BlockStatement(
        Token(TokenKind.LBRACE, "{"),
        (
            ExpressionStatement(
                ident("x").token, InfixExpression(plus, ident("x"), "+", ident("y"))
            ),
        ),
    )
    fn = FunctionLiteral(Token(TokenKind.FUNCTION, "fn"), (ident("x"), ident("y")), body)
    assert str(fn) == "fn(x, y) (x + y)"

    call = CallExpression(
        Token(TokenKind.LPAREN, "("), ident("add"), (integer(1), integer(2))
    )
    assert str(call) == "add(1, 2)"


def test_boolean_renders_lexeme() -> None:
    assert str(Boolean(Token(TokenKind.TRUE, "true"), True)) == "true"


def test_token_literal() -> None:
    let = LetStatement(Token(TokenKind.LET, "let"), ident("x"), integer(1))
    assert let.token_literal() == "let"
    assert Program((let,)).token_literal() == "let"
    assert Program().token_literal() == ""


def test_nodes_are_immutable() -> None:
    node = ident("x")
    with pytest.raises(dataclasses.FrozenInstanceError):
        node.name = "y"  # type: ignore[misc]


def test_structural_equality() -> None:
    assert ident("x") == ident("x")
    assert ident("x") != ident("y")


def test_to_dict() -> None:
    let = LetStatement(Token(TokenKind.LET, "let", 1, 1), ident("x"), integer(5))
    d = Program((let,)).to_dict()
    assert d["kind"] == "Program"
    stmt = d["statements"][0]
    assert stmt["kind"] == "LetStatement"
    assert stmt["literal"] == "let"
    assert (stmt["line"], stmt["col"]) == (1, 1)
    assert stmt["name"]["name"] == "x"
    assert stmt["value"] == {
        "kind": "IntegerLiteral",
        "literal": "5",
        "line": 0,
        "col": 0,
        "value": 5,
    }


def test_to_dict_sequences_become_lists() -> None:
    call = CallExpression(Token(TokenKind.LPAREN, "("), ident("f"), (integer(1), None))
    d = call.to_dict()
    assert isinstance(d["arguments"], list)
    assert d["arguments"][1] is None
