"""
Tamarin Language Parser

Turns the token stream produced by `tamarin_lexer.Lexer` into a `Program` tree
using top-down operator precedence (Pratt) parsing.

Supported Constructs
--------------------
- Statements:
    * `let IDENT = EXPR;`
    * `return [EXPR];`
    * Expression statements, with an optional trailing `;`
    * Blocks: `{ STMT* }`
- Expressions:
    * Identifiers, integer literals, `true` / `false`
    * Prefix `-x`, `!x`
    * Infix `+ - * / < > == !=`
    * Grouping `( EXPR )`
    * `if (COND) { ... } else { ... }`
    * Function literals `fn(a, b) { ... }`
    * Calls `callee(arg, ...)`

Parser Behavior
---------------
- Holds exactly two tokens: `cur_token` and `peek_token`.
- Prefix and infix handlers are looked up by token kind in tables built once
  per parser; binding powers come from `tamarin_constants.PRECEDENCES`.
- `(` has both a prefix handler (grouping) and an infix handler (call); which
  one runs depends only on whether a left operand has already been parsed.
- Problems are recorded as diagnostics and parsing carries on; nothing is
  raised for malformed input.

Entry Points
------------
- `Parser.parse_program()`: Parse one whole program (once per parser).
- `parse_source()`: Lex and parse a source string, returning the tree and
  the rendered diagnostics.
"""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Callable, Mapping, Optional

from tamarin.tamarin_ast import (
    BlockStatement,
    Boolean,
    CallExpression,
    Expression,
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
    Statement,
)
from tamarin.tamarin_constants import INT64_MAX, PRECEDENCES, Precedence, TokenKind
from tamarin.tamarin_errors import (
    Diagnostic,
    DiagnosticKind,
    ErrorCollector,
    ParserReuseError,
)
from tamarin.tamarin_lexer import CharacterStream, Lexer, Token

logger = logging.getLogger(__name__)

PrefixParseFn = Callable[[], Optional[Expression]]
InfixParseFn = Callable[[Optional[Expression]], Optional[Expression]]


class Parser:
    """
    Tamarin Parser Class

    Consumes tokens from a single `Lexer` and builds one `Program`.

    Attributes
    ----------
    lexer : Lexer
        Source of tokens; the parser is its only consumer.
    cur_token : Token
        Token under examination.
    peek_token : Token
        The next token, read but not yet consumed.
    errors : ErrorCollector
        Diagnostics recorded so far, in the order they were raised.
    prefix_parse_fns : Mapping[TokenKind, PrefixParseFn]
        Handlers for tokens that can start an expression.
    infix_parse_fns : Mapping[TokenKind, InfixParseFn]
        Handlers for tokens that can continue an expression.
    """

    def __init__(self, lexer: Lexer) -> None:
        self.lexer = lexer
        self.errors = ErrorCollector()
        self._parsed = False

        self.prefix_parse_fns: Mapping[TokenKind, PrefixParseFn] = MappingProxyType(
            {
                TokenKind.IDENT: self.parse_identifier,
                TokenKind.INT: self.parse_integer_literal,
                TokenKind.TRUE: self.parse_boolean,
                TokenKind.FALSE: self.parse_boolean,
                TokenKind.BANG: self.parse_prefix_expression,
                TokenKind.MINUS: self.parse_prefix_expression,
                TokenKind.LPAREN: self.parse_grouped_expression,
                TokenKind.IF: self.parse_if_expression,
                TokenKind.FUNCTION: self.parse_function_literal,
            }
        )

        infix_ops = (
            TokenKind.PLUS,
            TokenKind.MINUS,
            TokenKind.SLASH,
            TokenKind.ASTERISK,
            TokenKind.EQ,
            TokenKind.NOT_EQ,
            TokenKind.LT,
            TokenKind.GT,
        )
        infix: dict[TokenKind, InfixParseFn] = {
            kind: self.parse_infix_expression for kind in infix_ops
        }
        infix[TokenKind.LPAREN] = self.parse_call_expression
        self.infix_parse_fns: Mapping[TokenKind, InfixParseFn] = MappingProxyType(
            infix
        )

        # Prime cur_token and peek_token
        self.cur_token: Token = Token(TokenKind.EOF, "")
        self.peek_token: Token = self.lexer.next_token()
        self.next_token()

    # Token cursor

    def next_token(self) -> None:
        """Shift the lookahead window one token forward.

        The peek token becomes the current token and a fresh token is pulled
        from the lexer into the peek slot.
        """
        self.cur_token = self.peek_token
        self.peek_token = self.lexer.next_token()

    def cur_token_is(self, kind: TokenKind) -> bool:
        return self.cur_token.kind is kind

    def peek_token_is(self, kind: TokenKind) -> bool:
        return self.peek_token.kind is kind

    def expect_peek(self, kind: TokenKind) -> bool:
        """Advance past the peek token if it is of the required kind.

        Args:
            kind (TokenKind): The kind the grammar requires next.

        Returns:
            bool: True if the parser advanced; False if a diagnostic naming the
            expected and actual kinds was recorded instead.
        """
        if self.peek_token_is(kind):
            self.next_token()
            return True
        self.peek_error(kind)
        return False

    def peek_precedence(self) -> Precedence:
        """Binding power of the peek token; LOWEST for non-operators."""
        return PRECEDENCES.get(self.peek_token.kind, Precedence.LOWEST)

    def cur_precedence(self) -> Precedence:
        return PRECEDENCES.get(self.cur_token.kind, Precedence.LOWEST)

    # Diagnostics

    @property
    def diagnostics(self) -> tuple[Diagnostic, ...]:
        return self.errors.diagnostics

    def error_messages(self) -> list[str]:
        return self.errors.messages()

    def _report(self, diagnostic: Diagnostic) -> None:
        logger.debug("%s: %s", diagnostic.location(), diagnostic.message)
        self.errors.add(diagnostic)

    def peek_error(self, expected: TokenKind) -> None:
        self._report(
            Diagnostic(DiagnosticKind.UNEXPECTED_TOKEN, self.peek_token, expected)
        )

    def no_prefix_parse_fn_error(self) -> None:
        self._report(Diagnostic(DiagnosticKind.MISSING_PREFIX, self.cur_token))

    # Statements

    def parse_program(self) -> Program:
        """Parse the whole token stream into a Program.

        Raises:
            ParserReuseError: If this parser has already produced a program.
        """
        if self._parsed:
            raise ParserReuseError("a Parser can only parse one program")
        self._parsed = True

        statements: list[Statement] = []
        while not self.cur_token_is(TokenKind.EOF):
            stmt = self.parse_statement()
            if stmt is not None:
                statements.append(stmt)
            self.next_token()

        logger.debug(
            "parsed %d statement(s) with %d diagnostic(s)",
            len(statements),
            len(self.errors),
        )
        return Program(tuple(statements))

    def parse_statement(self) -> Optional[Statement]:
        if self.cur_token_is(TokenKind.LET):
            return self.parse_let_statement()
        if self.cur_token_is(TokenKind.RETURN):
            return self.parse_return_statement()
        return self.parse_expression_statement()

    def parse_let_statement(self) -> Optional[LetStatement]:
        let_tok = self.cur_token

        if not self.expect_peek(TokenKind.IDENT):
            return None
        name = Identifier(self.cur_token, self.cur_token.literal)

        if not self.expect_peek(TokenKind.ASSIGN):
            return None

        self.next_token()
        value = self.parse_expression(Precedence.LOWEST)

        if self.peek_token_is(TokenKind.SEMICOLON):
            self.next_token()
        return LetStatement(let_tok, name, value)

    def parse_return_statement(self) -> ReturnStatement:
        return_tok = self.cur_token

        # A bare `return` is allowed before `;`, `}` or end of input.
        if self.peek_token.kind in (
            TokenKind.SEMICOLON,
            TokenKind.RBRACE,
            TokenKind.EOF,
        ):
            if self.peek_token_is(TokenKind.SEMICOLON):
                self.next_token()
            return ReturnStatement(return_tok)

        self.next_token()
        value = self.parse_expression(Precedence.LOWEST)

        if self.peek_token_is(TokenKind.SEMICOLON):
            self.next_token()
        return ReturnStatement(return_tok, value)

    def parse_expression_statement(self) -> ExpressionStatement:
        tok = self.cur_token
        expr = self.parse_expression(Precedence.LOWEST)

        if self.peek_token_is(TokenKind.SEMICOLON):
            self.next_token()
        return ExpressionStatement(tok, expr)

    def parse_block_statement(self) -> BlockStatement:
        """Parse statements up to the closing `}` (or end of input).

        Expects `cur_token` to be the opening `{`; leaves `cur_token` on `}`.
        """
        brace_tok = self.cur_token
        statements: list[Statement] = []
        self.next_token()

        while not self.cur_token_is(TokenKind.RBRACE) and not self.cur_token_is(
            TokenKind.EOF
        ):
            stmt = self.parse_statement()
            if stmt is not None:
                statements.append(stmt)
            self.next_token()

        return BlockStatement(brace_tok, tuple(statements))

    # Expressions

    def parse_expression(self, precedence: Precedence) -> Optional[Expression]:
        """Parse an expression whose operators bind tighter than `precedence`.

        Args:
            precedence (Precedence): Minimum binding power an infix operator
                must exceed to be folded into this expression.

        Returns:
            Expression | None: The parsed expression, or None when no prefix
            handler exists for the current token. A failed left operand does
            not stop trailing operators from being parsed.
        """
        prefix = self.prefix_parse_fns.get(self.cur_token.kind)
        if prefix is None:
            self.no_prefix_parse_fn_error()
            return None
        left = prefix()

        while (
            not self.peek_token_is(TokenKind.SEMICOLON)
            and precedence < self.peek_precedence()
        ):
            infix = self.infix_parse_fns.get(self.peek_token.kind)
            if infix is None:
                return left
            self.next_token()
            left = infix(left)

        return left

    def parse_identifier(self) -> Expression:
        """Build an Identifier from the current token without advancing."""
        return Identifier(self.cur_token, self.cur_token.literal)

    def parse_integer_literal(self) -> Optional[Expression]:
        """Convert the current INT lexeme to a signed 64-bit value.

        Returns:
            Expression | None: The literal, or None after recording an
            INVALID_INTEGER diagnostic when the value does not fit.
        """
        tok = self.cur_token
        value = int(tok.literal, 10)
        if value > INT64_MAX:
            self._report(Diagnostic(DiagnosticKind.INVALID_INTEGER, tok))
            return None
        return IntegerLiteral(tok, value)

    def parse_boolean(self) -> Expression:
        return Boolean(self.cur_token, self.cur_token_is(TokenKind.TRUE))

    def parse_prefix_expression(self) -> Expression:
        """Parse `-x` or `!x`; the operand is parsed at PREFIX power."""
        tok = self.cur_token
        self.next_token()
        operand = self.parse_expression(Precedence.PREFIX)
        return PrefixExpression(tok, tok.literal, operand)

    def parse_infix_expression(self, left: Optional[Expression]) -> Expression:
        """Parse the right operand of a binary operator.

        Args:
            left (Expression | None): The already-parsed left operand.

        Returns:
            Expression: An InfixExpression whose right side is parsed at the
            operator's own binding power, which makes equal-power chains
            associate to the left.
        """
        tok = self.cur_token
        precedence = self.cur_precedence()
        self.next_token()
        right = self.parse_expression(precedence)
        return InfixExpression(tok, left, tok.literal, right)

    def parse_grouped_expression(self) -> Optional[Expression]:
        """Parse `( EXPR )`; `(` in prefix position is grouping."""
        self.next_token()
        expr = self.parse_expression(Precedence.LOWEST)
        if not self.expect_peek(TokenKind.RPAREN):
            return None
        return expr

    def parse_if_expression(self) -> Optional[Expression]:
        if_tok = self.cur_token

        if not self.expect_peek(TokenKind.LPAREN):
            return None
        self.next_token()
        condition = self.parse_expression(Precedence.LOWEST)

        if not self.expect_peek(TokenKind.RPAREN):
            return None
        if not self.expect_peek(TokenKind.LBRACE):
            return None
        consequence = self.parse_block_statement()

        alternative = None
        if self.peek_token_is(TokenKind.ELSE):
            self.next_token()
            if not self.expect_peek(TokenKind.LBRACE):
                return None
            alternative = self.parse_block_statement()

        return IfExpression(if_tok, condition, consequence, alternative)

    def parse_function_literal(self) -> Optional[Expression]:
        fn_tok = self.cur_token

        if not self.expect_peek(TokenKind.LPAREN):
            return None
        parameters = self.parse_function_parameters()
        if parameters is None:
            return None

        if not self.expect_peek(TokenKind.LBRACE):
            return None
        body = self.parse_block_statement()

        return FunctionLiteral(fn_tok, parameters, body)

    def parse_function_parameters(self) -> Optional[tuple[Identifier, ...]]:
        """Parse `a, b, c)` following the opening `(`; cur_token ends on `)`."""
        if self.peek_token_is(TokenKind.RPAREN):
            self.next_token()
            return ()

        if not self.expect_peek(TokenKind.IDENT):
            return None
        params = [Identifier(self.cur_token, self.cur_token.literal)]

        while self.peek_token_is(TokenKind.COMMA):
            self.next_token()
            if not self.expect_peek(TokenKind.IDENT):
                return None
            params.append(Identifier(self.cur_token, self.cur_token.literal))

        if not self.expect_peek(TokenKind.RPAREN):
            return None
        return tuple(params)

    def parse_call_expression(
        self, callee: Optional[Expression]
    ) -> Optional[Expression]:
        """Parse an argument list; `(` after a completed operand is a call."""
        tok = self.cur_token
        arguments = self.parse_call_arguments()
        if arguments is None:
            return None
        return CallExpression(tok, callee, arguments)

    def parse_call_arguments(self) -> Optional[tuple[Optional[Expression], ...]]:
        """Parse `x, y + 1)` following the opening `(`; cur_token ends on `)`."""
        if self.peek_token_is(TokenKind.RPAREN):
            self.next_token()
            return ()

        self.next_token()
        args = [self.parse_expression(Precedence.LOWEST)]

        while self.peek_token_is(TokenKind.COMMA):
            self.next_token()
            self.next_token()
            args.append(self.parse_expression(Precedence.LOWEST))

        if not self.expect_peek(TokenKind.RPAREN):
            return None
        return tuple(args)


def parse_source(source: str | bytes) -> tuple[Program, list[str]]:
    """Lex and parse `source`.

    Returns the program together with its diagnostics rendered as text. A
    non-empty diagnostic list means the parse failed, even though a (partial)
    program is still returned.
    """
    parser = Parser(Lexer(CharacterStream(source)))
    program = parser.parse_program()
    return program, parser.error_messages()


__all__ = ["Parser", "parse_source"]
