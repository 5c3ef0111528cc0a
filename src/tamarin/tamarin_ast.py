"""
Defines the abstract syntax tree (AST) node structure for the Tamarin programming language.

The node family is closed: `Program` at the root, four statement kinds and
eight expression kinds. Every node is a frozen dataclass that keeps the token
it was built from, owns its children outright (sequences are tuples), and
never points back at its parent.

Each node supports:
    token_literal(): Literal text of the originating token.
    __str__(): Canonical source form with every prefix/infix application
        parenthesized, e.g. `a + b * c` renders as `(a + (b * c))`.
    to_dict(): Nested plain-dict form, suitable for JSON output or debugging.

A child that failed to parse is stored as None and renders as "".

Example:
    stmt = LetStatement(let_tok, name=Identifier(x_tok, "x"), value=IntegerLiteral(five_tok, 5))
    str(stmt)  # "let x = 5;"
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Optional

from tamarin.tamarin_lexer import Token

ASTDict = dict[str, Any]


def _render(node: Optional[Node]) -> str:
    return "" if node is None else str(node)


def _dump(value: Any) -> Any:
    if isinstance(value, Node):
        return value.to_dict()
    if isinstance(value, tuple):
        return [_dump(v) for v in value]
    return value


@dataclass(frozen=True)
class Node:
    token: Token

    def token_literal(self) -> str:
        return self.token.literal

    def to_dict(self) -> ASTDict:
        out: ASTDict = {
            "kind": type(self).__name__,
            "literal": self.token.literal,
            "line": self.token.line,
            "col": self.token.col,
        }
        for f in fields(self):
            if f.name != "token":
                out[f.name] = _dump(getattr(self, f.name))
        return out


@dataclass(frozen=True)
class Statement(Node):
    pass


@dataclass(frozen=True)
class Expression(Node):
    pass


@dataclass(frozen=True)
class Program:
    """Root of every tree the parser produces; statements are in source order."""

    statements: tuple[Statement, ...] = ()

    def token_literal(self) -> str:
        if self.statements:
            return self.statements[0].token_literal()
        return ""

    def __str__(self) -> str:
        return "".join(str(s) for s in self.statements)

    def to_dict(self) -> ASTDict:
        return {
            "kind": "Program",
            "statements": [s.to_dict() for s in self.statements],
        }


# Expressions


@dataclass(frozen=True)
class Identifier(Expression):
    name: str

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class IntegerLiteral(Expression):
    value: int

    def __str__(self) -> str:
        return self.token.literal


@dataclass(frozen=True)
class Boolean(Expression):
    value: bool

    def __str__(self) -> str:
        return self.token.literal


@dataclass(frozen=True)
class PrefixExpression(Expression):
    operator: str
    operand: Optional[Expression]

    def __str__(self) -> str:
        return f"({self.operator}{_render(self.operand)})"


@dataclass(frozen=True)
class InfixExpression(Expression):
    left: Optional[Expression]
    operator: str
    right: Optional[Expression]

    def __str__(self) -> str:
        return f"({_render(self.left)} {self.operator} {_render(self.right)})"


@dataclass(frozen=True)
class IfExpression(Expression):
    condition: Optional[Expression]
    consequence: BlockStatement
    alternative: Optional[BlockStatement] = None

    def __str__(self) -> str:
        out = f"if{_render(self.condition)} {self.consequence}"
        if self.alternative is not None:
            out += f"else {self.alternative}"
        return out


@dataclass(frozen=True)
class FunctionLiteral(Expression):
    parameters: tuple[Identifier, ...]
    body: BlockStatement

    def __str__(self) -> str:
        params = ", ".join(str(p) for p in self.parameters)
        return f"{self.token.literal}({params}) {self.body}"


@dataclass(frozen=True)
class CallExpression(Expression):
    callee: Optional[Expression]
    arguments: tuple[Optional[Expression], ...]

    def __str__(self) -> str:
        args = ", ".join(_render(a) for a in self.arguments)
        return f"{_render(self.callee)}({args})"


# Statements


@dataclass(frozen=True)
class LetStatement(Statement):
    name: Identifier
    value: Optional[Expression]

    def __str__(self) -> str:
        return f"{self.token_literal()} {self.name} = {_render(self.value)};"


@dataclass(frozen=True)
class ReturnStatement(Statement):
    value: Optional[Expression] = None

    def __str__(self) -> str:
        if self.value is None:
            return f"{self.token_literal()};"
        return f"{self.token_literal()} {self.value};"


@dataclass(frozen=True)
class ExpressionStatement(Statement):
    expr: Optional[Expression]

    def __str__(self) -> str:
        return _render(self.expr)


@dataclass(frozen=True)
class BlockStatement(Statement):
    statements: tuple[Statement, ...] = ()

    def __str__(self) -> str:
        return "".join(str(s) for s in self.statements)


__all__ = [
    "ASTDict",
    "BlockStatement",
    "Boolean",
    "CallExpression",
    "Expression",
    "ExpressionStatement",
    "FunctionLiteral",
    "Identifier",
    "IfExpression",
    "InfixExpression",
    "IntegerLiteral",
    "LetStatement",
    "Node",
    "PrefixExpression",
    "Program",
    "ReturnStatement",
    "Statement",
]
