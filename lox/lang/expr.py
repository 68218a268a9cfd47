"""Abstract syntax tree for Lox expressions.

The variant set is closed: code walking a tree (see interpreter.py and printer.py) matches on these classes
exhaustively. Nodes are frozen, and a parent exclusively owns its children, so every tree is finite and acyclic.

Only Binary, Grouping, Literal and Unary are produced by the current grammar. The remaining variants can be built and
printed, but the grammar does not reach them yet.
"""

from dataclasses import dataclass
from typing import Tuple, Union

from lox.lang.tokens import Token


Value = Union[None, bool, float, str]  # runtime values: nil, boolean, number, string


class Expr:
    """Superclass representing any Lox expression."""


@dataclass(frozen=True)
class Assign(Expr):
    name: Token
    value: Expr


@dataclass(frozen=True)
class Binary(Expr):
    left: Expr
    operator: Token
    right: Expr


@dataclass(frozen=True)
class Call(Expr):
    callee: Expr
    paren: Token  # closing paren, used for error attribution
    arguments: Tuple[Expr, ...]


@dataclass(frozen=True)
class Get(Expr):
    object: Expr
    name: Token


@dataclass(frozen=True)
class Grouping(Expr):
    expression: Expr


@dataclass(frozen=True)
class Literal(Expr):
    value: Value


@dataclass(frozen=True)
class Logical(Expr):
    left: Expr
    operator: Token
    right: Expr


@dataclass(frozen=True)
class Set(Expr):
    object: Expr
    name: Token
    value: Expr


@dataclass(frozen=True)
class Super(Expr):
    keyword: Token
    method: Token


@dataclass(frozen=True)
class This(Expr):
    keyword: Token


@dataclass(frozen=True)
class Unary(Expr):
    operator: Token
    right: Expr


@dataclass(frozen=True)
class Variable(Expr):
    name: Token


def token_of(expr):
    """Token a diagnostic about expr is attributed to."""
    if isinstance(expr, (Assign, Get, Set, Variable)):
        return expr.name
    if isinstance(expr, (Binary, Logical, Unary)):
        return expr.operator
    if isinstance(expr, Call):
        return expr.paren
    if isinstance(expr, (Super, This)):
        return expr.keyword
    return None
