"""Syntax tree for reckon programs.

Expressions and statements are frozen dataclasses; a tree is immutable from
the moment the parser returns it and may be shared between evaluations.

    - literals        -> Number(value)
    - pi e tau ...    -> Constant(name)
    - names           -> Variable(name)
    - a op b          -> BinOp(op, left, right)
    - -a, not a       -> UnaryOp(op, operand)
    - f(a, b)         -> FuncCall(name, args)
    - if c then a ... -> Conditional(cond, then, else_)
    - (x, y) => body  -> Lambda(params, body)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from reckon import Value
from reckon.types.operators import BinaryOperator, UnaryOperator


@dataclass(frozen=True)
class Number:
    value: Value


@dataclass(frozen=True)
class Constant:
    name: str


@dataclass(frozen=True)
class Variable:
    name: str


@dataclass(frozen=True)
class BinOp:
    op: BinaryOperator
    left: Expr
    right: Expr


@dataclass(frozen=True)
class UnaryOp:
    op: UnaryOperator
    operand: Expr


@dataclass(frozen=True)
class FuncCall:
    name: str
    args: tuple[Expr, ...] = ()


@dataclass(frozen=True)
class Conditional:
    cond: Expr
    then: Expr
    else_: Expr


@dataclass(frozen=True)
class Lambda:
    params: tuple[str, ...]
    body: Expr


Expr = Union[Number, Constant, Variable, BinOp, UnaryOp, FuncCall, Conditional, Lambda]


# --- Statements ---

@dataclass(frozen=True)
class Assignment:
    name: str
    value: Expr


@dataclass(frozen=True)
class FuncDef:
    name: str
    params: tuple[str, ...]
    body: Expr


@dataclass(frozen=True)
class ExprStmt:
    expr: Expr


Stmt = Union[Assignment, FuncDef, ExprStmt]


@dataclass(frozen=True)
class Program:
    statements: tuple[Stmt, ...]
