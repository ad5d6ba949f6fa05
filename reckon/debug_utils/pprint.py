"""Render numbers and syntax trees as text.

``format_number`` is the textual form used by the ``print`` builtin.
``to_source`` turns a tree back into source that parses to an equivalent
tree, adding parentheses only where precedence or associativity needs them.
"""
from __future__ import annotations

import math
from decimal import Decimal

from reckon import Value
from reckon.types.ast import (
    Number, Constant, Variable, BinOp, UnaryOp, FuncCall, Conditional, Lambda,
    Assignment, FuncDef, ExprStmt, Program,
)
from reckon.types.operators import BinaryOperator, UNARY_PRECEDENCE

# Precedence of atoms (literals, names, calls) and of the constructs that
# extend as far right as possible (if/then/else, lambdas).
ATOM_PRECEDENCE = 10
OPEN_PRECEDENCE = 0


def format_number(value: Value) -> str:
    """Whole numbers print without a fractional part: 42 rather than 42.0."""
    if math.isfinite(value) and value == math.floor(value) and abs(value) < 1e15:
        return str(int(value))
    return repr(value)


def _number_literal(value: Value) -> str:
    if not math.isfinite(value):
        raise ValueError(f"Cannot render {value!r} as a number literal")
    value = abs(value)
    if value == math.floor(value) and value < 1e15:
        return str(int(value))
    # Positional notation: the grammar has no exponent form
    return format(Decimal(repr(value)), "f")


def _precedence(node) -> int:
    match node:
        case Number(value=value):
            return ATOM_PRECEDENCE
        case BinOp(op=op):
            return op.precedence
        case UnaryOp():
            return UNARY_PRECEDENCE
        case Conditional() | Lambda():
            return OPEN_PRECEDENCE
        case _:
            return ATOM_PRECEDENCE


def _expr(node, min_prec: int = OPEN_PRECEDENCE) -> str:
    match node:
        case Number(value=value):
            text = _number_literal(value)
            if math.copysign(1.0, value) < 0:
                text = f"(-{text})"
        case Constant(name=name) | Variable(name=name):
            text = name
        case FuncCall(name=name, args=args):
            text = f"{name}({', '.join(_expr(a) for a in args)})"
        case UnaryOp(op=op, operand=operand):
            text = op.symbol + _expr(operand, UNARY_PRECEDENCE)
        case BinOp(op=op, left=left, right=right):
            prec = op.precedence
            if op is BinaryOperator.POW:
                # right-associative
                lhs, rhs = _expr(left, prec + 1), _expr(right, prec)
            else:
                lhs, rhs = _expr(left, prec), _expr(right, prec + 1)
            text = f"{lhs} {op.symbol} {rhs}"
        case Conditional(cond=cond, then=then, else_=else_):
            text = f"if {_expr(cond)} then {_expr(then)} else {_expr(else_)}"
        case Lambda(params=params, body=body):
            if len(params) == 1:
                text = f"{params[0]} => {_expr(body)}"
            else:
                text = f"({', '.join(params)}) => {_expr(body)}"
        case _:
            raise TypeError(f"Not an expression node: {node!r}")

    if _precedence(node) < min_prec:
        return f"({text})"
    return text


def to_source(node) -> str:
    """Render an expression, statement or program as source text."""
    match node:
        case Program(statements=statements):
            return "\n".join(to_source(stmt) for stmt in statements)
        case Assignment(name=name, value=value):
            return f"{name} = {_expr(value)}"
        case FuncDef(name=name, params=params, body=body):
            return f"def {name}({', '.join(params)}) = {_expr(body)}"
        case ExprStmt(expr=expr):
            return _expr(expr)
        case _:
            return _expr(node)
