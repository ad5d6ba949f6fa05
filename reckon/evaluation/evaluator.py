"""Core evaluator for reckon.

A recursive walk over the syntax tree with a mutable Context threaded
through it. Special forms (conditionals, short-circuit logic, lambdas and
the binding statements) are dispatched through the registries in
reckon.evaluation.special_forms; user calls go through
reckon.evaluation.apply and everything else resolves to the builtin
catalogue.
"""

from __future__ import annotations

import sys
from typing import Sequence

from reckon import Value
from reckon.builtin.env_builtin import call_builtin, lookup_constant, powf, remainder
from reckon.errors import ReckonDomainError, ReckonSyntaxError
from reckon.evaluation.apply import apply_closure
from reckon.evaluation.special_forms import SPECIAL_FORMS, LOGIC_FORMS
from reckon.types.ast import (
    Expr, Stmt, Program,
    Number, Constant, Variable, BinOp, UnaryOp, FuncCall, ExprStmt,
)
from reckon.types.environment import Context
from reckon.types.operators import BinaryOperator, UnaryOperator

EPSILON = sys.float_info.epsilon


def evaluate(expr: Expr, ctx: Context) -> Value:
    """Evaluate a single expression against `ctx`."""
    match expr:
        case Number(value=value):
            return value

        case Constant(name=name):
            return lookup_constant(name)

        case Variable(name=name):
            return ctx.lookup(name)

        case BinOp(op=op, left=left, right=right):
            # Short-circuit operators decide before touching the right operand
            if op in LOGIC_FORMS:
                return LOGIC_FORMS[op](expr, ctx, evaluate)
            return binary_op(op, evaluate(left, ctx), evaluate(right, ctx))

        case UnaryOp(op=op, operand=operand):
            value = evaluate(operand, ctx)
            if op is UnaryOperator.NEG:
                return -value
            return 1.0 if value == 0.0 else 0.0

        case FuncCall(name=name, args=args):
            fn = ctx.lookup_function(name)
            if fn is not None:
                return apply_closure(name, fn, args, ctx, evaluate)
            values = [evaluate(arg, ctx) for arg in args]
            return call_builtin(ctx, name, values)

    form = SPECIAL_FORMS.get(type(expr))
    if form is None:
        raise TypeError(f"Cannot evaluate {expr!r}")
    return form(expr, ctx, evaluate)


def binary_op(op: BinaryOperator, left: Value, right: Value) -> Value:
    """Apply a non-short-circuit binary operator to two numbers."""
    match op:
        case BinaryOperator.ADD:
            return left + right
        case BinaryOperator.SUB:
            return left - right
        case BinaryOperator.MUL:
            return left * right
        case BinaryOperator.DIV:
            if right == 0.0:
                raise ReckonDomainError("Division by zero")
            return left / right
        case BinaryOperator.MOD:
            return remainder(left, right)
        case BinaryOperator.POW:
            return powf(left, right)
        case BinaryOperator.EQ:
            return 1.0 if approx_equal(left, right) else 0.0
        case BinaryOperator.NE:
            return 0.0 if approx_equal(left, right) else 1.0
        case BinaryOperator.LT:
            return 1.0 if left < right else 0.0
        case BinaryOperator.GT:
            return 1.0 if left > right else 0.0
        case BinaryOperator.LE:
            return 1.0 if left <= right else 0.0
        case BinaryOperator.GE:
            return 1.0 if left >= right else 0.0
    raise TypeError(f"Unsupported binary operator {op!r}")


def approx_equal(left: Value, right: Value) -> bool:
    # The first test covers equal infinities, whose difference is nan
    return left == right or abs(left - right) < EPSILON


def evaluate_statement(stmt: Stmt, ctx: Context) -> Value:
    """Evaluate one statement, returning the value it yields."""
    if isinstance(stmt, ExprStmt):
        return evaluate(stmt.expr, ctx)
    form = SPECIAL_FORMS.get(type(stmt))
    if form is None:
        raise TypeError(f"Cannot evaluate statement {stmt!r}")
    return form(stmt, ctx, evaluate)


def evaluate_block(statements: Sequence[Stmt], ctx: Context) -> Value:
    """Run statements in order; the last one yields the result."""
    if not statements:
        raise ReckonSyntaxError("Empty program")
    result = 0.0
    for stmt in statements:
        result = evaluate_statement(stmt, ctx)
    return result


def evaluate_program(program: Program, ctx: Context) -> Value:
    return evaluate_block(program.statements, ctx)
