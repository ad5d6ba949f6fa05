from __future__ import annotations

import sys
from contextlib import contextmanager
from typing import Optional

from reckon import Value, PrintSink
from reckon.config import get_recursion_limit
from reckon.errors import ReckonRecursionError
from reckon.evaluation.evaluator import evaluate, evaluate_program
from reckon.reader import parser as reader
from reckon.types.ast import Expr, Program
from reckon.types.environment import Context


@contextmanager
def deep_stack(message: str):
    """Raise Python's recursion limit for one parse or evaluation.

    The previous limit is restored on exit; a RecursionError that still
    escapes becomes ReckonRecursionError(message).
    """
    previous = sys.getrecursionlimit()
    needed = get_recursion_limit()
    if needed > previous:
        sys.setrecursionlimit(needed)
    try:
        yield
    except RecursionError:
        raise ReckonRecursionError(message) from None
    finally:
        sys.setrecursionlimit(previous)


def parse(source: str) -> Expr:
    """Parse a single expression."""
    with deep_stack("Expression is nested too deeply"):
        return reader.parse(source)


def parse_program(source: str) -> Program:
    """Parse one or more statements separated by newlines or ';'."""
    with deep_stack("Program is nested too deeply"):
        return reader.parse_program(source)


def eval(source: str) -> Value:
    """Evaluate a single expression against a fresh, empty context."""
    expr = parse(source)
    with deep_stack("Evaluation is nested too deeply"):
        return evaluate(expr, Context())


def eval_program(source: str, ctx: Optional[Context] = None) -> Value:
    """Evaluate a program; bindings it makes remain in `ctx` when one is given."""
    program = parse_program(source)
    if ctx is None:
        ctx = Context()
    with deep_stack("Evaluation is nested too deeply"):
        return evaluate_program(program, ctx)


def eval_with_context(source: str, ctx: Context) -> Value:
    """Evaluate a program against a host-seeded context."""
    return eval_program(source, ctx)


class Interpreter:
    """
    A long-lived reckon session.
    Holds one Context across calls, so later code sees earlier bindings.
    """
    def __init__(self, output: Optional[PrintSink] = None):
        self.ctx = Context(output)

    def parse(self, code: str) -> Program:
        return parse_program(code)

    def eval(self, code: str) -> Value:
        """Evaluate a program against the held context."""
        return eval_program(code, self.ctx)
