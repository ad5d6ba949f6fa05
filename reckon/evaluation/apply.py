"""Application engine for user functions.

This module centralizes call semantics for closures:
- arity is checked before any argument is evaluated;
- arguments are evaluated left to right in the caller's context;
- the body runs in a fresh callee context holding a copy of the closure's
  captures plus the parameters, while the function table is shared with the
  caller so functions can call themselves and each other;
- after the body returns, every captured name that is not a parameter is
  written back from the callee context to the closure and to the caller
  (write-back). Names the body introduced are never written back.

Builtins are applied by reckon.builtin.env_builtin.
"""

from __future__ import annotations

import logging
from typing import Sequence

from reckon import Value, EvaluatorFn
from reckon.config import get_max_call_depth
from reckon.errors import ReckonArityError, ReckonRecursionError
from reckon.types.ast import Expr
from reckon.types.environment import Context
from reckon.types.lambda_fn import Closure

logger = logging.getLogger(__name__)


def apply_closure(
    name: str,
    fn: Closure,
    arg_exprs: Sequence[Expr],
    ctx: Context,
    evaluate_fn: EvaluatorFn,
) -> Value:
    """Evaluate `arg_exprs` in `ctx` and call `fn` with the results."""
    if len(arg_exprs) != fn.arity:
        raise ReckonArityError(name, fn.arity, len(arg_exprs))
    args = [evaluate_fn(arg, ctx) for arg in arg_exprs]
    return call_closure(name, fn, args, ctx, evaluate_fn)


def call_closure(
    name: str,
    fn: Closure,
    args: Sequence[Value],
    ctx: Context,
    evaluate_fn: EvaluatorFn,
) -> Value:
    """Call `fn` with already-evaluated arguments.

    Parameters:
    - name: The name the closure was called by, used in error messages.
    - fn: The closure being applied.
    - args: Argument values, one per parameter.
    - ctx: The caller's context; receives write-back of captured names.
    - evaluate_fn: Evaluator used for expression bodies.
    """
    if len(args) != fn.arity:
        raise ReckonArityError(name, fn.arity, len(args))

    max_depth = get_max_call_depth()
    if ctx.depth >= max_depth:
        raise ReckonRecursionError(
            f"Maximum call depth of {max_depth} exceeded calling {name}"
        )

    inner = ctx.callee(fn.captures)
    for param, value in zip(fn.params, args):
        inner.vars[param] = value

    logger.debug("Calling %s/%d at depth %d", name, fn.arity, inner.depth)
    if fn.is_block:
        # Lazy import to avoid a circular import with the evaluator
        from reckon.evaluation.evaluator import evaluate_block
        result = evaluate_block(fn.body, inner)
    else:
        result = evaluate_fn(fn.body, inner)

    write_back(fn, inner, ctx)
    return result


def write_back(fn: Closure, inner: Context, caller: Context) -> None:
    """Copy the callee's values of captured names back to `fn` and `caller`."""
    for name in list(fn.captures):
        # parameters shadow captures; a body may also rebind a name as a function
        if name in fn.params or name not in inner.vars:
            continue
        value = inner.vars[name]
        fn.captures[name] = value
        caller.set(name, value)
        logger.debug("Write-back %s = %r", name, value)
