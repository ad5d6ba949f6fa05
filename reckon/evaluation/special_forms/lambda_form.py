from typing import Sequence

from reckon import Value, EvaluatorFn
from reckon.errors import ReckonDefinitionError
from reckon.types.ast import Lambda
from reckon.types.environment import Context
from reckon.types.lambda_fn import Closure, FuncBody


def make_closure(params: Sequence[str], body: FuncBody, ctx: Context) -> Closure:
    """Build a closure capturing the current variable bindings of `ctx`."""
    return Closure(params, body, ctx.snapshot())


def lambda_form(node: Lambda, ctx: Context, evaluate_fn: EvaluatorFn) -> Value:
    """
    A lambda only means something as the right-hand side of an assignment,
    which is handled by assignment_form. Anywhere else it is an error.
    """
    raise ReckonDefinitionError(
        "A lambda cannot be used as a value; assign it to a variable first"
    )
