from reckon import Value, EvaluatorFn
from reckon.types.ast import Conditional
from reckon.types.environment import Context


def is_truthy(value: Value) -> bool:
    return value != 0.0


def if_form(node: Conditional, ctx: Context, evaluate_fn: EvaluatorFn) -> Value:
    # Only the taken branch is evaluated
    if is_truthy(evaluate_fn(node.cond, ctx)):
        return evaluate_fn(node.then, ctx)
    return evaluate_fn(node.else_, ctx)
