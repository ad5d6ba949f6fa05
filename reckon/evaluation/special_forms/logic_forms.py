"""Short-circuit `and` / `or`.

The right operand is only evaluated when the left one does not decide the
result. Both forms yield exactly 1.0 or 0.0.
"""
from reckon import Value, EvaluatorFn
from reckon.evaluation.special_forms.if_form import is_truthy
from reckon.types.ast import BinOp
from reckon.types.environment import Context


def and_form(node: BinOp, ctx: Context, evaluate_fn: EvaluatorFn) -> Value:
    if not is_truthy(evaluate_fn(node.left, ctx)):
        return 0.0
    return 1.0 if is_truthy(evaluate_fn(node.right, ctx)) else 0.0


def or_form(node: BinOp, ctx: Context, evaluate_fn: EvaluatorFn) -> Value:
    if is_truthy(evaluate_fn(node.left, ctx)):
        return 1.0
    return 1.0 if is_truthy(evaluate_fn(node.right, ctx)) else 0.0
