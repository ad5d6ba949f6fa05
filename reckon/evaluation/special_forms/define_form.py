import logging

from reckon import Value, EvaluatorFn
from reckon.builtin.env_builtin import is_reserved
from reckon.errors import ReckonDefinitionError
from reckon.evaluation.special_forms.lambda_form import make_closure
from reckon.types.ast import Assignment, FuncDef, Lambda
from reckon.types.environment import Context

logger = logging.getLogger(__name__)


def check_bindable(name: str) -> None:
    if is_reserved(name):
        raise ReckonDefinitionError(f"Cannot redefine reserved name '{name}'")


def assignment_form(node: Assignment, ctx: Context, evaluate_fn: EvaluatorFn) -> Value:
    """
    name = value
    A lambda on the right binds a function and yields 0; anything else is
    evaluated and bound as a number, yielding that number.
    """
    check_bindable(node.name)
    if isinstance(node.value, Lambda):
        ctx.define_function(node.name, make_closure(node.value.params, node.value.body, ctx))
        logger.debug("Bound function %s/%d", node.name, len(node.value.params))
        return 0.0

    value = evaluate_fn(node.value, ctx)
    ctx.set(node.name, value)
    logger.debug("Bound %s = %r", node.name, value)
    return value


def define_form(node: FuncDef, ctx: Context, evaluate_fn: EvaluatorFn) -> Value:
    """
    def name(params) = body
    """
    check_bindable(node.name)
    ctx.define_function(node.name, make_closure(node.params, node.body, ctx))
    logger.debug("Defined function %s/%d", node.name, len(node.params))
    return 0.0
