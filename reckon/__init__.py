# Core type aliases for reckon's data model.
# Every runtime value is a Python float (IEEE-754 binary64); there are no
# strings, lists or other first-class values. Booleans are 1.0 and 0.0.
#
# Naming guidance:
# - Value:     an evaluated number, as produced by the evaluator.
# - PrintSink: the host-supplied writer used by the `print` builtin.

from typing import Callable, TextIO

Value = float
PrintSink = TextIO

# Evaluator function type: passed to special forms and the call engine
EvaluatorFn = Callable[..., Value]


from reckon.errors import (  # noqa: E402
    ReckonError,
    ReckonSyntaxError,
    ReckonNameError,
    ReckonUnboundSymbol,
    ReckonArityError,
    ReckonDomainError,
    ReckonDefinitionError,
    ReckonRecursionError,
)
from reckon.types.environment import Context  # noqa: E402
from reckon.interpreter import (  # noqa: E402
    Interpreter,
    parse,
    parse_program,
    eval,
    eval_program,
    eval_with_context,
)

__all__ = [
    "Value",
    "PrintSink",
    "EvaluatorFn",
    "Context",
    "Interpreter",
    "parse",
    "parse_program",
    "eval",
    "eval_program",
    "eval_with_context",
    "ReckonError",
    "ReckonSyntaxError",
    "ReckonNameError",
    "ReckonUnboundSymbol",
    "ReckonArityError",
    "ReckonDomainError",
    "ReckonDefinitionError",
    "ReckonRecursionError",
]
