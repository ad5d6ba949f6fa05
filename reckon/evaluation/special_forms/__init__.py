"""Registry of special forms for the reckon evaluator.

Maps node types (and the short-circuit operators) to handler functions that
implement non-standard evaluation rules: only some operands are evaluated,
or evaluation binds names instead of producing a plain number. The evaluator
consults these tables before ordinary evaluation.
"""

from reckon.types.ast import Conditional, Lambda, Assignment, FuncDef
from reckon.types.operators import BinaryOperator
from reckon.evaluation.special_forms.if_form import if_form
from reckon.evaluation.special_forms.lambda_form import lambda_form
from reckon.evaluation.special_forms.define_form import assignment_form, define_form
from reckon.evaluation.special_forms.logic_forms import and_form, or_form

SPECIAL_FORMS = {
    Conditional: if_form,
    Lambda: lambda_form,
    Assignment: assignment_form,
    FuncDef: define_form,
}

LOGIC_FORMS = {
    BinaryOperator.AND: and_form,
    BinaryOperator.OR: or_form,
}
