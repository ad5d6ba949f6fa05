"""Tagged-variant JSON form of reckon syntax trees.

Every node becomes an object whose ``"type"`` field names the variant in
lowercase; operator fields carry the operator's lowercase name::

    >>> to_json(parse("2 + 3"))
    '{"type": "binop", "op": "add", "left": {"type": "number", "value": 2.0}, ...}'

``from_json(to_json(tree)) == tree`` for every tree the parser produces.
"""
from __future__ import annotations

import json
from typing import Any, Callable

from reckon.errors import ReckonSyntaxError
from reckon.types.ast import (
    Expr, Stmt, Program,
    Number, Constant, Variable, BinOp, UnaryOp, FuncCall, Conditional, Lambda,
    Assignment, FuncDef, ExprStmt,
)
from reckon.types.operators import BinaryOperator, UnaryOperator

JsonObject = dict[str, Any]


# ----------------- Encoding -----------------
def expr_to_dict(expr: Expr) -> JsonObject:
    match expr:
        case Number(value=value):
            return {"type": "number", "value": value}
        case Constant(name=name):
            return {"type": "constant", "name": name}
        case Variable(name=name):
            return {"type": "variable", "name": name}
        case BinOp(op=op, left=left, right=right):
            return {"type": "binop", "op": op.value,
                    "left": expr_to_dict(left), "right": expr_to_dict(right)}
        case UnaryOp(op=op, operand=operand):
            return {"type": "unaryop", "op": op.value, "operand": expr_to_dict(operand)}
        case FuncCall(name=name, args=args):
            return {"type": "funccall", "name": name, "args": [expr_to_dict(a) for a in args]}
        case Conditional(cond=cond, then=then, else_=else_):
            return {"type": "conditional", "cond": expr_to_dict(cond),
                    "then": expr_to_dict(then), "else": expr_to_dict(else_)}
        case Lambda(params=params, body=body):
            return {"type": "lambda", "params": list(params), "body": expr_to_dict(body)}
    raise TypeError(f"Not an expression node: {expr!r}")


def stmt_to_dict(stmt: Stmt) -> JsonObject:
    match stmt:
        case Assignment(name=name, value=value):
            return {"type": "assignment", "name": name, "value": expr_to_dict(value)}
        case FuncDef(name=name, params=params, body=body):
            return {"type": "funcdef", "name": name, "params": list(params),
                    "body": expr_to_dict(body)}
        case ExprStmt(expr=expr):
            return {"type": "expression", "expr": expr_to_dict(expr)}
    raise TypeError(f"Not a statement node: {stmt!r}")


def program_to_dict(program: Program) -> JsonObject:
    return {"type": "program", "statements": [stmt_to_dict(s) for s in program.statements]}


def to_dict(node: Expr | Stmt | Program) -> JsonObject:
    if isinstance(node, Program):
        return program_to_dict(node)
    if isinstance(node, (Assignment, FuncDef, ExprStmt)):
        return stmt_to_dict(node)
    return expr_to_dict(node)


def to_json(node: Expr | Stmt | Program, indent: int | None = None) -> str:
    return json.dumps(to_dict(node), indent=indent)


# ----------------- Decoding -----------------
def _field(obj: JsonObject, key: str) -> Any:
    try:
        return obj[key]
    except (KeyError, TypeError):
        raise ReckonSyntaxError(f"Missing field '{key}' in {_tag(obj)} node") from None


def _tag(obj: Any) -> str:
    if not isinstance(obj, dict):
        raise ReckonSyntaxError(f"Expected a JSON object, got {type(obj).__name__}")
    tag = obj.get("type")
    if not isinstance(tag, str):
        raise ReckonSyntaxError("Node is missing its 'type' tag")
    return tag


def _name(obj: JsonObject, key: str = "name") -> str:
    value = _field(obj, key)
    if not isinstance(value, str):
        raise ReckonSyntaxError(f"Field '{key}' must be a string")
    return value


def _params(obj: JsonObject) -> tuple[str, ...]:
    params = _field(obj, "params")
    if not isinstance(params, list) or not all(isinstance(p, str) for p in params):
        raise ReckonSyntaxError("Field 'params' must be a list of strings")
    if len(set(params)) != len(params):
        raise ReckonSyntaxError("Duplicate parameter name")
    return tuple(params)


def _operator(enum: type, obj: JsonObject):
    raw = _field(obj, "op")
    try:
        return enum(raw)
    except ValueError:
        raise ReckonSyntaxError(f"Unknown operator: {raw!r}") from None


def _number(obj: JsonObject) -> Number:
    value = _field(obj, "value")
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ReckonSyntaxError("Field 'value' must be a number")
    return Number(float(value))


def _binop(obj: JsonObject) -> BinOp:
    return BinOp(_operator(BinaryOperator, obj),
                 expr_from_dict(_field(obj, "left")),
                 expr_from_dict(_field(obj, "right")))


def _unaryop(obj: JsonObject) -> UnaryOp:
    return UnaryOp(_operator(UnaryOperator, obj), expr_from_dict(_field(obj, "operand")))


def _funccall(obj: JsonObject) -> FuncCall:
    args = _field(obj, "args")
    if not isinstance(args, list):
        raise ReckonSyntaxError("Field 'args' must be a list")
    return FuncCall(_name(obj), tuple(expr_from_dict(a) for a in args))


def _conditional(obj: JsonObject) -> Conditional:
    return Conditional(expr_from_dict(_field(obj, "cond")),
                       expr_from_dict(_field(obj, "then")),
                       expr_from_dict(_field(obj, "else")))


def _lambda(obj: JsonObject) -> Lambda:
    return Lambda(_params(obj), expr_from_dict(_field(obj, "body")))


EXPR_DECODERS: dict[str, Callable[[JsonObject], Expr]] = {
    "number": _number,
    "constant": lambda obj: Constant(_name(obj)),
    "variable": lambda obj: Variable(_name(obj)),
    "binop": _binop,
    "unaryop": _unaryop,
    "funccall": _funccall,
    "conditional": _conditional,
    "lambda": _lambda,
}

STMT_DECODERS: dict[str, Callable[[JsonObject], Stmt]] = {
    "assignment": lambda obj: Assignment(_name(obj), expr_from_dict(_field(obj, "value"))),
    "funcdef": lambda obj: FuncDef(_name(obj), _params(obj), expr_from_dict(_field(obj, "body"))),
    "expression": lambda obj: ExprStmt(expr_from_dict(_field(obj, "expr"))),
}


def expr_from_dict(obj: JsonObject) -> Expr:
    tag = _tag(obj)
    decoder = EXPR_DECODERS.get(tag)
    if decoder is None:
        raise ReckonSyntaxError(f"Unknown expression type: {tag!r}")
    return decoder(obj)


def stmt_from_dict(obj: JsonObject) -> Stmt:
    tag = _tag(obj)
    decoder = STMT_DECODERS.get(tag)
    if decoder is None:
        raise ReckonSyntaxError(f"Unknown statement type: {tag!r}")
    return decoder(obj)


def program_from_dict(obj: JsonObject) -> Program:
    if _tag(obj) != "program":
        raise ReckonSyntaxError(f"Expected a program, got {_tag(obj)!r}")
    statements = _field(obj, "statements")
    if not isinstance(statements, list):
        raise ReckonSyntaxError("Field 'statements' must be a list")
    return Program(tuple(stmt_from_dict(s) for s in statements))


def from_dict(obj: JsonObject) -> Expr | Stmt | Program:
    tag = _tag(obj)
    if tag == "program":
        return program_from_dict(obj)
    if tag in STMT_DECODERS:
        return stmt_from_dict(obj)
    return expr_from_dict(obj)


def from_json(text: str) -> Expr | Stmt | Program:
    try:
        obj = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ReckonSyntaxError(f"Invalid JSON: {exc.msg}", exc.pos) from None
    return from_dict(obj)
