"""Operator enums for the expression tree.

Each member's value is its lowercase serialised name; ``symbol`` gives the
spelling used when printing a tree back to source.
"""

from __future__ import annotations

from enum import Enum


class BinaryOperator(Enum):
    ADD = "add"
    SUB = "sub"
    MUL = "mul"
    DIV = "div"
    MOD = "mod"
    POW = "pow"
    EQ = "eq"
    NE = "ne"
    LT = "lt"
    GT = "gt"
    LE = "le"
    GE = "ge"
    AND = "and"
    OR = "or"

    @property
    def symbol(self) -> str:
        return _BINARY_SYMBOLS[self]

    @property
    def precedence(self) -> int:
        """Binding strength, higher binds tighter."""
        return _BINARY_PRECEDENCE[self]

    def __repr__(self) -> str:
        return f"BinaryOperator.{self.name}"


class UnaryOperator(Enum):
    NEG = "neg"
    NOT = "not"

    @property
    def symbol(self) -> str:
        return "-" if self is UnaryOperator.NEG else "not "

    def __repr__(self) -> str:
        return f"UnaryOperator.{self.name}"


_BINARY_SYMBOLS = {
    BinaryOperator.ADD: "+",
    BinaryOperator.SUB: "-",
    BinaryOperator.MUL: "*",
    BinaryOperator.DIV: "/",
    BinaryOperator.MOD: "%",
    BinaryOperator.POW: "^",
    BinaryOperator.EQ: "==",
    BinaryOperator.NE: "!=",
    BinaryOperator.LT: "<",
    BinaryOperator.GT: ">",
    BinaryOperator.LE: "<=",
    BinaryOperator.GE: ">=",
    BinaryOperator.AND: "and",
    BinaryOperator.OR: "or",
}

_BINARY_PRECEDENCE = {
    BinaryOperator.OR: 1,
    BinaryOperator.AND: 2,
    BinaryOperator.EQ: 3,
    BinaryOperator.NE: 3,
    BinaryOperator.LT: 4,
    BinaryOperator.GT: 4,
    BinaryOperator.LE: 4,
    BinaryOperator.GE: 4,
    BinaryOperator.ADD: 5,
    BinaryOperator.SUB: 5,
    BinaryOperator.MUL: 6,
    BinaryOperator.DIV: 6,
    BinaryOperator.MOD: 6,
    BinaryOperator.POW: 7,
}

# Unary operands bind tighter than '^': -2 ^ 2 is (-2) ^ 2.
UNARY_PRECEDENCE = 8
