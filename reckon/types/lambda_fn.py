"""Closure representation for user functions and lambdas."""

from __future__ import annotations

import logging
from io import StringIO
from typing import Sequence, Union

from reckon import Value
from reckon.types.ast import Expr, Stmt

logger = logging.getLogger(__name__)

# A single expression, or the reserved block form: statements run in order,
# the last one yielding the call's value.
FuncBody = Union[Expr, Sequence[Stmt]]


class Closure:
    """A user function with formal parameters, body, and captured variables."""

    __slots__ = ("params", "body", "captures")

    def __init__(
        self,
        params: Sequence[str],
        body: FuncBody,
        captures: dict[str, Value] | None = None,
    ):
        self.params: tuple[str, ...] = tuple(params)
        self.body: FuncBody = body
        # Own copy: write-back updates it in place
        self.captures: dict[str, Value] = dict(captures) if captures else {}
        logger.debug(
            "Closure created: params=(%s), captured=%d",
            ", ".join(self.params),
            len(self.captures),
        )

    @property
    def arity(self) -> int:
        return len(self.params)

    @property
    def is_block(self) -> bool:
        return isinstance(self.body, (list, tuple))

    def __str__(self) -> str:
        from reckon.debug_utils.pprint import to_source

        with StringIO() as buffer:
            buffer.write("(")
            buffer.write(", ".join(self.params))
            buffer.write(") => ")
            if self.is_block:
                buffer.write("{ ")
                buffer.write("; ".join(to_source(stmt) for stmt in self.body))
                buffer.write(" }")
            else:
                buffer.write(to_source(self.body))
            return buffer.getvalue()

    def __repr__(self) -> str:
        return f"<Closure {self}>"
