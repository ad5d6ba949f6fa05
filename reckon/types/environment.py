"""Runtime context for reckon.

A Context holds two separate tables: ``vars`` maps names to numbers and
``funcs`` maps names to closures. A name lives in at most one of them at a
time. Callee contexts copy a closure's captures but share ``funcs`` with the
caller, which is what lets named functions call themselves and each other.
"""

from __future__ import annotations

from io import StringIO
from typing import Optional

from reckon import Value, PrintSink
from reckon.errors import ReckonNameError, ReckonUnboundSymbol
from reckon.types.lambda_fn import Closure


class Context:
    """Variable and function bindings threaded through one evaluation."""

    __slots__ = ("vars", "funcs", "output", "depth")

    def __init__(self, output: Optional[PrintSink] = None):
        self.vars: dict[str, Value] = {}
        self.funcs: dict[str, Closure] = {}
        # None means "sys.stdout at the time print runs"
        self.output: Optional[PrintSink] = output
        self.depth: int = 0

    # --- Variables ---
    def set(self, name: str, value: Value) -> None:
        """Bind `name` to a number, dropping any function bound to it."""
        self.funcs.pop(name, None)
        self.vars[name] = float(value)

    def get(self, name: str) -> Optional[Value]:
        return self.vars.get(name)

    def lookup(self, name: str) -> Value:
        """Look up the number bound to `name`.

        Raises ReckonNameError if `name` is bound as a function and
        ReckonUnboundSymbol if it is not bound at all.
        """
        if name in self.funcs:
            raise ReckonNameError(f"{name} is a function, not a value")
        try:
            return self.vars[name]
        except KeyError:
            raise ReckonUnboundSymbol(f"Unknown variable: {name}") from None

    def snapshot(self) -> dict[str, Value]:
        return dict(self.vars)

    # --- Functions ---
    def define_function(self, name: str, fn: Closure) -> None:
        """Bind `name` to a closure, dropping any number bound to it."""
        self.vars.pop(name, None)
        self.funcs[name] = fn

    def lookup_function(self, name: str) -> Optional[Closure]:
        return self.funcs.get(name)

    # --- Calls ---
    def callee(self, captures: dict[str, Value]) -> Context:
        """Fresh context for a call: copied captures, shared function table."""
        inner = Context(self.output)
        inner.vars = dict(captures)
        inner.funcs = self.funcs
        inner.depth = self.depth + 1
        return inner

    def __contains__(self, name: str) -> bool:
        return name in self.vars or name in self.funcs

    def __str__(self) -> str:
        with StringIO() as buffer:
            buffer.write("{")
            buffer.write(", ".join(f"{k}: {v!r}" for k, v in self.vars.items()))
            buffer.write("}")
            if self.funcs:
                buffer.write(" fns: ")
                buffer.write(", ".join(f"{k}/{fn.arity}" for k, fn in self.funcs.items()))
            return buffer.getvalue()

    def __repr__(self) -> str:
        return f"<Context {self}>"
