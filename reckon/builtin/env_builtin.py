"""Built-in constants and functions for the reckon runtime.

Every builtin has the signature ``fn(ctx, args) -> Value`` and is registered
with a fixed arity (or ``None`` for variadic functions). The catalogue is
fixed: its names are reserved and can never be rebound by a program.

IEEE results are preferred over exceptions: out-of-domain arguments to the
trigonometric functions or to ``pow`` produce ``nan`` and overflow produces
``inf``. Only the documented domain errors (``sqrt`` of a negative number,
logarithms of non-positive numbers, a bad ``log`` base, ``mod`` by zero)
raise ReckonDomainError.
"""
from __future__ import annotations

import math
import sys
from dataclasses import dataclass
from typing import Callable

from reckon import Value
from reckon.types.environment import Context
from reckon.errors import ReckonArityError, ReckonDomainError, ReckonNameError
from reckon.debug_utils.pprint import format_number

BuiltinFn = Callable[[Context, list[Value]], Value]


@dataclass(frozen=True)
class Builtin:
    name: str
    arity: int | None
    fn: BuiltinFn
    doc: str
    params: tuple[str, ...] = ("x",)
    min_args: int = 0

    def check_arity(self, actual: int) -> None:
        if self.arity is None:
            if actual < self.min_args:
                raise ReckonArityError(self.name, f"at least {self.min_args}", actual)
        elif actual != self.arity:
            raise ReckonArityError(self.name, self.arity, actual)

    def __call__(self, ctx: Context, args: list[Value]) -> Value:
        self.check_arity(len(args))
        return self.fn(ctx, args)


CONSTANTS: dict[str, Value] = {
    "pi": math.pi,
    "e": math.e,
    "tau": math.tau,
    "true": 1.0,
    "false": 0.0,
}


# -------------------------------
# IEEE helpers
# -------------------------------
def is_odd_integer(x: Value) -> bool:
    return math.isfinite(x) and x == math.floor(x) and math.fmod(x, 2.0) != 0.0


def powf(base: Value, exponent: Value) -> Value:
    """Raise `base` to `exponent` with IEEE results instead of exceptions."""
    try:
        return math.pow(base, exponent)
    except OverflowError:
        if base < 0 and is_odd_integer(exponent):
            return -math.inf
        return math.inf
    except ValueError:
        # zero to a negative power, or a negative base to a fractional power
        if base == 0.0:
            return math.copysign(math.inf, base) if is_odd_integer(exponent) else math.inf
        return math.nan


def fmax(a: Value, b: Value) -> Value:
    """max() that ignores a single nan operand."""
    if math.isnan(a):
        return b
    if math.isnan(b):
        return a
    return a if a >= b else b


def fmin(a: Value, b: Value) -> Value:
    """min() that ignores a single nan operand."""
    if math.isnan(a):
        return b
    if math.isnan(b):
        return a
    return a if a <= b else b


def _ieee(fn: Callable[[Value], Value], odd: bool = False) -> Callable[[Value], Value]:
    def call(x: Value) -> Value:
        try:
            return fn(x)
        except ValueError:
            return math.nan
        except OverflowError:
            return math.copysign(math.inf, x) if odd else math.inf
    call.__name__ = fn.__name__
    return call


def _integral(fn: Callable[[Value], int]) -> Callable[[Value], Value]:
    # math.floor and friends return ints and reject inf/nan
    def call(x: Value) -> Value:
        if not math.isfinite(x):
            return x
        result = float(fn(x))
        return math.copysign(result, x) if result == 0.0 else result
    call.__name__ = fn.__name__
    return call


def round_half_away(x: Value) -> Value:
    if not math.isfinite(x):
        return x
    t = float(math.trunc(x))
    if abs(x - t) >= 0.5:
        t += math.copysign(1.0, x)
    return math.copysign(t, x)


def signum(x: Value) -> Value:
    if math.isnan(x):
        return math.nan
    return math.copysign(1.0, x)


def fract(x: Value) -> Value:
    if not math.isfinite(x):
        return math.nan
    return x - math.trunc(x)


def remainder(x: Value, y: Value) -> Value:
    """Truncated remainder; the result takes the sign of the dividend."""
    if y == 0.0:
        raise ReckonDomainError("Modulo by zero")
    if math.isinf(x):
        return math.nan
    return math.fmod(x, y)


# -------------------------------
# Checked functions
# -------------------------------
def sqrt(ctx: Context, args: list[Value]) -> Value:
    """Square root; negative arguments are a domain error."""
    (x,) = args
    if x < 0.0:
        raise ReckonDomainError("Square root of negative number")
    return math.sqrt(x)


def _logarithm(fn: Callable[[Value], Value]) -> BuiltinFn:
    def call(ctx: Context, args: list[Value]) -> Value:
        (x,) = args
        if x <= 0.0:
            raise ReckonDomainError("Logarithm of non-positive number")
        return fn(x)
    return call


def log(ctx: Context, args: list[Value]) -> Value:
    """Logarithm of x in an arbitrary base."""
    x, base = args
    if x <= 0.0:
        raise ReckonDomainError("Logarithm of non-positive number")
    if base <= 0.0 or base == 1.0:
        raise ReckonDomainError(f"Invalid logarithm base: {format_number(base)}")
    return math.log(x) / math.log(base)


def mod(ctx: Context, args: list[Value]) -> Value:
    x, y = args
    return remainder(x, y)


def print_value(ctx: Context, args: list[Value]) -> Value:
    """Write the argument to the print sink and return it unchanged."""
    (x,) = args
    out = ctx.output if ctx.output is not None else sys.stdout
    out.write(format_number(x) + "\n")
    return x


# -------------------------------
# Multi-argument functions
# -------------------------------
def maximum(ctx: Context, args: list[Value]) -> Value:
    return fmax(args[0], args[1])


def minimum(ctx: Context, args: list[Value]) -> Value:
    return fmin(args[0], args[1])


def power(ctx: Context, args: list[Value]) -> Value:
    return powf(args[0], args[1])


def clamp(ctx: Context, args: list[Value]) -> Value:
    """clamp(x, lo, hi) = min(max(x, lo), hi)"""
    x, lo, hi = args
    return fmin(fmax(x, lo), hi)


def lerp(ctx: Context, args: list[Value]) -> Value:
    """Linear interpolation from a to b by t."""
    a, b, t = args
    return a + (b - a) * t


def total(ctx: Context, args: list[Value]) -> Value:
    result = 0.0
    for x in args:
        result += x
    return result


def average(ctx: Context, args: list[Value]) -> Value:
    return total(ctx, args) / len(args)


# -------------------------------
# Registration
# -------------------------------
def _unary(fn: Callable[[Value], Value]) -> BuiltinFn:
    def call(ctx: Context, args: list[Value]) -> Value:
        return fn(args[0])
    return call


def _binary(fn: Callable[[Value, Value], Value]) -> BuiltinFn:
    def call(ctx: Context, args: list[Value]) -> Value:
        try:
            return fn(args[0], args[1])
        except OverflowError:
            return math.inf
    return call


BUILTINS: dict[str, Builtin] = {}


def register(name: str, arity: int | None, fn: BuiltinFn, doc: str,
             params: tuple[str, ...] = ("x",), min_args: int = 0) -> None:
    BUILTINS[name] = Builtin(name, arity, fn, doc, params, min_args)


for _name, _fn, _doc in [
    ("sin", _ieee(math.sin), "Sine (radians)"),
    ("cos", _ieee(math.cos), "Cosine (radians)"),
    ("tan", _ieee(math.tan), "Tangent (radians)"),
    ("asin", _ieee(math.asin), "Arc sine"),
    ("acos", _ieee(math.acos), "Arc cosine"),
    ("atan", _ieee(math.atan), "Arc tangent"),
    ("sinh", _ieee(math.sinh, odd=True), "Hyperbolic sine"),
    ("cosh", _ieee(math.cosh), "Hyperbolic cosine"),
    ("tanh", _ieee(math.tanh), "Hyperbolic tangent"),
    ("cbrt", math.cbrt, "Cube root"),
    ("abs", math.fabs, "Absolute value"),
    ("floor", _integral(math.floor), "Round down"),
    ("ceil", _integral(math.ceil), "Round up"),
    ("round", round_half_away, "Round to nearest, halves away from zero"),
    ("trunc", _integral(math.trunc), "Round toward zero"),
    ("exp", _ieee(math.exp), "e raised to x"),
    ("sign", signum, "Sign of x: 1 or -1, following the sign bit"),
    ("fract", fract, "Fractional part: x - trunc(x)"),
]:
    register(_name, 1, _unary(_fn), _doc)
del _name, _fn, _doc

register("sqrt", 1, sqrt, "Square root")
register("ln", 1, _logarithm(math.log), "Natural logarithm")
register("log2", 1, _logarithm(math.log2), "Logarithm base 2")
register("log10", 1, _logarithm(math.log10), "Logarithm base 10")
register("print", 1, print_value, "Print x and return it")

register("max", 2, maximum, "Larger of a and b", ("a", "b"))
register("min", 2, minimum, "Smaller of a and b", ("a", "b"))
register("pow", 2, power, "a raised to b", ("a", "b"))
register("atan2", 2, _binary(math.atan2), "Arc tangent of y / x", ("y", "x"))
register("hypot", 2, _binary(math.hypot), "Length of the hypotenuse", ("x", "y"))
register("log", 2, log, "Logarithm of x in the given base", ("x", "base"))
register("mod", 2, mod, "Remainder of x / y", ("x", "y"))

register("clamp", 3, clamp, "Limit x to [lo, hi]", ("x", "lo", "hi"))
register("lerp", 3, lerp, "Interpolate from a to b by t", ("a", "b", "t"))

register("sum", None, total, "Sum of all arguments", ("x",), min_args=0)
register("avg", None, average, "Mean of the arguments", ("x",), min_args=1)


# -------------------------------
# Lookup
# -------------------------------
def is_reserved(name: str) -> bool:
    """Constants and builtin function names can never be rebound."""
    return name in CONSTANTS or name in BUILTINS


def lookup_constant(name: str) -> Value:
    try:
        return CONSTANTS[name]
    except KeyError:
        raise ReckonNameError(f"Unknown constant: {name}") from None


def lookup_builtin(name: str) -> Builtin:
    try:
        return BUILTINS[name]
    except KeyError:
        raise ReckonNameError(f"Unknown function: {name}") from None


def call_builtin(ctx: Context, name: str, args: list[Value]) -> Value:
    return lookup_builtin(name)(ctx, args)


def signature(name: str) -> str:
    """Human-readable call signature, e.g. ``clamp(x, lo, hi)``."""
    b = lookup_builtin(name)
    if b.arity is None:
        return f"{name}({b.params[0]}...)"
    return f"{name}({', '.join(b.params)})"


def functions_by_arity() -> dict[int | None, list[str]]:
    table: dict[int | None, list[str]] = {}
    for name, b in BUILTINS.items():
        table.setdefault(b.arity, []).append(name)
    return table
