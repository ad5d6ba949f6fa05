import math

import pytest

from reckon import eval, eval_program, ReckonNameError, ReckonArityError
from reckon.builtin.env_builtin import (
    BUILTINS, CONSTANTS, is_reserved, signature, functions_by_arity, lookup_builtin,
)


@pytest.mark.parametrize(
    "source, expected",
    [
        ("sin(0)", 0.0),
        ("cos(0)", 1.0),
        ("tan(0)", 0.0),
        ("asin(1)", math.pi / 2),
        ("acos(1)", 0.0),
        ("atan(1)", math.pi / 4),
        ("sinh(0)", 0.0),
        ("cosh(0)", 1.0),
        ("tanh(0)", 0.0),
        ("sqrt(16)", 4.0),
        ("sqrt(0)", 0.0),
        ("cbrt(27)", 3.0),
        ("cbrt(-8)", -2.0),
        ("abs(-3.5)", 3.5),
        ("floor(2.7)", 2.0),
        ("floor(-2.5)", -3.0),
        ("ceil(2.1)", 3.0),
        ("ceil(-2.5)", -2.0),
        ("round(2.5)", 3.0),
        ("round(-2.5)", -3.0),
        ("round(2.4)", 2.0),
        ("trunc(2.7)", 2.0),
        ("trunc(-2.7)", -2.0),
        ("exp(0)", 1.0),
        ("ln(e)", 1.0),
        ("log2(8)", 3.0),
        ("log10(1000)", 3.0),
        ("sign(5)", 1.0),
        ("sign(-0.1)", -1.0),
        ("fract(2.75)", 0.75),
        ("fract(-2.75)", -0.75),
        ("max(3, 7)", 7.0),
        ("min(3, 7)", 3.0),
        ("pow(2, 8)", 256.0),
        ("atan2(1, 1)", math.pi / 4),
        ("hypot(3, 4)", 5.0),
        ("log(8, 2)", 3.0),
        ("log(100, 10)", 2.0),
        ("mod(7, 3)", 1.0),
        ("mod(-7, 3)", -1.0),
        ("clamp(15, 0, 10)", 10.0),
        ("clamp(-5, 0, 10)", 0.0),
        ("clamp(5, 0, 10)", 5.0),
        ("lerp(0, 10, 0.25)", 2.5),
        ("lerp(10, 20, 1)", 20.0),
        ("sum(1, 2, 3, 4)", 10.0),
        ("sum(5)", 5.0),
        ("sum()", 0.0),
        ("avg(2, 4, 9)", 5.0),
        ("avg(7)", 7.0),
    ],
)
def test_builtin_functions(source, expected):
    assert eval(source) == pytest.approx(expected)


def test_sign_follows_the_sign_bit():
    assert eval("sign(0)") == 1.0
    assert eval("sign(-0)") == -1.0
    assert math.isnan(eval("sign(asin(2))"))


def test_rounding_keeps_signed_zero():
    assert math.copysign(1.0, eval("round(-0.4)")) == -1.0
    assert math.copysign(1.0, eval("ceil(-0.5)")) == -1.0
    assert math.copysign(1.0, eval("trunc(-0.5)")) == -1.0


def test_rounding_passes_infinity_through():
    assert eval("floor(exp(1000))") == math.inf
    assert eval("round(-exp(1000))") == -math.inf


def test_max_min_ignore_a_single_nan():
    assert eval("max(asin(2), 3)") == 3.0
    assert eval("min(4, asin(2))") == 4.0


def test_unknown_function():
    with pytest.raises(ReckonNameError) as info:
        eval("frobnicate(1)")
    assert info.value.message == "Unknown function: frobnicate"


def test_arguments_are_evaluated_left_to_right(ctx, output):
    eval_program("max(print(1), print(2))", ctx)
    assert output.getvalue() == "1\n2\n"


def test_catalogue_partitioned_by_arity():
    table = functions_by_arity()
    assert set(table[1]) == {
        "sin", "cos", "tan", "asin", "acos", "atan", "sinh", "cosh", "tanh",
        "sqrt", "cbrt", "abs", "floor", "ceil", "round", "trunc", "exp",
        "ln", "log2", "log10", "print", "sign", "fract",
    }
    assert set(table[2]) == {"max", "min", "pow", "atan2", "hypot", "log", "mod"}
    assert set(table[3]) == {"clamp", "lerp"}
    assert set(table[None]) == {"sum", "avg"}


@pytest.mark.parametrize(
    "name, expected",
    [
        ("sin", "sin(x)"),
        ("clamp", "clamp(x, lo, hi)"),
        ("log", "log(x, base)"),
        ("sum", "sum(x...)"),
    ],
)
def test_signature(name, expected):
    assert signature(name) == expected


def test_reserved_names():
    for name in list(CONSTANTS) + list(BUILTINS):
        assert is_reserved(name)
    assert not is_reserved("x")
    assert not is_reserved("sine")


def test_builtin_checks_its_own_arity(ctx):
    with pytest.raises(ReckonArityError):
        lookup_builtin("hypot")(ctx, [1.0])
    assert lookup_builtin("hypot")(ctx, [3.0, 4.0]) == 5.0
