import math

from hypothesis import given, strategies as st

from reckon import Context
from reckon.evaluation.evaluator import evaluate
from reckon.types.ast import BinOp, Number
from reckon.types.operators import BinaryOperator as B

finite = st.floats(min_value=-1e100, max_value=1e100, allow_nan=False, allow_infinity=False)


def run(op, left, right):
    return evaluate(BinOp(op, Number(left), Number(right)), Context())


def run_tree(tree):
    return evaluate(tree, Context())


@given(finite, finite)
def test_addition_commutes(a, b):
    assert run(B.ADD, a, b) == run(B.ADD, b, a)


@given(finite, finite)
def test_multiplication_commutes(a, b):
    assert run(B.MUL, a, b) == run(B.MUL, b, a)


@given(finite, finite, finite)
def test_addition_associates_within_tolerance(a, b, c):
    left = run_tree(BinOp(B.ADD, BinOp(B.ADD, Number(a), Number(b)), Number(c)))
    right = run_tree(BinOp(B.ADD, Number(a), BinOp(B.ADD, Number(b), Number(c))))
    scale = abs(a) + abs(b) + abs(c)
    assert math.isclose(left, right, rel_tol=1e-9, abs_tol=1e-12 * scale)


@given(finite)
def test_identities(a):
    assert run(B.MUL, a, 1.0) == a
    assert run(B.ADD, a, 0.0) == a
    assert run(B.SUB, a, a) == 0.0
    assert run(B.POW, a, 0.0) == 1.0
    assert run(B.POW, a, 1.0) == a


@given(finite, finite)
def test_comparisons_yield_booleans(a, b):
    for op in (B.LT, B.GT, B.LE, B.GE, B.EQ, B.NE, B.AND, B.OR):
        assert run(op, a, b) in (0.0, 1.0)


@given(finite, finite)
def test_equal_and_not_equal_are_complementary(a, b):
    assert run(B.EQ, a, b) + run(B.NE, a, b) == 1.0


@given(finite, finite.filter(lambda y: y != 0.0))
def test_remainder_takes_the_sign_of_the_dividend(x, y):
    r = run(B.MOD, x, y)
    assert abs(r) < abs(y)
    assert r == 0.0 or math.copysign(1.0, r) == math.copysign(1.0, x)
