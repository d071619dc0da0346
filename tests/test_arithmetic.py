import pytest
from hypothesis import given, strategies as st

from malt import errors
from malt.builtin.env_builtin import default_env
from malt.evaluation.evaluator import evaluate
from malt.reader.parser import read_all
from malt.types.nil import Nil


def run(env, source):
    result = Nil
    for expr in read_all(source):
        result = evaluate(expr, env)
    return result


@pytest.mark.parametrize(
    "source,expected",
    [
        ("(+ 1 2 3)", 6),
        ("(- 10 3 2)", 5),
        ("(* 2 3 4)", 24),
        ("(/ 12 3)", 4),
        ("(+ (* 2 3) (- 10 4))", 12),
        ("(/ (+ 20 10) (* 2 5))", 3),
        ("(+ 1 2.5 3)", 6.5),
        ("(+ -1 5 -3)", 1),
        ("(- -10 -5)", -5),
        ("(/ -12 3)", -4),
        ("(+)", 0),
        ("(*)", 1),
        ("(- 5)", -5),
        ("(- 2.5)", -2.5),
        ("(/ 2)", 0.5),
        ("(/ 7 2)", 3.5),
        ("(/ 7.0 2)", 3.5),
        ("(+ 1 (* 2 (+ 3 4) (- 10 6)))", 57),
        ("(div 7 2)", 3),
        ("(div -7 2)", -3),
        ("(div 7 -2)", -3),
        ("(rem 7 2)", 1),
        ("(rem -7 2)", -1),
        ("(rem 7 -2)", 1),
        ("(sqrt 16)", 4.0),
    ]
)
def test_arithmetic(env, source, expected):
    result = run(env, source)
    assert result == expected
    assert type(result) is type(expected)


@pytest.mark.parametrize(
    "source",
    ["(/ 1 0)", "(/ 1.5 0)", "(/ 1 0.0)", "(/ 0)", "(div 1 0)", "(rem 1 0)"],
)
def test_zero_divisor_is_an_error(env, source):
    with pytest.raises(errors.ArgumentError) as exc:
        run(env, source)
    assert "division by zero" in exc.value.message


@pytest.mark.parametrize(
    "source",
    [
        "(* 9223372036854775807 2)",
        "(+ 9223372036854775807 1)",
        "(- -9223372036854775808 1)",
        "(- -9223372036854775808)",
    ],
)
def test_integer_overflow_is_an_error(env, source):
    with pytest.raises(errors.ArgumentError) as exc:
        run(env, source)
    assert "integer overflow" in exc.value.message


@pytest.mark.parametrize("source", ['(+ 1 "a")', "(* 2 nil)", "(- :k)", "(+ 1 true)", "(< 1 \"a\")"])
def test_non_numbers_are_type_errors(env, source):
    with pytest.raises(errors.MaltTypeError):
        run(env, source)


@pytest.mark.parametrize("source", ["(-)", "(/)", "(div 1)", "(div 1.0 2)", "(rem 1 2 3)", "(sqrt -1)", "(<)", "(=)"])
def test_argument_errors(env, source):
    with pytest.raises(errors.ArgumentError):
        run(env, source)


@pytest.mark.parametrize(
    "source,expected",
    [
        ("(< 1 2 3)", True),
        ("(< 1 3 2)", False),
        ("(<= 1 1 2)", True),
        ("(> 3 2 1)", True),
        ("(>= 3 3 4)", False),
        ("(< 1 1.5)", True),
        ("(< 5)", True),
        ("(= 1 1)", True),
        ("(= 1 1 1)", True),
        ("(= 1 2)", False),
        ("(= 1 1.0)", False),
        ("(= true 1)", False),
        ('(= "a" "a")', True),
        ("(= :a :a)", True),
        ("(= 'a 'a)", True),
        ("(= nil nil)", True),
        ("(= nil ())", False),
        ("(= nil false)", False),
        ("(= (list 1 2) (list 1 2))", True),
        ("(= (list 1) [1])", False),
        ("(= [1 [2]] [1 [2]])", True),
        ("(= {:a 1 :b 2} {:b 2 :a 1})", True),
        ("(= {:a 1} {:a 2})", False),
        ("(= + +)", True),
        ("(= (fn [] 1) (fn [] 1))", False),
    ]
)
def test_comparison_and_equality(env, source, expected):
    assert run(env, source) is expected


_i32 = st.integers(min_value=-(2 ** 31), max_value=2 ** 31)


@given(_i32, _i32.filter(lambda d: d != 0))
def test_div_and_rem_reconstruct_the_dividend(n, d):
    env = default_env()
    quotient = run(env, f"(div {n} {d})")
    remainder = run(env, f"(rem {n} {d})")
    assert d * quotient + remainder == n
    assert abs(remainder) < abs(d)
    assert remainder == 0 or (remainder < 0) == (n < 0)
