import pytest

from malt import errors
from malt.evaluation.evaluator import evaluate
from malt.printer import pr_str
from malt.reader.parser import read_all
from malt.types.nil import Nil


@pytest.fixture
def qenv(env):
    evaluate_all(env, "(def! lst (list 2 3)) (def! x 7)")
    return env


def evaluate_all(env, source):
    result = Nil
    for expr in read_all(source):
        result = evaluate(expr, env)
    return result


@pytest.mark.parametrize(
    "source,expected",
    [
        ("`(1 2 3)", "(1 2 3)"),
        ("`x", "x"),
        ("`~x", "7"),
        ("`(1 ~x)", "(1 7)"),
        ("`(1 ~lst)", "(1 (2 3))"),
        ("`(1 ~@lst 4)", "(1 2 3 4)"),
        ("`(~@lst)", "(2 3)"),
        ("`(0 ~@[] 1)", "(0 1)"),
        ("`[1 ~(+ 1 1) ~@lst]", "[1 2 2 3]"),
        ("`{:a ~x}", "{:a 7}"),
        ("`(a (b ~x))", "(a (b 7))"),
        ("(quasiquote (1 (unquote x)))", "(1 7)"),
    ]
)
def test_quasiquote(qenv, source, expected):
    assert pr_str(evaluate_all(qenv, source)) == expected


def test_quasiquote_result_is_not_evaluated_again(qenv):
    assert pr_str(evaluate_all(qenv, "`(+ 1 ~x)")) == "(+ 1 7)"
    assert evaluate_all(qenv, "(eval `(+ 1 ~x))") == 8


def test_splice_of_non_sequence_fails(qenv):
    with pytest.raises(errors.MaltTypeError):
        evaluate_all(qenv, "`(1 ~@x)")


@pytest.mark.parametrize("source", ["~x", "(unquote x)", "(splice-unquote lst)"])
def test_unquote_outside_quasiquote_fails(qenv, source):
    with pytest.raises(errors.EvalError):
        evaluate_all(qenv, source)


@pytest.mark.parametrize("source", ["(quasiquote)", "(quasiquote 1 2)", "`(1 (unquote))"])
def test_quasiquote_argument_errors(qenv, source):
    with pytest.raises(errors.ArgumentError):
        evaluate_all(qenv, source)
