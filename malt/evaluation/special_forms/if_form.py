from malt import EvaluatorFn
from malt import SExpression, LispValue
from malt.errors import ArgumentError
from malt.evaluation.apply import tail_eval
from malt.types.environment import Environment
from malt.types.nil import Nil
from malt.types.values import is_truthy


def if_form(
    tail: list[SExpression],
    env: Environment,
    evaluate_fn: EvaluatorFn,
    is_tail_call: bool = False,
) -> LispValue:
    if len(tail) not in (2, 3):
        raise ArgumentError("if requires a condition, a then-expression and an optional else-expression")

    cond = evaluate_fn(tail[0], env)
    # anything not nil or false is true
    if is_truthy(cond):
        return tail_eval(evaluate_fn, tail[1], env, is_tail_call)
    elif len(tail) > 2:
        return tail_eval(evaluate_fn, tail[2], env, is_tail_call)
    else:
        return Nil
