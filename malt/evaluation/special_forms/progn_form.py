from malt import EvaluatorFn
from malt import SExpression, LispValue
from malt.evaluation.apply import tail_eval
from malt.types.environment import Environment
from malt.types.nil import Nil


def progn_form(
    tail: list[SExpression],
    env: Environment,
    evaluate_fn: EvaluatorFn,
    is_tail_call: bool = False,
) -> LispValue:
    if not tail:
        return Nil
    for e in tail[:-1]:
        evaluate_fn(e, env)
    return tail_eval(evaluate_fn, tail[-1], env, is_tail_call)
