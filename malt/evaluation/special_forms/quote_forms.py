from malt import SExpression, LispValue, EvaluatorFn
from malt.errors import ArgumentError, EvalError, MaltTypeError
from malt.types.collections import List, Map, Vector
from malt.types.environment import Environment
from malt.types.symbol import Symbol
from malt.types.values import is_sequential

UNQUOTE = Symbol("unquote")
SPLICE_UNQUOTE = Symbol("splice-unquote")


def _is_call_to(expr: SExpression, name: Symbol) -> bool:
    return isinstance(expr, List) and not expr.is_empty() and expr.first == name


def _unquoted_arg(expr: List) -> SExpression:
    if len(expr) != 2:
        raise ArgumentError(f"{expr.first} expects exactly 1 argument")
    return expr.nth(1)


def eval_quasiquote(
    evaluate_fn: EvaluatorFn,
    expr: SExpression,
    env: Environment,
) -> SExpression:
    def _process_items(seq) -> list[SExpression]:
        result_list = []
        for item in seq:
            if _is_call_to(item, SPLICE_UNQUOTE):
                spliced_val = evaluate_fn(_unquoted_arg(item), env)
                if not is_sequential(spliced_val):
                    raise MaltTypeError("splice-unquote must produce a list or vector")
                result_list.extend(spliced_val)
                continue
            result_list.append(eval_quasiquote(evaluate_fn, item, env))
        return result_list

    if _is_call_to(expr, UNQUOTE):
        return evaluate_fn(_unquoted_arg(expr), env)
    if isinstance(expr, List):
        return List.of(_process_items(expr))
    if isinstance(expr, Vector):
        return Vector(_process_items(expr))
    if isinstance(expr, Map):
        return Map([(k, eval_quasiquote(evaluate_fn, v, env)) for k, v in expr.items()])
    # Atoms returned as-is
    return expr


def quote_form(
    tail: list[SExpression], env, evaluate_fn: EvaluatorFn, _: bool
) -> LispValue:
    if len(tail) != 1:
        raise ArgumentError("quote expects exactly 1 argument")
    return tail[0]


def quasiquote_form(
    tail: list[SExpression], env, evaluate_fn: EvaluatorFn, _: bool
) -> LispValue:
    if len(tail) != 1:
        raise ArgumentError("quasiquote expects exactly 1 argument")
    # Returns the constructed data structure; it is not evaluated again.
    return eval_quasiquote(evaluate_fn, tail[0], env)


def unquote_form(
    tail: list[SExpression], env, evaluate_fn: EvaluatorFn, _: bool
) -> LispValue:
    raise EvalError("unquote is only valid inside quasiquote")


def splice_unquote_form(
    tail: list[SExpression], env, evaluate_fn: EvaluatorFn, _: bool
) -> LispValue:
    raise EvalError("splice-unquote is only valid inside quasiquote")
