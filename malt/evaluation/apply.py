"""Application engine for malt.

This module centralizes function application semantics for the interpreter:
- Closures bind their arguments in a fresh child of the captured environment.
  In tail position the body is returned as a TailCall for the trampoline;
  otherwise it is run to completion here.
- Builtins receive the evaluated argument list directly.
- Anything else is not callable.
"""

from malt import LispValue, SExpression, EvaluatorFn
from malt.errors import NotCallableError
from malt.printer import pr_str
from malt.types.callables import Builtin, Closure
from malt.types.environment import Environment
from malt.types.tail_call import TailCall


def trampoline(evaluate_fn: EvaluatorFn, expr: SExpression, env: Environment) -> LispValue:
    """Evaluate `expr` in tail mode, looping on TailCalls until a value remains."""
    result = evaluate_fn(expr, env, True)
    while isinstance(result, TailCall):
        result = evaluate_fn(result.form, result.env, True)
    return result


def tail_eval(
    evaluate_fn: EvaluatorFn, expr: SExpression, env: Environment, is_tail_call: bool
) -> LispValue | TailCall:
    """Evaluate a sub-form sitting in tail position of its enclosing form."""
    if is_tail_call:
        return TailCall(expr, env)
    return evaluate_fn(expr, env)


def apply(
    head: LispValue,
    args: list[LispValue],
    evaluate_fn: EvaluatorFn,
    tail: bool = False,
) -> LispValue | TailCall:
    """Apply either a Closure or a Builtin.

    - For Closure, bind arguments and evaluate (or defer, in tail position) the body.
    - For Builtin, invoke with the list of args.
    - Otherwise, raise NotCallableError.
    """
    if isinstance(head, Closure):
        new_env = head.bind_arguments(args)
        if tail:
            return TailCall(head.body, new_env)
        return trampoline(evaluate_fn, head.body, new_env)
    if isinstance(head, Builtin):
        return head(args)
    raise NotCallableError(head, pr_str(head))
