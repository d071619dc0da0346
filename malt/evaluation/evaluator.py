"""Core evaluator and trampoline for the malt interpreter.

Implements special-form dispatch and tail-call aware application via a simple
trampoline using TailCall objects: forms in tail position hand back a
TailCall(form, env) instead of recursing, and `evaluate` loops on them, so
tail-recursive programs run in constant Python stack.
"""

from __future__ import annotations

import logging

from malt import SExpression, LispValue
from malt.errors import MaltError
from malt.printer import pr_str
from malt.types.collections import List, Map, Vector
from malt.types.environment import Environment
from malt.types.symbol import Symbol
from malt.types.tail_call import TailCall
from malt.evaluation.apply import apply, trampoline
from malt.evaluation.special_forms import SPECIAL_FORMS

logger = logging.getLogger(__name__)


def evaluate(expr: SExpression, env: Environment) -> LispValue:
    """
    Trampoline evaluator: tail-call aware evaluation.
    """
    return trampoline(evaluate0, expr, env)


def eval_ast(expr: SExpression, env: Environment) -> LispValue:
    """Evaluate a non-list form: symbols resolve, collections evaluate element-wise."""
    if isinstance(expr, Symbol):
        return env.get(expr)
    if isinstance(expr, Vector):
        return Vector([evaluate0(item, env) for item in expr])
    if isinstance(expr, Map):
        # keys are never evaluated
        return Map([(k, evaluate0(v, env)) for k, v in expr.items()])
    return expr


def evaluate0(
    expr: SExpression,
    env: Environment,
    is_tail_call: bool = False,
) -> LispValue | TailCall:
    """
    Core evaluator: single-step evaluation with tail-call awareness.
    Returns a TailCall only when `is_tail_call` is set; otherwise a value.
    """
    if not isinstance(expr, List):
        return eval_ast(expr, env)

    if expr.is_empty():
        return expr

    logger.debug("eval %s", expr)
    try:
        head = expr.first
        tail_args = list(expr.rest)

        # --- Special forms handling ---
        if isinstance(head, Symbol) and head in SPECIAL_FORMS:
            return SPECIAL_FORMS[head](tail_args, env, evaluate0, is_tail_call)

        # --- Application: head and arguments left to right ---
        fn = evaluate0(head, env)
        args = [evaluate0(arg, env) for arg in tail_args]
        return apply(fn, args, evaluate0, is_tail_call)
    except MaltError as err:
        if not err.context_full:
            err.add_context(pr_str(expr))
        raise
