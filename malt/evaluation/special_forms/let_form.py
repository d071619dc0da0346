from malt import EvaluatorFn
from malt import SExpression, LispValue
from malt.errors import ArgumentError
from malt.evaluation.special_forms.progn_form import progn_form
from malt.printer import pr_str
from malt.types.collections import List, Vector
from malt.types.environment import Environment
from malt.types.nil import Nil
from malt.types.symbol import Symbol


def _binding_pairs(bindings: SExpression) -> list[tuple[Symbol, SExpression]]:
    """Accept both [a 1 b 2] and ((a 1) (b 2)), as a list or a vector."""
    if bindings is Nil:
        return []
    if not isinstance(bindings, (List, Vector)):
        raise ArgumentError("binding form must be a list or a vector")
    items = list(bindings)
    if items and all(isinstance(i, (List, Vector)) and len(i) == 2 for i in items):
        pairs = [tuple(i) for i in items]
    else:
        if len(items) % 2:
            raise ArgumentError("let bindings must contain an even number of elements")
        pairs = list(zip(items[::2], items[1::2]))
    for name, _ in pairs:
        if not isinstance(name, Symbol):
            raise ArgumentError(f"let binding name must be a symbol, got {pr_str(name)}")
    return pairs


def let_form(
    tail: list[SExpression],
    env: Environment,
    evaluate_fn: EvaluatorFn,
    is_tail_call: bool = False,
) -> LispValue:
    """
    (let [name expr ...] body...)
    Bindings are evaluated in order inside one new scope, so later
    expressions see earlier names. The last body form is in tail position.
    """
    if not tail:
        raise ArgumentError("let requires a binding form")

    bindings, *body = tail
    local_env = Environment.child_of(env)
    for name, expr in _binding_pairs(bindings):
        local_env.set(name, evaluate_fn(expr, local_env))
    return progn_form(body, local_env, evaluate_fn, is_tail_call)
