from malt import EvaluatorFn
from malt import SExpression, LispValue
from malt.errors import ArgumentError
from malt.printer import pr_str
from malt.types.callables import Closure
from malt.types.environment import Environment
from malt.types.symbol import Symbol


def define_form(
    tail: list[SExpression],
    env: Environment,
    evaluate_fn: EvaluatorFn,
    _: bool,
) -> LispValue:
    """
    (def! name value)
    Binds in the current environment, never a child, and returns the value.
    """
    if len(tail) != 2:
        raise ArgumentError("def! requires exactly 2 arguments: (def! symbol expr)")

    name, val_expr = tail
    if not isinstance(name, Symbol):
        raise ArgumentError(f"def! first argument must be a symbol, got {pr_str(name)}")
    value = evaluate_fn(val_expr, env)
    if isinstance(value, Closure) and value.name is None:
        value.name = name.id
    return env.set(name, value)
