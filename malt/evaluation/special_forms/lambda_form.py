from malt import EvaluatorFn
from malt import SExpression, LispValue
from malt.errors import ArgumentError
from malt.printer import pr_str
from malt.types.callables import Closure
from malt.types.collections import List, Vector
from malt.types.environment import Environment
from malt.types.nil import Nil
from malt.types.symbol import Symbol

REST_MARKER = Symbol("&")


def parse_params(params: SExpression) -> tuple[list[Symbol], Symbol | None]:
    """Split a parameter form into positional names and an optional rest name.

    - a bare symbol collects every argument: (fn args ...)
    - nil, () or [] take no arguments
    - a list or vector of symbols binds positionally; `& more` collects the rest
    """
    if isinstance(params, Symbol) and params != REST_MARKER:
        return [], params
    if params is Nil:
        return [], None
    if not isinstance(params, (List, Vector)):
        raise ArgumentError(f"fn parameters must be a symbol, list or vector, got {pr_str(params)}")

    names = list(params)
    for p in names:
        if not isinstance(p, Symbol):
            raise ArgumentError(f"fn parameter must be a symbol, got {pr_str(p)}")
    if REST_MARKER not in names:
        return names, None
    idx = names.index(REST_MARKER)
    if len(names) != idx + 2 or names[idx + 1] == REST_MARKER:
        raise ArgumentError("& must be followed by exactly one parameter name")
    return names[:idx], names[idx + 1]


def lambda_form(
    tail: list[SExpression],
    env: Environment,
    evaluate_fn: EvaluatorFn,
    _: bool,
) -> LispValue:
    # (fn params body...) allows zero or more body forms.
    # Several forms become an implicit do; none makes the function return nil.
    if not tail:
        raise ArgumentError("fn requires at least a parameter list")

    params, rest = parse_params(tail[0])
    body_forms = tail[1:]

    if not body_forms:
        body = Nil
    elif len(body_forms) == 1:
        body = body_forms[0]
    else:
        body = List.of([Symbol("do"), *body_forms])

    return Closure(params, rest, body, env)
