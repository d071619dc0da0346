"""Built-in functions for the malt runtime environment.

This module defines list and collection processing, predicates, printing,
application helpers, and registration utilities exposed to malt code. The
arithmetic and comparison table lives in math_builtin.
"""
from __future__ import annotations

from typing import Callable

from malt import LispValue
from malt.errors import ArgumentError, MaltTypeError
from malt.evaluation.apply import apply as apply_engine
from malt.evaluation.evaluator import evaluate, evaluate0
from malt.printer import pr_str
from malt.builtin.math_builtin import MATH_BUILTINS
from malt.types.callables import Builtin
from malt.types.collections import List, Map, Vector
from malt.types.environment import Environment
from malt.types.nil import Nil
from malt.types.symbol import Keyword, Symbol
from malt.types.values import is_callable, is_int, is_map_key, is_number, is_sequential


def _arity(name: str, args: list[LispValue], n: int) -> None:
    if len(args) != n:
        raise ArgumentError(f"{name} requires exactly {n} argument(s), got {len(args)}")


def _sequence(name: str, value: LispValue) -> list[LispValue]:
    """Elements of a list, vector or nil; anything else is a type error."""
    if value is Nil:
        return []
    if not is_sequential(value):
        raise MaltTypeError(f"{name} expects a list or vector, got {pr_str(value)}")
    return list(value)


def _map_arg(name: str, value: LispValue) -> Map:
    if not isinstance(value, Map):
        raise MaltTypeError(f"{name} expects a map, got {pr_str(value)}")
    return value


def _pairs(name: str, items: list[LispValue]) -> list[tuple[LispValue, LispValue]]:
    if len(items) % 2:
        raise ArgumentError(f"{name} requires an even number of key/value arguments")
    pairs = list(zip(items[::2], items[1::2]))
    for k, _ in pairs:
        if not is_map_key(k):
            raise ArgumentError(f"{name}: invalid map key {pr_str(k)}")
    return pairs


# -------------------------------
# Constructors and predicates
# -------------------------------
def list_builtin(args: list[LispValue]) -> List:
    return List.of(args)


def vector_builtin(args: list[LispValue]) -> Vector:
    return Vector(args)


def hash_map(args: list[LispValue]) -> Map:
    return Map(_pairs("hash-map", args))


def _predicate(name: str, test: Callable[[LispValue], bool]):
    def predicate(args: list[LispValue]) -> bool:
        _arity(name, args, 1)
        return test(args[0])
    predicate.__name__ = name
    return predicate


def symbol_builtin(args: list[LispValue]) -> Symbol:
    _arity("symbol", args, 1)
    if not isinstance(args[0], str):
        raise MaltTypeError(f"symbol expects a string, got {pr_str(args[0])}")
    return Symbol(args[0])


def keyword_builtin(args: list[LispValue]) -> Keyword:
    _arity("keyword", args, 1)
    if isinstance(args[0], Keyword):
        return args[0]
    if not isinstance(args[0], str):
        raise MaltTypeError(f"keyword expects a string, got {pr_str(args[0])}")
    return Keyword(args[0])


# -------------------------------
# Sequence operations
# -------------------------------
def count(args: list[LispValue]) -> int:
    _arity("count", args, 1)
    value = args[0]
    if value is Nil:
        return 0
    if isinstance(value, (List, Vector, Map, str)):
        return len(value)
    raise MaltTypeError(f"count requires a countable argument, got {pr_str(value)}")


def is_empty(args: list[LispValue]) -> bool:
    return count(args) == 0


def cons(args: list[LispValue]) -> List:
    _arity("cons", args, 2)
    head, tail = args
    if isinstance(tail, List):
        return tail.cons(head)
    return List.of([head, *_sequence("cons", tail)])


def concat(args: list[LispValue]) -> List:
    items: list[LispValue] = []
    for seq in args:
        items.extend(_sequence("concat", seq))
    return List.of(items)


def first(args: list[LispValue]) -> LispValue:
    """First element of a list or vector; nil for nil or an empty sequence."""
    _arity("first", args, 1)
    value = args[0]
    if isinstance(value, List):
        return Nil if value.is_empty() else value.first
    if isinstance(value, Vector):
        return value.nth(0) if len(value) else Nil
    _sequence("first", value)
    return Nil


def rest(args: list[LispValue]) -> List:
    _arity("rest", args, 1)
    value = args[0]
    if isinstance(value, List):
        return value.rest
    return List.of(_sequence("rest", value)[1:])


def car(args: list[LispValue]) -> LispValue:
    _arity("car", args, 1)
    value = args[0]
    if not isinstance(value, List):
        raise MaltTypeError(f"car expects a list, got {pr_str(value)}")
    if value.is_empty():
        raise ArgumentError("car expects a non-empty list")
    return value.first


def cdr(args: list[LispValue]) -> List:
    _arity("cdr", args, 1)
    value = args[0]
    if not isinstance(value, List):
        raise MaltTypeError(f"cdr expects a list, got {pr_str(value)}")
    if value.is_empty():
        raise ArgumentError("cdr expects a non-empty list")
    return value.rest


def nth(args: list[LispValue]) -> LispValue:
    _arity("nth", args, 2)
    seq, index = args
    if not is_sequential(seq):
        raise MaltTypeError(f"nth expects a list or vector, got {pr_str(seq)}")
    if not is_int(index):
        raise MaltTypeError(f"nth index must be an integer, got {pr_str(index)}")
    if index < 0 or index >= len(seq):
        raise ArgumentError(f"nth: index {index} out of range")
    return seq.nth(index)


def conj_bang(args: list[LispValue]) -> Vector:
    """(conj! v x ...) appends to the vector in place and returns it."""
    if not args:
        raise ArgumentError("conj! requires a vector")
    vec = args[0]
    if not isinstance(vec, Vector):
        raise MaltTypeError(f"conj! expects a vector, got {pr_str(vec)}")
    for x in args[1:]:
        vec.append(x)
    return vec


# -------------------------------
# Map operations
# -------------------------------
def get(args: list[LispValue]) -> LispValue:
    """(get m k [default]) - nil (or default) when absent or when m is nil."""
    if len(args) not in (2, 3):
        raise ArgumentError("get requires a map, a key and an optional default")
    m, key = args[0], args[1]
    default = args[2] if len(args) == 3 else Nil
    if m is Nil or not is_map_key(key):
        return default
    return _map_arg("get", m).get(key, default)


def assoc(args: list[LispValue]) -> Map:
    if not args:
        raise ArgumentError("assoc requires a map")
    return _map_arg("assoc", args[0]).assoc(_pairs("assoc", args[1:]))


def contains(args: list[LispValue]) -> bool:
    _arity("contains?", args, 2)
    m, key = args
    return is_map_key(key) and key in _map_arg("contains?", m)


def keys(args: list[LispValue]) -> List:
    _arity("keys", args, 1)
    return List.of(_map_arg("keys", args[0]).keys())


def vals(args: list[LispValue]) -> List:
    _arity("vals", args, 1)
    return List.of(_map_arg("vals", args[0]).values())


# -------------------------------
# Strings and output
# -------------------------------
def pr_str_builtin(args: list[LispValue]) -> str:
    return " ".join(pr_str(a, True) for a in args)


def str_builtin(args: list[LispValue]) -> str:
    return "".join(pr_str(a, False) for a in args)


def prn(args: list[LispValue]):
    """Print arguments readably, space separated; returns nil."""
    print(" ".join(pr_str(a, True) for a in args))
    return Nil


def println(args: list[LispValue]):
    print(" ".join(pr_str(a, False) for a in args))
    return Nil


# -------------------------------
# Function application
# -------------------------------
def apply(args: list[LispValue]) -> LispValue:
    """(apply f a b [c d]) calls f with a, b, c and d."""
    if len(args) < 2:
        raise ArgumentError("apply requires at least 2 arguments: func and list of args")
    func = args[0]
    if not is_callable(func):
        raise MaltTypeError(f"apply expects a function, got {pr_str(func)}")
    call_args = list(args[1:-1]) + _sequence("apply", args[-1])
    return apply_engine(func, call_args, evaluate0)


BUILTINS: dict[str, Callable[[list[LispValue]], LispValue]] = {
    **MATH_BUILTINS,
    "list": list_builtin,
    "vector": vector_builtin,
    "hash-map": hash_map,
    "list?": _predicate("list?", lambda v: isinstance(v, List)),
    "vector?": _predicate("vector?", lambda v: isinstance(v, Vector)),
    "map?": _predicate("map?", lambda v: isinstance(v, Map)),
    "nil?": _predicate("nil?", lambda v: v is Nil),
    "true?": _predicate("true?", lambda v: v is True),
    "false?": _predicate("false?", lambda v: v is False),
    "number?": _predicate("number?", is_number),
    "string?": _predicate("string?", lambda v: isinstance(v, str)),
    "symbol?": _predicate("symbol?", lambda v: isinstance(v, Symbol)),
    "keyword?": _predicate("keyword?", lambda v: isinstance(v, Keyword)),
    "fn?": _predicate("fn?", is_callable),
    "symbol": symbol_builtin,
    "keyword": keyword_builtin,
    "count": count,
    "empty?": is_empty,
    "cons": cons,
    "concat": concat,
    "first": first,
    "rest": rest,
    "car": car,
    "cdr": cdr,
    "nth": nth,
    "conj!": conj_bang,
    "get": get,
    "assoc": assoc,
    "contains?": contains,
    "keys": keys,
    "vals": vals,
    "pr-str": pr_str_builtin,
    "str": str_builtin,
    "prn": prn,
    "println": println,
    "apply": apply,
}


# -------------------------------
# Registration
# -------------------------------
def register(env: Environment) -> None:
    """Install every builtin into `env`, plus an `eval` bound to its root scope."""
    env.update({Symbol(name): Builtin(name, fn) for name, fn in BUILTINS.items()})
    root = env.root()

    def eval_builtin(args: list[LispValue]) -> LispValue:
        _arity("eval", args, 1)
        return evaluate(args[0], root)

    env.set(Symbol("eval"), Builtin("eval", eval_builtin))


def default_env() -> Environment:
    """Build and return a fresh root environment populated with the builtins."""
    env = Environment()
    register(env)
    return env
