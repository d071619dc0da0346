"""Predicates and structural equality shared by the reader, evaluator and builtins."""

from __future__ import annotations

import math

from malt import LispValue
from malt.types.callables import Builtin, Closure
from malt.types.collections import List, Map, Vector
from malt.types.nil import NilType, Nil
from malt.types.symbol import Keyword, Symbol

I64_MIN = -(2 ** 63)
I64_MAX = 2 ** 63 - 1


def is_truthy(value: LispValue) -> bool:
    """Only nil and false are falsy; 0, "" and () are all true."""
    return not (value is Nil or value is False)


def is_int(value: LispValue) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def is_number(value: LispValue) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def in_i64_range(n: int) -> bool:
    return I64_MIN <= n <= I64_MAX


def is_map_key(value: LispValue) -> bool:
    return is_number(value) or isinstance(value, (str, Keyword, Symbol))


def is_callable(value: LispValue) -> bool:
    return isinstance(value, (Builtin, Closure))


def is_sequential(value: LispValue) -> bool:
    return isinstance(value, (List, Vector))


def equal(a: LispValue, b: LispValue) -> bool:
    """Structural, variant-strict equality; callables compare by identity."""
    if a is b:
        return True
    if isinstance(a, bool) or isinstance(b, bool):
        return False
    if isinstance(a, float) and isinstance(b, float):
        return a == b or (math.isnan(a) and math.isnan(b))
    if type(a) != type(b):
        return False
    if isinstance(a, (List, Vector)):
        if len(a) != len(b):
            return False
        return all(equal(x, y) for x, y in zip(a, b))
    if isinstance(a, Map):
        if len(a) != len(b):
            return False
        for k, v in a.items():
            if k not in b or not equal(v, b.get(k)):
                return False
        return True
    if isinstance(a, (Builtin, Closure)):
        return False
    if isinstance(a, NilType):
        return True
    return a == b
