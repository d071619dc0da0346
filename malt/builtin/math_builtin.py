"""Arithmetic and comparison builtins.

Numeric rules:
- int op int stays int and must fit in a signed 64-bit integer;
- any float operand promotes the result to float;
- `/` of two ints is an int when exact and a float otherwise;
- `div` and `rem` take exactly two ints and truncate toward zero;
- a zero divisor is an ArgumentError, never an exception from Python or an infinity.
"""
from __future__ import annotations

import math
import operator
from typing import Callable

from malt import LispValue
from malt.errors import ArgumentError, MaltTypeError
from malt.printer import pr_str
from malt.types.values import equal, in_i64_range, is_int, is_number


def _number(name: str, value: LispValue) -> LispValue:
    if not is_number(value):
        raise MaltTypeError(f"{name}: attempt to perform arithmetic with {pr_str(value)}")
    return value


def _checked(name: str, value: LispValue) -> LispValue:
    if is_int(value) and not in_i64_range(value):
        raise ArgumentError(f"{name}: integer overflow")
    return value


def _is_zero(value: LispValue) -> bool:
    return value == 0


def _fold(name: str, op: Callable, start: LispValue, args: list[LispValue]) -> LispValue:
    result = start
    for x in args:
        result = _checked(name, op(result, _number(name, x)))
    return result


# -------------------------------
# Arithmetic
# -------------------------------
def add(args: list[LispValue]) -> LispValue:
    """Return the numeric sum of all arguments; (+) is 0."""
    return _fold("+", operator.add, 0, args)


def mul(args: list[LispValue]) -> LispValue:
    """Return the product of all arguments; (*) is 1."""
    return _fold("*", operator.mul, 1, args)


def sub(args: list[LispValue]) -> LispValue:
    """Subtract all subsequent numbers from the first; unary negation for one arg."""
    if not args:
        raise ArgumentError("- requires at least 1 argument")
    first = _number("-", args[0])
    if len(args) == 1:
        return _checked("-", -first)
    return _fold("-", operator.sub, first, args[1:])


def _divide(n: LispValue, m: LispValue) -> LispValue:
    if _is_zero(m):
        raise ArgumentError("/: division by zero")
    if is_int(n) and is_int(m):
        if n % m == 0:
            return _checked("/", n // m)
        return n / m
    return n / m


def div(args: list[LispValue]) -> LispValue:
    """Divide left-to-right; with one arg returns the reciprocal."""
    if not args:
        raise ArgumentError("/ requires at least 1 argument")
    result = _number("/", args[0])
    if len(args) == 1:
        return _divide(1, result)
    for x in args[1:]:
        result = _divide(result, _number("/", x))
    return result


def _int_pair(name: str, args: list[LispValue]) -> tuple[int, int]:
    if len(args) != 2 or not all(is_int(a) for a in args):
        shown = " ".join(pr_str(a) for a in args)
        raise ArgumentError(f"{name} requires exactly two integer arguments, got ({shown})")
    n, m = args
    if m == 0:
        raise ArgumentError(f"{name}: division by zero")
    return n, m


def _trunc_div(n: int, m: int) -> int:
    q = abs(n) // abs(m)
    return -q if (n < 0) != (m < 0) else q


def idiv(args: list[LispValue]) -> LispValue:
    """(div n d): integer quotient truncated toward zero."""
    n, m = _int_pair("div", args)
    return _checked("div", _trunc_div(n, m))


def rem(args: list[LispValue]) -> LispValue:
    """(rem n d): remainder with the sign of n, so (+ (* d (div n d)) (rem n d)) is n."""
    n, m = _int_pair("rem", args)
    return n - m * _trunc_div(n, m)


def sqrt(args: list[LispValue]) -> LispValue:
    if len(args) != 1:
        raise ArgumentError("sqrt requires exactly 1 argument")
    x = _number("sqrt", args[0])
    if x < 0:
        raise ArgumentError(f"sqrt of negative number {pr_str(x)}")
    return math.sqrt(x)


# -------------------------------
# Comparison
# -------------------------------
def _comparison(name: str, op: Callable[[LispValue, LispValue], bool]):
    def compare(args: list[LispValue]) -> bool:
        """Chainable numeric comparison: true if it holds for every adjacent pair."""
        if not args:
            raise ArgumentError(f"{name} requires at least 1 argument")
        for a in args:
            _number(name, a)
        return all(op(a, b) for a, b in zip(args, args[1:]))
    compare.__name__ = name
    return compare


lt = _comparison("<", operator.lt)
lte = _comparison("<=", operator.le)
gt = _comparison(">", operator.gt)
gte = _comparison(">=", operator.ge)


def equals(args: list[LispValue]) -> bool:
    """True if all arguments are structurally equal."""
    if not args:
        raise ArgumentError("= requires at least 1 argument")
    first = args[0]
    return all(equal(first, other) for other in args[1:])


MATH_BUILTINS: dict[str, Callable[[list[LispValue]], LispValue]] = {
    "+": add,
    "-": sub,
    "*": mul,
    "/": div,
    "div": idiv,
    "rem": rem,
    "sqrt": sqrt,
    "<": lt,
    "<=": lte,
    ">": gt,
    ">=": gte,
    "=": equals,
}
