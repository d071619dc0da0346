"""Callable values: native builtins and user-defined closures."""

from __future__ import annotations

from io import StringIO
from typing import Callable

from malt import SExpression, LispValue
from malt.errors import ArgumentError
from malt.types.collections import List
from malt.types.environment import Environment
from malt.types.symbol import Symbol


class Builtin:
    """A named, stateless native function over a list of evaluated arguments."""

    __slots__ = ("name", "fn")

    def __init__(self, name: str, fn: Callable[[list[LispValue]], LispValue]):
        self.name = name
        self.fn = fn

    def __call__(self, args: list[LispValue]) -> LispValue:
        return self.fn(args)

    def __repr__(self) -> str:
        return f"#<builtin {self.name}>"


class Closure:
    """A first-class function with parameters, body, and closure env."""

    __slots__ = ("params", "rest", "body", "env", "name")

    def __init__(
        self,
        params: list[Symbol],
        rest: Symbol | None,
        body: SExpression,
        env: Environment,
        name: str | None = None,
    ):
        self.params: list[Symbol] = params
        # Receives the remaining arguments as a list when set
        self.rest: Symbol | None = rest
        self.body: SExpression = body
        self.env: Environment = env
        self.name = name

    def __str__(self) -> str:
        with StringIO() as buffer:
            buffer.write("#<fn ")
            if self.name:
                buffer.write(f"{self.name} ")
            if self.rest is not None and not self.params:
                buffer.write(str(self.rest))
            else:
                buffer.write("(")
                buffer.write(" ".join(str(p) for p in self.params))
                if self.rest is not None:
                    buffer.write(f" & {self.rest}")
                buffer.write(")")
            buffer.write(">")
            return buffer.getvalue()

    def __repr__(self) -> str:
        return str(self)

    def bind_arguments(self, args: list[LispValue]) -> Environment:
        """
        Bind the given argument values to this closure's parameters and
        return a new Environment for evaluating the body.

        The captured environment is only ever the parent of the new scope.
        """
        arity = len(self.params)
        if len(args) < arity or (self.rest is None and len(args) > arity):
            expected = f"at least {arity}" if self.rest is not None else str(arity)
            raise ArgumentError(
                f"{self} expects {expected} argument(s), got {len(args)}"
            )
        bindings = list(zip(self.params, args))
        if self.rest is not None:
            bindings.append((self.rest, List.of(args[arity:])))
        return Environment.bind(self.env, bindings)
