"""Runtime environment for malt.

The Environment stores bindings of Symbols to evaluated values and supports
nested scopes via an `outer` link. A child scope is created for every function
call and every let block; closures keep their defining scope alive by holding a
reference to it. Links only ever point outward, so chains never form cycles.
"""

from __future__ import annotations

import threading
from io import StringIO
from typing import Iterable, Optional

from malt import LispValue
from malt.errors import MaltTypeError, UnboundSymbolError
from malt.types.symbol import Symbol


class Environment:
    """Hierarchical mapping from Symbols to values."""

    __slots__ = ("vars", "outer", "_lock")

    def __init__(self, outer: Optional[Environment] = None):
        self.vars: dict[Symbol, LispValue] = {}
        self.outer: Environment | None = outer
        # Serialises writers; readers rely on single dict lookups
        self._lock = threading.Lock()

    @classmethod
    def child_of(cls, outer: Environment) -> Environment:
        """Allocate a new empty scope whose parent is `outer`."""
        return cls(outer)

    @classmethod
    def bind(
        cls, outer: Environment, bindings: Iterable[tuple[Symbol, LispValue]]
    ) -> Environment:
        """Child scope of `outer` pre-populated with `bindings` (used for calls)."""
        env = cls(outer)
        for name, value in bindings:
            env.set(name, value)
        return env

    def set(self, name: Symbol, value: LispValue) -> LispValue:
        """Bind `name` to `value` in this scope only; ancestors are never touched.

        Raises MaltTypeError if `name` is not a Symbol.
        """
        if not isinstance(name, Symbol):
            raise MaltTypeError(f"cannot bind non-symbol {name!r}")
        with self._lock:
            self.vars[name] = value
        return value

    def find(self, symbol: Symbol) -> Optional[Environment]:
        """Find the nearest environment in the chain that contains `symbol`."""
        env: Optional[Environment] = self
        while env is not None:
            if symbol in env.vars:
                return env
            env = env.outer
        return None

    def get(self, name: Symbol) -> LispValue:
        """Look up the value bound to `name`; the innermost binding wins.

        Raises UnboundSymbolError if no scope in the chain defines it.
        """
        env = self.find(name)
        if env is None:
            raise UnboundSymbolError(name)
        return env.vars[name]

    def update(self, mapping: dict[Symbol, LispValue]) -> None:
        """Bulk-define a mapping of Symbol -> value in the current frame."""
        for k, v in mapping.items():
            self.set(k, v)

    def root(self) -> Environment:
        env = self
        while env.outer is not None:
            env = env.outer
        return env

    def _write_vars(self, buffer: StringIO) -> None:
        """Write this frame's variables into the buffer in a compact form."""
        buffer.write("{")
        first = True
        for k, v in self.vars.items():
            if not first:
                buffer.write(", ")
            buffer.write(f"{k}: {v!r}")
            first = False
        buffer.write("}")

    def __str__(self) -> str:
        """Human-readable single-frame view with an indicator for parent."""
        with StringIO() as buffer:
            self._write_vars(buffer)
            if self.outer is not None:
                buffer.write(" -> ...")  # indicate parent exists
            return buffer.getvalue()

    def __repr__(self) -> str:
        depth = 0
        env = self.outer
        while env is not None:
            depth += 1
            env = env.outer
        return f"<Environment {len(self.vars)} bindings, depth {depth}>"
