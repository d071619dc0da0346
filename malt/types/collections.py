"""Collection values: List, Vector and Map.

- List wraps a pyrsistent plist: a persistent singly linked list that is both
  runtime data and code. The empty list is the EMPTY singleton.
- Vector is a growable sequence shared by reference and mutable in place; a
  per-instance lock serialises writers.
- Map is an insertion-ordered association whose keys are atoms
  (numbers, strings, keywords, symbols).
"""

from __future__ import annotations

import threading
from itertools import islice
from typing import Iterable, Iterator

import pyrsistent as pr

from malt import LispValue
from malt.errors import MaltTypeError


class List:
    __slots__ = ("_impl", "_len")

    def __init__(self, impl: pr.PList | None = None, length: int = 0):
        self._impl = impl if impl is not None else pr.plist()
        # plist counts by walking, so the length travels with the wrapper
        self._len = length

    @classmethod
    def of(cls, items: Iterable[LispValue]) -> List:
        items = list(items)
        return cls(pr.plist(items), len(items)) if items else EMPTY

    def cons(self, value: LispValue) -> List:
        return List(self._impl.cons(value), self._len + 1)

    def is_empty(self) -> bool:
        return self._len == 0

    @property
    def first(self) -> LispValue:
        if not self._len:
            raise MaltTypeError("first of an empty list")
        return self._impl.first

    @property
    def rest(self) -> List:
        if self._len <= 1:
            return EMPTY
        return List(self._impl.rest, self._len - 1)

    def nth(self, index: int) -> LispValue:
        for item in islice(self._impl, index, None):
            return item
        raise IndexError(index)

    def __iter__(self) -> Iterator[LispValue]:
        return iter(self._impl)

    def __len__(self) -> int:
        return self._len

    def __eq__(self, other) -> bool:
        from malt.types.values import equal
        return isinstance(other, List) and equal(self, other)

    __hash__ = None

    def __repr__(self) -> str:
        from malt.printer import pr_str
        return pr_str(self)


EMPTY = List()


class Vector:
    __slots__ = ("_items", "_lock")

    def __init__(self, items: Iterable[LispValue] = ()):
        self._items: list[LispValue] = list(items)
        self._lock = threading.Lock()

    def append(self, value: LispValue) -> None:
        with self._lock:
            self._items.append(value)

    def snapshot(self) -> list[LispValue]:
        with self._lock:
            return list(self._items)

    def nth(self, index: int) -> LispValue:
        with self._lock:
            return self._items[index]

    def __iter__(self) -> Iterator[LispValue]:
        return iter(self.snapshot())

    def __len__(self) -> int:
        return len(self._items)

    def __eq__(self, other) -> bool:
        from malt.types.values import equal
        return isinstance(other, Vector) and equal(self, other)

    __hash__ = None

    def __repr__(self) -> str:
        from malt.printer import pr_str
        return pr_str(self)


def _slot(key: LispValue) -> tuple[type, LispValue]:
    # 1 and 1.0 hash alike in Python; the type keeps them in separate slots
    return type(key), key


class Map:
    __slots__ = ("_data", "_lock")

    def __init__(self, pairs: Iterable[tuple[LispValue, LispValue]] = ()):
        # slot -> (key, value)
        self._data: dict[tuple[type, LispValue], tuple[LispValue, LispValue]] = {}
        self._lock = threading.Lock()
        for k, v in pairs:
            self.insert(k, v)

    def insert(self, key: LispValue, value: LispValue) -> None:
        from malt.types.values import is_map_key
        if not is_map_key(key):
            raise MaltTypeError(f"invalid map key: {key!r}")
        with self._lock:
            self._data[_slot(key)] = (key, value)

    def assoc(self, pairs: Iterable[tuple[LispValue, LispValue]]) -> Map:
        """Return a new Map with `pairs` added; this map is left unchanged."""
        result = Map(self.items())
        for k, v in pairs:
            result.insert(k, v)
        return result

    def get(self, key: LispValue, default: LispValue = None) -> LispValue:
        entry = self._data.get(_slot(key))
        return default if entry is None else entry[1]

    def items(self) -> list[tuple[LispValue, LispValue]]:
        with self._lock:
            return list(self._data.values())

    def keys(self) -> list[LispValue]:
        return [k for k, _ in self.items()]

    def values(self) -> list[LispValue]:
        return [v for _, v in self.items()]

    def __contains__(self, key) -> bool:
        return _slot(key) in self._data

    def __len__(self) -> int:
        return len(self._data)

    def __eq__(self, other) -> bool:
        from malt.types.values import equal
        return isinstance(other, Map) and equal(self, other)

    __hash__ = None

    def __repr__(self) -> str:
        from malt.printer import pr_str
        return pr_str(self)
