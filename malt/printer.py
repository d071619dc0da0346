"""Render values in malt's textual syntax.

With `readably=True` strings are re-quoted and re-escaped so the output reads
back as the same value; otherwise strings are written raw (used by `str` and
`println`).
"""

from __future__ import annotations

from malt import LispValue
from malt.types.callables import Builtin, Closure
from malt.types.collections import List, Map, Vector
from malt.types.nil import NilType
from malt.types.symbol import Keyword, Symbol


def escape(text: str) -> str:
    return (
        text.replace("\\", "\\\\")
        .replace('"', '\\"')
        .replace("\n", "\\n")
    )


def pr_str(obj: LispValue, readably: bool = True) -> str:
    if isinstance(obj, NilType):
        return "nil"
    if obj is True:
        return "true"
    if obj is False:
        return "false"
    if isinstance(obj, str):
        return f'"{escape(obj)}"' if readably else obj
    if isinstance(obj, (int, float, Symbol, Keyword)):
        return repr(obj) if isinstance(obj, float) else str(obj)
    if isinstance(obj, List):
        return "(" + " ".join(pr_str(x, readably) for x in obj) + ")"
    if isinstance(obj, Vector):
        return "[" + " ".join(pr_str(x, readably) for x in obj) + "]"
    if isinstance(obj, Map):
        parts = []
        for k, v in obj.items():
            parts.append(pr_str(k, readably))
            parts.append(pr_str(v, readably))
        return "{" + " ".join(parts) + "}"
    if isinstance(obj, (Builtin, Closure)):
        return repr(obj)
    return str(obj)
