from malt.types.nil import Nil, NilType
from malt.types.symbol import Keyword, Symbol
from malt.types.environment import Environment
from malt.types.callables import Builtin, Closure
from malt.types.collections import EMPTY, List, Map, Vector

__all__ = [
    "Nil",
    "NilType",
    "Keyword",
    "Symbol",
    "Environment",
    "Builtin",
    "Closure",
    "EMPTY",
    "List",
    "Map",
    "Vector",
]
