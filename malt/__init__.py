# Core type aliases for malt's data model.
# Atoms are plain Python values (int, float, str, bool) plus the Nil, Symbol and Keyword
# types; collections are the List, Vector and Map wrappers in malt.types.collections.
#
# Naming guidance:
# - SExpression: use in reader/parser code to denote syntactic forms (code-as-data).
# - LispValue:  use in evaluator/runtime code to denote evaluated values.
# Both aliases resolve to `Any`; forms and values share one representation.

from typing import Any, Callable

# Runtime value alias
LispValue = Any
# Forms alias (code is data)
SExpression = LispValue

# Evaluator function type passed to special forms: (form, env, is_tail_call) -> value
EvaluatorFn = Callable[..., LispValue]

__version__ = "0.1.0"
