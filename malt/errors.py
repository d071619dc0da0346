from __future__ import annotations

from malt import LispValue
from malt.config import get_max_error_context


class MaltError(Exception):
    """ Base class for all malt errors"""

    # Cap on collected "in form" notes; None reads MALT_MAX_ERROR_CONTEXT when checked
    max_context: int | None = None

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message
        self.context: list[str] = []

    @property
    def context_full(self) -> bool:
        limit = self.max_context if self.max_context is not None else get_max_error_context()
        return len(self.context) >= limit

    def add_context(self, note: str) -> None:
        """Record an outer form the error propagated through (innermost first)."""
        if not self.context_full:
            self.context.append(note)

    def __str__(self) -> str:
        if not self.context:
            return self.message
        lines = [self.message]
        lines.extend(f"  in form {note}" for note in self.context)
        return "\n".join(lines)


class ReadError(MaltError):
    """ Raised when source text is malformed"""


class ArgumentError(MaltError):
    """ Raised when a form or builtin receives the wrong number or kind of arguments"""


class MaltTypeError(MaltError):
    """ Raised when a value is used where a different shape is required"""


class EvalError(MaltError):
    """ Raised when evaluation itself fails"""


class UnboundSymbolError(EvalError):
    """ Raised when a symbol is used before it is bound"""

    def __init__(self, symbol):
        super().__init__(f"symbol not found: {symbol}")
        self.symbol = symbol


class NotCallableError(EvalError):
    """ Raised when the head of an application is not a function"""

    def __init__(self, value: LispValue, printed: str):
        super().__init__(f"not callable: {printed}")
        self.value = value
