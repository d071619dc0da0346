"""
  malt Reader, Lexer and Parser

- Streaming, lazy parsing: tokens are produced by generators and pulled one at
  a time, so a form may span several input lines.
- Emits malt values directly; the parsed form is the value the evaluator sees:

    - nil / true / false -> Nil / True / False (any letter case)
    - integers -> int (signed 64-bit; larger digit runs read as float)
    - decimals / exponents -> float
    - "text" -> str (escapes: \\" \\\\ \\n)
    - :name -> Keyword
    - other atoms -> Symbol
    - ( ... ) -> List,  [ ... ] -> Vector,  { k v ... } -> Map
    - 'x `x ~x ~@x -> (quote x) (quasiquote x) (unquote x) (splice-unquote x)

read_form returns None when the input is exhausted between forms and raises
ReadError when it ends in the middle of one.
"""

from __future__ import annotations

import logging
import re
from typing import Iterable, Iterator, NamedTuple, Optional

from malt import SExpression
from malt.errors import ReadError
from malt.printer import pr_str
from malt.types.collections import EMPTY, Map, Vector
from malt.types.nil import Nil
from malt.types.symbol import Keyword, Symbol
from malt.types.values import in_i64_range, is_map_key

logger = logging.getLogger(__name__)


TOKEN_RE = re.compile(
    r"[\s,]*(?:"
    r"(?P<comment>;[^\n]*)"  # single-line comment
    r"|(?P<splice_unquote>~@)"  # ~@
    r"|(?P<quote>['`~])"  # ' ` ~
    r"|(?P<lparen>\()"  # (
    r"|(?P<rparen>\))"  # )
    r"|(?P<lbracket>\[)"  # [
    r"|(?P<rbracket>\])"  # ]
    r"|(?P<lbrace>\{)"  # {
    r"|(?P<rbrace>\})"  # }
    r'|(?P<string>"(?:\\.|[^\\"])*"?)'  # double-quoted strings, maybe unterminated
    r'|(?P<atom>[^\s\[\]{}(\'",;)]+)'  # fallback: numbers, symbols, keywords, ...
    r")"
)

INT_RE = re.compile(r"[+-]?[0-9]+")
FLOAT_RE = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")
STRING_RE = re.compile(r'"(?:\\.|[^\\"])*"')
ESCAPE_RE = re.compile(r"\\(.)", re.DOTALL)

ESCAPES: dict[str, str] = {
    '"': '"',
    "\\": "\\",
    "n": "\n",
}

LITERALS = {
    "nil": Nil,
    "true": True,
    "false": False,
}

QUOTE_FORMS: dict[str, Symbol] = {
    "'": Symbol("quote"),
    "`": Symbol("quasiquote"),
    "~": Symbol("unquote"),
    "~@": Symbol("splice-unquote"),
}

CLOSERS = {"rparen": ")", "rbracket": "]", "rbrace": "}"}

# Deepest collection or quote nesting a single form may have
MAX_DEPTH = 256


class Token(NamedTuple):
    kind: str
    text: str


def lex(source: str) -> Iterator[Token]:
    """Token generator: yields Token(kind, text); comments are dropped."""
    pos = 0
    n = len(source)
    while pos < n:
        m = TOKEN_RE.match(source, pos)
        if m is None or m.end() == pos:
            # only separators remain
            break
        pos = m.end()
        kind = m.lastgroup
        if kind == "comment":
            continue
        yield Token(kind, m.group(kind))


def lex_lines(lines: Iterable[str]) -> Iterator[Token]:
    """Lazily tokenize an iterable of lines, pulling a line only when needed."""
    for line in lines:
        yield from lex(line)


def read_string(text: str) -> str:
    if not STRING_RE.fullmatch(text):
        raise ReadError(f"unbalanced string: {text}")

    def _unescape(m: re.Match) -> str:
        ch = m.group(1)
        if ch not in ESCAPES:
            raise ReadError(f"invalid escape sequence: \\{ch}")
        return ESCAPES[ch]

    return ESCAPE_RE.sub(_unescape, text[1:-1])


def read_atom(text: str) -> SExpression:
    if INT_RE.fullmatch(text):
        n = int(text)
        if in_i64_range(n):
            return n
        return float(text)
    if FLOAT_RE.fullmatch(text):
        return float(text)
    lowered = text.lower()
    if lowered in LITERALS:
        return LITERALS[lowered]
    if text.startswith(":") and len(text) > 1:
        return Keyword(text)
    return Symbol(text)


class TokenStream:
    def __init__(self, token_iter: Iterable[Token]):
        self.tokens = iter(token_iter)
        self.buffer: list[Token] = []

    def peek(self) -> tuple[Optional[str], Optional[str]]:
        if not self.buffer:
            try:
                self.buffer.append(next(self.tokens))
            except StopIteration:
                return None, None
        return self.buffer[0]

    def advance(self) -> tuple[Optional[str], Optional[str]]:
        if self.buffer:
            return self.buffer.pop(0)
        return next(self.tokens, (None, None))

    def read_form(self) -> Optional[SExpression]:
        """Read one form; None means the input ended cleanly between forms."""
        try:
            return self._read_form()
        except RecursionError as exc:
            raise ReadError("input nested too deeply") from exc

    def _read_form(self, depth: int = 0) -> Optional[SExpression]:
        if depth > MAX_DEPTH:
            raise ReadError("input nested too deeply")
        tok_type, tok_val = self.advance()
        logger.debug("next token: %s %r", tok_type, tok_val)
        if tok_type is None:
            return None

        if tok_type == "lparen":
            items = self._read_until("rparen", depth)
            form = EMPTY
            while items:
                form = form.cons(items.pop())
            return form

        if tok_type == "lbracket":
            return Vector(self._read_until("rbracket", depth))

        if tok_type == "lbrace":
            return self._read_map(depth)

        if tok_type in CLOSERS:
            raise ReadError(f"unexpected '{tok_val}'")

        # Quote forms
        if tok_type in ("quote", "splice_unquote"):
            expr = self._read_form(depth + 1)
            if expr is None:
                raise ReadError("unexpected end of input")
            return EMPTY.cons(expr).cons(QUOTE_FORMS[tok_val])

        if tok_type == "string":
            return read_string(tok_val)

        return read_atom(tok_val)

    def _read_until(self, closer: str, depth: int) -> list[SExpression]:
        items: list[SExpression] = []
        while True:
            tok_type, _ = self.peek()
            if tok_type is None:
                raise ReadError("unexpected end of input")
            if tok_type == closer:
                self.advance()
                return items
            items.append(self._read_form(depth + 1))

    def _read_map(self, depth: int) -> Map:
        items = self._read_until("rbrace", depth)
        if len(items) % 2:
            raise ReadError("map literal requires an even number of forms")
        result = Map()
        for key, value in zip(items[::2], items[1::2]):
            if not is_map_key(key):
                raise ReadError(f"invalid map key: {pr_str(key)}")
            result.insert(key, value)
        return result

    def read_all(self) -> Iterator[SExpression]:
        while (form := self.read_form()) is not None:
            yield form


class Reader:
    """Reads forms from a supplier of text lines (e.g. a line editor).

    A new line is requested only when the current one is used up, so a form
    left open at the end of a line continues on the next.
    """

    def __init__(self, lines: Iterable[str]):
        self._lines = iter(lines)
        self._current: Iterator[Token] = iter(())
        self.stream = TokenStream(self._tokens())

    def _tokens(self) -> Iterator[Token]:
        while True:
            tok = next(self._current, None)
            if tok is not None:
                yield tok
                continue
            line = next(self._lines, None)
            if line is None:
                return
            self._current = lex(line)

    def read_form(self) -> Optional[SExpression]:
        return self.stream.read_form()

    def discard(self) -> None:
        """Drop the rest of the current line; used to resynchronise after a ReadError."""
        self._current = iter(())
        self.stream.buffer.clear()

    def __iter__(self) -> Iterator[SExpression]:
        return self.stream.read_all()


def read_str(source: str) -> Optional[SExpression]:
    """Read the first form of `source`, or None if it holds no form."""
    return TokenStream(lex(source)).read_form()


def read_all(source: str) -> Iterator[SExpression]:
    return TokenStream(lex(source)).read_all()
