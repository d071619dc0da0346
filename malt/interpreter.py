from __future__ import annotations

import logging
from typing import Iterator, Literal

from malt import SExpression, LispValue
from malt.builtin.env_builtin import default_env
from malt.config import get_prelude_root
from malt.errors import EvalError, MaltError
from malt.evaluation.evaluator import evaluate
from malt.printer import pr_str
from malt.reader.parser import read_all
from malt.types.nil import Nil

logger = logging.getLogger(__name__)

PRELUDE_FILE = "core.malt"


def load_prelude(interp: Interpreter) -> None:
    """Evaluate core.malt from the configured prelude directory."""
    path = get_prelude_root() / PRELUDE_FILE
    code = path.read_text(encoding="utf-8")
    interp.eval_prelude(code)
    logger.info("loaded prelude from %s", path)


class Interpreter:
    """
    Orchestrates reading and evaluating malt code.
    Maintains one root Environment across calls; separate instances share nothing.
    """

    def __init__(self, prelude: str | None | Literal['auto'] = 'auto'):
        self.env = default_env()

        if prelude is None:
            pass  # explicit: no prelude
        elif prelude == 'auto':
            try:
                load_prelude(self)
            except FileNotFoundError:
                # Be permissive: no prelude found -> proceed
                logger.warning("prelude %s not found; continuing without it", PRELUDE_FILE)
        elif prelude:
            self.eval_prelude(prelude)

    def eval_prelude(self, code: str) -> None:
        for expr in read_all(code):
            self.eval_form(expr)

    def eval_form(self, expr: SExpression) -> LispValue:
        """Evaluate one parsed form in the root environment."""
        try:
            return evaluate(expr, self.env)
        except RecursionError as exc:
            # Non-tail recursion is bounded by the host stack
            raise EvalError("maximum recursion depth exceeded") from exc

    def eval_iter(self, code: str) -> Iterator[LispValue]:
        """Yield the value of each top-level form in `code`."""
        for expr in read_all(code):
            yield self.eval_form(expr)

    def eval(self, code: str) -> LispValue:
        """Evaluate every form in `code` and return the last value (nil if none)."""
        result: LispValue = Nil
        for result in self.eval_iter(code):
            pass
        return result

    def show(self, value: LispValue) -> str:
        """Print `value` readably; a value too deep to print is an EvalError."""
        try:
            return pr_str(value)
        except RecursionError as exc:
            raise EvalError("value nested too deeply to print") from exc

    def rep(self, code: str) -> str:
        """Read, evaluate and print: one output line per form, errors included."""
        outputs: list[str] = []
        try:
            for value in self.eval_iter(code):
                outputs.append(self.show(value))
        except MaltError as err:
            logger.debug("evaluation failed: %s", err.message)
            outputs.append(f"error: {err}")
        return "\n".join(outputs)
