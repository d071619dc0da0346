"""
Line-oriented REPL for malt.

`repl` is the testable core: it pulls lines from any iterable, reads forms as
soon as they are complete (a form may span several lines), evaluates them in
one Interpreter and yields the text to show for each. Errors are reported and
the loop carries on; a malformed line is dropped so reading resumes cleanly on
the next one.

`main` wires it to the terminal and is installed as the `malt` console script.
"""

from __future__ import annotations

import logging
import sys
from typing import Iterable, Iterator

from malt.config import get_log_level, get_prompt
from malt.errors import MaltError, ReadError
from malt.interpreter import Interpreter
from malt.reader.parser import Reader

logger = logging.getLogger(__name__)


def format_error(err: MaltError) -> str:
    return f"error: {err}"


def repl(lines: Iterable[str], interp: Interpreter | None = None) -> Iterator[str]:
    """Evaluate every form found in `lines`, yielding one output string per form."""
    interp = interp if interp is not None else Interpreter()
    reader = Reader(lines)
    while True:
        try:
            form = reader.read_form()
        except ReadError as err:
            reader.discard()
            yield format_error(err)
            continue
        if form is None:
            return
        try:
            yield interp.show(interp.eval_form(form))
        except MaltError as err:
            logger.debug("evaluation failed: %s", err.message)
            yield format_error(err)


def _terminal_lines(prompt: str) -> Iterator[str]:
    while True:
        try:
            yield input(prompt)
        except EOFError:
            print()
            return


def main() -> int:
    logging.basicConfig(
        level=get_log_level(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        import readline  # noqa: F401  line editing and history for input()
    except ImportError:
        pass

    try:
        for output in repl(_terminal_lines(get_prompt())):
            print(output)
    except KeyboardInterrupt:
        print()
    return 0


if __name__ == "__main__":
    sys.exit(main())
