from malt import SExpression
from malt.types.environment import Environment


class TailCall:
    """Pending evaluation of `form` in `env`, returned from tail positions."""

    __slots__ = ("form", "env")

    def __init__(self, form: SExpression, env: Environment):
        self.form = form
        self.env = env
