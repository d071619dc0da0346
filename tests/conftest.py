import pytest

from malt.builtin.env_builtin import default_env
from malt.interpreter import Interpreter


@pytest.fixture
def env():
    """Fresh root environment with builtins loaded."""
    return default_env()


@pytest.fixture
def interp():
    """Interpreter with the core prelude loaded."""
    return Interpreter()


@pytest.fixture
def bare_interp():
    return Interpreter(prelude=None)
