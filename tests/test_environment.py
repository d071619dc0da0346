import pytest

from malt.errors import MaltTypeError, UnboundSymbolError
from malt.types.environment import Environment
from malt.types.symbol import Symbol

X = Symbol("x")
Y = Symbol("y")


@pytest.fixture
def root():
    env = Environment()
    env.set(X, 1)
    return env


def test_set_returns_value_and_get_finds_it(root):
    assert root.set(Y, "v") == "v"
    assert root.get(Y) == "v"


def test_child_sees_parent_bindings(root):
    child = Environment.child_of(root)
    assert child.get(X) == 1
    assert child.find(X) is root


def test_child_binding_shadows_without_touching_parent(root):
    child = Environment.child_of(root)
    child.set(X, 2)
    assert child.get(X) == 2
    assert root.get(X) == 1


def test_rebinding_in_same_scope_overwrites(root):
    root.set(X, 5)
    assert root.get(X) == 5


def test_unbound_symbol_raises(root):
    child = Environment.child_of(root)
    with pytest.raises(UnboundSymbolError) as exc:
        child.get(Symbol("missing"))
    assert exc.value.symbol == Symbol("missing")
    assert "symbol not found: missing" in str(exc.value)
    assert child.find(Symbol("missing")) is None


def test_set_rejects_non_symbols(root):
    with pytest.raises(MaltTypeError):
        root.set("x", 1)


def test_bind_creates_populated_child(root):
    env = Environment.bind(root, [(Y, 10)])
    assert env.outer is root
    assert env.get(Y) == 10
    assert env.get(X) == 1
    assert Y not in root.vars


def test_update_and_root(root):
    child = Environment.child_of(Environment.child_of(root))
    child.update({Symbol("a"): 1, Symbol("b"): 2})
    assert child.get(Symbol("b")) == 2
    assert child.root() is root
    assert root.root() is root


def test_str_and_repr(root):
    child = Environment.child_of(root)
    child.set(Y, 3)
    assert str(child) == "{y: 3} -> ..."
    assert repr(child) == "<Environment 1 bindings, depth 1>"
