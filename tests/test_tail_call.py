import pytest

from malt.errors import EvalError
from malt.types.symbol import Keyword


def test_tail_recursive_countdown_runs_in_constant_stack(bare_interp):
    bare_interp.eval("(def! count-down (fn [n acc] (if (= n 0) acc (count-down (- n 1) (+ acc 1)))))")
    assert bare_interp.eval("(count-down 100000 0)") == 100000


def test_non_tail_recursion_reports_recursion_depth(bare_interp):
    bare_interp.eval("(def! f (fn [n] (if (= n 0) 0 (+ 1 (f (- n 1))))))")
    assert bare_interp.eval("(f 100)") == 100
    with pytest.raises(EvalError) as exc:
        bare_interp.eval("(f 100000)")
    assert "recursion depth" in exc.value.message


def test_interpreter_is_usable_after_recursion_error(bare_interp):
    bare_interp.eval("(def! f (fn [n] (if (= n 0) 0 (+ 1 (f (- n 1))))))")
    with pytest.raises(EvalError):
        bare_interp.eval("(f 100000)")
    assert bare_interp.eval("(f 10)") == 10


def test_tail_position_through_do_let_and_if(bare_interp):
    bare_interp.eval("""
    (def! spin
      (fn [n]
        (if (= n 0)
          :done
          (do
            (+ 1 1)
            (let [m (- n 1)]
              (spin m))))))
    """)
    assert bare_interp.eval("(spin 50000)") == Keyword("done")


def test_mutual_tail_recursion(bare_interp):
    bare_interp.eval("(def! ev? (fn [n] (if (= n 0) true (od? (- n 1)))))")
    bare_interp.eval("(def! od? (fn [n] (if (= n 0) false (ev? (- n 1)))))")
    assert bare_interp.eval("(ev? 50000)") is True


def test_recursion_through_apply_builtin(bare_interp):
    bare_interp.eval("(def! g (fn [n] (if (= n 0) :ok (apply g (list (- n 1))))))")
    assert bare_interp.eval("(g 50)") == Keyword("ok")


def test_variadic_tail_recursion(bare_interp):
    bare_interp.eval("(def! total (fn [acc & xs] (if (empty? xs) acc (apply total (+ acc (first xs)) (rest xs)))))")
    assert bare_interp.eval("(total 0 1 2 3 4)") == 10
