"""Registry of special forms for the malt evaluator.

Maps Symbols to handler functions that implement non-standard evaluation rules.
The evaluator consults this table to dispatch special forms before ordinary
function application. Every handler has the signature

    handler(tail, env, evaluate_fn, is_tail_call) -> value | TailCall

where `tail` is the list of unevaluated argument forms.
"""

from malt.types.symbol import Symbol
from malt.evaluation.special_forms.define_form import define_form
from malt.evaluation.special_forms.let_form import let_form
from malt.evaluation.special_forms.progn_form import progn_form
from malt.evaluation.special_forms.if_form import if_form
from malt.evaluation.special_forms.lambda_form import lambda_form
from malt.evaluation.special_forms.quote_forms import (
    quote_form,
    quasiquote_form,
    unquote_form,
    splice_unquote_form,
)

SPECIAL_FORMS = {
    Symbol("def!"): define_form,
    Symbol("let"): let_form,
    Symbol("let*"): let_form,
    Symbol("do"): progn_form,
    Symbol("if"): if_form,
    Symbol("fn"): lambda_form,
    Symbol("fn*"): lambda_form,
    Symbol("quote"): quote_form,
    Symbol("quasiquote"): quasiquote_form,
    Symbol("unquote"): unquote_form,
    Symbol("splice-unquote"): splice_unquote_form,
}
