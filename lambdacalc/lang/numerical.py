"""Natural numbers encoded as Church numerals. Note that arithmetic is not implemented here: it is written in lambdacalc
itself (e.g. Succ = λn.λf.λx.(f ((n f) x))), keeping everything as pure as possible. These helpers only convert between
Python ints and numeral terms.

Source: https://en.wikipedia.org/wiki/Church_encoding#Calculation_with_Church_numerals
"""

from lambdacalc.lang.error import GenericException
from lambdacalc.pure.term import Abstraction, Application, Variable


def cnumber(num):
    """Returns the Church numeral λf.λx.(f (f ... x)) of num (cnum = Church numeral)."""
    try:
        assert not isinstance(num, (float, bool))
        num = int(num)
        assert num >= 0
    except (AssertionError, TypeError, ValueError):
        raise GenericException("expected natural number, got '{}'", str(num), internal=True)

    body = Variable("x")
    for __ in range(num):
        body = Application(Variable("f"), body)
    return Abstraction("f", Abstraction("x", body))


def number(cnum):
    """Returns the int encoded by cnum, whatever its bound names are. If cnum isn't a Church numeral, returns None."""
    if not isinstance(cnum, Abstraction) or not isinstance(cnum.body, Abstraction):
        return None

    f, x = Variable(cnum.bound), Variable(cnum.body.bound)
    nth_body = cnum.body.body

    num = 0
    while isinstance(nth_body, Application):
        if nth_body.function != f or f == x:  # if f == x, f is shadowed by the inner binder
            return None
        nth_body = nth_body.argument
        num += 1

    return num if nth_body == x else None
