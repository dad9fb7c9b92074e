"""Capture-avoiding substitution over de Bruijn terms.

Every function here builds a new tree and leaves its arguments untouched. A value inserted under binders is
re-shifted by the number of binders it crosses, so its free variables keep pointing outside the term and can never be
captured by the abstractions they are inserted under.

Sources: https://en.wikipedia.org/wiki/De_Bruijn_index,
         Pierce, Types and Programming Languages, chapter 6.
"""

from lambda_calculus.error import NotAbstraction, NotApplication
from lambda_calculus.term import Abstraction, Application, Variable, application


def shift(term, delta, cutoff=1):
    """Returns term with every index >= cutoff moved by delta. cutoff grows by one under each abstraction, so only
    variables that are free in term at the top are renumbered.
    """
    if isinstance(term, Variable):
        if term.index >= cutoff:
            return Variable(term.index + delta)
        return Variable(term.index)
    elif isinstance(term, Abstraction):
        return Abstraction(shift(term.body, delta, cutoff + 1))
    head, arguments = term.spine()
    return application(shift(head, delta, cutoff), *(shift(argument, delta, cutoff) for argument in arguments))


def substitute(term, index, value):
    """Replaces the variable bound index binders outside term with value, closing the gap that binder leaves: indices
    beyond it are decremented by one. value is interpreted in the context outside that binder.
    """
    return _substitute(term, index, value, 0)


def _substitute(term, index, value, depth):
    if isinstance(term, Variable):
        target = index + depth
        if term.index == target:
            return shift(value, depth)
        elif term.index > target:
            return Variable(term.index - 1)
        return Variable(term.index)
    elif isinstance(term, Abstraction):
        return Abstraction(_substitute(term.body, index, value, depth + 1))
    head, arguments = term.spine()
    return application(_substitute(head, index, value, depth),
                       *(_substitute(argument, index, value, depth) for argument in arguments))


def contract(redex):
    """Applies the beta rule to redex: (λ M) N becomes M with N substituted for the abstracted variable."""
    if not isinstance(redex, Application):
        raise NotApplication(redex)
    if not isinstance(redex.function, Abstraction):
        raise NotAbstraction(redex.function)
    return substitute(redex.function.body, 1, redex.argument)
