"""Beta reduction of lambda terms under a choice of reduction strategies.

All strategies share one stepping function. An Order only decides where that function looks for the next redex:
whether the redex at the root is contracted before or after the redexes inside it, and whether abstraction bodies
and application arguments are searched at all. Function positions are always searched before arguments, so every
strategy picks the leftmost of the redexes it can see.

Reduction never fails on divergent terms: beta stops after limit steps (0 = no limit) and returns whatever term it
reached. Terms passed in are never modified.

Sources: https://en.wikipedia.org/wiki/Reduction_strategy,
         http://pages.cs.wisc.edu/~horwitz/CS704-NOTES/1.LAMBDA-CALCULUS.html#NOR
"""

import logging
from enum import Enum

from termcolor import colored

from lambda_calculus.substitution import contract
from lambda_calculus.term import Abstraction, Application, Notation

logger = logging.getLogger(__name__)


class Order(Enum):
    """Redex-selection policies: (innermost, under_abstraction, into_argument)."""
    NORMAL = (False, True, True)          # leftmost outermost; finds a normal form whenever one exists
    CALL_BY_NAME = (False, False, False)  # head redexes only, never inside abstractions (weak head normal form)
    APPLICATIVE = (True, True, True)      # leftmost innermost; arguments are reduced before they are substituted
    HEAD_SPINE = (False, True, False)     # head redexes, also under abstractions (head normal form)

    def __init__(self, innermost, under_abstraction, into_argument):
        self.innermost = innermost
        self.under_abstraction = under_abstraction
        self.into_argument = into_argument


class StepPrinter:
    """Default verbose sink: prints every intermediate term of a reduction."""
    COLOR = "cyan"
    SYMBOL = "β"

    def __init__(self, notation=Notation.DE_BRUIJN):
        self.notation = notation

    def __call__(self, step, term):
        prefix = colored(f"{StepPrinter.SYMBOL}{step}:", StepPrinter.COLOR, attrs=["bold"])
        print(f"{prefix} {term.display(self.notation)}")


def _apply(function, arguments):
    for argument in arguments:
        function = Application(function, argument)
    return function


def _step(term, order):
    """Returns term after contracting the next redex chosen by order, or None if order finds no redex. Never
    modifies term: nodes on the path to the redex are rebuilt and the rest are reused.

    Applications are handled a whole spine at a time. Only the innermost application of a spine, head applied to
    its first argument, can be a redex; outermost orders contract it before looking inside the head, innermost
    orders after the head and the first argument are reduced.
    """
    if isinstance(term, Abstraction):
        if order.under_abstraction:
            body = _step(term.body, order)
            if body is not None:
                return Abstraction(body)
        return None

    if not isinstance(term, Application):
        return None

    head, arguments = term.spine()
    if not order.innermost and isinstance(head, Abstraction):
        return _apply(contract(Application(head, arguments[0])), arguments[1:])

    reduced = _step(head, order)
    if reduced is not None:
        return _apply(reduced, arguments)

    for position, argument in enumerate(arguments):
        if order.into_argument:
            reduced = _step(argument, order)
            if reduced is not None:
                return _apply(head, arguments[:position] + [reduced] + arguments[position + 1:])

        if position == 0 and order.innermost and isinstance(head, Abstraction):
            return _apply(contract(Application(head, argument)), arguments[1:])

    return None


def _next(term, order):
    """Returns the term following term under order, or None if term is a normal form or a fixed point of order."""
    reduced = _step(term, order)
    if reduced is None or reduced == term:
        return None
    return reduced


def beta_step(term, order=Order.NORMAL):
    """Performs exactly one reduction of term according to order. If order finds no redex, term is already in the
    corresponding normal form and an equal copy of it is returned.
    """
    current = term.clone()
    reduced = _step(current, order)
    return current if reduced is None else reduced


def reduction_steps(term, order=Order.NORMAL, limit=0):
    """Yields every intermediate term of the reduction of term according to order, at most limit of them (0 = no
    limit). Stops when no redex is left or when a step reproduces the term it started from. Consecutive terms share
    unchanged subtrees, so clone a yielded term before editing it.
    """
    current = term.clone()
    count = 0
    while not limit or count < limit:
        reduced = _next(current, order)
        if reduced is None:
            logger.debug("reduction finished after %d steps", count)
            return

        count += 1
        yield reduced
        current = reduced


def beta(term, order=Order.NORMAL, limit=0, verbose=False, sink=None):
    """Reduces term according to order for at most limit steps (0 = until no further reduction is possible).

    Every intermediate term is passed to sink(step, term). If verbose is set and no sink is given, the steps are
    printed with a StepPrinter. The returned term is a normal form unless the limit was reached first.
    """
    if verbose and sink is None:
        sink = StepPrinter()

    result = None
    count = 0
    for count, result in enumerate(reduction_steps(term, order, limit), 1):
        if sink is not None:
            sink(count, result)

    if limit and count == limit and _next(result, order) is not None:
        logger.debug("reduction stopped at the limit of %d steps", limit)

    return term.clone() if result is None else result


def normalize(term):
    """Reduces term to its normal form using normal order, without a step limit."""
    return beta(term, Order.NORMAL, 0, False)
