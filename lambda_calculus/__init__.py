"""A simple implementation of the untyped lambda calculus: de Bruijn terms, capture-avoiding substitution, beta
reduction under several strategies, and a parser for classic and de Bruijn notation.

    >>> from lambda_calculus import Notation, parse, normalize
    >>> normalize(parse("(λx.λy.x) a b")).display(Notation.CLASSIC)
    'A'
"""

from lambda_calculus.error import LambdaError, NotAbstraction, NotApplication, NotVariable, ParseError, TermError
from lambda_calculus.parser import parse, Parser
from lambda_calculus.reduction import beta, beta_step, normalize, reduction_steps, Order, StepPrinter
from lambda_calculus.substitution import contract, shift, substitute
from lambda_calculus.term import (Abstraction, Application, Notation, Slot, Term, Variable, abstraction, application,
                                  variable)
