"""Recursive-descent parser turning source text into Terms.

Both notations share one grammar:

```
<term>        ::= <atom>+                        ; application, associating by left: a b c = ((a b) c)
<atom>        ::= <variable>
                | "(" <term> ")"
                | <abstraction>                  ; greedy: λx.x y = λx.(x y) != (λx.x) y
<abstraction> ::= "λ" <name>+ "." <term>         ; classic: λx y.x = λx.λy.x
                | "λ" ["."] <term>               ; de Bruijn: λλ2
```

"\\" may be written instead of "λ". In classic notation variables are names and are resolved to indices here: a
bound name refers to its innermost binder, and free names are numbered by first appearance, so every occurrence of
the same free name denotes the same variable outside the term. In de Bruijn notation variables are positive integers
and only syntax is checked.
"""

import logging

from lambda_calculus.error import ParseError
from lambda_calculus.term import Abstraction, Application, Notation, Variable

logger = logging.getLogger(__name__)

LAMBDA = "LAMBDA"
DOT = "DOT"
LPAREN = "LPAREN"
RPAREN = "RPAREN"
NAME = "NAME"
NUMBER = "NUMBER"
EOF = "EOF"

DIGITS = "0123456789"


def tokenize(source, lambdas=None):
    """Returns a list of (type, value, position) tuples ending with an EOF token. lambdas are the characters
    accepted as binders, Parser.LAMBDAS unless given. Numbers are ASCII digits only.
    """
    if lambdas is None:
        lambdas = Parser.LAMBDAS

    tokens = []
    idx = 0
    while idx < len(source):
        char = source[idx]

        if char.isspace():
            idx += 1
            continue
        elif char in lambdas:
            tokens.append((LAMBDA, char, idx))
        elif char == ".":
            tokens.append((DOT, char, idx))
        elif char == "(":
            tokens.append((LPAREN, char, idx))
        elif char == ")":
            tokens.append((RPAREN, char, idx))
        elif char in DIGITS:
            start = idx
            while idx + 1 < len(source) and source[idx + 1] in DIGITS:
                idx += 1
            tokens.append((NUMBER, source[start:idx + 1], start))
        elif char.isalpha() or char == "_":
            start = idx
            while idx + 1 < len(source) and (source[idx + 1].isalpha() or source[idx + 1] in DIGITS + "_'"):
                idx += 1
            tokens.append((NAME, source[start:idx + 1], start))
        else:
            raise ParseError(f"unrecognized character '{char}'", idx, source)

        idx += 1

    tokens.append((EOF, "", len(source)))
    return tokens


class Parser:
    """Parses a single term of source in the given notation."""
    LAMBDAS = "λ\\"

    def __init__(self, source, notation=Notation.CLASSIC):
        self.source = source
        self.notation = notation
        self.tokens = tokenize(source)
        self.pos = 0

        self.bound = []  # binder names, innermost last
        self.free = {}   # free name: its position outside the term, starting at 1

    @property
    def current(self):
        return self.tokens[self.pos]

    def _advance(self):
        token = self.current
        self.pos += 1
        return token

    def _error(self, reason, position=None):
        if position is None:
            position = self.current[2]
        return ParseError(reason, position, self.source)

    def parse(self):
        if self.current[0] == EOF:
            raise self._error("λ-term cannot be empty")

        term = self._parse_term()

        if self.current[0] == RPAREN:
            raise self._error("unmatched ')'")
        elif self.current[0] != EOF:
            raise self._error(f"unexpected '{self.current[1]}'")
        return term

    def _parse_term(self):
        """Parses one or more atoms and folds them into left-associated applications."""
        term = self._parse_atom()
        while self.current[0] not in (RPAREN, EOF, DOT):
            term = Application(term, self._parse_atom())
        return term

    def _parse_atom(self):
        token_type, value, position = self.current

        if token_type == LAMBDA:
            return self._parse_abstraction()

        elif token_type == LPAREN:
            self._advance()
            if self.current[0] == RPAREN:
                raise self._error("empty parentheses")
            elif self.current[0] == EOF:
                raise self._error("unmatched '('", position)

            term = self._parse_term()
            if self.current[0] != RPAREN:
                raise self._error("unmatched '('", position)
            self._advance()
            return term

        elif token_type == NAME:
            if self.notation is Notation.DE_BRUIJN:
                raise self._error(f"named variable '{value}' in de Bruijn notation")
            self._advance()
            return self._resolve(value)

        elif token_type == NUMBER:
            if self.notation is Notation.CLASSIC:
                raise self._error(f"index '{value}' in classic notation")
            if int(value) == 0:
                raise self._error("de Bruijn indices start at 1")
            self._advance()
            return Variable(int(value))

        elif token_type == EOF:
            raise self._error("expected a λ-term")
        elif token_type == RPAREN:
            raise self._error("unmatched ')'")
        raise self._error(f"unexpected '{value}'")

    def _parse_abstraction(self):
        __, __, bind = self._advance()

        names = []
        if self.notation is Notation.CLASSIC:
            while self.current[0] == NAME:
                names.append(self._advance()[1])
            if not names:
                raise self._error("expected a variable name after 'λ'")
            if self.current[0] != DOT:
                raise self._error("expected '.' after bound variables")
            self._advance()
        else:
            names.append(None)
            if self.current[0] == DOT:
                self._advance()

        if self.current[0] in (EOF, RPAREN, DOT):
            raise self._error("abstraction has no body", bind)

        self.bound.extend(names)
        body = self._parse_term()
        del self.bound[len(self.bound) - len(names):]

        for __ in names:
            body = Abstraction(body)
        return body

    def _resolve(self, name):
        """Returns the Variable that name refers to at the current binder depth."""
        for distance, bound_name in enumerate(reversed(self.bound), 1):
            if bound_name == name:
                return Variable(distance)

        if name not in self.free:
            self.free[name] = len(self.free) + 1
        return Variable(len(self.bound) + self.free[name])


def parse(source, notation=Notation.CLASSIC):
    """Parses source in notation and returns the resulting Term. Raises ParseError if source is malformed."""
    try:
        return Parser(source, notation).parse()
    except ParseError as error:
        logger.debug("could not parse %r: %s", source, error)
        raise
