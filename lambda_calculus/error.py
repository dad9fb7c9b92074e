"""Errors raised by lambda_calculus. Every error derives from LambdaError.

Structural errors (TermError) are raised by the decomposition helpers on Term when a term does not have the
requested shape; callers that branch on shape are expected to catch them. ParseErrors are raised by the parser and
know where in the source text they happened. Non-termination is never an error: see reduction.beta.
"""

from termcolor import colored


class LambdaError(Exception):
    """Base class for all lambda_calculus errors."""


class TermError(LambdaError):
    """A term did not have the shape required by a decomposition helper."""
    expected = "term"

    def __init__(self, term):
        self.term = term
        super().__init__(f"expected {self.expected}, got {term!r}")


class NotVariable(TermError):
    expected = "a variable"


class NotAbstraction(TermError):
    expected = "an abstraction"


class NotApplication(TermError):
    expected = "an application"


class ParseError(LambdaError):
    """Malformed source text. position is the character offset of the offending token in source."""
    COLOR = "red"

    def __init__(self, reason, position, source=""):
        self.reason = reason
        self.position = position
        self.source = source
        super().__init__(f"{reason} (at position {position})")

    def diagnose(self):
        """Returns source with the offending character highlighted and bolded, and a caret underneath it."""
        diagnosis = "  " + self.source[:self.position]

        end = min(self.position + 1, len(self.source))
        diagnosis += colored(self.source[self.position:end], ParseError.COLOR, attrs=["bold"])
        diagnosis += self.source[end:] + "\n"

        diagnosis += "  " + " " * self.position
        diagnosis += colored("^", ParseError.COLOR, attrs=["bold"])

        return diagnosis
