import re
import unittest

from lambda_calculus.error import LambdaError, NotAbstraction, NotApplication, NotVariable, ParseError, TermError
from lambda_calculus.parser import parse
from lambda_calculus.term import Abstraction, Variable

ANSI = re.compile(r"\x1b\[[0-9;]*m")


class TermErrorTestCase(unittest.TestCase):

    def test_messages(self):
        cases = {
            NotVariable: "expected a variable, got Abstraction(Variable(1))",
            NotAbstraction: "expected an abstraction, got Abstraction(Variable(1))",
            NotApplication: "expected an application, got Abstraction(Variable(1))",
        }
        term = Abstraction(Variable(1))
        for error_cls, message in cases.items():
            error = error_cls(term)
            self.assertEqual(message, str(error))
            self.assertIs(term, error.term)
            self.assertIsInstance(error, TermError)
            self.assertIsInstance(error, LambdaError)

    def test_raised_by_helpers(self):
        with self.assertRaises(TermError) as context:
            Variable(1).unabs()
        self.assertEqual(Variable(1), context.exception.term)


class ParseErrorTestCase(unittest.TestCase):

    def test_attributes(self):
        with self.assertRaises(LambdaError) as context:
            parse("λx.(x")

        error = context.exception
        self.assertIsInstance(error, ParseError)
        self.assertEqual("unmatched '('", error.reason)
        self.assertEqual(3, error.position)
        self.assertEqual("λx.(x", error.source)
        self.assertEqual("unmatched '(' (at position 3)", str(error))

    def test_diagnose(self):
        cases = {
            ("x $ y", 2): ["  x $ y", "    ^"],
            ("λx.", 0): ["  λx.", "  ^"],
            ("", 0): ["  ", "  ^"],
        }
        for (source, position), expected in cases.items():
            diagnosis = ANSI.sub("", ParseError("oops", position, source).diagnose())
            self.assertEqual(expected, diagnosis.split("\n"), source)


if __name__ == '__main__':
    unittest.main()
