import unittest
from unittest import mock

from lambda_calculus.error import ParseError
from lambda_calculus.parser import parse, tokenize, Parser, EOF, LAMBDA, NAME, NUMBER
from lambda_calculus.term import Abstraction, Application, Notation, Variable, abstraction, application


class TokenizeTestCase(unittest.TestCase):

    def test_tokenize(self):
        self.assertEqual([(LAMBDA, "λ", 0), (NAME, "xs'", 1), (NUMBER, "12", 5), (EOF, "", 7)], tokenize("λxs' 12"))
        self.assertEqual([(LAMBDA, "\\", 0), (EOF, "", 1)], tokenize("\\"))
        self.assertEqual([(NAME, "x1_'", 0), (EOF, "", 4)], tokenize("x1_'"))

    def test_unrecognized(self):
        should_raise = {"x $ y": 2, "λx.x;": 4, "[x]": 0, "²": 0, "x ١": 2, "x²": 1}
        for case, position in should_raise.items():
            with self.assertRaises(ParseError, msg=case) as context:
                tokenize(case)
            self.assertEqual(position, context.exception.position, case)

    def test_lambdas(self):
        with mock.patch.object(Parser, "LAMBDAS", "λ"):
            self.assertEqual([(LAMBDA, "λ", 0), (NAME, "x", 1), (EOF, "", 2)], tokenize("λx"))
            self.assertRaises(ParseError, tokenize, "\\x")
            self.assertRaises(ParseError, parse, "\\x.x")
            self.assertEqual(Abstraction(Variable(1)), parse("λx.x"))

        self.assertEqual([(LAMBDA, "\\", 0), (EOF, "", 1)], tokenize("\\", "\\"))
        self.assertRaises(ParseError, tokenize, "λ", "\\")


class ClassicTestCase(unittest.TestCase):

    def test_parse(self):
        cases = {
            "λx.λy.x": abstraction(Variable(2), 2),
            "λx y.x": abstraction(Variable(2), 2),
            "\\x.x": Abstraction(Variable(1)),
            "(λx.x) y": Application(Abstraction(Variable(1)), Variable(1)),
            "x y z": application(Variable(1), Variable(2), Variable(3)),
            "x (y z)": Application(Variable(1), Application(Variable(2), Variable(3))),
            "((x))": Variable(1),
            "λx.x λy.y": Abstraction(Application(Variable(1), Abstraction(Variable(1)))),
            "λf.λx.f (f x)": abstraction(Application(Variable(2), Application(Variable(2), Variable(1))), 2),
            "λx.λx.x": abstraction(Variable(1), 2),
            "λm n f x. m f (n f x)": abstraction(
                Application(Application(Variable(4), Variable(2)),
                            Application(Application(Variable(3), Variable(2)), Variable(1))),
                4
            ),
            "  λ x . x  ": Abstraction(Variable(1)),
        }
        for case, expected in cases.items():
            self.assertEqual(expected, parse(case), case)
            self.assertEqual(expected, parse(case, Notation.CLASSIC), case)

    def test_free_variables(self):
        cases = {
            "λx.y x": Abstraction(Application(Variable(2), Variable(1))),
            "λx.y x y": Abstraction(application(Variable(2), Variable(1), Variable(2))),
            "y (λx.y)": Application(Variable(1), Abstraction(Variable(2))),
            "a b a": application(Variable(1), Variable(2), Variable(1)),
            "λx.λz.b a b": abstraction(application(Variable(3), Variable(4), Variable(3)), 2),
        }
        for case, expected in cases.items():
            self.assertEqual(expected, parse(case), case)

    def test_errors(self):
        should_raise = {
            "": 0,
            "   ": 3,
            "λx.(x": 3,
            "(x": 0,
            "x)": 1,
            "λx.": 0,
            "λ.x": 1,
            "λx x": 4,
            "λx.1": 3,
            "()": 1,
            "x . y": 2,
            "(λx.x))": 6,
        }
        for case, position in should_raise.items():
            with self.assertRaises(ParseError, msg=case) as context:
                parse(case)
            self.assertEqual(position, context.exception.position, case)
            self.assertEqual(case, context.exception.source, case)

    def test_no_partial_result(self):
        parser = Parser("λx.(x")
        self.assertRaises(ParseError, parser.parse)


class DeBruijnTestCase(unittest.TestCase):

    def test_parse(self):
        cases = {
            "λλ2": abstraction(Variable(2), 2),
            "λ.λ.2": abstraction(Variable(2), 2),
            "\\\\2": abstraction(Variable(2), 2),
            "λ1 2": Abstraction(Application(Variable(1), Variable(2))),
            "(λ1) 2": Application(Abstraction(Variable(1)), Variable(2)),
            "1 2 3": application(Variable(1), Variable(2), Variable(3)),
            "λ 10": Abstraction(Variable(10)),
        }
        for case, expected in cases.items():
            self.assertEqual(expected, parse(case, Notation.DE_BRUIJN), case)

    def test_notations_agree(self):
        self.assertEqual(parse("λx.λy.x"), parse("λλ2", Notation.DE_BRUIJN))
        self.assertEqual(Abstraction(Abstraction(Variable(2))), parse("λλ2", Notation.DE_BRUIJN))

    def test_errors(self):
        should_raise = {
            "λ": 0,
            "λλ": 1,
            "0": 0,
            "λx.x": 1,
            "(1": 0,
            "1)": 1,
            "λ(": 1,
            "λ..1": 0,
            "λ²": 1,
            "λ١": 1,
            "λ1²": 2,
        }
        for case, position in should_raise.items():
            with self.assertRaises(ParseError, msg=case) as context:
                parse(case, Notation.DE_BRUIJN)
            self.assertEqual(position, context.exception.position, case)


class RoundTripTestCase(unittest.TestCase):

    def test_round_trip(self):
        sources = [
            "λx.λy.x",
            "λx.x",
            "λf.λx.f (f (f x))",
            "(λx.x x) (λx.x x)",
            "λx.λy.y (λz.z x) (λz.λw.w z)",
            "λm n f x. m f (n f x)",
        ]
        for source in sources:
            term = parse(source)
            for notation in Notation:
                text = term.display(notation)
                self.assertEqual(term, parse(text, notation), (source, notation))
                self.assertEqual(text, parse(text, notation).display(notation), (source, notation))


if __name__ == '__main__':
    unittest.main()
