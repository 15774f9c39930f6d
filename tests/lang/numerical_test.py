import unittest

from lambdacalc.lang.error import GenericException
from lambdacalc.lang.numerical import cnumber, number
from lambdacalc.pure.lexical import parse_term


class NumericalTestCase(unittest.TestCase):

    def test_cnumber(self):
        should_fail = [-2, 0.3, 4.0, 14.2, "a", None, True]
        for case in should_fail:
            self.assertRaises(GenericException, cnumber, case)

        should_pass = {0: "λf.λx.x", 3: "λf.λx.(f (f (f x)))", "2": "λf.λx.(f (f x))"}
        for case, result in should_pass.items():
            self.assertEqual(parse_term(result), cnumber(case), case)

    def test_number(self):
        should_fail = ["λf.λx.(f f)", "λf.λx.((x f) x)", "λf.x", "x", "λf.λx.(f (x x))", "λx.λx.(x x)",
                       "λf.λx.y", "(f x)"]
        for case in should_fail:
            self.assertIsNone(number(parse_term(case)), case)

        should_pass = {3: "λf.λx.(f (f (f x)))", 0: "λf.λx.x", 1: "λs.λz.(s z)", 2: "λx₀.λx.(x₀ (x₀ x))",
                       5: cnumber(5)}
        for result, case in should_pass.items():
            term = parse_term(case) if isinstance(case, str) else case
            self.assertEqual(result, number(term), case)

    def test_shadowed_zero(self):
        self.assertEqual(0, number(parse_term("λx.λx.x")))


if __name__ == '__main__':
    unittest.main()
