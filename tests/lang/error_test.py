import contextlib
import io
import os
import unittest
from unittest import mock

from lambdacalc.lang.error import ErrorHandler, GenericException


def captured(func, *args, **kwargs):
    output = io.StringIO()
    with contextlib.redirect_stdout(output):
        func(*args, **kwargs)
    return output.getvalue()


class GenericExceptionTestCase(unittest.TestCase):

    def test_message(self):
        error = GenericException("'{}' has stray builtin '{}'", ("λx.)", ")"), start=3, end=4)
        self.assertEqual("'λx.)' has stray builtin ')'", str(error))
        self.assertEqual("λx.)", error.expr)
        self.assertEqual((3, 4), (error.start, error.end))

    def test_defaults(self):
        error = GenericException("keyboard interrupt")
        self.assertEqual("", error.expr)
        self.assertEqual(0, error.end)
        self.assertIsNone(error.line_num)

        error = GenericException("'{}' could not be opened", "a.lc")
        self.assertEqual(len("a.lc"), error.end)


class ErrorHandlerTestCase(unittest.TestCase):

    def test_throw_non_fatal(self):
        handler = ErrorHandler(fatal=False)
        handler.register_file("prog.lc")
        handler.register_line("prog.lc", "I = λ.x", 3)

        error = GenericException("expected {1}, got {2}", ("I = λ.x", "variable", "'.'"), start=5, end=6)
        output = captured(handler.throw, error)

        self.assertIn("prog.lc:3:6: ", output)
        self.assertIn("error: expected variable, got '.'", output)
        self.assertIn("^", output)
        self.assertEqual({"prog.lc": (None, None)}, handler.traceback)

    def test_throw_fatal(self):
        handler = ErrorHandler(fatal=True)
        with contextlib.redirect_stdout(io.StringIO()):
            self.assertRaises(SystemExit, handler.throw, GenericException("fatal"))

    def test_error_line_num_overrides(self):
        handler = ErrorHandler(fatal=False)
        handler.register_file("prog.lc")
        output = captured(handler.throw, GenericException("bad '{}'", "x$", start=1, end=2, line_num=9))
        self.assertIn("prog.lc:9:2: ", output)

    def test_warn(self):
        handler = ErrorHandler()
        handler.register_file("<in>")
        handler.register_line("<in>", "a (λx.(x x) λx.(x x))", 1)

        output = captured(handler.warn, "'{}' did not reach a beta-normal form", "(λx.(x x) λx.(x x))")
        self.assertIn("<in>:1:3: ", output)
        self.assertIn("warning: ", output)

    def test_register_step(self):
        self.assertEqual("", captured(ErrorHandler().register_step, "β", "x"))
        self.assertIn("β x", captured(ErrorHandler(trace=True).register_step, "β", "x"))

    def test_context_manager(self):
        output = io.StringIO()
        with contextlib.redirect_stdout(output):
            with ErrorHandler(fatal=False):
                raise GenericException("'{}' could not be opened", "a.lc", diagnosis=False)
        self.assertIn("error: 'a.lc' could not be opened", output.getvalue())

        output = io.StringIO()
        with contextlib.redirect_stdout(output):
            with ErrorHandler(fatal=False):
                raise RecursionError()
        self.assertIn("maximum recursion depth exceeded", output.getvalue())

    def test_internal_errors_propagate(self):
        output = io.StringIO()
        with contextlib.redirect_stdout(output):
            with self.assertRaises(KeyError):
                with ErrorHandler(fatal=False):
                    raise KeyError("{oops}")
        self.assertIn("[internal] error: unknown error: 'KeyError: '{oops}''", output.getvalue())

    def test_color(self):
        with mock.patch.dict(os.environ, {"FORCE_COLOR": "1"}):
            for name in ("NO_COLOR", "ANSI_COLORS_DISABLED"):
                os.environ.pop(name, None)
            error = GenericException("'{}' could not be opened", "a.lc", diagnosis=False)
            colored_output = captured(ErrorHandler(fatal=False).throw, error)
            plain_output = captured(ErrorHandler(fatal=False, color=False).throw, error)

        self.assertIn("\x1b[", colored_output)
        self.assertEqual("error: 'a.lc' could not be opened\n", plain_output)


if __name__ == '__main__':
    unittest.main()
