import contextlib
import io
import unittest

from lambdacalc.lang.error import ErrorHandler
from lambdacalc.lang.session import Session
from lambdacalc.lang.shell import Shell


class ShellTestCase(unittest.TestCase):

    def setUp(self):
        self.shell = Shell(Session(ErrorHandler(), Session.SH_FILE, cmd_line=True))

    def send(self, *lines):
        output = io.StringIO()
        with contextlib.redirect_stdout(output):
            for line in lines:
                self.shell.onecmd(line)
        return output.getvalue()

    def test_statements(self):
        self.assertEqual("", self.send("I = λx.x"))
        self.assertEqual("y\n", self.send("(I y)"))
        self.assertEqual("a\nb\n", self.send("(I a); (I b)"))

    def test_line_continuation(self):
        self.assertEqual("", self.send("((λx.λy.(x y)) (λz.z)"))
        self.assertEqual(Shell.secondary_prompt, self.shell.prompt)

        self.assertEqual("λw.w\n", self.send("  (λw.w))"))
        self.assertEqual(Shell._tmp_prompt, self.shell.prompt)

    def test_errors_are_not_fatal(self):
        output = self.send("I = λx.x", "(I", ")", "λ.x", "(I z)")
        self.assertIn("error: ", output)
        self.assertTrue(output.endswith("z\n"), output)

    def test_env(self):
        output = self.send("I = λx.x", "K = \\x.\\y.x", "env")
        self.assertEqual("I = λx.x\nK = λx.λy.x\n", output)

        self.assertEqual("", self.send("env = λe.e"))
        self.assertEqual("a\n", self.send("(env a)"))

    def test_exit(self):
        self.assertTrue(self.shell.onecmd("exit"))
        with contextlib.redirect_stdout(io.StringIO()):
            self.assertTrue(self.shell.onecmd("EOF"))

    def test_emptyline(self):
        self.assertEqual("", self.send(""))

    def test_command_names_as_variables(self):
        with contextlib.redirect_stdout(io.StringIO()):
            for line in ("exit = λx.x", "help = λh.h", "EOF = λe.e", "env₀ = λv.v"):
                self.assertFalse(self.shell.onecmd(line), line)
        self.assertEqual(["exit", "help", "EOF", "env₀"], [name for name, __ in self.shell.sess.environment])

        self.assertEqual("a\nb\nc\n", self.send("(help a)", "(exit b)", "(EOF c)"))

    def test_command_names_in_continuation(self):
        self.send("help = λh.h", "exit = λx.x")
        self.assertEqual("", self.send("(help", "exit"))
        self.assertEqual(Shell.secondary_prompt, self.shell.prompt)
        self.assertEqual("λx.x\n", self.send(")"))

    def test_help(self):
        self.assertIn("Welcome to the lambdacalc interpreter!", self.send("help"))


if __name__ == '__main__':
    unittest.main()
