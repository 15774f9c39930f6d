"""Handles interactive/command-line mode for lambdacalc interpreter. Uses cmd as backend."""

import cmd


class Shell(cmd.Cmd):
    """Lambda calculus interpreter shell."""
    intro = "Lambda calculus interpreter :: Python backend\nType '?' or 'help' for more information."
    prompt = "> "
    secondary_prompt = ". "  # used for line continutations
    _tmp_prompt = "> "       # also used for prompt swapping in line continuations

    def __init__(self, sess, *args, **kwargs):
        super().__init__(*args, **kwargs)

        self.sess = sess

        self._tmp_line = ""
        self._tmp_line_num = 0
        self.line_num = 0

    def default(self, line):
        """Executes arbitrary lambdacalc statements."""
        with self.sess.error_handler:  # needed because cmd.Cmd automatically exits on Exception
            self.line_num += 1
            if not self._tmp_line:
                self._tmp_line_num = self.line_num

            line, add_to_prev = self.sess.preprocess_line(f"{self._tmp_line} {line}" if self._tmp_line else line)

            if add_to_prev:
                self._tmp_line = line
                self.prompt = self.secondary_prompt
                return

            self._tmp_line = ""
            self.prompt = self._tmp_prompt

            self.sess.add(line, self._tmp_line_num)
            for result in self.sess.run():
                print(result)

    def _is_statement(self, arg):
        """Whether or not the last line is a statement rather than a command: text follows the command name (as in
        'exit = λx.x'), or an unfinished line is being continued.
        """
        return bool(arg) or bool(self._tmp_line)

    def do_env(self, arg):
        """Lists every assigned name and its term, in order of assignment."""
        if self._is_statement(arg):
            return self.default(self.lastcmd)
        for assignment in self.sess.assignments():
            print(assignment)

    def do_help(self, arg):
        """Doesnt return docs, but rather a short intro."""
        if self._is_statement(arg):
            return self.default(self.lastcmd)
        print("Welcome to the lambdacalc interpreter!\n\n"
              "Lambda calculus is a Turing-complete language created by Alonzo Church. This \n"
              "interpreter supports pure lambda calculus as imagined by Church as well as \n"
              "named terms. Type 'env' to list them and 'exit' to quit.\n\n"
              "Try it out by typing 'I = λx.x' (or 'I = \\x.x'). This will bind the lambda \n"
              "term 'λx.x' to the name 'I'. Next, try typing '(I y)'. This will apply 'I' \n"
              "to 'y', giving 'y' as the result.")

    def emptyline(self):
        """Do not repeat previous command on empty line."""
        return ""

    def do_EOF(self, arg):
        """Exits interpreter."""
        if arg:
            return self.default(self.lastcmd)
        print()
        return True

    def do_exit(self, arg):
        """Exits interpreter."""
        if self._is_statement(arg):
            return self.default(self.lastcmd)
        return True
