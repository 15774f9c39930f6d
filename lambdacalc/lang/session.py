"""Session control for lambdacalc. Runs programs, either in command line mode or file interpretation mode.

A session owns its environment, so independent sessions never see each other's assignments.
"""

from termcolor import colored

from lambdacalc.lang.environment import Environment
from lambdacalc.lang.error import GenericException
from lambdacalc.lang.lexical import AssignStmt, parse_program
from lambdacalc.lang.numerical import number
from lambdacalc.pure.reducer import NonTerminationError, NormalOrderReducer
from lambdacalc.pure.term import to_lc


class Session:
    """Governs a lambdacalc session, with control over the scope of assigned names."""
    SH_FILE = "<in>"  # command-line interpreter filename

    def __init__(self, error_handler, path=SH_FILE, cmd_line=False, max_steps=None, color=False, numerals=False):
        self.error_handler = error_handler
        self.error_handler.register_file(path)

        self.path = path                # used for error messages
        self.cmd_line = cmd_line        # whether or not in command-line mode
        self.max_steps = max_steps      # reduction bound per ExecStmt (None: NormalOrderReducer.MAX_STEPS)
        self.color = color
        self.numerals = numerals        # whether or not to annotate Church numerals in results

        self.environment = Environment()
        self.to_exec = []  # statements added but not run yet, in order

        if self.cmd_line:
            self.error_handler.fatal = False

        if path != Session.SH_FILE:
            try:
                with open(path, "r", encoding="utf-8") as file:
                    source = file.read()
            except OSError:
                raise GenericException("'{}' could not be opened", path, diagnosis=False)

            self.add(source)  # the whole file is parsed before anything runs

        elif not cmd_line:
            raise GenericException("'<in>' is a reserved filename")

    @staticmethod
    def preprocess_line(line):
        """Preprocesses a line from the command line. Returns the stripped line and whether or not it needs a line
        continuation (more '(' than ')').
        """
        line = line.rstrip()
        return line, line.count("(") > line.count(")")

    def add(self, source, line_num=1):
        """Parses source and queues its statements. Nothing is run until run is called. line_num is the line number
        source starts on.
        """
        self.to_exec.extend(parse_program(source, line_num))

    def run(self):
        """Runs the queued statements in order, yielding the output of each ExecStmt. Pending statements are dropped if
        one of them raises.
        """
        try:
            while self.to_exec:
                stmt = self.to_exec.pop(0)

                self.error_handler.register_line(self.path, stmt.line, stmt.line_num)
                result = self.execute(stmt)
                self.error_handler.remove_line(self.path)

                if result is not None:
                    yield result
        finally:
            self.to_exec = []

    def execute(self, stmt):
        """Runs a single statement. AssignStmts bind their term; ExecStmts are expanded, beta-reduced and returned as
        text (None if they have no normal form within the bound).
        """
        if isinstance(stmt, AssignStmt):
            self.environment.assign(stmt.name, stmt.term)
            return None

        term = self.environment.expand(stmt.term)
        if term is not stmt.term:
            self.error_handler.register_step("δ", term)

        try:
            reduced = NormalOrderReducer(term, self.max_steps).beta_reduce(self.error_handler)
        except NonTerminationError as error:
            source = stmt.source.split("\n")[0] if stmt.source else str(stmt)
            self.error_handler.warn("'{}' did not reach a beta-normal form within {} steps", (source, error.steps))
            return None

        return self.format(reduced)

    def format(self, term):
        """Renders a result, annotated with its value if numerals is on and term is a Church numeral."""
        result = to_lc(term, color=self.color)
        if self.numerals:
            num = number(term)
            if num is not None:
                annotation = f"  ≡ {num}"
                result += colored(annotation, "dark_grey") if self.color else annotation
        return result

    def assignments(self):
        """Returns 'name = term' lines for every assignment in the environment, in order."""
        return [f"{name} = {to_lc(term, color=self.color)}" for name, term in self.environment]
