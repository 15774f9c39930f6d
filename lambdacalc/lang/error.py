"""Error handling for lambdacalc. Only GenericExceptions should be encountered during running: if another type of error
is raised and makes it all the way to ErrorHandler, it is assumed to be an internal issue.
"""

import sys

from termcolor import colored


class GenericException(Exception):
    """Templates an error/warning message so that it can be used to throw a lambdacalc error/warning."""

    def __init__(self, msg, exprs=None, start=0, end=-1, diagnosis=True, internal=False, line_num=None):
        """Parses args for GenericException or warning. exprs[0] should be the offending expr that caused the error;
        start and end delimit the offending part of it. line_num overrides the line registered with the ErrorHandler.
        """
        if exprs is None:
            exprs = ""
        if isinstance(exprs, str):
            exprs = [exprs]
        exprs = [str(expr) for expr in exprs]

        super().__init__(msg.format(*exprs))
        self.msg = msg.format(*(colored(expr, attrs=["bold"]) for expr in exprs))  # color expr snippets
        self.expr = exprs[0]
        self.end = end if end != -1 else len(self.expr)  # needed for error display

        self.start = start
        self.diagnosis = diagnosis
        self.internal = internal
        self.line_num = line_num


class ErrorHandler:
    """Context manager that will silently suppress Python errors and raise custom lambdacalc errors/warnings."""
    ERROR = "red"
    WARNING = "magenta"
    TRACE = "dark_grey"

    def __init__(self, fatal=True, trace=False, color=True):
        self.fatal = fatal
        self.trace = trace
        self.color = color  # if False, never colors; if True, colors when termcolor detects a terminal
        self.traceback = {}

    def colored(self, text, color=None, attrs=None):
        """termcolor.colored, unless color is turned off for this handler."""
        return colored(text, color, attrs=attrs, no_color=not self.color)

    def register_file(self, path):
        """Registers path in traceback."""
        self.traceback[path] = (None, None)

    def register_line(self, path, line, line_num):
        """Registers line in traceback given path. Should be called prior to Session add/run."""
        self.traceback[path] = (line, line_num)

    def remove_line(self, path):
        """Removes line from traceback given path. Should be called after successful Session add/run."""
        self.traceback[path] = (None, None)

    def register_step(self, kind, term):
        """Prints a single reduction step if tracing is on. kind is the step symbol, e.g. β."""
        if self.trace:
            print(self.colored(f"  {kind} ", ErrorHandler.TRACE, attrs=["bold"])
                  + self.colored(str(term), ErrorHandler.TRACE))

    def diagnose(self, error, warning=False):
        """Returns offending part of error.expr highlighted and bolded."""
        color = ErrorHandler.WARNING if warning else ErrorHandler.ERROR

        diagnosis = "  " + error.expr[:error.start]

        end = max(error.end, error.start + 1)
        diagnosis += self.colored(error.expr[error.start:end], color, attrs=["bold"])
        diagnosis += error.expr[end:] + "\n"

        diagnosis += "  " + " " * error.start
        diagnosis += self.colored("^" + "~" * (end - error.start - 1), color, attrs=["bold"])

        return diagnosis

    def location(self, error):
        """Returns 'file:line:col: ' for error, using the first registered file."""
        if not self.traceback:
            return ""

        file, (line, line_num) = next(iter(self.traceback.items()))
        if error.line_num is not None:
            line_num = error.line_num
        if line_num is None:
            return self.colored(f"{file}: ", attrs=["bold"])

        offset = line.find(error.expr) if line and error.expr else -1
        col = max(offset, 0) + error.start + 1
        return self.colored(f"{file}:{line_num}:{col}: ", attrs=["bold"])

    def message(self, error):
        """Returns error's message, with its expr snippets bolded if color is on."""
        return error.msg if self.color else str(error)

    def warn(self, *args, **kwargs):
        """Generates and prints runtime warning message based on args."""
        error = GenericException(*args, **kwargs)

        error_msg = self.location(error)
        error_msg += self.colored("warning: ", ErrorHandler.WARNING, attrs=["bold"]) + self.message(error)
        print(error_msg)

        if not error.internal and error.expr and error.diagnosis:
            print(self.diagnose(error, warning=True))

    def throw(self, error):
        """Throws error using error and self.traceback. error must be a GenericException, and self.traceback must be a
        dict of file: (line, line_num) representing origination of error.
        """
        error_msg = self.location(error)
        if error.internal:
            error_msg += self.colored("[internal] ", ErrorHandler.ERROR, attrs=["bold"])

        error_msg += self.colored("error: ", ErrorHandler.ERROR, attrs=["bold"]) + self.message(error)
        print(error_msg)

        if not error.internal and error.expr and error.diagnosis:
            print(self.diagnose(error))

        if self.fatal:
            sys.exit(1)
        for path in self.traceback:  # if error occurred, reset traceback (no need if error is fatal)
            self.remove_line(path)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        do_exit = False
        if exc_type is KeyboardInterrupt:
            self.throw(GenericException("keyboard interrupt"))
        elif exc_type is SystemExit:
            do_exit = True
        elif exc_type is RecursionError:
            self.throw(GenericException("λ-term is nested too deeply: maximum recursion depth exceeded"))
        elif exc_type is not None and issubclass(exc_type, GenericException):
            self.throw(exc_val)
        elif exc_type is not None:
            self.throw(GenericException("unknown error: '{}'", f"{exc_type.__name__}: {exc_val}", internal=True))
            do_exit = True

        return not do_exit
