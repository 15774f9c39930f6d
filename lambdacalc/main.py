"""Runs lambdacalc programs from a file, or in command-line mode. Also uses error handling context manager. Installed
as the lc console script.

Python version must be >=3.7, because error handling requires that dicts are insertion-ordered.
"""

import argparse
import sys

from lambdacalc.lang.error import ErrorHandler
from lambdacalc.lang.session import Session
from lambdacalc.lang.shell import Shell
from lambdacalc.pure.reducer import NormalOrderReducer


def build_parser():
    parser = argparse.ArgumentParser(prog="lc", description="Untyped lambda calculus interpreter.")
    parser.add_argument("file", help="file to interpret and run (if empty, goes to command-line mode)", nargs="?")
    parser.add_argument("--max-steps", type=int, default=NormalOrderReducer.MAX_STEPS, metavar="N",
                        help="maximum number of beta reductions per expression (default: %(default)s)")
    parser.add_argument("--trace", action="store_true", help="print every reduction step")
    parser.add_argument("--numerals", action="store_true", help="annotate results that are Church numerals")
    parser.add_argument("--no-color", action="store_true", help="disable colored output")
    return parser


def main(argv=None):
    """Runs lambdacalc interpreter. Called from lc console script."""
    assert sys.version_info >= (3, 7), "lc cannot be run with python < 3.7"

    args = build_parser().parse_args(argv)
    if args.max_steps < 0:
        build_parser().error("--max-steps must not be negative")

    with ErrorHandler(trace=args.trace, color=not args.no_color) as error_handler:
        options = dict(max_steps=args.max_steps, color=not args.no_color, numerals=args.numerals)

        if args.file is not None:
            sess = Session(error_handler, args.file, cmd_line=False, **options)
            for result in sess.run():
                print(result)

        else:
            Shell(Session(error_handler, Session.SH_FILE, cmd_line=True, **options)).cmdloop()


if __name__ == "__main__":
    main()
