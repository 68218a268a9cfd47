"""Runs a Lox script, or starts the interactive shell when no script is given. Also uses the error handling context
manager. Installed as the lox executable.
"""

import argparse
import sys

from lox.lang.error import ErrorHandler
from lox.lang.session import Session
from lox.lang.shell import Shell


def build_parser():
    parser = argparse.ArgumentParser(prog="lox", description="Lox expression interpreter.")
    parser.add_argument("script", help="file to interpret and run (if empty, goes to command-line mode)", nargs="?")
    parser.add_argument("--tokens", action="store_true", help="print every token before parsing")
    parser.add_argument("--ast", action="store_true", help="print the syntax tree instead of evaluating it")
    return parser


def main(argv=None):
    """Runs lox interpreter. Called from lox executable script."""
    with ErrorHandler() as error_handler:
        args = build_parser().parse_args(argv)
        sess = Session(show_tokens=args.tokens, show_ast=args.ast)

        if args.script is not None:
            sys.exit(sess.run_file(args.script))

        error_handler.fatal = False
        Shell(sess).cmdloop()


if __name__ == "__main__":
    main()
