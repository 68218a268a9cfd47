"""Session control for the Lox interpreter: runs one source buffer through the scanner, parser and interpreter, either
for a whole file or for one line of the interactive shell, and maps reported errors to process exit codes.
"""

import sys

from lox.lang.error import InputError, Reporter
from lox.lang.interpreter import Interpreter
from lox.lang.parser import Parser
from lox.lang.printer import AstPrinter
from lox.lang.scanner import Scanner


class Session:
    """Governs a Lox session. One Reporter is shared by every stage, so its flags describe the last run."""
    EX_OK = 0
    EX_DATAERR = 65   # lexical or syntax error
    EX_NOINPUT = 66   # script could not be read
    EX_SOFTWARE = 70  # runtime error

    def __init__(self, reporter=None, out=None, show_tokens=False, show_ast=False):
        self.reporter = reporter if reporter is not None else Reporter()
        self.out = out if out is not None else sys.stdout

        self.show_tokens = show_tokens  # print every token before parsing
        self.show_ast = show_ast        # print the tree instead of evaluating it

        self.interpreter = Interpreter(self.reporter)

    def run(self, source):
        """Runs source and prints its result. Returns the printed text, or None if nothing was printed because an
        error was reported.
        """
        tokens = Scanner(source, self.reporter).scan_tokens()
        if self.show_tokens:
            for token in tokens:
                print(token, file=self.out)

        expr = Parser(tokens, self.reporter).parse()
        if self.reporter.had_error or expr is None:
            return None

        if self.show_ast:
            result = AstPrinter().print(expr)
        else:
            result = self.interpreter.interpret(expr)

        if result is not None:
            print(result, file=self.out)
        return result

    @property
    def exit_code(self):
        if self.reporter.had_error:
            return Session.EX_DATAERR
        if self.reporter.had_runtime_error:
            return Session.EX_SOFTWARE
        return Session.EX_OK

    def run_file(self, path):
        """Runs the script at path and returns the exit code the process should end with."""
        try:
            with open(path, "r", encoding="utf-8") as file:
                source = file.read()
        except (OSError, UnicodeDecodeError):
            raise InputError("'{}' could not be opened", path)

        self.run(source)
        return self.exit_code
