"""Error handling for the Lox interpreter.

Errors in Lox source (lexical, syntax and runtime) are never raised out of the scanner, parser or interpreter: they are
reported through a Reporter, which records them and sets the flag the caller inspects to pick an exit code. Only
LoxExceptions should reach ErrorHandler during a run: if another type of error makes it all the way there, it is
assumed to be an internal issue.
"""

import sys

from termcolor import colored

from lox.lang.tokens import TokenType


class LoxException(Exception):
    """Templates an error message so that it can be used to throw a Lox error. exprs are substituted into the {}
    placeholders of msg and bolded.
    """
    exit_code = 1

    def __init__(self, msg, exprs=None, internal=False):
        if exprs is None:
            exprs = []
        if isinstance(exprs, str):
            exprs = [exprs]

        self.plain = msg.format(*exprs)
        self.msg = msg.format(*(colored(expr, attrs=["bold"]) for expr in exprs))  # color expr snippets
        self.internal = internal
        super().__init__(self.plain)


class InputError(LoxException):
    """Source could not be read."""
    exit_code = 66


class ParseError(LoxException):
    """Unwinds the parser back to its entry point. The diagnostic has already been reported when this is raised."""


class LoxRuntimeError(LoxException):
    """Type or domain violation during evaluation, attributed to the offending operator token."""

    def __init__(self, token, message):
        super().__init__(message)
        self.token = token
        self.message = message


class Reporter:
    """Sink for diagnostics produced while scanning, parsing and evaluating one source buffer.

    had_error is set by lexical and syntax errors, had_runtime_error by runtime errors. Every reported line is kept in
    diagnostics (without color codes) and written to stream.
    """
    ERROR = "red"

    def __init__(self, stream=None):
        self.stream = stream if stream is not None else sys.stderr
        self.diagnostics = []
        self.had_error = False
        self.had_runtime_error = False

    def reset(self):
        """Clears both flags and the collected diagnostics. The shell calls this after every line."""
        self.diagnostics = []
        self.had_error = False
        self.had_runtime_error = False

    @staticmethod
    def where(token):
        """Context for a diagnostic attributed to token."""
        if token.type == TokenType.EOF:
            return " at end"
        return f" at '{token.lexeme}'"

    def report_lex(self, line, message):
        self._report(line, "", message)
        self.had_error = True

    def report_syntax(self, token, message):
        self._report(token.line, Reporter.where(token), message)
        self.had_error = True

    def report_runtime(self, error):
        """Reports a LoxRuntimeError raised by the interpreter."""
        self._report(error.token.line, Reporter.where(error.token), error.message)
        self.had_runtime_error = True

    def _report(self, line, where, message):
        self.diagnostics.append(f"[line {line}] Error{where}: {message}")

        prefix = colored(f"[line {line}] Error{where}:", Reporter.ERROR, attrs=["bold"])
        print(f"{prefix} {message}", file=self.stream)


class ErrorHandler:
    """Context manager that will silently suppress Python errors and raise custom Lox errors."""
    ERROR = "red"

    def __init__(self, fatal=True, stream=None):
        self.fatal = fatal
        self.stream = stream if stream is not None else sys.stderr

    def throw(self, error):
        """Prints error, which must be a LoxException, and exits with its exit code if fatal."""
        error_msg = ""
        if error.internal:
            error_msg += colored("[internal] ", ErrorHandler.ERROR, attrs=["bold"])

        error_msg += colored("error: ", ErrorHandler.ERROR, attrs=["bold"]) + error.msg
        print(error_msg, file=self.stream)

        if self.fatal:
            sys.exit(error.exit_code)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        do_exit = False
        if exc_type is KeyboardInterrupt:
            error = LoxException("keyboard interrupt")
            error.exit_code = 130
            self.throw(error)
        elif exc_type is SystemExit:
            do_exit = True
        elif exc_type is RecursionError:
            error = LoxException("expression nested too deeply, maximum recursion depth exceeded")
            error.exit_code = 70
            self.throw(error)
        elif exc_type is not None and issubclass(exc_type, LoxException):
            self.throw(exc_val)
        elif exc_type is not None:
            error = LoxException("unknown error: '{}'", f"{exc_type.__name__}: {exc_val}", internal=True)
            error.exit_code = 70
            self.throw(error)
            do_exit = True

        return not do_exit
