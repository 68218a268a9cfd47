"""Handles interactive/command-line mode for the Lox interpreter. Uses cmd as backend."""

import cmd
import io

from lox.lang.error import ErrorHandler, Reporter
from lox.lang.scanner import scan
from lox.lang.tokens import TokenType


class Shell(cmd.Cmd):
    """Lox interpreter shell. Every complete line is run as one expression."""
    intro = "Lox interpreter :: Python backend\nType '?' or 'help' for more information."
    prompt = "> "
    secondary_prompt = ". "  # used for line continuations
    _tmp_prompt = "> "       # also used for prompt swapping in line continuations

    def __init__(self, sess, *args, **kwargs):
        super().__init__(*args, **kwargs)

        self.sess = sess
        self.error_handler = ErrorHandler(fatal=False)
        self._tmp_line = ""

    @staticmethod
    def needs_continuation(line):
        """Whether line has unclosed parentheses, in which case the shell waits for more input. Parentheses inside
        strings and comments do not count.
        """
        types = [token.type for token in scan(line, Reporter(io.StringIO()))]  # errors are reported by the real run
        return types.count(TokenType.LEFT_PAREN) > types.count(TokenType.RIGHT_PAREN)

    def default(self, line):
        """Runs arbitrary Lox expression."""
        with self.error_handler:  # needed because cmd.Cmd automatically exits on Exception
            line = self._tmp_line + line

            if self.needs_continuation(line):
                self._tmp_line = line + "\n"
                self.prompt = self.secondary_prompt
                return

            self._tmp_line = ""
            self.prompt = self._tmp_prompt

            try:
                self.sess.run(line)
            finally:
                self.sess.reporter.reset()  # an error on one line does not affect the next

    def do_help(self, arg):
        """Doesn't return docs, but rather a short intro."""
        print("Welcome to the Lox interpreter!\n\n"
              "Type an expression to evaluate it. Numbers, strings, true, false and nil can be\n"
              "combined with arithmetic (+ - * /), comparison (< <= > >=), equality (== !=),\n"
              "negation (-) and logical not (!). Try '(1 + 2) * 3' or '\"lo\" + \"x\"'.")

    def emptyline(self):
        """Do not repeat previous command on empty line."""
        return ""

    def do_EOF(self, arg):
        """Exits interpreter."""
        print()
        return self.do_exit(arg)

    def do_exit(self, arg):
        """Exits interpreter."""
        return True
