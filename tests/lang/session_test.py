import io
import os
import tempfile
import unittest

from lox.lang.error import InputError, Reporter
from lox.lang.session import Session
from lox.lang.shell import Shell


class SessionTestCase(unittest.TestCase):

    def setUp(self):
        self.out = io.StringIO()
        self.reporter = Reporter(io.StringIO())
        self.sess = Session(self.reporter, self.out)

    def test_run(self):
        self.assertEqual("9", self.sess.run("(1 + 2) * 3"))
        self.assertEqual("9\n", self.out.getvalue())
        self.assertEqual(Session.EX_OK, self.sess.exit_code)

    def test_lexical_error(self):
        # a lexical error stops evaluation even though the remaining tokens parse
        self.assertIsNone(self.sess.run("1 + 2 @"))
        self.assertEqual("", self.out.getvalue())
        self.assertEqual(Session.EX_DATAERR, self.sess.exit_code)

    def test_syntax_error(self):
        self.assertIsNone(self.sess.run("(1 + 2"))
        self.assertEqual(["[line 1] Error at end: Expect ')' after expression."], self.reporter.diagnostics)
        self.assertEqual(Session.EX_DATAERR, self.sess.exit_code)

    def test_runtime_error(self):
        self.assertIsNone(self.sess.run("2 + \"2\""))
        self.assertEqual("", self.out.getvalue())
        self.assertEqual(Session.EX_SOFTWARE, self.sess.exit_code)

    def test_show_tokens(self):
        sess = Session(self.reporter, self.out, show_tokens=True)
        sess.run("1 + 2")
        self.assertEqual(["NUMBER 1 1.0", "PLUS + None", "NUMBER 2 2.0", "EOF  None", "3"],
                         self.out.getvalue().splitlines())

    def test_show_ast(self):
        sess = Session(self.reporter, self.out, show_ast=True)
        self.assertEqual("(* (- 123) (group 45.67))", sess.run("-123 * (45.67)"))
        self.assertEqual("(+ 1 a)", sess.run("1 + \"a\""))  # printed, not evaluated
        self.assertFalse(self.reporter.had_runtime_error)

    def test_run_file(self):
        cases = {
            "\"lo\" + \"x\"\n": (Session.EX_OK, "lox\n"),
            "// nothing but\n1 +\n// comments\n2\n": (Session.EX_OK, "3\n"),
            "1 +": (Session.EX_DATAERR, ""),
            "-nil": (Session.EX_SOFTWARE, ""),
        }
        for case, (code, output) in cases.items():
            out = io.StringIO()
            sess = Session(Reporter(io.StringIO()), out)
            with tempfile.NamedTemporaryFile("w", suffix=".lox", delete=False, encoding="utf-8") as file:
                file.write(case)
            try:
                self.assertEqual(code, sess.run_file(file.name), case)
                self.assertEqual(output, out.getvalue(), case)
            finally:
                os.remove(file.name)

    def test_run_missing_file(self):
        with tempfile.TemporaryDirectory() as directory:
            path = os.path.join(directory, "missing.lox")
            with self.assertRaises(InputError) as context:
                self.sess.run_file(path)
        self.assertEqual(Session.EX_NOINPUT, context.exception.exit_code)


class ShellTestCase(unittest.TestCase):

    def setUp(self):
        self.out = io.StringIO()
        self.reporter = Reporter(io.StringIO())
        self.shell = Shell(Session(self.reporter, self.out), stdout=io.StringIO())

    def test_lines(self):
        for line in ["1 + 1", "\"a\" + \"b\"", "nil", "true"]:
            self.shell.onecmd(line)
        self.assertEqual(["2", "ab", "nil", "true"], self.out.getvalue().splitlines())

    def test_errors_reset(self):
        self.shell.onecmd("1 +")
        self.assertFalse(self.reporter.had_error)
        self.shell.onecmd("-\"x\"")
        self.assertFalse(self.reporter.had_runtime_error)
        self.shell.onecmd("2 * 2")
        self.assertEqual("4\n", self.out.getvalue())

    def test_continuation(self):
        self.shell.onecmd("(1 +")
        self.assertEqual(Shell.secondary_prompt, self.shell.prompt)
        self.assertEqual("", self.out.getvalue())

        self.shell.onecmd("2) * 3")
        self.assertEqual(Shell._tmp_prompt, self.shell.prompt)
        self.assertEqual("9\n", self.out.getvalue())

    def test_parens_in_strings_and_comments(self):
        cases = {
            "\"(\" + \"a\"": "(a",
            "1 + 2 // (comment": "3",
            "\"((\" + \")\"": "(()",
        }
        for case, expected in cases.items():
            self.shell.onecmd(case)
            self.assertEqual(Shell._tmp_prompt, self.shell.prompt, case)
        self.assertEqual(list(cases.values()), self.out.getvalue().splitlines())

        self.assertTrue(Shell.needs_continuation("(\"(\""))
        self.assertFalse(Shell.needs_continuation("\")\" // ("))

    def test_deep_nesting(self):
        self.shell.onecmd("-" * 5000 + "1")
        self.shell.onecmd("(" * 5000 + "1" + ")" * 5000)
        self.assertEqual("", self.out.getvalue())
        self.assertFalse(self.reporter.had_error)

        self.shell.onecmd("1 + 1")
        self.assertEqual("2\n", self.out.getvalue())

    def test_exit(self):
        self.assertTrue(self.shell.onecmd("exit"))
        self.assertFalse(self.shell.emptyline())


if __name__ == '__main__':
    unittest.main()
