"""Debug printer rendering an expression tree as nested, Lisp-style parenthesized text, e.g. `-123 * (45.67)` becomes
`(* (- 123) (group 45.67))`. Used by the --ast switch of the command line.
"""

from lox.lang.expr import Assign, Binary, Call, Get, Grouping, Literal, Logical, Set, Super, This, Unary, Variable
from lox.lang.interpreter import stringify


class AstPrinter:

    def print(self, expr):
        """Returns the rendering of expr."""
        if isinstance(expr, Literal):
            if isinstance(expr.value, str):
                return expr.value
            return stringify(expr.value)
        if isinstance(expr, Grouping):
            return self.parenthesize("group", expr.expression)
        if isinstance(expr, Unary):
            return self.parenthesize(expr.operator.lexeme, expr.right)
        if isinstance(expr, (Binary, Logical)):
            return self.parenthesize(expr.operator.lexeme, expr.left, expr.right)
        if isinstance(expr, Variable):
            return expr.name.lexeme
        if isinstance(expr, Assign):
            return self.parenthesize(f"= {expr.name.lexeme}", expr.value)
        if isinstance(expr, Call):
            return self.parenthesize("call", expr.callee, *expr.arguments)
        if isinstance(expr, Get):
            return self.parenthesize(f". {expr.name.lexeme}", expr.object)
        if isinstance(expr, Set):
            return self.parenthesize(f"= . {expr.name.lexeme}", expr.object, expr.value)
        if isinstance(expr, Super):
            return f"(super {expr.method.lexeme})"
        if isinstance(expr, This):
            return "this"
        raise TypeError(f"not a Lox expression: {expr!r}")

    def parenthesize(self, name, *exprs):
        return "(" + " ".join([name] + [self.print(expr) for expr in exprs]) + ")"
