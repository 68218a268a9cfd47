"""Tree-walking evaluation of Lox expressions.

Runtime values are plain Python objects: float for numbers, str for strings, bool for booleans and None for nil. A bool
is never accepted where a number is required, even though Python would happily add True to 1.0.

Type checks happen after both operands of a binary operator have been evaluated (left first), and a failing check raises
LoxRuntimeError carrying the operator token. interpret is the boundary: it converts that error into a report.
"""

import math

from lox.lang.error import LoxRuntimeError, Reporter
from lox.lang.expr import Assign, Binary, Call, Get, Grouping, Literal, Logical, Set, Super, This, Unary, Variable
from lox.lang.expr import token_of
from lox.lang.tokens import TokenType


def is_number(value):
    return isinstance(value, float)


def is_truthy(value):
    """nil and false are falsey, everything else (including 0 and "") is truthy."""
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    return True


def is_equal(left, right):
    """nil is only equal to nil, values of different types are never equal, never raises."""
    if left is None or right is None:
        return left is None and right is None
    if type(left) is not type(right):
        return False
    return left == right


def stringify(value):
    """Renders value the way Lox prints it."""
    if value is None:
        return "nil"
    if isinstance(value, bool):
        return "true" if value else "false"
    if is_number(value):
        text = repr(value)
        if text.endswith(".0"):  # integral numbers print without a fraction
            text = text[:-2]
        return text
    return value


def ungroup(expr):
    """Innermost expression of a chain of Groupings."""
    while isinstance(expr, Grouping):
        expr = expr.expression
    return expr


def check_number_operand(operator, operand):
    if not is_number(operand):
        raise LoxRuntimeError(operator, "Operand must be a number.")


def check_number_operands(operator, left, right):
    if not (is_number(left) and is_number(right)):
        raise LoxRuntimeError(operator, "Operands must be numbers.")


def divide(left, right):
    """IEEE-754 division: a zero divisor gives an infinity or nan instead of raising like Python does."""
    if right == 0.0:
        if left == 0.0 or math.isnan(left):
            return math.nan
        return math.copysign(math.inf, left) * math.copysign(1.0, right)
    return left / right


def add(operator, left, right):
    """+ is overloaded: number + number adds, string + string concatenates, anything else is an error."""
    if is_number(left) and is_number(right):
        return left + right
    if isinstance(left, str) and isinstance(right, str):
        return left + right
    raise LoxRuntimeError(operator, "Operands must be two numbers or strings.")


ARITHMETIC = {
    TokenType.MINUS: lambda left, right: left - right,
    TokenType.STAR: lambda left, right: left * right,
    TokenType.SLASH: divide,
}

COMPARISON = {
    TokenType.GREATER: lambda left, right: left > right,
    TokenType.GREATER_EQUAL: lambda left, right: left >= right,
    TokenType.LESS: lambda left, right: left < right,
    TokenType.LESS_EQUAL: lambda left, right: left <= right,
}

UNSUPPORTED = (Assign, Call, Get, Logical, Set, Super, This, Variable)


class Interpreter:
    """Evaluates expression trees. Runtime errors are reported to reporter by interpret."""

    def __init__(self, reporter=None):
        self.reporter = reporter if reporter is not None else Reporter()

    def interpret(self, expr):
        """Evaluates expr and returns its printed form, or None if a runtime error was reported."""
        try:
            return stringify(self.evaluate(expr))
        except LoxRuntimeError as error:
            self.reporter.report_runtime(error)
            return None
        except RecursionError:
            error = LoxRuntimeError(token_of(ungroup(expr)), "Expression too deeply nested.")
            self.reporter.report_runtime(error)
            return None

    def evaluate(self, expr):
        """Returns the value of expr. Raises LoxRuntimeError on a type violation."""
        expr = ungroup(expr)  # groupings are pass-through
        if isinstance(expr, Literal):
            return expr.value
        if isinstance(expr, Unary):
            return self._unary(expr)
        if isinstance(expr, Binary):
            return self._binary(expr)
        if isinstance(expr, UNSUPPORTED):
            raise LoxRuntimeError(token_of(expr), "Unsupported expression.")
        raise TypeError(f"not a Lox expression: {expr!r}")

    def _unary(self, expr):
        right = self.evaluate(expr.right)

        if expr.operator.type == TokenType.BANG:
            return not is_truthy(right)
        if expr.operator.type == TokenType.MINUS:
            check_number_operand(expr.operator, right)
            return -right

        raise TypeError(f"not a unary operator: {expr.operator.lexeme!r}")

    def _binary(self, expr):
        left = self.evaluate(expr.left)
        right = self.evaluate(expr.right)
        operator = expr.operator

        if operator.type in COMPARISON:
            check_number_operands(operator, left, right)
            return COMPARISON[operator.type](left, right)
        if operator.type in ARITHMETIC:
            check_number_operands(operator, left, right)
            return ARITHMETIC[operator.type](left, right)
        if operator.type == TokenType.PLUS:
            return add(operator, left, right)
        if operator.type == TokenType.EQUAL_EQUAL:
            return is_equal(left, right)
        if operator.type == TokenType.BANG_EQUAL:
            return not is_equal(left, right)

        raise TypeError(f"not a binary operator: {operator.lexeme!r}")
