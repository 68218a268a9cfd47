"""Recursive-descent parser for Lox expressions.

Each grammar rule is one method, and precedence is encoded by the order the rules call each other (lowest precedence
first):

```
expression -> equality
equality   -> comparison ( ( "!=" | "==" ) comparison )*
comparison -> term ( ( ">" | ">=" | "<" | "<=" ) term )*
term       -> factor ( ( "-" | "+" ) factor )*
factor     -> unary ( ( "/" | "*" ) unary )*
unary      -> ( "!" | "-" ) unary | primary
primary    -> NUMBER | STRING | "true" | "false" | "nil" | "(" expression ")"
```

Binary rules are left-associative loops, unary is right-associative through recursion.
"""

from lox.lang.error import ParseError, Reporter
from lox.lang.expr import Binary, Grouping, Literal, Unary
from lox.lang.tokens import TokenType


EQUALITY = (TokenType.BANG_EQUAL, TokenType.EQUAL_EQUAL)
COMPARISON = (TokenType.GREATER, TokenType.GREATER_EQUAL, TokenType.LESS, TokenType.LESS_EQUAL)
TERM = (TokenType.MINUS, TokenType.PLUS)
FACTOR = (TokenType.SLASH, TokenType.STAR)
UNARY = (TokenType.BANG, TokenType.MINUS)

# tokens that begin a statement, used as recovery points by synchronize
STATEMENT_START = (
    TokenType.CLASS, TokenType.FUN, TokenType.VAR, TokenType.FOR,
    TokenType.IF, TokenType.WHILE, TokenType.PRINT, TokenType.RETURN,
)


class Parser:
    """Holds the full token list and a cursor into it. tokens must end with an EOF token (as produced by Scanner)."""

    def __init__(self, tokens, reporter=None):
        self.tokens = tokens
        self.reporter = reporter if reporter is not None else Reporter()
        self.current = 0

    def parse(self):
        """Parses a single expression. Returns None if a syntax error was reported."""
        try:
            return self.expression()
        except ParseError:
            self.synchronize()
            return None
        except RecursionError:
            self.reporter.report_syntax(self.peek, "Expression too deeply nested.")
            return None

    # grammar rules

    def expression(self):
        return self.equality()

    def equality(self):
        return self._binary(self.comparison, EQUALITY)

    def comparison(self):
        return self._binary(self.term, COMPARISON)

    def term(self):
        return self._binary(self.factor, TERM)

    def factor(self):
        return self._binary(self.unary, FACTOR)

    def unary(self):
        if self.match(*UNARY):
            operator = self.previous
            return Unary(operator, self.unary())
        return self.primary()

    def primary(self):
        if self.match(TokenType.FALSE):
            return Literal(False)
        if self.match(TokenType.TRUE):
            return Literal(True)
        if self.match(TokenType.NIL):
            return Literal(None)

        if self.match(TokenType.NUMBER, TokenType.STRING):
            return Literal(self.previous.literal)

        if self.match(TokenType.LEFT_PAREN):
            expr = self.expression()
            self.consume(TokenType.RIGHT_PAREN, "Expect ')' after expression.")
            return Grouping(expr)

        raise self.error(self.peek, "Expect expression.")

    def _binary(self, operand, operators):
        """Left-associative rule: operand ( operator operand )*"""
        expr = operand()
        while self.match(*operators):
            operator = self.previous
            expr = Binary(expr, operator, operand())
        return expr

    # token cursor

    @property
    def peek(self):
        """Current token, not consumed yet."""
        return self.tokens[self.current]

    @property
    def previous(self):
        """Most recently consumed token."""
        return self.tokens[self.current - 1]

    @property
    def is_at_end(self):
        return self.peek.type == TokenType.EOF

    def advance(self):
        if not self.is_at_end:
            self.current += 1
        return self.previous

    def check(self, token_type):
        if self.is_at_end:
            return False
        return self.peek.type == token_type

    def match(self, *token_types):
        """Consumes the current token if it has any of token_types."""
        for token_type in token_types:
            if self.check(token_type):
                self.advance()
                return True
        return False

    def consume(self, token_type, message):
        if self.check(token_type):
            return self.advance()
        raise self.error(self.peek, message)

    def error(self, token, message):
        """Reports message at token and returns (does not raise) the ParseError to unwind with."""
        self.reporter.report_syntax(token, message)
        return ParseError(message)

    def synchronize(self):
        """Discards tokens until just past a ';' or until the next token starts a statement."""
        self.advance()

        while not self.is_at_end:
            if self.previous.type == TokenType.SEMICOLON:
                return
            if self.peek.type in STATEMENT_START:
                return
            self.advance()


def parse(tokens, reporter=None):
    """Returns the expression tree for tokens, or None if a syntax error was reported to reporter."""
    return Parser(tokens, reporter).parse()
