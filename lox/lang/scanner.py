"""Lexical analysis for Lox. Turns source text into a list of Tokens, terminated by a single EOF token.

The scanner never raises: unexpected characters and unterminated strings are reported through the Reporter and
skipped, so that later errors in the same source are still found.
"""

from lox.lang.error import Reporter
from lox.lang.tokens import KEYWORDS, Token, TokenType


SINGLE = {
    "(": TokenType.LEFT_PAREN,
    ")": TokenType.RIGHT_PAREN,
    "{": TokenType.LEFT_BRACE,
    "}": TokenType.RIGHT_BRACE,
    ",": TokenType.COMMA,
    ".": TokenType.DOT,
    "-": TokenType.MINUS,
    "+": TokenType.PLUS,
    ";": TokenType.SEMICOLON,
    "*": TokenType.STAR,
}

# char: (type if followed by "=", type otherwise)
LOOKAHEAD = {
    "!": (TokenType.BANG_EQUAL, TokenType.BANG),
    "=": (TokenType.EQUAL_EQUAL, TokenType.EQUAL),
    "<": (TokenType.LESS_EQUAL, TokenType.LESS),
    ">": (TokenType.GREATER_EQUAL, TokenType.GREATER),
}

WHITESPACE = (" ", "\r", "\t")


def is_digit(char):
    return "0" <= char <= "9"


def is_alpha(char):
    return "a" <= char <= "z" or "A" <= char <= "Z" or char == "_"


def is_alphanumeric(char):
    return is_alpha(char) or is_digit(char)


class Scanner:
    """Single forward pass over source. start and current delimit the lexeme being scanned, line is the source line
    current is on.
    """

    def __init__(self, source, reporter=None):
        self.source = source
        self.reporter = reporter if reporter is not None else Reporter()

        self.tokens = []
        self.start = 0
        self.current = 0
        self.line = 1

    @property
    def is_at_end(self):
        return self.current >= len(self.source)

    @property
    def peek(self):
        """Current character, not consumed. "\\0" at end of source."""
        return "\0" if self.is_at_end else self.source[self.current]

    @property
    def peek_next(self):
        """Character after the current one, not consumed."""
        if self.current + 1 >= len(self.source):
            return "\0"
        return self.source[self.current + 1]

    def scan_tokens(self):
        """Scans the whole source and returns the token list. Can only be called once per Scanner."""
        while not self.is_at_end:
            self.start = self.current  # beginning of the next lexeme
            self.scan_token()

        self.tokens.append(Token(TokenType.EOF, "", None, self.line))
        return self.tokens

    def scan_token(self):
        char = self.advance()

        if char in SINGLE:
            self.add_token(SINGLE[char])

        elif char in LOOKAHEAD:
            two_char, one_char = LOOKAHEAD[char]
            self.add_token(two_char if self.match("=") else one_char)

        elif char == "/":
            if self.match("/"):
                while self.peek != "\n" and not self.is_at_end:  # comment goes until the end of the line
                    self.advance()
            else:
                self.add_token(TokenType.SLASH)

        elif char in WHITESPACE:
            pass

        elif char == "\n":
            self.line += 1

        elif char == "\"":
            self.string()

        elif is_digit(char):
            self.number()

        elif is_alpha(char):
            self.identifier()

        else:
            self.reporter.report_lex(self.line, "Unexpected character.")

    def string(self):
        """Consumes through the closing quote. Strings may span lines and have no escape sequences."""
        while self.peek != "\"" and not self.is_at_end:
            if self.peek == "\n":
                self.line += 1
            self.advance()

        if self.is_at_end:
            self.reporter.report_lex(self.line, "Unterminated string.")
            return

        self.advance()  # the closing "
        self.add_token(TokenType.STRING, self.source[self.start + 1:self.current - 1])

    def number(self):
        """Consumes a digit run with an optional fractional part. A trailing '.' is left for a DOT token."""
        while is_digit(self.peek):
            self.advance()

        if self.peek == "." and is_digit(self.peek_next):
            self.advance()
            while is_digit(self.peek):
                self.advance()

        self.add_token(TokenType.NUMBER, float(self.source[self.start:self.current]))

    def identifier(self):
        while is_alphanumeric(self.peek):
            self.advance()

        text = self.source[self.start:self.current]
        self.add_token(KEYWORDS.get(text, TokenType.IDENTIFIER))

    def advance(self):
        char = self.source[self.current]
        self.current += 1
        return char

    def match(self, expected):
        """Consumes the current character only if it is expected."""
        if self.is_at_end or self.source[self.current] != expected:
            return False
        self.current += 1
        return True

    def add_token(self, token_type, literal=None):
        text = self.source[self.start:self.current]
        self.tokens.append(Token(token_type, text, literal, self.line))


def scan(source, reporter=None):
    """Returns the tokens of source, reporting lexical errors to reporter."""
    return Scanner(source, reporter).scan_tokens()
