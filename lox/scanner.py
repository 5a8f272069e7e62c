"""Scanner for the Lox language.

Turns raw source text into a flat list of tokens in a single pass. Errors
(unexpected characters, unterminated strings) are reported through the
session's error handler and scanning carries on, so one run surfaces as
many lexical problems as possible.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, List, Optional

from .tokens import KEYWORDS, Token, TokenType

if TYPE_CHECKING:
    from .session import Session


SINGLE_CHAR_TOKENS = {
    '(': TokenType.LEFT_PAREN,
    ')': TokenType.RIGHT_PAREN,
    '{': TokenType.LEFT_BRACE,
    '}': TokenType.RIGHT_BRACE,
    ',': TokenType.COMMA,
    '.': TokenType.DOT,
    ';': TokenType.SEMICOLON,
    '*': TokenType.STAR,
    '?': TokenType.QUESTION,
    ':': TokenType.COLON,
}

# first char -> (second char, combined type, single type)
TWO_CHAR_TOKENS = {
    '-': ('-', TokenType.MINUS_MINUS, TokenType.MINUS),
    '+': ('+', TokenType.PLUS_PLUS, TokenType.PLUS),
    '!': ('=', TokenType.BANG_EQUAL, TokenType.BANG),
    '=': ('=', TokenType.EQUAL_EQUAL, TokenType.EQUAL),
    '<': ('=', TokenType.LESS_EQUAL, TokenType.LESS),
    '>': ('=', TokenType.GREATER_EQUAL, TokenType.GREATER),
}


def is_digit(c: str) -> bool:
    return '0' <= c <= '9'


def is_alpha(c: str) -> bool:
    return ('a' <= c <= 'z') or ('A' <= c <= 'Z') or c == '_'


def is_alpha_numeric(c: str) -> bool:
    return is_alpha(c) or is_digit(c)


class Scanner:
    def __init__(self, source: str, session: 'Session'):
        self.source = source
        self.session = session
        self.tokens: List[Token] = []
        self.start = 0
        self.current = 0
        self.line = 1

    def scan_tokens(self) -> List[Token]:
        while not self.is_at_end():
            self.start = self.current
            self.scan_token()
        self.tokens.append(Token(TokenType.EOF, '', None, self.line))
        self.session.debug(1, f"scanned {len(self.tokens)} tokens")
        return self.tokens

    def scan_token(self):
        c = self.advance()
        if c in SINGLE_CHAR_TOKENS:
            self.add_token(SINGLE_CHAR_TOKENS[c])
            return
        if c in TWO_CHAR_TOKENS:
            second, combined, single = TWO_CHAR_TOKENS[c]
            self.add_token(combined if self.match(second) else single)
            return
        if c == '/':
            if self.match('/'):
                # comment runs to end of line
                while self.peek() != '\n' and not self.is_at_end():
                    self.advance()
            else:
                self.add_token(TokenType.SLASH)
            return
        if c in (' ', '\r', '\t'):
            return
        if c == '\n':
            self.line += 1
            return
        if c == '"':
            self.string()
            return
        if is_digit(c):
            self.number()
            return
        if is_alpha(c):
            self.identifier()
            return
        self.session.errors.error(self.line, "Unexpected character.")

    def string(self):
        start_line = self.line
        while self.peek() != '"' and not self.is_at_end():
            if self.peek() == '\n':
                self.line += 1
            self.advance()
        if self.is_at_end():
            self.session.errors.error(start_line, "Unterminated string.")
            return
        self.advance()  # closing quote
        value = self.source[self.start + 1:self.current - 1]
        self.add_token(TokenType.STRING, value, start_line)

    def number(self):
        while is_digit(self.peek()):
            self.advance()
        # a trailing '.' without digits is left for the parser (e.g. a method call)
        if self.peek() == '.' and is_digit(self.peek_next()):
            self.advance()
            while is_digit(self.peek()):
                self.advance()
        self.add_token(TokenType.NUMBER, float(self.source[self.start:self.current]))

    def identifier(self):
        while is_alpha_numeric(self.peek()):
            self.advance()
        text = self.source[self.start:self.current]
        self.add_token(KEYWORDS.get(text, TokenType.IDENTIFIER))

    def add_token(self, type_: TokenType, literal: Any = None, line: Optional[int] = None):
        text = self.source[self.start:self.current]
        token = Token(type_, text, literal, self.line if line is None else line)
        self.tokens.append(token)
        self.session.debug(4, f"token {token}")

    def advance(self) -> str:
        self.current += 1
        return self.source[self.current - 1]

    def match(self, expected: str) -> bool:
        if self.is_at_end() or self.source[self.current] != expected:
            return False
        self.current += 1
        return True

    def peek(self) -> str:
        if self.is_at_end():
            return '\0'
        return self.source[self.current]

    def peek_next(self) -> str:
        if self.current + 1 >= len(self.source):
            return '\0'
        return self.source[self.current + 1]

    def is_at_end(self) -> bool:
        return self.current >= len(self.source)


def tokenize(source: str, session: 'Session') -> List[Token]:
    """Convert source code into a list of tokens ending with EOF."""
    return Scanner(source, session).scan_tokens()
