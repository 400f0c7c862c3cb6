"""Tokens and the lexical analyzer for SIP.

The lexer walks the source text one character at a time and hands out
tokens on demand through `Lexer.get_next_token`. It never looks further
ahead than a single character (`peek`), which is all the language needs
to tell `:=` apart from `:`.

Whitespace is spaces, tabs, `\\r` and `\\n`. Tabs are accepted on top of
spaces and line terminators so tab-indented and CRLF files lex; the Lark
grammar in `sip.grammar` skips the same set.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterator, Optional

from .errors import InvalidCharacter


class TokenType(Enum):
    INTEGER_CONST = 'INTEGER_CONST'
    REAL_CONST = 'REAL_CONST'
    ID = 'ID'
    PLUS = '+'
    MINUS = '-'
    MUL = '*'
    DIV = 'DIV'
    FLOAT_DIV = '/'
    COLON = ':'
    COMMA = ','
    LPAREN = '('
    RPAREN = ')'
    BEGIN = 'BEGIN'
    END = 'END'
    PROGRAM = 'PROGRAM'
    PROCEDURE = 'PROCEDURE'
    VAR = 'VAR'
    DOT = '.'
    ASSIGN = ':='
    SEMI = ';'
    INTEGER = 'INTEGER'
    REAL = 'REAL'
    EOF = 'EOF'


@dataclass(frozen=True)
class Token:
    type: TokenType
    value: Any = None
    line: int = field(default=0, compare=False)
    column: int = field(default=0, compare=False)

    def __str__(self) -> str:
        return f"Token({self.type.name}, {self.value!r})"


# Keywords are matched exactly as written: `begin` is an identifier.
RESERVED_KEYWORDS: Dict[str, TokenType] = {
    'PROGRAM': TokenType.PROGRAM,
    'VAR': TokenType.VAR,
    'DIV': TokenType.DIV,
    'BEGIN': TokenType.BEGIN,
    'END': TokenType.END,
    'INTEGER': TokenType.INTEGER,
    'REAL': TokenType.REAL,
    'PROCEDURE': TokenType.PROCEDURE,
}

WHITESPACE = ' \t\r\n'

SINGLE_CHAR_TOKENS: Dict[str, TokenType] = {
    '+': TokenType.PLUS,
    '-': TokenType.MINUS,
    '*': TokenType.MUL,
    '/': TokenType.FLOAT_DIV,
    '(': TokenType.LPAREN,
    ')': TokenType.RPAREN,
    ',': TokenType.COMMA,
    ';': TokenType.SEMI,
    '.': TokenType.DOT,
}


def _is_digit(c: str) -> bool:
    return '0' <= c <= '9'


def _is_alnum(c: str) -> bool:
    return _is_digit(c) or ('a' <= c <= 'z') or ('A' <= c <= 'Z')


class Lexer:
    """Forward-only scanner over a piece of source text."""
    def __init__(self, text: str):
        self.text = text.strip()
        self.pos = 0
        self.line = 1
        self.column = 1
        self.current_char: Optional[str] = self.text[0] if self.text else None

    def error(self):
        raise InvalidCharacter(self.current_char, self.pos, self.line, self.column)

    def advance(self) -> None:
        """Move `pos` one character forward and refresh `current_char`."""
        if self.current_char == '\n':
            self.line += 1
            self.column = 1
        else:
            self.column += 1
        self.pos += 1
        if self.pos > len(self.text) - 1:
            self.current_char = None
        else:
            self.current_char = self.text[self.pos]

    def peek(self) -> Optional[str]:
        peek_pos = self.pos + 1
        if peek_pos > len(self.text) - 1:
            return None
        return self.text[peek_pos]

    def skip_whitespace(self) -> None:
        while self.current_char is not None and self.current_char in WHITESPACE:
            self.advance()

    def skip_comment(self) -> None:
        start = (self.pos, self.line, self.column)
        self.advance()  # the opening brace
        while self.current_char is not None and self.current_char != '}':
            self.advance()
        if self.current_char is None:
            pos, line, column = start
            raise InvalidCharacter('{', pos, line, column)
        self.advance()  # the closing brace

    def number(self) -> Token:
        """Return an INTEGER_CONST or REAL_CONST token."""
        line, column = self.line, self.column
        result = ''
        while self.current_char is not None and _is_digit(self.current_char):
            result += self.current_char
            self.advance()

        if self.current_char == '.':
            result += self.current_char
            self.advance()
            while self.current_char is not None and _is_digit(self.current_char):
                result += self.current_char
                self.advance()
            return Token(TokenType.REAL_CONST, float(result), line, column)

        return Token(TokenType.INTEGER_CONST, int(result), line, column)

    def identifier(self) -> Token:
        """Return an ID token or the reserved keyword it spells."""
        line, column = self.line, self.column
        result = ''
        while self.current_char is not None and _is_alnum(self.current_char):
            result += self.current_char
            self.advance()

        token_type = RESERVED_KEYWORDS.get(result)
        if token_type is not None:
            return Token(token_type, result, line, column)
        return Token(TokenType.ID, result, line, column)

    def get_next_token(self) -> Token:
        while self.current_char is not None:
            c = self.current_char

            if c in WHITESPACE:
                self.skip_whitespace()
                continue

            if c == '{':
                self.skip_comment()
                continue

            if _is_alnum(c) and not _is_digit(c):
                return self.identifier()

            if _is_digit(c):
                return self.number()

            line, column = self.line, self.column

            if c == ':':
                if self.peek() == '=':
                    self.advance()
                    self.advance()
                    return Token(TokenType.ASSIGN, ':=', line, column)
                self.advance()
                return Token(TokenType.COLON, ':', line, column)

            token_type = SINGLE_CHAR_TOKENS.get(c)
            if token_type is not None:
                self.advance()
                return Token(token_type, c, line, column)

            self.error()

        return Token(TokenType.EOF, None, self.line, self.column)

    def __iter__(self) -> Iterator[Token]:
        """Yield tokens up to and including EOF."""
        while True:
            token = self.get_next_token()
            yield token
            if token.type is TokenType.EOF:
                return
