from typing import Any, Optional, Tuple, Union


class SipError(Exception):
    """Base class for every error raised by the SIP core."""


class CompileError(SipError):
    """Raised while turning source text into a checked AST."""


class SipRuntimeError(SipError):
    """Raised while evaluating an AST."""


class InvalidCharacter(CompileError):
    """The lexer met a character that starts no token."""
    def __init__(self, char: str, position: int, line: int = 0, column: int = 0):
        super().__init__(f"Invalid character {char!r} at {line}:{column} (offset {position})")
        self.char = char
        self.position = position
        self.line = line
        self.column = column


class UnexpectedToken(CompileError):
    """The parser's lookahead did not match the production being applied.

    `expected` is a single token type for the recursive-descent parser.
    The grammar parser may report several alternatives, in which case it
    is a tuple of token types.
    """
    def __init__(self, expected: Union[Any, Tuple[Any, ...]], actual: Any):
        if isinstance(expected, tuple):
            wanted = 'one of ' + ', '.join(t.name for t in expected)
        else:
            wanted = expected.name
        where = ''
        if getattr(actual, 'line', 0):
            where = f" at {actual.line}:{actual.column}"
        super().__init__(f"Invalid syntax, expected {wanted} but {actual.type.name} found{where}")
        self.expected = expected
        self.actual = actual


class UndefinedVariable(CompileError, SipRuntimeError):
    """A variable was read or assigned without being declared or set."""
    def __init__(self, name: str):
        super().__init__(f"Undefined variable: {name}")
        self.name = name


class DivisionByZero(SipRuntimeError):
    def __init__(self, op: str, left: Optional[Any] = None):
        super().__init__(f"division by zero in {left!r} {op} 0" if left is not None else 'division by zero')
        self.op = op


class ArithmeticOverflow(SipRuntimeError):
    """An operation produced a value Python cannot represent, e.g. an
    integer quotient too large for a float or a truncated infinity."""
    def __init__(self, op: str, left: Any, right: Any, reason: str = ''):
        super().__init__(f"arithmetic overflow in {op}" + (f": {reason}" if reason else ''))
        self.op = op
        self.left = left
        self.right = right
