import pytest

from sip.errors import UnexpectedToken
from sip.interpreter import compile_and_check
from sip.lexer import TokenType


def test_program_4_unmatched_parenthesis(example_source):
    with pytest.raises(UnexpectedToken) as excinfo:
        compile_and_check(example_source('program_4.pas'))
    assert excinfo.value.expected is TokenType.RPAREN
    assert excinfo.value.actual.type is TokenType.END
