import pytest

from sip.errors import DivisionByZero, SipRuntimeError
from sip.interpreter import compile_and_check, evaluate


def test_program_7_integer_division_by_zero(example_source):
    tree = compile_and_check(example_source('program_7.pas'))
    with pytest.raises(DivisionByZero) as excinfo:
        evaluate(tree)
    assert excinfo.value.op == 'DIV'
    assert isinstance(excinfo.value, SipRuntimeError)
