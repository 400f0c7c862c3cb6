from sip.interpreter import evaluate
from sip.parser import parse_program
from sip.symbols import SemanticAnalyzer


def test_program_6_redeclaration_is_allowed(example_source):
    tree = parse_program(example_source('program_6.pas'))
    symtab = SemanticAnalyzer().check(tree)
    assert str(symtab.lookup('a')) == '<a:REAL>'
    assert evaluate(tree).memory == {'a': 1.5}
