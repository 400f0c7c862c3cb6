from sip.interpreter import compile_and_check, evaluate


def test_program_2_float_division(example_source):
    tree = compile_and_check(example_source('program_2.pas'))
    memory = evaluate(tree).memory
    assert memory == {'y': 2.5}
    assert isinstance(memory['y'], float)
