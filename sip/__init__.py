# SIP language package
# This package provides a lexer, parser, checker and interpreter for SIP,
# a small Pascal-like language.
from .errors import (
    SipError, CompileError, SipRuntimeError, InvalidCharacter, UnexpectedToken,
    UndefinedVariable, DivisionByZero, ArithmeticOverflow,
)
from .interpreter import (
    compile_and_check, evaluate, evaluate_expression, run_program, Evaluation, Interpreter,
)

__all__ = [
    'compile_and_check',
    'evaluate',
    'evaluate_expression',
    'run_program',
    'Evaluation',
    'Interpreter',
    'SipError',
    'CompileError',
    'SipRuntimeError',
    'InvalidCharacter',
    'UnexpectedToken',
    'UndefinedVariable',
    'DivisionByZero',
    'ArithmeticOverflow',
]
