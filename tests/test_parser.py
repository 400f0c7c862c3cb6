import pytest

from sip.ast import (
    Program, Block, TypeSpec, VarDecl, ProcedureDecl, Compound, Assign,
    NoOp, BinaryOp, UnaryOp, NumberLiteral, Variable,
)
from sip.errors import UnexpectedToken
from sip.lexer import TokenType
from sip.parser import parse_expression, parse_program


def test_multiplication_binds_tighter_than_addition():
    assert parse_expression('2 + 3 * 4') == BinaryOp(
        '+', NumberLiteral(2), BinaryOp('*', NumberLiteral(3), NumberLiteral(4)),
    )


def test_binary_operators_are_left_associative():
    assert parse_expression('8 - 3 - 1') == BinaryOp(
        '-', BinaryOp('-', NumberLiteral(8), NumberLiteral(3)), NumberLiteral(1),
    )
    assert parse_expression('8 DIV 2 / 2') == BinaryOp(
        '/', BinaryOp('DIV', NumberLiteral(8), NumberLiteral(2)), NumberLiteral(2),
    )


def test_parentheses_override_precedence():
    assert parse_expression('(2 + 3) * 4') == BinaryOp(
        '*', BinaryOp('+', NumberLiteral(2), NumberLiteral(3)), NumberLiteral(4),
    )


def test_unary_operators_nest():
    assert parse_expression('- - 5') == UnaryOp('-', UnaryOp('-', NumberLiteral(5)))
    assert parse_expression('-(2 + 3)') == UnaryOp('-', BinaryOp('+', NumberLiteral(2), NumberLiteral(3)))
    assert parse_expression('a * -+b') == BinaryOp('*', Variable('a'), UnaryOp('-', UnaryOp('+', Variable('b'))))


def test_full_program_structure():
    source = '''
        PROGRAM demo;
        VAR a, b : INTEGER;
            c : REAL;
        PROCEDURE helper;
        BEGIN END;
        BEGIN
            a := 1;
            BEGIN b := a END;
        END.
    '''
    assert parse_program(source) == Program(
        'demo',
        Block(
            [
                VarDecl(Variable('a'), TypeSpec('INTEGER')),
                VarDecl(Variable('b'), TypeSpec('INTEGER')),
                VarDecl(Variable('c'), TypeSpec('REAL')),
                ProcedureDecl('helper', Block([], Compound([NoOp()]))),
            ],
            Compound([
                Assign(Variable('a'), NumberLiteral(1)),
                Compound([Assign(Variable('b'), Variable('a'))]),
                NoOp(),
            ]),
        ),
    )


def test_var_decl_nodes_do_not_share_type_spec():
    program = parse_program('PROGRAM p; VAR a, b : REAL; BEGIN END.')
    first, second = program.block.declarations
    assert first.type_spec == second.type_spec
    assert first.type_spec is not second.type_spec


def test_empty_program_body():
    program = parse_program('PROGRAM p; BEGIN END.')
    assert program.block == Block([], Compound([NoOp()]))


def test_unmatched_parenthesis():
    with pytest.raises(UnexpectedToken) as excinfo:
        parse_program('PROGRAM p4; BEGIN a := (1 + 2 END.')
    assert excinfo.value.expected is TokenType.RPAREN
    assert excinfo.value.actual.type is TokenType.END


def test_missing_semicolon_between_statements():
    with pytest.raises(UnexpectedToken) as excinfo:
        parse_program('PROGRAM p; BEGIN a := 1 b := 2 END.')
    assert excinfo.value.expected is TokenType.SEMI
    assert excinfo.value.actual.value == 'b'


def test_trailing_tokens_after_program():
    with pytest.raises(UnexpectedToken) as excinfo:
        parse_program('PROGRAM p; BEGIN END. x')
    assert excinfo.value.expected is TokenType.EOF
    assert excinfo.value.actual.type is TokenType.ID


def test_missing_final_dot():
    with pytest.raises(UnexpectedToken) as excinfo:
        parse_program('PROGRAM p; BEGIN END')
    assert excinfo.value.expected is TokenType.DOT
    assert excinfo.value.actual.type is TokenType.EOF


def test_var_section_needs_a_declaration():
    with pytest.raises(UnexpectedToken) as excinfo:
        parse_program('PROGRAM p; VAR BEGIN END.')
    assert excinfo.value.expected is TokenType.ID


def test_bad_type_name():
    with pytest.raises(UnexpectedToken) as excinfo:
        parse_program('PROGRAM p; VAR a : BOOLEAN; BEGIN END.')
    assert excinfo.value.expected is TokenType.REAL
    assert excinfo.value.actual.value == 'BOOLEAN'


def test_missing_operand():
    with pytest.raises(UnexpectedToken) as excinfo:
        parse_expression('1 +')
    assert excinfo.value.expected is TokenType.ID
    assert excinfo.value.actual.type is TokenType.EOF


def test_bare_expression_rejects_trailing_tokens():
    with pytest.raises(UnexpectedToken) as excinfo:
        parse_expression('1 2')
    assert excinfo.value.expected is TokenType.EOF


def test_parsing_is_deterministic():
    source = 'PROGRAM p; VAR x : REAL; BEGIN x := -(1.5 + 2) * 3 DIV 4 / 5 END.'
    assert parse_program(source) == parse_program(source)
