"""Grammar-driven parser for SIP.

This module accepts the same language as `sip.parser`, but describes it
declaratively with a Lark LALR grammar. The parse tree Lark produces is
turned into the very same AST classes by `ASTTransformer`, so the two
front ends can be swapped freely (`compile_and_check(use_grammar=True)`
or `python -m sip --grammar`) and checked against each other.

Terminal names in the grammar are the `TokenType` member names, which
lets Lark's syntax errors be reported with the package's own
`UnexpectedToken` and `InvalidCharacter` errors.
"""

from __future__ import annotations

from typing import List

from lark import Lark, Transformer, Token as LarkToken
from lark.exceptions import UnexpectedCharacters, UnexpectedEOF, UnexpectedToken as LarkUnexpectedToken

from .ast import (
    Program, Block, TypeSpec, VarDecl, ProcedureDecl, Compound, Assign,
    NoOp, BinaryOp, UnaryOp, NumberLiteral, Variable, Node,
)
from .errors import InvalidCharacter, UnexpectedToken
from .lexer import Token, TokenType


SIP_GRAMMAR = r"""
    program: PROGRAM variable SEMI block DOT

    block: declarations compound_statement
    declarations: var_section? procedure_decl*
    var_section: VAR (var_decl SEMI)+
    var_decl: variable (COMMA variable)* COLON type_spec
    type_spec: INTEGER | REAL
    procedure_decl: PROCEDURE ID SEMI block SEMI

    compound_statement: BEGIN statement_list END
    statement_list: statement (SEMI statement)*
    ?statement: compound_statement
              | assignment
              | empty
    assignment: variable ASSIGN expr
    empty:

    // Expressions, loosest binding first
    ?expr: term
         | expr PLUS term -> binop
         | expr MINUS term -> binop
    ?term: factor
         | term MUL factor -> binop
         | term DIV factor -> binop
         | term FLOAT_DIV factor -> binop
    ?factor: PLUS factor -> unaryop
           | MINUS factor -> unaryop
           | INTEGER_CONST -> number
           | REAL_CONST -> number
           | LPAREN expr RPAREN -> paren
           | variable
    variable: ID

    // Keywords are case-sensitive; `Lark` re-types an ID that spells one.
    PROGRAM: "PROGRAM"
    VAR: "VAR"
    PROCEDURE: "PROCEDURE"
    BEGIN: "BEGIN"
    END: "END"
    INTEGER: "INTEGER"
    REAL: "REAL"
    DIV: "DIV"
    ID: /[A-Za-z][A-Za-z0-9]*/

    REAL_CONST: /[0-9]+\.[0-9]*/
    INTEGER_CONST: /[0-9]+/

    ASSIGN: ":="
    COLON: ":"
    COMMA: ","
    SEMI: ";"
    DOT: "."
    PLUS: "+"
    MINUS: "-"
    MUL: "*"
    FLOAT_DIV: "/"
    LPAREN: "("
    RPAREN: ")"

    COMMENT: /\{[^}]*\}/
    WHITESPACE: /[ \t\r\n]+/
    %ignore COMMENT
    %ignore WHITESPACE
"""


SIP_PARSER = Lark(
    SIP_GRAMMAR,
    start=['program', 'expr'],
    parser='lalr',
    lexer='basic',
    propagate_positions=True,
)

OPERATORS = {
    'PLUS': '+',
    'MINUS': '-',
    'MUL': '*',
    'DIV': 'DIV',
    'FLOAT_DIV': '/',
}


def _nodes(items) -> List[Node]:
    """Drop the punctuation/keyword tokens Lark keeps in named rules."""
    return [item for item in items if not isinstance(item, LarkToken)]


class ASTTransformer(Transformer):
    """Transforms the Lark parse tree into a SIP AST."""

    def program(self, items):
        variable, block = _nodes(items)
        return Program(variable.name, block)

    def block(self, items):
        declarations, compound = items
        return Block(declarations, compound)

    def declarations(self, items):
        declarations: List[Node] = []
        for item in items:
            if isinstance(item, list):
                declarations.extend(item)
            else:
                declarations.append(item)
        return declarations

    def var_section(self, items):
        decls: List[VarDecl] = []
        for group in _nodes(items):
            decls.extend(group)
        return decls

    def var_decl(self, items):
        nodes = _nodes(items)
        type_spec = nodes[-1]
        return [VarDecl(variable, TypeSpec(type_spec.name)) for variable in nodes[:-1]]

    def type_spec(self, items):
        return TypeSpec(str(items[0]))

    def procedure_decl(self, items):
        name = str(items[1])
        block = _nodes(items)[0]
        return ProcedureDecl(name, block)

    def compound_statement(self, items):
        return Compound(_nodes(items)[0])

    def statement_list(self, items):
        return _nodes(items)

    def assignment(self, items):
        target, expr = _nodes(items)
        return Assign(target, expr)

    def empty(self, items):
        return NoOp()

    def binop(self, items):
        left, op, right = items
        return BinaryOp(OPERATORS[op.type], left, right)

    def unaryop(self, items):
        op, operand = items
        return UnaryOp(OPERATORS[op.type], operand)

    def number(self, items):
        token = items[0]
        if token.type == 'REAL_CONST':
            return NumberLiteral(float(token))
        return NumberLiteral(int(token))

    def paren(self, items):
        return items[1]

    def variable(self, items):
        return Variable(str(items[0]))


def _token_type(name: str) -> TokenType:
    if name == '$END':
        return TokenType.EOF
    return TokenType[name]


def _translate(error: Exception) -> Exception:
    """Map a Lark syntax error onto the package's error types."""
    if isinstance(error, UnexpectedCharacters):
        return InvalidCharacter(error.char, error.pos_in_stream, error.line, error.column)
    if isinstance(error, LarkUnexpectedToken):
        lark_token = error.token
        token_type = _token_type(lark_token.type)
        value = None if token_type is TokenType.EOF else str(lark_token)
        actual = Token(token_type, value, getattr(lark_token, 'line', 0) or 0, getattr(lark_token, 'column', 0) or 0)
    else:
        actual = Token(TokenType.EOF, None)
    expected = sorted(
        (_token_type(name) for name in error.expected if name == '$END' or name in TokenType.__members__),
        key=lambda t: t.name,
    )
    if len(expected) == 1:
        return UnexpectedToken(expected[0], actual)
    return UnexpectedToken(tuple(expected), actual)


def _parse(source: str, start: str) -> Node:
    try:
        tree = SIP_PARSER.parse(source.strip(), start=start)
    except (UnexpectedCharacters, LarkUnexpectedToken, UnexpectedEOF) as e:
        raise _translate(e) from e
    return ASTTransformer().transform(tree)


def parse_program(source: str) -> Program:
    """Parse SIP source text into a Program AST using the Lark grammar."""
    return _parse(source, 'program')


def parse_expression(source: str) -> Node:
    """Parse a standalone expression using the Lark grammar."""
    return _parse(source, 'expr')
