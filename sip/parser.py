"""Recursive-descent parser for SIP.

Each grammar production below maps to one method. The parser keeps a
single token of lookahead (`current_token`) and advances it with `eat`.

    program        : PROGRAM variable SEMI block DOT
    block          : declarations compound_statement
    declarations   : (VAR (var_decl SEMI)+)? (PROCEDURE ID SEMI block SEMI)*
    var_decl       : ID (COMMA ID)* COLON type_spec
    type_spec      : INTEGER | REAL
    compound_stmt  : BEGIN statement_list END
    statement_list : statement (SEMI statement)*
    statement      : compound_stmt | assignment | empty
    assignment     : variable ASSIGN expr
    expr           : term ((PLUS | MINUS) term)*
    term           : factor ((MUL | DIV | FLOAT_DIV) factor)*
    factor         : (PLUS | MINUS) factor | INTEGER_CONST | REAL_CONST
                   | LPAREN expr RPAREN | variable
    variable       : ID
    empty          :
"""

from __future__ import annotations

from typing import List

from .ast import (
    Program, Block, TypeSpec, VarDecl, ProcedureDecl, Compound, Assign,
    NoOp, BinaryOp, UnaryOp, NumberLiteral, Variable, Node,
)
from .errors import UnexpectedToken
from .lexer import Lexer, Token, TokenType


# Token type -> operator spelling stored on BinaryOp / UnaryOp nodes.
OPERATORS = {
    TokenType.PLUS: '+',
    TokenType.MINUS: '-',
    TokenType.MUL: '*',
    TokenType.DIV: 'DIV',
    TokenType.FLOAT_DIV: '/',
}


class Parser:
    def __init__(self, lexer: Lexer):
        self.lexer = lexer
        self.current_token: Token = lexer.get_next_token()

    def eat(self, token_type: TokenType) -> Token:
        """Consume the current token if it has the expected type."""
        token = self.current_token
        if token.type is not token_type:
            raise UnexpectedToken(token_type, token)
        self.current_token = self.lexer.get_next_token()
        return token

    def program(self) -> Program:
        self.eat(TokenType.PROGRAM)
        name = self.variable().name
        self.eat(TokenType.SEMI)
        block = self.block()
        self.eat(TokenType.DOT)
        return Program(name, block)

    def block(self) -> Block:
        declarations = self.declarations()
        compound = self.compound_statement()
        return Block(declarations, compound)

    def declarations(self) -> List[Node]:
        declarations: List[Node] = []

        if self.current_token.type is TokenType.VAR:
            self.eat(TokenType.VAR)
            # at least one declaration must follow VAR
            declarations.extend(self.variable_declaration())
            self.eat(TokenType.SEMI)
            while self.current_token.type is TokenType.ID:
                declarations.extend(self.variable_declaration())
                self.eat(TokenType.SEMI)

        while self.current_token.type is TokenType.PROCEDURE:
            self.eat(TokenType.PROCEDURE)
            name = self.eat(TokenType.ID).value
            self.eat(TokenType.SEMI)
            block = self.block()
            declarations.append(ProcedureDecl(name, block))
            self.eat(TokenType.SEMI)

        return declarations

    def variable_declaration(self) -> List[VarDecl]:
        """`a, b, c : T` yields one VarDecl per name, all sharing type T."""
        variables = [self.variable()]
        while self.current_token.type is TokenType.COMMA:
            self.eat(TokenType.COMMA)
            variables.append(self.variable())
        self.eat(TokenType.COLON)

        type_spec = self.type_spec()
        return [VarDecl(variable, TypeSpec(type_spec.name)) for variable in variables]

    def type_spec(self) -> TypeSpec:
        token = self.current_token
        if token.type is TokenType.INTEGER:
            self.eat(TokenType.INTEGER)
        else:
            self.eat(TokenType.REAL)
        return TypeSpec(token.value)

    def compound_statement(self) -> Compound:
        self.eat(TokenType.BEGIN)
        statements = self.statement_list()
        self.eat(TokenType.END)
        return Compound(statements)

    def statement_list(self) -> List[Node]:
        statements = [self.statement()]
        while self.current_token.type is TokenType.SEMI:
            self.eat(TokenType.SEMI)
            statements.append(self.statement())

        # `x := 1 y := 2`: a statement starts where a separator was due
        if self.current_token.type is TokenType.ID:
            raise UnexpectedToken(TokenType.SEMI, self.current_token)
        return statements

    def statement(self) -> Node:
        if self.current_token.type is TokenType.BEGIN:
            return self.compound_statement()
        if self.current_token.type is TokenType.ID:
            return self.assignment_statement()
        return self.empty()

    def assignment_statement(self) -> Assign:
        target = self.variable()
        self.eat(TokenType.ASSIGN)
        expr = self.expr()
        return Assign(target, expr)

    def variable(self) -> Variable:
        token = self.eat(TokenType.ID)
        return Variable(token.value)

    def empty(self) -> NoOp:
        return NoOp()

    def expr(self) -> Node:
        node = self.term()
        while self.current_token.type in (TokenType.PLUS, TokenType.MINUS):
            token = self.eat(self.current_token.type)
            node = BinaryOp(OPERATORS[token.type], node, self.term())
        return node

    def term(self) -> Node:
        node = self.factor()
        while self.current_token.type in (TokenType.MUL, TokenType.DIV, TokenType.FLOAT_DIV):
            token = self.eat(self.current_token.type)
            node = BinaryOp(OPERATORS[token.type], node, self.factor())
        return node

    def factor(self) -> Node:
        token = self.current_token
        if token.type in (TokenType.PLUS, TokenType.MINUS):
            self.eat(token.type)
            return UnaryOp(OPERATORS[token.type], self.factor())
        if token.type is TokenType.INTEGER_CONST:
            self.eat(TokenType.INTEGER_CONST)
            return NumberLiteral(token.value)
        if token.type is TokenType.REAL_CONST:
            self.eat(TokenType.REAL_CONST)
            return NumberLiteral(token.value)
        if token.type is TokenType.LPAREN:
            self.eat(TokenType.LPAREN)
            node = self.expr()
            self.eat(TokenType.RPAREN)
            return node
        return self.variable()

    def parse(self) -> Program:
        """Parse a whole program; nothing may follow its final DOT."""
        node = self.program()
        if self.current_token.type is not TokenType.EOF:
            raise UnexpectedToken(TokenType.EOF, self.current_token)
        return node

    def parse_expression(self) -> Node:
        """Parse a bare expression that makes up the entire input."""
        node = self.expr()
        if self.current_token.type is not TokenType.EOF:
            raise UnexpectedToken(TokenType.EOF, self.current_token)
        return node


def parse_program(source: str) -> Program:
    """Parse SIP source text into a Program AST."""
    return Parser(Lexer(source)).parse()


def parse_expression(source: str) -> Node:
    """Parse a standalone arithmetic expression such as `7 + 3 * 2`."""
    return Parser(Lexer(source)).parse_expression()
