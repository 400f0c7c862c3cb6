"""Tree-walking interpreter for SIP and the public entry points.

`compile_and_check` runs the front end (lexer, parser, checker) and
`evaluate` runs a tree. Both raise the errors in `sip.errors`. The
interpreter can also be used on a tree that was never checked, so it
guards variable reads itself.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Dict, Optional, TextIO, Union

from .ast import (
    Program, Block, VarDecl, ProcedureDecl, Compound, Assign, NoOp,
    BinaryOp, UnaryOp, NumberLiteral, Variable, Node,
)
from .environment import Environment
from .errors import ArithmeticOverflow, DivisionByZero
from . import grammar, parser
from .symbols import SemanticAnalyzer
from .types import format_memory, is_real, to_string, type_name

Number = Union[int, float]


@dataclass
class Evaluation:
    """Outcome of one run: the value of the top node and the final memory.

    `result` is only meaningful when an expression was evaluated; for a
    whole program it is None.
    """
    result: Optional[Number]
    memory: Dict[str, Number] = field(default_factory=dict)


class Interpreter:
    """Core interpreter that evaluates a SIP AST."""
    def __init__(self, debug_level: int = 0, debug_fp: Optional[TextIO] = None):
        self.debug_level = debug_level
        self.debug_fp = debug_fp

    def debug(self, msg: str):
        if self.debug_level > 0 and self.debug_fp:
            self.debug_fp.write(msg + '\n')
            self.debug_fp.flush()

    # Public API
    def interpret(self, tree: Node) -> Evaluation:
        env = Environment()
        if isinstance(tree, (Program, Block, Compound, Assign, VarDecl, ProcedureDecl, NoOp)):
            self.execute(tree, env)
            result = None
        else:
            result = self.evaluate(tree, env)
        memory = env.snapshot()
        if self.debug_level >= 1:
            self.debug('run-time memory contents: ' + ', '.join(format_memory(memory)))
        return Evaluation(result, memory)

    def execute(self, node: Node, env: Environment) -> None:
        if isinstance(node, Program):
            self.execute(node.block, env)
            return
        if isinstance(node, Block):
            for declaration in node.declarations:
                self.execute(declaration, env)
            self.execute(node.compound_statement, env)
            return
        if isinstance(node, Compound):
            for statement in node.statements:
                self.execute(statement, env)
            return
        if isinstance(node, Assign):
            value = self.evaluate(node.expr, env)
            env.set(node.target.name, value)
            if self.debug_level >= 2:
                self.debug(f"assign {node.target.name}: {type_name(value)} = {to_string(value)}")
            return
        # Declarations only matter to the checker; procedures are never called.
        if isinstance(node, (VarDecl, ProcedureDecl, NoOp)):
            return
        raise NotImplementedError(f"execute: unexpected node type {type(node)}")

    def evaluate(self, node: Node, env: Environment) -> Number:
        if isinstance(node, NumberLiteral):
            return node.value
        if isinstance(node, Variable):
            return env.get(node.name)
        if isinstance(node, UnaryOp):
            operand = self.evaluate(node.operand, env)
            if node.op == '-':
                result = -operand
            elif node.op == '+':
                result = +operand
            else:
                raise NotImplementedError(f"unknown unary operator {node.op}")
            if self.debug_level >= 3:
                self.debug(f"{node.op}{to_string(operand)} -> {to_string(result)}")
            return result
        if isinstance(node, BinaryOp):
            left = self.evaluate(node.left, env)
            right = self.evaluate(node.right, env)
            result = self.apply_binary_op(node.op, left, right)
            if self.debug_level >= 3:
                self.debug(f"{to_string(left)} {node.op} {to_string(right)} -> {to_string(result)}")
            return result
        raise NotImplementedError(f"evaluate: unexpected node type {type(node)}")

    def apply_binary_op(self, op: str, a: Number, b: Number) -> Number:
        try:
            return self._arithmetic(op, a, b)
        except (OverflowError, ValueError) as e:
            raise ArithmeticOverflow(op, a, b, str(e)) from e

    def _arithmetic(self, op: str, a: Number, b: Number) -> Number:
        if op == '+':
            return a + b
        if op == '-':
            return a - b
        if op == '*':
            return a * b
        if op == 'DIV':
            if b == 0:
                raise DivisionByZero(op, a)
            if is_real(a, b):
                return math.trunc(a / b)
            # truncate toward zero, unlike Python's floor division
            quotient = abs(a) // abs(b)
            return quotient if (a < 0) == (b < 0) else -quotient
        if op == '/':
            if b == 0:
                raise DivisionByZero(op, a)
            return a / b
        raise NotImplementedError(f"unknown operator {op}")


def compile_and_check(source: str, use_grammar: bool = False, debug_level: int = 0,
                      debug_fp: Optional[TextIO] = None) -> Program:
    """Parse SIP source text and run the checker over the result."""
    if use_grammar:
        tree = grammar.parse_program(source)
    else:
        tree = parser.parse_program(source)
    SemanticAnalyzer(debug_level=debug_level, debug_fp=debug_fp).check(tree)
    return tree


def evaluate(tree: Node, debug_level: int = 0, debug_fp: Optional[TextIO] = None) -> Evaluation:
    """Evaluate an AST and return its value and the final memory."""
    return Interpreter(debug_level=debug_level, debug_fp=debug_fp).interpret(tree)


def evaluate_expression(source: str, use_grammar: bool = False, debug_level: int = 0,
                        debug_fp: Optional[TextIO] = None) -> Number:
    """Evaluate a bare expression like `7 + 3 * 2` without any program around it."""
    if use_grammar:
        tree = grammar.parse_expression(source)
    else:
        tree = parser.parse_expression(source)
    return evaluate(tree, debug_level=debug_level, debug_fp=debug_fp).result


def run_program(source: str, use_grammar: bool = False, debug_level: int = 0,
                debug_fp: Optional[TextIO] = None) -> Dict[str, Number]:
    """Convenience function to compile, check and run a program, returning its memory."""
    tree = compile_and_check(source, use_grammar=use_grammar, debug_level=debug_level, debug_fp=debug_fp)
    return evaluate(tree, debug_level=debug_level, debug_fp=debug_fp).memory
