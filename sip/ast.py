"""Abstract Syntax Tree (AST) definitions for SIP.

The node set is closed: every pass over the tree (checker, interpreter,
JSON codec) handles exactly these classes and fails loudly on anything
else. Each node owns its children; trees are never shared.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Union


@dataclass
class Node:
    """Base class for all AST nodes."""
    pass


@dataclass
class Program(Node):
    name: str
    block: 'Block'


@dataclass
class Block(Node):
    declarations: List[Node]  # VarDecl or ProcedureDecl, in source order
    compound_statement: 'Compound'


@dataclass
class TypeSpec(Node):
    name: str  # 'INTEGER' or 'REAL'


@dataclass
class VarDecl(Node):
    variable: 'Variable'
    type_spec: TypeSpec


@dataclass
class ProcedureDecl(Node):
    name: str
    block: Block


@dataclass
class Compound(Node):
    statements: List[Node] = field(default_factory=list)


@dataclass
class Assign(Node):
    target: 'Variable'
    expr: Node


@dataclass
class NoOp(Node):
    pass


@dataclass
class BinaryOp(Node):
    op: str  # '+', '-', '*', 'DIV' or '/'
    left: Node
    right: Node


@dataclass
class UnaryOp(Node):
    op: str  # '+' or '-'
    operand: Node


@dataclass
class NumberLiteral(Node):
    value: Union[int, float]


@dataclass
class Variable(Node):
    name: str


BINARY_OPS = ('+', '-', '*', 'DIV', '/')
UNARY_OPS = ('+', '-')
BUILTIN_TYPE_NAMES = ('INTEGER', 'REAL')
