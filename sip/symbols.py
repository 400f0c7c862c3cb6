"""Symbols, the symbol table and the static checker.

The checker walks a parsed tree before it is run. It records every
declared variable together with its built-in type and rejects reads and
assignments of names that were never declared. It produces no value:
`check` either returns normally or raises `UndefinedVariable`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional, TextIO

from .ast import (
    Program, Block, VarDecl, ProcedureDecl, Compound, Assign, NoOp,
    BinaryOp, UnaryOp, NumberLiteral, Variable, Node,
)
from .errors import UndefinedVariable


@dataclass(frozen=True)
class BuiltinTypeSymbol:
    name: str

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class VariableSymbol:
    name: str
    type: BuiltinTypeSymbol

    def __str__(self) -> str:
        return f"<{self.name}:{self.type}>"


class SymbolTable:
    """A single flat scope seeded with the built-in types."""
    def __init__(self):
        self.symbols: Dict[str, object] = {}
        self.define(BuiltinTypeSymbol('INTEGER'))
        self.define(BuiltinTypeSymbol('REAL'))

    def define(self, symbol) -> None:
        # redeclaring a name replaces the previous symbol
        self.symbols[symbol.name] = symbol

    def lookup(self, name: str) -> Optional[object]:
        return self.symbols.get(name)

    def __str__(self) -> str:
        return 'Symbols: [' + ', '.join(str(s) for s in self.symbols.values()) + ']'


class SemanticAnalyzer:
    """Builds the symbol table and checks variable use."""
    def __init__(self, debug_level: int = 0, debug_fp: Optional[TextIO] = None):
        self.symbol_table = SymbolTable()
        self.debug_level = debug_level
        self.debug_fp = debug_fp

    def debug(self, msg: str):
        if self.debug_level > 0 and self.debug_fp:
            self.debug_fp.write(msg + '\n')
            self.debug_fp.flush()

    def check(self, tree: Node) -> SymbolTable:
        self.visit(tree)
        if self.debug_level >= 1:
            self.debug(f"symbol table contents: {self.symbol_table}")
        return self.symbol_table

    def visit(self, node: Node) -> None:
        if isinstance(node, Program):
            self.visit(node.block)
            return
        if isinstance(node, Block):
            for declaration in node.declarations:
                self.visit(declaration)
            self.visit(node.compound_statement)
            return
        if isinstance(node, VarDecl):
            type_symbol = self.symbol_table.lookup(node.type_spec.name)
            var_symbol = VariableSymbol(node.variable.name, type_symbol)
            self.symbol_table.define(var_symbol)
            if self.debug_level >= 2:
                self.debug(f"define {var_symbol}")
            return
        if isinstance(node, Compound):
            for statement in node.statements:
                self.visit(statement)
            return
        if isinstance(node, Assign):
            self.require(node.target.name)
            self.visit(node.expr)
            return
        if isinstance(node, Variable):
            self.require(node.name)
            return
        if isinstance(node, BinaryOp):
            self.visit(node.left)
            self.visit(node.right)
            return
        if isinstance(node, UnaryOp):
            self.visit(node.operand)
            return
        # Procedure bodies are neither checked nor run.
        if isinstance(node, (ProcedureDecl, NumberLiteral, NoOp)):
            return
        raise NotImplementedError(f"check: unexpected node type {type(node)}")

    def require(self, name: str) -> None:
        if not isinstance(self.symbol_table.lookup(name), VariableSymbol):
            raise UndefinedVariable(name)
