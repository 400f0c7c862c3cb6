"""JSON serialization/deserialization for SIP ASTs.

This module converts between the AST dataclasses and plain Python
dict/list structures suitable for JSON encoding. Every node kind
round-trips; numbers keep their INTEGER/REAL kind because JSON keeps
`2` and `2.0` apart.
"""

from __future__ import annotations

from typing import Any, Dict

from .ast import (
    Program,
    Block,
    TypeSpec,
    VarDecl,
    ProcedureDecl,
    Compound,
    Assign,
    NoOp,
    BinaryOp,
    UnaryOp,
    NumberLiteral,
    Variable,
    BINARY_OPS,
    UNARY_OPS,
    BUILTIN_TYPE_NAMES,
)


def ast_to_obj(node: Any) -> Any:
    if isinstance(node, Program):
        return {"type": "Program", "name": node.name, "block": ast_to_obj(node.block)}
    if isinstance(node, Block):
        return {
            "type": "Block",
            "declarations": [ast_to_obj(d) for d in node.declarations],
            "compound_statement": ast_to_obj(node.compound_statement),
        }
    if isinstance(node, TypeSpec):
        return {"type": "TypeSpec", "name": node.name}
    if isinstance(node, VarDecl):
        return {
            "type": "VarDecl",
            "variable": ast_to_obj(node.variable),
            "type_spec": ast_to_obj(node.type_spec),
        }
    if isinstance(node, ProcedureDecl):
        return {"type": "ProcedureDecl", "name": node.name, "block": ast_to_obj(node.block)}
    if isinstance(node, Compound):
        return {"type": "Compound", "statements": [ast_to_obj(s) for s in node.statements]}
    if isinstance(node, Assign):
        return {"type": "Assign", "target": ast_to_obj(node.target), "expr": ast_to_obj(node.expr)}
    if isinstance(node, NoOp):
        return {"type": "NoOp"}
    if isinstance(node, BinaryOp):
        return {"type": "BinaryOp", "op": node.op, "left": ast_to_obj(node.left), "right": ast_to_obj(node.right)}
    if isinstance(node, UnaryOp):
        return {"type": "UnaryOp", "op": node.op, "operand": ast_to_obj(node.operand)}
    if isinstance(node, NumberLiteral):
        return {"type": "NumberLiteral", "value": node.value}
    if isinstance(node, Variable):
        return {"type": "Variable", "name": node.name}

    raise TypeError(f"Unsupported node for serialization: {type(node).__name__}")


def ast_from_obj(obj: Dict[str, Any]) -> Any:
    if not isinstance(obj, dict):
        raise TypeError("Invalid AST object")
    t = obj.get("type")
    if t == "Program":
        return Program(name=obj["name"], block=ast_from_obj(obj["block"]))
    if t == "Block":
        return Block(
            declarations=[ast_from_obj(d) for d in obj["declarations"]],
            compound_statement=ast_from_obj(obj["compound_statement"]),
        )
    if t == "TypeSpec":
        if obj["name"] not in BUILTIN_TYPE_NAMES:
            raise ValueError(f"Unknown type name: {obj['name']}")
        return TypeSpec(name=obj["name"])
    if t == "VarDecl":
        return VarDecl(variable=ast_from_obj(obj["variable"]), type_spec=ast_from_obj(obj["type_spec"]))
    if t == "ProcedureDecl":
        return ProcedureDecl(name=obj["name"], block=ast_from_obj(obj["block"]))
    if t == "Compound":
        return Compound(statements=[ast_from_obj(s) for s in obj["statements"]])
    if t == "Assign":
        return Assign(target=ast_from_obj(obj["target"]), expr=ast_from_obj(obj["expr"]))
    if t == "NoOp":
        return NoOp()
    if t == "BinaryOp":
        if obj["op"] not in BINARY_OPS:
            raise ValueError(f"Unknown binary operator: {obj['op']}")
        return BinaryOp(op=obj["op"], left=ast_from_obj(obj["left"]), right=ast_from_obj(obj["right"]))
    if t == "UnaryOp":
        if obj["op"] not in UNARY_OPS:
            raise ValueError(f"Unknown unary operator: {obj['op']}")
        return UnaryOp(op=obj["op"], operand=ast_from_obj(obj["operand"]))
    if t == "NumberLiteral":
        value = obj["value"]
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ValueError(f"Invalid number literal: {value!r}")
        return NumberLiteral(value=value)
    if t == "Variable":
        return Variable(name=obj["name"])

    raise ValueError(f"Unknown AST node type: {t}")
