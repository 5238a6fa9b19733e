"""JSON serialization/deserialization for the Mini-PL AST.

This module converts between Mini-PL AST dataclasses and plain Python
dict/list structures suitable for JSON encoding. Source positions are
kept as ``[line, column]`` pairs so that a program loaded back from
JSON still reports errors against its original source. Static type
annotations are not serialized; run the type checker after loading.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from .ast import (
    Program,
    Stmt,
    Expr,
    VarDecl,
    Assign,
    ForLoop,
    Print,
    Read,
    Assert,
    IntLiteral,
    StringLiteral,
    BoolLiteral,
    Ident,
    BinaryOp,
    UnaryOp,
)
from .tokens import Position
from .types import TYPE_NAMES, TypeSpec

BINARY_OPS = {"+", "-", "*", "/", "=", "<", "&"}
UNARY_OPS = {"-", "!"}
TYPE_KINDS = {t.kind for t in TYPE_NAMES.values()}


def typespec_to_obj(t: TypeSpec) -> Dict[str, Any]:
    return {"kind": t.kind}


def typespec_from_obj(o: Dict[str, Any]) -> TypeSpec:
    if o["kind"] not in TYPE_KINDS:
        raise ValueError(f"Unknown type kind: {o['kind']!r}")
    return TypeSpec(o["kind"])


def pos_to_obj(pos: Optional[Position]) -> Any:
    if pos is None:
        return None
    return [pos.line, pos.column]


def pos_from_obj(o: Any) -> Optional[Position]:
    if o is None:
        return None
    return Position(int(o[0]), int(o[1]))


def ast_to_obj(node: Any) -> Any:
    # Primitives
    if node is None:
        return None
    if isinstance(node, (int, str, bool)):
        return node

    # TypeSpec
    if isinstance(node, TypeSpec):
        return {"__type__": "TypeSpec", "value": typespec_to_obj(node)}

    # Node types
    if isinstance(node, Program):
        return {"type": "Program", "body": [ast_to_obj(n) for n in node.body]}
    if isinstance(node, VarDecl):
        return {
            "type": "VarDecl",
            "name": node.name,
            "type_spec": ast_to_obj(node.type_spec),
            "expr": ast_to_obj(node.expr),
            "pos": pos_to_obj(node.pos),
        }
    if isinstance(node, Assign):
        return {"type": "Assign", "name": node.name, "expr": ast_to_obj(node.expr), "pos": pos_to_obj(node.pos)}
    if isinstance(node, ForLoop):
        return {
            "type": "ForLoop",
            "var": node.var,
            "low": ast_to_obj(node.low),
            "high": ast_to_obj(node.high),
            "body": [ast_to_obj(s) for s in node.body],
            "pos": pos_to_obj(node.pos),
        }
    if isinstance(node, Print):
        return {"type": "Print", "expr": ast_to_obj(node.expr), "pos": pos_to_obj(node.pos)}
    if isinstance(node, Read):
        return {"type": "Read", "name": node.name, "pos": pos_to_obj(node.pos)}
    if isinstance(node, Assert):
        return {
            "type": "Assert",
            "expr": ast_to_obj(node.expr),
            "source_text": node.source_text,
            "pos": pos_to_obj(node.pos),
        }
    if isinstance(node, (IntLiteral, StringLiteral, BoolLiteral)):
        return {"type": type(node).__name__, "value": node.value, "pos": pos_to_obj(node.pos)}
    if isinstance(node, Ident):
        return {"type": "Ident", "name": node.name, "pos": pos_to_obj(node.pos)}
    if isinstance(node, BinaryOp):
        return {
            "type": "BinaryOp",
            "op": node.op,
            "left": ast_to_obj(node.left),
            "right": ast_to_obj(node.right),
            "pos": pos_to_obj(node.pos),
        }
    if isinstance(node, UnaryOp):
        return {"type": "UnaryOp", "op": node.op, "operand": ast_to_obj(node.operand), "pos": pos_to_obj(node.pos)}

    raise TypeError(f"Unsupported node for serialization: {type(node).__name__}")


def load_as(obj: Any, cls: type, optional: bool = False) -> Any:
    """Decode `obj` and require the result to be a `cls` instance."""
    if obj is None and optional:
        return None
    node = ast_from_obj(obj)
    if not isinstance(node, cls):
        raise TypeError(f"expected {cls.__name__}, got {type(node).__name__}")
    return node


def ast_from_obj(obj: Any) -> Any:
    if obj is None or isinstance(obj, (int, str, bool)):
        return obj
    if isinstance(obj, dict) and obj.get("__type__") == "TypeSpec":
        return typespec_from_obj(obj["value"])
    if not isinstance(obj, dict):
        raise TypeError("Invalid AST object")
    t = obj.get("type")
    pos = pos_from_obj(obj.get("pos"))
    if t == "Program":
        return Program(body=[load_as(n, Stmt) for n in obj["body"]])
    if t == "VarDecl":
        return VarDecl(
            name=obj["name"],
            type_spec=load_as(obj.get("type_spec"), TypeSpec, optional=True),
            expr=load_as(obj.get("expr"), Expr, optional=True),
            pos=pos,
        )
    if t == "Assign":
        return Assign(name=obj["name"], expr=load_as(obj["expr"], Expr), pos=pos)
    if t == "ForLoop":
        return ForLoop(
            var=obj["var"],
            low=load_as(obj["low"], Expr),
            high=load_as(obj["high"], Expr),
            body=[load_as(s, Stmt) for s in obj["body"]],
            pos=pos,
        )
    if t == "Print":
        return Print(expr=load_as(obj["expr"], Expr), pos=pos)
    if t == "Read":
        return Read(name=obj["name"], pos=pos)
    if t == "Assert":
        return Assert(expr=load_as(obj["expr"], Expr), source_text=obj.get("source_text", ""), pos=pos)
    if t == "IntLiteral":
        return IntLiteral(value=int(obj["value"]), pos=pos)
    if t == "StringLiteral":
        return StringLiteral(value=str(obj["value"]), pos=pos)
    if t == "BoolLiteral":
        return BoolLiteral(value=bool(obj["value"]), pos=pos)
    if t == "Ident":
        return Ident(name=obj["name"], pos=pos)
    if t == "BinaryOp":
        if obj["op"] not in BINARY_OPS:
            raise ValueError(f"Unknown binary operator: {obj['op']!r}")
        return BinaryOp(op=obj["op"], left=load_as(obj["left"], Expr), right=load_as(obj["right"], Expr), pos=pos)
    if t == "UnaryOp":
        if obj["op"] not in UNARY_OPS:
            raise ValueError(f"Unknown unary operator: {obj['op']!r}")
        return UnaryOp(op=obj["op"], operand=load_as(obj["operand"], Expr), pos=pos)

    raise ValueError(f"Unknown AST node type: {t}")
