"""Abstract Syntax Tree (AST) definitions for Mini-PL.

The AST classes defined in this module represent the syntactic structure
of parsed Mini-PL programs. Statements own their expressions and nested
statement lists; nothing is shared between nodes. Every node records
the source position it was parsed from so later phases can report
errors against the original text. Positions do not take part in
equality, so two trees parsed from differently laid out text compare
equal.

Expression nodes also carry a `static_type` slot, filled in by the
type checker and likewise ignored by equality comparisons.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from .tokens import Position
from .types import TypeSpec


@dataclass
class Node:
    """Base class for all AST nodes."""
    pass


@dataclass
class Program(Node):
    body: List[Node]


# Expressions

@dataclass
class Expr(Node):
    pass


@dataclass
class IntLiteral(Expr):
    value: int
    pos: Optional[Position] = field(default=None, compare=False)
    static_type: Optional[TypeSpec] = field(default=None, compare=False, repr=False)


@dataclass
class StringLiteral(Expr):
    value: str
    pos: Optional[Position] = field(default=None, compare=False)
    static_type: Optional[TypeSpec] = field(default=None, compare=False, repr=False)


@dataclass
class BoolLiteral(Expr):
    value: bool
    pos: Optional[Position] = field(default=None, compare=False)
    static_type: Optional[TypeSpec] = field(default=None, compare=False, repr=False)


@dataclass
class Ident(Expr):
    name: str
    pos: Optional[Position] = field(default=None, compare=False)
    static_type: Optional[TypeSpec] = field(default=None, compare=False, repr=False)


@dataclass
class BinaryOp(Expr):
    op: str
    left: Expr
    right: Expr
    pos: Optional[Position] = field(default=None, compare=False)
    static_type: Optional[TypeSpec] = field(default=None, compare=False, repr=False)


@dataclass
class UnaryOp(Expr):
    op: str
    operand: Expr
    pos: Optional[Position] = field(default=None, compare=False)
    static_type: Optional[TypeSpec] = field(default=None, compare=False, repr=False)


# Statements

@dataclass
class Stmt(Node):
    pass


@dataclass
class VarDecl(Stmt):
    name: str
    type_spec: Optional[TypeSpec]
    expr: Optional[Expr]  # initial value
    pos: Optional[Position] = field(default=None, compare=False)


@dataclass
class Assign(Stmt):
    name: str
    expr: Expr
    pos: Optional[Position] = field(default=None, compare=False)


@dataclass
class ForLoop(Stmt):
    var: str
    low: Expr
    high: Expr
    body: List[Stmt]
    pos: Optional[Position] = field(default=None, compare=False)


@dataclass
class Print(Stmt):
    expr: Expr
    pos: Optional[Position] = field(default=None, compare=False)


@dataclass
class Read(Stmt):
    name: str
    pos: Optional[Position] = field(default=None, compare=False)


@dataclass
class Assert(Stmt):
    expr: Expr
    source_text: str = ''  # text of the asserted expression
    pos: Optional[Position] = field(default=None, compare=False)
