"""Static type checker for Mini-PL.

The checker walks the program once, top to bottom and left to right,
assigning a `TypeSpec` to every expression and validating every
statement against the declared types of its variables. It stops at the
first error it finds, so the reported error depends only on the program
text.

Scopes are the global scope plus one fresh scope per `for` body. Names
may not be shadowed, but two disjoint loop bodies may declare the same
name.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional

from .ast import (
    Program, Stmt, Expr, VarDecl, Assign, ForLoop, Print, Read, Assert,
    IntLiteral, StringLiteral, BoolLiteral, Ident, BinaryOp, UnaryOp,
)
from .errors import (
    LoopVariableAssignmentError, MissingTypeError, RedeclarationError,
    StaticError, TypeMismatchError, UndeclaredVariableError,
)
from .parser import parse_program
from .tokens import Position
from .types import BOOL, INT, STRING, TypeSpec


@dataclass
class Symbol:
    type_spec: TypeSpec
    pos: Optional[Position]


class TypeChecker:
    def __init__(self):
        self.scopes: List[Dict[str, Symbol]] = [{}]
        self.loop_vars: List[str] = []

    def check(self, program: Program) -> Program:
        self.scopes = [{}]
        self.loop_vars = []
        for stmt in program.body:
            try:
                self.check_statement(stmt)
            except RecursionError:
                raise StaticError('expression nested too deeply', stmt.pos) from None
        return program

    # Scopes

    def push_scope(self) -> None:
        self.scopes.append({})

    def pop_scope(self) -> None:
        self.scopes.pop()

    def lookup(self, name: str) -> Optional[Symbol]:
        for scope in reversed(self.scopes):
            if name in scope:
                return scope[name]
        return None

    def resolve(self, name: str, pos: Optional[Position]) -> Symbol:
        symbol = self.lookup(name)
        if symbol is None:
            raise UndeclaredVariableError(f"variable {name} is not declared", pos)
        return symbol

    # Statements

    def check_statement(self, stmt: Stmt) -> None:
        if isinstance(stmt, VarDecl):
            self.check_var_decl(stmt)
        elif isinstance(stmt, Assign):
            symbol = self.resolve(stmt.name, stmt.pos)
            if stmt.name in self.loop_vars:
                raise LoopVariableAssignmentError(
                    f"cannot assign to loop control variable {stmt.name}", stmt.pos)
            actual = self.check_expression(stmt.expr)
            self.expect(actual, symbol.type_spec, stmt.expr.pos,
                        f"cannot assign {actual} to {stmt.name} of type {symbol.type_spec}")
        elif isinstance(stmt, ForLoop):
            self.check_for_loop(stmt)
        elif isinstance(stmt, Print):
            self.check_expression(stmt.expr)
        elif isinstance(stmt, Read):
            symbol = self.resolve(stmt.name, stmt.pos)
            if stmt.name in self.loop_vars:
                raise LoopVariableAssignmentError(
                    f"cannot read into loop control variable {stmt.name}", stmt.pos)
            if symbol.type_spec not in (INT, STRING):
                raise TypeMismatchError(
                    f"cannot read a value of type {symbol.type_spec} into {stmt.name}", stmt.pos)
        elif isinstance(stmt, Assert):
            actual = self.check_expression(stmt.expr)
            self.expect(actual, BOOL, stmt.expr.pos, f"assert expects bool, got {actual}")
        else:
            raise NotImplementedError(f"check: unexpected node type {type(stmt)}")

    def check_var_decl(self, stmt: VarDecl) -> None:
        if self.lookup(stmt.name) is not None:
            raise RedeclarationError(f"variable {stmt.name} already declared", stmt.pos)
        declared = stmt.type_spec
        if stmt.expr is not None:
            actual = self.check_expression(stmt.expr)
            if declared is None:
                declared = actual
            else:
                self.expect(actual, declared, stmt.expr.pos,
                            f"cannot initialize {stmt.name} of type {declared} with {actual}")
        if declared is None:
            raise MissingTypeError(f"variable {stmt.name} needs a type or an initializer", stmt.pos)
        self.scopes[-1][stmt.name] = Symbol(declared, stmt.pos)

    def check_for_loop(self, stmt: ForLoop) -> None:
        symbol = self.resolve(stmt.var, stmt.pos)
        if symbol.type_spec != INT:
            raise TypeMismatchError(
                f"loop variable {stmt.var} must be int, got {symbol.type_spec}", stmt.pos)
        if stmt.var in self.loop_vars:
            raise LoopVariableAssignmentError(
                f"{stmt.var} already controls an enclosing loop", stmt.pos)
        low = self.check_expression(stmt.low)
        self.expect(low, INT, stmt.low.pos, f"loop bound must be int, got {low}")
        high = self.check_expression(stmt.high)
        self.expect(high, INT, stmt.high.pos, f"loop bound must be int, got {high}")
        self.push_scope()
        self.loop_vars.append(stmt.var)
        try:
            for inner in stmt.body:
                self.check_statement(inner)
        finally:
            self.loop_vars.pop()
            self.pop_scope()

    def expect(self, actual: TypeSpec, wanted: TypeSpec, pos: Optional[Position], message: str) -> None:
        if actual != wanted:
            raise TypeMismatchError(message, pos)

    # Expressions

    def check_expression(self, expr: Expr) -> TypeSpec:
        ty = self.infer(expr)
        expr.static_type = ty
        return ty

    def infer(self, expr: Expr) -> TypeSpec:
        if isinstance(expr, IntLiteral):
            return INT
        if isinstance(expr, StringLiteral):
            return STRING
        if isinstance(expr, BoolLiteral):
            return BOOL
        if isinstance(expr, Ident):
            return self.resolve(expr.name, expr.pos).type_spec
        if isinstance(expr, UnaryOp):
            operand = self.check_expression(expr.operand)
            wanted = INT if expr.op == '-' else BOOL
            self.expect(operand, wanted, expr.pos,
                        f"unary {expr.op} expects {wanted}, got {operand}")
            return wanted
        if isinstance(expr, BinaryOp):
            # operator chains are left-deep; walk the left spine without recursing
            spine: List[BinaryOp] = []
            node: Expr = expr
            while isinstance(node, BinaryOp):
                spine.append(node)
                node = node.left
            result = self.check_expression(node)
            for binop in reversed(spine):
                right = self.check_expression(binop.right)
                result = self.binary_result(binop, result, right)
                binop.static_type = result
            return result
        raise NotImplementedError(f"infer: unexpected node type {type(expr)}")

    def binary_result(self, expr: BinaryOp, left: TypeSpec, right: TypeSpec) -> TypeSpec:
        op = expr.op
        if op == '+' and left == right and left in (INT, STRING):
            return left
        if op in ('+', '-', '*', '/'):
            if left == INT and right == INT:
                return INT
        elif op in ('=', '<'):
            if left == right:
                return BOOL
        elif op == '&':
            if left == BOOL and right == BOOL:
                return BOOL
        else:
            raise NotImplementedError(f"unknown operator {op}")
        raise TypeMismatchError(f"operator {op} not defined for {left} and {right}", expr.pos)


def check_program(source: str) -> Program:
    """Parse and type-check Mini-PL source, returning the annotated AST."""
    program = parse_program(source)
    return TypeChecker().check(program)
