"""Interpreter for the Mini-PL language.

This module evaluates a type-checked Mini-PL AST by walking it
statement by statement. Variables live in an `Environment`; each `for`
iteration runs its body in a child environment so that names declared
inside the body disappear when the iteration ends. Console access goes
through injected reader/writer objects (see `minipl.std.io.BasicIO`),
which makes programs easy to drive from tests.

Execution is strictly sequential. Any error halts the run: output
already written stays written, nothing further executes.
"""

from __future__ import annotations

import re
from typing import Any, Optional

from .ast import (
    Program, Stmt, Expr, VarDecl, Assign, ForLoop, Print, Read, Assert,
    IntLiteral, StringLiteral, BoolLiteral, Ident, BinaryOp, UnaryOp,
)
from .checker import TypeChecker
from .environment import Environment
from .errors import AssertionFailure, DivisionByZero, InputParseFailure, MiniPLRuntimeError
from .parser import parse_program
from .std.io import BasicIO
from .types import INT, to_string, type_name

INTEGER_INPUT = re.compile(r'-?[0-9]+')


class Interpreter:
    """Core interpreter that executes a Mini-PL AST."""
    def __init__(self, reader=None, writer=None, debug_level: int = 0, debug_file: str = 'debug.txt'):
        console = BasicIO()
        self.reader = reader if reader is not None else console
        self.writer = writer if writer is not None else console
        self.global_env = Environment()
        self.debug_level = debug_level
        self.debug_file = debug_file
        self.debug_fp = None
        self.halted = False

    def debug(self, msg: str, level: int = 1):
        if self.debug_level >= level:
            if self.debug_fp:
                self.debug_fp.write(msg + '\n')
                self.debug_fp.flush()
            else:
                print(msg)

    # Public API
    def run(self, program: Program) -> None:
        """Type-check `program`, then execute it against the global environment.

        The check also fills in the static types that inferred declarations
        read, so an unchecked tree straight from the parser runs as well.
        """
        if self.halted:
            raise RuntimeError('interpreter has already run; create a new one')
        self.halted = True
        if self.debug_level > 0:
            self.debug_fp = open(self.debug_file, 'w', encoding='utf-8')
        try:
            TypeChecker().check(program)
            self.debug(f"run: {len(program.body)} statements")
            self.execute_block(program.body, self.global_env)
            self.debug("run: finished")
        except RecursionError:
            self.debug("run: halted by recursion limit")
            raise MiniPLRuntimeError('expression nested too deeply') from None
        except Exception as e:
            self.debug(f"run: halted by {e}")
            raise
        finally:
            if self.debug_fp:
                self.debug_fp.close()
                self.debug_fp = None

    def execute_block(self, statements, env: Environment) -> None:
        for stmt in statements:
            self.execute(stmt, env)

    def execute(self, node: Stmt, env: Environment) -> None:
        if isinstance(node, VarDecl):
            type_spec = node.type_spec if node.type_spec is not None else node.expr.static_type
            value = self.evaluate(node.expr, env) if node.expr is not None else None
            env.declare(node.name, type_spec, value)
            self.debug(f"declare {node.name}: {type_spec} = {env.get(node.name)!r}", 2)
            return
        if isinstance(node, Assign):
            value = self.evaluate(node.expr, env)
            env.set(node.name, value)
            self.debug(f"assign {node.name} = {value!r}", 2)
            return
        if isinstance(node, ForLoop):
            self.execute_for(node, env)
            return
        if isinstance(node, Print):
            value = self.evaluate(node.expr, env)
            self.writer.write(to_string(value))
            return
        if isinstance(node, Read):
            self.execute_read(node, env)
            return
        if isinstance(node, Assert):
            if not self.evaluate(node.expr, env):
                raise AssertionFailure(node.pos, node.source_text)
            return
        raise NotImplementedError(f"execute: unexpected node type {type(node)}")

    def execute_for(self, node: ForLoop, env: Environment) -> None:
        # bounds are fixed before the first iteration
        low = self.evaluate(node.low, env)
        high = self.evaluate(node.high, env)
        self.debug(f"for {node.var} in {low}..{high}", 3)
        if low > high:
            return
        for i in range(low, high + 1):
            env.set(node.var, i)
            self.debug(f"  {node.var} = {i}", 3)
            self.execute_block(node.body, Environment(parent=env))
        env.set(node.var, high + 1)

    def execute_read(self, node: Read, env: Environment) -> None:
        type_spec = env.type_of(node.name)
        token = self.reader.read_token()
        if token is None:
            raise InputParseFailure(f"end of input while reading {node.name}", node.pos)
        if type_spec == INT:
            if not INTEGER_INPUT.fullmatch(token):
                raise InputParseFailure(f"expected an integer, got {token!r}", node.pos)
            value: Any = int(token)
        else:
            value = token
        self.debug(f"read {node.name} = {value!r}", 3)
        env.set(node.name, value)

    def evaluate(self, node: Expr, env: Environment) -> Any:
        if isinstance(node, (IntLiteral, StringLiteral, BoolLiteral)):
            return node.value
        if isinstance(node, Ident):
            return env.get(node.name)
        if isinstance(node, UnaryOp):
            operand = self.evaluate(node.operand, env)
            if node.op == '!':
                return not operand
            if node.op == '-':
                return -operand
            raise NotImplementedError(f"unsupported unary operator {node.op}")
        if isinstance(node, BinaryOp):
            spine = []
            while isinstance(node, BinaryOp):
                spine.append(node)
                node = node.left
            value = self.evaluate(node, env)
            for binop in reversed(spine):
                right = self.evaluate(binop.right, env)
                value = self.apply_binary_op(binop, value, right)
            return value
        raise NotImplementedError(f"evaluate: unexpected node type {type(node)}")

    def apply_binary_op(self, node: BinaryOp, a: Any, b: Any) -> Any:
        op = node.op
        if op == '+':
            # int addition or string concatenation, fixed by the checker
            return a + b
        if op == '-':
            return a - b
        if op == '*':
            return a * b
        if op == '/':
            if b == 0:
                raise DivisionByZero('integer division by zero', node.pos)
            # truncate toward zero
            quotient = abs(a) // abs(b)
            return quotient if (a < 0) == (b < 0) else -quotient
        if op == '=':
            return a == b
        if op == '<':
            return a < b
        if op == '&':
            return a and b
        raise NotImplementedError(f"unknown operator {op} for {type_name(a)} and {type_name(b)}")


def run_program(source: str, reader=None, writer=None, debug_level: int = 0,
                debug_file: str = 'debug.txt') -> Interpreter:
    """Convenience function to check and run a Mini-PL program from source string."""
    program = parse_program(source)
    interpreter = Interpreter(reader=reader, writer=writer, debug_level=debug_level, debug_file=debug_file)
    interpreter.run(program)
    return interpreter
