"""Recursive-descent parser for Mini-PL.

The parser reads one token of lookahead at a time and builds the AST
defined in `minipl.ast`. Expression precedence, from loosest to
tightest binding, is: ``&``, relational (``=`` ``<``), additive
(``+`` ``-``), multiplicative (``*`` ``/``), unary (``-`` ``!``). All
binary operators associate to the left.

The first syntax error raises `ParseError`; there is no recovery and no
partial tree is handed back. Parentheses and prefix operators nest by
recursion, so nesting deeper than the interpreter's recursion limit is
reported as a `ParseError` too.
"""

from __future__ import annotations

from typing import Iterable, List, Optional, Sequence, Union

from .ast import (
    Program, Stmt, Expr, VarDecl, Assign, ForLoop, Print, Read, Assert,
    IntLiteral, StringLiteral, BoolLiteral, Ident, BinaryOp, UnaryOp,
)
from .errors import ParseError
from .lexer import decode_string, tokenize
from .tokens import Token
from .types import TYPE_NAMES, TypeSpec


STATEMENT_START = ['VAR', 'IDENT', 'FOR', 'PRINT', 'READ', 'ASSERT']
OPERAND_START = ['INTEGER', 'STRING', 'TRUE', 'FALSE', 'IDENT', 'LPAR', 'MINUS', 'NOT']


class Parser:
    def __init__(self, tokens: Iterable[Token], source: str = ''):
        self.tokens = iter(tokens)
        self.source = source
        self.current: Token = next(self.tokens)
        self.previous: Optional[Token] = None

    def peek(self) -> Token:
        return self.current

    def advance(self) -> Token:
        token = self.current
        self.previous = token
        if token.kind != 'EOF':
            self.current = next(self.tokens)
        return token

    def match(self, expected: Union[str, Sequence[str]]) -> bool:
        if isinstance(expected, str):
            return self.current.kind == expected
        return self.current.kind in expected

    def consume(self, expected: Union[str, Sequence[str]]) -> Token:
        if not self.match(expected):
            self.error(expected)
        return self.advance()

    def error(self, expected: Union[str, Sequence[str]]):
        if isinstance(expected, str):
            expected = [expected]
        raise ParseError(self.current.position, expected, self.current)

    # Statements

    def parse_program(self) -> Program:
        statements: List[Stmt] = [self.parse_terminated_statement()]
        while not self.match('EOF'):
            statements.append(self.parse_terminated_statement())
        self.consume('EOF')
        return Program(statements)

    def parse_terminated_statement(self) -> Stmt:
        stmt = self.parse_statement()
        self.consume('SEMICOLON')
        return stmt

    def parse_statement(self) -> Stmt:
        token = self.peek()
        if token.kind == 'VAR':
            return self.parse_var_decl()
        if token.kind == 'IDENT':
            return self.parse_assign()
        if token.kind == 'FOR':
            return self.parse_for_loop()
        if token.kind == 'PRINT':
            self.advance()
            return Print(self.parse_expression(), pos=token.position)
        if token.kind == 'READ':
            self.advance()
            name = self.consume('IDENT')
            return Read(name.text, pos=token.position)
        if token.kind == 'ASSERT':
            return self.parse_assert()
        self.error(STATEMENT_START)

    def parse_var_decl(self) -> VarDecl:
        keyword = self.consume('VAR')
        name = self.consume('IDENT')
        type_spec: Optional[TypeSpec] = None
        expr: Optional[Expr] = None
        if self.match('COLON'):
            self.advance()
            type_spec = self.parse_type()
        if self.match('ASSIGN'):
            self.advance()
            expr = self.parse_expression()
        elif type_spec is None and not self.match('SEMICOLON'):
            self.error(['COLON', 'ASSIGN', 'SEMICOLON'])
        return VarDecl(name.text, type_spec, expr, pos=keyword.position)

    def parse_type(self) -> TypeSpec:
        token = self.consume(list(TYPE_NAMES))
        return TYPE_NAMES[token.kind]

    def parse_assign(self) -> Assign:
        name = self.consume('IDENT')
        self.consume('ASSIGN')
        expr = self.parse_expression()
        return Assign(name.text, expr, pos=name.position)

    def parse_for_loop(self) -> ForLoop:
        keyword = self.consume('FOR')
        var = self.consume('IDENT')
        self.consume('IN')
        low = self.parse_expression()
        self.consume('RANGE')
        high = self.parse_expression()
        self.consume('DO')
        body: List[Stmt] = []
        while not self.match('END'):
            if not self.match(STATEMENT_START):
                self.error(STATEMENT_START + ['END'])
            body.append(self.parse_terminated_statement())
        self.consume('END')
        self.consume('FOR')
        return ForLoop(var.text, low, high, body, pos=keyword.position)

    def parse_assert(self) -> Assert:
        keyword = self.consume('ASSERT')
        self.consume('LPAR')
        first = self.peek()
        expr = self.parse_expression()
        last = self.previous
        self.consume('RPAR')
        text = self.source_between(first, last)
        return Assert(expr, text, pos=keyword.position)

    def source_between(self, first: Token, last: Token) -> str:
        if self.source:
            return self.source[first.offset:last.offset + len(last.text)]
        return first.text if first is last else f"{first.text} ... {last.text}"

    # Expressions

    def parse_expression(self) -> Expr:
        return self.parse_and()

    def parse_and(self) -> Expr:
        node = self.parse_relation()
        while self.match('AND'):
            op_token = self.advance()
            right = self.parse_relation()
            node = BinaryOp(op_token.text, node, right, pos=op_token.position)
        return node

    def parse_relation(self) -> Expr:
        node = self.parse_additive()
        while self.match(['EQUAL', 'LESS']):
            op_token = self.advance()
            right = self.parse_additive()
            node = BinaryOp(op_token.text, node, right, pos=op_token.position)
        return node

    def parse_additive(self) -> Expr:
        node = self.parse_multiplicative()
        while self.match(['PLUS', 'MINUS']):
            op_token = self.advance()
            right = self.parse_multiplicative()
            node = BinaryOp(op_token.text, node, right, pos=op_token.position)
        return node

    def parse_multiplicative(self) -> Expr:
        node = self.parse_unary()
        while self.match(['STAR', 'SLASH']):
            op_token = self.advance()
            right = self.parse_unary()
            node = BinaryOp(op_token.text, node, right, pos=op_token.position)
        return node

    def parse_unary(self) -> Expr:
        if self.match(['MINUS', 'NOT']):
            op_token = self.advance()
            operand = self.parse_unary()
            return UnaryOp(op_token.text, operand, pos=op_token.position)
        return self.parse_primary()

    def parse_primary(self) -> Expr:
        token = self.peek()
        if token.kind == 'INTEGER':
            self.advance()
            return IntLiteral(int(token.text), pos=token.position)
        if token.kind == 'STRING':
            self.advance()
            return StringLiteral(decode_string(token.text), pos=token.position)
        if token.kind in ('TRUE', 'FALSE'):
            self.advance()
            return BoolLiteral(token.kind == 'TRUE', pos=token.position)
        if token.kind == 'IDENT':
            self.advance()
            return Ident(token.text, pos=token.position)
        if token.kind == 'LPAR':
            self.advance()
            expr = self.parse_expression()
            self.consume('RPAR')
            return expr
        self.error(OPERAND_START)


def parse_program(source: str) -> Program:
    """Parse Mini-PL source code into a Program AST.

    The whole source is lexed before parsing starts, so a lexical error
    anywhere in the file wins over a syntax error.
    """
    tokens = tokenize(source)
    parser = Parser(tokens, source)
    try:
        return parser.parse_program()
    except RecursionError:
        raise ParseError(parser.current.position, (), parser.current,
                         'expression nested too deeply') from None
