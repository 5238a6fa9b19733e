"""Lexer for the Mini-PL language.

Tokenization is delegated to lark's basic lexer, configured with a
grammar that only lists terminals. Lark takes care of the longest-match
ordering between overlapping terminals (``:=`` before ``:``, block
comments before ``/``) and of telling keywords apart from identifiers.
This module adapts lark's tokens into `Token` objects, turns the two
"unterminated" terminals into errors, and appends the end-of-input
token.

A `Lexer` is lazy and restartable: each iteration re-lexes the source
from the beginning and produces tokens on demand.
"""

from __future__ import annotations

import re
from typing import Iterator, List

from lark import Lark
from lark.exceptions import UnexpectedCharacters

from .errors import LexicalError
from .tokens import Position, Token


MINIPL_TOKENS = r"""
    start: token*

    ?token: VAR | FOR | IN | DO | END | READ | PRINT | ASSERT
          | INT_TYPE | STRING_TYPE | BOOL_TYPE | TRUE | FALSE
          | IDENT | INTEGER | STRING
          | ASSIGN | RANGE | PLUS | MINUS | STAR | SLASH
          | EQUAL | LESS | AND | NOT
          | COLON | SEMICOLON | LPAR | RPAR
          | UNTERMINATED_STRING | UNTERMINATED_COMMENT

    // Keywords
    VAR: "var"
    FOR: "for"
    IN: "in"
    DO: "do"
    END: "end"
    READ: "read"
    PRINT: "print"
    ASSERT: "assert"
    INT_TYPE: "int"
    STRING_TYPE: "string"
    BOOL_TYPE: "bool"
    TRUE: "true"
    FALSE: "false"

    // Literals and identifiers
    IDENT: /[A-Za-z][A-Za-z0-9_]*/
    INTEGER: /[0-9]+/
    STRING: /"(\\[\s\S]|[^"\\])*"/

    // Operators and punctuation
    ASSIGN: ":="
    RANGE: ".."
    PLUS: "+"
    MINUS: "-"
    STAR: "*"
    SLASH: "/"
    EQUAL: "="
    LESS: "<"
    AND: "&"
    NOT: "!"
    COLON: ":"
    SEMICOLON: ";"
    LPAR: "("
    RPAR: ")"

    // A quote or comment opener that the complete forms above failed to match
    UNTERMINATED_STRING: "\""
    UNTERMINATED_COMMENT: "/*"

    // Comments
    LINE_COMMENT: /\/\/[^\n]*/
    BLOCK_COMMENT: /\/\*[\s\S]*?\*\//

    %import common.WS
    %ignore WS
    %ignore LINE_COMMENT
    %ignore BLOCK_COMMENT
"""


MINIPL_LEXER = Lark(
    MINIPL_TOKENS,
    parser='lalr',
    lexer='basic',
)


ESCAPES = {
    'n': '\n',
    't': '\t',
    '"': '"',
    '\\': '\\',
}

_ESCAPE_RE = re.compile(r'\\(.)', re.DOTALL)


def decode_string(text: str) -> str:
    """Turn a string literal lexeme (quotes included) into its value."""
    return _ESCAPE_RE.sub(lambda m: ESCAPES[m.group(1)], text[1:-1])


def end_position(source: str) -> Position:
    """Position just past the last character of `source`."""
    line = source.count('\n') + 1
    column = len(source) - (source.rfind('\n') + 1) + 1
    return Position(line, column)


class Lexer:
    """Produces the token stream of a Mini-PL source text."""

    def __init__(self, source: str):
        self.source = source

    def __iter__(self) -> Iterator[Token]:
        return self.tokens()

    def tokens(self) -> Iterator[Token]:
        try:
            for raw in MINIPL_LEXER.lex(self.source):
                yield self.convert(raw)
        except UnexpectedCharacters as e:
            raise LexicalError(Position(e.line, e.column), e.char) from None
        end = end_position(self.source)
        yield Token('EOF', '', end.line, end.column, len(self.source))

    def convert(self, raw) -> Token:
        token = Token(raw.type, str(raw), raw.line, raw.column, raw.start_pos)
        if token.kind == 'UNTERMINATED_STRING':
            raise LexicalError(token.position, '"', 'unterminated string literal')
        if token.kind == 'UNTERMINATED_COMMENT':
            raise LexicalError(token.position, '/', 'unterminated block comment')
        if token.kind == 'STRING':
            self.check_escapes(token)
        return token

    def check_escapes(self, token: Token):
        for m in _ESCAPE_RE.finditer(token.text):
            if m.group(1) in ESCAPES:
                continue
            # locate the backslash inside a possibly multi-line literal
            before = token.text[:m.start()]
            newlines = before.count('\n')
            if newlines:
                column = m.start() - before.rfind('\n')
            else:
                column = token.column + m.start()
            raise LexicalError(
                Position(token.line + newlines, column),
                '\\',
                f"unknown escape sequence '\\{m.group(1)}'",
            )


def tokenize(source: str) -> List[Token]:
    """Lex the whole source eagerly, including the trailing EOF token."""
    return list(Lexer(source))
