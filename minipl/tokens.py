"""Token and source position types shared by the lexer and parser."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Position:
    line: int
    column: int

    def __str__(self) -> str:
        return f"{self.line}:{self.column}"


KEYWORDS = {
    'var': 'VAR',
    'for': 'FOR',
    'in': 'IN',
    'do': 'DO',
    'end': 'END',
    'read': 'READ',
    'print': 'PRINT',
    'int': 'INT_TYPE',
    'string': 'STRING_TYPE',
    'bool': 'BOOL_TYPE',
    'assert': 'ASSERT',
    'true': 'TRUE',
    'false': 'FALSE',
}

OPERATORS = {
    'ASSIGN': ':=',
    'PLUS': '+',
    'MINUS': '-',
    'STAR': '*',
    'SLASH': '/',
    'EQUAL': '=',
    'LESS': '<',
    'AND': '&',
    'NOT': '!',
    'RANGE': '..',
}

PUNCTUATION = {
    'COLON': ':',
    'SEMICOLON': ';',
    'LPAR': '(',
    'RPAR': ')',
}

KEYWORD_KINDS = set(KEYWORDS.values())


@dataclass(frozen=True)
class Token:
    kind: str
    text: str
    line: int
    column: int
    offset: int = 0

    @property
    def position(self) -> Position:
        return Position(self.line, self.column)

    @property
    def category(self) -> str:
        if self.kind in KEYWORD_KINDS:
            return 'keyword'
        if self.kind == 'IDENT':
            return 'identifier'
        if self.kind == 'INTEGER':
            return 'integer-literal'
        if self.kind == 'STRING':
            return 'string-literal'
        if self.kind in OPERATORS:
            return 'operator'
        if self.kind in PUNCTUATION:
            return 'punctuation'
        return 'end-of-input'

    def __str__(self) -> str:
        if self.kind == 'EOF':
            return 'end of input'
        return repr(self.text)


def describe_kind(kind: str) -> str:
    """Return the source spelling of a token kind, for error messages."""
    for word, k in KEYWORDS.items():
        if k == kind:
            return repr(word)
    if kind in OPERATORS:
        return repr(OPERATORS[kind])
    if kind in PUNCTUATION:
        return repr(PUNCTUATION[kind])
    names = {
        'IDENT': 'identifier',
        'INTEGER': 'integer literal',
        'STRING': 'string literal',
        'EOF': 'end of input',
    }
    return names.get(kind, kind)
