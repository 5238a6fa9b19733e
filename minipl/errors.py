from typing import Optional, Sequence

from minipl.tokens import Position, Token, describe_kind


class MiniPLError(Exception):
    """Base class for every error a Mini-PL program can produce."""
    kind = 'Error'
    exit_code = 1

    def __init__(self, message: str, position: Optional[Position] = None):
        where = f"{position}: " if position is not None else ''
        super().__init__(f"{where}{self.kind}: {message}")
        self.message = message
        self.position = position


class LexicalError(MiniPLError):
    kind = 'LexicalError'

    def __init__(self, position: Position, char: str, message: Optional[str] = None):
        super().__init__(message or f"unrecognized character {char!r}", position)
        self.char = char


class ParseError(MiniPLError):
    kind = 'SyntaxError'

    def __init__(self, position: Position, expected: Sequence[str], found: Token,
                 message: Optional[str] = None):
        self.expected = tuple(expected)
        self.found = found
        if message is None:
            if len(self.expected) == 1:
                wanted = describe_kind(self.expected[0])
            else:
                wanted = 'one of ' + ', '.join(describe_kind(k) for k in self.expected)
            message = f"expected {wanted}, got {found}"
        super().__init__(message, position)


class StaticError(MiniPLError):
    """Raised by the type checker; the program never starts running."""
    kind = 'StaticError'


class RedeclarationError(StaticError):
    kind = 'RedeclarationError'


class UndeclaredVariableError(StaticError):
    kind = 'UndeclaredVariableError'


class TypeMismatchError(StaticError):
    kind = 'TypeMismatchError'


class MissingTypeError(StaticError):
    kind = 'MissingTypeError'


class LoopVariableAssignmentError(StaticError):
    kind = 'LoopVariableAssignmentError'


class MiniPLRuntimeError(MiniPLError):
    kind = 'RuntimeError'
    reason = 'RuntimeError'
    exit_code = 2

    def __init__(self, message: str, position: Optional[Position] = None):
        super().__init__(f"{self.reason}: {message}", position)


class DivisionByZero(MiniPLRuntimeError):
    reason = 'DivisionByZero'


class InputParseFailure(MiniPLRuntimeError):
    reason = 'InputParseFailure'


class AssertionFailure(MiniPLError):
    """Raised when an `assert` condition evaluates to false."""
    kind = 'AssertionFailure'
    exit_code = 3

    def __init__(self, position: Optional[Position], source_text: str):
        super().__init__(f"assertion failed: {source_text}", position)
        self.source_text = source_text
