"""Type definitions and helpers for Mini-PL.

Mini-PL has exactly three primitive types. Static types are represented
by `TypeSpec`; runtime values are plain Python `int`, `str` and `bool`
objects, which keeps value semantics for free since all three are
immutable.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class TypeSpec:
    """A Mini-PL static type: one of 'int', 'string' or 'bool'."""
    kind: str

    def __repr__(self) -> str:
        return self.kind

    # Convenience constructors
    @staticmethod
    def integer() -> 'TypeSpec':
        return TypeSpec('int')

    @staticmethod
    def string() -> 'TypeSpec':
        return TypeSpec('string')

    @staticmethod
    def boolean() -> 'TypeSpec':
        return TypeSpec('bool')


INT = TypeSpec.integer()
STRING = TypeSpec.string()
BOOL = TypeSpec.boolean()

TYPE_NAMES = {
    'INT_TYPE': INT,
    'STRING_TYPE': STRING,
    'BOOL_TYPE': BOOL,
}


def check_value(value: Any, spec: TypeSpec) -> bool:
    """Check whether a runtime value matches a type specification.

    Raises a Python TypeError on mismatch; callers turn it into a
    Mini-PL error where appropriate.
    """
    kind = spec.kind
    if kind == 'int':
        # bool is a subclass of int; treat separately
        if isinstance(value, int) and not isinstance(value, bool):
            return True
        raise TypeError(f"expected int, got {type_name(value)}")
    elif kind == 'string':
        if isinstance(value, str):
            return True
        raise TypeError(f"expected string, got {type_name(value)}")
    elif kind == 'bool':
        if isinstance(value, bool):
            return True
        raise TypeError(f"expected bool, got {type_name(value)}")
    else:
        raise TypeError(f"unknown type spec: {spec}")


def default_value(spec: TypeSpec) -> Any:
    if spec.kind == 'int':
        return 0
    if spec.kind == 'string':
        return ''
    if spec.kind == 'bool':
        return False
    raise TypeError(f"unknown type spec: {spec}")


def type_name(value: Any) -> str:
    """Return the Mini-PL type name of a runtime value."""
    if isinstance(value, bool):
        return 'bool'
    if isinstance(value, int):
        return 'int'
    if isinstance(value, str):
        return 'string'
    return type(value).__name__


def to_string(value: Any) -> str:
    """Convert a Mini-PL value to the text `print` writes."""
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if isinstance(value, int):
        return str(value)
    if isinstance(value, str):
        return value
    raise TypeError(f"not a Mini-PL value: {value!r}")
