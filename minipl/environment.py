from typing import Any, Dict, Optional
from minipl.errors import RedeclarationError, TypeMismatchError, UndeclaredVariableError
from minipl.types import TypeSpec, check_value, default_value


class Environment:
    """Represents a scope environment mapping identifiers to values and their declared types."""
    def __init__(self, parent: Optional['Environment'] = None):
        self.parent = parent
        self.values: Dict[str, Any] = {}
        self.types: Dict[str, TypeSpec] = {}

    def get(self, name: str) -> Any:
        if name in self.values:
            return self.values[name]
        if self.parent:
            return self.parent.get(name)
        raise UndeclaredVariableError(f'undefined variable {name}')

    def type_of(self, name: str) -> TypeSpec:
        if name in self.types:
            return self.types[name]
        if self.parent:
            return self.parent.type_of(name)
        raise UndeclaredVariableError(f'undefined variable {name}')

    def set(self, name: str, value: Any):
        # Assign where the name was declared, bubbling up through parents
        if name in self.values:
            try:
                check_value(value, self.types[name])
            except TypeError as e:
                raise TypeMismatchError(str(e))
            self.values[name] = value
        elif self.parent is not None:
            self.parent.set(name, value)
        else:
            raise UndeclaredVariableError(f'undefined variable {name}')

    def declare(self, name: str, type_spec: TypeSpec, value: Any = None):
        if name in self.values:
            raise RedeclarationError(f'variable {name} already declared')
        if value is None:
            value = default_value(type_spec)
        else:
            try:
                check_value(value, type_spec)
            except TypeError as e:
                raise TypeMismatchError(str(e))
        self.values[name] = value
        self.types[name] = type_spec
