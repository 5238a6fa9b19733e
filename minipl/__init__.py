# Mini-PL language package
# This package provides a lexer, parser, type checker and interpreter for Mini-PL.
from .errors import MiniPLError
from .parser import parse_program
from .checker import check_program, TypeChecker
from .interpreter import run_program, Interpreter

__all__ = [
    'run_program',
    'check_program',
    'parse_program',
    'TypeChecker',
    'Interpreter',
    'MiniPLError',
]
