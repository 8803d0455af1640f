# Lox language package
# This package provides a scanner, parser and tree-walking interpreter for a Lox subset.
from .errors import LoxError, LoxScanError, LoxSyntaxError, LoxRuntimeError, Fault, FaultKind
from .interpreter import run_program, parse_program, Interpreter
from .parser import Parser, parse
from .scanner import scan
from .types import NIL

__all__ = [
    'run_program',
    'parse_program',
    'parse',
    'scan',
    'Parser',
    'Interpreter',
    'LoxError',
    'LoxScanError',
    'LoxSyntaxError',
    'LoxRuntimeError',
    'Fault',
    'FaultKind',
    'NIL',
]
