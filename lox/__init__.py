# Lox language package
# This package provides a scanner, parser, resolver and tree-walking interpreter for Lox.
from .errors import LoxError, LoxRuntimeError
from .session import ExitCode, Session, run_source

__all__ = [
    'run_source',
    'Session',
    'ExitCode',
    'LoxError',
    'LoxRuntimeError',
]
