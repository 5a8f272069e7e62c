"""Session control for Lox.

A `Session` is the context every stage of the pipeline runs in: it owns the
error handler, the global environment, the interpreter and the debug trace.
One session is created per process (or per test) and passed explicitly to
the scanner, parser, resolver and interpreter, so separate sessions never
share state.
"""

from __future__ import annotations

from enum import IntEnum
from typing import List, Optional, TextIO

from .ast import Stmt
from .ast_printer import AstPrinter
from .builtin_function import define_natives
from .environment import Environment
from .errors import ErrorHandler, LoxRuntimeError
from .interpreter import Interpreter
from .parser import parse_program
from .resolver import resolve_program
from .scanner import tokenize


class ExitCode(IntEnum):
    OK = 0
    USAGE = 64
    STATIC_ERROR = 65
    NO_INPUT = 66
    RUNTIME_ERROR = 70


class Session:
    """Governs a Lox run: diagnostics, globals and the interpreter."""
    def __init__(self, debug_level: int = 0, debug_file: str = 'debug.txt',
                 stdout: Optional[TextIO] = None, stderr: Optional[TextIO] = None):
        self.debug_level = debug_level
        self.debug_file = debug_file
        self.debug_fp: Optional[TextIO] = None
        self.stdout = stdout  # None means the current sys.stdout
        self.errors = ErrorHandler(stderr)
        self.globals = Environment()
        define_natives(self.globals)
        self.interpreter = Interpreter(self)

    def debug(self, level: int, msg: str):
        if self.debug_level < level:
            return
        if self.debug_fp is None:
            self.debug_fp = open(self.debug_file, 'w', encoding='utf-8')
        self.debug_fp.write(msg + '\n')
        self.debug_fp.flush()

    def close(self):
        if self.debug_fp is not None:
            self.debug_fp.close()
            self.debug_fp = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False

    def parse(self, source: str) -> List[Stmt]:
        """Scan and parse `source`; check `errors.had_error` afterwards."""
        tokens = tokenize(source, self)
        statements = parse_program(tokens, self)
        if self.debug_level >= 1:
            printer = AstPrinter()
            for stmt in statements:
                self.debug(1, printer.print(stmt))
        return statements

    def execute(self, statements: List[Stmt]) -> ExitCode:
        """Resolve and interpret already-parsed statements."""
        if self.errors.had_error:
            return ExitCode.STATIC_ERROR
        locals_ = resolve_program(statements, self)
        if self.errors.had_error:
            return ExitCode.STATIC_ERROR
        self.interpreter.resolve(locals_)
        try:
            self.interpreter.interpret(statements)
        except LoxRuntimeError as err:
            self.errors.runtime_error(err)
            return ExitCode.RUNTIME_ERROR
        return ExitCode.OK

    def run_source(self, source: str) -> ExitCode:
        """Scan, parse, resolve and interpret one unit of source."""
        statements = self.parse(source)
        return self.execute(statements)


def run_source(source: str, session: Optional[Session] = None) -> ExitCode:
    """Convenience function running `source` in `session` (or a fresh one)."""
    if session is None:
        with Session() as fresh:
            return fresh.run_source(source)
    return session.run_source(source)
