"""Error types and the diagnostic channel shared by every Lox stage.

Scan, parse and resolution problems are *reported* through an
`ErrorHandler` and never raised past the stage that found them. Runtime
problems are raised as `LoxRuntimeError` and reported once at the top of
the run. `ReturnSignal` is control flow, not an error.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass
from typing import Any, List, Optional, TextIO

from termcolor import colored

from .tokens import Token, TokenType


class LoxError(Exception):
    """Base class for errors raised by the Lox toolchain."""


class ParseError(LoxError):
    """Raised inside the parser to unwind to the nearest statement boundary."""


class LoxRuntimeError(LoxError):
    """A runtime error carrying the offending token for line information."""
    def __init__(self, token: Token, message: str):
        super().__init__(message)
        self.token = token
        self.message = message


class ReturnSignal(Exception):
    """Internal exception carrying a `return` value to the call boundary."""
    def __init__(self, value: Any):
        super().__init__('return')
        self.value = value


@dataclass(frozen=True)
class Diagnostic:
    kind: str  # 'static' or 'runtime'
    line: int
    where: str
    message: str

    def __str__(self) -> str:
        if self.kind == 'runtime':
            return f"{self.message}\n[line {self.line}]"
        return f"[line {self.line}] Error{self.where}: {self.message}"


class ErrorHandler:
    """Collects and prints diagnostics, tracking whether any were raised."""
    ERROR = "red"

    def __init__(self, stream: Optional[TextIO] = None):
        self.stream = stream
        self.diagnostics: List[Diagnostic] = []
        self.had_error = False
        self.had_runtime_error = False

    def error(self, line: int, message: str):
        """Reports a scan error that has no token to point at."""
        self.report(line, "", message)

    def token_error(self, token: Token, message: str):
        if token.type == TokenType.EOF:
            self.report(token.line, " at end", message)
        else:
            self.report(token.line, f" at '{token.lexeme}'", message)

    def report(self, line: int, where: str, message: str):
        diagnostic = Diagnostic('static', line, where, message)
        self.diagnostics.append(diagnostic)
        self.had_error = True
        self._write(f"[line {line}] " + colored("Error", ErrorHandler.ERROR, attrs=["bold"])
                    + f"{where}: {message}")

    def runtime_error(self, err: LoxRuntimeError):
        diagnostic = Diagnostic('runtime', err.token.line, "", err.message)
        self.diagnostics.append(diagnostic)
        self.had_runtime_error = True
        self._write(colored(err.message, ErrorHandler.ERROR) + f"\n[line {err.token.line}]")

    def reset(self):
        """Clears the error flags; used between lines of the interactive prompt."""
        self.had_error = False
        self.had_runtime_error = False

    def _write(self, text: str):
        stream = self.stream if self.stream is not None else sys.stderr
        print(text, file=stream)
