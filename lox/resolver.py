"""Static resolution pass.

Walks the whole program once before it runs, computing for every local
variable reference how many environments separate the use from the
declaration. References that are not found in any enclosing local scope
are globals and are left out of the map. The pass also reports the
scoping mistakes that can be detected without running the program
(self-referencing initializers, duplicate locals, misplaced `return`,
`this` and `super`).
"""

from __future__ import annotations

from enum import Enum, auto
from typing import TYPE_CHECKING, Dict, List, Optional

from .ast import (
    Expr, Literal, Grouping, Variable, Assign, Binary, Logical, Prefix,
    Postfix, Ternary, Call, Get, Set, This, Super,
    Stmt, Expression, Var, Block, If, While, Function, Return, Class,
)
from .tokens import Token
from .types import INITIALIZER_NAME

if TYPE_CHECKING:
    from .session import Session


class FunctionType(Enum):
    NONE = auto()
    FUNCTION = auto()
    METHOD = auto()
    INITIALIZER = auto()


class ClassType(Enum):
    NONE = auto()
    CLASS = auto()
    SUBCLASS = auto()


class Resolver:
    def __init__(self, session: 'Session'):
        self.session = session
        self.scopes: List[Dict[str, bool]] = []
        self.locals: Dict[Expr, int] = {}
        self.current_function = FunctionType.NONE
        self.current_class = ClassType.NONE
        # top-level name whose initializer is being resolved
        self.pending_global: Optional[str] = None

    def resolve(self, statements: List[Stmt]) -> Dict[Expr, int]:
        self.resolve_statements(statements)
        self.session.debug(1, f"resolved {len(self.locals)} local references")
        return self.locals

    def resolve_statements(self, statements: List[Stmt]):
        for stmt in statements:
            self.resolve_stmt(stmt)

    # Statements

    def resolve_stmt(self, stmt: Stmt):
        if isinstance(stmt, Block):
            self.begin_scope()
            self.resolve_statements(stmt.statements)
            self.end_scope()
        elif isinstance(stmt, Var):
            self.declare(stmt.name)
            if stmt.initializer is not None:
                if not self.scopes:
                    self.pending_global = stmt.name.lexeme
                try:
                    self.resolve_expr(stmt.initializer)
                finally:
                    self.pending_global = None
            self.define(stmt.name)
        elif isinstance(stmt, Function):
            self.declare(stmt.name)
            self.define(stmt.name)
            self.resolve_function(stmt, FunctionType.FUNCTION)
        elif isinstance(stmt, Class):
            self.resolve_class(stmt)
        elif isinstance(stmt, Expression):
            self.resolve_expr(stmt.expression)
        elif isinstance(stmt, If):
            self.resolve_expr(stmt.condition)
            self.resolve_stmt(stmt.then_branch)
            if stmt.else_branch is not None:
                self.resolve_stmt(stmt.else_branch)
        elif isinstance(stmt, While):
            self.resolve_expr(stmt.condition)
            self.resolve_stmt(stmt.body)
        elif isinstance(stmt, Return):
            if self.current_function == FunctionType.NONE:
                self.session.errors.token_error(stmt.keyword, "Can't return from top-level code.")
            if stmt.value is not None:
                if self.current_function == FunctionType.INITIALIZER:
                    self.session.errors.token_error(stmt.keyword, "Can't return a value from an initializer.")
                self.resolve_expr(stmt.value)
        else:
            raise NotImplementedError(f"resolve: unexpected statement {type(stmt).__name__}")

    def resolve_class(self, stmt: Class):
        enclosing_class = self.current_class
        self.current_class = ClassType.CLASS

        self.declare(stmt.name)
        self.define(stmt.name)

        if stmt.superclass is not None:
            if stmt.superclass.name.lexeme == stmt.name.lexeme:
                self.session.errors.token_error(stmt.superclass.name, "A class can't inherit from itself.")
            self.current_class = ClassType.SUBCLASS
            self.resolve_expr(stmt.superclass)
            self.begin_scope()
            self.scopes[-1]['super'] = True

        self.begin_scope()
        self.scopes[-1]['this'] = True
        for method in stmt.methods:
            kind = FunctionType.METHOD
            if method.name.lexeme == INITIALIZER_NAME:
                kind = FunctionType.INITIALIZER
            self.resolve_function(method, kind)
        self.end_scope()

        if stmt.superclass is not None:
            self.end_scope()
        self.current_class = enclosing_class

    def resolve_function(self, function: Function, kind: FunctionType):
        enclosing_function = self.current_function
        self.current_function = kind
        self.begin_scope()
        for param in function.params:
            self.declare(param)
            self.define(param)
        self.resolve_statements(function.body)
        self.end_scope()
        self.current_function = enclosing_function

    # Expressions

    def resolve_expr(self, expr: Expr):
        if isinstance(expr, Variable):
            name = expr.name.lexeme
            if self.scopes and self.scopes[-1].get(name) is False:
                self.session.errors.token_error(expr.name, "Can't read local variable in its own initializer.")
            elif not self.scopes and name == self.pending_global:
                self.session.errors.token_error(expr.name, "Can't read local variable in its own initializer.")
            self.resolve_local(expr, expr.name)
        elif isinstance(expr, Assign):
            self.resolve_expr(expr.value)
            self.resolve_local(expr, expr.name)
        elif isinstance(expr, (Binary, Logical)):
            self.resolve_expr(expr.left)
            self.resolve_expr(expr.right)
        elif isinstance(expr, Prefix):
            self.resolve_expr(expr.right)
        elif isinstance(expr, Postfix):
            self.resolve_expr(expr.target)
        elif isinstance(expr, Ternary):
            self.resolve_expr(expr.condition)
            self.resolve_expr(expr.then_branch)
            self.resolve_expr(expr.else_branch)
        elif isinstance(expr, Call):
            self.resolve_expr(expr.callee)
            for argument in expr.arguments:
                self.resolve_expr(argument)
        elif isinstance(expr, Get):
            self.resolve_expr(expr.target)
        elif isinstance(expr, Set):
            self.resolve_expr(expr.target)
            self.resolve_expr(expr.value)
        elif isinstance(expr, Grouping):
            self.resolve_expr(expr.expression)
        elif isinstance(expr, This):
            if self.current_class == ClassType.NONE:
                self.session.errors.token_error(expr.keyword, "Can't use 'this' outside of a class.")
                return
            self.resolve_local(expr, expr.keyword)
        elif isinstance(expr, Super):
            if self.current_class == ClassType.NONE:
                self.session.errors.token_error(expr.keyword, "Can't use 'super' outside of a class.")
            elif self.current_class != ClassType.SUBCLASS:
                self.session.errors.token_error(expr.keyword, "Can't use 'super' in a class with no superclass.")
            self.resolve_local(expr, expr.keyword)
        elif isinstance(expr, Literal):
            pass
        else:
            raise NotImplementedError(f"resolve: unexpected expression {type(expr).__name__}")

    # Scope helpers

    def begin_scope(self):
        self.scopes.append({})

    def end_scope(self):
        self.scopes.pop()

    def declare(self, name: Token):
        if not self.scopes:
            return
        scope = self.scopes[-1]
        if name.lexeme in scope:
            self.session.errors.token_error(name, "Already a variable with this name in this scope.")
        scope[name.lexeme] = False

    def define(self, name: Token):
        if not self.scopes:
            return
        self.scopes[-1][name.lexeme] = True

    def resolve_local(self, expr: Expr, name: Token):
        for depth, scope in enumerate(reversed(self.scopes)):
            if name.lexeme in scope:
                self.locals[expr] = depth
                self.session.debug(2, f"resolve {name.lexeme} at line {name.line}: depth {depth}")
                return
        # not found: assume global


def resolve_program(statements: List[Stmt], session: 'Session') -> Dict[Expr, int]:
    """Run a fresh resolution pass and return the scope-distance map."""
    return Resolver(session).resolve(statements)
