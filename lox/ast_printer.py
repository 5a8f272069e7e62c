"""Renders Lox AST nodes as parenthesized prefix notation.

Used by the debug trace and by ``python -m lox --print-ast``. For example
``-123 * (45.67)`` prints as ``(* (- 123) (group 45.67))``.
"""

from __future__ import annotations

from typing import Any, List, Union

from .ast import (
    Expr, Literal, Grouping, Variable, Assign, Binary, Logical, Prefix,
    Postfix, Ternary, Call, Get, Set, This, Super,
    Stmt, Expression, Var, Block, If, While, Function, Return, Class,
)
from .types import to_string


class AstPrinter:
    def print(self, node: Union[Expr, Stmt]) -> str:
        if isinstance(node, Stmt):
            return self.print_stmt(node)
        return self.print_expr(node)

    def print_stmt(self, stmt: Stmt) -> str:
        if isinstance(stmt, Expression):
            return self.parenthesize(';', stmt.expression)
        if isinstance(stmt, Var):
            if stmt.initializer is None:
                return self.parenthesize('var', stmt.name.lexeme)
            return self.parenthesize('var', stmt.name.lexeme, '=', stmt.initializer)
        if isinstance(stmt, Block):
            return self.parenthesize('block', *stmt.statements)
        if isinstance(stmt, If):
            if stmt.else_branch is None:
                return self.parenthesize('if', stmt.condition, stmt.then_branch)
            return self.parenthesize('if-else', stmt.condition, stmt.then_branch, stmt.else_branch)
        if isinstance(stmt, While):
            return self.parenthesize('while', stmt.condition, stmt.body)
        if isinstance(stmt, Function):
            return self.print_function('fun', stmt)
        if isinstance(stmt, Return):
            if stmt.value is None:
                return '(return)'
            return self.parenthesize('return', stmt.value)
        if isinstance(stmt, Class):
            parts: List[Any] = [stmt.name.lexeme]
            if stmt.superclass is not None:
                parts.extend([':', stmt.superclass])
            parts.extend(self.print_function('method', method) for method in stmt.methods)
            return self.parenthesize('class', *parts)
        raise NotImplementedError(f"print: unexpected statement {type(stmt).__name__}")

    def print_function(self, kind: str, function: Function) -> str:
        params = '(' + ' '.join(param.lexeme for param in function.params) + ')'
        return self.parenthesize(kind, function.name.lexeme, params, *function.body)

    def print_expr(self, expr: Expr) -> str:
        if isinstance(expr, Literal):
            if isinstance(expr.value, str):
                return f'"{expr.value}"'
            return to_string(expr.value)
        if isinstance(expr, Grouping):
            return self.parenthesize('group', expr.expression)
        if isinstance(expr, Variable):
            return expr.name.lexeme
        if isinstance(expr, Assign):
            return self.parenthesize('=', expr.name.lexeme, expr.value)
        if isinstance(expr, (Binary, Logical)):
            return self.parenthesize(expr.operator.lexeme, expr.left, expr.right)
        if isinstance(expr, Prefix):
            return self.parenthesize(expr.operator.lexeme, expr.right)
        if isinstance(expr, Postfix):
            return self.parenthesize('post' + expr.operator.lexeme, expr.target)
        if isinstance(expr, Ternary):
            return self.parenthesize('?:', expr.condition, expr.then_branch, expr.else_branch)
        if isinstance(expr, Call):
            return self.parenthesize('call', expr.callee, *expr.arguments)
        if isinstance(expr, Get):
            return self.parenthesize('.', expr.target, expr.name.lexeme)
        if isinstance(expr, Set):
            return self.parenthesize('=', expr.target, expr.name.lexeme, expr.value)
        if isinstance(expr, This):
            return 'this'
        if isinstance(expr, Super):
            return self.parenthesize('super', expr.method.lexeme)
        raise NotImplementedError(f"print: unexpected expression {type(expr).__name__}")

    def parenthesize(self, name: str, *parts: Any) -> str:
        pieces = [name]
        for part in parts:
            if isinstance(part, (Expr, Stmt)):
                pieces.append(self.print(part))
            else:
                pieces.append(str(part))
        return '(' + ' '.join(pieces) + ')'
