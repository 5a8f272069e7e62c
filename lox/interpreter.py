"""Tree-walking interpreter for Lox.

The interpreter executes the statement list produced by the parser,
consulting the resolver's scope-distance map for every local variable
access. Statements and expressions are dispatched with `isinstance`
chains over the closed set of node classes in `lox.ast`.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, List

from .ast import (
    Expr, Literal, Grouping, Variable, Assign, Binary, Logical, Prefix,
    Postfix, Ternary, Call, Get, Set, This, Super,
    Stmt, Expression, Var, Block, If, While, Function, Return, Class,
)
from .environment import Environment
from .errors import LoxRuntimeError, ReturnSignal
from .tokens import Token, TokenType
from .types import (
    INITIALIZER_NAME, LoxCallable, LoxClass, LoxFunction, LoxInstance,
    is_equal, is_number, is_truthy, to_string, type_name,
)

if TYPE_CHECKING:
    from .session import Session


class Interpreter:
    """Core interpreter that executes a resolved Lox AST."""
    def __init__(self, session: 'Session'):
        self.session = session
        self.globals: Environment = session.globals
        self.environment: Environment = self.globals
        self.locals: Dict[Expr, int] = {}

    def resolve(self, locals_: Dict[Expr, int]):
        """Record scope distances computed by the resolver."""
        self.locals.update(locals_)

    # Public API
    def interpret(self, statements: List[Stmt]):
        """Run the program; runtime errors propagate to the caller."""
        for stmt in statements:
            self.execute(stmt)

    def execute_block(self, statements: List[Stmt], environment: Environment):
        previous = self.environment
        try:
            self.environment = environment
            for stmt in statements:
                self.execute(stmt)
        finally:
            self.environment = previous

    def execute(self, stmt: Stmt):
        if isinstance(stmt, Expression):
            self.evaluate(stmt.expression)
            return
        if isinstance(stmt, Var):
            value = None
            if stmt.initializer is not None:
                value = self.evaluate(stmt.initializer)
            self.environment.define(stmt.name.lexeme, value)
            self.session.debug(2, f"declare {stmt.name.lexeme}: {type_name(value)} = {to_string(value)}")
            return
        if isinstance(stmt, Block):
            self.execute_block(stmt.statements, Environment(self.environment))
            return
        if isinstance(stmt, If):
            cond = self.evaluate(stmt.condition)
            truthy = is_truthy(cond)
            self.session.debug(3, f"if condition {to_string(cond)} -> {truthy}")
            if truthy:
                self.execute(stmt.then_branch)
            elif stmt.else_branch is not None:
                self.execute(stmt.else_branch)
            return
        if isinstance(stmt, While):
            while is_truthy(self.evaluate(stmt.condition)):
                self.execute(stmt.body)
            return
        if isinstance(stmt, Function):
            function = LoxFunction(stmt, self.environment, False)
            self.environment.define(stmt.name.lexeme, function)
            self.session.debug(2, f"define function {stmt.name.lexeme}")
            return
        if isinstance(stmt, Return):
            value = None
            if stmt.value is not None:
                value = self.evaluate(stmt.value)
            raise ReturnSignal(value)
        if isinstance(stmt, Class):
            self.execute_class(stmt)
            return
        raise NotImplementedError(f"execute: unexpected node type {type(stmt).__name__}")

    def execute_class(self, stmt: Class):
        superclass = None
        if stmt.superclass is not None:
            superclass = self.evaluate(stmt.superclass)
            if not isinstance(superclass, LoxClass):
                raise LoxRuntimeError(stmt.superclass.name, "Superclass must be a class.")

        self.environment.define(stmt.name.lexeme, None)

        environment = self.environment
        if superclass is not None:
            environment = Environment(self.environment)
            environment.define('super', superclass)

        methods: Dict[str, LoxFunction] = {}
        for method in stmt.methods:
            is_initializer = method.name.lexeme == INITIALIZER_NAME
            methods[method.name.lexeme] = LoxFunction(method, environment, is_initializer)

        klass = LoxClass(stmt.name.lexeme, superclass, methods)
        self.environment.assign(stmt.name, klass)
        self.session.debug(2, f"define class {stmt.name.lexeme}")

    def evaluate(self, expr: Expr) -> Any:
        if isinstance(expr, Literal):
            return expr.value
        if isinstance(expr, Grouping):
            return self.evaluate(expr.expression)
        if isinstance(expr, Variable):
            return self.look_up_variable(expr.name, expr)
        if isinstance(expr, Assign):
            value = self.evaluate(expr.value)
            self.assign_variable(expr.name, expr, value)
            return value
        if isinstance(expr, Logical):
            left = self.evaluate(expr.left)
            if expr.operator.type == TokenType.OR:
                if is_truthy(left):
                    return left
            elif not is_truthy(left):
                return left
            return self.evaluate(expr.right)
        if isinstance(expr, Binary):
            left = self.evaluate(expr.left)
            right = self.evaluate(expr.right)
            return self.apply_binary_op(expr.operator, left, right)
        if isinstance(expr, Prefix):
            right = self.evaluate(expr.right)
            if expr.operator.type == TokenType.MINUS:
                self.check_number_operand(expr.operator, right)
                return -right
            if expr.operator.type == TokenType.BANG:
                return not is_truthy(right)
            raise NotImplementedError(f"unsupported prefix operator {expr.operator.lexeme}")
        if isinstance(expr, Postfix):
            return self.evaluate_postfix(expr)
        if isinstance(expr, Ternary):
            if is_truthy(self.evaluate(expr.condition)):
                return self.evaluate(expr.then_branch)
            return self.evaluate(expr.else_branch)
        if isinstance(expr, Call):
            callee = self.evaluate(expr.callee)
            arguments = [self.evaluate(argument) for argument in expr.arguments]
            return self.call_function(callee, arguments, expr.paren)
        if isinstance(expr, Get):
            target = self.evaluate(expr.target)
            if isinstance(target, LoxInstance):
                return target.get(expr.name)
            raise LoxRuntimeError(expr.name, "Only instances have properties.")
        if isinstance(expr, Set):
            target = self.evaluate(expr.target)
            if not isinstance(target, LoxInstance):
                raise LoxRuntimeError(expr.name, "Only instances have fields.")
            value = self.evaluate(expr.value)
            target.set(expr.name, value)
            return value
        if isinstance(expr, This):
            return self.look_up_variable(expr.keyword, expr)
        if isinstance(expr, Super):
            return self.evaluate_super(expr)
        raise NotImplementedError(f"evaluate: unexpected node type {type(expr).__name__}")

    def evaluate_postfix(self, expr: Postfix) -> Any:
        delta = 1.0 if expr.operator.type == TokenType.PLUS_PLUS else -1.0
        target = expr.target
        if isinstance(target, Variable):
            old = self.look_up_variable(target.name, target)
            self.check_number_operand(expr.operator, old)
            self.assign_variable(target.name, target, old + delta)
            return old
        if isinstance(target, Get):
            instance = self.evaluate(target.target)
            if not isinstance(instance, LoxInstance):
                raise LoxRuntimeError(target.name, "Only instances have fields.")
            old = instance.get(target.name)
            self.check_number_operand(expr.operator, old)
            instance.set(target.name, old + delta)
            return old
        raise LoxRuntimeError(expr.operator, "Invalid increment target.")

    def evaluate_super(self, expr: Super) -> Any:
        distance = self.locals[expr]
        superclass = self.environment.get_at(distance, 'super')
        # `this` is always bound one environment inside `super`
        instance = self.environment.get_at(distance - 1, 'this')
        method = superclass.find_method(expr.method.lexeme)
        if method is None:
            raise LoxRuntimeError(expr.method, f"Undefined property '{expr.method.lexeme}'.")
        return method.bind(instance)

    def call_function(self, callee: Any, arguments: List[Any], paren: Token) -> Any:
        if not isinstance(callee, LoxCallable):
            raise LoxRuntimeError(paren, "Can only call functions and classes.")
        if len(arguments) != callee.arity():
            raise LoxRuntimeError(paren, f"Expected {callee.arity()} arguments but got {len(arguments)}.")
        self.session.debug(3, f"call {to_string(callee)} with {len(arguments)} arguments")
        return callee.call(self, arguments)

    def look_up_variable(self, name: Token, expr: Expr) -> Any:
        distance = self.locals.get(expr)
        if distance is not None:
            return self.environment.get_at(distance, name.lexeme)
        return self.globals.get(name)

    def assign_variable(self, name: Token, expr: Expr, value: Any):
        distance = self.locals.get(expr)
        if distance is not None:
            self.environment.assign_at(distance, name, value)
        else:
            self.globals.assign(name, value)

    def apply_binary_op(self, operator: Token, left: Any, right: Any) -> Any:
        op = operator.type
        if op == TokenType.PLUS:
            if is_number(left) and is_number(right):
                return left + right
            if isinstance(left, str) and isinstance(right, str):
                return left + right
            if isinstance(left, str) and is_number(right):
                return left + to_string(right)
            raise LoxRuntimeError(operator, "Operands must be two numbers or two strings.")
        if op == TokenType.EQUAL_EQUAL:
            return is_equal(left, right)
        if op == TokenType.BANG_EQUAL:
            return not is_equal(left, right)

        self.check_number_operands(operator, left, right)
        if op == TokenType.MINUS:
            return left - right
        if op == TokenType.STAR:
            return left * right
        if op == TokenType.SLASH:
            if right == 0:
                raise LoxRuntimeError(operator, "Division by zero.")
            return left / right
        if op == TokenType.GREATER:
            return left > right
        if op == TokenType.GREATER_EQUAL:
            return left >= right
        if op == TokenType.LESS:
            return left < right
        if op == TokenType.LESS_EQUAL:
            return left <= right
        raise NotImplementedError(f"unsupported binary operator {operator.lexeme}")

    @staticmethod
    def check_number_operand(operator: Token, operand: Any):
        if is_number(operand):
            return
        raise LoxRuntimeError(operator, "Operand must be a number.")

    @staticmethod
    def check_number_operands(operator: Token, left: Any, right: Any):
        if is_number(left) and is_number(right):
            return
        raise LoxRuntimeError(operator, "Operands must be numbers.")
