"""JSON serialization/deserialization for the Lox AST.

This module converts between Lox AST dataclasses and plain Python
dict/list structures suitable for JSON encoding, so that a parsed program
can be written out with ``--emit-ast`` and run later with ``--ast``.
Tokens are stored with their type name, lexeme, literal and line.
"""

from __future__ import annotations

from typing import Any, Dict, List

from .ast import (
    Literal,
    Grouping,
    Variable,
    Assign,
    Binary,
    Logical,
    Prefix,
    Postfix,
    Ternary,
    Call,
    Get,
    Set,
    This,
    Super,
    Expression,
    Var,
    Block,
    If,
    While,
    Function,
    Return,
    Class,
)
from .tokens import Token, TokenType


def token_to_obj(t: Token) -> Dict[str, Any]:
    return {"type": t.type.name, "lexeme": t.lexeme, "literal": t.literal, "line": t.line}


def token_from_obj(o: Dict[str, Any]) -> Token:
    return Token(TokenType[o["type"]], o["lexeme"], o.get("literal"), o["line"])


def program_to_obj(statements: List[Any]) -> Dict[str, Any]:
    return {"type": "Program", "body": [ast_to_obj(s) for s in statements]}


def program_from_obj(obj: Dict[str, Any]) -> List[Any]:
    if obj.get("type") != "Program":
        raise ValueError("AST JSON must contain a Program object")
    return [ast_from_obj(s) for s in obj["body"]]


def ast_to_obj(node: Any) -> Any:
    if node is None:
        return None

    # Expressions
    if isinstance(node, Literal):
        return {"type": "Literal", "value": node.value}
    if isinstance(node, Grouping):
        return {"type": "Grouping", "expression": ast_to_obj(node.expression)}
    if isinstance(node, Variable):
        return {"type": "Variable", "name": token_to_obj(node.name)}
    if isinstance(node, Assign):
        return {"type": "Assign", "name": token_to_obj(node.name), "value": ast_to_obj(node.value)}
    if isinstance(node, Binary):
        return {
            "type": "Binary",
            "left": ast_to_obj(node.left),
            "operator": token_to_obj(node.operator),
            "right": ast_to_obj(node.right),
        }
    if isinstance(node, Logical):
        return {
            "type": "Logical",
            "left": ast_to_obj(node.left),
            "operator": token_to_obj(node.operator),
            "right": ast_to_obj(node.right),
        }
    if isinstance(node, Prefix):
        return {"type": "Prefix", "operator": token_to_obj(node.operator), "right": ast_to_obj(node.right)}
    if isinstance(node, Postfix):
        return {"type": "Postfix", "operator": token_to_obj(node.operator), "target": ast_to_obj(node.target)}
    if isinstance(node, Ternary):
        return {
            "type": "Ternary",
            "condition": ast_to_obj(node.condition),
            "question": token_to_obj(node.question),
            "then_branch": ast_to_obj(node.then_branch),
            "else_branch": ast_to_obj(node.else_branch),
        }
    if isinstance(node, Call):
        return {
            "type": "Call",
            "callee": ast_to_obj(node.callee),
            "paren": token_to_obj(node.paren),
            "arguments": [ast_to_obj(a) for a in node.arguments],
        }
    if isinstance(node, Get):
        return {"type": "Get", "target": ast_to_obj(node.target), "name": token_to_obj(node.name)}
    if isinstance(node, Set):
        return {
            "type": "Set",
            "target": ast_to_obj(node.target),
            "name": token_to_obj(node.name),
            "value": ast_to_obj(node.value),
        }
    if isinstance(node, This):
        return {"type": "This", "keyword": token_to_obj(node.keyword)}
    if isinstance(node, Super):
        return {"type": "Super", "keyword": token_to_obj(node.keyword), "method": token_to_obj(node.method)}

    # Statements
    if isinstance(node, Expression):
        return {"type": "Expression", "expression": ast_to_obj(node.expression)}
    if isinstance(node, Var):
        return {"type": "Var", "name": token_to_obj(node.name), "initializer": ast_to_obj(node.initializer)}
    if isinstance(node, Block):
        return {"type": "Block", "statements": [ast_to_obj(s) for s in node.statements]}
    if isinstance(node, If):
        return {
            "type": "If",
            "condition": ast_to_obj(node.condition),
            "then_branch": ast_to_obj(node.then_branch),
            "else_branch": ast_to_obj(node.else_branch),
        }
    if isinstance(node, While):
        return {"type": "While", "condition": ast_to_obj(node.condition), "body": ast_to_obj(node.body)}
    if isinstance(node, Function):
        return {
            "type": "Function",
            "name": token_to_obj(node.name),
            "params": [token_to_obj(p) for p in node.params],
            "body": [ast_to_obj(s) for s in node.body],
        }
    if isinstance(node, Return):
        return {"type": "Return", "keyword": token_to_obj(node.keyword), "value": ast_to_obj(node.value)}
    if isinstance(node, Class):
        return {
            "type": "Class",
            "name": token_to_obj(node.name),
            "superclass": ast_to_obj(node.superclass),
            "methods": [ast_to_obj(m) for m in node.methods],
        }

    raise TypeError(f"Unsupported node for serialization: {type(node).__name__}")


def ast_from_obj(obj: Any) -> Any:
    if obj is None:
        return None
    if not isinstance(obj, dict):
        raise TypeError("Invalid AST object")
    t = obj.get("type")

    # Expressions
    if t == "Literal":
        return Literal(obj["value"])
    if t == "Grouping":
        return Grouping(ast_from_obj(obj["expression"]))
    if t == "Variable":
        return Variable(token_from_obj(obj["name"]))
    if t == "Assign":
        return Assign(token_from_obj(obj["name"]), ast_from_obj(obj["value"]))
    if t == "Binary":
        return Binary(ast_from_obj(obj["left"]), token_from_obj(obj["operator"]), ast_from_obj(obj["right"]))
    if t == "Logical":
        return Logical(ast_from_obj(obj["left"]), token_from_obj(obj["operator"]), ast_from_obj(obj["right"]))
    if t == "Prefix":
        return Prefix(token_from_obj(obj["operator"]), ast_from_obj(obj["right"]))
    if t == "Postfix":
        return Postfix(token_from_obj(obj["operator"]), ast_from_obj(obj["target"]))
    if t == "Ternary":
        return Ternary(
            ast_from_obj(obj["condition"]),
            token_from_obj(obj["question"]),
            ast_from_obj(obj["then_branch"]),
            ast_from_obj(obj["else_branch"]),
        )
    if t == "Call":
        return Call(
            ast_from_obj(obj["callee"]),
            token_from_obj(obj["paren"]),
            [ast_from_obj(a) for a in obj["arguments"]],
        )
    if t == "Get":
        return Get(ast_from_obj(obj["target"]), token_from_obj(obj["name"]))
    if t == "Set":
        return Set(ast_from_obj(obj["target"]), token_from_obj(obj["name"]), ast_from_obj(obj["value"]))
    if t == "This":
        return This(token_from_obj(obj["keyword"]))
    if t == "Super":
        return Super(token_from_obj(obj["keyword"]), token_from_obj(obj["method"]))

    # Statements
    if t == "Expression":
        return Expression(ast_from_obj(obj["expression"]))
    if t == "Var":
        return Var(token_from_obj(obj["name"]), ast_from_obj(obj.get("initializer")))
    if t == "Block":
        return Block([ast_from_obj(s) for s in obj["statements"]])
    if t == "If":
        return If(
            ast_from_obj(obj["condition"]),
            ast_from_obj(obj["then_branch"]),
            ast_from_obj(obj.get("else_branch")),
        )
    if t == "While":
        return While(ast_from_obj(obj["condition"]), ast_from_obj(obj["body"]))
    if t == "Function":
        return Function(
            token_from_obj(obj["name"]),
            [token_from_obj(p) for p in obj["params"]],
            [ast_from_obj(s) for s in obj["body"]],
        )
    if t == "Return":
        return Return(token_from_obj(obj["keyword"]), ast_from_obj(obj.get("value")))
    if t == "Class":
        return Class(
            token_from_obj(obj["name"]),
            ast_from_obj(obj.get("superclass")),
            [ast_from_obj(m) for m in obj["methods"]],
        )

    raise ValueError(f"Unknown AST node type: {t}")
