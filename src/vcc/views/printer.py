# Copyright 2026 VCC Contributors
# SPDX-License-Identifier: Apache-2.0

"""Human-readable dumps of compiler artifacts for debugging.

The token view prints one token per line. The graph view prints one entity
per line, indented by two spaces per level of depth:

    Package:default
      Function:value
        Class:int
        Object:a
          Class:int
        ReturnStatement
          ObjectExpression
            Object:a
              Class:int
"""

from __future__ import annotations

from vcc.compiler.lexer import Token
from vcc.model.entities import (
    Class,
    Expression,
    Function,
    Object,
    ObjectExpression,
    OperatorExpression,
    Package,
    ReturnMode,
    ReturnStatement,
    Statement,
)

# ###############
# Public Interface
# ###############

INDENT_WIDTH = 2


def format_tokens(tokens: list[Token]) -> str:
    """Render each token as ``<kind> "<lexeme>" <line> <column>`` on its own line."""
    return "".join(f"{token}\n" for token in tokens)


def format_graph(package: Package, indent: int = 0) -> str:
    """Render the program graph rooted at *package* as an indented tree."""
    lines: list[str] = []
    _package(package, indent, lines)
    return "".join(lines)


# ################
# Implementation
# ################


def _emit(lines: list[str], indent: int, text: str) -> None:
    lines.append(" " * indent + text + "\n")


def _package(package: Package, indent: int, lines: list[str]) -> None:
    _emit(lines, indent, f"Package:{package.name}")
    for function in package.functions:
        _function(function, indent + INDENT_WIDTH, lines)


def _function(function: Function, indent: int, lines: list[str]) -> None:
    _emit(lines, indent, f"Function:{function.return_mode.value}")
    if function.return_mode is ReturnMode.VALUE and function.return_class is not None:
        _class(function.return_class, indent + INDENT_WIDTH, lines)
    for obj in function.objects:
        _object(obj, indent + INDENT_WIDTH, lines)
    for statement in function.statements:
        _statement(statement, indent + INDENT_WIDTH, lines)


def _class(cls: Class, indent: int, lines: list[str]) -> None:
    _emit(lines, indent, f"Class:{cls.name}")


def _object(obj: Object, indent: int, lines: list[str]) -> None:
    _emit(lines, indent, f"Object:{obj.name}")
    if obj.cls is not None:
        _class(obj.cls, indent + INDENT_WIDTH, lines)


def _statement(statement: Statement, indent: int, lines: list[str]) -> None:
    if isinstance(statement, ReturnStatement):
        _emit(lines, indent, "ReturnStatement")
        if statement.expression is not None:
            _expression(statement.expression, indent + INDENT_WIDTH, lines)
    elif isinstance(statement, (ObjectExpression, OperatorExpression)):
        _expression(statement, indent, lines)
    else:
        raise TypeError(f"Cannot print statement of type {type(statement).__name__}")


def _expression(expression: Expression, indent: int, lines: list[str]) -> None:
    if isinstance(expression, OperatorExpression):
        _emit(lines, indent, f"OperatorExpression:{expression.operator.value}")
        for operand in expression.operands:
            _expression(operand, indent + INDENT_WIDTH, lines)
    elif isinstance(expression, ObjectExpression):
        _emit(lines, indent, "ObjectExpression")
        if expression.object is not None:
            _object(expression.object, indent + INDENT_WIDTH, lines)
    else:
        raise TypeError(f"Cannot print expression of type {type(expression).__name__}")
