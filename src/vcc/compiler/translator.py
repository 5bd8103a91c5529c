# Copyright 2026 VCC Contributors
# SPDX-License-Identifier: Apache-2.0

"""Translation of a program graph into C source text.

The translator trusts the graph to be complete: every object has a class and
every value-returning function has a return class. The parser guarantees this
by construction, so nothing is re-validated here.
"""

from __future__ import annotations

import logging

from vcc.model.entities import (
    Expression,
    Function,
    Object,
    ObjectExpression,
    OperatorExpression,
    OperatorKind,
    Package,
    ReturnStatement,
    Statement,
)

logger = logging.getLogger(__name__)

# ###############
# Public Interface
# ###############


def translate(package: Package) -> str:
    """Translate every function of *package* into C, in declaration order."""
    code = "".join(translate_function(function) for function in package.functions)
    logger.debug("Translated %d functions into %d characters of C", len(package.functions), len(code))
    return code


def translate_function(function: Function) -> str:
    """Translate a function definition, signature and body."""
    return_type = "void" if function.return_class is None else function.return_class.name

    params = ", ".join(_parameter(obj) for obj in function.objects)
    lines = [f"{return_type} {function.name}({params}) {{\n"]
    for statement in function.statements:
        lines.append(f"  {translate_statement(statement)};\n")
    lines.append("}\n")
    return "".join(lines)


def translate_statement(statement: Statement) -> str:
    """Translate a statement, without its terminating semicolon."""
    if isinstance(statement, ReturnStatement):
        if statement.expression is None:
            return "return"
        return "return " + translate_expression(statement.expression)
    if isinstance(statement, (ObjectExpression, OperatorExpression)):
        return translate_expression(statement)
    raise TypeError(f"Cannot translate statement of type {type(statement).__name__}")


def translate_expression(expression: Expression) -> str:
    """Translate an expression; operator expressions are fully parenthesized."""
    if isinstance(expression, ObjectExpression):
        assert expression.object is not None
        return expression.object.name
    if isinstance(expression, OperatorExpression):
        operator = translate_operator(expression.operator)
        return "(" + operator.join(translate_expression(operand) for operand in expression.operands) + ")"
    raise TypeError(f"Cannot translate expression of type {type(expression).__name__}")


def translate_operator(operator: OperatorKind) -> str:
    """Return the C spelling of *operator*."""
    return _OPERATOR_TEXT[operator]


# ################
# Implementation
# ################

_OPERATOR_TEXT: dict[OperatorKind, str] = {
    OperatorKind.PLUS: "+",
}


def _parameter(obj: Object) -> str:
    """Translate a parameter declaration such as ``int a``."""
    assert obj.cls is not None
    return f"{obj.cls.name} {obj.name}"
