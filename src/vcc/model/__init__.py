# Copyright 2026 VCC Contributors
# SPDX-License-Identifier: Apache-2.0

"""Program graph model (packages, classes, functions, objects, statements)."""

from vcc.model.entities import (
    Class,
    Entity,
    Expression,
    Function,
    Object,
    ObjectExpression,
    OperatorExpression,
    OperatorKind,
    Package,
    ReturnMode,
    ReturnStatement,
    Statement,
)

__all__ = [
    # Base
    "Entity",
    # Declarations
    "Package",
    "Class",
    "Function",
    "ReturnMode",
    "Object",
    # Statements and expressions
    "Statement",
    "ReturnStatement",
    "Expression",
    "ObjectExpression",
    "OperatorExpression",
    "OperatorKind",
]
