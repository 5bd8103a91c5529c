# Copyright 2026 VCC Contributors
# SPDX-License-Identifier: Apache-2.0

"""Program graph entities.

A program is represented in memory by a tree of entities. Packages contain
classes and functions, functions contain objects and statements, and
operator expressions contain their operands. Besides these ownership edges,
objects, functions and object expressions hold plain references to entities
resolved by name elsewhere in the tree (an object's class, a function's return
class, the object an expression evaluates). Those references never make the
target a child.

Entity
  Package
  Class
  Function
  Object
  Statement = ReturnStatement | Expression
    Expression = ObjectExpression | OperatorExpression
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Literal, TypeVar

from pydantic import BaseModel, PrivateAttr, model_validator
from pydantic import Field as _Field

# ###############
# Public Interface
# ###############


class Entity(BaseModel):
    """Base class for all program graph entities.

    Entities compare and hash by identity: two distinct nodes with the same
    name are still different entities.
    """

    name: str = ""

    _parent: Entity | None = PrivateAttr(default=None)

    @property
    def parent(self) -> Entity | None:
        """The entity containing this one, or None while detached."""
        return self._parent

    def __eq__(self, other: object) -> bool:
        return self is other

    def __hash__(self) -> int:
        return id(self)

    @model_validator(mode="after")
    def adopt_children(self) -> Entity:
        """Make this entity the parent of the children it was constructed with."""
        children = self._children()
        seen: set[int] = set()
        for child in children:
            if child.parent is not None or id(child) in seen:
                raise ValueError(f"{type(child).__name__} {child.name!r} is already contained in another entity")
            seen.add(id(child))
        for child in children:
            child._parent = self
        return self

    def _children(self) -> list[Entity]:
        """Entities owned by this one, in declaration order."""
        return []


class Class(Entity):
    """A named type. Every object in a program has a class."""


class Object(Entity):
    """A named, typed storage slot such as a function parameter."""

    cls: Class | None = None


class ReturnMode(Enum):
    """Return semantics of a function."""

    # The function returns no objects
    NONE = "none"
    # The function returns an object by value
    VALUE = "value"


class OperatorKind(Enum):
    """Type of operator that appears within an operator expression."""

    PLUS = "plus"


class ObjectExpression(Entity):
    """An expression that evaluates to a single object, e.g. ``a``."""

    kind: Literal["object"] = "object"
    object: Object | None = None


class OperatorExpression(Entity):
    """Two or more sub-expressions combined with a common operator.

    For example ``a+b`` is an operator expression of kind ``plus`` with the
    operands ``a`` and ``b``.
    """

    kind: Literal["operator"] = "operator"
    operator: OperatorKind = OperatorKind.PLUS
    operands: list[Expression] = _Field(default_factory=list)

    def get_operand(self, name: str) -> Expression | None:
        """Return the first operand named *name*, or None."""
        return _find(self.operands, name)

    def add_operand(self, operand: Expression) -> None:
        """Append *operand* to the operand list."""
        _attach(self, self.operands, operand)

    def remove_operand(self, operand: Expression) -> None:
        """Remove *operand* from the operand list if present."""
        _detach(self.operands, operand)

    def _children(self) -> list[Entity]:
        return list(self.operands)


class ReturnStatement(Entity):
    """Exits a function, optionally passing the value of an expression back to the caller."""

    kind: Literal["return"] = "return"
    expression: Expression | None = None

    def set_expression(self, expression: Expression | None) -> None:
        """Replace the returned expression, re-parenting the old and new values."""
        if expression is not None and expression.parent is not None and expression is not self.expression:
            raise ValueError(f"{type(expression).__name__} is already contained in another entity")
        if self.expression is not None:
            self.expression._parent = None
        if expression is not None:
            expression._parent = self
        self.expression = expression

    def _children(self) -> list[Entity]:
        return [] if self.expression is None else [self.expression]


# A value-producing statement. The `kind` discriminator keeps the variant closed.
Expression = Annotated[ObjectExpression | OperatorExpression, _Field(discriminator="kind")]

# Any statement that may appear in a function body.
Statement = Annotated[ReturnStatement | ObjectExpression | OperatorExpression, _Field(discriminator="kind")]


class Function(Entity):
    """A callable unit of program logic.

    Functions accept parameters, the objects provided by the caller, and may
    return an object of their return class. The body is an ordered list of
    statements.
    """

    return_mode: ReturnMode = ReturnMode.NONE
    return_class: Class | None = None
    objects: list[Object] = _Field(default_factory=list)
    statements: list[Statement] = _Field(default_factory=list)

    @model_validator(mode="after")
    def check_return_class(self) -> Function:
        if self.return_mode is ReturnMode.VALUE and self.return_class is None:
            raise ValueError("a function returning a value requires a return class")
        if self.return_mode is ReturnMode.NONE and self.return_class is not None:
            raise ValueError("a function returning nothing cannot have a return class")
        return self

    def set_return_class(self, cls: Class | None) -> None:
        """Return objects of *cls* by value, or nothing when *cls* is None."""
        self.return_class = cls
        self.return_mode = ReturnMode.NONE if cls is None else ReturnMode.VALUE

    def get_object(self, name: str) -> Object | None:
        """Return the first object named *name*, or None."""
        return _find(self.objects, name)

    def add_object(self, obj: Object) -> None:
        """Append *obj* to the object list."""
        _attach(self, self.objects, obj)

    def remove_object(self, obj: Object) -> None:
        """Remove *obj* from the object list if present."""
        _detach(self.objects, obj)

    def get_statement(self, name: str) -> Statement | None:
        """Return the first statement named *name*, or None."""
        return _find(self.statements, name)

    def add_statement(self, statement: Statement) -> None:
        """Append *statement* to the body."""
        _attach(self, self.statements, statement)

    def remove_statement(self, statement: Statement) -> None:
        """Remove *statement* from the body if present."""
        _detach(self.statements, statement)

    def _children(self) -> list[Entity]:
        return [*self.objects, *self.statements]


class Package(Entity):
    """The top-level entity of a program, holding classes and functions."""

    classes: list[Class] = _Field(default_factory=list)
    functions: list[Function] = _Field(default_factory=list)

    def get_class(self, name: str) -> Class | None:
        """Return the first class named *name*, or None."""
        return _find(self.classes, name)

    def add_class(self, cls: Class) -> None:
        """Append *cls* to the class list."""
        _attach(self, self.classes, cls)

    def remove_class(self, cls: Class) -> None:
        """Remove *cls* from the class list if present."""
        _detach(self.classes, cls)

    def get_function(self, name: str) -> Function | None:
        """Return the first function named *name*, or None."""
        return _find(self.functions, name)

    def add_function(self, function: Function) -> None:
        """Append *function* to the function list."""
        _attach(self, self.functions, function)

    def remove_function(self, function: Function) -> None:
        """Remove *function* from the function list if present."""
        _detach(self.functions, function)

    def _children(self) -> list[Entity]:
        return [*self.classes, *self.functions]


# Resolve forward references in self-referential models.
OperatorExpression.model_rebuild()
ReturnStatement.model_rebuild()
Function.model_rebuild()
Package.model_rebuild()


# ################
# Implementation
# ################

_EntityT = TypeVar("_EntityT", bound=Entity)


def _find(entities: list[_EntityT], name: str) -> _EntityT | None:
    """Linear scan for the first entity with an exactly matching name."""
    for entity in entities:
        if entity.name == name:
            return entity
    return None


def _attach(owner: Entity, entities: list[_EntityT], entity: _EntityT) -> None:
    """Append *entity* to *entities* and make *owner* its parent."""
    if entity.parent is not None:
        raise ValueError(f"{type(entity).__name__} {entity.name!r} is already contained in another entity")
    entities.append(entity)
    entity._parent = owner


def _detach(entities: list[_EntityT], entity: _EntityT) -> None:
    """Remove *entity* from *entities* by identity and clear its parent."""
    for index, candidate in enumerate(entities):
        if candidate is entity:
            del entities[index]
            entity._parent = None
            return
