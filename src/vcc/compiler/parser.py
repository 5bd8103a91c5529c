# Copyright 2026 VCC Contributors
# SPDX-License-Identifier: Apache-2.0

"""Single-pass parser for .v token streams.

Converts the flat token list produced by the lexer into a program graph.
Names are resolved while the graph is built: a class or object must have been
declared before it is referenced.
"""

from __future__ import annotations

import enum
import logging

from vcc.compiler.lexer import Token, TokenType
from vcc.model.entities import (
    Class,
    Expression,
    Function,
    Object,
    ObjectExpression,
    OperatorExpression,
    OperatorKind,
    Package,
    ReturnMode,
    ReturnStatement,
)

logger = logging.getLogger(__name__)

# ###############
# Public Interface
# ###############

DEFAULT_PACKAGE_NAME = "default"
BUILTIN_CLASSES: tuple[str, ...] = ("int",)


class ParseError(Exception):
    """Raised on the first token that cannot continue the program.

    Attributes:
        token: The offending token.
        line: 1-based line number of the offending token.
        column: 1-based column number of the offending token.
    """

    def __init__(self, message: str, token: Token) -> None:
        super().__init__(f"Line {token.line}, column {token.column}: {message} (unexpected token {token})")
        self.token = token
        self.line = token.line
        self.column = token.column


def parse(tokens: list[Token]) -> Package:
    """Parse a token list into a program graph.

    Args:
        tokens: Tokens produced by the lexer, ending with an END token.

    Returns:
        The Package holding every class and function of the program.

    Raises:
        ParseError: On the first token that cannot continue the program or
            names an undeclared class or object.
    """
    return Parser(tokens).run()


class Parser:
    """Predictive state machine building a Package from a token list.

    The parser keeps an index into the token list that only ever moves
    forward, and references to the entities under construction (the current
    function, return statement and expression) so it knows where new
    entities must be inserted.
    """

    def __init__(self, tokens: list[Token]) -> None:
        if not tokens or tokens[-1].type is not TokenType.END:
            raise ValueError("token list must end with an END token")
        self._tokens = tokens
        self._pos = 0
        self._state = _State.START
        self._package = Package(name=DEFAULT_PACKAGE_NAME)
        for name in BUILTIN_CLASSES:
            self._package.add_class(Class(name=name))
        self._function: Function | None = None
        self._return_statement: ReturnStatement | None = None
        self._expression: Expression | None = None

    def run(self) -> Package:
        """Run the state machine and return the top-level Package.

        Raises:
            ParseError: On the first unexpected token.
            RuntimeError: If the parser has already been run.
        """
        if self._state is _State.DONE:
            raise RuntimeError("the parser has already been run")

        handlers = {
            _State.START: self._start,
            _State.FUNC_NAME: self._func_name,
            _State.FUNC_PARAMS_START: self._func_params_start,
            _State.FUNC_PARAM_OR_END: self._func_param_or_end,
            _State.FUNC_PARAM: self._func_param,
            _State.FUNC_PARAM_NAME: self._func_param_name,
            _State.FUNC_PARAMS_NEXT_OR_END: self._func_params_next_or_end,
            _State.FUNC_RETURN_CLAUSE: self._func_return_clause,
            _State.FUNC_RETURN_TYPE: self._func_return_type,
            _State.FUNC_BODY: self._func_body,
            _State.STATEMENT: self._statement,
            _State.RETURN_VALUE_OR_END: self._return_value_or_end,
            _State.EXPRESSION_VALUE: self._expression_value,
            _State.EXPRESSION_OPERATOR: self._expression_operator,
        }
        while self._state is not _State.DONE:
            handlers[self._state]()
        return self._package

    # ------------------------------------------------------------------
    # Token access helpers
    # ------------------------------------------------------------------

    def _current(self) -> Token:
        """Return the current (un-consumed) token."""
        return self._tokens[self._pos]

    def _advance(self) -> None:
        """Move to the next token, stopping at END."""
        if self._current().type is not TokenType.END:
            self._pos += 1

    @property
    def _current_function(self) -> Function:
        """The function whose declaration or body is being parsed."""
        if self._function is None:
            raise RuntimeError("no function is being parsed")
        return self._function

    def _fail(self, message: str) -> ParseError:
        """Build a ParseError referencing the current token."""
        return ParseError(message, self._current())

    def _expect(self, token_type: TokenType, what: str) -> Token:
        """Consume the current token if it has *token_type*, else raise ParseError."""
        tok = self._current()
        if tok.type is not token_type:
            raise self._fail(f"Expected {what}")
        self._advance()
        return tok

    def _resolve_class(self, tok: Token) -> Class:
        """Look up the class named by the already consumed token *tok*."""
        cls = self._package.get_class(tok.lexeme)
        if cls is None:
            raise ParseError(f"Unknown class {tok.lexeme!r}", tok)
        return cls

    # ------------------------------------------------------------------
    # Function declarations
    # ------------------------------------------------------------------

    def _start(self) -> None:
        """Expect the start of a new function, or the end of input."""
        tok = self._current()
        if tok.type is TokenType.END:
            self._state = _State.DONE
        elif tok.type is TokenType.FUNC_KEYWORD:
            self._function = Function()
            self._package.add_function(self._function)
            self._advance()
            self._state = _State.FUNC_NAME
        else:
            raise self._fail("Expected 'func' at top level")

    def _func_name(self) -> None:
        self._current_function.name = self._expect(TokenType.IDENTIFIER, "function name").lexeme
        self._state = _State.FUNC_PARAMS_START

    def _func_params_start(self) -> None:
        self._expect(TokenType.LEFT_PAREN, "'(' to open the parameter list")
        self._state = _State.FUNC_PARAM_OR_END

    def _func_param_or_end(self) -> None:
        """Either close an empty parameter list or fall through to the first parameter."""
        if self._current().type is TokenType.RIGHT_PAREN:
            self._advance()
            self._state = _State.FUNC_RETURN_CLAUSE
        else:
            self._state = _State.FUNC_PARAM

    def _func_param(self) -> None:
        """Parse the class of a parameter and attach a new object to the function."""
        tok = self._expect(TokenType.IDENTIFIER, "parameter class")
        obj = Object()
        obj.cls = self._resolve_class(tok)
        self._current_function.add_object(obj)
        self._state = _State.FUNC_PARAM_NAME

    def _func_param_name(self) -> None:
        self._current_function.objects[-1].name = self._expect(TokenType.IDENTIFIER, "parameter name").lexeme
        self._state = _State.FUNC_PARAMS_NEXT_OR_END

    def _func_params_next_or_end(self) -> None:
        tok = self._current()
        if tok.type is TokenType.COMMA:
            self._advance()
            self._state = _State.FUNC_PARAM
        elif tok.type is TokenType.RIGHT_PAREN:
            self._advance()
            self._state = _State.FUNC_RETURN_CLAUSE
        else:
            raise self._fail("Expected ',' or ')' in the parameter list")

    def _func_return_clause(self) -> None:
        """Either start a '-> Class' return clause or fall through to the body."""
        if self._current().type is TokenType.ARROW:
            self._advance()
            self._state = _State.FUNC_RETURN_TYPE
        else:
            self._state = _State.FUNC_BODY

    def _func_return_type(self) -> None:
        tok = self._expect(TokenType.IDENTIFIER, "return class")
        self._current_function.set_return_class(self._resolve_class(tok))
        self._state = _State.FUNC_BODY

    def _func_body(self) -> None:
        self._expect(TokenType.LEFT_CURLY, "'{' to open the function body")
        self._state = _State.STATEMENT

    # ------------------------------------------------------------------
    # Statements
    # ------------------------------------------------------------------

    def _statement(self) -> None:
        """Expect a statement or the end of the function body."""
        tok = self._current()
        if tok.type is TokenType.RIGHT_CURLY:
            function = self._current_function
            logger.debug(
                "Parsed function %r with %d parameters and %d statements",
                function.name,
                len(function.objects),
                len(function.statements),
            )
            self._function = None
            self._advance()
            self._state = _State.START
        elif tok.type is TokenType.RETURN_KEYWORD:
            self._return_statement = ReturnStatement()
            self._current_function.add_statement(self._return_statement)
            self._advance()
            self._state = _State.RETURN_VALUE_OR_END
        else:
            raise self._fail("Expected a statement or '}'")

    def _return_value_or_end(self) -> None:
        """Decide between a bare 'return;' and a return carrying a value."""
        returns_value = self._current_function.return_mode is ReturnMode.VALUE
        if self._current().type is TokenType.SEMICOLON:
            if returns_value:
                raise self._fail(f"Function {self._current_function.name!r} must return a value")
            self._return_statement = None
            self._advance()
            self._state = _State.STATEMENT
        else:
            if not returns_value:
                raise self._fail(f"Function {self._current_function.name!r} cannot return a value")
            self._state = _State.EXPRESSION_VALUE

    # ------------------------------------------------------------------
    # Expressions
    # ------------------------------------------------------------------

    def _expression_value(self) -> None:
        """Parse an operand and fold it into the expression built so far."""
        tok = self._current()
        if tok.type is not TokenType.IDENTIFIER:
            raise self._fail("Expected an object name")
        obj = self._current_function.get_object(tok.lexeme)
        if obj is None:
            raise self._fail(f"Unknown object {tok.lexeme!r}")
        operand = ObjectExpression()
        operand.object = obj
        if isinstance(self._expression, OperatorExpression):
            self._expression.add_operand(operand)
        else:
            self._expression = operand
        self._advance()
        self._state = _State.EXPRESSION_OPERATOR

    def _expression_operator(self) -> None:
        """Close the expression on ';' or wrap it in a new operator expression."""
        assert self._return_statement is not None
        tok = self._current()
        if tok.type is TokenType.SEMICOLON:
            self._return_statement.set_expression(self._expression)
            self._return_statement = None
            self._expression = None
            self._advance()
            self._state = _State.STATEMENT
        elif tok.type in _OPERATORS:
            wrapper = OperatorExpression(operator=_OPERATORS[tok.type])
            assert self._expression is not None
            wrapper.add_operand(self._expression)
            self._expression = wrapper
            self._advance()
            self._state = _State.EXPRESSION_VALUE
        else:
            raise self._fail("Expected an operator or ';'")


# ################
# Implementation
# ################


class _State(enum.Enum):
    """Current state of the parser."""

    # Start of a new program entity
    START = enum.auto()
    # Expecting a function name
    FUNC_NAME = enum.auto()
    # Expecting a function parameter list
    FUNC_PARAMS_START = enum.auto()
    # Expecting a function parameter or an empty parameter list
    FUNC_PARAM_OR_END = enum.auto()
    # Expecting a function parameter, starting with its class
    FUNC_PARAM = enum.auto()
    # Expecting a function parameter name
    FUNC_PARAM_NAME = enum.auto()
    # Expecting another function parameter, or the end of the parameter list
    FUNC_PARAMS_NEXT_OR_END = enum.auto()
    # Expecting a function return clause or function body
    FUNC_RETURN_CLAUSE = enum.auto()
    # Expecting a class in the function return clause
    FUNC_RETURN_TYPE = enum.auto()
    # Expecting a function body
    FUNC_BODY = enum.auto()
    # Expecting a statement or end of block
    STATEMENT = enum.auto()
    # After 'return', expecting a value or ';'
    RETURN_VALUE_OR_END = enum.auto()
    # Inside an expression, expecting a value
    EXPRESSION_VALUE = enum.auto()
    # Inside an expression, expecting an operator
    EXPRESSION_OPERATOR = enum.auto()
    # END token reached
    DONE = enum.auto()


_OPERATORS: dict[TokenType, OperatorKind] = {
    TokenType.PLUS: OperatorKind.PLUS,
}
