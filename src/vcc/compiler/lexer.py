# Copyright 2026 VCC Contributors
# SPDX-License-Identifier: Apache-2.0

"""Lexical scanner for .v source files.

Groups the characters of a source buffer into lexemes and converts each
lexeme into a token. The scanner is a state machine that walks the buffer
once, left to right, until it reaches the sentinel terminator.
"""

import enum
import logging
import string
from dataclasses import dataclass

logger = logging.getLogger(__name__)

# ###############
# Public Interface
# ###############

SENTINEL = "\0"
DEFAULT_COLUMNS_PER_TAB = 2


class TokenType(enum.Enum):
    """All token types produced by the lexer."""

    ARROW = "arrow"
    COMMA = "comma"
    DIVIDE = "divide"
    END = "end"
    FUNC_KEYWORD = "func_keyword"
    IDENTIFIER = "identifier"
    LEFT_CURLY = "left_curly"
    LEFT_PAREN = "left_paren"
    MINUS = "minus"
    MODULO = "modulo"
    MULTIPLY = "multiply"
    PLUS = "plus"
    RETURN_KEYWORD = "return_keyword"
    RIGHT_CURLY = "right_curly"
    RIGHT_PAREN = "right_paren"
    SEMICOLON = "semicolon"


@dataclass(frozen=True)
class Token:
    """A lexical token with its source location.

    Attributes:
        type: The kind of token.
        lexeme: The source text that makes up the token.
        line: 1-based line number where the token starts.
        column: 1-based column number where the token starts.
        offset: 0-based index into the source buffer where the token starts.
    """

    type: TokenType
    lexeme: str
    line: int
    column: int
    offset: int = 0

    def __str__(self) -> str:
        return f'{self.type.value} "{self.lexeme}" {self.line} {self.column}'


class LexerError(Exception):
    """Raised in strict mode when the scanner meets a character no token starts with.

    Attributes:
        line: 1-based line number of the error.
        column: 1-based column number of the error.
    """

    def __init__(self, message: str, line: int, column: int) -> None:
        super().__init__(f"Line {line}, column {column}: {message}")
        self.line = line
        self.column = column


def tokenize(
    source: str,
    *,
    columns_per_tab: int = DEFAULT_COLUMNS_PER_TAB,
    strict: bool = False,
) -> list[Token]:
    """Tokenize source text into a sequence of tokens.

    The sentinel terminator is appended when the source does not already end
    with one. Comments and whitespace are consumed and not included in the
    output.

    Args:
        source: The full text of a .v file.
        columns_per_tab: Width used to expand tab characters into columns.
        strict: Raise on characters that cannot start a token instead of
            skipping them.

    Returns:
        A list of Token objects ending with a single END token.

    Raises:
        LexerError: In strict mode, on a character that cannot start a token.
    """
    if not source.endswith(SENTINEL):
        source += SENTINEL
    return Lexer(source, columns_per_tab=columns_per_tab, strict=strict).run()


class Lexer:
    """Converts a sentinel-terminated source buffer into a list of tokens.

    The lexer maintains an index into the buffer which is only ever
    incremented. Entering the START state saves the index, line and column as
    the start of a new lexeme; tokens are built from the span between the
    saved index and the current one.
    """

    def __init__(
        self,
        source: str,
        *,
        columns_per_tab: int = DEFAULT_COLUMNS_PER_TAB,
        strict: bool = False,
    ) -> None:
        if not source.endswith(SENTINEL):
            raise ValueError("source must end with the sentinel terminator")
        self._source = source
        self._state = _State.START
        self._index = 0
        self._start_index = 0
        self._line = 1
        self._start_line = 1
        self._column = 1
        self._start_column = 1
        self._compound_follow: dict[str, TokenType] = {}
        self._strict = strict
        self._finished = False
        self._tokens: list[Token] = []
        self.columns_per_tab = columns_per_tab

    @property
    def columns_per_tab(self) -> int:
        """Number of columns per tab stop, used for column numbers of tokens."""
        return self._columns_per_tab

    @columns_per_tab.setter
    def columns_per_tab(self, value: int) -> None:
        if value < 1:
            raise ValueError(f"columns per tab must be at least 1, got {value}")
        self._columns_per_tab = value

    def run(self) -> list[Token]:
        """Run the state machine and return all tokens including the terminal END.

        Raises:
            RuntimeError: If the lexer has already run to completion.
        """
        if self._finished:
            raise RuntimeError("the lexer has already reached the end of its input")
        handlers = {
            _State.START: self._start,
            _State.IDENTIFIER_OR_KEYWORD: self._identifier_or_keyword,
            _State.DIVIDE_OR_COMMENT: self._divide_or_comment,
            _State.OPERATOR_OR_COMPOUND: self._operator_or_compound,
            _State.CR_OR_CRLF: self._cr_or_crlf,
            _State.SINGLE_LINE_COMMENT: self._single_line_comment,
            _State.MULTI_LINE_COMMENT: self._multi_line_comment,
            _State.MULTI_LINE_COMMENT_CR_OR_CRLF: self._multi_line_comment_cr_or_crlf,
            _State.MULTI_LINE_COMMENT_MAYBE_END: self._multi_line_comment_maybe_end,
        }
        while not self._finished:
            handlers[self._state]()
        logger.debug("Lexed %d tokens over %d lines", len(self._tokens), self._line)
        return self._tokens

    # ------------------------------------------------------------------
    # State handlers
    # ------------------------------------------------------------------

    def _start(self) -> None:
        """Begin a new lexeme and classify it by its first character."""
        self._start_lexeme()
        ch = self._current()
        if ch in _IDENTIFIER_START:
            self._advance()
            self._state = _State.IDENTIFIER_OR_KEYWORD
        elif ch in _SINGLE_CHAR_TOKENS:
            self._advance()
            self._add_token(_SINGLE_CHAR_TOKENS[ch])
        elif ch in _COMPOUND_TOKENS:
            self._advance()
            self._compound_follow = _COMPOUND_TOKENS[ch][1]
            self._state = _State.OPERATOR_OR_COMPOUND
        elif ch == "/":
            self._advance()
            self._state = _State.DIVIDE_OR_COMMENT
        elif ch == "\n":
            self._advance()
            self._advance_line()
        elif ch == "\r":
            self._advance()
            self._state = _State.CR_OR_CRLF
        elif ch == "\t":
            self._advance()
            self._advance_tab()
        elif ch == " ":
            self._advance()
        elif ch == SENTINEL:
            self._add_token(TokenType.END)
            self._finished = True
        elif self._strict:
            raise LexerError(f"Unexpected character: {ch!r}", self._line, self._column)
        else:
            # Reserved for future tokens.
            self._advance()

    def _identifier_or_keyword(self) -> None:
        """Consume [A-Za-z0-9_]* and emit an identifier or keyword token."""
        if self._current() in _IDENTIFIER_PART:
            self._advance()
            return
        lexeme = self._lexeme()
        self._add_token(_KEYWORDS.get(lexeme, TokenType.IDENTIFIER))
        self._state = _State.START

    def _divide_or_comment(self) -> None:
        """Distinguish '/' from the start of a '//' or '/*' comment."""
        ch = self._current()
        if ch == "/":
            self._advance()
            self._state = _State.SINGLE_LINE_COMMENT
        elif ch == "*":
            self._advance()
            self._state = _State.MULTI_LINE_COMMENT
        else:
            self._add_token(TokenType.DIVIDE)
            self._state = _State.START

    def _operator_or_compound(self) -> None:
        """Emit a one-character operator or extend it to a two-character one."""
        follow = self._compound_follow.get(self._current())
        if follow is not None:
            self._advance()
            self._add_token(follow)
        else:
            self._add_token(_COMPOUND_TOKENS[self._lexeme()][0])
        self._state = _State.START

    def _cr_or_crlf(self) -> None:
        """Count CR or CRLF as a single line break."""
        if self._current() == "\n":
            self._advance()
        self._advance_line()
        self._state = _State.START

    def _single_line_comment(self) -> None:
        """Consume characters until the end of the line."""
        ch = self._current()
        if ch == "\n":
            self._advance()
            self._advance_line()
            self._state = _State.START
        elif ch == "\r":
            self._advance()
            self._state = _State.CR_OR_CRLF
        elif ch == SENTINEL:
            self._state = _State.START
        else:
            self._advance()

    def _multi_line_comment(self) -> None:
        """Consume characters until '*/', still counting line breaks."""
        ch = self._current()
        if ch == "\n":
            self._advance()
            self._advance_line()
        elif ch == "\r":
            self._advance()
            self._state = _State.MULTI_LINE_COMMENT_CR_OR_CRLF
        elif ch == "*":
            self._advance()
            self._state = _State.MULTI_LINE_COMMENT_MAYBE_END
        elif ch == SENTINEL:
            self._state = _State.START
        else:
            self._advance()

    def _multi_line_comment_cr_or_crlf(self) -> None:
        """Count CR or CRLF inside a multi-line comment as a single line break."""
        if self._current() == "\n":
            self._advance()
        self._advance_line()
        self._state = _State.MULTI_LINE_COMMENT

    def _multi_line_comment_maybe_end(self) -> None:
        """End the comment on '/', otherwise resume it without consuming."""
        if self._current() == "/":
            self._advance()
            self._state = _State.START
        else:
            self._state = _State.MULTI_LINE_COMMENT

    # ------------------------------------------------------------------
    # Position tracking helpers
    # ------------------------------------------------------------------

    def _current(self) -> str:
        """Return the character at the current index."""
        return self._source[self._index]

    def _start_lexeme(self) -> None:
        """Save the current index, line and column as the start of a new lexeme."""
        self._start_index = self._index
        self._start_line = self._line
        self._start_column = self._column

    def _advance(self) -> None:
        """Move to the next character, never past the sentinel."""
        if self._index == len(self._source) - 1:
            return
        self._index += 1
        self._column += 1

    def _advance_line(self) -> None:
        """Move to the start of the next line."""
        self._line += 1
        self._column = 1

    def _advance_tab(self) -> None:
        """Move to the next tab stop, taking partial tabs into account.

        The column has already been advanced past the tab character itself.
        """
        width = self._columns_per_tab
        self._column = (self._column + width) // width * width

    def _lexeme(self) -> str:
        """Return the text between the saved start index and the current index."""
        return self._source[self._start_index : self._index]

    def _add_token(self, token_type: TokenType) -> None:
        """Append a token for the current lexeme to the result list."""
        self._tokens.append(
            Token(token_type, self._lexeme(), self._start_line, self._start_column, self._start_index)
        )


# ################
# Implementation
# ################


class _State(enum.Enum):
    """Current state of the lexer."""

    # Start of a new lexeme
    START = enum.auto()
    # String of [A-Za-z_][A-Za-z0-9_]*, either an identifier or a keyword
    IDENTIFIER_OR_KEYWORD = enum.auto()
    # Either / (division), // (single-line comment), or /* (multi-line comment)
    DIVIDE_OR_COMMENT = enum.auto()
    # A one-character operator that may extend to a two-character one, e.g. - or ->
    OPERATOR_OR_COMPOUND = enum.auto()
    # Either CR or CRLF, both of which indicate a single newline
    CR_OR_CRLF = enum.auto()
    # Inside a single-line comment, terminated on newline
    SINGLE_LINE_COMMENT = enum.auto()
    # Inside a multi-line comment
    MULTI_LINE_COMMENT = enum.auto()
    # Either CR or CRLF, but inside a multi-line comment
    MULTI_LINE_COMMENT_CR_OR_CRLF = enum.auto()
    # Encountered * inside a multi-line comment, ends it if the next char is /
    MULTI_LINE_COMMENT_MAYBE_END = enum.auto()


_IDENTIFIER_START = frozenset(string.ascii_letters + "_")
_IDENTIFIER_PART = frozenset(string.ascii_letters + string.digits + "_")

_KEYWORDS: dict[str, TokenType] = {
    "func": TokenType.FUNC_KEYWORD,
    "return": TokenType.RETURN_KEYWORD,
}

_SINGLE_CHAR_TOKENS: dict[str, TokenType] = {
    "+": TokenType.PLUS,
    "*": TokenType.MULTIPLY,
    "%": TokenType.MODULO,
    ",": TokenType.COMMA,
    ";": TokenType.SEMICOLON,
    "{": TokenType.LEFT_CURLY,
    "}": TokenType.RIGHT_CURLY,
    "(": TokenType.LEFT_PAREN,
    ")": TokenType.RIGHT_PAREN,
}

# First character -> (token type on its own, {second character: two-character token type})
_COMPOUND_TOKENS: dict[str, tuple[TokenType, dict[str, TokenType]]] = {
    "-": (TokenType.MINUS, {">": TokenType.ARROW}),
}
