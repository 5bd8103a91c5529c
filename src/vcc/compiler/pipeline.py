# Copyright 2026 VCC Contributors
# SPDX-License-Identifier: Apache-2.0

"""End-to-end compiler workflow for a single .v source file.

The phases run strictly in order, each consuming only the output of the
previous one:

* **Lexer**: source text to tokens
* **Parser**: tokens to program graph
* **Translator**: program graph to C code
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from vcc.compiler.lexer import DEFAULT_COLUMNS_PER_TAB, SENTINEL, Token, tokenize
from vcc.compiler.parser import parse
from vcc.compiler.translator import translate
from vcc.model.entities import Package

logger = logging.getLogger(__name__)

# ###############
# Public Interface
# ###############


class CompilerError(Exception):
    """Raised when a source file cannot be loaded into the pipeline."""


@dataclass(frozen=True)
class Compilation:
    """All artifacts produced by one compiler run.

    Attributes:
        source: The source text, including the sentinel terminator.
        tokens: Tokens produced by the lexer, ending with an END token.
        package: The program graph built by the parser.
        code: The generated C source text.
    """

    source: str
    tokens: list[Token]
    package: Package
    code: str


def read_source(path: Path) -> str:
    """Read a source file and append the sentinel terminator.

    Raises:
        CompilerError: If the file does not exist or cannot be decoded.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise CompilerError(f"Source file not found: {path}") from None
    except (OSError, UnicodeDecodeError) as exc:
        raise CompilerError(f"Cannot read source file {path}: {exc}") from exc
    return text + SENTINEL


def compile_source(
    source: str,
    *,
    columns_per_tab: int = DEFAULT_COLUMNS_PER_TAB,
    strict: bool = False,
) -> Compilation:
    """Run the lexer, parser and translator over *source*.

    Args:
        source: Source text, with or without the sentinel terminator.
        columns_per_tab: Tab width used for token column numbers.
        strict: Reject characters that cannot start a token.

    Returns:
        The Compilation holding the tokens, the graph and the C code.

    Raises:
        LexerError: In strict mode, on a character that cannot start a token.
        ParseError: On the first token that cannot continue the program.
    """
    if not source.endswith(SENTINEL):
        source += SENTINEL
    tokens = tokenize(source, columns_per_tab=columns_per_tab, strict=strict)
    package = parse(tokens)
    code = translate(package)
    logger.debug("Compiled %d functions", len(package.functions))
    return Compilation(source=source, tokens=tokens, package=package, code=code)
