# Copyright 2026 VCC Contributors
# SPDX-License-Identifier: Apache-2.0

"""Compiler pipeline for .v files: lexing, parsing, and translation to C."""

from vcc.compiler.lexer import LexerError, Token, TokenType, tokenize
from vcc.compiler.parser import ParseError, parse
from vcc.compiler.pipeline import Compilation, CompilerError, compile_source, read_source
from vcc.compiler.translator import translate

__all__ = [
    "tokenize",
    "Token",
    "TokenType",
    "LexerError",
    "parse",
    "ParseError",
    "translate",
    "compile_source",
    "read_source",
    "Compilation",
    "CompilerError",
]
