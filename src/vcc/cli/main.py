# Copyright 2026 VCC Contributors
# SPDX-License-Identifier: Apache-2.0

"""Entry point for the vcc command-line interface."""

import argparse
import logging
import sys
from pathlib import Path
from typing import Any

from yachalk import chalk

from vcc.compiler.lexer import LexerError, Token, tokenize
from vcc.compiler.parser import ParseError, parse
from vcc.compiler.pipeline import Compilation, CompilerError, compile_source, read_source
from vcc.model.entities import Package
from vcc.project.config import ConfigError, ProjectConfig, find_project_config, load_project_config
from vcc.views.printer import format_graph, format_tokens

# ###############
# Public Interface
# ###############


def main() -> None:
    """Run the vcc CLI."""
    parser = argparse.ArgumentParser(
        prog="vcc",
        description="vcc: compile .v source files into C",
    )
    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "source",
        nargs="?",
        default=_DEFAULT_SOURCE,
        help=f"Source file to compile (default: {_DEFAULT_SOURCE})",
    )
    common.add_argument(
        "--config",
        help=f"Project configuration file (default: {_CONFIG_HINT} next to the source file)",
    )
    common.add_argument(
        "--tab-width",
        type=_positive_int,
        default=None,
        help="Columns per tab used for token positions (overrides the configuration)",
    )
    common.add_argument(
        "--strict",
        action="store_true",
        help="Reject characters that cannot start a token instead of skipping them",
    )
    common.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log the progress of each compiler phase",
    )

    # compile subcommand
    compile_parser = subparsers.add_parser(
        "compile",
        parents=[common],
        help="Compile a source file into C",
        description="Compile a source file, printing the intermediate artifacts and the generated C.",
    )
    compile_parser.add_argument(
        "-o",
        "--output",
        help="Write the generated C to this file instead of standard output",
    )
    compile_parser.add_argument(
        "--c-only",
        action="store_true",
        help="Print only the generated C, without the source, tokens and graph",
    )

    # tokens subcommand
    subparsers.add_parser(
        "tokens",
        parents=[common],
        help="Print the token stream of a source file",
        description="Run the lexer and print one token per line.",
    )

    # graph subcommand
    graph_parser = subparsers.add_parser(
        "graph",
        parents=[common],
        help="Print the program graph of a source file",
        description="Run the lexer and parser and print the resulting program graph.",
    )
    graph_parser.add_argument(
        "--json",
        action="store_true",
        help="Print the graph as JSON instead of an indented tree",
    )

    args = parser.parse_args()
    if args.command is None:
        parser.print_help()
        sys.exit(0)

    _setup_logging(args.verbose)
    sys.exit(_dispatch(args))


# ################
# Implementation
# ################

_DEFAULT_SOURCE = "input.v"
_CONFIG_HINT = "vcc.yaml"


def _positive_int(text: str) -> int:
    """argparse type for a strictly positive integer."""
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid integer: {text!r}") from None
    if value < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {value}")
    return value


def _setup_logging(verbose: bool) -> None:
    """Configure logging based on verbosity."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s: %(name)s: %(message)s",
    )


def _dispatch(args: argparse.Namespace) -> int:
    """Load the source and configuration, then dispatch to the subcommand handler."""
    source_path = Path(args.source)
    try:
        config = _load_config(args, source_path)
        source = read_source(source_path)
        if args.command == "compile":
            return _cmd_compile(args, compile_source(source, **_lexer_options(config)))
        if args.command == "tokens":
            return _cmd_tokens(tokenize(source, **_lexer_options(config)))
        if args.command == "graph":
            return _cmd_graph(args, parse(tokenize(source, **_lexer_options(config))))
    except (CompilerError, ConfigError, LexerError, ParseError) as exc:
        print(chalk.red(f"Error: {exc}"), file=sys.stderr)
        return 1
    return 0


def _lexer_options(config: ProjectConfig) -> dict[str, Any]:
    """Keyword arguments for the lexer derived from *config*."""
    return {"columns_per_tab": config.columns_per_tab, "strict": config.strict_lexing}


def _load_config(args: argparse.Namespace, source_path: Path) -> ProjectConfig:
    """Merge the configuration file with command-line overrides."""
    if args.config is not None:
        config = load_project_config(Path(args.config))
    else:
        found = find_project_config(source_path.resolve().parent)
        config = load_project_config(found) if found is not None else ProjectConfig()

    if args.tab_width is not None:
        config.columns_per_tab = args.tab_width
    if args.strict:
        config.strict_lexing = True
    return config


def _cmd_compile(args: argparse.Namespace, compilation: Compilation) -> int:
    """Handle the compile subcommand."""
    if not args.c_only:
        _print_section("V Code")
        print(compilation.source.rstrip("\0"))
        _print_section("Tokens")
        print(format_tokens(compilation.tokens), end="")
        _print_section("Graph")
        print(format_graph(compilation.package), end="")

    if args.output is not None:
        output = Path(args.output)
        try:
            output.write_text(compilation.code, encoding="utf-8")
        except OSError as exc:
            print(chalk.red(f"Error: cannot write '{output}': {exc}"), file=sys.stderr)
            return 1
        print(f"Wrote C code to '{output}'.")
        return 0

    if not args.c_only:
        _print_section("C Code")
    print(compilation.code, end="")
    return 0


def _cmd_tokens(tokens: list[Token]) -> int:
    """Handle the tokens subcommand."""
    print(format_tokens(tokens), end="")
    return 0


def _cmd_graph(args: argparse.Namespace, package: Package) -> int:
    """Handle the graph subcommand."""
    if args.json:
        print(package.model_dump_json(indent=2))
    else:
        print(format_graph(package), end="")
    return 0


def _print_section(title: str) -> None:
    """Print a banner separating the artifacts of two compiler phases."""
    rule = "-" * 10
    print(chalk.blue(f"{rule}{title:^6}{rule}"))
