# Copyright 2026 VCC Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for the vcc CLI entry point."""

import json
import sys
from pathlib import Path

import pytest

from vcc.cli.main import main

_ADD_SOURCE = "func add(int a, int b) -> int {\n  return a+b;\n}\n"
_ADD_CODE = "int add(int a, int b) {\n  return (a+b);\n}\n"

# ###############
# Helpers
# ###############


def _run(monkeypatch: pytest.MonkeyPatch, *argv: str) -> int:
    """Run main() with *argv* and return its exit code."""
    monkeypatch.setattr(sys, "argv", ["vcc", *argv])
    with pytest.raises(SystemExit) as exc_info:
        main()
    code = exc_info.value.code
    assert isinstance(code, int)
    return code


def _write_source(tmp_path: Path, content: str = _ADD_SOURCE, name: str = "input.v") -> Path:
    source = tmp_path / name
    source.write_text(content, encoding="utf-8")
    return source


# ###############
# Public Interface
# ###############


def test_main_no_args_prints_help_and_exits(monkeypatch: pytest.MonkeyPatch) -> None:
    """main() with no subcommand prints help and exits with code 0."""
    monkeypatch.setattr(sys, "argv", ["vcc"])
    with pytest.raises(SystemExit) as exc_info:
        main()
    assert exc_info.value.code == 0


# -------- compile tests --------


def test_compile_prints_all_sections(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    """compile echoes the source, tokens and graph before the generated C."""
    source = _write_source(tmp_path)
    assert _run(monkeypatch, "compile", str(source)) == 0

    out = capsys.readouterr().out
    titles = ["V Code", "Tokens", "Graph", "C Code"]
    positions = [out.index(title) for title in titles]
    assert positions == sorted(positions)
    assert _ADD_SOURCE in out
    assert 'func_keyword "func" 1 1' in out
    assert "Package:default" in out
    assert out.endswith(_ADD_CODE)
    assert "\0" not in out


def test_compile_c_only_prints_exactly_the_code(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    source = _write_source(tmp_path)
    assert _run(monkeypatch, "compile", "--c-only", str(source)) == 0
    assert capsys.readouterr().out == _ADD_CODE


def test_compile_default_source_is_input_v(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    """compile without a source argument reads input.v from the working directory."""
    _write_source(tmp_path)
    monkeypatch.chdir(tmp_path)
    assert _run(monkeypatch, "compile", "--c-only") == 0
    assert capsys.readouterr().out == _ADD_CODE


def test_compile_writes_output_file(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    source = _write_source(tmp_path)
    output = tmp_path / "out.c"
    assert _run(monkeypatch, "compile", "--c-only", "-o", str(output), str(source)) == 0
    assert output.read_text(encoding="utf-8") == _ADD_CODE
    assert "Wrote C code to" in capsys.readouterr().out


def test_compile_output_to_missing_directory_fails(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    source = _write_source(tmp_path)
    output = tmp_path / "missing" / "out.c"
    assert _run(monkeypatch, "compile", "--c-only", "-o", str(output), str(source)) == 1
    assert "Error:" in capsys.readouterr().err


def test_compile_parse_error_exits_1(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    """A parse error is reported on stderr and nothing is printed to stdout."""
    source = _write_source(tmp_path, "func f(float x) { }\n")
    assert _run(monkeypatch, "compile", str(source)) == 1

    captured = capsys.readouterr()
    assert captured.out == ""
    assert "Error:" in captured.err
    assert "Line 1, column 8" in captured.err
    assert "Unknown class 'float'" in captured.err


def test_compile_missing_source_exits_1(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    assert _run(monkeypatch, "compile", str(tmp_path / "missing.v")) == 1
    assert "not found" in capsys.readouterr().err


def test_compile_strict_rejects_unknown_character(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    source = _write_source(tmp_path, "func f() { # }\n")
    assert _run(monkeypatch, "compile", "--c-only", str(source)) == 0
    assert capsys.readouterr().out == "void f() {\n}\n"

    assert _run(monkeypatch, "compile", "--strict", str(source)) == 1
    assert "Unexpected character" in capsys.readouterr().err


# -------- tokens tests --------


def test_tokens_prints_token_stream(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    source = _write_source(tmp_path, "func f() { }")
    assert _run(monkeypatch, "tokens", str(source)) == 0

    lines = capsys.readouterr().out.splitlines()
    assert lines[0] == 'func_keyword "func" 1 1'
    assert lines[-1] == 'end "" 1 13'
    assert len(lines) == 7


def test_tokens_does_not_parse(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    """Token output is available even for sources that would not parse."""
    source = _write_source(tmp_path, "return return")
    assert _run(monkeypatch, "tokens", str(source)) == 0
    assert capsys.readouterr().out.count("return_keyword") == 2


def test_tokens_tab_width_flag(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    source = _write_source(tmp_path, "\tx")
    assert _run(monkeypatch, "tokens", "--tab-width", "8", str(source)) == 0
    assert capsys.readouterr().out.splitlines()[0] == 'identifier "x" 1 8'


def test_tokens_tab_width_from_config_next_to_source(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    """A vcc.yaml file beside the source configures the lexer."""
    source = _write_source(tmp_path, "\tx")
    (tmp_path / "vcc.yaml").write_text("columns-per-tab: 4\n", encoding="utf-8")
    assert _run(monkeypatch, "tokens", str(source)) == 0
    assert capsys.readouterr().out.splitlines()[0] == 'identifier "x" 1 4'


def test_tab_width_flag_overrides_config(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    source = _write_source(tmp_path, "\tx")
    (tmp_path / "vcc.yaml").write_text("columns-per-tab: 4\n", encoding="utf-8")
    assert _run(monkeypatch, "tokens", "--tab-width", "2", str(source)) == 0
    assert capsys.readouterr().out.splitlines()[0] == 'identifier "x" 1 4'


def test_explicit_config_file(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    source = _write_source(tmp_path, "func f() { $ }")
    config = tmp_path / "settings.yaml"
    config.write_text("strict-lexing: true\n", encoding="utf-8")
    assert _run(monkeypatch, "tokens", "--config", str(config), str(source)) == 1
    assert "Unexpected character" in capsys.readouterr().err


def test_invalid_config_exits_1(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    source = _write_source(tmp_path)
    (tmp_path / "vcc.yaml").write_text("columns-per-tab: 0\n", encoding="utf-8")
    assert _run(monkeypatch, "tokens", str(source)) == 1
    assert "columns-per-tab" in capsys.readouterr().err


def test_invalid_tab_width_flag_is_a_usage_error(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    source = _write_source(tmp_path)
    assert _run(monkeypatch, "tokens", "--tab-width", "0", str(source)) == 2


# -------- graph tests --------


def test_graph_prints_tree(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    source = _write_source(tmp_path)
    assert _run(monkeypatch, "graph", str(source)) == 0

    lines = capsys.readouterr().out.splitlines()
    assert lines[:3] == ["Package:default", "  Function:value", "    Class:int"]
    assert "      OperatorExpression:plus" in lines


def test_graph_json(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    source = _write_source(tmp_path)
    assert _run(monkeypatch, "graph", "--json", str(source)) == 0

    data = json.loads(capsys.readouterr().out)
    assert data["name"] == "default"
    function = data["functions"][0]
    assert function["name"] == "add"
    assert function["return_mode"] == "value"
    assert [obj["name"] for obj in function["objects"]] == ["a", "b"]
    assert function["statements"][0]["kind"] == "return"
    assert function["statements"][0]["expression"]["kind"] == "operator"


def test_graph_parse_error_exits_1(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    source = _write_source(tmp_path, "func f() -> int { return; }")
    assert _run(monkeypatch, "graph", str(source)) == 1
    assert "must return a value" in capsys.readouterr().err
