# Copyright 2026 VCC Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for the project configuration module."""

from pathlib import Path

import pytest

from vcc.project import (
    CONFIG_FILE_NAME,
    ConfigError,
    ProjectConfig,
    find_project_config,
    load_project_config,
)

# ###############
# Helpers
# ###############


def _write_config(tmp_path: Path, content: str) -> Path:
    """Write a project config file and return its path."""
    config_file = tmp_path / CONFIG_FILE_NAME
    config_file.write_text(content, encoding="utf-8")
    return config_file


# ###############
# Normal Cases
# ###############


def test_full_config(tmp_path: Path) -> None:
    """Both settings are read from the file."""
    config = load_project_config(_write_config(tmp_path, "columns-per-tab: 4\nstrict-lexing: true\n"))

    assert isinstance(config, ProjectConfig)
    assert config.columns_per_tab == 4
    assert config.strict_lexing is True


def test_partial_config_keeps_defaults(tmp_path: Path) -> None:
    """Settings missing from the file keep their default values."""
    config = load_project_config(_write_config(tmp_path, "strict-lexing: false\n"))

    assert config.columns_per_tab == 2
    assert config.strict_lexing is False


def test_empty_config_yields_defaults(tmp_path: Path) -> None:
    """An empty file is a valid configuration."""
    assert load_project_config(_write_config(tmp_path, "")) == ProjectConfig()


def test_comment_only_config_yields_defaults(tmp_path: Path) -> None:
    assert load_project_config(_write_config(tmp_path, "# nothing configured yet\n")) == ProjectConfig()


# ###############
# Discovery
# ###############


def test_find_config_in_directory(tmp_path: Path) -> None:
    config_file = _write_config(tmp_path, "columns-per-tab: 8\n")
    assert find_project_config(tmp_path) == config_file


def test_find_config_returns_none_when_absent(tmp_path: Path) -> None:
    assert find_project_config(tmp_path) is None


def test_find_config_ignores_directory_with_config_name(tmp_path: Path) -> None:
    (tmp_path / CONFIG_FILE_NAME).mkdir()
    assert find_project_config(tmp_path) is None


# ###############
# Error Cases
# ###############


def test_missing_file(tmp_path: Path) -> None:
    with pytest.raises(ConfigError, match="not found"):
        load_project_config(tmp_path / "missing.yaml")


def test_invalid_yaml(tmp_path: Path) -> None:
    with pytest.raises(ConfigError, match="Invalid YAML"):
        load_project_config(_write_config(tmp_path, "columns-per-tab: [4\n"))


def test_config_must_be_mapping(tmp_path: Path) -> None:
    with pytest.raises(ConfigError, match="mapping"):
        load_project_config(_write_config(tmp_path, "- columns-per-tab\n- 4\n"))


def test_unknown_field(tmp_path: Path) -> None:
    with pytest.raises(ConfigError, match="unknown field"):
        load_project_config(_write_config(tmp_path, "tab-width: 4\n"))


@pytest.mark.parametrize("value", ["four", "true", "2.5", "null"])
def test_columns_per_tab_must_be_integer(tmp_path: Path, value: str) -> None:
    with pytest.raises(ConfigError, match="'columns-per-tab' must be an integer"):
        load_project_config(_write_config(tmp_path, f"columns-per-tab: {value}\n"))


@pytest.mark.parametrize("value", ["0", "-3"])
def test_columns_per_tab_must_be_positive(tmp_path: Path, value: str) -> None:
    with pytest.raises(ConfigError, match="at least 1"):
        load_project_config(_write_config(tmp_path, f"columns-per-tab: {value}\n"))


@pytest.mark.parametrize("value", ["1", "yes-please", "null"])
def test_strict_lexing_must_be_boolean(tmp_path: Path, value: str) -> None:
    with pytest.raises(ConfigError, match="'strict-lexing' must be a boolean"):
        load_project_config(_write_config(tmp_path, f"strict-lexing: {value}\n"))


def test_error_names_the_file(tmp_path: Path) -> None:
    config_file = _write_config(tmp_path, "strict-lexing: 1\n")
    with pytest.raises(ConfigError) as exc_info:
        load_project_config(config_file)
    assert str(config_file) in str(exc_info.value)
