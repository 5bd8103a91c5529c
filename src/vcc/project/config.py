# Copyright 2026 VCC Contributors
# SPDX-License-Identifier: Apache-2.0

"""Data model and YAML parser for the optional ``vcc.yaml`` project file."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import yaml

from vcc.compiler.lexer import DEFAULT_COLUMNS_PER_TAB

# ###############
# Public Interface
# ###############

CONFIG_FILE_NAME = "vcc.yaml"


class ConfigError(Exception):
    """Raised when a project configuration file is invalid or cannot be loaded."""


@dataclass
class ProjectConfig:
    """Compiler settings read from a project configuration file.

    Attributes:
        columns_per_tab: Tab width used for token column numbers.
        strict_lexing: Reject characters that cannot start a token.
    """

    columns_per_tab: int = DEFAULT_COLUMNS_PER_TAB
    strict_lexing: bool = False


def load_project_config(path: Path) -> ProjectConfig:
    """Load and parse a project configuration file.

    Args:
        path: Path to the ``vcc.yaml`` file.

    Returns:
        A ProjectConfig instance populated from the file.

    Raises:
        ConfigError: If the file cannot be read or the configuration is invalid.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise ConfigError(f"Project config file not found: {path}") from None
    except OSError as exc:
        raise ConfigError(f"Cannot read project config file: {exc}") from exc

    return _parse_project_config(text, source_label=str(path))


def find_project_config(directory: Path) -> Path | None:
    """Return the project configuration file in *directory*, or None if there is none."""
    candidate = directory / CONFIG_FILE_NAME
    if candidate.is_file():
        return candidate
    return None


# ################
# Implementation
# ################

_KNOWN_KEYS = frozenset({"columns-per-tab", "strict-lexing"})


def _parse_project_config(text: str, source_label: str = "<string>") -> ProjectConfig:
    """Parse project config YAML text into a ProjectConfig.

    Args:
        text: Raw YAML content.
        source_label: Human-readable label used in error messages (e.g. the file path).

    Returns:
        A ProjectConfig instance. An empty document yields the defaults.

    Raises:
        ConfigError: If the YAML is invalid or a field has the wrong type.
    """
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in {source_label}: {exc}") from exc

    if data is None:
        return ProjectConfig()
    if not isinstance(data, dict):
        raise ConfigError(f"{source_label}: project config must be a YAML mapping")

    unknown = sorted(str(key) for key in data if key not in _KNOWN_KEYS)
    if unknown:
        raise ConfigError(f"{source_label}: unknown field(s): {', '.join(unknown)}")

    config = ProjectConfig()
    if "columns-per-tab" in data:
        value = data["columns-per-tab"]
        # bool is a subclass of int, but 'true' is not a tab width.
        if not isinstance(value, int) or isinstance(value, bool):
            raise ConfigError(f"{source_label}: 'columns-per-tab' must be an integer")
        if value < 1:
            raise ConfigError(f"{source_label}: 'columns-per-tab' must be at least 1")
        config.columns_per_tab = value
    if "strict-lexing" in data:
        value = data["strict-lexing"]
        if not isinstance(value, bool):
            raise ConfigError(f"{source_label}: 'strict-lexing' must be a boolean")
        config.strict_lexing = value
    return config
