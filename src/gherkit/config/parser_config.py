# Copyright 2026 Gherkit Contributors
# SPDX-License-Identifier: Apache-2.0

"""Data model and YAML loader for the Gherkit parser configuration file."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

import yaml

logger = logging.getLogger(__name__)

# ###############
# Public Interface
# ###############

CONFIG_FILE_NAME = ".gherkit.yaml"


class ParserConfigError(Exception):
    """Raised when a parser configuration file is invalid or cannot be loaded."""


@dataclass(frozen=True)
class ParserConfig:
    """Options that tune how feature files are parsed.

    Attributes:
        duplicate_step_check: Log a warning for every step whose description
            repeats an earlier step in the same block.
        default_language: Language reported for features without a
            ``# language:`` comment.
    """

    duplicate_step_check: bool = False
    default_language: str = "en"


def find_parser_config(start: Path) -> Path | None:
    """Return the nearest ``.gherkit.yaml`` at or above *start*.

    *start* may be a directory or a file; for a file the search begins in
    its directory. Returns None when no ancestor holds a config file.
    """
    start = start.resolve()
    directory = start if start.is_dir() else start.parent
    for candidate in (directory, *directory.parents):
        config_file = candidate / CONFIG_FILE_NAME
        if config_file.is_file():
            logger.debug("Using parser config %s", config_file)
            return config_file
    return None


def load_parser_config(path: Path) -> ParserConfig:
    """Load and parse a Gherkit configuration file.

    Args:
        path: Path to the ``.gherkit.yaml`` file.

    Returns:
        A ParserConfig instance populated from the file.

    Raises:
        ParserConfigError: If the file cannot be read or the configuration is invalid.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise ParserConfigError(f"Parser config file not found: {path}") from None
    except OSError as exc:
        raise ParserConfigError(f"Cannot read parser config file: {exc}") from exc

    return parse_parser_config(text, source_label=str(path))


def parse_parser_config(text: str, source_label: str = "<string>") -> ParserConfig:
    """Parse parser config YAML text into a ParserConfig.

    An empty document yields the defaults.

    Raises:
        ParserConfigError: If the YAML is invalid, is not a mapping, has
            unknown keys, or a value has the wrong type.
    """
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ParserConfigError(f"Invalid YAML in {source_label}: {exc}") from exc

    if data is None:
        return ParserConfig()
    if not isinstance(data, dict):
        raise ParserConfigError(f"{source_label}: parser config must be a YAML mapping")

    unknown = sorted(str(key) for key in data if key not in _KNOWN_KEYS)
    if unknown:
        raise ParserConfigError(f"{source_label}: unknown field(s): {', '.join(unknown)}")

    defaults = ParserConfig()
    duplicate_step_check = _optional_bool(data, "duplicate-step-check", defaults.duplicate_step_check, source_label)
    default_language = _optional_string(data, "default-language", defaults.default_language, source_label)
    return ParserConfig(duplicate_step_check=duplicate_step_check, default_language=default_language)


# ################
# Implementation
# ################

_KNOWN_KEYS = frozenset({"duplicate-step-check", "default-language"})


def _optional_bool(mapping: dict[str, object], key: str, default: bool, source_label: str) -> bool:
    """Extract an optional boolean field, raising ParserConfigError on a wrong type."""
    if key not in mapping:
        return default
    value = mapping[key]
    if not isinstance(value, bool):
        raise ParserConfigError(f"{source_label}: '{key}' must be a boolean")
    return value


def _optional_string(mapping: dict[str, object], key: str, default: str, source_label: str) -> str:
    """Extract an optional non-empty string field, raising ParserConfigError on a wrong type."""
    if key not in mapping:
        return default
    value = mapping[key]
    if not isinstance(value, str) or not value.strip():
        raise ParserConfigError(f"{source_label}: '{key}' must be a non-empty string")
    return value.strip()
