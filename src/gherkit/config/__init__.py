# Copyright 2026 Gherkit Contributors
# SPDX-License-Identifier: Apache-2.0

"""Parser configuration for Gherkit."""

from gherkit.config.parser_config import (
    CONFIG_FILE_NAME,
    ParserConfig,
    ParserConfigError,
    find_parser_config,
    load_parser_config,
    parse_parser_config,
)

__all__ = [
    "CONFIG_FILE_NAME",
    "ParserConfig",
    "ParserConfigError",
    "find_parser_config",
    "load_parser_config",
    "parse_parser_config",
]
