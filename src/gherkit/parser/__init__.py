# Copyright 2026 Gherkit Contributors
# SPDX-License-Identifier: Apache-2.0

"""Lexer and parser for .feature files."""

from gherkit.parser.errors import ErrorKind, GherkinError
from gherkit.parser.keywords import Keyword, KeywordLine, classify
from gherkit.parser.lexer import LexerError, Token, TokenType, tokenize
from gherkit.parser.parser import ParseError, parse_feature

__all__ = [
    "ErrorKind",
    "GherkinError",
    "Keyword",
    "KeywordLine",
    "LexerError",
    "ParseError",
    "Token",
    "TokenType",
    "classify",
    "parse_feature",
    "tokenize",
]
