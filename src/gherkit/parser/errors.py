# Copyright 2026 Gherkit Contributors
# SPDX-License-Identifier: Apache-2.0

"""Error taxonomy shared by the lexer and the document parser."""

import enum

# ###############
# Public Interface
# ###############


class ErrorKind(enum.Enum):
    """Discriminates every way a parse can fail."""

    # Lexical
    STRING_INCONSISTENT_INDENT = "StringInconsistentIndent"
    UNCLOSED_DOC_STRING = "UnclosedDocString"
    INCONSISTENT_CELL_COUNT = "InconsistentCellCount"

    # Structural
    NOT_A_FEATURE = "NotAFeature"
    UNEXPECTED_KEYWORD = "UnexpectedKeyword"
    UNEXPECTED_BLOCK = "UnexpectedBlock"
    INVALID_BARE_KEYWORD = "InvalidBareKeyword"
    INVALID_BACKGROUND_STEP = "InvalidBackgroundStep"
    INVALID_TAG = "InvalidTag"
    MULTIPLE_LANGUAGE_TAGS = "MultipleLanguageTags"
    MUST_HAVE_AT_LEAST_ONE_STEP = "MustHaveAtLeastOneStep"
    MUST_HAVE_AT_LEAST_ONE_SCENARIOS_SECTION = "MustHaveAtLeastOneScenariosSection"
    DIFFERING_PLACEHOLDERS = "DifferingPlaceholders"
    EXPECTED_DATA_TABLE_AFTER_EXAMPLES = "ExpectedDataTableAfterExamples"
    EXPECTED_DOC_STRING_OR_DATA_TABLE = "ExpectedDocStringOrDataTable"
    INCONSISTENT_INDENTATION = "InconsistentIndentation"
    INVALID_KEYWORD = "InvalidKeyword"
    UNEXPECTED_END_OF_INPUT = "UnexpectedEndOfInput"
    STANDALONE_TAGS_NOT_ALLOWED = "StandaloneTagsNotAllowed"


class GherkinError(Exception):
    """Base class for every error raised while turning feature text into a model.

    Attributes:
        kind: What went wrong.
        line: Zero-based number of the offending source line.
        text: The offending source line, verbatim (empty past end of input).
        message: Human-readable description without location information.
    """

    def __init__(self, kind: ErrorKind, message: str, line: int, text: str) -> None:
        super().__init__(f"Line {line + 1}: {message}")
        self.kind = kind
        self.message = message
        self.line = line
        self.text = text

    def render(self) -> str:
        """Return the message followed by the offending line, for terminal output."""
        return f"{self.message}\n--> {self.text} <--"


def split_lines(source: str) -> list[str]:
    """Split *source* into lines, dropping the terminators.

    Only ``\\n`` and ``\\r\\n`` end a line; a trailing terminator does not
    start an extra empty line.
    """
    lines = source.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def source_line(source: str, line: int) -> str:
    """Return zero-based line *line* of *source*, or '' when out of range."""
    lines = split_lines(source)
    if 0 <= line < len(lines):
        return lines[line]
    return ""
