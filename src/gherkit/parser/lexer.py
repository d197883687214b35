# Copyright 2026 Gherkit Contributors
# SPDX-License-Identifier: Apache-2.0

"""Line-oriented scanner for Gherkin feature files.

Splits raw source text into a flat sequence of line, comment, doc-string and
data-table tokens for subsequent parsing.
"""

import enum
from dataclasses import dataclass

from gherkit.model.types import DataTable, DataTableError
from gherkit.parser.errors import ErrorKind, GherkinError, source_line, split_lines

# ###############
# Public Interface
# ###############


class TokenType(enum.Enum):
    """All token types produced by the Gherkit lexer."""

    LINE = "LINE"
    COMMENT = "COMMENT"
    DOC_STRING = "DOC_STRING"
    DATA_TABLE = "DATA_TABLE"


@dataclass(frozen=True)
class Token:
    """A lexical token with its source span.

    Attributes:
        type: The kind of token.
        value: Trimmed line text for LINE, the text after '#' for COMMENT,
            the body for DOC_STRING, and '' for DATA_TABLE.
        start_line: Zero-based line number of the first line of the token.
        end_line: Zero-based line number one past the token's last line.
        indent: Leading whitespace of the line (LINE and COMMENT tokens only).
        table: The parsed table for DATA_TABLE tokens.
    """

    type: TokenType
    value: str
    start_line: int
    end_line: int
    indent: str = ""
    table: DataTable | None = None

    @property
    def is_blank(self) -> bool:
        """Return True for an empty LINE token."""
        return self.type == TokenType.LINE and not self.value


class LexerError(GherkinError):
    """Raised when the scanner meets a malformed doc-string or data table."""


def tokenize(source: str) -> list[Token]:
    """Tokenize Gherkin source text into a sequence of tokens.

    Every physical line belongs to exactly one token. Blank lines become empty
    LINE tokens; filtering them is left to the parser.

    Args:
        source: The full text of a .feature file.

    Returns:
        A list of tokens in source order.

    Raises:
        LexerError: On an unclosed doc-string, a doc-string line that does
            not share the opening delimiter's indentation, or a table row
            whose cell count differs from the header's.
    """
    return _Lexer(source).tokenize()


def split_row(line: str) -> list[str]:
    """Split a table row into trimmed cell values.

    The fields before the first '|' and after the last '|' are dropped.
    ``\\|``, ``\\\\`` and ``\\n`` inside a cell stand for a literal pipe, a
    backslash and a newline.
    """
    fields: list[str] = []
    current: list[str] = []
    chars = iter(line.strip())
    for ch in chars:
        if ch == "\\":
            escaped = next(chars, "")
            if escaped == "|":
                current.append("|")
            elif escaped == "n":
                current.append("\n")
            elif escaped == "\\":
                current.append("\\")
            else:
                current.append(ch + escaped)
        elif ch == "|":
            fields.append("".join(current))
            current = []
        else:
            current.append(ch)
    # The text after the final '|' is never a cell, closed or not.
    return [field.strip() for field in fields[1:]]


# ################
# Implementation
# ################

_DOC_STRING_DELIMITER = '"""'


class _Lexer:
    """Internal scanner state: the split source and the current line index."""

    def __init__(self, source: str) -> None:
        self._source = source
        self._lines = split_lines(source)
        self._line = 0
        self._tokens: list[Token] = []

    def tokenize(self) -> list[Token]:
        """Run the scanner over all lines and return the tokens."""
        while self._line < len(self._lines):
            stripped = self._lines[self._line].strip()
            if stripped.startswith(_DOC_STRING_DELIMITER):
                self._scan_doc_string()
            elif stripped.startswith("|"):
                self._scan_table()
            else:
                self._scan_line()
        return self._tokens

    def _error(self, kind: ErrorKind, message: str, line: int) -> LexerError:
        return LexerError(kind, message, line, source_line(self._source, line))

    def _scan_line(self) -> None:
        """Emit a LINE or COMMENT token for the current line."""
        raw = self._lines[self._line]
        stripped = raw.strip()
        indent = raw[: len(raw) - len(raw.lstrip())]
        if stripped.startswith("#"):
            token = Token(TokenType.COMMENT, stripped[1:], self._line, self._line + 1, indent)
        else:
            token = Token(TokenType.LINE, stripped, self._line, self._line + 1, indent)
        self._tokens.append(token)
        self._line += 1

    def _scan_doc_string(self) -> None:
        """Scan from an opening '\"\"\"' through the matching closing line.

        Body lines lose the opening line's indentation. Whitespace-only lines
        are accepted whatever their indentation. Blank lines at the start and
        end of the body are dropped.
        """
        start = self._line
        opening = self._lines[start]
        indent = opening[: len(opening) - len(opening.lstrip())]
        body: list[str] = []

        self._line += 1
        while self._line < len(self._lines):
            raw = self._lines[self._line]
            stripped = raw.strip()
            if stripped == _DOC_STRING_DELIMITER:
                self._line += 1
                content = "\n".join(body).strip("\n")
                self._tokens.append(Token(TokenType.DOC_STRING, content, start, self._line))
                return
            if not stripped:
                body.append("")
            elif raw.startswith(indent):
                body.append(raw[len(indent) :])
            else:
                raise self._error(
                    ErrorKind.STRING_INCONSISTENT_INDENT,
                    "Doc-string line is indented less than its opening delimiter",
                    self._line,
                )
            self._line += 1

        raise self._error(ErrorKind.UNCLOSED_DOC_STRING, "Unclosed doc-string", start)

    def _scan_table(self) -> None:
        """Scan a header row and every directly following '|' row."""
        start = self._line
        table = DataTable(header=split_row(self._lines[start]))
        self._line += 1
        while self._line < len(self._lines) and self._lines[self._line].strip().startswith("|"):
            try:
                table.add_row(split_row(self._lines[self._line]))
            except DataTableError as exc:
                raise self._error(ErrorKind.INCONSISTENT_CELL_COUNT, str(exc), self._line) from exc
            self._line += 1
        self._tokens.append(Token(TokenType.DATA_TABLE, "", start, self._line, table=table))
