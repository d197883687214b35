# Copyright 2026 Gherkit Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for the Gherkit line scanner."""

import pytest

from gherkit.parser.errors import ErrorKind
from gherkit.parser.lexer import LexerError, Token, TokenType, split_row, tokenize

# ###############
# Test Helpers
# ###############


def _types(source: str) -> list[TokenType]:
    """Return the token types for all tokens."""
    return [tok.type for tok in tokenize(source)]


def _single(source: str, token_type: TokenType) -> Token:
    """Return the only token of *token_type* in *source*."""
    matches = [tok for tok in tokenize(source) if tok.type == token_type]
    assert len(matches) == 1
    return matches[0]


# ###############
# Plain Lines and Comments
# ###############


class TestLines:
    def test_empty_source_produces_no_tokens(self) -> None:
        assert tokenize("") == []

    def test_each_line_is_one_token(self) -> None:
        assert _types("Feature: A\n  Scenario: B\n") == [TokenType.LINE, TokenType.LINE]

    def test_line_value_is_trimmed_and_indent_kept(self) -> None:
        tok = tokenize("    Given a thing   ")[0]
        assert tok.value == "Given a thing"
        assert tok.indent == "    "

    def test_blank_lines_are_empty_line_tokens(self) -> None:
        tokens = tokenize("Feature: A\n\n   \nScenario: B")
        assert [tok.is_blank for tok in tokens] == [False, True, True, False]

    def test_line_spans(self) -> None:
        tokens = tokenize("a\nb\nc")
        assert [(tok.start_line, tok.end_line) for tok in tokens] == [(0, 1), (1, 2), (2, 3)]

    def test_windows_line_endings(self) -> None:
        tokens = tokenize("Feature: A\r\n  Scenario: B\r\n")
        assert [tok.value for tok in tokens] == ["Feature: A", "Scenario: B"]

    def test_comment_value_is_text_after_hash(self) -> None:
        tok = _single("  # language: fr", TokenType.COMMENT)
        assert tok.value == " language: fr"


# ###############
# Doc-Strings
# ###############


class TestDocStrings:
    def test_doc_string_body(self) -> None:
        source = '    """\n    Hello there\n    General Kenobi\n    """\n'
        tok = _single(source, TokenType.DOC_STRING)
        assert tok.value == "Hello there\nGeneral Kenobi"
        assert (tok.start_line, tok.end_line) == (0, 4)

    def test_extra_indentation_is_preserved(self) -> None:
        source = '  """\n  def f():\n      return 1\n  """'
        assert _single(source, TokenType.DOC_STRING).value == "def f():\n    return 1"

    def test_surrounding_blank_lines_dropped_inner_kept(self) -> None:
        source = '    """\n\n    This is my doc string\n\n    :)\n\n    """\n'
        assert _single(source, TokenType.DOC_STRING).value == "This is my doc string\n\n:)"

    def test_doc_string_content_is_not_lexed(self) -> None:
        source = '"""\n# not a comment\n| not | a table |\nFeature: nope\n"""'
        assert _types(source) == [TokenType.DOC_STRING]

    def test_tokens_resume_after_doc_string(self) -> None:
        source = 'Given text:\n"""\nbody\n"""\nThen done'
        assert _types(source) == [TokenType.LINE, TokenType.DOC_STRING, TokenType.LINE]
        assert tokenize(source)[2].start_line == 4

    def test_unclosed_doc_string_reports_opening_line(self) -> None:
        source = 'Feature: A\n  Given text:\n  """\n  never closed\n'
        with pytest.raises(LexerError) as exc_info:
            tokenize(source)
        assert exc_info.value.kind == ErrorKind.UNCLOSED_DOC_STRING
        assert exc_info.value.line == 2
        assert exc_info.value.text == '  """'

    def test_inconsistent_indent(self) -> None:
        source = '    """\n    fine\n  too far left\n    """'
        with pytest.raises(LexerError) as exc_info:
            tokenize(source)
        assert exc_info.value.kind == ErrorKind.STRING_INCONSISTENT_INDENT
        assert exc_info.value.line == 2


# ###############
# Data Tables
# ###############


class TestDataTables:
    def test_header_and_rows(self) -> None:
        source = "  | Header1 | Header2 |\n  | Value1  | Value2  |\n"
        tok = _single(source, TokenType.DATA_TABLE)
        assert tok.table is not None
        assert tok.table.header == ["Header1", "Header2"]
        assert tok.table.rows == [["Value1", "Value2"]]
        assert (tok.start_line, tok.end_line) == (0, 2)

    def test_table_ends_at_first_non_pipe_line(self) -> None:
        source = "| a |\n| 1 |\nThen done\n| b |"
        assert _types(source) == [TokenType.DATA_TABLE, TokenType.LINE, TokenType.DATA_TABLE]

    def test_header_only_table(self) -> None:
        tok = _single("|count|", TokenType.DATA_TABLE)
        assert tok.table is not None
        assert tok.table.header == ["count"]
        assert tok.table.rows == []

    def test_row_with_wrong_cell_count(self) -> None:
        source = "| a | b |\n| 1 | 2 |\n| 3 |"
        with pytest.raises(LexerError) as exc_info:
            tokenize(source)
        assert exc_info.value.kind == ErrorKind.INCONSISTENT_CELL_COUNT
        assert exc_info.value.line == 2


class TestSplitRow:
    @pytest.mark.parametrize(
        ("line", "expected"),
        [
            ("| a | b |", ["a", "b"]),
            ("|a|b|", ["a", "b"]),
            ("| a | b", ["a"]),
            ("|  |", [""]),
            (r"| a \| b | c |", ["a | b", "c"]),
            (r"| back\\slash |", ["back\\slash"]),
            (r"| two\nlines |", ["two\nlines"]),
            (r"| C:\temp |", [r"C:\temp"]),
        ],
    )
    def test_split(self, line: str, expected: list[str]) -> None:
        assert split_row(line) == expected
