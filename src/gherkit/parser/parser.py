# Copyright 2026 Gherkit Contributors
# SPDX-License-Identifier: Apache-2.0

"""Recursive-descent parser for Gherkin feature files.

Converts the token stream produced by the lexer into a Feature model.

Grammar (informal EBNF):
    feature    := tags? "Feature:" text? freeform? background? (scenario | outline)*
    background := "Background:" step+
    scenario   := tags? ("Scenario:" | "Example:") text? freeform? step+
    outline    := tags? ("Scenario Outline:" | "Scenario Template:") text? freeform? step+ examples+
    examples   := tags? ("Examples:" | "Scenarios:") text? table
    step       := ("Given" | "When" | "Then" | "And" | "But" | "*") text (table | docstring)?
"""

import logging

from gherkit.config.parser_config import ParserConfig
from gherkit.model.entities import Feature, Scenario, ScenarioOutline, Step, TaggedScenarios
from gherkit.model.types import DocString, StepData, StepType
from gherkit.parser.errors import ErrorKind, GherkinError, source_line
from gherkit.parser.keywords import Keyword, KeywordLine, classify, match_spelling
from gherkit.parser.lexer import Token, TokenType, tokenize
from gherkit.validation.checks import find_duplicate_steps

logger = logging.getLogger(__name__)

# ###############
# Public Interface
# ###############


class ParseError(GherkinError):
    """Raised when the token stream does not form a valid feature.

    Attributes:
        step_type: The offending step's type for `InvalidBackgroundStep`, else None.
    """

    def __init__(
        self,
        kind: ErrorKind,
        message: str,
        line: int,
        text: str,
        step_type: StepType | None = None,
    ) -> None:
        super().__init__(kind, message, line, text)
        self.step_type = step_type


def parse_feature(source: str, config: ParserConfig | None = None) -> Feature:
    """Parse Gherkin source text into a Feature model.

    Args:
        source: The full text of a .feature file.
        config: Parser options; defaults apply when omitted.

    Returns:
        A Feature instance representing the parsed document.

    Raises:
        LexerError: If a doc-string or data table is malformed.
        ParseError: If the document is structurally invalid. The first error
            aborts the parse.
    """
    tokens = tokenize(source)
    return _Parser(source, tokens, config or ParserConfig()).parse()


# ################
# Implementation
# ################

_STEP_TYPES: dict[Keyword, StepType] = {
    Keyword.GIVEN: StepType.GIVEN,
    Keyword.WHEN: StepType.WHEN,
    Keyword.THEN: StepType.THEN,
    Keyword.AND: StepType.AND,
    Keyword.BUT: StepType.BUT,
    Keyword.ASTERISK: StepType.ASTERISK,
}

# Keywords that end the feature description.
_FEATURE_TEXT_STOP: frozenset[Keyword] = frozenset(
    {Keyword.BACKGROUND, Keyword.SCENARIO, Keyword.SCENARIO_OUTLINE}
)

# Keywords that end a scenario or outline description: any keyword at all.
_SCENARIO_TEXT_STOP: frozenset[Keyword] = frozenset(Keyword)

# Step types a background may not contain.
_BACKGROUND_REJECTED: frozenset[StepType] = frozenset({StepType.WHEN, StepType.THEN})

_BODY_EXPECTATION = "Expected `Scenario`, `Example`, `Scenario Outline`, or `Scenario Template`"


class _Parser:
    """Recursive-descent parser over a Gherkit token list."""

    def __init__(self, source: str, tokens: list[Token], config: ParserConfig) -> None:
        self._source = source
        self._tokens = tokens
        self._config = config
        self._pos = 0
        self._feature_name = "Unnamed feature"

    def parse(self) -> Feature:
        """Parse the full token stream and return a Feature."""
        language = self._parse_language()

        self._skip_blank_and_comments()
        tags = self._parse_tags()
        name = self._parse_feature_header()
        if name is not None:
            self._feature_name = name
        description = self._parse_freeform_text(_FEATURE_TEXT_STOP)
        background = self._parse_background()

        scenarios: list[Scenario] = []
        outlines: list[ScenarioOutline] = []
        while True:
            self._skip_blank_and_comments()
            if self._at_end():
                break
            self._parse_body_element(scenarios, outlines)

        return Feature(
            language=language,
            tags=tags,
            name=name,
            description=description,
            background=background,
            scenarios=scenarios,
            scenario_outlines=outlines,
        )

    # ------------------------------------------------------------------
    # Token access helpers
    # ------------------------------------------------------------------

    def _at_end(self) -> bool:
        """Return True once every token has been consumed."""
        return self._pos >= len(self._tokens)

    def _current(self) -> Token | None:
        """Return the current (un-consumed) token, or None at end of input."""
        if self._at_end():
            return None
        return self._tokens[self._pos]

    def _advance(self) -> Token:
        """Consume and return the current token."""
        tok = self._tokens[self._pos]
        self._pos += 1
        return tok

    def _skip_blank_and_comments(self) -> None:
        """Consume comment tokens and blank LINE tokens."""
        while not self._at_end():
            tok = self._tokens[self._pos]
            if tok.type != TokenType.COMMENT and not tok.is_blank:
                break
            self._pos += 1

    def _error(
        self,
        kind: ErrorKind,
        message: str,
        tok: Token | None = None,
        step_type: StepType | None = None,
    ) -> ParseError:
        """Build a ParseError located at *tok*, or at end of input when omitted."""
        if tok is not None:
            line = tok.start_line
        elif self._tokens:
            line = self._tokens[-1].end_line - 1
        else:
            line = 0
        return ParseError(kind, message, line, source_line(self._source, line), step_type)

    def _peek_keyword_line(self, strip_trailing_colon: bool = False) -> tuple[Token, KeywordLine | None] | None:
        """Return the next significant token and its classification.

        Blank lines and comments are consumed; the returned token is not.
        Returns None at end of input. The classification is None for
        doc-strings, tables and lines that are not keyword lines, including
        lines that start with a keyword but place its colon wrongly.
        """
        self._skip_blank_and_comments()
        tok = self._current()
        if tok is None:
            return None
        if tok.type != TokenType.LINE:
            return tok, None
        return tok, classify(tok.value, strip_trailing_colon)

    def _unexpected(self, tok: Token, classified: KeywordLine | None, expectation: str) -> ParseError:
        """Build the error for a token that does not start the expected construct."""
        if tok.type == TokenType.DOC_STRING:
            return self._error(ErrorKind.UNEXPECTED_BLOCK, f"{expectation}, got a doc-string", tok)
        if tok.type == TokenType.DATA_TABLE:
            return self._error(ErrorKind.UNEXPECTED_BLOCK, f"{expectation}, got a data table", tok)
        if classified is None and match_spelling(tok.value) is not None:
            return self._error(
                ErrorKind.INVALID_KEYWORD,
                f"{expectation}, got keyword with misplaced colon {tok.value!r}",
                tok,
            )
        if classified is None:
            return self._error(ErrorKind.INVALID_KEYWORD, f"{expectation}, got unknown keyword {tok.value!r}", tok)
        return self._error(
            ErrorKind.UNEXPECTED_KEYWORD,
            f"{expectation}, got `{classified.keyword.value}`",
            tok,
        )

    # ------------------------------------------------------------------
    # Feature-level constructs
    # ------------------------------------------------------------------

    def _parse_language(self) -> str:
        """Return the code from the single '# language: xx' comment, if any."""
        found: list[tuple[str, Token]] = []
        for tok in self._tokens:
            if tok.type != TokenType.COMMENT:
                continue
            key, sep, value = tok.value.partition(":")
            if sep and key.strip().lower() == "language" and value.strip():
                found.append((value.strip(), tok))
        if len(found) > 1:
            raise self._error(ErrorKind.MULTIPLE_LANGUAGE_TAGS, "Multiple language tags", found[1][1])
        if found:
            return found[0][0]
        return self._config.default_language

    def _parse_feature_header(self) -> str | None:
        """Consume the 'Feature:' line and return the feature name."""
        peeked = self._peek_keyword_line()
        if peeked is None:
            raise self._error(ErrorKind.UNEXPECTED_END_OF_INPUT, "Expected `Feature`, got end of input")
        tok, classified = peeked
        if classified is not None and classified.keyword != Keyword.FEATURE:
            raise self._error(
                ErrorKind.NOT_A_FEATURE,
                f"Expected `Feature`, got `{classified.keyword.value}`",
                tok,
            )
        if classified is None:
            raise self._unexpected(tok, classified, "Expected `Feature`")
        self._advance()
        return classified.content or None

    def _parse_tags(self) -> list[str]:
        """Consume zero or more '@tag' lines and return the tag names."""
        tags: list[str] = []
        tag_line: Token | None = None
        while True:
            self._skip_blank_and_comments()
            tok = self._current()
            if tok is None or tok.type != TokenType.LINE or not tok.value.startswith("@"):
                break
            for word in tok.value.split():
                if not word.startswith("@") or len(word) == 1:
                    raise self._error(ErrorKind.INVALID_TAG, f"Invalid tag {word!r} (does not start with '@')", tok)
                tags.append(word[1:])
            tag_line = self._advance()

        if tag_line is not None:
            self._skip_blank_and_comments()
            if self._at_end():
                raise self._error(ErrorKind.STANDALONE_TAGS_NOT_ALLOWED, "Standalone tags are not allowed", tag_line)
        return tags

    def _parse_freeform_text(self, stop: frozenset[Keyword]) -> str | None:
        """Consume description lines up to a keyword in *stop*, a tag line or EOF.

        The first non-blank line fixes the indentation every later line must
        start with. Returns the trimmed text, or None if there is none.
        """
        lines: list[str] = []
        indent: str | None = None
        while not self._at_end():
            tok = self._tokens[self._pos]
            if tok.type == TokenType.COMMENT:
                self._pos += 1
                continue
            if tok.type != TokenType.LINE:
                raise self._unexpected(tok, None, "Expected freeform text or a keyword")
            if tok.is_blank:
                lines.append("")
                self._pos += 1
                continue
            if tok.value.startswith("@"):
                break
            classified = classify(tok.value)
            if classified is not None and classified.keyword in stop:
                break

            if indent is None:
                indent = tok.indent
            elif not tok.indent.startswith(indent):
                raise self._error(
                    ErrorKind.INCONSISTENT_INDENTATION,
                    "Inconsistent indentation in freeform text",
                    tok,
                )
            lines.append(tok.indent[len(indent) :] + tok.value)
            self._pos += 1

        text = "\n".join(lines).strip()
        return text or None

    def _parse_background(self) -> list[Step]:
        """Parse an optional 'Background:' section; its steps must be Given-derived."""
        peeked = self._peek_keyword_line()
        if peeked is None:
            return []
        tok, classified = peeked
        if classified is None or classified.keyword != Keyword.BACKGROUND:
            return []
        self._advance()

        return self._parse_steps(tok, "Background", rejected=_BACKGROUND_REJECTED)

    def _parse_body_element(self, scenarios: list[Scenario], outlines: list[ScenarioOutline]) -> None:
        """Parse one tagged scenario or scenario outline."""
        tags = self._parse_tags()
        peeked = self._peek_keyword_line()
        if peeked is None:
            raise self._error(ErrorKind.UNEXPECTED_END_OF_INPUT, f"{_BODY_EXPECTATION}, got end of input")
        tok, classified = peeked
        if classified is not None and classified.keyword == Keyword.SCENARIO:
            scenarios.append(self._parse_scenario(tags, classified))
        elif classified is not None and classified.keyword == Keyword.SCENARIO_OUTLINE:
            outlines.append(self._parse_scenario_outline(tags, classified))
        else:
            raise self._unexpected(tok, classified, _BODY_EXPECTATION)

    # ------------------------------------------------------------------
    # Scenarios and outlines
    # ------------------------------------------------------------------

    def _parse_scenario(self, tags: list[str], classified: KeywordLine) -> Scenario:
        """Parse a 'Scenario:' / 'Example:' header, its description and steps."""
        header = self._advance()
        description = self._parse_freeform_text(_SCENARIO_TEXT_STOP)
        steps = self._parse_steps(header, "Scenario")
        return Scenario(
            tags=tags,
            name=classified.content or None,
            description=description,
            steps=steps,
        )

    def _parse_scenario_outline(self, tags: list[str], classified: KeywordLine) -> ScenarioOutline:
        """Parse an outline header, description, template steps and example blocks."""
        header = self._advance()
        description = self._parse_freeform_text(_SCENARIO_TEXT_STOP)
        steps = self._parse_steps(header, "Scenario Outline")

        examples: list[TaggedScenarios] = []
        canonical: set[str] | None = None
        while True:
            rewind_to = self._pos
            block_tags = self._parse_tags()
            peeked = self._peek_keyword_line()
            examples_line = peeked[1] if peeked is not None else None
            if examples_line is None or examples_line.keyword != Keyword.EXAMPLES:
                if not examples:
                    raise self._error(
                        ErrorKind.MUST_HAVE_AT_LEAST_ONE_SCENARIOS_SECTION,
                        "Must have at least one `Examples` section in a `Scenario Outline`",
                        peeked[0] if peeked is not None else None,
                    )
                # Tags read here belong to whatever follows the outline.
                self._pos = rewind_to
                break

            self._advance()
            self._skip_blank_and_comments()
            tok = self._current()
            if tok is None or tok.type != TokenType.DATA_TABLE or tok.table is None:
                raise self._error(
                    ErrorKind.EXPECTED_DATA_TABLE_AFTER_EXAMPLES,
                    "Expected data table to follow `Examples`",
                    tok,
                )
            self._advance()

            placeholders = set(tok.table.header)
            if canonical is None:
                canonical = placeholders
            elif placeholders != canonical:
                raise self._error(
                    ErrorKind.DIFFERING_PLACEHOLDERS,
                    "Differing amount of or differently named placeholders in examples",
                    tok,
                )
            examples.append(TaggedScenarios.from_table(tok.table, block_tags, examples_line.content or None))

        return ScenarioOutline(
            tags=tags,
            name=classified.content or None,
            description=description,
            steps=steps,
            examples=examples,
        )

    # ------------------------------------------------------------------
    # Step blocks
    # ------------------------------------------------------------------

    def _parse_steps(
        self,
        header: Token,
        section: str,
        rejected: frozenset[StepType] = frozenset(),
    ) -> list[Step]:
        """Parse a maximal run of step lines following a section header.

        A step whose type is in *rejected* fails with `InvalidBackgroundStep`
        at its own line.
        """
        steps: list[Step] = []
        while True:
            peeked = self._peek_keyword_line(strip_trailing_colon=True)
            if peeked is None:
                break
            tok, classified = peeked
            if classified is None or not classified.keyword.is_step:
                break
            if not steps and classified.keyword in (Keyword.AND, Keyword.BUT):
                raise self._error(
                    ErrorKind.INVALID_BARE_KEYWORD,
                    f"`{classified.keyword.value}` cannot start a step block",
                    tok,
                )
            step_type = _STEP_TYPES[classified.keyword]
            if step_type in rejected:
                raise self._error(
                    ErrorKind.INVALID_BACKGROUND_STEP,
                    f"Invalid background step `{step_type.value}`: only `Given` steps are allowed",
                    tok,
                    step_type,
                )
            self._advance()
            if not classified.content:
                raise self._error(
                    ErrorKind.INVALID_BARE_KEYWORD,
                    f"`{classified.keyword.value}` step without description",
                    tok,
                )

            data: StepData | None = None
            if classified.had_trailing_colon:
                data = self._parse_step_data(tok)
            steps.append(Step(type=step_type, description=classified.content, data=data))

        if not steps:
            raise self._error(
                ErrorKind.MUST_HAVE_AT_LEAST_ONE_STEP,
                f"`{section}` must have at least 1 step",
                self._current() or header,
            )

        if self._config.duplicate_step_check:
            for description in find_duplicate_steps(steps):
                logger.warning("Duplicate step '%s' in feature '%s'", description, self._feature_name)
        return steps

    def _parse_step_data(self, step_line: Token) -> StepData:
        """Consume the doc-string or data table a colon-terminated step announces."""
        self._skip_blank_and_comments()
        tok = self._current()
        if tok is not None and tok.type == TokenType.DOC_STRING:
            self._advance()
            return DocString(content=tok.value)
        if tok is not None and tok.type == TokenType.DATA_TABLE and tok.table is not None:
            self._advance()
            return tok.table
        raise self._error(
            ErrorKind.EXPECTED_DOC_STRING_OR_DATA_TABLE,
            "Expected a doc-string or data table after a step ending in ':'",
            tok or step_line,
        )
