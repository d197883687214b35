# Copyright 2026 Gherkit Contributors
# SPDX-License-Identifier: Apache-2.0

"""Keyword recognition for single lines of Gherkin text.

A line is classified by case-insensitive prefix match against a fixed,
priority-ordered spelling table. No state is kept between calls.
"""

import enum
from dataclasses import dataclass

# ###############
# Public Interface
# ###############


class Keyword(enum.Enum):
    """All keywords recognised at the start of a Gherkin line."""

    # Section keywords, written with a colon
    FEATURE = "Feature"
    SCENARIO = "Scenario"
    BACKGROUND = "Background"
    SCENARIO_OUTLINE = "Scenario Outline"
    EXAMPLES = "Examples"

    # Step keywords, written without a colon
    GIVEN = "Given"
    WHEN = "When"
    THEN = "Then"
    AND = "And"
    BUT = "But"
    ASTERISK = "*"

    @property
    def has_colon(self) -> bool:
        """Return True if the keyword must be immediately followed by ':'."""
        return self in _SECTION_KEYWORDS

    @property
    def is_step(self) -> bool:
        """Return True for Given/When/Then/And/But/*."""
        return self not in _SECTION_KEYWORDS


@dataclass(frozen=True)
class KeywordLine:
    """The result of classifying a line.

    Attributes:
        keyword: The matched keyword.
        content: Text after the keyword (and its colon), trimmed.
        had_trailing_colon: True if a trailing ':' was stripped from *content*.
    """

    keyword: Keyword
    content: str
    had_trailing_colon: bool = False


# Surface spellings in match priority order. The first spelling that prefixes
# the lowercased line wins, so multi-word spellings precede the single words
# they start with ("scenario outline" before "scenario", "examples" before
# "example").
SPELLINGS: tuple[tuple[Keyword, str], ...] = (
    (Keyword.EXAMPLES, "examples"),
    (Keyword.EXAMPLES, "scenarios"),
    (Keyword.SCENARIO_OUTLINE, "scenario outline"),
    (Keyword.SCENARIO_OUTLINE, "scenario template"),
    (Keyword.FEATURE, "feature"),
    (Keyword.SCENARIO, "example"),
    (Keyword.SCENARIO, "scenario"),
    (Keyword.BACKGROUND, "background"),
    (Keyword.GIVEN, "given"),
    (Keyword.WHEN, "when"),
    (Keyword.THEN, "then"),
    (Keyword.AND, "and"),
    (Keyword.BUT, "but"),
    (Keyword.ASTERISK, "*"),
)


def classify(line: str, strip_trailing_colon: bool = False) -> KeywordLine | None:
    """Classify a trimmed line as a keyword line.

    Returns None if no spelling matches, or if the colon placement is wrong
    for the matched keyword (a section keyword not directly followed by ':',
    or a step keyword directly followed by ':'). Such lines are ordinary text
    as far as this function is concerned.

    Args:
        line: The line to classify, without leading whitespace.
        strip_trailing_colon: Remove a ':' ending the content and report it
            through ``had_trailing_colon``.
    """
    match = match_spelling(line)
    if match is None:
        return None
    keyword, spelling = match

    rest = line[len(spelling) :]
    if keyword.has_colon != rest.startswith(":"):
        return None
    if keyword.has_colon:
        rest = rest[1:]
    content = rest.strip()

    had_trailing_colon = False
    if strip_trailing_colon and content.endswith(":"):
        content = content[:-1].rstrip()
        had_trailing_colon = True

    return KeywordLine(keyword, content, had_trailing_colon)


def match_spelling(line: str) -> tuple[Keyword, str] | None:
    """Return the highest-priority (keyword, spelling) pair prefixing *line*."""
    lowered = line.lower()
    for keyword, spelling in SPELLINGS:
        if lowered.startswith(spelling):
            return keyword, spelling
    return None


# ################
# Implementation
# ################

_SECTION_KEYWORDS: frozenset[Keyword] = frozenset(
    {
        Keyword.FEATURE,
        Keyword.SCENARIO,
        Keyword.BACKGROUND,
        Keyword.SCENARIO_OUTLINE,
        Keyword.EXAMPLES,
    }
)
