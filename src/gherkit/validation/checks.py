# Copyright 2026 Gherkit Contributors
# SPDX-License-Identifier: Apache-2.0

"""Advisory checks for parsed Gherkit features.

These checks run on a successfully parsed Feature and report issues that do
not make the document invalid but are probably unintentional.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from gherkit.model.entities import Feature, ScenarioOutline, Step
from gherkit.model.types import DataTable, DocString

# ###############
# Public Interface
# ###############


@dataclass(frozen=True)
class ValidationWarning:
    """A non-fatal issue detected during validation.

    Attributes:
        message: Human-readable description of the warning.
    """

    message: str


@dataclass
class ValidationResult:
    """Result of running the advisory checks.

    Attributes:
        warnings: Issues found during validation.
    """

    warnings: list[ValidationWarning] = field(default_factory=list)

    @property
    def has_warnings(self) -> bool:
        """Return True if any warnings were found."""
        return len(self.warnings) > 0


def validate(feature: Feature) -> ValidationResult:
    """Run all advisory checks on a parsed Feature.

    Checks performed:

    1. **Duplicate steps**: two steps in the same block (background, scenario
       or outline template) share a description.

    2. **Undefined placeholders**: an outline step description or doc-string
       uses ``<name>`` but no example column is called ``name``. The text is
       left as written when the outline is expanded.

    3. **Placeholders in data tables**: an outline step has a data table with
       a ``<name>`` cell matching an example column. Data tables are not
       substituted during expansion, so the cell keeps the placeholder.

    Args:
        feature: The parsed feature to check.

    Returns:
        A :class:`ValidationResult`; an empty result means no issues.
    """
    warnings: list[ValidationWarning] = []
    feature_label = feature.name or "Unnamed feature"

    blocks: list[tuple[str, list[Step]]] = [("Background", feature.background)]
    blocks.extend((f"Scenario '{s.name or '<unnamed>'}'", s.steps) for s in feature.scenarios)
    blocks.extend((f"Scenario Outline '{o.name or '<unnamed>'}'", o.steps) for o in feature.scenario_outlines)
    for label, steps in blocks:
        for description in find_duplicate_steps(steps):
            warnings.append(
                ValidationWarning(f"{label} in feature '{feature_label}' repeats step '{description}'")
            )

    for outline in feature.scenario_outlines:
        warnings.extend(_check_undefined_placeholders(outline))
        warnings.extend(_check_table_placeholders(outline))

    return ValidationResult(warnings=warnings)


def find_duplicate_steps(steps: list[Step]) -> list[str]:
    """Return each step description that occurs more than once, in order of first repeat."""
    seen: set[str] = set()
    duplicates: list[str] = []
    for step in steps:
        if step.description in seen and step.description not in duplicates:
            duplicates.append(step.description)
        seen.add(step.description)
    return duplicates


def find_placeholders(text: str) -> list[str]:
    """Return the names of all ``<name>`` placeholders in *text*, in order."""
    return _PLACEHOLDER.findall(text)


# ################
# Implementation
# ################

_PLACEHOLDER = re.compile(r"<([^<>\s][^<>]*)>")


def _outline_label(outline: ScenarioOutline) -> str:
    return f"Scenario Outline '{outline.name or '<unnamed>'}'"


def _columns(outline: ScenarioOutline) -> set[str]:
    columns: set[str] = set()
    for block in outline.examples:
        columns.update(block.placeholders)
    return columns


def _check_undefined_placeholders(outline: ScenarioOutline) -> list[ValidationWarning]:
    """Flag placeholders in step text or doc-strings that no example column defines."""
    columns = _columns(outline)
    reported: list[str] = []
    for step in outline.steps:
        names = find_placeholders(step.description)
        if isinstance(step.data, DocString):
            names.extend(find_placeholders(step.data.content))
        for name in names:
            if name not in columns and name not in reported:
                reported.append(name)
    return [
        ValidationWarning(f"{_outline_label(outline)} uses placeholder '<{name}>' without a matching example column")
        for name in reported
    ]


def _check_table_placeholders(outline: ScenarioOutline) -> list[ValidationWarning]:
    """Flag example placeholders inside step data tables, which expansion leaves untouched."""
    columns = _columns(outline)
    warnings: list[ValidationWarning] = []
    for step in outline.steps:
        if not isinstance(step.data, DataTable):
            continue
        cells = list(step.data.header)
        for row in step.data.rows:
            cells.extend(row)
        names: list[str] = []
        for cell in cells:
            for name in find_placeholders(cell):
                if name in columns and name not in names:
                    names.append(name)
        for name in names:
            warnings.append(
                ValidationWarning(
                    f"{_outline_label(outline)} step '{step.description}' has placeholder '<{name}>' "
                    "in its data table, which is not substituted"
                )
            )
    return warnings
