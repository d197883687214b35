# Copyright 2026 Gherkit Contributors
# SPDX-License-Identifier: Apache-2.0

"""Document entities for the Gherkit model: features, scenarios and outlines."""

from __future__ import annotations

from collections.abc import Iterator

from pydantic import BaseModel, ConfigDict, model_validator
from pydantic import Field as _Field

from gherkit.model.types import DataTable, DocString, StepData, StepType

# ###############
# Public Interface
# ###############


class Step(BaseModel):
    """A single Given/When/Then/And/But/* clause with optional attached data."""

    model_config = ConfigDict(frozen=True)

    type: StepType
    description: str
    data: StepData | None = None


class Scenario(BaseModel):
    """One concrete example of feature behavior."""

    model_config = ConfigDict(frozen=True)

    tags: list[str] = _Field(default_factory=list)
    name: str | None = None
    description: str | None = None
    steps: list[Step] = _Field(default_factory=list)


class TaggedScenarios(BaseModel):
    """One ``Examples:`` block of a scenario outline.

    Attributes:
        tags: Tags written above the ``Examples:`` header.
        name: Optional text following the ``Examples:`` header.
        placeholders: Column names, in table order.
        values: One row of cell values per generated scenario.
    """

    model_config = ConfigDict(frozen=True)

    tags: list[str] = _Field(default_factory=list)
    name: str | None = None
    placeholders: list[str]
    values: list[list[str]] = _Field(default_factory=list)

    @model_validator(mode="after")
    def _check_row_lengths(self) -> TaggedScenarios:
        for index, row in enumerate(self.values):
            if len(row) != len(self.placeholders):
                raise ValueError(
                    f"Example row {index} has {len(row)} value(s), expected {len(self.placeholders)}"
                )
        return self

    @classmethod
    def from_table(
        cls,
        table: DataTable,
        tags: list[str] | None = None,
        name: str | None = None,
    ) -> TaggedScenarios:
        """Build an examples block whose placeholders are the table header."""
        return cls(
            tags=list(tags or []),
            name=name,
            placeholders=list(table.header),
            values=[list(row) for row in table.rows],
        )

    def index_of(self, placeholder: str) -> int | None:
        """Return the column index of *placeholder*, or None if it is not a column."""
        try:
            return self.placeholders.index(placeholder)
        except ValueError:
            return None

    def __len__(self) -> int:
        return len(self.values)


class ScenarioOutline(BaseModel):
    """A scenario template expanded once per example row."""

    model_config = ConfigDict(frozen=True)

    tags: list[str] = _Field(default_factory=list)
    name: str | None = None
    description: str | None = None
    steps: list[Step] = _Field(default_factory=list)
    examples: list[TaggedScenarios] = _Field(default_factory=list)

    def scenarios(self) -> Iterator[Scenario]:
        """Yield one concrete scenario per example row.

        Example blocks are visited in declaration order and rows within a
        block in table order. Every ``<placeholder>`` in step descriptions
        and doc-strings is replaced by the row's cell value. Data tables
        attached to steps are copied unchanged.

        Each call returns a new iterator; the outline itself is never modified.
        """
        for block in self.examples:
            for row in block.values:
                yield Scenario(
                    tags=list(block.tags),
                    name=self.name,
                    description=self.description,
                    steps=[_substitute_step(step, block.placeholders, row) for step in self.steps],
                )


class Feature(BaseModel):
    """Top-level model representing the parsed contents of a single .feature file."""

    model_config = ConfigDict(frozen=True)

    language: str = "en"
    tags: list[str] = _Field(default_factory=list)
    name: str | None = None
    description: str | None = None
    background: list[Step] = _Field(default_factory=list)
    scenarios: list[Scenario] = _Field(default_factory=list)
    scenario_outlines: list[ScenarioOutline] = _Field(default_factory=list)


# ################
# Implementation
# ################


def _substitute(text: str, placeholders: list[str], row: list[str]) -> str:
    for placeholder, value in zip(placeholders, row):
        text = text.replace(f"<{placeholder}>", value)
    return text


def _substitute_step(step: Step, placeholders: list[str], row: list[str]) -> Step:
    data = step.data
    if isinstance(data, DocString):
        data = DocString(content=_substitute(data.content, placeholders, row))
    elif isinstance(data, DataTable):
        # Placeholders inside table cells are not substituted.
        data = DataTable(header=list(data.header), rows=[list(r) for r in data.rows])
    return Step(
        type=step.type,
        description=_substitute(step.description, placeholders, row),
        data=data,
    )
