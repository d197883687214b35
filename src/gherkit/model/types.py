# Copyright 2026 Gherkit Contributors
# SPDX-License-Identifier: Apache-2.0

"""Step-level value types for the Gherkit document model."""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, model_validator
from pydantic import Field as _Field

# ###############
# Public Interface
# ###############


class StepType(Enum):
    """The keyword a step was written with.

    ``And`` and ``But`` are kept as written rather than folded into the
    preceding ``Given``/``When``/``Then``.
    """

    GIVEN = "Given"
    WHEN = "When"
    THEN = "Then"
    AND = "And"
    BUT = "But"
    ASTERISK = "*"


class DataTableError(ValueError):
    """Raised when a row does not have as many cells as the table header."""


class DocString(BaseModel):
    """A triple-quoted multi-line text block attached to a step."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["doc_string"] = "doc_string"
    content: str


class DataTable(BaseModel):
    """A pipe-delimited table: a header row followed by data rows.

    Every row has exactly as many cells as the header. Column names are
    ordered and need not be unique.
    """

    model_config = ConfigDict(frozen=True)

    kind: Literal["data_table"] = "data_table"
    header: list[str]
    rows: list[list[str]] = _Field(default_factory=list)

    @model_validator(mode="after")
    def _check_row_lengths(self) -> DataTable:
        for index, row in enumerate(self.rows):
            if len(row) != len(self.header):
                raise ValueError(
                    f"Row {index} has {len(row)} cell(s), expected {len(self.header)}"
                )
        return self

    @classmethod
    def populated(cls, header: list[str], rows: list[list[str]]) -> DataTable:
        """Build a table from a header and all of its rows at once.

        Raises:
            DataTableError: If any row's length differs from the header's.
        """
        for row in rows:
            if len(row) != len(header):
                raise DataTableError(
                    f"Invalid column count in data table. Expected {len(header)}, got {len(row)}"
                )
        return cls(header=list(header), rows=[list(row) for row in rows])

    def add_row(self, row: list[str]) -> None:
        """Append *row* to the table.

        Raises:
            DataTableError: If the row's length differs from the header's.
                The table is left unchanged.
        """
        if len(row) != len(self.header):
            raise DataTableError(
                f"Invalid column count in data table. Expected {len(self.header)}, got {len(row)}"
            )
        self.rows.append(list(row))


# Data optionally attached to a step. The `kind` discriminator keeps the two
# shapes unambiguous when validating plain dicts.
StepData = Annotated[DocString | DataTable, _Field(discriminator="kind")]
