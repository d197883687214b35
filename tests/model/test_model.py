# Copyright 2026 Gherkit Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for the Gherkit document model value types."""

import pytest
from pydantic import ValidationError

from gherkit.model import (
    DataTable,
    DataTableError,
    DocString,
    Feature,
    Scenario,
    Step,
    StepType,
    TaggedScenarios,
)

# ###############
# DataTable
# ###############


class TestDataTable:
    def test_populated_returns_inputs(self) -> None:
        header = ["Header 1", "Header 2", "Header 3"]
        rows = [
            ["Value 11", "Value 12", "Value 13"],
            ["Value 21", "Value 22", "Value 23"],
        ]
        table = DataTable.populated(header, rows)
        assert table.header == header
        assert table.rows == rows

    def test_populated_rejects_short_row(self) -> None:
        with pytest.raises(DataTableError):
            DataTable.populated(["a", "b"], [["1", "2"], ["3"]])

    def test_populated_rejects_long_row(self) -> None:
        with pytest.raises(DataTableError):
            DataTable.populated(["a"], [["1", "2"]])

    def test_header_only(self) -> None:
        table = DataTable(header=["a", "a"])
        assert table.header == ["a", "a"]
        assert table.rows == []

    def test_add_row(self) -> None:
        table = DataTable(header=["a", "b"])
        table.add_row(["1", "2"])
        assert table.rows == [["1", "2"]]

    def test_add_row_failure_leaves_table_unchanged(self) -> None:
        table = DataTable.populated(["a", "b"], [["1", "2"]])
        with pytest.raises(DataTableError):
            table.add_row(["only one"])
        assert table.rows == [["1", "2"]]

    def test_direct_construction_validates(self) -> None:
        with pytest.raises(ValidationError):
            DataTable(header=["a"], rows=[["1", "2"]])

    def test_data_table_error_is_value_error(self) -> None:
        assert issubclass(DataTableError, ValueError)


# ###############
# Steps and Step Data
# ###############


class TestStep:
    def test_defaults(self) -> None:
        step = Step(type=StepType.GIVEN, description="a user")
        assert step.data is None

    def test_step_data_from_dict_uses_discriminator(self) -> None:
        step = Step.model_validate(
            {"type": "Then", "description": "output", "data": {"kind": "doc_string", "content": "x"}}
        )
        assert step.type == StepType.THEN
        assert step.data == DocString(content="x")

    def test_table_data_from_dict(self) -> None:
        step = Step.model_validate(
            {
                "type": "*",
                "description": "rows",
                "data": {"kind": "data_table", "header": ["a"], "rows": [["1"]]},
            }
        )
        assert isinstance(step.data, DataTable)
        assert step.data.rows == [["1"]]

    def test_step_is_frozen(self) -> None:
        step = Step(type=StepType.GIVEN, description="a user")
        with pytest.raises(ValidationError):
            step.description = "changed"  # type: ignore[misc]


# ###############
# Entities
# ###############


class TestEntities:
    def test_feature_defaults(self) -> None:
        feature = Feature()
        assert feature.language == "en"
        assert feature.tags == []
        assert feature.name is None
        assert feature.background == []
        assert feature.scenarios == []
        assert feature.scenario_outlines == []

    def test_scenario_is_frozen(self) -> None:
        scenario = Scenario(name="S", steps=[Step(type=StepType.GIVEN, description="x")])
        with pytest.raises(ValidationError):
            scenario.name = "T"  # type: ignore[misc]

    def test_tagged_scenarios_rejects_ragged_rows(self) -> None:
        with pytest.raises(ValidationError):
            TaggedScenarios(placeholders=["a", "b"], values=[["1"]])

    def test_tagged_scenarios_from_table(self) -> None:
        table = DataTable.populated(["count"], [["1"], ["2"]])
        block = TaggedScenarios.from_table(table, ["small"], "few")
        assert block.tags == ["small"]
        assert block.name == "few"
        assert block.placeholders == ["count"]
        assert block.values == [["1"], ["2"]]
        assert len(block) == 2

    def test_index_of(self) -> None:
        block = TaggedScenarios(placeholders=["a", "b"], values=[])
        assert block.index_of("b") == 1
        assert block.index_of("c") is None
