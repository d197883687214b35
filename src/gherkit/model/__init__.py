# Copyright 2026 Gherkit Contributors
# SPDX-License-Identifier: Apache-2.0

"""Document model for Gherkit (features, scenarios, outlines, steps)."""

from gherkit.model.entities import (
    Feature,
    Scenario,
    ScenarioOutline,
    Step,
    TaggedScenarios,
)
from gherkit.model.types import (
    DataTable,
    DataTableError,
    DocString,
    StepData,
    StepType,
)

__all__ = [
    # Step data
    "StepType",
    "DocString",
    "DataTable",
    "DataTableError",
    "StepData",
    # Entities
    "Step",
    "Scenario",
    "TaggedScenarios",
    "ScenarioOutline",
    "Feature",
]
