# Copyright 2026 Gherkit Contributors
# SPDX-License-Identifier: Apache-2.0

"""Advisory checks for Gherkit features (duplicate steps, unresolved placeholders)."""

from gherkit.validation.checks import (
    ValidationResult,
    ValidationWarning,
    find_duplicate_steps,
    find_placeholders,
    validate,
)

__all__ = [
    "ValidationResult",
    "ValidationWarning",
    "find_duplicate_steps",
    "find_placeholders",
    "validate",
]
