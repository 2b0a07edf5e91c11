"""Composable input validation with aggregated violation reports.

This package provides:

- **Rules**: plain functions ``(value, id, error) -> ValidationResult``,
  built with ``rule()`` and composed with ``composed()`` (first failure wins)
- **Inputs**: a value bound to an identifier and its rules
- **Merging**: validate many inputs together and report every violation
- **Object rules**: validate the fields of an object graph in one rule
- **Built-in rules**: see ``dataknobs_inval.constraints``

Example:
    ```python
    from dataknobs_inval import Input, merge
    from dataknobs_inval.constraints import email, min_value, not_blank

    result = merge(
        (not_blank() & email()).validates(form["email"]).with_id("email"),
        min_value(18).validates(form["age"]).with_id("age"),
    )
    if not result:
        for violation in result.violations:
            print(violation)
    ```
"""

from . import constraints
from .adapter import adapt
from .exceptions import (
    InvalError,
    RuleContractError,
    SettingsError,
    UnsupportedInputError,
    UnsupportedTypeError,
    UsageError,
)
from .identifiers import NO_ID, Id, IdOf, NoId, to_id
from .inputs import Declaration, Input, InputMerge, InputSource, merge, merge_any, validates
from .objects import ObjectScope, object_rule
from .report import ReportBuilder, ValidationError, Violation
from .result import ValidationResult
from .rule import ErrorFactory, Rule, RuleScope, composed, regex_rule, rule
from .settings import Settings, load_settings, settings

__version__ = "0.1.0"

__all__ = [
    # Version
    "__version__",
    # Identifiers
    "Id",
    "IdOf",
    "NoId",
    "NO_ID",
    "to_id",
    # Reports and results
    "Violation",
    "ValidationError",
    "ReportBuilder",
    "ValidationResult",
    # Rules
    "ErrorFactory",
    "Rule",
    "RuleScope",
    "rule",
    "composed",
    "regex_rule",
    "adapt",
    # Inputs
    "Input",
    "InputMerge",
    "InputSource",
    "Declaration",
    "validates",
    "merge",
    "merge_any",
    # Object graphs
    "ObjectScope",
    "object_rule",
    # Errors
    "InvalError",
    "UsageError",
    "RuleContractError",
    "UnsupportedInputError",
    "UnsupportedTypeError",
    "SettingsError",
    # Settings
    "Settings",
    "settings",
    "load_settings",
    # Built-in rules
    "constraints",
]
