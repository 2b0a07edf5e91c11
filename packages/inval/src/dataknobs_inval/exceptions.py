"""Exception hierarchy for the dataknobs_inval package.

Two kinds of errors exist here and they must never be confused:

- Validation failures (``ValidationError``, defined in ``report``) are the
  expected outcome of checking user input. They are returned inside a
  failed ``ValidationResult`` and only raised when the caller asks for it.
- Usage errors (``UsageError`` and subclasses) signal a programming mistake,
  such as a hand-written rule that fails with something other than a
  report, or a merge operand of an unsupported kind. They are raised
  immediately and are never turned into a report.

Example:
    ```python
    from dataknobs_inval.exceptions import InvalError, UsageError

    try:
        result = (input_a + input_b)()
    except UsageError as e:
        logger.error(f"Mis-built validation: {e}")
        if e.context:
            logger.error(f"Context: {e.context}")
    ```
"""

from __future__ import annotations

from typing import Any


class InvalError(Exception):
    """Base exception for the dataknobs_inval package.

    Attributes:
        context: Dictionary containing contextual information about the error
        details: Alias for context
    """

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.context = details or context or {}
        self.details = self.context


class UsageError(InvalError):
    """Raised when the library is used incorrectly.

    Usage errors are fatal to the current call. They are not user-input
    problems and are never downgraded into a validation report.
    """

    pass


class RuleContractError(UsageError):
    """Raised when a rule breaks the rule contract.

    A rule must return a ``ValidationResult`` and, on failure, carry a
    ``ValidationError``. Build rules with ``rule(...)`` to avoid this.
    """

    def __init__(self, payload: Any, expected: str = "a failure carrying a ValidationError"):
        self.payload = payload
        kind = type(payload).__name__
        super().__init__(
            f"Rule result expected to be {expected} but was {kind}. "
            "Build custom rules with the rule() helper to avoid this kind of error.",
            context={"payload_type": kind},
        )


class UnsupportedInputError(UsageError, TypeError):
    """Raised when an operand cannot take part in an input merge."""

    def __init__(self, operand: Any):
        self.operand = operand
        kind = type(operand).__name__
        super().__init__(
            f"Unsupported input source {kind}, allowed: Input and InputMerge",
            context={"operand_type": kind},
        )


class UnsupportedTypeError(UsageError, TypeError):
    """Raised when a built-in rule receives a value it cannot measure."""

    def __init__(self, value: Any, allowed: str):
        self.value = value
        kind = type(value).__name__
        super().__init__(
            f"Unsupported type {kind}, allowed: {allowed}",
            context={"value_type": kind, "allowed": allowed},
        )


class SettingsError(UsageError):
    """Raised when settings cannot be loaded."""

    pass


__all__ = [
    "InvalError",
    "UsageError",
    "RuleContractError",
    "UnsupportedInputError",
    "UnsupportedTypeError",
    "SettingsError",
]
