"""Result type returned by rules, inputs, merges and object rules.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from .exceptions import UsageError
from .report import ValidationError, Violation


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of a validation: the validated value or the failure.

    A failed result normally carries a ``ValidationError``. ``failure``
    accepts any exception so that a mis-built rule can be detected and
    rejected by the code consuming its result.
    """

    valid: bool
    value: Any = None
    error: BaseException | None = None

    def __bool__(self) -> bool:
        """Allow 'if result:' usage to check validity."""
        return self.valid

    @classmethod
    def success(cls, value: Any) -> ValidationResult:
        """Create a successful result carrying ``value``."""
        return cls(valid=True, value=value)

    @classmethod
    def failure(cls, error: BaseException) -> ValidationResult:
        """Create a failed result carrying ``error``."""
        return cls(valid=False, error=error)

    @property
    def violations(self) -> tuple[Violation, ...]:
        """Violations of a failed result; empty on success."""
        if isinstance(self.error, ValidationError):
            return self.error.violations
        return ()

    def get_or_raise(self) -> Any:
        """Return the value, or raise the failure.

        Raises:
            ValidationError: The report of a failed validation
            UsageError: If a failed result carries no error
        """
        if self.valid:
            return self.value
        if self.error is None:
            raise UsageError("Failed result carries no error")
        raise self.error

    def get_or_none(self) -> Any:
        return self.value if self.valid else None

    def map(self, fn: Callable[[Any], Any]) -> ValidationResult:
        """Transform the value of a success; failures pass through."""
        if self.valid:
            return ValidationResult.success(fn(self.value))
        return self

    def flat_map(self, fn: Callable[[Any], ValidationResult]) -> ValidationResult:
        """Chain a result-producing function on success."""
        if self.valid:
            return fn(self.value)
        return self

    def on_success(self, fn: Callable[[Any], Any]) -> ValidationResult:
        if self.valid:
            fn(self.value)
        return self

    def on_failure(self, fn: Callable[[BaseException], Any]) -> ValidationResult:
        if not self.valid:
            fn(self.error)
        return self


__all__ = ["ValidationResult"]
