"""Violation report types with consistent, predictable behavior.

A ``ValidationError`` is the single failure payload produced by this
package. It carries one or more ``Violation`` entries in detection order.
Reports are accumulated with a ``ReportBuilder``, which turns an empty
accumulation into success instead of an empty failure.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, TypeVar

from .exceptions import InvalError, RuleContractError, UsageError
from .identifiers import Id, to_id

if TYPE_CHECKING:
    from .result import ValidationResult

T = TypeVar("T")


@dataclass(frozen=True)
class Violation:
    """A single failed constraint for one identified field."""

    id: Id
    message: str

    def __str__(self) -> str:
        return f"{self.id}: {self.message}"

    def to_dict(self) -> dict[str, str]:
        return {"id": str(self.id), "message": self.message}


class ValidationError(InvalError):
    """Report of every violation that made a validation fail.

    Reports compare equal when their violations are equal, so results of
    repeated invocations can be compared directly.

    Example:
        ```python
        error = ValidationError.of("email", "Not a valid email.")
        str(error)
        # 'email: Not a valid email.'
        error.to_dict()
        # {'violations': [{'id': 'email', 'message': 'Not a valid email.'}]}
        ```
    """

    def __init__(self, violations: Iterable[Violation]):
        self.violations: tuple[Violation, ...] = tuple(violations)
        if not self.violations:
            raise UsageError("A validation report needs at least one violation")
        super().__init__(
            "\n".join(str(v) for v in self.violations),
            context={"violations": [v.to_dict() for v in self.violations]},
        )

    @classmethod
    def of(cls, id: Any, message: str) -> ValidationError:
        """Create a report with a single violation."""
        return cls([Violation(to_id(id), str(message))])

    @property
    def ids(self) -> list[Id]:
        """Distinct identifiers of the violations, in detection order."""
        seen: list[Id] = []
        for violation in self.violations:
            if violation.id not in seen:
                seen.append(violation.id)
        return seen

    def messages_for(self, id: Any) -> list[str]:
        """Messages of every violation tagged with ``id``."""
        key = to_id(id)
        return [v.message for v in self.violations if v.id == key]

    def to_dict(self) -> dict[str, Any]:
        return {"violations": [v.to_dict() for v in self.violations]}

    def __len__(self) -> int:
        return len(self.violations)

    def __iter__(self):
        return iter(self.violations)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ValidationError):
            return NotImplemented
        return self.violations == other.violations

    def __hash__(self) -> int:
        return hash(self.violations)

    def __reduce__(self):
        return (self.__class__, (self.violations,))

    def __repr__(self) -> str:
        return f"ValidationError({list(self.violations)!r})"


class ReportBuilder:
    """Accumulates violations for one invocation.

    A builder is created per invocation and never shared; ``build_result``
    converts an empty accumulation into success.
    """

    def __init__(self) -> None:
        self._violations: list[Violation] = []

    def add(self, id: Any, message: str) -> ReportBuilder:
        """Add a violation (fluent API).

        Args:
            id: Identifier, or any hashable value converted with ``to_id``
            message: Violation message

        Returns:
            Self for chaining
        """
        self._violations.append(Violation(to_id(id), str(message)))
        return self

    def extend(self, report: Any) -> ReportBuilder:
        """Add every violation of another report (fluent API).

        Raises:
            RuleContractError: If ``report`` is not a ValidationError
        """
        if not isinstance(report, ValidationError):
            raise RuleContractError(report) from (
                report if isinstance(report, BaseException) else None
            )
        self._violations.extend(report.violations)
        return self

    @property
    def is_empty(self) -> bool:
        return not self._violations

    def __len__(self) -> int:
        return len(self._violations)

    def build(self) -> ValidationError:
        """Build the report.

        Raises:
            UsageError: If no violation was added
        """
        return ValidationError(self._violations)

    def build_result(self, value: T) -> ValidationResult:
        """Success with ``value`` when empty, otherwise failure with the report."""
        return self.build_result_with(lambda: value)

    def build_result_with(self, supplier: Callable[[], T]) -> ValidationResult:
        """Like ``build_result`` but only computes the value on success."""
        from .result import ValidationResult

        if self.is_empty:
            return ValidationResult.success(supplier())
        return ValidationResult.failure(self.build())


__all__ = ["Violation", "ValidationError", "ReportBuilder"]
