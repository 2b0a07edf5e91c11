"""Object-graph validation.

``object_rule`` turns a block declaring field validations into a single
rule for the whole object. Every declared field is checked and every
violation is reported, tagged with the field's own identifier:

```python
@object_rule
def account_rule(scope, account):
    scope.validates(not_blank() & email(), account.email).with_id("email")
    scope.validates(info_rule, account.info).with_id("info")

account_rule.validates(account).with_id("account")()
```
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any, Generic, TypeVar

from .exceptions import UnsupportedInputError
from .identifiers import Id
from .inputs import Declaration, Input, InputMerge
from .report import ReportBuilder
from .result import ValidationResult
from .rule import ErrorFactory, Rule, RuleFunction, check_result

logger = logging.getLogger(__name__)

T = TypeVar("T")
F = TypeVar("F")


class ObjectScope(Generic[T]):
    """Collects the field inputs declared for one object invocation."""

    __slots__ = ("value", "inputs")

    def __init__(self, value: T):
        self.value = value
        self.inputs: list[Input[Any] | InputMerge] = []

    def validates(self, rule: RuleFunction, value: F) -> Declaration[F]:
        """Declare a field validation; ``with_id`` registers it here."""
        return Declaration(rule, value, register=self.add)

    def add(self, source: Input[Any] | InputMerge) -> Input[Any] | InputMerge:
        """Register an input built elsewhere."""
        if not isinstance(source, (Input, InputMerge)):
            raise UnsupportedInputError(source)
        self.inputs.append(source)
        return source


def object_rule(block: Callable[[ObjectScope[T], T], Any]) -> Rule[T]:
    """Build a rule validating the fields of an object; usable as a decorator.

    Args:
        block: Called with a fresh ``ObjectScope`` and the object on every
            invocation; declares the field validations

    Returns:
        Rule that succeeds with the object when no field fails, otherwise
        fails with the violations of every failing field in declaration order
    """

    def validate(value: T, id: Id, error: ErrorFactory) -> ValidationResult:
        scope: ObjectScope[T] = ObjectScope(value)
        block(scope, value)
        builder = ReportBuilder()
        for field_input in scope.inputs:
            result = check_result(field_input())
            if not result.valid:
                builder.extend(result.error)
        if not builder.is_empty:
            logger.debug(
                f"Object '{id}' failed with {len(builder)} violation(s) "
                f"across {len(scope.inputs)} field(s)"
            )
        return builder.build_result(value)

    return Rule(validate, name=getattr(block, "__name__", None))


__all__ = ["ObjectScope", "object_rule"]
