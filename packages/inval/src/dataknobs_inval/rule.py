"""Rule abstraction, the rule builder scope and rule composition.

A rule is any callable ``(value, id, error) -> ValidationResult`` where
``error`` turns a message into a ``ValidationError`` tagged with ``id``.
The ``Rule`` wrapper adds the fluent methods and ``rule()`` builds one from
a block that only has to record messages:

```python
@rule
def even(check, value):
    check.error_on_fail("must be even", lambda v: v % 2 != 0)

composed(not_blank(), email())  # first failure wins
```
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from .exceptions import RuleContractError, UsageError
from .identifiers import Id
from .report import ReportBuilder, ValidationError
from .result import ValidationResult

if TYPE_CHECKING:
    from .inputs import Declaration

logger = logging.getLogger(__name__)

T = TypeVar("T")
R = TypeVar("R")

ErrorFactory = Callable[[str], ValidationError]
RuleFunction = Callable[[Any, Id, ErrorFactory], ValidationResult]


class Rule(Generic[T]):
    """A validation rule for values of type ``T``.

    Wraps a single rule function. Rules hold no state between calls and can
    be shared freely.
    """

    __slots__ = ("_fn", "name")

    def __init__(self, fn: RuleFunction, name: str | None = None):
        if not callable(fn):
            raise UsageError(f"Rule function must be callable, got {type(fn).__name__}")
        self._fn = fn
        self.name = name or getattr(fn, "__name__", "rule")

    def __call__(self, value: T, id: Id, error: ErrorFactory) -> ValidationResult:
        return self._fn(value, id, error)

    def validates(self, value: T) -> Declaration:
        """Start a declarative input: ``rule.validates(value).with_id(id)``."""
        from .inputs import validates

        return validates(self, value)

    def adapt(self, transform: Callable[[Any], T]) -> Rule[Any]:
        """Reuse this rule on another type through ``transform``."""
        from .adapter import adapt

        return adapt(self, transform)

    def __and__(self, other: RuleFunction) -> Rule[T]:
        """Compose with AND: ``a & b`` is ``composed(a, b)``."""
        return composed(self, other)

    def __repr__(self) -> str:
        return f"Rule({self.name})"


class RuleScope(Generic[T]):
    """Scope handed to a ``rule()`` block for one invocation.

    Violations recorded here are reported together when the block returns.
    """

    __slots__ = ("value", "id", "_factory", "_builder")

    def __init__(self, value: T, id: Id, factory: ErrorFactory):
        self.value = value
        self.id = id
        self._factory = factory
        self._builder = ReportBuilder()

    def error(self, message: object) -> None:
        """Record a violation with ``message``."""
        self._builder.extend(self._factory(str(message)))

    def error_on_fail(self, message: object, predicate: Callable[[T], bool]) -> None:
        """Record a violation with ``message`` when ``predicate(value)`` is true."""
        if predicate(self.value):
            self.error(message)

    @property
    def failed(self) -> bool:
        return not self._builder.is_empty

    def to_result(self) -> ValidationResult:
        return self._builder.build_result(self.value)


def rule(block: Callable[[RuleScope[T], T], Any]) -> Rule[T]:
    """Build a rule from a block; usable as a decorator.

    Args:
        block: Called with a fresh ``RuleScope`` and the value on every
            invocation; records violations through the scope

    Returns:
        Rule that succeeds with the unchanged value when nothing was recorded
    """

    def validate(value: T, id: Id, error: ErrorFactory) -> ValidationResult:
        scope = RuleScope(value, id, error)
        block(scope, value)
        return scope.to_result()

    return Rule(validate, name=getattr(block, "__name__", None))


def check_result(result: Any) -> ValidationResult:
    """Reject results that break the rule contract.

    Raises:
        RuleContractError: If ``result`` is not a ValidationResult or fails
            with something other than a ValidationError
    """
    if not isinstance(result, ValidationResult):
        raise RuleContractError(result, expected="a ValidationResult")
    if not result.valid and not isinstance(result.error, ValidationError):
        cause = result.error if isinstance(result.error, BaseException) else None
        raise RuleContractError(result.error) from cause
    return result


def run_rule(fn: RuleFunction, value: Any, id: Id, error: ErrorFactory) -> ValidationResult:
    """Invoke a rule and check its result."""
    return check_result(fn(value, id, error))


def composed(*rules: RuleFunction) -> Rule[Any]:
    """Compose rules that are checked in order against the same value.

    The first failing rule ends the evaluation; later rules are not run.
    With no rules the composition always succeeds.
    """
    for candidate in rules:
        if not callable(candidate):
            raise UsageError(f"Rules must be callable, got {type(candidate).__name__}")

    def validate(value: Any, id: Id, error: ErrorFactory) -> ValidationResult:
        result = ValidationResult.success(value)
        for index, current in enumerate(rules):
            result = run_rule(current, value, id, error)
            if not result.valid:
                skipped = len(rules) - index - 1
                if skipped:
                    logger.debug(f"Rule {index} failed for '{id}', skipping {skipped} remaining")
                return result
        return result

    return Rule(validate, name="composed")


def regex_rule(expression: str, flags: int = 0) -> Callable[[str], Rule[str]]:
    """Create a regex rule factory taking the failure message.

    ```python
    email = regex_rule("^(.+)@(.+)$")("Not a valid email.")
    ```

    Args:
        expression: Regular expression the whole value must match
        flags: ``re`` flags

    Returns:
        Function turning a message into a Rule
    """
    compiled = re.compile(expression, flags)

    def with_message(message: str) -> Rule[str]:
        @rule
        def matches(scope: RuleScope[str], value: str) -> None:
            if compiled.fullmatch(value) is None:
                scope.error(message)

        return matches

    return with_message


__all__ = [
    "ErrorFactory",
    "RuleFunction",
    "Rule",
    "RuleScope",
    "rule",
    "composed",
    "regex_rule",
    "check_result",
    "run_rule",
]
