"""Bound inputs and input merging.

An ``Input`` binds a value to an identifier and an ordered list of rules.
Its rules short-circuit: the first failure is the result. Merging inputs
is exhaustive instead: every input is validated and every violation is
reported, which is what a whole form needs.

```python
name = not_blank().validates("").with_id("name")
age = min_value(18).validates(10).with_id("age")

(name + age)()          # failure with both violations
merge(name, age)        # same, typed as a tuple on success
merge_any(name, age)    # same, as a list on success
```
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any, Generic, Protocol, TypeVar, runtime_checkable

from .exceptions import UnsupportedInputError
from .identifiers import NO_ID, Id, to_id
from .report import ReportBuilder, ValidationError
from .result import ValidationResult
from .rule import RuleFunction, check_result, composed

logger = logging.getLogger(__name__)

T = TypeVar("T")


@runtime_checkable
class InputSource(Protocol):
    """Anything that produces a ValidationResult when invoked."""

    def __call__(self) -> ValidationResult: ...


class Input(Generic[T]):
    """A value bound to an identifier and the rules that validate it.

    Rules are checked in order and the first failing rule is the result.
    Every violation is tagged with this input's identifier.
    """

    __slots__ = ("id", "value", "rules", "_rule")

    def __init__(self, id: Any, value: T, *rules: RuleFunction):
        self.id: Id = to_id(id)
        self.value = value
        self.rules: tuple[RuleFunction, ...] = rules
        self._rule = composed(*rules)

    @classmethod
    def bypass(cls, value: T) -> Input[T]:
        """Input that is never validated; always succeeds with ``value``."""
        return cls(NO_ID, value)

    def _error(self, message: str) -> ValidationError:
        return ValidationError.of(self.id, message)

    def __call__(self) -> ValidationResult:
        """Apply the rules to the value."""
        return self._rule(self.value, self.id, self._error)

    def run_validations(self) -> ValidationResult:
        return self()

    def __add__(self, other: Any) -> InputMerge:
        return InputMerge(self, other)

    def __radd__(self, other: Any) -> InputMerge:
        return InputMerge(other, self)

    def __repr__(self) -> str:
        return f"Input(id={self.id!r}, value={self.value!r}, rules={len(self.rules)})"


class InputMerge:
    """Two input sources validated together.

    Both sides are always validated. On success the value is a list with one
    slot per leaf input, in declaration order, however the merges are
    nested. On failure the reports of all failing leaves are concatenated
    in the same order.
    """

    __slots__ = ("left", "right")

    def __init__(self, left: Input[Any] | InputMerge, right: Input[Any] | InputMerge):
        for operand in (left, right):
            if not isinstance(operand, (Input, InputMerge)):
                raise UnsupportedInputError(operand)
        self.left = left
        self.right = right

    @property
    def leaves(self) -> list[Input[Any]]:
        """Leaf inputs in declaration order."""
        found: list[Input[Any]] = []
        for side in (self.left, self.right):
            if isinstance(side, InputMerge):
                found.extend(side.leaves)
            else:
                found.append(side)
        return found

    def __call__(self) -> ValidationResult:
        builder = ReportBuilder()
        values: list[Any] = []
        for side in (self.left, self.right):
            result = side()
            if not result.valid:
                builder.extend(result.error)
            elif isinstance(side, InputMerge):
                values.extend(result.value)
            else:
                values.append(result.value)
        if not builder.is_empty:
            logger.debug(f"Merged inputs failed with {len(builder)} violation(s)")
        return builder.build_result(values)

    def run_validations(self) -> ValidationResult:
        return self()

    def __add__(self, other: Any) -> InputMerge:
        return InputMerge(self, other)

    def __radd__(self, other: Any) -> InputMerge:
        return InputMerge(other, self)

    def __repr__(self) -> str:
        return f"InputMerge({self.left!r}, {self.right!r})"


class Declaration(Generic[T]):
    """A rule applied to a value, waiting for its identifier.

    ``with_id`` (or calling the declaration with the id) produces the Input.
    """

    __slots__ = ("rule", "value", "_register")

    def __init__(
        self,
        rule: RuleFunction,
        value: T,
        register: Callable[[Input[T]], Any] | None = None,
    ):
        self.rule = rule
        self.value = value
        self._register = register

    def with_id(self, id: Any) -> Input[T]:
        bound = Input(id, self.value, self.rule)
        if self._register is not None:
            self._register(bound)
        return bound

    def __call__(self, id: Any) -> Input[T]:
        return self.with_id(id)


def validates(rule: RuleFunction, value: T) -> Declaration[T]:
    """Declarative form: ``validates(rule, value).with_id(id)``."""
    return Declaration(rule, value)


def _collect(sources: tuple[Any, ...]) -> tuple[ReportBuilder, list[Any]]:
    for source in sources:
        if not isinstance(source, (Input, InputMerge)):
            raise UnsupportedInputError(source)
    builder = ReportBuilder()
    values: list[Any] = []
    for source in sources:
        result = check_result(source())
        if result.valid:
            values.append(result.value)
        else:
            builder.extend(result.error)
    return builder, values


def merge(first: InputSource, second: InputSource, *rest: InputSource) -> ValidationResult:
    """Validate every input source and merge the outcome.

    Returns:
        Success with a tuple holding one value per argument, or failure with
        the violations of every failing source in argument order

    Raises:
        UnsupportedInputError: If a source is not an Input or InputMerge
    """
    builder, values = _collect((first, second, *rest))
    return builder.build_result_with(lambda: tuple(values))


def merge_any(*inputs: InputSource) -> ValidationResult:
    """Validate any number of inputs and merge the outcome.

    Values are all-or-nothing: on failure only the violations are kept.

    Returns:
        Success with a list of values in input order, or failure with the
        violations of every failing input in input order

    Raises:
        UnsupportedInputError: If an input is not an Input or InputMerge
    """
    builder, values = _collect(inputs)
    if not builder.is_empty:
        logger.debug(f"{len(builder)} violation(s) across {len(inputs)} inputs")
    return builder.build_result(values)


__all__ = [
    "InputSource",
    "Input",
    "InputMerge",
    "Declaration",
    "validates",
    "merge",
    "merge_any",
]
