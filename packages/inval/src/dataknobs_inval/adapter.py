"""Adapt a rule written for one type to values of another type."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, TypeVar

from .identifiers import Id
from .inputs import Input
from .result import ValidationResult
from .rule import ErrorFactory, Rule, RuleFunction

T = TypeVar("T")
R = TypeVar("R")


def adapt(rule: RuleFunction, transform: Callable[[T], R]) -> Rule[T]:
    """Validate ``transform(value)`` with ``rule``, keeping the original value.

    ```python
    password = pattern(r".{8,}", message="Weak password").adapt(bytes.decode)
    ```

    Args:
        rule: Rule for values of type R
        transform: Converts the T value to R

    Returns:
        Rule for values of type T; violations carry the same identifier
    """

    def validate(value: T, id: Id, error: ErrorFactory) -> ValidationResult:
        return Input(id, transform(value), rule)().map(lambda _: value)

    return Rule(validate, name=f"adapted {getattr(rule, 'name', 'rule')}")


__all__ = ["adapt"]
