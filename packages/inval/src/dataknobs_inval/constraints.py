"""Built-in rules, loosely following the javax.validation constraints.

Every factory returns a ``Rule``. The optional ``message`` is either a plain
string used verbatim or a callable building the text from the same
positional arguments as the default template. Default templates come from
``settings`` and are read when the rule is created.

```python
not_blank()                      # "Field or property required"
min_value(18)                    # "Input 10 must be at least 18."
between(1.5, 2.5, places(1))     # rounds both sides to one decimal place
size(1, 10, message="1 to 10 items")
```

Values a rule cannot measure (such as ``size`` on an int) raise
``UnsupportedTypeError``; they are never reported as violations.
"""

from __future__ import annotations

import math
import re
import sys
from collections.abc import Callable, Sized
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation, localcontext
from fractions import Fraction
from numbers import Integral, Number, Real
from typing import Any, Union

from .exceptions import UnsupportedTypeError
from .rule import Rule, RuleScope, composed, rule
from .settings import format_template, settings

Message = Union[str, Callable[..., str], None]

SIZED_TYPES = "str, bytes, sequences, mappings, sets and other sized collections"
NUMBER_TYPES = "int, float, Decimal and Fraction"

EMAIL_PATTERN = (
    r"(?:[a-z0-9!#$%&'*+/=?^_`{|}~-]+(?:\.[a-z0-9!#$%&'*+/=?^_`{|}~-]+)*|"
    r'"(?:[\x01-\x08\x0b\x0c\x0e-\x1f\x21\x23-\x5b\x5d-\x7f]|\\[\x01-\x09\x0b\x0c\x0e-\x7f])*")'
    r"@(?:(?:[a-z0-9](?:[a-z0-9-]*[a-z0-9])?\.)+[a-z0-9]"
    r"(?:[a-z0-9-]*[a-z0-9])?|\[(?:(?:25[0-5]|2[0-4][0-9]|[01]?[0-9][0-9]?)\.){3}"
    r"(?:25[0-5]|2[0-4][0-9]|[01]?[0-9][0-9]?|[a-z0-9-]*[a-z0-9]:"
    r"(?:[\x01-\x08\x0b\x0c\x0e-\x1f\x21-\x5a\x53-\x7f]|\\[\x01-\x09\x0b\x0c\x0e-\x7f])+)\])"
)


def _messages(message: Message, name: str, *fields: str) -> Callable[..., str]:
    """Build the message function of a rule from its ``message`` argument."""
    if message is None:
        template = settings.message(name)
        return lambda *args: format_template(template, **dict(zip(fields, args)))
    if callable(message):
        return message
    text = str(message)
    return lambda *args: text


def size_of(value: Any) -> int:
    """Length of a sized value.

    Raises:
        UnsupportedTypeError: If the value has no notion of size
    """
    if isinstance(value, Sized):
        return len(value)
    raise UnsupportedTypeError(value, SIZED_TYPES)


def to_decimal(number: Any) -> Decimal:
    """Convert a number to Decimal; floats go through their shortest repr.

    Raises:
        UnsupportedTypeError: For booleans and non-numeric values
    """
    if isinstance(number, bool) or not isinstance(number, Number):
        raise UnsupportedTypeError(number, NUMBER_TYPES)
    if isinstance(number, Decimal):
        return number
    if isinstance(number, int):
        return Decimal(number)
    if isinstance(number, float):
        return Decimal(repr(number)) if math.isfinite(number) else Decimal(number)
    if isinstance(number, Fraction):
        return Decimal(number.numerator) / Decimal(number.denominator)
    if isinstance(number, Integral):
        return Decimal(int(number))
    if isinstance(number, Real):
        return to_decimal(float(number))
    raise UnsupportedTypeError(number, NUMBER_TYPES)


@dataclass(frozen=True)
class Scale:
    """Decimal places both operands are rounded to before a comparison."""

    places: int
    rounding: str = ROUND_HALF_UP

    def apply(self, number: Decimal) -> Decimal:
        if not number.is_finite():
            return number
        with localcontext() as ctx:
            ctx.prec = max(ctx.prec, number.adjusted() + self.places + 2)
            return number.quantize(Decimal(1).scaleb(-self.places), rounding=self.rounding)


def places(count: int, rounding: str = ROUND_HALF_UP) -> Scale:
    """Scale rounding to ``count`` decimal places, e.g. ``places(2)``."""
    if count < 0:
        raise ValueError(f"places cannot be negative: {count}")
    return Scale(count, rounding)


def _scaled(number: Any, scale: Scale | None) -> Decimal:
    value = to_decimal(number)
    return scale.apply(value) if scale is not None else value


def _digit_counts(number: Decimal) -> tuple[int, int]:
    """Integer and fraction digit counts, as BigDecimal precision and scale."""
    _, digits, exponent = number.as_tuple()
    precision = len(digits)
    fraction_digits = -int(exponent)
    return abs(precision - fraction_digits), fraction_digits


def assert_true(message: Message = None) -> Rule[bool]:
    """The value must be true."""
    text = _messages(message, "assert_true", "value")

    @rule
    def is_true(check: RuleScope[bool], value: bool) -> None:
        if not value:
            check.error(text(value))

    return is_true


def assert_false(message: Message = None) -> Rule[bool]:
    """The value must be false."""
    text = _messages(message, "assert_false", "value")

    @rule
    def is_false(check: RuleScope[bool], value: bool) -> None:
        if value:
            check.error(text(value))

    return is_false


def not_blank(message: Message = None) -> Rule[str]:
    """The text must contain at least one non-whitespace character.

    ``None`` counts as blank.
    """
    text = _messages(message, "not_blank", "value")

    @rule
    def is_not_blank(check: RuleScope[str], value: str) -> None:
        if value is None:
            check.error(text(value))
        elif not isinstance(value, str):
            raise UnsupportedTypeError(value, "str")
        elif not value.strip():
            check.error(text(value))

    return is_not_blank


def not_empty(message: Message = None) -> Rule[Any]:
    """The text, bytes or collection must not be empty.

    ``None`` counts as empty.
    """
    text = _messages(message, "not_empty", "value")

    @rule
    def is_not_empty(check: RuleScope[Any], value: Any) -> None:
        if value is None or size_of(value) == 0:
            check.error(text(value))

    return is_not_empty


def max_value(bound: Any, scale: Scale | None = None, message: Message = None) -> Rule[Any]:
    """The number must be lower than or equal to ``bound``.

    Args:
        bound: Maximum allowed value
        scale: Optional rounding applied to both operands, see ``places``
        message: Custom message or callable taking the value and the bound
    """
    text = _messages(message, "max", "value", "max")
    limit = _scaled(bound, scale)
    if limit.is_nan():
        raise ValueError("max bound cannot be NaN")

    @rule
    def at_most(check: RuleScope[Any], value: Any) -> None:
        number = _scaled(value, scale)
        if number.is_nan() or number > limit:
            check.error(text(value, bound))

    return at_most


def min_value(bound: Any, scale: Scale | None = None, message: Message = None) -> Rule[Any]:
    """The number must be larger than or equal to ``bound``.

    Args:
        bound: Minimum allowed value
        scale: Optional rounding applied to both operands, see ``places``
        message: Custom message or callable taking the value and the bound
    """
    text = _messages(message, "min", "value", "min")
    limit = _scaled(bound, scale)
    if limit.is_nan():
        raise ValueError("min bound cannot be NaN")

    @rule
    def at_least(check: RuleScope[Any], value: Any) -> None:
        number = _scaled(value, scale)
        if number.is_nan() or number < limit:
            check.error(text(value, bound))

    return at_least


def between(low: Any, high: Any, scale: Scale | None = None, message: Message = None) -> Rule[Any]:
    """The number must lie in ``[low, high]``; composes ``min_value`` and ``max_value``."""
    text = _messages(message, "between", "value", "min", "max")
    lower = min_value(low, scale, message=lambda value, _: text(value, low, high))
    upper = max_value(high, scale, message=lambda value, _: text(value, low, high))
    if _scaled(low, scale) > _scaled(high, scale):
        raise ValueError(f"low ({low}) cannot be greater than high ({high})")
    return composed(lower, upper)


def digits(integers: int, fractions: int, message: Message = None) -> Rule[Any]:
    """The number must have exactly ``integers`` integer and ``fractions`` fraction digits.

    Trailing zeros of floats are not kept (``120.30`` has one fraction
    digit); use ``digits_str`` when they matter.
    """
    text = _messages(message, "digits", "value", "integers", "fractions")

    @rule
    def has_digits(check: RuleScope[Any], value: Any) -> None:
        number = to_decimal(value)
        if not number.is_finite() or _digit_counts(number) != (integers, fractions):
            check.error(text(value, integers, fractions))

    return has_digits


def digits_str(integers: int, fractions: int, message: Message = None) -> Rule[str]:
    """Like ``digits`` for a numeric string, keeping trailing zeros.

    A string that is not a number fails the rule.
    """
    text = _messages(message, "digits", "value", "integers", "fractions")

    @rule
    def has_digits(check: RuleScope[str], value: str) -> None:
        if not isinstance(value, str):
            raise UnsupportedTypeError(value, "str")
        try:
            number = Decimal(value.strip())
        except InvalidOperation:
            check.error(text(value, integers, fractions))
            return
        if not number.is_finite() or _digit_counts(number) != (integers, fractions):
            check.error(text(value, integers, fractions))

    return has_digits


def digits_int(integers: int, message: Message = None) -> Rule[int]:
    """The integer must have exactly ``integers`` digits."""
    text = _messages(message, "digits_int", "value", "integers")
    return digits(integers, 0, message=lambda value, *_: text(value, integers))


def size(min: int = 0, max: int = sys.maxsize, message: Message = None) -> Rule[Any]:
    """The size of the text or collection must lie in ``[min, max]``.

    Args:
        min: Minimum size (inclusive)
        max: Maximum size (inclusive)
        message: Custom message or callable taking the value, min and max
    """
    if min < 0:
        raise ValueError(f"min size cannot be negative: {min}")
    if min > max:
        raise ValueError(f"min size ({min}) cannot be greater than max ({max})")
    text = _messages(message, "size", "value", "min", "max")

    @rule
    def has_size(check: RuleScope[Any], value: Any) -> None:
        length = size_of(value)
        if length < min or length > max:
            check.error(text(value, min, max))

    return has_size


def pattern(expression: str, flags: int = 0, message: Message = None) -> Rule[str]:
    """The text must fully match the regular expression.

    Args:
        expression: Regular expression
        flags: ``re`` flags
        message: Custom message or callable taking the value and the expression
    """
    compiled = re.compile(expression, flags)
    text = _messages(message, "pattern", "value", "pattern")

    @rule
    def matches(check: RuleScope[str], value: str) -> None:
        if not isinstance(value, str):
            raise UnsupportedTypeError(value, "str")
        if compiled.fullmatch(value) is None:
            check.error(text(value, expression))

    return matches


def email(message: Message = None) -> Rule[str]:
    """The text must be a valid e-mail address.

    The local part is limited to ``email.local_part_max_length`` characters,
    then the address must match ``EMAIL_PATTERN`` ignoring case.
    """
    text = _messages(message, "email", "value", "pattern")
    local_max = int(settings.get_setting("email.local_part_max_length", 64))

    @rule
    def local_part(check: RuleScope[str], value: str) -> None:
        if not isinstance(value, str):
            raise UnsupportedTypeError(value, "str")
        at = value.rfind("@")
        if at > local_max:
            check.error(text(value, EMAIL_PATTERN))

    return composed(local_part, pattern(EMAIL_PATTERN, re.IGNORECASE, message=text))


__all__ = [
    "EMAIL_PATTERN",
    "Scale",
    "places",
    "size_of",
    "to_decimal",
    "assert_true",
    "assert_false",
    "not_blank",
    "not_empty",
    "max_value",
    "min_value",
    "between",
    "digits",
    "digits_str",
    "digits_int",
    "size",
    "pattern",
    "email",
]
