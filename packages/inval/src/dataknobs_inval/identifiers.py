"""Identifiers naming the fields being validated.
"""

from __future__ import annotations

from collections.abc import Hashable
from dataclasses import dataclass
from typing import Any


class Id:
    """Token naming a validated field.

    Use ``IdOf`` (or ``to_id``) for a concrete identifier and ``NO_ID`` for
    values that bypass validation.
    """

    __slots__ = ()

    @staticmethod
    def of(value: Hashable) -> IdOf:
        return IdOf(value)


@dataclass(frozen=True)
class IdOf(Id):
    """Concrete identifier wrapping a hashable value."""

    value: Hashable

    def __post_init__(self) -> None:
        hash(self.value)  # raises TypeError for unhashable values

    def __str__(self) -> str:
        return str(self.value)


class NoId(Id):
    """Identifier of inputs that are not validated."""

    __slots__ = ()
    _instance: NoId | None = None

    def __new__(cls) -> NoId:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __eq__(self, other: object) -> bool:
        return isinstance(other, NoId)

    def __hash__(self) -> int:
        return hash(NoId)

    def __str__(self) -> str:
        return "#<no-id>"

    def __repr__(self) -> str:
        return "NO_ID"


NO_ID = NoId()


def to_id(value: Any) -> Id:
    """Return ``value`` if it is already an ``Id``, otherwise wrap it.

    Raises:
        TypeError: If ``value`` is not hashable
    """
    if isinstance(value, Id):
        return value
    return IdOf(value)


__all__ = ["Id", "IdOf", "NoId", "NO_ID", "to_id"]
