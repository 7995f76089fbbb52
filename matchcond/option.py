"""Conditions that an optional value must meet."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, Optional, TypeVar

from .condition import _compare, _Condition

T = TypeVar("T")
U = TypeVar("U")


class MatchOptionKind(Enum):
    """The variants a :class:`MatchOption` can take."""

    AND = "and"
    ANY = "any"
    EQUAL_TO = "equal_to"
    GREATER_THAN = "greater_than"
    IN_RANGE = "in_range"
    LESS_THAN = "less_than"
    NONE = "none"
    NOT = "not"
    OR = "or"


@dataclass(frozen=True)
class MatchOption(_Condition, Generic[T]):
    """Describes the condition some optional value must meet in order to match.

    A missing value (``None``) only matches ``any``, ``none`` and negations
    of conditions it fails. The default is ``any``.
    """

    kind: MatchOptionKind = MatchOptionKind.ANY
    _kinds = MatchOptionKind
    _units = frozenset({"any", "none"})

    @classmethod
    def any(cls) -> MatchOption[T]:
        """Always match."""
        return cls()

    @classmethod
    def none(cls) -> MatchOption[T]:
        """Match only a missing value."""
        return cls(MatchOptionKind.NONE)

    @classmethod
    def some(cls) -> MatchOption[T]:
        """Match any value that is present."""
        return cls.not_(cls.none())

    @classmethod
    def equal_to(cls, value: T) -> MatchOption[T]:
        """Match values equal to ``value``."""
        return cls._make("equal_to", value)

    @classmethod
    def greater_than(cls, value: T) -> MatchOption[T]:
        """Match present values strictly greater than ``value``."""
        return cls._make("greater_than", value)

    @classmethod
    def less_than(cls, value: T) -> MatchOption[T]:
        """Match present values strictly less than ``value``."""
        return cls._make("less_than", value)

    @classmethod
    def in_range(cls, low: T, high: T) -> MatchOption[T]:
        """Match present values ``v`` with ``low <= v < high``."""
        return cls._make("in_range", low, high)

    @classmethod
    def not_(cls, condition: MatchOption[T]) -> MatchOption[T]:
        """Match when ``condition`` does not."""
        return cls._negate(condition)

    @classmethod
    def and_(cls, conditions: Iterable[MatchOption[T]]) -> MatchOption[T]:
        """Match when every one of ``conditions`` matches."""
        return cls._all(conditions)

    @classmethod
    def or_(cls, conditions: Iterable[MatchOption[T]]) -> MatchOption[T]:
        """Match when at least one of ``conditions`` matches."""
        return cls._either(conditions)

    @classmethod
    def from_optional(cls, value: Optional[T]) -> MatchOption[T]:
        """``none`` for a missing value, otherwise ``equal_to(value)``."""
        return cls.none() if value is None else cls.equal_to(value)

    def map(self, f: Callable[[T], U]) -> MatchOption[U]:
        """Return the same condition with every contained value passed through ``f``."""
        return self._map(f)

    def matches(self, value: Optional[T]) -> bool:
        """Tell whether the optional ``value`` meets this condition."""

        def leaf(name: str, ops: tuple) -> bool:
            if name == "none":
                return value is None
            return value is not None and _compare(name, ops, value)

        return self._evaluate(leaf)

    def to_data(self, encode: Callable[[T], Any] | None = None) -> Any:
        """Convert to plain data: ``"any"``, ``"none"`` or a one-key mapping."""
        return self._dump(encode)

    @classmethod
    def from_data(cls, data: Any, decode: Callable[[Any], T] | None = None) -> MatchOption[T]:
        """Build a condition from the plain data :meth:`to_data` produces."""
        return cls._load(data, decode)