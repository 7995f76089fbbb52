"""Conditions that a set of values must meet."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, TypeVar

from .condition import _Condition

T = TypeVar("T")
U = TypeVar("U")


def _encode_default(value: Any) -> Any:
    to_data = getattr(value, "to_data", None)
    return to_data() if callable(to_data) else value


def _element_matches_default(condition: Any, item: Any) -> bool:
    return condition.matches(item)


class MatchSetKind(Enum):
    """The variants a :class:`MatchSet` can take."""

    AND = "and"
    ANY = "any"
    CONTAINS = "contains"
    NOT = "not"
    OR = "or"


@dataclass(frozen=True)
class MatchSet(_Condition, Generic[T]):
    """Describes the condition some set of values must meet in order to match.

    ``operands`` holds the child set conditions for ``and``, ``or`` and
    ``not``, and the element condition for ``contains``. The default is ``any``.
    """

    kind: MatchSetKind = MatchSetKind.ANY
    _kinds = MatchSetKind

    @classmethod
    def any(cls) -> MatchSet[T]:
        """Always match."""
        return cls()

    @classmethod
    def contains(cls, condition: T) -> MatchSet[T]:
        """Match sets holding at least one element described by ``condition``."""
        return cls._make("contains", condition)

    @classmethod
    def not_(cls, condition: MatchSet[T]) -> MatchSet[T]:
        """Match when ``condition`` does not."""
        return cls._negate(condition)

    @classmethod
    def and_(cls, conditions: Iterable[MatchSet[T]]) -> MatchSet[T]:
        """Match when every one of ``conditions`` matches."""
        return cls._all(conditions)

    @classmethod
    def or_(cls, conditions: Iterable[MatchSet[T]]) -> MatchSet[T]:
        """Match when at least one of ``conditions`` matches."""
        return cls._either(conditions)

    def map(self, f: Callable[[T], U]) -> MatchSet[U]:
        """Return the same condition with every element condition passed through ``f``."""
        return self._map(f)

    def matches(
        self,
        items: Iterable[Any],
        element_matches: Callable[[T, Any], bool] | None = None,
    ) -> bool:
        """Tell whether the collection ``items`` meets this condition.

        ``element_matches(condition, item)`` decides whether one element is
        described by an element condition; by default ``condition.matches(item)``.
        """
        element_matches = element_matches or _element_matches_default
        members = tuple(items)

        def leaf(name: str, ops: tuple) -> bool:
            if name != "contains":
                raise ValueError(f"unknown match kind {name!r}")
            return any(element_matches(ops[0], item) for item in members)

        return self._evaluate(leaf)

    def exchange(self, currency: Any, rates: Any) -> MatchSet[T]:
        """Return this condition with every element condition exchanged into ``currency``."""
        return self._exchanged(currency, rates)

    def to_data(self, encode: Callable[[T], Any] | None = None) -> Any:
        """Convert to plain data: ``"any"`` or a one-key mapping.

        Element conditions are encoded with ``encode``, or their own
        ``to_data`` when no encoder is given.
        """
        return self._dump(encode or _encode_default)

    @classmethod
    def from_data(cls, data: Any, decode: Callable[[Any], T] | None = None) -> MatchSet[T]:
        """Build a condition from the plain data :meth:`to_data` produces.

        Element conditions are built with ``decode``.
        """
        return cls._load(data, decode)