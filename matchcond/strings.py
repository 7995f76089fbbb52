"""Conditions that a string must meet."""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, TypeVar

from .condition import _Condition

T = TypeVar("T")
U = TypeVar("U")


class MatchStrKind(Enum):
    """The variants a :class:`MatchStr` can take."""

    AND = "and"
    ANY = "any"
    CONTAINS = "contains"
    EQUAL_TO = "equal_to"
    NOT = "not"
    OR = "or"
    REGEX = "regex"


def _require_str(payload: Any) -> str:
    if not isinstance(payload, str):
        raise ValueError(f"a string condition expects a string, got {payload!r}")
    return payload


def _string_leaf(name: str, ops: tuple, text: str) -> bool:
    match name:
        case "contains":
            return ops[0] in text
        case "equal_to":
            return text == ops[0]
        case "regex":
            return re.search(ops[0], text) is not None
    raise ValueError(f"unknown match kind {name!r}")


@dataclass(frozen=True)
class MatchStr(_Condition, Generic[T]):
    """Describes the condition some string must meet in order to match.

    ``operands`` holds the child conditions for ``and``, ``or`` and ``not``,
    and the compared string for the other kinds. The default is ``any``.
    """

    kind: MatchStrKind = MatchStrKind.ANY
    _kinds = MatchStrKind

    @classmethod
    def any(cls) -> MatchStr[T]:
        """Always match."""
        return cls()

    @classmethod
    def equal_to(cls, value: T) -> MatchStr[T]:
        """Match strings equal to ``value``."""
        return cls._make("equal_to", value)

    @classmethod
    def contains(cls, value: T) -> MatchStr[T]:
        """Match strings that contain ``value``."""
        return cls._make("contains", value)

    @classmethod
    def regex(cls, pattern: T) -> MatchStr[T]:
        """Match strings in which the regular expression ``pattern`` is found."""
        return cls._make("regex", pattern)

    @classmethod
    def not_(cls, condition: MatchStr[T]) -> MatchStr[T]:
        """Match when ``condition`` does not."""
        return cls._negate(condition)

    @classmethod
    def and_(cls, conditions: Iterable[MatchStr[T]]) -> MatchStr[T]:
        """Match when every one of ``conditions`` matches."""
        return cls._all(conditions)

    @classmethod
    def or_(cls, conditions: Iterable[MatchStr[T]]) -> MatchStr[T]:
        """Match when at least one of ``conditions`` matches."""
        return cls._either(conditions)

    def map(self, f: Callable[[T], U]) -> MatchStr[U]:
        """Return the same condition with every contained string passed through ``f``."""
        return self._map(f)

    def matches(self, text: str) -> bool:
        """Tell whether ``text`` meets this condition.

        Raises :class:`re.error` if a ``regex`` pattern is invalid.
        """
        return self._evaluate(lambda name, ops: _string_leaf(name, ops, text))

    def to_data(self) -> Any:
        """Convert to plain data: ``"any"`` or a one-key mapping."""
        return self._dump(None)

    @classmethod
    def from_data(cls, data: Any) -> MatchStr[str]:
        """Build a condition from the plain data :meth:`to_data` produces."""
        return cls._load(data, _require_str)