"""Conditions that a single comparable value must meet."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar, Generic, TypeVar

T = TypeVar("T")
U = TypeVar("U")

_NESTED = frozenset({"and", "or", "not"})


def _apply(f: Callable[[Any], Any] | None, value: Any) -> Any:
    return value if f is None else f(value)


def _is_list(payload: Any) -> bool:
    return isinstance(payload, Sequence) and not isinstance(payload, (str, bytes))


class MatchKind(Enum):
    """The variants a :class:`Match` can take."""

    AND = "and"
    ANY = "any"
    EQUAL_TO = "equal_to"
    GREATER_THAN = "greater_than"
    IN_RANGE = "in_range"
    LESS_THAN = "less_than"
    NOT = "not"
    OR = "or"


@dataclass(frozen=True)
class _Condition:
    """Shared structure of every condition tree.

    ``operands`` holds the child conditions for ``and``, ``or`` and ``not``,
    and the compared values for the other kinds.
    """

    kind: Any = None
    operands: tuple = ()

    _kinds: ClassVar[type[Enum]]
    _units: ClassVar[frozenset] = frozenset({"any"})

    @classmethod
    def _make(cls, name: str, *operands: Any) -> Any:
        return cls(cls._kinds(name), operands)

    @classmethod
    def _children(cls, conditions: Iterable[Any]) -> tuple:
        children = tuple(conditions)
        for child in children:
            if not isinstance(child, cls):
                raise TypeError(f"expected {cls.__name__}, got {type(child).__name__}")
        return children

    @classmethod
    def _negate(cls, condition: Any) -> Any:
        return cls._make("not", *cls._children((condition,)))

    @classmethod
    def _all(cls, conditions: Iterable[Any]) -> Any:
        return cls._make("and", *cls._children(conditions))

    @classmethod
    def _either(cls, conditions: Iterable[Any]) -> Any:
        return cls._make("or", *cls._children(conditions))

    def _map(self, f: Callable[[Any], Any]) -> Any:
        if self.kind.value in _NESTED:
            return type(self)(self.kind, tuple(child._map(f) for child in self.operands))
        return type(self)(self.kind, tuple(f(value) for value in self.operands))

    def _evaluate(self, leaf: Callable[[str, tuple], bool]) -> bool:
        name = self.kind.value
        ops = self.operands
        match name:
            case "and":
                return all(child._evaluate(leaf) for child in ops)
            case "or":
                return any(child._evaluate(leaf) for child in ops)
            case "not":
                return not ops[0]._evaluate(leaf)
            case "any":
                return True
        return leaf(name, ops)

    def _exchanged(self, currency: Any, rates: Any) -> Any:
        return self._map(lambda value: value.exchange(currency, rates))

    def _dump(self, encode: Callable[[Any], Any] | None) -> Any:
        name = self.kind.value
        ops = self.operands
        if name in self._units:
            return name
        match name:
            case "and" | "or":
                return {name: [child._dump(encode) for child in ops]}
            case "not":
                return {"not": ops[0]._dump(encode)}
            case "in_range":
                return {"in_range": [_apply(encode, ops[0]), _apply(encode, ops[1])]}
        return {name: _apply(encode, ops[0])}

    @classmethod
    def _load(cls, data: Any, decode: Callable[[Any], Any] | None) -> Any:
        if isinstance(data, str):
            if data in cls._units:
                return cls(cls._kinds(data))
            raise ValueError(f"unknown unit condition {data!r}")
        if not isinstance(data, Mapping) or len(data) != 1:
            units = ", ".join(repr(unit) for unit in sorted(cls._units))
            raise ValueError(f"a condition must be {units} or a mapping with one key, got {data!r}")
        ((key, payload),) = data.items()
        try:
            kind = cls._kinds(key)
        except ValueError:
            raise ValueError(f"unknown condition {key!r}") from None
        if key in cls._units:
            raise ValueError(f"{key!r} takes no value")
        match key:
            case "and" | "or":
                if not _is_list(payload):
                    raise ValueError(f"{key!r} expects a list of conditions")
                return cls(kind, tuple(cls._load(item, decode) for item in payload))
            case "not":
                return cls(kind, (cls._load(payload, decode),))
            case "in_range":
                if not _is_list(payload) or len(payload) != 2:
                    raise ValueError("'in_range' expects a list of two values")
                return cls(kind, (_apply(decode, payload[0]), _apply(decode, payload[1])))
        return cls(kind, (_apply(decode, payload),))


def _compare(name: str, ops: tuple, value: Any) -> bool:
    match name:
        case "equal_to":
            return value == ops[0]
        case "greater_than":
            return value > ops[0]
        case "less_than":
            return value < ops[0]
        case "in_range":
            return ops[0] <= value < ops[1]
    raise ValueError(f"unknown match kind {name!r}")


@dataclass(frozen=True)
class Match(_Condition, Generic[T]):
    """Describes the condition some value must meet in order to match.

    The default is ``any``.
    """

    kind: MatchKind = MatchKind.ANY
    _kinds = MatchKind

    @classmethod
    def any(cls) -> Match[T]:
        """Always match."""
        return cls()

    @classmethod
    def equal_to(cls, value: T) -> Match[T]:
        """Match values equal to ``value``."""
        return cls._make("equal_to", value)

    @classmethod
    def greater_than(cls, value: T) -> Match[T]:
        """Match values strictly greater than ``value``."""
        return cls._make("greater_than", value)

    @classmethod
    def less_than(cls, value: T) -> Match[T]:
        """Match values strictly less than ``value``."""
        return cls._make("less_than", value)

    @classmethod
    def in_range(cls, low: T, high: T) -> Match[T]:
        """Match values ``v`` with ``low <= v < high``."""
        return cls._make("in_range", low, high)

    @classmethod
    def not_(cls, condition: Match[T]) -> Match[T]:
        """Match when ``condition`` does not."""
        return cls._negate(condition)

    @classmethod
    def and_(cls, conditions: Iterable[Match[T]]) -> Match[T]:
        """Match when every one of ``conditions`` matches."""
        return cls._all(conditions)

    @classmethod
    def or_(cls, conditions: Iterable[Match[T]]) -> Match[T]:
        """Match when at least one of ``conditions`` matches."""
        return cls._either(conditions)

    def map(self, f: Callable[[T], U]) -> Match[U]:
        """Return the same condition with every contained value passed through ``f``."""
        return self._map(f)

    def matches(self, value: T) -> bool:
        """Tell whether ``value`` meets this condition."""
        return self._evaluate(lambda name, ops: _compare(name, ops, value))

    def exchange(self, currency: Any, rates: Any) -> Match[T]:
        """Return this condition with every value exchanged into ``currency``."""
        return self._exchanged(currency, rates)

    def to_data(self, encode: Callable[[T], Any] | None = None) -> Any:
        """Convert to plain data: ``"any"`` or a one-key mapping."""
        return self._dump(encode)

    @classmethod
    def from_data(cls, data: Any, decode: Callable[[Any], T] | None = None) -> Match[T]:
        """Build a condition from the plain data :meth:`to_data` produces."""
        return cls._load(data, decode)