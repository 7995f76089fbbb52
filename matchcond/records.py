"""Matchable counterparts of locations, organizations, contacts, employees, expenses and invoices."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum
from typing import Any, Optional

from matchcond.condition import Match
from matchcond.option import MatchOption
from matchcond.strings import MatchStr


def _fields(data: Any, name: str) -> Mapping:
    if not isinstance(data, Mapping):
        raise ValueError(f"{name} expects a mapping of fields, got {data!r}")
    return data


def _id_condition(id_condition: Any) -> Match:
    if isinstance(id_condition, Match):
        return id_condition
    return Match.equal_to(id_condition)


def _encode_datetime(value: datetime) -> str:
    return value.isoformat()


def _decode_datetime(value: Any) -> datetime:
    if isinstance(value, datetime):
        return value
    if isinstance(value, str):
        try:
            return datetime.fromisoformat(value)
        except ValueError:
            raise ValueError(f"invalid date and time {value!r}") from None
    raise ValueError(f"expected a date and time, got {value!r}")


def _encode_value(value: Any) -> Any:
    to_data = getattr(value, "to_data", None)
    return to_data() if callable(to_data) else value


def _read(
    data: Mapping, key: str, parse: Callable[[Any], Any], default: Callable[[], Any]
) -> Any:
    if key not in data or data[key] is None:
        return default()
    return parse(data[key])


def _match(data: Mapping, key: str) -> Match:
    return _read(data, key, Match.from_data, Match)


def _match_str(data: Mapping, key: str) -> MatchStr:
    return _read(data, key, MatchStr.from_data, MatchStr)


def _match_datetime_option(data: Mapping, key: str) -> MatchOption:
    return _read(
        data, key, lambda value: MatchOption.from_data(value, _decode_datetime), MatchOption
    )


@dataclass(frozen=True)
class MatchLocation:
    """A location with matchable fields; matches when every field matches."""

    id: Match = field(default_factory=Match)
    name: MatchStr = field(default_factory=MatchStr)
    outer: MatchOuterLocation = field(default_factory=lambda: MatchOuterLocation())

    @classmethod
    def from_id(cls, id_condition: Any) -> MatchLocation:
        """Match locations by id only; a plain id means ``equal_to`` that id."""
        return cls(id=_id_condition(id_condition))

    def to_data(self) -> dict:
        """Convert to a plain mapping of field conditions."""
        return {
            "id": self.id.to_data(),
            "name": self.name.to_data(),
            "outer": self.outer.to_data(),
        }

    @classmethod
    def from_data(cls, data: Any) -> MatchLocation:
        """Build from a mapping; missing fields match anything."""
        data = _fields(data, cls.__name__)
        return cls(
            id=_match(data, "id"),
            name=_match_str(data, "name"),
            outer=_read(data, "outer", MatchOuterLocation.from_data, MatchOuterLocation),
        )


class OuterKind(Enum):
    """The variants a :class:`MatchOuterLocation` can take."""

    ANY = "any"
    NONE = "none"
    SOME = "some"


@dataclass(frozen=True)
class MatchOuterLocation:
    """Describes the optional outer location of a location."""

    kind: OuterKind = OuterKind.ANY
    location: Optional[MatchLocation] = None

    def __post_init__(self) -> None:
        if (self.kind is OuterKind.SOME) != (self.location is not None):
            raise ValueError("only 'some' carries a location condition")

    @classmethod
    def any(cls) -> MatchOuterLocation:
        """Always match."""
        return cls()

    @classmethod
    def none(cls) -> MatchOuterLocation:
        """Match only when there is no outer location."""
        return cls(OuterKind.NONE)

    @classmethod
    def some(cls, location: MatchLocation) -> MatchOuterLocation:
        """Match when there is an outer location and it matches ``location``."""
        if not isinstance(location, MatchLocation):
            raise TypeError(f"expected MatchLocation, got {type(location).__name__}")
        return cls(OuterKind.SOME, location)

    def to_data(self) -> Any:
        """Convert to plain data: ``"any"``, ``"none"`` or ``{"some": ...}``."""
        if self.kind is OuterKind.SOME:
            return {"some": self.location.to_data()}
        return self.kind.value

    @classmethod
    def from_data(cls, data: Any) -> MatchOuterLocation:
        """Build from the plain data :meth:`to_data` produces."""
        if isinstance(data, str):
            if data == OuterKind.ANY.value:
                return cls.any()
            if data == OuterKind.NONE.value:
                return cls.none()
            raise ValueError(f"unknown outer location condition {data!r}")
        if not isinstance(data, Mapping) or len(data) != 1 or "some" not in data:
            raise ValueError(
                f"an outer location must be 'any', 'none' or {{'some': ...}}, got {data!r}"
            )
        return cls.some(MatchLocation.from_data(data["some"]))


@dataclass(frozen=True)
class MatchOrganization:
    """An organization with matchable fields; matches when every field matches."""

    id: Match = field(default_factory=Match)
    location: MatchLocation = field(default_factory=MatchLocation)
    name: MatchStr = field(default_factory=MatchStr)

    @classmethod
    def from_id(cls, id_condition: Any) -> MatchOrganization:
        """Match organizations by id only; a plain id means ``equal_to`` that id."""
        return cls(id=_id_condition(id_condition))

    def to_data(self) -> dict:
        """Convert to a plain mapping of field conditions."""
        return {
            "id": self.id.to_data(),
            "location": self.location.to_data(),
            "name": self.name.to_data(),
        }

    @classmethod
    def from_data(cls, data: Any) -> MatchOrganization:
        """Build from a mapping; missing fields match anything."""
        data = _fields(data, cls.__name__)
        return cls(
            id=_match(data, "id"),
            location=_read(data, "location", MatchLocation.from_data, MatchLocation),
            name=_match_str(data, "name"),
        )


class ContactKindTag(Enum):
    """The variants a :class:`MatchContactKind` can take."""

    ADDRESS = "address"
    ANY = "any"
    EMAIL = "email"
    OTHER = "other"
    PHONE = "phone"


_TEXT_TAGS = frozenset({ContactKindTag.EMAIL, ContactKindTag.OTHER, ContactKindTag.PHONE})


@dataclass(frozen=True)
class MatchContactKind:
    """Describes the kind of a contact; matches when its variant matches.

    ``condition`` is a :class:`MatchLocation` for ``address``, a
    :class:`MatchStr` for ``email``, ``phone`` and ``other``, and ``None``
    for ``any``.
    """

    tag: ContactKindTag = ContactKindTag.ANY
    condition: Any = None

    def __post_init__(self) -> None:
        if self.tag is ContactKindTag.ANY:
            if self.condition is not None:
                raise ValueError("'any' carries no condition")
        elif self.tag is ContactKindTag.ADDRESS:
            if not isinstance(self.condition, MatchLocation):
                raise TypeError("'address' needs a MatchLocation")
        elif not isinstance(self.condition, MatchStr):
            raise TypeError(f"{self.tag.value!r} needs a MatchStr")

    @classmethod
    def any(cls) -> MatchContactKind:
        """Always match."""
        return cls()

    @classmethod
    def address(cls, location: Optional[MatchLocation] = None) -> MatchContactKind:
        """Match address contacts whose location matches ``location``."""
        return cls(ContactKindTag.ADDRESS, location if location is not None else MatchLocation())

    @classmethod
    def email(cls, condition: Optional[MatchStr] = None) -> MatchContactKind:
        """Match e-mail contacts whose address matches ``condition``."""
        return cls(ContactKindTag.EMAIL, condition if condition is not None else MatchStr())

    @classmethod
    def phone(cls, condition: Optional[MatchStr] = None) -> MatchContactKind:
        """Match phone contacts whose number matches ``condition``."""
        return cls(ContactKindTag.PHONE, condition if condition is not None else MatchStr())

    @classmethod
    def other(cls, condition: Optional[MatchStr] = None) -> MatchContactKind:
        """Match other contacts whose text matches ``condition``."""
        return cls(ContactKindTag.OTHER, condition if condition is not None else MatchStr())

    def to_data(self) -> Any:
        """Convert to plain data: ``"any"`` or a one-key mapping."""
        if self.tag is ContactKindTag.ANY:
            return "any"
        return {self.tag.value: self.condition.to_data()}

    @classmethod
    def from_data(cls, data: Any) -> MatchContactKind:
        """Build from the plain data :meth:`to_data` produces."""
        if isinstance(data, str):
            if data == ContactKindTag.ANY.value:
                return cls.any()
            raise ValueError(f"unknown contact kind {data!r}")
        if not isinstance(data, Mapping) or len(data) != 1:
            raise ValueError(
                f"a contact kind must be 'any' or a mapping with one key, got {data!r}"
            )
        ((key, payload),) = data.items()
        try:
            tag = ContactKindTag(key)
        except ValueError:
            raise ValueError(f"unknown contact kind {key!r}") from None
        if tag is ContactKindTag.ANY:
            raise ValueError("'any' takes no value")
        if tag is ContactKindTag.ADDRESS:
            location = MatchLocation() if payload is None else MatchLocation.from_data(payload)
            return cls(tag, location)
        condition = MatchStr() if payload is None else MatchStr.from_data(payload)
        return cls(tag, condition)


@dataclass(frozen=True)
class MatchContact:
    """A contact with matchable fields; matches when every field matches."""

    kind: MatchContactKind = field(default_factory=MatchContactKind)
    label: MatchStr = field(default_factory=MatchStr)

    @classmethod
    def from_label(cls, label: Any) -> MatchContact:
        """Match contacts by label only; a plain string means ``equal_to`` it."""
        if not isinstance(label, MatchStr):
            label = MatchStr.equal_to(label)
        return cls(label=label)

    def to_data(self) -> dict:
        """Convert to a plain mapping of field conditions."""
        return {"kind": self.kind.to_data(), "label": self.label.to_data()}

    @classmethod
    def from_data(cls, data: Any) -> MatchContact:
        """Build from a mapping; missing fields match anything."""
        data = _fields(data, cls.__name__)
        return cls(
            kind=_read(data, "kind", MatchContactKind.from_data, MatchContactKind),
            label=_match_str(data, "label"),
        )


@dataclass(frozen=True)
class MatchEmployee:
    """An employee with matchable fields; matches when every field matches."""

    id: Match = field(default_factory=Match)
    name: MatchStr = field(default_factory=MatchStr)
    status: MatchStr = field(default_factory=MatchStr)
    title: MatchStr = field(default_factory=MatchStr)

    @classmethod
    def from_id(cls, id_condition: Any) -> MatchEmployee:
        """Match employees by id only; a plain id means ``equal_to`` that id."""
        return cls(id=_id_condition(id_condition))

    def to_data(self) -> dict:
        """Convert to a plain mapping of field conditions."""
        return {
            "id": self.id.to_data(),
            "name": self.name.to_data(),
            "status": self.status.to_data(),
            "title": self.title.to_data(),
        }

    @classmethod
    def from_data(cls, data: Any) -> MatchEmployee:
        """Build from a mapping; missing fields match anything."""
        data = _fields(data, cls.__name__)
        return cls(
            id=_match(data, "id"),
            name=_match_str(data, "name"),
            status=_match_str(data, "status"),
            title=_match_str(data, "title"),
        )


@dataclass(frozen=True)
class MatchExpense:
    """An expense with matchable fields; matches when every field matches.

    ``cost`` holds money values; they are kept as given when read from data.
    """

    category: MatchStr = field(default_factory=MatchStr)
    cost: Match = field(default_factory=Match)
    description: MatchStr = field(default_factory=MatchStr)
    id: Match = field(default_factory=Match)
    timesheet_id: Match = field(default_factory=Match)

    @classmethod
    def from_id(cls, id_condition: Any) -> MatchExpense:
        """Match expenses by id only; a plain id means ``equal_to`` that id."""
        return cls(id=_id_condition(id_condition))

    def exchange(self, currency: Any, rates: Any) -> MatchExpense:
        """Return this condition with the cost exchanged into ``currency``."""
        return replace(self, cost=self.cost.exchange(currency, rates))

    def to_data(self) -> dict:
        """Convert to a plain mapping of field conditions."""
        return {
            "category": self.category.to_data(),
            "cost": self.cost.to_data(_encode_value),
            "description": self.description.to_data(),
            "id": self.id.to_data(),
            "timesheet_id": self.timesheet_id.to_data(),
        }

    @classmethod
    def from_data(cls, data: Any) -> MatchExpense:
        """Build from a mapping; missing fields match anything."""
        data = _fields(data, cls.__name__)
        return cls(
            category=_match_str(data, "category"),
            cost=_match(data, "cost"),
            description=_match_str(data, "description"),
            id=_match(data, "id"),
            timesheet_id=_match(data, "timesheet_id"),
        )


@dataclass(frozen=True)
class MatchInvoice:
    """An invoice with matchable fields; matches when every field matches.

    Dates are :class:`datetime.datetime` values, written as ISO 8601 text.
    """

    date_issued: MatchOption = field(default_factory=MatchOption)
    date_paid: MatchOption = field(default_factory=MatchOption)
    hourly_rate: Match = field(default_factory=Match)

    def exchange(self, currency: Any, rates: Any) -> MatchInvoice:
        """Return this condition with the hourly rate exchanged into ``currency``."""
        return replace(self, hourly_rate=self.hourly_rate.exchange(currency, rates))

    def to_data(self) -> dict:
        """Convert to a plain mapping of field conditions."""
        return {
            "date_issued": self.date_issued.to_data(_encode_datetime),
            "date_paid": self.date_paid.to_data(_encode_datetime),
            "hourly_rate": self.hourly_rate.to_data(_encode_value),
        }

    @classmethod
    def from_data(cls, data: Any) -> MatchInvoice:
        """Build from a mapping; missing fields match anything."""
        data = _fields(data, cls.__name__)
        return cls(
            date_issued=_match_datetime_option(data, "date_issued"),
            date_paid=_match_datetime_option(data, "date_paid"),
            hourly_rate=_match(data, "hourly_rate"),
        )