"""Matchable counterparts of jobs and timesheets."""

from __future__ import annotations

import re
from dataclasses import dataclass, field, replace
from datetime import timedelta
from typing import Any

from matchcond.condition import Match
from matchcond.option import MatchOption
from matchcond.records import (
    MatchEmployee,
    MatchExpense,
    MatchInvoice,
    MatchOrganization,
    _decode_datetime,
    _encode_datetime,
    _fields,
    _id_condition,
    _match,
    _match_datetime_option,
    _match_str,
    _read,
)
from matchcond.sets import MatchSet
from matchcond.strings import MatchStr

_NS_PER_US = 1_000
_NS_PER_MS = 1_000_000
_NS_PER_SEC = 1_000_000_000
_SECS_PER_MONTH = 2_630_016
_SECS_PER_YEAR = 31_557_600

_UNITS = {
    "nsec": 1,
    "ns": 1,
    "usec": _NS_PER_US,
    "us": _NS_PER_US,
    "msec": _NS_PER_MS,
    "ms": _NS_PER_MS,
    "seconds": _NS_PER_SEC,
    "second": _NS_PER_SEC,
    "sec": _NS_PER_SEC,
    "s": _NS_PER_SEC,
    "minutes": 60 * _NS_PER_SEC,
    "minute": 60 * _NS_PER_SEC,
    "min": 60 * _NS_PER_SEC,
    "m": 60 * _NS_PER_SEC,
    "hours": 3600 * _NS_PER_SEC,
    "hour": 3600 * _NS_PER_SEC,
    "hr": 3600 * _NS_PER_SEC,
    "h": 3600 * _NS_PER_SEC,
    "days": 86400 * _NS_PER_SEC,
    "day": 86400 * _NS_PER_SEC,
    "d": 86400 * _NS_PER_SEC,
    "weeks": 7 * 86400 * _NS_PER_SEC,
    "week": 7 * 86400 * _NS_PER_SEC,
    "w": 7 * 86400 * _NS_PER_SEC,
    "months": _SECS_PER_MONTH * _NS_PER_SEC,
    "month": _SECS_PER_MONTH * _NS_PER_SEC,
    "M": _SECS_PER_MONTH * _NS_PER_SEC,
    "years": _SECS_PER_YEAR * _NS_PER_SEC,
    "year": _SECS_PER_YEAR * _NS_PER_SEC,
    "y": _SECS_PER_YEAR * _NS_PER_SEC,
}

# (size in nanoseconds, singular name, plural name)
_FORMAT_UNITS = (
    (_SECS_PER_YEAR * _NS_PER_SEC, "year", "years"),
    (_SECS_PER_MONTH * _NS_PER_SEC, "month", "months"),
    (86400 * _NS_PER_SEC, "day", "days"),
    (3600 * _NS_PER_SEC, "h", "h"),
    (60 * _NS_PER_SEC, "m", "m"),
    (_NS_PER_SEC, "s", "s"),
    (_NS_PER_MS, "ms", "ms"),
    (_NS_PER_US, "us", "us"),
)

_WHOLE = re.compile(r"(?:\s*\d+\s*[A-Za-z]+)+\s*")
_PART = re.compile(r"(\d+)\s*([A-Za-z]+)")


def parse_duration(text: str) -> timedelta:
    """Parse human-readable time such as ``"15min"`` or ``"1h 30m"``.

    Precision below one microsecond is dropped.
    """
    if not isinstance(text, str):
        raise ValueError(f"expected a duration string, got {text!r}")
    if not _WHOLE.fullmatch(text):
        raise ValueError(f"invalid duration {text!r}")
    total_ns = 0
    for number, unit in _PART.findall(text):
        try:
            scale = _UNITS[unit]
        except KeyError:
            raise ValueError(f"unknown time unit {unit!r} in {text!r}") from None
        total_ns += int(number) * scale
    try:
        return timedelta(microseconds=total_ns // _NS_PER_US)
    except OverflowError:
        raise ValueError(f"duration {text!r} is too large") from None


def format_duration(duration: timedelta) -> str:
    """Write ``duration`` as human-readable time, e.g. ``"1day 2h 5m"``."""
    if duration < timedelta(0):
        raise ValueError(f"cannot format a negative duration {duration!r}")
    remaining = (
        (duration.days * 86400 + duration.seconds) * 1_000_000 + duration.microseconds
    ) * _NS_PER_US
    if remaining == 0:
        return "0s"
    parts = []
    for size, singular, plural in _FORMAT_UNITS:
        count, remaining = divmod(remaining, size)
        if count:
            parts.append(f"{count}{singular if count == 1 else plural}")
    return " ".join(parts)


def _decode_duration(value: Any) -> timedelta:
    if isinstance(value, timedelta):
        return value
    return parse_duration(value)


@dataclass(frozen=True)
class MatchJob:
    """A job with matchable fields; matches when every field matches.

    ``increment`` holds :class:`datetime.timedelta` values, written as
    human-readable time such as ``"15min"``.
    """

    client: MatchOrganization = field(default_factory=MatchOrganization)
    date_close: MatchOption = field(default_factory=MatchOption)
    date_open: Match = field(default_factory=Match)
    id: Match = field(default_factory=Match)
    increment: Match = field(default_factory=Match)
    invoice: MatchInvoice = field(default_factory=MatchInvoice)
    notes: MatchStr = field(default_factory=MatchStr)
    objectives: MatchStr = field(default_factory=MatchStr)

    @classmethod
    def from_id(cls, id_condition: Any) -> MatchJob:
        """Match jobs by id only; a plain id means ``equal_to`` that id."""
        return cls(id=_id_condition(id_condition))

    def exchange(self, currency: Any, rates: Any) -> MatchJob:
        """Return this condition with the invoice exchanged into ``currency``."""
        return replace(self, invoice=self.invoice.exchange(currency, rates))

    def to_data(self) -> dict:
        """Convert to a plain mapping of field conditions."""
        return {
            "client": self.client.to_data(),
            "date_close": self.date_close.to_data(_encode_datetime),
            "date_open": self.date_open.to_data(_encode_datetime),
            "id": self.id.to_data(),
            "increment": self.increment.to_data(format_duration),
            "invoice": self.invoice.to_data(),
            "notes": self.notes.to_data(),
            "objectives": self.objectives.to_data(),
        }

    @classmethod
    def from_data(cls, data: Any) -> MatchJob:
        """Build from a mapping; missing fields match anything."""
        data = _fields(data, cls.__name__)
        return cls(
            client=_read(data, "client", MatchOrganization.from_data, MatchOrganization),
            date_close=_match_datetime_option(data, "date_close"),
            date_open=_read(
                data, "date_open", lambda value: Match.from_data(value, _decode_datetime), Match
            ),
            id=_match(data, "id"),
            increment=_read(
                data, "increment", lambda value: Match.from_data(value, _decode_duration), Match
            ),
            invoice=_read(data, "invoice", MatchInvoice.from_data, MatchInvoice),
            notes=_match_str(data, "notes"),
            objectives=_match_str(data, "objectives"),
        )


@dataclass(frozen=True)
class MatchTimesheet:
    """A timesheet with matchable fields; matches when every field matches."""

    id: Match = field(default_factory=Match)
    employee: MatchEmployee = field(default_factory=MatchEmployee)
    expenses: MatchSet = field(default_factory=MatchSet)
    job: MatchJob = field(default_factory=MatchJob)
    time_begin: Match = field(default_factory=Match)
    time_end: MatchOption = field(default_factory=MatchOption)
    work_notes: MatchStr = field(default_factory=MatchStr)

    @classmethod
    def from_id(cls, id_condition: Any) -> MatchTimesheet:
        """Match timesheets by id only; a plain id means ``equal_to`` that id."""
        return cls(id=_id_condition(id_condition))

    def exchange(self, currency: Any, rates: Any) -> MatchTimesheet:
        """Return this condition with expenses and job exchanged into ``currency``."""
        return replace(
            self,
            expenses=self.expenses.exchange(currency, rates),
            job=self.job.exchange(currency, rates),
        )

    def to_data(self) -> dict:
        """Convert to a plain mapping of field conditions."""
        return {
            "id": self.id.to_data(),
            "employee": self.employee.to_data(),
            "expenses": self.expenses.to_data(),
            "job": self.job.to_data(),
            "time_begin": self.time_begin.to_data(_encode_datetime),
            "time_end": self.time_end.to_data(_encode_datetime),
            "work_notes": self.work_notes.to_data(),
        }

    @classmethod
    def from_data(cls, data: Any) -> MatchTimesheet:
        """Build from a mapping; missing fields match anything."""
        data = _fields(data, cls.__name__)
        return cls(
            id=_match(data, "id"),
            employee=_read(data, "employee", MatchEmployee.from_data, MatchEmployee),
            expenses=_read(
                data,
                "expenses",
                lambda value: MatchSet.from_data(value, MatchExpense.from_data),
                MatchSet,
            ),
            job=_read(data, "job", MatchJob.from_data, MatchJob),
            time_begin=_read(
                data, "time_begin", lambda value: Match.from_data(value, _decode_datetime), Match
            ),
            time_end=_match_datetime_option(data, "time_end"),
            work_notes=_match_str(data, "work_notes"),
        )